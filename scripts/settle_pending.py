"""Settle every ticket that has no up-to-date recorded outcome.

Run after publishing or correcting draw results (e.g. from cron).

Usage:
  python scripts/settle_pending.py
  python scripts/settle_pending.py --period 2025084   # re-settle one period only
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from dball.config import resolve_database_url
from dball.db import create_app_engine, create_session_factory, session_scope
from dball.errors import AppError
from dball.services.reconciliation_service import ReconciliationService, summarize

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Settle tickets against published draws")
    parser.add_argument("--period", dest="period", type=str, default=None)
    parser.add_argument("--log-level", dest="log_level", type=str, default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    load_dotenv()

    engine = create_app_engine(resolve_database_url())
    factory = create_session_factory(engine)
    service = ReconciliationService()

    try:
        with session_scope(factory) as session:
            if args.period:
                outcomes = service.resettle_period(session, args.period)
                service.record(session, outcomes)
                if outcomes:
                    summary = summarize(outcomes[0].period, outcomes[0].draw_id, outcomes)
                    logger.info(
                        "Period %s: %d tickets, %d units, %d jackpots",
                        summary.period,
                        summary.tickets,
                        summary.total_payout_units,
                        summary.jackpots,
                    )
            else:
                result = service.settle_pending(session)
                winners = [o for o in result.outcomes if o.tier.is_winning]
                logger.info(
                    "Settled %d tickets (%d winning); waiting on %d periods",
                    len(result.outcomes),
                    len(winners),
                    len(result.waiting_periods),
                )
                if result.broken_periods:
                    logger.error("Periods needing manual repair: %s", ", ".join(result.broken_periods))
                    return 1
    except AppError as exc:
        logger.error("%s: %s %s", exc.code, exc.message, exc.details or "")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
