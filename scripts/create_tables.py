"""Create database tables in the configured database.

Reads DATABASE_URL from .env / environment and creates all registered ORM tables.

Usage:
  python scripts/create_tables.py
  python scripts/create_tables.py --seed   # add sample pending draws
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
from dball.models.base import Base
from dball.services.draw_service import DrawService

# Import models so they register with Base.metadata
from dball import models  # noqa: F401

logger = logging.getLogger(__name__)

# Candidate results for two periods, recorded as Pending.
SAMPLE_DRAWS: list[tuple[str, list[int], int]] = [
    ("2025084", [2, 6, 7, 13, 16, 28], 11),
    ("2025084", [4, 13, 15, 18, 22, 28], 16),
    ("2025084", [9, 13, 15, 18, 19, 24], 16),
    ("2025084", [3, 9, 20, 25, 26, 32], 8),
    ("2025084", [12, 13, 22, 26, 29, 30], 10),
    ("2025086", [8, 9, 19, 24, 26, 31], 3),
    ("2025086", [3, 8, 10, 13, 23, 32], 13),
    ("2025086", [9, 24, 27, 29, 31, 33], 9),
    ("2025086", [4, 13, 20, 24, 26, 28], 15),
    ("2025086", [8, 9, 10, 14, 18, 24], 14),
]


def main(argv: Sequence[str] | None = None) -> int:
    """Create all ORM tables in the target database."""

    parser = argparse.ArgumentParser(description="Create dball tables")
    parser.add_argument("--seed", action="store_true", help="Insert sample pending draws")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    load_dotenv()
    env_local = PROJECT_ROOT / ".env.local"
    if env_local.exists():
        load_dotenv(dotenv_path=env_local, override=True)

    engine = create_app_engine(resolve_database_url())
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created (or already exist).")

    if args.seed:
        service = DrawService()
        with session_scope(create_session_factory(engine)) as session:
            for period, reds, blue in SAMPLE_DRAWS:
                service.record_draw(session, period, reds, blue, multiplier=1)
        logger.info("Inserted %d sample draws", len(SAMPLE_DRAWS))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
