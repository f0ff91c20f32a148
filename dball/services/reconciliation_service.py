"""Settlement of tickets against the authoritative draw of their period.

Settlement is a projection: outcomes are recomputed from the current
Published draw every time, never patched in place. `record` optionally
writes the latest outcome onto the ticket row for display.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.orm import Session

from dball.domain.prize import JACKPOT, PrizeTier, classify, payout, tally
from dball.errors import InvariantViolationError, NoAuthoritativeDrawError
from dball.models.base import utcnow
from dball.models.spot import Spot
from dball.models.ticket import Ticket
from dball.repositories.spot_repository import SpotRepository
from dball.repositories.ticket_repository import TicketRepository
from dball.services.ticket_service import normalize_period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettlementOutcome:
    ticket_id: int
    draw_id: int
    period: str
    tier: PrizeTier
    payout_units: int
    jackpot: bool
    settled_at: datetime = field(default_factory=utcnow, compare=False)


@dataclass(frozen=True)
class PeriodSummary:
    period: str
    draw_id: int
    tickets: int
    tier_counts: dict[PrizeTier, int]
    total_payout_units: int
    jackpots: int


@dataclass(frozen=True)
class PendingSettlementResult:
    outcomes: list[SettlementOutcome]
    waiting_periods: list[str]
    cleared_ticket_ids: list[int] = field(default_factory=list)
    broken_periods: list[str] = field(default_factory=list)


class ReconciliationService:
    """Settle tickets and re-settle periods after draw corrections."""

    def __init__(
        self,
        tickets: TicketRepository | None = None,
        draws: SpotRepository | None = None,
    ) -> None:
        self._tickets = tickets or TicketRepository()
        self._draws = draws or SpotRepository()

    def authoritative_draw(self, session: Session, period: str) -> Spot:
        """The single Published draw for `period`.

        Raises:
            NoAuthoritativeDrawError: nothing published yet.
            InvariantViolationError: more than one published row.
        """

        published = self._draws.list_published(session, period)
        if not published:
            raise NoAuthoritativeDrawError(
                message=f"No published draw for period {period}",
                details={"period": period},
            )
        if len(published) > 1:
            ids = [s.id for s in published]
            logger.error("Period %s has %d published draws %s; refusing to settle", period, len(ids), ids)
            raise InvariantViolationError(
                message=f"Period {period} has more than one published draw",
                details={"period": period, "draw_ids": ids},
            )
        return published[0]

    @staticmethod
    def _outcome(ticket: Ticket, draw: Spot, settled_at: datetime | None = None) -> SettlementOutcome:
        tier = classify(ticket.numbers, draw.numbers)
        amount = payout(tier, draw.multiplier)
        jackpot = amount is JACKPOT
        return SettlementOutcome(
            ticket_id=ticket.id,
            draw_id=draw.id,
            period=ticket.period,
            tier=tier,
            payout_units=0 if jackpot else int(amount),
            jackpot=jackpot,
            settled_at=settled_at or utcnow(),
        )

    def settle(self, session: Session, ticket: Ticket) -> SettlementOutcome:
        draw = self.authoritative_draw(session, ticket.period)
        outcome = self._outcome(ticket, draw)
        logger.debug(
            "Ticket %s settled against draw %s: %s (%s units)",
            ticket.id,
            draw.id,
            outcome.tier.label,
            "jackpot" if outcome.jackpot else outcome.payout_units,
        )
        return outcome

    def resettle_period(self, session: Session, period: str) -> list[SettlementOutcome]:
        """Recompute outcomes for every ticket of `period` (ordered by ticket id)."""

        period = normalize_period(period)
        draw = self.authoritative_draw(session, period)
        settled_at = utcnow()
        outcomes = [self._outcome(t, draw, settled_at) for t in self._tickets.list_by_period(session, period)]
        logger.info("Re-settled %d tickets for period %s against draw %s", len(outcomes), period, draw.id)
        return outcomes

    def record(self, session: Session, outcomes: Iterable[SettlementOutcome]) -> int:
        """Store the latest outcome on each ticket row. Returns rows touched."""

        count = 0
        for outcome in outcomes:
            ticket = self._tickets.get_by_id(session, outcome.ticket_id)
            if ticket is None:
                logger.warning("Ticket %s vanished before its outcome was recorded", outcome.ticket_id)
                continue
            ticket.prize_status = int(outcome.tier)
            ticket.settled_spot_id = outcome.draw_id
            ticket.modified_time = outcome.settled_at
            count += 1
        self._tickets.flush(session)
        return count

    def settle_pending(self, session: Session) -> PendingSettlementResult:
        """Settle tickets that were never settled or were settled against a withdrawn draw.

        Periods without a published draw are skipped and reported. A period
        with more than one published draw is left untouched and reported in
        `broken_periods`; the other periods are still settled. Any other
        error propagates.
        """

        outcomes: list[SettlementOutcome] = []
        waiting: list[str] = []
        cleared: list[int] = []
        broken: list[str] = []

        for period in self._tickets.list_periods(session):
            try:
                draw = self.authoritative_draw(session, period)
            except NoAuthoritativeDrawError:
                waiting.append(period)
                cleared.extend(self._clear_stale(session, period))
                continue
            except InvariantViolationError:
                broken.append(period)
                continue

            settled_at = utcnow()
            for ticket in self._tickets.list_by_period(session, period):
                if ticket.prize_status is not None and ticket.settled_spot_id == draw.id:
                    continue
                outcomes.append(self._outcome(ticket, draw, settled_at))

        self.record(session, outcomes)
        if waiting:
            logger.info("No published draw yet for periods %s", waiting)
        if broken:
            logger.error("Skipped periods with conflicting published draws: %s", broken)
        logger.info("Settled %d pending tickets", len(outcomes))
        return PendingSettlementResult(
            outcomes=outcomes,
            waiting_periods=waiting,
            cleared_ticket_ids=cleared,
            broken_periods=broken,
        )

    def _clear_stale(self, session: Session, period: str) -> list[int]:
        # Recorded outcomes point at a draw that is no longer published.
        cleared: list[int] = []
        for ticket in self._tickets.list_by_period(session, period):
            if ticket.settled_spot_id is None and ticket.prize_status is None:
                continue
            ticket.prize_status = None
            ticket.settled_spot_id = None
            ticket.modified_time = utcnow()
            cleared.append(ticket.id)
        if cleared:
            logger.info("Cleared stale settlements for period %s: %s", period, cleared)
        return cleared

    def summarize_period(self, session: Session, period: str) -> PeriodSummary:
        outcomes = self.resettle_period(session, period)
        if outcomes:
            draw_id = outcomes[0].draw_id
        else:
            draw_id = self.authoritative_draw(session, normalize_period(period)).id
        return summarize(normalize_period(period), draw_id, outcomes)


def summarize(period: str, draw_id: int, outcomes: Sequence[SettlementOutcome]) -> PeriodSummary:
    return PeriodSummary(
        period=period,
        draw_id=draw_id,
        tickets=len(outcomes),
        tier_counts=tally(o.tier for o in outcomes),
        total_payout_units=sum(o.payout_units for o in outcomes),
        jackpots=sum(1 for o in outcomes if o.jackpot),
    )
