"""Business logic for recording draw results and moving them through their lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from dball.domain.lifecycle import DrawStatus, ensure_transition
from dball.domain.number_set import NumberSet
from dball.domain.prize import check_multiplier
from dball.errors import NotFoundError, ValidationError
from dball.models.base import utcnow
from dball.models.spot import Spot
from dball.repositories.spot_repository import SpotRepository
from dball.services.period_locks import PeriodLocks, default_period_locks
from dball.services.ticket_service import normalize_period

logger = logging.getLogger(__name__)


class DrawService:
    """Draw use-cases.

    Status changes follow Pending -> Published -> Deprecated (or
    Pending -> Deprecated). Publishing a draw deprecates any other published
    draw of the same period in the same transaction, so a period never has two
    authoritative results.
    """

    def __init__(
        self,
        repository: SpotRepository | None = None,
        locks: PeriodLocks | None = None,
    ) -> None:
        self._repo = repository or SpotRepository()
        self._locks = locks or default_period_locks()

    def record_draw(
        self,
        session: Session,
        period: str,
        reds: Iterable[int],
        blue: int,
        multiplier: int = 1,
    ) -> Spot:
        """Store a new result row in `Pending`."""

        period = normalize_period(period)
        numbers = NumberSet.construct(reds, blue)
        spot = Spot.from_numbers(period, numbers, check_multiplier(multiplier))
        self._repo.add(session, spot)
        logger.info("Recorded pending draw %s for period %s (%s x%s)", spot.id, period, numbers, multiplier)
        return spot

    def get_draw(self, session: Session, draw_id: int) -> Spot:
        spot = self._repo.get_by_id(session, draw_id)
        if spot is None:
            raise NotFoundError(message=f"Draw {draw_id} not found")
        return spot

    def list_draws(
        self,
        session: Session,
        period: str | None = None,
        status: DrawStatus | None = None,
    ) -> Sequence[Spot]:
        if period is not None:
            period = normalize_period(period)
        return self._repo.list_draws(session, period=period, status=status)

    def latest_draws(self, session: Session, limit: int = 10) -> Sequence[Spot]:
        if limit <= 0:
            raise ValidationError("limit must be positive", details={"limit": limit})
        return self._repo.latest(session, limit)

    def publish(self, session: Session, draw_id: int) -> Spot:
        """Make `draw_id` the authoritative result for its period.

        Raises:
            NotFoundError: unknown draw.
            InvalidTransitionError: draw is not Pending.
        """

        period = self.get_draw(session, draw_id).period

        with self._locks.hold(period):
            spot = self._repo.get_by_id(session, draw_id, for_update=True)
            if spot is None:
                raise NotFoundError(message=f"Draw {draw_id} not found")
            ensure_transition(spot.status, DrawStatus.PUBLISHED)

            now = utcnow()
            superseded: list[int] = []
            for other in self._repo.list_published(session, period, for_update=True):
                if other.id == spot.id:
                    continue
                other.status = DrawStatus.DEPRECATED
                other.modified_time = now
                superseded.append(other.id)
            self._repo.flush(session)

            spot.status = DrawStatus.PUBLISHED
            spot.modified_time = now
            self._repo.flush(session)
            session.commit()

        if superseded:
            logger.info("Draw %s published for period %s, superseding %s", draw_id, period, superseded)
        else:
            logger.info("Draw %s published for period %s", draw_id, period)
        return spot

    def deprecate(self, session: Session, draw_id: int) -> Spot:
        """Withdraw a Pending or Published draw. The row is kept."""

        period = self.get_draw(session, draw_id).period

        with self._locks.hold(period):
            spot = self._repo.get_by_id(session, draw_id, for_update=True)
            if spot is None:
                raise NotFoundError(message=f"Draw {draw_id} not found")
            previous = spot.status
            ensure_transition(previous, DrawStatus.DEPRECATED)

            spot.status = DrawStatus.DEPRECATED
            spot.modified_time = utcnow()
            self._repo.flush(session)
            session.commit()

        logger.info("Draw %s for period %s deprecated (was %s)", draw_id, period, DrawStatus(previous).value)
        return spot
