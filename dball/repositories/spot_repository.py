"""Repository layer for draw ("spot") persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from dball.db import storage_guard
from dball.domain.lifecycle import DrawStatus
from dball.models.spot import Spot


class SpotRepository:
    """Read/write operations for draw results. Rows are never deleted."""

    def get_by_id(self, session: Session, spot_id: int, *, for_update: bool = False) -> Spot | None:
        with storage_guard():
            if for_update:
                stmt = (
                    select(Spot)
                    .where(Spot.id == spot_id)
                    .with_for_update()
                    .execution_options(populate_existing=True)
                )
                return session.scalars(stmt).first()
            return session.get(Spot, spot_id)

    def list_draws(
        self,
        session: Session,
        period: str | None = None,
        status: DrawStatus | None = None,
        *,
        for_update: bool = False,
    ) -> Sequence[Spot]:
        stmt = select(Spot).order_by(Spot.id.asc())
        if period is not None:
            stmt = stmt.where(Spot.period == period)
        if status is not None:
            stmt = stmt.where(Spot.status == status)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        with storage_guard():
            return list(session.scalars(stmt).all())

    def list_published(self, session: Session, period: str, *, for_update: bool = False) -> Sequence[Spot]:
        return self.list_draws(session, period=period, status=DrawStatus.PUBLISHED, for_update=for_update)

    def latest(self, session: Session, limit: int) -> Sequence[Spot]:
        stmt = select(Spot).order_by(Spot.created_time.desc(), Spot.id.desc()).limit(int(limit))
        with storage_guard():
            return list(session.scalars(stmt).all())

    def add(self, session: Session, spot: Spot) -> Spot:
        with storage_guard():
            session.add(spot)
            session.flush()
        return spot

    def flush(self, session: Session) -> None:
        with storage_guard():
            session.flush()
