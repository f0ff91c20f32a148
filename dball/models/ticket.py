"""Purchased ticket (one bet for one period).

Reds are stored in ascending order so the unique constraint on
`(period, red1..red6, blue)` matches number-set identity.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, SmallInteger, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from dball.domain.number_set import NumberSet
from dball.domain.prize import PrizeTier
from dball.models.base import AuditTimestamps, Base, utcnow


class Ticket(AuditTimestamps, Base):
    """One row per purchased ticket."""

    __tablename__ = "tickets"
    __table_args__ = (
        UniqueConstraint(
            "period", "red1", "red2", "red3", "red4", "red5", "red6", "blue",
            name="uq_tickets_period_numbers",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    period: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    purchased_at: Mapped[datetime] = mapped_column("time", DateTime, nullable=False, default=utcnow)

    red1: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    red2: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    red3: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    red4: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    red5: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    red6: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    blue: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    # Latest recorded settlement; NULL until settled.
    prize_status: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    settled_spot_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    @classmethod
    def from_numbers(cls, period: str, numbers: NumberSet, purchased_at: datetime | None = None) -> Ticket:
        r = numbers.sorted_reds
        return cls(
            period=period,
            purchased_at=purchased_at or utcnow(),
            red1=r[0],
            red2=r[1],
            red3=r[2],
            red4=r[3],
            red5=r[4],
            red6=r[5],
            blue=numbers.blue,
        )

    @property
    def red_numbers(self) -> list[int]:
        return [self.red1, self.red2, self.red3, self.red4, self.red5, self.red6]

    @property
    def numbers(self) -> NumberSet:
        return NumberSet.construct(self.red_numbers, self.blue)

    @property
    def prize_tier(self) -> PrizeTier | None:
        if self.prize_status is None:
            return None
        return PrizeTier(self.prize_status)
