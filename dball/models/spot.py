"""Official draw result ("spot") for a period.

Several rows may share a period (candidates, corrections). Rows are never
deleted; withdrawn results move to `Deprecated`.
"""

from __future__ import annotations

from sqlalchemy import Enum as SAEnum
from sqlalchemy import Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from dball.domain.lifecycle import DrawStatus
from dball.domain.number_set import NumberSet
from dball.models.base import AuditTimestamps, Base


class Spot(AuditTimestamps, Base):
    """One row per recorded draw result."""

    __tablename__ = "spot"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    period: Mapped[str] = mapped_column(String(32), nullable=False, index=True)

    red1: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    red2: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    red3: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    red4: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    red5: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    red6: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    blue: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    magnification: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[DrawStatus] = mapped_column(
        SAEnum(DrawStatus, name="spot_status", values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=DrawStatus.PENDING,
        index=True,
    )

    @classmethod
    def from_numbers(cls, period: str, numbers: NumberSet, magnification: int = 1) -> Spot:
        r = numbers.sorted_reds
        return cls(
            period=period,
            red1=r[0],
            red2=r[1],
            red3=r[2],
            red4=r[3],
            red5=r[4],
            red6=r[5],
            blue=numbers.blue,
            magnification=magnification,
            status=DrawStatus.PENDING,
        )

    @property
    def red_numbers(self) -> list[int]:
        return [self.red1, self.red2, self.red3, self.red4, self.red5, self.red6]

    @property
    def numbers(self) -> NumberSet:
        return NumberSet.construct(self.red_numbers, self.blue)

    @property
    def multiplier(self) -> int:
        return self.magnification

    @property
    def deprecated(self) -> bool:
        return self.status == DrawStatus.DEPRECATED
