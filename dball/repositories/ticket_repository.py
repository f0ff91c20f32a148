"""Repository layer for ticket persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from dball.db import storage_guard
from dball.domain.number_set import NumberSet
from dball.models.ticket import Ticket


class TicketRepository:
    """CRUD operations for Ticket."""

    def get_by_id(self, session: Session, ticket_id: int) -> Ticket | None:
        with storage_guard():
            return session.get(Ticket, ticket_id)

    def find_by_numbers(self, session: Session, period: str, numbers: NumberSet) -> Ticket | None:
        r = numbers.sorted_reds
        stmt = select(Ticket).where(
            Ticket.period == period,
            Ticket.red1 == r[0],
            Ticket.red2 == r[1],
            Ticket.red3 == r[2],
            Ticket.red4 == r[3],
            Ticket.red5 == r[4],
            Ticket.red6 == r[5],
            Ticket.blue == numbers.blue,
        )
        with storage_guard():
            return session.scalars(stmt).first()

    def list_by_period(self, session: Session, period: str | None = None) -> Sequence[Ticket]:
        stmt = select(Ticket).order_by(Ticket.id.asc())
        if period is not None:
            stmt = stmt.where(Ticket.period == period)
        with storage_guard():
            return list(session.scalars(stmt).all())

    def list_periods(self, session: Session) -> list[str]:
        stmt = select(Ticket.period).distinct().order_by(Ticket.period.asc())
        with storage_guard():
            return list(session.scalars(stmt).all())

    def find_with_red_number(self, session: Session, number: int) -> Sequence[Ticket]:
        stmt = (
            select(Ticket)
            .where(
                or_(
                    Ticket.red1 == number,
                    Ticket.red2 == number,
                    Ticket.red3 == number,
                    Ticket.red4 == number,
                    Ticket.red5 == number,
                    Ticket.red6 == number,
                )
            )
            .order_by(Ticket.id.desc())
        )
        with storage_guard():
            return list(session.scalars(stmt).all())

    def find_with_blue_number(self, session: Session, number: int) -> Sequence[Ticket]:
        stmt = select(Ticket).where(Ticket.blue == number).order_by(Ticket.id.desc())
        with storage_guard():
            return list(session.scalars(stmt).all())

    def add(self, session: Session, ticket: Ticket) -> Ticket:
        with storage_guard():
            session.add(ticket)
            session.flush()  # assign PK, surface unique violations
        return ticket

    def delete(self, session: Session, ticket: Ticket) -> None:
        with storage_guard():
            session.delete(ticket)
            session.flush()

    def flush(self, session: Session) -> None:
        with storage_guard():
            session.flush()
