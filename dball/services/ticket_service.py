"""Service layer for ticket purchase records."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dball.domain.number_set import NumberSet
from dball.errors import DuplicateTicketError, NotFoundError, ValidationError
from dball.models.ticket import Ticket
from dball.repositories.ticket_repository import TicketRepository
from dball.services.period_locks import PeriodLocks, default_period_locks

logger = logging.getLogger(__name__)

PERIOD_MAX_LENGTH = 32


def normalize_period(period: object) -> str:
    """Strip and check a period label."""

    text = str(period).strip() if period is not None else ""
    if not text:
        raise ValidationError("Period must not be empty", details={"period": period})
    if len(text) > PERIOD_MAX_LENGTH:
        raise ValidationError(
            f"Period must be at most {PERIOD_MAX_LENGTH} characters",
            details={"period": text},
        )
    return text


class TicketService:
    """Ticket use-cases. Tickets are immutable once created."""

    def __init__(
        self,
        repository: TicketRepository | None = None,
        locks: PeriodLocks | None = None,
    ) -> None:
        self._repo = repository or TicketRepository()
        self._locks = locks or default_period_locks()

    def create_ticket(
        self,
        session: Session,
        period: str,
        reds: Iterable[int],
        blue: int,
        purchased_at: datetime | None = None,
    ) -> Ticket:
        """Record a purchased ticket.

        The duplicate check and the insert run under the period lock and are
        committed together; the unique constraint backs this up across
        processes.

        Raises:
            ValidationError: bad period or numbers.
            DuplicateTicketError: same period and numbers already recorded.
        """

        period = normalize_period(period)
        numbers = NumberSet.construct(reds, blue)

        with self._locks.hold(period):
            existing = self._repo.find_by_numbers(session, period, numbers)
            if existing is not None:
                raise DuplicateTicketError(
                    message=f"Ticket {numbers} already exists for period {period}",
                    details={"period": period, "ticket_id": existing.id},
                )

            ticket = Ticket.from_numbers(period, numbers, purchased_at)
            try:
                self._repo.add(session, ticket)
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateTicketError(
                    message=f"Ticket {numbers} already exists for period {period}",
                    details={"period": period},
                ) from exc

        logger.info("Recorded ticket %s for period %s (%s)", ticket.id, period, numbers)
        return ticket

    def get_ticket(self, session: Session, ticket_id: int) -> Ticket:
        ticket = self._repo.get_by_id(session, ticket_id)
        if ticket is None:
            raise NotFoundError(message=f"Ticket {ticket_id} not found")
        return ticket

    def list_tickets(self, session: Session, period: str | None = None) -> Sequence[Ticket]:
        if period is not None:
            period = normalize_period(period)
        return self._repo.list_by_period(session, period)

    def tickets_with_red(self, session: Session, number: int) -> Sequence[Ticket]:
        return self._repo.find_with_red_number(session, number)

    def tickets_with_blue(self, session: Session, number: int) -> Sequence[Ticket]:
        return self._repo.find_with_blue_number(session, number)

    def delete_ticket(self, session: Session, ticket_id: int) -> None:
        """Remove a mis-entered ticket so it can be re-created."""

        ticket = self.get_ticket(session, ticket_id)
        self._repo.delete(session, ticket)
        logger.info("Deleted ticket %s (period %s)", ticket_id, ticket.period)
