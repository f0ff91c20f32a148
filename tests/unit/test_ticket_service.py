"""Tests for TicketService."""

from __future__ import annotations

import threading
from datetime import datetime

import pytest
from sqlalchemy.orm import Session, sessionmaker

from dball.errors import DuplicateTicketError, NotFoundError, ValidationError, ValidationReason
from dball.services.period_locks import PeriodLocks
from dball.services.ticket_service import TicketService


def test_create_ticket_stores_sorted_reds(session: Session, ticket_service: TicketService) -> None:
    purchased = datetime(2025, 7, 24, 9, 30)

    ticket = ticket_service.create_ticket(session, "2025084", [28, 2, 16, 6, 13, 7], 11, purchased_at=purchased)

    assert ticket.id is not None
    assert ticket.red_numbers == [2, 6, 7, 13, 16, 28]
    assert ticket.blue == 11
    assert ticket.purchased_at == purchased
    assert ticket.prize_status is None
    assert ticket.prize_tier is None


def test_duplicate_ticket_is_rejected(session: Session, ticket_service: TicketService) -> None:
    first = ticket_service.create_ticket(session, "2025084", [1, 2, 3, 4, 5, 6], 7)

    with pytest.raises(DuplicateTicketError) as excinfo:
        ticket_service.create_ticket(session, "2025084", [6, 5, 4, 3, 2, 1], 7)

    assert excinfo.value.status_code == 409
    assert excinfo.value.details["ticket_id"] == first.id
    assert len(ticket_service.list_tickets(session, "2025084")) == 1


def test_same_numbers_in_other_period_or_blue_are_distinct(session: Session, ticket_service: TicketService) -> None:
    ticket_service.create_ticket(session, "2025084", [1, 2, 3, 4, 5, 6], 7)
    ticket_service.create_ticket(session, "2025086", [1, 2, 3, 4, 5, 6], 7)
    ticket_service.create_ticket(session, "2025084", [1, 2, 3, 4, 5, 6], 8)

    assert len(ticket_service.list_tickets(session)) == 3
    assert len(ticket_service.list_tickets(session, "2025084")) == 2


def test_invalid_numbers_never_reach_storage(session: Session, ticket_service: TicketService) -> None:
    with pytest.raises(ValidationError) as excinfo:
        ticket_service.create_ticket(session, "2025084", [1, 2, 3, 4, 5, 40], 7)

    assert excinfo.value.reason is ValidationReason.OUT_OF_RANGE
    assert ticket_service.list_tickets(session) == []


@pytest.mark.parametrize("period", ["", "   ", None, "x" * 33])
def test_bad_period(session: Session, ticket_service: TicketService, period: object) -> None:
    with pytest.raises(ValidationError):
        ticket_service.create_ticket(session, period, [1, 2, 3, 4, 5, 6], 7)  # type: ignore[arg-type]


def test_period_is_stripped(session: Session, ticket_service: TicketService) -> None:
    ticket = ticket_service.create_ticket(session, " 2025084 ", [1, 2, 3, 4, 5, 6], 7)
    assert ticket.period == "2025084"


def test_delete_then_recreate(session: Session, ticket_service: TicketService) -> None:
    ticket = ticket_service.create_ticket(session, "2025084", [1, 2, 3, 4, 5, 6], 7)

    ticket_service.delete_ticket(session, ticket.id)
    session.commit()

    with pytest.raises(NotFoundError):
        ticket_service.get_ticket(session, ticket.id)

    again = ticket_service.create_ticket(session, "2025084", [1, 2, 3, 4, 5, 6], 7)
    assert again.id is not None


def test_get_missing_ticket(session: Session, ticket_service: TicketService) -> None:
    with pytest.raises(NotFoundError):
        ticket_service.get_ticket(session, 999)


def test_tickets_with_red(session: Session, ticket_service: TicketService) -> None:
    a = ticket_service.create_ticket(session, "2025084", [1, 2, 3, 4, 5, 6], 7)
    b = ticket_service.create_ticket(session, "2025084", [6, 7, 8, 9, 10, 11], 7)
    ticket_service.create_ticket(session, "2025084", [20, 21, 22, 23, 24, 25], 7)

    found = ticket_service.tickets_with_red(session, 6)

    assert [t.id for t in found] == [b.id, a.id]


def test_tickets_with_blue(session: Session, ticket_service: TicketService) -> None:
    a = ticket_service.create_ticket(session, "2025084", [1, 2, 3, 4, 5, 6], 7)
    ticket_service.create_ticket(session, "2025084", [1, 2, 3, 4, 5, 6], 8)
    b = ticket_service.create_ticket(session, "2025086", [7, 8, 9, 10, 11, 12], 7)

    found = ticket_service.tickets_with_blue(session, 7)

    assert [t.id for t in found] == [b.id, a.id]


def test_concurrent_identical_tickets_create_one_row(file_sessions: sessionmaker[Session]) -> None:
    service = TicketService(locks=PeriodLocks(timeout=10))
    workers = 8
    barrier = threading.Barrier(workers)
    created: list[int] = []
    duplicates: list[DuplicateTicketError] = []
    unexpected: list[Exception] = []

    def worker() -> None:
        with file_sessions() as s:
            barrier.wait()
            try:
                created.append(service.create_ticket(s, "2025084", [1, 2, 3, 4, 5, 6], 7).id)
            except DuplicateTicketError as e:
                duplicates.append(e)
            except Exception as e:  # noqa: BLE001
                unexpected.append(e)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert unexpected == []
    assert len(created) == 1
    assert len(duplicates) == workers - 1
    with file_sessions() as s:
        assert [t.id for t in service.list_tickets(s, "2025084")] == created
