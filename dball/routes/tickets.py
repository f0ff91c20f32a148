"""Ticket routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from dball.db import get_session
from dball.errors import ValidationError
from dball.schemas.settlement import SettlementSchema
from dball.schemas.ticket import TicketCreateSchema, TicketSchema
from dball.services.reconciliation_service import ReconciliationService
from dball.services.ticket_service import TicketService
from dball.utils.responses import ok

tickets_bp = Blueprint("tickets", __name__)

_ticket_schema = TicketSchema()
_tickets_schema = TicketSchema(many=True)
_create_schema = TicketCreateSchema()
_settlement_schema = SettlementSchema()
_service = TicketService()
_reconciliation = ReconciliationService()


def _int_arg(name: str) -> int | None:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError(f"{name} must be an integer", details={name: raw}) from e


@tickets_bp.get("/tickets")
def list_tickets():
    """List tickets, optionally filtered by `period` or by a `red`/`blue` number."""

    session = get_session()
    red = _int_arg("red")
    if red is not None:
        return ok(_tickets_schema.dump(_service.tickets_with_red(session, red)))
    blue = _int_arg("blue")
    if blue is not None:
        return ok(_tickets_schema.dump(_service.tickets_with_blue(session, blue)))

    period = request.args.get("period")
    return ok(_tickets_schema.dump(_service.list_tickets(session, period)))


@tickets_bp.get("/tickets/<int:ticket_id>")
def get_ticket(ticket_id: int):
    """Fetch one ticket."""

    session = get_session()
    return ok(_ticket_schema.dump(_service.get_ticket(session, ticket_id)))


@tickets_bp.post("/tickets")
def create_ticket():
    """Record a purchased ticket."""

    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    session = get_session()
    ticket = _service.create_ticket(
        session,
        period=data["period"],
        reds=data["red"],
        blue=data["blue"],
        purchased_at=data.get("purchased_at"),
    )
    return ok(_ticket_schema.dump(ticket), status_code=201)


@tickets_bp.delete("/tickets/<int:ticket_id>")
def delete_ticket(ticket_id: int):
    """Remove a mis-entered ticket."""

    session = get_session()
    _service.delete_ticket(session, ticket_id)
    return ok({"deleted": ticket_id})


@tickets_bp.get("/tickets/<int:ticket_id>/settlement")
def settle_ticket(ticket_id: int):
    """Settle one ticket against the current published draw of its period."""

    session = get_session()
    ticket = _service.get_ticket(session, ticket_id)
    outcome = _reconciliation.settle(session, ticket)
    return ok(_settlement_schema.dump(outcome))
