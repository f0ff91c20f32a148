"""Period-level settlement routes."""

from __future__ import annotations

from flask import Blueprint, request

from dball.db import get_session
from dball.schemas.settlement import PeriodSummarySchema, SettlementSchema
from dball.services.reconciliation_service import ReconciliationService
from dball.utils.responses import ok

periods_bp = Blueprint("periods", __name__)

_outcomes_schema = SettlementSchema(many=True)
_summary_schema = PeriodSummarySchema()
_service = ReconciliationService()


@periods_bp.post("/periods/<period>/resettle")
def resettle_period(period: str):
    """Recompute outcomes for every ticket of the period.

    Query params:
    - record: "true" to also store the outcomes on the ticket rows
    """

    session = get_session()
    outcomes = _service.resettle_period(session, period)

    recorded = 0
    if (request.args.get("record") or "").strip().lower() in ("1", "true", "yes"):
        recorded = _service.record(session, outcomes)

    return ok({"period": period, "recorded": recorded, "outcomes": _outcomes_schema.dump(outcomes)})


@periods_bp.get("/periods/<period>/summary")
def period_summary(period: str):
    """Tier counts and payout totals for the period."""

    session = get_session()
    return ok(_summary_schema.dump(_service.summarize_period(session, period)))
