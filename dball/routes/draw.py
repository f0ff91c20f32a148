"""Draw routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from dball.db import get_session
from dball.schemas.draw import DrawCreateSchema, DrawQuerySchema, DrawSchema
from dball.services.draw_service import DrawService
from dball.utils.responses import ok


draw_bp = Blueprint("draw", __name__)

_create_schema = DrawCreateSchema()
_query_schema = DrawQuerySchema()
_draw_schema = DrawSchema()
_draws_schema = DrawSchema(many=True)
_service = DrawService()


@draw_bp.get("/draws")
def list_draws():
    """List draws by `period` and `status`, or the `latest` N recorded."""

    query = _query_schema.load(request.args.to_dict())
    session = get_session()

    if query.get("latest"):
        draws = _service.latest_draws(session, int(query["latest"]))
    else:
        draws = _service.list_draws(session, period=query.get("period"), status=query.get("status"))
    return ok(_draws_schema.dump(draws))


@draw_bp.get("/draws/<int:draw_id>")
def get_draw(draw_id: int):
    """Fetch one draw."""

    session = get_session()
    return ok(_draw_schema.dump(_service.get_draw(session, draw_id)))


@draw_bp.post("/draws")
def record_draw():
    """Record a draw result as Pending; `publish: true` publishes it right away."""

    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    session = get_session()
    draw = _service.record_draw(
        session,
        period=data["period"],
        reds=data["red"],
        blue=data["blue"],
        multiplier=int(data["multiplier"]),
    )
    if data.get("publish"):
        draw = _service.publish(session, draw.id)
    return ok(_draw_schema.dump(draw), status_code=201)


@draw_bp.post("/draws/<int:draw_id>/publish")
def publish_draw(draw_id: int):
    """Make a pending draw the published result of its period."""

    session = get_session()
    return ok(_draw_schema.dump(_service.publish(session, draw_id)))


@draw_bp.post("/draws/<int:draw_id>/deprecate")
def deprecate_draw(draw_id: int):
    """Withdraw a draw."""

    session = get_session()
    return ok(_draw_schema.dump(_service.deprecate(session, draw_id)))
