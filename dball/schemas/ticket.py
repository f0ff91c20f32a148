"""Marshmallow schemas for tickets."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class TicketCreateSchema(Schema):
    """Validate create Ticket payload.

    Only the shape is checked here; number ranges, count and duplicates are
    left to NumberSet so the error carries its specific reason.
    """

    period = fields.String(required=True, validate=validate.Length(min=1, max=32))
    red = fields.List(fields.Integer(strict=True), required=True)
    blue = fields.Integer(required=True, strict=True)
    purchased_at = fields.NaiveDateTime(required=False, load_default=None)


class TicketSchema(Schema):
    """Serialize Ticket."""

    id = fields.Int(required=True)
    period = fields.Str(required=True)
    red = fields.List(fields.Int(), attribute="red_numbers")
    blue = fields.Int()
    purchased_at = fields.NaiveDateTime()
    prize_status = fields.Int(allow_none=True)
    settled_draw_id = fields.Int(allow_none=True, attribute="settled_spot_id")
    created_time = fields.NaiveDateTime()
    modified_time = fields.NaiveDateTime()
