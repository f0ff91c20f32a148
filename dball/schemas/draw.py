"""Schemas for draw results."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from dball.domain.lifecycle import DrawStatus


class DrawCreateSchema(Schema):
    period = fields.String(required=True, validate=validate.Length(min=1, max=32))
    red = fields.List(fields.Integer(strict=True), required=True)
    blue = fields.Integer(required=True, strict=True)
    multiplier = fields.Integer(required=False, load_default=1, strict=True, validate=validate.Range(min=1))

    # Publish immediately after recording.
    publish = fields.Boolean(required=False, load_default=False)


class DrawQuerySchema(Schema):
    period = fields.String(required=False, load_default=None, validate=validate.Length(min=1, max=32))
    status = fields.Enum(DrawStatus, by_value=True, required=False, load_default=None)
    latest = fields.Integer(required=False, load_default=None, validate=validate.Range(min=1, max=500))


class DrawSchema(Schema):
    id = fields.Int(required=True)
    period = fields.Str(required=True)
    red = fields.List(fields.Int(), attribute="red_numbers")
    blue = fields.Int()
    multiplier = fields.Int(attribute="magnification")
    status = fields.Enum(DrawStatus, by_value=True)
    deprecated = fields.Bool()
    created_time = fields.NaiveDateTime()
    modified_time = fields.NaiveDateTime()
