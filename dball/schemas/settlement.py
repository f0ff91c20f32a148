"""Schemas for settlement outcomes and period summaries."""

from __future__ import annotations

from marshmallow import Schema, fields


class SettlementSchema(Schema):
    ticket_id = fields.Int(required=True)
    draw_id = fields.Int(required=True)
    period = fields.Str(required=True)
    tier = fields.Method("_tier")
    tier_label = fields.Method("_tier_label")
    payout_units = fields.Int()
    jackpot = fields.Bool()
    settled_at = fields.NaiveDateTime()

    def _tier(self, outcome):  # type: ignore[no-untyped-def]
        return int(outcome.tier)

    def _tier_label(self, outcome):  # type: ignore[no-untyped-def]
        return outcome.tier.label


class PeriodSummarySchema(Schema):
    period = fields.Str()
    draw_id = fields.Int()
    tickets = fields.Int()
    tier_counts = fields.Method("_tier_counts")
    total_payout_units = fields.Int()
    jackpots = fields.Int()

    def _tier_counts(self, summary):  # type: ignore[no-untyped-def]
        return {tier.label: count for tier, count in summary.tier_counts.items()}
