"""Prize tier classification and payout.

Everything here is pure: no I/O, no shared state. Safe to call from any
thread.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from dball.domain.number_set import RED_COUNT, NumberSet
from dball.errors import ValidationError, ValidationReason


class PrizeTier(int, Enum):
    """Prize tiers, Tier1 highest. Values double as the stored `prize_status`."""

    NO_PRIZE = 0
    TIER1 = 1
    TIER2 = 2
    TIER3 = 3
    TIER4 = 4
    TIER5 = 5
    TIER6 = 6

    @property
    def label(self) -> str:
        return f"#{int(self)}"

    @property
    def is_winning(self) -> bool:
        return self is not PrizeTier.NO_PRIZE


class _Jackpot(Enum):
    JACKPOT = "jackpot"

    def __repr__(self) -> str:
        return "JACKPOT"


# Tier1 amount comes from the prize pool and is not known to the engine.
JACKPOT = _Jackpot.JACKPOT

BASE_AMOUNTS: dict[PrizeTier, int] = {
    PrizeTier.TIER2: 150_000,
    PrizeTier.TIER3: 3_000,
    PrizeTier.TIER4: 200,
    PrizeTier.TIER5: 10,
    PrizeTier.TIER6: 5,
    PrizeTier.NO_PRIZE: 0,
}

# (red matches, blue matched) -> tier; combinations not listed win nothing.
_TIER_TABLE: dict[tuple[int, bool], PrizeTier] = {
    (6, True): PrizeTier.TIER1,
    (6, False): PrizeTier.TIER2,
    (5, True): PrizeTier.TIER3,
    (5, False): PrizeTier.TIER4,
    (4, True): PrizeTier.TIER4,
    (4, False): PrizeTier.TIER5,
    (3, True): PrizeTier.TIER5,
    (2, True): PrizeTier.TIER6,
    (1, True): PrizeTier.TIER6,
    (0, True): PrizeTier.TIER6,
}


def classify_counts(red_matches: int, blue_matched: bool) -> PrizeTier:
    """Map match counts to a tier.

    Raises:
        ValueError: red_matches outside 0..6.
    """

    if not (0 <= int(red_matches) <= RED_COUNT):
        raise ValueError(f"red_matches must be between 0 and {RED_COUNT}, got {red_matches}")
    return _TIER_TABLE.get((int(red_matches), bool(blue_matched)), PrizeTier.NO_PRIZE)


def classify(ticket_numbers: NumberSet, draw_numbers: NumberSet) -> PrizeTier:
    """Classify a ticket's numbers against the drawn numbers."""

    return classify_counts(
        ticket_numbers.red_matches(draw_numbers),
        ticket_numbers.blue_matches(draw_numbers),
    )


def check_multiplier(multiplier: object) -> int:
    if isinstance(multiplier, bool) or not isinstance(multiplier, int) or multiplier < 1:
        raise ValidationError(
            "Multiplier must be a positive integer",
            details={"multiplier": multiplier},
            reason=ValidationReason.OUT_OF_RANGE,
        )
    return multiplier


def payout(tier: PrizeTier, multiplier: int) -> int | _Jackpot:
    """Base amount for `tier` times `multiplier`.

    Returns `JACKPOT` for Tier1; the caller resolves the pooled amount.
    """

    multiplier = check_multiplier(multiplier)
    if tier is PrizeTier.TIER1:
        return JACKPOT
    return BASE_AMOUNTS[tier] * multiplier


def tally(tiers: Iterable[PrizeTier]) -> dict[PrizeTier, int]:
    """Count occurrences of each tier (every tier present, zero if unseen)."""

    counts: dict[PrizeTier, int] = {t: 0 for t in PrizeTier}
    for t in tiers:
        counts[t] += 1
    return counts
