"""Tests for the draw status state machine."""

from __future__ import annotations

import itertools

import pytest

from dball.domain.lifecycle import DrawStatus, can_transition, ensure_transition
from dball.errors import InvalidTransitionError

ALLOWED = {
    (DrawStatus.PENDING, DrawStatus.PUBLISHED),
    (DrawStatus.PENDING, DrawStatus.DEPRECATED),
    (DrawStatus.PUBLISHED, DrawStatus.DEPRECATED),
}


@pytest.mark.parametrize(("current", "target"), list(itertools.product(DrawStatus, DrawStatus)))
def test_only_three_transitions_are_allowed(current: DrawStatus, target: DrawStatus) -> None:
    if (current, target) in ALLOWED:
        assert can_transition(current, target)
        ensure_transition(current, target)
    else:
        assert not can_transition(current, target)
        with pytest.raises(InvalidTransitionError) as excinfo:
            ensure_transition(current, target)
        assert excinfo.value.details == {"from": current.value, "to": target.value}


def test_accepts_raw_status_values() -> None:
    ensure_transition("Pending", "Published")  # type: ignore[arg-type]
