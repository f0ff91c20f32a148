"""Draw status state machine."""

from __future__ import annotations

from enum import Enum

from dball.errors import InvalidTransitionError


class DrawStatus(str, Enum):
    PENDING = "Pending"
    PUBLISHED = "Published"
    DEPRECATED = "Deprecated"


_ALLOWED: dict[DrawStatus, frozenset[DrawStatus]] = {
    DrawStatus.PENDING: frozenset({DrawStatus.PUBLISHED, DrawStatus.DEPRECATED}),
    DrawStatus.PUBLISHED: frozenset({DrawStatus.DEPRECATED}),
    DrawStatus.DEPRECATED: frozenset(),
}


def can_transition(current: DrawStatus, target: DrawStatus) -> bool:
    return DrawStatus(target) in _ALLOWED[DrawStatus(current)]


def ensure_transition(current: DrawStatus, target: DrawStatus) -> None:
    """Raise InvalidTransitionError unless `current -> target` is allowed."""

    current = DrawStatus(current)
    target = DrawStatus(target)
    if not can_transition(current, target):
        raise InvalidTransitionError(
            message=f"Cannot move draw from {current.value} to {target.value}",
            details={"from": current.value, "to": target.value},
        )
