"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class ValidationReason(str, Enum):
    WRONG_COUNT = "WRONG_COUNT"
    DUPLICATE = "DUPLICATE"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    INVALID = "INVALID"


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error.

    `reason` tells number-set defects apart (wrong count, duplicate red,
    out-of-range value) from generic malformed input.
    """

    def __init__(
        self,
        message: str = "Validation error",
        details: Any | None = None,
        reason: ValidationReason = ValidationReason.INVALID,
    ) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)
        self.reason = reason


class ConflictError(AppError):
    """Conflict (e.g., unique constraint)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class DuplicateTicketError(AppError):
    """A ticket with the same period and numbers already exists."""

    def __init__(self, message: str = "Duplicate ticket", details: Any | None = None) -> None:
        super().__init__(code="duplicate_ticket", message=message, status_code=409, details=details)


class InvalidTransitionError(AppError):
    """Requested draw status change is not allowed."""

    def __init__(self, message: str = "Invalid status transition", details: Any | None = None) -> None:
        super().__init__(code="invalid_transition", message=message, status_code=409, details=details)


class NoAuthoritativeDrawError(AppError):
    """No published draw exists yet for the period. Retry later."""

    def __init__(self, message: str = "No published draw for period", details: Any | None = None) -> None:
        super().__init__(code="no_authoritative_draw", message=message, status_code=409, details=details)


class InvariantViolationError(AppError):
    """More than one published draw for a period; needs manual correction."""

    def __init__(self, message: str = "Invariant violation", details: Any | None = None) -> None:
        super().__init__(code="invariant_violation", message=message, status_code=500, details=details)


class StorageUnavailableError(AppError):
    """Database unreachable or a period lock could not be acquired in time."""

    def __init__(self, message: str = "Storage unavailable", details: Any | None = None) -> None:
        super().__init__(code="storage_unavailable", message=message, status_code=503, details=details)
