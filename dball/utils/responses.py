"""Helpers for consistent JSON response schema."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify

from dball.errors import AppError


def ok(data: Any, status_code: int = 200) -> Response:
    """Success response."""

    return jsonify({"success": True, "data": data, "error": None}), status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None, **extra: Any) -> Response:
    """Error response."""

    return (
        jsonify(
            {
                "success": False,
                "data": None,
                "error": {"code": code, "message": message, "details": details, **extra},
            }
        ),
        status_code,
    )


def fail_from(exc: AppError) -> Response:
    """Error response for an application error."""

    reason = getattr(exc, "reason", None)
    if reason is not None:
        return fail(exc.code, exc.message, exc.status_code, exc.details, reason=reason.value)
    return fail(exc.code, exc.message, exc.status_code, exc.details)
