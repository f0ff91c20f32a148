"""Health check routes."""

from __future__ import annotations

from flask import Blueprint
from sqlalchemy import text

from dball.db import get_session, storage_guard
from dball.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint. Fails with 503 when the database is unreachable."""

    with storage_guard():
        get_session().execute(text("SELECT 1"))
    return ok({"status": "ok", "database": "ok"})
