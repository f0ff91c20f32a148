"""Tests for configuration and storage helpers."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from dball import config
from dball.config import get_config, resolve_database_url
from dball.db import storage_guard
from dball.errors import StorageUnavailableError


def test_storage_guard_translates_operational_errors() -> None:
    with pytest.raises(StorageUnavailableError) as excinfo:
        with storage_guard():
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    assert excinfo.value.status_code == 503
    assert excinfo.value.details == "database is locked"


def test_storage_guard_passes_other_errors() -> None:
    with pytest.raises(KeyError):
        with storage_guard():
            raise KeyError("x")


def test_database_url_priority(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DATABASE_URL", "PGHOST", "PGUSER", "PGDATABASE", "PGPORT", "PGPASSWORD", "PGSSLMODE"):
        monkeypatch.delenv(name, raising=False)
    assert resolve_database_url() == "sqlite:///./dball.db"

    monkeypatch.setenv("PGHOST", "db.local")
    monkeypatch.setenv("PGUSER", "dball")
    monkeypatch.setenv("PGDATABASE", "lottery")
    monkeypatch.setenv("PGPORT", "not-a-port")
    url = resolve_database_url()
    assert url.startswith("postgresql+psycopg2://dball@db.local:5432/lottery")

    monkeypatch.setenv("DATABASE_URL", "sqlite:///explicit.db")
    assert resolve_database_url() == "sqlite:///explicit.db"


def test_get_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "testing")
    assert get_config() is config.TestingConfig

    monkeypatch.setenv("APP_ENV", "production")
    assert get_config().DEBUG is False
