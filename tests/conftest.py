"""Shared fixtures: in-memory database, services and Flask client."""

from __future__ import annotations

import pathlib
from collections.abc import Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from dball import create_app, models  # noqa: F401
from dball.db import create_app_engine, create_session_factory
from dball.models.base import Base
from dball.services.draw_service import DrawService
from dball.services.period_locks import PeriodLocks
from dball.services.reconciliation_service import ReconciliationService
from dball.services.ticket_service import TicketService


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_app_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    factory = create_session_factory(engine)
    with factory() as s:
        yield s


@pytest.fixture()
def file_sessions(tmp_path: pathlib.Path) -> Iterator[sessionmaker[Session]]:
    """Session factory over a file database, so each thread gets its own connection."""

    engine = create_app_engine(f"sqlite:///{tmp_path / 'dball.db'}")
    Base.metadata.create_all(bind=engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def locks() -> PeriodLocks:
    return PeriodLocks(timeout=0.5)


@pytest.fixture()
def ticket_service(locks: PeriodLocks) -> TicketService:
    return TicketService(locks=locks)


@pytest.fixture()
def draw_service(locks: PeriodLocks) -> DrawService:
    return DrawService(locks=locks)


@pytest.fixture()
def reconciliation() -> ReconciliationService:
    return ReconciliationService()


@pytest.fixture()
def app() -> Flask:
    return create_app({"TESTING": True, "DATABASE_URL": "sqlite://", "PERIOD_LOCK_TIMEOUT": 1.0})


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
