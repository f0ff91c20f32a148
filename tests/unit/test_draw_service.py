"""Tests for DrawService lifecycle handling."""

from __future__ import annotations

import threading

import pytest
from sqlalchemy.orm import Session, sessionmaker

from dball.domain.lifecycle import DrawStatus
from dball.errors import InvalidTransitionError, NotFoundError, ValidationError
from dball.services.draw_service import DrawService
from dball.services.period_locks import PeriodLocks


def _record(session: Session, service: DrawService, period: str = "2025084", blue: int = 7, multiplier: int = 1):
    return service.record_draw(session, period, [1, 2, 3, 4, 5, 6], blue, multiplier=multiplier)


def test_record_draw_starts_pending(session: Session, draw_service: DrawService) -> None:
    draw = _record(session, draw_service, multiplier=2)

    assert draw.status is DrawStatus.PENDING
    assert draw.multiplier == 2
    assert not draw.deprecated
    assert draw.created_time is not None


@pytest.mark.parametrize("multiplier", [0, -3, True])
def test_record_draw_rejects_bad_multiplier(session: Session, draw_service: DrawService, multiplier: object) -> None:
    with pytest.raises(ValidationError):
        _record(session, draw_service, multiplier=multiplier)  # type: ignore[arg-type]


def test_publish_pending(session: Session, draw_service: DrawService) -> None:
    draw = _record(session, draw_service)

    published = draw_service.publish(session, draw.id)

    assert published.status is DrawStatus.PUBLISHED
    assert published.modified_time >= published.created_time


def test_publish_supersedes_previous(session: Session, draw_service: DrawService) -> None:
    first = _record(session, draw_service, blue=7)
    second = _record(session, draw_service, blue=8)
    other_period = _record(session, draw_service, period="2025086")
    draw_service.publish(session, first.id)
    draw_service.publish(session, other_period.id)

    draw_service.publish(session, second.id)

    published = draw_service.list_draws(session, "2025084", DrawStatus.PUBLISHED)
    assert [d.id for d in published] == [second.id]
    assert draw_service.get_draw(session, first.id).status is DrawStatus.DEPRECATED
    assert draw_service.get_draw(session, other_period.id).status is DrawStatus.PUBLISHED
    # history is kept
    assert len(draw_service.list_draws(session, "2025084")) == 2


def test_publish_twice_is_invalid(session: Session, draw_service: DrawService) -> None:
    draw = _record(session, draw_service)
    draw_service.publish(session, draw.id)

    with pytest.raises(InvalidTransitionError):
        draw_service.publish(session, draw.id)


def test_deprecate_from_pending_and_published(session: Session, draw_service: DrawService) -> None:
    pending = _record(session, draw_service, blue=7)
    published = _record(session, draw_service, blue=8)
    draw_service.publish(session, published.id)

    assert draw_service.deprecate(session, pending.id).status is DrawStatus.DEPRECATED
    assert draw_service.deprecate(session, published.id).deprecated
    assert draw_service.list_draws(session, "2025084", DrawStatus.PUBLISHED) == []


def test_deprecated_is_terminal(session: Session, draw_service: DrawService) -> None:
    draw = _record(session, draw_service)
    draw_service.deprecate(session, draw.id)

    with pytest.raises(InvalidTransitionError):
        draw_service.publish(session, draw.id)
    with pytest.raises(InvalidTransitionError):
        draw_service.deprecate(session, draw.id)


def test_unknown_draw(session: Session, draw_service: DrawService) -> None:
    with pytest.raises(NotFoundError):
        draw_service.publish(session, 404)
    with pytest.raises(NotFoundError):
        draw_service.deprecate(session, 404)


def test_latest_draws_newest_first(session: Session, draw_service: DrawService) -> None:
    ids = [_record(session, draw_service, blue=b).id for b in (1, 2, 3)]

    latest = draw_service.latest_draws(session, 2)

    assert [d.id for d in latest] == [ids[2], ids[1]]


def test_latest_draws_requires_positive_limit(session: Session, draw_service: DrawService) -> None:
    with pytest.raises(ValidationError):
        draw_service.latest_draws(session, 0)


def test_concurrent_publish_leaves_one_published(file_sessions: sessionmaker[Session]) -> None:
    service = DrawService(locks=PeriodLocks(timeout=10))
    with file_sessions() as s:
        draw_ids = [service.record_draw(s, "2025084", [1, 2, 3, 4, 5, 6], blue).id for blue in range(1, 9)]
        s.commit()

    barrier = threading.Barrier(len(draw_ids))
    errors: list[Exception] = []

    def worker(draw_id: int) -> None:
        with file_sessions() as s:
            barrier.wait()
            try:
                service.publish(s, draw_id)
            except Exception as e:  # noqa: BLE001
                errors.append(e)

    threads = [threading.Thread(target=worker, args=(draw_id,)) for draw_id in draw_ids]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    with file_sessions() as s:
        published = service.list_draws(s, "2025084", DrawStatus.PUBLISHED)
        deprecated = service.list_draws(s, "2025084", DrawStatus.DEPRECATED)
    assert len(published) == 1
    assert len(deprecated) == len(draw_ids) - 1
