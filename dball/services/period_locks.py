"""Per-period mutual exclusion for draw transitions and ticket inserts."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock

from dball.errors import StorageUnavailableError

logger = logging.getLogger(__name__)


class PeriodLocks:
    """Hands out one lock per period key; acquisition is bounded by `timeout`.

    Entries are reference counted and dropped once no caller holds or waits
    on them, so the table only grows with the number of busy periods.
    """

    def __init__(self, timeout: float = 10.0) -> None:
        self._guard = Lock()
        self._locks: dict[str, Lock] = {}
        self._users: dict[str, int] = {}
        self.timeout = float(timeout)

    @property
    def in_use(self) -> int:
        """Number of periods with a holder or waiter."""

        with self._guard:
            return len(self._locks)

    def _checkout(self, period: str) -> Lock:
        with self._guard:
            lock = self._locks.get(period)
            if lock is None:
                lock = Lock()
                self._locks[period] = lock
            self._users[period] = self._users.get(period, 0) + 1
            return lock

    def _checkin(self, period: str) -> None:
        with self._guard:
            self._users[period] -= 1
            if self._users[period] == 0:
                del self._users[period]
                del self._locks[period]

    @contextmanager
    def hold(self, period: str) -> Iterator[None]:
        lock = self._checkout(period)
        try:
            if not lock.acquire(timeout=self.timeout):
                logger.warning("Timed out waiting for period lock %s", period)
                raise StorageUnavailableError(
                    message=f"Period {period} is busy, retry later",
                    details={"period": period, "timeout": self.timeout},
                )
            try:
                yield
            finally:
                lock.release()
        finally:
            self._checkin(period)


_default_locks = PeriodLocks()


def default_period_locks() -> PeriodLocks:
    return _default_locks
