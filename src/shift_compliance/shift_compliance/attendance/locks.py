from __future__ import annotations

import threading
from collections import defaultdict
from contextlib import contextmanager
from datetime import date
from typing import Iterator


class DayLockRegistry:
    """One re-entrant lock per (employee_id, work_date).

    Check-in, check-out and re-classification of the same employee-day run
    under the same lock; different days never block each other.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[tuple[int, date], threading.RLock] = defaultdict(threading.RLock)
        self._holders: dict[tuple[int, date], int] = defaultdict(int)

    @contextmanager
    def hold(self, employee_id: int, work_date: date) -> Iterator[None]:
        key = (int(employee_id), work_date)
        with self._guard:
            lock = self._locks[key]
            self._holders[key] += 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[key] -= 1
                # Drop idle locks so the registry does not grow without bound.
                if self._holders[key] == 0:
                    del self._holders[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
