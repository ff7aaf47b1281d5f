"""Per-cargo mutual exclusion.

Every mutation of a cargo (route assignment, destination change, handling)
loads, changes, re-derives and saves it. Holding the cargo's lock across
that sequence keeps two of them from interleaving. The locks are re-entrant
because handling is applied by an event handler that runs synchronously
inside the registering call.

A cargo's lock only exists while someone holds or waits on it.
"""

import threading
from contextlib import contextmanager


class CargoLocks:
    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}
        self._holders: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def _acquire_entry(self, tracking_id: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.setdefault(tracking_id, threading.RLock())
            self._holders[tracking_id] = self._holders.get(tracking_id, 0) + 1
            return lock

    def _release_entry(self, tracking_id: str) -> None:
        with self._guard:
            remaining = self._holders[tracking_id] - 1
            if remaining:
                self._holders[tracking_id] = remaining
            else:
                del self._holders[tracking_id]
                del self._locks[tracking_id]

    @contextmanager
    def hold(self, tracking_id: str):
        key = str(tracking_id)
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)


_cargo_locks = CargoLocks()


def get_cargo_locks() -> CargoLocks:
    return _cargo_locks
