# app/core/locks.py
import threading
from collections.abc import Hashable, Iterator
from contextlib import contextmanager


class KeyedLock:
    """
    One mutex per key, created on demand and dropped once nobody
    holds or waits on it.

    Usage:

        product_locks = KeyedLock()

        with product_locks.hold(product_id):
            ...  # read-then-write for this product id only
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}
        self._users: dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._users[key] = self._users.get(key, 0) + 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._users[key] -= 1
                if self._users[key] == 0:
                    del self._users[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
