"""Exclusive row locks held across a workflow's unit of work.

A command handler's unit of work commits only after the handler returns, so
the lock has to wrap the whole `domain.process(...)` call. Keys are plain
strings such as ``"order:<id>"`` and are acquired in the order given; callers
always pass order keys before product keys.

Locks are re-entrant for the thread holding them. Waits are bounded and a
timeout surfaces as `StorageConflict`.
"""

import os
import threading
from collections import defaultdict
from contextlib import contextmanager

from marketplace.errors import StorageConflict


def default_lock_timeout() -> float:
    return float(os.getenv("MARKETPLACE_LOCK_TIMEOUT", "5"))


def product_key(product_id) -> str:
    return f"product:{product_id}"


def order_key(order_id) -> str:
    return f"order:{order_id}"


def account_key(account_id) -> str:
    return f"account:{account_id}"


def email_key(email) -> str:
    return f"email:{str(email).strip().lower()}"


class RowLocks:
    """Process-local registry of keyed re-entrant locks."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = defaultdict(threading.RLock)

    def _lock_for(self, key: str) -> threading.RLock:
        with self._guard:
            return self._locks[key]

    @contextmanager
    def hold(self, *keys: str, timeout: float | None = None):
        """Acquire every key, in order, for the duration of the block."""
        wait = default_lock_timeout() if timeout is None else timeout
        acquired = []
        try:
            for key in keys:
                lock = self._lock_for(key)
                if not lock.acquire(timeout=wait):
                    raise StorageConflict(f"Timed out waiting for lock on {key}")
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


row_locks = RowLocks()
