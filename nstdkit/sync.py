"""Counting semaphore and mutex for thread synchronisation."""

from __future__ import annotations

import threading
from typing import Optional


class Semaphore:
    """A counting semaphore; timeouts are given in milliseconds."""

    def __init__(self, value: int = 0) -> None:
        if value < 0:
            raise ValueError("semaphore value must not be negative")
        self._sem = threading.Semaphore(value)

    def signal(self) -> None:
        """Increment the counter, waking one waiter if any."""
        self._sem.release()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Decrement the counter, blocking at most ``timeout`` ms (forever if None).

        Returns whether the counter was decremented.
        """
        if timeout is None:
            return self._sem.acquire()
        return self._sem.acquire(timeout=max(timeout, 0) / 1000.0)

    def try_wait(self) -> bool:
        """Decrement the counter only if that does not block."""
        return self._sem.acquire(blocking=False)


class Mutex:
    """A non-recursive mutual exclusion lock, usable as a context manager."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def lock(self) -> None:
        """Block until the mutex is acquired."""
        self._lock.acquire()

    def try_lock(self) -> bool:
        """Acquire the mutex if it is free; return whether it was acquired."""
        return self._lock.acquire(blocking=False)

    def unlock(self) -> None:
        """Release the mutex."""
        self._lock.release()

    def __enter__(self) -> "Mutex":
        self.lock()
        return self

    def __exit__(self, *args) -> None:
        self.unlock()