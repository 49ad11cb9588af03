"""Run a function on a background thread and collect its result later."""

from __future__ import annotations

import enum
import threading
from typing import Any, Callable, Optional


class _State(enum.Enum):
    IDLE = enum.auto()
    RUNNING = enum.auto()
    FINISHED = enum.auto()
    ABORTED = enum.auto()


class Future:
    """The pending result of a function started on its own thread.

    The running function may poll :meth:`is_aborting` to honour a request
    made with :meth:`abort`; the run then counts as aborted.
    """

    def __init__(self) -> None:
        self._aborting = False
        self._state = _State.IDLE
        self._thread: Optional[threading.Thread] = None
        self._result: Any = None
        self._error: Optional[BaseException] = None

    def start(self, func: Callable[..., Any], *args: Any) -> None:
        """Call ``func(*args)`` on a new thread, after any earlier run has ended."""
        if not callable(func):
            raise TypeError("func must be callable")
        self.join()
        self._aborting = False
        self._result = None
        self._error = None
        self._state = _State.RUNNING
        self._thread = threading.Thread(target=self._run, args=(func, args), daemon=True)
        self._thread.start()

    def abort(self) -> None:
        """Ask the running function to stop."""
        self._aborting = True

    def is_aborting(self) -> bool:
        """Return whether an abort was requested."""
        return self._aborting

    def is_finished(self) -> bool:
        """Return whether the function ran to completion without an abort request."""
        return self._state is _State.FINISHED

    def is_aborted(self) -> bool:
        """Return whether the function ended after an abort request."""
        return self._state is _State.ABORTED

    def join(self) -> None:
        """Wait for the running function, if any, to end."""
        thread = self._thread
        if thread is not None:
            thread.join()
            self._thread = None

    def result(self) -> Any:
        """Wait for the function and return its result, re-raising its exception."""
        self.join()
        if self._error is not None:
            raise self._error
        return self._result

    def _run(self, func: Callable[..., Any], args: tuple) -> None:
        try:
            self._result = func(*args)
        except BaseException as exc:  # handed to the caller by result()
            self._error = exc
        finally:
            self._state = _State.ABORTED if self._aborting else _State.FINISHED