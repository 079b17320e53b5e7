"""One-shot timers that call back from a background thread unless stopped first."""

from __future__ import annotations

import enum
import errno
import logging
import threading
from collections.abc import Callable
from typing import Any, Optional

logger = logging.getLogger(__name__)

TimerCallback = Callable[[Any, int], None]


class TimerState(enum.IntEnum):
    """Life cycle of a timer."""

    READY = 100
    WAITING = 101
    DONE = 102
    ABORT = 103


class LocTimer:
    """Calls ``callback(user_data, errno.ETIMEDOUT)`` once ``msec`` milliseconds pass.

    :meth:`stop` cancels the timer; a cancelled timer never calls back.
    """

    def __init__(self, msec: int, callback: TimerCallback, user_data: Any = None) -> None:
        if callback is None or not callable(callback):
            raise ValueError("callback must be callable")
        if msec <= 0:
            raise ValueError("delay must be a positive number of milliseconds")
        self._msec = msec
        self._callback = callback
        self._user_data = user_data
        self._cond = threading.Condition()
        self._state = TimerState.READY
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "LocTimer":
        """Start the timer thread; a timer can be started only once."""
        if self._thread is not None:
            raise RuntimeError("timer already started")
        self._thread = threading.Thread(target=self._run, name="loc_timer", daemon=True)
        self._thread.start()
        logger.debug("Created timer thread for %d ms", self._msec)
        return self

    def _run(self) -> None:
        timed_out = False
        with self._cond:
            if self._state is TimerState.READY:
                self._state = TimerState.WAITING
                stopped = self._cond.wait_for(
                    lambda: self._state is TimerState.ABORT, timeout=self._msec / 1000
                )
                timed_out = not stopped
                self._state = TimerState.DONE
                logger.debug("loc_timer %s", "timed out" if timed_out else "stopped")
            else:
                logger.debug("loc_timer cancelled")
        if timed_out:
            self._callback(self._user_data, errno.ETIMEDOUT)

    def stop(self) -> None:
        """Cancel the timer if it has not fired yet."""
        with self._cond:
            if self._state in (TimerState.READY, TimerState.WAITING):
                self._state = TimerState.ABORT
                self._cond.notify()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the timer thread to end; return whether it has ended."""
        if self._thread is None:
            raise RuntimeError("timer not started")
        self._thread.join(timeout)
        return not self._thread.is_alive()

    @property
    def state(self) -> TimerState:
        """The timer's current state."""
        with self._cond:
            return self._state


def timer_start(msec: int, callback: TimerCallback, user_data: Any = None) -> LocTimer:
    """Create and start a timer; the returned timer can be stopped."""
    return LocTimer(msec, callback, user_data).start()