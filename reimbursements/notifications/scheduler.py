"""
Deferred Callback Scheduling

The notification manager removes dismissed toasts after a delay. That
delay goes through a Scheduler so it can be cancelled, and so tests can
move time forward instead of waiting on the wall clock.
"""

import heapq
import itertools
import threading
from abc import ABC, abstractmethod
from typing import Callable


class ScheduledCall(ABC):
    """Handle to a pending callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        pass


class Scheduler(ABC):
    """Runs callbacks after a delay."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """
        Schedule a callback.

        Args:
            delay: Seconds to wait
            callback: Invoked with no arguments once the delay has passed
        """
        pass


class _TimerCall(ScheduledCall):
    def __init__(self, timer: threading.Timer):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()


class ThreadingScheduler(Scheduler):
    """Real-time scheduler backed by daemon threading.Timer threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return _TimerCall(timer)


class _ManualCall(ScheduledCall):
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """
    Virtual-clock scheduler.

    Nothing runs until advance() moves the clock past a callback's due
    time. Callbacks run in due order, ties in scheduling order.
    """

    def __init__(self):
        self._now = 0.0
        self._queue: list[tuple[float, int, _ManualCall]] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have neither run nor been cancelled."""
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = _ManualCall(self._now + delay, callback)
        heapq.heappush(self._queue, (call.due, next(self._sequence), call))
        return call

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and run every callback that became due.

        Returns:
            Number of callbacks run
        """
        target = self._now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            self._now = due
            if not call.cancelled:
                call.callback()
                ran += 1
        self._now = target
        return ran
