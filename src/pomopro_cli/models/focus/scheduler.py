"""Virtual-time scheduler that drives the session clock.

The scheduler owns a monotonic clock measured in seconds. Delayed calls are
queued against it and fire only when time is advanced past their deadline, so
tests can step through a whole pomodoro without sleeping. The CLI drives the
same scheduler in real time through ``run_realtime``.
"""

from __future__ import annotations

import heapq
import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from pomopro_cli.utils.logger import get_logger


@dataclass(order=True)
class ScheduledCall:
    """Handle for a delayed call. ``cancel()`` prevents it from firing."""

    deadline: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """Single-threaded queue of delayed calls over a virtual clock."""

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: list[ScheduledCall] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Run *callback* once *delay* seconds of scheduler time have passed."""
        if delay < 0:
            raise ValueError("delay must be non-negative")
        call = ScheduledCall(self._now + delay, next(self._seq), callback)
        heapq.heappush(self._queue, call)
        return call

    def advance(self, seconds: float) -> int:
        """Move time forward by *seconds*, firing due calls in deadline order.

        Calls with equal deadlines fire in the order they were scheduled. A
        callback may schedule further calls; those fire within the same
        advance when they fall due before its end.

        Returns:
            Number of callbacks fired
        """
        if seconds < 0:
            raise ValueError("Cannot move time backwards")

        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0].deadline <= target:
            call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now = call.deadline
            call.callback()
            fired += 1
        self._now = target
        return fired

    def run_realtime(
        self,
        on_tick: Callable[[], None],
        tick_interval: float = 1.0,
        should_stop: Callable[[], bool] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Drive the scheduler against the wall clock.

        Each iteration sleeps one *tick_interval*, delivers one tick through
        *on_tick*, then advances scheduler time by the same interval. The loop
        ends when *should_stop* returns true or the user interrupts it.
        """
        logger = get_logger()
        logger.debug("Realtime loop started (interval=%ss)", tick_interval)
        try:
            while not (should_stop and should_stop()):
                sleep(tick_interval)
                on_tick()
                self.advance(tick_interval)
        except KeyboardInterrupt:
            logger.info("Realtime loop interrupted")
        logger.debug("Realtime loop stopped")
