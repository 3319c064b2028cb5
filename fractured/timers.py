"""Cancelable one-shot timers.

The machine schedules auto-transitions through an object matching the
protocol:

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...

`delay` is in scene time units (milliseconds). Two implementations:

    AsyncioScheduler  runs callbacks on the running asyncio loop.
    ManualScheduler   is a virtual clock advanced explicitly; callbacks run
                      synchronously inside advance(). Used by tests and
                      by headless replays.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


# ---------------------------------------------------------------------------
# AsyncioScheduler
# ---------------------------------------------------------------------------

class AsyncioScheduler:
    """Schedule on an asyncio loop.

    Args:
        time_scale: Multiplier applied to every delay. 1.0 means a delay of
                    3000 fires after three seconds; 0.5 halves waits.
        loop:       Loop to schedule on. Defaults to the running loop at
                    call time, so call_later must run inside the loop.
    """

    def __init__(
        self,
        time_scale: float = 1.0,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._time_scale = time_scale
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        seconds = max(0.0, delay / 1000 * self._time_scale)
        logger.debug("timer scheduled in %.3fs", seconds)
        return loop.call_later(seconds, callback)


# ---------------------------------------------------------------------------
# ManualScheduler
# ---------------------------------------------------------------------------

class ManualTimer:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-time scheduler; nothing fires until advance() is called."""

    def __init__(self) -> None:
        self.now: float = 0
        self._queue: list[tuple[float, int, ManualTimer]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + max(0, delay), callback)
        heapq.heappush(self._queue, (timer.due, next(self._seq), timer))
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def advance(self, delta: float) -> None:
        """Move the clock forward, firing due timers in order.

        Callbacks may schedule new timers; those fire too if they fall due
        before the end of the advance.
        """
        target = self.now + delta
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now = due
            timer.callback()
        self.now = target
