"""
Schedulers for deferred game work.

The only deferred work in a game is the mismatch flip-back. A scheduler
hands out cancellable handles for callbacks that run after a delay:

- ManualScheduler: virtual clock, advanced explicitly (tests, terminal play)
- AsyncioScheduler: the running event loop (HTTP API)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Protocol
import asyncio
import heapq
import itertools


class TaskHandle(Protocol):
    """Anything with a cancel() - asyncio.TimerHandle qualifies."""

    def cancel(self) -> None: ...


class Scheduler(ABC):
    """Runs callbacks after a delay."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TaskHandle:
        """Schedule callback to run once, ``delay`` seconds from now."""


@dataclass(order=True)
class ScheduledTask:
    """A callback queued on a ManualScheduler."""
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """
    Scheduler driven by a virtual clock.

    Nothing fires until advance() moves the clock past a task's due time.
    Tasks fire in due order; ties fire in scheduling order.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self._queue: list[ScheduledTask] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        task = ScheduledTask(due=self.now + delay, seq=next(self._seq), callback=callback)
        heapq.heappush(self._queue, task)
        return task

    @property
    def pending(self) -> int:
        """Number of tasks still waiting to fire."""
        return sum(1 for task in self._queue if not task.cancelled)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, firing every task that comes due.

        Returns:
            Number of callbacks run
        """
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0].due <= target:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self.now = task.due
            task.callback()
            fired += 1
        self.now = target
        return fired

    def run_all(self) -> int:
        """Fire every pending task, advancing the clock as far as needed."""
        live = [task for task in self._queue if not task.cancelled]
        if not live:
            return 0
        return self.advance(max(task.due for task in live) - self.now)


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
