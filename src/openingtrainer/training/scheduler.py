"""Virtual-clock scheduler for headless drivers and tests."""

from __future__ import annotations

import itertools
from collections.abc import Callable

from openingtrainer.training.interfaces import IScheduler, ScheduledTask


class ManualTask(ScheduledTask):
    __slots__ = ("due_ms", "seq", "_callback", "_active")

    def __init__(self, due_ms: int, seq: int, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.seq = seq
        self._callback = callback
        self._active = True

    @property
    def is_active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False

    def fire(self) -> None:
        if not self._active:
            return
        self._active = False
        self._callback()


class ManualScheduler(IScheduler):
    """Runs callbacks only when the owner advances the clock.

    Tasks due at the same instant run in scheduling order. Tasks scheduled by
    a running callback are picked up in the same :meth:`advance` call if they
    fall due before its end.
    """

    __slots__ = ("_now_ms", "_tasks", "_counter")

    def __init__(self) -> None:
        self._now_ms = 0
        self._tasks: list[ManualTask] = []
        self._counter = itertools.count()

    @property
    def now_ms(self) -> int:
        return self._now_ms

    @property
    def pending_count(self) -> int:
        return sum(1 for task in self._tasks if task.is_active)

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ManualTask:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        task = ManualTask(self._now_ms + delay_ms, next(self._counter), callback)
        self._tasks.append(task)
        return task

    def advance(self, ms: int) -> int:
        """Move the clock forward by *ms*; return how many callbacks ran."""
        if ms < 0:
            raise ValueError("Cannot move the clock backwards")
        target = self._now_ms + ms
        ran = 0
        while True:
            task = self._next_due(target)
            if task is None:
                break
            self._now_ms = max(self._now_ms, task.due_ms)
            self._tasks.remove(task)
            task.fire()
            ran += 1
        self._now_ms = target
        self._tasks = [task for task in self._tasks if task.is_active]
        return ran

    def run_all(self, max_steps: int = 1000) -> int:
        """Advance until nothing is pending; return how many callbacks ran."""
        ran = 0
        for _ in range(max_steps):
            task = self._next_due(None)
            if task is None:
                return ran
            ran += self.advance(task.due_ms - self._now_ms)
        raise RuntimeError("Scheduler did not settle; callbacks keep rescheduling")

    def _next_due(self, limit_ms: int | None) -> ManualTask | None:
        due = [
            task
            for task in self._tasks
            if task.is_active and (limit_ms is None or task.due_ms <= limit_ms)
        ]
        if not due:
            return None
        return min(due, key=lambda task: (task.due_ms, task.seq))
