"""QTimer-backed scheduler for sessions living on the Qt main thread."""

from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer

from openingtrainer.training.interfaces import IScheduler, ScheduledTask


class QtTask(ScheduledTask):
    """One single-shot ``QTimer`` wrapped as a cancellable handle."""

    __slots__ = ("_timer", "_callback", "_on_finished", "_active")

    def __init__(
        self,
        timer: QTimer,
        callback: Callable[[], None],
        on_finished: Callable[[QtTask], None],
    ) -> None:
        self._timer = timer
        self._callback = callback
        self._on_finished = on_finished
        self._active = True
        self._timer.timeout.connect(self._fire)

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self, delay_ms: int) -> None:
        self._timer.start(delay_ms)

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._timer.stop()
        self._finish()

    def _fire(self) -> None:
        if not self._active:
            return
        self._active = False
        self._finish()
        self._callback()

    def _finish(self) -> None:
        self._timer.deleteLater()
        self._on_finished(self)


class QtScheduler(IScheduler):
    """Schedules callbacks on the Qt event loop of the calling thread."""

    __slots__ = ("_parent", "_live")

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent
        # Keeps handles (and their timers) alive until they fire or cancel.
        self._live: set[QtTask] = set()

    @property
    def pending_count(self) -> int:
        return len(self._live)

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> QtTask:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        task = QtTask(timer, callback, self._live.discard)
        self._live.add(task)
        task.start(delay_ms)
        return task

    def cancel_all(self) -> None:
        for task in list(self._live):
            task.cancel()
