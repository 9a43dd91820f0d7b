"""
Cancellable deferred callbacks for the session controller.

Everything runs on the caller's thread: a scheduler only decides *when* a
callback fires, never *where*.
"""
from __future__ import annotations

import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class ScheduledTask:
    """Handle to a pending callback."""

    def __init__(self, callback: Callback, canceller: Optional[Callable[[], None]] = None) -> None:
        self._callback = callback
        self._canceller = canceller
        self.cancelled = False
        self.done = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def cancel(self) -> None:
        if not self.pending:
            return
        self.cancelled = True
        if self._canceller is not None:
            self._canceller()

    def run(self) -> None:
        if not self.pending:
            return
        self.done = True
        self._callback()


class Scheduler(ABC):
    """Abstract interface for deferred execution."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callback) -> ScheduledTask:  # pragma: no cover
        raise NotImplementedError


class ManualScheduler(Scheduler):
    """Virtual-clock scheduler driven by `advance`; for headless use and tests."""

    def __init__(self) -> None:
        self.now_ms: int = 0
        self._queue: List[Tuple[int, int, ScheduledTask]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: int, callback: Callback) -> ScheduledTask:
        task = ScheduledTask(callback)
        heapq.heappush(self._queue, (self.now_ms + max(0, int(delay_ms)), next(self._seq), task))
        return task

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, task in self._queue if task.pending)

    def advance(self, ms: int) -> int:
        """Move the clock forward, firing due tasks in order. Returns how many ran."""
        target = self.now_ms + max(0, int(ms))
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            self.now_ms = due
            if task.pending:
                task.run()
                ran += 1
        self.now_ms = target
        return ran

    def run_all(self, limit: int = 1000) -> int:
        """Fire every pending task, including ones scheduled while running."""
        ran = 0
        while self._queue and ran < limit:
            due, _, task = heapq.heappop(self._queue)
            self.now_ms = max(self.now_ms, due)
            if task.pending:
                task.run()
                ran += 1
        return ran


class TkScheduler(Scheduler):
    """Runs callbacks on a Tk event loop via `after` / `after_cancel`."""

    def __init__(self, widget: Any) -> None:
        self.widget = widget

    def call_later(self, delay_ms: int, callback: Callback) -> ScheduledTask:
        ids: Dict[str, Any] = {}
        task = ScheduledTask(callback, canceller=lambda: self.widget.after_cancel(ids["after"]))
        ids["after"] = self.widget.after(max(0, int(delay_ms)), task.run)
        return task


class TaskGroup:
    """Named tasks owned by one session.

    Scheduling a name that is already pending replaces the old task.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self._tasks: Dict[str, ScheduledTask] = {}

    def schedule(self, name: str, delay_ms: int, callback: Callback) -> ScheduledTask:
        self.cancel(name)

        def fire() -> None:
            self._tasks.pop(name, None)
            callback()

        task = self.scheduler.call_later(delay_ms, fire)
        self._tasks[name] = task
        logger.debug("Scheduled %s in %d ms", name, delay_ms)
        return task

    def cancel(self, name: str) -> None:
        task = self._tasks.pop(name, None)
        if task is not None and task.pending:
            task.cancel()
            logger.debug("Cancelled %s", name)

    def cancel_all(self) -> None:
        for name in list(self._tasks):
            self.cancel(name)

    def is_pending(self, name: str) -> bool:
        task = self._tasks.get(name)
        return task is not None and task.pending
