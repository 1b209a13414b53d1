# viewextract/scheduler.py
"""
The UI-thread task queue.

Searches must run *after* the current layout pass has finished, so that
native geometry is final. Work is therefore submitted as a closure to a main
queue and runs on a later turn of the event loop, in submission order.

- ``QtMainQueue`` posts to the Qt event loop with ``QTimer.singleShot(0, ...)``.
- ``ManualQueue`` holds tasks until ``drain()`` is called. It is used when no
  Qt event loop is running (scripts, the CLI, tests).
"""
import logging
from collections import deque
from typing import Callable, Deque, Optional

from PySide6.QtCore import QTimer

from .config import Config

logger = logging.getLogger(__name__)

Task = Callable[[], None]


class MainQueue:
    """Interface for a single-threaded FIFO task queue."""

    def submit(self, task: Task) -> None:
        raise NotImplementedError(f"{self.__class__.__name__} must implement submit()")


class QtMainQueue(MainQueue):
    """Runs tasks on the Qt event loop after pending events are processed."""

    def submit(self, task: Task) -> None:
        QTimer.singleShot(0, task)


class ManualQueue(MainQueue):
    """
    A queue that only runs when drained.

    Tasks submitted while draining are run in the same drain, after the tasks
    already queued. If a task raises, the exception propagates and the tasks
    behind it stay queued.
    """

    def __init__(self):
        self._tasks: Deque[Task] = deque()

    def submit(self, task: Task) -> None:
        self._tasks.append(task)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def __len__(self):
        return len(self._tasks)

    def run_next(self) -> bool:
        """Runs one task. Returns False if the queue was empty."""
        if not self._tasks:
            return False
        task = self._tasks.popleft()
        task()
        return True

    def drain(self) -> int:
        """Runs tasks until the queue is empty and returns how many ran."""
        count = 0
        while self.run_next():
            count += 1
        if count:
            logger.debug("Drained %d main-queue task(s)", count)
        return count


_main_queue: Optional[MainQueue] = None


def create_queue(backend: str) -> MainQueue:
    if backend == "qt":
        return QtMainQueue()
    if backend == "manual":
        return ManualQueue()
    raise ValueError(f"Unknown scheduler backend {backend!r}; expected 'qt' or 'manual'")


def get_main_queue() -> MainQueue:
    """Returns the process-wide main queue, creating it from config on first use."""
    global _main_queue
    if _main_queue is None:
        backend = Config().get_nested("scheduler.backend", "qt")
        _main_queue = create_queue(backend)
        logger.debug("Main queue backend: %s", backend)
    return _main_queue


def set_main_queue(queue: Optional[MainQueue]) -> None:
    """Replaces the process-wide main queue. ``None`` resets it to the configured default."""
    global _main_queue
    _main_queue = queue
