"""
Progress tracking for resource downloads.

Counts are kept per category and pushed to subscribers (e.g. a progress bar).
Subscribers only observe; nothing here affects scheduling.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List

from ..manifest import ResourceCategory

logger = logging.getLogger(__name__)


class ProgressTracker:
    """Base class for thread-safe progress tracking."""

    def __init__(self):
        self.lock = threading.Lock()


@dataclass(frozen=True)
class ProgressUpdate:
    """Snapshot of one category's counts."""
    category: ResourceCategory
    completed: int
    total: int
    failed: int = 0

    @property
    def finished(self) -> bool:
        return self.completed >= self.total


@dataclass
class CategoryProgress:
    total: int = 0
    completed: int = 0
    failed: int = 0
    in_flight: int = 0
    peak_in_flight: int = 0


class ResourceProgress(ProgressTracker):
    """
    Per-category download counts.

    total is set once before dispatch; completed goes up once per task when it
    finishes, whether it succeeded or failed. In-flight counts track how many
    tasks currently hold a download permit.
    """

    def __init__(self):
        super().__init__()
        self.categories: Dict[ResourceCategory, CategoryProgress] = {}
        self._subscribers: List[Callable[[ProgressUpdate], None]] = []
        self._in_flight = 0
        self.peak_in_flight = 0

    def subscribe(self, callback: Callable[[ProgressUpdate], None]):
        """Register a consumer of progress updates."""
        with self.lock:
            self._subscribers.append(callback)

    def _get(self, category: ResourceCategory) -> CategoryProgress:
        if category not in self.categories:
            self.categories[category] = CategoryProgress()
        return self.categories[category]

    def set_total(self, category: ResourceCategory, total: int):
        with self.lock:
            prog = self._get(category)
            prog.total = total
            update = ProgressUpdate(category, prog.completed, prog.total, prog.failed)
        self._publish(update)

    def task_started(self, category: ResourceCategory):
        """Record that a task acquired its download permit."""
        with self.lock:
            prog = self._get(category)
            prog.in_flight += 1
            prog.peak_in_flight = max(prog.peak_in_flight, prog.in_flight)
            self._in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self._in_flight)

    def task_finished(self, category: ResourceCategory):
        """Record that a task released its download permit."""
        with self.lock:
            self._get(category).in_flight -= 1
            self._in_flight -= 1

    def task_completed(self, category: ResourceCategory, success: bool = True):
        """Mark a task as done and notify subscribers."""
        with self.lock:
            prog = self._get(category)
            prog.completed += 1
            if not success:
                prog.failed += 1
            update = ProgressUpdate(category, prog.completed, prog.total, prog.failed)
        self._publish(update)

    def snapshot(self, category: ResourceCategory) -> ProgressUpdate:
        with self.lock:
            prog = self._get(category)
            return ProgressUpdate(category, prog.completed, prog.total, prog.failed)

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def total_completed(self) -> int:
        with self.lock:
            return sum(p.completed for p in self.categories.values())

    @property
    def total_failed(self) -> int:
        with self.lock:
            return sum(p.failed for p in self.categories.values())

    def _publish(self, update: ProgressUpdate):
        with self.lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(update)
            except Exception as e:
                # A broken subscriber must not interrupt downloads
                logger.warning("Progress subscriber %r failed: %s", callback, e)
