"""
Download progress display for Meme Resource Sync.

Renders one progress bar line per category from ResourceProgress updates.
"""

import shutil
import sys
import threading
import time
from typing import Optional, TextIO

from ..sync.progress import ProgressUpdate

BAR_WIDTH = 40


def render_bar(completed: int, total: int, width: int = BAR_WIDTH) -> str:
    """Render a [####>----] bar."""
    if total <= 0:
        return "#" * width
    filled = min(width, completed * width // total)
    if filled >= width:
        return "#" * width
    return "#" * filled + ">" + "-" * (width - filled - 1)


def format_elapsed(seconds: float) -> str:
    seconds = int(seconds)
    return f"{seconds // 3600:02d}:{seconds % 3600 // 60:02d}:{seconds % 60:02d}"


class ProgressBarDisplay:
    """
    Subscriber that redraws a category's bar in place on each update.

    Usage:
        progress.subscribe(ProgressBarDisplay())
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self.lock = threading.Lock()
        self._start_times = {}
        self._finished = set()

    def __call__(self, update: ProgressUpdate):
        with self.lock:
            if update.category in self._finished or update.total <= 0:
                return
            start = self._start_times.setdefault(update.category, time.time())

            line = self.format_line(update, time.time() - start)
            term_width = shutil.get_terminal_size().columns
            if len(line) > term_width:
                line = line[:term_width - 1]

            if update.finished:
                self._finished.add(update.category)
                self.stream.write(f"\r{line}\n")
            else:
                self.stream.write(f"\r{line}")
            self.stream.flush()

    @staticmethod
    def format_line(update: ProgressUpdate, elapsed: float) -> str:
        bar = render_bar(update.completed, update.total)
        line = f"  {update.category.value:<6} [{format_elapsed(elapsed)}] [{bar}] {update.completed}/{update.total}"
        if update.failed:
            line += f" ({update.failed} failed)"
        return line
