"""
Console output for Meme Resource Sync.
"""

from .progress_display import ProgressBarDisplay, render_bar

__all__ = ["ProgressBarDisplay", "render_bar"]
