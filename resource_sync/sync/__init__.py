"""
Sync operations module.

Handles staleness checks, concurrent downloading, and progress tracking.
"""

from .progress import ProgressTracker, ResourceProgress, ProgressUpdate
from .download_planner import DownloadTask, plan_downloads
from .downloader import FileDownloader, DownloadResult, TaskState
from .resources import (
    ResourceSync,
    SyncSession,
    check_resources_sync,
    check_resources_in_background,
)

__all__ = [
    # Progress
    "ProgressTracker",
    "ResourceProgress",
    "ProgressUpdate",
    # Download planning
    "DownloadTask",
    "plan_downloads",
    # Downloader
    "FileDownloader",
    "DownloadResult",
    "TaskState",
    # Orchestration
    "ResourceSync",
    "SyncSession",
    "check_resources_sync",
    "check_resources_in_background",
]
