"""Exception hierarchy for manifest retrieval, hashing, and downloads.

None of these escape a sync call: manifest errors abort the sync before any
download and are logged, per-file errors are isolated to their task and
logged, and hash failures simply mark a file as stale.
"""

from pathlib import Path
from typing import Optional

__all__ = [
    "ResourceSyncError",
    "ManifestError",
    "ManifestUnavailable",
    "ManifestMalformed",
    "HashComputeFailure",
    "TaskDownloadFailure",
    "DirectoryCreateFailure",
    "FileWriteFailure",
]


class ResourceSyncError(RuntimeError):
    """Base exception for resource sync failures."""


class ManifestError(ResourceSyncError):
    """Raised when the remote manifest can't be used."""


class ManifestUnavailable(ManifestError):
    """Raised when the manifest can't be fetched (network error or HTTP status)."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"Failed to download {url}: {reason}")
        self.url = url
        self.status = status


class ManifestMalformed(ManifestError):
    """Raised when the manifest isn't valid JSON or doesn't match the schema."""


class HashComputeFailure(ResourceSyncError):
    """Raised when a local file can't be read for hashing."""

    def __init__(self, path: Path, error: OSError) -> None:
        super().__init__(f"Failed to hash {path}: {error}")
        self.path = path


class TaskDownloadFailure(ResourceSyncError):
    """Raised when a single file's transfer fails (status, transport, or stream)."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"Failed to download {url}: {reason}")
        self.url = url
        self.status = status


class DirectoryCreateFailure(ResourceSyncError):
    """Raised when a download's parent directory can't be created."""

    def __init__(self, path: Path, error: OSError) -> None:
        super().__init__(f"Failed to create directory {path}: {error}")
        self.path = path


class FileWriteFailure(ResourceSyncError):
    """Raised when a download can't be written to disk."""

    def __init__(self, path: Path, error: OSError) -> None:
        super().__init__(f"Failed to write file {path}: {error}")
        self.path = path
