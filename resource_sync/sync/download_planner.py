"""
Download planning for Meme Resource Sync.

Determines what files need to be downloaded by hashing local files and
comparing against the manifest.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from ..core.files import file_matches_hash
from ..manifest import FileEntry, ResourceCategory, resource_url


@dataclass
class DownloadTask:
    """A file to be downloaded."""
    category: ResourceCategory
    rel_path: str  # Path relative to the category root (manifest "file")
    expected_hash: str
    remote_url: str
    local_path: Path


def plan_downloads(
    category: ResourceCategory,
    entries: List[FileEntry],
    local_root: Path,
    base_url: str,
    version: str,
) -> Tuple[List[DownloadTask], int]:
    """
    Plan which files need to be downloaded.

    A file is skipped only if it exists, is readable, and its SHA-256 matches
    the manifest. Missing, unreadable, or mismatched files are downloaded.

    Args:
        category: Resource category being planned
        entries: Manifest entries for the category
        local_root: Local root directory for the category
        base_url: Remote resource prefix
        version: Resource version

    Returns:
        Tuple of (tasks_to_download, skipped_count)
    """
    to_download = []
    skipped = 0

    for entry in entries:
        local_path = local_root / entry.file

        if file_matches_hash(local_path, entry.hash):
            skipped += 1
            continue

        to_download.append(DownloadTask(
            category=category,
            rel_path=entry.file,
            expected_hash=entry.hash,
            remote_url=resource_url(base_url, version, f"{category.value}/{entry.file}"),
            local_path=local_path,
        ))

    return to_download, skipped
