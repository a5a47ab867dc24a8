"""
Tests for download planner logic.

Integration tests for plan_downloads() - what gets downloaded or skipped.
"""

import hashlib
import os

from resource_sync.manifest import FileEntry, ResourceCategory
from resource_sync.sync.download_planner import plan_downloads

BASE_URL = "https://example.com/"


def _entry(path: str, data: bytes) -> FileEntry:
    return FileEntry(file=path, hash=hashlib.sha256(data).hexdigest())


class TestPlanDownloads:
    """Tests for staleness detection."""

    def test_missing_file_downloaded(self, temp_dir):
        entries = [_entry("a.ttf", b"font")]
        tasks, skipped = plan_downloads(ResourceCategory.FONTS, entries, temp_dir, BASE_URL, "1.0.0")
        assert len(tasks) == 1
        assert skipped == 0

        task = tasks[0]
        assert task.category == ResourceCategory.FONTS
        assert task.rel_path == "a.ttf"
        assert task.expected_hash == entries[0].hash
        assert task.local_path == temp_dir / "a.ttf"
        assert task.remote_url == "https://example.com/v1.0.0/resources/fonts/a.ttf"

    def test_current_file_skipped(self, temp_dir):
        (temp_dir / "b.png").write_bytes(b"image")
        tasks, skipped = plan_downloads(
            ResourceCategory.IMAGES, [_entry("b.png", b"image")], temp_dir, BASE_URL, "1.0.0"
        )
        assert tasks == []
        assert skipped == 1

    def test_hash_mismatch_downloaded(self, temp_dir):
        """Same size, different content: still stale."""
        (temp_dir / "c.png").write_bytes(b"old!")
        tasks, skipped = plan_downloads(
            ResourceCategory.IMAGES, [_entry("c.png", b"new!")], temp_dir, BASE_URL, "1.0.0"
        )
        assert len(tasks) == 1
        assert skipped == 0

    def test_nested_paths(self, temp_dir):
        tasks, _ = plan_downloads(
            ResourceCategory.IMAGES, [_entry("petpet/0.png", b"frame")], temp_dir, BASE_URL, "1.0.0"
        )
        assert tasks[0].local_path == temp_dir / "petpet" / "0.png"
        assert tasks[0].remote_url.endswith("/resources/images/petpet/0.png")

    def test_directory_in_place_of_file_is_stale(self, temp_dir):
        (temp_dir / "a.png").mkdir()
        tasks, _ = plan_downloads(
            ResourceCategory.IMAGES, [_entry("a.png", b"x")], temp_dir, BASE_URL, "1.0.0"
        )
        assert len(tasks) == 1

    def test_mixed_counts(self, temp_dir):
        """N entries with M stale produce exactly M tasks."""
        entries = []
        for i in range(10):
            data = f"file {i}".encode()
            entries.append(_entry(f"{i}.png", data))
            if i % 3 == 0:
                (temp_dir / f"{i}.png").write_bytes(data)

        tasks, skipped = plan_downloads(ResourceCategory.IMAGES, entries, temp_dir, BASE_URL, "1.0.0")
        assert skipped == 4
        assert len(tasks) == 6
        assert {t.rel_path for t in tasks} == {"1.png", "2.png", "4.png", "5.png", "7.png", "8.png"}

    def test_current_files_not_modified(self, temp_dir):
        path = temp_dir / "b.png"
        path.write_bytes(b"image")
        os.utime(path, (1_000_000, 1_000_000))

        plan_downloads(ResourceCategory.IMAGES, [_entry("b.png", b"image")], temp_dir, BASE_URL, "1.0.0")

        assert path.stat().st_mtime == 1_000_000
        assert path.read_bytes() == b"image"

    def test_empty_manifest(self, temp_dir):
        tasks, skipped = plan_downloads(ResourceCategory.FONTS, [], temp_dir, BASE_URL, "1.0.0")
        assert tasks == []
        assert skipped == 0
