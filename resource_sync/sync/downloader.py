"""
File downloader for Meme Resource Sync.

Handles concurrent resource downloads with a shared permit pool.
Uses asyncio + aiohttp for efficient concurrent downloads.
"""

import asyncio
import logging
import os
import ssl
import sys
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

import aiohttp
import certifi

from ..core.constants import (
    DOWNLOAD_CHUNK_SIZE,
    DOWNLOAD_PREFIX,
    DOWNLOAD_SUFFIX,
    MAX_CONCURRENT_DOWNLOADS,
)
from ..errors import (
    DirectoryCreateFailure,
    FileWriteFailure,
    ResourceSyncError,
    TaskDownloadFailure,
)
from .download_planner import DownloadTask
from .progress import ResourceProgress

logger = logging.getLogger(__name__)


def get_certifi_path() -> str:
    """Get path to certifi CA bundle, handling PyInstaller bundles."""
    if getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS'):
        bundled_cert = os.path.join(sys._MEIPASS, 'certifi', 'cacert.pem')
        if os.path.exists(bundled_cert):
            return bundled_cert
    return certifi.where()


class TaskState(str, Enum):
    """Lifecycle of a download task. Terminal states never go back."""
    PENDING = "pending"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    DONE = "done"


@dataclass
class DownloadResult:
    """Result of a single file download."""
    success: bool
    file_path: Path
    message: str
    bytes_downloaded: int = 0
    state: TaskState = TaskState.DONE
    error: Optional[ResourceSyncError] = None


def open_temp_download(local_path: Path):
    """
    Create a unique in-progress file next to local_path.

    Returns (file object, path). The file is created exclusively, so it never
    shares a path with another in-progress download or an existing file.
    """
    fd, name = tempfile.mkstemp(
        dir=local_path.parent, prefix=DOWNLOAD_PREFIX, suffix=DOWNLOAD_SUFFIX
    )
    tmp_path = Path(name)
    try:
        # mkstemp creates 0600 files; resources are meant to be readable
        os.chmod(tmp_path, 0o644)
        return os.fdopen(fd, "wb"), tmp_path
    except BaseException:
        os.close(fd)
        tmp_path.unlink()
        raise


class FileDownloader:
    """
    Async file downloader.

    Every task takes one permit from a semaphore before touching the network
    and gives it back once it has succeeded or failed. A failed task is
    logged and never retried, and never affects its siblings.
    """

    def __init__(
        self,
        max_workers: int = MAX_CONCURRENT_DOWNLOADS,
        chunk_size: int = DOWNLOAD_CHUNK_SIZE,
    ):
        self.max_workers = max_workers
        self.chunk_size = chunk_size

    def create_session(self) -> aiohttp.ClientSession:
        """Create an HTTP session sized for max_workers connections."""
        ssl_context = ssl.create_default_context(cafile=get_certifi_path())
        connector = aiohttp.TCPConnector(
            limit=self.max_workers,
            ttl_dns_cache=300,
            keepalive_timeout=30,
            ssl=ssl_context,
        )
        return aiohttp.ClientSession(connector=connector)

    async def _download_file_async(
        self,
        session: aiohttp.ClientSession,
        task: DownloadTask,
        semaphore: asyncio.Semaphore,
        progress: Optional[ResourceProgress] = None,
    ) -> DownloadResult:
        """Download a single file, holding a permit only while in flight."""
        async with semaphore:
            if progress:
                progress.task_started(task.category)
            try:
                try:
                    downloaded_bytes = await self._fetch(session, task)
                    result = DownloadResult(
                        success=True,
                        file_path=task.local_path,
                        message=f"OK: {task.rel_path}",
                        bytes_downloaded=downloaded_bytes,
                        state=TaskState.SUCCEEDED,
                    )
                except ResourceSyncError as e:
                    result = self._failed(task, e)
                except Exception as e:
                    result = self._failed(task, TaskDownloadFailure(task.remote_url, repr(e)))
            finally:
                if progress:
                    progress.task_finished(task.category)

        if not result.success:
            logger.warning("%s", result.message)
        if progress:
            progress.task_completed(task.category, result.success)
        result.state = TaskState.DONE
        return result

    @staticmethod
    def _failed(task: DownloadTask, error: ResourceSyncError) -> DownloadResult:
        return DownloadResult(
            success=False,
            file_path=task.local_path,
            message=str(error),
            state=TaskState.FAILED,
            error=error,
        )

    async def _fetch(self, session: aiohttp.ClientSession, task: DownloadTask) -> int:
        """GET task.remote_url and write it to task.local_path."""
        parent = task.local_path.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateFailure(parent, e) from e

        try:
            async with session.get(task.remote_url) as response:
                if not 200 <= response.status < 300:
                    raise TaskDownloadFailure(
                        task.remote_url, f"HTTP error {response.status}", status=response.status
                    )
                return await self._write_response(response, task)
        except asyncio.TimeoutError as e:
            raise TaskDownloadFailure(task.remote_url, "timed out") from e
        except aiohttp.ClientError as e:
            raise TaskDownloadFailure(task.remote_url, str(e) or type(e).__name__) from e

    async def _write_response(self, response: aiohttp.ClientResponse, task: DownloadTask) -> int:
        """
        Stream response content to disk.

        Bytes go to a uniquely named sibling file that replaces the destination
        only once the whole body has arrived. On any failure the partial file is
        removed and the destination is left as it was.
        """
        downloaded_bytes = 0

        try:
            f, tmp_path = open_temp_download(task.local_path)
        except OSError as e:
            raise FileWriteFailure(task.local_path, e) from e

        try:
            with f:
                async for chunk in response.content.iter_chunked(self.chunk_size):
                    try:
                        f.write(chunk)
                    except OSError as e:
                        raise FileWriteFailure(tmp_path, e) from e
                    downloaded_bytes += len(chunk)
            try:
                os.replace(tmp_path, task.local_path)
            except OSError as e:
                raise FileWriteFailure(task.local_path, e) from e
        except BaseException:
            self._remove_partial(tmp_path)
            raise

        return downloaded_bytes

    @staticmethod
    def _remove_partial(path: Path):
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Failed to remove partial download %s: %s", path, e)

    async def download_many(
        self,
        session: aiohttp.ClientSession,
        tasks: List[DownloadTask],
        semaphore: asyncio.Semaphore,
        progress: Optional[ResourceProgress] = None,
    ) -> None:
        """
        Download tasks concurrently, bounded by semaphore.

        Returns once every task has succeeded or failed. Outcomes are reported
        through progress and the log, not returned.
        """
        if not tasks:
            return

        pending = [
            asyncio.create_task(
                self._download_file_async(session, task, semaphore, progress),
                name=str(task.local_path),
            )
            for task in tasks
        ]

        results = await asyncio.gather(*pending, return_exceptions=True)
        for task, result in zip(tasks, results):
            if isinstance(result, BaseException):
                logger.warning("Task failed: %s: %s", task.rel_path, result)
