"""
Resource sync orchestration for Meme Resource Sync.

Fetches the manifest, plans stale files per category, and downloads them
under one permit pool shared by every category in the call.
"""

import asyncio
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .. import __version__
from ..config import Settings
from ..core.constants import MAX_CONCURRENT_DOWNLOADS
from ..core.paths import get_fonts_dir, get_images_dir
from ..errors import ManifestError
from ..manifest import ResourceCategory, ResourceManifest, fetch_manifest
from .download_planner import plan_downloads
from .downloader import FileDownloader
from .progress import ResourceProgress

logger = logging.getLogger(__name__)


@dataclass
class SyncSession:
    """State for one sync call. Discarded when the call returns."""
    base_url: str
    version: str
    max_workers: int
    progress: ResourceProgress = field(default_factory=ResourceProgress)
    manifest_loaded: bool = False
    planned: Dict[ResourceCategory, int] = field(default_factory=dict)
    skipped: Dict[ResourceCategory, int] = field(default_factory=dict)

    @property
    def total_planned(self) -> int:
        return sum(self.planned.values())

    @property
    def total_failed(self) -> int:
        return self.progress.total_failed


class ResourceSync:
    """Keeps local font and image directories in sync with the remote manifest."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fonts_dir: Optional[Path] = None,
        images_dir: Optional[Path] = None,
        max_workers: int = MAX_CONCURRENT_DOWNLOADS,
        version: str = __version__,
        progress: Optional[ResourceProgress] = None,
    ):
        self.settings = settings or Settings.load()
        self.roots = {
            ResourceCategory.FONTS: fonts_dir or get_fonts_dir(),
            ResourceCategory.IMAGES: images_dir or get_images_dir(),
        }
        self.max_workers = max_workers
        self.version = version
        self.progress = progress
        self.downloader = FileDownloader(max_workers=max_workers)

    def categories(self) -> List[ResourceCategory]:
        """Categories to sync, in order."""
        if self.settings.resource.download_fonts:
            return [ResourceCategory.FONTS, ResourceCategory.IMAGES]
        return [ResourceCategory.IMAGES]

    def new_session(self, base_url: Optional[str] = None) -> SyncSession:
        return SyncSession(
            base_url=base_url or self.settings.resource.resource_url,
            version=self.version,
            max_workers=self.max_workers,
            progress=self.progress or ResourceProgress(),
        )

    def check(self, base_url: Optional[str] = None) -> SyncSession:
        """Run a full sync, blocking until every download has finished."""
        return asyncio.run(self.check_async(base_url))

    async def check_async(self, base_url: Optional[str] = None) -> SyncSession:
        """
        Run a full sync inside an existing event loop.

        A manifest failure is logged and ends the sync before anything is
        planned or written.
        """
        session = self.new_session(base_url)
        loop = asyncio.get_running_loop()

        try:
            manifest = await loop.run_in_executor(
                None, fetch_manifest, session.base_url, session.version
            )
        except ManifestError as e:
            logger.warning("%s", e)
            return session

        session.manifest_loaded = True
        await self._download_categories(session, manifest)
        return session

    async def _download_categories(self, session: SyncSession, manifest: ResourceManifest):
        loop = asyncio.get_running_loop()
        semaphore = asyncio.Semaphore(session.max_workers)

        async with self.downloader.create_session() as http:
            for category in self.categories():
                tasks, skipped = await loop.run_in_executor(
                    None,
                    plan_downloads,
                    category,
                    manifest.entries(category),
                    self.roots[category],
                    session.base_url,
                    session.version,
                )
                session.planned[category] = len(tasks)
                session.skipped[category] = skipped
                if not tasks:
                    continue

                logger.info("Downloading %s", category.value)
                session.progress.set_total(category, len(tasks))
                await self.downloader.download_many(http, tasks, semaphore, session.progress)


def check_resources_sync(
    base_url: Optional[str] = None,
    settings: Optional[Settings] = None,
    **kwargs,
) -> SyncSession:
    """
    Check and sync resources, blocking until done.

    Args:
        base_url: Override for the configured resource URL
        settings: Settings to use (loaded from config.json if omitted)
        **kwargs: Passed to ResourceSync (fonts_dir, images_dir, max_workers, ...)
    """
    return ResourceSync(settings, **kwargs).check(base_url)


def check_resources_in_background(
    base_url: Optional[str] = None,
    settings: Optional[Settings] = None,
    **kwargs,
) -> "Future[SyncSession]":
    """
    Check and sync resources on a worker thread.

    The returned future can be waited on or ignored; there is no way to
    cancel a sync once it has started.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="resource-sync")
    future = executor.submit(check_resources_sync, base_url, settings, **kwargs)
    executor.shutdown(wait=False)
    return future
