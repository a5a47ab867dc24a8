#!/usr/bin/env python3
"""
Meme Resource Sync - Download the fonts and images used by meme templates.

Compares local files against the SHA-256 hashes in the remote manifest and
downloads only what is missing or changed.
"""

import argparse
import logging
import sys
from pathlib import Path

from resource_sync import __version__
from resource_sync.config import Settings
from resource_sync.core.constants import MAX_CONCURRENT_DOWNLOADS
from resource_sync.core.paths import get_config_path, get_fonts_dir, get_images_dir
from resource_sync.sync import ResourceProgress, ResourceSync, SyncSession
from resource_sync.ui import ProgressBarDisplay


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


def print_summary(session: SyncSession):
    """Print per-category results of a sync."""
    if not session.manifest_loaded:
        print("Could not load the resource manifest. Please try again later.")
        return

    for category, planned in session.planned.items():
        skipped = session.skipped.get(category, 0)
        if planned == 0:
            print(f"  {category.value}: {skipped} files • ✓ synced")
            continue
        failed = session.progress.snapshot(category).failed
        status = f"{planned - failed} downloaded"
        if failed:
            status += f", {failed} failed"
        print(f"  {category.value}: {status}, {skipped} up to date")


def build_sync(args) -> ResourceSync:
    home = Path(args.home).expanduser() if args.home else None
    settings = Settings.load(get_config_path(home))
    if args.no_fonts:
        settings.resource.download_fonts = False

    progress = ResourceProgress()
    if not args.quiet:
        progress.subscribe(ProgressBarDisplay())

    return ResourceSync(
        settings,
        fonts_dir=get_fonts_dir(home),
        images_dir=get_images_dir(home),
        max_workers=args.workers,
        progress=progress,
    )


def main(argv=None) -> int:
    """Entry point."""
    parser = argparse.ArgumentParser(
        description="Meme Resource Sync - Download fonts and images for meme templates"
    )
    parser.add_argument("--base-url", help="Override the configured resource URL")
    parser.add_argument("--home", help="Data directory (default: $MEME_HOME or ~/.meme_generator)")
    parser.add_argument("--no-fonts", action="store_true", help="Skip font downloads")
    parser.add_argument("--workers", type=int, default=MAX_CONCURRENT_DOWNLOADS,
                        help=f"Max concurrent downloads (default: {MAX_CONCURRENT_DOWNLOADS})")
    parser.add_argument("--quiet", "-q", action="store_true", help="Don't show progress bars")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=__version__)
    args = parser.parse_args(argv)

    if args.workers < 1:
        parser.error("--workers must be at least 1")

    setup_logging(args.verbose)
    session = build_sync(args).check(args.base_url)
    print_summary(session)
    return 0 if session.manifest_loaded and session.total_failed == 0 else 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nCancelled by user.")
        sys.exit(0)
