#!/usr/bin/env python3
"""
Meme Resource Sync - Manifest Generator (Admin Only)

Generates the resources.json file published next to the fonts and images:

    python manifest_gen.py resources/                 # writes resources/resources.json
    python manifest_gen.py resources/ -o out.json
"""

import argparse
import json
import sys
from pathlib import Path

from resource_sync.core.constants import DOWNLOAD_PREFIX, DOWNLOAD_SUFFIX, MANIFEST_NAME
from resource_sync.core.files import compute_sha256
from resource_sync.manifest import FileEntry, ResourceCategory, ResourceManifest


def is_partial_download(path: Path) -> bool:
    return path.name.startswith(DOWNLOAD_PREFIX) and path.name.endswith(DOWNLOAD_SUFFIX)


def scan_category(root: Path) -> list[FileEntry]:
    """Hash every file under root, sorted by relative path."""
    if not root.is_dir():
        return []

    entries = []
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        # Skip leftovers from interrupted syncs and hidden files
        if path.name.startswith(".") or is_partial_download(path):
            continue
        rel_path = path.relative_to(root).as_posix()
        entries.append(FileEntry(file=rel_path, hash=compute_sha256(path)))
    return entries


def generate_manifest(resources_dir: Path) -> ResourceManifest:
    """Build a manifest from resources_dir/fonts and resources_dir/images."""
    return ResourceManifest(
        fonts=scan_category(resources_dir / ResourceCategory.FONTS.value),
        images=scan_category(resources_dir / ResourceCategory.IMAGES.value),
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate resources.json for Meme Resource Sync",
    )
    parser.add_argument("resources_dir", help="Directory containing fonts/ and images/")
    parser.add_argument("--output", "-o",
                        help=f"Output path (default: RESOURCES_DIR/{MANIFEST_NAME})")
    args = parser.parse_args(argv)

    resources_dir = Path(args.resources_dir)
    if not resources_dir.is_dir():
        print(f"ERROR: {resources_dir} is not a directory")
        return 1

    output = Path(args.output) if args.output else resources_dir / MANIFEST_NAME

    manifest = generate_manifest(resources_dir)
    with open(output, "w") as f:
        json.dump(manifest.to_dict(), f, indent=2)
        f.write("\n")

    print(f"  {len(manifest.fonts)} fonts, {len(manifest.images)} images")
    print(f"  SAVED to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
