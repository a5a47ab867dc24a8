"""
Meme Resource Sync - Keep local fonts and images in sync with the remote repository.

Files are checked against the SHA-256 hashes in the versioned remote manifest
and only missing or changed files are downloaded.

Import from submodules directly:
    from resource_sync.config import Settings
    from resource_sync.manifest import fetch_manifest, ResourceManifest
    from resource_sync.sync import ResourceSync, check_resources_sync
"""


def _get_version():
    """Read version from VERSION file."""
    from pathlib import Path
    # Packaged copy first, then repo root
    for base in [Path(__file__).parent, Path(__file__).parent.parent]:
        version_file = base / "VERSION"
        if version_file.exists():
            return version_file.read_text().strip()
    return "0.0.0"


__version__ = _get_version()
