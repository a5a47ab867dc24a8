"""
Manifest management for Meme Resource Sync.

The manifest is a JSON file listing every expected resource file with its
SHA-256 hash, fetched fresh on every sync.
"""

from .manifest import ResourceManifest, ResourceCategory, FileEntry, is_safe_relative_path
from .fetch import fetch_manifest, resource_url

__all__ = [
    "ResourceManifest",
    "ResourceCategory",
    "FileEntry",
    "is_safe_relative_path",
    "fetch_manifest",
    "resource_url",
]
