"""
Core utilities: constants, local paths, and file hashing.
"""

from .constants import (
    DEFAULT_RESOURCE_URL,
    MANIFEST_NAME,
    MAX_CONCURRENT_DOWNLOADS,
    HASH_CHUNK_SIZE,
    DOWNLOAD_CHUNK_SIZE,
    DOWNLOAD_PREFIX,
    DOWNLOAD_SUFFIX,
)
from .files import compute_sha256, file_matches_hash
from .paths import get_meme_home, get_config_path, get_resources_dir, get_fonts_dir, get_images_dir

__all__ = [
    "DEFAULT_RESOURCE_URL",
    "MANIFEST_NAME",
    "MAX_CONCURRENT_DOWNLOADS",
    "HASH_CHUNK_SIZE",
    "DOWNLOAD_CHUNK_SIZE",
    "DOWNLOAD_PREFIX",
    "DOWNLOAD_SUFFIX",
    "compute_sha256",
    "file_matches_hash",
    "get_meme_home",
    "get_config_path",
    "get_resources_dir",
    "get_fonts_dir",
    "get_images_dir",
]
