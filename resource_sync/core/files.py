"""
File system utilities for Meme Resource Sync.

Content hashing used to decide whether a local resource is current.
"""

import hashlib
from pathlib import Path

from ..errors import HashComputeFailure
from .constants import HASH_CHUNK_SIZE


def compute_sha256(path: Path, chunk_size: int = HASH_CHUNK_SIZE) -> str:
    """
    Hash a file's contents without loading it into memory.

    Args:
        path: File to hash
        chunk_size: Bytes read per iteration

    Returns:
        Lowercase hex SHA-256 digest

    Raises:
        HashComputeFailure: If the file is missing or can't be read
    """
    hasher = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                hasher.update(chunk)
    except OSError as e:
        raise HashComputeFailure(path, e) from e
    return hasher.hexdigest()


def file_matches_hash(path: Path, expected_hash: str) -> bool:
    """Check if file exists, is readable, and hashes to expected_hash."""
    if not path.is_file():
        return False
    try:
        return compute_sha256(path) == expected_hash.lower()
    except HashComputeFailure:
        return False
