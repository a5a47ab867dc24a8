"""
Manifest classes for Meme Resource Sync.

The manifest (resources.json) lists every font and image the current
version expects, with the SHA-256 hash of each file:

    {
      "fonts":  [{"file": "NotoSansSC-Regular.otf", "hash": "<sha256>"}],
      "images": [{"file": "petpet/0.png", "hash": "<sha256>"}]
    }
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath

from ..errors import ManifestMalformed

_DRIVE = re.compile(r"^[A-Za-z]:")


class ResourceCategory(str, Enum):
    """A named asset group with its own local root and manifest list."""
    FONTS = "fonts"
    IMAGES = "images"

    def __str__(self) -> str:
        return self.value


@dataclass
class FileEntry:
    """A single file in the manifest."""
    file: str
    hash: str

    def to_dict(self) -> dict:
        return {"file": self.file, "hash": self.hash}

    @classmethod
    def from_dict(cls, data: dict) -> "FileEntry":
        if not isinstance(data, dict):
            raise ManifestMalformed(f"Expected file entry object, got {type(data).__name__}")
        file = data.get("file")
        file_hash = data.get("hash")
        if not isinstance(file, str) or not file:
            raise ManifestMalformed(f"File entry has no valid 'file': {data!r}")
        if not isinstance(file_hash, str) or not file_hash:
            raise ManifestMalformed(f"File entry has no valid 'hash': {data!r}")
        if not is_safe_relative_path(file):
            raise ManifestMalformed(f"File entry path escapes resource root: {file!r}")
        return cls(file=file, hash=file_hash.lower())


def is_safe_relative_path(path: str) -> bool:
    """Check that a manifest path stays inside its category root."""
    pure = PurePosixPath(path.replace("\\", "/"))
    if not pure.parts or pure.is_absolute() or _DRIVE.match(pure.parts[0]):
        return False
    return ".." not in pure.parts


@dataclass
class ResourceManifest:
    """Expected fonts and images for one resource version."""
    fonts: list = field(default_factory=list)
    images: list = field(default_factory=list)

    def entries(self, category: ResourceCategory) -> list:
        """Get the file entries for a category."""
        if category == ResourceCategory.FONTS:
            return self.fonts
        return self.images

    @property
    def total_files(self) -> int:
        return len(self.fonts) + len(self.images)

    def to_dict(self) -> dict:
        return {
            "fonts": [f.to_dict() for f in self.fonts],
            "images": [f.to_dict() for f in self.images],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ResourceManifest":
        """
        Parse and validate manifest data.

        Raises:
            ManifestMalformed: If data doesn't match the manifest schema
        """
        if not isinstance(data, dict):
            raise ManifestMalformed(f"Expected manifest object, got {type(data).__name__}")

        parsed = {}
        for category in ResourceCategory:
            items = data.get(category.value)
            if not isinstance(items, list):
                raise ManifestMalformed(f"Manifest is missing '{category.value}' list")

            entries = [FileEntry.from_dict(item) for item in items]
            seen = set()
            for entry in entries:
                if entry.file in seen:
                    raise ManifestMalformed(f"Duplicate {category.value} entry: {entry.file}")
                seen.add(entry.file)
            parsed[category.value] = entries

        return cls(fonts=parsed["fonts"], images=parsed["images"])
