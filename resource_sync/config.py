"""
Configuration management for Meme Resource Sync.

Config file ($MEME_HOME/config.json):
    {"resource": {"resource_url": "...", "download_fonts": true}}
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .core.constants import DEFAULT_RESOURCE_URL
from .core.paths import get_config_path

logger = logging.getLogger(__name__)


@dataclass
class ResourceSettings:
    """Where resources come from and which categories to sync."""
    resource_url: str = DEFAULT_RESOURCE_URL
    download_fonts: bool = True

    def to_dict(self) -> dict:
        return {
            "resource_url": self.resource_url,
            "download_fonts": self.download_fonts,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ResourceSettings":
        return cls(
            resource_url=data.get("resource_url", DEFAULT_RESOURCE_URL),
            download_fonts=bool(data.get("download_fonts", True)),
        )


@dataclass
class Settings:
    """
    Manages config.json - user settings.

    Unknown top-level sections are kept so saving doesn't drop them.
    """
    path: Optional[Path] = None
    resource: ResourceSettings = field(default_factory=ResourceSettings)
    extra: dict = field(default_factory=dict)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        """Load settings from file, falling back to defaults."""
        path = path or get_config_path()
        settings = cls(path=path)

        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("config root must be an object")

                resource = data.get("resource", {})
                if not isinstance(resource, dict):
                    raise ValueError("'resource' must be an object")
                settings.resource = ResourceSettings.from_dict(resource)
                settings.extra = {k: v for k, v in data.items() if k != "resource"}
            except (json.JSONDecodeError, ValueError, IOError) as e:
                logger.warning("Could not load %s: %s", path, e)

        return settings

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data["resource"] = self.resource.to_dict()
        return data

    def save(self):
        """Save settings to file."""
        if self.path is None:
            raise ValueError("Settings has no path to save to")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
