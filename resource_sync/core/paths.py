"""
Local path layout for Meme Resource Sync.

Everything lives under MEME_HOME (default ~/.meme_generator):
    config.json
    resources/fonts/...
    resources/images/...
"""

import os
from pathlib import Path
from typing import Optional


def get_meme_home() -> Path:
    """Get the data directory, honouring the MEME_HOME environment variable."""
    home = os.environ.get("MEME_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / ".meme_generator"


def get_config_path(home: Optional[Path] = None) -> Path:
    """Get path to the user config file."""
    return (home or get_meme_home()) / "config.json"


def get_resources_dir(home: Optional[Path] = None) -> Path:
    return (home or get_meme_home()) / "resources"


def get_fonts_dir(home: Optional[Path] = None) -> Path:
    return get_resources_dir(home) / "fonts"


def get_images_dir(home: Optional[Path] = None) -> Path:
    return get_resources_dir(home) / "images"
