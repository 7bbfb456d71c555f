"""
Configuration loading.

The tool is configured by a small JSON file, by default ``config.json`` in
the working directory::

    {
        "imagesPath": "./images",
        "chirpcPath": "/usr/local/bin/chirpc"
    }

``imagesPath`` is the directory holding memory images; ``chirpcPath`` is
the flashing executable. ``imageSuffix`` optionally changes which files
count as images (default ``.img``).
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from baofeng_image_flasher.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_IMAGE_SUFFIX = ".img"
REQUIRED_KEYS = ("imagesPath", "chirpcPath")


@dataclass(frozen=True)
class FlasherConfig:
    """Settings built once at startup and passed to whoever needs them."""
    images_path: Path
    chirpc_path: str
    image_suffix: str = DEFAULT_IMAGE_SUFFIX

    def image_path(self, file_name: str) -> Path:
        """Resolve an image file name inside the images directory."""
        return self.images_path / file_name

    def list_images(self) -> List[str]:
        """Return sorted names of image files in the images directory."""
        return sorted(
            entry.name
            for entry in self.images_path.iterdir()
            if entry.is_file() and entry.name.endswith(self.image_suffix)
        )


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_FILE) -> FlasherConfig:
    """
    Load and validate the JSON configuration file.

    Relative ``imagesPath`` values are resolved against the directory that
    contains the configuration file.

    Raises:
        ConfigError: If the file is missing, unreadable, not a JSON object,
            lacks a required key, has a non-string value, or names an
            images directory that does not exist.
    """
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {config_path}")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file {config_path}: {exc}")
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}")

    if not isinstance(raw, dict):
        raise ConfigError(f"Configuration in {config_path} must be a JSON object")

    missing = [key for key in REQUIRED_KEYS if not raw.get(key)]
    if missing:
        raise ConfigError(
            f"Missing required configuration key(s) in {config_path}: {', '.join(missing)}"
        )

    wrong_type = [
        key for key in (*REQUIRED_KEYS, "imageSuffix")
        if key in raw and raw[key] is not None and not isinstance(raw[key], str)
    ]
    if wrong_type:
        raise ConfigError(
            f"Configuration key(s) in {config_path} must be strings: {', '.join(wrong_type)}"
        )

    images_path = Path(raw["imagesPath"]).expanduser()
    if not images_path.is_absolute():
        images_path = config_path.parent / images_path
    if not images_path.is_dir():
        raise ConfigError(f"Images directory not found: {images_path}")

    config = FlasherConfig(
        images_path=images_path,
        chirpc_path=str(raw["chirpcPath"]),
        image_suffix=raw.get("imageSuffix") or DEFAULT_IMAGE_SUFFIX,
    )
    logger.debug("Loaded configuration from %s: %s", config_path, config)
    return config
