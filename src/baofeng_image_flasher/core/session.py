"""
Interactive session setup.

Collects port, model, action and image file from the operator and applies
the entry guards that must hold before any transfer starts:

- an upload source image must exist
- an existing download target is only replaced after confirmation
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from baofeng_image_flasher.config import FlasherConfig
from baofeng_image_flasher.devices import DevicePort
from baofeng_image_flasher.models import RadioModel, list_models
from baofeng_image_flasher.prompts import Choice
from baofeng_image_flasher.errors import InvalidOutputPathError, MissingInputFileError

logger = logging.getLogger(__name__)


class Action(Enum):
    """What the operator wants to do with the radio."""
    DOWNLOAD = "download"
    UPLOAD = "upload"
    LOOP = "loop"

    @property
    def needs_input_image(self) -> bool:
        return self is not Action.DOWNLOAD


ACTION_CHOICES = (
    Choice("Download image from radio", Action.DOWNLOAD),
    Choice("Upload image to radio", Action.UPLOAD),
    Choice("Upload image to multiple radios in sequence", Action.LOOP),
)


@dataclass(frozen=True)
class SessionPlan:
    """
    Everything decided during setup.

    Attributes:
        port: Serial device path
        model: chirpc driver id
        action: Selected action
        image_path: Output file for downloads, source image otherwise
        overwrite_confirmed: False only when the operator declined to
            replace an existing download target
    """
    port: str
    model: str
    action: Action
    image_path: Path
    overwrite_confirmed: bool = True

    @property
    def should_transfer(self) -> bool:
        return self.action.needs_input_image or self.overwrite_confirmed


def require_input_image(path: Path) -> Path:
    """
    Make sure an upload source exists.

    Raises:
        MissingInputFileError: If ``path`` does not exist.
    """
    if not path.exists():
        raise MissingInputFileError(path)
    return path


def require_output_file(path: Path) -> Path:
    """
    Make sure a download target can be written as a file.

    Raises:
        InvalidOutputPathError: If ``path`` is an existing directory.
    """
    if path.is_dir():
        raise InvalidOutputPathError(path)
    return path


def gather_session(
    prompter,
    config: FlasherConfig,
    ports: Sequence[DevicePort],
    models: Optional[Sequence[RadioModel]] = None,
) -> SessionPlan:
    """
    Ask the operator for every session parameter, in order.

    Raises:
        MissingInputFileError: An upload action was chosen but the images
            directory holds no image files.
        InvalidOutputPathError: The download file name resolves to a
            directory.
    """
    models = list(models) if models is not None else list_models()

    port = prompter.select("Select USB port:", [Choice(p.label, p.device) for p in ports])
    model = prompter.select("Select radio model:", [Choice(m.name, m.id) for m in models])
    action = prompter.select("What do you want to do?", ACTION_CHOICES)
    logger.debug("Session: port=%s model=%s action=%s", port, model, action.value)

    if action is Action.DOWNLOAD:
        by_id = {m.id: m for m in models}
        default_name = by_id[model].default_image_name
        file_name = (prompter.text("Enter output image file name:", default=default_name) or "").strip()
        if not file_name:
            file_name = default_name
        output_path = require_output_file(config.image_path(file_name))
        overwrite = True
        if output_path.exists():
            overwrite = prompter.confirm("A file with this name exists, overwrite?", default=False)
        return SessionPlan(port, model, action, output_path, overwrite_confirmed=overwrite)

    images = config.list_images()
    if not images:
        raise MissingInputFileError(
            config.images_path,
            f"No {config.image_suffix} files found in {config.images_path}.",
        )
    file_name = prompter.select(
        "Select input image file:", [Choice(name, name) for name in images]
    )
    return SessionPlan(port, model, action, config.image_path(file_name))
