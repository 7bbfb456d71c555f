"""
Model registry for radios programmable through chirpc.

The ``id`` of each model is the CHIRP driver id passed to ``chirpc -r``;
``name`` is what the operator sees.

Usage:
    from baofeng_image_flasher.models import list_models, get_model

    models = list_models()
    model = get_model("Baofeng_UV-5R")
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class RadioModel:
    """A radio model supported by the external flashing program."""
    id: str
    name: str
    vendor: str = "Baofeng"
    notes: str = ""

    @property
    def default_image_name(self) -> str:
        """File name suggested when downloading an image from this model."""
        return f"{self.id}.img"


DEFAULT_MODEL_ID = "Baofeng_UV-5R"

_MODELS: Dict[str, RadioModel] = {
    model.id: model
    for model in (
        RadioModel(
            id="Baofeng_UV-5R",
            name="Baofeng UV-5R",
            notes="Also covers most UV-5R clones (UV-5RA, UV-5RE, UV-5R+)",
        ),
    )
}


def list_models() -> List[RadioModel]:
    """Return supported models in display order, default model first."""
    return sorted(_MODELS.values(), key=lambda m: (m.id != DEFAULT_MODEL_ID, m.name))


def get_model(model_id: str) -> Optional[RadioModel]:
    """
    Look up a model by driver id or display name (case-insensitive).

    Returns None if the model is unknown.
    """
    if model_id in _MODELS:
        return _MODELS[model_id]
    wanted = model_id.strip().lower()
    for model in _MODELS.values():
        if wanted in (model.id.lower(), model.name.lower()):
            return model
    return None
