"""
Model registry for radios programmable through chirpc.
"""

from .registry import (
    RadioModel,
    DEFAULT_MODEL_ID,
    list_models,
    get_model,
)

__all__ = [
    "RadioModel",
    "DEFAULT_MODEL_ID",
    "list_models",
    "get_model",
]
