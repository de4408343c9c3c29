"""
Image presets: aspect-ratio options and the default config of each
transformation type.
"""

from copy import deepcopy
from typing import Any

from utils.merge import deep_merge

DEFAULT_IMAGE_SIZE = 1000

ASPECT_RATIO_OPTIONS: dict[str, dict[str, Any]] = {
    "1:1": {"aspect_ratio": "1:1", "label": "Square (1:1)", "width": 1000, "height": 1000},
    "3:4": {"aspect_ratio": "3:4", "label": "Standard Portrait (3:4)", "width": 1000, "height": 1334},
    "9:16": {"aspect_ratio": "9:16", "label": "Phone Portrait (9:16)", "width": 1000, "height": 1778},
}

TRANSFORMATION_TYPES: dict[str, dict[str, Any]] = {
    "restore": {
        "type": "restore",
        "title": "Restore Image",
        "sub_title": "Refine images by removing noise and imperfections",
        "config": {"restore": True},
    },
    "removeBackground": {
        "type": "removeBackground",
        "title": "Background Remove",
        "sub_title": "Removes the background of the image using AI",
        "config": {"removeBackground": True},
    },
    "fill": {
        "type": "fill",
        "title": "Generative Fill",
        "sub_title": "Enhance an image's dimensions using AI outpainting",
        "config": {"fillBackground": True},
    },
    "remove": {
        "type": "remove",
        "title": "Object Remove",
        "sub_title": "Identify and eliminate objects from images",
        "config": {"remove": {"prompt": "", "removeShadow": True, "multiple": True}},
    },
    "recolor": {
        "type": "recolor",
        "title": "Object Recolor",
        "sub_title": "Identify and recolor objects from the image",
        "config": {"recolor": {"prompt": "", "to": "", "multiple": True}},
    },
}


def build_transformation_config(transformation_type: str, overrides: dict[str, Any] | None) -> dict[str, Any]:
    """
    Lay `overrides` over the preset config of `transformation_type`.
    User values win; the preset fills whatever they leave out.
    Raises KeyError for an unknown type.
    """
    preset = deepcopy(TRANSFORMATION_TYPES[transformation_type]["config"])
    return deep_merge(overrides or {}, preset)
