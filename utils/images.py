"""
Image helpers: display size resolution, the shimmer placeholder shown while
a transformation runs, and download filename normalisation.
"""

import base64
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import unquote, urlparse

from core.constants import ASPECT_RATIO_OPTIONS, DEFAULT_IMAGE_SIZE

DIMENSIONS = ("width", "height")


def get_image_size(transformation_type: str, image: Any, dimension: str) -> int:
    """
    Resolve the width or height to render an image at.
    Generative fill uses the preset of the image's aspect ratio; everything
    else uses the image's own size. Missing values fall back to 1000.
    """
    if dimension not in DIMENSIONS:
        raise ValueError(f"dimension must be one of {DIMENSIONS}, got {dimension!r}")
    if transformation_type == "fill":
        option = ASPECT_RATIO_OPTIONS.get(_field(image, "aspect_ratio"), {})
        return option.get(dimension) or DEFAULT_IMAGE_SIZE
    return _field(image, dimension) or DEFAULT_IMAGE_SIZE


def _field(image: Any, name: str) -> Any:
    if image is None:
        return None
    if isinstance(image, Mapping):
        return image.get(name)
    return getattr(image, name, None)


def shimmer(w: int, h: int) -> str:
    """Animated gradient SVG used as a loading placeholder."""
    return f"""
<svg width="{w}" height="{h}" version="1.1" xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">
  <defs>
    <linearGradient id="g">
      <stop stop-color="#7986AC" offset="20%" />
      <stop stop-color="#68769e" offset="50%" />
      <stop stop-color="#7986AC" offset="70%" />
    </linearGradient>
  </defs>
  <rect width="{w}" height="{h}" fill="#7986AC" />
  <rect id="r" width="{w}" height="{h}" fill="url(#g)" />
  <animate xlink:href="#r" attributeName="x" from="-{w}" to="{w}" dur="1s" repeatCount="indefinite"  />
</svg>"""


def to_base64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


PLACEHOLDER_DATA_URL = f"data:image/svg+xml;base64,{to_base64(shimmer(1000, 1000))}"


def download_filename(filename: str | None, url: str = "") -> str:
    """`my cat pic` -> `my_cat_pic.png`; blank names fall back to the URL's last segment."""
    if filename and filename.strip():
        stem = re.sub(r"\s+", "_", filename.strip()).replace("/", "_").replace("\\", "_")
        return f"{stem}.png"
    name = unquote(urlparse(url).path.rsplit("/", 1)[-1]).replace("/", "_") if url else ""
    return name if name.strip(".") else "download"
