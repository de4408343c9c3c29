"""
Image endpoints: display size, loading placeholder, download proxy and
transformation config presets.
"""

from typing import Any, Literal
from urllib.parse import quote

from fastapi import APIRouter, Body, HTTPException, Query, Response, status

from core.constants import TRANSFORMATION_TYPES, build_transformation_config
from core.dependencies import CurrentUser
from models.schemas import ImageSizeResponse, PlaceholderResponse, TransformationConfigResponse
from utils.download import fetch_resource
from utils.images import PLACEHOLDER_DATA_URL, download_filename, get_image_size
from utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["images"])


@router.get("/images/size", response_model=ImageSizeResponse)
async def image_size(
    user: CurrentUser,
    dimension: Literal["width", "height"],
    transformation_type: str = Query(default="", alias="type", max_length=64),
    aspect_ratio: str | None = Query(default=None, max_length=16),
    width: int | None = Query(default=None, ge=1, le=10000),
    height: int | None = Query(default=None, ge=1, le=10000),
) -> ImageSizeResponse:
    image = {"aspect_ratio": aspect_ratio, "width": width, "height": height}
    return ImageSizeResponse(dimension=dimension, size=get_image_size(transformation_type, image, dimension))


@router.get("/images/placeholder", response_model=PlaceholderResponse)
async def image_placeholder(user: CurrentUser) -> PlaceholderResponse:
    """Shimmer SVG as a data URL, shown while an image is transforming."""
    return PlaceholderResponse(data_url=PLACEHOLDER_DATA_URL)


@router.get("/images/download")
async def download_image(
    user: CurrentUser,
    url: str = Query(..., min_length=1, max_length=2048),
    filename: str | None = Query(default=None, max_length=255),
) -> Response:
    """Proxy a remote image back as an attachment so the browser saves it."""
    content = await fetch_resource(url)
    name = download_filename(filename, url)
    logger.info("image_download", extra={"user": user.get("sub"), "download_name": name})
    return Response(
        content=content,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(name)}"},
    )


@router.post("/transformations/{transformation_type}/config", response_model=TransformationConfigResponse)
async def transformation_config(
    transformation_type: str,
    user: CurrentUser,
    overrides: dict[str, Any] | None = Body(default=None),
) -> TransformationConfigResponse:
    """User overrides laid over the preset for `transformation_type`."""
    if transformation_type not in TRANSFORMATION_TYPES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown transformation type: {transformation_type}",
        )
    config = build_transformation_config(transformation_type, overrides)
    return TransformationConfigResponse(type=transformation_type, config=config)
