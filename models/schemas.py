"""
Pydantic schemas for request/response validation.
Reusable across routes; keeps API contracts explicit.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class SetParamRequest(BaseModel):
    """Set one key in a query string. A null value drops the key."""

    query: str = Field(default="", max_length=8192)
    key: str = Field(..., min_length=1, max_length=256)
    value: str | None = None

    model_config = {"extra": "forbid"}


class RemoveParamsRequest(BaseModel):
    query: str = Field(default="", max_length=8192)
    keys: list[str] = Field(default_factory=list, max_length=100)

    model_config = {"extra": "forbid"}


class QueryResponse(BaseModel):
    """Path-relative query string, `?` included; the caller adds the path."""

    query: str


class ImageSizeResponse(BaseModel):
    dimension: Literal["width", "height"]
    size: int


class PlaceholderResponse(BaseModel):
    data_url: str


class TransformationConfigResponse(BaseModel):
    type: str
    config: dict[str, Any]
