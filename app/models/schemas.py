"""
Request / response models shared by the services and the HTTP layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class FitMode(str, Enum):
    """How an image fills the available page area."""
    CONTAIN = "contain"  # letterbox, never crops
    COVER = "cover"      # fills the area, crops the overflow


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class ConversionOptions(BaseModel):
    """User-selected page settings for one conversion batch."""
    page_format: str = "a4"
    orientation: Orientation = Orientation.PORTRAIT
    fit: FitMode = FitMode.CONTAIN

    @field_validator("page_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        from app.services.page_formats import is_known_format

        name = value.strip().lower()
        if not is_known_format(name):
            raise ValueError(f"Unknown page format: {value!r}")
        return name


class PlacementInfo(BaseModel):
    """Image rectangle in points, origin at the top-left page corner."""
    x: float
    y: float
    width: float
    height: float


class ImageLayout(BaseModel):
    index: int
    filename: Optional[str] = None
    width_px: int
    height_px: int
    mime_type: str
    placement: PlacementInfo


class LayoutPreview(BaseModel):
    """Per-page layout computed without rendering the PDF."""
    page_format: str
    orientation: Orientation
    fit: FitMode
    margin: float
    page_width: float
    page_height: float
    pages: list[ImageLayout] = Field(default_factory=list)


class PageFormatInfo(BaseModel):
    """A named page size in portrait orientation (points)."""
    name: str
    width: float
    height: float
