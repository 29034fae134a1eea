"""
Layout Service – places one raster image on one PDF page.

Computes the rectangle an image is drawn into so that it either fits
entirely inside the page margins (contain) or fills them completely,
overflowing one axis (cover). The aspect ratio is always preserved.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.exceptions import PreconditionError
from app.models.schemas import FitMode, PlacementInfo

DEFAULT_MARGIN = 20.0  # points, applied on all four sides


@dataclass(frozen=True)
class ImageDimensions:
    """Raw pixel size of a decoded image."""
    width: float
    height: float


@dataclass(frozen=True)
class PageGeometry:
    """Page size in points."""
    width: float
    height: float


@dataclass(frozen=True)
class Placement:
    """Image rectangle on the page.

    Origin is the top-left page corner, y grows downward. Under cover
    mode x or y may be negative: the image extends past the page edge.
    """
    x: float
    y: float
    width: float
    height: float

    def to_info(self) -> PlacementInfo:
        return PlacementInfo(x=self.x, y=self.y, width=self.width, height=self.height)


def compute_placement(
    image: ImageDimensions,
    page: PageGeometry,
    margin: float,
    mode: FitMode,
) -> Placement:
    """
    Compute where *image* is drawn on *page*.

    Callers must ensure ``image.width, image.height > 0`` and
    ``page.width, page.height > 2 * margin``; see ``LayoutService.place``.
    """
    available_width = page.width - 2 * margin
    available_height = page.height - 2 * margin
    ratio = image.width / image.height

    if mode == FitMode.CONTAIN:
        if image.width / available_width > image.height / available_height:
            # Fit by width
            width = available_width
            height = available_width / ratio
        else:
            # Fit by height
            height = available_height
            width = available_height * ratio
        x = margin + (available_width - width) / 2
        y = margin + (available_height - height) / 2
    else:
        if image.width / available_width < image.height / available_height:
            # Relatively taller: fill the width, crop top and bottom
            width = available_width
            height = available_width / ratio
            x = margin
            y = margin - (height - available_height) / 2
        else:
            # Relatively wider: fill the height, crop left and right
            height = available_height
            width = available_height * ratio
            y = margin
            x = margin - (width - available_width) / 2

    return Placement(x=x, y=y, width=width, height=height)


class LayoutService:
    """Applies a fixed margin and guards the placement preconditions."""

    def __init__(self, margin: float = DEFAULT_MARGIN):
        if margin < 0:
            raise PreconditionError(f"Margin must be non-negative, got {margin}")
        self.margin = margin

    def available_area(self, page: PageGeometry) -> tuple[float, float]:
        """Return (available_width, available_height) in points."""
        return page.width - 2 * self.margin, page.height - 2 * self.margin

    def check_page(self, page: PageGeometry) -> None:
        available_width, available_height = self.available_area(page)
        if available_width <= 0 or available_height <= 0:
            raise PreconditionError(
                f"Page {page.width:g}x{page.height:g} pt is too small for a "
                f"{self.margin:g} pt margin"
            )

    def place(
        self, image: ImageDimensions, page: PageGeometry, mode: FitMode
    ) -> Placement:
        """Validate inputs, then compute the placement."""
        if image.width <= 0 or image.height <= 0:
            raise PreconditionError(
                f"Image dimensions must be positive, got {image.width}x{image.height}"
            )
        self.check_page(page)
        return compute_placement(image, page, self.margin, mode)
