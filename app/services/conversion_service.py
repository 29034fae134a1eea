"""
Conversion Service – turns an ordered batch of images into one PDF.

For each image, in upload order: decode -> compute placement -> start a
new page (except before the first image) -> draw the image. The first
decode failure aborts the batch; the half-built document is dropped
without ever being saved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from app.exceptions import ConversionError, DecodeError, MissingDependencyError
from app.models.schemas import ConversionOptions, ImageLayout, LayoutPreview
from app.services.image_decoder import DecodedImage, ImageDecoder
from app.services.layout_service import ImageDimensions, LayoutService, PageGeometry
from app.services.page_formats import resolve_page_size

logger = logging.getLogger(__name__)

OUTPUT_FILENAME = "converted_images.pdf"

DocumentFactory = Callable[[tuple[float, float]], object]


@dataclass(frozen=True)
class SourceImage:
    """One uploaded file: raw bytes plus what the client declared."""
    data: bytes
    filename: Optional[str] = None
    content_type: Optional[str] = None

    @property
    def label(self) -> str:
        return self.filename or "image"


def default_document_factory() -> DocumentFactory:
    """Resolve the reportlab-backed document class."""
    try:
        from app.services.pdf_document import PdfDocument
    except ImportError as e:
        raise MissingDependencyError(
            "PDF library (reportlab) is not available; cannot generate PDFs."
        ) from e
    return PdfDocument


class ConversionService:
    """Builds one PDF per batch, one image per page."""

    def __init__(
        self,
        document_factory: Optional[DocumentFactory],
        decoder: Optional[ImageDecoder] = None,
        layout: Optional[LayoutService] = None,
    ):
        if document_factory is None:
            raise MissingDependencyError(
                "PDF library is not available; cannot generate PDFs."
            )
        self._document_factory = document_factory
        self._decoder = decoder or ImageDecoder()
        self._layout = layout or LayoutService()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def convert(
        self, images: list[SourceImage], options: ConversionOptions
    ) -> bytes:
        """Return the bytes of a PDF with one page per image."""
        self._require_images(images)
        page_size = resolve_page_size(options.page_format, options.orientation)

        document = self._document_factory(page_size)
        page = document.current_page_size()
        self._layout.check_page(page)

        for i, image in enumerate(images):
            decoded = await self._decode(image, i)
            placement = self._layout.place(
                ImageDimensions(decoded.width, decoded.height), page, options.fit
            )
            if i > 0:
                document.add_page()
            document.add_image(
                image.data,
                decoded.format_name,
                placement.x,
                placement.y,
                placement.width,
                placement.height,
            )

        pdf_bytes = document.save()
        logger.info(
            "Converted %d image(s) to PDF (%s %s, %s): %d bytes",
            len(images), options.page_format, options.orientation.value,
            options.fit.value, len(pdf_bytes),
        )
        return pdf_bytes

    async def preview(
        self, images: list[SourceImage], options: ConversionOptions
    ) -> LayoutPreview:
        """Compute every page's placement without rendering the PDF."""
        self._require_images(images)
        width, height = resolve_page_size(options.page_format, options.orientation)
        page = PageGeometry(width=width, height=height)
        self._layout.check_page(page)

        pages: list[ImageLayout] = []
        for i, image in enumerate(images):
            decoded = await self._decode(image, i)
            placement = self._layout.place(
                ImageDimensions(decoded.width, decoded.height), page, options.fit
            )
            pages.append(
                ImageLayout(
                    index=i,
                    filename=image.filename,
                    width_px=decoded.width,
                    height_px=decoded.height,
                    mime_type=decoded.mime_type,
                    placement=placement.to_info(),
                )
            )

        return LayoutPreview(
            page_format=options.page_format,
            orientation=options.orientation,
            fit=options.fit,
            margin=self._layout.margin,
            page_width=page.width,
            page_height=page.height,
            pages=pages,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _require_images(images: list[SourceImage]) -> None:
        if not images:
            raise ConversionError("Please select images first.")

    async def _decode(self, image: SourceImage, index: int) -> DecodedImage:
        try:
            return await self._decoder.decode(image.data)
        except DecodeError as e:
            logger.warning("Decode failed for file #%d (%s): %s", index + 1, image.label, e)
            raise DecodeError(f"{image.label}: {e.message}") from e
