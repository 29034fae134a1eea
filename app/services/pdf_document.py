"""
PDF Document – one-image-per-page writer backed by reportlab.

Wraps a ``reportlab.pdfgen.canvas.Canvas`` drawing into memory. Callers
work in top-left page coordinates (as the layout service does); the
conversion to PDF's bottom-left origin happens here.
"""

from __future__ import annotations

import io
import logging

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from app.services.layout_service import PageGeometry

logger = logging.getLogger(__name__)


class PdfDocument:
    """In-progress PDF; nothing is visible to anyone until ``save()``."""

    def __init__(self, page_size: tuple[float, float], title: str | None = None):
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=page_size)
        if title:
            self._canvas.setTitle(title)
        self._width, self._height = page_size
        self._pages = 1
        self._saved = False

    @property
    def page_count(self) -> int:
        return self._pages

    def current_page_size(self) -> PageGeometry:
        return PageGeometry(width=self._width, height=self._height)

    def add_page(self) -> None:
        """Finish the current page and start an empty one of the same size."""
        self._canvas.showPage()
        self._pages += 1

    def add_image(
        self,
        data: bytes,
        format_name: str,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """
        Draw encoded image bytes into the rectangle (x, y, width, height).

        ``y`` is measured from the top of the page. Parts of the rectangle
        outside the page are clipped by the page box.
        """
        reader = ImageReader(io.BytesIO(data))
        pdf_y = self._height - y - height
        self._canvas.drawImage(
            reader, x, pdf_y, width=width, height=height, mask="auto"
        )
        logger.debug(
            "Page %d: placed %s image at (%.2f, %.2f) size %.2fx%.2f",
            self._pages, format_name, x, y, width, height,
        )

    def save(self) -> bytes:
        """Finalise the document and return the PDF bytes."""
        if not self._saved:
            self._canvas.save()
            self._saved = True
        return self._buffer.getvalue()
