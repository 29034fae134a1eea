"""
Image Decoder – reads pixel size and type from uploaded image bytes.

Decoding runs in the threadpool so the event loop only awaits it; the
conversion loop awaits one decode at a time.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from fastapi.concurrency import run_in_threadpool
from PIL import Image, UnidentifiedImageError

from app.exceptions import DecodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedImage:
    width: int
    height: int
    mime_type: str

    @property
    def format_name(self) -> str:
        """PDF image format name, e.g. ``image/png`` -> ``PNG``."""
        return self.mime_type.split("/")[1].upper()


def _probe(data: bytes) -> DecodedImage:
    if not data:
        raise DecodeError("File is empty.")
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            mime_type = Image.MIME.get(img.format or "", "")
            # Force a full decode so truncated files fail here, not in the PDF writer
            img.load()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        raise DecodeError(f"Could not load image to get its properties: {e}") from e

    if not mime_type.startswith("image/"):
        raise DecodeError("Could not determine the image type.")
    if width <= 0 or height <= 0:
        raise DecodeError(f"Image has invalid dimensions {width}x{height}.")
    return DecodedImage(width=width, height=height, mime_type=mime_type)


def mime_type_of(source: bytes | str) -> str:
    """
    Return the MIME type of raw image bytes or of a ``data:`` URI.

    ``"data:image/png;base64,..."`` -> ``"image/png"``.
    """
    if isinstance(source, str):
        if not source.startswith("data:") or ";" not in source:
            raise DecodeError("Not a data URI.")
        return source[source.index(":") + 1:source.index(";")]
    return _probe(source).mime_type


class ImageDecoder:
    """Awaitable wrapper around Pillow's header + pixel decoding."""

    async def decode(self, data: bytes) -> DecodedImage:
        decoded = await run_in_threadpool(_probe, data)
        logger.debug(
            "Decoded %s image %dx%d", decoded.mime_type, decoded.width, decoded.height
        )
        return decoded
