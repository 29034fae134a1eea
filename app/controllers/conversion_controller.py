"""
Conversion Controller – API route definitions.

Defines endpoints for health check, page-format listing, image-to-PDF
conversion and layout preview (placements only, no PDF).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from app.exceptions import ConversionError, MissingDependencyError
from app.models.schemas import (
    ConversionOptions,
    FitMode,
    LayoutPreview,
    Orientation,
    PageFormatInfo,
)
from app.repository.file_repository import FileRepository
from app.services.conversion_service import (
    OUTPUT_FILENAME,
    ConversionService,
    default_document_factory,
)
from app.services.image_decoder import ImageDecoder
from app.services.layout_service import DEFAULT_MARGIN, LayoutService
from app.services.page_formats import list_formats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["conversion"])


# ---------------------------------------------------------------------------
# Dependency injection helpers
# ---------------------------------------------------------------------------

def _get_file_repo() -> FileRepository:
    return FileRepository()


def _get_layout_service() -> LayoutService:
    raw = os.getenv("PIXELPAGE_MARGIN", str(DEFAULT_MARGIN))
    try:
        margin = float(raw)
    except ValueError:
        logger.error("Invalid PIXELPAGE_MARGIN: %r", raw)
        raise HTTPException(
            status_code=500, detail=f"PIXELPAGE_MARGIN must be a number, got {raw!r}"
        )
    try:
        return LayoutService(margin=margin)
    except ConversionError as e:
        raise HTTPException(status_code=500, detail=e.message)


def _get_document_factory():
    try:
        return default_document_factory()
    except MissingDependencyError as e:
        logger.error("PDF collaborator unavailable: %s", e)
        raise HTTPException(status_code=503, detail=e.message)


def _get_conversion_service(
    document_factory=Depends(_get_document_factory),
    layout: LayoutService = Depends(_get_layout_service),
) -> ConversionService:
    return ConversionService(
        document_factory=document_factory,
        decoder=ImageDecoder(),
        layout=layout,
    )


def _get_options(
    page_format: str = Form("a4"),
    orientation: Orientation = Form(Orientation.PORTRAIT),
    fit: FitMode = Form(FitMode.CONTAIN),
) -> ConversionOptions:
    try:
        return ConversionOptions(page_format=page_format, orientation=orientation, fit=fit)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Unknown page format: {page_format!r}") from e


def _stream_file(path: Path, session_dir: Path, repo: FileRepository):
    """Yield *path* in chunks, then remove the session directory."""
    try:
        with open(path, "rb") as f:
            yield from iter(lambda: f.read(8192), b"")
    finally:
        repo.cleanup(session_dir)


def _status_for(error: ConversionError) -> int:
    if isinstance(error, MissingDependencyError):
        return 503
    return 422


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/health")
async def health():
    """Health-check endpoint."""
    return {"status": "ok", "service": "PixelPage Engine"}


@router.get("/formats", response_model=list[PageFormatInfo])
async def formats():
    """Named page sizes accepted by ``page_format`` (portrait, points)."""
    return list_formats()


@router.post("/convert")
async def convert(
    files: list[UploadFile] = File(...),
    options: ConversionOptions = Depends(_get_options),
    repo: FileRepository = Depends(_get_file_repo),
    conversion: ConversionService = Depends(_get_conversion_service),
):
    """
    Upload images → returns one PDF with one image per page.

    **Processing pipeline:**
    1. FileRepository     — read the uploads in order
    2. ImageDecoder       — pixel size + type of each image
    3. LayoutService      — contain / cover placement inside the margins
    4. PdfDocument        — draw each image on its own page
    5. FileRepository     — stage the PDF and stream it back
    """
    session_dir = repo.create_session_dir()

    try:
        images = await repo.read_uploaded_images(files)
        logger.info("Received %d file(s) for conversion", len(images))

        pdf_bytes = await conversion.convert(images, options)
        pdf_path = repo.save_bytes(pdf_bytes, session_dir, OUTPUT_FILENAME)

        return StreamingResponse(
            _stream_file(pdf_path, session_dir, repo),
            media_type="application/pdf",
            headers={"Content-Disposition": f"attachment; filename={OUTPUT_FILENAME}"},
        )

    except ConversionError as e:
        repo.cleanup(session_dir)
        logger.warning("Conversion rejected: %s", e.message)
        raise HTTPException(status_code=_status_for(e), detail=e.message)
    except Exception as e:
        repo.cleanup(session_dir)
        logger.exception("Conversion failed")
        raise HTTPException(status_code=500, detail=f"Conversion failed: {str(e)}")


@router.post("/preview", response_model=LayoutPreview)
async def preview(
    files: list[UploadFile] = File(...),
    options: ConversionOptions = Depends(_get_options),
    repo: FileRepository = Depends(_get_file_repo),
    conversion: ConversionService = Depends(_get_conversion_service),
):
    """
    Compute the page placement of each uploaded image without building
    the PDF. Useful for checking contain / cover before converting.
    """
    try:
        images = await repo.read_uploaded_images(files)
        return await conversion.preview(images, options)

    except ConversionError as e:
        logger.warning("Preview rejected: %s", e.message)
        raise HTTPException(status_code=_status_for(e), detail=e.message)
    except Exception as e:
        logger.exception("Preview failed")
        raise HTTPException(status_code=500, detail=f"Preview failed: {str(e)}")
