"""
File Repository – abstracts all file I/O operations.

Handles reading uploaded images, writing the generated PDF to temp
storage for streaming, and cleanup.
"""

from __future__ import annotations

import os
import shutil
import uuid
from pathlib import Path

from fastapi import UploadFile

from app.services.conversion_service import SourceImage


# Base temp directory inside the container
_TMP_ROOT = Path(os.getenv("PIXELPAGE_TMP", "/app/tmp"))


class FileRepository:
    """Stateless helper for file system operations."""

    def __init__(self, root: Path | None = None) -> None:
        self._root = root or _TMP_ROOT
        self._root.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @staticmethod
    async def read_uploaded_file(upload: UploadFile) -> bytes:
        """Read the full contents of a FastAPI UploadFile into memory."""
        return await upload.read()

    async def read_uploaded_images(self, uploads: list[UploadFile]) -> list[SourceImage]:
        """Read every upload, one after another, keeping the upload order."""
        images: list[SourceImage] = []
        for upload in uploads:
            data = await self.read_uploaded_file(upload)
            images.append(
                SourceImage(
                    data=data,
                    filename=upload.filename,
                    content_type=upload.content_type,
                )
            )
        return images

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def create_session_dir(self) -> Path:
        """Create a unique temp directory for one conversion request."""
        session_dir = self._root / str(uuid.uuid4())
        session_dir.mkdir(parents=True, exist_ok=True)
        return session_dir

    @staticmethod
    def save_bytes(data: bytes, directory: Path, filename: str) -> Path:
        """Write raw bytes to *directory/filename* and return the path."""
        path = directory / filename
        path.write_bytes(data)
        return path

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    @staticmethod
    def cleanup(directory: Path) -> None:
        """Remove a session directory and all contents."""
        if directory.exists():
            shutil.rmtree(directory, ignore_errors=True)
