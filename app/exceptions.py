"""
Exceptions raised by the conversion pipeline.

Every error carries a message suitable for showing to the user; the
controller turns them into a single ``detail`` string per failed request.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for all errors that abort a conversion batch."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingDependencyError(ConversionError):
    """The PDF-generation collaborator is unavailable; no batch can start."""


class DecodeError(ConversionError):
    """An uploaded file could not be read or its pixel size determined."""


class PreconditionError(ConversionError):
    """Page, margin or image geometry cannot produce a valid placement."""
