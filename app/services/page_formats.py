"""
Named page sizes, in points (72 pt = 1 inch).

Sizes come from ``reportlab.lib.pagesizes`` so the page the document is
created with and the page the layout is computed for always agree.
"""

from __future__ import annotations

from reportlab.lib import pagesizes

from app.exceptions import PreconditionError
from app.models.schemas import Orientation, PageFormatInfo


def _iso_series(prefix: str) -> dict[str, tuple[float, float]]:
    return {
        f"{prefix}{i}": getattr(pagesizes, f"{prefix.upper()}{i}")
        for i in range(11)
    }


PAGE_FORMATS: dict[str, tuple[float, float]] = {
    **_iso_series("a"),
    **_iso_series("b"),
    **_iso_series("c"),
    "letter": pagesizes.LETTER,
    "legal": pagesizes.LEGAL,
    "tabloid": pagesizes.TABLOID,
    "ledger": pagesizes.portrait(pagesizes.LEDGER),
    "11x17": pagesizes.ELEVENSEVENTEEN,
    "half-letter": pagesizes.HALF_LETTER,
    "junior-legal": pagesizes.JUNIOR_LEGAL,
    "government-letter": pagesizes.GOV_LETTER,
    "government-legal": pagesizes.GOV_LEGAL,
}


def is_known_format(name: str) -> bool:
    return name.strip().lower() in PAGE_FORMATS


def resolve_page_size(
    name: str, orientation: Orientation = Orientation.PORTRAIT
) -> tuple[float, float]:
    """
    Return ``(width, height)`` in points for a named format.

    Landscape puts the long edge horizontally, portrait vertically.
    """
    try:
        size = PAGE_FORMATS[name.strip().lower()]
    except KeyError:
        raise PreconditionError(f"Unknown page format: {name!r}") from None

    if orientation == Orientation.LANDSCAPE:
        return pagesizes.landscape(size)
    return pagesizes.portrait(size)


def list_formats() -> list[PageFormatInfo]:
    return [
        PageFormatInfo(name=name, width=round(w, 2), height=round(h, 2))
        for name, (w, h) in PAGE_FORMATS.items()
    ]
