"""
Shared fixtures: in-memory sample images built with Pillow.
"""

import io

import pytest
from PIL import Image


def make_image(width, height, fmt="PNG", mode="RGB", color=(200, 40, 40)):
    """Encode a solid-colour image and return its bytes."""
    if mode == "RGBA":
        color = color + (128,)
    img = Image.new(mode, (width, height), color=color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_800x600():
    return make_image(800, 600, "PNG")


@pytest.fixture
def jpeg_300x900():
    return make_image(300, 900, "JPEG")


@pytest.fixture
def png_rgba_square():
    return make_image(500, 500, "PNG", mode="RGBA")
