"""
Tests for the page layout calculator — contain / cover placement.
"""

import itertools

import pytest

from app.exceptions import PreconditionError
from app.models.schemas import FitMode
from app.services.layout_service import (
    ImageDimensions,
    LayoutService,
    PageGeometry,
    compute_placement,
)

A4_PORTRAIT = PageGeometry(595, 842)
MARGIN = 20
EPS = 1e-6

_IMAGES = [
    ImageDimensions(w, h)
    for w, h in [(800, 600), (600, 800), (500, 500), (1, 4000), (4000, 1), (1920, 1080), (37, 59)]
]
_PAGES = [
    PageGeometry(595, 842),
    PageGeometry(842, 595),
    PageGeometry(612, 792),
    PageGeometry(100, 60),
]
_MARGINS = [0, 5, 20]


def _cases():
    return list(itertools.product(_IMAGES, _PAGES, _MARGINS))


class TestExamples:
    def test_contain_landscape_image_on_a4(self):
        p = compute_placement(ImageDimensions(800, 600), A4_PORTRAIT, MARGIN, FitMode.CONTAIN)
        assert p.width == pytest.approx(555)
        assert p.height == pytest.approx(416.25)
        assert p.x == pytest.approx(20)
        # 20 + (802 - 416.25) / 2
        assert p.y == pytest.approx(212.875)

    def test_cover_landscape_image_on_a4(self):
        p = compute_placement(ImageDimensions(800, 600), A4_PORTRAIT, MARGIN, FitMode.COVER)
        assert p.height == pytest.approx(802)
        assert p.width == pytest.approx(1069.333, abs=1e-3)
        assert p.y == pytest.approx(20)
        assert p.x == pytest.approx(-237.1667, abs=1e-3)

    def test_contain_square_image_on_a4(self):
        p = compute_placement(ImageDimensions(500, 500), A4_PORTRAIT, MARGIN, FitMode.CONTAIN)
        assert p.width == pytest.approx(555)
        assert p.height == pytest.approx(555)
        assert p.x == pytest.approx(20)
        assert p.y == pytest.approx(143.5)

    def test_cover_tall_image_crops_vertically(self):
        p = compute_placement(ImageDimensions(300, 900), A4_PORTRAIT, MARGIN, FitMode.COVER)
        assert p.width == pytest.approx(555)
        assert p.height == pytest.approx(1665)
        assert p.x == pytest.approx(20)
        assert p.y < 0

    def test_matching_aspect_ratio_fills_exactly(self):
        for mode in FitMode:
            p = compute_placement(ImageDimensions(555, 802), A4_PORTRAIT, MARGIN, mode)
            assert (p.x, p.y) == pytest.approx((20, 20))
            assert (p.width, p.height) == pytest.approx((555, 802))


class TestProperties:
    @pytest.mark.parametrize("mode", list(FitMode))
    def test_aspect_ratio_preserved(self, mode):
        for image, page, margin in _cases():
            p = compute_placement(image, page, margin, mode)
            assert p.width / p.height == pytest.approx(image.width / image.height, rel=1e-9)

    def test_contain_stays_inside_available_area(self):
        for image, page, margin in _cases():
            p = compute_placement(image, page, margin, FitMode.CONTAIN)
            assert p.width <= page.width - 2 * margin + EPS
            assert p.height <= page.height - 2 * margin + EPS
            assert p.x >= margin - EPS
            assert p.y >= margin - EPS

    def test_cover_fills_available_area(self):
        for image, page, margin in _cases():
            p = compute_placement(image, page, margin, FitMode.COVER)
            assert p.width >= page.width - 2 * margin - EPS
            assert p.height >= page.height - 2 * margin - EPS

    @pytest.mark.parametrize("mode", list(FitMode))
    def test_centered(self, mode):
        for image, page, margin in _cases():
            p = compute_placement(image, page, margin, mode)
            assert p.x + p.width / 2 == pytest.approx(page.width / 2)
            assert p.y + p.height / 2 == pytest.approx(page.height / 2)


class TestLayoutService:
    def test_default_margin(self):
        assert LayoutService().margin == 20

    def test_available_area(self):
        assert LayoutService().available_area(A4_PORTRAIT) == (555, 802)

    def test_place_delegates(self):
        svc = LayoutService(margin=MARGIN)
        image = ImageDimensions(800, 600)
        assert svc.place(image, A4_PORTRAIT, FitMode.CONTAIN) == compute_placement(
            image, A4_PORTRAIT, MARGIN, FitMode.CONTAIN
        )

    def test_page_smaller_than_margins_rejected(self):
        svc = LayoutService(margin=50)
        with pytest.raises(PreconditionError):
            svc.place(ImageDimensions(10, 10), PageGeometry(100, 400), FitMode.CONTAIN)

    def test_zero_size_image_rejected(self):
        with pytest.raises(PreconditionError):
            LayoutService().place(ImageDimensions(0, 10), A4_PORTRAIT, FitMode.COVER)

    def test_negative_margin_rejected(self):
        with pytest.raises(PreconditionError):
            LayoutService(margin=-1)
