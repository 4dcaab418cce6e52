"""Tests for unit conversions."""
import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4

from quran_pdf.config import PAGE_HEIGHT_MM, PAGE_WIDTH_MM
from quran_pdf.document_builder import RasterImage, unit_converter


class TestUnitConverter:

    def test_one_inch_is_96_pixels(self):
        assert unit_converter.to_pixels(25.4) == 96

    def test_a4_content_width_in_pixels(self):
        assert unit_converter.to_pixels(180) == 680

    def test_page_geometry_matches_a4(self):
        assert (PAGE_WIDTH_MM, PAGE_HEIGHT_MM) == (210.0, 297.0)
        assert unit_converter.mm_to_points(PAGE_WIDTH_MM) == pytest.approx(A4[0])
        assert unit_converter.mm_to_points(PAGE_HEIGHT_MM) == pytest.approx(A4[1])

    def test_scaled_height_preserves_aspect_ratio(self):
        assert unit_converter.scaled_physical_height(680, 340, 180.0) == pytest.approx(90.0)

    def test_scaled_height_rejects_zero_width(self):
        with pytest.raises(ValueError):
            unit_converter.scaled_physical_height(0, 100, 180.0)

    def test_fit_to_width_sets_physical_size(self):
        raster = RasterImage(Image.new("RGB", (200, 50)), pixel_width=200, pixel_height=50)

        scaled = unit_converter.fit_to_width(raster, 180.0)

        assert scaled.physical_width == 180.0
        assert scaled.physical_height == pytest.approx(45.0)
        assert scaled.image is raster.image
        assert raster.physical_height == 0.0

    def test_mm_to_points(self):
        assert unit_converter.mm_to_points(25.4) == pytest.approx(72.0)

    def test_flip_y_coordinate(self):
        # A 30mm block whose top is 15mm from the page top
        assert unit_converter.flip_y_coordinate(15, 30, 297) == 252
