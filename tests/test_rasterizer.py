"""Tests for the Pillow-backed rasterizer."""
import pytest

from quran_pdf.document_builder import (
    Badge,
    BadgeRow,
    Box,
    ContentBlock,
    Rasterizer,
    RenderSurface,
    Rule,
    Text,
)
from quran_pdf.exceptions import RenderError, SurfaceBusyError


@pytest.fixture(scope="module")
def rasterizer():
    return Rasterizer()


def block(*children, **box_kwargs):
    return ContentBlock(markup=Box(tuple(children), **box_kwargs), label="test")


class TestRasterizer:

    def test_output_has_target_width(self, rasterizer):
        image = rasterizer.render(block(Text("Hello world")), 680)

        assert image.pixel_width == 680
        assert image.image.size == (680, image.pixel_height)
        assert image.pixel_height > 0

    def test_height_follows_content(self, rasterizer):
        short = rasterizer.render(block(Text("word")), 300)
        long = rasterizer.render(block(Text("word " * 200)), 300)

        assert long.pixel_height > short.pixel_height

    def test_padding_and_margins_add_height(self, rasterizer):
        plain = rasterizer.render(block(Text("word", margin_bottom=0)), 300)
        padded = rasterizer.render(block(Text("word", margin_bottom=10), padding=20), 300)

        assert padded.pixel_height == plain.pixel_height + 10 + 40

    def test_background_is_white(self, rasterizer):
        image = rasterizer.render(block(Text("x", align="right")), 200)

        assert image.image.getpixel((0, 0)) == (255, 255, 255)

    def test_panel_background_is_painted(self, rasterizer):
        image = rasterizer.render(block(Text("x"), padding=20, background="#f3f4f6"), 200)

        assert image.image.getpixel((100, 5)) == (243, 244, 246)

    def test_long_word_is_broken(self, rasterizer):
        one_line = rasterizer.render(block(Text("a")), 100)
        broken = rasterizer.render(block(Text("a" * 200)), 100)

        assert broken.pixel_height > one_line.pixel_height

    def test_badges_and_rule(self, rasterizer):
        row = BadgeRow((Badge("1", font_size=14, circle=True), Badge("Ruku 1")), margin_bottom=5)

        image = rasterizer.render(block(row, Rule(thickness=2, margin_top=3)), 300)

        assert image.pixel_height >= 30 + 5 + 3 + 2

    def test_empty_box_renders_one_pixel(self, rasterizer):
        image = rasterizer.render(block(), 50)

        assert image.pixel_height == 1

    def test_invalid_color_raises_render_error(self, rasterizer):
        with pytest.raises(RenderError) as exc_info:
            rasterizer.render(block(Text("x", color="not-a-color")), 200)

        assert exc_info.value.label == "test"

    def test_unknown_node_raises_render_error(self, rasterizer):
        with pytest.raises(RenderError):
            rasterizer.render(block("raw string"), 200)

    def test_unknown_alignment_raises_render_error(self, rasterizer):
        with pytest.raises(RenderError):
            rasterizer.render(block(Text("x", align="justify")), 200)

    def test_padding_wider_than_target_raises_render_error(self, rasterizer):
        with pytest.raises(RenderError):
            rasterizer.render(block(Text("x"), padding=60), 100)

    def test_non_positive_width_raises_render_error(self, rasterizer):
        with pytest.raises(RenderError):
            rasterizer.render(block(Text("x")), 0)

    def test_surface_released_after_failure(self, rasterizer):
        with pytest.raises(RenderError):
            rasterizer.render(block(Text("x", color="bogus")), 200)

        assert not rasterizer.surface.in_flight


class TestRenderSurface:

    def test_second_acquire_while_in_flight_fails(self):
        surface = RenderSurface()

        with surface.acquire(10, 10) as canvas:
            assert surface.in_flight
            assert canvas.size == (10, 10)
            with pytest.raises(SurfaceBusyError):
                with surface.acquire(10, 10):
                    pass

        assert not surface.in_flight

    def test_render_while_surface_busy_is_rejected(self):
        surface = RenderSurface()
        rasterizer = Rasterizer(surface=surface)

        with surface.acquire(10, 10):
            with pytest.raises(SurfaceBusyError):
                rasterizer.render(block(Text("x")), 100)
