"""Shared fixtures and fakes for the test suite."""
from datetime import date

import pytest
from PIL import Image

from quran_pdf.document_builder import RasterImage
from quran_pdf.exceptions import RenderError
from quran_pdf.section_data import Chapter, SectionData, Verse

GENERATED_ON = date(2026, 10, 19)


class FakeRasterizer:
    """Rasterizer stand-in producing blocks of known physical height.

    Heights are millimeters once scaled to the 180mm content width: the fake
    reports a 180px wide raster, so pixel height == physical height.
    """

    def __init__(self, heights=None, default_height=20.0, fail_labels=()):
        self.heights = heights or {}
        self.default_height = default_height
        self.fail_labels = set(fail_labels)
        self.rendered = []

    def render(self, block, target_pixel_width):
        self.rendered.append(block.label)
        if block.label in self.fail_labels:
            raise RenderError(block.label, "simulated failure")
        height = self.heights.get(block.label, self.default_height)
        return RasterImage(
            image=Image.new("RGB", (4, 4), "white"),
            pixel_width=180,
            pixel_height=height,
        )


def make_section(chapter_id=1, verse_count=1, bismillah_pre=False, name=None, translations=("A translation",)):
    chapter = Chapter(
        id=chapter_id,
        name_simple=name or f"Chapter-{chapter_id}",
        name_arabic="الفاتحة",
        verses_count=verse_count,
        bismillah_pre=bismillah_pre,
    )
    verses = tuple(
        Verse(verse_number=n, text_uthmani=f"نص {n}", translations=tuple(translations), ruku_number=1)
        for n in range(1, verse_count + 1)
    )
    return SectionData(chapter=chapter, verses=verses)


def make_payload(chapter_id=1, verse_count=2, bismillah_pre=True):
    return {
        "chapter": {
            "id": chapter_id,
            "name_simple": "Al-Fatihah",
            "name_arabic": "الفاتحة",
            "verses_count": verse_count,
            "bismillah_pre": bismillah_pre,
        },
        "verses": [
            {
                "id": 100 + n,
                "verse_number": n,
                "ruku_number": 1,
                "sajdah_number": None,
                "text_uthmani": f"نص {n}",
                "translations": [{"text": f"Translation {n}"}],
            }
            for n in range(1, verse_count + 1)
        ],
    }


@pytest.fixture
def fake_rasterizer():
    return FakeRasterizer()
