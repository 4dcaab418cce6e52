"""Content Block Builders

Pure functions turning chapter data and cover options into ContentBlocks.
They never look at pages or raster state.
"""
from datetime import date
from typing import List, Sequence

from ..config import (
    BISMILLAH_ARABIC,
    BISMILLAH_ENGLISH,
    BLOCK_SPACING_MM,
    COLORS,
    FOOTER_LABEL,
)
from ..cover_options import CoverOptions
from ..section_data import Chapter, SectionData, Verse
from .markup import Badge, BadgeRow, Box, ContentBlock, Rule, Text


def format_date(value: date) -> str:
    """Format a generation date, e.g. 'October 19, 2026'."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def build_cover_block(
    sections: Sequence[SectionData],
    options: CoverOptions,
    generated_on: date,
) -> ContentBlock:
    """
    Build the cover block.

    Args:
        sections: All sections of the document (used for statistics)
        options: Cover configuration
        generated_on: Date printed when options.include_date is set

    Returns:
        ContentBlock for the first page
    """
    children: List = [
        Text(options.title, font_size=40, color=COLORS["accent"], bold=True,
             align="center", line_height=1.3, margin_bottom=16),
    ]
    if options.subtitle.strip():
        children.append(Text(options.subtitle, font_size=24, color=COLORS["text"],
                             align="center", margin_bottom=24))

    children.append(Rule(color=COLORS["accent"], thickness=2, margin_top=8, margin_bottom=32))

    if options.include_stats:
        verse_total = sum(len(section.verses) for section in sections)
        children.append(Text(
            f"{_plural(len(sections), 'chapter')} • {_plural(verse_total, 'verse')}",
            font_size=16, color=COLORS["muted"], align="center", margin_bottom=12,
        ))
        names = ", ".join(section.chapter.name_simple for section in sections)
        children.append(Text(names, font_size=14, color=COLORS["muted"],
                             align="center", margin_bottom=12))

    if options.include_date:
        children.append(Text(f"Generated on {format_date(generated_on)}", font_size=14,
                             color=COLORS["muted"], align="center"))

    return ContentBlock(
        markup=Box(tuple(children), padding=40),
        spacing_after=BLOCK_SPACING_MM["cover"],
        label="cover",
    )


def build_section_header_block(chapter: Chapter) -> ContentBlock:
    """Build the chapter header: names plus chapter number and verse count."""
    children = [
        Text(chapter.name_simple, font_size=28, color=COLORS["accent"], bold=True,
             align="center", line_height=1.3, margin_bottom=10),
    ]
    if chapter.name_arabic:
        children.append(Text(chapter.name_arabic, font_size=24, color=COLORS["text"],
                             align="center", rtl=True, margin_bottom=10))
    children.append(Text(
        f"Chapter {chapter.id} • {_plural(chapter.verses_count, 'verse')}",
        font_size=14, color=COLORS["muted"], align="center", margin_bottom=20,
    ))
    children.append(Rule(color=COLORS["accent"], thickness=2))

    return ContentBlock(
        markup=Box(tuple(children)),
        spacing_after=BLOCK_SPACING_MM["header"],
        label=f"header {chapter.id}",
    )


def build_preamble_block(chapter: Chapter) -> ContentBlock:
    """Build the Bismillah block shown before the first verse."""
    return ContentBlock(
        markup=Box(
            (
                Text(BISMILLAH_ARABIC, font_size=20, color=COLORS["text"], align="center", rtl=True),
                Text(BISMILLAH_ENGLISH, font_size=12, color=COLORS["muted"], align="center"),
            ),
            padding=20,
            background=COLORS["panel"],
            radius=8,
        ),
        spacing_after=BLOCK_SPACING_MM["preamble"],
        label=f"preamble {chapter.id}",
    )


def build_verse_block(chapter: Chapter, verse: Verse) -> ContentBlock:
    """
    Build the full-fidelity block for one verse.

    Layout: number badge (plus sajdah/ruku badges), Arabic text right-aligned,
    then each translation in italics under a separator.
    """
    badges = [Badge(str(verse.verse_number), background=COLORS["badge_dark"],
                    font_size=14, circle=True)]
    if verse.sajdah_number:
        badges.append(Badge(f"Sajdah {verse.sajdah_number}", background=COLORS["badge_marker"]))
    if verse.ruku_number:
        badges.append(Badge(f"Ruku {verse.ruku_number}", background=COLORS["badge_marker"]))

    children: List = [
        BadgeRow(tuple(badges), margin_bottom=15),
        Text(verse.text_uthmani, font_size=24, color=COLORS["text"], align="right",
             line_height=1.8, rtl=True, margin_bottom=15),
    ]

    translations = verse.translation_texts()
    if translations:
        children.append(Rule(color=COLORS["border"], margin_bottom=15))
        for translation in translations:
            children.append(Text(translation, font_size=14, color=COLORS["translation"],
                                 italic=True, line_height=1.6, margin_bottom=10))

    return ContentBlock(
        markup=Box(
            tuple(children),
            padding=20,
            background=COLORS["panel"],
            border_color=COLORS["border"],
            border_width=1,
            radius=8,
        ),
        spacing_after=BLOCK_SPACING_MM["verse"],
        label=f"verse {chapter.id}:{verse.verse_number}",
    )


def build_verse_fallback_block(chapter: Chapter, verse: Verse) -> ContentBlock:
    """
    Build the reduced-fidelity block used after a verse failed to render.

    Plain text only: no badges, no panel, no right-to-left shaping and no
    translations.
    """
    return ContentBlock(
        markup=Box((
            Text(f"{verse.verse_number}. {verse.text_uthmani}", font_size=18,
                 color=COLORS["text"], line_height=1.6),
        )),
        spacing_after=BLOCK_SPACING_MM["verse"],
        label=f"verse {chapter.id}:{verse.verse_number} (fallback)",
    )


def build_footer_block(generated_on: date) -> ContentBlock:
    """Build the footer with the static label and the generation date."""
    return ContentBlock(
        markup=Box((
            Rule(color=COLORS["border"], margin_bottom=10),
            Text(FOOTER_LABEL, font_size=12, color=COLORS["muted"], align="center"),
            Text(format_date(generated_on), font_size=12, color=COLORS["muted"], align="center"),
        )),
        spacing_after=BLOCK_SPACING_MM["footer"],
        label="footer",
    )
