"""Document Assembler Module

Orchestrates a full layout run by coordinating specialized components:
- block_builders: produce content blocks from chapter data
- Rasterizer: turns each block into a raster image
- unit_converter: scales the raster to the physical content width
- PageFlow: positions the image, opening new pages as needed

The run is strictly sequential: blocks are rendered and placed one at a
time in document order, so the layout is deterministic.
"""
import logging
from datetime import date
from typing import Optional, Sequence

from ..config import PAGE_HEIGHT_MM, PAGE_MARGIN_MM, PAGE_WIDTH_MM
from ..cover_options import CoverOptions
from ..exceptions import EmptyInputError, RenderError, RenderFailedError
from ..section_data import SectionData
from . import unit_converter
from .block_builders import (
    build_cover_block,
    build_footer_block,
    build_preamble_block,
    build_section_header_block,
    build_verse_block,
    build_verse_fallback_block,
)
from .markup import ContentBlock
from .page_flow import Document, PageFlow, Placement
from .rasterizer import Rasterizer

logger = logging.getLogger(__name__)


class DocumentAssembler:
    """Lays out a cover, chapters and a footer into a paginated Document.

    Attributes:
        rasterizer: Renders content blocks (one render in flight at a time)
        page_width: Page width in millimeters
        page_height: Page height in millimeters
        margin: Page margin in millimeters
    """

    def __init__(
        self,
        rasterizer: Optional[Rasterizer] = None,
        page_width: float = PAGE_WIDTH_MM,
        page_height: float = PAGE_HEIGHT_MM,
        margin: float = PAGE_MARGIN_MM,
    ):
        self.rasterizer = rasterizer or Rasterizer()
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def assemble(
        self,
        sections: Sequence[SectionData],
        cover_options: Optional[CoverOptions] = None,
        generated_on: Optional[date] = None,
    ) -> Document:
        """
        Assemble the complete document.

        Steps:
        1. Reject empty input
        2. Cover block on the first page
        3. For each section: new page, header, optional preamble, verses
        4. Footer wherever it fits after the last verse
        5. Seal and finalize

        Args:
            sections: Chapters in output order
            cover_options: Cover configuration (defaults to CoverOptions())
            generated_on: Date printed on cover and footer (defaults to today)

        Returns:
            Finalized Document

        Raises:
            EmptyInputError: If sections is empty (nothing is rendered)
            RenderFailedError: If a block could not be rendered; no document is returned
        """
        if not sections:
            raise EmptyInputError()

        cover_options = cover_options or CoverOptions()
        generated_on = generated_on or date.today()

        flow = PageFlow(self.page_width, self.page_height, self.margin)
        pixel_width = unit_converter.to_pixels(flow.content_width)

        logger.info(
            "Assembling %d section(s) at %dpx content width", len(sections), pixel_width
        )

        cover = build_cover_block(sections, cover_options, generated_on)
        self._place_block(flow, cover, pixel_width, section_index=None)

        for section_index, section in enumerate(sections, start=1):
            chapter = section.chapter
            flow.force_new_page()

            header = build_section_header_block(chapter)
            self._place_block(flow, header, pixel_width, section_index)

            if section.has_preamble:
                preamble = build_preamble_block(chapter)
                self._place_block(flow, preamble, pixel_width, section_index)

            for verse in section.verses:
                block = build_verse_block(chapter, verse)
                try:
                    raster = self.rasterizer.render(block, pixel_width)
                except RenderError as e:
                    logger.warning("%s; retrying with plain fallback block", e)
                    fallback = build_verse_fallback_block(chapter, verse)
                    try:
                        raster = self.rasterizer.render(fallback, pixel_width)
                    except RenderError as fallback_error:
                        logger.error("Fallback render failed for '%s': %s", fallback.label, fallback_error)
                        raise RenderFailedError(section_index, verse.verse_number, fallback_error) from fallback_error
                    block = fallback
                self._place_raster(flow, raster, block)

        footer = build_footer_block(generated_on)
        self._place_block(flow, footer, pixel_width, section_index=None)

        document = flow.seal_and_finalize()
        logger.info("Assembled document with %d pages", document.page_count)
        return document

    def _place_block(
        self,
        flow: PageFlow,
        block: ContentBlock,
        pixel_width: int,
        section_index: Optional[int],
    ) -> Placement:
        """Render a block without fallback and place it."""
        try:
            raster = self.rasterizer.render(block, pixel_width)
        except RenderError as e:
            logger.error("Render failed for '%s': %s", block.label, e)
            raise RenderFailedError(section_index, None, e) from e
        return self._place_raster(flow, raster, block)

    @staticmethod
    def _place_raster(flow: PageFlow, raster, block: ContentBlock) -> Placement:
        scaled = unit_converter.fit_to_width(raster, flow.content_width)
        return flow.place_next(scaled, block.spacing_after, label=block.label)
