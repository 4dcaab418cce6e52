"""Document Builder Package

This package provides the layout engine that turns chapter data into a
paginated PDF:

Core Classes:
- DocumentAssembler: Main orchestrator class (from assembler.py)
- PageFlow: Pagination engine (cursor, page breaks, placements)
- Rasterizer: Renders content blocks to raster images
- RenderSurface: Single-owner off-screen canvas used by the rasterizer
- FontManager: Font lookup and Arabic-capable fallback chain
- PdfWriter: Serializes a finalized Document with ReportLab

Data Types:
- ContentBlock and markup nodes (Box, Text, BadgeRow, Badge, Rule)
- RasterImage, Placement, Page, Document

Utilities:
- unit_converter: Millimeter / pixel / point conversions
- block_builders: Cover, section and footer block builders
"""

from .assembler import DocumentAssembler
from .page_flow import Cursor, Document, Page, PageFlow, Placement
from .rasterizer import RasterImage, Rasterizer, RenderSurface
from .font_manager import FontManager
from .pdf_writer import PdfWriter
from .markup import Badge, BadgeRow, Box, ContentBlock, Rule, Text
from . import block_builders
from . import unit_converter

__all__ = [
    # Main orchestrator
    'DocumentAssembler',

    # Engine and data types
    'PageFlow',
    'Cursor',
    'Page',
    'Placement',
    'Document',
    'Rasterizer',
    'RasterImage',
    'RenderSurface',
    'FontManager',
    'PdfWriter',

    # Markup
    'ContentBlock',
    'Box',
    'Text',
    'BadgeRow',
    'Badge',
    'Rule',

    # Utility modules
    'block_builders',
    'unit_converter',
]
