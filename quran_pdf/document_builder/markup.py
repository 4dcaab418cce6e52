"""Content Markup

Immutable node tree describing what a content block looks like. Builders
produce it, the rasterizer paints it; nothing here knows about pages.

Sizes inside the tree are raster pixels, except ContentBlock.spacing_after
which is the physical gap (millimeters) reserved below the block on the page.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Text:
    """A paragraph of wrapped text."""

    content: str
    font_size: int = 14
    color: str = "#1f2937"
    bold: bool = False
    italic: bool = False
    align: str = "left"  # left, center, right
    line_height: float = 1.4
    margin_bottom: int = 0
    rtl: bool = False


@dataclass(frozen=True)
class Badge:
    """A small label painted on a filled pill or circle."""

    label: str
    background: str = "#10b981"
    color: str = "#ffffff"
    font_size: int = 12
    circle: bool = False


@dataclass(frozen=True)
class BadgeRow:
    """A row of badges: the first is left-aligned, the rest are right-aligned."""

    badges: Tuple[Badge, ...]
    margin_bottom: int = 0


@dataclass(frozen=True)
class Rule:
    """A horizontal separator line."""

    color: str = "#e5e7eb"
    thickness: int = 1
    margin_top: int = 0
    margin_bottom: int = 0


@dataclass(frozen=True)
class Box:
    """A container stacking its children vertically."""

    children: Tuple["Node", ...]
    padding: int = 0
    background: Optional[str] = None
    border_color: Optional[str] = None
    border_width: int = 0
    radius: int = 0
    margin_bottom: int = 0


Node = Union[Text, BadgeRow, Rule, Box]


@dataclass(frozen=True)
class ContentBlock:
    """An opaque renderable unit handed to the rasterizer.

    Attributes:
        markup: Root container of the block
        spacing_after: Vertical gap in millimeters reserved after the block
        label: Identifier used in logs and error messages (e.g. "verse 2:255")
    """

    markup: Box
    spacing_after: float = 0.0
    label: str = ""
