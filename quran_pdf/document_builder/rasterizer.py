"""Rasterizer Module

Paints a ContentBlock's markup onto an off-screen Pillow canvas of a fixed
pixel width. The height follows the natural flow of the content: the markup
is measured first, then painted on a canvas of exactly that height.

Only one render may be in flight at a time. The off-screen canvas is owned by
a RenderSurface and handed out as a scoped handle around each render call.
"""
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import List, Optional

from PIL import Image, ImageColor, ImageDraw

from ..exceptions import RenderError, SurfaceBusyError
from .font_manager import FontManager
from .markup import Badge, BadgeRow, Box, ContentBlock, Rule, Text

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = "#ffffff"

# Badge geometry (pixels)
BADGE_PADDING_X = 10
BADGE_PADDING_Y = 5
BADGE_GAP = 8
CIRCLE_SCALE = 2.15  # 14px label → 30px circle

_ALIGNMENTS = ("left", "center", "right")


@dataclass(frozen=True, eq=False)
class RasterImage:
    """A decoded raster buffer and, once placed, its physical size.

    Attributes:
        image: Pillow RGB image owned by this object
        pixel_width: Raster width in pixels
        pixel_height: Raster height in pixels
        physical_width: Width on the page in millimeters (0 until scaled)
        physical_height: Height on the page in millimeters (0 until scaled)
    """

    image: Image.Image
    pixel_width: int
    pixel_height: int
    physical_width: float = 0.0
    physical_height: float = 0.0

    def with_physical_size(self, physical_width: float, physical_height: float) -> "RasterImage":
        return replace(self, physical_width=physical_width, physical_height=physical_height)


class RenderSurface:
    """The single off-screen rendering surface.

    acquire() raises SurfaceBusyError instead of waiting when a render is
    already in flight, so accidental concurrent use fails loudly.
    """

    def __init__(self):
        self._lock = threading.Lock()

    @property
    def in_flight(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def acquire(self, width: int, height: int):
        """
        Hand out a fresh white canvas for the duration of one render.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels

        Yields:
            Pillow RGB image, closed when the scope exits

        Raises:
            SurfaceBusyError: If another render holds the surface
        """
        if not self._lock.acquire(blocking=False):
            raise SurfaceBusyError()
        canvas = None
        try:
            canvas = Image.new("RGB", (width, height), BACKGROUND_COLOR)
            yield canvas
        finally:
            if canvas is not None:
                canvas.close()
            self._lock.release()


class Rasterizer:
    """Renders content blocks to raster images.

    Attributes:
        fonts: FontManager providing sized fonts
        surface: RenderSurface shared by every render of this rasterizer
    """

    def __init__(self, font_manager: Optional[FontManager] = None, surface: Optional[RenderSurface] = None):
        self.fonts = font_manager or FontManager()
        self.surface = surface or RenderSurface()

    def render(self, block: ContentBlock, target_pixel_width: int) -> RasterImage:
        """
        Render a block at the given pixel width on an opaque white background.

        Args:
            block: Block to render
            target_pixel_width: Output width in pixels

        Returns:
            RasterImage of exactly target_pixel_width pixels wide

        Raises:
            RenderError: If the markup cannot be measured or painted
            SurfaceBusyError: If another render is in flight
        """
        if target_pixel_width <= 0:
            raise RenderError(block.label, f"target width must be positive, got {target_pixel_width}")
        if not isinstance(block.markup, Box):
            raise RenderError(block.label, "block markup must be a Box")

        try:
            height = max(1, self._layout(block.markup, target_pixel_width))
            with self.surface.acquire(target_pixel_width, height) as canvas:
                draw = ImageDraw.Draw(canvas)
                self._layout(block.markup, target_pixel_width, draw, 0, 0)
                buffer = canvas.copy()
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
            raise RenderError(block.label, str(e)) from e

        logger.debug("Rendered '%s' at %dx%d px", block.label, target_pixel_width, height)
        return RasterImage(image=buffer, pixel_width=target_pixel_width, pixel_height=height)

    # ------------------------------------------------------------------
    # Layout: measures when draw is None, paints otherwise. Returns the
    # vertical space consumed, including the node's bottom margin.
    # ------------------------------------------------------------------

    def _layout(self, node, width: int, draw: Optional[ImageDraw.ImageDraw] = None, x: int = 0, y: int = 0) -> int:
        if isinstance(node, Box):
            return self._layout_box(node, width, draw, x, y)
        if isinstance(node, Text):
            return self._layout_text(node, width, draw, x, y)
        if isinstance(node, BadgeRow):
            return self._layout_badges(node, width, draw, x, y)
        if isinstance(node, Rule):
            return self._layout_rule(node, width, draw, x, y)
        raise ValueError(f"Unsupported markup node: {type(node).__name__}")

    def _layout_box(self, node: Box, width, draw, x, y) -> int:
        inset = node.padding + node.border_width
        inner_width = width - 2 * inset
        if inner_width <= 0:
            raise ValueError(f"Box padding leaves no room for content (width {width}px)")

        if draw is None:
            content_height = sum(self._layout(child, inner_width) for child in node.children)
            return content_height + 2 * inset + node.margin_bottom

        box_height = self._layout(node, width) - node.margin_bottom
        if box_height > 0 and (node.background or node.border_width):
            draw.rounded_rectangle(
                (x, y, x + width - 1, y + box_height - 1),
                radius=node.radius,
                fill=ImageColor.getrgb(node.background) if node.background else None,
                outline=ImageColor.getrgb(node.border_color or "#000000") if node.border_width else None,
                width=node.border_width,
            )

        cursor = y + inset
        for child in node.children:
            cursor += self._layout(child, inner_width, draw, x + inset, cursor)
        return box_height + node.margin_bottom

    def _layout_text(self, node: Text, width, draw, x, y) -> int:
        if node.align not in _ALIGNMENTS:
            raise ValueError(f"Unknown text alignment '{node.align}'")
        if not node.content.strip():
            return node.margin_bottom

        font = self.fonts.get_font(node.font_size, bold=node.bold, italic=node.italic)
        direction = "rtl" if node.rtl and self.fonts.supports_rtl else None
        lines = self._wrap(node.content, font, width, direction)
        line_px = max(1, int(round(node.font_size * node.line_height)))

        if draw is not None:
            fill = ImageColor.getrgb(node.color)
            baseline_offset = (line_px - node.font_size) // 2
            for i, line in enumerate(lines):
                line_width = self._text_length(font, line, direction)
                if node.align == "center":
                    line_x = x + (width - line_width) / 2
                elif node.align == "right":
                    line_x = x + width - line_width
                else:
                    line_x = x
                draw.text(
                    (line_x, y + i * line_px + baseline_offset),
                    line,
                    font=font,
                    fill=fill,
                    direction=direction,
                )

        return len(lines) * line_px + node.margin_bottom

    def _layout_badges(self, node: BadgeRow, width, draw, x, y) -> int:
        if not node.badges:
            return node.margin_bottom

        sizes = [self._badge_size(badge) for badge in node.badges]
        row_height = max(h for _, h in sizes)

        if draw is not None:
            first_width, first_height = sizes[0]
            self._paint_badge(draw, node.badges[0], x, y + (row_height - first_height) // 2, first_width, first_height)

            rest = list(zip(node.badges[1:], sizes[1:]))
            rest_width = sum(w for _, (w, _) in rest) + BADGE_GAP * max(0, len(rest) - 1)
            badge_x = x + width - rest_width
            for badge, (badge_width, badge_height) in rest:
                self._paint_badge(draw, badge, badge_x, y + (row_height - badge_height) // 2, badge_width, badge_height)
                badge_x += badge_width + BADGE_GAP

        return row_height + node.margin_bottom

    def _layout_rule(self, node: Rule, width, draw, x, y) -> int:
        if draw is not None and node.thickness > 0:
            top = y + node.margin_top
            draw.rectangle(
                (x, top, x + width - 1, top + node.thickness - 1),
                fill=ImageColor.getrgb(node.color),
            )
        return node.margin_top + node.thickness + node.margin_bottom

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _badge_size(self, badge: Badge):
        font = self.fonts.get_font(badge.font_size, bold=True)
        label_width = int(round(self._text_length(font, badge.label, None)))
        if badge.circle:
            diameter = max(int(round(badge.font_size * CIRCLE_SCALE)), label_width + 2 * BADGE_PADDING_Y)
            return diameter, diameter
        return label_width + 2 * BADGE_PADDING_X, badge.font_size + 2 * BADGE_PADDING_Y

    def _paint_badge(self, draw, badge: Badge, x, y, width, height):
        fill = ImageColor.getrgb(badge.background)
        box = (x, y, x + width - 1, y + height - 1)
        if badge.circle:
            draw.ellipse(box, fill=fill)
        else:
            draw.rounded_rectangle(box, radius=height // 2, fill=fill)

        font = self.fonts.get_font(badge.font_size, bold=True)
        left, top, right, bottom = font.getbbox(badge.label)
        draw.text(
            (x + width / 2 - (left + right) / 2, y + height / 2 - (top + bottom) / 2),
            badge.label,
            font=font,
            fill=ImageColor.getrgb(badge.color),
        )

    def _wrap(self, text: str, font, width: int, direction: Optional[str]) -> List[str]:
        """Greedy word wrap; words wider than the line are broken by character."""
        lines: List[str] = []
        for paragraph in text.split("\n"):
            current = ""
            for word in paragraph.split():
                candidate = f"{current} {word}" if current else word
                if self._text_length(font, candidate, direction) <= width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                while len(word) > 1 and self._text_length(font, word, direction) > width:
                    cut = self._fit_prefix(word, font, width, direction)
                    lines.append(word[:cut])
                    word = word[cut:]
                current = word
            lines.append(current)

        # Drop trailing blank lines left by a final newline
        while lines and not lines[-1]:
            lines.pop()
        return lines

    def _fit_prefix(self, word: str, font, width: int, direction: Optional[str]) -> int:
        cut = 1
        while cut < len(word) and self._text_length(font, word[:cut + 1], direction) <= width:
            cut += 1
        return cut

    @staticmethod
    def _text_length(font, text: str, direction: Optional[str]) -> float:
        if direction:
            return font.getlength(text, direction=direction)
        return font.getlength(text)
