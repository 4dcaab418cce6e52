"""Page Flow Engine

Pagination core. Tracks a cursor inside the current page, decides whether an
incoming raster fits, opens new pages on overflow and records placements.

Each page is either open (accepting placements) or sealed. A page is sealed
when the next page is opened or when the document is finalized. All
measurements are millimeters with the origin at the top-left page corner.

Invariants:
- a placement never crosses the bottom margin, except a single block taller
  than the usable page height, which is placed alone and allowed to overflow
- the cursor only moves down within a page and resets to the top margin
  exactly when a new page is opened
- page indexes are contiguous, starting at 0
"""
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from ..config import FIT_TOLERANCE_MM, PAGE_HEIGHT_MM, PAGE_MARGIN_MM, PAGE_WIDTH_MM
from ..exceptions import InvalidConfigurationError, LayoutError
from .rasterizer import RasterImage

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Placement:
    """A raster image positioned on a page."""

    image: RasterImage
    x: float
    y: float
    width: float
    height: float
    label: str = ""

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(eq=False)
class Page:
    """An ordered sequence of placements on one physical page."""

    index: int
    placements: List[Placement] = field(default_factory=list)
    sealed: bool = False
    is_last: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.placements


@dataclass(eq=False)
class Cursor:
    """Current write position: vertical offset on the current page."""

    y: float
    page: Page


@dataclass(frozen=True, eq=False)
class Document:
    """A finalized, ordered sequence of sealed pages."""

    pages: Tuple[Page, ...]
    page_width: float
    page_height: float
    margin: float

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def placements(self) -> Iterator[Tuple[int, Placement]]:
        """Yield (page index, placement) pairs in document order."""
        for page in self.pages:
            for placement in page.placements:
                yield page.index, placement


class PageFlow:
    """Places raster images onto fixed-size pages.

    Attributes:
        page_width: Page width in millimeters
        page_height: Page height in millimeters
        margin: Margin on all four sides in millimeters
    """

    def __init__(
        self,
        page_width: float = PAGE_WIDTH_MM,
        page_height: float = PAGE_HEIGHT_MM,
        margin: float = PAGE_MARGIN_MM,
    ):
        if margin < 0 or 2 * margin >= page_width or 2 * margin >= page_height:
            raise InvalidConfigurationError(
                f"Margin {margin}mm leaves no content area on a {page_width}x{page_height}mm page"
            )

        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

        self._pages: List[Page] = []
        self._finalized = False
        self._cursor = Cursor(y=margin, page=self._open_page())

    # Geometry

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def content_height(self) -> float:
        return self.page_height - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        """Lowest y a placement may reach."""
        return self.page_height - self.margin

    # State

    @property
    def cursor_y(self) -> float:
        return self._cursor.y

    @property
    def current_page(self) -> Page:
        return self._cursor.page

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def fits(self, height: float) -> bool:
        """True if a block of this height fits below the cursor. Equality fits."""
        return self._cursor.y + height <= self.bottom_limit + FIT_TOLERANCE_MM

    # Operations

    def place_next(self, image: RasterImage, spacing: float = 0.0, label: str = "") -> Placement:
        """
        Place an image below the cursor, breaking to a new page if it does not fit.

        Spacing is applied only after the placement succeeds, so a page break
        never carries over the gap requested by the block that triggered it.

        Args:
            image: RasterImage with physical size set (see unit_converter.fit_to_width)
            spacing: Gap in millimeters reserved below the image
            label: Identifier recorded on the placement

        Returns:
            The recorded Placement

        Raises:
            LayoutError: If the document was already finalized
            ValueError: If spacing is negative
        """
        self._ensure_open()
        if spacing < 0:
            raise ValueError(f"spacing must not be negative, got {spacing}")

        height = image.physical_height
        if not self.fits(height) and not self.current_page.is_empty:
            logger.debug(
                "Page %d full at y=%.2fmm, '%s' needs %.2fmm; breaking",
                self.current_page.index, self._cursor.y, label, height,
            )
            self._break_page()

        if not self.fits(height):
            logger.warning(
                "'%s' is %.2fmm tall, exceeding the %.2fmm content height; it overflows page %d",
                label, height, self.content_height, self.current_page.index,
            )

        placement = Placement(
            image=image,
            x=self.margin,
            y=self._cursor.y,
            width=image.physical_width or self.content_width,
            height=height,
            label=label,
        )
        self.current_page.placements.append(placement)
        self._cursor.y += height + spacing

        logger.debug(
            "Placed '%s' on page %d at y=%.2fmm (h=%.2fmm)",
            label, self.current_page.index, placement.y, height,
        )
        return placement

    def force_new_page(self) -> Page:
        """
        Seal the current page and open a new one unconditionally.

        Returns:
            The newly opened page
        """
        self._ensure_open()
        self._break_page()
        return self.current_page

    def seal_and_finalize(self) -> Document:
        """
        Seal the last open page and return the finished document.

        Raises:
            LayoutError: If called twice
        """
        self._ensure_open()
        last_page = self.current_page
        last_page.sealed = True
        last_page.is_last = True
        self._finalized = True

        logger.debug("Finalized document with %d pages", len(self._pages))
        return Document(
            pages=tuple(self._pages),
            page_width=self.page_width,
            page_height=self.page_height,
            margin=self.margin,
        )

    # Internals

    def _open_page(self) -> Page:
        page = Page(index=len(self._pages))
        self._pages.append(page)
        return page

    def _break_page(self):
        self.current_page.sealed = True
        self._cursor.page = self._open_page()
        self._cursor.y = self.margin

    def _ensure_open(self):
        if self._finalized:
            raise LayoutError("Document is already finalized; no further placements accepted")
