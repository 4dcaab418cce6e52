"""Font Manager Module

Handles font lookup for the rasterizer, Arabic-capable font fallback chains,
and caching of loaded font objects.
"""
import logging
import os
from typing import Dict, List, Optional, Tuple

from PIL import ImageFont, features

logger = logging.getLogger(__name__)

_BUNDLED_FONT_DIR = os.path.join(os.path.dirname(__file__), '..', '..', 'fonts')

# Candidate files per style, in order of preference
FONT_CANDIDATES = {
    "regular": [
        os.path.join(_BUNDLED_FONT_DIR, 'DejaVuSans.ttf'),
        '/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf',
        '/usr/share/fonts/dejavu/DejaVuSans.ttf',
        '/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf',
        '/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf',
        '/System/Library/Fonts/Supplemental/Arial Unicode.ttf',  # macOS
        'C:\\Windows\\Fonts\\arial.ttf',  # Windows
    ],
    "bold": [
        os.path.join(_BUNDLED_FONT_DIR, 'DejaVuSans-Bold.ttf'),
        '/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf',
        '/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf',
        '/usr/share/fonts/truetype/noto/NotoSans-Bold.ttf',
        '/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf',
        'C:\\Windows\\Fonts\\arialbd.ttf',
    ],
    "italic": [
        os.path.join(_BUNDLED_FONT_DIR, 'DejaVuSans-Oblique.ttf'),
        '/usr/share/fonts/truetype/dejavu/DejaVuSans-Oblique.ttf',
        '/usr/share/fonts/dejavu/DejaVuSans-Oblique.ttf',
        '/usr/share/fonts/truetype/noto/NotoSans-Italic.ttf',
        '/usr/share/fonts/truetype/liberation/LiberationSans-Italic.ttf',
        'C:\\Windows\\Fonts\\ariali.ttf',
    ],
}


class FontManager:
    """Resolves font files and hands out sized Pillow font objects.

    Style fallback chain: italic/bold → regular → Pillow's built-in font.
    DejaVu Sans is preferred because it covers both Latin and Arabic.

    Attributes:
        font_paths: Resolved file path per style (None when not found)
        supports_rtl: True if Pillow was built with the raqm layout engine
    """

    def __init__(self, candidates: Optional[Dict[str, List[str]]] = None):
        self._candidates = candidates or FONT_CANDIDATES
        self._cache: Dict[Tuple[str, int], ImageFont.ImageFont] = {}
        self.font_paths: Dict[str, Optional[str]] = {}
        self.supports_rtl = bool(features.check("raqm"))
        self._setup_fonts()

    def _setup_fonts(self):
        """Find the first existing file for every style."""
        for style, paths in self._candidates.items():
            found = next((path for path in paths if os.path.exists(path)), None)
            self.font_paths[style] = found
            if found:
                logger.debug("Using %s font from %s", style, found)

        if not self.font_paths.get("regular"):
            logger.warning(
                "No TrueType font found; using Pillow's default font. "
                "Arabic text will not render correctly. "
                "Install fonts-dejavu-core or add DejaVuSans.ttf to fonts/"
            )
        if not self.supports_rtl:
            logger.warning(
                "Pillow was built without raqm; right-to-left text is drawn unshaped"
            )

    def _style_for(self, bold: bool, italic: bool) -> str:
        if bold and self.font_paths.get("bold"):
            return "bold"
        if italic and self.font_paths.get("italic"):
            return "italic"
        return "regular"

    def get_font(self, size: int, bold: bool = False, italic: bool = False):
        """
        Get a font object of the given pixel size.

        Args:
            size: Font size in pixels
            bold: Prefer the bold variant
            italic: Prefer the italic variant (ignored when bold is requested)

        Returns:
            Pillow font usable with ImageDraw.text and getlength

        Raises:
            OSError: If a resolved font file cannot be read
        """
        style = self._style_for(bold, italic)
        key = (style, size)
        font = self._cache.get(key)
        if font is None:
            path = self.font_paths.get(style)
            if path:
                font = ImageFont.truetype(path, size)
            else:
                font = ImageFont.load_default(size=size)
            self._cache[key] = font
        return font
