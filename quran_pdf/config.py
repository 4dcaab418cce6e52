"""Configuration Constants

Constants for the chapter PDF assembly pipeline.
"""
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm

# Page Geometry (millimeters, A4 portrait)
PAGE_WIDTH_MM = round(A4[0] / mm, 6)  # 210
PAGE_HEIGHT_MM = round(A4[1] / mm, 6)  # 297
PAGE_MARGIN_MM = 15.0

# Raster Resolution
RASTER_DPI = 96  # Device-independent pixels per inch
MM_PER_INCH = 25.4
PIXELS_PER_MM = RASTER_DPI / MM_PER_INCH  # ≈ 3.7795

# Float tolerance for the "block fits exactly" comparison (millimeters)
FIT_TOLERANCE_MM = 1e-6

# Vertical spacing reserved after each block type (millimeters)
BLOCK_SPACING_MM = {
    "cover": 0.0,
    "header": 15.0,
    "preamble": 15.0,
    "verse": 10.0,
    "footer": 0.0,
}

# Translation Handling
MAX_TRANSLATION_CHARS = 5000
MISSING_TRANSLATION_TEXT = "Translation not available"

# Preamble (Bismillah) Content
BISMILLAH_ARABIC = "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ"
BISMILLAH_ENGLISH = "In the name of Allah, the Most Gracious, the Most Merciful"

# Cover Page Defaults
DEFAULT_COVER_TITLE = "Holy Quran"
DEFAULT_COVER_SUBTITLE = "Selected Chapters"

# Footer
FOOTER_LABEL = "Generated by Quran PDF Generator"

# PDF Metadata
PDF_AUTHOR = "Quran PDF Generator"
PDF_CREATOR = "quran-pdf-builder"

# Output Naming
MULTI_SECTION_FILENAME = "Quran_Chapters_{count}_Selected.pdf"
SINGLE_SECTION_FALLBACK_NAME = "Surah_{id}"

# Content Provider
DEFAULT_FETCH_WORKERS = 4

# Palette (hex colors used by the block builders)
COLORS = {
    "accent": "#2563eb",
    "text": "#1f2937",
    "muted": "#6b7280",
    "translation": "#4b5563",
    "border": "#e5e7eb",
    "panel": "#f3f4f6",
    "badge_dark": "#252525",
    "badge_marker": "#10b981",
}
