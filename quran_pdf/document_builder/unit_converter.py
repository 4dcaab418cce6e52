"""Unit Conversion Utilities

This module provides pure utility functions for converting between the
coordinate systems used while assembling a document:

- Page geometry: millimeters with origin at the top-left of the page
- Raster output: device-independent pixels (96 per inch)
- ReportLab: points with origin at the bottom-left of the page

All functions are pure (no side effects) and can be tested in isolation.
"""
from reportlab.lib.units import mm

from ..config import PIXELS_PER_MM


def to_pixels(millimeters: float) -> int:
    """
    Convert a physical length to raster pixels.

    Args:
        millimeters: Length in millimeters

    Returns:
        Length in pixels, rounded to the nearest whole pixel

    Examples:
        >>> to_pixels(25.4)  # one inch
        96
        >>> to_pixels(180)  # A4 content width with 15mm margins
        680
    """
    return int(round(millimeters * PIXELS_PER_MM))


def scaled_physical_height(pixel_width: int, pixel_height: int, physical_width: float) -> float:
    """
    Height of a raster image once scaled to fit a physical width.

    The scale preserves aspect ratio:
        physical_height = pixel_height * physical_width / pixel_width

    Args:
        pixel_width: Raster width in pixels (must be positive)
        pixel_height: Raster height in pixels
        physical_width: Target width in millimeters

    Returns:
        Target height in millimeters

    Examples:
        >>> scaled_physical_height(680, 340, 180.0)
        90.0
    """
    if pixel_width <= 0:
        raise ValueError(f"pixel_width must be positive, got {pixel_width}")
    return pixel_height * physical_width / pixel_width


def fit_to_width(raster, physical_width: float):
    """
    Attach physical dimensions to a RasterImage scaled to a physical width.

    Args:
        raster: RasterImage produced by the rasterizer
        physical_width: Target width in millimeters

    Returns:
        A copy of the RasterImage with physical_width / physical_height set
    """
    return raster.with_physical_size(
        physical_width,
        scaled_physical_height(raster.pixel_width, raster.pixel_height, physical_width),
    )


def mm_to_points(millimeters: float) -> float:
    """
    Convert millimeters to PDF points (1 point = 1/72 inch).

    Examples:
        >>> round(mm_to_points(25.4), 6)
        72.0
    """
    return millimeters * mm


def flip_y_coordinate(y: float, height: float, page_height: float) -> float:
    """
    Convert the top edge of a box from a top-left origin to the bottom edge
    in a bottom-left origin system.

    Args:
        y: Top edge of the box, measured down from the top of the page
        height: Box height (same units as y)
        page_height: Page height (same units as y)

    Returns:
        Y coordinate of the box's bottom edge measured up from the page bottom

    Examples:
        >>> flip_y_coordinate(15, 30, 297)
        252
    """
    return page_height - y - height
