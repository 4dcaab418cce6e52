"""Utilities Module

Helper functions for output naming and size reporting.
"""
import os
import re
from typing import Sequence

from .config import MULTI_SECTION_FILENAME, SINGLE_SECTION_FALLBACK_NAME


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "45.3 KB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def clean_filename(filename: str) -> str:
    """
    Clean a display name for safe use as a filename stem.

    Args:
        filename: Original name (may contain path separators or an extension)

    Returns:
        Cleaned name, or 'document' if nothing usable is left
    """
    # Remove path components
    filename = os.path.basename(filename)

    # Remove extension
    name, _ = os.path.splitext(filename)

    # Replace invalid characters
    name = re.sub(r'[^\w\s-]', '', name)

    # Replace spaces with underscores
    name = re.sub(r'\s+', '_', name.strip())

    # Limit length
    if len(name) > 50:
        name = name[:50]

    return name or 'document'


def generate_file_name(sections: Sequence) -> str:
    """
    Build the artifact name for an assembled document.

    Single-section runs use the sanitized section display name; multi-section
    runs use a generic label carrying the number of sections.

    Args:
        sections: Assembled SectionData sequence

    Returns:
        Filename ending in .pdf

    Examples:
        >>> generate_file_name([al_fatiha])
        'Al-Fatihah.pdf'
        >>> generate_file_name([al_fatiha, al_ikhlas])
        'Quran_Chapters_2_Selected.pdf'
    """
    if len(sections) == 1:
        chapter = sections[0].chapter
        stem = clean_filename(chapter.name_simple or "")
        if stem == "document":
            stem = SINGLE_SECTION_FALLBACK_NAME.format(id=chapter.id)
        return f"{stem}.pdf"
    return MULTI_SECTION_FILENAME.format(count=len(sections))
