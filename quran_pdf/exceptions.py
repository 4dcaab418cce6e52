"""Custom Exception Hierarchy

Exception hierarchy for the quran-pdf-builder package. Failures below the
document assembler either recover locally (fallback render) or are wrapped
and propagated upward; the pipeline is the single point where an error is
turned into a user-visible failed result.
"""
from typing import Optional


class QuranPdfError(Exception):
    """Base exception for all quran-pdf-builder errors.

    This is the root of the exception hierarchy. Catching this exception
    will catch all custom exceptions from the package.
    """
    pass


# Input Errors
class InputError(QuranPdfError):
    """Raised when assembly input is missing or invalid. Nothing is rendered."""
    pass


class NoSectionsSelectedError(InputError):
    """Raised when no section identifiers were requested."""

    def __init__(self):
        super().__init__("Please select at least one surah")


class InvalidSectionDataError(InputError):
    """Raised when a content provider payload fails validation."""

    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(f"Invalid section data field '{field}': {reason}")


class InvalidConfigurationError(InputError):
    """Raised when configuration parameters are invalid."""
    pass


# Content Provider Errors
class ContentUnavailableError(QuranPdfError):
    """Raised when a section could not be obtained from the content provider."""

    def __init__(self, section_id, reason: str):
        self.section_id = section_id
        super().__init__(f"Content for section {section_id} is unavailable: {reason}")


# Rendering Errors
class RenderingError(QuranPdfError):
    """Base class for rasterization errors."""
    pass


class RenderError(RenderingError):
    """Raised when a content block cannot be rasterized."""

    def __init__(self, label: str, reason: str):
        self.label = label
        self.reason = reason
        super().__init__(f"Failed to render block '{label}': {reason}")


class SurfaceBusyError(RenderingError):
    """Raised when the off-screen surface is requested while a render is in flight."""

    def __init__(self):
        super().__init__("Rendering surface is already in use by another render")


# Layout Errors
class LayoutError(QuranPdfError):
    """Raised when the page flow engine is used after it was finalized."""
    pass


# Assembly Errors
class AssemblyError(QuranPdfError):
    """Base class for errors that abort a document assembly."""
    pass


class EmptyInputError(AssemblyError, InputError):
    """Raised when assembly is invoked with an empty section list."""

    def __init__(self):
        super().__init__("Cannot assemble a document without sections")


class RenderFailedError(AssemblyError):
    """Raised when a block failed to render and could not be recovered.

    Section index is the 1-based position of the section in the assembly
    input; entry index is the verse number. Either is None when the failed
    block is not bound to a section (cover, footer) or an entry (header,
    preamble).
    """

    def __init__(
        self,
        section_index: Optional[int],
        entry_index: Optional[int],
        original_exception: Exception,
    ):
        self.section_index = section_index
        self.entry_index = entry_index
        self.original_exception = original_exception

        if section_index is None:
            where = "outside sections"
        elif entry_index is None:
            where = f"section {section_index}"
        else:
            where = f"section {section_index}, entry {entry_index}"
        super().__init__(f"Render failed at {where}: {original_exception}")
