"""Cover Options Dataclass

Configuration surface consumed by the cover block builder.
"""
from dataclasses import dataclass

from .config import DEFAULT_COVER_TITLE, DEFAULT_COVER_SUBTITLE
from .exceptions import InvalidConfigurationError


@dataclass(frozen=True)
class CoverOptions:
    """Options for the cover page of an assembled document.

    Attributes:
        title: Main cover title
        subtitle: Line shown under the title (may be empty)
        include_date: If True, print the generation date on the cover
        include_stats: If True, print chapter and verse counts on the cover
    """

    title: str = DEFAULT_COVER_TITLE
    subtitle: str = DEFAULT_COVER_SUBTITLE
    include_date: bool = True
    include_stats: bool = True

    def __post_init__(self):
        """Validate options after initialization."""
        if not isinstance(self.title, str) or not self.title.strip():
            raise InvalidConfigurationError("Cover title must be a non-empty string")
        if not isinstance(self.subtitle, str):
            raise InvalidConfigurationError(
                f"Cover subtitle must be a string, got {type(self.subtitle).__name__}"
            )
