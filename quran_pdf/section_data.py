"""Section Data Records

Typed records for the chapters and verses handed to the assembler, plus the
validation of raw content provider payloads. Payloads are checked here, at
the boundary, so nothing inside the layout engine has to inspect loosely
typed data.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .config import MAX_TRANSLATION_CHARS, MISSING_TRANSLATION_TEXT
from .exceptions import InvalidSectionDataError


@dataclass(frozen=True)
class Chapter:
    """Section metadata.

    Attributes:
        id: Chapter number
        name_simple: Transliterated display name (e.g. "Al-Fatihah")
        name_arabic: Arabic display name
        verses_count: Number of verses declared by the provider
        bismillah_pre: True if the chapter opens with the Bismillah preamble
    """

    id: int
    name_simple: str
    name_arabic: str
    verses_count: int
    bismillah_pre: bool = False


@dataclass(frozen=True)
class Verse:
    """A single entry of a chapter.

    Attributes:
        verse_number: Position of the verse inside its chapter (entry index)
        text_uthmani: Arabic text (primary text, required)
        translations: Ordered secondary texts; None marks a missing translation
        ruku_number: Optional ruku marker
        sajdah_number: Optional sajdah marker
        id: Optional upstream verse identifier
    """

    verse_number: int
    text_uthmani: str
    translations: Tuple[Optional[str], ...] = ()
    ruku_number: Optional[int] = None
    sajdah_number: Optional[int] = None
    id: Optional[int] = None

    def translation_texts(self) -> Tuple[str, ...]:
        """Return printable translations, truncated and with placeholders filled."""
        texts = []
        for text in self.translations:
            if not text:
                texts.append(MISSING_TRANSLATION_TEXT)
            elif len(text) > MAX_TRANSLATION_CHARS:
                texts.append(text[:MAX_TRANSLATION_CHARS] + "...")
            else:
                texts.append(text)
        return tuple(texts)


@dataclass(frozen=True)
class SectionData:
    """A chapter together with its verses in reading order."""

    chapter: Chapter
    verses: Tuple[Verse, ...] = ()

    @property
    def has_preamble(self) -> bool:
        return self.chapter.bismillah_pre

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SectionData":
        """
        Build a SectionData from a content provider payload.

        Args:
            payload: Dict shaped like {"chapter": {...}, "verses": [...]}

        Returns:
            Validated SectionData

        Raises:
            InvalidSectionDataError: If a required field is missing or mistyped
        """
        if not isinstance(payload, dict):
            raise InvalidSectionDataError("payload", "expected an object")

        chapter_data = payload.get("chapter")
        if not isinstance(chapter_data, dict):
            raise InvalidSectionDataError("chapter", "expected an object")

        chapter = Chapter(
            id=_require_int(chapter_data, "id", "chapter.id"),
            name_simple=_require_str(chapter_data, "name_simple", "chapter.name_simple"),
            name_arabic=_optional_str(chapter_data, "name_arabic", "chapter.name_arabic") or "",
            verses_count=_require_int(chapter_data, "verses_count", "chapter.verses_count"),
            bismillah_pre=_optional_bool(chapter_data, "bismillah_pre", "chapter.bismillah_pre"),
        )

        verses_data = payload.get("verses")
        if not isinstance(verses_data, list):
            raise InvalidSectionDataError("verses", "expected a list")

        verses = tuple(
            _parse_verse(item, f"verses[{i}]") for i, item in enumerate(verses_data)
        )
        return cls(chapter=chapter, verses=verses)


def _parse_verse(item: Any, path: str) -> Verse:
    if not isinstance(item, dict):
        raise InvalidSectionDataError(path, "expected an object")

    raw_translations = item.get("translations") or []
    if not isinstance(raw_translations, list):
        raise InvalidSectionDataError(f"{path}.translations", "expected a list")

    translations = []
    for j, translation in enumerate(raw_translations):
        if isinstance(translation, dict):
            text = translation.get("text")
        else:
            text = translation
        if text is not None and not isinstance(text, str):
            raise InvalidSectionDataError(
                f"{path}.translations[{j}]", "expected a string or an object with 'text'"
            )
        translations.append(text)

    return Verse(
        verse_number=_require_int(item, "verse_number", f"{path}.verse_number"),
        text_uthmani=_require_str(item, "text_uthmani", f"{path}.text_uthmani"),
        translations=tuple(translations),
        ruku_number=_optional_int(item, "ruku_number", f"{path}.ruku_number"),
        sajdah_number=_optional_int(item, "sajdah_number", f"{path}.sajdah_number"),
        id=_optional_int(item, "id", f"{path}.id"),
    )


def _require_int(data: Dict[str, Any], key: str, path: str) -> int:
    value = data.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSectionDataError(path, "expected an integer")
    return value


def _optional_int(data: Dict[str, Any], key: str, path: str) -> Optional[int]:
    if data.get(key) is None:
        return None
    return _require_int(data, key, path)


def _require_str(data: Dict[str, Any], key: str, path: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise InvalidSectionDataError(path, "expected a string")
    return value


def _optional_str(data: Dict[str, Any], key: str, path: str) -> Optional[str]:
    if data.get(key) is None:
        return None
    return _require_str(data, key, path)


def _optional_bool(data: Dict[str, Any], key: str, path: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidSectionDataError(path, "expected a boolean")
    return value
