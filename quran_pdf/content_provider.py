"""Content Provider Boundary

Loads chapter payloads and validates them into SectionData before assembly
starts. Fetching may run in parallel, but results are always returned
complete and in the requested order; the assembler never sees partial data.
"""
import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from .config import DEFAULT_FETCH_WORKERS
from .exceptions import (
    ContentUnavailableError,
    InputError,
    NoSectionsSelectedError,
    QuranPdfError,
)
from .section_data import SectionData

logger = logging.getLogger(__name__)


class JsonDirectoryProvider:
    """Reads chapter payloads from ``<root>/<chapter id>.json`` files.

    Each file holds the {"chapter": {...}, "verses": [...]} payload served by
    the chapter API.
    """

    def __init__(self, root: str):
        self.root = root

    def path_for(self, section_id: int) -> str:
        return os.path.join(self.root, f"{section_id}.json")

    def fetch(self, section_id: int) -> SectionData:
        """
        Load and validate one chapter.

        Raises:
            ContentUnavailableError: If the file is missing or not valid JSON
            InvalidSectionDataError: If the payload has the wrong shape
        """
        path = self.path_for(section_id)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except FileNotFoundError:
            raise ContentUnavailableError(section_id, f"no file at {path}")
        except (OSError, json.JSONDecodeError) as e:
            raise ContentUnavailableError(section_id, str(e)) from e

        return SectionData.from_payload(payload)


def load_sections(
    provider,
    section_ids: Sequence[int],
    max_workers: int = DEFAULT_FETCH_WORKERS,
) -> List[SectionData]:
    """
    Fetch every requested section, in parallel, preserving request order.

    Args:
        provider: Object with a fetch(section_id) -> SectionData method
        section_ids: Chapter ids in output order
        max_workers: Thread pool size

    Returns:
        SectionData list in the same order as section_ids

    Raises:
        NoSectionsSelectedError: If section_ids is empty
        InputError: If a payload failed validation
        ContentUnavailableError: If any section could not be fetched
    """
    if not section_ids:
        raise NoSectionsSelectedError()

    logger.info("Fetching %d section(s)", len(section_ids))
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(section_ids)))) as pool:
        futures = [pool.submit(provider.fetch, section_id) for section_id in section_ids]

        sections = []
        for section_id, future in zip(section_ids, futures):
            try:
                sections.append(future.result())
            except (ContentUnavailableError, InputError):
                raise
            except (QuranPdfError, OSError) as e:
                raise ContentUnavailableError(section_id, str(e)) from e

    return sections
