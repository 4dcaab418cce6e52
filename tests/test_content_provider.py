"""Tests for the content provider boundary."""
import json
import time

import pytest
from conftest import make_payload, make_section

from quran_pdf.content_provider import JsonDirectoryProvider, load_sections
from quran_pdf.exceptions import (
    ContentUnavailableError,
    InvalidSectionDataError,
    NoSectionsSelectedError,
)


def write_payload(directory, chapter_id, payload=None):
    path = directory / f"{chapter_id}.json"
    path.write_text(json.dumps(payload or make_payload(chapter_id=chapter_id)), encoding="utf-8")
    return path


class SlowProvider:
    """Returns later ids faster, so completion order differs from request order."""

    def fetch(self, section_id):
        time.sleep(0.05 / section_id)
        return make_section(section_id)


class TestJsonDirectoryProvider:

    def test_fetch_reads_payload(self, tmp_path):
        write_payload(tmp_path, 1)

        section = JsonDirectoryProvider(str(tmp_path)).fetch(1)

        assert section.chapter.id == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(ContentUnavailableError) as exc_info:
            JsonDirectoryProvider(str(tmp_path)).fetch(2)

        assert exc_info.value.section_id == 2

    def test_malformed_json(self, tmp_path):
        (tmp_path / "3.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(ContentUnavailableError):
            JsonDirectoryProvider(str(tmp_path)).fetch(3)


class TestLoadSections:

    def test_empty_selection(self, tmp_path):
        with pytest.raises(NoSectionsSelectedError):
            load_sections(JsonDirectoryProvider(str(tmp_path)), [])

    def test_results_follow_request_order(self):
        sections = load_sections(SlowProvider(), [1, 2, 3, 4])

        assert [s.chapter.id for s in sections] == [1, 2, 3, 4]

    def test_any_missing_section_prevents_loading(self, tmp_path):
        write_payload(tmp_path, 1)

        with pytest.raises(ContentUnavailableError) as exc_info:
            load_sections(JsonDirectoryProvider(str(tmp_path)), [1, 9])

        assert exc_info.value.section_id == 9

    def test_invalid_payload_propagates(self, tmp_path):
        write_payload(tmp_path, 1, payload={"chapter": {}})

        with pytest.raises(InvalidSectionDataError):
            load_sections(JsonDirectoryProvider(str(tmp_path)), [1])
