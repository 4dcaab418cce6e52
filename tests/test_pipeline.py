"""Tests for QuranPDFPipeline, including end-to-end PDF output."""
import os
import re

from conftest import GENERATED_ON, FakeRasterizer, make_section

from quran_pdf.cover_options import CoverOptions
from quran_pdf.document_builder import DocumentAssembler
from quran_pdf.pipeline import FileSink, QuranPDFPipeline


def count_pdf_pages(data: bytes) -> int:
    return len(re.findall(rb"/Type\s*/Page\b", data))


class RecordingSink:
    def __init__(self):
        self.calls = []

    def __call__(self, filename, data):
        self.calls.append((filename, data))
        return f"memory://{filename}"


def pipeline_with(rasterizer):
    return QuranPDFPipeline(assembler=DocumentAssembler(rasterizer=rasterizer))


class TestQuranPDFPipeline:

    def test_successful_run_delivers_artifact(self, fake_rasterizer):
        sink = RecordingSink()
        sections = [make_section(1, name="Al-Fatihah")]

        result = pipeline_with(fake_rasterizer).process(
            sections, CoverOptions(title="Cover", subtitle="Demo"), sink=sink, generated_on=GENERATED_ON,
        )

        assert result.is_complete
        assert result.filename == "Al-Fatihah.pdf"
        assert result.output_path == "memory://Al-Fatihah.pdf"
        assert result.page_count == 2
        assert result.pdf_bytes.startswith(b"%PDF")
        assert count_pdf_pages(result.pdf_bytes) == 2
        assert sink.calls == [("Al-Fatihah.pdf", result.pdf_bytes)]

    def test_multi_section_filename(self, fake_rasterizer):
        result = pipeline_with(fake_rasterizer).process([make_section(1), make_section(2), make_section(3)])

        assert result.filename == "Quran_Chapters_3_Selected.pdf"
        assert result.page_count == 4

    def test_empty_input_produces_no_artifact(self, fake_rasterizer):
        sink = RecordingSink()

        result = pipeline_with(fake_rasterizer).process([], sink=sink)

        assert result.is_failed
        assert result.error_type == "EmptyInputError"
        assert result.page_count == 0
        assert result.pdf_bytes is None
        assert sink.calls == []

    def test_render_failure_reports_coordinates_and_skips_sink(self):
        rasterizer = FakeRasterizer(fail_labels={"verse 2:3", "verse 2:3 (fallback)"})
        sink = RecordingSink()

        result = pipeline_with(rasterizer).process(
            [make_section(1, verse_count=3), make_section(2, verse_count=3)], sink=sink,
        )

        assert result.is_failed
        assert result.error_type == "RenderFailedError"
        assert (result.section_index, result.entry_index) == (2, 3)
        assert result.pdf_bytes is None
        assert sink.calls == []

    def test_file_sink_writes_artifact(self, fake_rasterizer, tmp_path):
        output_dir = tmp_path / "out"

        result = pipeline_with(fake_rasterizer).process([make_section(1, name="Al-Ikhlas")], sink=FileSink(str(output_dir)))

        written = output_dir / "Al-Ikhlas.pdf"
        assert result.output_path == str(written)
        assert written.read_bytes() == result.pdf_bytes

    def test_failed_file_write_leaves_no_artifact(self, fake_rasterizer, tmp_path, monkeypatch):
        def fail_replace(src, dst):
            raise OSError("No space left on device")

        monkeypatch.setattr(os, "replace", fail_replace)

        result = pipeline_with(fake_rasterizer).process([make_section(1, name="Al-Ikhlas")], sink=FileSink(str(tmp_path)))

        assert result.is_failed
        assert result.error_type == "OSError"
        assert list(tmp_path.iterdir()) == []

    def test_end_to_end_with_real_rasterizer(self):
        sections = [
            make_section(1, verse_count=7, bismillah_pre=True),
            make_section(112, verse_count=4, bismillah_pre=True),
        ]

        result = QuranPDFPipeline().process(sections, CoverOptions(), generated_on=GENERATED_ON)

        assert result.is_complete
        assert result.page_count >= 3
        assert count_pdf_pages(result.pdf_bytes) == result.page_count
