"""PDF Assembly Pipeline

Main orchestration logic: assemble, serialize, name and deliver the artifact.
"""
import logging
import os
import tempfile
from datetime import date
from typing import Callable, Optional, Sequence

from .assembly_result import AssemblyResult
from .cover_options import CoverOptions
from .document_builder import DocumentAssembler, PdfWriter
from .exceptions import QuranPdfError, RenderFailedError
from .section_data import SectionData
from .utils import format_file_size, generate_file_name

logger = logging.getLogger(__name__)

# A sink receives (filename, pdf bytes) and returns where it stored them
Sink = Callable[[str, bytes], Optional[str]]


class FileSink:
    """Writes artifacts into a directory, creating it if needed.

    Data is written to a temporary file in the same directory and renamed
    over the final path once complete. A failed write leaves nothing at the
    final path.
    """

    def __init__(self, output_dir: str):
        self.output_dir = output_dir

    def __call__(self, filename: str, data: bytes) -> str:
        os.makedirs(self.output_dir, exist_ok=True)
        path = os.path.join(self.output_dir, filename)
        fd, tmp_path = tempfile.mkstemp(suffix=".tmp", dir=self.output_dir)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, path)
        except OSError:
            os.unlink(tmp_path)
            raise
        logger.info("Wrote %s (%s)", path, format_file_size(len(data)))
        return path


class QuranPDFPipeline:
    """PDF assembly pipeline orchestrator.

    This class runs the complete workflow for already-fetched sections:
    1. Assembly - cover, chapters and footer laid out into pages
    2. Serialization - pages written as PDF
    3. Delivery - artifact named and handed to the sink

    A failure in any step produces a failed AssemblyResult and the sink is
    never called, so no partial artifact is written.

    Attributes:
        assembler: DocumentAssembler used for layout
        writer: PdfWriter used for serialization
    """

    def __init__(
        self,
        assembler: Optional[DocumentAssembler] = None,
        writer: Optional[PdfWriter] = None,
    ):
        self.assembler = assembler or DocumentAssembler()
        self.writer = writer or PdfWriter()

    def process(
        self,
        sections: Sequence[SectionData],
        cover_options: Optional[CoverOptions] = None,
        sink: Optional[Sink] = None,
        generated_on: Optional[date] = None,
    ) -> AssemblyResult:
        """Execute the complete assembly pipeline.

        Args:
            sections: Chapters in output order
            cover_options: Cover configuration
            sink: Optional callable receiving (filename, pdf bytes)
            generated_on: Date printed on cover and footer (defaults to today)

        Returns:
            AssemblyResult with outputs and status

        Raises:
            Does not raise for package or I/O errors - they are captured in AssemblyResult.error
        """
        cover_options = cover_options or CoverOptions()
        try:
            # Step 1: Layout
            document = self.assembler.assemble(sections, cover_options, generated_on)

            # Step 2: Serialization
            pdf_bytes = self.writer.write(document, title=cover_options.title)

            # Step 3: Delivery
            filename = generate_file_name(sections)
            output_path = sink(filename, pdf_bytes) if sink is not None else None

        except (QuranPdfError, OSError) as e:
            logger.error("PDF generation failed: %s", e)
            result = AssemblyResult(
                status="failed",
                status_message=f"PDF generation failed: {e}",
                error=str(e),
                error_type=type(e).__name__,
            )
            if isinstance(e, RenderFailedError):
                result.section_index = e.section_index
                result.entry_index = e.entry_index
            return result

        return AssemblyResult(
            status="completed",
            status_message=f"✅ PDF ready: {filename} ({document.page_count} pages)",
            filename=filename,
            pdf_bytes=pdf_bytes,
            output_path=output_path,
            page_count=document.page_count,
        )
