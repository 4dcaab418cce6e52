"""Assembly Result Dataclass

Result outputs from the PDF assembly pipeline.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class AssemblyResult:
    """Result from the PDF assembly pipeline.

    The caller receives either a complete artifact or a structured error
    identifying which section/entry failed; a failed result never carries
    PDF bytes.

    Attributes:
        status: Processing status ("completed", "failed")
        status_message: Human-readable status message

        # Output
        filename: Artifact name (see utils.generate_file_name)
        pdf_bytes: Serialized document
        output_path: Where the sink stored the artifact (None if no sink or failed)
        page_count: Number of pages in the document

        # Error Handling
        error: Error message if processing failed (None otherwise)
        error_type: Exception class name of the failure
        section_index: 1-based section position of a render failure
        entry_index: Verse number of a render failure
    """

    # Status
    status: str  # "completed", "failed"
    status_message: str

    # Output
    filename: Optional[str] = None
    pdf_bytes: Optional[bytes] = None
    output_path: Optional[str] = None
    page_count: int = 0

    # Error Handling
    error: Optional[str] = None
    error_type: Optional[str] = None
    section_index: Optional[int] = None
    entry_index: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        """True if assembly completed and produced an artifact."""
        return self.status == "completed" and self.pdf_bytes is not None

    @property
    def is_failed(self) -> bool:
        """True if assembly failed with an error."""
        return self.status == "failed"
