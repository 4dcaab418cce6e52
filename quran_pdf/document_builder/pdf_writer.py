"""PDF Writer Module

Serializes a finalized Document into PDF bytes with ReportLab. Every page of
the document becomes one PDF page of the document's size; each placement is
drawn as an image after flipping its top-left origin to PDF's bottom-left.
"""
import io
import logging

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdfcanvas

from ..config import PDF_AUTHOR, PDF_CREATOR
from .page_flow import Document
from .unit_converter import flip_y_coordinate, mm_to_points

logger = logging.getLogger(__name__)


class PdfWriter:
    """Writes Documents as PDF."""

    def write(self, document: Document, title: str = "") -> bytes:
        """
        Serialize a document.

        Args:
            document: Finalized document
            title: PDF title metadata

        Returns:
            PDF file content
        """
        buffer = io.BytesIO()
        page_size = (mm_to_points(document.page_width), mm_to_points(document.page_height))
        pdf = pdfcanvas.Canvas(buffer, pagesize=page_size)
        pdf.setTitle(title)
        pdf.setAuthor(PDF_AUTHOR)
        pdf.setCreator(PDF_CREATOR)

        for page in document.pages:
            for placement in page.placements:
                bottom = flip_y_coordinate(placement.y, placement.height, document.page_height)
                pdf.drawImage(
                    ImageReader(placement.image.image),
                    mm_to_points(placement.x),
                    mm_to_points(bottom),
                    width=mm_to_points(placement.width),
                    height=mm_to_points(placement.height),
                )
            pdf.showPage()

        pdf.save()
        data = buffer.getvalue()
        logger.debug("Serialized %d pages into %d bytes", document.page_count, len(data))
        return data
