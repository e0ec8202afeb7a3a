"""PDF text extraction using pypdf."""

import io
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from contract_obligation.exceptions import DocumentExtractionError, InvalidDocumentError
from contract_obligation.services.attribution.pagination import page_marker
from contract_obligation.services.file.extraction.models import ExtractedDocument

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF"


class PDFExtractor:
    """Extract page-segmented text from PDFs.

    Every page is prefixed with an inline "--- Page N ---" marker so that
    quoted text can later be attributed to its page.
    """

    def extract(self, pdf_content: bytes) -> ExtractedDocument:
        """
        Extract text from a PDF.

        Args:
            pdf_content: Raw PDF bytes

        Returns:
            ExtractedDocument with marker-annotated text

        Raises:
            InvalidDocumentError: The bytes are not a readable PDF
            DocumentExtractionError: A page could not be decoded
        """
        if not pdf_content.startswith(PDF_HEADER):
            raise InvalidDocumentError("Invalid PDF file format")

        try:
            reader = PdfReader(io.BytesIO(pdf_content))
            if reader.is_encrypted:
                raise InvalidDocumentError("PDF is password-protected")
            pages = [page.extract_text() or "" for page in reader.pages]
        except PdfReadError as e:
            logger.error(f"PDF extraction failed: {e}")
            raise InvalidDocumentError(f"PDF parsing failed: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            logger.error(f"PDF extraction failed: {e}")
            raise DocumentExtractionError(f"PDF parsing failed: {e}") from e

        text = self.join_pages(pages)
        logger.info(f"Extracted {len(text)} characters from {len(pages)} PDF pages")

        return ExtractedDocument(
            text=text,
            page_count=len(pages),
            source_type="pdf",
            metadata={"page_count": len(pages)},
        )

    @staticmethod
    def join_pages(pages: list[str]) -> str:
        """Concatenate page texts, each opened by its page marker."""
        parts = []
        for page_idx, page_text in enumerate(pages):
            parts.append(page_marker(page_idx + 1) + page_text.strip() + "\n\n")
        return "".join(parts).strip()
