"""Unified extraction service for multiple document types."""

from contract_obligation.exceptions import UnsupportedDocumentError
from contract_obligation.services.file.extraction.models import ExtractedDocument
from contract_obligation.services.file.extraction.pdf import PDFExtractor
from contract_obligation.services.file.extraction.text import TextExtractor
from contract_obligation.services.file.extraction.word import WordExtractor


class ExtractionService:
    """Unified text extraction service for contract uploads."""

    PDF_MIMETYPES = {
        "application/pdf",
    }

    WORD_MIMETYPES = {
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",  # .docx
        "application/msword",  # .doc
    }

    TEXT_MIMETYPES = {
        "text/plain",
    }

    def __init__(self):
        self.pdf_extractor = PDFExtractor()
        self.word_extractor = WordExtractor()
        self.text_extractor = TextExtractor()

    def extract(self, content: bytes, mime_type: str) -> ExtractedDocument:
        """Extract text from an uploaded file of any supported type."""
        if self.is_pdf(mime_type):
            return self.extract_pdf(content)
        if self.is_word(mime_type):
            return self.extract_word(content)
        if self.is_text(mime_type):
            return self.extract_text(content)
        raise UnsupportedDocumentError(f"Unsupported document type: {mime_type}")

    def extract_pdf(self, content: bytes) -> ExtractedDocument:
        """Extract text from a PDF with inline page markers."""
        return self.pdf_extractor.extract(content)

    def extract_word(self, content: bytes) -> ExtractedDocument:
        """Extract text from a Word document with estimated page breaks."""
        return self.word_extractor.extract(content)

    def extract_text(self, content: bytes) -> ExtractedDocument:
        """Decode a plain text file with estimated page breaks."""
        return self.text_extractor.extract(content)

    def is_pdf(self, mime_type: str) -> bool:
        """Check if mime type is a PDF."""
        return mime_type in self.PDF_MIMETYPES

    def is_word(self, mime_type: str) -> bool:
        """Check if mime type is a Word document."""
        return mime_type in self.WORD_MIMETYPES

    def is_text(self, mime_type: str) -> bool:
        """Check if mime type is plain text."""
        return mime_type in self.TEXT_MIMETYPES

    def is_supported(self, mime_type: str) -> bool:
        """Check if the mime type is supported for extraction."""
        return self.is_pdf(mime_type) or self.is_word(mime_type) or self.is_text(mime_type)
