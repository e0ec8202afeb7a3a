"""Document extraction services."""

from contract_obligation.services.file.extraction.models import ExtractedDocument
from contract_obligation.services.file.extraction.pdf import PDFExtractor
from contract_obligation.services.file.extraction.service import ExtractionService
from contract_obligation.services.file.extraction.text import TextExtractor
from contract_obligation.services.file.extraction.word import WordExtractor

__all__ = [
    "ExtractedDocument",
    "ExtractionService",
    "PDFExtractor",
    "TextExtractor",
    "WordExtractor",
]
