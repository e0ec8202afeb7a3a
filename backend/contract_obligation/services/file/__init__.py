"""File processing services (extraction)."""

from contract_obligation.services.file.extraction import (
    ExtractedDocument,
    ExtractionService,
    PDFExtractor,
    TextExtractor,
    WordExtractor,
)

__all__ = [
    "ExtractedDocument",
    "ExtractionService",
    "PDFExtractor",
    "TextExtractor",
    "WordExtractor",
]
