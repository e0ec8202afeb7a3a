"""Plain text extraction."""

import logging

from contract_obligation.services.attribution.pagination import (
    estimate_page_breaks,
    page_count_from_breaks,
)
from contract_obligation.services.file.extraction.models import ExtractedDocument

logger = logging.getLogger(__name__)


class TextExtractor:
    """Decode .txt uploads and estimate their page breaks."""

    def extract(self, content: bytes) -> ExtractedDocument:
        # utf-8-sig drops a leading BOM that would otherwise shift every offset
        text = content.decode("utf-8-sig", errors="replace")
        page_breaks = estimate_page_breaks(text, plain_text=True)
        logger.info(
            f"Extracted {len(text)} characters from text file "
            f"({len(page_breaks)} estimated page starts)"
        )
        return ExtractedDocument(
            text=text,
            page_count=page_count_from_breaks(page_breaks),
            source_type="text",
            page_breaks=page_breaks,
        )
