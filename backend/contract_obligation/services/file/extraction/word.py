"""Word document (.docx) extraction using python-docx."""

import io
import logging
import zipfile

from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table
from docx.text.paragraph import Paragraph

from contract_obligation.exceptions import InvalidDocumentError
from contract_obligation.services.attribution.pagination import (
    FORM_FEED,
    estimate_page_breaks,
    page_count_from_breaks,
)
from contract_obligation.services.file.extraction.models import ExtractedDocument

logger = logging.getLogger(__name__)


def _has_page_break(paragraph: Paragraph) -> bool:
    """True when Word rendered or the author forced a page break here."""
    if paragraph.contains_page_break:
        return True
    return bool(paragraph._p.xpath('./w:r/w:br[@w:type="page"]'))


def _table_lines(table: Table) -> list[str]:
    lines = []
    for row in table.rows:
        row_text = " | ".join(cell.text.strip() for cell in row.cells)
        if row_text.strip(" |"):
            lines.append(row_text)
    return lines


class WordExtractor:
    """Extract raw text from Word documents."""

    def extract(self, content: bytes) -> ExtractedDocument:
        """
        Extract text from a .docx file and estimate its page breaks.

        Paragraphs and tables are emitted in body order, one paragraph per
        line. Page breaks recorded in the document become form feeds, which
        the page-break estimator treats as explicit page boundaries.

        Args:
            content: Raw bytes of the Word file

        Returns:
            ExtractedDocument with an estimated page-break table

        Raises:
            InvalidDocumentError: The file is not a readable .docx archive
        """
        try:
            document = DocxDocument(io.BytesIO(content))
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
            logger.error(f"Word extraction failed: {e}")
            raise InvalidDocumentError("Failed to extract text from Word document") from e

        lines: list[str] = []
        for block in document.iter_inner_content():
            if isinstance(block, Paragraph):
                prefix = FORM_FEED if lines and _has_page_break(block) else ""
                lines.append(prefix + block.text)
            else:
                lines.extend(_table_lines(block))

        text = "\n".join(lines)
        page_breaks = estimate_page_breaks(text)
        logger.info(
            f"Extracted {len(text)} characters from Word document "
            f"({len(page_breaks)} estimated page starts)"
        )

        return ExtractedDocument(
            text=text,
            page_count=page_count_from_breaks(page_breaks),
            source_type="word",
            page_breaks=page_breaks,
            metadata={"paragraph_count": len(document.paragraphs)},
        )
