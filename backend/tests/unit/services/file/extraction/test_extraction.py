"""Tests for the extraction service."""

import io

import pytest
from docx import Document
from pypdf import PdfWriter

from contract_obligation.exceptions import InvalidDocumentError, UnsupportedDocumentError
from contract_obligation.services.file.extraction import (
    ExtractedDocument,
    ExtractionService,
    PDFExtractor,
    TextExtractor,
    WordExtractor,
)

DOCX_MIMETYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _docx_bytes(build) -> bytes:
    document = Document()
    build(document)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _blank_pdf_bytes(pages: int = 1) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class TestPDFExtractor:
    """Tests for PDF extraction."""

    def test_join_pages_adds_markers(self):
        """Each page is opened by its marker and pages are blank-line separated."""
        text = PDFExtractor.join_pages(["First page text\n", "  Second page text  "])

        assert text == (
            "--- Page 1 ---\nFirst page text\n\n--- Page 2 ---\nSecond page text"
        )

    def test_join_pages_empty(self):
        assert PDFExtractor.join_pages([]) == ""

    def test_rejects_missing_header(self):
        """Bytes without the %PDF header are rejected before parsing."""
        with pytest.raises(InvalidDocumentError, match="Invalid PDF file format"):
            PDFExtractor().extract(b"GIF89a not a pdf")

    def test_blank_pages(self):
        """A PDF with no text still reports its pages and markers."""
        result = PDFExtractor().extract(_blank_pdf_bytes(pages=2))

        assert result.source_type == "pdf"
        assert result.page_count == 2
        assert result.page_breaks is None
        assert "--- Page 1 ---" in result.text
        assert "--- Page 2 ---" in result.text


class TestWordExtractor:
    """Tests for Word extraction."""

    def test_paragraphs_one_per_line(self):
        content = _docx_bytes(
            lambda d: (d.add_paragraph("Clause one."), d.add_paragraph("Clause two."))
        )

        result = WordExtractor().extract(content)

        assert result.source_type == "word"
        assert result.text == "Clause one.\nClause two."
        assert result.page_breaks == [0]
        assert result.page_count == 1

    def test_page_break_becomes_estimated_break(self):
        """An explicit Word page break starts a new page in the table."""

        def build(document):
            document.add_paragraph("Clause one.")
            document.add_page_break()
            document.add_paragraph("Clause two.")

        result = WordExtractor().extract(_docx_bytes(build))

        assert "\f" in result.text
        assert len(result.page_breaks) == 2
        assert result.text.index("Clause two.") > result.page_breaks[1]

    def test_tables_flattened(self):
        def build(document):
            document.add_paragraph("Fees")
            table = document.add_table(rows=1, cols=2)
            table.cell(0, 0).text = "Monthly fee"
            table.cell(0, 1).text = "$500"

        result = WordExtractor().extract(_docx_bytes(build))

        assert result.text == "Fees\nMonthly fee | $500"

    def test_invalid_archive(self):
        with pytest.raises(InvalidDocumentError):
            WordExtractor().extract(b"this is not a zip archive")


class TestTextExtractor:
    """Tests for plain text extraction."""

    def test_decodes_and_strips_bom(self):
        result = TextExtractor().extract("\ufeffParty A shall pay.".encode())

        assert result.text == "Party A shall pay."
        assert result.source_type == "text"

    def test_plain_text_page_signal(self):
        result = TextExtractor().extract(b"Page one\n---PAGE---\nPage two")
        assert result.page_breaks == [0, 9]

    def test_long_text_estimates_pages(self):
        content = ("x" * 99 + "\n").encode() * 95

        result = TextExtractor().extract(content)

        assert result.page_breaks == [0, 3100, 6200, 9300]
        assert result.page_count == 3

    def test_invalid_utf8_replaced(self):
        result = TextExtractor().extract(b"Fee: \xff500")
        assert result.text == "Fee: \ufffd500"


class TestExtractionService:
    """Tests for the unified extraction service."""

    @pytest.mark.parametrize(
        "mime_type",
        ["application/pdf", DOCX_MIMETYPE, "application/msword", "text/plain"],
    )
    def test_supported_types(self, mime_type):
        assert ExtractionService().is_supported(mime_type)

    @pytest.mark.parametrize("mime_type", ["image/png", "text/html", ""])
    def test_unsupported_types(self, mime_type):
        assert not ExtractionService().is_supported(mime_type)

    def test_unsupported_type_raises(self):
        with pytest.raises(UnsupportedDocumentError):
            ExtractionService().extract(b"<html></html>", "text/html")

    def test_dispatches_by_type(self):
        service = ExtractionService()

        assert service.extract(b"plain", "text/plain").source_type == "text"
        content = _docx_bytes(lambda d: d.add_paragraph("Word text"))
        assert service.extract(content, DOCX_MIMETYPE).text == "Word text"

    def test_has_text(self):
        assert not ExtractedDocument(text="  \n", page_count=1, source_type="text").has_text
        assert ExtractedDocument(text="x", page_count=1, source_type="text").has_text
