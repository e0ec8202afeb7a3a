"""Data models for document extraction."""

from dataclasses import dataclass, field


@dataclass
class ExtractedDocument:
    """Result of text extraction from an uploaded file.

    PDF text carries inline page markers and no ``page_breaks``; Word and
    plain text documents carry an estimated page-break table instead.
    """

    text: str
    page_count: int
    source_type: str
    page_breaks: list[int] | None = None
    metadata: dict = field(default_factory=dict)

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())
