"""Data models for obligation source attribution."""

from dataclasses import dataclass
from typing import Any

RISK_LEVELS = ("High", "Medium", "Low")

DEFAULT_RISK_LEVEL = "Low"
DEFAULT_RISK_EXPLANATION = "Risk analysis not provided - defaulted to low risk"
DEFAULT_DEADLINE = "Not specified"


def _clean(value: Any) -> str | None:
    """Return a stripped string, or None for missing/empty/non-string values."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class CandidateObligation:
    """An obligation as returned by the LLM, before it has been verified.

    Every field is optional: the model is asked for all of them but routinely
    drops some, so missing data is represented as None rather than rejected.
    """

    description: str | None = None
    responsible_party: str | None = None
    deadline: str | None = None
    affected_party: str | None = None
    conditions: str | None = None
    financial_impact: str | None = None
    element_type: str | None = None
    source_text: str | None = None
    risk_level: str | None = None
    risk_explanation: str | None = None

    @classmethod
    def from_raw(cls, raw: dict) -> "CandidateObligation":
        """Build a candidate from one element of the LLM's JSON array."""
        if not isinstance(raw, dict):
            return cls()
        return cls(
            description=_clean(raw.get("description")) or _clean(raw.get("obligation")),
            responsible_party=_clean(raw.get("responsible_party")),
            deadline=_clean(raw.get("deadline")),
            affected_party=_clean(raw.get("affected_party")),
            conditions=_clean(raw.get("conditions")),
            financial_impact=_clean(raw.get("financial_impact")),
            element_type=_clean(raw.get("element_type")),
            # Keep surrounding whitespace; the assembler trims before matching
            source_text=raw.get("source_text") if isinstance(raw.get("source_text"), str) else None,
            risk_level=_clean(raw.get("risk_level")),
            risk_explanation=_clean(raw.get("risk_explanation")),
        )


@dataclass(frozen=True)
class FuzzyMatch:
    """Best approximate window found by the fuzzy locator."""

    index: int
    score: float
    token_index: int
    token_count: int
    matched_text: str


@dataclass(frozen=True)
class SourceSpan:
    """Where an obligation's quoted source text sits in the document.

    Only ``text`` is set when the quote could not be located.
    """

    text: str
    matched_text: str | None = None
    start_index: int | None = None
    end_index: int | None = None
    match_score: float | None = None
    page_number: int | None = None
    line_number: int | None = None

    @property
    def is_located(self) -> bool:
        return self.start_index is not None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"text": self.text}
        for key in (
            "matched_text",
            "start_index",
            "end_index",
            "match_score",
            "page_number",
            "line_number",
        ):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class RiskAssessment:
    level: str
    explanation: str

    def to_dict(self) -> dict:
        return {"level": self.level, "explanation": self.explanation}


@dataclass(frozen=True)
class ContractSource:
    """Which uploaded file an obligation came from."""

    filename: str
    page_info: str | None = None

    def to_dict(self) -> dict:
        data = {"filename": self.filename}
        if self.page_info:
            data["page_info"] = self.page_info
        return data


@dataclass(frozen=True)
class FinishedObligation:
    """A candidate merged with its source location and normalized risk."""

    obligation: str
    responsible_party: str
    deadline: str
    risk: RiskAssessment
    affected_party: str | None = None
    conditions: str | None = None
    financial_impact: str | None = None
    element_type: str | None = None
    source: SourceSpan | None = None
    contract_source: ContractSource | None = None

    def to_dict(self) -> dict:
        """Serialize for JSON responses and the result store."""
        data: dict[str, Any] = {
            "obligation": self.obligation,
            "responsible_party": self.responsible_party,
            "deadline": self.deadline,
        }
        for key in ("affected_party", "conditions", "financial_impact", "element_type"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.source is not None:
            data["source"] = self.source.to_dict()
        data["risk"] = self.risk.to_dict()
        if self.contract_source is not None:
            data["contract_source"] = self.contract_source.to_dict()
        return data
