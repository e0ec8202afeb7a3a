"""Source attribution for extracted obligations."""

from contract_obligation.services.attribution.assembler import (
    assemble_obligation,
    assemble_obligations,
    locate_source,
    normalize_risk,
)
from contract_obligation.services.attribution.locator import find_exact, find_fuzzy
from contract_obligation.services.attribution.models import (
    CandidateObligation,
    ContractSource,
    FinishedObligation,
    FuzzyMatch,
    RiskAssessment,
    SourceSpan,
)
from contract_obligation.services.attribution.pagination import (
    estimate_page_breaks,
    line_for_offset,
    page_count_from_breaks,
    page_for_offset,
    page_from_markers,
    page_marker,
    resolve_position,
)

__all__ = [
    "CandidateObligation",
    "ContractSource",
    "FinishedObligation",
    "FuzzyMatch",
    "RiskAssessment",
    "SourceSpan",
    "assemble_obligation",
    "assemble_obligations",
    "estimate_page_breaks",
    "find_exact",
    "find_fuzzy",
    "line_for_offset",
    "locate_source",
    "normalize_risk",
    "page_count_from_breaks",
    "page_for_offset",
    "page_from_markers",
    "page_marker",
    "resolve_position",
]
