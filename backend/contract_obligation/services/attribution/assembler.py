"""Merge LLM candidate obligations with their located source text.

Each candidate's quoted ``source_text`` is looked up in the document (exact,
then fuzzy), mapped to a page and line, and paired with a normalized risk
block. Matching failures never drop a candidate; the quote is kept without
positional fields instead.
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from contract_obligation.services.attribution.locator import (
    DEFAULT_FUZZY_THRESHOLD,
    find_exact,
    find_fuzzy,
)
from contract_obligation.services.attribution.models import (
    DEFAULT_DEADLINE,
    DEFAULT_RISK_EXPLANATION,
    DEFAULT_RISK_LEVEL,
    RISK_LEVELS,
    CandidateObligation,
    ContractSource,
    FinishedObligation,
    RiskAssessment,
    SourceSpan,
)
from contract_obligation.services.attribution.pagination import resolve_position

logger = logging.getLogger(__name__)


def locate_source(
    source_text: str,
    text: str,
    page_breaks: list[int] | None = None,
    threshold: float = DEFAULT_FUZZY_THRESHOLD,
) -> SourceSpan:
    """
    Find where a quotation sits in the document.

    Args:
        source_text: Quote produced by the LLM (trimmed here)
        text: Full document text
        page_breaks: Estimated page-break table for Word/plain text documents;
            None for PDF text with inline page markers
        threshold: Minimum fuzzy score to accept

    Returns:
        A located SourceSpan, or one carrying only the quote when neither the
        exact nor the fuzzy search finds it.
    """
    quote = source_text.strip()

    start = find_exact(quote, text)
    score = 1.0
    matched_text = quote

    if start is None:
        match = find_fuzzy(quote, text, threshold)
        if match is not None:
            start = match.index
            score = match.score
            matched_text = match.matched_text

    if start is None:
        logger.debug(f"Source text not found in document: {quote[:60]!r}")
        return SourceSpan(text=quote)

    page, line = resolve_position(text, start, page_breaks)
    return SourceSpan(
        text=quote,
        matched_text=matched_text,
        start_index=start,
        end_index=start + len(quote),
        match_score=score,
        page_number=page,
        line_number=line,
    )


def normalize_risk(level: str | None, explanation: str | None) -> RiskAssessment:
    """Use the LLM's risk data when complete, otherwise default to low risk."""
    if level and explanation:
        normalized = level.strip().title()
        if normalized not in RISK_LEVELS:
            normalized = level
        return RiskAssessment(level=normalized, explanation=explanation)
    return RiskAssessment(level=DEFAULT_RISK_LEVEL, explanation=DEFAULT_RISK_EXPLANATION)


def assemble_obligation(
    candidate: CandidateObligation,
    text: str,
    page_breaks: list[int] | None = None,
    *,
    contract_source: ContractSource | None = None,
) -> FinishedObligation:
    """Build the finished record for one candidate obligation."""
    if text is None:
        raise TypeError("Document text is required to assemble obligations")

    source = None
    if candidate.source_text and candidate.source_text.strip():
        source = locate_source(candidate.source_text, text, page_breaks)

    return FinishedObligation(
        obligation=candidate.description or "",
        responsible_party=candidate.responsible_party or "",
        deadline=candidate.deadline or DEFAULT_DEADLINE,
        affected_party=candidate.affected_party,
        conditions=candidate.conditions,
        financial_impact=candidate.financial_impact,
        element_type=candidate.element_type,
        source=source,
        risk=normalize_risk(candidate.risk_level, candidate.risk_explanation),
        contract_source=contract_source,
    )


def assemble_obligations(
    candidates: Sequence[CandidateObligation],
    text: str,
    page_breaks: list[int] | None = None,
    *,
    contract_source: ContractSource | None = None,
    max_workers: int | None = None,
) -> list[FinishedObligation]:
    """
    Build finished records for every candidate of one document, in order.

    Candidates only read the shared text and page-break table, so with
    ``max_workers`` greater than 1 they are located concurrently.
    """
    if text is None:
        raise TypeError("Document text is required to assemble obligations")

    def _assemble(candidate: CandidateObligation) -> FinishedObligation:
        return assemble_obligation(
            candidate, text, page_breaks, contract_source=contract_source
        )

    if max_workers and max_workers > 1 and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            finished = list(executor.map(_assemble, candidates))
    else:
        finished = [_assemble(candidate) for candidate in candidates]

    located = sum(1 for o in finished if o.source is not None and o.source.is_located)
    quoted = sum(1 for o in finished if o.source is not None)
    logger.info(f"Assembled {len(finished)} obligations ({located}/{quoted} sources located)")
    return finished
