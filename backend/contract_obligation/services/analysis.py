"""LLM analysis that turns contract text into candidate obligations."""

import json
import logging
import re

from anthropic import APIConnectionError, InternalServerError, RateLimitError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from contract_obligation.config import settings
from contract_obligation.exceptions import ObligationAnalysisError
from contract_obligation.services import anthropic
from contract_obligation.services.anthropic import Completion
from contract_obligation.services.attribution.models import CandidateObligation
from contract_obligation.services.posthog import LLMTimer, track_llm_generation

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert legal contract analyzer with deep expertise across contract "
    "types and industries. You extract every legally significant element from a "
    "contract with high accuracy, quote the contract verbatim, and assess how risky "
    "each element is for the party that carries it."
)

ELEMENT_TYPES = [
    "Obligation",
    "Payment Term",
    "Deadline/Timeframe",
    "Performance Standard/SLA",
    "Condition",
    "Right",
    "Intellectual Property",
    "Restriction/Prohibition",
    "Confidentiality/NDA",
    "Warranty/Representation",
    "Limitation of Liability",
    "Indemnification",
    "Insurance Requirement",
    "Termination Provision",
    "Renewal/Extension Term",
    "Amendment/Change Procedure",
    "Survival Clause",
    "Dispute Resolution",
    "Compliance Requirement",
    "Force Majeure",
    "Material Breach/Default",
    "Relationship Definition",
    "Assignment/Transfer",
    "Notice Requirement",
    "Entire Agreement/Integration",
    "Severability",
    "Other Significant Term",
]

USER_PROMPT_TEMPLATE = """Analyze this contract and extract ALL legally significant elements with a risk assessment.

For each element provide these fields:

1. element_type: one of {element_types}. Use "Other Significant Term" when nothing else fits.
2. description: what the element requires, provides or restricts. Include monetary amounts and percentages.
3. responsible_party: who must perform it or who it applies to. Consolidate aliases of the same party; use "Both Parties" for mutual terms.
4. affected_party: who else is impacted or benefits, or "N/A".
5. deadline: the exact deadline ("October 15, 2025", "within 30 days of signing", "monthly") or "Not specified".
6. conditions: conditions that must hold for the element to apply, or "None".
7. source_text: the exact sentence(s) from the contract. Quote verbatim; this is used to locate the element in the document.
8. risk_level: High, Medium or Low.
   High: uncapped liability, one-sided indemnification, auto-renewal with under 60 days notice, termination without cause, waived rights, no cure period, unilateral change rights.
   Medium: vague language, moderately broad scope, 30-60 day notice periods, capped or partial indemnification, unbalanced audit rights.
   Low: clear, balanced, industry-standard terms with reasonable deadlines.
9. risk_explanation: 2-4 sentences explaining the risk level.

Only extract what is actually in the contract. Every source_text must be an exact quote.

Return ONLY a valid JSON array of objects with the 9 fields above, with no text before or after it.

Contract text:
{text}"""

_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def build_user_prompt(text: str) -> str:
    """Render the extraction prompt for one contract."""
    return USER_PROMPT_TEMPLATE.format(element_types=", ".join(ELEMENT_TYPES), text=text)


def parse_obligations_response(response_text: str) -> list[CandidateObligation]:
    """
    Parse Claude's reply into candidate obligations.

    Claude sometimes wraps the JSON in prose, so the first JSON array is used,
    falling back to a single JSON object.

    Raises:
        ObligationAnalysisError: The reply contains no parseable JSON
    """
    json_text = response_text.strip()

    array_match = _ARRAY_PATTERN.search(json_text)
    if array_match:
        json_text = array_match.group(0)
    else:
        object_match = _OBJECT_PATTERN.search(json_text)
        if object_match:
            json_text = f"[{object_match.group(0)}]"

    try:
        raw_obligations = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.error(f"JSON parsing failed, raw response: {response_text[:500]}")
        raise ObligationAnalysisError("Failed to parse AI response as JSON") from e

    if not isinstance(raw_obligations, list):
        return []

    return [CandidateObligation.from_raw(raw) for raw in raw_obligations]


class ObligationAnalyzer:
    """Extract candidate obligations from contract text with Claude."""

    def __init__(self, model: str | None = None):
        self.model = model

    @retry(
        retry=retry_if_exception_type((APIConnectionError, RateLimitError, InternalServerError)),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        stop=stop_after_attempt(3),
        reraise=True,
    )
    async def _complete(self, text: str) -> Completion:
        """Call Claude with the extraction prompt, retrying transient API errors."""
        return await anthropic.generate(
            messages=[{"role": "user", "content": build_user_prompt(text)}],
            system_prompt=SYSTEM_PROMPT,
            model=self.model,
        )

    async def analyze(self, text: str, distinct_id: str = "anonymous") -> list[CandidateObligation]:
        """
        Run the extraction prompt over a contract.

        Args:
            text: Full extracted contract text
            distinct_id: Identifier used for analytics

        Returns:
            Candidate obligations in the order Claude listed them

        Raises:
            ObligationAnalysisError: The API key is missing, the call failed,
                or the reply could not be parsed
        """
        if not settings.anthropic_api_key:
            raise ObligationAnalysisError("Anthropic API key not configured")

        try:
            with LLMTimer() as timer:
                completion = await self._complete(text)
        except Exception as e:
            logger.error(f"Claude API error: {e}")
            raise ObligationAnalysisError("Failed to extract obligations using AI") from e

        if not completion.text:
            raise ObligationAnalysisError("No response from Claude")

        candidates = parse_obligations_response(completion.text)

        track_llm_generation(
            distinct_id=distinct_id,
            model=completion.model,
            input_tokens=completion.input_tokens,
            output_tokens=completion.output_tokens,
            latency_ms=timer.elapsed_ms,
            properties={"obligation_count": len(candidates)},
        )
        logger.info(f"Claude returned {len(candidates)} candidate obligations")
        return candidates
