"""Plain-text export of paid results."""

from contract_obligation.services.attribution.models import DEFAULT_RISK_LEVEL, RISK_LEVELS
from contract_obligation.services.results_store import StoredResult
from contract_obligation.utils import format_source_location

RULE = "=" * 72


def _field(label: str, value: str | None) -> str | None:
    if not value:
        return None
    return f"   {label}: {value}"


def _nested(obligation: dict, key: str) -> dict:
    # Stored obligations come from the client, so nested blocks may be any JSON value
    value = obligation.get(key)
    return value if isinstance(value, dict) else {}


def _risk_level(obligation: dict) -> str:
    risk = obligation.get("risk")
    if isinstance(risk, dict):
        return str(risk.get("level") or DEFAULT_RISK_LEVEL)
    if isinstance(risk, str) and risk.strip():
        return risk.strip()
    return DEFAULT_RISK_LEVEL


def _format_obligation(number: int, obligation: dict) -> list[str]:
    title = obligation.get("element_type") or "Obligation"
    lines = [f"{number}. [{title}] {obligation.get('obligation', '')}"]

    risk = _nested(obligation, "risk")
    details = [
        _field("Responsible party", obligation.get("responsible_party")),
        _field("Affected party", obligation.get("affected_party")),
        _field("Deadline", obligation.get("deadline")),
        _field("Conditions", obligation.get("conditions")),
        _field("Financial impact", obligation.get("financial_impact")),
        _field("Risk", _risk_level(obligation) if obligation.get("risk") else None),
        _field("Risk explanation", risk.get("explanation")),
    ]
    lines.extend(d for d in details if d)

    source = _nested(obligation, "source")
    if source.get("text"):
        lines.append(f'   Source ({format_source_location(source)}): "{source["text"]}"')

    return lines


def render_text_report(result: StoredResult) -> str:
    """Render stored results as a plain-text report."""
    lines = [
        RULE,
        "CONTRACT OBLIGATIONS REPORT",
        RULE,
        f"File: {result.filename}",
    ]
    if result.page_info:
        lines.append(f"Pages: {result.page_info}")
    lines.append(f"Obligations found: {len(result.obligations)}")

    risk_counts: dict[str, int] = {}
    for obligation in result.obligations:
        level = _risk_level(obligation)
        risk_counts[level] = risk_counts.get(level, 0) + 1
    if risk_counts:
        ordered = [level for level in RISK_LEVELS if level in risk_counts]
        ordered += sorted(level for level in risk_counts if level not in RISK_LEVELS)
        summary = ", ".join(f"{level}: {risk_counts[level]}" for level in ordered)
        lines.append(f"Risk summary: {summary}")

    lines.append(RULE)

    for number, obligation in enumerate(result.obligations, start=1):
        lines.append("")
        lines.extend(_format_obligation(number, obligation))

    return "\n".join(lines) + "\n"
