"""Shared utilities used across the application."""

import secrets
import time
from urllib.parse import quote

from fastapi import HTTPException


def generate_reference() -> str:
    """Generate a unique reference for stored results, e.g. ``ref_1729..._3f9a0c2b1d``."""
    return f"ref_{int(time.time() * 1000)}_{secrets.token_hex(5)}"


def require_reference(value: str | None, name: str = "Payment reference") -> str:
    """Validate a reference query parameter.

    Raises:
        HTTPException: 400 if the reference is missing or blank
    """
    if not value or not value.strip():
        raise HTTPException(status_code=400, detail=f"{name} is required")
    return value.strip()


def format_page_info(pages: int) -> str:
    """Human-readable page count, e.g. "1 page" or "5 pages"."""
    return f"{pages} page" if pages == 1 else f"{pages} pages"


def format_source_location(source: dict | None) -> str:
    """
    Format an obligation's source location into a human-readable string.

    Args:
        source: Serialized source span with optional page/line/score

    Returns:
        e.g. "Page 2, Line 14, 85% match" or "Location not verified"
    """
    if not source or source.get("start_index") is None:
        return "Location not verified"

    parts = []
    if source.get("page_number") is not None:
        parts.append(f"Page {source['page_number']}")
    if source.get("line_number") is not None:
        parts.append(f"Line {source['line_number']}")

    score = source.get("match_score")
    if not isinstance(score, (int, float)):
        score = None
    if score is not None and score < 1.0:
        parts.append(f"{round(score * 100)}% match")
    elif score is not None:
        parts.append("exact match")

    return ", ".join(parts) if parts else "Document"


def attachment_disposition(filename: str) -> str:
    """
    Build a Content-Disposition header for a download.

    Headers are latin-1 on the wire, so non-ASCII names get an ASCII
    ``filename`` fallback plus an RFC 5987 ``filename*`` parameter.
    """
    fallback = filename.encode("ascii", "ignore").decode("ascii")
    fallback = "".join(c for c in fallback if c.isprintable() and c not in '"\\')
    fallback = fallback.lstrip(" .-_") or "download"
    if fallback == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"
