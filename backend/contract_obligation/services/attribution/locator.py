"""Locate quoted source text inside a document.

LLM quotations often differ from the contract in case, whitespace, punctuation
or pluralization, so a literal search is backed by a token-overlap search that
scores how closely a window of the document matches the quote.
"""

from contract_obligation.services.attribution.models import FuzzyMatch

DEFAULT_FUZZY_THRESHOLD = 0.6

EXACT_TOKEN_SCORE = 1.0
PARTIAL_TOKEN_SCORE = 0.5


def find_exact(needle: str, haystack: str) -> int | None:
    """Return the offset of the first literal occurrence of ``needle``."""
    if not needle:
        return None
    index = haystack.find(needle)
    return index if index >= 0 else None


def _token_score(needle_token: str, haystack_token: str) -> float:
    if needle_token == haystack_token:
        return EXACT_TOKEN_SCORE
    if needle_token in haystack_token or haystack_token in needle_token:
        return PARTIAL_TOKEN_SCORE
    return 0.0


def _window_score(needle_tokens: list[str], window: list[str]) -> float:
    total = sum(_token_score(n, h) for n, h in zip(needle_tokens, window))
    return total / len(needle_tokens)


def find_fuzzy(
    needle: str,
    haystack: str,
    threshold: float = DEFAULT_FUZZY_THRESHOLD,
) -> FuzzyMatch | None:
    """
    Find the window of ``haystack`` that best matches ``needle`` token by token.

    Both strings are lower-cased and split on whitespace. A window as long as
    the needle slides over the haystack; each aligned token pair scores 1.0
    when equal, 0.5 when one contains the other. The earliest window with the
    highest average score wins.

    Args:
        needle: Quoted text to look for
        haystack: Full document text
        threshold: Minimum average score to accept

    Returns:
        The best match, or None when no window reaches ``threshold``.
        ``index`` is the character offset of the window in the
        single-space-joined token stream.
    """
    if not needle or not haystack:
        return None

    needle_tokens = needle.lower().split()
    original_tokens = haystack.split()
    haystack_tokens = [token.lower() for token in original_tokens]
    size = len(needle_tokens)

    if size == 0 or size > len(haystack_tokens):
        return None

    best_score = 0.0
    best_start = -1
    for start in range(len(haystack_tokens) - size + 1):
        score = _window_score(needle_tokens, haystack_tokens[start : start + size])
        # Strictly greater: ties keep the earliest window
        if score > best_score:
            best_score = score
            best_start = start

    if best_start < 0 or best_score < threshold:
        return None

    offset = sum(len(token) + 1 for token in haystack_tokens[:best_start])
    return FuzzyMatch(
        index=offset,
        score=best_score,
        token_index=best_start,
        token_count=size,
        matched_text=" ".join(original_tokens[best_start : best_start + size]),
    )
