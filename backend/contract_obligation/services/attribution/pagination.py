"""Page and line bookkeeping for extracted document text.

PDF text carries an inline marker at the start of every page. Word and plain
text documents have no real pagination, so page boundaries are estimated from
explicit break signals and a characters-per-page budget.
"""

import re

# Rough length of one printed page of contract text
CHARS_PER_PAGE = 3000

PAGE_MARKER_TEMPLATE = "--- Page {number} ---\n"
PAGE_MARKER_PATTERN = re.compile(r"--- Page (\d+) ---")

FORM_FEED = "\f"
PAGE_BREAK_SIGNAL = "PAGE BREAK"
PLAIN_TEXT_PAGE_SIGNAL = "---PAGE---"


def page_marker(number: int) -> str:
    """Render the inline marker that opens page ``number`` of PDF text."""
    return PAGE_MARKER_TEMPLATE.format(number=number)


def _is_explicit_break(line: str, plain_text: bool) -> bool:
    if FORM_FEED in line or PAGE_BREAK_SIGNAL in line:
        return True
    return plain_text and PLAIN_TEXT_PAGE_SIGNAL in line


def estimate_page_breaks(
    text: str,
    *,
    plain_text: bool = False,
    chars_per_page: int = CHARS_PER_PAGE,
) -> list[int]:
    """
    Estimate where pages start in text without page markers.

    A new page starts at a line that carries an explicit break signal (form
    feed, "PAGE BREAK", or "---PAGE---" for plain text) or once more than
    ``chars_per_page`` characters have accumulated since the last break.

    Args:
        text: Full document text
        plain_text: Also honour the "---PAGE---" signal used in .txt files
        chars_per_page: Length budget for one estimated page

    Returns:
        Strictly increasing character offsets, always starting with 0
    """
    breaks = [0]
    position = 0
    page_length = 0

    for line in text.split("\n"):
        line_length = len(line) + 1  # +1 for the newline

        if _is_explicit_break(line, plain_text) or page_length > chars_per_page:
            # A signal on the first line would repeat offset 0
            if position > breaks[-1]:
                breaks.append(position)
            page_length = 0

        position += line_length
        page_length += line_length

    return breaks


def page_count_from_breaks(page_breaks: list[int]) -> int:
    """Number of pages reported to the user for an estimated table."""
    return max(1, len(page_breaks) - 1)


def page_for_offset(offset: int, page_breaks: list[int]) -> int:
    """Return the 1-based page containing ``offset`` using a page-break table."""
    for index in range(len(page_breaks) - 1, -1, -1):
        if offset >= page_breaks[index]:
            return index + 1
    return 1


def page_from_markers(text: str, offset: int) -> int:
    """Return the number of the last page marker before ``offset`` (default 1)."""
    page = 1
    for match in PAGE_MARKER_PATTERN.finditer(text, 0, offset):
        page = int(match.group(1))
    return page


def line_for_offset(text: str, offset: int) -> int:
    """Return the 1-based line number of ``offset``."""
    return text.count("\n", 0, offset) + 1


def resolve_position(
    text: str,
    offset: int,
    page_breaks: list[int] | None = None,
) -> tuple[int, int]:
    """
    Map a character offset to a (page, line) pair.

    Word and plain text documents supply an estimated page-break table; PDF
    text is resolved by scanning its inline page markers instead.
    """
    if page_breaks and len(page_breaks) > 1:
        page = page_for_offset(offset, page_breaks)
    else:
        page = page_from_markers(text, offset)
    return page, line_for_offset(text, offset)
