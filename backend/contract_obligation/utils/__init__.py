"""Utility functions and helpers."""

from contract_obligation.utils.helpers import (
    attachment_disposition,
    format_page_info,
    format_source_location,
    generate_reference,
    require_reference,
)

__all__ = [
    "attachment_disposition",
    "format_page_info",
    "format_source_location",
    "generate_reference",
    "require_reference",
]
