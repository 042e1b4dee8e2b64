"""Text processing helpers."""

from certverify.processing.field_extraction import extract_fields, extract_year
from certverify.processing.normalization import collapse_whitespace, normalize_for_match, round_half_up

__all__ = [
    "collapse_whitespace",
    "extract_fields",
    "extract_year",
    "normalize_for_match",
    "round_half_up",
]
