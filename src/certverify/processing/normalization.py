"""Value normalization helpers shared by extraction and matching."""

from __future__ import annotations

import math


def collapse_whitespace(value: str) -> str:
    """Trim a value and collapse internal whitespace runs to single spaces.

    Args:
        value (str): Raw value.

    Returns:
        str: Collapsed value.
    """
    return " ".join(value.split())


def normalize_for_match(value: str | None) -> str:
    """Normalize a field value for cross-reference comparison.

    Args:
        value (str | None): Raw value.

    Returns:
        str: Uppercased, whitespace-collapsed value.
    """
    if not value:
        return ""
    return collapse_whitespace(value).upper()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's `round` uses banker's rounding; scores use schoolbook rounding.
    """
    return math.floor(value + 0.5)
