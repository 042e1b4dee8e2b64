from __future__ import annotations

import pytest

from certverify.processing.normalization import collapse_whitespace, normalize_for_match, round_half_up


def test_collapse_whitespace() -> None:
    assert collapse_whitespace("  State \n  University\t ") == "State University"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, ""), ("", ""), ("  jane   doe ", "JANE DOE"), ("x-1", "X-1")],
)
def test_normalize_for_match(raw: str | None, expected: str) -> None:
    assert normalize_for_match(raw) == expected


@pytest.mark.parametrize(("value", "expected"), [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (0.0, 0)])
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected
