"""Overall confidence scoring."""

from __future__ import annotations

from typing import TYPE_CHECKING

from certverify.processing.normalization import round_half_up

if TYPE_CHECKING:
    from certverify.typing.models import FontFinding, SignatureFinding, ThemeFinding

TOTAL_FIELDS = 5
FIELDS_WEIGHT = 40
SIGNATURE_DETECTED_SCORE = 20
SIGNATURE_MISSING_SCORE = 5
FONT_CONFIDENT_SCORE = 20
FONT_UNCERTAIN_SCORE = 10
FONT_CONFIDENCE_THRESHOLD = 60
THEME_FOUND_SCORE = 20
THEME_MISSING_SCORE = 5
MAX_SCORE = 100


def aggregate_confidence(
    fields_found: int,
    signature: SignatureFinding,
    font: FontFinding,
    theme: ThemeFinding,
) -> int:
    """Combine the four analyses into one 0-100 score.

    Args:
        fields_found (int): Number of non-empty extracted fields (0-5).
        signature (SignatureFinding): Signature finding.
        font (FontFinding): Font finding.
        theme (ThemeFinding): Theme finding.

    Raises:
        ValueError: If `fields_found` is outside 0-5.

    Returns:
        int: Overall confidence.
    """
    if not 0 <= fields_found <= TOTAL_FIELDS:
        raise ValueError(f"fields_found must be between 0 and {TOTAL_FIELDS}, got {fields_found}")  # noqa: TRY003

    score = fields_found / TOTAL_FIELDS * FIELDS_WEIGHT
    score += SIGNATURE_DETECTED_SCORE if signature.detected else SIGNATURE_MISSING_SCORE
    score += FONT_CONFIDENT_SCORE if font.confidence > FONT_CONFIDENCE_THRESHOLD else FONT_UNCERTAIN_SCORE
    score += THEME_FOUND_SCORE if theme.dominant_colors else THEME_MISSING_SCORE
    return min(MAX_SCORE, round_half_up(score))
