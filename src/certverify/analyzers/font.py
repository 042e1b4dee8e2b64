"""Typographic style estimation from OCR word statistics.

This is a rules-based heuristic over recognizer output, not a font
recognition model: it maps confidence, height spread and a few character
classes onto a closed set of coarse categories.
"""

from __future__ import annotations

import re
from statistics import fmean
from typing import TYPE_CHECKING

from certverify.processing.normalization import round_half_up
from certverify.typing.enums import FontType
from certverify.typing.models import FontFinding

if TYPE_CHECKING:
    from certverify.typing.models import RecognizedText

SERIF_CHARS = re.compile(r"[IlT]")
DESCENDER_CHARS = re.compile(r"[fgyj]")
DECORATIVE_CHARS = re.compile(r"[&@§©®™]")

MIN_BOXED_WORDS = 3
SCRIPT_HEIGHT_VARIATION = 8.0
FORMAL_SERIF_CONFIDENCE = 70.0
MODERN_SANS_CONFIDENCE = 80.0
TRADITIONAL_SERIF_CONFIDENCE = 60.0

_DETAILS = {
    FontType.UNKNOWN: "No OCR word data available.",
    FontType.SCRIPT_DECORATIVE: "High variation in character heights suggests handwritten or decorative font.",
    FontType.SERIF_FORMAL: (
        "Clean letterforms with consistent sizing suggest a formal serif typeface "
        "(e.g., Times New Roman, Garamond)."
    ),
    FontType.SANS_SERIF_MODERN: (
        "High OCR confidence and clean edges suggest a modern sans-serif typeface (e.g., Arial, Helvetica)."
    ),
    FontType.SERIF_TRADITIONAL: "Moderate OCR confidence with varied letterforms suggest a traditional serif typeface.",
    FontType.MIXED_STYLIZED: "Low OCR confidence may indicate decorative, calligraphic, or mixed font styles.",
}


def height_variation(heights: list[int]) -> float:
    """Return the mean absolute deviation of word heights.

    Args:
        heights (list[int]): Positive word heights in pixels.

    Returns:
        float: Deviation, or 0.0 with fewer than three heights.
    """
    if len(heights) < MIN_BOXED_WORDS:
        return 0.0
    average = fmean(heights)
    return fmean(abs(height - average) for height in heights)


def classify_font(
    *,
    average_confidence: float,
    variation: float,
    has_serif_chars: bool,
    has_decorative_chars: bool,
) -> FontType:
    """Apply the font decision tree; the first matching branch wins.

    Args:
        average_confidence (float): Mean OCR word confidence.
        variation (float): Word height deviation.
        has_serif_chars (bool): Whether serif-revealing glyphs occur.
        has_decorative_chars (bool): Whether decorative symbols occur.

    Returns:
        FontType: Font category.
    """
    if variation > SCRIPT_HEIGHT_VARIATION:
        return FontType.SCRIPT_DECORATIVE
    if has_decorative_chars or (has_serif_chars and average_confidence > FORMAL_SERIF_CONFIDENCE):
        return FontType.SERIF_FORMAL
    if average_confidence > MODERN_SANS_CONFIDENCE:
        return FontType.SANS_SERIF_MODERN
    if average_confidence > TRADITIONAL_SERIF_CONFIDENCE:
        return FontType.SERIF_TRADITIONAL
    return FontType.MIXED_STYLIZED


def detect_font_style(recognized: RecognizedText | None) -> FontFinding:
    """Estimate the certificate's typographic style.

    Args:
        recognized (RecognizedText | None): Recognizer output; words may be absent.

    Returns:
        FontFinding: Category, confidence and rationale.
    """
    if recognized is None or not recognized.words:
        return FontFinding(
            font_type=FontType.UNKNOWN,
            confidence=0,
            details=_DETAILS[FontType.UNKNOWN],
            word_count=0,
            height_variation=0.0,
        )

    words = recognized.words
    average_confidence = fmean(word.confidence for word in words)
    heights = [word.bbox.height for word in words if word.bbox is not None and word.bbox.height > 0]
    variation = height_variation(heights)

    text = recognized.text or " ".join(word.text for word in words)
    font_type = classify_font(
        average_confidence=average_confidence,
        variation=variation,
        has_serif_chars=SERIF_CHARS.search(text) is not None,
        has_decorative_chars=DECORATIVE_CHARS.search(text) is not None,
    )

    details = _DETAILS[font_type]
    if DESCENDER_CHARS.search(text) is not None:
        details = f"{details} Descender glyphs present."

    return FontFinding(
        font_type=font_type,
        confidence=round_half_up(average_confidence),
        details=details,
        word_count=len(words),
        height_variation=round(variation, 1),
    )
