from __future__ import annotations

from certverify.analyzers.font import classify_font, detect_font_style, height_variation
from certverify.typing.enums import FontType
from certverify.typing.models import BoundingBox, RecognizedText, RecognizedWord


def _words(confidences: list[float], heights: list[int] | None = None) -> tuple[RecognizedWord, ...]:
    heights = heights or [20] * len(confidences)
    return tuple(
        RecognizedWord(
            text=f"w{index}",
            confidence=confidence,
            bbox=BoundingBox(x0=0, y0=0, x1=10, y1=height),
        )
        for index, (confidence, height) in enumerate(zip(confidences, heights, strict=True))
    )


def test_missing_words_yield_unknown() -> None:
    for recognized in (None, RecognizedText(text="RENEWAL")):
        finding = detect_font_style(recognized)

        assert finding.font_type is FontType.UNKNOWN
        assert finding.confidence == 0
        assert finding.word_count == 0


def test_high_confidence_plain_text_is_sans_serif() -> None:
    finding = detect_font_style(RecognizedText(text="RENEWAL CARD", words=_words([90, 90, 90])))

    assert finding.font_type is FontType.SANS_SERIF_MODERN
    assert finding.confidence == 90
    assert finding.word_count == 3
    assert finding.height_variation == 0.0
    assert "Descender" not in finding.details


def test_height_spread_suggests_script() -> None:
    finding = detect_font_style(RecognizedText(text="RENEWAL", words=_words([90, 90, 90], [10, 10, 40])))

    assert finding.font_type is FontType.SCRIPT_DECORATIVE
    assert finding.height_variation == 13.3


def test_descenders_are_mentioned_in_details() -> None:
    finding = detect_font_style(RecognizedText(text="glory", words=_words([50])))

    assert finding.font_type is FontType.MIXED_STYLIZED
    assert finding.details.endswith(" Descender glyphs present.")


def test_confidence_is_rounded_half_up() -> None:
    finding = detect_font_style(RecognizedText(text="RENEWAL", words=_words([90, 91])))

    assert finding.confidence == 91


def test_height_variation_needs_three_words() -> None:
    assert height_variation([10, 40]) == 0.0
    assert height_variation([10, 10, 40]) == 40 / 3


def test_classify_font_decision_order() -> None:
    def _classify(confidence: float, variation: float = 0.0, *, serif: bool = False, deco: bool = False) -> FontType:
        return classify_font(
            average_confidence=confidence,
            variation=variation,
            has_serif_chars=serif,
            has_decorative_chars=deco,
        )

    assert _classify(95, variation=8.5, deco=True) is FontType.SCRIPT_DECORATIVE
    assert _classify(30, deco=True) is FontType.SERIF_FORMAL
    assert _classify(75, serif=True) is FontType.SERIF_FORMAL
    assert _classify(70, serif=True) is FontType.SERIF_TRADITIONAL
    assert _classify(81) is FontType.SANS_SERIF_MODERN
    assert _classify(80) is FontType.SERIF_TRADITIONAL
    assert _classify(60) is FontType.MIXED_STYLIZED
