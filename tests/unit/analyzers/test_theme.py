from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from certverify.analyzers.theme import bucket_colors, classify_theme, color_name, detect_theme
from certverify.typing.enums import ColorName

BLUE = (0, 128, 192)
GOLD = (224, 192, 0)


@pytest.mark.parametrize(
    ("rgb", "expected"),
    [
        ((255, 255, 255), ColorName.WHITE),
        ((0, 0, 0), ColorName.BLACK),
        (GOLD, ColorName.GOLD),
        ((224, 32, 32), ColorName.RED),
        (BLUE, ColorName.BLUE),
        ((32, 192, 32), ColorName.GREEN),
        ((128, 128, 128), ColorName.GRAY),
    ],
)
def test_color_name(rgb: tuple[int, int, int], expected: ColorName) -> None:
    assert color_name(*rgb) is expected


def test_classify_theme_labels() -> None:
    white = (255, 255, 255)

    assert classify_theme(white, [white]) == "White / Minimal"
    assert classify_theme(white, [white, (224, 32, 32)]) == "Red on White"
    assert classify_theme(BLUE, [BLUE]) == "Blue Theme"
    assert classify_theme((32, 32, 32), [(32, 32, 32)]) == "Dark Theme"
    assert classify_theme((128, 128, 128), []) == "Neutral"


def test_white_page_is_minimal() -> None:
    finding = detect_theme(Image.new("RGB", (64, 64), (250, 250, 250)))

    assert finding.theme_name == "White / Minimal"
    assert finding.primary_color == "#ffffff"
    assert len(finding.dominant_colors) == 1
    assert finding.dominant_colors[0].rgb == "rgb(255, 255, 255)"
    assert finding.dominant_colors[0].percentage == 100.0


def test_two_color_certificate_is_named_by_both_colors() -> None:
    image = Image.new("RGB", (40, 40), BLUE)
    image.paste(GOLD, (0, 30, 40, 40))

    finding = detect_theme(image, scale=1.0)

    assert finding.theme_name == "Blue & Gold"
    assert finding.primary_color == "#0080c0"
    assert [color.percentage for color in finding.dominant_colors] == [75.0, 25.0]


def test_bucket_ties_keep_first_seen_order() -> None:
    image = Image.new("RGB", (2, 1))
    image.putpixel((0, 0), GOLD)
    image.putpixel((1, 0), BLUE)

    buckets, counts, total = bucket_colors(image, scale=1.0)

    assert buckets == [GOLD, BLUE]
    assert counts == [1, 1]
    assert total == 2


def test_theme_detection_is_deterministic() -> None:
    rng = np.random.default_rng(7)
    image = Image.fromarray(rng.integers(0, 256, size=(48, 48, 3), dtype=np.uint8))

    first = detect_theme(image)
    second = detect_theme(image)

    assert first == second
    assert len(first.dominant_colors) == 5


def test_unreadable_image_yields_unknown_theme() -> None:
    finding = detect_theme(None)

    assert finding.theme_name == "Unknown"
    assert finding.dominant_colors == []
    assert finding.primary_color == "#FFFFFF"
