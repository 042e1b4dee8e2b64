from __future__ import annotations

import numpy as np
from PIL import Image

from certverify.analyzers.signature import (
    FAILED_REGION_LABEL,
    REGION_LABEL,
    classify_signature,
    count_clusters,
    detect_signature,
)


def _image_with_dark_pixels(pixels: list[tuple[int, int]], size: tuple[int, int] = (100, 100)) -> Image.Image:
    image = Image.new("RGB", size, (255, 255, 255))
    for xy in pixels:
        image.putpixel(xy, (10, 10, 10))
    return image


def test_blank_page_has_no_signature() -> None:
    finding = detect_signature(Image.new("RGB", (100, 100), (255, 255, 255)))

    assert finding.detected is False
    assert finding.confidence == 0
    assert finding.cluster_count == 0
    assert finding.region == REGION_LABEL


def test_scattered_strokes_in_bottom_band_are_detected() -> None:
    strokes = [(x, y) for y in range(80, 90) for x in range(0, 100, 10)]

    finding = detect_signature(_image_with_dark_pixels(strokes))

    assert finding.detected is True
    assert finding.cluster_count == 100
    assert finding.dark_pixel_ratio == 4.0
    assert finding.confidence == 78


def test_ink_above_the_band_is_ignored() -> None:
    strokes = [(x, y) for y in range(10, 20) for x in range(0, 100, 10)]

    finding = detect_signature(_image_with_dark_pixels(strokes))

    assert finding.detected is False
    assert finding.cluster_count == 0


def test_solid_block_is_not_a_signature() -> None:
    image = Image.new("RGB", (100, 100), (255, 255, 255))
    image.paste((0, 0, 0), (0, 75, 100, 100))

    finding = detect_signature(image)

    assert finding.detected is False
    assert finding.cluster_count == 1
    assert finding.confidence == 100


def test_count_clusters_wraps_rows() -> None:
    assert count_clusters(np.array([True, True, False, True, False, False, True])) == 3
    assert count_clusters(np.array([[False, False, True], [True, False, False]]).reshape(-1)) == 1
    assert count_clusters(np.array([], dtype=bool)) == 0


def test_classify_signature_cluster_threshold_is_strict() -> None:
    assert classify_signature(300, 10_000, 11).detected is True
    assert classify_signature(300, 10_000, 11).confidence == 58
    assert classify_signature(300, 10_000, 10).detected is False
    assert classify_signature(300, 10_000, 10).confidence == 3


def test_classify_signature_rounds_half_up() -> None:
    assert classify_signature(25, 1_000, 5).confidence == 3


def test_classify_signature_handles_empty_band() -> None:
    finding = classify_signature(0, 0, 0)

    assert finding.detected is False
    assert finding.dark_pixel_ratio == 0.0


def test_unreadable_image_yields_failed_finding() -> None:
    finding = detect_signature(None)

    assert finding.detected is False
    assert finding.confidence == 0
    assert finding.region == FAILED_REGION_LABEL
