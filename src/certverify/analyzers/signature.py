"""Signature presence detection on the lower band of a certificate."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from certverify import logger
from certverify.processing.normalization import round_half_up
from certverify.typing.models import SignatureFinding

if TYPE_CHECKING:
    from PIL.Image import Image

REGION_FRACTION = 0.25
REGION_LABEL = "Bottom 25% of certificate"
FAILED_REGION_LABEL = "Analysis failed"

# mean(R, G, B) < 80, kept in integer space as R + G + B < 240
DARK_CHANNEL_SUM = 240
MIN_DARK_RATIO = 0.02
MAX_DARK_RATIO = 0.20
MIN_CLUSTERS = 10
MAX_CONFIDENCE = 95


def _dark_mask(image: Image) -> np.ndarray:
    """Return the row-major flattened dark-pixel mask of the signature band.

    Args:
        image (Image): Source image.

    Returns:
        np.ndarray: Boolean mask, one entry per pixel of the band.
    """
    rgb = image.convert("RGB")
    width, height = rgb.size
    start_y = math.floor(height * (1 - REGION_FRACTION))
    band = np.asarray(rgb.crop((0, start_y, width, height)), dtype=np.uint16)
    return (band.sum(axis=2) < DARK_CHANNEL_SUM).reshape(-1)


def count_clusters(mask: np.ndarray) -> int:
    """Count dark runs in a flattened mask.

    A run starts at every dark pixel whose predecessor is not dark; the
    predecessor of a row's first pixel is the previous row's last pixel.

    Args:
        mask (np.ndarray): Row-major boolean mask.

    Returns:
        int: Number of dark runs.
    """
    if mask.size == 0:
        return 0
    starts = np.count_nonzero(mask[1:] & ~mask[:-1])
    return int(starts) + int(bool(mask[0]))


def classify_signature(dark_pixels: int, total_pixels: int, clusters: int) -> SignatureFinding:
    """Apply the density and cluster decision rule.

    Args:
        dark_pixels (int): Dark pixel count in the band.
        total_pixels (int): Pixel count of the band.
        clusters (int): Dark run count.

    Returns:
        SignatureFinding: Classified finding.
    """
    dark_ratio = dark_pixels / total_pixels if total_pixels > 0 else 0.0
    detected = MIN_DARK_RATIO < dark_ratio < MAX_DARK_RATIO and clusters > MIN_CLUSTERS
    if detected:
        confidence = min(MAX_CONFIDENCE, round_half_up(50 + clusters / 5 + dark_ratio * 200))
    else:
        confidence = round_half_up(dark_ratio * 100)

    return SignatureFinding(
        detected=detected,
        confidence=confidence,
        region=REGION_LABEL,
        dark_pixel_ratio=round(dark_ratio * 100, 2),
        cluster_count=clusters,
    )


def failed_signature_finding() -> SignatureFinding:
    """Return the degraded finding used when the image cannot be analyzed."""
    return SignatureFinding(
        detected=False,
        confidence=0,
        region=FAILED_REGION_LABEL,
        dark_pixel_ratio=0.0,
        cluster_count=0,
    )


def detect_signature(image: Image) -> SignatureFinding:
    """Look for handwriting-like ink in the bottom quarter of the image.

    Signatures fall in a narrow density band: too little ink is no mark,
    too much is a stamp, border or filled block. Many short dark runs set
    cursive strokes apart from one solid region. Never raises; decoding
    problems yield a zero-confidence finding.

    Args:
        image (Image): Decoded certificate image.

    Returns:
        SignatureFinding: Detection outcome.
    """
    try:
        mask = _dark_mask(image)
        finding = classify_signature(int(np.count_nonzero(mask)), int(mask.size), count_clusters(mask))
    except Exception:
        logger.warning("Signature analysis failed", exc_info=True)
        return failed_signature_finding()

    logger.debug(
        "Signature analyzed",
        extra={"detected": finding.detected, "clusters": finding.cluster_count},
    )
    return finding
