"""Dominant color palette and theme naming."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image as PILImage

from certverify import logger
from certverify.typing.enums import ColorName
from certverify.typing.models import DominantColor, ThemeFinding

if TYPE_CHECKING:
    from PIL.Image import Image

DEFAULT_SAMPLE_SCALE = 0.25
BUCKET_SIZE = 32
MAX_DOMINANT_COLORS = 5
NAMING_BUCKETS = 3
FALLBACK_PRIMARY = "#FFFFFF"
UNKNOWN_THEME = "Unknown"

RGB = tuple[int, int, int]


def color_name(red: int, green: int, blue: int) -> ColorName:
    """Name a quantized color; the first matching rule wins.

    Args:
        red (int): Red channel.
        green (int): Green channel.
        blue (int): Blue channel.

    Returns:
        ColorName: Palette name.
    """
    if red > 200 and green > 200 and blue > 200:
        return ColorName.WHITE
    if red < 50 and green < 50 and blue < 50:
        return ColorName.BLACK
    if red > 180 and green > 150 and blue < 80:
        return ColorName.GOLD
    if red > 150 and green < 80 and blue < 80:
        return ColorName.RED
    if red < 80 and green > 100 and blue > 150:
        return ColorName.BLUE
    if red < 80 and green > 150 and blue < 80:
        return ColorName.GREEN
    if red > 150 and green > 100 and blue > 150:
        return ColorName.PURPLE
    if red > 200 and green > 150 and blue > 100:
        return ColorName.CREAM
    if red > 150 and green > 120 and blue < 100:
        return ColorName.BROWN
    if red > 150 and green > 150 and blue > 100:
        return ColorName.BEIGE
    if red < 100 and green > 100 and blue > 100:
        return ColorName.TEAL
    return ColorName.GRAY


def classify_theme(primary: RGB, top_colors: list[RGB]) -> str:
    """Build a theme label from the most frequent buckets.

    Args:
        primary (RGB): Most frequent bucket.
        top_colors (list[RGB]): Buckets in frequency order.

    Returns:
        str: Theme label such as "Blue & Gold" or "White / Minimal".
    """
    brightness = sum(primary) / 3
    names = [color_name(*color) for color in top_colors[:NAMING_BUCKETS]]
    distinct = [name for name in dict.fromkeys(names) if name not in {ColorName.WHITE, ColorName.BLACK}]

    if len(distinct) >= 2:
        return f"{distinct[0]} & {distinct[1]}"
    if len(distinct) == 1:
        if brightness > 200:
            return f"{distinct[0]} on White"
        return f"{distinct[0]} Theme"
    if brightness > 200:
        return "White / Minimal"
    if brightness < 60:
        return "Dark Theme"
    return "Neutral"


def _to_hex(color: RGB) -> str:
    return "#" + "".join(f"{channel:02x}" for channel in color)


def bucket_colors(image: Image, *, scale: float = DEFAULT_SAMPLE_SCALE) -> tuple[list[RGB], list[int], int]:
    """Downscale, quantize and count color buckets.

    Buckets are ordered by count descending; ties keep first-seen order so
    the result is deterministic for a given image.

    Args:
        image (Image): Source image.
        scale (float): Linear downscale factor applied before sampling.

    Returns:
        tuple[list[RGB], list[int], int]: Buckets, their counts and the sampled pixel total.
    """
    rgb = image.convert("RGB")
    width, height = rgb.size
    sample_size = (max(1, math.floor(width * scale)), max(1, math.floor(height * scale)))
    sampled = rgb.resize(sample_size, PILImage.Resampling.BILINEAR)

    pixels = np.asarray(sampled, dtype=np.float64).reshape(-1, 3)
    # Top bucket rounds to 256; clamp so it reads as a valid 8-bit channel (255).
    quantized = np.minimum(np.floor(pixels / BUCKET_SIZE + 0.5) * BUCKET_SIZE, 255).astype(np.int64)
    colors, first_seen, counts = np.unique(quantized, axis=0, return_index=True, return_counts=True)
    order = np.lexsort((first_seen, -counts))

    buckets = [(int(colors[idx][0]), int(colors[idx][1]), int(colors[idx][2])) for idx in order]
    return buckets, [int(counts[idx]) for idx in order], int(pixels.shape[0])


def detect_theme(image: Image, *, scale: float = DEFAULT_SAMPLE_SCALE) -> ThemeFinding:
    """Name the certificate's dominant palette.

    Never raises; an unreadable image yields an "Unknown" theme with no colors.

    Args:
        image (Image): Decoded certificate image.
        scale (float): Linear downscale factor applied before sampling.

    Returns:
        ThemeFinding: Theme name and up to five dominant colors.
    """
    try:
        buckets, counts, total = bucket_colors(image, scale=scale)
    except Exception:
        logger.warning("Theme analysis failed", exc_info=True)
        return ThemeFinding(theme_name=UNKNOWN_THEME, dominant_colors=[], primary_color=FALLBACK_PRIMARY)

    dominant = [
        DominantColor(
            rgb=f"rgb({red}, {green}, {blue})",
            hex=_to_hex((red, green, blue)),
            percentage=round(count / total * 100, 1),
        )
        for (red, green, blue), count in zip(buckets[:MAX_DOMINANT_COLORS], counts, strict=False)
    ]
    primary = buckets[0] if buckets else (255, 255, 255)
    theme_name = classify_theme(primary, buckets)

    logger.debug("Theme analyzed", extra={"theme": theme_name, "buckets": len(buckets)})
    return ThemeFinding(
        theme_name=theme_name,
        dominant_colors=dominant,
        primary_color=dominant[0].hex if dominant else FALLBACK_PRIMARY,
    )
