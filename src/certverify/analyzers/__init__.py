"""Independent visual and typographic analyses of a certificate."""

from certverify.analyzers.confidence import aggregate_confidence
from certverify.analyzers.font import detect_font_style
from certverify.analyzers.signature import detect_signature
from certverify.analyzers.theme import detect_theme

__all__ = [
    "aggregate_confidence",
    "detect_font_style",
    "detect_signature",
    "detect_theme",
]
