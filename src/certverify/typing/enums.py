"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared parsing helper for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc


class CertificateField(_EnumMixin):
    """Structured fields pulled from certificate text."""

    CERT_NUMBER = "cert_number"
    NAME = "name"
    INSTITUTION = "institution"
    YEAR = "year"
    DEGREE = "degree"


class FontType(_EnumMixin):
    """Coarse typographic categories reported by the font estimator."""

    UNKNOWN = "Unknown"
    SCRIPT_DECORATIVE = "Script/Decorative"
    SERIF_FORMAL = "Serif (Formal)"
    SANS_SERIF_MODERN = "Sans-Serif (Modern)"
    SERIF_TRADITIONAL = "Serif (Traditional)"
    MIXED_STYLIZED = "Mixed/Stylized"


class ColorName(_EnumMixin):
    """Palette names used by the theme classifier."""

    WHITE = "White"
    BLACK = "Black"
    GOLD = "Gold"
    RED = "Red"
    BLUE = "Blue"
    GREEN = "Green"
    PURPLE = "Purple"
    CREAM = "Cream"
    BROWN = "Brown"
    BEIGE = "Beige"
    TEAL = "Teal"
    GRAY = "Gray"


class MatchPhase(_EnumMixin):
    """Cross-reference phase that produced a match report."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    NONE = "none"


class ClaimType(_EnumMixin):
    """Claims a certificate holder can prove without disclosing the record."""

    HAS_DEGREE = "has_degree"
    GPA_ABOVE = "gpa_above"
    GRADUATED_BEFORE = "graduated_before"
    GRADUATED_AFTER = "graduated_after"
    INSTITUTION_MATCH = "institution_match"
    CERTIFICATE_VALID = "certificate_valid"
