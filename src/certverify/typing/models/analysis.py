"""Certificate analysis result models."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from certverify.typing.enums import CertificateField, FontType
from certverify.typing.models.base import DomainModel


class ExtractedFields(DomainModel):
    """Fields pulled out of recognized text; absence is an empty string."""

    cert_number: str = ""
    name: str = ""
    institution: str = ""
    year: str = ""
    degree: str = ""

    def get(self, field: CertificateField) -> str:
        """Return the value stored for one certificate field.

        Args:
            field (CertificateField): Field to read.

        Returns:
            str: Field value, possibly empty.
        """
        return getattr(self, field.value)

    def found_count(self) -> int:
        """Return how many of the five fields were extracted.

        Returns:
            int: Count of non-empty fields.
        """
        return sum(1 for field in CertificateField if self.get(field))


class SignatureFinding(DomainModel):
    """Outcome of signature detection on the bottom of the page."""

    detected: bool
    confidence: int = Field(ge=0, le=100)
    region: str
    dark_pixel_ratio: float = Field(ge=0.0, le=100.0, description="Dark pixel share, in percent.")
    cluster_count: int = Field(ge=0)


class DominantColor(DomainModel):
    """One quantized color bucket."""

    rgb: str
    hex: str
    percentage: float = Field(ge=0.0, le=100.0)


class ThemeFinding(DomainModel):
    """Dominant palette of the certificate."""

    theme_name: str
    dominant_colors: list[DominantColor] = Field(default_factory=list, max_length=5)
    primary_color: str = "#FFFFFF"


class FontFinding(DomainModel):
    """Coarse typographic classification derived from OCR word statistics."""

    font_type: FontType
    confidence: int = Field(ge=0, le=100)
    details: str
    word_count: int = 0
    height_variation: float = 0.0


class DocumentMetadata(DomainModel):
    """Upload metadata carried alongside the analysis."""

    file_name: str
    file_size: int = Field(ge=0)
    is_pdf: bool = False
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())


class AnalysisResult(DomainModel):
    """Full analysis of one uploaded certificate."""

    raw_text: str
    extracted_fields: ExtractedFields
    signature: SignatureFinding
    theme: ThemeFinding
    font: FontFinding
    overall_confidence: int = Field(ge=0, le=100)
    fields_found: int = Field(ge=0, le=5)
    metadata: DocumentMetadata
