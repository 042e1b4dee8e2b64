"""Cross-reference models."""

from __future__ import annotations

from pydantic import ConfigDict, Field, field_validator

from certverify.typing.enums import MatchPhase
from certverify.typing.models.analysis import AnalysisResult
from certverify.typing.models.base import DomainModel


class ReferenceRecord(DomainModel):
    """Authoritative certificate record from the reference store."""

    model_config = ConfigDict(extra="ignore")

    cert_number: str
    name: str = ""
    institution: str = ""
    year: str = ""
    degree: str = ""

    @field_validator("year", mode="before")
    @classmethod
    def _coerce_year(cls, value: object) -> object:
        """Accept integer years from JSON stores.

        Args:
            value (object): Raw year value.

        Returns:
            object: String year when an int was given, else the raw value.
        """
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class FieldMatch(DomainModel):
    """Per-field comparison between extracted and reference values."""

    extracted: str
    reference_value: str
    match: bool


class MatchReport(DomainModel):
    """Outcome of reconciling extracted fields against reference records."""

    matched: bool
    matched_record: ReferenceRecord | None = None
    field_matches: dict[str, FieldMatch] = Field(default_factory=dict)
    match_score: int = Field(default=0, ge=0, le=100)
    phase: MatchPhase = MatchPhase.NONE
    revoked: bool = False


class CertificateReport(DomainModel):
    """Analysis plus optional cross-reference outcome, as persisted by the CLI."""

    analysis: AnalysisResult
    match: MatchReport | None = None
