"""Core domain model exports."""

from certverify.typing.models.analysis import (
    AnalysisResult,
    DocumentMetadata,
    DominantColor,
    ExtractedFields,
    FontFinding,
    SignatureFinding,
    ThemeFinding,
)
from certverify.typing.models.base import DomainModel
from certverify.typing.models.matching import CertificateReport, FieldMatch, MatchReport, ReferenceRecord
from certverify.typing.models.proof import ClaimSpec, Proof, ProofVerification
from certverify.typing.models.recognition import BoundingBox, RecognizedText, RecognizedWord
from certverify.typing.models.request import AnalyzeRequest

__all__ = [
    "AnalysisResult",
    "AnalyzeRequest",
    "BoundingBox",
    "CertificateReport",
    "ClaimSpec",
    "DocumentMetadata",
    "DomainModel",
    "DominantColor",
    "ExtractedFields",
    "FieldMatch",
    "FontFinding",
    "MatchReport",
    "Proof",
    "ProofVerification",
    "RecognizedText",
    "RecognizedWord",
    "ReferenceRecord",
    "SignatureFinding",
    "ThemeFinding",
]
