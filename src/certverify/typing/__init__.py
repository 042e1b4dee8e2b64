"""Typing-centric domain modules."""

from certverify.typing.enums import CertificateField, ClaimType, ColorName, FontType, MatchPhase
from certverify.typing.models import (
    AnalysisResult,
    CertificateReport,
    ExtractedFields,
    FontFinding,
    MatchReport,
    Proof,
    ProofVerification,
    RecognizedText,
    ReferenceRecord,
    SignatureFinding,
    ThemeFinding,
)
from certverify.typing.protocol import TextRecognizer

__all__ = [
    "AnalysisResult",
    "CertificateField",
    "CertificateReport",
    "ClaimType",
    "ColorName",
    "ExtractedFields",
    "FontFinding",
    "FontType",
    "MatchPhase",
    "MatchReport",
    "Proof",
    "ProofVerification",
    "RecognizedText",
    "ReferenceRecord",
    "SignatureFinding",
    "TextRecognizer",
    "ThemeFinding",
]
