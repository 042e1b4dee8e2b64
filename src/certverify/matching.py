"""Cross-reference extracted certificate fields against reference records.

Matching runs in two phases. The exact phase looks the certificate number
up among the candidates; the remaining fields only corroborate it. When no
candidate carries that number, the fuzzy phase scores every candidate on
name, institution and year, with name as the primary signal since the
certificate number is what failed.

The matcher performs no I/O: the candidate set is an in-memory snapshot
supplied by the caller for the duration of one call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from certverify import logger
from certverify.processing.normalization import normalize_for_match
from certverify.typing.enums import CertificateField, MatchPhase
from certverify.typing.models import FieldMatch, MatchReport

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from certverify.typing.models import ExtractedFields, ReferenceRecord

EXACT_WEIGHTS: dict[CertificateField, int] = {
    CertificateField.CERT_NUMBER: 30,
    CertificateField.NAME: 25,
    CertificateField.INSTITUTION: 20,
    CertificateField.YEAR: 15,
    CertificateField.DEGREE: 10,
}

FUZZY_NAME_SCORE = 30
FUZZY_INSTITUTION_SCORE = 25
FUZZY_YEAR_SCORE = 20
FUZZY_MATCH_THRESHOLD = 30

_EXACT_ONLY_FIELDS = frozenset({CertificateField.CERT_NUMBER, CertificateField.YEAR})
DEFAULT_MISSING_SENTINEL = "N/A"


def _contains_either_way(left: str, right: str) -> bool:
    """Return whether one non-empty normalized value contains the other."""
    if not left or not right:
        return False
    return left in right or right in left


def compare_field(
    field: CertificateField,
    extracted: str,
    reference: str,
    *,
    missing_sentinel: str = DEFAULT_MISSING_SENTINEL,
) -> bool:
    """Compare one extracted value with its reference value.

    Certificate number and year need exact normalized equality. Name,
    institution and degree also accept containment in either direction
    (OCR truncation, titles or suffixes in the reference). A missing degree
    on either side is not a mismatch.

    Args:
        field (CertificateField): Field being compared.
        extracted (str): Extracted value.
        reference (str): Reference value.
        missing_sentinel (str): Placeholder the reference store uses for absent values.

    Returns:
        bool: Whether the values match.
    """
    left = normalize_for_match(extracted)
    right = normalize_for_match(reference)

    if field is CertificateField.DEGREE:
        sentinel = normalize_for_match(missing_sentinel)
        if not left or not right or right == sentinel:
            return True

    if not left or not right:
        return False
    if field in _EXACT_ONLY_FIELDS:
        return left == right
    return left == right or _contains_either_way(left, right)


def build_field_matches(
    extracted: ExtractedFields,
    record: ReferenceRecord,
    *,
    missing_sentinel: str = DEFAULT_MISSING_SENTINEL,
) -> dict[str, FieldMatch]:
    """Compare every certificate field of a record.

    Args:
        extracted (ExtractedFields): Extracted fields.
        record (ReferenceRecord): Reference record.
        missing_sentinel (str): Placeholder for absent reference values.

    Returns:
        dict[str, FieldMatch]: Comparison per field name.
    """
    matches: dict[str, FieldMatch] = {}
    for field in CertificateField:
        extracted_value = extracted.get(field)
        reference_value = getattr(record, field.value)
        matches[field.value] = FieldMatch(
            extracted=extracted_value,
            reference_value=reference_value,
            match=compare_field(field, extracted_value, reference_value, missing_sentinel=missing_sentinel),
        )
    return matches


def exact_score(field_matches: dict[str, FieldMatch]) -> int:
    """Sum the weights of matching fields for an exact-phase report.

    Args:
        field_matches (dict[str, FieldMatch]): Per-field comparisons.

    Returns:
        int: Score between 0 and 100.
    """
    return sum(
        weight for field, weight in EXACT_WEIGHTS.items() if (entry := field_matches.get(field.value)) and entry.match
    )


def fuzzy_score(extracted: ExtractedFields, record: ReferenceRecord) -> int:
    """Score a candidate without a certificate number signal.

    Args:
        extracted (ExtractedFields): Extracted fields.
        record (ReferenceRecord): Candidate record.

    Returns:
        int: Score between 0 and 75.
    """
    score = 0
    if _contains_either_way(normalize_for_match(record.name), normalize_for_match(extracted.name)):
        score += FUZZY_NAME_SCORE
    if _contains_either_way(normalize_for_match(record.institution), normalize_for_match(extracted.institution)):
        score += FUZZY_INSTITUTION_SCORE
    if extracted.year.strip() and record.year.strip() == extracted.year.strip():
        score += FUZZY_YEAR_SCORE
    return score


def _is_revoked(record: ReferenceRecord, revoked: Iterable[str]) -> bool:
    wanted = normalize_for_match(record.cert_number)
    return any(normalize_for_match(entry) == wanted for entry in revoked)


def match_record(
    extracted: ExtractedFields,
    candidates: Sequence[ReferenceRecord],
    *,
    revoked: Iterable[str] = (),
    missing_sentinel: str = DEFAULT_MISSING_SENTINEL,
) -> MatchReport:
    """Reconcile extracted fields against a reference record set.

    No match is attempted without an extracted certificate number.

    Args:
        extracted (ExtractedFields): Fields extracted from the document.
        candidates (Sequence[ReferenceRecord]): Reference records snapshot.
        revoked (Iterable[str]): Revoked (blacklisted) certificate numbers.
        missing_sentinel (str): Placeholder for absent reference values.

    Returns:
        MatchReport: Match outcome with per-field comparisons.
    """
    wanted = normalize_for_match(extracted.cert_number)
    if not wanted:
        logger.info("Cross-reference skipped without certificate number")
        return MatchReport(matched=False, phase=MatchPhase.NONE)

    revoked = tuple(revoked)
    for candidate in candidates:
        if normalize_for_match(candidate.cert_number) != wanted:
            continue
        field_matches = build_field_matches(extracted, candidate, missing_sentinel=missing_sentinel)
        report = MatchReport(
            matched=True,
            matched_record=candidate,
            field_matches=field_matches,
            match_score=exact_score(field_matches),
            phase=MatchPhase.EXACT,
            revoked=_is_revoked(candidate, revoked),
        )
        logger.info("Exact cross-reference match", extra={"score": report.match_score, "revoked": report.revoked})
        return report

    best: ReferenceRecord | None = None
    best_score = 0
    for candidate in candidates:
        score = fuzzy_score(extracted, candidate)
        if score > best_score:
            best, best_score = candidate, score

    if best is None or best_score < FUZZY_MATCH_THRESHOLD:
        logger.info("No cross-reference match", extra={"best_score": best_score, "candidates": len(candidates)})
        return MatchReport(matched=False, match_score=best_score, phase=MatchPhase.FUZZY)

    report = MatchReport(
        matched=True,
        matched_record=best,
        field_matches=build_field_matches(extracted, best, missing_sentinel=missing_sentinel),
        match_score=best_score,
        phase=MatchPhase.FUZZY,
        revoked=_is_revoked(best, revoked),
    )
    logger.info("Fuzzy cross-reference match", extra={"score": best_score, "revoked": report.revoked})
    return report
