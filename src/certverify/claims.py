"""Commitment-based claim proofs over private certificate data.

`generate_proof` evaluates a claim against the holder's record and publishes
the boolean outcome with a SHA-256 commitment to the record; `verify_proof`
recomputes the proof hash from the public fields alone.

This is a tamper-evident commitment, not a zero-knowledge or sound proof:
the claim result travels in clear and verification only checks that the
public fields hash consistently. A prover who fabricates the whole object
passes verification, so the verifier must trust whoever generated it.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import re
import secrets
import time
from collections.abc import Mapping
from typing import Any, assert_never

from pydantic import BaseModel, ValidationError

from certverify import logger
from certverify.exceptions import UnknownClaimError
from certverify.typing.enums import ClaimType
from certverify.typing.models import ClaimSpec, Proof, ProofVerification

NONCE_BYTES = 32
MISSING_DEGREE = "N/A"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_CLAIM_SPECS: tuple[ClaimSpec, ...] = (
    ClaimSpec(claim_type=ClaimType.HAS_DEGREE, label="Has a Valid Degree", requires_threshold=False),
    ClaimSpec(
        claim_type=ClaimType.GPA_ABOVE,
        label="GPA Above Threshold",
        requires_threshold=True,
        threshold_label="Minimum GPA",
    ),
    ClaimSpec(
        claim_type=ClaimType.GRADUATED_BEFORE,
        label="Graduated Before Year",
        requires_threshold=True,
        threshold_label="Year",
    ),
    ClaimSpec(
        claim_type=ClaimType.GRADUATED_AFTER,
        label="Graduated After Year",
        requires_threshold=True,
        threshold_label="Year",
    ),
    ClaimSpec(
        claim_type=ClaimType.INSTITUTION_MATCH,
        label="From Specific Institution",
        requires_threshold=True,
        threshold_label="Institution Name",
    ),
    ClaimSpec(claim_type=ClaimType.CERTIFICATE_VALID, label="Has Valid Certificate Data", requires_threshold=False),
)


def available_claims() -> list[ClaimSpec]:
    """Return the claims a holder can prove.

    Returns:
        list[ClaimSpec]: Claim descriptions in display order.
    """
    return list(_CLAIM_SPECS)


def claim_spec(claim: ClaimType) -> ClaimSpec:
    """Return the description of one claim type."""
    return next(spec for spec in _CLAIM_SPECS if spec.claim_type is claim)


def sha256_hex(payload: str) -> str:
    """Return the SHA-256 hex digest of a UTF-8 string."""
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def generate_nonce() -> str:
    """Return a fresh hex-encoded random nonce."""
    return secrets.token_hex(NONCE_BYTES)


def serialize_secret(secret_data: Mapping[str, Any] | BaseModel) -> str:
    """Serialize private data compactly, preserving key order.

    Args:
        secret_data (Mapping[str, Any] | BaseModel): Private record.

    Returns:
        str: Compact JSON string.
    """
    payload = secret_data.model_dump(mode="json", by_alias=True) if isinstance(secret_data, BaseModel) else secret_data
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def commit(serialized: str, nonce: str) -> str:
    """Return the commitment binding serialized data to a nonce."""
    return sha256_hex(f"{serialized}:{nonce}")


def compute_proof_hash(claim_type: str, claim_result: bool, commitment: str, nonce: str) -> str:  # noqa: FBT001
    """Return the proof hash over the public proof fields.

    The boolean is encoded as ``true``/``false`` so proofs stay verifiable by
    the JavaScript front-end.

    Args:
        claim_type (str): Claim type value.
        claim_result (bool): Claim outcome.
        commitment (str): Commitment to the private record.
        nonce (str): Proof nonce.

    Returns:
        str: Hex digest.
    """
    result = "true" if claim_result else "false"
    return sha256_hex(f"{claim_type}:{result}:{commitment}:{nonce}")


def _lookup(data: Mapping[str, Any], snake_key: str) -> Any:
    """Read a record value under its snake_case or camelCase key."""
    if snake_key in data:
        return data[snake_key]
    head, *rest = snake_key.split("_")
    return data.get(head + "".join(part.title() for part in rest))


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT.match(str(value)) if value is not None else None
    return int(match.group(1)) if match else None


def _parse_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    match = _LEADING_FLOAT.match(str(value)) if value is not None else None
    return float(match.group(1)) if match else None


def _has_degree(data: Mapping[str, Any], threshold: Any) -> tuple[bool, str]:  # noqa: ARG001
    degree = _lookup(data, "degree")
    return bool(degree) and degree != MISSING_DEGREE, "Holder possesses a valid academic degree"


def _gpa_above(data: Mapping[str, Any], threshold: Any) -> tuple[bool, str]:
    minimum = _parse_float(threshold)
    gpa = _parse_float(_lookup(data, "gpa") or 0)
    return minimum is not None and gpa is not None and gpa >= minimum, f"GPA is above {threshold}"


def _graduated_before(data: Mapping[str, Any], threshold: Any) -> tuple[bool, str]:
    limit = _parse_int(threshold)
    year = _parse_int(_lookup(data, "year"))
    return limit is not None and year is not None and year <= limit, f"Graduated on or before {threshold}"


def _graduated_after(data: Mapping[str, Any], threshold: Any) -> tuple[bool, str]:
    limit = _parse_int(threshold)
    year = _parse_int(_lookup(data, "year"))
    return limit is not None and year is not None and year >= limit, f"Graduated on or after {threshold}"


def _institution_match(data: Mapping[str, Any], threshold: Any) -> tuple[bool, str]:
    institution = _lookup(data, "institution")
    wanted = str(threshold).strip() if threshold is not None else ""
    result = bool(wanted) and institution is not None and str(institution).upper() == str(threshold).upper()
    return result, "Certificate is from the specified institution"


def _certificate_valid(data: Mapping[str, Any], threshold: Any) -> tuple[bool, str]:  # noqa: ARG001
    result = bool(_lookup(data, "cert_number")) and bool(_lookup(data, "name"))
    return result, "Certificate contains valid identification data"


def evaluate_claim(claim: ClaimType, secret_data: Mapping[str, Any], threshold: Any = None) -> tuple[bool, str]:
    """Evaluate a claim against private data.

    A threshold claim with a missing or unparseable threshold evaluates to
    false rather than raising.

    Args:
        claim (ClaimType): Claim to evaluate.
        secret_data (Mapping[str, Any]): Private record.
        threshold (Any): Comparison value for threshold claims.

    Returns:
        tuple[bool, str]: Claim outcome and its public wording.
    """
    match claim:
        case ClaimType.HAS_DEGREE:
            return _has_degree(secret_data, threshold)
        case ClaimType.GPA_ABOVE:
            return _gpa_above(secret_data, threshold)
        case ClaimType.GRADUATED_BEFORE:
            return _graduated_before(secret_data, threshold)
        case ClaimType.GRADUATED_AFTER:
            return _graduated_after(secret_data, threshold)
        case ClaimType.INSTITUTION_MATCH:
            return _institution_match(secret_data, threshold)
        case ClaimType.CERTIFICATE_VALID:
            return _certificate_valid(secret_data, threshold)
        case _:
            assert_never(claim)


def _parse_claim(claim: ClaimType | str) -> ClaimType:
    if isinstance(claim, ClaimType):
        return claim
    try:
        return ClaimType(claim)
    except ValueError as exc:
        raise UnknownClaimError(claim=str(claim)) from exc


def generate_proof(
    claim: ClaimType | str,
    secret_data: Mapping[str, Any] | BaseModel,
    threshold: Any = None,
) -> Proof:
    """Produce a proof of a claim without including the private data.

    Args:
        claim (ClaimType | str): Claim type.
        secret_data (Mapping[str, Any] | BaseModel): Private record.
        threshold (Any): Comparison value for threshold claims.

    Raises:
        UnknownClaimError: If the claim type is not supported.

    Returns:
        Proof: Public proof object.
    """
    claim_type = _parse_claim(claim)
    record = (
        secret_data.model_dump(mode="json", by_alias=True) if isinstance(secret_data, BaseModel) else dict(secret_data)
    )
    claim_result, public_claim = evaluate_claim(claim_type, record, threshold)

    nonce = generate_nonce()
    commitment = commit(serialize_secret(record), nonce)
    proof = Proof(
        proof_hash=compute_proof_hash(claim_type.value, claim_result, commitment, nonce),
        claim_result=claim_result,
        public_claim=public_claim,
        commitment=commitment,
        nonce=nonce,
        claim_type=claim_type.value,
        timestamp=time.time_ns() // 1_000_000,
    )
    logger.info("Claim proof generated", extra={"claim_type": claim_type.value, "claim_result": claim_result})
    return proof


def verify_proof(proof: Proof | Mapping[str, Any]) -> ProofVerification:
    """Check that a proof's public fields hash to its proof hash.

    Fails closed: malformed or tampered proofs verify as invalid, never raise.

    Args:
        proof (Proof | Mapping[str, Any]): Proof object or its JSON payload.

    Returns:
        ProofVerification: Validity and the claim outcome it carries.
    """
    if not isinstance(proof, Proof):
        try:
            proof = Proof.model_validate(proof)
        except ValidationError:
            logger.warning("Rejected malformed proof payload")
            claim_type = proof.get("claimType", proof.get("claim_type", "")) if isinstance(proof, Mapping) else ""
            return ProofVerification(
                valid=False,
                claim_result=False,
                public_claim="",
                claim_type=str(claim_type),
                verified=False,
                timestamp=0,
            )

    expected = compute_proof_hash(proof.claim_type, proof.claim_result, proof.commitment, proof.nonce)
    valid = hmac.compare_digest(expected.encode("utf-8"), proof.proof_hash.encode("utf-8"))
    if not valid:
        logger.warning("Proof hash mismatch", extra={"claim_type": proof.claim_type})

    return ProofVerification(
        valid=valid,
        claim_result=proof.claim_result,
        public_claim=proof.public_claim,
        claim_type=proof.claim_type,
        verified=valid and proof.claim_result,
        timestamp=proof.timestamp,
    )
