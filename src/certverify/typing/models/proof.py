"""Claim proof models."""

from __future__ import annotations

from certverify.typing.enums import ClaimType
from certverify.typing.models.base import DomainModel


class ClaimSpec(DomainModel):
    """Description of one provable claim."""

    claim_type: ClaimType
    label: str
    requires_threshold: bool
    threshold_label: str | None = None


class Proof(DomainModel):
    """Public proof object; never carries the secret record itself."""

    proof_hash: str
    claim_result: bool
    public_claim: str
    commitment: str
    nonce: str
    claim_type: str
    timestamp: int


class ProofVerification(DomainModel):
    """Outcome of checking a proof's hash consistency."""

    valid: bool
    claim_result: bool
    public_claim: str
    claim_type: str
    verified: bool
    timestamp: int
