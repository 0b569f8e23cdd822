"""
Base Schema Models for eth-sigverify

Shared pydantic foundations for the typed-data input models and the
verification results.

Core Classes:
    - CanonicalModel: Pydantic base with deterministic JSON output
    - VerificationStatus: Outcome tags for a verification attempt
    - BaseVerificationResult: Abstract outcome of a signature check

Dependencies:
    - pydantic: Validation, aliases and serialization
"""

import json
from typing import Optional, Dict, Any
from abc import ABC
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CanonicalModel(BaseModel):
    """
    Pydantic base model with canonical (RFC 8785 style) JSON serialization.

    Keys are sorted and whitespace is dropped, so two equal models always
    render to the same string.  Fields are emitted under their aliases
    (``chainId``, ``primaryType``...) to match the wire names wallets use.

    Example:
        class Pair(CanonicalModel):
            b: int
            a: int

        Pair(b=1, a=2).to_canonical_json()  # '{"a":2,"b":1}'
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_canonical_json(self) -> str:
        """
        Render the model as canonical JSON.

        ``mode="json"`` turns enums into plain JSON values
        before ``json.dumps`` sorts and compacts them.
        """
        payload = self.model_dump(mode="json", by_alias=True)
        return json.dumps(payload, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


class VerificationStatus(str, Enum):
    """
    Why a verification attempt ended the way it did.

    Attributes:
        SUCCESS: Recovered signer is the claimed address
        SIGNER_MISMATCH: Signature recovers, but to another address
        INVALID_SIGNATURE: Signature could not be parsed or recovered
        INVALID_ENCODING: Hex text or a field value could not be encoded
        INVALID_TYPED_DATA: Schema or struct value is malformed
        MALFORMED_INPUT: Arguments of the wrong Python type (e.g. ``None``)
    """
    SUCCESS = "success"
    SIGNER_MISMATCH = "signer_mismatch"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_ENCODING = "invalid_encoding"
    INVALID_TYPED_DATA = "invalid_typed_data"
    MALFORMED_INPUT = "malformed_input"


class BaseVerificationResult(CanonicalModel, ABC):
    """
    Abstract outcome of a signature check.

    Scheme-specific subclasses add the digest and the addresses involved.

    Attributes:
        verification_type: Signing scheme that was checked ("personal_sign", "eip712")
        status: Outcome tag
        is_valid: True only when the claimed address produced the signature
        message: Short human-readable explanation
        error_kind: Exception class name that stopped the check, if any
        error_details: Extra diagnostics for failed checks

    Results carry no timestamp, so equal inputs give equal results.
    """

    verification_type: str = Field(..., description="Signing scheme that was checked")
    status: VerificationStatus = Field(..., description="Outcome tag")
    is_valid: bool = Field(..., description="Whether the signature was produced by the claimed address")
    message: str = Field(..., description="Short explanation of the outcome")
    error_kind: Optional[str] = Field(None, description="Error condition name when verification failed")
    error_details: Optional[Dict[str, Any]] = Field(None, description="Diagnostics for failed checks")

    def is_success(self) -> bool:
        """
        True when the signature verified.

        Example:
            result = check_message(address, message, signature)
            if not result.is_success():
                reject(result.get_error_message())
        """
        return self.is_valid and self.status == VerificationStatus.SUCCESS

    def get_error_message(self) -> Optional[str]:
        """Failure summary with any diagnostics appended, or ``None`` on success."""
        if self.is_success():
            return None

        text = f"Verification failed: {self.message}"
        if self.error_details:
            text += "\nDetails: " + json.dumps(self.error_details, indent=2, default=str)
        return text
