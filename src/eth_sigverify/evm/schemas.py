"""
EVM Schema Models

Pydantic models for parsed signatures and verification outcomes.

    - EVMECDSASignature: a 65-byte ``r || s || v`` signature split into its
      components.
    - EVMVerificationResult: tagged outcome of ``check_message`` /
      ``check_typed_data``.
"""

from typing import Optional, Literal

from pydantic import ConfigDict, Field

from ..schemas.bases import BaseVerificationResult, CanonicalModel
from .constants import LEGACY_V_OFFSET


class EVMECDSASignature(CanonicalModel):
    """
    EVM ECDSA signature (v, r, s).

    ``v`` is kept exactly as it appeared in the signature; both the legacy
    encoding (27/28) and the raw recovery bit (0/1) are accepted, and
    ``recovery_id`` normalises them.

    Attributes:
        r: r component, 0x-prefixed 64-char hex.
        s: s component, 0x-prefixed 64-char hex.
        v: Recovery indicator byte as found in the signature.

    Example::

        sig = EVMECDSASignature(r="0x" + "a" * 64, s="0x" + "b" * 64, v=27)
        sig.recovery_id      # 0
        sig.to_packed_hex()  # '0xaaaa...bbbb1b'
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    r: str = Field(..., description="Signature r component (0x + 64 hex)")
    s: str = Field(..., description="Signature s component (0x + 64 hex)")
    v: int = Field(..., ge=0, le=255, description="Recovery indicator byte (0/1 or 27/28)")

    @property
    def recovery_id(self) -> int:
        """Recovery bit derived from ``v``: ``v - 27`` for legacy values, else ``v``."""
        return self.v - LEGACY_V_OFFSET if self.v >= LEGACY_V_OFFSET else self.v

    def validate_format(self) -> bool:
        """
        Validate v/r/s components.

        Returns:
            True when all components pass.

        Raises:
            ValueError: Descriptive message on the first failed check.
        """
        if self.recovery_id not in (0, 1):
            raise ValueError(f"Invalid recovery indicator: {self.v}. Must be 0, 1, 27 or 28")

        for name, val in [("r", self.r), ("s", self.s)]:
            hex_str = val[2:] if val.startswith("0x") else val
            if len(hex_str) != 64:
                raise ValueError(f"Invalid {name}: expected 64 hex chars, got {len(hex_str)}")
            try:
                int(hex_str, 16)
            except ValueError:
                raise ValueError(f"Invalid {name}: not valid hexadecimal")

        return True

    def to_packed_hex(self) -> str:
        """
        Encode v/r/s into a packed 65-byte hex string (``r || s || v``).

        Returns:
            0x-prefixed 132-character hex string.
        """
        r = self.r[2:] if self.r.startswith("0x") else self.r
        s = self.s[2:] if self.s.startswith("0x") else self.s
        return "0x" + r.zfill(64) + s.zfill(64) + format(self.v, "02x")


class EVMVerificationResult(BaseVerificationResult):
    """
    Outcome of a personal-message or typed-data verification.

    Attributes:
        verification_type: ``"personal_sign"`` or ``"eip712"``.
        expected_address: Address the caller claimed signed the data.
        recovered_address: Checksummed address recovered from the signature,
            when recovery got that far.
        digest: Signing digest that was recovered against, when computed.
    """

    verification_type: Literal["personal_sign", "eip712"] = Field(..., description="Signing scheme")
    expected_address: Optional[str] = Field(None, description="Claimed signer address")
    recovered_address: Optional[str] = Field(None, description="Checksummed recovered signer address")
    digest: Optional[str] = Field(None, description="Signing digest (0x + 64 hex)")
