"""
EVM Signature Verification

Off-chain verification of signatures produced by Ethereum wallets.  Every
check recomputes the signing digest from the supplied inputs, recovers the
signer with secp256k1 public-key recovery and compares it to the claimed
address (case-insensitively).

Two layers are exposed:

check_message / check_typed_data
    Return an ``EVMVerificationResult`` carrying the status, the digest,
    the recovered address and, on failure, the error kind that stopped the
    check.

verify_message / verify_typed_data
    Boolean façade over the above.  They never raise: a malformed
    signature, an unknown type, a ``None`` argument or a self-referencing
    struct value all come back as ``False``.

Current coverage
----------------
personal_sign
    EIP-191 version ``0x45`` messages (MetaMask ``personal_sign``).
eip712
    EIP-712 typed structured data (``eth_signTypedData_v4``).
"""

import logging
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Sequence, Union

from ..engine.exceptions import (
    EncodingError,
    SignatureError,
    SigVerifyError,
    TypedDataError,
)
from ..schemas.bases import VerificationStatus
from ..schemas.typed_data import TypedDataDomain
from .hashing import hash_personal_message, hash_typed_data
from .recovery import recover_address
from .schemas import EVMVerificationResult

logger = logging.getLogger(__name__)

VerificationType = Literal["personal_sign", "eip712"]

# Checked in order; the first matching base class wins.
_STATUS_BY_ERROR = (
    (SignatureError, VerificationStatus.INVALID_SIGNATURE),
    (EncodingError, VerificationStatus.INVALID_ENCODING),
    (TypedDataError, VerificationStatus.INVALID_TYPED_DATA),
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _status_for(error: Exception) -> VerificationStatus:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return VerificationStatus.MALFORMED_INPUT


def _check_signature(
    verification_type: VerificationType,
    *,
    address: Any,
    signature: Any,
    compute_digest: Callable[[], str],
) -> EVMVerificationResult:
    """
    Shared verification flow for every signing scheme.

    Steps, returning on the first failure:

    1. **Claimed address** -- must be text.
    2. **Digest** -- ``compute_digest()`` rebuilds what the wallet signed.
    3. **Recovery** -- secp256k1 recovery of the signer from the digest.
    4. **Comparison** -- recovered and claimed addresses must match,
       ignoring case.
    """
    digest: Optional[str] = None
    recovered: Optional[str] = None

    def _fail(
        status: VerificationStatus,
        message: str,
        error_kind: Optional[str] = None,
        error_details: Optional[Dict[str, Any]] = None,
    ) -> EVMVerificationResult:
        logger.debug("%s verification failed: %s (%s)", verification_type, status.value, error_kind or message)
        return EVMVerificationResult(
            verification_type=verification_type,
            status=status,
            is_valid=False,
            message=message,
            error_kind=error_kind,
            error_details=error_details,
            expected_address=address if isinstance(address, str) else None,
            recovered_address=recovered,
            digest=digest,
        )

    # ------------------------------------------------------------------
    # 1. Claimed address
    # ------------------------------------------------------------------
    if not isinstance(address, str):
        return _fail(
            VerificationStatus.MALFORMED_INPUT,
            "Claimed address must be a string.",
            "TypeError",
            {"address_type": type(address).__name__},
        )

    # ------------------------------------------------------------------
    # 2-3. Digest and recovery
    # ------------------------------------------------------------------
    try:
        digest = compute_digest()
        recovered = recover_address(digest, signature)
    except SigVerifyError as exc:
        return _fail(_status_for(exc), str(exc), exc.kind)
    except Exception as exc:
        # TypeError / ValueError from wrong argument types, RecursionError
        # from cyclic or over-deep struct values.
        return _fail(VerificationStatus.MALFORMED_INPUT, str(exc), type(exc).__name__)

    # ------------------------------------------------------------------
    # 4. Comparison
    # ------------------------------------------------------------------
    if recovered.lower() != address.lower():
        return _fail(
            VerificationStatus.SIGNER_MISMATCH,
            "Recovered signer does not match the claimed address.",
            error_details={"expected": address, "recovered": recovered},
        )

    logger.debug("%s signature verified for %s", verification_type, recovered)
    return EVMVerificationResult(
        verification_type=verification_type,
        status=VerificationStatus.SUCCESS,
        is_valid=True,
        message="Signature verified.",
        expected_address=address,
        recovered_address=recovered,
        digest=digest,
    )


# ---------------------------------------------------------------------------
# Result-returning verifiers
# ---------------------------------------------------------------------------

def check_message(address: str, message: Union[str, bytes], signature: str) -> EVMVerificationResult:
    """
    Verify an EIP-191 ``personal_sign`` signature.

    Args:
        address:   Claimed signer address (any casing).
        message:   Signed text (UTF-8) or raw bytes.
        signature: ``0x`` + 130-hex packed ``r || s || v`` signature.

    Returns:
        ``EVMVerificationResult``; ``is_valid=True`` and ``status=SUCCESS``
        only when the recovered signer is ``address``.

    Example::

        result = check_message(
            "0x663918f51479a1dd832929199296843d09d0f71a",
            "Hello from fresh test",
            "0xda689ba0...1b",
        )
        result.status             # VerificationStatus.SUCCESS
        result.recovered_address  # EIP-55 form of the signer
    """
    return _check_signature(
        "personal_sign",
        address=address,
        signature=signature,
        compute_digest=lambda: hash_personal_message(message),
    )


def check_typed_data(
    address: str,
    signature: str,
    domain: Union[TypedDataDomain, Mapping[str, Any]],
    types: Mapping[str, Sequence[Any]],
    value: Mapping[str, Any],
    primary_type: Optional[str] = None,
) -> EVMVerificationResult:
    """
    Verify an EIP-712 typed-data signature.

    Args:
        address:      Claimed signer address (any casing).
        signature:    ``0x`` + 130-hex packed ``r || s || v`` signature.
        domain:       Domain model or mapping (``name``, ``version``,
                      ``chainId``, ``verifyingContract``, ``salt``).
        types:        Struct declarations; ``EIP712Domain`` is optional.
        value:        Struct value of the primary type.
        primary_type: Top-level type of ``value``; inferred when omitted.

    Returns:
        ``EVMVerificationResult`` with ``digest`` and ``recovered_address``
        populated as far as verification got.
    """
    return _check_signature(
        "eip712",
        address=address,
        signature=signature,
        compute_digest=lambda: hash_typed_data(domain, types, value, primary_type=primary_type),
    )


# ---------------------------------------------------------------------------
# Boolean entrypoints
# ---------------------------------------------------------------------------

def verify_message(address: str, message: Union[str, bytes], signature: str) -> bool:
    """True iff ``signature`` is ``address``'s ``personal_sign`` over ``message``."""
    return check_message(address, message, signature).is_success()


def verify_typed_data(
    address: str,
    signature: str,
    domain: Union[TypedDataDomain, Mapping[str, Any]],
    types: Mapping[str, Sequence[Any]],
    value: Mapping[str, Any],
    primary_type: Optional[str] = None,
) -> bool:
    """
    True iff ``signature`` is ``address``'s EIP-712 signature over ``value``.

    Example::

        verify_typed_data(
            "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826",
            signature,
            {"name": "Ether Mail", "version": "1", "chainId": 1,
             "verifyingContract": "0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC"},
            {"Person": [...], "Mail": [...]},
            {"from": {...}, "to": {...}, "contents": "Hello, Bob!"},
            primary_type="Mail",
        )
    """
    return check_typed_data(
        address, signature, domain, types, value, primary_type=primary_type
    ).is_success()
