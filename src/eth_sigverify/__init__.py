"""
eth-sigverify

Off-chain verification of Ethereum wallet signatures over personal
messages (EIP-191) and typed structured data (EIP-712).

    from eth_sigverify import verify_message, verify_typed_data

    verify_message(address, "Sign in to example.org", signature)  # True / False

The library logs through the ``eth_sigverify`` logger and is silent unless
the application configures logging.
"""

import logging

from .engine import (
    SigVerifyError,
    EncodingError,
    InvalidHexEncoding,
    InvalidFieldValue,
    SignatureError,
    InvalidSignatureFormat,
    InvalidPublicKeyEncoding,
    SignatureRecoveryError,
    TypedDataError,
    UnknownType,
    MissingFieldValue,
    NoPrimaryType,
)
from .schemas import (
    CanonicalModel,
    VerificationStatus,
    BaseVerificationResult,
    TypedDataField,
    TypedDataDomain,
    TypedDataMessage,
)
from .evm import (
    keccak256,
    hex_to_bytes,
    bytes_to_hex,
    to_utf8_bytes,
    concat_bytes,
    encode_type,
    hash_type,
    encode_value,
    hash_struct,
    hash_personal_message,
    hash_typed_data,
    hash_typed_data_message,
    hash_domain,
    EVMECDSASignature,
    EVMVerificationResult,
    parse_signature,
    recover_address,
    public_key_to_address,
    to_checksum_address,
    is_checksum_address,
    check_message,
    check_typed_data,
    verify_message,
    verify_typed_data,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Verification
    "verify_message",
    "verify_typed_data",
    "check_message",
    "check_typed_data",
    # Digests
    "hash_personal_message",
    "hash_typed_data",
    "hash_typed_data_message",
    "hash_domain",
    "hash_struct",
    "hash_type",
    "encode_type",
    "encode_value",
    # Recovery
    "recover_address",
    "parse_signature",
    "public_key_to_address",
    "to_checksum_address",
    "is_checksum_address",
    # Helpers
    "keccak256",
    "hex_to_bytes",
    "bytes_to_hex",
    "to_utf8_bytes",
    "concat_bytes",
    # Schemas
    "CanonicalModel",
    "VerificationStatus",
    "BaseVerificationResult",
    "TypedDataField",
    "TypedDataDomain",
    "TypedDataMessage",
    "EVMECDSASignature",
    "EVMVerificationResult",
    # Errors
    "SigVerifyError",
    "EncodingError",
    "InvalidHexEncoding",
    "InvalidFieldValue",
    "SignatureError",
    "InvalidSignatureFormat",
    "InvalidPublicKeyEncoding",
    "SignatureRecoveryError",
    "TypedDataError",
    "UnknownType",
    "MissingFieldValue",
    "NoPrimaryType",
]
