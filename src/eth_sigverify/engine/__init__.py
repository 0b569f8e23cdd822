from .exceptions import (
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

__all__ = [
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
