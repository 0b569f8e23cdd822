from .bases import CanonicalModel, VerificationStatus, BaseVerificationResult
from .typed_data import TypedDataField, TypedDataDomain, TypedDataMessage, normalize_types

__all__ = [
    "CanonicalModel",
    "VerificationStatus",
    "BaseVerificationResult",
    "TypedDataField",
    "TypedDataDomain",
    "TypedDataMessage",
    "normalize_types",
]
