"""
Exception and Error Definitions Module

Defines the custom exception hierarchy raised by the low-level hashing,
encoding and recovery functions. All exceptions inherit from SigVerifyError
for unified exception handling; the boolean verification entrypoints
collapse every member of this tree into ``False``.

Exception Hierarchy:
    SigVerifyError (root)
    ├── EncodingError
    │   ├── InvalidHexEncoding
    │   └── InvalidFieldValue
    ├── SignatureError
    │   ├── InvalidSignatureFormat
    │   ├── InvalidPublicKeyEncoding
    │   └── SignatureRecoveryError
    └── TypedDataError
        ├── UnknownType
        ├── MissingFieldValue
        └── NoPrimaryType
"""

from typing import Optional


class SigVerifyError(Exception):
    """
    Root exception class for all project-specific exceptions.

    All custom exceptions inherit from this class so that callers of the
    low-level API can catch a single type when they only need to know that
    an input was rejected.
    """

    @property
    def kind(self) -> str:
        """Taxonomy name of the condition (the concrete class name)."""
        return type(self).__name__


class EncodingError(SigVerifyError):
    """
    Base exception for value and byte encoding failures.

    Parent class for errors raised while turning caller-supplied text or
    values into bytes.
    """
    pass


class InvalidHexEncoding(EncodingError):
    """
    Raised when a hex string cannot be decoded.

    This includes scenarios such as:
    - Non-hexadecimal characters
    - Odd number of hex digits
    - Addresses that are not exactly 40 hex characters
    """
    pass


class InvalidFieldValue(EncodingError):
    """
    Raised when a value does not fit the type it is declared with.

    This includes scenarios such as:
    - Integers outside the 256-bit range
    - ``bytesN`` values longer than N bytes
    - Fixed-size arrays with the wrong number of elements
    - Struct values that are not mappings
    - Digests that are not 32 bytes
    """
    pass


class SignatureError(SigVerifyError):
    """
    Base exception for signature parsing and recovery failures.
    """
    pass


class InvalidSignatureFormat(SignatureError):
    """
    Raised when a signature is not ``0x`` followed by 130 hex characters.
    """
    pass


class InvalidPublicKeyEncoding(SignatureError):
    """
    Raised when a public key is not a 65-byte uncompressed point
    tagged with ``0x04``.
    """
    pass


class SignatureRecoveryError(SignatureError):
    """
    Raised when the elliptic-curve primitive cannot recover a public key.

    This includes scenarios such as:
    - Recovery id outside {0, 1} after normalisation
    - ``r`` or ``s`` outside the curve order
    - Signature that does not encode a valid curve point
    """
    pass


class TypedDataError(SigVerifyError):
    """
    Base exception for malformed EIP-712 schemas and values.
    """
    pass


class UnknownType(TypedDataError):
    """
    Raised when a type is neither a supported primitive nor declared
    in the schema used for encoding.

    Attributes:
        type_name: The offending type string
    """

    def __init__(self, message: str, type_name: Optional[str] = None):
        super().__init__(message)
        self.type_name = type_name


class MissingFieldValue(TypedDataError):
    """
    Raised when a declared struct field is absent or ``None`` in the value.

    Attributes:
        field_name: Name of the missing field
    """

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(message)
        self.field_name = field_name


class NoPrimaryType(TypedDataError):
    """
    Raised when the primary (top-level) message type cannot be determined.

    This includes scenarios such as:
    - Empty type map
    - Several candidate root types and no explicit ``primary_type``
    """
    pass
