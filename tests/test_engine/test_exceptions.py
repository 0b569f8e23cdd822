"""
Exception hierarchy tests.

Usage:
    pytest tests/test_engine/test_exceptions.py -v
"""

import pytest

from eth_sigverify.engine.exceptions import (
    EncodingError,
    InvalidFieldValue,
    InvalidHexEncoding,
    InvalidPublicKeyEncoding,
    InvalidSignatureFormat,
    MissingFieldValue,
    NoPrimaryType,
    SignatureError,
    SignatureRecoveryError,
    SigVerifyError,
    TypedDataError,
    UnknownType,
)


@pytest.mark.parametrize("error_type, parent", [
    (InvalidHexEncoding, EncodingError),
    (InvalidFieldValue, EncodingError),
    (InvalidSignatureFormat, SignatureError),
    (InvalidPublicKeyEncoding, SignatureError),
    (SignatureRecoveryError, SignatureError),
    (UnknownType, TypedDataError),
    (MissingFieldValue, TypedDataError),
    (NoPrimaryType, TypedDataError),
])
def test_hierarchy(error_type, parent):
    assert issubclass(error_type, parent)
    assert issubclass(error_type, SigVerifyError)
    assert not issubclass(error_type, (ValueError, TypeError))


def test_kind_is_class_name():
    assert InvalidSignatureFormat("Invalid signature format").kind == "InvalidSignatureFormat"
    assert SigVerifyError().kind == "SigVerifyError"


def test_unknown_type_carries_name():
    error = UnknownType("Type Person not found", type_name="Person")
    assert error.type_name == "Person"
    assert str(error) == "Type Person not found"


def test_missing_field_carries_name():
    error = MissingFieldValue("Missing value for field: wallet", field_name="wallet")
    assert error.field_name == "wallet"
    assert str(error) == "Missing value for field: wallet"
