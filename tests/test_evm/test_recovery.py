"""
Signature Recovery Test Suite

Tests for signature parsing, secp256k1 signer recovery, public-key address
derivation and EIP-55 checksum casing.

Usage:
    pytest tests/test_evm/test_recovery.py -v
"""

import pytest
from eth_keys import keys
from eth_utils import to_checksum_address as eth_utils_checksum

from test_mocks import (
    COW_ADDRESS,
    COW_PRIVATE_KEY,
    ETHER_MAIL_DIGEST,
    FRESH_TEST_ADDRESS,
    FRESH_TEST_MESSAGE,
    FRESH_TEST_SIGNATURE,
    MOCK_SIGNER_ADDRESS,
    MOCK_SIGNER_PRIVATE_KEY,
    flip_recovery_byte,
    sign_personal_message,
    with_recovery_byte,
)

from eth_sigverify.engine.exceptions import (
    InvalidFieldValue,
    InvalidHexEncoding,
    InvalidPublicKeyEncoding,
    InvalidSignatureFormat,
    SignatureError,
    SignatureRecoveryError,
)
from eth_sigverify.evm.hashing import hash_personal_message
from eth_sigverify.evm.recovery import (
    is_checksum_address,
    parse_signature,
    public_key_to_address,
    recover_address,
    to_checksum_address,
)
from eth_sigverify.evm.schemas import EVMECDSASignature

FRESH_TEST_DIGEST = hash_personal_message(FRESH_TEST_MESSAGE)

# Published EIP-55 examples.
EIP55_ADDRESSES = [
    "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
    "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
    "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
]


# ========================================================================
# parse_signature
# ========================================================================

class TestParseSignature:
    """Splitting packed signatures."""

    def test_components(self):
        parsed = parse_signature(FRESH_TEST_SIGNATURE)
        assert parsed.r == "0x" + FRESH_TEST_SIGNATURE[2:66]
        assert parsed.s == "0x" + FRESH_TEST_SIGNATURE[66:130]
        assert parsed.v == 27
        assert parsed.recovery_id == 0

    def test_packed_hex_restores_input(self):
        assert parse_signature(FRESH_TEST_SIGNATURE).to_packed_hex() == FRESH_TEST_SIGNATURE

    @pytest.mark.parametrize("v, recovery_id", [(0, 0), (1, 1), (27, 0), (28, 1)])
    def test_recovery_id(self, v, recovery_id):
        parsed = parse_signature(with_recovery_byte(FRESH_TEST_SIGNATURE, v))
        assert parsed.v == v
        assert parsed.recovery_id == recovery_id

    @pytest.mark.parametrize("signature", [
        "",
        "0x",
        "0x123",
        "notahex",
        "0x" + "1" * 131,
        "0x" + "1" * 129,
        FRESH_TEST_SIGNATURE[2:],
        "0X" + FRESH_TEST_SIGNATURE[2:],
        FRESH_TEST_SIGNATURE + "00",
    ])
    def test_bad_shape(self, signature):
        with pytest.raises(InvalidSignatureFormat, match="Invalid signature format"):
            parse_signature(signature)

    @pytest.mark.parametrize("signature", [None, 123, b"\x00" * 65])
    def test_non_text(self, signature):
        with pytest.raises(InvalidSignatureFormat):
            parse_signature(signature)

    def test_non_hex(self):
        with pytest.raises(InvalidHexEncoding):
            parse_signature("0x" + "z" * 130)


class TestSignatureModel:
    """EVMECDSASignature validation."""

    def test_validate_format(self):
        assert parse_signature(FRESH_TEST_SIGNATURE).validate_format() is True

    def test_bad_recovery_indicator(self):
        sig = EVMECDSASignature(r="0x" + "a" * 64, s="0x" + "b" * 64, v=29)
        with pytest.raises(ValueError, match="Invalid recovery indicator"):
            sig.validate_format()

    def test_short_component(self):
        sig = EVMECDSASignature(r="0x" + "a" * 63, s="0x" + "b" * 64, v=27)
        with pytest.raises(ValueError, match="Invalid r"):
            sig.validate_format()

    def test_packed_hex(self):
        sig = EVMECDSASignature(r="0x" + "a" * 64, s="0x" + "b" * 64, v=28)
        assert sig.to_packed_hex() == "0x" + "a" * 64 + "b" * 64 + "1c"


# ========================================================================
# recover_address
# ========================================================================

class TestRecoverAddress:
    """secp256k1 signer recovery."""

    def test_wallet_fixture(self):
        recovered = recover_address(FRESH_TEST_DIGEST, FRESH_TEST_SIGNATURE)
        assert recovered.lower() == FRESH_TEST_ADDRESS
        assert is_checksum_address(recovered)

    def test_raw_digest_bytes(self):
        digest = bytes.fromhex(FRESH_TEST_DIGEST[2:])
        assert recover_address(digest, FRESH_TEST_SIGNATURE).lower() == FRESH_TEST_ADDRESS

    def test_parsed_signature(self):
        parsed = parse_signature(FRESH_TEST_SIGNATURE)
        assert recover_address(FRESH_TEST_DIGEST, parsed).lower() == FRESH_TEST_ADDRESS

    def test_raw_recovery_bit_equivalent(self):
        raw_v = with_recovery_byte(FRESH_TEST_SIGNATURE, 0)
        assert recover_address(FRESH_TEST_DIGEST, raw_v) == recover_address(FRESH_TEST_DIGEST, FRESH_TEST_SIGNATURE)

    def test_signed_with_eth_account(self):
        signature = sign_personal_message("recover me", MOCK_SIGNER_PRIVATE_KEY)
        assert recover_address(hash_personal_message("recover me"), signature) == MOCK_SIGNER_ADDRESS

    def test_flipped_parity_recovers_other_address(self):
        tampered = flip_recovery_byte(FRESH_TEST_SIGNATURE)
        assert tampered.endswith("1c")
        assert recover_address(FRESH_TEST_DIGEST, tampered).lower() != FRESH_TEST_ADDRESS

    def test_other_digest_recovers_other_address(self):
        assert recover_address(ETHER_MAIL_DIGEST, FRESH_TEST_SIGNATURE).lower() != FRESH_TEST_ADDRESS

    @pytest.mark.parametrize("v", [2, 26, 29, 255])
    def test_bad_recovery_indicator(self, v):
        with pytest.raises(SignatureRecoveryError):
            recover_address(FRESH_TEST_DIGEST, with_recovery_byte(FRESH_TEST_SIGNATURE, v))

    def test_out_of_range_scalars(self):
        # r and s above the curve order cannot be recovered.
        signature = "0x" + "ff" * 64 + "1b"
        with pytest.raises(SignatureRecoveryError):
            recover_address(FRESH_TEST_DIGEST, signature)

    def test_recovery_errors_are_signature_errors(self):
        with pytest.raises(SignatureError):
            recover_address(FRESH_TEST_DIGEST, with_recovery_byte(FRESH_TEST_SIGNATURE, 30))

    @pytest.mark.parametrize("digest", ["0x1234", b"\x00" * 31, "0x" + "00" * 33])
    def test_digest_must_be_32_bytes(self, digest):
        with pytest.raises(InvalidFieldValue):
            recover_address(digest, FRESH_TEST_SIGNATURE)

    def test_non_hex_digest(self):
        with pytest.raises(InvalidHexEncoding):
            recover_address("0x" + "zz" * 32, FRESH_TEST_SIGNATURE)


# ========================================================================
# Addresses
# ========================================================================

class TestPublicKeyToAddress:
    """Address derivation from uncompressed public keys."""

    def test_matches_eth_keys(self):
        private_key = keys.PrivateKey(bytes.fromhex(MOCK_SIGNER_PRIVATE_KEY[2:]))
        tagged = b"\x04" + private_key.public_key.to_bytes()
        assert public_key_to_address(tagged) == MOCK_SIGNER_ADDRESS
        assert public_key_to_address("0x" + tagged.hex()) == MOCK_SIGNER_ADDRESS

    def test_cow_key(self):
        private_key = keys.PrivateKey(bytes.fromhex(COW_PRIVATE_KEY[2:]))
        assert public_key_to_address(b"\x04" + private_key.public_key.to_bytes()) == COW_ADDRESS

    def test_untagged_key(self):
        with pytest.raises(InvalidPublicKeyEncoding, match="Invalid public key format"):
            public_key_to_address(b"\x02" + b"\x11" * 64)

    @pytest.mark.parametrize("length", [33, 64, 66])
    def test_wrong_length(self, length):
        with pytest.raises(InvalidPublicKeyEncoding):
            public_key_to_address(b"\x04" + b"\x11" * (length - 1))


class TestChecksumAddress:
    """EIP-55 mixed-case rendering."""

    @pytest.mark.parametrize("address", EIP55_ADDRESSES)
    def test_published_vectors(self, address):
        assert to_checksum_address(address.lower()) == address
        assert to_checksum_address(address.upper().replace("0X", "0x")) == address

    @pytest.mark.parametrize("address", EIP55_ADDRESSES + [FRESH_TEST_ADDRESS, COW_ADDRESS.lower()])
    def test_matches_eth_utils(self, address):
        assert to_checksum_address(address) == eth_utils_checksum(address)

    def test_prefix_optional(self):
        assert to_checksum_address(EIP55_ADDRESSES[0][2:].lower()) == EIP55_ADDRESSES[0]

    def test_idempotent(self):
        once = to_checksum_address(FRESH_TEST_ADDRESS)
        assert to_checksum_address(once) == once

    @pytest.mark.parametrize("address", ["0x123", "0x" + "g" * 40, "", None, "0x" + "1" * 41])
    def test_invalid(self, address):
        with pytest.raises(InvalidHexEncoding):
            to_checksum_address(address)

    def test_is_checksum_address(self):
        assert is_checksum_address(EIP55_ADDRESSES[0])
        assert not is_checksum_address(EIP55_ADDRESSES[0].lower())
        assert not is_checksum_address("0x123")
        assert not is_checksum_address(None)
