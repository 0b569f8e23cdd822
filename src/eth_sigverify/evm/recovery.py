"""
Signature Recovery & Address Derivation

parse_signature
    Split a ``0x`` + 130-hex signature into r, s and v.

recover_address
    Recover the signer's public key from a digest and a signature
    (secp256k1, via ``eth_keys``) and derive its checksummed address.

public_key_to_address
    ``keccak(X || Y)[-20:]`` of an uncompressed ``0x04 || X || Y`` point.

to_checksum_address / is_checksum_address
    EIP-55 mixed-case rendering: hex digit ``i`` is upper-cased when nibble
    ``i`` of ``keccak(lowercase_hex_text)`` is 8 or more.
"""

import logging
from typing import Union

from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError as KeyValidationError

from ..engine.exceptions import (
    InvalidFieldValue,
    InvalidHexEncoding,
    InvalidPublicKeyEncoding,
    InvalidSignatureFormat,
    SignatureRecoveryError,
)
from .constants import (
    ADDRESS_HEX_LENGTH,
    ADDRESS_SIZE,
    DIGEST_SIZE,
    SIGNATURE_HEX_LENGTH,
    UNCOMPRESSED_PUBLIC_KEY_SIZE,
    UNCOMPRESSED_PUBLIC_KEY_TAG,
)
from .schemas import EVMECDSASignature
from .utils import bytes_to_hex, hex_to_bytes, keccak_digest

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset("0123456789abcdef")


# ---------------------------------------------------------------------------
# Checksum addresses (EIP-55)
# ---------------------------------------------------------------------------

def to_checksum_address(address: str) -> str:
    """
    Render ``address`` in EIP-55 checksum casing.

    Input casing is ignored; the ``0x`` prefix is optional.

    Raises:
        InvalidHexEncoding: If ``address`` is not 40 hex characters.

    Example::

        to_checksum_address("0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed")
        # '0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed'
    """
    if not isinstance(address, str):
        raise InvalidHexEncoding(f"Address must be text, got {type(address).__name__}")

    body = address.lower()
    if body.startswith("0x"):
        body = body[2:]
    if len(body) != ADDRESS_HEX_LENGTH or not _HEX_DIGITS.issuperset(body):
        raise InvalidHexEncoding(f"Invalid address: {address!r}")

    # Hash of the lowercase hex *text*, not of the decoded bytes.
    address_hash = keccak_digest(body).hex()
    return "0x" + "".join(
        char.upper() if int(nibble, 16) >= 8 else char
        for char, nibble in zip(body, address_hash)
    )


def is_checksum_address(address: str) -> bool:
    """True if ``address`` is a valid address already in EIP-55 casing."""
    try:
        return address == to_checksum_address(address)
    except InvalidHexEncoding:
        return False


def public_key_to_address(public_key: Union[bytes, str]) -> str:
    """
    Derive the checksummed address of an uncompressed secp256k1 public key.

    Args:
        public_key: 65 bytes ``0x04 || X || Y`` (or its hex rendering).

    Raises:
        InvalidPublicKeyEncoding: If the key is not a tagged 65-byte point.
    """
    raw = bytes(public_key) if isinstance(public_key, (bytes, bytearray)) else hex_to_bytes(public_key)
    if len(raw) != UNCOMPRESSED_PUBLIC_KEY_SIZE or raw[0] != UNCOMPRESSED_PUBLIC_KEY_TAG:
        raise InvalidPublicKeyEncoding("Invalid public key format")

    address = keccak_digest(raw[1:])[-ADDRESS_SIZE:]
    return to_checksum_address(bytes_to_hex(address))


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------

def parse_signature(signature: str) -> EVMECDSASignature:
    """
    Split a packed ``r || s || v`` signature.

    Raises:
        InvalidSignatureFormat: If ``signature`` is not ``0x`` + 130 characters.
        InvalidHexEncoding: If those characters are not hex.
    """
    if (
        not isinstance(signature, str)
        or not signature.startswith("0x")
        or len(signature) != SIGNATURE_HEX_LENGTH
    ):
        raise InvalidSignatureFormat("Invalid signature format")

    raw = hex_to_bytes(signature)
    return EVMECDSASignature(r=bytes_to_hex(raw[:32]), s=bytes_to_hex(raw[32:64]), v=raw[64])


def _digest_bytes(digest: Union[bytes, str]) -> bytes:
    raw = bytes(digest) if isinstance(digest, (bytes, bytearray)) else hex_to_bytes(digest)
    if len(raw) != DIGEST_SIZE:
        raise InvalidFieldValue(f"Digest must be {DIGEST_SIZE} bytes, got {len(raw)}")
    return raw


def recover_address(digest: Union[bytes, str], signature: Union[str, EVMECDSASignature]) -> str:
    """
    Recover the checksummed address that produced ``signature`` over ``digest``.

    Args:
        digest: 32-byte signing digest, raw or as hex.
        signature: ``0x`` + 130-hex packed signature, or a parsed ``EVMECDSASignature``.
            ``v`` may be 27/28 or 0/1.

    Returns:
        EIP-55 checksummed address.

    Raises:
        InvalidSignatureFormat: Malformed signature text.
        InvalidHexEncoding: Non-hex signature or digest.
        InvalidFieldValue: Digest that is not 32 bytes.
        SignatureRecoveryError: Recovery id outside {0, 1} or no recoverable key.
        InvalidPublicKeyEncoding: Recovered key is not a 65-byte uncompressed point.
    """
    parsed = signature if isinstance(signature, EVMECDSASignature) else parse_signature(signature)
    message_hash = _digest_bytes(digest)

    try:
        parsed.validate_format()
    except ValueError as exc:
        raise SignatureRecoveryError(str(exc)) from exc

    try:
        ec_signature = keys.Signature(vrs=(parsed.recovery_id, int(parsed.r, 16), int(parsed.s, 16)))
        public_key = ec_signature.recover_public_key_from_msg_hash(message_hash)
    except (BadSignature, KeyValidationError, ValueError) as exc:
        raise SignatureRecoveryError(f"Signature recovery failed: {exc}") from exc

    address = public_key_to_address(bytes([UNCOMPRESSED_PUBLIC_KEY_TAG]) + public_key.to_bytes())
    logger.debug("Recovered %s for digest %s", address, bytes_to_hex(message_hash))
    return address
