"""
Hash and byte conversion helpers.

Thin wrappers over ``eth_utils`` that fix the conventions used across the
package: digests are rendered as ``0x``-prefixed lowercase hex, text is
UTF-8, and malformed hex always surfaces as ``InvalidHexEncoding``.
"""

import binascii
from typing import Union

from eth_utils import decode_hex, encode_hex, keccak, to_bytes

from ..engine.exceptions import InvalidFieldValue, InvalidHexEncoding


def to_utf8_bytes(text: str) -> bytes:
    """Encode ``text`` as UTF-8 bytes."""
    if not isinstance(text, str):
        raise InvalidFieldValue(f"Expected text, got {type(text).__name__}")
    return to_bytes(text=text)


def hex_to_bytes(hex_string: str) -> bytes:
    """
    Decode a hex string (``0x`` prefix optional) into bytes.

    Raises:
        InvalidHexEncoding: On non-hex characters, odd length or non-text input.
    """
    if not isinstance(hex_string, str):
        raise InvalidHexEncoding(f"Expected hex text, got {type(hex_string).__name__}")
    body = hex_string[2:] if hex_string[:2] in ("0x", "0X") else hex_string
    if len(body) % 2:
        raise InvalidHexEncoding(f"Invalid hex string (odd length): {hex_string!r}")
    try:
        return decode_hex(body)
    except (binascii.Error, ValueError) as exc:
        raise InvalidHexEncoding(f"Invalid hex string: {hex_string!r}") from exc


def bytes_to_hex(data: bytes) -> str:
    """Render ``data`` as ``0x``-prefixed lowercase hex."""
    return encode_hex(bytes(data))


def concat_bytes(*chunks: bytes) -> bytes:
    """Concatenate byte strings."""
    return b"".join(chunks)


def keccak_digest(data: Union[bytes, str]) -> bytes:
    """Raw 32-byte Keccak-256 of ``data``; text is hashed as UTF-8."""
    if isinstance(data, str):
        return keccak(text=data)
    return keccak(primitive=bytes(data))


def keccak256(data: Union[bytes, str]) -> str:
    """
    Keccak-256 of ``data`` as a ``0x``-prefixed 64-character hex digest.

    Text is hashed as its UTF-8 encoding, not decoded as hex::

        keccak256("")   # '0xc5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
        keccak256(b"")  # same digest
    """
    return bytes_to_hex(keccak_digest(data))
