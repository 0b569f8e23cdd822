"""
EVM Signing Constants

Fixed prefixes, field tables and widths shared by the EIP-191 / EIP-712
hashers and the signature recovery code.
"""

from typing import List, Tuple

# ---------------------------------------------------------------------------
# EIP-191 prefixes
# ---------------------------------------------------------------------------

EIP191_PREFIX = b"\x19"

# Version byte 0x45 ("E"): personal_sign banner, followed by the decimal
# byte length of the message.
PERSONAL_MESSAGE_BANNER = "Ethereum Signed Message:\n"

# Version byte 0x01: structured data (EIP-712).
EIP712_PREFIX = b"\x19\x01"

# ---------------------------------------------------------------------------
# EIP-712 domain
# ---------------------------------------------------------------------------

EIP712_DOMAIN_TYPE = "EIP712Domain"

# Canonical field order of the synthesized EIP712Domain struct.
EIP712_DOMAIN_FIELDS: List[Tuple[str, str]] = [
    ("name", "string"),
    ("version", "string"),
    ("chainId", "uint256"),
    ("verifyingContract", "address"),
    ("salt", "bytes32"),
]

# ---------------------------------------------------------------------------
# Widths
# ---------------------------------------------------------------------------

WORD_SIZE = 32
DIGEST_SIZE = 32
ADDRESS_SIZE = 20
ADDRESS_HEX_LENGTH = ADDRESS_SIZE * 2

SIGNATURE_SIZE = 65
# "0x" + 130 hex characters
SIGNATURE_HEX_LENGTH = 2 + SIGNATURE_SIZE * 2

UNCOMPRESSED_PUBLIC_KEY_SIZE = 65
UNCOMPRESSED_PUBLIC_KEY_TAG = 0x04

# Legacy (pre EIP-155) recovery byte offset: v = 27 + recovery_id
LEGACY_V_OFFSET = 27

UINT256_MAX = 2 ** 256 - 1
INT256_MIN = -(2 ** 255)
INT256_MAX = 2 ** 255 - 1

