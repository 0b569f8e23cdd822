from .constants import (
    EIP191_PREFIX,
    EIP712_PREFIX,
    EIP712_DOMAIN_TYPE,
    EIP712_DOMAIN_FIELDS,
    PERSONAL_MESSAGE_BANNER,
)
from .utils import (
    keccak256,
    hex_to_bytes,
    bytes_to_hex,
    to_utf8_bytes,
    concat_bytes,
)
from .encoding import (
    encode_type,
    hash_type,
    encode_value,
    hash_struct,
)
from .hashing import (
    hash_personal_message,
    hash_typed_data,
    hash_typed_data_message,
    hash_domain,
    find_primary_type,
)
from .schemas import (
    EVMECDSASignature,
    EVMVerificationResult,
)
from .recovery import (
    parse_signature,
    recover_address,
    public_key_to_address,
    to_checksum_address,
    is_checksum_address,
)
from .verifies import (
    check_message,
    check_typed_data,
    verify_message,
    verify_typed_data,
)

__all__ = [
    "EIP191_PREFIX",
    "EIP712_PREFIX",
    "EIP712_DOMAIN_TYPE",
    "EIP712_DOMAIN_FIELDS",
    "PERSONAL_MESSAGE_BANNER",
    "keccak256",
    "hex_to_bytes",
    "bytes_to_hex",
    "to_utf8_bytes",
    "concat_bytes",
    "encode_type",
    "hash_type",
    "encode_value",
    "hash_struct",
    "hash_personal_message",
    "hash_typed_data",
    "hash_typed_data_message",
    "hash_domain",
    "find_primary_type",
    "EVMECDSASignature",
    "EVMVerificationResult",
    "parse_signature",
    "recover_address",
    "public_key_to_address",
    "to_checksum_address",
    "is_checksum_address",
    "check_message",
    "check_typed_data",
    "verify_message",
    "verify_typed_data",
]
