"""
Signing Digest Computation

Produces the 32-byte digests that Ethereum wallets sign:

hash_personal_message
    EIP-191 version ``0x45`` (``personal_sign`` / ``eth_sign``):
    ``keccak(0x19 || "Ethereum Signed Message:\\n" || len(msg) || msg)``.

hash_typed_data
    EIP-712: ``keccak(0x19 0x01 || domainSeparator || hashStruct(message))``.
    The ``EIP712Domain`` struct is synthesized from the domain fields that
    are actually present, in the canonical order ``name``, ``version``,
    ``chainId``, ``verifyingContract``, ``salt``.

hash_typed_data_message
    Same digest from a ``{types, primaryType, domain, message}`` envelope.

All digests are returned as ``0x``-prefixed lowercase hex.
"""

from typing import Any, List, Mapping, Optional, Sequence, Union

from ..engine.exceptions import InvalidFieldValue, NoPrimaryType
from ..schemas.typed_data import (
    TypedDataDomain,
    TypedDataField,
    TypedDataMessage,
    normalize_types,
)
from .constants import (
    EIP191_PREFIX,
    EIP712_DOMAIN_FIELDS,
    EIP712_DOMAIN_TYPE,
    EIP712_PREFIX,
    PERSONAL_MESSAGE_BANNER,
)
from .encoding import Schema, base_type, struct_digest
from .utils import bytes_to_hex, keccak256, keccak_digest, to_utf8_bytes

DomainLike = Union[TypedDataDomain, Mapping[str, Any]]
TypesLike = Mapping[str, Sequence[Any]]


# ---------------------------------------------------------------------------
# EIP-191 personal messages
# ---------------------------------------------------------------------------

def hash_personal_message(message: Union[str, bytes]) -> str:
    """
    Hash a message the way ``personal_sign`` does.

    The length in the banner is the UTF-8 *byte* length, so ``"Hello 🌍"``
    is prefixed with ``10``, not ``7``.

    Args:
        message: Text (UTF-8 encoded before hashing) or raw bytes.

    Returns:
        ``0x``-prefixed hex digest.

    Raises:
        InvalidFieldValue: If ``message`` is neither text nor bytes.

    Example::

        hash_personal_message("Hello World")
        # '0xa1de988600a42c4b4ab089b619297c17d53cffae5d5120d82d8a92d0bb3b78f2'
    """
    if isinstance(message, str):
        body = to_utf8_bytes(message)
    elif isinstance(message, (bytes, bytearray)):
        body = bytes(message)
    else:
        raise InvalidFieldValue(f"Message must be text or bytes, got {type(message).__name__}")

    header = to_utf8_bytes(f"{PERSONAL_MESSAGE_BANNER}{len(body)}")
    return keccak256(EIP191_PREFIX + header + body)


# ---------------------------------------------------------------------------
# EIP-712 typed data
# ---------------------------------------------------------------------------

def build_domain_type(domain: DomainLike) -> List[TypedDataField]:
    """
    Synthesize the ``EIP712Domain`` field list for ``domain``.

    Only fields present on the domain are declared, in canonical order.
    """
    present = TypedDataDomain.coerce(domain).present_fields()
    return [
        TypedDataField(name=name, type=type_name)
        for name, type_name in EIP712_DOMAIN_FIELDS
        if name in present
    ]


def find_primary_type(types: TypesLike) -> str:
    """
    Infer the top-level message type of a schema.

    The primary type is the one caller type (``EIP712Domain`` aside) that no
    other type refers to.  Schemas with several such roots are ambiguous and
    need an explicit ``primary_type``.

    Raises:
        NoPrimaryType: If the schema is empty or has no single root.
    """
    schema = normalize_types(types)
    candidates = [name for name in schema if name != EIP712_DOMAIN_TYPE]
    if not candidates:
        raise NoPrimaryType("No primary type found")

    referenced = {
        base_type(field.type)
        for name in candidates
        for field in schema[name]
        if base_type(field.type) != name
    }
    roots = [name for name in candidates if name not in referenced]
    if len(roots) != 1:
        raise NoPrimaryType(
            f"Cannot infer primary type (candidates: {', '.join(roots or candidates)}); "
            "pass primary_type explicitly"
        )
    return roots[0]


def _merge_schema(domain: TypedDataDomain, schema: Schema) -> Schema:
    # A caller-declared EIP712Domain overrides the synthesized one.
    merged: Schema = {EIP712_DOMAIN_TYPE: build_domain_type(domain)}
    merged.update(schema)
    return merged


def hash_domain(domain: DomainLike, types: Optional[TypesLike] = None) -> str:
    """
    EIP-712 domain separator, ``hashStruct(EIP712Domain, domain)``.

    Args:
        domain: Domain model or mapping.
        types: Optional schema; only consulted for an explicit ``EIP712Domain``.

    Returns:
        ``0x``-prefixed hex digest.
    """
    domain_model = TypedDataDomain.coerce(domain)
    schema = _merge_schema(domain_model, normalize_types(types or {}))
    return bytes_to_hex(struct_digest(EIP712_DOMAIN_TYPE, domain_model.present_fields(), schema))


def hash_typed_data(
    domain: DomainLike,
    types: TypesLike,
    value: Mapping[str, Any],
    primary_type: Optional[str] = None,
) -> str:
    """
    Compute the EIP-712 signing digest of ``value``.

    Args:
        domain: Domain model or mapping.  Absent fields are left out of the
            ``EIP712Domain`` type; present fields must have a value.
        types: Struct declarations, ``{TypeName: [{"name": ..., "type": ...}]}``.
            ``EIP712Domain`` may be declared but does not have to be.
        value: Struct value of the primary type.
        primary_type: Top-level type of ``value``.  Inferred with
            ``find_primary_type`` when omitted.

    Returns:
        ``0x``-prefixed hex digest.

    Raises:
        NoPrimaryType: If ``types`` is empty or the primary type is ambiguous.
        UnknownType: If a referenced struct type is not declared.
        MissingFieldValue: If a declared field has no value.
        InvalidFieldValue: If the domain or a field value is malformed.

    Example::

        digest = hash_typed_data(
            {"name": "Test App", "version": "1", "chainId": 1},
            {"Message": [{"name": "content", "type": "string"},
                         {"name": "timestamp", "type": "uint256"}]},
            {"content": "Hello World", "timestamp": 1234567890},
        )
    """
    domain_model = TypedDataDomain.coerce(domain)
    schema = normalize_types(types)
    primary = primary_type if primary_type is not None else find_primary_type(schema)
    merged = _merge_schema(domain_model, schema)

    domain_separator = struct_digest(EIP712_DOMAIN_TYPE, domain_model.present_fields(), merged)
    struct_hash = struct_digest(primary, value, merged)
    return bytes_to_hex(keccak_digest(EIP712_PREFIX + domain_separator + struct_hash))


def hash_typed_data_message(full_message: Union[TypedDataMessage, Mapping[str, Any]]) -> str:
    """
    EIP-712 digest of a ``{types, primaryType, domain, message}`` envelope.

    Accepts the same dict that ``eth_signTypedData_v4`` and
    ``eth_account.Account.sign_typed_data(full_message=...)`` consume.
    """
    payload = TypedDataMessage.coerce(full_message)
    return hash_typed_data(
        payload.domain,
        payload.types,
        payload.message,
        primary_type=payload.primary_type,
    )
