"""
EIP-712 Struct Encoding

Canonical encoding of typed structures as defined by EIP-712:

encode_type / hash_type
    Render ``Primary(type name,...)Dep1(...)Dep2(...)`` for a struct and
    every struct it reaches, dependencies sorted by name, and hash it.

encode_value
    Encode one field value into its 32-byte slot.  Dynamic values
    (``string``, ``bytes``, arrays) are replaced by their Keccak-256 hash,
    nested structs by their struct hash.

hash_struct
    ``keccak(typeHash || enc(field_1) || ... || enc(field_n))`` with fields
    taken in declaration order.

The public functions accept raw type maps (dicts of ``{name, type}`` lists)
or ``TypedDataField`` lists and normalize them first.  ``struct_digest`` and
``type_digest`` take an already normalized schema and return raw bytes; the
digest engine uses them to avoid re-normalizing at every nesting level.
"""

import re
from typing import Any, Dict, List, Mapping, Sequence, Set

from ..engine.exceptions import InvalidFieldValue, InvalidHexEncoding, MissingFieldValue, UnknownType
from ..schemas.typed_data import TypedDataField, normalize_types
from .constants import (
    ADDRESS_HEX_LENGTH,
    ADDRESS_SIZE,
    INT256_MAX,
    INT256_MIN,
    UINT256_MAX,
    WORD_SIZE,
)
from .utils import bytes_to_hex, hex_to_bytes, keccak_digest

Schema = Dict[str, List[TypedDataField]]

_ARRAY_TYPE = re.compile(r"^(?P<element>.+)\[(?P<length>\d*)\]$")
_ARRAY_SUFFIXES = re.compile(r"(\[\d*\])+$")
_INTEGER_TYPE = re.compile(r"^(?P<unsigned>u?)int(?P<bits>\d+)$")
_FIXED_BYTES_TYPE = re.compile(r"^bytes(?P<size>\d+)$")


def base_type(type_name: str) -> str:
    """Strip every trailing array suffix: ``Person[][3]`` -> ``Person``."""
    return _ARRAY_SUFFIXES.sub("", type_name)


# ---------------------------------------------------------------------------
# Type encoder
# ---------------------------------------------------------------------------

def _collect_dependencies(type_name: str, schema: Schema, found: Set[str]) -> Set[str]:
    # Already-collected types are not revisited, so recursive schemas converge.
    fields = schema.get(type_name)
    if fields is None or type_name in found:
        return found
    found.add(type_name)
    for field in fields:
        _collect_dependencies(base_type(field.type), schema, found)
    return found


def _render_type(type_name: str, schema: Schema) -> str:
    fields = schema.get(type_name)
    if fields is None:
        raise UnknownType(f"Type {type_name} not found", type_name=type_name)
    members = ",".join(f"{field.type} {field.name}" for field in fields)
    return f"{type_name}({members})"


def _encode_type(primary_type: str, schema: Schema) -> str:
    dependencies = _collect_dependencies(primary_type, schema, set())
    dependencies.discard(primary_type)
    return "".join(
        _render_type(type_name, schema)
        for type_name in [primary_type] + sorted(dependencies)
    )


def type_digest(primary_type: str, schema: Schema) -> bytes:
    """Raw type hash of ``primary_type`` in a normalized schema."""
    return keccak_digest(_encode_type(primary_type, schema))


def encode_type(primary_type: str, types: Mapping[str, Sequence[Any]]) -> str:
    """
    Canonical EIP-712 type string of ``primary_type``.

    Example::

        encode_type("Mail", {
            "Person": [{"name": "name", "type": "string"},
                       {"name": "wallet", "type": "address"}],
            "Mail": [{"name": "from", "type": "Person"},
                     {"name": "to", "type": "Person"},
                     {"name": "contents", "type": "string"}],
        })
        # 'Mail(Person from,Person to,string contents)Person(string name,address wallet)'

    Raises:
        UnknownType: If ``primary_type`` has no declaration.
    """
    return _encode_type(primary_type, normalize_types(types))


def hash_type(primary_type: str, types: Mapping[str, Sequence[Any]]) -> str:
    """Keccak-256 of ``encode_type(primary_type, types)`` as a hex digest."""
    return bytes_to_hex(type_digest(primary_type, normalize_types(types)))


# ---------------------------------------------------------------------------
# Value encoder
# ---------------------------------------------------------------------------

def _text_bytes(value: Any, type_name: str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise InvalidFieldValue(f"Expected text for {type_name}, got {type(value).__name__}")


def _raw_bytes(value: Any, type_name: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        if value[:2] not in ("0x", "0X"):
            raise InvalidHexEncoding(f"{type_name} value must be 0x-prefixed hex, got {value!r}")
        return hex_to_bytes(value)
    raise InvalidFieldValue(f"Expected bytes or hex for {type_name}, got {type(value).__name__}")


def _encode_address(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    elif isinstance(value, str):
        body = value.lower()
        if body.startswith("0x"):
            body = body[2:]
        raw = hex_to_bytes(body.rjust(ADDRESS_HEX_LENGTH, "0"))
    else:
        raise InvalidFieldValue(f"Expected address, got {type(value).__name__}")
    if len(raw) > ADDRESS_SIZE:
        raise InvalidFieldValue(f"Address longer than {ADDRESS_SIZE} bytes: {value!r}")
    return raw.rjust(WORD_SIZE, b"\x00")


def _to_integer(value: Any, type_name: str) -> int:
    if isinstance(value, bool):
        raise InvalidFieldValue(f"Expected integer for {type_name}, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        is_hex = text.lower().startswith(("0x", "-0x"))
        try:
            return int(text, 16 if is_hex else 10)
        except ValueError as exc:
            raise InvalidFieldValue(f"Invalid {type_name} value: {value!r}") from exc
    raise InvalidFieldValue(f"Expected integer for {type_name}, got {type(value).__name__}")


def _encode_integer(match: "re.Match", value: Any, type_name: str) -> bytes:
    bits = int(match.group("bits"))
    if bits < 8 or bits > 256 or bits % 8:
        raise UnknownType(f"Unsupported type: {type_name}", type_name=type_name)

    number = _to_integer(value, type_name)
    # The slot is always 256 bits wide, whatever width the type declares.
    if match.group("unsigned"):
        if not 0 <= number <= UINT256_MAX:
            raise InvalidFieldValue(f"{type_name} value out of range: {number}")
        return number.to_bytes(WORD_SIZE, "big")
    if not INT256_MIN <= number <= INT256_MAX:
        raise InvalidFieldValue(f"{type_name} value out of range: {number}")
    return number.to_bytes(WORD_SIZE, "big", signed=True)


def _encode_fixed_bytes(match: "re.Match", value: Any, type_name: str) -> bytes:
    size = int(match.group("size"))
    if size < 1 or size > WORD_SIZE:
        raise UnknownType(f"Unsupported type: {type_name}", type_name=type_name)

    raw = _raw_bytes(value, type_name)
    if len(raw) > size:
        raise InvalidFieldValue(f"{type_name} value is {len(raw)} bytes long")
    return raw.ljust(WORD_SIZE, b"\x00")


def _encode_array(element_type: str, length: str, value: Any, schema: Schema) -> bytes:
    if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Sequence):
        raise InvalidFieldValue(f"Expected a list for {element_type}[{length}], got {type(value).__name__}")
    if length and len(value) != int(length):
        raise InvalidFieldValue(
            f"{element_type}[{length}] expects {length} elements, got {len(value)}"
        )
    return keccak_digest(b"".join(_encode_value(element_type, item, schema) for item in value))


def _encode_value(type_name: str, value: Any, schema: Schema) -> bytes:
    array = _ARRAY_TYPE.match(type_name)
    if array:
        return _encode_array(array.group("element"), array.group("length"), value, schema)

    if type_name == "address":
        return _encode_address(value)

    # Dynamic types are encoded by their hash.
    if type_name == "string":
        return keccak_digest(_text_bytes(value, type_name))
    if type_name == "bytes":
        return keccak_digest(_raw_bytes(value, type_name))

    fixed_bytes = _FIXED_BYTES_TYPE.match(type_name)
    if fixed_bytes:
        return _encode_fixed_bytes(fixed_bytes, value, type_name)

    integer = _INTEGER_TYPE.match(type_name)
    if integer:
        return _encode_integer(integer, value, type_name)

    if type_name == "bool":
        return (1 if value else 0).to_bytes(WORD_SIZE, "big")

    if type_name in schema:
        return struct_digest(type_name, value, schema)

    raise UnknownType(f"Unsupported type: {type_name}", type_name=type_name)


def encode_value(type_name: str, value: Any, types: Mapping[str, Sequence[Any]]) -> bytes:
    """
    Encode ``value`` as the 32-byte EIP-712 slot for ``type_name``.

    Raises:
        UnknownType: If ``type_name`` is neither a primitive nor declared in ``types``.
        MissingFieldValue: If a nested struct value lacks a declared field.
        InvalidFieldValue: If the value does not fit the type.
        InvalidHexEncoding: If an address or bytes value is not valid hex.
    """
    return _encode_value(type_name, value, normalize_types(types))


# ---------------------------------------------------------------------------
# Struct hasher
# ---------------------------------------------------------------------------

def struct_digest(type_name: str, value: Any, schema: Schema) -> bytes:
    """Raw struct hash of ``value`` as ``type_name`` in a normalized schema."""
    type_hash = type_digest(type_name, schema)

    if not isinstance(value, Mapping):
        raise InvalidFieldValue(f"Value for {type_name} must be a mapping, got {type(value).__name__}")

    encoded = [type_hash]
    for field in schema[type_name]:
        field_value = value.get(field.name)
        if field_value is None:
            raise MissingFieldValue(f"Missing value for field: {field.name}", field_name=field.name)
        encoded.append(_encode_value(field.type, field_value, schema))

    return keccak_digest(b"".join(encoded))


def hash_struct(type_name: str, value: Mapping[str, Any], types: Mapping[str, Sequence[Any]]) -> str:
    """
    EIP-712 ``hashStruct(value)`` for ``type_name`` as a hex digest.

    Raises:
        UnknownType: If ``type_name`` (or a nested type) is not declared.
        MissingFieldValue: If a declared field is absent or ``None``.
    """
    return bytes_to_hex(struct_digest(type_name, value, normalize_types(types)))
