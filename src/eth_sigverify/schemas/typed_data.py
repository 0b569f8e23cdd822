"""
EIP-712 Typed-Data Schema Models

Pydantic models describing the caller-facing shapes of EIP-712 input:

    - TypedDataField: one ``{name, type}`` entry of a struct declaration.
    - TypedDataDomain: the optional domain fields (``name``, ``version``,
      ``chainId``, ``verifyingContract``, ``salt``).  Which fields were
      *set* matters, not their truthiness: only set fields take part in
      the synthesized ``EIP712Domain`` type.
    - TypedDataMessage: the conventional ``{types, primaryType, domain,
      message}`` envelope consumed by ``eth_signTypedData_v4``.

Plain dicts are accepted everywhere a model is; ``normalize_types`` and
``TypedDataDomain.coerce`` turn them into models and re-raise pydantic
validation failures as ``InvalidFieldValue``.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ConfigDict, Field, ValidationError, field_validator

from .bases import CanonicalModel
from ..engine.exceptions import InvalidFieldValue


class TypedDataField(CanonicalModel):
    """
    A single field of an EIP-712 struct declaration.

    Attributes:
        name: Field name as it appears in the struct value.
        type: Solidity-style type (``address``, ``uint256``, ``Person``, ``Person[]``...).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., description="Field name")
    type: str = Field(..., description="EIP-712 type of the field")


class TypedDataDomain(CanonicalModel):
    """
    EIP-712 domain descriptor.

    Every attribute is optional.  Only attributes that were explicitly
    provided (see ``present_fields``) take part in the domain separator,
    so ``TypedDataDomain(name="App")`` and ``TypedDataDomain(name="App",
    version=None)`` hash differently (the latter fails, because a declared
    field has no value).

    Attributes:
        name: Human-readable name of the signing domain.
        version: Current major version of the signing domain.
        chain_id: EIP-155 chain id (alias ``chainId``).
        verifying_contract: Address of the verifying contract (alias ``verifyingContract``).
        salt: 32-byte disambiguating salt, stored as 0x-prefixed hex.

    Example::

        domain = TypedDataDomain(name="Ether Mail", version="1", chainId=1)
        domain.present_fields()  # {'name': 'Ether Mail', 'version': '1', 'chainId': 1}
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: Optional[str] = Field(None, description="Signing domain name")
    version: Optional[str] = Field(None, description="Signing domain version")
    chain_id: Optional[int] = Field(None, ge=0, alias="chainId", description="EIP-155 chain id")
    verifying_contract: Optional[str] = Field(
        None, alias="verifyingContract", description="Verifying contract address (0x-prefixed)"
    )
    salt: Optional[str] = Field(None, description="Domain salt (bytes32, 0x-prefixed hex)")

    @field_validator("salt", mode="before")
    @classmethod
    def _salt_to_hex(cls, value: Any) -> Any:
        if isinstance(value, (bytes, bytearray)):
            return "0x" + bytes(value).hex()
        return value

    def present_fields(self) -> Dict[str, Any]:
        """Return the explicitly provided fields, keyed by their EIP-712 names."""
        return self.model_dump(by_alias=True, exclude_unset=True)

    @classmethod
    def coerce(cls, domain: Union["TypedDataDomain", Mapping[str, Any]]) -> "TypedDataDomain":
        """
        Build a ``TypedDataDomain`` from a model or a plain mapping.

        Unknown keys in a mapping are ignored.

        Raises:
            InvalidFieldValue: If ``domain`` is not a mapping or a field fails validation.
        """
        if isinstance(domain, cls):
            return domain
        if not isinstance(domain, Mapping):
            raise InvalidFieldValue(f"Domain must be a mapping, got {type(domain).__name__}")
        try:
            return cls.model_validate(dict(domain))
        except ValidationError as exc:
            raise InvalidFieldValue(f"Invalid domain: {exc}") from exc


class TypedDataMessage(CanonicalModel):
    """
    Container for a complete EIP-712 payload.

    Mirrors the layout used by ``eth_signTypedData_v4`` and
    ``eth_account.sign_typed_data(full_message=...)``:
    ``{types, primaryType, domain, message}``.

    Attributes:
        types: Struct declarations; may include ``EIP712Domain``.
        primary_type: Top-level message type (alias ``primaryType``).  When
            omitted it is inferred from the schema.
        domain: Domain descriptor.
        message: Struct value of the primary type.
    """

    types: Dict[str, List[TypedDataField]] = Field(..., description="EIP-712 struct declarations")
    primary_type: Optional[str] = Field(None, alias="primaryType", description="Top-level message type")
    domain: TypedDataDomain = Field(default_factory=TypedDataDomain, description="Domain descriptor")
    message: Dict[str, Any] = Field(..., description="Struct value of the primary type")

    @classmethod
    def coerce(cls, payload: Union["TypedDataMessage", Mapping[str, Any]]) -> "TypedDataMessage":
        """
        Build a ``TypedDataMessage`` from a model or a plain mapping.

        Raises:
            InvalidFieldValue: If the payload does not validate.
        """
        if isinstance(payload, cls):
            return payload
        if not isinstance(payload, Mapping):
            raise InvalidFieldValue(f"Typed data must be a mapping, got {type(payload).__name__}")
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as exc:
            raise InvalidFieldValue(f"Invalid typed data: {exc}") from exc


def normalize_types(
    types: Mapping[str, Sequence[Union[TypedDataField, Mapping[str, str]]]],
) -> Dict[str, List[TypedDataField]]:
    """
    Convert a caller-supplied type map into ``{name: [TypedDataField, ...]}``.

    Declaration order of both the types and their fields is preserved.

    Raises:
        InvalidFieldValue: If the map or one of its field lists is malformed.
    """
    if not isinstance(types, Mapping):
        raise InvalidFieldValue(f"Types must be a mapping, got {type(types).__name__}")

    schema: Dict[str, List[TypedDataField]] = {}
    for type_name, fields in types.items():
        if not isinstance(type_name, str) or isinstance(fields, (str, bytes)) or not isinstance(fields, Sequence):
            raise InvalidFieldValue(f"Invalid declaration for type {type_name!r}")
        try:
            schema[type_name] = [
                field if isinstance(field, TypedDataField) else TypedDataField.model_validate(field)
                for field in fields
            ]
        except ValidationError as exc:
            raise InvalidFieldValue(f"Invalid field in type {type_name!r}: {exc}") from exc
    return schema
