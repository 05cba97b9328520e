"""
Definition types for the shapeshare model.

This module contains identifiers, fields, structs, enums (unit enums and
tagged unions), type aliases and constants.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .types import ModelType, is_optional

# Backend tag -> set of free-form flags, e.g. {"kotlin": {"JvmInline"}}
Decorators = dict[str, set[str]]


class Identifier(BaseModel):
    """
    Name of a definition, field or variant.

    Attributes:
        original: Name as written in the origin definition
        renamed: Name after serialization renaming rules were applied
        serde_rename: Whether the rename came from an explicit serialization rename
    """

    original: str
    renamed: str
    serde_rename: bool = False

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, name: str, renamed: str | None = None) -> Identifier:
        """Build an identifier, renamed to itself unless told otherwise."""
        return cls(original=name, renamed=renamed or name, serde_rename=renamed is not None)


def _check_unique_generics(v: list[str]) -> list[str]:
    if len(set(v)) != len(v):
        raise ValueError(f"Generic parameters must be unique: {v}")
    return v


class FieldDef(BaseModel):
    """
    Specification for a single struct or inline-record field.

    Attributes:
        id: Field identifier
        type: Field type
        comments: Doc comment lines
        has_default: Field may be omitted on the wire
        type_overrides: Backend tag -> literal target type replacing the projection
        decorators: Backend tag -> flags
    """

    id: Identifier
    type: ModelType
    comments: list[str] = Field(default_factory=list)
    has_default: bool = False
    type_overrides: dict[str, str] = Field(default_factory=dict)
    decorators: Decorators = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def is_optional(self) -> bool:
        """Check if the field type is optional."""
        return is_optional(self.type)

    def type_override(self, backend: str) -> str | None:
        """Get the literal type override for a backend, if any."""
        return self.type_overrides.get(backend)


class StructDef(BaseModel):
    """
    A record type with named fields.

    Attributes:
        id: Struct identifier
        fields: Ordered field list
        generic_params: Ordered, unique generic parameter names
        comments: Doc comment lines
        is_redacted: Textual representation must be masked
        decorators: Backend tag -> flags
    """

    id: Identifier
    fields: list[FieldDef] = Field(default_factory=list)
    generic_params: list[str] = Field(default_factory=list)
    comments: list[str] = Field(default_factory=list)
    is_redacted: bool = False
    decorators: Decorators = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("generic_params")
    @classmethod
    def validate_generic_params(cls, v: list[str]) -> list[str]:
        """Ensure generic parameter names are unique."""
        return _check_unique_generics(v)


class UnitVariant(BaseModel):
    """A member of a unit enum. Never carries a payload."""

    id: Identifier
    comments: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class NoPayloadVariant(BaseModel):
    """Tagged-union case without payload."""

    variant: Literal["no_payload"] = "no_payload"
    id: Identifier
    comments: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class PayloadVariant(BaseModel):
    """Tagged-union case carrying a single payload value."""

    variant: Literal["payload"] = "payload"
    id: Identifier
    type: ModelType
    comments: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class InlineRecordVariant(BaseModel):
    """Tagged-union case whose payload is a record declared at the variant site."""

    variant: Literal["inline_record"] = "inline_record"
    id: Identifier
    fields: list[FieldDef] = Field(default_factory=list)
    comments: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


Variant = Annotated[
    Union[NoPayloadVariant, PayloadVariant, InlineRecordVariant],
    Field(discriminator="variant"),
]


class _EnumBase(BaseModel):
    id: Identifier
    generic_params: list[str] = Field(default_factory=list)
    comments: list[str] = Field(default_factory=list)
    is_redacted: bool = False
    decorators: Decorators = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("generic_params")
    @classmethod
    def validate_generic_params(cls, v: list[str]) -> list[str]:
        """Ensure generic parameter names are unique."""
        return _check_unique_generics(v)


class UnitEnum(_EnumBase):
    """
    Enum whose members carry no payload.

    Each member serializes as its renamed identifier.
    """

    shape: Literal["unit"] = "unit"
    variants: list[UnitVariant] = Field(default_factory=list)


class TaggedUnion(_EnumBase):
    """
    Closed set of named variants with optional payloads.

    Attributes:
        content_key: Field name holding the payload of payload-carrying variants
        variants: Variants in declaration order
    """

    shape: Literal["tagged"] = "tagged"
    content_key: str = "content"
    variants: list[Variant] = Field(default_factory=list)


EnumDef = Annotated[Union[UnitEnum, TaggedUnion], Field(discriminator="shape")]


class AliasDef(BaseModel):
    """
    A named alias for another type.

    Attributes:
        id: Alias identifier
        target: Aliased type
        generic_params: Ordered, unique generic parameter names
        comments: Doc comment lines
        is_redacted: Textual representation must be masked (inline wrappers only)
        decorators: Backend tag -> flags, e.g. {"kotlin": {"JvmInline"}}
    """

    id: Identifier
    target: ModelType
    generic_params: list[str] = Field(default_factory=list)
    comments: list[str] = Field(default_factory=list)
    is_redacted: bool = False
    decorators: Decorators = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("generic_params")
    @classmethod
    def validate_generic_params(cls, v: list[str]) -> list[str]:
        """Ensure generic parameter names are unique."""
        return _check_unique_generics(v)


class ConstDef(BaseModel):
    """A named constant with a literal value expression."""

    id: Identifier
    type: ModelType
    value: str
    comments: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
