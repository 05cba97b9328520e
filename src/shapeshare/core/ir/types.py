"""
Type expressions for the shapeshare model.

A field, alias target or variant payload is described by a ModelType tree:
named user types, user types applied to arguments, and the closed set of
special (built-in) kinds that every backend maps through its type table.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SpecialTypeKind(str, Enum):
    """Closed set of built-in type kinds understood by every backend."""

    UNIT = "unit"
    BOOL = "bool"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I54 = "i54"
    I64 = "i64"
    ISIZE = "isize"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U53 = "u53"
    U64 = "u64"
    USIZE = "usize"
    F32 = "f32"
    F64 = "f64"
    STRING = "string"
    CHAR = "char"
    LIST = "list"
    SLICE = "slice"
    FIXED_ARRAY = "fixed_array"
    MAP = "map"
    OPTIONAL = "optional"
    DATE_TIME = "date_time"


UNSIGNED_KINDS = frozenset(
    {
        SpecialTypeKind.U8,
        SpecialTypeKind.U16,
        SpecialTypeKind.U32,
        SpecialTypeKind.U53,
        SpecialTypeKind.U64,
        SpecialTypeKind.USIZE,
    }
)

# Number of type arguments each composite kind carries; everything else has none.
_ARITY = {
    SpecialTypeKind.LIST: 1,
    SpecialTypeKind.SLICE: 1,
    SpecialTypeKind.FIXED_ARRAY: 1,
    SpecialTypeKind.OPTIONAL: 1,
    SpecialTypeKind.MAP: 2,
}


class SimpleType(BaseModel):
    """
    A named user type, or a reference to an in-scope generic parameter.

    Examples:
        - ``UserId``: SimpleType(name="UserId")
        - ``T`` inside ``Page<T>``: SimpleType(name="T")
    """

    node: Literal["simple"] = "simple"
    name: str

    model_config = ConfigDict(frozen=True)

    def contains_type(self, name: str) -> bool:
        return self.name == name

    def walk(self) -> Iterator[ModelType]:
        yield self


class GenericType(BaseModel):
    """
    A user type applied to type arguments, e.g. ``Page<User>``.

    Attributes:
        name: Name of the generic user type
        parameters: Type arguments in declaration order
    """

    node: Literal["generic"] = "generic"
    name: str
    parameters: list[ModelType] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def contains_type(self, name: str) -> bool:
        return self.name == name or any(p.contains_type(name) for p in self.parameters)

    def walk(self) -> Iterator[ModelType]:
        yield self
        for parameter in self.parameters:
            yield from parameter.walk()


class SpecialType(BaseModel):
    """
    A built-in type kind with its type arguments.

    Examples:
        - ``u32``: SpecialType(kind=U32)
        - ``Vec<String>``: SpecialType(kind=LIST, args=[SpecialType(kind=STRING)])
        - ``[u8; 4]``: SpecialType(kind=FIXED_ARRAY, args=[...], length=4)
        - ``HashMap<K, V>``: SpecialType(kind=MAP, args=[K, V])
    """

    node: Literal["special"] = "special"
    kind: SpecialTypeKind
    args: list[ModelType] = Field(default_factory=list)
    length: int | None = None  # for fixed_array

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_arity(self) -> SpecialType:
        """Composite kinds need exactly their argument count, scalars none."""
        expected = _ARITY.get(self.kind, 0)
        if len(self.args) != expected:
            raise ValueError(
                f"{self.kind.value} takes {expected} type argument(s), got {len(self.args)}"
            )
        if self.kind == SpecialTypeKind.FIXED_ARRAY and self.length is None:
            raise ValueError("fixed_array requires a length")
        return self

    def contains_type(self, name: str) -> bool:
        return any(arg.contains_type(name) for arg in self.args)

    def walk(self) -> Iterator[ModelType]:
        yield self
        for arg in self.args:
            yield from arg.walk()


ModelType = Annotated[
    Union[SimpleType, GenericType, SpecialType],
    Field(discriminator="node"),
]

GenericType.model_rebuild()
SpecialType.model_rebuild()


def is_optional(ty: ModelType) -> bool:
    """Check if a type is the optional special kind at its top level."""
    return isinstance(ty, SpecialType) and ty.kind == SpecialTypeKind.OPTIONAL


def referenced_names(ty: ModelType) -> list[str]:
    """
    Collect user type names referenced anywhere in a type tree.

    Names are returned in first-occurrence order without duplicates. Generic
    parameter references are included; callers filter them against scope.
    """
    names: list[str] = []
    for node in ty.walk():
        if isinstance(node, (SimpleType, GenericType)) and node.name not in names:
            names.append(node.name)
    return names


def uses_unsigned(ty: ModelType) -> bool:
    """Check if any node of a type tree is an unsigned integer kind."""
    return any(
        isinstance(node, SpecialType) and node.kind in UNSIGNED_KINDS for node in ty.walk()
    )


# Convenience constructors, used heavily by tests and by hand-built models.


def simple(name: str) -> SimpleType:
    return SimpleType(name=name)


def special(kind: SpecialTypeKind, *args: ModelType, length: int | None = None) -> SpecialType:
    return SpecialType(kind=kind, args=list(args), length=length)


def generic(name: str, *parameters: ModelType) -> GenericType:
    return GenericType(name=name, parameters=list(parameters))


def list_of(elem: ModelType) -> SpecialType:
    return special(SpecialTypeKind.LIST, elem)


def optional(elem: ModelType) -> SpecialType:
    return special(SpecialTypeKind.OPTIONAL, elem)


def map_of(key: ModelType, value: ModelType) -> SpecialType:
    return special(SpecialTypeKind.MAP, key, value)
