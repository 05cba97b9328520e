"""
shapeshare model (IR) types.

The language-neutral description of data-type definitions consumed by every
backend. All types are re-exported from this package.
"""

# Definitions
from .definitions import (
    AliasDef,
    ConstDef,
    Decorators,
    EnumDef,
    FieldDef,
    Identifier,
    InlineRecordVariant,
    NoPayloadVariant,
    PayloadVariant,
    StructDef,
    TaggedUnion,
    UnitEnum,
    UnitVariant,
    Variant,
)

# Model
from .model import ParsedModel

# Type expressions
from .types import (
    UNSIGNED_KINDS,
    GenericType,
    ModelType,
    SimpleType,
    SpecialType,
    SpecialTypeKind,
    generic,
    is_optional,
    list_of,
    map_of,
    optional,
    referenced_names,
    simple,
    special,
    uses_unsigned,
)

__all__ = [
    # Type expressions
    "UNSIGNED_KINDS",
    "GenericType",
    "ModelType",
    "SimpleType",
    "SpecialType",
    "SpecialTypeKind",
    "generic",
    "is_optional",
    "list_of",
    "map_of",
    "optional",
    "referenced_names",
    "simple",
    "special",
    "uses_unsigned",
    # Definitions
    "AliasDef",
    "ConstDef",
    "Decorators",
    "EnumDef",
    "FieldDef",
    "Identifier",
    "InlineRecordVariant",
    "NoPayloadVariant",
    "PayloadVariant",
    "StructDef",
    "TaggedUnion",
    "UnitEnum",
    "UnitVariant",
    "Variant",
    # Model
    "ParsedModel",
]
