"""
Anonymous-record hoisting.

Backends without inline record types need a named type for every inline
record payload of a tagged union. This pre-pass synthesizes those structs
ahead of emission:

- Name: <EnumOriginalName><VariantOriginalName>Inner
- Fields and comments: taken from the variant
- Generics: only the enclosing union's generics the fields actually use

Hoisting is pure: the input model is never mutated, and running it twice on
the same model yields equal results.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from .ir import (
    EnumDef,
    FieldDef,
    Identifier,
    InlineRecordVariant,
    ParsedModel,
    StructDef,
    TaggedUnion,
)

logger = logging.getLogger(__name__)


def inline_record_name(enum: EnumDef, variant: InlineRecordVariant) -> str:
    """Name of the struct synthesized for an inline record variant."""
    return f"{enum.id.original}{variant.id.original}Inner"


def referenced_generics(fields: Iterable[FieldDef], generic_params: list[str]) -> list[str]:
    """
    Subset of generic parameters referenced by a list of fields.

    Fields are scanned in order; each parameter appears once, at its first
    occurrence.
    """
    used: list[str] = []
    for field in fields:
        for param in generic_params:
            if param not in used and field.type.contains_type(param):
                used.append(param)
    return used


def inline_record_struct(enum: TaggedUnion, variant: InlineRecordVariant) -> StructDef:
    """Synthesize the named struct standing in for one inline record variant."""
    name = inline_record_name(enum, variant)
    comments = [
        f"Generated type representing the anonymous struct variant `{variant.id.original}` "
        f"of the `{enum.id.original}` enum"
    ]
    comments.extend(variant.comments)
    return StructDef(
        id=Identifier(original=name, renamed=name),
        fields=list(variant.fields),
        generic_params=referenced_generics(variant.fields, enum.generic_params),
        comments=comments,
        is_redacted=enum.is_redacted,
        decorators=enum.decorators,
    )


def hoist_enum(enum: EnumDef) -> list[StructDef]:
    """Synthesized structs for one enum, in variant order. Unit enums yield none."""
    if not isinstance(enum, TaggedUnion):
        return []
    return [
        inline_record_struct(enum, variant)
        for variant in enum.variants
        if isinstance(variant, InlineRecordVariant)
    ]


class HoistedModel(BaseModel):
    """
    A model enlarged with the structs synthesized for inline records.

    Attributes:
        model: The original, untouched model
        records: Union original name -> synthesized structs, in variant order
    """

    model: ParsedModel
    records: dict[str, list[StructDef]] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def records_for(self, enum: EnumDef) -> list[StructDef]:
        """Synthesized structs to emit immediately before an enum."""
        return self.records.get(enum.id.original, [])

    @property
    def synthesized(self) -> list[StructDef]:
        """Every synthesized struct, in enum then variant order."""
        return [s for e in self.model.enums for s in self.records_for(e)]


def hoist_inline_records(model: ParsedModel) -> HoistedModel:
    """
    Run the hoisting pass over every tagged union of a model.

    Args:
        model: Model to hoist

    Returns:
        HoistedModel holding the original model and the synthesized structs
    """
    records: dict[str, list[StructDef]] = {}
    for enum in model.enums:
        structs = hoist_enum(enum)
        if structs:
            records[enum.id.original] = structs
            logger.debug(
                "Hoisted %d inline record(s) from %s: %s",
                len(structs),
                enum.id.original,
                ", ".join(s.id.original for s in structs),
            )
    return HoistedModel(model=model, records=records)
