"""Tests for inline-record hoisting."""

from shapeshare.core import ir
from shapeshare.core.hoisting import (
    hoist_enum,
    hoist_inline_records,
    inline_record_name,
    referenced_generics,
)


def _field(name, ty):
    return ir.FieldDef(id=ir.Identifier.of(name), type=ty)


def test_synthesized_struct_name_and_generics(message_union):
    (record,) = hoist_enum(message_union)

    assert record.id.original == "MessageEnvelopeInner"
    assert record.id.renamed == "MessageEnvelopeInner"
    assert record.generic_params == ["T"]
    assert [f.id.original for f in record.fields] == ["body"]


def test_synthesized_struct_comments(message_union):
    (record,) = hoist_enum(message_union)

    assert record.comments == [
        "Generated type representing the anonymous struct variant `Envelope` of the `Message` enum",
        "Wrapped payload",
    ]


def test_inline_record_without_generics():
    union = ir.TaggedUnion(
        id=ir.Identifier.of("Shape"),
        generic_params=["T"],
        variants=[
            ir.InlineRecordVariant(
                id=ir.Identifier.of("Circle"),
                fields=[_field("radius", ir.special(ir.SpecialTypeKind.F64))],
            )
        ],
    )

    (record,) = hoist_enum(union)

    assert record.id.original == "ShapeCircleInner"
    assert record.generic_params == []


def test_generics_follow_first_use():
    fields = [
        _field("right", ir.list_of(ir.simple("R"))),
        _field("left", ir.simple("L")),
        _field("again", ir.simple("R")),
    ]

    assert referenced_generics(fields, ["L", "M", "R"]) == ["R", "L"]


def test_redaction_and_decorators_carry_over():
    union = ir.TaggedUnion(
        id=ir.Identifier.of("Secret"),
        is_redacted=True,
        decorators={"kotlin": {"JvmInline"}},
        variants=[
            ir.InlineRecordVariant(
                id=ir.Identifier.of("Token"),
                fields=[_field("value", ir.special(ir.SpecialTypeKind.STRING))],
            )
        ],
    )

    (record,) = hoist_enum(union)

    assert record.is_redacted
    assert record.decorators == {"kotlin": {"JvmInline"}}


def test_unit_enums_yield_nothing():
    colour = ir.UnitEnum(
        id=ir.Identifier.of("Colour"),
        variants=[ir.UnitVariant(id=ir.Identifier.of("Red"))],
    )

    assert hoist_enum(colour) == []


def test_hoisting_is_pure_and_deterministic(message_union, status_union):
    model = ir.ParsedModel(crate_name="chat", enums=[status_union, message_union])
    before = model.model_dump()

    first = hoist_inline_records(model)
    second = hoist_inline_records(model)

    assert first == second
    assert model.model_dump() == before
    assert first.model is model
    assert first.records_for(status_union) == []
    assert [s.id.original for s in first.records_for(message_union)] == ["MessageEnvelopeInner"]
    assert [s.id.original for s in first.synthesized] == ["MessageEnvelopeInner"]


def test_inline_record_name_uses_original_names():
    union = ir.TaggedUnion(id=ir.Identifier.of("Event", "event"))
    variant = ir.InlineRecordVariant(id=ir.Identifier.of("Moved", "moved"))

    assert inline_record_name(union, variant) == "EventMovedInner"
