"""Tests for the Scala backend output."""

import io

import pytest

from shapeshare._version import get_version
from shapeshare.backends.scala import ScalaBackend
from shapeshare.core import ir
from shapeshare.core.config import BackendConfig
from shapeshare.core.errors import ConfigurationError, UnsupportedCapabilityError

K = ir.SpecialTypeKind

UNSIGNED_ALIASES = "type UByte = Byte\ntype UShort = Short\ntype UInt = Int\ntype ULong = Int\n\n"


def _field(name, ty, renamed=None, **kwargs):
    return ir.FieldDef(id=ir.Identifier.of(name, renamed), type=ty, **kwargs)


def test_namespace_is_required():
    with pytest.raises(ConfigurationError, match="requires a package namespace"):
        ScalaBackend()


def test_version_header_and_parent_package():
    backend = ScalaBackend(BackendConfig(namespace="com.example.types"))
    out = io.StringIO()

    backend.begin_file(out, ir.ParsedModel(crate_name="demo"))

    assert out.getvalue() == (
        "/**\n"
        f" * Generated by shapeshare {get_version()}\n"
        " */\n"
        "package com.example\n"
        "\n"
    )
    assert backend.package_parent == "com.example"
    assert backend.package_name == "types"


class TestStructs:
    def test_case_class(self, scala, render):
        struct = ir.StructDef(
            id=ir.Identifier.of("Person"),
            comments=["A person"],
            fields=[
                _field("name", ir.special(K.STRING), comments=["Full name"]),
                _field("age", ir.special(K.U8)),
                _field("email", ir.optional(ir.special(K.STRING))),
                _field("tags", ir.list_of(ir.special(K.STRING)), has_default=True),
            ],
        )

        assert render(scala.write_struct, struct) == (
            "// A person\n"
            "case class Person (\n"
            "\t// Full name\n"
            "\tname: String,\n"
            "\tage: UByte,\n"
            "\temail: Option[String] = None,\n"
            "\ttags: Vector[String] = _\n"
            ")\n"
            "\n"
        )

    def test_fieldless_struct(self, scala, render):
        empty = ir.StructDef(id=ir.Identifier.of("Empty"))

        assert render(scala.write_struct, empty) == "class Empty extends Serializable\n\n"

    def test_dashed_field_is_sanitized(self, scala, render):
        struct = ir.StructDef(
            id=ir.Identifier.of("Account"),
            fields=[_field("user_id", ir.special(K.STRING), "user-id")],
        )

        assert render(scala.write_struct, struct) == (
            "case class Account (\n\tuser_id: String\n)\n\n"
        )

    def test_redacted_struct(self, scala, render):
        struct = ir.StructDef(
            id=ir.Identifier.of("Password"),
            fields=[_field("value", ir.special(K.STRING))],
            is_redacted=True,
        )

        assert render(scala.write_struct, struct) == (
            "case class Password (\n"
            "\tvalue: String\n"
            ") {\n"
            '\toverride def toString: String = "Password"\n'
            "}\n"
            "\n"
        )

    def test_generic_struct(self, scala, render):
        struct = ir.StructDef(
            id=ir.Identifier.of("Page"),
            generic_params=["T"],
            fields=[_field("items", ir.list_of(ir.simple("T")))],
        )

        assert render(scala.write_struct, struct) == (
            "case class Page[T] (\n\titems: Vector[T]\n)\n\n"
        )


class TestEnums:
    def test_unit_enum(self, scala, render):
        colour = ir.UnitEnum(
            id=ir.Identifier.of("Colour"),
            variants=[
                ir.UnitVariant(id=ir.Identifier.of("Red", "red")),
                ir.UnitVariant(id=ir.Identifier.of("Green", "green")),
            ],
        )

        assert render(scala.write_enum, colour) == (
            "sealed trait Colour {\n"
            "\tdef serialName: String\n"
            "}\n"
            "object Colour {\n"
            "\tcase object Red extends Colour {\n"
            '\t\tval serialName: String = "red"\n'
            "\t}\n"
            "\tcase object Green extends Colour {\n"
            '\t\tval serialName: String = "green"\n'
            "\t}\n"
            "}\n"
            "\n"
        )

    def test_tagged_union(self, scala, render, status_union):
        assert render(scala.write_enum, status_union) == (
            "sealed trait Status {\n"
            "\tdef serialName: String\n"
            "}\n"
            "object Status {\n"
            "\tcase object Loading extends Status {\n"
            '\t\tval serialName: String = "Loading"\n'
            "\t}\n"
            "\tcase class Ready(content: UInt) extends Status {\n"
            '\t\tval serialName: String = "Ready"\n'
            "\t}\n"
            "}\n"
            "\n"
        )

    def test_generic_union_with_inline_record(self, scala, render, message_union):
        assert render(scala.write_enum, message_union) == (
            "sealed trait Message[T, U] {\n"
            "\tdef serialName: String\n"
            "}\n"
            "object Message {\n"
            "\tcase class Text[T, U](content: String) extends Message[T, U] {\n"
            '\t\tval serialName: String = "Text"\n'
            "\t}\n"
            "\t// Wrapped payload\n"
            "\tcase class Envelope[T, U](content: MessageEnvelopeInner[T]) extends Message[T, U] {\n"
            '\t\tval serialName: String = "Envelope"\n'
            "\t}\n"
            "\tcase object Ping extends Message[T, U] {\n"
            '\t\tval serialName: String = "Ping"\n'
            "\t}\n"
            "}\n"
            "\n"
        )

    def test_leading_digit_variant_is_escaped(self, scala, render):
        union = ir.TaggedUnion(
            id=ir.Identifier.of("Factor"),
            variants=[ir.NoPayloadVariant(id=ir.Identifier.of("2fa"))],
        )

        assert "\tcase object _2fa extends Factor {\n" in render(scala.write_enum, union)


def test_type_alias(scala, render):
    alias = ir.AliasDef(
        id=ir.Identifier.of("Pairs"),
        generic_params=["T"],
        target=ir.list_of(ir.simple("T")),
    )

    assert render(scala.write_type_alias, alias) == "type Pairs[T] = Vector[T]\n\n"


def test_prefix_applies_to_declarations_and_references(render):
    backend = ScalaBackend(
        BackendConfig(namespace="com.example.types", prefix="Op", no_version_header=True)
    )
    alias = ir.AliasDef(id=ir.Identifier.of("UserId"), target=ir.special(K.STRING))
    struct = ir.StructDef(
        id=ir.Identifier.of("User"),
        fields=[_field("id", ir.simple("UserId"))],
    )
    union = ir.TaggedUnion(
        id=ir.Identifier.of("Lookup"),
        variants=[
            ir.PayloadVariant(id=ir.Identifier.of("Found"), type=ir.simple("User")),
            ir.NoPayloadVariant(id=ir.Identifier.of("Missing")),
        ],
    )

    assert render(backend.write_type_alias, alias) == "type OpUserId = String\n\n"
    assert render(backend.write_struct, struct) == (
        "case class OpUser (\n\tid: OpUserId\n)\n\n"
    )
    assert render(backend.write_enum, union) == (
        "sealed trait OpLookup {\n"
        "\tdef serialName: String\n"
        "}\n"
        "object OpLookup {\n"
        "\tcase class Found(content: OpUser) extends OpLookup {\n"
        '\t\tval serialName: String = "Found"\n'
        "\t}\n"
        "\tcase object Missing extends OpLookup {\n"
        '\t\tval serialName: String = "Missing"\n'
        "\t}\n"
        "}\n"
        "\n"
    )


def test_imports_are_unsupported(scala, render):
    with pytest.raises(UnsupportedCapabilityError, match="does not support imports"):
        render(scala.write_imports, {"customers": ["Customer"]})


class TestFileLayout:
    def test_package_object_and_package(self, scala):
        model = ir.ParsedModel(
            crate_name="demo",
            aliases=[ir.AliasDef(id=ir.Identifier.of("UserId"), target=ir.special(K.STRING))],
            structs=[
                ir.StructDef(
                    id=ir.Identifier.of("Person"),
                    fields=[_field("id", ir.simple("UserId")), _field("age", ir.special(K.U8))],
                )
            ],
        )
        out = io.StringIO()

        result = scala.generate_types(out, model)

        assert out.getvalue() == (
            "package com.agilebits\n"
            "\n"
            "package object onepassword {\n"
            "\n"
            + UNSIGNED_ALIASES
            + "type UserId = String\n"
            "\n"
            "}\n"
            "package onepassword {\n"
            "\n"
            "case class Person (\n"
            "\tid: UserId,\n"
            "\tage: UByte\n"
            ")\n"
            "\n"
            "}\n"
        )
        assert result.emitted == ["alias UserId", "struct Person"]

    def test_no_package_object_without_aliases_or_unsigned(self, scala, status_union):
        status = status_union.model_copy(
            update={"variants": [status_union.variants[0]]}
        )
        model = ir.ParsedModel(crate_name="demo", enums=[status])
        out = io.StringIO()

        scala.generate_types(out, model)

        assert "package object" not in out.getvalue()
        assert out.getvalue().startswith("package com.agilebits\n\npackage onepassword {\n\n")
        assert out.getvalue().endswith("}\n\n}\n")

    def test_unsigned_in_nested_position_is_detected(self, scala):
        model = ir.ParsedModel(
            crate_name="demo",
            enums=[
                ir.TaggedUnion(
                    id=ir.Identifier.of("Counts"),
                    variants=[
                        ir.PayloadVariant(
                            id=ir.Identifier.of("Many"),
                            type=ir.map_of(ir.special(K.STRING), ir.list_of(ir.special(K.U64))),
                        )
                    ],
                )
            ],
        )

        assert scala.unsigned_integer_used(model)

    def test_single_segment_namespace(self, render):
        backend = ScalaBackend(BackendConfig(namespace="types", no_version_header=True))
        model = ir.ParsedModel(
            crate_name="demo",
            structs=[ir.StructDef(id=ir.Identifier.of("Empty"))],
        )
        out = io.StringIO()

        backend.generate_types(out, model)

        assert backend.package_parent is None
        assert out.getvalue() == (
            "package types {\n\nclass Empty extends Serializable\n\n}\n"
        )

    def test_hoisted_record_inside_package(self, scala, message_union):
        model = ir.ParsedModel(crate_name="chat", enums=[message_union])
        out = io.StringIO()

        scala.generate_types(out, model)

        output = out.getvalue()
        assert "case class MessageEnvelopeInner[T] (\n\tbody: T\n)\n\n" in output
        assert output.index("MessageEnvelopeInner[T] (") < output.index("sealed trait Message")
