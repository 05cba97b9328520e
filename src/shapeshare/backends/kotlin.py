"""
Kotlin backend for shapeshare.

Generates kotlinx.serialization-annotated Kotlin from the model.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from .._version import get_version
from ..core import ir
from ..core.hoisting import inline_record_name, referenced_generics
from ..core.imports import ScopedCrateTypes
from ..core.naming import escape_leading_digit, remove_dash_from_identifier, to_pascal_case
from ..core.type_table import UNSUPPORTED, TypeTable
from . import Backend, BackendCapabilities
from .base.emitter import (
    Visibility,
    default_suffix,
    field_type,
    has_decorator,
    quoted,
    requires_serial_name,
    write_comments,
)

K = ir.SpecialTypeKind

INLINE = "JvmInline"

KOTLIN_TYPES = TypeTable(
    {
        K.LIST: "List<{0}>",
        K.SLICE: "List<{0}>",
        K.FIXED_ARRAY: "List<{0}>",
        K.OPTIONAL: "{0}?",
        K.MAP: "HashMap<{0}, {1}>",
        K.UNIT: "Unit",
        # Char in Kotlin is 16 bits long, so we need to use String
        K.STRING: "String",
        K.CHAR: "String",
        # https://kotlinlang.org/docs/basic-types.html#integer-types
        K.I8: "Byte",
        K.I16: "Short",
        K.I32: "Int",
        K.ISIZE: "Int",
        K.I54: "Long",
        K.I64: "Long",
        # https://kotlinlang.org/docs/basic-types.html#unsigned-integers
        K.U8: "UByte",
        K.U16: "UShort",
        K.U32: "UInt",
        K.USIZE: "UInt",
        K.U53: "ULong",
        K.U64: "ULong",
        K.BOOL: "Boolean",
        K.F32: "Float",
        K.F64: "Double",
        K.DATE_TIME: UNSUPPORTED,
    }
)


class KotlinBackend(Backend):
    """
    Generate Kotlin type definitions.

    Maps model concepts to Kotlin:
    - Structs → @Serializable data classes (objects when fieldless)
    - Unit enums → enum classes carrying their serial name
    - Tagged unions → sealed classes with one subclass per variant
    - Aliases → typealiases, or @JvmInline value classes when decorated
    """

    name = "kotlin"
    type_table = KOTLIN_TYPES

    def begin_file(self, w: TextIO, model: ir.ParsedModel) -> None:
        # Without a package there is no preamble at all
        if not self.config.namespace:
            return

        if not self.config.no_version_header:
            w.write("/**\n")
            w.write(f" * Generated by shapeshare {get_version()}\n")
            w.write(" */\n")
            w.write("\n")

        if model.multi_file:
            w.write(f"package {self.config.namespace}.{model.crate_name}\n")
        else:
            w.write(f"package {self.config.namespace}\n")
        w.write("\n")
        w.write("import kotlinx.serialization.Serializable\n")
        w.write("import kotlinx.serialization.SerialName\n")
        w.write("\n")

    def write_type_alias(self, w: TextIO, alias: ir.AliasDef) -> None:
        self._write_comments(w, 0, alias.comments)
        generics = self.generic_params_clause(alias.generic_params)

        if not self.is_inline(alias.decorators):
            target = self.format_type(alias.target, alias.generic_params)
            w.write(f"typealias {self.prefix}{alias.id.original}{generics} = {target}\n\n")
            return

        w.write("@Serializable\n")
        w.write(f"@{INLINE}\n")
        w.write(f"value class {self.prefix}{alias.id.renamed}{generics}(\n")
        value = ir.FieldDef(id=ir.Identifier.of("value"), type=alias.target)
        self.write_element(
            w,
            value,
            alias.generic_params,
            requires_serial_name=False,
            visibility=Visibility.PRIVATE if alias.is_redacted else Visibility.PUBLIC,
        )
        w.write("\n")

        if alias.is_redacted:
            w.write(") {\n")
            w.write("\tfun unwrap() = value\n")
            w.write("\n")
            w.write('\toverride fun toString(): String = "***"\n')
            w.write("}\n")
        else:
            w.write(")\n")
        w.write("\n")

    def write_struct(self, w: TextIO, struct: ir.StructDef) -> None:
        self._write_comments(w, 0, struct.comments)
        w.write("@Serializable\n")

        if not struct.fields:
            # If the struct has no fields, we can define it as a static object
            w.write(f"object {self.prefix}{struct.id.renamed}\n\n")
            return

        generics = self.generic_params_clause(struct.generic_params)
        w.write(f"data class {self.prefix}{struct.id.renamed}{generics} (\n")

        serial_names = requires_serial_name(struct.fields)
        for index, field in enumerate(struct.fields):
            if index:
                w.write(",\n")
            self.write_element(w, field, struct.generic_params, serial_names, Visibility.PUBLIC)
        w.write("\n")

        if struct.is_redacted:
            w.write(") {\n")
            w.write(f"\toverride fun toString(): String = {quoted(struct.id.renamed)}\n")
            w.write("}\n")
        else:
            w.write(")\n")
        w.write("\n")

    def write_enum(self, w: TextIO, enum: ir.EnumDef) -> None:
        self._write_comments(w, 0, enum.comments)
        w.write("@Serializable\n")

        generics = self.generic_params_clause(enum.generic_params)
        if isinstance(enum, ir.UnitEnum):
            w.write(f"enum class {self.prefix}{enum.id.renamed}{generics}(val string: String) ")
        else:
            w.write(f"sealed class {self.prefix}{enum.id.renamed}{generics} ")
        w.write("{\n")

        if isinstance(enum, ir.UnitEnum):
            self._write_unit_variants(w, enum)
        else:
            self._write_tagged_variants(w, enum)

        w.write("}\n\n")

    def write_imports(self, w: TextIO, imports: ScopedCrateTypes) -> None:
        for path, types in imports.items():
            for ty in types:
                w.write(f"import {self.config.namespace}.{path}.{ty}\n")
        w.write("\n")

    def get_capabilities(self) -> BackendCapabilities:
        return BackendCapabilities(
            name=self.name,
            description="Generate kotlinx.serialization Kotlin types",
            file_extension="kt",
            supports_constants=False,
            supports_imports=True,
        )

    # ------------------------------------------------------------------
    # Variants and fields
    # ------------------------------------------------------------------

    def _write_unit_variants(self, w: TextIO, enum: ir.UnitEnum) -> None:
        for v in enum.variants:
            self._write_comments(w, 1, v.comments)
            w.write(f"\t@SerialName({quoted(v.id.renamed)})\n")
            w.write(f"\t{v.id.original}({quoted(v.id.renamed)}),\n")

    def _write_tagged_variants(self, w: TextIO, enum: ir.TaggedUnion) -> None:
        generics = self.generic_params_clause(enum.generic_params)

        for v in enum.variants:
            self._write_comments(w, 1, v.comments)
            w.write("\t@Serializable\n")
            w.write(f"\t@SerialName({quoted(v.id.renamed)})\n")

            variant_name = escape_leading_digit(to_pascal_case(v.id.original))

            if isinstance(v, ir.NoPayloadVariant):
                w.write(f"\tobject {variant_name}")
            elif isinstance(v, ir.PayloadVariant):
                payload = self.format_type(v.type, enum.generic_params)
                w.write(f"\tdata class {variant_name}{generics}(")
                w.write(f"val {enum.content_key}: {payload}")
                w.write(")")
            else:
                used = self.generic_params_clause(
                    referenced_generics(v.fields, enum.generic_params)
                )
                w.write(f"\tdata class {variant_name}{generics}(")
                w.write(f"val {enum.content_key}: {self.prefix}{inline_record_name(enum, v)}{used}")
                w.write(")")

            w.write(f": {self.prefix}{enum.id.original}{generics}()\n")

    def write_element(
        self,
        w: TextIO,
        field: ir.FieldDef,
        generic_scope: Sequence[str],
        requires_serial_name: bool,
        visibility: Visibility,
    ) -> None:
        """Write one constructor property, without a trailing separator."""
        self._write_comments(w, 1, field.comments)
        if requires_serial_name:
            w.write(f"\t@SerialName({quoted(field.id.renamed)})\n")

        ty = field_type(self, field, generic_scope)
        default = default_suffix(field, when_optional=" = null", when_defaulted="? = null")
        modifier = "private val" if visibility == Visibility.PRIVATE else "val"
        w.write(f"\t{modifier} {remove_dash_from_identifier(field.id.renamed)}: {ty}{default}")

    def is_inline(self, decorators: ir.Decorators) -> bool:
        return has_decorator(decorators, self.name, INLINE)

    def _write_comments(self, w: TextIO, indent: int, comments: list[str]) -> None:
        write_comments(w, indent, comments, "///")
