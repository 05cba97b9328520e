"""
Scala backend for shapeshare.

Generates case classes and sealed traits from the model.

Scala has no unsigned integer types. Unsigned kinds project to the names
UByte/UShort/UInt/ULong, which are declared as aliases of signed types in the
package object whenever the model uses them. The aliasing is lossy, and
ULong in particular is narrowed to a 32-bit Int:

    type UByte = Byte
    type UShort = Short
    type UInt = Int
    type ULong = Int
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from .._version import get_version
from ..core import ir
from ..core.config import BackendConfig
from ..core.errors import ConfigurationError
from ..core.hoisting import hoist_inline_records, inline_record_name, referenced_generics
from ..core.imports import CrateTypes
from ..core.naming import escape_leading_digit, remove_dash_from_identifier
from ..core.ordering import definition_types
from ..core.type_table import UNSUPPORTED, TypeTable
from . import Backend, BackendCapabilities
from .base.emitter import default_suffix, field_type, quoted, write_comments
from .base.generator import DefinitionWriter, GenerationResult, UnsupportedPolicy, ordered_items

K = ir.SpecialTypeKind

# Lossy mapping of unsigned alias names to signed Scala types
SCALA_UNSIGNED_ALIASES = {
    "UByte": "Byte",
    "UShort": "Short",
    "UInt": "Int",
    "ULong": "Int",
}

SCALA_TYPES = TypeTable(
    {
        K.LIST: "Vector[{0}]",
        K.SLICE: "Vector[{0}]",
        K.FIXED_ARRAY: "Vector[{0}]",
        K.OPTIONAL: "Option[{0}]",
        K.MAP: "Map[{0}, {1}]",
        K.UNIT: "Unit",
        # Char in Scala is 16 bits long, so we need to use String
        # https://docs.scala-lang.org/scala3/book/first-look-at-types.html#scalas-value-types
        K.STRING: "String",
        K.CHAR: "String",
        K.I8: "Byte",
        K.I16: "Short",
        K.I32: "Int",
        K.ISIZE: "Int",
        K.I54: "Long",
        K.I64: "Long",
        # see SCALA_UNSIGNED_ALIASES
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


class ScalaBackend(Backend):
    """
    Generate Scala type definitions.

    Maps model concepts to Scala:
    - Aliases → type members of a package object (Scala 2 needs an enclosing object)
    - Structs → case classes (plain Serializable classes when fieldless)
    - Unit enums and tagged unions → sealed traits with a companion object
      holding one case object/case class per variant
    """

    name = "scala"
    type_table = SCALA_TYPES

    def validate_config(self, config: BackendConfig) -> None:
        if not config.namespace:
            raise ConfigurationError("The scala backend requires a package namespace")

    @property
    def package_parent(self) -> str | None:
        parent, _, _last = self.config.namespace.rpartition(".")
        return parent or None

    @property
    def package_name(self) -> str:
        return self.config.namespace.rpartition(".")[2]

    def format_generic_parameters(self, parameters: Sequence[str]) -> str:
        return f"[{', '.join(parameters)}]"

    def generate_types(
        self,
        w: TextIO,
        model: ir.ParsedModel,
        all_types: CrateTypes | None = None,
        policy: UnsupportedPolicy = UnsupportedPolicy.FAIL,
    ) -> GenerationResult:
        """
        Generate Scala output.

        Layout: aliases (and the unsigned aliases) go into a package object,
        structs and enums into a package block of the same name.
        """
        # Phase 1: hoisting
        hoisted = hoist_inline_records(model)

        # Phase 2: emission
        writer = DefinitionWriter(self, w, hoisted, policy)
        self.begin_file(w, model)
        writer.emit_imports(model, all_types)

        items = ordered_items(model)
        aliases = [i for i in items if i.kind == "alias"]
        types = [i for i in items if i.kind in ("struct", "enum")]
        consts = [i for i in items if i.kind == "const"]

        unsigned_used = self.unsigned_integer_used(model)
        if unsigned_used or aliases:
            self.begin_package_object(w)
            if unsigned_used:
                self.write_unsigned_aliases(w)
            for item in aliases + consts:
                writer.emit_item(item)
            self.end_package_object(w)
        else:
            for item in consts:
                writer.emit_item(item)

        if types:
            self.begin_package(w)
            for item in types:
                writer.emit_item(item)
            self.end_package(w)

        self.end_file(w)
        return writer.result

    def begin_file(self, w: TextIO, model: ir.ParsedModel) -> None:
        if not self.config.no_version_header:
            w.write("/**\n")
            w.write(f" * Generated by shapeshare {get_version()}\n")
            w.write(" */\n")
        if self.package_parent:
            w.write(f"package {self.package_parent}\n")
            w.write("\n")

    def write_type_alias(self, w: TextIO, alias: ir.AliasDef) -> None:
        self._write_comments(w, 0, alias.comments)
        generics = self.generic_params_clause(alias.generic_params)
        target = self.format_type(alias.target, alias.generic_params)
        w.write(f"type {self.prefix}{alias.id.original}{generics} = {target}\n\n")

    def write_struct(self, w: TextIO, struct: ir.StructDef) -> None:
        self._write_comments(w, 0, struct.comments)

        if not struct.fields:
            w.write(f"class {self.prefix}{struct.id.renamed} extends Serializable\n\n")
            return

        generics = self.generic_params_clause(struct.generic_params)
        w.write(f"case class {self.prefix}{struct.id.renamed}{generics} (\n")
        for index, field in enumerate(struct.fields):
            if index:
                w.write(",\n")
            self.write_element(w, field, struct.generic_params)
        w.write("\n")

        if struct.is_redacted:
            w.write(") {\n")
            w.write(f"\toverride def toString: String = {quoted(struct.id.renamed)}\n")
            w.write("}\n\n")
        else:
            w.write(")\n\n")

    def write_enum(self, w: TextIO, enum: ir.EnumDef) -> None:
        self._write_comments(w, 0, enum.comments)

        generics = self.generic_params_clause(enum.generic_params)
        w.write(f"sealed trait {self.prefix}{enum.id.renamed}{generics} {{\n")
        w.write("\tdef serialName: String\n")
        w.write("}\n")

        w.write(f"object {self.prefix}{enum.id.renamed} {{\n")
        if isinstance(enum, ir.UnitEnum):
            self._write_unit_variants(w, enum)
        else:
            self._write_tagged_variants(w, enum)
        w.write("}\n\n")

    def get_capabilities(self) -> BackendCapabilities:
        return BackendCapabilities(
            name=self.name,
            description="Generate Scala case classes and sealed traits",
            file_extension="scala",
            supports_constants=False,
            supports_imports=False,
            requires_namespace=True,
        )

    # ------------------------------------------------------------------
    # Variants and fields
    # ------------------------------------------------------------------

    def _write_unit_variants(self, w: TextIO, enum: ir.UnitEnum) -> None:
        for v in enum.variants:
            self._write_comments(w, 1, v.comments)
            w.write(f"\tcase object {v.id.original} extends {self.prefix}{enum.id.renamed} {{\n")
            w.write(f"\t\tval serialName: String = {quoted(v.id.renamed)}\n")
            w.write("\t}\n")

    def _write_tagged_variants(self, w: TextIO, enum: ir.TaggedUnion) -> None:
        generics = self.generic_params_clause(enum.generic_params)

        for v in enum.variants:
            self._write_comments(w, 1, v.comments)
            variant_name = escape_leading_digit(v.id.original)

            if isinstance(v, ir.NoPayloadVariant):
                w.write(f"\tcase object {variant_name}")
            elif isinstance(v, ir.PayloadVariant):
                payload = self.format_type(v.type, enum.generic_params)
                w.write(f"\tcase class {variant_name}{generics}({enum.content_key}: {payload})")
            else:
                used = self.generic_params_clause(
                    referenced_generics(v.fields, enum.generic_params)
                )
                inner = f"{self.prefix}{inline_record_name(enum, v)}{used}"
                w.write(f"\tcase class {variant_name}{generics}({enum.content_key}: {inner})")

            w.write(f" extends {self.prefix}{enum.id.original}{generics} {{\n")
            w.write(f"\t\tval serialName: String = {quoted(v.id.renamed)}\n")
            w.write("\t}\n")

    def write_element(self, w: TextIO, field: ir.FieldDef, generic_scope: Sequence[str]) -> None:
        """Write one case class parameter, without a trailing separator."""
        self._write_comments(w, 1, field.comments)
        ty = field_type(self, field, generic_scope)
        default = default_suffix(field, when_optional=" = None", when_defaulted=" = _")
        w.write(f"\t{remove_dash_from_identifier(field.id.renamed)}: {ty}{default}")

    # ------------------------------------------------------------------
    # Package layout
    # ------------------------------------------------------------------

    def begin_package_object(self, w: TextIO) -> None:
        w.write(f"package object {self.package_name} {{\n")
        w.write("\n")

    def end_package_object(self, w: TextIO) -> None:
        w.write("}\n")

    def begin_package(self, w: TextIO) -> None:
        w.write(f"package {self.package_name} {{\n")
        w.write("\n")

    def end_package(self, w: TextIO) -> None:
        w.write("}\n")

    def write_unsigned_aliases(self, w: TextIO) -> None:
        for alias, target in SCALA_UNSIGNED_ALIASES.items():
            w.write(f"type {alias} = {target}\n")
        w.write("\n")

    def unsigned_integer_used(self, model: ir.ParsedModel) -> bool:
        """Check if any type anywhere in the model is an unsigned integer kind."""
        definitions = [*model.aliases, *model.structs, *model.enums]
        return any(
            ir.uses_unsigned(ty) for d in definitions for ty in definition_types(d)
        )

    def _write_comments(self, w: TextIO, indent: int, comments: list[str]) -> None:
        write_comments(w, indent, comments, "//")
