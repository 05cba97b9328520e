"""
Top-level model handed to a backend.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .definitions import AliasDef, ConstDef, EnumDef, StructDef


class ParsedModel(BaseModel):
    """
    All definitions of one crate/module, as produced by the parsing collaborator.

    Attributes:
        crate_name: Name of the origin crate or module
        structs: Struct definitions in declaration order
        enums: Unit enums and tagged unions in declaration order
        aliases: Type aliases in declaration order
        consts: Constants in declaration order
        multi_file: Output is split into one file per crate
    """

    crate_name: str = ""
    structs: list[StructDef] = Field(default_factory=list)
    enums: list[EnumDef] = Field(default_factory=list)
    aliases: list[AliasDef] = Field(default_factory=list)
    consts: list[ConstDef] = Field(default_factory=list)
    multi_file: bool = False

    model_config = ConfigDict(frozen=True)

    def type_names(self) -> set[str]:
        """Get the original names of every type defined in this model."""
        names = {s.id.original for s in self.structs}
        names.update(e.id.original for e in self.enums)
        names.update(a.id.original for a in self.aliases)
        return names
