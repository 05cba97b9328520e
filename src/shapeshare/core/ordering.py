"""
Dependency ordering of model definitions.

Definitions are emitted so that a referenced type precedes the definitions
using it, as far as cycles allow. The order is stable: among independent
definitions, aliases come first, then structs, enums and constants, each in
declaration order.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from .ir import (
    AliasDef,
    ConstDef,
    EnumDef,
    InlineRecordVariant,
    ModelType,
    ParsedModel,
    PayloadVariant,
    StructDef,
    TaggedUnion,
    referenced_names,
)

Definition = Union[AliasDef, StructDef, EnumDef, ConstDef]


@dataclass(frozen=True)
class Item:
    """A definition together with its kind label."""

    kind: str  # "alias", "struct", "enum", "const"
    definition: Definition

    @property
    def name(self) -> str:
        return self.definition.id.original


def definition_types(definition: Definition) -> Iterator[ModelType]:
    """Every type expression appearing directly in a definition."""
    if isinstance(definition, AliasDef):
        yield definition.target
    elif isinstance(definition, StructDef):
        for field in definition.fields:
            yield field.type
    elif isinstance(definition, ConstDef):
        yield definition.type
    elif isinstance(definition, TaggedUnion):
        for variant in definition.variants:
            if isinstance(variant, PayloadVariant):
                yield variant.type
            elif isinstance(variant, InlineRecordVariant):
                for field in variant.fields:
                    yield field.type


def dependencies(definition: Definition) -> list[str]:
    """User type names a definition refers to, excluding its own generics."""
    generics = set(getattr(definition, "generic_params", []))
    names: list[str] = []
    for ty in definition_types(definition):
        for name in referenced_names(ty):
            if name not in generics and name not in names:
                names.append(name)
    return names


def model_items(model: ParsedModel) -> list[Item]:
    """All definitions of a model in declaration order, grouped by kind."""
    items = [Item("alias", a) for a in model.aliases]
    items.extend(Item("struct", s) for s in model.structs)
    items.extend(Item("enum", e) for e in model.enums)
    items.extend(Item("const", c) for c in model.consts)
    return items


def topological_order(items: list[Item]) -> list[Item]:
    """
    Order items so dependencies come first.

    Depth-first over the input order; a reference back into an item still
    being visited (a cycle) is ignored, so every item appears exactly once.
    The walk keeps its own stack, so reference chains of any length work.
    """
    # constants are never referenced as types
    by_name = {item.name: index for index, item in enumerate(items) if item.kind != "const"}
    visited: set[int] = set()
    ordered: list[Item] = []

    for root in range(len(items)):
        if root in visited:
            continue
        visited.add(root)
        stack = [(root, iter(dependencies(items[root].definition)))]
        while stack:
            index, deps = stack[-1]
            for dep in deps:
                target = by_name.get(dep)
                if target is not None and target not in visited:
                    visited.add(target)
                    stack.append((target, iter(dependencies(items[target].definition))))
                    break
            else:
                stack.pop()
                ordered.append(items[index])
    return ordered
