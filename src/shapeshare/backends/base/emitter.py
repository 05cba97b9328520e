"""
Field and variant rendering rules shared by backends.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import TYPE_CHECKING, TextIO

from ...core import ir
from ...core.naming import needs_sanitizing

if TYPE_CHECKING:
    from .. import Backend


class Visibility(Enum):
    """Field visibility in generated classes."""

    PUBLIC = "public"
    PRIVATE = "private"


def quoted(value: str) -> str:
    """Render a double-quoted string literal."""
    return json.dumps(value, ensure_ascii=False)


def requires_serial_name(fields: Iterable[ir.FieldDef]) -> bool:
    """
    Check if a definition must tag every field with its serialization name.

    One field needing sanitization switches the whole definition over, so
    either every field carries a tag or none does.
    """
    return any(needs_sanitizing(f.id.renamed) for f in fields)


def default_suffix(field: ir.FieldDef, *, when_optional: str, when_defaulted: str) -> str:
    """
    Default-value text appended to a field declaration.

    Args:
        field: Field being rendered
        when_optional: Suffix for an optional-typed field, always applied
        when_defaulted: Suffix for a non-optional field flagged has_default
    """
    if field.is_optional:
        return when_optional
    if field.has_default:
        return when_defaulted
    return ""


def field_type(backend: Backend, field: ir.FieldDef, generic_scope: Sequence[str]) -> str:
    """Field type text: the backend's literal override if set, else the projection."""
    override = field.type_override(backend.name)
    if override is not None:
        return override
    return backend.format_type(field.type, generic_scope)


def write_comments(w: TextIO, indent: int, comments: Iterable[str], marker: str) -> None:
    """Write comment lines at a tab indentation level."""
    tabs = "\t" * indent
    for comment in comments:
        w.write(f"{tabs}{marker} {comment}\n")


def has_decorator(decorators: ir.Decorators, backend: str, flag: str) -> bool:
    """Check if a definition carries a flag for a backend."""
    return flag in decorators.get(backend, ())
