"""
Base infrastructure shared by backends.

Provides:
- The two-phase generation pipeline
- Field/variant rendering rules
"""

from .emitter import (
    Visibility,
    default_suffix,
    field_type,
    has_decorator,
    quoted,
    requires_serial_name,
    write_comments,
)
from .generator import (
    DefinitionWriter,
    GenerationResult,
    UnsupportedPolicy,
    ordered_items,
    run_generation,
)

__all__ = [
    "DefinitionWriter",
    "GenerationResult",
    "UnsupportedPolicy",
    "Visibility",
    "default_suffix",
    "field_type",
    "has_decorator",
    "ordered_items",
    "quoted",
    "requires_serial_name",
    "run_generation",
    "write_comments",
]
