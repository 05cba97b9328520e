"""
Two-phase generation pipeline.

Phase 1 hoists inline records out of tagged unions. Phase 2 emits every
definition in dependency order, each one rendered into a private buffer and
copied to the sink only once it rendered completely. A failed definition
therefore leaves no partial text behind.

Unsupported capabilities (e.g. constants) are handled per UnsupportedPolicy;
every other generation error is re-raised with the failing definition
attached as context.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, TextIO

from ...core import ir
from ...core.errors import DefinitionContext, ShapeshareError, UnsupportedCapabilityError
from ...core.hoisting import HoistedModel, hoist_inline_records
from ...core.imports import CrateTypes, used_imports
from ...core.ordering import Item, model_items, topological_order

if TYPE_CHECKING:
    from .. import Backend

logger = logging.getLogger(__name__)


class UnsupportedPolicy(str, Enum):
    """What to do when a backend lacks a contract operation."""

    FAIL = "fail"  # re-raise UnsupportedCapabilityError
    WARN = "warn"  # log a warning, record it, continue
    SKIP = "skip"  # record it, continue


@dataclass
class GenerationResult:
    """
    Result from a generation run.

    Attributes:
        backend: Backend name
        emitted: Definitions written, as "<kind> <name>"
        skipped: Definitions left out because of an unsupported capability
        warnings: Warnings to display to the user
    """

    backend: str
    emitted: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """Whether every definition was emitted."""
        return len(self.skipped) == 0

    def add_emitted(self, label: str) -> None:
        self.emitted.append(label)

    def add_skipped(self, label: str) -> None:
        self.skipped.append(label)

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)


class DefinitionWriter:
    """
    Writes definitions to a sink one at a time, all-or-nothing.

    Shared by the default pipeline and by backends with their own layout.
    """

    def __init__(
        self,
        backend: Backend,
        sink: TextIO,
        hoisted: HoistedModel,
        policy: UnsupportedPolicy = UnsupportedPolicy.FAIL,
    ):
        self.backend = backend
        self.sink = sink
        self.hoisted = hoisted
        self.policy = policy
        self.result = GenerationResult(backend=backend.name)

    def emit(self, kind: str, name: str, render: Callable[[TextIO], None]) -> bool:
        """
        Render one unit into a buffer and copy it to the sink.

        Returns:
            True if written, False if skipped per policy

        Raises:
            ShapeshareError: With the definition attached as context
        """
        label = f"{kind} {name}"
        buffer = io.StringIO()
        try:
            render(buffer)
        except UnsupportedCapabilityError as e:
            e.with_context(DefinitionContext(kind, name, self.backend.name))
            if self.policy == UnsupportedPolicy.FAIL:
                raise
            if self.policy == UnsupportedPolicy.WARN:
                logger.warning("Skipping %s: %s", label, e.message)
                self.result.add_warning(str(e))
            self.result.add_skipped(label)
            return False
        except ShapeshareError as e:
            raise e.with_context(DefinitionContext(kind, name, self.backend.name))

        self.sink.write(buffer.getvalue())
        self.result.add_emitted(label)
        logger.debug("Emitted %s (%s)", label, self.backend.name)
        return True

    def emit_item(self, item: Item) -> bool:
        """Emit one model definition. Enums carry their hoisted structs with them."""
        backend = self.backend
        definition = item.definition

        if item.kind == "alias":
            return self.emit(item.kind, item.name, lambda w: backend.write_type_alias(w, definition))
        if item.kind == "struct":
            return self.emit(item.kind, item.name, lambda w: backend.write_struct(w, definition))
        if item.kind == "const":
            return self.emit(item.kind, item.name, lambda w: backend.write_const(w, definition))

        records = self.hoisted.records_for(definition)

        def render_enum(w: TextIO) -> None:
            for record in records:
                backend.write_struct(w, record)
            backend.write_enum(w, definition)

        return self.emit(item.kind, item.name, render_enum)

    def emit_imports(self, model: ir.ParsedModel, all_types: CrateTypes | None) -> None:
        """Emit import statements; only multi-file runs import anything."""
        if not model.multi_file or all_types is None:
            return
        imports = used_imports(model, all_types, self.backend.ignored_reference_types())
        self.emit("imports", model.crate_name, lambda w: self.backend.write_imports(w, imports))


def ordered_items(model: ir.ParsedModel) -> list[Item]:
    """Model definitions in emission order."""
    return topological_order(model_items(model))


def run_generation(
    backend: Backend,
    sink: TextIO,
    model: ir.ParsedModel,
    all_types: CrateTypes | None = None,
    policy: UnsupportedPolicy = UnsupportedPolicy.FAIL,
) -> GenerationResult:
    """
    Run the default two-phase pipeline for one backend.

    Args:
        backend: Configured backend
        sink: Output text stream
        model: Model to generate
        all_types: Types of every crate, for multi-file imports
        policy: How unsupported capabilities are handled

    Returns:
        GenerationResult of the run
    """
    # Phase 1: hoisting
    hoisted = hoist_inline_records(model)

    # Phase 2: emission
    writer = DefinitionWriter(backend, sink, hoisted, policy)
    backend.begin_file(sink, model)
    writer.emit_imports(model, all_types)
    for item in ordered_items(model):
        writer.emit_item(item)
    backend.end_file(sink)

    logger.debug(
        "%s generation finished: %d emitted, %d skipped",
        backend.name,
        len(writer.result.emitted),
        len(writer.result.skipped),
    )
    return writer.result
