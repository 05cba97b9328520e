"""
Cross-crate import resolution for multi-file output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .ir import ParsedModel
from .ordering import dependencies, model_items

logger = logging.getLogger(__name__)

# Crate name -> type names defined in that crate
CrateTypes = dict[str, set[str]]

# Crate name -> sorted type names to import from it
ScopedCrateTypes = dict[str, list[str]]


def used_imports(
    model: ParsedModel, all_types: CrateTypes, ignored: Iterable[str] = ()
) -> ScopedCrateTypes:
    """
    Types referenced by a model that live in other crates.

    Args:
        model: Model being generated
        all_types: Every known crate and the types it defines
        ignored: Type names never imported (already resolved by the rename table)

    Returns:
        Crate name -> sorted type names, crates in sorted order
    """
    local = model.type_names()
    ignored = set(ignored)
    scoped: dict[str, set[str]] = {}

    for item in model_items(model):
        for name in dependencies(item.definition):
            if name in local or name in ignored:
                continue
            owners = sorted(
                crate for crate, names in all_types.items()
                if crate != model.crate_name and name in names
            )
            if not owners:
                continue
            if len(owners) > 1:
                logger.warning(
                    "Type %s is defined in several crates (%s); importing from %s",
                    name,
                    ", ".join(owners),
                    owners[0],
                )
            scoped.setdefault(owners[0], set()).add(name)

    return {crate: sorted(scoped[crate]) for crate in sorted(scoped)}
