"""
Static per-backend mapping from special type kinds to target syntax.

Every backend declares one TypeTable covering the whole SpecialTypeKind
enumeration. Coverage is checked when the table is built, which happens in
the backend class body, so adding a kind breaks every backend at import
time until it is handled.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from .errors import ConfigurationError, UnsupportedTypeError
from .ir import SpecialTypeKind

# Marks a kind that has no representation in a target language
UNSUPPORTED = None


class TypeTable:
    """
    Exhaustive dispatch table for special type kinds.

    Templates are ``str.format`` patterns receiving the already-projected
    type arguments positionally, e.g. ``"HashMap<{0}, {1}>"``.

    Example:
        table = TypeTable({
            SpecialTypeKind.LIST: "List<{0}>",
            SpecialTypeKind.DATE_TIME: UNSUPPORTED,
            ...
        })
        table.render(SpecialTypeKind.LIST, ["Int"])  # "List<Int>"
    """

    def __init__(self, templates: Mapping[SpecialTypeKind, str | None]):
        missing = [kind.value for kind in SpecialTypeKind if kind not in templates]
        if missing:
            raise ConfigurationError(f"Type table does not handle special kinds: {missing}")
        self._templates = MappingProxyType(dict(templates))

    def is_supported(self, kind: SpecialTypeKind) -> bool:
        return self._templates[kind] is not UNSUPPORTED

    def render(self, kind: SpecialTypeKind, args: Sequence[str] = ()) -> str:
        """
        Render a special kind with its projected arguments.

        Raises:
            UnsupportedTypeError: If the kind has no representation
        """
        template = self._templates[kind]
        if template is UNSUPPORTED:
            raise UnsupportedTypeError(kind.value)
        return template.format(*args)

    def items(self):
        return self._templates.items()
