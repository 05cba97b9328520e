"""
Error types for shapeshare type projection and code generation.
"""

from dataclasses import dataclass
from typing import Optional


class ShapeshareError(Exception):
    """Base exception for all shapeshare errors."""

    def __init__(self, message: str, context: Optional["DefinitionContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message

    def with_context(self, context: "DefinitionContext") -> "ShapeshareError":
        """Attach the definition being emitted; keeps any context already set."""
        if self.context is None:
            self.context = context
            self.args = (self._format_message(),)
        return self


class UnsupportedTypeError(ShapeshareError):
    """
    Raised when a special type has no representation in the target language.

    Examples:
    - Date/time types in the Kotlin and Scala backends

    Fails only the definition being emitted; never retried.
    """

    def __init__(self, kind: str, context: Optional["DefinitionContext"] = None):
        self.kind = kind
        super().__init__(f"Unsupported special type: {kind}", context)


class UnsupportedCapabilityError(ShapeshareError):
    """
    Raised when a backend does not implement a contract operation.

    Examples:
    - Constant emission
    - Import statements in the Scala backend

    The generation pipeline decides, per UnsupportedPolicy, whether this
    skips the item, warns, or fails the run.
    """

    def __init__(
        self, backend: str, capability: str, context: Optional["DefinitionContext"] = None
    ):
        self.backend = backend
        self.capability = capability
        super().__init__(f"Backend '{backend}' does not support {capability}", context)


class ConfigurationError(ShapeshareError):
    """
    Raised when backend configuration is missing or invalid.

    Examples:
    - Empty namespace for a backend that requires one
    - Unknown backend table in a configuration document
    - A backend type table that does not cover every special kind
    """

    pass


class BackendError(ShapeshareError):
    """
    Raised when a backend cannot be registered or resolved.

    Examples:
    - Unknown backend name
    - Duplicate registration
    """

    pass


@dataclass
class DefinitionContext:
    """
    Which definition was being emitted when an error occurred.

    Attributes:
        kind: Definition kind ("struct", "enum", "alias", "const", "imports")
        name: Original name of the definition
        backend: Backend name, when known
    """

    kind: str
    name: str
    backend: str | None = None

    def format(self) -> str:
        """
        Format context as a human-readable string.

        Returns:
            Formatted string like: "kotlin: struct Foo"
        """
        location = f"{self.kind} {self.name}"
        if self.backend:
            return f"{self.backend}: {location}"
        return location
