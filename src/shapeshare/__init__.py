"""
shapeshare - share one data shape across codebases in different languages.

Projects a language-neutral model of structs, tagged unions and type aliases
into idiomatic source text for a chosen backend.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .backends import Backend, GenerationResult, UnsupportedPolicy, get_backend, list_backends
from .core import ir
from .core.config import BackendConfig, load_config
from .core.errors import (
    BackendError,
    ConfigurationError,
    ShapeshareError,
    UnsupportedCapabilityError,
    UnsupportedTypeError,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "Backend",
    "BackendConfig",
    "GenerationResult",
    "UnsupportedPolicy",
    "get_backend",
    "list_backends",
    "load_config",
    "ShapeshareError",
    "BackendError",
    "ConfigurationError",
    "UnsupportedCapabilityError",
    "UnsupportedTypeError",
]
