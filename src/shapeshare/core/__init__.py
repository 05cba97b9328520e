"""Core shapeshare functionality: model, type tables, hoisting, ordering, configuration."""

from . import ir
from .config import BackendConfig, load_config, parse_config
from .errors import (
    BackendError,
    ConfigurationError,
    DefinitionContext,
    ShapeshareError,
    UnsupportedCapabilityError,
    UnsupportedTypeError,
)
from .hoisting import HoistedModel, hoist_enum, hoist_inline_records, inline_record_name
from .imports import CrateTypes, ScopedCrateTypes, used_imports
from .ordering import Item, model_items, topological_order
from .type_table import UNSUPPORTED, TypeTable

__all__ = [
    "ir",
    # Configuration
    "BackendConfig",
    "load_config",
    "parse_config",
    # Errors
    "BackendError",
    "ConfigurationError",
    "DefinitionContext",
    "ShapeshareError",
    "UnsupportedCapabilityError",
    "UnsupportedTypeError",
    # Hoisting
    "HoistedModel",
    "hoist_enum",
    "hoist_inline_records",
    "inline_record_name",
    # Imports and ordering
    "CrateTypes",
    "ScopedCrateTypes",
    "used_imports",
    "Item",
    "model_items",
    "topological_order",
    # Type tables
    "UNSUPPORTED",
    "TypeTable",
]
