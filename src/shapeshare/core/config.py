"""
Backend configuration.

A BackendConfig is an immutable value fixed for the duration of a run. It can
be built directly or loaded from a TOML document with one table per backend:

    [kotlin]
    package = "com.example.types"
    module_name = "types"
    prefix = "Ex"
    type_mappings = { DateTime = "java.time.Instant" }

    [scala]
    package = "com.example.types"
    no_version_header = true
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError


class BackendConfig(BaseModel):
    """
    Construction-time configuration for one backend instance.

    Attributes:
        namespace: Target package/namespace (e.g. "com.example.types")
        module_name: Target module name
        prefix: Prefix prepended to user-defined type names
        type_mappings: Rename table, origin type name -> target type name
        no_version_header: Omit the generator version header
    """

    namespace: str = ""
    module_name: str = ""
    prefix: str = ""
    type_mappings: dict[str, str] = Field(default_factory=dict)
    no_version_header: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")


def _backend_config_from_table(name: str, table: dict[str, Any]) -> BackendConfig:
    data = dict(table)
    # "package" is the documented key; "namespace" is accepted as well
    if "package" in data:
        data["namespace"] = data.pop("package")
    try:
        return BackendConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid [{name}] configuration: {e}") from e


def parse_config(text: str, known_backends: list[str] | None = None) -> dict[str, BackendConfig]:
    """
    Parse a TOML configuration document.

    Args:
        text: TOML source
        known_backends: Backend names accepted as tables; None accepts any

    Returns:
        Mapping of backend name to its configuration

    Raises:
        ConfigurationError: If the document is malformed or names an unknown backend
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Malformed configuration: {e}") from e

    configs: dict[str, BackendConfig] = {}
    for name, table in data.items():
        if not isinstance(table, dict):
            raise ConfigurationError(f"Expected a [{name}] table, got {type(table).__name__}")
        if known_backends is not None and name not in known_backends:
            raise ConfigurationError(
                f"Unknown backend '{name}' in configuration. Known backends: {known_backends}"
            )
        configs[name] = _backend_config_from_table(name, table)
    return configs


def load_config(path: Path, known_backends: list[str] | None = None) -> dict[str, BackendConfig]:
    """Load a TOML configuration file. See parse_config()."""
    return parse_config(path.read_text(encoding="utf-8"), known_backends)
