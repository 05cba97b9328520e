"""
Backend plugin system for shapeshare.

Backends project a validated model into source text for one target language.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar, TextIO

from ..core import ir
from ..core.config import BackendConfig
from ..core.errors import BackendError, UnsupportedCapabilityError
from ..core.imports import CrateTypes, ScopedCrateTypes
from ..core.type_table import TypeTable
from .base.generator import GenerationResult, UnsupportedPolicy, run_generation


@dataclass
class BackendCapabilities:
    """
    Describes what a backend can generate.

    Used for introspection, and by drivers deciding how to treat
    unsupported capabilities before a run.
    """

    name: str
    description: str
    file_extension: str
    supports_constants: bool = False
    supports_imports: bool = False
    requires_namespace: bool = False


class Backend(ABC):
    """
    Abstract base class for all shapeshare backends.

    A backend owns an immutable BackendConfig and a TypeTable, and implements
    the emission contract:

    - format_type: recursive type projection with generic substitution
    - begin_file / end_file: preamble and closing text
    - write_type_alias / write_struct / write_enum / write_const
    - write_imports: import statements for multi-file output
    - ignored_reference_types: names never imported

    Emission methods are stateless with respect to the run; everything they
    need comes from their arguments and the configuration.
    """

    name: ClassVar[str] = ""
    type_table: ClassVar[TypeTable]

    def __init__(self, config: BackendConfig | None = None):
        config = config or BackendConfig()
        self.validate_config(config)
        self.config = config

    def validate_config(self, config: BackendConfig) -> None:
        """
        Validate backend-specific configuration.

        Called at construction, before any emission.

        Raises:
            ConfigurationError: If config is invalid
        """
        # Default: no validation needed
        pass

    @property
    def prefix(self) -> str:
        return self.config.prefix

    @property
    def type_mappings(self) -> dict[str, str]:
        return self.config.type_mappings

    # ------------------------------------------------------------------
    # Type projection
    # ------------------------------------------------------------------

    def format_type(self, ty: ir.ModelType, generic_scope: Sequence[str] = ()) -> str:
        """
        Project a model type into target syntax.

        Args:
            ty: Type to project
            generic_scope: Generic parameter names in scope, emitted unchanged

        Returns:
            Target-language type text

        Raises:
            UnsupportedTypeError: If some special kind has no representation
        """
        if isinstance(ty, ir.SimpleType):
            return self.format_simple_type(ty.name, generic_scope)
        if isinstance(ty, ir.GenericType):
            return self.format_generic_type(ty.name, ty.parameters, generic_scope)
        return self.format_special_type(ty, generic_scope)

    def format_simple_type(self, name: str, generic_scope: Sequence[str] = ()) -> str:
        if name in generic_scope:
            return name
        if name in self.type_mappings:
            return self.type_mappings[name]
        return f"{self.prefix}{name}"

    def format_generic_type(
        self,
        name: str,
        parameters: Sequence[ir.ModelType],
        generic_scope: Sequence[str] = (),
    ) -> str:
        if name in self.type_mappings:
            return self.type_mappings[name]
        args = [self.format_type(p, generic_scope) for p in parameters]
        return f"{self.format_simple_type(name, generic_scope)}{self.generic_params_clause(args)}"

    def format_special_type(self, ty: ir.SpecialType, generic_scope: Sequence[str] = ()) -> str:
        args = [self.format_type(arg, generic_scope) for arg in ty.args]
        return self.type_table.render(ty.kind, args)

    def format_generic_parameters(self, parameters: Sequence[str]) -> str:
        """Wrap generic parameters in the target's generics syntax."""
        return f"<{', '.join(parameters)}>"

    def generic_params_clause(self, parameters: Sequence[str]) -> str:
        """Generic parameter list, or nothing when there are none."""
        if not parameters:
            return ""
        return self.format_generic_parameters(parameters)

    # ------------------------------------------------------------------
    # Emission contract
    # ------------------------------------------------------------------

    @abstractmethod
    def begin_file(self, w: TextIO, model: ir.ParsedModel) -> None:
        """Write the preamble: version header and namespace."""
        pass

    def end_file(self, w: TextIO) -> None:
        """Write closing text. Nothing by default."""
        pass

    @abstractmethod
    def write_type_alias(self, w: TextIO, alias: ir.AliasDef) -> None:
        pass

    @abstractmethod
    def write_struct(self, w: TextIO, struct: ir.StructDef) -> None:
        pass

    @abstractmethod
    def write_enum(self, w: TextIO, enum: ir.EnumDef) -> None:
        """Write an enum. Hoisted inline-record structs are written by the pipeline."""
        pass

    def write_const(self, w: TextIO, const: ir.ConstDef) -> None:
        raise UnsupportedCapabilityError(self.name, "constants")

    def write_imports(self, w: TextIO, imports: ScopedCrateTypes) -> None:
        raise UnsupportedCapabilityError(self.name, "imports")

    def ignored_reference_types(self) -> list[str]:
        """Type names resolved by the rename table, which never need importing."""
        return list(self.type_mappings)

    def generate_types(
        self,
        w: TextIO,
        model: ir.ParsedModel,
        all_types: CrateTypes | None = None,
        policy: UnsupportedPolicy = UnsupportedPolicy.FAIL,
    ) -> GenerationResult:
        """
        Generate the whole output for a model.

        Args:
            w: Output sink
            model: Model to generate
            all_types: Types of every crate, used for imports in multi-file mode
            policy: How unsupported capabilities are handled

        Returns:
            GenerationResult listing emitted and skipped definitions
        """
        return run_generation(self, w, model, all_types=all_types, policy=policy)

    def get_capabilities(self) -> BackendCapabilities:
        """
        Get backend capabilities for introspection.

        Override to provide backend metadata.
        """
        return BackendCapabilities(
            name=self.name or self.__class__.__name__,
            description="No description provided",
            file_extension="",
        )


class BackendRegistry:
    """
    Registry for backend plugins.

    Supports:
    - Manual registration via register()
    - Registration of the built-in backends via discover()
    - Lookup by name
    """

    def __init__(self) -> None:
        self._backends: dict[str, type[Backend]] = {}

    def register(self, name: str, backend_class: type[Backend]) -> None:
        """
        Register a backend class.

        Args:
            name: Backend name (also the configuration table name)
            backend_class: Backend class (must extend Backend)

        Raises:
            BackendError: If name already registered or class invalid
        """
        if name in self._backends:
            raise BackendError(
                f"Backend '{name}' is already registered. Cannot register {backend_class.__name__}."
            )

        if not issubclass(backend_class, Backend):
            raise BackendError(f"Backend class {backend_class.__name__} must extend Backend")

        self._backends[name] = backend_class

    def get(self, name: str, config: BackendConfig | None = None) -> Backend:
        """
        Get a configured backend instance by name.

        Raises:
            BackendError: If backend not found
            ConfigurationError: If the configuration is invalid for the backend
        """
        if name not in self._backends:
            available = list(self._backends.keys())
            raise BackendError(f"Backend '{name}' not found. Available backends: {available}")

        return self._backends[name](config)

    def list_backends(self) -> list[str]:
        return list(self._backends.keys())

    def discover(self) -> None:
        """Register the built-in backends."""
        from .kotlin import KotlinBackend
        from .scala import ScalaBackend

        for backend_class in (KotlinBackend, ScalaBackend):
            if backend_class.name not in self._backends:
                self.register(backend_class.name, backend_class)


# Global registry instance
_registry: BackendRegistry | None = None


def get_registry() -> BackendRegistry:
    """
    Get the global backend registry.

    Registers the built-in backends on first call.
    """
    global _registry
    if _registry is None:
        _registry = BackendRegistry()
        _registry.discover()
    return _registry


def register_backend(name: str, backend_class: type[Backend]) -> None:
    """Register a backend in the global registry."""
    get_registry().register(name, backend_class)


def get_backend(name: str, config: BackendConfig | None = None) -> Backend:
    """
    Get a configured backend instance by name.

    Raises:
        BackendError: If backend not found
    """
    return get_registry().get(name, config)


def list_backends() -> list[str]:
    """List all available backend names."""
    return get_registry().list_backends()


__all__ = [
    "Backend",
    "BackendCapabilities",
    "BackendRegistry",
    "BackendError",
    "GenerationResult",
    "UnsupportedPolicy",
    "get_registry",
    "register_backend",
    "get_backend",
    "list_backends",
]
