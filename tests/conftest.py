"""Shared pytest fixtures for shapeshare tests."""

import io
from collections.abc import Callable

import pytest

from shapeshare.backends.kotlin import KotlinBackend
from shapeshare.backends.scala import ScalaBackend
from shapeshare.core import ir
from shapeshare.core.config import BackendConfig

PACKAGE = "com.agilebits.onepassword"


@pytest.fixture
def kotlin() -> KotlinBackend:
    """Return a Kotlin backend without version header."""
    return KotlinBackend(BackendConfig(namespace=PACKAGE, no_version_header=True))


@pytest.fixture
def scala() -> ScalaBackend:
    """Return a Scala backend without version header."""
    return ScalaBackend(BackendConfig(namespace=PACKAGE, no_version_header=True))


@pytest.fixture
def render() -> Callable[..., str]:
    """Return a helper capturing what a write_* method emits."""

    def _render(write: Callable, *args) -> str:
        buffer = io.StringIO()
        write(buffer, *args)
        return buffer.getvalue()

    return _render


def field(name: str, ty: ir.ModelType, **kwargs) -> ir.FieldDef:
    """Build a field whose renamed id equals its original one."""
    return ir.FieldDef(id=ir.Identifier.of(name), type=ty, **kwargs)


@pytest.fixture
def status_union() -> ir.TaggedUnion:
    """Return a union with a no-payload and an unsigned-payload variant."""
    return ir.TaggedUnion(
        id=ir.Identifier.of("Status"),
        variants=[
            ir.NoPayloadVariant(id=ir.Identifier.of("Loading")),
            ir.PayloadVariant(
                id=ir.Identifier.of("Ready"),
                type=ir.special(ir.SpecialTypeKind.U32),
            ),
        ],
    )


@pytest.fixture
def message_union() -> ir.TaggedUnion:
    """Return a generic union whose inline record uses only one of its generics."""
    return ir.TaggedUnion(
        id=ir.Identifier.of("Message"),
        generic_params=["T", "U"],
        variants=[
            ir.PayloadVariant(
                id=ir.Identifier.of("Text"),
                type=ir.special(ir.SpecialTypeKind.STRING),
            ),
            ir.InlineRecordVariant(
                id=ir.Identifier.of("Envelope"),
                fields=[field("body", ir.simple("T"))],
                comments=["Wrapped payload"],
            ),
            ir.NoPayloadVariant(id=ir.Identifier.of("Ping")),
        ],
    )
