"""Port interfaces for benchassert.

All ports are defined as typing.Protocol — structural subtyping means any class
with matching method signatures satisfies the Protocol without inheritance.

The core modules (parameter space, argument resolver, signature matcher, call
adapter, harness) only ever talk to the class under test through these two
ports, so they never depend on a particular introspection mechanism.

This module has ZERO external imports — only stdlib and typing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from domain.models import (
        ArgumentTuple,
        BenchmarkSpec,
        DeclaredParameter,
        HookSet,
        MemberHandle,
        MethodHandle,
    )


class DeclarationSourcePort(Protocol):
    """Discovers declared members and methods on a class under test."""

    def type_name(self, cls: type) -> str:
        """Return the human-readable qualified name of *cls*."""
        ...

    def parameters(self, cls: type) -> list[DeclaredParameter]:
        """Return every member carrying a parameter declaration marker."""
        ...

    def benchmarks(self, cls: type) -> list[BenchmarkSpec]:
        """Return every benchmark method, in definition order."""
        ...

    def hooks(self, cls: type) -> HookSet:
        """Return the lifecycle hooks declared on *cls*."""
        ...

    def find_method(self, cls: type, name: str) -> MethodHandle | None:
        """Look up a method by name on *cls* or its enclosing class."""
        ...


class ReflectionPort(Protocol):
    """Capability to create, mutate and call into instances generically."""

    def instantiate(self, cls: type) -> object:
        """Create a default-constructed instance of *cls*."""
        ...

    def assign(self, instance: object, member: MemberHandle, value: object) -> None:
        """Write *value* to *member* on *instance*."""
        ...

    def invoke(self, method: MethodHandle, instance: object, arguments: ArgumentTuple) -> object:
        """Call *method* on *instance* with positional *arguments*."""
        ...

    def supply(self, instance: object, name: str) -> object:
        """Read (or call, if callable) the zero-argument member *name*."""
        ...
