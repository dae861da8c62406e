"""Shared pytest fixtures and test factories for benchassert.

Provides:
- A recording ReflectionPort that logs every call it makes
- Factory functions for the domain models with sensible defaults
- Pytest fixtures wrapping the factories
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from adapters.python_reflection import PythonReflection
from domain.models import (
    UNANNOTATED,
    BenchmarkSpec,
    Binding,
    MemberHandle,
    MemberKind,
    MethodHandle,
    MethodSignature,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from domain.models import ArgumentTuple


# ── Fake Port Implementations ─────────────────────────────────────────────


class RecordingReflection(PythonReflection):
    """PythonReflection that records what it was asked to do.

    ``calls`` holds ``(operation, name)`` pairs in order, e.g.
    ``("invoke", "setup")`` or ``("assign", "count")``.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.instances: list[object] = []

    def instantiate(self, cls: type) -> object:
        instance = super().instantiate(cls)
        self.calls.append(("instantiate", cls.__name__))
        self.instances.append(instance)
        return instance

    def assign(self, instance: object, member: MemberHandle, value: object) -> None:
        self.calls.append(("assign", member.name))
        super().assign(instance, member, value)

    def invoke(self, method: MethodHandle, instance: object, arguments: ArgumentTuple) -> object:
        self.calls.append(("invoke", method.name))
        return super().invoke(method, instance, arguments)

    def supply(self, instance: object, name: str) -> object:
        self.calls.append(("supply", name))
        return super().supply(instance, name)

    def names(self, operation: str) -> list[str]:
        """Names recorded for one operation, in call order."""
        return [name for op, name in self.calls if op == operation]


# ── Factory Functions ─────────────────────────────────────────────────────


def make_member(
    name: str = "value",
    *,
    annotation: object = int,
    kind: MemberKind = MemberKind.FIELD,
    writable: bool = True,
    owner: str = "tests.Sample",
) -> MemberHandle:
    return MemberHandle(
        name=name,
        owner=owner,
        annotation=annotation,
        kind=kind,
        writable=writable,
    )


def make_signature(*parameters: object, returns: object = UNANNOTATED) -> MethodSignature:
    """Signature with positional *parameters* named p0, p1, ..."""
    return MethodSignature(
        parameters=tuple(parameters),
        parameter_names=tuple(f"p{i}" for i in range(len(parameters))),
        returns=returns,
    )


def make_method(
    name: str = "bench",
    *,
    signature: MethodSignature | None = None,
    function: Callable[..., object] | None = None,
    binding: Binding = Binding.INSTANCE,
    owner: str = "tests.Sample",
) -> MethodHandle:
    return MethodHandle(
        name=name,
        owner=owner,
        signature=signature if signature is not None else make_signature(),
        function=function if function is not None else (lambda *_: None),
        binding=binding,
    )


def make_spec(
    method: MethodHandle | None = None,
    *,
    assert_name: str | None = "check",
    literal_arguments: tuple[ArgumentTuple, ...] = (),
    argument_source: str | None = None,
) -> BenchmarkSpec:
    return BenchmarkSpec(
        method=method if method is not None else make_method(),
        assert_name=assert_name,
        literal_arguments=literal_arguments,
        argument_source=argument_source,
    )


# ── Pytest Fixtures ───────────────────────────────────────────────────────


@pytest.fixture()
def recording_reflection() -> RecordingReflection:
    """A fresh RecordingReflection."""
    return RecordingReflection()


@pytest.fixture()
def reflection() -> PythonReflection:
    """The default ReflectionPort implementation."""
    return PythonReflection()


@pytest.fixture()
def member_factory() -> Callable[..., MemberHandle]:
    return make_member


@pytest.fixture()
def signature_factory() -> Callable[..., MethodSignature]:
    return make_signature


@pytest.fixture()
def method_factory() -> Callable[..., MethodHandle]:
    return make_method


@pytest.fixture()
def spec_factory() -> Callable[..., BenchmarkSpec]:
    return make_spec
