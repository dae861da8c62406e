"""Tests for modules/argument_resolver/core.py — argument tuples per benchmark."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from domain.errors import ArgumentArityError, ArgumentSourceError
from modules.argument_resolver.core import NO_ARGUMENTS, resolve_arguments

if TYPE_CHECKING:
    from collections.abc import Callable

    from adapters.python_reflection import PythonReflection
    from domain.models import BenchmarkSpec, MethodHandle, MethodSignature


class Suppliers:
    def __init__(self) -> None:
        self.calls = 0

    def singles(self) -> list[object]:
        self.calls += 1
        return [[1, 2], "ab", None]

    def pairs(self) -> list[tuple[int, int]]:
        return [(1, 2), (3, 4)]

    def ragged(self) -> list[tuple[int, ...]]:
        return [(1, 2), (3,)]

    def flat(self) -> list[int]:
        return [1, 2]

    def none(self) -> None:
        return None

    def empty(self) -> list[object]:
        return []


@pytest.fixture()
def unary(
    method_factory: Callable[..., MethodHandle],
    signature_factory: Callable[..., MethodSignature],
) -> MethodHandle:
    return method_factory("unary", signature=signature_factory(object))


@pytest.fixture()
def binary(
    method_factory: Callable[..., MethodHandle],
    signature_factory: Callable[..., MethodSignature],
) -> MethodHandle:
    return method_factory("binary", signature=signature_factory(int, int))


def test_parameterless_method_runs_once(
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    assert resolve_arguments(spec_factory(), Suppliers(), reflection) == NO_ARGUMENTS


def test_parameterless_method_ignores_markers(
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    scratch = Suppliers()
    spec = spec_factory(literal_arguments=((1,),), argument_source="singles")
    assert resolve_arguments(spec, scratch, reflection) == ((),)
    assert scratch.calls == 0


def test_literal_rows_in_declaration_order(
    binary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    spec = spec_factory(binary, literal_arguments=((5, 6), (1, 2)))
    assert resolve_arguments(spec, Suppliers(), reflection) == ((5, 6), (1, 2))


def test_literal_buffers_are_detached(
    unary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    held = bytearray(b"abc")
    frozen = b"xyz"
    spec = spec_factory(unary, literal_arguments=((held,), (frozen,)))
    [(copied,), (shared,)] = resolve_arguments(spec, Suppliers(), reflection)
    assert copied == held
    assert copied is not held
    assert shared is frozen


def test_single_parameter_keeps_sequences_whole(
    unary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    spec = spec_factory(unary, argument_source="singles")
    assert resolve_arguments(spec, Suppliers(), reflection) == (([1, 2],), ("ab",), (None,))


def test_supplier_rows_unpacked_for_multiple_parameters(
    binary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    spec = spec_factory(binary, argument_source="pairs")
    assert resolve_arguments(spec, Suppliers(), reflection) == ((1, 2), (3, 4))


def test_supplier_rows_come_before_literal_rows(
    binary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    spec = spec_factory(binary, literal_arguments=((9, 9),), argument_source="pairs")
    assert resolve_arguments(spec, Suppliers(), reflection) == ((1, 2), (3, 4), (9, 9))


def test_supplier_invoked_once(
    unary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    scratch = Suppliers()
    resolve_arguments(spec_factory(unary, argument_source="singles"), scratch, reflection)
    assert scratch.calls == 1


def test_method_with_parameters_needs_arguments(
    binary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    with pytest.raises(ArgumentSourceError, match="No arguments were supplied for method tests.Sample.binary"):
        resolve_arguments(spec_factory(binary), Suppliers(), reflection)


def test_empty_supplier_and_no_literals(
    binary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    with pytest.raises(ArgumentSourceError):
        resolve_arguments(spec_factory(binary, argument_source="empty"), Suppliers(), reflection)


def test_literal_row_wrong_arity(
    binary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    with pytest.raises(ArgumentArityError, match="2 parameter"):
        resolve_arguments(spec_factory(binary, literal_arguments=((1,),)), Suppliers(), reflection)


def test_supplied_row_wrong_arity(
    binary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    with pytest.raises(ArgumentArityError, match="must have 2 total arguments; got 1"):
        resolve_arguments(spec_factory(binary, argument_source="ragged"), Suppliers(), reflection)


def test_supplied_scalars_for_multiple_parameters(
    binary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    with pytest.raises(ArgumentArityError, match="do not match the parameters"):
        resolve_arguments(spec_factory(binary, argument_source="flat"), Suppliers(), reflection)


def test_supplier_returning_none(
    unary: MethodHandle,
    spec_factory: Callable[..., BenchmarkSpec],
    reflection: PythonReflection,
) -> None:
    with pytest.raises(ArgumentSourceError, match="cannot be None"):
        resolve_arguments(spec_factory(unary, argument_source="none"), Suppliers(), reflection)
