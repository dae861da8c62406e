"""Signature matcher module — structural check of assert method signatures.

An assert method must accept the benchmark's parameters, in order, plus the
benchmark's return value as a final parameter when the benchmark returns one,
and must itself be annotated ``-> bool``.

The check is purely structural: annotations are compared for assignability,
nothing is ever called. It runs once when a harness is built so a mismatch
fails fast instead of surfacing as a confusing call-site error later.

This module depends only on domain/ types and has zero external imports beyond stdlib.
"""

from __future__ import annotations

import collections.abc
import logging
import types
import typing
from typing import TYPE_CHECKING, Annotated, Any, Literal, TypeVar, Union

from domain.errors import AssertMethodError, SignatureMismatchError
from domain.models import UNANNOTATED, ReturnKind, SignatureMatch

if TYPE_CHECKING:
    from collections.abc import Sequence

    from domain.models import MethodHandle, MethodSignature

logger = logging.getLogger("benchassert.signature_matcher")

_NONE_TYPE = type(None)

# PEP 484 numeric tower: an int is acceptable where a float or complex is.
_NUMERIC_TOWER: dict[type, tuple[type, ...]] = {
    int: (float, complex),
    float: (complex,),
}


# ---------------------------------------------------------------------------
# Assignability (pure — no I/O)
# ---------------------------------------------------------------------------


def _normalize(annotation: object) -> object:
    if annotation is None:
        return _NONE_TYPE
    if typing.get_origin(annotation) is Annotated:
        return typing.get_args(annotation)[0]
    return annotation


def _is_union(annotation: object) -> bool:
    return typing.get_origin(annotation) in (Union, types.UnionType)


def _subclass(source: type, target: type) -> bool:
    for base, widened in _NUMERIC_TOWER.items():
        if issubclass(source, base) and target in widened:
            return True
    try:
        return issubclass(source, target)
    except TypeError:
        # Protocols with data members and similar refuse issubclass().
        return source is target


def _sequence_assignable(source_args: Sequence[object], target_args: Sequence[object]) -> bool:
    if len(source_args) != len(target_args):
        return False
    return all(is_assignable(s, t) for s, t in zip(source_args, target_args, strict=True))


def _tuple_assignable(source_args: Sequence[object], target_args: Sequence[object]) -> bool:
    # tuple[X, ...] is homogeneous and of any length.
    source_open = len(source_args) == 2 and source_args[1] is Ellipsis  # noqa: PLR2004
    target_open = len(target_args) == 2 and target_args[1] is Ellipsis  # noqa: PLR2004
    if target_open:
        if source_open:
            return is_assignable(source_args[0], target_args[0])
        return all(is_assignable(s, target_args[0]) for s in source_args)
    if source_open:
        return False
    return _sequence_assignable(source_args, target_args)


def _callable_assignable(source_args: Sequence[object], target_args: Sequence[object]) -> bool:
    source_params, source_return = source_args[0], source_args[-1]
    target_params, target_return = target_args[0], target_args[-1]
    if not is_assignable(source_return, target_return):
        return False
    # An ellipsis parameter list accepts any parameters.
    if source_params is Ellipsis or target_params is Ellipsis:
        return True
    if not isinstance(source_params, list) or not isinstance(target_params, list):
        return source_params == target_params
    # Parameters are contravariant.
    return _sequence_assignable(target_params, source_params)


def _arguments_assignable(
    origin: type,
    source_args: Sequence[object],
    target_args: Sequence[object],
) -> bool:
    if origin is tuple:
        return _tuple_assignable(source_args, target_args)
    if origin is collections.abc.Callable:
        return _callable_assignable(source_args, target_args)
    if any(a is Ellipsis or isinstance(a, list) for a in (*source_args, *target_args)):
        return list(source_args) == list(target_args)
    return _sequence_assignable(source_args, target_args)


def is_assignable(source: object, target: object) -> bool:
    """Return True if a value annotated *source* fits a slot annotated *target*.

    Unannotated and ``Any`` are compatible with everything. Unions, the
    numeric tower, ``Literal``, ``TypeVar`` bounds and parameterized
    generics are understood; anything else falls back to equality.
    """
    source = _normalize(source)
    target = _normalize(target)

    if source is UNANNOTATED or target is UNANNOTATED:
        return True
    if source is Any or target is Any or target is object:
        return True
    if source == target:
        return True

    if isinstance(target, TypeVar):
        bound = target.__bound__
        if bound is not None:
            return is_assignable(source, bound)
        if target.__constraints__:
            return any(is_assignable(source, c) for c in target.__constraints__)
        return True
    if isinstance(source, TypeVar):
        bound = source.__bound__
        return bound is None or is_assignable(bound, target)

    if _is_union(source):
        return all(is_assignable(s, target) for s in typing.get_args(source))
    if _is_union(target):
        return any(is_assignable(source, t) for t in typing.get_args(target))

    source_origin = typing.get_origin(source)
    target_origin = typing.get_origin(target)
    if target_origin is Literal:
        return source_origin is Literal and set(typing.get_args(source)) <= set(
            typing.get_args(target)
        )
    if source_origin is Literal:
        return all(is_assignable(type(v), target) for v in typing.get_args(source))

    source_cls = source_origin or source
    target_cls = target_origin or target
    if isinstance(source_cls, type) and isinstance(target_cls, type):
        if not _subclass(source_cls, target_cls):
            return False
        source_args = typing.get_args(source) if source_origin else ()
        target_args = typing.get_args(target) if target_origin else ()
        if source_args and target_args:
            return _arguments_assignable(target_cls, source_args, target_args)
        return True

    return False


def describe(annotation: object) -> str:
    """Render an annotation the way it would be written in source."""
    annotation = _normalize(annotation)
    if annotation is UNANNOTATED or annotation is Any:
        return "Any"
    if annotation is _NONE_TYPE:
        return "None"
    if isinstance(annotation, type) and not typing.get_args(annotation):
        return annotation.__qualname__
    return repr(annotation).replace("typing.", "")


# ---------------------------------------------------------------------------
# Signature matching
# ---------------------------------------------------------------------------


class SignatureMatcher:
    """Decides whether an assert method can check a benchmark method."""

    def forwards_result(
        self,
        benchmark: MethodSignature,
        assertion: MethodSignature,
    ) -> bool | None:
        """Return whether the assert method takes the benchmark's result.

        Returns None when the two signatures are incompatible. An
        unannotated benchmark return is accepted with or without a trailing
        result parameter; the arity of the assert method decides.
        """
        b_params = benchmark.parameters
        a_params = assertion.parameters
        kind = benchmark.return_kind

        if len(a_params) == len(b_params):
            forwards = False
            if kind is ReturnKind.VALUE:
                return None
        elif len(a_params) == len(b_params) + 1:
            forwards = True
            if kind is ReturnKind.NO_VALUE:
                return None
            if not is_assignable(benchmark.returns, a_params[-1]):
                return None
        else:
            return None

        for b, a in zip(b_params, a_params, strict=False):
            if not is_assignable(b, a):
                return None
        return forwards

    def compatible(self, benchmark: MethodSignature, assertion: MethodSignature) -> bool:
        """Return True if *assertion* structurally covers *benchmark*."""
        return self.forwards_result(benchmark, assertion) is not None

    def expected_parameters(self, benchmark: MethodSignature) -> tuple[object, ...]:
        """The parameter list an assert method for *benchmark* must accept."""
        if benchmark.return_kind is ReturnKind.NO_VALUE:
            return benchmark.parameters
        return (*benchmark.parameters, benchmark.returns)

    def match(
        self,
        benchmark: MethodHandle,
        assertion: MethodHandle | None,
        assert_name: str | None = None,
    ) -> SignatureMatch:
        """Validate an assert method against its benchmark method.

        Args:
            benchmark: The benchmark method.
            assertion: The assert method it names, or None if none was found.
            assert_name: The name the benchmark asked for, for error messages.

        Returns:
            A SignatureMatch describing how to call the assert method.

        Raises:
            AssertMethodError: The assert method is missing or not ``-> bool``.
            SignatureMismatchError: The parameter lists are incompatible.
        """
        if assertion is None:
            if assert_name is None:
                msg = f"Benchmark method {benchmark.qualname} must declare an assert method."
            else:
                msg = f"No method named {assert_name} was found for benchmark {benchmark.qualname}."
            raise AssertMethodError(msg)

        if assertion.signature.returns is not bool:
            msg = (
                f"Assert method {assertion.name} in type {assertion.owner} must return a bool, "
                f"got {describe(assertion.signature.returns)}."
            )
            raise AssertMethodError(msg)

        forwards = self.forwards_result(benchmark.signature, assertion.signature)
        expected = self.expected_parameters(benchmark.signature)
        if forwards is None:
            listed = ", ".join(describe(a) for a in expected)
            msg = (
                f"Assert method {assertion.name} in type {assertion.owner} must accept the "
                f"following parameters: ({listed}). This matches the signature of "
                f"{benchmark.name}, including what it returns (if anything)."
            )
            raise SignatureMismatchError(msg)

        logger.debug(
            "Matched %s -> %s (forwards result: %s)",
            benchmark.qualname,
            assertion.name,
            forwards,
        )
        return SignatureMatch(forwards_result=forwards, expected=expected)
