"""Call adapter module — one callable that runs a benchmark and its assert.

For every benchmark method a single adapter is built when the harness is
constructed and reused by every test case:

    adapter(instance, arguments) -> bool

Two strategies, chosen once per method:

- **direct** — call the benchmark with the arguments, then the assert method
  with the same arguments plus the benchmark's result.
- **bridging** — used when either method involves a restricted view type
  (``CharView`` or ``memoryview``). Arguments arrive as plain surrogates (the
  backing ``str`` or buffer), are turned into views at the call boundary, and
  the *same* view objects, together with any view the benchmark returns, are
  handed to the assert method. Building fresh views on each side would
  break identity and shared-memory checks in the assert method.

Either way, writable buffer arguments are copied for each call, so a
benchmark that works in place never changes the cached argument rows seen by
later test cases or later runs.

This module depends only on domain/ types and has zero external imports beyond stdlib.
"""

from __future__ import annotations

import logging
import types
import typing
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Union

from domain.errors import (
    ArgumentSourceError,
    AssertMethodError,
    UnsupportedRestrictedTypeError,
)
from domain.views import CharView, RestrictedView, private_buffer

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from domain.models import ArgumentTuple, MethodHandle, SignatureMatch
    from domain.ports import ReflectionPort

logger = logging.getLogger("benchassert.call_adapter")


class ViewKind(Enum):
    """The supported restricted window kinds."""

    CHARS = "chars"
    ELEMENTS = "elements"


def _is_restricted(annotation: object) -> bool:
    if annotation is memoryview:
        return True
    if typing.get_origin(annotation) is not None:
        return False
    return isinstance(annotation, type) and issubclass(annotation, RestrictedView)


def view_kind(annotation: object, where: str) -> ViewKind | None:
    """Classify an annotation as a supported window kind, or None.

    Args:
        annotation: A parameter or return annotation.
        where: Method and position, for error messages.

    Raises:
        UnsupportedRestrictedTypeError: The annotation is restricted but is
            not one of the supported window kinds, or wraps one in a union.
    """
    if typing.get_origin(annotation) is Annotated:
        annotation = typing.get_args(annotation)[0]

    if typing.get_origin(annotation) in (Union, types.UnionType):
        if any(_is_restricted(a) for a in typing.get_args(annotation)):
            msg = f"{where}: restricted view types cannot be part of a union ({annotation!r})."
            raise UnsupportedRestrictedTypeError(msg)
        return None

    if annotation is memoryview:
        return ViewKind.ELEMENTS
    if annotation is CharView:
        return ViewKind.CHARS
    if _is_restricted(annotation):
        name = getattr(annotation, "__qualname__", repr(annotation))
        msg = (
            f"{where}: {name} is a restricted view type. Only CharView and "
            "memoryview windows are supported."
        )
        raise UnsupportedRestrictedTypeError(msg)
    return None


def _to_char_view(surrogate: object) -> CharView:
    return CharView(typing.cast("str", surrogate))


def _to_element_view(surrogate: object) -> memoryview:
    return memoryview(typing.cast("bytearray", surrogate))


_CONVERTERS: dict[ViewKind, Callable[[object], object]] = {
    ViewKind.CHARS: _to_char_view,
    ViewKind.ELEMENTS: _to_element_view,
}


class CallAdapter:
    """Runs a benchmark method and its assert method back-to-back.

    Attributes:
        strategy: ``"direct"`` or ``"bridging"``.
    """

    def __init__(
        self,
        benchmark: MethodHandle,
        assertion: MethodHandle,
        match: SignatureMatch,
        reflection: ReflectionPort,
    ) -> None:
        self._benchmark = benchmark
        self._assertion = assertion
        self._forwards = match.forwards_result
        self._reflection = reflection

        self._parameter_kinds = tuple(
            view_kind(p, f"{benchmark.qualname} parameter {i}")
            for i, p in enumerate(benchmark.signature.parameters)
        )
        return_kind = view_kind(benchmark.signature.returns, f"{benchmark.qualname} return")
        assert_kinds = tuple(
            view_kind(p, f"{assertion.qualname} parameter {i}")
            for i, p in enumerate(assertion.signature.parameters)
        )

        bridging = (
            any(self._parameter_kinds) or return_kind is not None or any(assert_kinds)
        )
        self.strategy = "bridging" if bridging else "direct"
        self._run: Callable[[object, ArgumentTuple], object] = (
            self._build_bridge() if bridging else self._build_direct()
        )
        logger.debug("Built %s adapter for %s", self.strategy, benchmark.qualname)

    # -- Strategies ------------------------------------------------------------

    def _build_direct(self) -> Callable[[object, ArgumentTuple], object]:
        invoke = self._reflection.invoke
        benchmark = self._benchmark
        assertion = self._assertion
        forwards = self._forwards

        def run(instance: object, arguments: ArgumentTuple) -> object:
            arguments = tuple(map(private_buffer, arguments))
            result = invoke(benchmark, instance, arguments)
            assert_arguments = (*arguments, result) if forwards else arguments
            return invoke(assertion, instance, assert_arguments)

        return run

    def _build_bridge(self) -> Callable[[object, ArgumentTuple], object]:
        invoke = self._reflection.invoke
        benchmark = self._benchmark
        assertion = self._assertion
        forwards = self._forwards
        converters = tuple(
            _CONVERTERS[kind] if kind is not None else None for kind in self._parameter_kinds
        )

        def run(instance: object, arguments: ArgumentTuple) -> object:
            views = tuple(
                convert(arg) if convert is not None else arg
                for convert, arg in zip(converters, map(private_buffer, arguments), strict=True)
            )
            result = invoke(benchmark, instance, views)
            assert_arguments = (*views, result) if forwards else views
            return invoke(assertion, instance, assert_arguments)

        return run

    # -- Public API ------------------------------------------------------------

    def check_surrogates(self, argument_tuples: Sequence[ArgumentTuple]) -> None:
        """Verify every view parameter receives a usable surrogate.

        Raises:
            ArgumentSourceError: A CharView parameter was given something
                other than a ``str``, or a memoryview parameter something
                that does not export a buffer.
        """
        for arguments in argument_tuples:
            for i, (kind, arg) in enumerate(zip(self._parameter_kinds, arguments, strict=True)):
                if kind is ViewKind.CHARS and not isinstance(arg, str):
                    msg = (
                        f"{self._benchmark.qualname} parameter {i} is a CharView and must be "
                        f"supplied as a str, got {type(arg).__name__}."
                    )
                    raise ArgumentSourceError(msg)
                if kind is ViewKind.ELEMENTS:
                    try:
                        with memoryview(arg):  # type: ignore[arg-type]
                            pass
                    except TypeError as exc:
                        msg = (
                            f"{self._benchmark.qualname} parameter {i} is a memoryview and must "
                            f"be supplied as a buffer, got {type(arg).__name__}."
                        )
                        raise ArgumentSourceError(msg) from exc

    def __call__(self, instance: object, arguments: ArgumentTuple) -> bool:
        result = self._run(instance, arguments)
        if not isinstance(result, bool):
            msg = (
                f"Assert method {self._assertion.qualname} returned "
                f"{type(result).__name__}, not bool."
            )
            raise AssertMethodError(msg)
        return result


def build_adapter(
    benchmark: MethodHandle,
    assertion: MethodHandle,
    match: SignatureMatch,
    reflection: ReflectionPort,
) -> CallAdapter:
    """Build the call adapter for one benchmark method."""
    return CallAdapter(benchmark, assertion, match, reflection)
