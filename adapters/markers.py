"""Declarative markers for benchmark classes.

Parameters are declared with ``typing.Annotated`` metadata on class
annotations; methods are tagged with decorators::

    class StringBench:
        count: Annotated[int, Params(1, 10, 100)] = 1
        trim: Annotated[bool, ParamsAllValues()] = False

        @iteration_setup
        def setup(self) -> None: ...

        @benchmark
        @assert_with("check_concat")
        @arguments("a", "b")
        def concat(self, left: str, right: str) -> str: ...

        def check_concat(self, left: str, right: str, actual: str) -> bool: ...

Decorators only tag the function; they never wrap it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from domain.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

_F = TypeVar("_F")

MARKS_ATTR = "__benchassert_marks__"

HOOK_KINDS: tuple[str, ...] = (
    "global_setup",
    "global_cleanup",
    "iteration_setup",
    "iteration_cleanup",
)


# ---------------------------------------------------------------------------
# Parameter declaration markers (Annotated metadata)
# ---------------------------------------------------------------------------


class Params:
    """Fixed list of values for a member. ``Params()`` contributes nothing."""

    def __init__(self, *values: object) -> None:
        self.values = values

    def __repr__(self) -> str:
        return f"Params{self.values!r}"


class ParamsAllValues:
    """Every value of the member's ``bool``, ``Enum`` or ``Literal`` type."""

    def __repr__(self) -> str:
        return "ParamsAllValues()"


class ParamsSource:
    """Values come from a zero-argument member of the class, read once."""

    def __init__(self, source: str | Callable[..., object]) -> None:
        self.name = source if isinstance(source, str) else source.__name__

    def __repr__(self) -> str:
        return f"ParamsSource({self.name!r})"


# ---------------------------------------------------------------------------
# Method markers (decorators)
# ---------------------------------------------------------------------------


@dataclass
class MethodMarks:
    """Everything the decorators recorded on one function."""

    benchmark: bool = False
    assert_name: str | None = None
    arguments: list[tuple[object, ...]] = field(default_factory=list)
    argument_source: str | None = None
    hooks: list[str] = field(default_factory=list)


def _target(obj: object) -> object:
    """The plain function behind a staticmethod / classmethod wrapper."""
    if isinstance(obj, staticmethod | classmethod):
        return obj.__func__
    return obj


def marks_of(obj: object) -> MethodMarks | None:
    """Return the marks recorded on *obj*, or None if it is untagged."""
    marks: MethodMarks | None = getattr(_target(obj), MARKS_ATTR, None)
    return marks


def _marks(obj: object) -> MethodMarks:
    target = _target(obj)
    marks = getattr(target, MARKS_ATTR, None)
    if marks is None:
        marks = MethodMarks()
        setattr(target, MARKS_ATTR, marks)
    return marks


def _name_of(obj: object) -> str:
    return str(getattr(_target(obj), "__qualname__", obj))


def benchmark(func: _F) -> _F:
    """Mark a method as a benchmark to be checked."""
    _marks(func).benchmark = True
    return func


def assert_with(method: str | Callable[..., object]) -> Callable[[_F], _F]:
    """Name the assert method that checks this benchmark."""
    name = method if isinstance(method, str) else method.__name__

    def decorate(func: _F) -> _F:
        marks = _marks(func)
        if marks.assert_name is not None and marks.assert_name != name:
            msg = f"{_name_of(func)} already names assert method {marks.assert_name}."
            raise ConfigurationError(msg)
        marks.assert_name = name
        return func

    return decorate


def arguments(*values: object) -> Callable[[_F], _F]:
    """Add one literal argument row. Stack to add several."""

    def decorate(func: _F) -> _F:
        # Decorators apply bottom-up; insert at the front to keep source order.
        _marks(func).arguments.insert(0, tuple(values))
        return func

    return decorate


def arguments_source(source: str | Callable[..., object]) -> Callable[[_F], _F]:
    """Take argument rows from a zero-argument member of the class."""
    name = source if isinstance(source, str) else source.__name__

    def decorate(func: _F) -> _F:
        marks = _marks(func)
        if marks.argument_source is not None:
            msg = f"{_name_of(func)} already has argument source {marks.argument_source}."
            raise ConfigurationError(msg)
        marks.argument_source = name
        return func

    return decorate


def _hook(kind: str) -> Callable[[_F], _F]:
    def decorate(func: _F) -> _F:
        _marks(func).hooks.append(kind)
        return func

    decorate.__name__ = kind
    decorate.__doc__ = f"Mark a method as the {kind.replace('_', ' ')} hook."
    return decorate


global_setup = _hook("global_setup")
global_cleanup = _hook("global_cleanup")
iteration_setup = _hook("iteration_setup")
iteration_cleanup = _hook("iteration_cleanup")
