"""Tests for wiring.py — harness construction from a class."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

import pytest

import wiring
from adapters.markers import (
    Params,
    ParamsAllValues,
    ParamsSource,
    arguments,
    arguments_source,
    assert_with,
    benchmark,
    global_setup,
)
from domain.errors import (
    ArgumentSourceError,
    AssertMethodError,
    EmptyDeclarationError,
    InstantiationError,
    MemberNotWritableError,
    SignatureMismatchError,
    UnsupportedRestrictedTypeError,
)
from domain.views import CharView, RestrictedView

if TYPE_CHECKING:
    from conftest import RecordingReflection


class Tracked:
    """Suppliers record the state of the instance they are read on."""

    size: Annotated[int, ParamsSource("sizes")] = 0
    flag: Annotated[bool, ParamsAllValues()] = False
    observed: list[tuple[str, int, bool]] = []

    def __init__(self) -> None:
        self.set_up = False

    def sizes(self) -> list[int]:
        Tracked.observed.append(("sizes", self.size, self.set_up))
        return [1, 2]

    def rows(self) -> list[int]:
        Tracked.observed.append(("rows", self.size, self.set_up))
        return [7, 8]

    @global_setup
    def prepare(self) -> None:
        self.set_up = True

    @benchmark
    @assert_with("check")
    @arguments_source("rows")
    @arguments(9)
    def scan(self, n: int) -> int:
        return n + self.size

    def check(self, n: int, actual: int) -> bool:
        return actual == n + self.size


class NoBenchmarks:
    size: Annotated[int, Params(1, 2)] = 1


class NeedsArgs:
    def __init__(self, name: str) -> None:
        self.name = name

    @benchmark
    @assert_with("check")
    def run(self) -> None:
        pass

    def check(self) -> bool:
        return True


class MissingAssert:
    @benchmark
    @assert_with("nowhere")
    def run(self) -> None:
        pass


class NonBoolAssert:
    @benchmark
    @assert_with("check")
    def run(self) -> None:
        pass

    def check(self) -> int:
        return 1


class WrongSignature:
    @benchmark
    @assert_with("check")
    @arguments("a")
    def run(self, text: str) -> str:
        return text

    def check(self, text: str) -> bool:
        return True


class EmptySupplier:
    size: Annotated[int, ParamsSource("sizes")] = 0

    def sizes(self) -> list[int]:
        return []


class ReadOnly:
    size: Annotated[int, Params(1, 2)]

    @property  # type: ignore[no-redef]
    def size(self) -> int:
        return 1


class Window(RestrictedView):
    pass


class CustomView:
    @benchmark
    @assert_with("check")
    @arguments("abc")
    def run(self, data: Window) -> None:
        pass

    def check(self, data: Window) -> bool:
        return True


class BadSurrogate:
    @benchmark
    @assert_with("check")
    @arguments(b"abc")
    def run(self, text: CharView) -> None:
        pass

    def check(self, text: CharView) -> bool:
        return True


class NoArguments:
    @benchmark
    @assert_with("check")
    def run(self, n: int) -> None:
        pass

    def check(self, n: int) -> bool:
        return True


class EverythingWrongLater:
    """Hooks that would fail if called; construction must not call them."""

    size: Annotated[int, Params(1)] = 1

    @global_setup
    def explode(self) -> None:
        msg = "setup must not run during construction"
        raise RuntimeError(msg)

    @benchmark
    @assert_with("check")
    def run(self) -> int:
        return 1

    def check(self) -> bool:
        return True


def test_build_harness_counts_cases() -> None:
    Tracked.observed.clear()
    harness = wiring.build_harness(Tracked)
    assert harness.type_name == f"{__name__}.Tracked"
    assert len(harness.space) == 4
    [unit] = harness.units
    assert unit.argument_tuples == ((7,), (8,), (9,))
    assert len(harness) == 12


def test_resolution_uses_an_unparameterized_instance_before_hooks() -> None:
    Tracked.observed.clear()
    wiring.build_harness(Tracked)
    assert Tracked.observed == [("sizes", 0, False), ("rows", 0, False)]


def test_building_runs_no_hooks(recording_reflection: RecordingReflection) -> None:
    wiring.build_harness(EverythingWrongLater, reflection=recording_reflection)
    assert recording_reflection.names("invoke") == []
    assert recording_reflection.names("instantiate") == ["EverythingWrongLater"]


def test_no_benchmarks_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="benchassert.wiring"):
        harness = wiring.build_harness(NoBenchmarks)
    assert len(harness) == 0
    assert harness.run().cases_run == 0
    assert "declares no benchmark methods" in caplog.text


@pytest.mark.parametrize(
    ("cls", "error", "message"),
    [
        (NeedsArgs, InstantiationError, "requires name"),
        (MissingAssert, AssertMethodError, "No method named nowhere"),
        (NonBoolAssert, AssertMethodError, "must return a bool, got int"),
        (WrongSignature, SignatureMismatchError, r"\(str, str\)"),
        (EmptySupplier, EmptyDeclarationError, "are empty"),
        (ReadOnly, MemberNotWritableError, "ReadOnly.size must be writable"),
        (CustomView, UnsupportedRestrictedTypeError, "Window"),
        (BadSurrogate, ArgumentSourceError, "must be supplied as a str"),
        (NoArguments, ArgumentSourceError, "No arguments were supplied"),
    ],
)
def test_configuration_errors(cls: type, error: type[Exception], message: str) -> None:
    with pytest.raises(error, match=message):
        wiring.build_harness(cls)
