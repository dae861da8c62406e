"""Tests for kernel/loader.py — target strings to benchmark classes."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

import pytest

from domain.errors import ConfigurationError
from kernel.loader import has_benchmarks, load_target, load_targets

if TYPE_CHECKING:
    from pathlib import Path

_MODULE = textwrap.dedent(
    """
    from adapters.markers import assert_with, benchmark


    class Zeta:
        @benchmark
        @assert_with("check")
        def run(self) -> int:
            return 1

        def check(self, actual: int) -> bool:
            return actual == 1


    class Helper:
        def run(self) -> int:
            return 0


    class Alpha(Zeta):
        pass


    class Outer:
        class Inner(Zeta):
            pass
    """
)


@pytest.fixture()
def sample_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / "loader_sample_mod.py").write_text(_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "loader_sample_mod"


def test_module_target_in_definition_order(sample_module: str) -> None:
    names = [c.__name__ for c in load_target(sample_module)]
    assert names == ["Zeta", "Alpha"]


def test_class_target(sample_module: str) -> None:
    [cls] = load_target(f"{sample_module}:Zeta")
    assert cls.__name__ == "Zeta"


def test_nested_class_target(sample_module: str) -> None:
    [cls] = load_target(f"{sample_module}:Outer.Inner")
    assert cls.__qualname__ == "Outer.Inner"


def test_inherited_benchmarks_count(sample_module: str) -> None:
    [cls] = load_target(f"{sample_module}:Alpha")
    assert has_benchmarks(cls)


def test_class_without_benchmarks(sample_module: str) -> None:
    with pytest.raises(ConfigurationError, match="declares no benchmark methods"):
        load_target(f"{sample_module}:Helper")


def test_missing_class(sample_module: str) -> None:
    with pytest.raises(ConfigurationError, match="has no attribute 'Nope'"):
        load_target(f"{sample_module}:Nope")


def test_target_not_a_class(sample_module: str) -> None:
    with pytest.raises(ConfigurationError, match="is not a class"):
        load_target(f"{sample_module}:benchmark")


def test_missing_module() -> None:
    with pytest.raises(ConfigurationError, match="Cannot import 'no_such_module_xyz'"):
        load_target("no_such_module_xyz")


@pytest.mark.parametrize("target", ["", ":Cls", "mod:"])
def test_malformed_target(target: str) -> None:
    with pytest.raises(ConfigurationError, match="Malformed target"):
        load_target(target)


def test_load_targets_drops_duplicates(sample_module: str) -> None:
    classes = load_targets([f"{sample_module}:Alpha", sample_module])
    assert [c.__name__ for c in classes] == ["Alpha", "Zeta"]


def test_sample_suites_load() -> None:
    names = [c.__name__ for c in load_targets(["benchmarks.string_suite", "benchmarks.window_suite"])]
    assert names == ["StringSuite", "PaddingSuite", "WindowSuite"]
