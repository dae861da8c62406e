"""Tests for adapters/python_reflection.py — ReflectionPort over plain Python."""

from __future__ import annotations

import pytest

from adapters.python_reflection import PythonReflection
from domain.errors import ArgumentSourceError, InstantiationError
from domain.models import Binding, MemberHandle, MethodHandle, MethodSignature


class Sample:
    limit = 3

    def __init__(self) -> None:
        self.values = [1, 2]
        self.reads = 0

    @property
    def sizes(self) -> list[int]:
        self.reads += 1
        return [10, 20]

    def rows(self) -> list[int]:
        return [1, 2, 3]

    def needs(self, x: int) -> list[int]:
        return [x]

    @staticmethod
    def shared() -> list[str]:
        return ["s"]

    @classmethod
    def named(cls) -> list[str]:
        return [cls.__name__]

    def double(self, x: int) -> int:
        return x * 2


class NeedsArgs:
    def __init__(self, name: str) -> None:
        self.name = name


class OptionalArgs:
    def __init__(self, name: str = "x") -> None:
        self.name = name


@pytest.fixture()
def subject() -> Sample:
    return Sample()


class TestInstantiate:
    def test_default_constructor(self, reflection: PythonReflection) -> None:
        assert isinstance(reflection.instantiate(Sample), Sample)

    def test_optional_parameters_allowed(self, reflection: PythonReflection) -> None:
        assert reflection.instantiate(OptionalArgs).name == "x"  # type: ignore[attr-defined]

    def test_required_parameters_rejected(self, reflection: PythonReflection) -> None:
        with pytest.raises(InstantiationError, match="requires name"):
            reflection.instantiate(NeedsArgs)

    def test_each_call_builds_a_new_instance(self, reflection: PythonReflection) -> None:
        assert reflection.instantiate(Sample) is not reflection.instantiate(Sample)


def test_assign_sets_attribute(reflection: PythonReflection, subject: Sample) -> None:
    reflection.assign(subject, MemberHandle(name="limit", owner="Sample"), 9)
    assert subject.limit == 9
    assert Sample.limit == 3


def test_invoke_instance_and_static(reflection: PythonReflection, subject: Sample) -> None:
    double = MethodHandle(
        name="double",
        owner="Sample",
        signature=MethodSignature(parameters=(int,)),
        function=Sample.double,
    )
    assert reflection.invoke(double, subject, (4,)) == 8

    static = MethodHandle(
        name="twice",
        owner="Sample",
        signature=MethodSignature(parameters=(int,)),
        function=lambda x: x + x,
        binding=Binding.STATIC,
    )
    assert reflection.invoke(static, subject, (4,)) == 8


class TestSupply:
    def test_property_read_once(self, reflection: PythonReflection, subject: Sample) -> None:
        assert reflection.supply(subject, "sizes") == [10, 20]
        assert subject.reads == 1

    def test_method_called(self, reflection: PythonReflection, subject: Sample) -> None:
        assert reflection.supply(subject, "rows") == [1, 2, 3]

    def test_static_and_class_methods(self, reflection: PythonReflection, subject: Sample) -> None:
        assert reflection.supply(subject, "shared") == ["s"]
        assert reflection.supply(subject, "named") == ["Sample"]

    def test_instance_attribute(self, reflection: PythonReflection, subject: Sample) -> None:
        assert reflection.supply(subject, "values") == [1, 2]

    def test_class_attribute(self, reflection: PythonReflection, subject: Sample) -> None:
        assert reflection.supply(subject, "limit") == 3

    def test_missing_member(self, reflection: PythonReflection, subject: Sample) -> None:
        with pytest.raises(ArgumentSourceError, match="named nothing on Sample"):
            reflection.supply(subject, "nothing")

    def test_method_with_parameters(self, reflection: PythonReflection, subject: Sample) -> None:
        with pytest.raises(ArgumentSourceError, match="must not take any arguments"):
            reflection.supply(subject, "needs")
