"""Core data types for benchassert.

All types are frozen dataclasses with complete type annotations.
This module has ZERO imports from outside the Python standard library.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Marker for a parameter or return value that carries no annotation.
UNANNOTATED: object = inspect.Parameter.empty


class MemberKind(Enum):
    """How a parameterized member stores its value."""

    FIELD = "field"
    PROPERTY = "property"
    DESCRIPTOR = "descriptor"


class ValueSourceKind(Enum):
    """Which declaration marker supplies a member's values."""

    FIXED = "fixed"
    ALL_VALUES = "all_values"
    SUPPLIED = "supplied"


class ReturnKind(Enum):
    """What a method's return annotation says about its result."""

    VALUE = "value"
    NO_VALUE = "no_value"
    UNKNOWN = "unknown"


class Binding(Enum):
    """How a method handle receives the instance under test."""

    INSTANCE = "instance"
    STATIC = "static"


class CaseState(Enum):
    """Lifecycle of a single test case."""

    CREATED = "created"
    INSTANCE_BUILT = "instance_built"
    SETUP_RUN = "setup_run"
    ASSERT_INVOKED = "assert_invoked"
    CLEANUP_RUN = "cleanup_run"
    PASSED = "passed"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Members and parameter declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MemberHandle:
    """A data member of the class under test."""

    name: str
    owner: str
    annotation: object = UNANNOTATED
    kind: MemberKind = MemberKind.FIELD
    writable: bool = True

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ValueSource:
    """One declaration marker found on a member.

    ``values`` is used by FIXED, ``supplier`` (a member name) by SUPPLIED.
    ALL_VALUES derives its values from the member annotation.
    """

    kind: ValueSourceKind
    values: tuple[object, ...] = ()
    supplier: str = ""


@dataclass(frozen=True)
class DeclaredParameter:
    """A member and every declaration marker found on it, still unresolved."""

    member: MemberHandle
    sources: tuple[ValueSource, ...]


@dataclass(frozen=True)
class ParameterDeclaration:
    """A writable member and its ordered, non-empty set of legal values."""

    member: MemberHandle
    values: tuple[object, ...]


@dataclass(frozen=True)
class MemberValue:
    """A member paired with the value to assign to it."""

    member: MemberHandle
    value: object

    def __str__(self) -> str:
        return f"{self.member.name}={self.value!r}"


ParameterAssignment = tuple[MemberValue, ...]
ArgumentTuple = tuple[object, ...]


# ---------------------------------------------------------------------------
# Methods
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MethodSignature:
    """Positional parameter annotations and return annotation of a method.

    ``returns`` is ``type(None)`` for ``-> None`` and ``UNANNOTATED`` when
    the method carries no return annotation.
    """

    parameters: tuple[object, ...] = ()
    parameter_names: tuple[str, ...] = ()
    returns: object = UNANNOTATED

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def return_kind(self) -> ReturnKind:
        if self.returns is UNANNOTATED:
            return ReturnKind.UNKNOWN
        if self.returns is None or self.returns is type(None):
            return ReturnKind.NO_VALUE
        return ReturnKind.VALUE


@dataclass(frozen=True)
class MethodHandle:
    """A callable member of the class under test.

    ``function`` is invoked with the instance as first argument when
    ``binding`` is INSTANCE, and without it when STATIC.
    """

    name: str
    owner: str
    signature: MethodSignature
    function: Callable[..., object] = field(compare=False, repr=False)
    binding: Binding = Binding.INSTANCE

    @property
    def qualname(self) -> str:
        return f"{self.owner}.{self.name}"


@dataclass(frozen=True)
class BenchmarkSpec:
    """A benchmark method as declared, before arguments are resolved."""

    method: MethodHandle
    assert_name: str | None
    literal_arguments: tuple[ArgumentTuple, ...] = ()
    argument_source: str | None = None


@dataclass(frozen=True)
class HookSet:
    """Optional lifecycle hooks of the class under test."""

    global_setup: MethodHandle | None = None
    global_cleanup: MethodHandle | None = None
    iteration_setup: MethodHandle | None = None
    iteration_cleanup: MethodHandle | None = None

    @property
    def setup(self) -> tuple[MethodHandle, ...]:
        """Setup hooks in invocation order: global, then iteration."""
        return tuple(h for h in (self.global_setup, self.iteration_setup) if h is not None)

    @property
    def cleanup(self) -> tuple[MethodHandle, ...]:
        """Cleanup hooks in invocation order: iteration, then global."""
        return tuple(h for h in (self.iteration_cleanup, self.global_cleanup) if h is not None)


@dataclass(frozen=True)
class SignatureMatch:
    """Result of matching an assert method against its benchmark.

    ``forwards_result`` is True when the assert method takes the benchmark's
    return value as its last parameter.
    """

    forwards_result: bool
    expected: tuple[object, ...]


# ---------------------------------------------------------------------------
# Execution units
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BenchmarkUnit:
    """A benchmark method with its resolved arguments and call adapter."""

    benchmark: MethodHandle
    assert_method: MethodHandle
    argument_tuples: tuple[ArgumentTuple, ...]
    adapter: Callable[[object, ArgumentTuple], bool] = field(compare=False, repr=False)

    @property
    def name(self) -> str:
        return self.benchmark.name


@dataclass(frozen=True)
class CaseOutcome:
    """Observation of one finished test case."""

    benchmark: str
    assignment: ParameterAssignment
    arguments: ArgumentTuple
    state: CaseState


@dataclass(frozen=True)
class HarnessReport:
    """Summary of a completed run over one class."""

    type_name: str
    cases_run: int
    per_benchmark: tuple[tuple[str, int], ...]
