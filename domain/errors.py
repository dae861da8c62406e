"""Error taxonomy for benchassert.

Two families:

- ``ConfigurationError`` — raised while a harness is being built, before any
  test case runs. The benchmark class cannot be meaningfully checked.
- ``AssertFailedError`` — raised when an assert method returns ``False``.
  Carries everything needed to reproduce the failing case.

This module has ZERO imports from outside the Python standard library.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.models import ParameterAssignment


class BenchAssertError(Exception):
    """Base class for every error raised by benchassert."""


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------


class ConfigurationError(BenchAssertError, ValueError):
    """The benchmark class is declared in a way that cannot be checked."""


class DuplicateDeclarationError(ConfigurationError):
    """A member carries more than one parameter declaration marker."""


class EmptyDeclarationError(ConfigurationError):
    """A parameter declaration resolved to zero values."""


class MemberNotWritableError(ConfigurationError):
    """A parameterized member cannot be assigned on an instance."""


class ArgumentSourceError(ConfigurationError):
    """A value or argument supplier is missing, unresolvable or malformed."""


class ArgumentArityError(ConfigurationError):
    """An argument row does not match the benchmark's parameter count."""


class UnsupportedRestrictedTypeError(ConfigurationError):
    """A restricted view type other than the supported window kinds was used."""


class AssertMethodError(ConfigurationError):
    """The assert method is missing, or does not return ``bool``."""


class SignatureMismatchError(ConfigurationError):
    """The assert method's parameters do not cover the benchmark's signature."""


class HookError(ConfigurationError):
    """A lifecycle hook or benchmark method is declared incorrectly."""


class InstantiationError(ConfigurationError):
    """The class under test cannot be default-constructed."""


# ---------------------------------------------------------------------------
# Correctness failures
# ---------------------------------------------------------------------------


class AssertFailedError(BenchAssertError, AssertionError):
    """An assert method returned ``False`` for one test case.

    Attributes:
        benchmark: Name of the benchmark method under test.
        type_name: Qualified name of the class that owns it.
        assignment: Parameter values applied to the instance.
        arguments: Argument tuple the benchmark was called with.
    """

    def __init__(
        self,
        benchmark: str,
        type_name: str,
        assignment: ParameterAssignment,
        arguments: tuple[object, ...],
    ) -> None:
        self.benchmark = benchmark
        self.type_name = type_name
        self.assignment = assignment
        self.arguments = arguments
        params = ", ".join(str(mv) for mv in assignment)
        args = ", ".join(repr(a) for a in arguments)
        super().__init__(
            f"Test failed on {benchmark} in {type_name}.\n"
            f"Params: {params}\n"
            f"Arguments: ({args})"
        )
