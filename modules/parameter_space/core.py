"""Parameter space module — cross product of parameter declaration values.

Resolves the declaration markers found on a class's members into concrete
value lists, then enumerates every combination of those values as a lazy
sequence of parameter assignments.

Enumeration is a mixed-radix counter: each declaration's value list is one
digit and the first declaration is the fastest-incrementing digit.

This module depends only on domain/ types and has zero external imports beyond stdlib.
"""

from __future__ import annotations

import enum
import logging
import math
import types
import typing
from collections.abc import Iterable
from typing import TYPE_CHECKING, Literal, Union

from domain.errors import (
    ArgumentSourceError,
    ConfigurationError,
    DuplicateDeclarationError,
    EmptyDeclarationError,
    MemberNotWritableError,
)
from domain.models import (
    MemberValue,
    ParameterAssignment,
    ParameterDeclaration,
    ValueSourceKind,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from domain.models import DeclaredParameter, MemberHandle, ValueSource
    from domain.ports import ReflectionPort

logger = logging.getLogger("benchassert.parameter_space")


# ---------------------------------------------------------------------------
# Declaration resolution
# ---------------------------------------------------------------------------


def all_values_for(annotation: object, member: MemberHandle) -> tuple[object, ...]:
    """Return every legal value of a restricted annotation.

    Supports ``bool``, ``Enum`` subclasses, ``Literal[...]`` and any of those
    unioned with ``None`` (``None`` is appended last).

    Raises:
        ConfigurationError: The annotation has no finite value set.
    """
    if annotation is bool:
        return (True, False)
    origin = typing.get_origin(annotation)
    if origin is None and isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return tuple(annotation)
    if origin is Literal:
        return typing.get_args(annotation)

    if origin in (Union, types.UnionType):
        args = typing.get_args(annotation)
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1 and len(args) == 2:  # noqa: PLR2004
            return (*all_values_for(non_none[0], member), None)

    msg = (
        f"ParamsAllValues on {member.owner}.{member.name} needs a bool, Enum, "
        f"Literal or Optional of those annotation, got {annotation!r}."
    )
    raise ConfigurationError(msg)


def _supplied_values(
    source: ValueSource,
    member: MemberHandle,
    scratch: object,
    reflection: ReflectionPort,
) -> tuple[object, ...]:
    """Invoke a value supplier once and materialize what it returns."""
    name = source.supplier
    supplied = reflection.supply(scratch, name)
    if supplied is None:
        msg = f"Parameters supplied by {name} for {member.owner}.{member.name} cannot be None."
        raise ArgumentSourceError(msg)
    if isinstance(supplied, str | bytes) or not isinstance(supplied, Iterable):
        msg = f"Parameters supplied by {name} for {member.owner}.{member.name} must be iterable."
        raise ArgumentSourceError(msg)
    return tuple(supplied)


def _resolve_one(
    declared: DeclaredParameter,
    scratch: object,
    reflection: ReflectionPort,
) -> ParameterDeclaration | None:
    member = declared.member
    if len(declared.sources) > 1:
        kinds = ", ".join(s.kind.value for s in declared.sources)
        msg = f"Member {member.owner}.{member.name} has more than one parameter declaration ({kinds})."
        raise DuplicateDeclarationError(msg)
    if not member.writable:
        msg = f"Member {member.owner}.{member.name} must be writable in order to be parameterized."
        raise MemberNotWritableError(msg)

    source = declared.sources[0]
    if source.kind is ValueSourceKind.FIXED:
        if not source.values:
            # An explicitly empty fixed list is a single no-op assignment.
            logger.debug("Empty Params on %s; contributes no values", member.name)
            return None
        values = source.values
    elif source.kind is ValueSourceKind.ALL_VALUES:
        values = all_values_for(member.annotation, member)
    else:
        values = _supplied_values(source, member, scratch, reflection)
        if not values:
            msg = f"Parameters supplied by {source.supplier} for {member.owner}.{member.name} are empty."
            raise EmptyDeclarationError(msg)

    logger.debug("Resolved %s: %d value(s)", member.name, len(values))
    return ParameterDeclaration(member=member, values=tuple(values))


def resolve_declarations(
    declared: Sequence[DeclaredParameter],
    scratch: object,
    reflection: ReflectionPort,
) -> list[ParameterDeclaration]:
    """Resolve declaration markers into concrete parameter declarations.

    Runs against an unparameterized scratch instance, before any setup hook
    could have run, so values never depend on parameterization.

    Args:
        declared: Members and their declaration markers, in member order.
        scratch: A default-constructed instance of the class under test.
        reflection: Used to read value suppliers on *scratch*.

    Returns:
        One declaration per member, minus explicitly empty fixed lists.
    """
    results: list[ParameterDeclaration] = []
    for item in declared:
        if not item.sources:
            continue
        resolved = _resolve_one(item, scratch, reflection)
        if resolved is not None:
            results.append(resolved)
    return results


# ---------------------------------------------------------------------------
# Permutation
# ---------------------------------------------------------------------------


class ParameterSpace:
    """Every combination of a class's parameter declaration values."""

    def __init__(self, declarations: Sequence[ParameterDeclaration] = ()) -> None:
        seen: set[str] = set()
        for decl in declarations:
            member = decl.member
            if member.name in seen:
                msg = f"Member {member.owner}.{member.name} is declared more than once."
                raise DuplicateDeclarationError(msg)
            seen.add(member.name)
            if not member.writable:
                msg = f"Member {member.owner}.{member.name} must be writable in order to be parameterized."
                raise MemberNotWritableError(msg)
            if not decl.values:
                msg = f"Parameter declaration on {member.owner}.{member.name} has no values."
                raise EmptyDeclarationError(msg)
        self._declarations: tuple[ParameterDeclaration, ...] = tuple(declarations)

    @property
    def declarations(self) -> tuple[ParameterDeclaration, ...]:
        return self._declarations

    def __len__(self) -> int:
        return math.prod(len(d.values) for d in self._declarations)

    def __iter__(self) -> Iterator[ParameterAssignment]:
        return self.assignments()

    def assignments(self) -> Iterator[ParameterAssignment]:
        """Yield every parameter assignment exactly once.

        The first declaration varies fastest. With no declarations, a single
        empty assignment is yielded.
        """
        declarations = self._declarations
        indices = [0] * len(declarations)
        while True:
            yield tuple(
                MemberValue(member=d.member, value=d.values[indices[i]])
                for i, d in enumerate(declarations)
            )
            for i, decl in enumerate(declarations):
                indices[i] += 1
                if indices[i] < len(decl.values):
                    break
                indices[i] = 0
            else:
                return
