"""Argument resolver module — argument tuples for one benchmark method.

A benchmark method with parameters gets its arguments from literal
``arguments(...)`` markers and/or one ``arguments_source(...)`` supplier.
Resolution happens once, against a scratch instance, before any parameter
value is applied or hook is run; the resulting tuples are cached by the
harness for every test case.

This module depends only on domain/ types and has zero external imports beyond stdlib.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from domain.errors import ArgumentArityError, ArgumentSourceError
from domain.views import private_buffer

if TYPE_CHECKING:
    from domain.models import ArgumentTuple, BenchmarkSpec
    from domain.ports import ReflectionPort

logger = logging.getLogger("benchassert.argument_resolver")

# A parameterless benchmark is called exactly once, with no arguments.
NO_ARGUMENTS: tuple[ArgumentTuple, ...] = ((),)


def _is_row(value: object) -> bool:
    """Return True if *value* can be decomposed into an argument row."""
    return isinstance(value, Iterable) and not isinstance(value, str | bytes)


def supplied_rows(
    spec: BenchmarkSpec,
    scratch: object,
    reflection: ReflectionPort,
) -> list[ArgumentTuple]:
    """Invoke the benchmark's argument supplier once and split it into rows.

    With exactly one benchmark parameter, every supplied element becomes a
    one-element row as-is, even if it is itself a sequence. With more, each
    element must be a non-string iterable of exactly that many items.

    Raises:
        ArgumentSourceError: The supplier returned None or a non-iterable.
        ArgumentArityError: A supplied row has the wrong length.
    """
    name = spec.argument_source
    method = spec.method
    if name is None:
        return []

    supplied = reflection.supply(scratch, name)
    if supplied is None:
        msg = f"Arguments supplied by {name} for {method.qualname} cannot be None."
        raise ArgumentSourceError(msg)
    if not _is_row(supplied):
        msg = f"Arguments supplied by {name} for {method.qualname} must be iterable."
        raise ArgumentSourceError(msg)

    arity = method.signature.arity
    if arity == 1:
        return [(item,) for item in supplied]

    rows: list[ArgumentTuple] = []
    for item in supplied:
        if not _is_row(item):
            msg = (
                f"Arguments supplied by {name} do not match the parameters of "
                f"{method.qualname}: each row must be a sequence of {arity} values."
            )
            raise ArgumentArityError(msg)
        row = tuple(item)
        if len(row) != arity:
            msg = (
                f"Each row of arguments supplied by {name} must have {arity} total "
                f"arguments; got {len(row)} for {method.qualname}."
            )
            raise ArgumentArityError(msg)
        rows.append(row)
    return rows


def literal_rows(spec: BenchmarkSpec) -> list[ArgumentTuple]:
    """Return the literal argument rows, checking each one's arity."""
    method = spec.method
    arity = method.signature.arity
    rows: list[ArgumentTuple] = []
    for values in spec.literal_arguments:
        if len(values) != arity:
            msg = (
                f"Arguments {values!r} do not match the {arity} parameter(s) of "
                f"{method.qualname}."
            )
            raise ArgumentArityError(msg)
        # Detach writable buffers from the objects held by the decorator.
        rows.append(tuple(map(private_buffer, values)))
    return rows


def resolve_arguments(
    spec: BenchmarkSpec,
    scratch: object,
    reflection: ReflectionPort,
) -> tuple[ArgumentTuple, ...]:
    """Resolve every argument tuple a benchmark method is called with.

    Args:
        spec: The benchmark method and its argument markers.
        scratch: An unparameterized instance used to call the supplier.
        reflection: Used to read the supplier member on *scratch*.

    Returns:
        A non-empty tuple of argument tuples. Supplier rows come first,
        then literal rows in declaration order.

    Raises:
        ArgumentSourceError: A method with parameters was given no arguments.
        ArgumentArityError: A row does not match the parameter count.
    """
    method = spec.method
    if method.signature.arity == 0:
        if spec.literal_arguments or spec.argument_source:
            logger.debug("Ignoring argument markers on parameterless %s", method.qualname)
        return NO_ARGUMENTS

    rows = supplied_rows(spec, scratch, reflection)
    rows.extend(literal_rows(spec))
    if not rows:
        msg = f"No arguments were supplied for method {method.qualname}."
        raise ArgumentSourceError(msg)

    logger.debug("Resolved %d argument tuple(s) for %s", len(rows), method.qualname)
    return tuple(rows)
