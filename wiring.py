"""
wiring.py — Composition root for benchassert.

Connects the core modules to their ports:

  discovery   → adapters.marker_discovery.MarkerDiscovery
  reflection  → adapters.python_reflection.PythonReflection

and assembles a ``TypeHarness`` for one class. Everything a harness caches
(parameter space, argument tuples, signature matches, call adapters) is
resolved here, from a scratch instance, before any lifecycle hook can run.
Callers may pass their own port implementations.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from adapters.marker_discovery import MarkerDiscovery
from adapters.python_reflection import PythonReflection
from domain.models import BenchmarkUnit
from modules.argument_resolver.core import resolve_arguments
from modules.call_adapter.core import build_adapter
from modules.harness.core import TypeHarness
from modules.parameter_space.core import ParameterSpace, resolve_declarations
from modules.signature_matcher.core import SignatureMatcher

if TYPE_CHECKING:
    from domain.models import BenchmarkSpec
    from domain.ports import DeclarationSourcePort, ReflectionPort

logger = logging.getLogger("benchassert.wiring")


def _build_unit(
    cls: type,
    spec: BenchmarkSpec,
    scratch: object,
    discovery: DeclarationSourcePort,
    reflection: ReflectionPort,
    matcher: SignatureMatcher,
) -> BenchmarkUnit:
    """Resolve everything one benchmark method needs to be checked."""
    assertion = (
        discovery.find_method(cls, spec.assert_name) if spec.assert_name is not None else None
    )
    match = matcher.match(spec.method, assertion, spec.assert_name)
    assert assertion is not None  # match() raised otherwise

    argument_tuples = resolve_arguments(spec, scratch, reflection)
    adapter = build_adapter(spec.method, assertion, match, reflection)
    adapter.check_surrogates(argument_tuples)

    logger.debug(
        "Unit %s: %d argument tuple(s), %s adapter",
        spec.method.qualname,
        len(argument_tuples),
        adapter.strategy,
    )
    return BenchmarkUnit(
        benchmark=spec.method,
        assert_method=assertion,
        argument_tuples=argument_tuples,
        adapter=adapter,
    )


def build_harness(
    cls: type,
    *,
    discovery: DeclarationSourcePort | None = None,
    reflection: ReflectionPort | None = None,
) -> TypeHarness:
    """Build the harness for *cls*.

    Args:
        cls: The benchmark class to check.
        discovery: Declaration source; defaults to marker discovery.
        reflection: Invocation capability; defaults to plain Python calls.

    Returns:
        A TypeHarness ready to run.

    Raises:
        ConfigurationError: The class is declared in a way that cannot be
            checked. Raised before any test case runs.
    """
    discovery = discovery if discovery is not None else MarkerDiscovery()
    reflection = reflection if reflection is not None else PythonReflection()
    matcher = SignatureMatcher()

    type_name = discovery.type_name(cls)
    hooks = discovery.hooks(cls)

    # Declarations and arguments are resolved on an instance that has had
    # no parameter applied and no hook run.
    scratch = reflection.instantiate(cls)
    declarations = resolve_declarations(discovery.parameters(cls), scratch, reflection)
    space = ParameterSpace(declarations)
    units = [
        _build_unit(cls, spec, scratch, discovery, reflection, matcher)
        for spec in discovery.benchmarks(cls)
    ]
    del scratch

    if not units:
        logger.warning("%s declares no benchmark methods", type_name)
    logger.info(
        "Built harness for %s: %d parameter combination(s), %d benchmark(s)",
        type_name,
        len(space),
        len(units),
    )
    return TypeHarness(cls, type_name, space, units, hooks, reflection)

