"""
kernel/runner.py — Public entry points for checking benchmark classes.

    from kernel.runner import run

    report = run(StringSuite)      # raises AssertFailedError on failure

Each call builds a fresh harness, so a second run over the same class
repeats exactly the same cases.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import wiring

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from domain.models import CaseOutcome, HarnessReport
    from domain.ports import DeclarationSourcePort, ReflectionPort

logger = logging.getLogger("benchassert.runner")


def run(
    cls: type,
    *,
    on_case: Callable[[CaseOutcome], None] | None = None,
    discovery: DeclarationSourcePort | None = None,
    reflection: ReflectionPort | None = None,
) -> HarnessReport:
    """Check every benchmark of *cls* under every parameter combination.

    Args:
        cls: The benchmark class.
        on_case: Optional observer called after each test case.
        discovery: Declaration source override.
        reflection: Invocation capability override.

    Returns:
        The report of a fully passing run.

    Raises:
        ConfigurationError: The class cannot be checked as declared.
        AssertFailedError: An assert method returned False.
    """
    harness = wiring.build_harness(cls, discovery=discovery, reflection=reflection)
    return harness.run(on_case)


def run_many(
    classes: Iterable[type],
    *,
    on_case: Callable[[CaseOutcome], None] | None = None,
    on_type: Callable[[str, int], None] | None = None,
) -> list[HarnessReport]:
    """Run several classes in order, stopping at the first error.

    Args:
        classes: Classes to check.
        on_case: Optional per-case observer.
        on_type: Optional observer called with the type name and case count
            before each class runs.

    Returns:
        One report per class.
    """
    reports: list[HarnessReport] = []
    for cls in classes:
        harness = wiring.build_harness(cls)
        if on_type is not None:
            on_type(harness.type_name, len(harness))
        reports.append(harness.run(on_case))
    logger.info(
        "Checked %d class(es), %d case(s)",
        len(reports),
        sum(r.cases_run for r in reports),
    )
    return reports
