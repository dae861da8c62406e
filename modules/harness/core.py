"""Harness module — test case orchestration for one class under test.

A ``TypeHarness`` owns the parts of a class that never change between runs
(its parameter space, and one ``BenchmarkUnit`` per benchmark method with
cached argument tuples and call adapter) and lazily enumerates test cases:

    parameter assignments x benchmark units x that unit's argument tuples

with the parameter assignment as the outer loop. Each ``TestCase`` runs on
its own fresh instance:

    CREATED -> INSTANCE_BUILT -> SETUP_RUN -> ASSERT_INVOKED -> CLEANUP_RUN
            -> PASSED | FAILED

Setup and cleanup hooks run once per test case so every scenario is
hermetic. Cleanup runs even when setup, the benchmark or the assert raises.
The first failing case aborts the run.

This module depends only on domain/ types and has zero external imports beyond stdlib.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import TYPE_CHECKING

from domain.errors import AssertFailedError
from domain.models import CaseOutcome, CaseState, HarnessReport

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from domain.models import (
        ArgumentTuple,
        BenchmarkUnit,
        HookSet,
        ParameterAssignment,
    )
    from domain.ports import ReflectionPort
    from modules.parameter_space.core import ParameterSpace

logger = logging.getLogger("benchassert.harness")


class TestCase:
    """One (assignment, benchmark unit, argument tuple) execution."""

    __test__ = False  # not a pytest class

    def __init__(
        self,
        harness: TypeHarness,
        assignment: ParameterAssignment,
        unit: BenchmarkUnit,
        arguments: ArgumentTuple,
    ) -> None:
        self.harness = harness
        self.assignment = assignment
        self.unit = unit
        self.arguments = arguments
        self.state = CaseState.CREATED

    def __repr__(self) -> str:
        params = ", ".join(str(mv) for mv in self.assignment)
        return f"<TestCase {self.unit.name} [{params}] {self.arguments!r} {self.state.value}>"

    def outcome(self) -> CaseOutcome:
        """Snapshot of this case for observers."""
        return CaseOutcome(
            benchmark=self.unit.name,
            assignment=self.assignment,
            arguments=self.arguments,
            state=self.state,
        )

    def run(self) -> CaseOutcome:
        """Execute this case on a fresh instance.

        Returns:
            The outcome of a passing case.

        Raises:
            AssertFailedError: The assert method returned False.
        """
        harness = self.harness
        reflection = harness.reflection
        hooks = harness.hooks

        instance = reflection.instantiate(harness.cls)
        for member_value in self.assignment:
            reflection.assign(instance, member_value.member, member_value.value)
        self.state = CaseState.INSTANCE_BUILT

        with ExitStack() as cleanup:
            # Callbacks unwind last-in first-out: iteration cleanup, then global.
            for hook in reversed(hooks.cleanup):
                cleanup.callback(reflection.invoke, hook, instance, ())

            for hook in hooks.setup:
                reflection.invoke(hook, instance, ())
            self.state = CaseState.SETUP_RUN

            passed = self.unit.adapter(instance, self.arguments)
            self.state = CaseState.ASSERT_INVOKED
        self.state = CaseState.CLEANUP_RUN
        del instance

        if not passed:
            self.state = CaseState.FAILED
            raise AssertFailedError(
                benchmark=self.unit.name,
                type_name=harness.type_name,
                assignment=self.assignment,
                arguments=self.arguments,
            )

        self.state = CaseState.PASSED
        return self.outcome()


class TypeHarness:
    """All correctness checks for one class under test."""

    def __init__(
        self,
        cls: type,
        type_name: str,
        space: ParameterSpace,
        units: Sequence[BenchmarkUnit],
        hooks: HookSet,
        reflection: ReflectionPort,
    ) -> None:
        self.cls = cls
        self.type_name = type_name
        self.space = space
        self.units: tuple[BenchmarkUnit, ...] = tuple(units)
        self.hooks = hooks
        self.reflection = reflection

    def __len__(self) -> int:
        return len(self.space) * sum(len(u.argument_tuples) for u in self.units)

    def test_cases(self) -> Iterator[TestCase]:
        """Lazily enumerate every test case, assignment outermost."""
        for assignment in self.space.assignments():
            for unit in self.units:
                for arguments in unit.argument_tuples:
                    yield TestCase(self, assignment, unit, arguments)

    def run(self, on_case: Callable[[CaseOutcome], None] | None = None) -> HarnessReport:
        """Run every test case in order, stopping at the first failure.

        Args:
            on_case: Optional observer called with each finished case,
                including the failing one before the error propagates.

        Returns:
            A HarnessReport summarising the cases that ran.

        Raises:
            AssertFailedError: A case's assert method returned False.
        """
        counts: dict[str, int] = {unit.name: 0 for unit in self.units}
        total = 0
        logger.info("Checking %s: %d test case(s)", self.type_name, len(self))

        for case in self.test_cases():
            try:
                outcome = case.run()
            except AssertFailedError as exc:
                logger.error("%s", exc)
                if on_case is not None:
                    on_case(case.outcome())
                raise
            total += 1
            counts[case.unit.name] += 1
            logger.debug("Passed %r", case)
            if on_case is not None:
                on_case(outcome)

        logger.info("All %d test case(s) passed for %s", total, self.type_name)
        return HarnessReport(
            type_name=self.type_name,
            cases_run=total,
            per_benchmark=tuple(counts.items()),
        )
