#!/usr/bin/env python3
"""
benchassert CLI -- Check that benchmark methods compute what they claim.

Usage:
  benchassert run  [TARGET ...] [--verbose | --quiet] [--plain]
  benchassert list [TARGET ...] [--plain]

TARGET is ``package.module:ClassName`` or ``package.module``. With no
TARGET, the ``targets`` list of ``benchassert.yaml`` is used.

Exit codes: 0 all cases passed, 1 an assert method returned False,
2 a class could not be checked as declared.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

from domain.errors import AssertFailedError, ConfigurationError
from domain.models import CaseState
from kernel.config import (
    EXIT_ASSERT_FAILED,
    EXIT_CONFIGURATION,
    EXIT_OK,
    LOG_FORMAT,
    RunConfig,
    load_config,
    log_file,
)
from kernel.console import configure, console

if TYPE_CHECKING:
    from domain.models import CaseOutcome, ParameterAssignment

logger = logging.getLogger("benchassert")


def _format_params(assignment: ParameterAssignment) -> str:
    return ", ".join(str(mv) for mv in assignment) or "-"


# ---------------------------------------------------------------------------
# CLI commands
# ---------------------------------------------------------------------------


def cmd_run(classes: list[type], *, verbose: bool) -> int:
    """Check every class and print the outcome."""
    from kernel.runner import run_many

    cases = 0
    types = 0

    def on_type(type_name: str, case_count: int) -> None:
        nonlocal types
        types += 1
        console.type_header(type_name, case_count)

    def on_case(outcome: CaseOutcome) -> None:
        nonlocal cases
        passed = outcome.state is CaseState.PASSED
        if passed:
            cases += 1
        if verbose or not passed:
            console.case_result(
                outcome.benchmark,
                _format_params(outcome.assignment),
                repr(outcome.arguments),
                passed=passed,
            )

    started = time.perf_counter()
    try:
        reports = run_many(classes, on_case=on_case, on_type=on_type)
    except AssertFailedError as exc:
        console.panel(str(exc), title="Assert failed", style="red")
        console.run_summary(
            passed=False,
            types=types,
            cases=cases,
            elapsed=time.perf_counter() - started,
        )
        return EXIT_ASSERT_FAILED

    total_cases = sum(r.cases_run for r in reports)
    console.success(f"All assert methods held over {total_cases} case(s)")
    console.run_summary(
        passed=True,
        types=len(reports),
        cases=total_cases,
        elapsed=time.perf_counter() - started,
    )
    return EXIT_OK


def cmd_list(classes: list[type]) -> int:
    """Print the test cases of every class without running them."""
    import wiring

    total = 0
    for cls in classes:
        harness = wiring.build_harness(cls)
        rows = [
            [case.unit.name, _format_params(case.assignment), repr(case.arguments)]
            for case in harness.test_cases()
        ]
        total += len(rows)
        console.table(["Benchmark", "Params", "Arguments"], rows, title=harness.type_name)
    console.kv({"Classes": str(len(classes)), "Cases": str(total)}, title="Totals")
    return EXIT_OK


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="benchassert",
        description="benchassert -- correctness checks for benchmark classes",
    )
    sub = parser.add_subparsers(dest="command")

    # benchassert run
    run_p = sub.add_parser("run", help="Run every test case of the targets")
    run_p.add_argument("targets", nargs="*", metavar="TARGET", help="module or module:Class")
    run_p.add_argument("--verbose", action="store_true", help="Show every case; debug logging")
    run_p.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    run_p.add_argument("--plain", action="store_true", help="Plain text output")

    # benchassert list
    list_p = sub.add_parser("list", help="List test cases without running them")
    list_p.add_argument("targets", nargs="*", metavar="TARGET", help="module or module:Class")
    list_p.add_argument("--plain", action="store_true", help="Plain text output")

    return parser


def _configure_logging(args: argparse.Namespace, config: RunConfig, root: Path) -> None:
    if getattr(args, "verbose", False):
        level = logging.DEBUG
    elif getattr(args, "quiet", False):
        level = logging.WARNING
    else:
        level = getattr(logging, config.log_level)

    path = log_file(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(filename=str(path), format=LOG_FORMAT, level=level)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return EXIT_CONFIGURATION

    root = Path.cwd()
    # Targets are imported relative to the project directory.
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))

    try:
        config = load_config(root)
    except ConfigurationError as exc:
        configure(backend="plain" if args.plain else "auto")
        console.error(str(exc))
        return EXIT_CONFIGURATION

    # -- Console configuration (TUI output) ---------------------------------
    configure(backend="plain" if args.plain else config.console)

    # -- Logging configuration (file-based audit log) -----------------------
    _configure_logging(args, config, root)

    from kernel.loader import load_targets

    targets = args.targets or list(config.targets)
    if not targets:
        console.error("No targets given and none configured in benchassert.yaml")
        return EXIT_CONFIGURATION

    try:
        classes = load_targets(targets)
        if not classes:
            console.warning("No benchmark classes found")
            return EXIT_OK
        if args.command == "run":
            return cmd_run(classes, verbose=args.verbose)
        return cmd_list(classes)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        console.error(str(exc))
        return EXIT_CONFIGURATION


if __name__ == "__main__":
    sys.exit(main())
