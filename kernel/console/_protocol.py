"""kernel.console._protocol -- ConsoleProtocol definition.

Pure standard-library typing.Protocol for the benchassert terminal output system.
No external dependencies allowed in this file.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleProtocol(Protocol):
    """benchassert terminal output protocol.

    Three layers of methods:

    **General messages** -- usable from any module::

        console.info("Loaded 3 classes")
        console.success("All checks passed")
        console.warning("No benchmark methods found")
        console.error("Assert failed")

    **Structured panels** -- tables, key-value displays, panels::

        console.panel("Test failed on concat ...", title="Assert failed")
        console.table(["Benchmark", "Params"], [["concat", "count=1"]], title="Cases")
        console.kv({"Cases": "6", "Benchmarks": "2"})

    **Run lifecycle** -- used by kernel/runner.py::

        console.type_header("benchmarks.string_suite.StringSuite", 12)
        console.case_result("concat", "count=1", "('a', 'b')", passed=True)
        console.run_summary(passed=True, types=1, cases=12, elapsed=0.02)
    """

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        """Informational message."""
        ...

    def success(self, message: str) -> None:
        """Success / positive-outcome message."""
        ...

    def warning(self, message: str) -> None:
        """Warning message."""
        ...

    def error(self, message: str) -> None:
        """Error message."""
        ...

    # -- Structured panels --------------------------------------------------

    def panel(self, content: str, *, title: str = "", style: str = "") -> None:
        """Display *content* in a bordered panel."""
        ...

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None:
        """Display a table with *headers* and *rows*."""
        ...

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        """Display key-value pairs."""
        ...

    # -- Run lifecycle ------------------------------------------------------

    def type_header(self, type_name: str, case_count: int) -> None:
        """Display the banner before a class is checked."""
        ...

    def case_result(self, benchmark: str, params: str, arguments: str, *, passed: bool) -> None:
        """Display one finished test case (shown in verbose runs)."""
        ...

    def run_summary(self, *, passed: bool, types: int, cases: int, elapsed: float) -> None:
        """Display the end-of-run summary line."""
        ...
