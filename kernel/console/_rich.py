"""kernel.console._rich -- Rich-based TUI backend.

Provides coloured, structured terminal output using the Rich library.
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "info": "blue",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "bench": "bold cyan",
        "dim": "dim",
    }
)


class RichBackend:
    """ConsoleProtocol implementation backed by Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self._con = console if console is not None else Console(theme=_THEME, highlight=False)

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        self._con.print(f"  {escape(message)}", style="info")

    def success(self, message: str) -> None:
        self._con.print(f"  ✓ {escape(message)}", style="success")

    def warning(self, message: str) -> None:
        self._con.print(f"  ⚠ {escape(message)}", style="warning")

    def error(self, message: str) -> None:
        self._con.print(f"  ✗ {escape(message)}", style="error")

    # -- Structured panels --------------------------------------------------

    def panel(self, content: str, *, title: str = "", style: str = "") -> None:
        self._con.print(
            Panel(escape(content), title=title or None, border_style=style or "dim"),
        )

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None:
        t = Table(title=title or None, box=box.SIMPLE, show_edge=False, pad_edge=True)
        for h in headers:
            t.add_column(h)
        for r in rows:
            t.add_row(*(escape(str(c)) for c in r))
        self._con.print(t)

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        t = Table(
            title=title or None,
            box=box.SIMPLE,
            show_header=False,
            show_edge=False,
            pad_edge=True,
        )
        t.add_column("Key", style="bold", justify="right")
        t.add_column("Value")
        for k, v in data.items():
            t.add_row(k, escape(v))
        self._con.print(t)

    # -- Run lifecycle ------------------------------------------------------

    def type_header(self, type_name: str, case_count: int) -> None:
        self._con.print()
        self._con.print(Rule(f" {escape(type_name)} ", style="bold", align="left"))
        self._con.print(f"  [dim]{case_count} case(s)[/]")

    def case_result(self, benchmark: str, params: str, arguments: str, *, passed: bool) -> None:
        icon = "[success]✓[/]" if passed else "[error]✗[/]"
        self._con.print(
            f"    {icon} [bench]{escape(benchmark)}[/] "
            f"[dim]\\[{escape(params)}][/] {escape(arguments)}"
        )

    def run_summary(self, *, passed: bool, types: int, cases: int, elapsed: float) -> None:
        icon = "✓" if passed else "✗"
        word = "passed" if passed else "failed"
        style = "green" if passed else "red"
        self._con.print()
        self._con.print(
            Rule(
                f" {icon} {word} ── {types} class(es) · {cases} case(s) "
                f"· {elapsed:.2f}s ",
                style=style,
            ),
        )
