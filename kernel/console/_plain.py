"""kernel.console._plain -- Plain-text backend.

print()-based output with no external dependencies.
Used when stdout is not a TTY or ``--plain`` is given.
"""

from __future__ import annotations


class PlainBackend:
    """ConsoleProtocol implementation using only built-in print()."""

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        print(f"  {message}")

    def success(self, message: str) -> None:
        print(f"  [ok] {message}")

    def warning(self, message: str) -> None:
        print(f"  [warn] {message}")

    def error(self, message: str) -> None:
        print(f"  [error] {message}")

    # -- Structured panels --------------------------------------------------

    def panel(self, content: str, *, title: str = "", style: str = "") -> None:
        width = 60
        header = f" {title} " if title else ""
        border = header.center(width, "=")
        print(f"\n{border}")
        for line in content.splitlines():
            print(f"  {line}")
        print("=" * width)

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None:
        if title:
            print(f"\n  {title}:")

        if not headers and not rows:
            return

        # Calculate column widths
        all_rows = [headers, *rows]
        col_widths = [
            max(len(str(row[i])) if i < len(row) else 0 for row in all_rows)
            for i in range(len(headers))
        ]

        header_line = "  " + "  ".join(
            h.ljust(w) for h, w in zip(headers, col_widths, strict=True)
        )
        print(header_line)
        print("  " + "  ".join("-" * w for w in col_widths))

        for row in rows:
            cells = [
                str(row[i]).ljust(col_widths[i]) if i < len(row) else " " * col_widths[i]
                for i in range(len(headers))
            ]
            print("  " + "  ".join(cells))

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        if title:
            print(f"\n  {title}:")
        if not data:
            return
        max_key = max(len(k) for k in data)
        for k, v in data.items():
            print(f"  {k.rjust(max_key)}: {v}")

    # -- Run lifecycle ------------------------------------------------------

    def type_header(self, type_name: str, case_count: int) -> None:
        rule = "━" * 60
        print(f"\n{rule}")
        print(f"  {type_name}  ─  {case_count} case(s)")
        print(rule)

    def case_result(self, benchmark: str, params: str, arguments: str, *, passed: bool) -> None:
        icon = "✓" if passed else "✗"
        print(f"    {icon} {benchmark} [{params}] {arguments}")

    def run_summary(self, *, passed: bool, types: int, cases: int, elapsed: float) -> None:
        icon = "✓" if passed else "✗"
        word = "passed" if passed else "failed"
        print()
        print(
            f"━━ {icon} {word} ── {types} class(es) · "
            f"{cases} case(s) · {elapsed:.2f}s ━━"
        )
