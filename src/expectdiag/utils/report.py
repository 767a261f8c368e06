from typing import List, Optional
from rich.console import Console, Group
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from ..parsing.annotations import ExpectedError
from .state import CheckState

# Theme Colors (Mosaic)
C_TEXT = "#191A1A"
C_ACCENT1 = "#45d3ee" # Cyan
C_ACCENT2 = "#9FBFC5" # Muted Blue
C_ACCENT3 = "#94bfc1" # Teal
C_ACCENT4 = "#fecd91" # Orange
C_PASS = "bold green"
C_FAIL = "bold red"


def expectations_table(expected: List[ExpectedError], title: str = "Expected Diagnostics") -> Table:
    table = Table(
        title=title,
        title_style=f"bold {C_ACCENT3}",
        header_style=f"bold {C_ACCENT1}",
        box=None,
        expand=True,
    )
    table.add_column("Line", style=f"bold {C_ACCENT1}", justify="right", no_wrap=True)
    table.add_column("Kind", style=f"bold {C_ACCENT4}", no_wrap=True)
    table.add_column("Message", style=C_ACCENT3)

    for ee in expected:
        table.add_row(str(ee.line_num), Text(ee.kind or "-"), Text(ee.msg))
    return table


def result_panel(state: CheckState) -> Panel:
    """Summary of the latest check: annotation errors, misses and surprises."""
    title = Text(f" {state.source_path} ", style="bold italic")
    if state.cfg:
        title.append(f"[{state.cfg}] ", style=C_ACCENT4)

    if state.annotation_error is not None:
        body = Text(f"Annotation Error: {state.annotation_error}", style=C_FAIL)
        return Panel(body, title=title, title_align="left", border_style="red")

    result = state.result
    if result is None:
        body = Text(state.compiler_output or "Not checked yet.")
        return Panel(body, title=title, title_align="left", border_style=C_ACCENT2)

    parts = []
    if result.not_found:
        parts.append(expectations_table(result.not_found, title="Expected but not found"))

    if result.unexpected:
        table = Table(
            title="Unexpected diagnostics",
            title_style=f"bold {C_ACCENT3}",
            header_style=f"bold {C_ACCENT1}",
            box=None,
            expand=True,
        )
        table.add_column("Line", style=f"bold {C_ACCENT1}", justify="right", no_wrap=True)
        table.add_column("Severity", style=f"bold {C_ACCENT4}", no_wrap=True)
        table.add_column("Message", style=C_ACCENT3)
        for diag in result.unexpected:
            severity = f"{diag.severity}[{diag.code}]" if diag.code else diag.severity
            table.add_row(str(diag.line), Text(severity), Text(diag.message))
        parts.append(table)

    summary = Text(
        f"{len(result.matched)} matched, {len(result.not_found)} not found, "
        f"{len(result.unexpected)} unexpected"
    )
    if state.passed:
        summary.append("  PASS", style=C_PASS)
    else:
        summary.append("  FAIL", style=C_FAIL)
    parts.append(summary)

    return Panel(
        Group(*parts),
        title=title,
        title_align="left",
        border_style=C_ACCENT2 if state.passed else "red",
        padding=(1, 2),
    )


def display_expectations(expected: List[ExpectedError], console: Optional[Console] = None):
    console = console or Console()
    console.print(expectations_table(expected))


def display_result(state: CheckState, console: Optional[Console] = None):
    console = console or Console()
    console.print(result_panel(state))
