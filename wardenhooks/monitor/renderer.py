"""Rich terminal renderer for transition rules and dispatch reports.

Color scheme
------------
- green   : SUCCEEDED, hooks that ran cleanly
- red     : FAILED, failed hooks
- yellow  : ERRORED
- dim     : no previous cycle
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from wardenhooks.core.evaluator import select_categories
from wardenhooks.models.outcomes import ExecutionState
from wardenhooks.models.reports import DispatchReport

_STATE_ICONS: dict[ExecutionState | None, str] = {
    ExecutionState.SUCCEEDED: "[green]SUCCEEDED[/green]",
    ExecutionState.FAILED: "[bold red]FAILED[/bold red]",
    ExecutionState.ERRORED: "[yellow]ERRORED[/yellow]",
    None: "[dim]none[/dim]",
}

_PREVIOUS_STATES: tuple[ExecutionState | None, ...] = (None, *ExecutionState)


class HookRenderer:
    """Renders transition tables and ``DispatchReport`` as Rich output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_rules(self) -> Table:
        """Table of every (previous, current) pair and the categories it fires."""
        table = Table(title="Hook transition rules", header_style="bold cyan")
        table.add_column("Previous", justify="center")
        table.add_column("Current", justify="center")
        table.add_column("Fires")

        for previous in _PREVIOUS_STATES:
            for current in ExecutionState:
                table.add_row(
                    _STATE_ICONS[previous],
                    _STATE_ICONS[current],
                    self._categories_text(previous, current),
                )
        return table

    def render_transition(
        self, previous: ExecutionState | None, current: ExecutionState
    ) -> Table:
        """Table of the categories one transition fires, in firing order."""
        table = Table(
            title=f"{previous.value if previous else 'none'} -> {current.value}",
            header_style="bold cyan",
        )
        table.add_column("#", style="dim", justify="right")
        table.add_column("Category")
        table.add_column("Slots")

        for i, category in enumerate(select_categories(previous, current), start=1):
            table.add_row(
                str(i),
                f"[bold]{category.value}[/bold]",
                f"{category.value}, {category.value}_async",
            )
        return table

    def render_report(self, report: DispatchReport) -> Panel:
        """Panel summarizing one dispatched cycle."""
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("Hook")
        table.add_column("Slot", style="dim")
        table.add_column("Status", justify="center")

        for invocation in report.invoked:
            failure = report.failure_for(invocation)
            if failure is None:
                table.add_row(
                    invocation.hook_name, invocation.slot.value, "[green]ok[/green]"
                )
            else:
                table.add_row(
                    invocation.hook_name,
                    invocation.slot.value,
                    f"[bold red]{failure.error_type}[/bold red] {failure.error_message}",
                )

        summary = "  |  ".join(
            [
                f"[bold]Previous:[/bold] {_STATE_ICONS[report.previous_state]}",
                f"[bold]Current:[/bold] {_STATE_ICONS[report.state]}",
                f"[bold]Fired:[/bold] "
                + (", ".join(c.value for c in report.fired_categories) or "-"),
            ]
        )
        if report.aborted:
            summary += "  |  [bold red]ABORTED[/bold red]"

        return Panel(
            Group(table, Text(""), Text.from_markup(summary)),
            title=f"[bold]Watcher {report.watcher_name}[/bold]",
            border_style="blue",
        )

    def print_rules(self) -> None:
        self.console.print(self.render_rules())

    def print_transition(
        self, previous: ExecutionState | None, current: ExecutionState
    ) -> None:
        self.console.print(self.render_transition(previous, current))

    def print_report(self, report: DispatchReport) -> None:
        self.console.print(self.render_report(report))

    @staticmethod
    def _categories_text(
        previous: ExecutionState | None, current: ExecutionState
    ) -> str:
        parts = []
        for category in select_categories(previous, current):
            style = "bold" if category.is_first_time else ""
            parts.append(f"[{style}]{category.value}[/{style}]" if style else category.value)
        return ", ".join(parts)
