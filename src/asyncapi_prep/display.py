"""Rich-based terminal output for command results.

Uses a module-level :class:`~rich.console.Console` singleton so that all
output of a run shares one formatting context.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from src.asyncapi_prep.report import ItemOutcome, PipelineReport

# ---------------------------------------------------------------------------
# Module-level Console singleton
# ---------------------------------------------------------------------------

_console = Console()

_OUTCOME_STYLES = {
    ItemOutcome.OK: "green",
    ItemOutcome.SKIPPED: "yellow",
    ItemOutcome.IGNORED: "dim",
}


def print_report(report: PipelineReport, output_path: str | None = None) -> None:
    """Print per-stage counts and every skipped item of *report*.

    Parameters
    ----------
    report:
        The report returned by a pipeline driver.
    output_path:
        Where the document was written, shown in the table title.
    """
    title = f"{report.command}"
    if output_path:
        title += f" -> {output_path}"

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Stage", style="cyan", min_width=12)
    for outcome in ItemOutcome:
        table.add_column(outcome.value.capitalize(), justify="right", min_width=8)

    for stage, counts in report.counts().items():
        table.add_row(
            stage,
            *(
                f"[{_OUTCOME_STYLES[outcome]}]{counts[outcome.value]}[/{_OUTCOME_STYLES[outcome]}]"
                for outcome in ItemOutcome
            ),
        )
    _console.print(table)

    skipped = report.skipped
    if skipped:
        skip_table = Table(title="Skipped", show_header=True, header_style="bold yellow")
        skip_table.add_column("Stage", style="cyan")
        skip_table.add_column("Item")
        skip_table.add_column("Reason", style="yellow")
        for result in skipped:
            skip_table.add_row(result.stage, Text(result.item), Text(result.reason))
        _console.print(skip_table)

