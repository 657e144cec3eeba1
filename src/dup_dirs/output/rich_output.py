"""Rich console renderer (default output mode)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from dup_dirs.core.models import SizeState
from dup_dirs.core.size import format_size

if TYPE_CHECKING:
    from pathlib import Path

    from dup_dirs.core.models import DirectorySummary, ScanReport, ScanStats

SIZE_STYLES: dict[SizeState, str] = {
    SizeState.computed: "cyan",
    SizeState.pending: "dim",
    SizeState.absent: "red",
}


def size_cell(summary: DirectorySummary) -> str:
    """Return Rich markup for a directory's size."""
    style = SIZE_STYLES[summary.state]
    label = summary.size_display
    if summary.state == SizeState.absent:
        label += " (missing)"
    return f"[{style}]{label}[/{style}]"


class RichRenderer:
    """Renders scan reports to a Rich console.

    The report prints as a tree of tracked roots followed by a table with
    one row per duplicate pair. The first-seen directory of each name is
    the left column; later copies are on the right.
    """

    def __init__(self, console: Console | None = None, *, raw_bytes: bool = False) -> None:
        """Initialize with an optional Rich console.

        Args:
            console: Rich Console instance. Defaults to Console() if None.
            raw_bytes: Show totals as plain byte counts.
        """
        self._console = console or Console()
        self._raw_bytes = raw_bytes

    def render(self, report: ScanReport) -> None:
        """Render roots, pairs, and a summary line."""
        self._console.print(self._build_roots_tree(report.roots))
        if not report.pairs:
            self._console.print("[dim]No duplicate directories found.[/dim]")
        else:
            self._console.print(self._build_table(report))
        self.render_stats(report.stats)

    def render_stats(self, stats: ScanStats) -> None:
        """Render summary statistics."""
        self._console.print(
            f"[bold]{stats.total_pairs}[/bold] duplicate pairs "
            f"({stats.distinct_names} names) across "
            f"[bold]{stats.total_roots}[/bold] roots, "
            f"[yellow]{format_size(stats.duplicated_bytes, raw_bytes=self._raw_bytes)}"
            f"[/yellow] in later copies"
        )

    @staticmethod
    def _build_roots_tree(roots: tuple[Path, ...]) -> Tree:
        tree = Tree(f"[bold]{len(roots)} roots[/bold]")
        for root in roots:
            tree.add(escape(str(root)))
        return tree

    @staticmethod
    def _build_table(report: ScanReport) -> Table:
        table = Table(title="Duplicate directories", title_style="bold")
        table.add_column("Name", style="bold", no_wrap=True)
        table.add_column("First root", overflow="fold")
        table.add_column("Size", justify="right", no_wrap=True)
        table.add_column("Duplicate root", overflow="fold")
        table.add_column("Size", justify="right", no_wrap=True)

        for pair in report.pairs:
            table.add_row(
                escape(pair.name),
                escape(str(pair.first.path.parent)),
                size_cell(pair.first),
                escape(str(pair.second.path.parent)),
                size_cell(pair.second),
            )
        return table
