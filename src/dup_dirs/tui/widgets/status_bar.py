"""Status bar widget showing root and pair counts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Static

if TYPE_CHECKING:
    from dup_dirs.core.pairs import DuplicatePairSet
    from dup_dirs.core.roots import RootDirectorySet


class StatusBar(Static):
    """Bottom bar displaying root count, pair count, and pending sizes."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: 1;
        background: $boost;
        color: $text;
        padding: 0 1;
    }
    """

    def show_counts(self, roots: RootDirectorySet, pairs: DuplicatePairSet) -> None:
        """Refresh the bar from the current collections."""
        pending = sum(
            1
            for entry in pairs
            for side in (entry.first, entry.second)
            if side.size.size is None
        )
        content = f"{len(roots)} roots | [bold]{len(pairs)}[/bold] duplicate pairs"
        if pending:
            content += f" | [dim]{pending} sizes pending[/dim]"
        self.update(content)
