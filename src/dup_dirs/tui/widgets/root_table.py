"""Table widget listing tracked root directories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.widgets import DataTable

from dup_dirs.tui.widgets._styles import format_timestamp, size_text

if TYPE_CHECKING:
    from dup_dirs.core.roots import RootDirectorySet


class RootTable(DataTable):
    """One row per root directory, keyed by its path."""

    DEFAULT_CSS = """
    RootTable {
        height: 1fr;
        border: solid $accent;
    }
    """

    def __init__(self) -> None:
        super().__init__(cursor_type="row", zebra_stripes=True)
        self.border_title = "Roots"

    def prepare(self) -> None:
        self.add_columns("Root", "Size", "Modified", "Created")

    def show_roots(self, roots: RootDirectorySet) -> None:
        """Rebuild all rows, keeping the cursor on the same row index."""
        row = self.cursor_row
        self.clear()
        for entry in roots:
            self.add_row(
                Text(str(entry.path)),
                size_text(entry.size),
                format_timestamp(entry.last_modified),
                format_timestamp(entry.created),
                key=str(entry.path),
            )
        if self.row_count:
            self.move_cursor(row=min(row, self.row_count - 1))

    def highlighted_path(self) -> str | None:
        """Path of the row under the cursor, or None if the table is empty."""
        if self.row_count == 0:
            return None
        row_key = self.coordinate_to_cell_key(self.cursor_coordinate).row_key
        return row_key.value
