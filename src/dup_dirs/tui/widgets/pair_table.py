"""Table widget listing detected duplicate pairs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.widgets import DataTable

from dup_dirs.tui.widgets._styles import size_text

if TYPE_CHECKING:
    from dup_dirs.core.models import DuplicatePair
    from dup_dirs.core.pairs import DuplicatePairSet


def _row_key(pair: DuplicatePair) -> str:
    return repr(tuple(str(p) for p in pair.paths))


class PairTable(DataTable):
    """One row per duplicate pair: the shared name, both parents, both sizes."""

    DEFAULT_CSS = """
    PairTable {
        height: 2fr;
        border: solid $accent;
    }
    """

    def __init__(self) -> None:
        super().__init__(cursor_type="row", zebra_stripes=True)
        self.border_title = "Duplicates"
        self._pairs_by_key: dict[str, DuplicatePair] = {}

    def prepare(self) -> None:
        self.add_columns("Name", "First root", "Size", "Duplicate root", "Size")

    def show_pairs(self, pairs: DuplicatePairSet) -> None:
        """Rebuild all rows, keeping the cursor on the same row index."""
        row = self.cursor_row
        self.clear()
        self._pairs_by_key = {}
        for entry in pairs:
            key = _row_key(entry.pair)
            self._pairs_by_key[key] = entry.pair
            self.add_row(
                Text(entry.name),
                Text(str(entry.first.path.parent)),
                size_text(entry.first.size),
                Text(str(entry.second.path.parent)),
                size_text(entry.second.size),
                key=key,
            )
        if self.row_count:
            self.move_cursor(row=min(row, self.row_count - 1))

    def highlighted_pair(self) -> DuplicatePair | None:
        """Pair under the cursor, or None if the table is empty."""
        if self.row_count == 0:
            return None
        row_key = self.coordinate_to_cell_key(self.cursor_coordinate).row_key
        if row_key.value is None:
            return None
        return self._pairs_by_key.get(row_key.value)
