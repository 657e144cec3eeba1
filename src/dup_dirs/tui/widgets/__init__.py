"""TUI widgets for roots and duplicate pairs."""

from dup_dirs.tui.widgets.pair_table import PairTable
from dup_dirs.tui.widgets.root_table import RootTable
from dup_dirs.tui.widgets.status_bar import StatusBar

__all__ = ["PairTable", "RootTable", "StatusBar"]
