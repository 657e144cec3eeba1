"""Textual TUI application for managing roots and reviewing duplicates."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from rich.markup import escape
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Footer, Header, Input

from dup_dirs.core.errors import EnumerationError
from dup_dirs.tui.widgets.pair_table import PairTable
from dup_dirs.tui.widgets.root_table import RootTable
from dup_dirs.tui.widgets.status_bar import StatusBar

if TYPE_CHECKING:
    from collections.abc import Callable

    from dup_dirs.config import Settings
    from dup_dirs.core.pairs import DuplicatePairSet
    from dup_dirs.core.roots import RootDirectorySet
    from dup_dirs.core.scan import Scanner
    from dup_dirs.core.size import SizeObservable


class DupDirsApp(App[None]):
    """Interactive TUI over a root set and its duplicate pairs.

    Collection changes may arrive from size worker threads. They are
    turned into messages, which are safe to post from any thread, and
    widgets are only touched by the message handlers.
    """

    CSS_PATH = "styles/app.tcss"
    TITLE = "Duplicate Directory Finder"

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit"),
        Binding("r", "rescan", "Rescan"),
        Binding("a", "add_root", "Add Root"),
        Binding("d", "remove_root", "Remove Root"),
        Binding("x", "dismiss_pair", "Dismiss Pair"),
        Binding("c", "clear_roots", "Clear Roots"),
        Binding("i", "set_initial_dir", "Set Initial Dir"),
        Binding("escape", "focus_roots", "Back", show=False),
    ]

    def __init__(self, scanner: Scanner, *, settings: Settings | None = None) -> None:
        super().__init__()
        self._scanner = scanner
        self._default_dir = settings.default_dir if settings is not None else None
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def default_dir(self) -> Path | None:
        """Directory offered in the add-root input, as last set in this session."""
        return self._default_dir

    @property
    def roots(self) -> RootDirectorySet:
        return self._scanner.roots

    @property
    def pairs(self) -> DuplicatePairSet:
        return self._scanner.pairs

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main-container"):
            yield RootTable()
            yield PairTable()
            yield Input(
                value=self._initial_input(),
                placeholder="Path of a directory to add as a root",
                id="add-root",
            )
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(RootTable).prepare()
        self.query_one(PairTable).prepare()
        self._unsubscribers = [
            self.roots.subscribe(self._on_roots_changed),
            self.pairs.subscribe(self._on_pairs_changed),
        ]
        self._show_roots()
        self._show_pairs()
        self.query_one(RootTable).focus()

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        for entry in self.roots:
            entry.size.unsubscribe(self._on_root_size)

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Disable rescanning until at least two roots are tracked."""
        if action == "rescan":
            return self._scanner.can_scan()
        return True

    # -- actions ----------------------------------------------------------

    def action_rescan(self) -> None:
        """Clear the pair list and run detection over the current roots."""
        if not self._scanner.can_scan():
            self.notify("Add at least two root directories first.", severity="warning")
            return
        try:
            found = self._scanner.rescan()
        except EnumerationError as exc:
            self.notify(escape(str(exc)), title="Scan failed", severity="error")
            return
        self.notify(f"Found {len(found)} duplicate pair(s).")

    def action_add_root(self) -> None:
        """Move focus to the add-root input."""
        self.query_one("#add-root", Input).focus()

    def action_remove_root(self) -> None:
        """Stop tracking the highlighted root directory."""
        path = self.query_one(RootTable).highlighted_path()
        if path is not None:
            self.roots.remove(path)

    def action_dismiss_pair(self) -> None:
        """Drop the highlighted pair from the list."""
        pair = self.query_one(PairTable).highlighted_pair()
        if pair is not None:
            self.pairs.remove_exact(pair)

    def action_clear_roots(self) -> None:
        """Stop tracking every root and forget detected pairs."""
        self.roots.clear()
        self.pairs.clear()

    def action_set_initial_dir(self) -> None:
        """Offer the highlighted root as the starting directory from now on."""
        path = self.query_one(RootTable).highlighted_path()
        if path is None:
            self.notify("Highlight a root first.", severity="warning")
            return
        self._default_dir = Path(path)
        field = self.query_one("#add-root", Input)
        if not field.value:
            field.value = path
        self.notify(f"Initial directory set to {escape(path)}")

    def action_focus_roots(self) -> None:
        self.query_one(RootTable).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Add the typed path as a root directory."""
        path = event.value.strip()
        if not path:
            return
        if self.roots.contains(path):
            self.notify(f"Already tracking {escape(path)}", severity="warning")
        elif not self.roots.add(path):
            self.notify(f"Not a directory: {escape(path)}", severity="warning")
            return
        event.input.value = ""
        self.query_one(RootTable).focus()

    # -- collection callbacks --------------------------------------------

    class RootsChanged(Message):
        """The root set or one of its sizes changed."""

    class PairsChanged(Message):
        """The pair set changed; re-read all of it."""

    def _on_roots_changed(self, roots: RootDirectorySet) -> None:
        self.post_message(self.RootsChanged())

    def _on_pairs_changed(self, pairs: DuplicatePairSet) -> None:
        self.post_message(self.PairsChanged())

    def _on_root_size(self, size: SizeObservable) -> None:
        self.post_message(self.RootsChanged())

    @on(RootsChanged)
    def refresh_roots(self) -> None:
        self._show_roots()

    @on(PairsChanged)
    def refresh_pairs(self) -> None:
        self._show_pairs()

    def _show_roots(self) -> None:
        for entry in self.roots:
            entry.size.subscribe(self._on_root_size)
        self.query_one(RootTable).show_roots(self.roots)
        self.query_one(StatusBar).show_counts(self.roots, self.pairs)
        self.refresh_bindings()

    def _show_pairs(self) -> None:
        self.query_one(PairTable).show_pairs(self.pairs)
        self.query_one(StatusBar).show_counts(self.roots, self.pairs)

    def _initial_input(self) -> str:
        if self._default_dir is None:
            return ""
        return str(self._default_dir)
