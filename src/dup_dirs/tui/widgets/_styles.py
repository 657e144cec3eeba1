"""Shared size styles and display helpers for TUI widgets."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

from dup_dirs.core.models import SizeState

if TYPE_CHECKING:
    from datetime import datetime

    from dup_dirs.core.size import SizeObservable

SIZE_STYLES: dict[SizeState, str] = {
    SizeState.computed: "cyan",
    SizeState.pending: "dim",
    SizeState.absent: "red",
}


def size_text(size: SizeObservable) -> Text:
    """Right-aligned, state-colored size label."""
    return Text(size.display, style=SIZE_STYLES[size.state], justify="right")


def format_timestamp(value: datetime | None) -> str:
    """Format a timestamp for display, or return dash for None."""
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M")
