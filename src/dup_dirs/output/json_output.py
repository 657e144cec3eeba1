"""JSON export renderer."""

from __future__ import annotations

import dataclasses
import json
import sys
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing import TextIO

    from dup_dirs.core.models import ScanReport, ScanStats


class _PathEncoder(json.JSONEncoder):
    """Writes paths as plain strings. SizeState is a StrEnum and needs nothing."""

    def default(self, o: object) -> object:
        if isinstance(o, PurePath):
            return str(o)
        return super().default(o)


class JsonRenderer:
    """Writes scan reports as JSON documents.

    ``render`` emits ``{"roots": [...], "pairs": [...], "stats": {...}}``
    where each pair holds its shared name and a summary of both sides.
    Pending sizes appear as ``null``. ``render_stats`` emits the stats
    object alone.
    """

    def __init__(self, output: TextIO | None = None, *, indent: int = 2) -> None:
        """Initialize with an optional output stream.

        Args:
            output: Destination stream. Defaults to sys.stdout.
            indent: Indentation passed to json.dump.
        """
        self._output = output or sys.stdout
        self._indent = indent

    def render(self, report: ScanReport) -> None:
        self._write(dataclasses.asdict(report))

    def render_stats(self, stats: ScanStats) -> None:
        self._write(dataclasses.asdict(stats))

    def _write(self, data: dict[str, Any]) -> None:
        json.dump(data, self._output, cls=_PathEncoder, indent=self._indent)
        self._output.write("\n")
