"""Renderer protocol for scan output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from dup_dirs.core.models import ScanReport, ScanStats


@runtime_checkable
class Renderer(Protocol):
    """Protocol for rendering scan reports.

    Implementations must provide a render method that takes a ScanReport
    and writes output to the appropriate destination (console, file, etc.).
    """

    def render(self, report: ScanReport) -> None:
        """Render the scan report."""
        ...

    def render_stats(self, stats: ScanStats) -> None:
        """Render summary statistics only."""
        ...
