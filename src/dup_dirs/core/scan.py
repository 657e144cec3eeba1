"""Scan orchestrator tying roots, detection, and pairs together."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dup_dirs.core.detector import DuplicateDetector
from dup_dirs.core.models import ScanReport, ScanStats

if TYPE_CHECKING:
    from dup_dirs.core.filtering import FilterConfig
    from dup_dirs.core.models import DuplicatePair
    from dup_dirs.core.pairs import DuplicatePairSet
    from dup_dirs.core.roots import RootDirectorySet

logger = logging.getLogger(__name__)

MIN_ROOTS = 2


class Scanner:
    """Runs detection over a root set and republishes into a pair set.

    A rescan clears the pair set, collapses duplicate roots, detects,
    and repopulates. Each step notifies subscribers on its own; there is
    no transaction around them.
    """

    def __init__(
        self,
        roots: RootDirectorySet,
        pairs: DuplicatePairSet,
        *,
        filter_config: FilterConfig | None = None,
    ) -> None:
        self._roots = roots
        self._pairs = pairs
        self._detector = DuplicateDetector(filter_config)

    @property
    def roots(self) -> RootDirectorySet:
        return self._roots

    @property
    def pairs(self) -> DuplicatePairSet:
        return self._pairs

    def can_scan(self) -> bool:
        """True when enough roots are tracked to find anything."""
        return len(self._roots) >= MIN_ROOTS

    def rescan(self) -> tuple[DuplicatePair, ...]:
        """Replace the pair set's contents with a fresh detection result.

        Returns:
            The detected pairs.

        Raises:
            EnumerationError: If a root cannot be listed. The pair set is
                left empty.
        """
        self._pairs.clear()
        if not self.can_scan():
            logger.debug("Only %d root(s) tracked, skipping detection", len(self._roots))
            return ()

        self._roots.dedupe()
        found = self._detector.detect(self._roots.paths())
        self._pairs.add_all(found)
        return found

    def report(self, *, timeout: float | None = None) -> ScanReport:
        """Snapshot the current pairs, waiting for their sizes first.

        Args:
            timeout: Per-directory wait limit. Sizes still pending after it
                are reported as pending.
        """
        self._pairs.wait(timeout)
        summaries = self._pairs.summaries()
        roots = self._roots.paths()
        return ScanReport(
            roots=roots,
            pairs=summaries,
            stats=ScanStats.from_pairs(summaries, total_roots=len(roots)),
        )
