"""Duplicate detection: pair same-named children across roots."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from dup_dirs.core.errors import EnumerationError
from dup_dirs.core.filtering import ChildFilter, FilterConfig
from dup_dirs.core.identity import FULL_PATH, LEAF_NAME, IdentityIndex
from dup_dirs.core.models import DirectoryRef, DuplicatePair

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dup_dirs.core.identity import PathLike

logger = logging.getLogger(__name__)


class DuplicateDetector:
    """Finds immediate subdirectories that share a name across roots.

    Roots are scanned in the given order and children in filesystem
    enumeration order. The first child seen with a given name becomes the
    ``first`` side of every later pair for that name, so N roots sharing
    one child name yield N-1 pairs rather than every combination.
    """

    def __init__(self, config: FilterConfig | None = None) -> None:
        """Initialize with an optional child filter configuration.

        Args:
            config: Filtering rules. Defaults to FilterConfig() if None,
                which compares every child.
        """
        self._filter = ChildFilter(config or FilterConfig())

    def detect(self, roots: Iterable[PathLike]) -> tuple[DuplicatePair, ...]:
        """Pair same-named immediate subdirectories of distinct roots.

        Args:
            roots: Root directories, in priority order. A root listed more
                than once is scanned once.

        Returns:
            Pairs in discovery order. Empty for fewer than two roots.

        Raises:
            EnumerationError: If a root's children cannot be listed. No
                partial result is returned.
        """
        unique = self._unique_roots(roots)
        if len(unique) < 2:
            logger.debug("Fewer than two roots, nothing to compare")
            return ()

        seen: IdentityIndex[DirectoryRef] = IdentityIndex(LEAF_NAME)
        pairs: list[DuplicatePair] = []
        for root in unique:
            for child in self._children(root):
                existing = seen.probe(child, child)
                if existing is not None:
                    pairs.append(DuplicatePair(existing, child))

        logger.debug("Found %d duplicate pair(s) across %d roots", len(pairs), len(unique))
        return tuple(pairs)

    @staticmethod
    def _unique_roots(roots: Iterable[PathLike]) -> list[DirectoryRef]:
        index: IdentityIndex[DirectoryRef] = IdentityIndex(FULL_PATH)
        unique: list[DirectoryRef] = []
        for root in roots:
            ref = DirectoryRef.of(root)
            if index.probe(ref, ref) is None:
                unique.append(ref)
        return unique

    def _children(self, root: DirectoryRef) -> list[DirectoryRef]:
        """List accepted immediate subdirectories of ``root``.

        A root that no longer exists has no children.
        """
        if not root.exists():
            logger.debug("Root %s no longer exists, skipping", root)
            return []

        children: list[DirectoryRef] = []
        try:
            with os.scandir(root.path) as it:
                for entry in it:
                    if entry.is_dir() and self._filter.accepts(root.path, entry.name):
                        children.append(DirectoryRef(Path(entry.path)))
        except FileNotFoundError:
            logger.debug("Root %s vanished while listing, skipping", root)
            return []
        except OSError as exc:
            raise EnumerationError(root.path, exc) from exc
        return children


def detect(
    roots: Iterable[PathLike],
    config: FilterConfig | None = None,
) -> tuple[DuplicatePair, ...]:
    """Run :meth:`DuplicateDetector.detect` with a one-off detector."""
    return DuplicateDetector(config).detect(roots)
