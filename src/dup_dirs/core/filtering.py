"""Child directory filtering: hidden names, gitignore, glob patterns."""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatch
from typing import TYPE_CHECKING

from pathspec import GitIgnoreSpec

if TYPE_CHECKING:
    from pathlib import Path

GITIGNORE_FILENAME = ".gitignore"
HIDDEN_PREFIX = "."


@dataclass(frozen=True)
class FilterConfig:
    """Immutable configuration for choosing which children are compared.

    The defaults let every immediate subdirectory through.
    Filters are applied in order: hidden -> gitignore -> include -> exclude.
    """

    include_hidden: bool = True
    respect_gitignore: bool = False
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()

    @property
    def is_passthrough(self) -> bool:
        """True when no filter layer is active."""
        return (
            self.include_hidden
            and not self.respect_gitignore
            and not self.include_patterns
            and not self.exclude_patterns
        )


class ChildFilter:
    """Decides which immediate subdirectories of a root take part.

    Patterns match the child's leaf name. Gitignore rules are read from
    the root's own ``.gitignore`` only.
    """

    def __init__(self, config: FilterConfig) -> None:
        self._config = config
        self._gitignore_cache: dict[Path, GitIgnoreSpec | None] = {}

    @property
    def config(self) -> FilterConfig:
        return self._config

    def accepts(self, root: Path, name: str) -> bool:
        """Check whether child ``name`` of ``root`` passes every layer."""
        if self._config.is_passthrough:
            return True
        if not self._config.include_hidden and self._is_hidden(name):
            return False
        if self._config.respect_gitignore and self._is_gitignored(root, name):
            return False
        if not self._matches_include(name):
            return False
        return not self._matches_exclude(name)

    @staticmethod
    def _is_hidden(name: str) -> bool:
        """Check if a directory name is hidden (starts with '.')."""
        return name.startswith(HIDDEN_PREFIX)

    def _is_gitignored(self, root: Path, name: str) -> bool:
        spec = self._gitignore_for(root)
        if spec is None:
            return False
        return spec.match_file(name + "/")

    def _gitignore_for(self, root: Path) -> GitIgnoreSpec | None:
        if root not in self._gitignore_cache:
            gitignore_path = root / GITIGNORE_FILENAME
            spec = None
            if gitignore_path.is_file():
                try:
                    lines = gitignore_path.read_text().splitlines()
                except (OSError, UnicodeDecodeError):
                    lines = []
                spec = GitIgnoreSpec.from_lines(lines)
            self._gitignore_cache[root] = spec
        return self._gitignore_cache[root]

    def _matches_include(self, name: str) -> bool:
        """Check if name matches any include pattern. True if no patterns defined."""
        if not self._config.include_patterns:
            return True
        return any(fnmatch(name, p) for p in self._config.include_patterns)

    def _matches_exclude(self, name: str) -> bool:
        """Check if name matches any exclude pattern. False if no patterns defined."""
        if not self._config.exclude_patterns:
            return False
        return any(fnmatch(name, p) for p in self._config.exclude_patterns)
