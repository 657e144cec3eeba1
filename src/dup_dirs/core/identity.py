"""Path identity policies: same leaf name vs. same canonical path."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

PathLike = str | os.PathLike[str]

T = TypeVar("T")


def canonical_path(path: PathLike) -> str:
    """Return the lexical absolute form of a path.

    Resolves ``.`` and ``..`` segments and strips trailing separators.
    Symlinks are not followed and the path does not need to exist.
    """
    return os.path.abspath(os.fspath(path))


def _leaf_name_key(path: PathLike) -> str:
    return os.path.normcase(os.path.basename(canonical_path(path)))


def _full_path_key(path: PathLike) -> str:
    return os.path.normcase(canonical_path(path))


@dataclass(frozen=True)
class PathIdentity:
    """Equality and hash strategy over filesystem paths.

    Two paths are equal under a strategy when their keys are equal. Keys
    are case-folded with :func:`os.path.normcase`, so comparison follows
    the host platform's native rules.
    """

    label: str
    key: Callable[[PathLike], str]

    def key_of(self, path: PathLike) -> str:
        """Return the comparison key for a path."""
        return self.key(path)

    def same(self, a: PathLike, b: PathLike) -> bool:
        """Check whether two paths are equal under this strategy."""
        return self.key(a) == self.key(b)

    def hash(self, path: PathLike) -> int:
        """Hash a path consistently with :meth:`same`."""
        return hash(self.key(path))


LEAF_NAME = PathIdentity("leaf-name", _leaf_name_key)
FULL_PATH = PathIdentity("full-path", _full_path_key)


def same_name(a: PathLike, b: PathLike) -> bool:
    """Check whether two paths share the same final segment."""
    return LEAF_NAME.same(a, b)


def hash_by_name(path: PathLike) -> int:
    """Hash a path by its final segment."""
    return LEAF_NAME.hash(path)


def same_path(a: PathLike, b: PathLike) -> bool:
    """Check whether two paths canonicalize to the same location."""
    return FULL_PATH.same(a, b)


def hash_by_path(path: PathLike) -> int:
    """Hash a path by its canonical form."""
    return FULL_PATH.hash(path)


class IdentityIndex(Generic[T]):
    """Lookup table keyed by a :class:`PathIdentity`.

    The first value stored for a key wins; later probes with an equal
    path return it instead of replacing it.
    """

    def __init__(self, identity: PathIdentity) -> None:
        self._identity = identity
        self._values: dict[str, T] = {}

    @property
    def identity(self) -> PathIdentity:
        return self._identity

    def probe(self, path: PathLike, value: T) -> T | None:
        """Return the stored value equal to ``path``, or insert ``value``.

        Returns:
            The previously stored value, or None if ``value`` was inserted.
        """
        key = self._identity.key_of(path)
        existing = self._values.get(key)
        if existing is not None:
            return existing
        self._values[key] = value
        return None

    def get(self, path: PathLike) -> T | None:
        return self._values.get(self._identity.key_of(path))

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str | os.PathLike):
            return False
        return self._identity.key_of(path) in self._values

    def __len__(self) -> int:
        return len(self._values)
