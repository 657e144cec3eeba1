"""Tests for dup_dirs.core.filtering."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from typing import TYPE_CHECKING

import pytest

from dup_dirs.core.filtering import ChildFilter, FilterConfig

if TYPE_CHECKING:
    from pathlib import Path


class TestFilterConfig:
    """Verify FilterConfig frozen dataclass."""

    def test_default_values(self) -> None:
        config = FilterConfig()
        assert config.include_hidden is True
        assert config.respect_gitignore is False
        assert config.include_patterns == ()
        assert config.exclude_patterns == ()
        assert config.is_passthrough

    def test_frozen_immutable(self) -> None:
        config = FilterConfig()
        with pytest.raises(FrozenInstanceError):
            config.include_hidden = False  # type: ignore[misc]

    @pytest.mark.parametrize(
        "config",
        [
            FilterConfig(include_hidden=False),
            FilterConfig(respect_gitignore=True),
            FilterConfig(include_patterns=("src*",)),
            FilterConfig(exclude_patterns=("build",)),
        ],
    )
    def test_any_active_layer_is_not_passthrough(self, config: FilterConfig) -> None:
        assert not config.is_passthrough

    def test_passthrough_filter_skips_gitignore_lookup(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("build/\n")
        child_filter = ChildFilter(FilterConfig())
        assert child_filter.accepts(tmp_path, "build")
        assert child_filter._gitignore_cache == {}


class TestChildFilterHidden:
    """Test hidden directory filtering."""

    def test_hidden_accepted_by_default(self, tmp_path: Path) -> None:
        assert ChildFilter(FilterConfig()).accepts(tmp_path, ".cache")

    def test_hidden_rejected_when_disabled(self, tmp_path: Path) -> None:
        child_filter = ChildFilter(FilterConfig(include_hidden=False))
        assert not child_filter.accepts(tmp_path, ".cache")
        assert child_filter.accepts(tmp_path, "cache")


class TestChildFilterGitignore:
    """Test the root's own .gitignore."""

    def test_ignored_directory_rejected(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("build/\n*.egg-info\n")
        child_filter = ChildFilter(FilterConfig(respect_gitignore=True))
        assert not child_filter.accepts(tmp_path, "build")
        assert not child_filter.accepts(tmp_path, "pkg.egg-info")
        assert child_filter.accepts(tmp_path, "src")

    def test_negation(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("out*/\n!output/\n")
        child_filter = ChildFilter(FilterConfig(respect_gitignore=True))
        assert not child_filter.accepts(tmp_path, "out1")
        assert child_filter.accepts(tmp_path, "output")

    def test_no_gitignore_file(self, tmp_path: Path) -> None:
        child_filter = ChildFilter(FilterConfig(respect_gitignore=True))
        assert child_filter.accepts(tmp_path, "build")

    def test_gitignore_ignored_when_disabled(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("build/\n")
        assert ChildFilter(FilterConfig()).accepts(tmp_path, "build")

    def test_each_root_uses_its_own_file(self, tmp_path: Path) -> None:
        left = tmp_path / "left"
        right = tmp_path / "right"
        left.mkdir()
        right.mkdir()
        (left / ".gitignore").write_text("build/\n")
        child_filter = ChildFilter(FilterConfig(respect_gitignore=True))
        assert not child_filter.accepts(left, "build")
        assert child_filter.accepts(right, "build")


class TestChildFilterPatterns:
    """Test include and exclude glob patterns."""

    def test_include_patterns(self, tmp_path: Path) -> None:
        child_filter = ChildFilter(FilterConfig(include_patterns=("src*", "lib")))
        assert child_filter.accepts(tmp_path, "src")
        assert child_filter.accepts(tmp_path, "src-old")
        assert child_filter.accepts(tmp_path, "lib")
        assert not child_filter.accepts(tmp_path, "docs")

    def test_exclude_patterns(self, tmp_path: Path) -> None:
        child_filter = ChildFilter(FilterConfig(exclude_patterns=("__pycache__", "*.tmp")))
        assert not child_filter.accepts(tmp_path, "__pycache__")
        assert not child_filter.accepts(tmp_path, "work.tmp")
        assert child_filter.accepts(tmp_path, "work")

    def test_exclude_wins_over_include(self, tmp_path: Path) -> None:
        config = FilterConfig(include_patterns=("test*",), exclude_patterns=("test_data",))
        child_filter = ChildFilter(config)
        assert child_filter.accepts(tmp_path, "tests")
        assert not child_filter.accepts(tmp_path, "test_data")
