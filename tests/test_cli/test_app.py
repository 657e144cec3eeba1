"""Tests for dup_dirs.cli.app."""

from __future__ import annotations

import errno
import json
import logging
import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from dup_dirs.cli.app import app

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "settings" / "config.toml"


def _invoke(config_path: Path, *args: str):
    return runner.invoke(app, [*args, "--config", str(config_path)])


class TestCliHelp:
    """Verify help output."""

    def test_help_flag(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Find same-named directories" in result.output

    def test_no_args_shows_usage(self) -> None:
        result = runner.invoke(app, [])
        assert "Usage" in result.output


class TestCliVersion:
    """Verify version output."""

    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "dup-dirs" in result.output
        assert "0.1.0" in result.output

    def test_version_short_flag(self) -> None:
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "dup-dirs" in result.output


class TestCliOutputMode:
    """Verify output mode option."""

    def test_default_is_rich(
        self, config_path: Path, scenario_roots: tuple[Path, Path]
    ) -> None:
        a, b = scenario_roots
        result = _invoke(config_path, str(a), str(b))
        assert result.exit_code == 0
        assert "Duplicate directories" in result.output
        assert "1 duplicate pairs" in result.output

    def test_json_output(self, config_path: Path, scenario_roots: tuple[Path, Path]) -> None:
        a, b = scenario_roots
        (b / "x" / "data.bin").write_bytes(b"\x00" * 100)
        result = _invoke(config_path, str(a), str(b), "--output", "json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["roots"] == [str(a), str(b)]
        assert len(data["pairs"]) == 1
        pair = data["pairs"][0]
        assert pair["name"] == "x"
        assert pair["first"]["path"] == str(a / "x")
        assert pair["second"]["path"] == str(b / "x")
        assert pair["second"]["size_display"] == "100 B"

    def test_json_stat(self, config_path: Path, scenario_roots: tuple[Path, Path]) -> None:
        a, b = scenario_roots
        result = _invoke(config_path, str(a), str(b), "-o", "json", "--stat")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["total_pairs"] == 1
        assert data["total_roots"] == 2

    def test_bytes_flag(self, config_path: Path, scenario_roots: tuple[Path, Path]) -> None:
        a, b = scenario_roots
        (b / "x" / "data.bin").write_bytes(b"\x00" * 2000)
        result = _invoke(config_path, str(a), str(b), "-o", "json", "--bytes")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["pairs"][0]["second"]["size_display"] == "2000 B"

    def test_invalid_output_mode(
        self, config_path: Path, scenario_roots: tuple[Path, Path]
    ) -> None:
        a, b = scenario_roots
        result = _invoke(config_path, str(a), str(b), "--output", "invalid")
        assert result.exit_code != 0


class TestCliRoots:
    """Verify root handling and filtering flags."""

    def test_single_root_prints_note(
        self, config_path: Path, scenario_roots: tuple[Path, Path]
    ) -> None:
        a, _ = scenario_roots
        result = _invoke(config_path, str(a))
        assert result.exit_code == 0
        assert "fewer than two root directories" in result.output
        assert "No duplicate directories found." in result.output

    def test_missing_root_is_skipped(
        self, config_path: Path, scenario_roots: tuple[Path, Path], tmp_path: Path
    ) -> None:
        a, b = scenario_roots
        result = _invoke(config_path, str(a), str(tmp_path / "nope"), str(b), "-o", "json")
        assert result.exit_code == 0
        assert json.loads(result.output)["roots"] == [str(a), str(b)]

    def test_exclude_pattern(
        self, config_path: Path, make_roots: Callable[..., list[Path]]
    ) -> None:
        roots = make_roots(("build", "src"), ("build", "src"))
        result = _invoke(config_path, *map(str, roots), "-o", "json", "-E", "build")
        assert result.exit_code == 0
        assert [p["name"] for p in json.loads(result.output)["pairs"]] == ["src"]

    def test_no_hidden(self, config_path: Path, make_roots: Callable[..., list[Path]]) -> None:
        roots = make_roots((".git", "src"), (".git", "src"))
        result = _invoke(config_path, *map(str, roots), "-o", "json", "--no-hidden")
        assert [p["name"] for p in json.loads(result.output)["pairs"]] == ["src"]

    def test_unreadable_root_exits_with_error(
        self,
        config_path: Path,
        scenario_roots: tuple[Path, Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        a, b = scenario_roots
        real_scandir = os.scandir

        def fake_scandir(path):
            if Path(path) == b:
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr("dup_dirs.core.detector.os.scandir", fake_scandir)
        result = _invoke(config_path, str(a), str(b))
        assert result.exit_code == 2
        assert "Error: Cannot list subdirectories" in result.output


class TestCliHistory:
    """Verify the saved root list."""

    def test_roots_are_saved(self, config_path: Path, scenario_roots: tuple[Path, Path]) -> None:
        a, b = scenario_roots
        _invoke(config_path, str(a), str(b), "-o", "json")
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        assert data["last_dir_list"] == [str(a), str(b)]

    def test_saved_roots_are_reused(
        self, config_path: Path, scenario_roots: tuple[Path, Path]
    ) -> None:
        a, b = scenario_roots
        _invoke(config_path, str(a), str(b), "-o", "json")
        result = _invoke(config_path, "-o", "json")
        assert result.exit_code == 0
        assert len(json.loads(result.output)["pairs"]) == 1

    def test_no_history(self, config_path: Path, scenario_roots: tuple[Path, Path]) -> None:
        a, b = scenario_roots
        _invoke(config_path, str(a), str(b), "-o", "json")
        result = _invoke(config_path, str(a), "--no-history", "-o", "json", "--stat")
        assert result.exit_code == 0
        assert "fewer than two root directories" in result.output

    def test_no_save(self, config_path: Path, scenario_roots: tuple[Path, Path]) -> None:
        a, b = scenario_roots
        _invoke(config_path, str(a), str(b), "--no-save")
        assert not config_path.exists()

    def test_max_saved(self, config_path: Path, make_roots: Callable[..., list[Path]]) -> None:
        roots = make_roots((), (), ())
        _invoke(config_path, *map(str, roots), "--max-saved", "2")
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        assert data["last_dir_list"] == [str(roots[1]), str(roots[2])]
        assert "max_saved_dirs" not in data

    def test_malformed_config_is_replaced(
        self, config_path: Path, scenario_roots: tuple[Path, Path]
    ) -> None:
        a, b = scenario_roots
        config_path.parent.mkdir(parents=True)
        config_path.write_text("not = [valid", encoding="utf-8")
        result = _invoke(config_path, str(a), str(b), "-o", "json", "--stat")
        assert result.exit_code == 0
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        assert data["last_dir_list"] == [str(a), str(b)]

    def test_bytes_flag_is_not_saved(
        self, config_path: Path, scenario_roots: tuple[Path, Path]
    ) -> None:
        a, b = scenario_roots
        (b / "x" / "data.bin").write_bytes(b"\x00" * 2000)
        _invoke(config_path, str(a), str(b), "-o", "json", "--bytes")
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        assert data["show_size_in_bytes"] is False

        result = _invoke(config_path, "-o", "json")
        assert result.exit_code == 0
        assert json.loads(result.output)["pairs"][0]["second"]["size_display"] == "2 KB"

    def test_default_dir_is_saved(self, config_path: Path, tmp_path: Path) -> None:
        start = tmp_path / "start"
        start.mkdir()
        result = _invoke(config_path, "--default-dir", str(start), "-o", "json", "--stat")
        assert result.exit_code == 0
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        assert data["default_dir"] == str(start)

        _invoke(config_path, "-o", "json", "--stat")
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        assert data["default_dir"] == str(start)

    def test_default_dir_must_exist(self, config_path: Path, tmp_path: Path) -> None:
        result = _invoke(config_path, "--default-dir", str(tmp_path / "nope"))
        assert result.exit_code != 0
        assert not config_path.exists()


class TestCliSizes:
    """Verify which directories a report run measures."""

    def test_roots_are_not_measured(
        self,
        config_path: Path,
        scenario_roots: tuple[Path, Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        a, b = scenario_roots
        measured: list[Path] = []

        def record(path) -> int:
            measured.append(Path(path))
            return 0

        monkeypatch.setattr("dup_dirs.core.size.directory_size", record)
        result = _invoke(config_path, str(a), str(b), "-o", "json")
        assert result.exit_code == 0
        assert sorted(measured) == [a / "x", b / "x"]
