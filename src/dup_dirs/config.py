"""Persisted settings: last root list and display preferences, as TOML."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
import typer

from dup_dirs.core.errors import MalformedConfigError

if TYPE_CHECKING:
    from dup_dirs.core.roots import RootDirectorySet

logger = logging.getLogger(__name__)

APP_NAME = "dup-dirs"
CONFIG_FILENAME = "config.toml"

KEY_DEFAULT_DIR = "default_dir"
KEY_LAST_DIR_LIST = "last_dir_list"
KEY_SHOW_SIZE_IN_BYTES = "show_size_in_bytes"
KEY_MAX_SAVED_DIRS = "max_saved_dirs"


def default_config_path() -> Path:
    """Location of the config file in the per-user application directory."""
    return Path(typer.get_app_dir(APP_NAME)) / CONFIG_FILENAME


@dataclass(frozen=True)
class Settings:
    """Settings carried between sessions.

    Attributes:
        default_dir: Starting directory offered when adding roots.
        last_dir_list: Root paths tracked when the last session saved.
        show_size_in_bytes: Display plain byte counts instead of units.
        max_saved_dirs: Cap on how many roots are saved. None saves all.
    """

    default_dir: Path | None = None
    last_dir_list: tuple[str, ...] = ()
    show_size_in_bytes: bool = False
    max_saved_dirs: int | None = None


def _settings_from(data: dict[str, Any]) -> Settings:
    """Build Settings from parsed TOML, ignoring unknown or mistyped values."""
    default_dir = None
    raw_dir = data.get(KEY_DEFAULT_DIR)
    if isinstance(raw_dir, str) and Path(raw_dir).is_dir():
        default_dir = Path(raw_dir)

    raw_list = data.get(KEY_LAST_DIR_LIST)
    last_dir_list: tuple[str, ...] = ()
    if isinstance(raw_list, list):
        last_dir_list = tuple(item for item in raw_list if isinstance(item, str))

    raw_bytes = data.get(KEY_SHOW_SIZE_IN_BYTES)
    show_size_in_bytes = raw_bytes if isinstance(raw_bytes, bool) else False

    raw_max = data.get(KEY_MAX_SAVED_DIRS)
    max_saved_dirs = None
    if isinstance(raw_max, int) and not isinstance(raw_max, bool) and raw_max >= 0:
        max_saved_dirs = raw_max

    return Settings(
        default_dir=default_dir,
        last_dir_list=last_dir_list,
        show_size_in_bytes=show_size_in_bytes,
        max_saved_dirs=max_saved_dirs,
    )


def _settings_to(settings: Settings) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if settings.default_dir is not None:
        data[KEY_DEFAULT_DIR] = str(settings.default_dir)
    data[KEY_LAST_DIR_LIST] = list(settings.last_dir_list)
    data[KEY_SHOW_SIZE_IN_BYTES] = settings.show_size_in_bytes
    if settings.max_saved_dirs is not None:
        data[KEY_MAX_SAVED_DIRS] = settings.max_saved_dirs
    return data


class ConfigStore:
    """Reads and writes :class:`Settings` at a fixed path.

    Failures never propagate: an unreadable file yields defaults, a
    corrupt file is deleted, and a failed save is logged.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: Config file location. Defaults to default_config_path().
        """
        self._path = path or default_config_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Settings:
        """Load saved settings, or defaults if there are none."""
        try:
            return self._read()
        except MalformedConfigError as exc:
            logger.warning("%s. Deleting it.", exc)
            self.reset()
            return Settings()

    def save(self, settings: Settings) -> bool:
        """Write settings, creating the config directory if needed.

        Returns:
            True if the file was written.
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(tomli_w.dumps(_settings_to(settings)), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save config to %s: %s", self._path, exc)
            return False
        return True

    def reset(self) -> None:
        """Delete the config file if present."""
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not delete config %s: %s", self._path, exc)

    @staticmethod
    def seed(settings: Settings, roots: RootDirectorySet) -> bool:
        """Add the saved root list to ``roots``. Vanished paths are dropped."""
        return roots.add_all(settings.last_dir_list)

    @staticmethod
    def remember(
        settings: Settings, roots: RootDirectorySet, *, limit: int | None = None
    ) -> Settings:
        """Return settings whose saved root list mirrors ``roots``.

        Args:
            settings: Settings to update.
            roots: Roots to save, oldest first.
            limit: Cap for this save only. Defaults to
                ``settings.max_saved_dirs``.
        """
        cap = settings.max_saved_dirs if limit is None else limit
        return replace(settings, last_dir_list=tuple(roots.canonical_paths(cap)))

    def _read(self) -> Settings:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return Settings()
        except OSError as exc:
            logger.warning("Could not read config %s: %s", self._path, exc)
            return Settings()

        try:
            data = tomllib.loads(raw.decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise MalformedConfigError(self._path, str(exc)) from exc
        return _settings_from(data)
