"""Textual TUI for browsing duplicate directories."""

from dup_dirs.tui.app import DupDirsApp

__all__ = ["DupDirsApp"]
