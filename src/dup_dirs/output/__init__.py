"""Public API for dup_dirs.output."""

from __future__ import annotations

from dup_dirs.output.base import Renderer
from dup_dirs.output.json_output import JsonRenderer
from dup_dirs.output.rich_output import RichRenderer

__all__ = [
    "JsonRenderer",
    "Renderer",
    "RichRenderer",
]
