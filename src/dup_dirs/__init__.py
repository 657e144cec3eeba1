"""dup-dirs: find same-named directories across root directories."""

__version__ = "0.1.0"
