"""Command-line interface for dup-dirs."""
