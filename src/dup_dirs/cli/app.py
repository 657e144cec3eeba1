"""CLI entry point for dup-dirs."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from dup_dirs.config import ConfigStore
from dup_dirs.core.errors import EnumerationError
from dup_dirs.core.filtering import FilterConfig
from dup_dirs.core.models import OutputMode
from dup_dirs.core.pairs import DuplicatePairSet
from dup_dirs.core.roots import RootDirectorySet
from dup_dirs.core.scan import Scanner
from dup_dirs.core.size import SizeCalculator
from dup_dirs.output.rich_output import RichRenderer

if TYPE_CHECKING:
    from dup_dirs.output.base import Renderer

app = typer.Typer(
    name="dup-dirs",
    help="Find same-named directories across several root directories.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from dup_dirs import __version__

        typer.echo(f"dup-dirs {__version__}")
        raise typer.Exit()


def _configure_logging(*, verbose: bool) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _parse_output_mode(value: str) -> OutputMode:
    """Parse output string to OutputMode enum."""
    try:
        return OutputMode(value)
    except ValueError:
        valid = ", ".join(o.value for o in OutputMode)
        msg = f"Invalid output mode '{value}'. Choose from: {valid}"
        raise typer.BadParameter(msg) from None


def _build_filter_config(
    *,
    hidden: bool,
    gitignore: bool,
    include: list[str] | None,
    exclude: list[str] | None,
) -> FilterConfig:
    """Build FilterConfig from CLI flags."""
    return FilterConfig(
        include_hidden=hidden,
        respect_gitignore=gitignore,
        include_patterns=tuple(include) if include else (),
        exclude_patterns=tuple(exclude) if exclude else (),
    )


def _get_renderer(output_mode: OutputMode, *, raw_bytes: bool) -> Renderer:
    """Get the appropriate renderer for the output mode.

    Raises:
        NotImplementedError: If the output mode has no renderer.
    """
    if output_mode == OutputMode.rich:
        return RichRenderer(raw_bytes=raw_bytes)
    if output_mode == OutputMode.json:
        from dup_dirs.output.json_output import JsonRenderer

        return JsonRenderer()

    msg = f"Output mode '{output_mode}' is not yet implemented"
    raise NotImplementedError(msg)


@app.command()
def main(
    roots: Annotated[
        list[str] | None,
        typer.Argument(help="Root directories to search. Added to the saved list."),
    ] = None,
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="Output mode: rich, json, or tui."),
    ] = "rich",
    stat: Annotated[
        bool,
        typer.Option("--stat", help="Show only summary statistics."),
    ] = False,
    raw_bytes: Annotated[
        bool,
        typer.Option("--bytes", help="Show sizes as plain byte counts."),
    ] = False,
    hidden: Annotated[
        bool,
        typer.Option("--hidden/--no-hidden", help="Compare hidden subdirectories."),
    ] = True,
    gitignore: Annotated[
        bool,
        typer.Option("--gitignore", help="Skip subdirectories ignored by a root's .gitignore."),
    ] = False,
    include: Annotated[
        list[str] | None,
        typer.Option("--include", "-I", help="Glob pattern(s) for names to compare."),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", "-E", help="Glob pattern(s) for names to skip."),
    ] = None,
    no_history: Annotated[
        bool,
        typer.Option("--no-history", help="Ignore the saved root list."),
    ] = False,
    no_save: Annotated[
        bool,
        typer.Option("--no-save", help="Don't save the root list for next time."),
    ] = False,
    max_saved: Annotated[
        int | None,
        typer.Option("--max-saved", min=0, help="Save at most this many roots this run."),
    ] = None,
    default_dir: Annotated[
        Path | None,
        typer.Option(
            "--default-dir",
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            help="Save PATH as the directory the TUI offers for new roots.",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Config file to use instead of the default."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug details to stderr."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Report immediate subdirectories that share a name across root directories.

    Only names are compared, one level deep. Nothing on disk is changed.
    """
    _configure_logging(verbose=verbose)

    try:
        output_mode = _parse_output_mode(output)
        filter_config = _build_filter_config(
            hidden=hidden,
            gitignore=gitignore,
            include=include,
            exclude=exclude,
        )
        store = ConfigStore(config)
        saved = store.load()
        if default_dir is not None:
            saved = replace(saved, default_dir=default_dir)
        # --bytes and --max-saved last one run; ``saved`` is what gets written
        settings = replace(saved, show_size_in_bytes=True) if raw_bytes else saved

        with SizeCalculator(raw_bytes=settings.show_size_in_bytes) as calculator:
            # Reports never show root sizes, so only the TUI measures roots
            root_set = RootDirectorySet(calculator, measure=output_mode == OutputMode.tui)
            pair_set = DuplicatePairSet(calculator)
            if not no_history:
                store.seed(settings, root_set)
            root_set.add_all(roots or [])
            scanner = Scanner(root_set, pair_set, filter_config=filter_config)

            try:
                # TUI runs its own event loop and scans on demand
                if output_mode == OutputMode.tui:
                    from dup_dirs.tui import DupDirsApp

                    tui = DupDirsApp(scanner, settings=settings)
                    tui.run()
                    if tui.default_dir is not None:
                        saved = replace(saved, default_dir=tui.default_dir)
                    return

                renderer = _get_renderer(output_mode, raw_bytes=settings.show_size_in_bytes)
                if not scanner.can_scan():
                    typer.echo("Note: fewer than two root directories, nothing to compare.", err=True)
                scanner.rescan()
                report = scanner.report()

                if stat:
                    renderer.render_stats(report.stats)
                else:
                    renderer.render(report)
            finally:
                if not no_save:
                    store.save(store.remember(saved, root_set, limit=max_saved))

    except EnumerationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from None
    except NotImplementedError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None
