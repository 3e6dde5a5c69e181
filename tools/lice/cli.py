"""CLI entry-point for lice."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Callable

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import ConfigError, LiceConfig
from .engine import LiceEngine
from .outcome import FileOutcome, Outcome, RunSummary

console = Console(highlight=False)

_LABELS = {
    Outcome.ALREADY_COMPLIANT: "[dim]  License OK:[/dim]",
    Outcome.ADDED: "[green]✓[/green] Added license:",
    Outcome.UPDATED: "[cyan]✓[/cyan] Updated license:",
    Outcome.SKIPPED: "[yellow]![/yellow] Skipped:",
    Outcome.FAILED: "[red]✗[/red] Failed:",
}

_CHECK_LABELS = {
    **_LABELS,
    Outcome.ADDED: "[yellow]✗[/yellow] Missing license:",
    Outcome.UPDATED: "[yellow]✗[/yellow] Outdated license:",
}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=console, show_path=False)],
    )


def _printable(text: str | Path) -> str:
    # Undecodable names come back from os.scandir surrogate-escaped.
    return os.fsencode(text).decode("utf-8", "backslashreplace")


def _reporter(*, check: bool, quiet: bool) -> Callable[[FileOutcome], None]:
    labels = _CHECK_LABELS if check else _LABELS

    def report(outcome: FileOutcome) -> None:
        if quiet and outcome.status is Outcome.ALREADY_COMPLIANT:
            return
        line = f"{labels[outcome.status]} {escape(_printable(outcome.path))}"
        if outcome.reason:
            line += f" [dim]({escape(_printable(outcome.reason))})[/dim]"
        console.print(line, soft_wrap=True)

    return report


def _print_stats(summary: RunSummary) -> None:
    table = Table(title="License Summary", show_header=True, header_style="bold cyan")
    table.add_column("Outcome", style="bold")
    table.add_column("Count", justify="right")
    for key, val in summary.stats.items():
        table.add_row(key.replace("_", " ").capitalize(), str(val))
    console.print(table)


class _LiceCommand(click.Command):
    """Print help and exit 0 when invoked with no arguments at all."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if not args:
            click.echo(ctx.get_help())
            ctx.exit(0)
        return super().parse_args(ctx, args)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=_LiceCommand,
)
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "-f", "--file", "license_file", required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the license header file.",
)
@click.option(
    "-e", "--exclude", "excludes", multiple=True, metavar="PATTERN",
    help="Exclude file/directory matching this pattern. Can be specified multiple times.",
)
@click.option(
    "-j", "--jobs", envvar="LICE_JOBS", type=click.IntRange(min=1), default=None,
    help="Number of worker threads (default: available CPUs).",
)
@click.option("--check", is_flag=True, help="Report files that need a header without writing anything")
@click.option("-q", "--quiet", is_flag=True, help="Only list files that changed or had problems")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging (shows excluded paths)")
@click.version_option(__version__, prog_name="lice")
def cli(
    paths: tuple[Path, ...],
    license_file: Path,
    excludes: tuple[str, ...],
    jobs: int | None,
    check: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """lice – Automate source code license headers.

    Adds or renews the license header in every supported source file under
    PATHS (default: the current directory).

    \b
    Examples:
      lice -f HEADER.txt
      lice -f HEADER.txt -e vendor -e build src include
    """
    _setup_logging(verbose)
    extra = {"jobs": jobs} if jobs is not None else {}
    try:
        cfg = LiceConfig.from_license_file(
            license_file,
            excludes=excludes,
            targets=paths or (Path("."),),
            check=check,
            **extra,
        )
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    engine = LiceEngine(cfg, on_outcome=_reporter(check=check, quiet=quiet))
    try:
        summary = engine.run()
    except KeyboardInterrupt:
        console.print("[red]Interrupted[/red]")
        sys.exit(130)

    _print_stats(summary)
    if summary.cancelled:
        sys.exit(130)
    if check and summary.changed:
        console.print(f"[yellow]{len(summary.changed)} file(s) need a license header update[/yellow]")
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
