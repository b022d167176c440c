"""Typer application and command wiring."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from ccrelease import __version__
from ccrelease.cli.commands.bump import run_bump
from ccrelease.cli.commands.changelog import run_changelog
from ccrelease.cli.commands.check import run_check
from ccrelease.log import configure_logging

app = typer.Typer(
    name="ccrelease",
    help="Resolve semantic version bumps and changelogs from conventional commits.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

PathOption = Annotated[
    str | None,
    typer.Option("--path", "-p", help="Project directory (default: current directory)"),
]
SinceOption = Annotated[
    str | None,
    typer.Option("--since", help="Reference the commit range starts after"),
]
PrereleaseOption = Annotated[
    str | None,
    typer.Option("--prerelease", help="Pre-release identifier (e.g. alpha, beta, rc)"),
]


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"ccrelease {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
    show_version: Annotated[
        bool,
        typer.Option(
            "--show-version",
            callback=_version_callback,
            is_eager=True,
            help="Show the ccrelease version and exit",
        ),
    ] = False,
) -> None:
    configure_logging("DEBUG" if verbose else None)


@app.command()
def changelog(
    path: PathOption = None,
    version: Annotated[
        str | None,
        typer.Option("--version", help="Release version, overriding the resolved one"),
    ] = None,
    prerelease: PrereleaseOption = None,
    since: SinceOption = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Changelog file (default from config)"),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Print the changelog instead of writing it")
    ] = False,
) -> None:
    """Prepend a release section to the changelog."""
    run_changelog(
        path=path,
        dry_run=dry_run,
        version_override=version,
        prerelease=prerelease,
        since=since,
        output=output,
        console=console,
        err_console=err_console,
    )


@app.command()
def bump(
    path: PathOption = None,
    prerelease: PrereleaseOption = None,
    since: SinceOption = None,
    short: Annotated[
        bool, typer.Option("--short", help="Print only the next version")
    ] = False,
) -> None:
    """Show the version bump implied by pending commits."""
    run_bump(
        path=path,
        prerelease=prerelease,
        since=since,
        short=short,
        console=console,
        err_console=err_console,
    )


@app.command()
def check(
    path: PathOption = None,
    since: SinceOption = None,
) -> None:
    """Validate that commit subjects follow the conventional commit format."""
    run_check(path=path, since=since, console=console, err_console=err_console)


def main() -> None:
    app()
