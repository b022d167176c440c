"""Implementation of the 'bump' command.

Reports the bump the pending commits call for and the resulting
version. Nothing is written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from ccrelease.cli.commands.common import (
    collect_release_commits,
    load_project_config,
    open_repository,
    read_current_version,
    resolve_project_path,
)
from ccrelease.core.version import BumpType, commit_bump, next_version, resolve_bump
from ccrelease.exceptions import InvalidVersionError

if TYPE_CHECKING:
    from rich.console import Console


def run_bump(
    path: str | None,
    prerelease: str | None,
    since: str | None,
    short: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the bump command.

    Args:
        path: Optional path to project directory
        prerelease: Pre-release identifier (e.g., "rc")
        since: Reference the commit range starts after
        short: Print only the next version, for use in scripts
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = resolve_project_path(path)
    config = load_project_config(project_path, err_console)
    current_version = read_current_version(project_path, err_console)
    repo = open_repository(project_path, err_console)

    commits = collect_release_commits(repo, config, since)
    bump_type = resolve_bump(commits)
    try:
        version = next_version(current_version, bump_type, prerelease or config.version.pre_release)
    except InvalidVersionError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if short:
        console.print(str(version), markup=False, highlight=False)
        return

    if commits:
        table = Table(title="Pending commits", show_lines=False)
        table.add_column("Commit", style="dim")
        table.add_column("Type")
        table.add_column("Bump")
        table.add_column("Subject", overflow="fold")
        for commit in commits:
            table.add_row(
                commit.hash,
                str(commit.type),
                str(commit_bump(commit)),
                escape(commit.subject),
            )
        console.print(table)

    if bump_type is BumpType.NONE:
        console.print(f"[yellow]No releasable changes.[/] Version stays [cyan]{current_version}[/]")
        return

    console.print(
        f"Bump [magenta]{bump_type}[/]: [cyan]{current_version}[/] -> [green]{version}[/]"
    )
