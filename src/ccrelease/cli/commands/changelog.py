"""Implementation of the 'changelog' command.

The changelog command resolves the next version from the pending
commits and prepends a release section to the changelog file.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from ccrelease.cli.commands.common import (
    collect_release_commits,
    load_project_config,
    open_repository,
    read_current_version,
    resolve_project_path,
)
from ccrelease.core.changelog import read_changelog, synthesize, write_changelog
from ccrelease.core.version import BumpType, Version, next_version, resolve_bump
from ccrelease.exceptions import ChangelogError, InvalidVersionError
from ccrelease.log import get_logger

if TYPE_CHECKING:
    from rich.console import Console

logger = get_logger(__name__)


def today() -> str:
    return date.today().isoformat()


def run_changelog(
    path: str | None,
    dry_run: bool,
    version_override: str | None,
    prerelease: str | None,
    since: str | None,
    output: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the changelog command.

    Args:
        path: Optional path to project directory
        dry_run: Print the result instead of writing it
        version_override: Manual version for the release section (e.g., "2.0.0")
        prerelease: Pre-release identifier (e.g., "alpha", "beta", "rc")
        since: Reference the commit range starts after
        output: Changelog file, overriding the configured path
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = resolve_project_path(path)
    config = load_project_config(project_path, err_console)
    repo = open_repository(project_path, err_console)

    commits = collect_release_commits(repo, config, since)
    if not commits:
        console.print("[yellow]No commits found since last release. Nothing to do.[/]")
        return

    console.print(f"Found [cyan]{len(commits)}[/] commits")
    bump_type = resolve_bump(commits)

    if version_override and prerelease:
        err_console.print(
            "[red]Error:[/] [cyan]--version[/] and [cyan]--prerelease[/] cannot be combined. "
            "Put the pre-release in the version, e.g. [cyan]--version 2.0.0-rc.0[/]."
        )
        raise SystemExit(1)

    if version_override:
        try:
            version = Version.parse(version_override)
        except InvalidVersionError as e:
            err_console.print(f"[red]Invalid version format:[/] {e}")
            raise SystemExit(1) from e
    else:
        if bump_type is BumpType.NONE:
            console.print(
                "[yellow]No releasable changes found (only non-release commit types).[/]\n"
                "[dim]Use [cyan]--version[/] to force a specific version.[/]"
            )
            return

        current_version = read_current_version(project_path, err_console)
        effective_prerelease = prerelease or config.version.pre_release
        try:
            version = next_version(current_version, bump_type, effective_prerelease)
        except InvalidVersionError as e:
            err_console.print(f"[red]Error:[/] {escape(str(e))}")
            raise SystemExit(1) from e
        console.print(
            f"Bump [magenta]{bump_type}[/]: [cyan]{current_version}[/] -> [green]{version}[/]"
        )

    changelog_path = project_path / (Path(output) if output else config.effective_changelog_path)
    try:
        existing = read_changelog(changelog_path)
    except ChangelogError as e:
        err_console.print(f"[red]Error reading changelog:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    content = synthesize(
        commits,
        str(version),
        today(),
        existing,
        header=config.changelog.header,
        commit_url=config.changelog.commit_url,
    )

    if dry_run:
        console.print(f"[yellow]DRY RUN:[/] would write [cyan]{changelog_path}[/]\n")
        console.print(content, markup=False, emoji=False, highlight=False, soft_wrap=True)
        return

    if not config.changelog.enabled:
        console.print("[yellow]Changelog is disabled in configuration. Nothing written.[/]")
        return

    try:
        write_changelog(changelog_path, content)
    except ChangelogError as e:
        err_console.print(f"[red]Error writing changelog:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    logger.info("Changelog updated for %s", version)
    console.print(f"  [green]✓[/] Updated {changelog_path}")
