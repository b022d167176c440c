"""Implementation of the 'check' command.

Validates that every commit subject in a range follows the
conventional commit format. Exits with status 1 if any does not.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from ccrelease.cli.commands.common import load_project_config, open_repository, resolve_project_path
from ccrelease.core.commits import validate_subject
from ccrelease.exceptions import GitError

if TYPE_CHECKING:
    from rich.console import Console


def run_check(
    path: str | None,
    since: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the check command.

    Args:
        path: Optional path to project directory
        since: Reference the range starts after (default: origin/<default branch>)
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = resolve_project_path(path)
    config = load_project_config(project_path, err_console)
    repo = open_repository(project_path, err_console)

    start = since or f"origin/{config.default_branch}"
    console.print(f"[blue]Validating conventional commits in {start}..HEAD[/]\n")

    try:
        commits = repo.get_commits_since(start)
    except GitError as e:
        err_console.print(f"[red]Error reading commits:[/] {e}")
        raise SystemExit(1) from e

    if not commits:
        console.print("[yellow]No commits found in range[/]")
        return

    invalid = []
    for commit in commits:
        result = validate_subject(commit.subject, commit.hash)
        mark = "[green]✓[/]" if result.is_valid else "[red]✗[/]"
        line = f"{mark} {commit.hash} {escape(commit.subject)}"
        console.print(line, highlight=False, emoji=False)
        if not result.is_valid:
            invalid.append(commit)
            console.print(f"    [dim]{escape(result.error or '')}[/]", highlight=False)

    console.print(
        f"\nValid commits: {len(commits) - len(invalid)}\nInvalid commits: {len(invalid)}"
    )

    if invalid:
        err_console.print(
            "\n[yellow]Some commits do not follow the conventional commit format.[/]\n"
            "Reword them with [cyan]git rebase -i[/] or [cyan]git commit --amend[/]."
        )
        raise SystemExit(1)

    console.print("\n[green]✓ All commits follow conventional commit format![/]")
