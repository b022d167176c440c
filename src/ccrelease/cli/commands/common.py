"""Steps shared by the CLI commands.

Each helper reports failures on the error console and exits with
status 1, so commands can call them in sequence.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ccrelease.config import load_config
from ccrelease.core.commits import classify_commits, filter_skip_release_commits
from ccrelease.core.version import Version
from ccrelease.exceptions import GitError, ReleaseError
from ccrelease.log import get_logger
from ccrelease.project import get_manifest_version
from ccrelease.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from ccrelease.config.models import ReleaseConfig
    from ccrelease.core.commits import CommitRecord

logger = get_logger(__name__)


def resolve_project_path(path: str | None) -> Path:
    return Path(path) if path else Path.cwd()


def load_project_config(project_path: Path, err_console: Console) -> ReleaseConfig:
    try:
        config = load_config(project_path)
    except ReleaseError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    if config.is_monorepo:
        logger.warning(
            "packages.paths is set but monorepo releases are not supported; "
            "treating %s as a single package",
            project_path,
        )
    return config


def open_repository(project_path: Path, err_console: Console) -> GitRepository:
    try:
        return GitRepository(project_path)
    except GitError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e


def read_current_version(project_path: Path, err_console: Console) -> Version:
    try:
        return Version.parse(get_manifest_version(project_path))
    except ReleaseError as e:
        err_console.print(f"[red]Error getting version:[/] {e}")
        raise SystemExit(1) from e


def release_range_start(
    repo: GitRepository,
    config: ReleaseConfig,
    since: str | None,
) -> str | None:
    """Reference the release range starts after.

    ``--since`` wins, then ``commits.since`` from config, then the latest
    release tag. None means the whole history (first release).
    """
    if since:
        return since
    if config.commits.since:
        return config.commits.since
    return repo.get_latest_tag(f"{config.effective_tag_prefix}*")


def collect_release_commits(
    repo: GitRepository,
    config: ReleaseConfig,
    since: str | None,
) -> list[CommitRecord]:
    """Read, filter and classify the commits of the pending release.

    A failing ``git log`` yields an empty list so the release becomes a no-op.
    """
    start = release_range_start(repo, config, since)
    logger.debug("Reading commits since %s", start or "the first commit")

    try:
        raw = repo.get_commits_since(start)
    except GitError as e:
        logger.warning("Could not read commits: %s", e)
        return []

    raw = filter_skip_release_commits(raw, config.commits.skip_release_patterns)
    return classify_commits(raw, config.commits)
