"""Shared test fixtures."""

from __future__ import annotations

import os
import shutil
import subprocess
from typing import TYPE_CHECKING

import pytest

from ccrelease.core.commits import RawCommit

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")

_GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test",
    "GIT_AUTHOR_EMAIL": "test@test.com",
    "GIT_COMMITTER_NAME": "Test",
    "GIT_COMMITTER_EMAIL": "test@test.com",
    "GIT_CONFIG_NOSYSTEM": "1",
}


def git(repo: Path, *args: str) -> str:
    """Run git in ``repo`` with a fixed identity."""
    env = {**os.environ, **_GIT_ENV, "HOME": str(repo)}
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],
        cwd=repo,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def feat_commit() -> RawCommit:
    return RawCommit(hash="feat123", subject="feat: add user authentication")


@pytest.fixture
def fix_commit() -> RawCommit:
    return RawCommit(hash="fix4567", subject="fix(core): handle null response")


@pytest.fixture
def breaking_commit() -> RawCommit:
    return RawCommit(
        hash="brk8901",
        subject="refactor: cleanup",
        body="BREAKING CHANGE: removed foo()",
    )


@pytest.fixture
def sample_commits(
    feat_commit: RawCommit,
    fix_commit: RawCommit,
    breaking_commit: RawCommit,
) -> list[RawCommit]:
    return [
        feat_commit,
        fix_commit,
        RawCommit(hash="doc2345", subject="docs: update readme"),
        RawCommit(hash="cho6789", subject="chore: bump deps"),
        breaking_commit,
    ]


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """An initialized git repository with one root commit."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo, "commit", "-q", "--allow-empty", "-m", "chore: initial commit")
    return repo


@pytest.fixture
def make_commit(git_repo: Path) -> Callable[..., str]:
    """Create an empty commit in ``git_repo`` and return its full SHA."""

    def _make(subject: str, body: str = "") -> str:
        args = ["commit", "-q", "--allow-empty", "-m", subject]
        if body:
            args.extend(["-m", body])
        git(git_repo, *args)
        return git(git_repo, "rev-parse", "HEAD").strip()

    return _make


@pytest.fixture
def python_project(git_repo: Path) -> Path:
    """``git_repo`` with a pyproject.toml at version 1.2.3, tagged v1.2.3."""
    (git_repo / "pyproject.toml").write_text(
        '[project]\nname = "test-project"\nversion = "1.2.3"\n',
        encoding="utf-8",
    )
    git(git_repo, "add", "pyproject.toml")
    git(git_repo, "commit", "-q", "-m", "chore(release): 1.2.3")
    git(git_repo, "tag", "v1.2.3")
    return git_repo
