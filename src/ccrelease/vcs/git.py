"""Read commits and tags from a git repository.

git is called as a subprocess. Only reading is done here; tagging and
pushing are left to other tools.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from ccrelease.core.commits import RawCommit
from ccrelease.exceptions import GitError
from ccrelease.log import get_logger

logger = get_logger(__name__)

SHORT_SHA_LENGTH = 7

# ASCII unit/record separators cannot appear in commit messages.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"%H{_FIELD_SEP}%s{_FIELD_SEP}%b{_RECORD_SEP}"


class GitRepository:
    """A git work tree at ``path``."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        try:
            self._run("rev-parse", "--git-dir")
        except GitError as e:
            raise GitError(f"Not a git repository: {self.path}", stderr=e.stderr) from e

    def _run(self, *args: str) -> str:
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout

    def get_latest_tag(self, pattern: str | None = None) -> str | None:
        """Latest tag reachable from HEAD, optionally filtered by glob.

        Returns:
            Tag name, or None if no tag matches
        """
        args = ["describe", "--tags", "--abbrev=0"]
        if pattern:
            args.extend(["--match", pattern])
        try:
            tag = self._run(*args).strip()
        except GitError:
            logger.debug("No tag matching %s", pattern or "*")
            return None
        return tag or None

    def get_commits(self, rev_range: str = "HEAD") -> list[RawCommit]:
        """Non-merge commits in ``rev_range``, newest first.

        Raises:
            GitError: If git log fails (e.g. unknown revision)
        """
        output = self._run("log", rev_range, "--no-merges", f"--format={_LOG_FORMAT}")

        commits = []
        for record in output.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record:
                continue
            sha, subject, body = record.split(_FIELD_SEP, 2)
            commits.append(
                RawCommit(
                    hash=sha[:SHORT_SHA_LENGTH],
                    subject=subject.strip(),
                    body=body.strip(),
                )
            )

        logger.debug("Read %d commits from %s", len(commits), rev_range)
        return commits

    def get_commits_since(self, ref: str | None) -> list[RawCommit]:
        """Commits after ``ref`` up to HEAD, or the whole history if ``ref`` is None."""
        return self.get_commits(f"{ref}..HEAD" if ref else "HEAD")
