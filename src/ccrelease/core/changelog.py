"""Changelog synthesis.

Commits are grouped into fixed categories, rendered as a release
section and merged into the existing changelog text. Everything here
except :func:`write_changelog` is pure.

An existing changelog is handled as a document: a preamble (the
``# Changelog`` header and any introduction) followed by release
sections, each starting at a ``## `` line. New sections go between the
preamble and the first earlier release.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from ccrelease.core.commits import CommitType
from ccrelease.exceptions import ChangelogError
from ccrelease.log import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ccrelease.core.commits import CommitRecord

logger = get_logger(__name__)

DEFAULT_HEADER = "# Changelog"
DEFAULT_COMMIT_URL = "../../commit/{hash}"
RELEASE_PREFIX = "## "


class Category(Enum):
    """Changelog categories, in output order."""

    BREAKING = "Breaking Changes"
    FEATURES = "Features"
    BUG_FIXES = "Bug Fixes"
    PERFORMANCE = "Performance"
    DOCUMENTATION = "Documentation"
    OTHER = "Other"

    @property
    def label(self) -> str:
        return self.value


_TYPE_CATEGORIES = {
    CommitType.FEAT: Category.FEATURES,
    CommitType.FIX: Category.BUG_FIXES,
    CommitType.PERF: Category.PERFORMANCE,
    CommitType.DOCS: Category.DOCUMENTATION,
}


def categorize(commit: CommitRecord) -> Category:
    """Category a commit belongs to; breaking overrides the type."""
    if commit.breaking:
        return Category.BREAKING
    return _TYPE_CATEGORIES.get(commit.type, Category.OTHER)


def group_commits(commits: Iterable[CommitRecord]) -> dict[Category, list[CommitRecord]]:
    """Group commits by category.

    Returns:
        Mapping in category order; categories without commits are absent
    """
    buckets: dict[Category, list[CommitRecord]] = {c: [] for c in Category}
    for commit in commits:
        buckets[categorize(commit)].append(commit)
    return {category: items for category, items in buckets.items() if items}


def format_commit(commit: CommitRecord, commit_url: str = DEFAULT_COMMIT_URL) -> str:
    """Render one changelog line.

    >>> from ccrelease.core.commits import RawCommit, classify
    >>> format_commit(classify(RawCommit("abc1234", "fix(api): handle nulls")))
    '- **api**: handle nulls ([abc1234](../../commit/abc1234))'
    """
    scope = f"**{commit.scope}**: " if commit.scope else ""
    url = commit_url.replace("{hash}", commit.hash)
    return f"- {scope}{commit.description} ([{commit.hash}]({url}))"


@dataclass(frozen=True)
class ChangelogEntry:
    """One release section."""

    version: str
    date: str
    sections: dict[Category, list[str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not any(self.sections.values())

    def render(self) -> str:
        if self.is_empty:
            return ""

        parts = [f"{RELEASE_PREFIX}[{self.version}] - {self.date}\n\n"]
        for category, lines in self.sections.items():
            if not lines:
                continue
            parts.append(f"### {category.label}\n\n")
            parts.append("\n".join(lines))
            parts.append("\n\n")
        return "".join(parts)


def build_entry(
    commits: Iterable[CommitRecord],
    version: str,
    date: str,
    commit_url: str = DEFAULT_COMMIT_URL,
) -> ChangelogEntry:
    """Group and render commits into a :class:`ChangelogEntry`."""
    grouped = group_commits(commits)
    sections = {
        category: [format_commit(c, commit_url) for c in items]
        for category, items in grouped.items()
    }
    return ChangelogEntry(version=str(version), date=date, sections=sections)


@dataclass(frozen=True)
class ChangelogDocument:
    """An existing changelog split into preamble and release sections."""

    preamble: str = ""
    releases: tuple[str, ...] = ()

    def render(self) -> str:
        return self.preamble + "".join(self.releases)

    def prepend(self, section: str) -> ChangelogDocument:
        preamble = self.preamble
        if preamble and not preamble.endswith("\n\n"):
            preamble = preamble.rstrip("\n") + "\n\n"
        return ChangelogDocument(preamble, (section, *self.releases))


def parse_changelog(text: str) -> ChangelogDocument:
    """Split changelog text at release headers.

    Splitting is lossless: ``parse_changelog(t).render() == t``.
    """
    lines = text.splitlines(keepends=True)
    preamble: list[str] = []
    releases: list[list[str]] = []

    for line in lines:
        if line.startswith(RELEASE_PREFIX):
            releases.append([line])
        elif releases:
            releases[-1].append(line)
        else:
            preamble.append(line)

    return ChangelogDocument("".join(preamble), tuple("".join(r) for r in releases))


def merge_changelog(section: str, existing: str, header: str = DEFAULT_HEADER) -> str:
    """Insert a release section into existing changelog text.

    If ``existing`` starts with ``header``, the section goes after the
    preamble and ahead of every earlier release. Otherwise a fresh header
    is written, followed by the section and all of ``existing`` unchanged.
    """
    if not section:
        return existing

    if existing.startswith(header):
        return parse_changelog(existing).prepend(section).render()

    return f"{header}\n\n{section}{existing}"


def synthesize(
    commits: Sequence[CommitRecord],
    version: str,
    date: str,
    existing: str,
    *,
    header: str = DEFAULT_HEADER,
    commit_url: str = DEFAULT_COMMIT_URL,
) -> str:
    """Produce new changelog text for a release.

    Args:
        commits: Classified commits in the release
        version: Version being released
        date: Release date (ISO 8601)
        existing: Current changelog content, ``""`` if there is none
        header: Top-level changelog header
        commit_url: Commit link template with a ``{hash}`` placeholder

    Returns:
        The full new changelog text, or ``""`` when there are no commits
    """
    if not commits:
        return ""

    section = build_entry(commits, version, date, commit_url).render()
    return merge_changelog(section, existing, header)


def read_changelog(path: Path) -> str:
    """Read a changelog, treating a missing file as empty.

    Raises:
        ChangelogError: If the file exists but cannot be read
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""
    except (OSError, UnicodeDecodeError) as e:
        raise ChangelogError(f"Cannot read {path}: {e}") from e


def write_changelog(path: Path, content: str) -> None:
    """Replace ``path`` with ``content``.

    The text is written to a temporary file beside ``path`` and moved
    into place, so a failed write leaves the previous file intact.

    Raises:
        ChangelogError: If the file cannot be written; the message carries
            the OS error
    """
    path = Path(path)
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as e:
        raise ChangelogError(f"Cannot write {path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        mode = path.stat().st_mode & 0o7777 if path.exists() else 0o644
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise ChangelogError(f"Cannot write {path}: {e}") from e
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.debug("Wrote %d characters to %s", len(content), path)
