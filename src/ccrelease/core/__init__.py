"""Core business logic for ccrelease.

This module contains the fundamental building blocks:
- Conventional commit classification
- Semantic version parsing and bump resolution
- Changelog synthesis and merging
"""

from __future__ import annotations

from ccrelease.core.changelog import (
    Category,
    ChangelogDocument,
    ChangelogEntry,
    build_entry,
    format_commit,
    group_commits,
    merge_changelog,
    parse_changelog,
    synthesize,
    write_changelog,
)
from ccrelease.core.commits import (
    CommitRecord,
    CommitType,
    RawCommit,
    classify,
    classify_commits,
    filter_skip_release_commits,
    validate_subject,
)
from ccrelease.core.version import (
    BumpType,
    PreRelease,
    Version,
    next_version,
    parse_version,
    resolve_bump,
    validate_prerelease_tag,
)

__all__ = [
    # Version
    "BumpType",
    # Changelog
    "Category",
    "ChangelogDocument",
    "ChangelogEntry",
    # Commits
    "CommitRecord",
    "CommitType",
    "PreRelease",
    "RawCommit",
    "Version",
    "build_entry",
    "classify",
    "classify_commits",
    "filter_skip_release_commits",
    "format_commit",
    "group_commits",
    "merge_changelog",
    "next_version",
    "parse_changelog",
    "parse_version",
    "resolve_bump",
    "synthesize",
    "validate_prerelease_tag",
    "validate_subject",
    "write_changelog",
]
