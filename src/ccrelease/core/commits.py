"""Conventional commit classification.

Turns raw ``{hash, subject, body}`` commits into :class:`CommitRecord`
objects. Classification never fails: a subject that does not follow
the ``type(scope): description`` format is recorded as ``other``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ccrelease.config.models import CommitsConfig

DEFAULT_BREAKING_MARKER = "BREAKING CHANGE"


class CommitType(str, Enum):
    """Closed set of commit types."""

    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    CHORE = "chore"
    CI = "ci"
    REVERT = "revert"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


# Types that can appear as a subject prefix; OTHER is the fallback only.
RECOGNIZED_TYPES: tuple[CommitType, ...] = tuple(t for t in CommitType if t is not CommitType.OTHER)

_RECOGNIZED_VALUES = frozenset(t.value for t in RECOGNIZED_TYPES)
_TYPES_PATTERN = "|".join(t.value for t in RECOGNIZED_TYPES)

CONVENTIONAL_PATTERN = re.compile(
    rf"^(?P<type>{_TYPES_PATTERN})(?:\((?P<scope>[^)]+)\))?:\s*(?P<description>\S.*)$"
)

# Header form validate_subject accepts: a space must follow the colon.
_STRICT_HEADER = re.compile(rf"^(?:{_TYPES_PATTERN})(?:\([^)]+\))?: ")

# Loose header shape, used only to explain why a subject failed validation.
_HEADER_SHAPE = re.compile(r"^(?P<type>[^\s():!]+)(?:\((?P<scope>[^)]*)\))?(?P<bang>!?):")


@dataclass(frozen=True)
class RawCommit:
    """A commit as read from version control."""

    hash: str
    subject: str
    body: str = ""


@dataclass(frozen=True)
class CommitRecord:
    """A classified commit.

    Attributes:
        hash: Short commit hash
        subject: First line of the commit message
        body: Remaining message text (may be empty)
        type: Commit type, ``other`` when the subject is not conventional
        scope: Scope inside the parentheses, or ``""``
        description: Subject with the ``type(scope):`` prefix removed
        breaking: Whether the body carries the breaking-change marker
    """

    hash: str
    subject: str
    body: str
    type: CommitType
    scope: str
    description: str
    breaking: bool

    @property
    def is_conventional(self) -> bool:
        return self.type is not CommitType.OTHER


def classify(raw: RawCommit, breaking_marker: str = DEFAULT_BREAKING_MARKER) -> CommitRecord:
    """Classify a single commit.

    Args:
        raw: Commit to classify
        breaking_marker: Case-sensitive substring that marks a breaking change

    Returns:
        The classified commit record
    """
    breaking = breaking_marker in raw.body
    match = CONVENTIONAL_PATTERN.match(raw.subject)

    if match is None:
        return CommitRecord(
            hash=raw.hash,
            subject=raw.subject,
            body=raw.body,
            type=CommitType.OTHER,
            scope="",
            description=raw.subject,
            breaking=breaking,
        )

    return CommitRecord(
        hash=raw.hash,
        subject=raw.subject,
        body=raw.body,
        type=CommitType(match.group("type")),
        scope=match.group("scope") or "",
        description=match.group("description"),
        breaking=breaking,
    )


def classify_commits(
    commits: Iterable[RawCommit],
    config: CommitsConfig | None = None,
) -> list[CommitRecord]:
    """Classify commits, preserving their order."""
    marker = config.breaking_marker if config is not None else DEFAULT_BREAKING_MARKER
    return [classify(c, marker) for c in commits]


def filter_skip_release_commits(
    commits: Sequence[RawCommit],
    patterns: Sequence[str],
) -> list[RawCommit]:
    """Drop commits carrying a skip-release marker.

    Markers are matched case-insensitively against subject and body.
    """
    if not patterns:
        return list(commits)

    lowered = [p.lower() for p in patterns]
    kept = []
    for commit in commits:
        text = f"{commit.subject}\n{commit.body}".lower()
        if not any(p in text for p in lowered):
            kept.append(commit)
    return kept


@dataclass(frozen=True)
class SubjectValidation:
    """Result of validating one commit subject."""

    subject: str
    is_valid: bool
    error: str | None = None
    record: CommitRecord | None = None


def validate_subject(subject: str, hash: str = "") -> SubjectValidation:
    """Check that a subject follows the conventional commit format.

    Stricter than :func:`classify`: the colon must be followed by a space,
    so ``feat:x`` classifies as a feature but fails validation.

    Args:
        subject: Commit subject line
        hash: Optional commit hash, carried into the record

    Returns:
        Validation result with an error message when invalid
    """
    if not subject.strip():
        return SubjectValidation(subject, False, "Commit subject cannot be empty")

    record = classify(RawCommit(hash=hash, subject=subject))
    if record.is_conventional:
        if _STRICT_HEADER.match(subject):
            return SubjectValidation(subject, True, record=record)
        return SubjectValidation(
            subject, False, "Missing space after ':' in 'type(scope): description'", record
        )

    shape = _HEADER_SHAPE.match(subject)
    if shape is not None and shape.group("type") not in _RECOGNIZED_VALUES:
        allowed = ", ".join(t.value for t in RECOGNIZED_TYPES)
        error = f"Invalid commit type '{shape.group('type')}'. Allowed types: {allowed}"
    elif shape is not None and shape.group("bang"):
        error = (
            f"'!' is not a breaking-change marker; put '{DEFAULT_BREAKING_MARKER}' in the body"
        )
    elif shape is not None and shape.group("scope") == "":
        error = "Scope must not be empty"
    elif shape is not None:
        error = "Subject must have a non-empty description after 'type(scope):'"
    else:
        error = "Subject does not follow conventional commit format 'type(scope): description'"

    return SubjectValidation(subject, False, error, record)
