"""Semantic versions and bump resolution.

Bump kinds form a total order ``none < patch < minor < major``; the bump
for a set of commits is the maximum over the per-commit bumps.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from ccrelease.core.commits import CommitType
from ccrelease.exceptions import InvalidVersionError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ccrelease.core.commits import CommitRecord


class BumpType(str, Enum):
    """Kind of version bump."""

    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __str__(self) -> str:
        return self.value


_SEVERITY = {
    BumpType.NONE: 0,
    BumpType.PATCH: 1,
    BumpType.MINOR: 2,
    BumpType.MAJOR: 3,
}

_PATCH_TYPES = frozenset({CommitType.FIX, CommitType.PERF})


def commit_bump(commit: CommitRecord) -> BumpType:
    """Bump implied by a single commit."""
    if commit.breaking:
        return BumpType.MAJOR
    if commit.type is CommitType.FEAT:
        return BumpType.MINOR
    if commit.type in _PATCH_TYPES:
        return BumpType.PATCH
    return BumpType.NONE


def resolve_bump(commits: Iterable[CommitRecord]) -> BumpType:
    """Fold commits into a single bump decision.

    >>> resolve_bump([])
    <BumpType.NONE: 'none'>
    """
    return max((commit_bump(c) for c in commits), key=lambda b: b.severity, default=BumpType.NONE)


_VERSION_PATTERN = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

_PRERELEASE_TAG = re.compile(r"^[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*$")


def validate_prerelease_tag(tag: str) -> str:
    """Check a pre-release identifier such as ``rc`` or ``beta.x``.

    Raises:
        InvalidVersionError: If the tag is not dot-separated alphanumerics and hyphens
    """
    if not _PRERELEASE_TAG.match(tag):
        raise InvalidVersionError(f"Invalid pre-release identifier: {tag!r}")
    return tag


@dataclass(frozen=True)
class PreRelease:
    """Pre-release suffix such as ``rc.1``.

    ``number`` is ``None`` for a suffix without a numeric counter (``alpha``).
    """

    tag: str
    number: int | None = None

    @classmethod
    def parse(cls, text: str) -> PreRelease:
        tag, sep, last = text.rpartition(".")
        if sep and last.isdigit():
            return cls(tag, int(last))
        return cls(text)

    def __str__(self) -> str:
        if self.number is None:
            return self.tag
        return f"{self.tag}.{self.number}"


@dataclass(frozen=True)
class Version:
    """A ``MAJOR.MINOR.PATCH[-prerelease]`` semantic version."""

    major: int
    minor: int
    patch: int
    prerelease: PreRelease | None = None

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string, accepting an optional ``v`` prefix.

        Raises:
            InvalidVersionError: If the string is not a semantic version
        """
        match = _VERSION_PATTERN.match(text.strip())
        if match is None:
            raise InvalidVersionError(f"Invalid semantic version: {text!r}")

        pre = match.group("pre")
        return cls(
            int(match.group("major")),
            int(match.group("minor")),
            int(match.group("patch")),
            PreRelease.parse(pre) if pre else None,
        )

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is None:
            return base
        return f"{base}-{self.prerelease}"

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def base(self) -> Version:
        """The version without its pre-release suffix."""
        return replace(self, prerelease=None)

    @property
    def carried_bump(self) -> BumpType:
        """Strongest bump this version's numbers already express.

        ``2.0.0`` can be the result of a major bump, ``2.1.0`` of a minor
        bump and ``2.1.3`` only of a patch bump.
        """
        if self.minor == 0 and self.patch == 0:
            return BumpType.MAJOR
        if self.patch == 0:
            return BumpType.MINOR
        return BumpType.PATCH

    def bump(self, kind: BumpType) -> Version:
        """Apply a numeric bump.

        A pre-release version graduates to its base when the base already
        carries a bump at least as strong as ``kind``.
        """
        if kind is BumpType.NONE:
            return self

        if self.is_prerelease and self.carried_bump.severity >= kind.severity:
            return self.base

        if kind is BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if kind is BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    def with_prerelease(self, tag: str) -> Version:
        """Attach ``-tag.n``, continuing the counter when the tag already matches."""
        validate_prerelease_tag(tag)
        current = self.prerelease
        if current is not None and current.tag == tag:
            number = 0 if current.number is None else current.number + 1
        else:
            number = 0
        return replace(self, prerelease=PreRelease(tag, number))


def parse_version(text: str) -> Version:
    """Parse a version string. See :meth:`Version.parse`."""
    return Version.parse(text)


def next_version(current: Version, kind: BumpType, prerelease: str | None = None) -> Version:
    """Compute the version that follows ``current`` for a resolved bump.

    Without ``prerelease`` this is :meth:`Version.bump`.

    With a pre-release tag, the bump still picks the numeric component.
    If ``current`` already carries the same tag and its base already
    expresses a bump at least as strong, only the counter advances
    (``2.0.0-rc.0`` + major -> ``2.0.0-rc.1``). Otherwise the base is
    bumped and the counter starts at 0. A ``none`` bump changes nothing.

    Raises:
        InvalidVersionError: If ``prerelease`` is not a valid identifier
    """
    if prerelease is not None:
        validate_prerelease_tag(prerelease)

    if kind is BumpType.NONE:
        return current

    if prerelease is None:
        return current.bump(kind)

    if current.is_prerelease and current.base.carried_bump.severity >= kind.severity:
        return current.with_prerelease(prerelease)

    return current.base.bump(kind).with_prerelease(prerelease)
