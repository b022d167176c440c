"""Configuration models.

All settings live under ``[tool.ccrelease]`` in pyproject.toml and are
validated with pydantic. Every field has a default, so an absent section
yields a fully usable configuration.
"""

from __future__ import annotations

import string
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class CommitsConfig(_Section):
    """How commits are read and classified."""

    breaking_marker: str = Field(
        default="BREAKING CHANGE",
        description="Substring in a commit body that marks a breaking change",
    )
    since: str | None = Field(
        default=None,
        description="Default start reference for the commit range",
    )
    skip_release_patterns: list[str] = Field(
        default_factory=lambda: ["[skip release]", "[release skip]", "[no release]"],
        description="Markers that exclude a commit from the release",
    )

    @field_validator("breaking_marker")
    @classmethod
    def _marker_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("breaking_marker must not be empty")
        return value


class ChangelogConfig(_Section):
    """Changelog output settings."""

    enabled: bool = True
    path: Path = Path("CHANGELOG.md")
    header: str = "# Changelog"
    commit_url: str = Field(
        default="../../commit/{hash}",
        description="Link target for each commit; {hash} is replaced",
    )

    @field_validator("commit_url")
    @classmethod
    def _url_has_hash(cls, value: str) -> str:
        if "{hash}" not in value:
            raise ValueError("commit_url must contain a {hash} placeholder")
        fields = {name for _, name, _, _ in string.Formatter().parse(value) if name is not None}
        if fields - {"hash"}:
            others = ", ".join(sorted("{" + name + "}" for name in fields - {"hash"}))
            raise ValueError(f"commit_url supports only the {{hash}} placeholder, found {others}")
        return value


class VersionConfig(_Section):
    """Version and tag settings."""

    tag_prefix: str = "v"
    pre_release: str | None = Field(
        default=None,
        pattern=r"^[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*$",
        description="Pre-release identifier used when --prerelease is not given",
    )


class PackagesConfig(_Section):
    """Monorepo package paths. Accepted but not acted upon."""

    paths: list[str] = Field(default_factory=list)


class ReleaseConfig(_Section):
    """Root configuration object."""

    default_branch: str = "main"
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
    packages: PackagesConfig = Field(default_factory=PackagesConfig)

    @property
    def effective_tag_prefix(self) -> str:
        return self.version.tag_prefix

    @property
    def effective_changelog_path(self) -> Path:
        return self.changelog.path

    @property
    def is_monorepo(self) -> bool:
        return bool(self.packages.paths)
