"""Exception hierarchy for ccrelease.

Library code raises these; the CLI catches them at the command
boundary and turns them into an error message and exit code 1.
"""

from __future__ import annotations


class ReleaseError(Exception):
    """Base class for all ccrelease errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# Configuration


class ConfigError(ReleaseError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


# Versions


class VersionError(ReleaseError):
    """Base class for version errors."""


class InvalidVersionError(VersionError):
    """A version string is not a valid semantic version."""


class VersionNotFoundError(VersionError):
    """The current version could not be found in any manifest."""


# Project / changelog / git


class ProjectError(ReleaseError):
    """A project manifest could not be read."""


class ChangelogError(ReleaseError):
    """The changelog could not be read or written."""


class GitError(ReleaseError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        if self.stderr:
            return f"{self.message}: {self.stderr.strip()}"
        return self.message
