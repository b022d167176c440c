"""Version control access."""

from __future__ import annotations

from ccrelease.vcs.git import GitRepository

__all__ = ["GitRepository"]
