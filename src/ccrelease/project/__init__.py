"""Project manifest access."""

from __future__ import annotations

from ccrelease.project.manifest import get_manifest_version

__all__ = ["get_manifest_version"]
