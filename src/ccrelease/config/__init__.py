"""Configuration management for ccrelease."""

from __future__ import annotations

from ccrelease.config.loader import load_config
from ccrelease.config.models import (
    ChangelogConfig,
    CommitsConfig,
    PackagesConfig,
    ReleaseConfig,
    VersionConfig,
)

__all__ = [
    "ChangelogConfig",
    "CommitsConfig",
    "PackagesConfig",
    "ReleaseConfig",
    "VersionConfig",
    "load_config",
]
