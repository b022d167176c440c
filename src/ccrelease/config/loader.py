"""Load configuration from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ccrelease.config.models import ReleaseConfig
from ccrelease.exceptions import ConfigNotFoundError, ConfigValidationError
from ccrelease.log import get_logger

logger = get_logger(__name__)

TOOL_NAME = "ccrelease"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or any of its parents.

    Args:
        start: Directory to search from (defaults to cwd)

    Returns:
        Path to the pyproject.toml file

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the filesystem root
    """
    current = (start or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_tool_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.ccrelease]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def load_config(path: Path | None = None) -> ReleaseConfig:
    """Load configuration for the project at ``path``.

    A missing pyproject.toml or a missing ``[tool.ccrelease]`` section
    yields the default configuration.

    Raises:
        ConfigValidationError: If the configuration is invalid
    """
    try:
        pyproject_path = find_pyproject_toml(path)
    except ConfigNotFoundError:
        logger.debug("No pyproject.toml found, using default configuration")
        return ReleaseConfig()

    data = extract_tool_config(load_pyproject_toml(pyproject_path))
    logger.debug("Loaded [tool.%s] from %s", TOOL_NAME, pyproject_path)

    try:
        return ReleaseConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_NAME}] configuration: {e}") from e
