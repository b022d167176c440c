"""Read the current version from a project manifest.

Supported manifests, in lookup order:

- ``pyproject.toml`` with ``[project].version`` (PEP 621)
- ``pyproject.toml`` with ``[tool.poetry].version``
- ``package.json`` with a top-level ``"version"``

Versions are only read here. Writing the bumped version back is left
to the release tooling that consumes the bump decision.
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING

from ccrelease.exceptions import ProjectError, VersionNotFoundError
from ccrelease.log import get_logger

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger(__name__)

PYPROJECT = "pyproject.toml"
PACKAGE_JSON = "package.json"


def get_pyproject_version(pyproject_path: Path) -> str | None:
    """Version from pyproject.toml, or None if it declares none.

    Uses targeted regexes so dynamic or malformed tables elsewhere in the
    file do not matter.
    """
    content = pyproject_path.read_text(encoding="utf-8")

    # PEP 621 first, then Poetry
    for table in (r"\[project\]", r"\[tool\.poetry\]"):
        section = re.search(rf"^{table}[ \t]*$(.*?)(?=^\[|\Z)", content, re.MULTILINE | re.DOTALL)
        if section is None:
            continue
        match = re.search(
            r'^version\s*=\s*["\']([^"\']+)["\']',
            section.group(1),
            re.MULTILINE,
        )
        if match:
            return match.group(1)

    return None


def get_package_json_version(package_path: Path) -> str | None:
    """Version from package.json, or None if it declares none.

    Raises:
        ProjectError: If the file is not valid JSON
    """
    try:
        data = json.loads(package_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ProjectError(f"Invalid JSON in {package_path}: {e}") from e

    version = data.get("version") if isinstance(data, dict) else None
    return version if isinstance(version, str) else None


def get_manifest_version(project_path: Path) -> str:
    """Current version of the project in ``project_path``.

    Raises:
        VersionNotFoundError: If no manifest declares a version
    """
    pyproject = project_path / PYPROJECT
    if pyproject.is_file():
        version = get_pyproject_version(pyproject)
        if version:
            logger.debug("Version %s from %s", version, pyproject)
            return version

    package_json = project_path / PACKAGE_JSON
    if package_json.is_file():
        version = get_package_json_version(package_json)
        if version:
            logger.debug("Version %s from %s", version, package_json)
            return version

    raise VersionNotFoundError(
        f"Could not find a version in {project_path}. "
        "Expected [project].version or [tool.poetry].version in pyproject.toml, "
        "or a version field in package.json."
    )
