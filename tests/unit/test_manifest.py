"""Tests for reading the current version from project manifests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from ccrelease.exceptions import ProjectError, VersionNotFoundError
from ccrelease.project.manifest import (
    get_manifest_version,
    get_package_json_version,
    get_pyproject_version,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestGetPyprojectVersion:
    def test_pep621(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\nversion = "1.2.3"\n')

        assert get_pyproject_version(path) == "1.2.3"

    def test_poetry(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.poetry]\nname = 'x'\nversion = '0.4.0'\n")

        assert get_pyproject_version(path) == "0.4.0"

    def test_version_in_other_table_ignored(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[project]\nname = "x"\ndynamic = ["version"]\n\n[tool.other]\nversion = "9.9.9"\n'
        )

        assert get_pyproject_version(path) is None


class TestGetPackageJsonVersion:
    def test_version(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text(json.dumps({"name": "x", "version": "3.1.0"}))

        assert get_package_json_version(path) == "3.1.0"

    def test_missing_version(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text(json.dumps({"name": "x"}))

        assert get_package_json_version(path) is None

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text("{not json")

        with pytest.raises(ProjectError):
            get_package_json_version(path)


class TestGetManifestVersion:
    def test_prefers_pyproject(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[project]\nversion = "1.0.0"\n')
        (tmp_path / "package.json").write_text('{"version": "2.0.0"}')

        assert get_manifest_version(tmp_path) == "1.0.0"

    def test_falls_back_to_package_json(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        (tmp_path / "package.json").write_text('{"version": "2.0.0"}')

        assert get_manifest_version(tmp_path) == "2.0.0"

    def test_missing_raises(self, tmp_path: Path):
        with pytest.raises(VersionNotFoundError):
            get_manifest_version(tmp_path)
