"""Unit tests for version lookup."""

from pathlib import Path

import pytest

from infrastructure import version as version_module
from infrastructure.version import (
    UNKNOWN_VERSION,
    find_pyproject,
    get_version,
    read_pyproject_version,
)


class TestFindPyproject:
    """Tests for locating pyproject.toml."""

    def test_finds_file_in_parent_directory(self, tmp_path: Path) -> None:
        """The nearest pyproject.toml above the start directory is used."""
        (tmp_path / "pyproject.toml").write_text('[project]\nversion = "1.2.3"\n')
        nested = tmp_path / "src" / "api"
        nested.mkdir(parents=True)

        assert find_pyproject(nested) == tmp_path / "pyproject.toml"

    def test_start_directory_itself_is_checked(self, tmp_path: Path) -> None:
        """A pyproject.toml in the start directory wins over parents."""
        (tmp_path / "pyproject.toml").write_text("[project]\n")
        nested = tmp_path / "pkg"
        nested.mkdir()
        (nested / "pyproject.toml").write_text("[project]\n")

        assert find_pyproject(nested) == nested / "pyproject.toml"


class TestReadPyprojectVersion:
    """Tests for reading the project version."""

    def test_reads_project_version(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\nversion = "1.2.3"\n')

        assert read_pyproject_version(path) == "1.2.3"

    def test_missing_version_is_none(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool.other]\nkey = 1\n')

        assert read_pyproject_version(path) is None


class TestGetVersion:
    """Tests for get_version fallbacks."""

    def test_falls_back_to_unknown_without_metadata_or_pyproject(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A missing distribution and pyproject never crash startup."""

        def _not_installed(name: str) -> str:
            raise version_module.PackageNotFoundError(name)

        monkeypatch.setattr(version_module, "version", _not_installed)
        monkeypatch.setattr(version_module, "find_pyproject", lambda start: None)

        assert get_version() == UNKNOWN_VERSION

    def test_falls_back_to_pyproject_without_metadata(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Source checkouts report the pyproject version."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nversion = "9.9.9"\n')

        def _not_installed(name: str) -> str:
            raise version_module.PackageNotFoundError(name)

        monkeypatch.setattr(version_module, "version", _not_installed)
        monkeypatch.setattr(version_module, "find_pyproject", lambda start: path)

        assert get_version() == "9.9.9"
