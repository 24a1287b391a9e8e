"""Version of the tenant edge service.

Installed builds report the distribution metadata. Source checkouts run
with ``src/api`` on the path and no metadata, so the nearest
pyproject.toml above this file is used instead.
"""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "tenant-edge"
UNKNOWN_VERSION = "0.0.0+unknown"


def find_pyproject(start: Path) -> Path | None:
    """Return the closest pyproject.toml at or above ``start``."""
    for directory in (start, *start.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def read_pyproject_version(pyproject_path: Path) -> str | None:
    with open(pyproject_path, "rb") as f:
        project = tomllib.load(f).get("project", {})
    return project.get("version")


def get_version() -> str:
    """Get the service version.

    Returns:
        Version string (e.g., "0.1.0"), or ``UNKNOWN_VERSION`` when neither
        metadata nor a pyproject.toml with a version can be found.
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        pyproject_path = find_pyproject(Path(__file__).resolve().parent)
        if pyproject_path is None:
            return UNKNOWN_VERSION
        return read_pyproject_version(pyproject_path) or UNKNOWN_VERSION


__version__ = get_version()
