"""timedquiz package."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

__all__ = ["__version__"]


def _version_from_pyproject() -> str | None:
    """Read the version from a checkout's pyproject.toml when running from source."""
    for base in Path(__file__).resolve().parents:
        pyproject = base / "pyproject.toml"
        if not pyproject.is_file():
            continue
        with pyproject.open("rb") as handle:
            data = tomllib.load(handle)
        project = data.get("project", {})
        if project.get("name") == "timedquiz":
            return str(project.get("version")) if project.get("version") else None
    return None


def _resolve_version() -> str:
    local = _version_from_pyproject()
    if local is not None:
        return local
    try:
        return version("timedquiz")
    except PackageNotFoundError:
        return "0+unknown"


__version__ = _resolve_version()
