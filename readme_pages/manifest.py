"""Read the project version from a package manifest.

``pyproject.toml`` manifests provide ``[project].version`` (or, for Poetry
projects, ``[tool.poetry].version``); ``package.json`` style manifests provide
a top-level ``version``.
"""

from __future__ import annotations

import json
import tomllib
import typing as typ

from returns.result import Failure, Result, Success

from .splice import read_text

if typ.TYPE_CHECKING:
    from pathlib import Path


def _extract_version(text: str, path: Path) -> Result[str, str]:
    """Return the version string recorded in manifest ``text``."""
    if path.suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            return Failure(f"Invalid TOML in {path}: {exc}")
        version = (data.get("project") or {}).get("version")
        if version is None:
            poetry = (data.get("tool") or {}).get("poetry") or {}
            version = poetry.get("version")
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            return Failure(f"Invalid JSON in {path}: {exc}")
        if not isinstance(data, dict):
            return Failure(f"Expected a JSON object in {path}")
        version = data.get("version")
    if not isinstance(version, str) or not version.strip():
        return Failure(f"No version string found in {path}")
    return Success(version.strip())


def read_version(path: Path) -> Result[str, str]:
    """Read the manifest at ``path`` and return its version string.

    Parameters
    ----------
    path : Path
        Manifest file; ``.toml`` files are parsed as TOML, anything else as
        JSON.

    Returns
    -------
    Result[str, str]
        The version, or a failure naming the unreadable or malformed manifest.
    """
    return read_text(path).bind(lambda text: _extract_version(text, path))


__all__ = ["read_version"]
