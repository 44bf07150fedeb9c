"""Tests for reading the project version from manifests."""

from __future__ import annotations

import json
import typing as typ

import pytest
from returns.pipeline import is_successful
from returns.result import Success

from readme_pages.manifest import read_version

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_reads_pyproject_version(tmp_path: Path) -> None:
    """``[project].version`` is the version of a pyproject manifest."""
    path = _write(tmp_path / "pyproject.toml", '[project]\nversion = "1.2.3"\n')
    assert read_version(path) == Success("1.2.3")


def test_reads_poetry_version(tmp_path: Path) -> None:
    """Poetry projects fall back to ``[tool.poetry].version``."""
    path = _write(tmp_path / "pyproject.toml", '[tool.poetry]\nversion = "0.9.0"\n')
    assert read_version(path) == Success("0.9.0")


def test_reads_json_version(tmp_path: Path) -> None:
    """JSON manifests provide a top-level ``version``."""
    path = _write(
        tmp_path / "package.json", json.dumps({"name": "demo", "version": "2.0.0"})
    )
    assert read_version(path) == Success("2.0.0")


@pytest.mark.parametrize(
    ("name", "text", "message"),
    [
        ("package.json", "{not json", "Invalid JSON"),
        ("package.json", "[1, 2]", "Expected a JSON object"),
        ("package.json", '{"version": 3}', "No version string found"),
        ("pyproject.toml", "[project\n", "Invalid TOML"),
        ("pyproject.toml", '[project]\nname = "x"\n', "No version string found"),
    ],
)
def test_malformed_manifests_fail(
    tmp_path: Path, name: str, text: str, message: str
) -> None:
    """Malformed manifests produce failures naming the problem."""
    result = read_version(_write(tmp_path / name, text))
    assert not is_successful(result), f"{text!r} should not yield a version"
    assert result.failure().startswith(message), result.failure()


def test_missing_manifest_fails(tmp_path: Path) -> None:
    """An unreadable manifest is reported as a read failure."""
    result = read_version(tmp_path / "package.json")
    assert not is_successful(result)
    assert result.failure().startswith("Cannot read"), result.failure()
