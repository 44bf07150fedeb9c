"""Load build settings for README page generation.

Settings live in an optional ``readme-pages.yaml`` next to the README. Every
key has a default, so a missing file simply yields :class:`BuildConfig`
defaults. Relative paths resolve against the directory holding the config
file, or the current directory when there is no file.

Examples
--------
>>> from pathlib import Path
>>> from readme_pages.config import load_build_config
>>> config = load_build_config(Path("readme-pages.yaml"))  # doctest: +SKIP
>>> config.output  # doctest: +SKIP
PosixPath('index.html')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from ._constants import (
    DEFAULT_FRAGMENTS,
    DEFAULT_MANIFEST,
    DEFAULT_OUTPUT,
    DOCTEST_LANGUAGE,
)


class ConfigError(ValueError):
    """Raised when the build configuration is invalid."""


@dc.dataclass(frozen=True, slots=True)
class BuildConfig:
    """Resolved settings consumed by :class:`PageGenerator`.

    Attributes
    ----------
    output : Path
        Where the generated HTML page is written.
    manifest : Path
        Package manifest holding the version string.
    fragments : tuple[Path, ...]
        Custom fragment files spliced into the README, in order.
    title : str or None
        Page title; ``None`` derives it from the first ``<h1>``.
    pygments_style : str
        Pygments style for highlighted code blocks.
    doctest_language : str
        Fence label of transcript blocks that are evaluated.
    """

    output: Path = Path(DEFAULT_OUTPUT)
    manifest: Path = Path(DEFAULT_MANIFEST)
    fragments: tuple[Path, ...] = tuple(Path(item) for item in DEFAULT_FRAGMENTS)
    title: str | None = None
    pygments_style: str = "default"
    doctest_language: str = DOCTEST_LANGUAGE


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(raw: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    value = raw.get(key, default)
    if not isinstance(value, str) or not value.strip():
        msg = f"'{key}' must be a non-empty string."
        raise ConfigError(msg)
    return value.strip()


def _resolve(base: Path, value: str) -> Path:
    path = Path(value)
    if path.is_absolute() or base == Path():
        return path
    return base / path


def _build_fragments(raw: typ.Mapping[str, typ.Any], base: Path) -> tuple[Path, ...]:
    value = raw.get("fragments", list(DEFAULT_FRAGMENTS))
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = "'fragments' must be a list of paths."
        raise ConfigError(msg)
    return tuple(_resolve(base, item) for item in value)


def load_build_config(path: Path | None = None) -> BuildConfig:
    """Load the YAML build configuration at ``path``.

    Parameters
    ----------
    path : Path or None, optional
        Config file location. ``None`` or a missing file yields defaults
        relative to the current directory.

    Returns
    -------
    BuildConfig
        Settings with relative paths resolved against the config directory.

    Raises
    ------
    ConfigError
        If the top-level YAML structure is not a mapping or a value has the
        wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.
    """
    if path is None or not path.exists():
        return BuildConfig()

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base = path.parent

    return BuildConfig(
        output=_resolve(base, _require_str(raw, "output", DEFAULT_OUTPUT)),
        manifest=_resolve(base, _require_str(raw, "manifest", DEFAULT_MANIFEST)),
        fragments=_build_fragments(raw, base),
        title=_optional_str(raw.get("title")),
        pygments_style=_require_str(raw, "pygments_style", "default"),
        doctest_language=_require_str(raw, "doctest_language", DOCTEST_LANGUAGE),
    )


__all__ = ["BuildConfig", "ConfigError", "load_build_config"]
