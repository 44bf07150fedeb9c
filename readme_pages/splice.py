"""Splice custom fragments into the README before rendering.

A fragment file holds the text to find, a delimiter line of 79 ``=``
characters, and the text to put in its place::

    ## Introduction
    ===============================================================================
    ## Introduction

    Text that only appears on the generated page.

The first occurrence of the find text in the document is replaced.
"""

from __future__ import annotations

import re
import typing as typ

from returns.result import Failure, Result, Success

from ._constants import SPLICE_DELIMITER

if typ.TYPE_CHECKING:
    from pathlib import Path

DELIMITER_PATTERN = re.compile(rf"^{SPLICE_DELIMITER}$\n?", re.MULTILINE)


def parse_fragment(fragment: str, *, name: str) -> Result[tuple[str, str], str]:
    """Split ``fragment`` into ``(find, replace)`` around its delimiter line.

    Parameters
    ----------
    fragment : str
        Raw fragment file contents.
    name : str
        Label used in error messages, usually the fragment path.

    Returns
    -------
    Result[tuple[str, str], str]
        The find and replace texts, or a failure when the fragment does not
        contain exactly one delimiter line.
    """
    parts = DELIMITER_PATTERN.split(fragment)
    if len(parts) != 2:  # noqa: PLR2004 - find and replace halves
        return Failure(
            f"Expected exactly one delimiter in {name} (found {len(parts) - 1})"
        )
    find, replace = parts
    return Success((find.removesuffix("\n"), replace))


def splice(document: str, fragment: str, *, name: str) -> Result[str, str]:
    """Apply ``fragment`` to ``document``, failing when its find text is absent."""

    def _apply(halves: tuple[str, str]) -> Result[str, str]:
        find, replace = halves
        if find not in document:
            return Failure(f"{name}: substring not found in document: {find!r}")
        return Success(document.replace(find, replace, 1))

    return parse_fragment(fragment, name=name).bind(_apply)


def read_text(path: Path) -> Result[str, str]:
    """Read ``path`` as UTF-8, converting IO errors into failures."""
    try:
        return Success(path.read_text(encoding="utf-8"))
    except OSError as exc:
        return Failure(f"Cannot read {path}: {exc.strerror or exc}")


def splice_file(document: str, path: Path) -> Result[str, str]:
    """Read the fragment at ``path`` and splice it into ``document``."""
    return read_text(path).bind(
        lambda fragment: splice(document, fragment, name=str(path))
    )


__all__ = ["DELIMITER_PATTERN", "parse_fragment", "read_text", "splice", "splice_file"]
