r"""Pattern-driven text substitution and typographic touch-ups.

Everything that rewrites rendered text goes through :func:`substitute`: a
compiled pattern is scanned across the subject and each match is replaced by
whatever the supplied function returns for the match groups. HTML escaping
and the typographic pass over rendered documents are both compositions of it.

Example
-------
>>> import re
>>> from readme_pages.substitution import escape_html, substitute
>>> substitute(re.compile(r"(\d+)"), lambda groups: groups[1] * 2, "a1b23")
'a11b2323'
>>> escape_html('<a href="x">&</a>')
'&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;'
"""

from __future__ import annotations

import re
import typing as typ

Groups = tuple[str, ...]
Replacer = typ.Callable[[Groups], str]

_HTML_ESCAPES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile("&"), "&amp;"),
    (re.compile("<"), "&lt;"),
    (re.compile(">"), "&gt;"),
    (re.compile('"'), "&quot;"),
)

TYPOGRAPHY_PATTERN = re.compile(
    r"""
    (?P<protected>
        <pre\b[^>]*>.*?</pre>
      | <div\ class="examples">(?:</div>|.*?\n</div>)
      | <[^>]*>
    )
    | (?P<colons>\ ::\ )
    | (?<!-)(?P<shaft>[=~-])(?:>|&gt;)
    | (?P<ellipsis>\.\.\.)
    """,
    re.DOTALL | re.VERBOSE,
)

_TIGHT_COLON = '<span class="tight">:</span>'
TYPESET_COLONS = f" {_TIGHT_COLON}{_TIGHT_COLON} "
_TIGHT_PERIOD = '<span class="tight">.</span>'
_ARROWS = {
    "=": '<span class="arrow">=&gt;</span>',
    "~": '<span class="arrow">~&gt;</span>',
    "-": '<span class="arrow"><span class="hyphen">-</span>&gt;</span>',
}


def substitute(pattern: re.Pattern[str], replace: Replacer, subject: str) -> str:
    """Replace every match of ``pattern`` in ``subject`` with ``replace(groups)``.

    Parameters
    ----------
    pattern : re.Pattern[str]
        Compiled pattern; pass ``re.DOTALL``/``re.MULTILINE`` when compiling
        to match across lines or anchor on line boundaries.
    replace : Callable[[tuple[str, ...]], str]
        Receives ``(whole_match, group_1, ...)``. Unmatched optional groups
        are passed as empty strings.
    subject : str
        Text to scan.

    Returns
    -------
    str
        ``subject`` with each non-overlapping match replaced; text outside
        matches is copied verbatim.
    """

    def _repl(match: re.Match[str]) -> str:
        groups = (match.group(0), *(group or "" for group in match.groups()))
        return replace(groups)

    return pattern.sub(_repl, subject)


def escape_html(text: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` in that order."""
    for pattern, entity in _HTML_ESCAPES:
        text = substitute(pattern, lambda _groups, entity=entity: entity, text)
    return text


def _typeset(groups: Groups) -> str:
    whole, protected, colons, shaft, ellipsis = groups
    if protected:
        return whole
    if colons:
        return TYPESET_COLONS
    if shaft:
        return _ARROWS[shaft]
    if ellipsis:
        return _TIGHT_PERIOD * 3
    return whole


def apply_typography(html: str) -> str:
    """Typeset signature colons, arrows and ellipses outside code regions.

    ``<pre>`` blocks, rendered ``<div class="examples">`` blocks and the tags
    themselves (so attribute values such as ``href`` keep their text) are
    matched first and returned untouched.
    """
    return substitute(TYPOGRAPHY_PATTERN, _typeset, html)


__all__ = [
    "TYPESET_COLONS",
    "TYPOGRAPHY_PATTERN",
    "apply_typography",
    "escape_html",
    "substitute",
]
