"""Build a nested table of contents from rendered heading tags.

Headings are folded left to right into a :class:`TocState`. Each step returns
a new state whose ``html`` extends the previous one, so the fold is a plain
``functools.reduce``. Level 1 is the root: the page title lives there and is
not listed; the first deeper heading opens ``<ul id="toc">``.

Example
-------
>>> from readme_pages.generator.toc import build_toc
>>> print(build_toc('<h1 id="t">T</h1><h2 id="a">A</h2><h3 id="b">B</h3>'), end="")
<ul id="toc">
  <li><a href="#a">A</a>
    <ul>
      <li><a href="#b">B</a>
      </li>
    </ul>
  </li>
</ul>
"""

from __future__ import annotations

import functools
import re
import typing as typ

from readme_pages.substitution import TYPESET_COLONS

from .models import HeadingRecord, TocState

if typ.TYPE_CHECKING:
    import collections.abc as cabc

HEADING_PATTERN = re.compile(r'<h([1-6]) id="([^"]*)">(.*?)</h\1>', re.DOTALL)
SIGNATURE_LINK_PATTERN = re.compile(
    r'^<a href="[^"]*">(<code>(?:(?!</?code>|<a[ >]).)*</code>)</a>$', re.DOTALL
)


def extract_headings(html: str) -> list[HeadingRecord]:
    """Return every ``<hN id="...">`` heading in ``html``, in document order."""
    return [
        HeadingRecord(
            level=int(match.group(1)),
            tag_name=f"h{match.group(1)}",
            anchor=match.group(2),
            inner_html=match.group(3),
        )
        for match in HEADING_PATTERN.finditer(html)
    ]


def heading_label(inner_html: str) -> str:
    """Return the TOC label for a heading's inner HTML.

    A heading that is a single link around a ``name :: signature`` code span
    is reduced to the bare ``<code>`` element so the TOC entry does not nest
    one link inside another.
    """
    match = SIGNATURE_LINK_PATTERN.match(inner_html.strip())
    if match:
        code = match.group(1)
        if " :: " in code or TYPESET_COLONS in code:
            return code
    return inner_html


def _indent(depth: int) -> str:
    return "  " * depth


def _open_item(record: HeadingRecord, level: int) -> str:
    label = heading_label(record.inner_html)
    return f'{_indent(2 * level - 3)}<li><a href="#{record.anchor}">{label}</a>\n'


def _close_item(level: int) -> str:
    return f"{_indent(2 * level - 3)}</li>\n"


def _close_list(level: int) -> str:
    return f"{_close_item(level)}{_indent(2 * level - 4)}</ul>\n"


def next_level(state: TocState, record: HeadingRecord) -> int:
    """Return the nesting level ``record`` occupies after ``state``.

    Deeper headings descend at most one level per step, and a heading using
    the same tag as its predecessor stays at the predecessor's level.
    """
    if record.level > state.level:
        if record.tag_name == state.tag_name:
            return state.level
        return state.level + 1
    return record.level


def fold_heading(state: TocState, record: HeadingRecord) -> TocState:
    """Return the state after emitting the markup for ``record``."""
    level = next_level(state, record)
    parts: list[str] = []
    if level > state.level:
        attrs = ' id="toc"' if state.level == 1 else ""
        parts.append(f"{_indent(2 * level - 4)}<ul{attrs}>\n")
        parts.append(_open_item(record, level))
    elif level < state.level:
        parts.extend(_close_list(depth) for depth in range(state.level, level, -1))
        if level > 1:
            parts.append(_close_item(level))
            parts.append(_open_item(record, level))
    elif level > 1:
        parts.append(_close_item(level))
        parts.append(_open_item(record, level))
    return TocState(
        level=level, tag_name=record.tag_name, html=state.html + "".join(parts)
    )


def close_toc(state: TocState) -> str:
    """Close every list still open in ``state`` and return the final HTML."""
    closing = "".join(_close_list(depth) for depth in range(state.level, 1, -1))
    return state.html + closing


def fold_headings(records: cabc.Iterable[HeadingRecord]) -> str:
    """Fold heading records into a nested ``<ul>`` fragment."""
    return close_toc(functools.reduce(fold_heading, records, TocState()))


def build_toc(html: str) -> str:
    """Return the table of contents for rendered document ``html``."""
    return fold_headings(extract_headings(html))


__all__ = [
    "HEADING_PATTERN",
    "build_toc",
    "close_toc",
    "extract_headings",
    "fold_heading",
    "fold_headings",
    "heading_label",
    "next_level",
]
