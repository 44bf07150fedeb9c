"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class HeadingRecord:
    """Heading extracted from rendered HTML, in document order.

    Attributes
    ----------
    level : int
        Heading level between 1 and 6.
    tag_name : str
        Tag name such as ``"h2"``.
    anchor : str
        Value of the heading's ``id`` attribute.
    inner_html : str
        Markup between the opening and closing heading tags.
    """

    level: int
    tag_name: str
    anchor: str
    inner_html: str


@dc.dataclass(frozen=True, slots=True)
class TocState:
    """Accumulator threaded through the table-of-contents fold."""

    level: int = 1
    tag_name: str = "h1"
    html: str = ""


__all__ = ["HeadingRecord", "TocState"]
