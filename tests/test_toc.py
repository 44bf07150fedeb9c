"""Tests for table-of-contents construction."""

from __future__ import annotations

from bs4 import BeautifulSoup

from readme_pages.generator.models import HeadingRecord, TocState
from readme_pages.generator.toc import (
    build_toc,
    extract_headings,
    fold_heading,
    heading_label,
    next_level,
)
from readme_pages.substitution import TYPESET_COLONS


def _headings(*specs: tuple[int, str]) -> str:
    return "\n".join(
        f'<h{level} id="{anchor}">{anchor.title()}</h{level}>'
        for level, anchor in specs
    )


def _balanced(html: str) -> bool:
    opened = (html.count("<ul"), html.count("<li>"))
    closed = (html.count("</ul>"), html.count("</li>"))
    return opened == closed


def test_extract_headings_reads_level_anchor_and_inner_html() -> None:
    """Headings become records in document order."""
    records = extract_headings('<h1 id="t">T</h1>\n<h2 id="a"><code>x</code></h2>')
    assert records == [
        HeadingRecord(level=1, tag_name="h1", anchor="t", inner_html="T"),
        HeadingRecord(level=2, tag_name="h2", anchor="a", inner_html="<code>x</code>"),
    ]


def test_nested_structure() -> None:
    """``h1, h2, h3, h2`` yields two top-level items, the first with a child."""
    toc = build_toc(_headings((1, "title"), (2, "a"), (3, "b"), (2, "c")))
    assert toc == (
        '<ul id="toc">\n'
        '  <li><a href="#a">A</a>\n'
        "    <ul>\n"
        '      <li><a href="#b">B</a>\n'
        "      </li>\n"
        "    </ul>\n"
        "  </li>\n"
        '  <li><a href="#c">C</a>\n'
        "  </li>\n"
        "</ul>\n"
    )
    soup = BeautifulSoup(toc, "html.parser")
    top = soup.select("ul#toc > li")
    assert len(top) == 2, f"expected two top-level entries, found {len(top)}"
    assert [a["href"] for a in top[0].select(":scope > ul > li > a")] == ["#b"]


def test_deeper_jumps_descend_one_level() -> None:
    """An ``h4`` directly under an ``h2`` nests only one level deeper."""
    toc = build_toc(_headings((2, "a"), (4, "b"), (2, "c")))
    soup = BeautifulSoup(toc, "html.parser")
    assert [a["href"] for a in soup.select("ul#toc > li > a")] == ["#a", "#c"]
    assert [a["href"] for a in soup.select("ul#toc > li > ul > li > a")] == ["#b"]


def test_repeated_tag_stays_at_the_same_level() -> None:
    """A heading with its predecessor's tag never nests under it."""
    toc = build_toc(_headings((3, "a"), (3, "b")))
    soup = BeautifulSoup(toc, "html.parser")
    assert [a["href"] for a in soup.select("ul#toc > li > a")] == ["#a", "#b"]


def test_next_level_rules() -> None:
    """Descend by one unless the tag repeats; otherwise take the heading level."""
    state = TocState(level=2, tag_name="h2", html="")
    deeper = HeadingRecord(level=4, tag_name="h4", anchor="x", inner_html="X")
    same_tag = HeadingRecord(level=4, tag_name="h2", anchor="x", inner_html="X")
    shallower = HeadingRecord(level=1, tag_name="h1", anchor="x", inner_html="X")
    assert next_level(state, deeper) == 3
    assert next_level(state, same_tag) == 2
    assert next_level(state, shallower) == 1


def test_multi_level_ascent_closes_every_list() -> None:
    """Returning from ``h4`` to ``h2`` closes both nested lists."""
    toc = build_toc(_headings((2, "a"), (3, "b"), (4, "c"), (2, "d")))
    assert _balanced(toc), toc
    soup = BeautifulSoup(toc, "html.parser")
    assert [a["href"] for a in soup.select("ul#toc > li > a")] == ["#a", "#d"]
    assert soup.select_one("ul#toc > li > ul > li > ul > li > a")["href"] == "#c"


def test_returning_to_root_closes_the_toc() -> None:
    """A later ``h1`` closes the list without adding an entry."""
    toc = build_toc(_headings((2, "a"), (1, "b")))
    assert toc == '<ul id="toc">\n  <li><a href="#a">A</a>\n  </li>\n</ul>\n'


def test_fold_heading_extends_previous_html() -> None:
    """Each fold step appends to the accumulated markup."""
    record = HeadingRecord(level=2, tag_name="h2", anchor="a", inner_html="A")
    state = fold_heading(TocState(html="<!-- start -->\n"), record)
    assert state.html.startswith("<!-- start -->\n<ul id=\"toc\">\n")
    assert (state.level, state.tag_name) == (2, "h2")


def test_signature_links_are_reduced_to_code() -> None:
    """A linked ``name :: signature`` heading is listed by its code alone."""
    code = f"<code>map{TYPESET_COLONS}Functor f</code>"
    assert heading_label(f'<a href="#map">{code}</a>') == code
    assert heading_label('<a href="#m"><code>m :: a</code></a>') == "<code>m :: a</code>"


def test_other_headings_keep_their_markup() -> None:
    """Headings that are not signature links are listed unchanged."""
    assert heading_label("Plain <em>text</em>") == "Plain <em>text</em>"
    linked = '<a href="#x"><code>plain</code></a>'
    assert heading_label(linked) == linked


def test_no_headings_yield_empty_toc() -> None:
    """Documents without section headings produce no list."""
    assert build_toc("<p>nothing here</p>") == ""
    assert build_toc('<h1 id="t">Title</h1>') == ""
