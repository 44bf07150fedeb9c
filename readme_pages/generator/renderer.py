"""Render README markdown, evaluated doctests and typography into HTML.

:class:`DocumentRenderer` applies a fixed sequence of stages to the source
text. The order matters: heading anchors must be rewritten before markdown
sees them, doctest blocks must become raw HTML before fenced code handling,
and typography must run last so it can skip the ``<pre>`` and example blocks
the earlier stages produced.
"""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from readme_pages._constants import (
    DOCTEST_LANGUAGE,
    NBSP,
    NBSP_PLACEHOLDER,
    PILCROW,
)
from readme_pages.doctests import doctests_to_markup
from readme_pages.substitution import apply_typography, substitute

HEADING_ANCHOR_PATTERN = re.compile(
    r"^(?P<hashes>#{1,6})[ \t]+"
    r'<a name="(?P<anchor>[^"]+)"(?P<rest>[^\n]*?)[ \t]*$',
    re.MULTILINE,
)
CODE_BLOCK_PATTERN = re.compile(
    r"^[ \t]*(?P<fence>[`~]{3,})(?P<lang>[A-Za-z0-9_+#.-]+)?[^\n]*\n"
    r"(?P<body>.*?)^[ \t]*(?P=fence)",
    re.MULTILINE | re.DOTALL,
)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
TRAILING_BLANK_LINE_PATTERN = re.compile(r"\n[ \t]*\n(?=</code></pre>)")
HEADING_OPEN_PATTERN = re.compile(r'<h([2-6]) id="([^"]*)">')


def doctest_block_pattern(language: str = DOCTEST_LANGUAGE) -> re.Pattern[str]:
    """Return the pattern matching fenced ``language`` blocks of transcripts."""
    return re.compile(
        rf"^```{re.escape(language)}[ \t]*\n(> .*?)^```[ \t]*$",
        re.MULTILINE | re.DOTALL,
    )


class DocumentRenderer:
    """Render a README into HTML with evaluated examples."""

    def __init__(
        self,
        pygments_style: str = "default",
        *,
        doctest_language: str = DOCTEST_LANGUAGE,
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used by ``codehilite``. Defaults to
            ``"default"``.
        doctest_language : str, optional
            Fence label marking transcript blocks that are evaluated.
        """
        self.pygments_style = pygments_style
        self.doctest_pattern = doctest_block_pattern(doctest_language)
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, text: str) -> str:
        """Run every rendering stage over ``text`` and return the HTML."""
        html = self.rewrite_heading_anchors(text)
        html = self.render_doctests(html)
        html = self.markdown(html)
        html = self.strip_trailing_blank_lines(html)
        html = self.insert_pilcrows(html)
        return apply_typography(html)

    @staticmethod
    def rewrite_heading_anchors(text: str) -> str:
        """Move ``<a name="ID">`` heading anchors onto the heading as ``{#ID}``."""

        def _repl(groups: tuple[str, ...]) -> str:
            _whole, hashes, anchor, rest = groups
            return f"{hashes} <a{rest} {{#{anchor}}}"

        return substitute(HEADING_ANCHOR_PATTERN, _repl, text)

    def render_doctests(self, text: str) -> str:
        """Replace transcript fences with evaluated example markup."""
        return substitute(
            self.doctest_pattern,
            lambda groups: f"\n{doctests_to_markup(groups[1])}\n",
            text,
        )

    def markdown(self, text: str) -> str:
        """Render markdown into HTML, shielding non-breaking spaces."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        md = Markdown(
            extensions=[
                "fenced_code",
                "codehilite",
                "tables",
                "sane_lists",
                "attr_list",
                "toc",
            ],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
            output_format="html5",
        )
        html = md.convert(normalized.replace(NBSP, NBSP_PLACEHOLDER))
        html = html.replace(NBSP_PLACEHOLDER, NBSP)
        return self._annotate_codehilite(html, normalized)

    @staticmethod
    def strip_trailing_blank_lines(html: str) -> str:
        """Drop the blank line markdown leaves before ``</code></pre>``."""
        return substitute(TRAILING_BLANK_LINE_PATTERN, lambda _groups: "\n", html)

    @staticmethod
    def insert_pilcrows(html: str) -> str:
        """Prefix each ``<h2>``-``<h6>`` heading with a self-link."""

        def _repl(groups: tuple[str, ...]) -> str:
            whole, level, anchor = groups
            return (
                f'<a class="pilcrow h{level}" href="#{anchor}">{PILCROW}</a>\n{whole}'
            )

        return substitute(HEADING_OPEN_PATTERN, _repl, html)

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group("lang") or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def render_document(text: str, *, pygments_style: str = "default") -> str:
    """Render ``text`` with a default :class:`DocumentRenderer`."""
    return DocumentRenderer(pygments_style).render(text)


__all__ = [
    "CODE_BLOCK_PATTERN",
    "DocumentRenderer",
    "doctest_block_pattern",
    "render_document",
]
