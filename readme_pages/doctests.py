r"""Turn REPL transcripts in fenced code blocks into evaluated example markup.

A transcript line starting with ``> `` opens a statement; following lines
starting with ``. `` continue it. Any other line in the block, such as an
expected result written in the README, is ignored because every example is
re-evaluated in the sandbox.

Example
-------
>>> from readme_pages.doctests import parse_statement_groups
>>> groups = parse_statement_groups("> T.pipe(\n.   [1, 2],\n.   sum)\n3\n")
>>> groups[0].expression
'T.pipe( [1, 2], sum)'
"""

from __future__ import annotations

import dataclasses as dc
import re

from returns.pipeline import is_successful

from ._constants import NBSP
from .sandbox import evaluate
from .substitution import escape_html

GROUP_PATTERN = re.compile(r"^> .*(?:\n\. .*)*", re.MULTILINE)
GLOBAL_PREFIX_PATTERN = re.compile(r"^builtins\.")
PROMPT_MARKER = NBSP + ">"
INDENT = "    "


@dc.dataclass(frozen=True, slots=True)
class StatementGroup:
    """One REPL statement reassembled from transcript lines.

    Attributes
    ----------
    lines : tuple[str, ...]
        Transcript lines with their two-character prefix stripped and
        surrounding whitespace trimmed, primary line first.
    """

    lines: tuple[str, ...]

    @property
    def expression(self) -> str:
        """Return the lines joined into a single logical expression."""
        first, *rest = self.lines
        return first + "".join(f" {line}" for line in rest)


@dc.dataclass(frozen=True, slots=True)
class ExamplePair:
    """Rendered input and output markup for one statement group."""

    input_html: str
    output_html: str


def parse_statement_groups(block: str) -> list[StatementGroup]:
    """Split a transcript block into statement groups, in document order."""
    groups: list[StatementGroup] = []
    for match in GROUP_PATTERN.finditer(block):
        lines = tuple(line[2:].strip() for line in match.group(0).split("\n"))
        groups.append(StatementGroup(lines=lines))
    return groups


def display_expression(expression: str) -> str:
    """Rewrite a leading ``builtins.`` assignment as a local declaration."""
    return GLOBAL_PREFIX_PATTERN.sub("", expression, count=1)


def render_input(expression: str) -> str:
    """Return the ``<input>`` element and prompt marker for ``expression``."""
    return (
        f'<input value="{escape_html(display_expression(expression))}">'
        f"{escape_html(PROMPT_MARKER)}"
    )


def render_output(expression: str) -> str:
    """Evaluate ``expression`` and return the output ``<div>``."""
    result = evaluate(expression)
    if is_successful(result):
        return f'<div class="output">{escape_html(result.unwrap())}</div>'
    message = escape_html("! " + result.failure())
    return f'<div class="output" data-error="true">{message}</div>'


def build_examples(block: str) -> list[ExamplePair]:
    """Evaluate every statement group in ``block`` and render its markup."""
    return [
        ExamplePair(
            input_html=render_input(group.expression),
            output_html=render_output(group.expression),
        )
        for group in parse_statement_groups(block)
    ]


def _form(pair: ExamplePair) -> str:
    return f"<form>\n  {pair.input_html}\n  {pair.output_html}\n</form>"


def doctests_to_markup(block: str) -> str:
    """Render a transcript block as a ``<div class="examples">`` element.

    Parameters
    ----------
    block : str
        Body of a fenced code block written with the ``>``/``.`` transcript
        convention.

    Returns
    -------
    str
        One ``<form>`` per statement group, each line indented by four
        spaces, wrapped in ``<div class="examples">``. A block without
        statements yields an empty wrapper.
    """
    pairs = build_examples(block)
    if not pairs:
        return '<div class="examples"></div>'
    forms = "\n".join(_form(pair) for pair in pairs)
    indented = "\n".join(f"{INDENT}{line}" for line in forms.split("\n"))
    return f'<div class="examples">\n{indented}\n</div>'


__all__ = [
    "GROUP_PATTERN",
    "ExamplePair",
    "StatementGroup",
    "build_examples",
    "display_expression",
    "doctests_to_markup",
    "parse_statement_groups",
    "render_input",
    "render_output",
]
