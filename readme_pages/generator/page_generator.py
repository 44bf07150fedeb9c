"""High-level orchestration for README page generation.

:class:`PageGenerator` reads a README, splices the configured custom
fragments into it, renders it with :class:`DocumentRenderer`, wraps the result
with :class:`DocumentAssembler` and writes the page. Every stage returns a
``returns`` ``Result`` and the stages are composed left to right, so the
first failure skips the remaining stages and becomes the run's outcome.

Example
-------
>>> from pathlib import Path
>>> from readme_pages.config import BuildConfig
>>> from readme_pages.generator import PageGenerator
>>> generator = PageGenerator(BuildConfig(fragments=()))  # doctest: +SKIP
>>> generator.run(Path("README.md"))  # doctest: +SKIP
<Success: index.html>
"""

from __future__ import annotations

import re
import typing as typ
from html import unescape

from returns.pipeline import flow
from returns.pointfree import bind
from returns.result import Failure, Result, Success

from readme_pages.manifest import read_version
from readme_pages.splice import read_text, splice_file

from .assembler import DocumentAssembler
from .renderer import DocumentRenderer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from readme_pages.config import BuildConfig

FIRST_H1_PATTERN = re.compile(r"<h1[^>]*>(.*?)</h1>", re.DOTALL)
TAG_PATTERN = re.compile(r"<[^>]+>")


class PageGenerator:
    """Turn a README into a single HTML page."""

    def __init__(
        self,
        config: BuildConfig,
        *,
        templates_dir: Path | None = None,
        output: Path | None = None,
    ) -> None:
        """Initialize the generator with build settings.

        Parameters
        ----------
        config : BuildConfig
            Output, manifest, fragment and styling settings.
        templates_dir : Path, optional
            Directory containing ``index.jinja``; defaults to the package
            templates.
        output : Path, optional
            Override for the HTML output path; defaults to ``config.output``.
        """
        self.config = config
        self.output = output or config.output
        self.source: Path | None = None
        self.renderer = DocumentRenderer(
            config.pygments_style, doctest_language=config.doctest_language
        )
        self.assembler = DocumentAssembler(templates_dir=templates_dir)

    def run(self, source: Path) -> Result[Path, str]:
        """Generate the page for ``source`` and return the written path.

        Returns
        -------
        Result[Path, str]
            ``Success(path)`` once the page is written, otherwise the message
            of the first stage that failed: unreadable source or fragment,
            bad delimiter count, missing splice text, malformed manifest, or
            a write error.
        """
        self.source = source
        return flow(
            source,
            read_text,
            bind(self.splice_fragments),
            bind(self.build_page),
            bind(self.write),
        )

    def splice_fragments(self, document: str) -> Result[str, str]:
        """Apply each configured fragment file to ``document`` in order."""
        result: Result[str, str] = Success(document)
        for path in self.config.fragments:
            result = result.bind(lambda text, path=path: splice_file(text, path))
        return result

    def build_page(self, document: str) -> Result[str, str]:
        """Render ``document`` and wrap it with the manifest version."""
        return read_version(self.config.manifest).map(
            lambda version: self.assemble(version, document)
        )

    def assemble(self, version: str, document: str) -> str:
        """Render ``document`` and assemble the full page for ``version``."""
        content = self.renderer.render(document)
        return self.assembler.assemble(
            version,
            content,
            title=self._resolve_title(content),
            stylesheet=self.renderer.stylesheet,
        )

    def write(self, html: str) -> Result[Path, str]:
        """Write ``html`` to the output path, creating parent directories."""
        try:
            self.output.parent.mkdir(parents=True, exist_ok=True)
            self.output.write_text(html, encoding="utf-8")
        except OSError as exc:
            return Failure(f"Cannot write {self.output}: {exc.strerror or exc}")
        return Success(self.output)

    def _resolve_title(self, content: str) -> str:
        """Return the configured title, the first ``<h1>`` text, or the file stem."""
        if self.config.title:
            return self.config.title
        match = FIRST_H1_PATTERN.search(content)
        if match:
            text = unescape(TAG_PATTERN.sub("", match.group(1))).strip()
            if text:
                return text
        return self.source.stem if self.source is not None else ""


__all__ = ["PageGenerator"]
