"""Wrap rendered README content in the full HTML page."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .toc import build_toc

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


class DocumentAssembler:
    """Render the ``index.jinja`` page template around rendered content."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the Jinja environment and load the page template."""
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("index.jinja")

    def assemble(
        self,
        version: str,
        content: str,
        *,
        title: str = "",
        stylesheet: str = "",
    ) -> str:
        """Return the complete HTML document.

        Parameters
        ----------
        version : str
            Version string shown in the page header.
        content : str
            Rendered document HTML; the table of contents is built from it.
        title : str, optional
            Document title for ``<title>`` and the header.
        stylesheet : str, optional
            Extra CSS, typically the Pygments rules for highlighted code.

        Returns
        -------
        str
            The rendered page, always ending with a newline.
        """
        html = self.template.render(
            version=version,
            title=title,
            toc=build_toc(content),
            content=content,
            stylesheet=stylesheet,
        )
        if not html.endswith("\n"):
            html += "\n"
        return html


def assemble(version: str, content: str, **kwargs: str) -> str:
    """Assemble a page with the packaged template."""
    return DocumentAssembler().assemble(version, content, **kwargs)


__all__ = ["DocumentAssembler", "assemble"]
