"""Render README files with evaluated examples into a static HTML page.

This package exposes the CLI entry point used by ``readme-pages`` and the
building blocks behind it: the doctest transformer, the sandbox evaluator,
the document renderer and the table-of-contents builder.

Exports
-------
- ``app``: Cyclopts application entry.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from readme_pages import main
>>> main()  # doctest: +SKIP
>>> from readme_pages import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
