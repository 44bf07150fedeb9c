"""Cyclopts CLI entrypoint for generating a README page.

The ``readme-pages`` console script renders a README with evaluated examples
into a single static HTML page. Settings come from ``readme-pages.yaml`` and
can be overridden with flags or ``READMEPAGES_*`` environment variables.

Examples
--------
Render ``README.md`` into ``index.html``:

>>> from readme_pages.cli import app
>>> app(["README.md"])  # doctest: +SKIP
wrote index.html

Write the page somewhere else:

>>> app(["README.md", "--output", "site/index.html"])  # doctest: +SKIP
wrote site/index.html
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from returns.pipeline import is_successful
from ruamel.yaml.error import YAMLError

from ._constants import DEFAULT_CONFIG
from .config import ConfigError, load_build_config
from .generator import PageGenerator

app = App(
    name="readme-pages",
    help="Render a README with evaluated examples into one HTML page.",
    config=cyclopts.config.Env("READMEPAGES_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _fail(message: str) -> typ.NoReturn:
    """Report ``message`` on stderr and exit with status 1."""
    print(message, file=sys.stderr)
    raise SystemExit(1)


@app.default
def generate(
    source: typ.Annotated[
        Path | None, Parameter(help="README file to render")
    ] = None,
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to build config", env_var="READMEPAGES_CONFIG")
    ] = Path(DEFAULT_CONFIG),
    output: typ.Annotated[
        Path | None,
        Parameter(help="Override the output file", env_var="READMEPAGES_OUTPUT"),
    ] = None,
) -> None:
    """Generate the HTML page for ``source``.

    Parameters
    ----------
    source : Path or None
        README to render. Omitting it is reported as a usage error.
    config : Path, optional
        Build configuration file; missing files fall back to defaults.
    output : Path or None, optional
        Output path overriding the configured one.

    Returns
    -------
    None
        Prints ``wrote PATH`` on success.

    Raises
    ------
    SystemExit
        With status 1 when any stage fails; the reason goes to stderr.
    """
    if source is None:
        _fail("Usage: readme-pages SOURCE [--config PATH] [--output PATH]")

    try:
        build_config = load_build_config(config)
    except (ConfigError, YAMLError, OSError) as exc:
        _fail(f"Invalid configuration in {config}: {exc}")

    result = PageGenerator(build_config, output=output).run(source)
    if not is_successful(result):
        _fail(result.failure())
    print(f"wrote {_format_path(result.unwrap())}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``readme-pages`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
