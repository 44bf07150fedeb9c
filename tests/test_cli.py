"""Tests for the ``readme-pages`` command."""

from __future__ import annotations

import typing as typ

import pytest
from returns.result import Failure

from readme_pages import cli
from readme_pages._constants import SPLICE_DELIMITER

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a README project in ``tmp_path`` and make it the cwd."""
    (tmp_path / "README.md").write_text(
        "# Demo\n\n## Usage\n\n```python\n> 1 + 1\n2\n```\n", encoding="utf-8"
    )
    (tmp_path / "package.json").write_text('{"version": "0.3.1"}', encoding="utf-8")
    (tmp_path / "readme-pages.yaml").write_text(
        "manifest: package.json\nfragments: null\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_generate_writes_page(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A successful run writes the page and reports its path."""
    cli.generate(workspace / "README.md", config=workspace / "readme-pages.yaml")
    captured = capsys.readouterr()
    assert captured.out == "wrote index.html\n"
    assert captured.err == ""
    html = (workspace / "index.html").read_text(encoding="utf-8")
    assert 'data-version="0.3.1"' in html


def test_generate_output_override(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``--output`` redirects the page."""
    target = workspace / "site" / "page.html"
    cli.generate(
        workspace / "README.md",
        config=workspace / "readme-pages.yaml",
        output=target,
    )
    assert target.exists()
    assert capsys.readouterr().out == "wrote site/page.html\n"


def test_generate_without_source_is_a_usage_error(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Omitting the README exits with status 1 and a usage message."""
    with pytest.raises(SystemExit) as excinfo:
        cli.generate()
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith("Usage: readme-pages SOURCE")


def test_generate_reports_failures(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Pipeline failures go to stderr with exit status 1."""
    (workspace / "readme-pages.yaml").write_text(
        "manifest: package.json\nfragments: [custom.md]\n", encoding="utf-8"
    )
    (workspace / "custom.md").write_text(
        f"## Missing\n{SPLICE_DELIMITER}\nnew\n", encoding="utf-8"
    )
    with pytest.raises(SystemExit) as excinfo:
        cli.generate(workspace / "README.md", config=workspace / "readme-pages.yaml")
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "substring not found in document" in captured.err
    assert captured.out == ""
    assert not (workspace / "index.html").exists()


def test_generate_reports_invalid_config(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Config errors are reported before any rendering happens."""
    config = workspace / "readme-pages.yaml"
    config.write_text("output: [1]\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        cli.generate(workspace / "README.md", config=config)
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith(f"Invalid configuration in {config}")


def test_generate_passes_output_to_generator(
    workspace: Path, mocker: MockerFixture
) -> None:
    """The CLI hands the output override to ``PageGenerator``."""
    generator = mocker.patch.object(cli, "PageGenerator", autospec=True)
    generator.return_value.run.return_value = Failure("boom")
    target = workspace / "out.html"
    with pytest.raises(SystemExit):
        cli.generate(workspace / "README.md", output=target)
    _args, kwargs = generator.call_args
    assert kwargs["output"] == target
    generator.return_value.run.assert_called_once_with(workspace / "README.md")


def test_main_invokes_app(mocker: MockerFixture) -> None:
    """``main`` delegates to the Cyclopts application."""
    app = mocker.patch.object(cli, "app")
    cli.main()
    app.assert_called_once_with()
