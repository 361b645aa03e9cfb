from pathlib import Path

from click.testing import CliRunner

from sphido import __version__
from sphido.build import BuildError
from sphido.cli import cli


def create_project(root: Path) -> None:
    (root / "content" / "docs").mkdir(parents=True)
    (root / "content" / "index.md").write_text("# Home", encoding="utf-8")
    (root / "content" / "docs" / "guide.md").write_text("# Guide", encoding="utf-8")


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_build(monkeypatch, tmp_path):
    create_project(tmp_path)
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(cli, ["build", "--verbose"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "  docs/guide/index.html" in result.output
    assert "  index.html" in result.output
    assert "Built 2 pages into" in result.output
    assert (tmp_path / "public" / "docs" / "guide" / "index.html").exists()

    result = runner.invoke(cli, ["build", "--output", "site"], catch_exceptions=False)
    assert result.exit_code == 0
    assert (tmp_path / "site" / "index.html").exists()


def test_cli_build_missing_content(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["build"])
    assert result.exit_code == 1
    assert "Expected a directory at" in result.output


def test_cli_build_reports_build_error(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    def failing_build_site(root, output_dir_override=None):
        raise BuildError(root / "content" / "bad.md", "Undefined variable: x")

    monkeypatch.setattr("sphido.build.build_site", failing_build_site)
    result = CliRunner().invoke(cli, ["build"])
    assert result.exit_code == 1
    assert "Build failed:" in result.output
    assert "File: content/bad.md" in result.output
    assert "Error: Undefined variable: x" in result.output


def test_cli_tree(monkeypatch, tmp_path):
    create_project(tmp_path)
    (tmp_path / "content" / "empty").mkdir()
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["tree"], catch_exceptions=False)
    assert result.exit_code == 0
    assert result.output.splitlines() == ["docs/", "  guide  Guide", "index  Home"]


def test_module_main_entrypoint():
    from sphido.__main__ import main

    assert callable(main)
