"""CLI smoke tests."""

from typer.testing import CliRunner

from side_effects_lint import __version__
from side_effects_lint.cli import app

runner = CliRunner()


def test_root_help_works() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "runs as soon as a module is imported" in result.stdout
    assert "scan" in result.stdout
    assert "config-init" in result.stdout
    assert "config-validate" in result.stdout


def test_scan_help_works() -> None:
    result = runner.invoke(app, ["scan", "--help"])
    assert result.exit_code == 0
    assert "--fail-on-findings" in result.stdout
    assert "--no-report" in result.stdout


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == __version__
