"""Tests for the command line interface."""

from pathlib import Path
from tempfile import TemporaryDirectory

from typer.testing import CliRunner

from stream_fund.cli import cli

runner = CliRunner()

NO_CONFIG = ["--config", "/nonexistent/config.yaml"]


def test_project() -> None:
    result = runner.invoke(cli, ["project", "1000", "12", "3"])

    assert result.exit_code == 0
    assert "Realized APR" in result.output
    assert "1,030.30" in result.output
    assert "Compounded yield: 30.30" in result.output


def test_project_zero_months() -> None:
    result = runner.invoke(cli, ["project", "1000", "12", "0"])

    assert result.exit_code == 0
    assert "Compounded yield" not in result.output


def test_search_demo_catalog() -> None:
    result = runner.invoke(cli, ["search", "12% APR gaming", *NO_CONFIG])

    assert result.exit_code == 0
    assert result.output.index("Pixel Arena") < result.output.index("TechGaming Pro")
    assert "Found 3 vaults" in result.output


def test_search_missing_catalog() -> None:
    result = runner.invoke(cli, ["search", "gaming", "--catalog", "/nonexistent/vaults.yaml", *NO_CONFIG])

    assert result.exit_code == 1
    assert "Could not load catalog" in result.output


def test_plan_demo_writes_report() -> None:
    with TemporaryDirectory() as tmpdir:
        output = Path(tmpdir) / "vaults.md"

        result = runner.invoke(cli, [
            "plan", "UC-alpha", "UC-beta",
            "--month", "11",
            "--projection", "500",
            "--output", str(output),
            *NO_CONFIG,
        ])

        assert result.exit_code == 0, result.output
        assert "Planned: 2" in result.output
        report = output.read_text(encoding="utf-8")

    assert "Channels planned: 2" in report
    assert "## UC-alpha" in report
    assert "**Projection:**" in report


def test_plan_unknown_supplier() -> None:
    result = runner.invoke(cli, ["plan", "UC1", "--supplier", "csv", *NO_CONFIG])

    assert result.exit_code != 0


def test_search_malformed_catalog() -> None:
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "vaults.yaml"
        path.write_text("vaults: [unclosed\n", encoding="utf-8")

        result = runner.invoke(cli, ["search", "12% APR gaming", "--catalog", str(path), *NO_CONFIG])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Could not load catalog" in result.output
