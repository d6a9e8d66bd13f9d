"""Tests for the CLI commands against a temporary datasheet directory."""

from typer.testing import CliRunner

from pqa.cli import app

runner = CliRunner()


def test_lookup_found(datasheet_dir):
    result = runner.invoke(app, ["lookup", "6205", "OD", "--data-dir", str(datasheet_dir)])
    assert result.exit_code == 0
    assert "52mm" in result.output
    assert "normalized" in result.output


def test_lookup_missing(datasheet_dir):
    result = runner.invoke(app, ["lookup", "6205", "colour", "--data-dir", str(datasheet_dir)])
    assert result.exit_code == 1


def test_products(datasheet_dir):
    result = runner.invoke(app, ["products", "--data-dir", str(datasheet_dir)])
    assert result.exit_code == 0
    assert "6205 N" in result.output
    assert "6306" in result.output


def test_show_unknown(datasheet_dir):
    result = runner.invoke(app, ["show", "9999", "--data-dir", str(datasheet_dir)])
    assert result.exit_code == 1


def test_ask_without_llm(datasheet_dir):
    result = runner.invoke(
        app, ["ask", "What is the width of 6205?", "--no-llm", "--data-dir", str(datasheet_dir)]
    )
    assert result.exit_code == 0
    assert "15mm" in result.output


def test_ask_blank_query(datasheet_dir):
    result = runner.invoke(app, ["ask", "   ", "--data-dir", str(datasheet_dir)])
    assert result.exit_code == 1
