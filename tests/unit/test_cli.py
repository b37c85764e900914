"""Tests for CLI commands."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from console_table.cli import cli

SCORES = "headers: [Name, Score]\nrows:\n  - [Alice, 10]\n  - [Bob, 7]\n"


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CONSOLE_TABLE_* settings from the developer's shell out of the tests."""
    for key in ("ALIGN", "BORDER", "PADDING", "ENCODING", "LINE_TERMINATOR"):
        monkeypatch.delenv(f"CONSOLE_TABLE_{key}", raising=False)


@pytest.fixture
def scores_file(tmp_path: Path) -> Path:
    """YAML document with two rows."""
    path = tmp_path / "scores.yaml"
    path.write_text(SCORES, encoding="utf-8")
    return path


class TestCLI:
    """Test CLI commands."""

    def test_cli_help(self, runner: CliRunner) -> None:
        """Test CLI help message."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "render tabular data as bordered text" in result.output

    def test_render_help(self, runner: CliRunner) -> None:
        """Test render command help."""
        result = runner.invoke(cli, ["render", "--help"])
        assert result.exit_code == 0
        assert "--border" in result.output
        assert "--totals" in result.output
        assert "--column-align" in result.output
        assert "--newline" in result.output


class TestRender:
    """Tests for the render command."""

    def test_render_file(self, runner: CliRunner, scores_file: Path) -> None:
        result = runner.invoke(cli, ["render", str(scores_file), "--newline", "lf"])
        assert result.exit_code == 0
        assert result.output == (
            "+-------+-------+\n"
            "| Name  | Score |\n"
            "+-------+-------+\n"
            "| Alice | 10    |\n"
            "| Bob   | 7     |\n"
            "+-------+-------+\n"
        )

    def test_default_newline_is_crlf(self, runner: CliRunner, scores_file: Path) -> None:
        result = runner.invoke(cli, ["render", str(scores_file)])
        assert result.exit_code == 0
        assert result.output.count("\r\n") == 6

    def test_render_stdin(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["render", "--newline", "lf"], input=SCORES)
        assert result.exit_code == 0
        assert "| Alice | 10    |" in result.output

    def test_render_csv_stdin(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["render", "-", "--format", "csv", "--newline", "lf"], input="a,b\n1,2\n"
        )
        assert result.exit_code == 0
        assert result.output.splitlines()[1:4] == ["| a | b |", "+---+---+", "| 1 | 2 |"]

    def test_totals_and_column_align(self, runner: CliRunner, scores_file: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "render",
                str(scores_file),
                "--totals",
                "1",
                "--column-align",
                "1=right",
                "--newline",
                "lf",
            ],
        )
        assert result.exit_code == 0
        assert result.output.splitlines()[-3:] == [
            "+-------+-------+",
            "|       |    17 |",
            "+-------+-------+",
        ]

    def test_option_flags(self, runner: CliRunner, scores_file: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "render",
                str(scores_file),
                "--border",
                "none",
                "--padding",
                "0",
                "--align",
                "right",
                "--newline",
                "lf",
            ],
        )
        assert result.exit_code == 0
        assert result.output == " NameScore\nAlice   10\n  Bob    7\n"

    def test_flags_override_document_options(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "table.yaml"
        path.write_text("rows: [[a]]\noptions:\n  border: '#'\n", encoding="utf-8")
        result = runner.invoke(cli, ["render", str(path), "--border", "=", "--newline", "lf"])
        assert result.exit_code == 0
        assert result.output == "=====\n= a =\n=====\n"

    def test_environment_options(self, runner: CliRunner, scores_file: Path) -> None:
        result = runner.invoke(
            cli,
            ["render", str(scores_file)],
            env={"CONSOLE_TABLE_LINE_TERMINATOR": "\\n", "CONSOLE_TABLE_BORDER": "*"},
        )
        assert result.exit_code == 0
        assert "\r" not in result.output
        assert result.output.startswith("*****************\n* Name  * Score *\n")

    def test_invalid_border(self, runner: CliRunner, scores_file: Path) -> None:
        result = runner.invoke(cli, ["render", str(scores_file), "--border", "double"])
        assert result.exit_code == 1
        assert "Error: Invalid border 'double'" in result.output

    def test_invalid_document(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["render", "-"], input="- just\n- a list\n")
        assert result.exit_code == 1
        assert "Error: Cannot load table document <stdin>" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["render", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_invalid_column_align(self, runner: CliRunner, scores_file: Path) -> None:
        result = runner.invoke(cli, ["render", str(scores_file), "--column-align", "1:right"])
        assert result.exit_code == 2
        assert "COLUMN=ALIGN" in result.output

    def test_invalid_totals(self, runner: CliRunner, scores_file: Path) -> None:
        result = runner.invoke(cli, ["render", str(scores_file), "--totals", "one"])
        assert result.exit_code == 2

    def test_negative_padding_rejected(self, runner: CliRunner, scores_file: Path) -> None:
        result = runner.invoke(cli, ["render", str(scores_file), "--padding", "-1"])
        assert result.exit_code == 2
