"""Tests for CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from fieldspread.cli import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


class TestVersion:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "fieldspread version" in result.output
        assert "Dialects: python, rust" in result.output

    def test_no_args_shows_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, [])
        assert "expand" in result.output
        assert "backends" in result.output


class TestExpandCommand:
    def test_python(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["expand", "spread", "Point { x, y: 2 }", "--plain"])
        assert result.exit_code == 0
        assert result.output == "Point(\n    x=x,\n    y=2,\n)\n"

    def test_rust(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            app, ["expand", "slet", "+a, &b", "--dialect", "rust", "--plain"]
        )
        assert result.exit_code == 0
        assert result.output == "let a = a.clone();\nlet b = &b;\n"

    def test_from_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        source = tmp_path / "invocation.txt"
        source.write_text("a, b")
        result = cli_runner.invoke(app, ["expand", "clone", "--file", str(source), "--plain"])
        assert result.exit_code == 0
        assert "a = _fs.clone(a)" in result.output

    def test_from_stdin(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["expand", "anon", "--plain"], input="a, b")
        assert result.exit_code == 0
        assert "class Anon(typing.Generic[_Anon_a, _Anon_b]):" in result.output

    def test_dialect_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "fieldspread.toml").write_text('[expansion]\ndialect = "rust"\n')
        result = cli_runner.invoke(app, ["expand", "spread", "Foo { a }", "--plain"])
        assert result.exit_code == 0
        assert result.output == "Foo {\n    a,\n}\n"

    def test_argument_and_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        source = tmp_path / "invocation.txt"
        source.write_text("a")
        result = cli_runner.invoke(app, ["expand", "anon", "a", "--file", str(source)])
        assert result.exit_code == 1

    def test_syntax_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["expand", "spread", "Foo { { a } foo }"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "<argument>:1:" in result.output

    def test_duplicate_field(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["expand", "anon", "x, { x } in other"])
        assert result.exit_code == 1
        assert "Duplicate field `x`" in result.output

    def test_unknown_kind(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["expand", "explode", "a"])
        assert result.exit_code == 1
        assert "Unknown invocation kind" in result.output

    def test_unknown_dialect(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["expand", "anon", "a", "--dialect", "go"])
        assert result.exit_code == 1
        assert "Unknown dialect 'go'" in result.output


class TestCheckCommand:
    def test_resolved_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["check", "{ +one, &three } in foo, >two"])
        assert result.exit_code == 0
        assert "Resolved fields" in result.output
        assert "foo.one" in result.output
        assert "3 field(s), 1 group(s)" in result.output

    def test_base(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["check", "x: 1, ..base", "--base-allowed"])
        assert result.exit_code == 0
        assert "Other fields fall back to base" in result.output

    def test_base_not_allowed(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["check", "x: 1, ..base"])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestBackendsCommand:
    def test_lists_every_pair(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["backends"])
        assert result.exit_code == 0
        assert "fn_struct" in result.output
        assert "assert_fields_eq" in result.output
        assert "rust" in result.output
