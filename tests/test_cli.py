"""
Tests for the plclex command-line tool
======================================

These tests drive the Click application with CliRunner and check output
and exit codes.
"""

import json

import pytest
from click.testing import CliRunner

from plclex import __version__
from plclex.cli.errors import ExitCode, handle_cli_exception
from plclex.cli.plclex import format_token, main
from plclex.errors import UnknownPatternError
from plclex.tokens import Token, TokenKind


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "prog.plc"
    path.write_text('x != "hi"\n', encoding="utf-8")
    return path


# =============================================================================
# General Options
# =============================================================================

class TestGeneral:
    """Help and version output."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Lexer for a small teaching language" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_format_token(self):
        line = format_token(Token(TokenKind.OPERATOR, "!=", 2))
        assert line == "     2  OPERATOR    '!='"


# =============================================================================
# Tokens Command
# =============================================================================

class TestTokensCommand:
    """Tests for 'plclex tokens'."""

    def test_text_output(self, runner, source_file):
        result = runner.invoke(main, ["tokens", str(source_file)])
        assert result.exit_code == 0
        assert "IDENTIFIER" in result.output
        assert "'!='" in result.output
        assert "'\"hi\"'" in result.output
        # Newline lexed as an operator by default
        assert "'\\n'" in result.output

    def test_skip_newlines(self, runner, source_file):
        result = runner.invoke(main, ["tokens", str(source_file), "--skip-newlines"])
        assert result.exit_code == 0
        assert "'\\n'" not in result.output
        assert len(result.output.strip().splitlines()) == 3

    def test_json_output(self, runner, source_file):
        result = runner.invoke(main, ["tokens", str(source_file), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0] == {"kind": "IDENTIFIER", "lexeme": "x", "start_offset": 0}
        assert data[1] == {"kind": "OPERATOR", "lexeme": "!=", "start_offset": 2}
        assert data[2] == {"kind": "STRING", "lexeme": '"hi"', "start_offset": 5}

    def test_stdin(self, runner):
        result = runner.invoke(main, ["tokens", "-"], input="a b")
        assert result.exit_code == 0
        assert "'a'" in result.output
        assert "'b'" in result.output

    def test_output_file(self, runner, source_file, tmp_path):
        output = tmp_path / "tokens.txt"
        result = runner.invoke(main, ["tokens", str(source_file), "-o", str(output)])
        assert result.exit_code == 0
        assert "Wrote 4 tokens" in result.output
        assert "IDENTIFIER" in output.read_text(encoding="utf-8")

    def test_strict_error(self, runner, tmp_path):
        path = tmp_path / "bad.plc"
        path.write_text('x = "abc', encoding="utf-8")
        result = runner.invoke(main, ["tokens", str(path)])
        assert result.exit_code == ExitCode.FAILURE
        assert "unterminated string literal" in result.output

    def test_lenient_flag(self, runner, tmp_path):
        path = tmp_path / "bad.plc"
        path.write_text('x = "abc', encoding="utf-8")
        result = runner.invoke(main, ["tokens", str(path), "--lenient"])
        assert result.exit_code == 0
        assert "STRING" in result.output

    def test_lenient_from_env(self, runner, tmp_path):
        path = tmp_path / "bad.plc"
        path.write_text('"abc', encoding="utf-8")
        result = runner.invoke(main, ["tokens", str(path)], env={"PLCLEX_STRICT": "0"})
        assert result.exit_code == 0

    def test_flag_overrides_env(self, runner, tmp_path):
        path = tmp_path / "bad.plc"
        path.write_text('"abc', encoding="utf-8")
        result = runner.invoke(
            main, ["tokens", str(path), "--strict"], env={"PLCLEX_STRICT": "0"}
        )
        assert result.exit_code == ExitCode.FAILURE

    def test_bad_env_value(self, runner, source_file):
        result = runner.invoke(main, ["tokens", str(source_file)], env={"PLCLEX_STRICT": "maybe"})
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "PLCLEX_STRICT" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["tokens", str(tmp_path / "missing.plc")])
        assert result.exit_code == 2

    def test_verbose_summary(self, runner, source_file):
        result = runner.invoke(main, ["-v", "tokens", str(source_file)])
        assert result.exit_code == 0
        assert "4 tokens, 0 malformed literals accepted" in result.output


# =============================================================================
# Match Command
# =============================================================================

class TestMatchCommand:
    """Tests for 'plclex match'."""

    def test_all_match(self, runner):
        result = runner.invoke(main, ["match", "decimal", "1.5", "-0.25"])
        assert result.exit_code == 0
        assert result.output.count("match") == 2
        assert "no match" not in result.output

    def test_some_do_not_match(self, runner):
        result = runner.invoke(main, ["match", "DECIMAL", "1.5", "01.5"])
        assert result.exit_code == ExitCode.FAILURE
        assert "no match  '01.5'" in result.output

    def test_unknown_pattern(self, runner):
        result = runner.invoke(main, ["match", "phone", "555"])
        assert result.exit_code == 2

    def test_requires_text(self, runner):
        result = runner.invoke(main, ["match", "email"])
        assert result.exit_code == 2

    def test_dash_leading_texts(self, runner):
        """Texts starting with '-' are matched, not parsed as options."""
        result = runner.invoke(main, ["match", "decimal", "-0.25", "-.5"])
        assert result.exit_code == ExitCode.FAILURE
        assert "match     '-0.25'" in result.output
        assert "no match  '-.5'" in result.output

    def test_dash_leading_texts_only(self, runner):
        result = runner.invoke(main, ["match", "decimal", "-1.0", "-10.5"])
        assert result.exit_code == 0
        assert "no match" not in result.output


# =============================================================================
# Error Reporting
# =============================================================================

class TestErrorReporting:
    """Tests for exit codes and messages from handle_cli_exception."""

    def test_stdin_lex_error_names_stdin(self, runner):
        result = runner.invoke(main, ["tokens", "-"], input='"abc')
        assert result.exit_code == ExitCode.FAILURE
        assert "<stdin>:1:5: error: unterminated string literal" in result.output

    def test_invalid_utf8(self, runner, tmp_path):
        path = tmp_path / "binary.plc"
        path.write_bytes(b"x = \xff\n")
        result = runner.invoke(main, ["tokens", str(path)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "not valid UTF-8" in result.output

    def test_bad_whitespace_env(self, runner, source_file):
        result = runner.invoke(main, ["tokens", str(source_file)], env={"PLCLEX_WHITESPACE": "\t"})
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Configuration error" in result.output

    def test_pattern_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(UnknownPatternError("phone", ["EMAIL"]))
        assert exc_info.value.code == ExitCode.FAILURE
        assert "unknown pattern 'phone'" in capsys.readouterr().err

    def test_internal_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(RuntimeError("boom"))
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR
        err = capsys.readouterr().err
        assert "Internal error: boom" in err
        assert "Traceback" not in err

    def test_internal_error_verbose_traceback(self, capsys):
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            with pytest.raises(SystemExit) as exc_info:
                handle_cli_exception(e, verbose=True)
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR
        assert "Traceback" in capsys.readouterr().err
