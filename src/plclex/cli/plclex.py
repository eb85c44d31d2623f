"""
plclex - Lexer Command-Line Interface
=====================================

This module implements the command-line interface for the lexer and the
string validation patterns.

Usage Examples
--------------
Print the tokens of a file:
    $ plclex tokens program.plc

Read from stdin, lenient mode, JSON output:
    $ echo 'x != "hi' | plclex tokens - --lenient --format json

Treat newlines as whitespace:
    $ plclex tokens program.plc --skip-newlines

Check strings against a pattern:
    $ plclex match decimal 1.5 -0.25 01.5

Defaults for --strict/--lenient and the whitespace set come from the
PLCLEX_STRICT and PLCLEX_WHITESPACE environment variables.
"""

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from plclex import __version__
from plclex.cli.errors import ExitCode, handle_cli_exception
from plclex.lexer import Lexer, LexerOptions
from plclex.patterns import PATTERNS, matches
from plclex.tokens import Token

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """Shared context for CLI commands."""

    def __init__(self) -> None:
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.INFO
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


def format_token(token: Token) -> str:
    """Format a token as one 'OFFSET  KIND  LEXEME' line."""
    return f"{token.start_offset:>6}  {token.kind.name:<10}  {token.lexeme!r}"


def tokens_to_json(tokens: list[Token]) -> str:
    """Serialize tokens as a JSON array of objects."""
    return json.dumps(
        [
            {
                "kind": token.kind.name,
                "lexeme": token.lexeme,
                "start_offset": token.start_offset,
            }
            for token in tokens
        ],
        indent=2,
    )


def read_source(input_file: Path) -> tuple[str, str]:
    """Return (source, filename) for a path, reading stdin for '-'."""
    if str(input_file) == "-":
        return sys.stdin.read(), "<stdin>"
    return input_file.read_text(encoding="utf-8"), str(input_file)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(__version__, "--version", "-V", prog_name="plclex")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    Lexer for a small teaching language.

    \b
    Commands:
      tokens    Lex a source file and print its tokens
      match     Check strings against a validation pattern
    """
    ctx.verbose = verbose
    ctx.setup_logging()


# =============================================================================
# Tokens Command
# =============================================================================

@main.command("tokens")
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "--strict/--lenient",
    default=None,
    help="Raise on malformed literals, or accept them (default: strict, "
         "or PLCLEX_STRICT)",
)
@click.option(
    "--skip-newlines",
    is_flag=True,
    help="Skip newlines and carriage returns like spaces",
)
@click.option(
    "-f", "--format",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text)",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@pass_context
def cmd_tokens(
    ctx: Context,
    input_file: Path,
    strict: Optional[bool],
    skip_newlines: bool,
    output_format: str,
    output: Optional[Path],
) -> None:
    """
    Lex a source file and print its tokens.

    INPUT_FILE is the source file to lex, or '-' for stdin.

    \b
    Examples:
      plclex tokens program.plc
      plclex tokens program.plc --lenient -o tokens.txt
      plclex tokens - --format json < program.plc
    """
    try:
        options = LexerOptions.from_env()
        if strict is not None:
            options = replace(options, strict=strict)
        if skip_newlines:
            whitespace = options.whitespace + "".join(
                c for c in "\n\r" if c not in options.whitespace
            )
            options = replace(options, whitespace=whitespace)

        source, filename = read_source(input_file)
        mode = "strict" if options.strict else "lenient"
        logger.debug(f"Lexing {filename} ({len(source)} characters, {mode} mode)")

        lexer = Lexer(source, options, filename)
        tokens = lexer.lex()

        if output_format.lower() == "json":
            text = tokens_to_json(tokens)
        else:
            text = "\n".join(format_token(token) for token in tokens)

        if output is not None:
            output.write_text(text + "\n", encoding="utf-8")
            click.echo(f"Wrote {len(tokens)} tokens to {output}")
        else:
            click.echo(text)

        if ctx.verbose:
            click.echo(
                f"{len(tokens)} tokens, {len(lexer.diagnostics)} malformed literals accepted",
                err=True,
            )

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Match Command
# =============================================================================

@main.command("match", context_settings={"ignore_unknown_options": True})
@click.argument(
    "pattern",
    type=click.Choice(sorted(PATTERNS), case_sensitive=False),
)
@click.argument("texts", nargs=-1, required=True, type=click.UNPROCESSED)
@pass_context
def cmd_match(ctx: Context, pattern: str, texts: tuple[str, ...]) -> None:
    """
    Check strings against a validation pattern.

    PATTERN is one of the pattern names (case-insensitive). Each TEXT must
    match in full. Exits with status 1 if any TEXT does not match. A TEXT
    starting with '-', such as -0.25, is taken as text, not as an option.

    \b
    Examples:
      plclex match email abc@gmail.com
      plclex match character_list "['a', 'b']" "['a',]"
    """
    failed = 0
    for text in texts:
        if matches(pattern, text):
            click.echo(f"match     {text!r}")
        else:
            failed += 1
            click.echo(f"no match  {text!r}")

    if ctx.verbose:
        click.echo(f"{len(texts) - failed}/{len(texts)} matched {pattern}", err=True)

    if failed:
        sys.exit(ExitCode.FAILURE)


if __name__ == "__main__":
    main()
