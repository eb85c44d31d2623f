"""
plclex CLI Error Reporting
==========================

Maps the errors a plclex command can hit onto messages and exit codes:

- malformed source (LexError) prints the caret-annotated report
- bad configuration or unreadable input is a usage problem
- anything else is a bug in plclex and may print a traceback
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes shared by the plclex commands."""
    SUCCESS = 0
    FAILURE = 1          # Source did not lex, or a TEXT did not match
    INVALID_ARGS = 2     # Bad option, PLCLEX_* value, or input file
    INTERNAL_ERROR = 3   # Bug in plclex


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised while lexing or matching, then exit.

    Args:
        error: The exception raised by the command body
        verbose: Print a traceback for internal errors

    Raises:
        SystemExit: Always
    """
    from plclex.errors import LexError, PlcError

    if isinstance(error, LexError):
        # str() is already "file:line:col: error: ..." plus caret and hint
        click.echo(str(error), err=True)
        sys.exit(ExitCode.FAILURE)

    elif isinstance(error, PlcError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.FAILURE)

    elif isinstance(error, UnicodeDecodeError):
        click.echo(f"Error: input is not valid UTF-8 ({error.reason} at byte {error.start})", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (click.BadParameter, ValueError)):
        # LexerOptions validation and PLCLEX_STRICT/PLCLEX_WHITESPACE parsing
        click.echo(f"Configuration error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, OSError):
        click.echo(f"I/O error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
