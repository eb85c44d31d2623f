"""
plclex Command-Line Interface
=============================

This package provides the ``plclex`` command-line tool:

- **plclex tokens**: lex a source file and print its tokens
- **plclex match**: check strings against the validation patterns

The tool is a Click-based application with help text and consistent
exit codes (see plclex.cli.errors).
"""

__all__ = ["plclex", "errors"]
