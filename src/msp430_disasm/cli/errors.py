"""
CLI Exit Codes and Error Reporting
==================================

Maps package exceptions onto process exit codes so that scripts driving
msp430dis can tell bad input data apart from bad invocation.

    Code  Meaning
    ----  -----------------------------------------------
    0     Every word decoded
    1     Decoding stopped (malformed, truncated, odd length)
    2     Bad option value, unreadable or unwritable file
    3     Anything else (a bug)

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from msp430_disasm.errors import ConfigError, DecodeError


class ExitCode(IntEnum):
    """Process exit codes for msp430dis."""
    SUCCESS = 0
    DECODE_ERROR = 1
    INVALID_ARGS = 2
    INTERNAL_ERROR = 3


def exit_code_for(error: BaseException) -> ExitCode:
    """Pick the exit code that reports an exception."""
    if isinstance(error, DecodeError):
        return ExitCode.DECODE_ERROR
    if isinstance(error, (ConfigError, click.BadParameter, OSError)):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception on stderr and exit.

    Decode errors print as formatted by DecodeError (location, message
    and hint). Invocation problems get an "Error:" prefix. Anything
    unexpected is an internal error, with a traceback under --verbose.

    Args:
        error: The exception that stopped the command
        verbose: Print the traceback for internal errors

    Raises:
        SystemExit: Always
    """
    code = exit_code_for(error)

    if code == ExitCode.DECODE_ERROR:
        click.echo(str(error), err=True)
    elif code == ExitCode.INVALID_ARGS:
        click.echo(f"Error: {error}", err=True)
    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()

    sys.exit(code)
