"""
msp430dis - MSP430 Disassembler Command-Line Interface
======================================================

This module implements the command-line interface for the MSP430
disassembler. It reads a raw binary image (little-endian 16-bit words)
and writes an assembly listing.

Usage Examples
--------------
Disassemble a firmware image:
    $ msp430dis firmware.bin

With base address:
    $ msp430dis code.bin --base-address 0xC000

Limit number of instructions:
    $ msp430dis code.bin --count 20

Output to file:
    $ msp430dis code.bin -o listing.asm

Show literal encodings instead of emulated mnemonics:
    $ msp430dis code.bin --no-aliases

Read from standard input, JSON output:
    $ cat code.bin | msp430dis - --json

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click

from msp430_disasm import __version__
from msp430_disasm.cli.errors import ExitCode, handle_cli_exception
from msp430_disasm.config import DisassemblerConfig, parse_address
from msp430_disasm.disassembler import (
    DisassembledInstruction,
    DisassemblyResult,
    Msp430Disassembler,
)
from msp430_disasm.disassembler.msp430 import MAX_INSTRUCTION_WORDS
from msp430_disasm.errors import Msp430Error


# =============================================================================
# Helpers
# =============================================================================

def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def trace_to_stderr(instr: DisassembledInstruction) -> None:
    """Print the raw words of each decoded instruction, one column per word."""
    columns = [f"0x{w:04x} " for w in instr.words]
    columns += ["       "] * (MAX_INSTRUCTION_WORDS - len(columns))
    click.echo("".join(columns) + instr.text, err=True)


def format_listing(
    name: str,
    data: bytes,
    result: DisassemblyResult,
    disasm: Msp430Disassembler,
) -> str:
    """Build the text listing: a header, then the disassembler's own listing."""
    lines: List[str] = [
        f"; Disassembly of {name}",
        f"; Size: {len(data)} bytes",
        f"; Base address: 0x{disasm.config.base_address:04x}",
        "",
        disasm.format_result(result),
    ]
    return "\n".join(lines) + "\n"


def format_json(
    name: str,
    data: bytes,
    result: DisassemblyResult,
    config: DisassemblerConfig,
) -> str:
    """Build the JSON listing."""
    error = None
    if result.error is not None:
        error = {
            "type": type(result.error).__name__,
            "message": result.error.message,
            "offset": result.error.offset,
            "address": result.error.address,
        }

    document = {
        "file": name,
        "size": len(data),
        "base_address": config.base_address,
        "instructions": [instr.to_dict() for instr in result.instructions],
        "error": error,
    }
    return json.dumps(document, indent=2) + "\n"


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-b", "--base-address",
    type=str,
    default=None,
    help="Address of the first word (hex with 0x prefix or decimal). Default: 0",
)
@click.option(
    "-c", "--count",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum number of instructions to disassemble (default: all)",
)
@click.option(
    "--aliases/--no-aliases",
    default=None,
    help="Render emulated mnemonics such as ret and clrc (default: enabled)",
)
@click.option(
    "--generated-constants/--no-generated-constants",
    default=None,
    help="Also alias constant-generator immediates, e.g. mov #0, R5 as clr (default: disabled)",
)
@click.option(
    "--no-words",
    is_flag=True,
    help="Omit raw instruction words from output (show only the assembly text)",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Write the listing as JSON",
)
@click.option(
    "-q", "--quiet",
    is_flag=True,
    help="Do not print output; report the result through the exit code only",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging and raw-word trace on stderr)",
)
@click.version_option(version=__version__, prog_name="msp430dis")
def main(
    input_file: Path,
    output: Optional[Path],
    base_address: Optional[str],
    count: Optional[int],
    aliases: Optional[bool],
    generated_constants: Optional[bool],
    no_words: bool,
    as_json: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """
    Disassemble MSP430 machine code.

    INPUT_FILE is the binary file to disassemble ("-" reads standard input).

    Examples:

        # Disassemble code loaded at 0xC000
        msp430dis code.bin --base-address 0xC000

        # Disassemble the first 20 instructions
        msp430dis code.bin --count 20 -o listing.asm
    """
    setup_logging(verbose)

    # Environment first, command-line options override it
    try:
        config = DisassemblerConfig.from_env()
        if base_address is not None:
            config.base_address = parse_address(base_address)
        if count is not None:
            config.max_instructions = count
        if aliases is not None:
            config.use_emulated = aliases
        if generated_constants is not None:
            config.match_generated = generated_constants
        if no_words:
            config.show_words = False
        config.validate()
    except Msp430Error as e:
        handle_cli_exception(e, verbose)

    # Read input
    is_stdin = str(input_file) == "-"
    name = "<stdin>" if is_stdin else input_file.name
    try:
        if is_stdin:
            data = click.get_binary_stream("stdin").read()
        else:
            data = input_file.read_bytes()
    except OSError as e:
        handle_cli_exception(e, verbose)

    if len(data) == 0:
        click.echo(f"Error: {name} is empty", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    if verbose:
        click.echo(f"Input file: {name} ({len(data)} bytes)", err=True)
        click.echo(f"Base address: 0x{config.base_address:04x}", err=True)

    # Disassemble
    try:
        disasm = Msp430Disassembler(config)
        result = disasm.disassemble(data, trace=trace_to_stderr if verbose else None)
    except Exception as e:
        handle_cli_exception(e, verbose)

    if verbose:
        click.echo(f"Instructions disassembled: {len(result.instructions)}", err=True)

    # Write output
    if not quiet:
        if as_json:
            text = format_json(name, data, result, config)
        else:
            text = format_listing(name, data, result, disasm)

        if output:
            try:
                output.write_text(text, encoding="utf-8")
                if verbose:
                    click.echo(f"Output written to: {output}", err=True)
            except OSError as e:
                handle_cli_exception(e, verbose)
        else:
            click.echo(text, nl=False)

    if result.error is not None:
        if quiet:
            sys.exit(ExitCode.DECODE_ERROR)
        handle_cli_exception(result.error, verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
