"""
MSP430 Disassembler Command-Line Interface
==========================================

This package provides the command-line tool for the disassembler:

- **msp430dis**: MSP430 binary to assembly listing

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["msp430dis"]
