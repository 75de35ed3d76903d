"""
MSP430 Disassembler Error Hierarchy
===================================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from Msp430Error, allowing callers to catch all
disassembler-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
Msp430Error (base)
├── DecodeError (instruction stream decoding)
│   ├── MalformedOpcodeError - reserved or undefined bit pattern
│   ├── TruncatedInstructionError - a required trailing word is missing
│   └── OddLengthError - trailing byte cannot form a full word
└── ConfigError - invalid configuration value

Design Philosophy
-----------------
Decode errors capture where in the word stream decoding stopped being
trustworthy (word offset and byte address). The instruction set has no
self-synchronizing markers, so the stream driver never guesses a
resynchronization point: it stops at the first error and hands the
stamped error back to the caller.

Error messages follow this format:
    0x0004: error: description
    hint: suggestion (when available)

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Msp430Error(Exception):
    """
    Base exception for all package errors.

        try:
            result = Msp430Disassembler().disassemble(data)
            result.raise_for_error()
        except Msp430Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Stream Location Tracking
# =============================================================================

@dataclass(frozen=True)
class StreamLocation:
    """
    A position in the decoded word stream.

    Attributes:
        offset: Index of the word (0-based) in the word stream
        address: Byte address of that word (base address + 2 * offset)
    """
    offset: int
    address: int

    def __str__(self) -> str:
        return f"0x{self.address:04x}"


# =============================================================================
# Decode Exceptions
# =============================================================================

class DecodeError(Msp430Error):
    """
    Base exception for errors found while decoding the instruction stream.

    Decoders raise these without a location (they only see a window of
    words); the stream driver stamps the location with `at()`.

    Attributes:
        message: The error description
        opcode: The first word of the offending instruction (optional)
        location: Where in the stream the error occurred (optional)
        hint: A suggestion for the reader (optional)
    """

    def __init__(
        self,
        message: str,
        opcode: Optional[int] = None,
        location: Optional[StreamLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.opcode = opcode
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, opcode and hint.

        Example output:
            0x0010: error: undefined single-operand operation code 0b111 (word 0x1380)
            hint: the data may not be code, or decoding started mid-instruction
        """
        text = self.message
        if self.opcode is not None:
            text = f"{text} (word 0x{self.opcode:04x})"

        if self.location:
            parts = [f"{self.location}: error: {text}"]
        else:
            parts = [f"error: {text}"]

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def at(self, offset: int, address: int) -> "DecodeError":
        """Return a copy of this error stamped with a stream location."""
        return type(self)(
            self.message,
            opcode=self.opcode,
            location=StreamLocation(offset, address),
            hint=self.hint,
        )

    @property
    def offset(self) -> Optional[int]:
        return self.location.offset if self.location else None

    @property
    def address(self) -> Optional[int]:
        return self.location.address if self.location else None


class MalformedOpcodeError(DecodeError):
    """
    A field selects a reserved or undefined bit pattern.

    Examples:
        - Top nibble 0b0000 or 0b0001 outside the single-operand group
        - Single-operand sub-code 0b111
        - Register or addressing-mode field outside its bit width
    """
    pass


class TruncatedInstructionError(DecodeError):
    """
    The instruction needs a trailing word that is not in the buffer.

    Raised instead of reading past the end of the word stream when an
    operand's index, absolute address or immediate would come from a word
    beyond the last one.
    """
    pass


class OddLengthError(DecodeError):
    """
    The byte buffer has an odd length.

    Every complete word is still decoded; the lone trailing byte is
    reported through this error instead of being dropped silently.
    """
    pass


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(Msp430Error):
    """Invalid configuration value (environment variable or option)."""
    pass
