"""
MSP430 Disassembler
===================

This package decodes MSP430 machine code into readable assembly text, for
reverse-engineering and firmware-inspection work on raw binary images.

The MSP430 is a 16-bit microcontroller CPU with three instruction formats
(jumps, single-operand and double-operand), seven addressing modes and
two constant-generator registers that synthesize common immediates. Many
assembler mnemonics (ret, pop, clrc, inc, ...) are "emulated": they are
encoded as ordinary double-operand instructions and recognised again
during disassembly.

Main Components
---------------
- **cpu**: Instruction-set definitions
    Registers, operation codes and addressing-mode value types

- **disassembler**: Decoding engine (msp430dis)
    Format classification, operand resolution, emulated-form recognition
    and rendering

- **config**: Disassembler configuration
    Base address, alias and listing settings, environment overrides

Quick Start
-----------
Disassemble a binary image:
    >>> from msp430_disasm import Msp430Disassembler
    >>> result = Msp430Disassembler().disassemble(bytes([0x30, 0x41]))
    >>> result.lines
    ['ret']

Decode words directly:
    >>> from msp430_disasm import decode
    >>> decode([0x3C05])
    ['(jmp, 0x5)']

Or use the command-line tool:
    $ msp430dis firmware.bin --base-address 0xC000

Reference Documentation
-----------------------
- MSP430x1xx Family User's Guide (SLAU049), chapter 3: RISC 16-Bit CPU

Version History
---------------
1.0.0 - Initial release with the disassembler and msp430dis CLI
"""

__version__ = "1.0.0"
__author__ = "Hugo José Pinto & Contributors"

# =============================================================================
# Public API Exports
# =============================================================================
# These are the main classes and functions that users of the library will use.
# We import them here so they can be accessed directly from msp430_disasm.
# =============================================================================

from msp430_disasm.config import DisassemblerConfig
from msp430_disasm.disassembler import (
    Msp430Disassembler,
    DisassembledInstruction,
    DisassemblyResult,
    bytes_to_words,
    decode,
    decode_instruction,
    recognize_emulated,
    render_instruction,
)
from msp430_disasm.errors import (
    Msp430Error,
    DecodeError,
    MalformedOpcodeError,
    TruncatedInstructionError,
    OddLengthError,
    ConfigError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Configuration
    "DisassemblerConfig",
    # Disassembler
    "Msp430Disassembler",
    "DisassembledInstruction",
    "DisassemblyResult",
    "bytes_to_words",
    "decode",
    "decode_instruction",
    "recognize_emulated",
    "render_instruction",
    # Exception hierarchy
    "Msp430Error",
    "DecodeError",
    "MalformedOpcodeError",
    "TruncatedInstructionError",
    "OddLengthError",
    "ConfigError",
]
