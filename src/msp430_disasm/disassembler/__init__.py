"""
MSP430 Disassembler Module
==========================

This module turns MSP430 machine code into assembly text. It is split
along the decoding pipeline:

- addressing: operand resolution, including the constant generators
- formats: format classification and the jump, single-operand and
  double-operand decoders
- emulated: recognition of emulated mnemonics (ret, clrc, inc, ...)
- render: assembly text formatting
- msp430: the stream driver tying the stages together

Usage:
    from msp430_disasm.disassembler import Msp430Disassembler

    disasm = Msp430Disassembler()
    result = disasm.disassemble(firmware_bytes)
    for line in result.lines:
        print(line)

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from .addressing import resolve_addressing_mode, resolve_destination
from .emulated import recognize_emulated
from .formats import (
    InstructionFormat,
    classify_format,
    decode_double_operand,
    decode_instruction,
    decode_jump,
    decode_single_operand,
)
from .instructions import (
    DoubleOperandInstruction,
    EmulatedInstruction,
    Instruction,
    JumpInstruction,
    SingleOperandInstruction,
)
from .msp430 import (
    DisassembledInstruction,
    DisassemblyResult,
    Msp430Disassembler,
    bytes_to_words,
    decode,
)
from .render import format_signed_hex, render_instruction, render_operand

__all__ = [
    "Msp430Disassembler",
    "DisassembledInstruction",
    "DisassemblyResult",
    "bytes_to_words",
    "decode",
    "InstructionFormat",
    "classify_format",
    "decode_instruction",
    "decode_jump",
    "decode_single_operand",
    "decode_double_operand",
    "resolve_addressing_mode",
    "resolve_destination",
    "recognize_emulated",
    "Instruction",
    "JumpInstruction",
    "SingleOperandInstruction",
    "DoubleOperandInstruction",
    "EmulatedInstruction",
    "format_signed_hex",
    "render_instruction",
    "render_operand",
]
