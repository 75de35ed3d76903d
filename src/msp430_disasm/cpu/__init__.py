"""
MSP430 CPU Package
==================

This package contains CPU architecture definitions used by every stage
of the disassembler: the format decoders, the emulated-form recognizer
and the renderer.

Modules:
    msp430: Register table, operand size, operation codes, addressing-mode
            value types and helpers for encoding/decoding instruction fields.

Keeping the instruction-set knowledge in one place means the decoders
and the renderer cannot disagree about a bit position or a mnemonic.

Usage:
    from msp430_disasm.cpu import (
        Register,
        DataMode,
        DoubleOp,
        Immediate,
        decode_register,
    )

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

# =============================================================================
# Public API Exports
# =============================================================================
# Import and re-export all public symbols from the msp430 module for
# convenient access via `from msp430_disasm.cpu import ...`

from msp430_disasm.cpu.msp430 import (
    # Registers and operand size
    Register,
    SPECIAL_REGISTERS,
    DataMode,
    decode_register,
    encode_register,
    # Operation codes
    JumpOp,
    SingleOp,
    DoubleOp,
    EmulatedOp,
    SIZED_SINGLE_OPS,
    OPERANDLESS_SINGLE_OPS,
    decode_jump_op,
    encode_jump_op,
    decode_single_op,
    encode_single_op,
    decode_double_op,
    encode_double_op,
    # Addressing modes
    AddressingMode,
    Direct,
    Indexed,
    Indirect,
    Autoincrement,
    Absolute,
    Symbolic,
    Immediate,
    CONSTANT_GENERATOR,
)

__all__ = [
    # Registers and operand size
    "Register",
    "SPECIAL_REGISTERS",
    "DataMode",
    "decode_register",
    "encode_register",
    # Operation codes
    "JumpOp",
    "SingleOp",
    "DoubleOp",
    "EmulatedOp",
    "SIZED_SINGLE_OPS",
    "OPERANDLESS_SINGLE_OPS",
    "decode_jump_op",
    "encode_jump_op",
    "decode_single_op",
    "encode_single_op",
    "decode_double_op",
    "encode_double_op",
    # Addressing modes
    "AddressingMode",
    "Direct",
    "Indexed",
    "Indirect",
    "Autoincrement",
    "Absolute",
    "Symbolic",
    "Immediate",
    "CONSTANT_GENERATOR",
]
