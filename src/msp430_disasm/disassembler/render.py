"""
Instruction Renderer
====================

Formats decoded instructions as assembly text.

    Mode            Text
    -------------   ---------
    Direct          R5
    Indexed         0x10(R5)
    Indirect        @R5
    Autoincrement   @R5+
    Absolute        &0x0200
    Symbolic        -0x4
    Immediate       #-1

Offsets use MSP430-style signed hex: the 16-bit value is read as signed
and negative values print a leading '-' before the magnitude.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import Optional

from ..cpu import (
    OPERANDLESS_SINGLE_OPS,
    SIZED_SINGLE_OPS,
    Absolute,
    AddressingMode,
    Autoincrement,
    DataMode,
    Direct,
    Immediate,
    Indexed,
    Indirect,
    Register,
    Symbolic,
)
from .instructions import (
    DoubleOperandInstruction,
    EmulatedInstruction,
    Instruction,
    JumpInstruction,
    SingleOperandInstruction,
)


def to_signed(value: int) -> int:
    """Interpret the low 16 bits of value as a two's complement number."""
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def format_signed_hex(value: int) -> str:
    """
    Format a 16-bit value as signed hex.

    Examples:
        0x0005 -> "0x5"
        0xFFFC -> "-0x4"
        0x0000 -> "0x0"
    """
    signed = to_signed(value)
    if signed < 0:
        return f"-0x{-signed:x}"
    return f"0x{signed:x}"


def render_register(register: Register) -> str:
    return register.name


def render_operand(mode: AddressingMode) -> str:
    """Format an addressing mode as operand text."""
    if isinstance(mode, Direct):
        return render_register(mode.register)
    if isinstance(mode, Indexed):
        return f"{format_signed_hex(mode.offset)}({render_register(mode.register)})"
    if isinstance(mode, Indirect):
        return f"@{render_register(mode.register)}"
    if isinstance(mode, Autoincrement):
        return f"@{render_register(mode.register)}+"
    if isinstance(mode, Absolute):
        return f"&0x{mode.address & 0xFFFF:04x}"
    if isinstance(mode, Symbolic):
        return format_signed_hex(mode.offset)
    if isinstance(mode, Immediate):
        return f"#{to_signed(mode.value)}"
    raise TypeError(f"not an addressing mode: {mode!r}")


def render_size(size: Optional[DataMode]) -> str:
    return size.suffix if size is not None else ""


def render_instruction(instr: Instruction) -> str:
    """
    Format any decoded instruction as one line of assembly text.

    Examples:
        JumpInstruction(JMP, 5)                       -> "(jmp, 0x5)"
        SingleOperandInstruction(PUSH, R5, WORD)      -> "push.w R5"
        DoubleOperandInstruction(MOV, #4, R5, BYTE)   -> "mov.b #4, R5"
        EmulatedInstruction(INC, R5, WORD)            -> "inc.w R5"
    """
    if isinstance(instr, JumpInstruction):
        return f"({instr.mnemonic}, {format_signed_hex(instr.offset_word)})"

    if isinstance(instr, SingleOperandInstruction):
        if instr.operation in OPERANDLESS_SINGLE_OPS:
            return instr.mnemonic
        size = instr.size if instr.operation in SIZED_SINGLE_OPS else None
        return f"{instr.mnemonic}{render_size(size)} {render_operand(instr.operand)}"

    if isinstance(instr, DoubleOperandInstruction):
        return (
            f"{instr.mnemonic}{render_size(instr.size)} "
            f"{render_operand(instr.source)}, {render_operand(instr.destination)}"
        )

    if isinstance(instr, EmulatedInstruction):
        text = f"{instr.mnemonic}{render_size(instr.size)}"
        if instr.operand is not None:
            text += f" {render_operand(instr.operand)}"
        return text

    raise TypeError(f"not an instruction: {instr!r}")
