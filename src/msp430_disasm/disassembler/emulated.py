"""
Emulated-Form Recognizer
========================

The MSP430 documents a set of emulated instructions: mnemonics that have
no opcode of their own and are assembled as a particular double-operand
instruction. For example `ret` is `mov @SP+, PC` and `clrc` is
`bic #1, SR`. This module maps a decoded double-operand instruction back
to its alias when one applies.

Rules are checked per operation in order; the first match wins. An
instruction with no matching rule is rendered verbatim.

    Operation  Condition                          Alias
    ---------  ---------------------------------  ----------------
    mov        src == dst                         nop
    mov        src == @SP / @SP+, dst == PC       ret
    mov        src == @SP / @SP+                  pop dst
    mov        src == 0                           clr dst
    mov        dst == PC                          br src
    bic        dst == SR, src == #1 #2 #4 #8      clrc clrz clrn dint
    bis        dst == SR, src == #1 #2 #4 #8      setc setz setn eint
    add        src == dst                         rla dst
    add        src == 1 / other absolute          inc / incd dst
    addc       src == dst                         rlc dst
    addc       src == 0                           adc dst
    sub        src == 1 / other absolute          dec / decd dst
    subc       src == 0                           sbc dst
    dadd       src == 0                           dadc dst
    xor        src == 0xFFFF                      inv dst
    cmp        src == 0                           tst dst

A constant written "src == k" above is the absolute operand &k, and
"other absolute" is any other &ADDR. With match_generated=True the
constant-generator immediate #k is accepted as well, and #2 counts as
the "other" operand of incd and decd. That reading follows the MSP430
user's guide, where mov #0, dst is how clr is actually assembled.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import Callable, Dict, Optional

from ..cpu import (
    Absolute,
    AddressingMode,
    Autoincrement,
    Direct,
    DoubleOp,
    EmulatedOp,
    Immediate,
    Indirect,
    Register,
)
from .instructions import DoubleOperandInstruction, EmulatedInstruction


PC_DIRECT = Direct(Register.PC)
SR_DIRECT = Direct(Register.SR)

# Sources that pop the stack
STACK_POP_SOURCES = (Indirect(Register.SP), Autoincrement(Register.SP))

STATUS_CLEAR = {
    1: EmulatedOp.CLRC,
    2: EmulatedOp.CLRZ,
    4: EmulatedOp.CLRN,
    8: EmulatedOp.DINT,
}

STATUS_SET = {
    1: EmulatedOp.SETC,
    2: EmulatedOp.SETZ,
    4: EmulatedOp.SETN,
    8: EmulatedOp.EINT,
}


def _is_constant(operand: AddressingMode, value: int, match_generated: bool) -> bool:
    if operand == Absolute(value):
        return True
    return match_generated and operand == Immediate(value)


def _is_other_constant(operand: AddressingMode, match_generated: bool) -> bool:
    if isinstance(operand, Absolute):
        return True
    return match_generated and operand == Immediate(2)


def _on_destination(op: EmulatedOp, instr: DoubleOperandInstruction) -> EmulatedInstruction:
    return EmulatedInstruction(op, operand=instr.destination, size=instr.size)


def _bare(op: EmulatedOp) -> EmulatedInstruction:
    return EmulatedInstruction(op)


# =============================================================================
# Per-Operation Rules
# =============================================================================

Rule = Callable[[DoubleOperandInstruction, bool], Optional[EmulatedInstruction]]


def _recognize_mov(instr, match_generated):
    if instr.source == instr.destination:
        return _bare(EmulatedOp.NOP)
    if instr.source in STACK_POP_SOURCES:
        if instr.destination == PC_DIRECT:
            return _bare(EmulatedOp.RET)
        return _on_destination(EmulatedOp.POP, instr)
    if _is_constant(instr.source, 0, match_generated):
        return _on_destination(EmulatedOp.CLR, instr)
    if instr.destination == PC_DIRECT:
        return EmulatedInstruction(EmulatedOp.BR, operand=instr.source)
    return None


def _status_bit_rule(table: Dict[int, EmulatedOp]) -> Rule:
    def recognize(instr, match_generated):
        if instr.destination != SR_DIRECT or not isinstance(instr.source, Immediate):
            return None
        op = table.get(instr.source.value)
        return _bare(op) if op else None
    return recognize


def _recognize_add(instr, match_generated):
    if instr.source == instr.destination:
        return _on_destination(EmulatedOp.RLA, instr)
    if _is_constant(instr.source, 1, match_generated):
        return _on_destination(EmulatedOp.INC, instr)
    if _is_other_constant(instr.source, match_generated):
        return _on_destination(EmulatedOp.INCD, instr)
    return None


def _recognize_addc(instr, match_generated):
    if instr.source == instr.destination:
        return _on_destination(EmulatedOp.RLC, instr)
    if _is_constant(instr.source, 0, match_generated):
        return _on_destination(EmulatedOp.ADC, instr)
    return None


def _recognize_sub(instr, match_generated):
    if _is_constant(instr.source, 1, match_generated):
        return _on_destination(EmulatedOp.DEC, instr)
    if _is_other_constant(instr.source, match_generated):
        return _on_destination(EmulatedOp.DECD, instr)
    return None


def _constant_rule(value: int, op: EmulatedOp) -> Rule:
    def recognize(instr, match_generated):
        if _is_constant(instr.source, value, match_generated):
            return _on_destination(op, instr)
        return None
    return recognize


_RULES: Dict[DoubleOp, Rule] = {
    DoubleOp.MOV: _recognize_mov,
    DoubleOp.BIC: _status_bit_rule(STATUS_CLEAR),
    DoubleOp.BIS: _status_bit_rule(STATUS_SET),
    DoubleOp.ADD: _recognize_add,
    DoubleOp.ADDC: _recognize_addc,
    DoubleOp.SUB: _recognize_sub,
    DoubleOp.SUBC: _constant_rule(0, EmulatedOp.SBC),
    DoubleOp.DADD: _constant_rule(0, EmulatedOp.DADC),
    DoubleOp.XOR: _constant_rule(0xFFFF, EmulatedOp.INV),
    DoubleOp.CMP: _constant_rule(0, EmulatedOp.TST),
}


def recognize_emulated(
    instr: DoubleOperandInstruction,
    match_generated: bool = False,
) -> Optional[EmulatedInstruction]:
    """
    Return the emulated form of a double-operand instruction, if any.

    Args:
        instr: A decoded double-operand instruction
        match_generated: Also accept constant-generator immediates where
            a rule names an absolute constant

    Returns:
        The matching EmulatedInstruction, or None when the instruction
        has no alias (bit, and, and unmatched operands)
    """
    rule = _RULES.get(instr.operation)
    if rule is None:
        return None
    return rule(instr, match_generated)
