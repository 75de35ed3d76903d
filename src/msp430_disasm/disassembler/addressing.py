"""
Addressing-Mode Resolver
========================

Turns a register field and a 2-bit addressing field into an operand.

The MSP430 has four addressing encodings (As = 00, 01, 10, 11). On an
ordinary register they select register, indexed, indirect and
autoincrement addressing. On PC, SR and CG the same bit patterns are
repurposed:

    As   PC              SR              CG
    --   --------------  --------------  ------------
    00   PC              SR              #0
    01   ADDR  (+1 word) &ADDR (+1 word) #1
    10   @PC             #4              #2
    11   #N    (+1 word) #8              #-1

The constants 0, 1, 2, 4, 8 and -1 come from the constant generators and
never consume an instruction word.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import Sequence, Tuple

from ..cpu import (
    CONSTANT_GENERATOR,
    SPECIAL_REGISTERS,
    AddressingMode,
    Absolute,
    Autoincrement,
    Direct,
    Immediate,
    Indexed,
    Indirect,
    Register,
    Symbolic,
)
from ..errors import MalformedOpcodeError, TruncatedInstructionError


def read_extra_word(words: Sequence[int], index: int) -> int:
    """
    Fetch a trailing instruction word from the decode window.

    Args:
        words: The decode window; words[0] is the opcode word
        index: Index of the trailing word (1 or 2)

    Raises:
        TruncatedInstructionError: If the window ends before index
    """
    if index >= len(words):
        raise TruncatedInstructionError(
            f"instruction needs word {index + 1} but only {len(words)} remain",
            opcode=words[0] if words else None,
            hint="the binary may be cut short or may not start on an instruction boundary",
        )
    return words[index]


def _offset_operand(register: Register, value: int) -> AddressingMode:
    """An operand with an offset word: symbolic on PC, absolute on SR."""
    if register == Register.PC:
        return Symbolic(value)
    if register == Register.SR:
        return Absolute(value)
    return Indexed(value, register)


def resolve_addressing_mode(
    register: Register,
    mode_bits: int,
    words: Sequence[int],
    extra_index: int = 1,
) -> Tuple[AddressingMode, bool]:
    """
    Resolve an operand from its register and addressing bits.

    Args:
        register: The operand's register field
        mode_bits: The 2-bit addressing field (As)
        words: The decode window (opcode word first)
        extra_index: Which window slot holds this operand's extra word

    Returns:
        Tuple of (addressing mode, whether an extra word was consumed)

    Raises:
        MalformedOpcodeError: If mode_bits is not a 2-bit value
        TruncatedInstructionError: If the needed extra word is missing
    """
    if not 0 <= mode_bits <= 0b11:
        raise MalformedOpcodeError(
            f"addressing mode {mode_bits} is not a 2-bit value",
            opcode=words[0] if words else None,
        )

    if register in SPECIAL_REGISTERS:
        constant = CONSTANT_GENERATOR.get((register, mode_bits))
        if constant is not None:
            return Immediate(constant, generated=True), False

    if mode_bits == 0b00:
        return Direct(register), False

    if mode_bits == 0b01:
        return _offset_operand(register, read_extra_word(words, extra_index)), True

    if mode_bits == 0b10:
        return Indirect(register), False

    # 0b11: @PC+ fetches the next word as an immediate
    if register == Register.PC:
        return Immediate(read_extra_word(words, extra_index)), True
    return Autoincrement(register), False


def resolve_destination(
    register: Register,
    indexed: bool,
    words: Sequence[int],
    extra_index: int,
) -> Tuple[AddressingMode, bool]:
    """
    Resolve a Format I destination from its single addressing bit (Ad).

    Ad = 0 is register addressing. Ad = 1 reads an offset word and gives
    symbolic (PC), absolute (SR) or indexed addressing.
    """
    if not indexed:
        return Direct(register), False

    return _offset_operand(register, read_extra_word(words, extra_index)), True
