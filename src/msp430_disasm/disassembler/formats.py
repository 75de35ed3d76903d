"""
Format Classifier and Decoders
==============================

Classifies the first word of an instruction into one of the three MSP430
formats and decodes a window of up to three words into an instruction
value plus the number of words it occupies.

    Format     Leading bits     Words
    ---------  ---------------  -----
    Jump       001x             1
    Single     0001 00xx        1-2
    Double     0100 .. 1111     1-3

Every decoder is a pure function of its word window. A field that selects
a reserved pattern raises MalformedOpcodeError; an operand whose extra
word lies beyond the window raises TruncatedInstructionError.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from enum import Enum
from typing import Sequence, Tuple

from ..cpu import (
    SIZED_SINGLE_OPS,
    DataMode,
    decode_double_op,
    decode_jump_op,
    decode_register,
    decode_single_op,
)
from ..cpu.msp430 import (
    ADDRESSING_MASK,
    DOUBLE_DST_MODE_BIT,
    DOUBLE_SRC_MODE_SHIFT,
    DOUBLE_SRC_SHIFT,
    JUMP_OFFSET_MASK,
    JUMP_OFFSET_SIGN,
    JUMP_PREFIX,
    JUMP_SIGN_EXTENSION,
    REGISTER_MASK,
    SINGLE_MODE_SHIFT,
    SINGLE_OPERAND_PREFIX,
    WORD_MASK,
)
from ..errors import MalformedOpcodeError, TruncatedInstructionError
from .addressing import resolve_addressing_mode, resolve_destination
from .instructions import (
    DoubleOperandInstruction,
    Instruction,
    JumpInstruction,
    SingleOperandInstruction,
)


class InstructionFormat(Enum):
    """The three top-level instruction shapes."""
    JUMP = "jump"
    SINGLE_OPERAND = "single-operand"
    DOUBLE_OPERAND = "double-operand"


# =============================================================================
# Format Classification
# =============================================================================

def classify_format(word: int) -> InstructionFormat:
    """
    Classify an instruction by the leading bits of its first word.

    Raises:
        MalformedOpcodeError: If the word starts with 0000 or 0001 but is
            not in the single-operand group
    """
    word &= WORD_MASK
    if word >> 13 == JUMP_PREFIX:
        return InstructionFormat.JUMP
    if word >> 10 == SINGLE_OPERAND_PREFIX:
        return InstructionFormat.SINGLE_OPERAND
    if word >> 12 < 0b0100:
        raise MalformedOpcodeError(
            f"reserved operation nibble 0b{word >> 12:04b}",
            opcode=word,
            hint="the data may not be code, or decoding started mid-instruction",
        )
    return InstructionFormat.DOUBLE_OPERAND


# =============================================================================
# Jump (Format III)
# =============================================================================

def sign_extend_jump_offset(word: int) -> int:
    """
    Sign-extend the 10-bit offset field of a jump to 16 bits.

    Returns the 16-bit pattern, e.g. 0x0205 -> 0xFE05.
    """
    offset = word & JUMP_OFFSET_MASK
    if offset & JUMP_OFFSET_SIGN:
        offset |= JUMP_SIGN_EXTENSION
    return offset


def decode_jump(words: Sequence[int]) -> Tuple[JumpInstruction, int]:
    """Decode a jump. Always consumes exactly one word."""
    word = words[0]
    operation = decode_jump_op(word)
    offset = sign_extend_jump_offset(word)
    if offset & 0x8000:
        offset -= 0x10000
    return JumpInstruction(operation, offset), 1


# =============================================================================
# Single Operand (Format II)
# =============================================================================

def decode_single_operand(words: Sequence[int]) -> Tuple[SingleOperandInstruction, int]:
    """
    Decode a single-operand instruction.

    The byte flag is read for every operation but only kept for rrc, rra
    and push; the others have no byte form.

    Returns:
        Tuple of (instruction, words consumed: 1 or 2)
    """
    word = words[0]
    operation = decode_single_op(word)
    size = DataMode.from_word(word)

    register = decode_register(word & REGISTER_MASK)
    mode_bits = (word >> SINGLE_MODE_SHIFT) & ADDRESSING_MASK
    operand, extra = resolve_addressing_mode(register, mode_bits, words)

    instruction = SingleOperandInstruction(
        operation=operation,
        operand=operand,
        size=size if operation in SIZED_SINGLE_OPS else None,
    )
    return instruction, 2 if extra else 1


# =============================================================================
# Double Operand (Format I)
# =============================================================================

def decode_double_operand(words: Sequence[int]) -> Tuple[DoubleOperandInstruction, int]:
    """
    Decode a double-operand instruction.

    The source is resolved first. When it consumes the word after the
    opcode, the destination's offset moves to the word after that.

    Returns:
        Tuple of (instruction, words consumed: 1 to 3)
    """
    word = words[0]
    operation = decode_double_op(word)
    size = DataMode.from_word(word)

    src_register = decode_register((word >> DOUBLE_SRC_SHIFT) & REGISTER_MASK)
    src_bits = (word >> DOUBLE_SRC_MODE_SHIFT) & ADDRESSING_MASK
    source, src_extra = resolve_addressing_mode(src_register, src_bits, words)

    extra_words = 1 if src_extra else 0

    dst_register = decode_register(word & REGISTER_MASK)
    destination, dst_extra = resolve_destination(
        dst_register,
        bool(word & DOUBLE_DST_MODE_BIT),
        words,
        extra_index=1 + extra_words,
    )
    if dst_extra:
        extra_words += 1

    instruction = DoubleOperandInstruction(
        operation=operation,
        source=source,
        destination=destination,
        size=size,
    )
    return instruction, 1 + extra_words


# =============================================================================
# Dispatch
# =============================================================================

_DECODERS = {
    InstructionFormat.JUMP: decode_jump,
    InstructionFormat.SINGLE_OPERAND: decode_single_operand,
    InstructionFormat.DOUBLE_OPERAND: decode_double_operand,
}


def decode_instruction(words: Sequence[int]) -> Tuple[Instruction, int]:
    """
    Decode the instruction at the start of a word window.

    Args:
        words: Up to three words; fewer near the end of the stream

    Returns:
        Tuple of (literal instruction, words consumed)

    Raises:
        MalformedOpcodeError: On a reserved or undefined encoding
        TruncatedInstructionError: If the window is empty or too short
    """
    if not words:
        raise TruncatedInstructionError("no word left to decode")
    decoder = _DECODERS[classify_format(words[0])]
    return decoder(words)
