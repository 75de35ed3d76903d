"""
MSP430 Instruction Set Definitions
==================================

Register table, operand size, operation codes and addressing-mode value
types for the 16-bit MSP430 CPU. These definitions are shared
by every stage of the disassembler and hold no decoding logic beyond
field extraction.

Instruction Formats
-------------------
    Jump (Format III):            001c ccoo oooo oooo
        c = condition, o = signed 10-bit word offset

    Single operand (Format II):   0001 00oo obaa rrrr
        o = operation, b = byte flag, a = addressing mode, r = register

    Double operand (Format I):    oooo ssss dbaa rrrr
        o = operation, s = source register, d = destination addressing
        bit, b = byte flag, a = source addressing mode, r = destination
        register

Registers
---------
    R0 PC  program counter
    R1 SP  stack pointer
    R2 SR  status register / constant generator 1
    R3 CG  constant generator 2
    R4-R15 general purpose

Byte ordering is little-endian: the low byte of a word comes first.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, FrozenSet, Union

from ..errors import MalformedOpcodeError


# =============================================================================
# Bit Field Layout
# =============================================================================

WORD_MASK = 0xFFFF

REGISTER_MASK = 0b1111
ADDRESSING_MASK = 0b11
BYTE_FLAG = 0x0040            # bit 6, shared by Format I and II

JUMP_CONDITION_SHIFT = 10
JUMP_CONDITION_MASK = 0b111
JUMP_OFFSET_MASK = 0x03FF     # bits 9-0
JUMP_OFFSET_SIGN = 0x0200     # bit 9 of the offset field
JUMP_SIGN_EXTENSION = 0xFC00  # high 6 bits set

SINGLE_OP_SHIFT = 7
SINGLE_OP_MASK = 0b111
SINGLE_MODE_SHIFT = 4

DOUBLE_OP_SHIFT = 12
DOUBLE_SRC_SHIFT = 8
DOUBLE_SRC_MODE_SHIFT = 4
DOUBLE_DST_MODE_BIT = 0x0080  # bit 7

JUMP_PREFIX = 0b001           # top 3 bits
SINGLE_OPERAND_PREFIX = 0b000100  # top 6 bits


# =============================================================================
# Registers
# =============================================================================

class Register(IntEnum):
    """The 16 CPU registers, valued by their 4-bit encoding."""
    PC = 0
    SP = 1
    SR = 2
    CG = 3
    R4 = 4
    R5 = 5
    R6 = 6
    R7 = 7
    R8 = 8
    R9 = 9
    R10 = 10
    R11 = 11
    R12 = 12
    R13 = 13
    R14 = 14
    R15 = 15

    def __str__(self) -> str:
        return self.name


# Registers whose addressing-mode bits are repurposed during decode
SPECIAL_REGISTERS: FrozenSet[Register] = frozenset({Register.PC, Register.SR, Register.CG})


def decode_register(code: int) -> Register:
    """
    Map a 4-bit register field to its Register.

    Raises:
        MalformedOpcodeError: If code does not fit in 4 bits
    """
    if not 0 <= code <= REGISTER_MASK:
        raise MalformedOpcodeError(f"register code {code} is not a 4-bit value")
    return Register(code)


def encode_register(register: Register) -> int:
    """Map a Register back to its 4-bit field value."""
    return int(register)


# =============================================================================
# Operand Size
# =============================================================================

class DataMode(Enum):
    """
    Operand width selected by the byte flag (bit 6).

    WORD is the zero value: an instruction without the flag set operates
    on 16-bit words.
    """
    WORD = 0
    BYTE = 1

    @classmethod
    def from_word(cls, word: int) -> "DataMode":
        return cls.BYTE if word & BYTE_FLAG else cls.WORD

    def encode(self) -> int:
        """The byte-flag bits for this width; the inverse of from_word()."""
        return BYTE_FLAG if self is DataMode.BYTE else 0

    @property
    def suffix(self) -> str:
        return ".b" if self is DataMode.BYTE else ".w"

    def __str__(self) -> str:
        return self.suffix


# =============================================================================
# Operation Codes
# =============================================================================

class JumpOp(IntEnum):
    """Format III conditions, valued by their 3-bit condition field."""
    JNE = 0b000
    JEQ = 0b001
    JLO = 0b010
    JHS = 0b011
    JN = 0b100
    JGE = 0b101
    JL = 0b110
    JMP = 0b111

    @property
    def mnemonic(self) -> str:
        return self.name.lower()


class SingleOp(IntEnum):
    """Format II operations, valued by their 3-bit operation field."""
    RRC = 0b000
    SWPB = 0b001
    RRA = 0b010
    SXT = 0b011
    PUSH = 0b100
    CALL = 0b101
    RETI = 0b110

    @property
    def mnemonic(self) -> str:
        return self.name.lower()


# Only these operations have a byte form; the rest ignore bit 6
SIZED_SINGLE_OPS: FrozenSet[SingleOp] = frozenset({SingleOp.RRC, SingleOp.RRA, SingleOp.PUSH})

# RETI takes its operands from the stack and renders without one
OPERANDLESS_SINGLE_OPS: FrozenSet[SingleOp] = frozenset({SingleOp.RETI})


class DoubleOp(IntEnum):
    """Format I operations, valued by their 4-bit operation field."""
    MOV = 0b0100
    ADD = 0b0101
    ADDC = 0b0110
    SUBC = 0b0111
    SUB = 0b1000
    CMP = 0b1001
    DADD = 0b1010
    BIT = 0b1011
    BIC = 0b1100
    BIS = 0b1101
    XOR = 0b1110
    AND = 0b1111

    @property
    def mnemonic(self) -> str:
        return self.name.lower()


class EmulatedOp(Enum):
    """Documented aliases for specific Format I encodings."""
    NOP = "nop"
    RET = "ret"
    POP = "pop"
    BR = "br"
    CLR = "clr"
    CLRC = "clrc"
    CLRZ = "clrz"
    CLRN = "clrn"
    DINT = "dint"
    SETC = "setc"
    SETZ = "setz"
    SETN = "setn"
    EINT = "eint"
    RLA = "rla"
    RLC = "rlc"
    INC = "inc"
    INCD = "incd"
    DEC = "dec"
    DECD = "decd"
    ADC = "adc"
    SBC = "sbc"
    DADC = "dadc"
    INV = "inv"
    TST = "tst"

    @property
    def mnemonic(self) -> str:
        return self.value


def decode_jump_op(word: int) -> JumpOp:
    """
    Extract the jump condition from a Format III word.

    Raises:
        MalformedOpcodeError: If the word is not a jump
    """
    if (word & WORD_MASK) >> 13 != JUMP_PREFIX:
        raise MalformedOpcodeError("word is not a jump instruction", opcode=word)
    return JumpOp((word >> JUMP_CONDITION_SHIFT) & JUMP_CONDITION_MASK)


def encode_jump_op(op: JumpOp) -> int:
    """Opcode bits of a jump with a zero offset."""
    return ((JUMP_PREFIX << 3) | int(op)) << JUMP_CONDITION_SHIFT


def decode_single_op(word: int) -> SingleOp:
    """
    Extract the operation from a Format II word.

    Raises:
        MalformedOpcodeError: If the word is not in the single-operand
            group or selects the undefined sub-code 0b111
    """
    if (word & WORD_MASK) >> 10 != SINGLE_OPERAND_PREFIX:
        raise MalformedOpcodeError("word is not a single-operand instruction", opcode=word)
    code = (word >> SINGLE_OP_SHIFT) & SINGLE_OP_MASK
    try:
        return SingleOp(code)
    except ValueError:
        raise MalformedOpcodeError(
            f"undefined single-operand operation code 0b{code:03b}",
            opcode=word,
            hint="the data may not be code, or decoding started mid-instruction",
        ) from None


def encode_single_op(op: SingleOp) -> int:
    """Opcode bits of a single-operand instruction on Direct(PC)."""
    return ((SINGLE_OPERAND_PREFIX << 3) | int(op)) << SINGLE_OP_SHIFT


def decode_double_op(word: int) -> DoubleOp:
    """
    Extract the operation from a Format I word.

    Raises:
        MalformedOpcodeError: If the top nibble is not a Format I operation
    """
    code = (word & WORD_MASK) >> DOUBLE_OP_SHIFT
    try:
        return DoubleOp(code)
    except ValueError:
        raise MalformedOpcodeError(
            f"reserved operation nibble 0b{code:04b}",
            opcode=word,
            hint="the data may not be code, or decoding started mid-instruction",
        ) from None


def encode_double_op(op: DoubleOp) -> int:
    """Opcode bits of a double-operand instruction, all other fields zero."""
    return int(op) << DOUBLE_OP_SHIFT


# =============================================================================
# Addressing Modes
# =============================================================================
# Each mode is an immutable value so that decoded operands can be compared
# directly when recognising emulated forms (e.g. source == destination).

@dataclass(frozen=True)
class Direct:
    """Register contents: Rn"""
    register: Register


@dataclass(frozen=True)
class Indexed:
    """Register plus offset from an extra word: X(Rn)"""
    offset: int
    register: Register


@dataclass(frozen=True)
class Indirect:
    """Memory at the register's address: @Rn"""
    register: Register


@dataclass(frozen=True)
class Autoincrement:
    """Memory at the register's address, register incremented: @Rn+"""
    register: Register


@dataclass(frozen=True)
class Absolute:
    """Fixed address from an extra word: &ADDR"""
    address: int


@dataclass(frozen=True)
class Symbolic:
    """PC-relative offset from an extra word: ADDR"""
    offset: int


@dataclass(frozen=True)
class Immediate:
    """
    Literal value: #N

    The value either comes from an extra word (@PC+) or is synthesized by
    the constant generators SR and CG without consuming a word. The
    `generated` flag records which and takes no part in equality.
    """
    value: int
    generated: bool = field(default=False, compare=False)


AddressingMode = Union[Direct, Indexed, Indirect, Autoincrement, Absolute, Symbolic, Immediate]


# =============================================================================
# Constant Generator Table
# =============================================================================
# (register, addressing bits) -> synthesized constant

CONSTANT_GENERATOR: Dict[tuple, int] = {
    (Register.SR, 0b10): 4,
    (Register.SR, 0b11): 8,
    (Register.CG, 0b00): 0,
    (Register.CG, 0b01): 1,
    (Register.CG, 0b10): 2,
    (Register.CG, 0b11): 0xFFFF,
}
