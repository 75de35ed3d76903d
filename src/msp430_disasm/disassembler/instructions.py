"""
Decoded Instruction Values
==========================

One immutable value per decoded instruction. Jump, single-operand and
double-operand values come straight from the bit fields; an emulated
value is only ever derived from a double-operand value by the
emulated-form recognizer.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..cpu import (
    AddressingMode,
    DataMode,
    DoubleOp,
    EmulatedOp,
    JumpOp,
    SingleOp,
)


@dataclass(frozen=True)
class JumpInstruction:
    """
    Conditional or unconditional jump (Format III).

    Attributes:
        operation: The jump condition
        offset: Signed word displacement as encoded (-512..511); no
                program-counter arithmetic is applied
    """
    operation: JumpOp
    offset: int

    @property
    def offset_word(self) -> int:
        """The sign-extended offset as a 16-bit value."""
        return self.offset & 0xFFFF

    @property
    def mnemonic(self) -> str:
        return self.operation.mnemonic


@dataclass(frozen=True)
class SingleOperandInstruction:
    """
    Single-operand instruction (Format II).

    Attributes:
        operation: The operation
        operand: The operand's addressing mode
        size: Operand width for rrc, rra and push; None for the
              size-invariant operations
    """
    operation: SingleOp
    operand: AddressingMode
    size: Optional[DataMode] = None

    @property
    def mnemonic(self) -> str:
        return self.operation.mnemonic


@dataclass(frozen=True)
class DoubleOperandInstruction:
    """Double-operand instruction (Format I)."""
    operation: DoubleOp
    source: AddressingMode
    destination: AddressingMode
    size: DataMode = DataMode.WORD

    @property
    def mnemonic(self) -> str:
        return self.operation.mnemonic


@dataclass(frozen=True)
class EmulatedInstruction:
    """
    Emulated mnemonic standing in for a specific Format I encoding.

    Attributes:
        operation: The alias (e.g. ret, clrc, inc)
        operand: The remaining operand, if the alias keeps one
        size: Operand width, if the alias keeps one
    """
    operation: EmulatedOp
    operand: Optional[AddressingMode] = None
    size: Optional[DataMode] = None

    @property
    def mnemonic(self) -> str:
        return self.operation.mnemonic


Instruction = Union[
    JumpInstruction,
    SingleOperandInstruction,
    DoubleOperandInstruction,
    EmulatedInstruction,
]
