"""
MSP430 Disassembler
===================

Disassembles MSP430 machine code into human-readable assembly language.

The byte buffer is folded into little-endian 16-bit words, then decoded
one instruction at a time. Each instruction reports how many words it
occupies (1 to 3) and the cursor advances by exactly that count;
instruction length is self-describing, so decoding is strictly
sequential.

Error Policy:
    Decoding stops at the first malformed or truncated instruction. The
    error is stamped with the word offset and address where it occurred
    and returned in the DisassemblyResult next to everything decoded
    before it. There is no attempt to resynchronize.

    An odd-length buffer is decoded up to its last complete word; the
    lone trailing byte is then reported as an OddLengthError.

Usage:
    disasm = Msp430Disassembler()

    # Disassemble from bytes
    result = disasm.disassemble(firmware_bytes)
    for instr in result.instructions:
        print(instr)
    if result.error:
        print(result.error)

    # Decode words straight to text
    lines = decode([0x4130, 0x3C05])

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple
import logging

from ..config import DisassemblerConfig
from ..errors import DecodeError, OddLengthError, StreamLocation
from .emulated import recognize_emulated
from .formats import decode_instruction
from .instructions import DoubleOperandInstruction, EmulatedInstruction, Instruction
from .render import render_instruction

logger = logging.getLogger(__name__)

# Longest instruction: opcode word plus source and destination words
MAX_INSTRUCTION_WORDS = 3


# =============================================================================
# Byte to Word Folding
# =============================================================================

def bytes_to_words(data: bytes, strict: bool = False) -> List[int]:
    """
    Fold a byte buffer into little-endian 16-bit words.

    Args:
        data: Raw bytes, low byte of each word first
        strict: Raise on an odd length instead of leaving the last byte out

    Raises:
        OddLengthError: If strict and len(data) is odd
    """
    if strict and len(data) % 2:
        raise OddLengthError(
            f"{len(data)} bytes do not form whole 16-bit words",
            location=StreamLocation(len(data) // 2, len(data) - 1),
        )
    return [data[i] | (data[i + 1] << 8) for i in range(0, len(data) - 1, 2)]


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class DisassembledInstruction:
    """
    A single disassembled MSP430 instruction.

    Attributes:
        offset: Index of the opcode word in the word stream
        address: Byte address of the opcode word
        words: All words comprising this instruction
        instruction: The literal decoded instruction
        emulated: The emulated form, if one was recognised and enabled
        text: The rendered assembly text
    """
    offset: int
    address: int
    words: Tuple[int, ...]
    instruction: Instruction
    emulated: Optional[EmulatedInstruction]
    text: str

    @property
    def size(self) -> int:
        """Instruction size in words."""
        return len(self.words)

    @property
    def display(self) -> Instruction:
        """The instruction value that was rendered."""
        return self.emulated if self.emulated is not None else self.instruction

    def format(self, show_words: bool = True) -> str:
        """Format as a listing line: ADDRESS: WORDS  TEXT"""
        if not show_words:
            return f"{self.address:04x}: {self.text}"
        hex_words = " ".join(f"{w:04x}" for w in self.words)
        # Pad to the widest instruction (3 words = 14 chars)
        hex_words = hex_words.ljust(5 * MAX_INSTRUCTION_WORDS - 1)
        return f"{self.address:04x}: {hex_words}  {self.text}"

    def __str__(self) -> str:
        return self.format()

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": f"0x{self.address:04x}",
            "address_int": self.address,
            "offset": self.offset,
            "words": [f"0x{w:04x}" for w in self.words],
            "size": self.size,
            "mnemonic": self.display.mnemonic,
            "text": self.text,
            "emulated": self.emulated is not None,
        }


@dataclass
class DisassemblyResult:
    """
    Outcome of disassembling a stream.

    Attributes:
        instructions: Everything decoded before the stream ended or stopped
        error: The error that stopped decoding, if any
    """
    instructions: List[DisassembledInstruction] = field(default_factory=list)
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def lines(self) -> List[str]:
        """Rendered assembly text, one entry per instruction."""
        return [instr.text for instr in self.instructions]

    @property
    def words_consumed(self) -> int:
        return sum(instr.size for instr in self.instructions)

    def raise_for_error(self) -> None:
        """Raise the stored error, if any."""
        if self.error is not None:
            raise self.error


# =============================================================================
# MSP430 Disassembler
# =============================================================================

class Msp430Disassembler:
    """
    Stream driver for MSP430 machine code.

    Holds no state between calls besides its configuration; each call
    owns its own cursor and output list.

    Attributes:
        config: Base address, alias and listing settings
    """

    def __init__(self, config: Optional[DisassemblerConfig] = None):
        """
        Initialize the disassembler.

        Args:
            config: Optional configuration (defaults: base address 0,
                    emulated mnemonics enabled)
        """
        self.config = config or DisassemblerConfig()
        self.config.validate()

    def address_of(self, offset: int) -> int:
        """Byte address of the word at offset."""
        return (self.config.base_address + 2 * offset) & 0xFFFF

    def disassemble_one(self, words: Sequence[int], offset: int = 0) -> DisassembledInstruction:
        """
        Disassemble the instruction starting at words[offset].

        Args:
            words: The whole word stream
            offset: Index of the instruction's first word

        Returns:
            DisassembledInstruction with decoded information

        Raises:
            DecodeError: If the instruction is malformed or truncated; the
                error carries the offset and address
        """
        window = words[offset:offset + MAX_INSTRUCTION_WORDS]
        try:
            instruction, consumed = decode_instruction(window)
        except DecodeError as e:
            raise e.at(offset, self.address_of(offset)) from None

        emulated = None
        if self.config.use_emulated and isinstance(instruction, DoubleOperandInstruction):
            emulated = recognize_emulated(instruction, self.config.match_generated)

        return DisassembledInstruction(
            offset=offset,
            address=self.address_of(offset),
            words=tuple(window[:consumed]),
            instruction=instruction,
            emulated=emulated,
            text=render_instruction(emulated or instruction),
        )

    def disassemble_words(
        self,
        words: Sequence[int],
        count: Optional[int] = None,
        trace: Optional[Callable[[DisassembledInstruction], None]] = None,
    ) -> DisassemblyResult:
        """
        Disassemble a word stream.

        Args:
            words: 16-bit instruction words
            count: Maximum number of instructions (None = config default)
            trace: Optional callable invoked with each decoded instruction

        Returns:
            DisassemblyResult with the decoded instructions and, if
            decoding stopped early, the error that stopped it
        """
        if count is None:
            count = self.config.max_instructions

        result = DisassemblyResult()
        offset = 0

        while offset < len(words):
            if count is not None and len(result.instructions) >= count:
                break

            try:
                instr = self.disassemble_one(words, offset)
            except DecodeError as e:
                logger.warning(f"Decoding stopped at word {offset}: {e.message}")
                result.error = e
                break

            logger.debug(f"Decoded {instr}")
            if trace is not None:
                trace(instr)

            result.instructions.append(instr)
            offset += instr.size

        return result

    def disassemble(
        self,
        data: bytes,
        count: Optional[int] = None,
        trace: Optional[Callable[[DisassembledInstruction], None]] = None,
    ) -> DisassemblyResult:
        """
        Disassemble a raw byte buffer.

        An odd trailing byte is reported as an OddLengthError once every
        complete word has been decoded, unless decoding already stopped.
        """
        words = bytes_to_words(data)
        result = self.disassemble_words(words, count=count, trace=trace)

        if len(data) % 2 and result.error is None and result.words_consumed == len(words):
            offset = len(words)
            logger.warning(f"Ignoring trailing byte at offset {len(data) - 1}")
            result.error = OddLengthError(
                f"trailing byte 0x{data[-1]:02x} does not form a 16-bit word",
                location=StreamLocation(offset, self.address_of(offset)),
                hint="MSP430 code is made of whole 16-bit words",
            )

        return result

    def format_result(self, result: DisassemblyResult) -> str:
        """
        Format a result as listing lines.

        A decode error, if any, ends the listing as a comment line, set
        apart from the instructions by a blank line.
        """
        lines = [instr.format(self.config.show_words) for instr in result.instructions]
        if result.error is not None:
            if lines:
                lines.append("")
            lines.append(f"; error: {result.error.message} at {result.error.location}")
        return "\n".join(lines)

    def disassemble_to_text(self, data: bytes, count: Optional[int] = None) -> str:
        """Disassemble and return a formatted listing."""
        return self.format_result(self.disassemble(data, count=count))


# =============================================================================
# Convenience Functions
# =============================================================================

def decode(words: Sequence[int]) -> List[str]:
    """
    Decode a word stream into rendered instruction lines.

    Raises:
        DecodeError: If decoding stops on a malformed or truncated
            instruction
    """
    result = Msp430Disassembler().disassemble_words(words)
    result.raise_for_error()
    return result.lines
