"""
Unit Tests for the Renderer
===========================

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import pytest

from msp430_disasm.cpu import (
    Absolute,
    Autoincrement,
    DataMode,
    Direct,
    DoubleOp,
    EmulatedOp,
    Immediate,
    Indexed,
    Indirect,
    JumpOp,
    Register,
    SingleOp,
    Symbolic,
)
from msp430_disasm.disassembler.instructions import (
    DoubleOperandInstruction,
    EmulatedInstruction,
    JumpInstruction,
    SingleOperandInstruction,
)
from msp430_disasm.disassembler.render import (
    format_signed_hex,
    render_instruction,
    render_operand,
    to_signed,
)


# =============================================================================
# Signed Hex Tests
# =============================================================================

class TestSignedHex:
    """Tests for MSP430-style signed hex."""

    @pytest.mark.parametrize("value, text", [
        (0x0000, "0x0"),
        (0x0005, "0x5"),
        (0x7FFF, "0x7fff"),
        (0x8000, "-0x8000"),
        (0xFFFC, "-0x4"),
        (0xFFFF, "-0x1"),
        (0xFE05, "-0x1fb"),
    ])
    def test_values(self, value, text):
        assert format_signed_hex(value) == text

    def test_negative_python_int(self):
        """Negative ints are taken modulo 2**16."""
        assert format_signed_hex(-507) == "-0x1fb"

    def test_no_plus_sign(self):
        """Positive values carry no sign character."""
        assert not format_signed_hex(0x10).startswith("+")

    def test_to_signed(self):
        assert to_signed(0xFFFF) == -1
        assert to_signed(0x7FFF) == 32767


# =============================================================================
# Operand Tests
# =============================================================================

class TestRenderOperand:
    """Tests for addressing-mode text."""

    @pytest.mark.parametrize("mode, text", [
        (Direct(Register.R5), "R5"),
        (Direct(Register.PC), "PC"),
        (Indexed(0x0010, Register.R5), "0x10(R5)"),
        (Indexed(0xFFFE, Register.SP), "-0x2(SP)"),
        (Indirect(Register.R12), "@R12"),
        (Autoincrement(Register.SP), "@SP+"),
        (Absolute(0x0200), "&0x0200"),
        (Absolute(0x001F), "&0x001f"),
        (Symbolic(0xFFFC), "-0x4"),
        (Symbolic(0x0010), "0x10"),
        (Immediate(0), "#0"),
        (Immediate(8), "#8"),
        (Immediate(0x1234), "#4660"),
        (Immediate(0xFFFF), "#-1"),
        (Immediate(0x8000), "#-32768"),
    ])
    def test_modes(self, mode, text):
        assert render_operand(mode) == text

    def test_not_a_mode(self):
        with pytest.raises(TypeError):
            render_operand(Register.R5)


# =============================================================================
# Instruction Tests
# =============================================================================

class TestRenderInstruction:
    """Tests for whole-instruction text."""

    def test_jump(self):
        """Jumps render as (mnemonic, offset)."""
        assert render_instruction(JumpInstruction(JumpOp.JMP, 5)) == "(jmp, 0x5)"
        assert render_instruction(JumpInstruction(JumpOp.JNE, -1)) == "(jne, -0x1)"
        assert render_instruction(JumpInstruction(JumpOp.JN, 0)) == "(jn, 0x0)"

    def test_single_sized(self):
        """rrc, rra and push show their size."""
        instr = SingleOperandInstruction(SingleOp.PUSH, Direct(Register.R5), DataMode.BYTE)
        assert render_instruction(instr) == "push.b R5"

    def test_single_unsized(self):
        """call has no size suffix."""
        instr = SingleOperandInstruction(SingleOp.CALL, Immediate(0x1234))
        assert render_instruction(instr) == "call #4660"

    def test_single_unsized_ignores_size(self):
        """swpb never shows a size, whatever the value holds."""
        instr = SingleOperandInstruction(SingleOp.SWPB, Direct(Register.R5), DataMode.BYTE)
        assert render_instruction(instr) == "swpb R5"

    def test_reti(self):
        """reti renders bare."""
        instr = SingleOperandInstruction(SingleOp.RETI, Direct(Register.PC))
        assert render_instruction(instr) == "reti"

    def test_double(self):
        """Double-operand instructions always show their size."""
        instr = DoubleOperandInstruction(
            DoubleOp.MOV, Indexed(4, Register.R5), Absolute(0x0200), DataMode.WORD,
        )
        assert render_instruction(instr) == "mov.w 0x4(R5), &0x0200"

    def test_double_byte(self):
        instr = DoubleOperandInstruction(
            DoubleOp.BIS, Immediate(8), Direct(Register.R7), DataMode.BYTE,
        )
        assert render_instruction(instr) == "bis.b #8, R7"

    def test_literal_ret_encoding(self):
        """Without recognition, 0x4130 renders literally."""
        instr = DoubleOperandInstruction(
            DoubleOp.MOV, Autoincrement(Register.SP), Direct(Register.PC),
        )
        assert render_instruction(instr) == "mov.w @SP+, PC"

    def test_emulated_bare(self):
        assert render_instruction(EmulatedInstruction(EmulatedOp.RET)) == "ret"
        assert render_instruction(EmulatedInstruction(EmulatedOp.CLRC)) == "clrc"

    def test_emulated_with_operand(self):
        instr = EmulatedInstruction(EmulatedOp.INC, Direct(Register.R5), DataMode.WORD)
        assert render_instruction(instr) == "inc.w R5"

    def test_emulated_br(self):
        instr = EmulatedInstruction(EmulatedOp.BR, Immediate(0x1234))
        assert render_instruction(instr) == "br #4660"

    def test_not_an_instruction(self):
        with pytest.raises(TypeError):
            render_instruction("mov")
