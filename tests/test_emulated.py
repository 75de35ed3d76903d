"""
Unit Tests for the Emulated-Form Recognizer
===========================================

Every alias rule is checked both from a constructed DoubleOperandInstruction
and from the real machine word an assembler emits for it.

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
    Register,
)
from msp430_disasm.disassembler.emulated import recognize_emulated
from msp430_disasm.disassembler.formats import decode_double_operand
from msp430_disasm.disassembler.instructions import (
    DoubleOperandInstruction,
    EmulatedInstruction,
)


R5 = Direct(Register.R5)
PC = Direct(Register.PC)
SR = Direct(Register.SR)


def double(op, source, destination, size=DataMode.WORD):
    return DoubleOperandInstruction(op, source, destination, size)


def recognize_word(*words, match_generated=False):
    instr, _ = decode_double_operand(list(words))
    return recognize_emulated(instr, match_generated)


# =============================================================================
# mov Rules
# =============================================================================

class TestMovAliases:
    """Aliases of mov: nop, ret, pop, clr, br."""

    def test_nop(self):
        """Moving a register onto itself is nop."""
        assert recognize_emulated(double(DoubleOp.MOV, R5, R5)) == EmulatedInstruction(EmulatedOp.NOP)

    def test_ret_indirect_sp(self):
        """mov @SP, PC is ret."""
        result = recognize_emulated(double(DoubleOp.MOV, Indirect(Register.SP), PC))
        assert result == EmulatedInstruction(EmulatedOp.RET)

    def test_ret_from_word(self):
        """0x4130 (mov @SP+, PC) is ret, never mov."""
        result = recognize_word(0x4130)
        assert result == EmulatedInstruction(EmulatedOp.RET)

    def test_pop(self):
        """mov @SP+, R5 is pop R5 and keeps its size."""
        result = recognize_word(0x4135)
        assert result == EmulatedInstruction(EmulatedOp.POP, R5, DataMode.WORD)

    def test_pop_indirect_sp(self):
        """mov @SP, R5 also matches pop."""
        result = recognize_emulated(double(DoubleOp.MOV, Indirect(Register.SP), R5, DataMode.BYTE))
        assert result == EmulatedInstruction(EmulatedOp.POP, R5, DataMode.BYTE)

    def test_clr_absolute_zero(self):
        """mov &0, R5 is clr R5."""
        result = recognize_emulated(double(DoubleOp.MOV, Absolute(0), R5))
        assert result == EmulatedInstruction(EmulatedOp.CLR, R5, DataMode.WORD)

    def test_clr_from_word(self):
        """mov &0x0000, R5 from its encoding is clr R5."""
        result = recognize_word(0x4215, 0x0000)
        assert result == EmulatedInstruction(EmulatedOp.CLR, R5, DataMode.WORD)

    def test_br_register(self):
        """mov R5, PC is br R5 without a size."""
        result = recognize_word(0x4500)
        assert result == EmulatedInstruction(EmulatedOp.BR, R5)
        assert result.size is None

    def test_br_immediate(self):
        """mov #0x1234, PC is br #0x1234."""
        result = recognize_word(0x4030, 0x1234)
        assert result == EmulatedInstruction(EmulatedOp.BR, Immediate(0x1234))

    def test_nop_checked_first(self):
        """mov PC, PC matches nop before br."""
        assert recognize_emulated(double(DoubleOp.MOV, PC, PC)).operation == EmulatedOp.NOP

    def test_plain_mov(self):
        """mov R5, R6 has no alias."""
        assert recognize_word(0x4506) is None


# =============================================================================
# Status Register Rules
# =============================================================================

class TestStatusAliases:
    """bic/bis on SR with a single-bit constant."""

    @pytest.mark.parametrize("word, op", [
        (0xC312, EmulatedOp.CLRC),
        (0xC322, EmulatedOp.CLRZ),
        (0xC222, EmulatedOp.CLRN),
        (0xC232, EmulatedOp.DINT),
        (0xD312, EmulatedOp.SETC),
        (0xD322, EmulatedOp.SETZ),
        (0xD222, EmulatedOp.SETN),
        (0xD232, EmulatedOp.EINT),
    ])
    def test_status_bits(self, word, op):
        """Each status-bit alias, with no operand or size."""
        assert recognize_word(word) == EmulatedInstruction(op)

    def test_other_constant(self):
        """bic #0x10, SR has no alias."""
        assert recognize_emulated(double(DoubleOp.BIC, Immediate(0x10), SR)) is None

    def test_other_destination(self):
        """bic #1, R5 has no alias."""
        assert recognize_word(0xC315) is None

    def test_non_immediate_source(self):
        """bis R5, SR has no alias."""
        assert recognize_emulated(double(DoubleOp.BIS, R5, SR)) is None


# =============================================================================
# Arithmetic Rules
# =============================================================================

class TestArithmeticAliases:
    """add, addc, sub, subc, dadd, xor and cmp aliases on absolute constants."""

    def test_rla(self):
        """add R5, R5 is rla R5."""
        assert recognize_word(0x5505) == EmulatedInstruction(EmulatedOp.RLA, R5, DataMode.WORD)

    def test_rla_byte(self):
        """add.b R5, R5 is rla.b R5."""
        assert recognize_word(0x5545) == EmulatedInstruction(EmulatedOp.RLA, R5, DataMode.BYTE)

    def test_inc(self):
        """add &1, dst is inc."""
        result = recognize_emulated(double(DoubleOp.ADD, Absolute(1), R5))
        assert result == EmulatedInstruction(EmulatedOp.INC, R5, DataMode.WORD)

    def test_inc_from_word(self):
        """add &0x0001, R5 from its encoding is inc R5."""
        assert recognize_word(0x5215, 0x0001).operation == EmulatedOp.INC

    def test_incd_absolute_other(self):
        """add with any other absolute source is incd."""
        result = recognize_emulated(double(DoubleOp.ADD, Absolute(0x0200), R5))
        assert result == EmulatedInstruction(EmulatedOp.INCD, R5, DataMode.WORD)

    def test_adc(self):
        """addc &0, R5 is adc R5."""
        assert recognize_emulated(double(DoubleOp.ADDC, Absolute(0), R5)).operation == EmulatedOp.ADC

    def test_rlc(self):
        """addc R5, R5 is rlc R5."""
        assert recognize_word(0x6505).operation == EmulatedOp.RLC

    def test_dec(self):
        """sub &1, R5 is dec R5."""
        result = recognize_emulated(double(DoubleOp.SUB, Absolute(1), R5))
        assert result == EmulatedInstruction(EmulatedOp.DEC, R5, DataMode.WORD)

    def test_decd(self):
        """sub &other, R5 is decd R5."""
        assert recognize_emulated(double(DoubleOp.SUB, Absolute(7), R5)).operation == EmulatedOp.DECD

    def test_sub_register(self):
        """sub R5, R5 has no alias."""
        assert recognize_word(0x8505) is None

    def test_sbc(self):
        """subc &0, R5 is sbc R5."""
        assert recognize_emulated(double(DoubleOp.SUBC, Absolute(0), R5)).operation == EmulatedOp.SBC

    def test_dadc(self):
        """dadd &0, R5 is dadc R5."""
        assert recognize_emulated(double(DoubleOp.DADD, Absolute(0), R5)).operation == EmulatedOp.DADC

    def test_inv(self):
        """xor &0xFFFF, R5 is inv R5."""
        result = recognize_emulated(double(DoubleOp.XOR, Absolute(0xFFFF), R5))
        assert result == EmulatedInstruction(EmulatedOp.INV, R5, DataMode.WORD)

    def test_tst(self):
        """cmp &0, R5 is tst R5."""
        assert recognize_emulated(double(DoubleOp.CMP, Absolute(0), R5)).operation == EmulatedOp.TST

    def test_tst_keeps_indexed_destination(self):
        """The destination operand is carried over unchanged."""
        result = recognize_emulated(double(DoubleOp.CMP, Absolute(0), Indexed(4, Register.R5)))
        assert result == EmulatedInstruction(EmulatedOp.TST, Indexed(4, Register.R5), DataMode.WORD)

    @pytest.mark.parametrize("words", [
        (0x4305,),  # mov #0, R5
        (0x5315,),  # add #1, R5
        (0x5325,),  # add #2, R5
        (0x6305,),  # addc #0, R5
        (0x8315,),  # sub #1, R5
        (0x8325,),  # sub #2, R5
        (0x7305,),  # subc #0, R5
        (0xA305,),  # dadd #0, R5
        (0xE335,),  # xor #-1, R5
        (0x9305,),  # cmp #0, R5
        (0x9385, 0x0004),  # cmp #0, 4(R5)
        (0x5225,),  # add #4, R5
    ])
    def test_generated_constants_stay_literal(self, words):
        """Constant-generator immediates do not match the absolute rules."""
        assert recognize_word(*words) is None

    def test_mov_zero_to_pc_is_br(self):
        """mov #0, PC skips clr and falls through to br #0."""
        assert recognize_word(0x4300) == EmulatedInstruction(EmulatedOp.BR, Immediate(0))


class TestGeneratedConstants:
    """With match_generated, constant-generator immediates alias too."""

    @pytest.mark.parametrize("words, op", [
        ((0x4305,), EmulatedOp.CLR),
        ((0x5315,), EmulatedOp.INC),
        ((0x5325,), EmulatedOp.INCD),
        ((0x6305,), EmulatedOp.ADC),
        ((0x8315,), EmulatedOp.DEC),
        ((0x8325,), EmulatedOp.DECD),
        ((0x7305,), EmulatedOp.SBC),
        ((0xA305,), EmulatedOp.DADC),
        ((0xE335,), EmulatedOp.INV),
        ((0x9305,), EmulatedOp.TST),
    ])
    def test_aliases(self, words, op):
        assert recognize_word(*words, match_generated=True) == EmulatedInstruction(op, R5, DataMode.WORD)

    def test_tst_keeps_indexed_destination(self):
        result = recognize_word(0x9385, 0x0004, match_generated=True)
        assert result == EmulatedInstruction(EmulatedOp.TST, Indexed(0x0004, Register.R5), DataMode.WORD)

    def test_mov_zero_to_pc_is_clr(self):
        """clr is checked before br, so mov #0, PC becomes clr PC."""
        assert recognize_word(0x4300, match_generated=True).operation == EmulatedOp.CLR

    def test_add_four_stays_literal(self):
        """Only #2 stands in for the "other" constant of incd."""
        assert recognize_word(0x5225, match_generated=True) is None

    def test_absolute_rules_still_apply(self):
        result = recognize_emulated(double(DoubleOp.ADD, Absolute(0x0200), R5), match_generated=True)
        assert result.operation == EmulatedOp.INCD


class TestNoAlias:
    """Operations without emulated forms."""

    def test_bit(self):
        """bit #1, R5 stays literal."""
        assert recognize_word(0xB315) is None

    def test_and(self):
        """and R5, R5 stays literal."""
        assert recognize_word(0xF505) is None

    def test_cmp_register(self):
        """cmp R5, R6 stays literal."""
        assert recognize_word(0x9506) is None

    def test_autoincrement_other_register(self):
        """mov @R4+, R5 is not pop."""
        assert recognize_emulated(double(DoubleOp.MOV, Autoincrement(Register.R4), R5)) is None
