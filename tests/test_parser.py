"""
Parser tests: statement shapes, computation matching, comments and label
indices.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from hack_assembler.hack_int import HackInt, HackIntRangeError
from hack_assembler.instructions import (
    AInstruction, CInstruction, Computation, JumpType, Label, Register,
)
from hack_assembler.parser import (
    ParseError, LiteralRangeError, parse_source, parse_computation,
    parse_a_instruction, parse_c_instruction, parse_label,
)


class TestAInstruction:
    def test_literal(self):
        instr = parse_a_instruction("@123")
        assert instr.value == HackInt(123)
        assert not instr.is_symbol

    def test_max_literal(self):
        assert parse_a_instruction("@32767").value == HackInt(32767)

    def test_literal_out_of_range(self):
        with pytest.raises(LiteralRangeError) as exc:
            parse_a_instruction("@32768", line_num=3)
        assert isinstance(exc.value, ParseError)
        assert isinstance(exc.value.__cause__, HackIntRangeError)
        assert exc.value.line_num == 3

    def test_symbol(self):
        for name in ("i", "LOOP", "sum", "Main.main$ret.1", "a_b:c", "R16", "x1"):
            instr = parse_a_instruction(f"@{name}")
            assert instr.is_symbol
            assert instr.value == name

    def test_symbol_case_preserved(self):
        assert parse_a_instruction("@Loop").value == "Loop"

    def test_malformed(self):
        for text in ("@", "@12ab", "@-1", "@_x", "@.x", "@a b", "@a-b"):
            with pytest.raises(ParseError):
                parse_a_instruction(text)

    def test_malformed_literal_is_not_range_error(self):
        with pytest.raises(ParseError) as exc:
            parse_a_instruction("@12ab")
        assert not isinstance(exc.value, LiteralRangeError)


class TestComputation:
    @pytest.mark.parametrize("text,expected", [
        ("0", Computation.ZERO),
        ("1", Computation.ONE),
        ("-1", Computation.NEG_ONE),
        ("D", Computation.D),
        ("M", Computation.M),
        ("!A", Computation.NOT_A),
        ("-M", Computation.NEG_M),
        ("D+1", Computation.D_PLUS_1),
        ("M-1", Computation.M_MINUS_1),
        ("D+A", Computation.D_PLUS_A),
        ("D-M", Computation.D_MINUS_M),
        ("M-D", Computation.M_MINUS_D),
        ("D&A", Computation.D_AND_A),
        ("D|M", Computation.D_OR_M),
    ])
    def test_forms(self, text, expected):
        assert parse_computation(text) is expected

    def test_every_canonical_mnemonic_parses(self):
        for comp in Computation:
            assert parse_computation(comp.value) is comp

    def test_commutative_operators_fold(self):
        assert parse_computation("A+D") is Computation.D_PLUS_A
        assert parse_computation("M+D") is Computation.D_PLUS_M
        assert parse_computation("A&D") is Computation.D_AND_A
        assert parse_computation("M&D") is Computation.D_AND_M
        assert parse_computation("A|D") is Computation.D_OR_A
        assert parse_computation("M|D") is Computation.D_OR_M

    def test_subtraction_keeps_order(self):
        assert parse_computation("D-A") is Computation.D_MINUS_A
        assert parse_computation("A-D") is Computation.A_MINUS_D
        assert Computation.D_MINUS_A is not Computation.A_MINUS_D

    def test_lowercase_registers(self):
        assert parse_computation("d+a") is Computation.D_PLUS_A
        assert parse_computation("!m") is Computation.NOT_M

    def test_illegal(self):
        for text in ("A+M", "M+A", "D+D", "A-M", "2", "D+2", "1+D", "!1", "-0",
                     "D*A", "X", "", "D+", "+1"):
            assert parse_computation(text) is None, text


class TestCInstruction:
    def test_comp_only(self):
        instr = parse_c_instruction("0")
        assert instr.computation is Computation.ZERO
        assert instr.destination is None
        assert instr.jump is None

    def test_dest_comp(self):
        instr = parse_c_instruction("D=A")
        assert instr.destination == frozenset({Register.D})
        assert instr.computation is Computation.A

    def test_comp_jump(self):
        instr = parse_c_instruction("D;JGT")
        assert instr.computation is Computation.D
        assert instr.jump is JumpType.JGT

    def test_all_parts(self):
        instr = parse_c_instruction("AM=M-1;JNE")
        assert instr.destination == frozenset({Register.A, Register.M})
        assert instr.computation is Computation.M_MINUS_1
        assert instr.jump is JumpType.JNE

    def test_destination_order_insensitive(self):
        a = parse_c_instruction("AMD=0").destination
        b = parse_c_instruction("DMA=0").destination
        assert a == b == frozenset({Register.A, Register.M, Register.D})

    def test_all_jumps(self):
        for jump in JumpType:
            assert parse_c_instruction(f"0;{jump.value}").jump is jump

    def test_blanks_ignored(self):
        instr = parse_c_instruction("D = D + A ; JLE")
        assert instr.computation is Computation.D_PLUS_A
        assert instr.jump is JumpType.JLE

    def test_invalid(self):
        for text in ("D=", "=A", "D=A;", "DD=A", "X=A", "AMDA=0", "D=A;JXX",
                     "D=A=M", "D;JMP;JMP", "D=A+M"):
            with pytest.raises(ParseError):
                parse_c_instruction(text, line_num=1)


class TestLabel:
    def test_label(self):
        label = parse_label("(LOOP)", line_num=4)
        assert label == Label("LOOP", line_num=4, raw="(LOOP)")

    def test_invalid(self):
        for text in ("()", "(1abc)", "(LOOP", "(A B)"):
            with pytest.raises(ParseError):
                parse_label(text)


class TestParseSource:
    def test_comments_and_blank_lines(self):
        src = "// header\n\n   @2   // two\n\tD=A\n// trailer\n"
        out = parse_source(src)
        assert len(out.instructions) == 2
        assert out.instructions[0] == AInstruction(HackInt(2), line_num=3, raw="@2")
        assert isinstance(out.instructions[1], CInstruction)
        assert out.instructions[1].line_num == 4

    def test_crlf(self):
        out = parse_source("@1\r\nD=A\r\n")
        assert len(out.instructions) == 2

    def test_label_indices(self):
        src = "(START)\n@0\n(A1)\n(A2)\n// comment\n\nD=A\n(END)\n"
        out = parse_source(src)
        assert [(l.name, i) for l, i in out.labels] == [
            ("START", 0), ("A1", 1), ("A2", 1), ("END", 2),
        ]

    def test_labels_are_not_instructions(self):
        out = parse_source("(X)\n(Y)\n")
        assert out.instructions == []
        assert len(out.labels) == 2

    def test_error_names_line(self):
        with pytest.raises(ParseError, match="Line 3") as exc:
            parse_source("@1\nD=A\nfoo bar\n@2\n")
        assert exc.value.line_num == 3
        assert exc.value.line_text == "foo bar"

    def test_no_resolution(self):
        out = parse_source("@undefined_symbol\n")
        assert out.instructions[0].value == "undefined_symbol"

    def test_empty(self):
        out = parse_source("")
        assert out.instructions == [] and out.labels == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
