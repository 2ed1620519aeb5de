"""
Hack instruction encoder.

C-instruction word layout (MSB -> LSB):

    1 1 1 a c1 c2 c3 c4 c5 c6 d1 d2 d3 j1 j2 j3
    └─┬─┘ └───────┬─────────┘ └──┬───┘ └──┬───┘
   opcode    computation        dest      jump

A-instruction word layout: a 0 in the top bit followed by the 15-bit value.

Every field is resolved through one of the fixed tables below; destination
bits are OR-combined per register. Reference: The Elements of Computing
Systems, chapter 6 (Hack machine language specification).
"""

from __future__ import annotations
from typing import Dict

from .hack_int import HackInt
from .instructions import CInstruction, Computation, JumpType, Register

__all__ = [
    'C_INSTRUCTION_PREFIX', 'COMP_BITS', 'DEST_BITS', 'JUMP_BITS',
    'encode_a_instruction', 'encode_c_instruction',
]


C_INSTRUCTION_PREFIX = 0b111_0000000_000_000


# ──────────────────────────────────────────────
# Computation table  (a-bit + c1..c6, already shifted into place)
# ──────────────────────────────────────────────

COMP_BITS: Dict[Computation, int] = {
    Computation.ZERO:      0b000_0101010_000_000,
    Computation.ONE:       0b000_0111111_000_000,
    Computation.NEG_ONE:   0b000_0111010_000_000,
    Computation.D:         0b000_0001100_000_000,
    Computation.A:         0b000_0110000_000_000,
    Computation.M:         0b000_1110000_000_000,
    Computation.NOT_D:     0b000_0001101_000_000,
    Computation.NOT_A:     0b000_0110001_000_000,
    Computation.NOT_M:     0b000_1110001_000_000,
    Computation.NEG_D:     0b000_0001111_000_000,
    Computation.NEG_A:     0b000_0110011_000_000,
    Computation.NEG_M:     0b000_1110011_000_000,
    Computation.D_PLUS_1:  0b000_0011111_000_000,
    Computation.A_PLUS_1:  0b000_0110111_000_000,
    Computation.M_PLUS_1:  0b000_1110111_000_000,
    Computation.D_MINUS_1: 0b000_0001110_000_000,
    Computation.A_MINUS_1: 0b000_0110010_000_000,
    Computation.M_MINUS_1: 0b000_1110010_000_000,
    Computation.D_PLUS_A:  0b000_0000010_000_000,
    Computation.D_MINUS_A: 0b000_0010011_000_000,
    Computation.A_MINUS_D: 0b000_0000111_000_000,
    Computation.D_AND_A:   0b000_0000000_000_000,
    Computation.D_OR_A:    0b000_0010101_000_000,
    Computation.D_PLUS_M:  0b000_1000010_000_000,
    Computation.D_MINUS_M: 0b000_1010011_000_000,
    Computation.M_MINUS_D: 0b000_1000111_000_000,
    Computation.D_AND_M:   0b000_1000000_000_000,
    Computation.D_OR_M:    0b000_1010101_000_000,
}


# ──────────────────────────────────────────────
# Destination table  (d1 = A, d2 = D, d3 = M)
# ──────────────────────────────────────────────

DEST_BITS: Dict[Register, int] = {
    Register.A: 0b000_0000000_100_000,
    Register.D: 0b000_0000000_010_000,
    Register.M: 0b000_0000000_001_000,
}


# ──────────────────────────────────────────────
# Jump table
# ──────────────────────────────────────────────

JUMP_BITS: Dict[JumpType, int] = {
    JumpType.JGT: 0b000_0000000_000_001,
    JumpType.JEQ: 0b000_0000000_000_010,
    JumpType.JGE: 0b000_0000000_000_011,
    JumpType.JLT: 0b000_0000000_000_100,
    JumpType.JNE: 0b000_0000000_000_101,
    JumpType.JLE: 0b000_0000000_000_110,
    JumpType.JMP: 0b000_0000000_000_111,
}


def encode_a_instruction(value: HackInt) -> int:
    """A resolved A-instruction is its value; the top bit is already 0."""
    return int(value)


def encode_c_instruction(instr: CInstruction) -> int:
    """Encode a C-instruction into its 16-bit word."""
    word = C_INSTRUCTION_PREFIX | COMP_BITS[instr.computation]

    if instr.destination:
        for register in instr.destination:
            word |= DEST_BITS[register]

    if instr.jump is not None:
        word |= JUMP_BITS[instr.jump]

    return word
