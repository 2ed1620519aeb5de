"""
Parsed instruction records for the Hack assembler.

The parser produces these; the assembler context consumes them. The set of
shapes is closed:

    AInstruction   @value       value is a HackInt literal or a symbol name
    CInstruction   dest=comp;jump
    Label          (NAME)       not an instruction, names the next address
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import FrozenSet, Optional, Union

from .hack_int import HackInt

__all__ = [
    'Register', 'JumpType', 'Computation',
    'AInstruction', 'CInstruction', 'Label', 'ParsedInstruction',
]


class Register(enum.Enum):
    A = "A"
    D = "D"
    M = "M"


class JumpType(enum.Enum):
    JGT = "JGT"
    JEQ = "JEQ"
    JGE = "JGE"
    JLT = "JLT"
    JNE = "JNE"
    JLE = "JLE"
    JMP = "JMP"


class Computation(enum.Enum):
    """The 28 legal ALU computations, keyed by their canonical mnemonic.

    Binary forms are listed with D first; for the commutative operators
    (+, &, |) the parser folds ``A+D`` onto ``D+A`` and so on. Subtraction
    keeps operand order, so ``D-A`` and ``A-D`` are distinct members.
    A and M are never combined.
    """
    # Constants
    ZERO = "0"
    ONE = "1"
    NEG_ONE = "-1"

    # Identity
    D = "D"
    A = "A"
    M = "M"

    # Logical not
    NOT_D = "!D"
    NOT_A = "!A"
    NOT_M = "!M"

    # Negation
    NEG_D = "-D"
    NEG_A = "-A"
    NEG_M = "-M"

    # Increment / decrement
    D_PLUS_1 = "D+1"
    A_PLUS_1 = "A+1"
    M_PLUS_1 = "M+1"
    D_MINUS_1 = "D-1"
    A_MINUS_1 = "A-1"
    M_MINUS_1 = "M-1"

    # D with A
    D_PLUS_A = "D+A"
    D_MINUS_A = "D-A"
    A_MINUS_D = "A-D"
    D_AND_A = "D&A"
    D_OR_A = "D|A"

    # D with M
    D_PLUS_M = "D+M"
    D_MINUS_M = "D-M"
    M_MINUS_D = "M-D"
    D_AND_M = "D&M"
    D_OR_M = "D|M"


@dataclass(frozen=True)
class AInstruction:
    """``@value``: loads a literal or a resolved symbol into A."""
    value: Union[HackInt, str]
    line_num: int = 0
    raw: str = ""

    @property
    def is_symbol(self) -> bool:
        return isinstance(self.value, str)


@dataclass(frozen=True)
class CInstruction:
    """``dest=comp;jump``: destination and jump are optional."""
    computation: Computation
    destination: Optional[FrozenSet[Register]] = None
    jump: Optional[JumpType] = None
    line_num: int = 0
    raw: str = ""


@dataclass(frozen=True)
class Label:
    """``(NAME)``: names the address of the next emitted instruction."""
    name: str
    line_num: int = 0
    raw: str = ""


ParsedInstruction = Union[AInstruction, CInstruction]
