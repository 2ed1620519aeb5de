"""
Hack Assembler
==============
A two-pass assembler for the Hack 16-bit instruction set
(The Elements of Computing Systems, "Nand to Tetris").

Architecture:
    ┌──────────┐    ┌──────────┐    ┌─────────────────┐    ┌─────────────┐
    │ Source   │───>│  Parser  │───>│ AssemblerContext│───>│ 16-bit words│
    │ (.asm)   │    │ (records)│    │ labels, encode  │    │ (.hack)     │
    └──────────┘    └──────────┘    └─────────────────┘    └─────────────┘

    - hack_int.py:      HackInt, the 0..32767 value type every number flows through
    - instructions.py:  A/C-instruction and label records, closed enums
    - symbol_table.py:  built-ins, set-once labels/variables, variable cursor
    - parser.py:        line grammar -> instruction records + (label, index) pairs
    - encoder.py:       fixed comp/dest/jump bit tables
    - context.py:       pass 1 (labels) then pass 2 (encode, allocate variables)
    - assembler.py:     driver
    - output.py:        .hack text and listing writers
"""

__version__ = "0.1.0"

from .hack_int import (
    HackInt, HackIntError, HackIntParseError, HackIntRangeError,
    HACK_INT_MAX, MEMORY_SIZE, ROM_SIZE, VARIABLE_BASE,
)
from .instructions import (
    AInstruction, CInstruction, Computation, JumpType, Label, Register,
)
from .symbol_table import (
    SymbolTable, SymbolTableError, SymbolNotDefinedError,
    RedefinedBuiltInError, RedefinedSymbolError, TooManyVariablesError,
)
from .parser import Parser, ParserOutput, ParseError, LiteralRangeError, parse_source
from .encoder import encode_a_instruction, encode_c_instruction
from .context import AssemblerContext, AssemblerError, TooManyInstructionsError
from .assembler import Assembler, assemble
from .output import to_hack_lines, to_hack_text, format_listing
