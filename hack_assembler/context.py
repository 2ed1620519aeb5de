"""
Assembler context: the per-run state of one Hack assembly.

How the two passes work:
  Pass 1: Every (label, index) pair from the parser is written into the
          symbol table. Nothing is encoded yet, so a label used before its
          declaration still resolves.
  Pass 2: Instructions are encoded in source order. A symbolic A-instruction
          that is not a built-in or label is a variable; it gets the next free
          RAM address (16, 17, ...) the first time it is seen.

The two phases run once each, in that order. The context owns the symbol
table, the output words and the instruction counter, and is discarded after
the run.
"""

from __future__ import annotations
import enum
import logging
from typing import List

from .encoder import encode_a_instruction, encode_c_instruction
from .hack_int import HackInt, MEMORY_SIZE, ROM_SIZE
from .instructions import AInstruction, CInstruction, Label, ParsedInstruction
from .symbol_table import SymbolNotDefinedError, SymbolTable, SymbolTableError

__all__ = ['AssemblerContext', 'AssemblerError', 'TooManyInstructionsError']

logger = logging.getLogger(__name__)


class AssemblerError(Exception):
    """Raised on assembly errors."""
    def __init__(self, message: str, line_num: int = 0, line_text: str = ""):
        self.line_num = line_num
        self.line_text = line_text
        super().__init__(f"Line {line_num}: {message}" if line_num else message)


class TooManyInstructionsError(AssemblerError):
    """Raised when the program does not fit in ROM."""


class Phase(enum.Enum):
    LABELS = "labels"
    ENCODING = "encoding"


class AssemblerContext:
    """Symbol resolution and encoding for a single assembly run."""

    def __init__(self, rom_size: int = ROM_SIZE, memory_size: int = MEMORY_SIZE):
        if not 0 <= rom_size <= ROM_SIZE:
            raise ValueError(f"rom_size must be in 0..{ROM_SIZE}, got {rom_size}")
        self.rom_size = rom_size
        self.symbol_table = SymbolTable(memory_size=memory_size)
        self.output: List[int] = []
        self.pc = HackInt(0)                 # address of the next emitted word
        self.phase = Phase.LABELS

    # ── Pass 1 ──

    def register_label(self, label: Label, index: int) -> None:
        """Bind ``label`` to the address of the instruction at ``index``."""
        if self.phase is not Phase.LABELS:
            raise RuntimeError("labels must be registered before encoding starts")
        if index > self.rom_size:
            raise TooManyInstructionsError(
                f"exceeded maximum number of instructions ({self.rom_size})",
                label.line_num, label.raw)

        try:
            self.symbol_table.set(label.name, HackInt(index))
        except SymbolTableError as e:
            e.line_num = label.line_num
            raise
        logger.debug("label %s -> %d", label.name, index)

    # ── Pass 2 ──

    def resolve_symbol(self, name: str) -> HackInt:
        """Look up ``name``; on first sight of an unknown name, allocate a variable."""
        try:
            return self.symbol_table.get(name)
        except SymbolNotDefinedError:
            pass

        address = self.symbol_table.allocate_variable(name)
        self.symbol_table.set(name, address)
        return address

    def feed_instruction(self, instr: ParsedInstruction) -> None:
        """Encode one instruction and append its word to the output."""
        self.phase = Phase.ENCODING

        if isinstance(instr, AInstruction):
            if instr.is_symbol:
                try:
                    value = self.resolve_symbol(instr.value)
                except SymbolTableError as e:
                    e.line_num = instr.line_num
                    raise
            else:
                value = instr.value
            word = encode_a_instruction(value)
        elif isinstance(instr, CInstruction):
            word = encode_c_instruction(instr)
        else:
            raise TypeError(f"not an instruction: {instr!r}")

        self._push(word, instr)

    def _push(self, word: int, instr: ParsedInstruction) -> None:
        if len(self.output) >= self.rom_size:
            raise TooManyInstructionsError(
                f"exceeded maximum number of instructions ({self.rom_size})",
                instr.line_num, instr.raw)
        self.output.append(word)
        self.pc = self.pc.successor()

    def into_output(self) -> List[int]:
        return list(self.output)
