"""
Hack assembler driver.

Parses the source, registers every label, then encodes every instruction
through a fresh AssemblerContext. Returns the program as a list of 16-bit
words; rendering them as text is left to the caller (see output.py).
"""

from __future__ import annotations
import logging
from typing import List, Optional

from .context import AssemblerContext
from .hack_int import MEMORY_SIZE, ROM_SIZE
from .parser import ParserOutput, parse_source

__all__ = ['Assembler', 'assemble']

logger = logging.getLogger(__name__)


class Assembler:
    """Two-pass Hack assembler.

    Usage:
        asm = Assembler(source_text)
        words = asm.assemble()
        asm.context.symbol_table.user_symbols()   # labels and variables
    """

    def __init__(self, source: str, *, rom_size: int = ROM_SIZE,
                 memory_size: int = MEMORY_SIZE):
        self.source = source
        self.rom_size = rom_size
        self.memory_size = memory_size
        self.parsed: Optional[ParserOutput] = None
        self.context: Optional[AssemblerContext] = None

    def assemble(self) -> List[int]:
        """Assemble the source and return the machine words.

        Raises on the first error; nothing is returned for a failed run.
        """
        self.parsed = None
        self.context = None

        parsed = parse_source(self.source)
        context = AssemblerContext(rom_size=self.rom_size, memory_size=self.memory_size)

        for label, index in parsed.labels:
            context.register_label(label, index)

        for instruction in parsed.instructions:
            context.feed_instruction(instruction)

        self.parsed = parsed
        self.context = context
        logger.debug("assembled %d words (%d labels, %d symbols)",
                     len(context.output), len(parsed.labels), len(context.symbol_table))
        return context.into_output()


def assemble(source: str) -> List[int]:
    """Assemble source text, return the list of 16-bit words."""
    return Assembler(source).assemble()
