"""
Symbol table for the Hack assembler.

Maps case-sensitive symbol names to HackInt values. A fresh table holds only
the predefined symbols of the Hack platform:

    Virtual registers   R0..R15      0..15
    Reserved pointers   SP LCL ARG THIS THAT   0 1 2 3 4
    Memory-mapped I/O   SCREEN       16384
                        KBD          24576

Built-in symbols can never be assigned. User symbols (labels and variables)
are set exactly once. Variables are handed out from a cursor that starts at
address 16 and moves up by one per allocation.

Each assembly run owns its own table; there is no shared module-level table.
"""

from __future__ import annotations
import logging
from typing import Dict, Mapping

from .hack_int import HackInt, HACK_INT_MAX, MEMORY_SIZE, VARIABLE_BASE

__all__ = [
    'SymbolTable', 'BUILT_IN_SYMBOLS',
    'SymbolTableError', 'SymbolNotDefinedError', 'RedefinedBuiltInError',
    'RedefinedSymbolError', 'TooManyVariablesError',
]

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Errors
# ──────────────────────────────────────────────

class SymbolTableError(Exception):
    """Base class for symbol table errors.

    ``line_num`` is filled in by the caller when the failing operation can be
    tied to a source line (e.g. a duplicate label).
    """
    def __init__(self, name: str, message: str):
        self.name = name
        self.message = message
        self.line_num = 0
        super().__init__(message)

    def __str__(self) -> str:
        if self.line_num:
            return f"Line {self.line_num}: {self.message}"
        return self.message


class SymbolNotDefinedError(SymbolTableError):
    def __init__(self, name: str):
        super().__init__(name, f'symbol "{name}" not defined')


class RedefinedBuiltInError(SymbolTableError):
    def __init__(self, name: str):
        super().__init__(name, f'tried to redefine the built in symbol "{name}"')


class RedefinedSymbolError(SymbolTableError):
    def __init__(self, name: str):
        super().__init__(name, f'tried to redefine the symbol "{name}"')


class TooManyVariablesError(SymbolTableError):
    def __init__(self, name: str, memory_size: int):
        self.memory_size = memory_size
        super().__init__(
            name,
            f'exceeded maximum number of variables allocating "{name}" '
            f"(addresses {VARIABLE_BASE}..{memory_size} are in use)")


# ──────────────────────────────────────────────
# Predefined symbols
# ──────────────────────────────────────────────

BUILT_IN_SYMBOLS: Dict[str, HackInt] = {
    **{f"R{i}": HackInt(i) for i in range(16)},
    "SP":     HackInt(0),
    "LCL":    HackInt(1),
    "ARG":    HackInt(2),
    "THIS":   HackInt(3),
    "THAT":   HackInt(4),
    "SCREEN": HackInt(16384),
    "KBD":    HackInt(24576),
}


class SymbolTable:
    """Resolves symbols (labels and variables) to addresses.

    Usage:
        table = SymbolTable()
        table.set("LOOP", HackInt(4))
        table.get("LOOP")            # HackInt(4)
        table.get("SCREEN")          # HackInt(16384)
        addr = table.allocate_variable()   # HackInt(16), then 17, ...
    """

    def __init__(self, memory_size: int = MEMORY_SIZE):
        if not VARIABLE_BASE <= memory_size < HACK_INT_MAX:
            raise ValueError(
                f"memory_size must be in {VARIABLE_BASE}..{HACK_INT_MAX - 1}, got {memory_size}")
        self.memory_size = memory_size
        self._table: Dict[str, HackInt] = {}     # user-defined symbols
        self._variable_cursor = HackInt(VARIABLE_BASE)

    @staticmethod
    def is_built_in(name: str) -> bool:
        return name in BUILT_IN_SYMBOLS

    def __contains__(self, name: str) -> bool:
        return name in BUILT_IN_SYMBOLS or name in self._table

    def contains(self, name: str) -> bool:
        return name in self

    def get(self, name: str) -> HackInt:
        """Look up a symbol. Built-ins are checked first and always win."""
        built_in = BUILT_IN_SYMBOLS.get(name)
        if built_in is not None:
            return built_in

        user_defined = self._table.get(name)
        if user_defined is not None:
            return user_defined

        raise SymbolNotDefinedError(name)

    def set(self, name: str, value: HackInt) -> None:
        """Define a user symbol. Built-ins and existing symbols are rejected."""
        if name in BUILT_IN_SYMBOLS:
            raise RedefinedBuiltInError(name)
        if name in self._table:
            raise RedefinedSymbolError(name)
        self._table[name] = value

    @property
    def next_variable_address(self) -> HackInt:
        return self._variable_cursor

    def allocate_variable(self, name: str = "") -> HackInt:
        """Hand out the next free variable address and advance the cursor.

        ``name`` is only used for error messages and debug logging; the
        caller is responsible for registering it with set().
        """
        address = self._variable_cursor
        if int(address) > self.memory_size:
            raise TooManyVariablesError(name, self.memory_size)
        self._variable_cursor = address.successor()
        logger.debug("allocated variable %s at %d", name or "<anonymous>", int(address))
        return address

    def user_symbols(self) -> Mapping[str, HackInt]:
        """Return a copy of the user-defined symbols (labels and variables)."""
        return dict(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return (f"SymbolTable(user={len(self._table)}, "
                f"next_variable={int(self._variable_cursor)})")
