"""
Bounded integer type for the Hack assembler.

Every numeric quantity the assembler handles (A-instruction literals, label
addresses, variable addresses, the instruction counter) is a HackInt:
an unsigned value in the range 0..32767. The top bit of a Hack word is the
A/C opcode bit, so an A-instruction can only ever carry 15 bits of payload.

A HackInt outside that range cannot be constructed.
"""

from __future__ import annotations
from dataclasses import dataclass

__all__ = [
    'HackInt', 'HackIntError', 'HackIntParseError', 'HackIntRangeError',
    'HACK_INT_MAX', 'ROM_SIZE', 'MEMORY_SIZE', 'VARIABLE_BASE',
]


# ──────────────────────────────────────────────
# Machine limits
# ──────────────────────────────────────────────

HACK_INT_MAX = 32767     # largest 15-bit value
ROM_SIZE = 32767         # maximum number of emitted instruction words
MEMORY_SIZE = 16383      # last RAM address usable for variables
VARIABLE_BASE = 16       # first variable address (R0-R15 sit below)


class HackIntError(Exception):
    """Base class for bounded integer errors."""


class HackIntParseError(HackIntError):
    """Raised when text is not a decimal number."""
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"could not parse int: {text!r}")


class HackIntRangeError(HackIntError):
    """Raised when a value falls outside 0..32767."""
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"number {value} is not in bounds (0..{HACK_INT_MAX})")


@dataclass(frozen=True, order=True)
class HackInt:
    """An integer in 0..32767 (inclusive)."""
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"HackInt requires an int, got {type(self.value).__name__}")
        if not 0 <= self.value <= HACK_INT_MAX:
            raise HackIntRangeError(self.value)

    @classmethod
    def try_new(cls, raw: int) -> HackInt:
        """Range-check ``raw`` and wrap it. Raises HackIntRangeError."""
        return cls(raw)

    @classmethod
    def parse(cls, text: str) -> HackInt:
        """Parse a decimal literal.

        Malformed text raises HackIntParseError; a well-formed number outside
        the legal range raises HackIntRangeError.
        """
        # str.isdigit() also accepts superscripts and other Unicode digits
        if not text or not all('0' <= ch <= '9' for ch in text):
            raise HackIntParseError(text)
        return cls.try_new(int(text))

    def successor(self) -> HackInt:
        """Return the next value. Raises HackIntRangeError past 32767."""
        return HackInt(self.value + 1)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)

    def __str__(self) -> str:
        return str(self.value)
