"""
Output writers for assembled Hack programs.

``.hack`` files hold one 16-character binary string per instruction word.
The listing is a human-readable view: address, word and source line.
"""

from __future__ import annotations
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .hack_int import HackInt
from .instructions import Label
from .parser import ParserOutput

__all__ = ['to_hack_lines', 'to_hack_text', 'format_listing']


def to_hack_lines(words: Sequence[int]) -> List[str]:
    return [format(word, "016b") for word in words]


def to_hack_text(words: Sequence[int]) -> str:
    """Render words as ``.hack`` file contents (trailing newline included)."""
    if not words:
        return ""
    return "\n".join(to_hack_lines(words)) + "\n"


def format_listing(parsed: ParserOutput, words: Sequence[int],
                   symbols: Optional[Mapping[str, HackInt]] = None) -> str:
    """Return a listing showing address, binary word and source per line.

    Labels are printed in source order ahead of the instruction they name.
    When ``symbols`` is given, a symbol section sorted by address follows.
    """
    labels_at: Dict[int, List[Label]] = {}
    for label, index in parsed.labels:
        labels_at.setdefault(index, []).append(label)

    lines = []
    lines.append(f"{'ADDR':>5}  {'WORD':<16}  SOURCE")
    lines.append("-" * 60)

    for addr, (instr, word) in enumerate(zip(parsed.instructions, words)):
        for label in labels_at.get(addr, []):
            lines.append(f"{'':5}  {'':16}  {label.raw}")
        lines.append(f"{addr:>5}  {word:016b}  {instr.raw}")

    # Labels after the last instruction
    for label in labels_at.get(len(parsed.instructions), []):
        lines.append(f"{'':5}  {'':16}  {label.raw}")

    if symbols:
        lines.append("")
        lines.append(f"{'VALUE':>5}  SYMBOL")
        lines.append("-" * 60)
        ordered: List[Tuple[str, HackInt]] = sorted(
            symbols.items(), key=lambda item: (int(item[1]), item[0]))
        for name, value in ordered:
            lines.append(f"{int(value):>5}  {name}")

    return "\n".join(lines)
