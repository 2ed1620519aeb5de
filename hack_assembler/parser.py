"""
Line parser for Hack assembly.

Turns source text into an ordered list of instruction records plus an ordered
list of (Label, instruction index) pairs. No symbols are resolved here.

Grammar, one statement per line:

    @123            A-instruction, decimal literal 0..32767
    @name           A-instruction, symbol  [A-Za-z][A-Za-z0-9_.$:]*
    dest=comp;jump  C-instruction, dest and jump optional
    (NAME)          label

``//`` starts a comment that runs to the end of the line. Blank lines and
comment-only lines are skipped and do not advance the instruction index.
Blanks inside a C-instruction are ignored (``D = D + A ; JGT``).

Computation matching, in order:

    constant   0  1  -1
    register   A  D  M
    prefix     !R  -R
    postfix    R+1  R-1
    binary     R op R   (op in + - & |, over {D,A} and {D,M} only)

``+``, ``&`` and ``|`` are commutative, so ``A+D`` folds onto ``D+A``.
``-`` is not: ``D-A`` and ``A-D`` are different computations.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from .hack_int import HackInt, HackIntParseError, HackIntRangeError
from .instructions import (
    AInstruction, CInstruction, Computation, JumpType, Label,
    ParsedInstruction, Register,
)

__all__ = [
    'Parser', 'ParserOutput', 'ParseError', 'LiteralRangeError',
    'parse_source', 'parse_a_instruction', 'parse_c_instruction',
    'parse_label', 'parse_computation',
]

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when a line is not a valid Hack statement."""
    def __init__(self, message: str, line_num: int = 0, line_text: str = ""):
        self.message = message
        self.line_num = line_num
        self.line_text = line_text
        detail = f"{message}: {line_text!r}" if line_text else message
        super().__init__(f"Line {line_num}: {detail}" if line_num else detail)


class LiteralRangeError(ParseError):
    """Raised when an A-instruction literal is larger than 32767."""


# ──────────────────────────────────────────────
# Patterns
# ──────────────────────────────────────────────

SYMBOL_PATTERN = r"[A-Za-z][A-Za-z0-9_.$:]*"

_SYMBOL_RE = re.compile(rf"^{SYMBOL_PATTERN}$")
_LABEL_RE = re.compile(rf"^\(({SYMBOL_PATTERN})\)$")
_C_INSTRUCTION_RE = re.compile(
    r"^(?:(?P<dest>[^=;]*)=)?(?P<comp>[^=;]*)(?:;(?P<jump>[^=;]*))?$")
_BLANKS_RE = re.compile(r"\s+")

_COMP_CONSTANT_RE = re.compile(r"^(0|1|-1)$")
_COMP_REGISTER_RE = re.compile(r"^([ADM])$")
_COMP_PREFIX_RE = re.compile(r"^([!-])([ADM])$")
_COMP_POSTFIX_RE = re.compile(r"^([ADM])([+-])1$")
_COMP_BINARY_RE = re.compile(r"^([ADM])([-+&|])([ADM])$")

COMMUTATIVE_OPERATORS = frozenset("+&|")

_COMPUTATIONS: Dict[str, Computation] = {c.value: c for c in Computation}
_JUMPS: Dict[str, JumpType] = {j.value: j for j in JumpType}
_REGISTERS: Dict[str, Register] = {r.value: r for r in Register}


@dataclass
class ParserOutput:
    """Parsed program: instructions in order, labels with their addresses."""
    instructions: List[ParsedInstruction] = field(default_factory=list)
    labels: List[Tuple[Label, int]] = field(default_factory=list)


# ──────────────────────────────────────────────
# Per-statement converters
# ──────────────────────────────────────────────

def parse_a_instruction(text: str, line_num: int = 0) -> AInstruction:
    """Parse ``@literal`` or ``@symbol``."""
    operand = text[1:]

    if operand[:1].isdigit():
        try:
            value = HackInt.parse(operand)
        except HackIntRangeError as e:
            raise LiteralRangeError(str(e), line_num, text) from e
        except HackIntParseError as e:
            raise ParseError("invalid A-instruction literal", line_num, text) from e
        return AInstruction(value, line_num=line_num, raw=text)

    if _SYMBOL_RE.match(operand):
        return AInstruction(operand, line_num=line_num, raw=text)

    raise ParseError("invalid A-instruction", line_num, text)


def parse_label(text: str, line_num: int = 0) -> Label:
    """Parse ``(NAME)``."""
    m = _LABEL_RE.match(text)
    if not m:
        raise ParseError("invalid label", line_num, text)
    return Label(m.group(1), line_num=line_num, raw=text)


def parse_computation(text: str) -> Optional[Computation]:
    """Match a computation expression against the closed set.

    Returns None when the expression is not one of the 28 legal forms.
    """
    expr = text.upper()

    if _COMP_CONSTANT_RE.match(expr) or _COMP_REGISTER_RE.match(expr):
        return _COMPUTATIONS[expr]

    m = _COMP_PREFIX_RE.match(expr)
    if m:
        return _COMPUTATIONS[m.group(1) + m.group(2)]

    m = _COMP_POSTFIX_RE.match(expr)
    if m:
        return _COMPUTATIONS[m.group(1) + m.group(2) + "1"]

    m = _COMP_BINARY_RE.match(expr)
    if m:
        left, op, right = m.groups()
        computation = _COMPUTATIONS.get(left + op + right)
        if computation is None and op in COMMUTATIVE_OPERATORS:
            computation = _COMPUTATIONS.get(right + op + left)
        return computation

    return None


def _parse_destination(text: str, line_num: int, line_text: str) -> FrozenSet[Register]:
    letters = text.upper()
    if not 1 <= len(letters) <= 3 or any(ch not in _REGISTERS for ch in letters):
        raise ParseError(f"invalid destination {text!r}", line_num, line_text)
    if len(set(letters)) != len(letters):
        raise ParseError(f"duplicate register in destination {text!r}", line_num, line_text)
    return frozenset(_REGISTERS[ch] for ch in letters)


def parse_c_instruction(text: str, line_num: int = 0) -> CInstruction:
    """Parse ``dest=comp;jump``."""
    compact = _BLANKS_RE.sub("", text)
    m = _C_INSTRUCTION_RE.match(compact)
    if not m or not m.group("comp"):
        raise ParseError("invalid instruction", line_num, text)

    destination = None
    if m.group("dest") is not None:
        destination = _parse_destination(m.group("dest"), line_num, text)

    computation = parse_computation(m.group("comp"))
    if computation is None:
        raise ParseError(f"invalid computation {m.group('comp')!r}", line_num, text)

    jump = None
    if m.group("jump") is not None:
        jump = _JUMPS.get(m.group("jump").upper())
        if jump is None:
            raise ParseError(f"invalid jump {m.group('jump')!r}", line_num, text)

    return CInstruction(computation, destination, jump, line_num=line_num, raw=text)


def strip_comment(line: str) -> str:
    """Drop a trailing ``//`` comment and surrounding whitespace."""
    pos = line.find("//")
    if pos >= 0:
        line = line[:pos]
    return line.strip()


# ──────────────────────────────────────────────
# Parser
# ──────────────────────────────────────────────

class Parser:
    """Parses Hack assembly source into a ParserOutput.

    Usage:
        output = Parser(source).parse()
        output.instructions    # [AInstruction | CInstruction, ...]
        output.labels          # [(Label, index), ...]
    """

    def __init__(self, source: str):
        self.source = source

    def parse(self) -> ParserOutput:
        output = ParserOutput()

        for line_num, line in enumerate(self.source.split('\n'), 1):
            text = strip_comment(line)
            if not text:
                continue

            if text.startswith('@'):
                output.instructions.append(parse_a_instruction(text, line_num))
            elif text.startswith('('):
                label = parse_label(text, line_num)
                output.labels.append((label, len(output.instructions)))
            else:
                output.instructions.append(parse_c_instruction(text, line_num))

        logger.debug("parsed %d instructions, %d labels",
                     len(output.instructions), len(output.labels))
        return output


def parse_source(source: str) -> ParserOutput:
    """Parse source text. Raises ParseError on the first bad line."""
    return Parser(source).parse()
