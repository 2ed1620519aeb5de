#!/usr/bin/env python3
"""
hackasm — Hack assembler CLI

Usage:
    python hackasm.py <input.asm> [-o output.hack] [--format hack|listing]
                                  [--verbose] [--log-file FILE]

Output goes next to the input with a .hack suffix unless -o is given.
Use -o - to write to stdout.

Examples:
    python hackasm.py Max.asm                  # writes Max.hack
    python hackasm.py Pong.asm -o pong.hack
    python hackasm.py Rect.asm --format listing -o -
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Allow running from project root without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from hack_assembler import __version__
from hack_assembler.assembler import Assembler
from hack_assembler.context import AssemblerError, TooManyInstructionsError
from hack_assembler.hack_int import HackIntError
from hack_assembler.log import setup_logging
from hack_assembler.output import format_listing, to_hack_text
from hack_assembler.parser import ParseError
from hack_assembler.symbol_table import SymbolTableError, TooManyVariablesError

logger = logging.getLogger("hack_assembler.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hackasm",
        description="Two-pass assembler for the Hack 16-bit instruction set",
    )
    parser.add_argument("input", help="Input assembly file (.asm)")
    parser.add_argument("-o", "--output",
                        help="Output file (default: input with .hack suffix, '-' for stdout)")
    parser.add_argument("--format", choices=["hack", "listing"], default="hack",
                        help="Output format (default: hack)")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Print assembly details to stderr (-v info, -vv debug)")
    parser.add_argument("--log-file", help="Write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"hackasm {__version__}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose >= 2:
        console_level = logging.DEBUG
    elif args.verbose == 1:
        console_level = logging.INFO
    else:
        console_level = logging.WARNING
    setup_logging(console_level=console_level, log_file=args.log_file)

    # Read input
    try:
        with open(args.input, "r", encoding="utf-8") as f:
            source = f.read()
    except FileNotFoundError:
        logger.error("File not found: %s", args.input)
        sys.exit(1)
    except OSError as e:
        logger.error("Error reading %s: %s", args.input, e)
        sys.exit(1)

    # Every statement is line-terminated
    if not source.endswith("\n"):
        source += "\n"

    logger.info("Input:  %s", args.input)

    try:
        asm = Assembler(source)
        words = asm.assemble()
    except ParseError as e:
        logger.error("Parse error: %s", e)
        sys.exit(1)
    except (TooManyVariablesError, TooManyInstructionsError) as e:
        logger.error("Capacity error: %s", e)
        sys.exit(1)
    except (SymbolTableError, HackIntError) as e:
        logger.error("Symbol error: %s", e)
        sys.exit(1)
    except AssemblerError as e:
        logger.error("Assembler error: %s", e)
        sys.exit(1)
    except Exception as e:
        logger.error("Internal assembler error: %s", e, exc_info=args.verbose > 0)
        sys.exit(2)

    if args.format == "listing":
        result = format_listing(asm.parsed, words, asm.context.symbol_table.user_symbols()) + "\n"
    else:
        result = to_hack_text(words)

    # Write output
    if args.output == "-":
        sys.stdout.write(result)
    else:
        if args.output:
            out_path = Path(args.output)
        else:
            suffix = ".hack" if args.format == "hack" else ".lst"
            out_path = Path(args.input).with_suffix(suffix)
        try:
            with open(out_path, "w", encoding="utf-8") as f:
                f.write(result)
        except OSError as e:
            logger.error("Error writing %s: %s", out_path, e)
            sys.exit(1)
        logger.info("Output: %s (%s)", out_path, args.format)

    logger.info("Assembled %d instructions, %d user symbols",
                len(words), len(asm.context.symbol_table))
    return 0


if __name__ == "__main__":
    main()
