"""
Command-line host for the Boolfuck interpreter.

Reads program text and raw input bytes, runs the program, and writes the
packed output bytes (or the raw output bits with --bits).

Usage:
    boolfuck hello.bf
    boolfuck -e ',;,;,;,;,;,;,;,;' -i input.bin -o out.bin
"""

import argparse
import sys
from typing import List, Optional

from .bits import decode, format_bits
from .interpreter import MalformedProgram, Interpreter
from .parser import parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boolfuck",
        description="Run a Boolfuck program"
    )
    parser.add_argument(
        "program",
        nargs="?",
        default=None,
        help="Path to the program source file"
    )
    parser.add_argument(
        "-e", "--execute",
        type=str,
        default=None,
        metavar="CODE",
        help="Program source given inline instead of a file"
    )
    parser.add_argument(
        "-i", "--input",
        type=str,
        default=None,
        help="File with raw input bytes, '-' for stdin (default: no input)"
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="File to write output bytes to (default: stdout)"
    )
    parser.add_argument(
        "--bits",
        action="store_true",
        help="Write output as a string of 0/1 bits instead of packed bytes"
    )
    return parser


def _read_bytes(parser: argparse.ArgumentParser, path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        parser.error(f"cannot read {path}: {e.strerror}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.execute is not None and args.program is not None:
        parser.error("give either a program file or -e/--execute, not both")
    if args.execute is not None:
        source = args.execute
    elif args.program is not None:
        source = _read_bytes(parser, args.program).decode("utf-8", errors="replace")
    else:
        parser.error("a program file or -e/--execute is required")

    data = _read_bytes(parser, args.input) if args.input is not None else b""

    try:
        interpreter = Interpreter(parse(source), decode(data))
    except MalformedProgram as e:
        print(f"boolfuck: error: {e}", file=sys.stderr)
        return 1

    interpreter.run()

    if args.bits:
        result = format_bits(interpreter.output).encode("ascii")
    else:
        result = interpreter.output_bytes()

    if args.output is None:
        sys.stdout.buffer.write(result)
        sys.stdout.buffer.flush()
    else:
        with open(args.output, "wb") as f:
            f.write(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
