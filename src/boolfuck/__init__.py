"""Boolfuck: an interpreter for the bit-oriented Brainfuck variant."""

from .bits import (
    BITS_PER_BYTE,
    Bit,
    bits_from_byte, byte_from_bits,
    decode, encode, format_bits,
)

from .parser import (
    # Symbols
    SYMBOLS,
    # Instructions
    Flip, Read, Write, MoveLeft, MoveRight, SkipRight, SkipLeft, Instruction,
    # Parsing & formatting
    parse, parse_instruction,
    format_instruction, format_program,
)

from .interpreter import (
    # Exceptions
    BoolfuckException, MalformedProgram, UnmatchedSkipLeft, UnmatchedSkipRight,
    # Execution
    build_jump_table, Tape, Interpreter,
    execute_program, execute_source,
)

__version__ = "0.1.0"
