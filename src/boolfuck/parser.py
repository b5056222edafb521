from dataclasses import dataclass
from typing import Union, List, Optional

# =============================================================================
# Symbols
# =============================================================================

SYM_FLIP = '+'
SYM_READ = ','
SYM_WRITE = ';'
SYM_MOVE_LEFT = '<'
SYM_MOVE_RIGHT = '>'
SYM_SKIP_RIGHT = '['
SYM_SKIP_LEFT = ']'

SYMBOLS = SYM_FLIP + SYM_READ + SYM_WRITE + SYM_MOVE_LEFT + SYM_MOVE_RIGHT + SYM_SKIP_RIGHT + SYM_SKIP_LEFT

# =============================================================================
# Instruction ADT
# =============================================================================

@dataclass(frozen=True)
class Flip:
    """Invert the bit under the pointer."""
    pass

@dataclass(frozen=True)
class Read:
    """Replace the bit under the pointer with the next input bit."""
    pass

@dataclass(frozen=True)
class Write:
    """Append the bit under the pointer to the output."""
    pass

@dataclass(frozen=True)
class MoveLeft:
    """Move the pointer one cell left, growing the tape if needed."""
    pass

@dataclass(frozen=True)
class MoveRight:
    """Move the pointer one cell right, growing the tape if needed."""
    pass

@dataclass(frozen=True)
class SkipRight:
    """Jump to the matching SkipLeft if the bit under the pointer is zero."""
    pass

@dataclass(frozen=True)
class SkipLeft:
    """Jump back to the matching SkipRight if the bit under the pointer is one."""
    pass

Instruction = Union[Flip, Read, Write, MoveLeft, MoveRight, SkipRight, SkipLeft]

# =============================================================================
# Parsing (Source -> Instructions)
# =============================================================================

def parse_instruction(ch: str) -> Optional[Instruction]:
    """Map one source character to its instruction, or None if it is ignored."""
    match ch:
        case '+':
            return Flip()
        case ',':
            return Read()
        case ';':
            return Write()
        case '<':
            return MoveLeft()
        case '>':
            return MoveRight()
        case '[':
            return SkipRight()
        case ']':
            return SkipLeft()
        case _:
            return None


def parse(source: str) -> List[Instruction]:
    """
    Parse program text into instructions, in source order.

    Every character that is not one of the seven symbols is dropped. Bracket
    balance is not checked here; see ``build_jump_table``.
    """
    instructions = []
    for ch in source:
        instr = parse_instruction(ch)
        if instr is not None:
            instructions.append(instr)
    return instructions

# =============================================================================
# Formatting (Instructions -> Source)
# =============================================================================

def format_instruction(instr: Instruction) -> str:
    """Render a single instruction as its source symbol."""
    match instr:
        case Flip():
            return SYM_FLIP
        case Read():
            return SYM_READ
        case Write():
            return SYM_WRITE
        case MoveLeft():
            return SYM_MOVE_LEFT
        case MoveRight():
            return SYM_MOVE_RIGHT
        case SkipRight():
            return SYM_SKIP_RIGHT
        case SkipLeft():
            return SYM_SKIP_LEFT
        case _:
            raise ValueError(f"Unknown instruction: {instr}")


def format_program(instructions: List[Instruction]) -> str:
    """Render a program in canonical form (symbols only, no comments)."""
    return ''.join(format_instruction(instr) for instr in instructions)
