from collections import deque
from typing import Dict, Iterable, List, Optional

from .bits import Bit, decode, encode
from .parser import (
    Instruction, Flip, Read, Write, MoveLeft, MoveRight, SkipRight, SkipLeft,
    parse,
)

# =============================================================================
# Exceptions
# =============================================================================

class BoolfuckException(Exception):
    """Base exception for all Boolfuck errors."""
    pass


class MalformedProgram(BoolfuckException):
    """Raised when the brackets of a program do not match up."""

    def __init__(self, message: str, position: int):
        super().__init__(message)
        self.position = position


class UnmatchedSkipLeft(MalformedProgram):
    """Raised for a ']' with no open '[' before it."""
    pass


class UnmatchedSkipRight(MalformedProgram):
    """Raised for a '[' that is never closed."""
    pass

# =============================================================================
# Jump Table
# =============================================================================

def build_jump_table(program: List[Instruction]) -> Dict[int, int]:
    """
    Match every SkipRight with its SkipLeft.

    Returns:
        Mapping from each bracket position to its partner, in both directions

    Raises:
        UnmatchedSkipLeft: If a SkipLeft has no pending SkipRight
        UnmatchedSkipRight: If a SkipRight is still open at the end
    """
    table: Dict[int, int] = {}
    pending: List[int] = []

    for i, instr in enumerate(program):
        match instr:
            case SkipRight():
                pending.append(i)
            case SkipLeft():
                if not pending:
                    raise UnmatchedSkipLeft(f"Unmatched ']' at instruction {i}", i)
                opening = pending.pop()
                table[opening] = i
                table[i] = opening

    if pending:
        position = pending[-1]
        raise UnmatchedSkipRight(f"Unmatched '[' at instruction {position}", position)

    return table

# =============================================================================
# Tape
# =============================================================================

class Tape:
    """
    Bit tape that grows by one cell whenever the pointer steps off either end.

    Cells left of the initial cell live in ``_left`` in reverse order, so
    growth on both sides is a list append and no cell is ever shifted.
    """

    def __init__(self):
        self._left: List[Bit] = []
        self._right: List[Bit] = [Bit.ZERO]
        # Position relative to the initial cell; negative values index _left.
        self._head = 0

    def __len__(self) -> int:
        return len(self._left) + len(self._right)

    @property
    def pointer(self) -> int:
        """Index of the current cell, counted from the leftmost cell."""
        return self._head + len(self._left)

    @property
    def bit(self) -> Bit:
        if self._head >= 0:
            return self._right[self._head]
        return self._left[-self._head - 1]

    @bit.setter
    def bit(self, value: Bit) -> None:
        if self._head >= 0:
            self._right[self._head] = value
        else:
            self._left[-self._head - 1] = value

    def move_left(self) -> None:
        if self._head == -len(self._left):
            self._left.append(Bit.ZERO)
        self._head -= 1

    def move_right(self) -> None:
        if self._head == len(self._right) - 1:
            self._right.append(Bit.ZERO)
        self._head += 1

    def cells(self) -> List[Bit]:
        """All cells from leftmost to rightmost."""
        return self._left[::-1] + self._right

# =============================================================================
# Interpreter
# =============================================================================

class Interpreter:
    """
    Executes one program against one input bit sequence.

    The jump table is built in the constructor, so a malformed program is
    rejected before any instruction runs.
    """

    def __init__(self, program: List[Instruction], input_bits: Optional[Iterable[Bit]] = None):
        self.program = list(program)
        self.jumps = build_jump_table(self.program)
        self.pc = 0
        self.steps = 0
        self.output: List[Bit] = []
        self._tape = Tape()
        self._input = deque(input_bits or [])

    @property
    def tape(self) -> List[Bit]:
        return self._tape.cells()

    @property
    def pointer(self) -> int:
        return self._tape.pointer

    @property
    def finished(self) -> bool:
        return self.pc >= len(self.program)

    def execute(self, instruction: Instruction) -> None:
        """Apply one instruction at the current program counter."""
        tape = self._tape

        match instruction:
            case Flip():
                tape.bit = tape.bit.flip()
            case Read():
                tape.bit = self._input.popleft() if self._input else Bit.ZERO
            case Write():
                self.output.append(tape.bit)
            case MoveLeft():
                tape.move_left()
            case MoveRight():
                tape.move_right()
            case SkipRight():
                if tape.bit is Bit.ZERO:
                    self.pc = self.jumps[self.pc]
                    return
            case SkipLeft():
                if tape.bit is Bit.ONE:
                    self.pc = self.jumps[self.pc]
                    return
            case _:
                raise ValueError(f"Unknown instruction type: {instruction}")

        self.pc += 1

    def step(self) -> None:
        """Runs one instruction. Does nothing once the program has finished."""
        if self.finished:
            return
        self.execute(self.program[self.pc])
        self.steps += 1

    def run(self) -> 'Interpreter':
        """Runs the program until the program counter leaves it."""
        while not self.finished:
            self.step()
        return self

    def output_bytes(self) -> bytes:
        return encode(self.output)


def execute_program(program: List[Instruction], input_bits: Optional[Iterable[Bit]] = None) -> Interpreter:
    """Run a parsed program to completion and return the finished interpreter."""
    return Interpreter(program, input_bits).run()


def execute_source(source: str, data: bytes = b'') -> bytes:
    """Convenience function: run program text on raw input bytes, return output bytes."""
    return execute_program(parse(source), decode(data)).output_bytes()
