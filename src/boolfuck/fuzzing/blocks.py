"""Block tree ADT: straight-line operations, loops, and sequences of both."""
from __future__ import annotations
from dataclasses import dataclass
from random import Random
from typing import Union, List, Tuple, Callable

from boolfuck.parser import (
    Instruction, Flip, Read, Write, MoveLeft, MoveRight, SkipRight, SkipLeft,
    format_program,
)


# Instructions that may appear outside brackets
STRAIGHT_LINE = (Flip, Read, Write, MoveLeft, MoveRight)


def _default_op_generator(rng: Random) -> Instruction:
    """Default operation generator: uniform over the non-bracket instructions."""
    return rng.choice(STRAIGHT_LINE)()


@dataclass(frozen=True)
class Op:
    """A single non-bracket instruction."""
    instruction: Instruction

    def __post_init__(self):
        if not isinstance(self.instruction, STRAIGHT_LINE):
            raise TypeError(f"Op needs a non-bracket instruction, got {self.instruction!r}")


@dataclass(frozen=True)
class Loop:
    """A bracketed body: SkipRight, body, SkipLeft."""
    body: Block


@dataclass(frozen=True)
class Seq:
    """Blocks executed one after another."""
    items: Tuple[Block, ...]


# A block is one of the three variants
Block = Union[Op, Loop, Seq]


# =============================================================================
# Compilation (Block -> Program)
# =============================================================================

def compile_block_to_instructions(block: Block) -> List[Instruction]:
    """
    Flatten a block tree into a well-formed instruction list.

    Examples:
        Op(Flip())                      -> [Flip()]
        Loop(Op(Flip()))                -> [SkipRight(), Flip(), SkipLeft()]
        Seq((Op(Flip()), Loop(Seq(())))) -> [Flip(), SkipRight(), SkipLeft()]
    """
    match block:
        case Op(instruction=instr):
            return [instr]
        case Loop(body=body):
            return [SkipRight()] + compile_block_to_instructions(body) + [SkipLeft()]
        case Seq(items=items):
            result: List[Instruction] = []
            for item in items:
                result.extend(compile_block_to_instructions(item))
            return result
        case _:
            raise ValueError(f"Unknown block type: {block}")


def compile_block(block: Block) -> str:
    """Compile a block tree to Boolfuck source text."""
    return format_program(compile_block_to_instructions(block))


# =============================================================================
# Random Block Generation
# =============================================================================


def random_block(
    rng: Random,
    max_depth: int = 3,
    max_width: int = 4,
    op_generator: Callable[[Random], Instruction] = _default_op_generator
) -> Block:
    """
    Generate a random block tree.

    At each level, randomly chooses between:
    - Op (50% probability)
    - Seq of 1..max_width sub-blocks (30% probability)
    - Loop (20% probability)

    When max_depth reaches 0, only generates Op to ensure termination of the
    generator (not of the generated program).

    Args:
        rng: Random number generator (use Random(seed) for reproducibility)
        max_depth: Maximum nesting depth of the tree
        max_width: Maximum number of items in a Seq
        op_generator: Callable producing straight-line instructions

    Returns:
        A randomly generated block
    """
    if max_depth <= 0:
        return Op(op_generator(rng))

    choice = rng.random()

    if choice < 0.5:
        return Op(op_generator(rng))
    elif choice < 0.8:
        width = rng.randint(1, max_width)
        return Seq(tuple(
            random_block(rng, max_depth - 1, max_width, op_generator)
            for _ in range(width)
        ))
    else:
        return Loop(random_block(rng, max_depth - 1, max_width, op_generator))
