"""
Enumeration-based test generation for the Boolfuck interpreter.

This module provides exhaustive test generation by systematically enumerating
all programs within bounded model spaces. Unlike probabilistic fuzzing,
enumeration provides guaranteed coverage of the bounded model.
"""

import itertools
from typing import Iterator, List, Tuple

from boolfuck.parser import SYMBOLS, SYM_SKIP_RIGHT, SYM_SKIP_LEFT


# ============================================================
# Configuration
# ============================================================

# Input buffers paired with every enumerated program
INPUT_SAMPLES = [
    b'',         # Exhausted from the start
    b'\x00',     # All zero bits
    b'\xff',     # All one bits
    b'\xa5',     # Alternating pattern, LSB first: 1,0,1,0,0,1,0,1
]

# Smaller sample set for quick suites
MINIMAL_INPUT_SAMPLES = [b'', b'\xff']

# Pointer excursions used for tape growth tests
GROWTH_DISTANCES = [1, 2, 3, 7, 8, 9, 64]

TestCase = Tuple[str, bytes]


# ============================================================
# Bracket oracle
# ============================================================

def is_balanced(source: str) -> bool:
    """
    Check bracket balance with a depth counter.

    Independent of the interpreter's jump table so the two can be compared.
    Characters other than brackets are ignored.
    """
    depth = 0
    for ch in source:
        if ch == SYM_SKIP_RIGHT:
            depth += 1
        elif ch == SYM_SKIP_LEFT:
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


# ============================================================
# Program Enumeration
# ============================================================

def enumerate_programs(max_length: int, alphabet: str = SYMBOLS) -> Iterator[str]:
    """
    Exhaustively enumerate all programs up to given length.

    Args:
        max_length: Maximum number of symbols (0 = only the empty program)
        alphabet: Symbols to build programs from

    Yields:
        Every string over the alphabet, shortest first, in a stable order

    Example:
        max_length=1: ['', '+', ',', ';', '<', '>', '[', ']']
    """
    for length in range(max_length + 1):
        for symbols in itertools.product(alphabet, repeat=length):
            yield ''.join(symbols)


def enumerate_balanced_programs(max_length: int, alphabet: str = SYMBOLS) -> Iterator[str]:
    """Enumerate the well-formed programs up to given length."""
    for source in enumerate_programs(max_length, alphabet):
        if is_balanced(source):
            yield source


def enumerate_unbalanced_programs(max_length: int, alphabet: str = SYMBOLS) -> Iterator[str]:
    """Enumerate the programs that must be rejected, up to given length."""
    for source in enumerate_programs(max_length, alphabet):
        if not is_balanced(source):
            yield source


# ============================================================
# Boundary Value Tests
# ============================================================

def enumerate_input_exhaustion_tests() -> Iterator[TestCase]:
    """
    Enumerate programs that read up to, and past, the end of their input.

    Each program echoes every bit it reads, so the output shows exactly
    where the input ran out.

    Yields:
        (source, input) pairs
    """
    for data in INPUT_SAMPLES + [b'\xa5\x5a']:
        available = len(data) * 8
        for reads in sorted({0, 1, available - 1, available, available + 1, available + 8}):
            if reads < 0:
                continue
            yield ',;' * reads, data


def enumerate_tape_growth_tests() -> Iterator[TestCase]:
    """
    Enumerate programs that walk off either end of the tape and come back.

    Yields:
        (source, input) pairs with empty input
    """
    for distance in GROWTH_DISTANCES:
        # Mark the far cell, come back, check the origin is still zero
        yield '>' * distance + '+' + '<' * distance + ';', b''
        yield '<' * distance + '+' + '>' * distance + ';', b''
        # Mark the origin, walk away and back, write it
        yield '+' + '>' * distance + '<' * distance + ';', b''
        yield '+' + '<' * distance + '>' * distance + ';', b''


def enumerate_malformed_tests() -> Iterator[TestCase]:
    """
    Enumerate minimal malformed programs, each paired with every input sample.

    Yields:
        (source, input) pairs that must be rejected
    """
    sources: List[str] = [']', '[', '][', '[[]', '[]]', '+;]', ',;[', '[;]]', '[[;]']
    for source in sources:
        for data in INPUT_SAMPLES:
            yield source, data


# ============================================================
# Comprehensive Test Suites
# ============================================================

def generate_comprehensive_suite(max_length: int = 3,
                                 inputs: List[bytes] = MINIMAL_INPUT_SAMPLES) -> Iterator[TestCase]:
    """
    Generate comprehensive exhaustive test suite with deduplication.

    Combines program enumeration with targeted boundary tests, removing any
    duplicates to ensure each test is unique.

    Args:
        max_length: Maximum enumerated program length (3-4 recommended)
        inputs: Input buffers paired with every enumerated program

    Yields:
        (source, input) pairs for the comprehensive suite (deduplicated)
    """
    seen = set()

    enumerated = (
        (source, data)
        for source in enumerate_programs(max_length)
        for data in inputs
    )

    for case in itertools.chain(
        enumerated,
        enumerate_input_exhaustion_tests(),
        enumerate_tape_growth_tests(),
        enumerate_malformed_tests(),
    ):
        if case not in seen:
            seen.add(case)
            yield case
