"""
Property fuzzer for the Boolfuck interpreter.

Generates random programs and inputs, runs them under a step budget, and
checks each outcome against independent oracles:
- a program is rejected exactly when its brackets are unbalanced
- the interpreter never raises anything but MalformedProgram
- dropping comments (re-parsing the canonical form) changes nothing
- the input survives a decode/encode round trip
"""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import List, Optional, Callable, Tuple

from boolfuck.bits import decode, encode
from boolfuck.interpreter import Interpreter, MalformedProgram
from boolfuck.parser import SYMBOLS, parse, format_program
from .blocks import random_block, compile_block
from .enumeration import is_balanced


# =============================================================================
# Configuration Constants
# =============================================================================

# Characters the random generator draws from besides the symbols
NOISE_CHARACTERS = " \nab#-.01"

# Random source: chance that a character is a symbol rather than noise
PROB_SYMBOL = 0.85

# Mixed strategy probabilities
PROB_RANDOM_STRATEGY = 0.4
PROB_STRUCTURED_STRATEGY = 0.6


@dataclass
class FuzzConfig:
    """Configuration for generators and execution."""
    max_length: int = 24              # For random generator
    max_depth: int = 4                # For structured generator
    max_width: int = 4                # For structured generator
    max_input_bytes: int = 4          # For input generator
    max_steps: int = 10_000           # Step budget per execution


DEFAULT_CONFIG = FuzzConfig()


# =============================================================================
# Strategy Selection
# =============================================================================

class Strategy(Enum):
    """Enum for program generation strategies."""
    RANDOM = "random"
    STRUCTURED = "structured"


def choose_strategy(rng: Random) -> Strategy:
    """Choose a generation strategy based on configured probabilities."""
    return rng.choices(
        [Strategy.RANDOM, Strategy.STRUCTURED],
        weights=[PROB_RANDOM_STRATEGY, PROB_STRUCTURED_STRATEGY]
    )[0]


# =============================================================================
# Source and Input Generators
# =============================================================================

def random_source(rng: Random, config: FuzzConfig = DEFAULT_CONFIG) -> str:
    """Generate random text - brackets may be unbalanced, noise is mixed in."""
    length = rng.randint(0, config.max_length)
    chars = []
    for _ in range(length):
        if rng.random() < PROB_SYMBOL:
            chars.append(rng.choice(SYMBOLS))
        else:
            chars.append(rng.choice(NOISE_CHARACTERS))
    return ''.join(chars)


def structured_source(rng: Random, config: FuzzConfig = DEFAULT_CONFIG) -> str:
    """
    Generate a well-formed program from a random block tree.

    The result always has balanced brackets, so it is never rejected, but it
    may still run past the step budget.
    """
    block = random_block(rng, max_depth=config.max_depth, max_width=config.max_width)
    return compile_block(block)


def mixed_source(rng: Random, config: FuzzConfig = DEFAULT_CONFIG) -> str:
    """Generate a program with a randomly chosen strategy."""
    if choose_strategy(rng) is Strategy.RANDOM:
        return random_source(rng, config)
    return structured_source(rng, config)


def random_input(rng: Random, config: FuzzConfig = DEFAULT_CONFIG) -> bytes:
    """Generate a random input buffer, possibly empty."""
    length = rng.randint(0, config.max_input_bytes)
    return bytes(rng.randint(0, 255) for _ in range(length))


# Generator registry for dispatch
GENERATORS: dict[str, Callable[[Random, FuzzConfig], str]] = {
    "random": random_source,
    "structured": structured_source,
    "mixed": mixed_source,
}


# =============================================================================
# Execution Results
# =============================================================================

@dataclass(frozen=True)
class ExecutionResult:
    """Base class for execution results - used as a union type."""


@dataclass(frozen=True)
class Success(ExecutionResult):
    output: bytes


@dataclass(frozen=True)
class Rejected(ExecutionResult):
    reason: str


@dataclass(frozen=True)
class Timeout(ExecutionResult):
    steps: int


@dataclass(frozen=True)
class Crash(ExecutionResult):
    reason: str


def execute_with_budget(source: str, data: bytes, max_steps: int = DEFAULT_CONFIG.max_steps) -> ExecutionResult:
    """Run a program one step at a time, giving up after max_steps."""
    try:
        interpreter = Interpreter(parse(source), decode(data))
    except MalformedProgram as e:
        return Rejected(type(e).__name__)
    except Exception as e:
        return Crash(f"setup raised exception: {repr(e)}")

    try:
        while not interpreter.finished:
            if interpreter.steps >= max_steps:
                return Timeout(interpreter.steps)
            interpreter.step()
    except Exception as e:
        return Crash(f"execution raised exception: {repr(e)}")

    return Success(interpreter.output_bytes())


def check_case(source: str, data: bytes, result: ExecutionResult,
               max_steps: int = DEFAULT_CONFIG.max_steps) -> List[str]:
    """
    Check one execution result against the oracles.

    Returns:
        Descriptions of every violated property (empty if none)
    """
    violations = []

    if isinstance(result, Crash):
        violations.append(f"crash: {result.reason}")

    balanced = is_balanced(source)
    if isinstance(result, Rejected) == balanced:
        violations.append(
            f"bracket validation mismatch: balanced={balanced}, result={result}"
        )

    program = parse(source)
    canonical = format_program(program)
    if parse(canonical) != program:
        violations.append("canonical form does not re-parse to the same program")
    elif canonical != source and execute_with_budget(canonical, data, max_steps) != result:
        violations.append("removing comments changed the result")

    if encode(decode(data)) != data:
        violations.append("input does not survive decode/encode")

    return violations


# =============================================================================
# Statistics Tracking
# =============================================================================

@dataclass
class FuzzingStatistics:
    """Tracks fuzzing run statistics."""
    total_tests: int = 0
    bugs_found: int = 0
    crashes: int = 0
    rejected: int = 0
    timeouts: int = 0

    @property
    def completed_tests(self) -> int:
        return self.total_tests - self.rejected - self.timeouts - self.crashes

    @property
    def correct_tests(self) -> int:
        return self.total_tests - self.bugs_found

    @property
    def bug_rate(self) -> float:
        return (self.bugs_found / self.total_tests * 100) if self.total_tests > 0 else 0.0

    def record_test(self, result: ExecutionResult, violations: List[str]) -> None:
        """Record results of a single test."""
        self.total_tests += 1

        if isinstance(result, Rejected):
            self.rejected += 1
        elif isinstance(result, Timeout):
            self.timeouts += 1
        elif isinstance(result, Crash):
            self.crashes += 1

        if violations:
            self.bugs_found += 1

    def print_summary(self) -> None:
        """Print formatted summary of results."""
        print("\n" + "=" * 60)
        print("Fuzzer Summary")
        print("-" * 40)
        print(f"Total tests run:           {self.total_tests}")
        print(f"Rejected (malformed):      {self.rejected}")
        print(f"Step budget exceeded:      {self.timeouts}")
        print(f"Completed:                 {self.completed_tests}")
        print(f"Bugs found:                {self.bugs_found}")
        print(f"Crashes:                   {self.crashes}")
        print(f"Correct:                   {self.correct_tests}")

        if self.bugs_found > 0:
            print(f"Bug detection rate:     {self.bug_rate:.1f}%")
        else:
            print("\nNo bugs detected!")


# =============================================================================
# Bug Reporting
# =============================================================================

def report_bug(test_num: int, source: str, data: bytes, result: ExecutionResult, violations: List[str]) -> None:
    """Print detailed bug report."""
    print(f"\nTest {test_num}: Bug found")
    print(f"  Source:  {source!r}")
    print(f"  Input:   {data.hex()}")
    print(f"  Result:  {result}")
    for violation in violations:
        print(f"  - {violation}")


def print_header(num_tests: int, generator: str, seed: Optional[int]) -> None:
    """Print fuzzer run header."""
    print(f"Boolfuck Fuzzer - Running {num_tests} tests")
    print(f"Generator: {generator}")
    print(f"Seed: {seed}")
    print("=" * 60)


# =============================================================================
# Fuzzer Main Logic
# =============================================================================

def run_single_test(source: str, data: bytes, max_steps: int = DEFAULT_CONFIG.max_steps) -> Tuple[ExecutionResult, List[str]]:
    """
    Run a single fuzzing test case.

    Returns:
        Tuple of (result, violations)
    """
    result = execute_with_budget(source, data, max_steps)
    return result, check_case(source, data, result, max_steps)


def run_fuzzer(
    num_tests: int = 1000,
    seed: Optional[int] = None,
    generator: str = "mixed",
    config: FuzzConfig = DEFAULT_CONFIG
) -> FuzzingStatistics:
    """
    Run the fuzzer for a specified number of tests.

    Args:
        num_tests: Number of random test cases to generate
        seed: Random seed for reproducibility
        generator: Generator type: "random", "structured", or "mixed"
        config: Generator and step budget settings

    Returns:
        FuzzingStatistics object with results
    """
    if generator not in GENERATORS:
        raise ValueError(f"Unknown generator: {generator}. Available: {', '.join(GENERATORS)}")

    rng = Random(seed)
    generator_func = GENERATORS[generator]
    stats = FuzzingStatistics()

    print_header(num_tests, generator, seed)

    for i in range(num_tests):
        source = generator_func(rng, config)
        data = random_input(rng, config)
        result, violations = run_single_test(source, data, config.max_steps)

        stats.record_test(result, violations)

        if violations:
            report_bug(i + 1, source, data, result, violations)

    stats.print_summary()
    return stats


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Property fuzzer for the Boolfuck interpreter")
    parser.add_argument(
        "-n", "--num-tests",
        type=int,
        default=1000,
        help="Number of random test cases to run (default: 1000)"
    )
    parser.add_argument(
        "-s", "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility"
    )
    parser.add_argument(
        "-g", "--generator",
        type=str,
        default="mixed",
        choices=list(GENERATORS),
        help="Generator type (default: %(default)s)"
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=DEFAULT_CONFIG.max_steps,
        help="Step budget per program (default: %(default)s)"
    )

    args = parser.parse_args()

    run_fuzzer(
        num_tests=args.num_tests,
        seed=args.seed,
        generator=args.generator,
        config=FuzzConfig(max_steps=args.max_steps)
    )
