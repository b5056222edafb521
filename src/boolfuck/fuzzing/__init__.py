"""Fuzzing and enumeration framework for the Boolfuck interpreter."""

from .fuzzer import (
    ExecutionResult, Success, Rejected, Timeout, Crash,
    FuzzConfig, FuzzingStatistics,
    execute_with_budget, check_case,
    run_fuzzer,
)

from .blocks import (
    Block, Op, Loop, Seq,
    compile_block_to_instructions,
    compile_block,
    random_block,
)

from .enumeration import (
    is_balanced,
    enumerate_programs,
    generate_comprehensive_suite,
)
