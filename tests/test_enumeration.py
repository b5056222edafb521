"""
Tests for enumeration-based test generation.

Verifies that enumeration produces complete, deterministic, and duplicate-free
test suites, and that the interpreter agrees with every case in them.

Run with: uv run python tests/test_enumeration.py
"""

from boolfuck.bits import Bit, decode, encode
from boolfuck.interpreter import MalformedProgram, execute_source
from boolfuck.parser import SYMBOLS
from boolfuck.fuzzing.enumeration import (
    is_balanced,
    enumerate_programs,
    enumerate_balanced_programs,
    enumerate_unbalanced_programs,
    enumerate_input_exhaustion_tests,
    enumerate_tape_growth_tests,
    enumerate_malformed_tests,
    generate_comprehensive_suite,
    INPUT_SAMPLES,
    MINIMAL_INPUT_SAMPLES,
)
from boolfuck.fuzzing.fuzzer import run_single_test, Rejected


def test_is_balanced():
    """Tests for the counter-based bracket oracle."""
    print("Bracket Oracle Tests")
    print("=" * 50)

    for source in ["", "+", "[]", "[[]]", "[][]", "x[y]z", "[+[;]>]"]:
        assert is_balanced(source), source
    for source in ["[", "]", "][", "[[]", "[]]", "]+["]:
        assert not is_balanced(source), source
    print("✓ Balanced and unbalanced sources classified")


def test_program_enumeration():
    """Tests for program enumeration."""
    print("\nProgram Enumeration Tests")
    print("=" * 50)

    assert list(enumerate_programs(0)) == ['']
    assert list(enumerate_programs(1)) == [''] + list(SYMBOLS)
    print("✓ Length 0 and 1 enumeration")

    programs = list(enumerate_programs(2))
    assert len(programs) == 1 + 7 + 49
    assert len(programs) == len(set(programs))
    print("✓ No duplicate programs")

    balanced = list(enumerate_balanced_programs(2))
    unbalanced = list(enumerate_unbalanced_programs(2))
    assert len(balanced) == 32
    assert len(unbalanced) == 25
    assert set(balanced) | set(unbalanced) == set(programs)
    print("✓ Balanced/unbalanced partition")

    assert list(enumerate_programs(2, alphabet="[]")) == ['', '[', ']', '[[', '[]', '][', ']]']
    print("✓ Custom alphabet")


def test_bracket_validation_exhaustive():
    """The jump table rejects exactly the unbalanced programs."""
    print("\nExhaustive Bracket Validation")
    print("=" * 50)

    # No flips, so every loop is skipped and every program terminates
    for source in enumerate_programs(4, alphabet="[];"):
        try:
            execute_source(source, b'')
            accepted = True
        except MalformedProgram:
            accepted = False
        assert accepted == is_balanced(source), source
    print("✓ All programs up to length 4 agree with the oracle")


def test_boundary_value_tests():
    """Tests for boundary value test generation."""
    print("\nBoundary Value Tests")
    print("=" * 50)

    tests = list(enumerate_input_exhaustion_tests())
    assert len(tests) >= 20
    for source, data in tests:
        reads = source.count(',')
        bits = decode(data)
        expected = bits[:reads] + [Bit.ZERO] * max(0, reads - len(bits))
        assert execute_source(source, data) == encode(expected)
    print(f"✓ Input exhaustion tests ({len(tests)} tests, zeros past the end)")

    tests = list(enumerate_tape_growth_tests())
    assert len(tests) >= 20
    for source, data in tests:
        expected = b'\x01' if source.startswith('+') else b'\x00'
        assert execute_source(source, data) == expected
    print(f"✓ Tape growth tests ({len(tests)} tests)")

    tests = list(enumerate_malformed_tests())
    assert len(tests) >= 10
    rejected = 0
    for source, data in tests:
        try:
            execute_source(source, data)
        except MalformedProgram:
            rejected += 1
    assert rejected == len(tests)
    print(f"✓ Malformed tests ({len(tests)} tests, all rejected)")


def test_comprehensive_suite():
    """Tests for comprehensive enumeration suite."""
    print("\nComprehensive Suite Tests")
    print("=" * 50)

    suite = list(generate_comprehensive_suite(max_length=2))
    assert len(suite) == len(set(suite))
    print(f"✓ No duplicates ({len(suite)} unique tests)")

    suite_set = set(suite)
    for source in enumerate_programs(2):
        for data in MINIMAL_INPUT_SAMPLES:
            assert (source, data) in suite_set
    growth = list(enumerate_tape_growth_tests())
    assert all(case in suite_set for case in growth)
    print("✓ Includes enumerated programs and boundary tests")


def test_determinism():
    """Tests for deterministic enumeration behavior."""
    print("\nDeterminism Tests")
    print("=" * 50)

    suite1 = list(generate_comprehensive_suite(max_length=2))
    suite2 = list(generate_comprehensive_suite(max_length=2))
    assert suite1 == suite2
    print("✓ Enumeration is deterministic")


def test_input_samples():
    """Tests for input sample definitions."""
    assert b'' in INPUT_SAMPLES
    assert b'\x00' in INPUT_SAMPLES
    assert b'\xff' in INPUT_SAMPLES
    assert set(MINIMAL_INPUT_SAMPLES) <= set(INPUT_SAMPLES)
    print(f"✓ INPUT_SAMPLES covers empty, all-zero and all-one input ({len(INPUT_SAMPLES)} total)")


def test_integration():
    """Every case in the suite satisfies the fuzzer's properties."""
    print("\nIntegration Tests")
    print("=" * 50)

    suite = list(generate_comprehensive_suite(max_length=2))
    rejected = 0
    for source, data in suite:
        result, violations = run_single_test(source, data, max_steps=1000)
        assert violations == [], (source, data, violations)
        if isinstance(result, Rejected):
            rejected += 1

    assert rejected > 0
    print(f"✓ No property violations ({len(suite)} tests, {rejected} rejected)")


if __name__ == "__main__":
    print("Boolfuck Enumeration Tests")
    print("=" * 60)
    print()

    test_is_balanced()
    test_program_enumeration()
    test_bracket_validation_exhaustive()
    test_boundary_value_tests()
    test_comprehensive_suite()
    test_determinism()
    test_input_samples()
    test_integration()

    print("\n" + "=" * 60)
    print("All tests passed!")
