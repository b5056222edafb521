"""
Tests for parsing and formatting Boolfuck programs.

Run with: uv run python tests/test_parser.py
"""

from boolfuck.parser import (
    SYMBOLS,
    Flip, Read, Write, MoveLeft, MoveRight, SkipRight, SkipLeft,
    parse, parse_instruction, format_instruction, format_program,
)


def test_parse_instruction():
    print("Instruction Parsing Tests")
    print("=" * 50)

    assert parse_instruction('+') == Flip()
    assert parse_instruction(',') == Read()
    assert parse_instruction(';') == Write()
    assert parse_instruction('<') == MoveLeft()
    assert parse_instruction('>') == MoveRight()
    assert parse_instruction('[') == SkipRight()
    assert parse_instruction(']') == SkipLeft()
    print("✓ All seven symbols")

    for ch in "-. \n\tab0#":
        assert parse_instruction(ch) is None
    print("✓ Other characters ignored")


def test_parse():
    print("\nProgram Parsing Tests")
    print("=" * 50)

    assert parse("") == []
    assert parse("+,;<>[]") == [
        Flip(), Read(), Write(), MoveLeft(), MoveRight(), SkipRight(), SkipLeft()
    ]
    print("✓ Source order preserved")

    assert parse("flip: +\n  then write ; -- done.") == [Flip(), Write()]
    print("✓ Comments and whitespace dropped")

    # Brackets are not checked at parse time
    assert parse("]][") == [SkipLeft(), SkipLeft(), SkipRight()]
    print("✓ Unbalanced brackets parse without error")

    source = "+[>+<;]x,"
    assert parse(source) == parse(source)
    print("✓ Parsing is deterministic")


def test_format():
    print("\nFormatting Tests")
    print("=" * 50)

    for symbol in SYMBOLS:
        assert format_instruction(parse_instruction(symbol)) == symbol
    print("✓ Every instruction renders as its symbol")

    assert format_program(parse("a + b ; [ c ]")) == "+;[]"
    print("✓ Canonical form drops comments")

    try:
        format_instruction("+")
        assert False, "Should have raised"
    except ValueError as e:
        assert "Unknown instruction" in str(e)
    print("✓ Non-instructions rejected")


if __name__ == "__main__":
    test_parse_instruction()
    test_parse()
    test_format()

    print("\n" + "=" * 60)
    print("All tests passed!")
