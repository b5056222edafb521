"""Bit values and the byte <-> bit codec used at the I/O boundary.

Bytes are expanded least-significant bit first: bit i of a byte becomes the
i-th bit of its 8-bit group. Packing uses the same order, and a short final
group is padded with ZERO on its missing high-order bits.
"""

from enum import Enum
from typing import Iterable, List, Sequence

BITS_PER_BYTE = 8


class Bit(Enum):
    """A single tape or I/O bit."""
    ZERO = 0
    ONE = 1

    def flip(self) -> 'Bit':
        return Bit.ONE if self is Bit.ZERO else Bit.ZERO


# =============================================================================
# Single byte conversion
# =============================================================================

def bits_from_byte(num: int) -> List[Bit]:
    """Expand one byte value into 8 bits, LSB first."""
    if not (0 <= num <= 0xFF):
        raise ValueError(f"Byte value must be 0-255, got {num}")
    return [Bit.ONE if (num >> i) & 1 else Bit.ZERO for i in range(BITS_PER_BYTE)]


def byte_from_bits(bits: Sequence[Bit]) -> int:
    """Pack up to 8 bits, LSB first, into one byte value."""
    if len(bits) > BITS_PER_BYTE:
        raise ValueError(f"Cannot pack {len(bits)} bits into one byte")
    result = 0
    for i, bit in enumerate(bits):
        if bit is Bit.ONE:
            result |= 1 << i
    return result


# =============================================================================
# Buffer conversion
# =============================================================================

def decode(data: bytes) -> List[Bit]:
    """Expand a byte buffer into its bit sequence (8 bits per byte)."""
    return [bit for num in data for bit in bits_from_byte(num)]


def encode(bits: Iterable[Bit]) -> bytes:
    """
    Pack a bit sequence into bytes.

    The sequence is split into consecutive groups of 8; the last group may be
    shorter and is zero-padded. ``encode(decode(data)) == data`` always holds.
    """
    bits = list(bits)
    return bytes(
        byte_from_bits(bits[offset:offset + BITS_PER_BYTE])
        for offset in range(0, len(bits), BITS_PER_BYTE)
    )


def format_bits(bits: Iterable[Bit]) -> str:
    """Render bits as a '0'/'1' string in sequence order."""
    return ''.join(str(bit.value) for bit in bits)
