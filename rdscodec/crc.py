"""CRC-10 checkwords for RDS blocks.

Generator: x^10 + x^8 + x^7 + x^5 + x^4 + x^3 + 1 (0b10110111001)

Every block is a 16-bit data word followed by a 10-bit checkword. The
checkword is the remainder of data * x^10 divided by the generator, XORed
with the offset word of the block's role (A, B, C or D). The offset is what
lets a receiver tell the four blocks of a group apart: a row is valid for
role R only when its checkword equals the remainder XOR offset(R).
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from .errors import MalformedField

GENERATOR = 0b10110111001

DATA_BITS = 16
CHECK_BITS = 10
BLOCK_BITS = DATA_BITS + CHECK_BITS

_DATA_MASK = (1 << DATA_BITS) - 1
_CHECK_MASK = (1 << CHECK_BITS) - 1


class BlockRole(Enum):
    """Position of a block inside a group."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"  # Defined by the standard, never produced by 0A/2A groups


OFFSET_WORDS = MappingProxyType({
    BlockRole.A: 0b0011111100,
    BlockRole.B: 0b0110011000,
    BlockRole.C: 0b0101101000,
    BlockRole.D: 0b0110110100,
    BlockRole.E: 0b0000000000,
})

# Roles a received row is tested against, in this order
TRIAL_ORDER = (BlockRole.A, BlockRole.B, BlockRole.C, BlockRole.D)


def _checkword_bitwise(data: int) -> int:
    """Bit-serial polynomial division of data * x^10 by the generator.

    Reference implementation; compute_checkword() uses the lookup table.
    """
    scratch = data << CHECK_BITS
    for bit in range(BLOCK_BITS - 1, CHECK_BITS - 1, -1):
        if scratch & (1 << bit):
            scratch ^= GENERATOR << (bit - CHECK_BITS)
    return scratch & _CHECK_MASK


def _build_crc_table() -> list[int]:
    """Pre-compute 256-entry CRC-10 lookup table for byte-at-a-time processing."""
    poly = GENERATOR & _CHECK_MASK
    table = []
    for i in range(256):
        crc = i << (CHECK_BITS - 8)
        for _ in range(8):
            if crc & (1 << (CHECK_BITS - 1)):
                crc = (crc << 1) ^ poly
            else:
                crc = crc << 1
        table.append(crc & _CHECK_MASK)
    return table


_CRC_TABLE = _build_crc_table()


def compute_checkword(data: int, offset: int = 0) -> int:
    """Checkword of a 16-bit data word under the given 10-bit offset word.

    Processes the two data bytes MSB first through the lookup table, then
    XORs the remainder with the offset.
    """
    if not 0 <= data <= _DATA_MASK:
        raise MalformedField("data word", data, "must fit 16 bits")
    if not 0 <= offset <= _CHECK_MASK:
        raise MalformedField("offset word", offset, "must fit 10 bits")

    crc = 0
    for byte in (data >> 8, data & 0xFF):
        crc = ((crc << 8) ^ _CRC_TABLE[((crc >> (CHECK_BITS - 8)) ^ byte) & 0xFF]) & _CHECK_MASK
    return crc ^ offset


def checkword_for(data: int, role: BlockRole) -> int:
    """Checkword of a data word transmitted as block `role`."""
    return compute_checkword(data, OFFSET_WORDS[role])


def is_valid(data: int, checkword: int, role: BlockRole) -> bool:
    """True if the received checkword is exactly the one expected for `role`."""
    return checkword_for(data, role) == checkword


def syndrome(data: int, checkword: int) -> int:
    """Remainder left after removing the data's own checkword.

    Equals the offset word of the row's role when the row is intact.
    """
    return compute_checkword(data) ^ checkword


def matching_roles(data: int, checkword: int) -> list[BlockRole]:
    """All roles in TRIAL_ORDER for which the row is valid."""
    return [role for role in TRIAL_ORDER if is_valid(data, checkword, role)]
