"""Rows, groups and packet sizes.

A row is one 26-bit block as it sits in the bit string: 16 data bits then
10 check bits. It has no role until the synchronizer classifies it. A group
is four rows placed at their A/B/C/D positions.

Packet sizes:
- 0A: 4 groups x 4 blocks x 26 bits = 416 bits
- 2A: 16 groups x 4 blocks x 26 bits = 1664 bits
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .crc import BLOCK_BITS, CHECK_BITS, DATA_BITS, BlockRole, checkword_for
from .errors import InvalidLength, MalformedField

BLOCKS_PER_GROUP = 4
GROUP_BITS = BLOCKS_PER_GROUP * BLOCK_BITS

# Bit weights for packing a (n, 26) array of 0/1 values into row integers
_ROW_WEIGHTS = 1 << np.arange(BLOCK_BITS - 1, -1, -1, dtype=np.int64)


class GroupType(Enum):
    """Supported group types: (type number, groups per packet)."""

    ZERO_A = (0, 4)
    TWO_A = (2, 16)

    @property
    def number(self) -> int:
        return self.value[0]

    @property
    def groups(self) -> int:
        return self.value[1]

    @property
    def label(self) -> str:
        return f"{self.number}A"

    @property
    def packet_bits(self) -> int:
        return self.groups * GROUP_BITS

    @classmethod
    def from_label(cls, label: str) -> GroupType:
        for gt in cls:
            if gt.label == label.upper():
                return gt
        raise MalformedField("group type", label, "must be 0A or 2A")


@dataclass(frozen=True)
class Row:
    """One received block: 16-bit data word and 10-bit checkword."""

    data: int
    checkword: int

    @property
    def bits(self) -> str:
        return f"{self.data:0{DATA_BITS}b}{self.checkword:0{CHECK_BITS}b}"


@dataclass(frozen=True)
class Group:
    """Four rows at their canonical A, B, C, D positions."""

    a: Row
    b: Row
    c: Row
    d: Row

    @property
    def rows(self) -> tuple[Row, Row, Row, Row]:
        return (self.a, self.b, self.c, self.d)

    @property
    def bits(self) -> str:
        return "".join(row.bits for row in self.rows)


def make_row(data: int, role: BlockRole) -> Row:
    """Build a row whose checkword marks it as block `role`."""
    return Row(data=data, checkword=checkword_for(data, role))


def parse_rows(bits: str) -> list[Row]:
    """Partition a '0'/'1' string into 26-bit rows.

    Raises:
        InvalidLength: empty input or length not a multiple of 26.
        MalformedField: any character other than '0' or '1'.
    """
    if not bits or len(bits) % BLOCK_BITS:
        raise InvalidLength(len(bits), BLOCK_BITS, multiple=True)

    try:
        raw = np.frombuffer(bits.encode("ascii"), dtype=np.uint8)
    except UnicodeEncodeError:
        raise MalformedField("binary data", bits, "only '0' and '1' allowed") from None

    values = raw.astype(np.int64) - ord("0")
    if ((values != 0) & (values != 1)).any():
        raise MalformedField("binary data", bits, "only '0' and '1' allowed")

    packed = values.reshape(-1, BLOCK_BITS) @ _ROW_WEIGHTS
    return [
        Row(data=int(v) >> CHECK_BITS, checkword=int(v) & ((1 << CHECK_BITS) - 1))
        for v in packed
    ]


def split_groups(rows: list[Row]) -> list[list[Row]]:
    """Chunk rows four at a time, in physical order."""
    if len(rows) % BLOCKS_PER_GROUP:
        raise InvalidLength(len(rows) * BLOCK_BITS, GROUP_BITS, multiple=True)
    return [rows[i:i + BLOCKS_PER_GROUP] for i in range(0, len(rows), BLOCKS_PER_GROUP)]


def rows_to_bits(rows: list[Row]) -> str:
    """Concatenate rows back into a bit string."""
    return "".join(row.bits for row in rows)
