"""Tests for rows, groups, group types and bit string partitioning."""

import pytest

from rdscodec.blocks import (
    GROUP_BITS,
    Group,
    GroupType,
    Row,
    make_row,
    parse_rows,
    rows_to_bits,
    split_groups,
)
from rdscodec.crc import BlockRole, checkword_for
from rdscodec.errors import InvalidLength, MalformedField


class TestRow:
    def test_bits_layout(self):
        """16 data bits then 10 check bits, MSB first."""
        row = Row(data=0x8001, checkword=0b1000000001)
        assert row.bits == "1000000000000001" + "1000000001"
        assert len(row.bits) == 26

    def test_make_row_uses_role_offset(self):
        row = make_row(0x3039, BlockRole.C)
        assert row.data == 0x3039
        assert row.checkword == checkword_for(0x3039, BlockRole.C)

    def test_rows_are_immutable(self):
        row = Row(data=1, checkword=2)
        with pytest.raises(AttributeError):
            row.data = 3  # type: ignore[misc]


class TestGroup:
    def test_rows_canonical_order(self):
        rows = [make_row(i, role) for i, role in enumerate((BlockRole.A, BlockRole.B, BlockRole.C, BlockRole.D))]
        group = Group(*rows)
        assert group.rows == tuple(rows)

    def test_group_bits_length(self):
        group = Group(*(Row(0, 0) for _ in range(4)))
        assert len(group.bits) == GROUP_BITS == 104


class TestGroupType:
    def test_zero_a(self):
        assert GroupType.ZERO_A.number == 0
        assert GroupType.ZERO_A.label == "0A"
        assert GroupType.ZERO_A.groups == 4
        assert GroupType.ZERO_A.packet_bits == 416

    def test_two_a(self):
        assert GroupType.TWO_A.number == 2
        assert GroupType.TWO_A.label == "2A"
        assert GroupType.TWO_A.groups == 16
        assert GroupType.TWO_A.packet_bits == 1664

    def test_from_label(self):
        assert GroupType.from_label("0A") is GroupType.ZERO_A
        assert GroupType.from_label("2a") is GroupType.TWO_A

    def test_from_label_unknown(self):
        with pytest.raises(MalformedField):
            GroupType.from_label("4A")


class TestParseRows:
    def test_all_zero_row(self):
        assert parse_rows("0" * 26) == [Row(data=0, checkword=0)]

    def test_all_one_row(self):
        assert parse_rows("1" * 26) == [Row(data=0xFFFF, checkword=0x3FF)]

    def test_splits_data_and_check(self):
        bits = "0011000000111001" + "0101000101"
        assert parse_rows(bits) == [Row(data=0x3039, checkword=0b0101000101)]

    def test_multiple_rows_in_order(self):
        rows = [Row(0x1234, 0x155), Row(0xBEEF, 0x2AA), Row(0x0001, 0x001)]
        assert parse_rows(rows_to_bits(rows)) == rows

    def test_empty_input(self):
        with pytest.raises(InvalidLength):
            parse_rows("")

    def test_length_not_multiple_of_26(self):
        with pytest.raises(InvalidLength) as exc:
            parse_rows("0" * 27)
        assert exc.value.length == 27
        assert exc.value.multiple is True
        assert "Expected: a multiple of 26" in str(exc.value)

    def test_invalid_character(self):
        with pytest.raises(MalformedField):
            parse_rows("0" * 25 + "2")

    def test_non_ascii_character(self):
        with pytest.raises(MalformedField):
            parse_rows("0" * 25 + "é")


class TestSplitGroups:
    def test_four_rows_per_group(self):
        rows = [Row(i, 0) for i in range(8)]
        groups = split_groups(rows)
        assert len(groups) == 2
        assert groups[0] == rows[:4]
        assert groups[1] == rows[4:]

    def test_incomplete_group(self):
        with pytest.raises(InvalidLength):
            split_groups([Row(0, 0)] * 5)
