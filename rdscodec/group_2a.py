"""Group 2A: Radio Text.

Block layout:
- A: PI code (16 bits)
- B: control fields + text A/B flag (1) | RT segment address (4)
- C: Radio Text characters 4*segment, 4*segment + 1
- D: Radio Text characters 4*segment + 2, 4*segment + 3

Sixteen groups (segments 0-15) carry the full 64-character text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .blocks import Group, make_row
from .crc import BlockRole
from .errors import MalformedField
from .fields import (
    ControlFields,
    check_width,
    pack_chars,
    pack_control,
    unpack_chars,
    unpack_control,
)

logger = logging.getLogger(__name__)

GROUP_TYPE = 2
SEGMENTS = 16


@dataclass(frozen=True)
class Group2A:
    """Fields carried by one 2A group."""

    program_identifier: int
    traffic_program: bool
    program_type: int
    text_ab: bool
    segment: int  # 0-15
    chars: str  # 4 characters


def encode_group_2a(msg: Group2A) -> Group:
    """Build the four blocks of a 2A group with their checkwords."""
    pi = check_width("program identifier", msg.program_identifier, 16)
    segment = check_width("RT segment", msg.segment, 4)
    if len(msg.chars) != 4:
        raise MalformedField("text segment", msg.chars, "must be 4 characters")

    block_b = pack_control(ControlFields(
        group_type=GROUP_TYPE,
        version_b=False,
        traffic_program=msg.traffic_program,
        program_type=msg.program_type,
        extra=(check_width("text A/B flag", msg.text_ab, 1) << 4) | segment,
    ))
    block_c = pack_chars(msg.chars[:2])
    block_d = pack_chars(msg.chars[2:])

    logger.debug(
        "2A segment %d: A=%s B=%s C=%s D=%s",
        segment, *(format(word, "016b") for word in (pi, block_b, block_c, block_d)),
    )
    return Group(
        a=make_row(pi, BlockRole.A),
        b=make_row(block_b, BlockRole.B),
        c=make_row(block_c, BlockRole.C),
        d=make_row(block_d, BlockRole.D),
    )


def decode_group_2a(group: Group) -> Group2A:
    """Extract the 2A fields from a synchronized group.

    Raises:
        MalformedField: block B does not carry group type 2, version A.
    """
    control = unpack_control(group.b.data, expected_group_type=GROUP_TYPE)

    return Group2A(
        program_identifier=group.a.data,
        traffic_program=control.traffic_program,
        program_type=control.program_type,
        text_ab=bool((control.extra >> 4) & 1),
        segment=control.extra & 0x0F,
        chars=unpack_chars(group.c.data) + unpack_chars(group.d.data),
    )
