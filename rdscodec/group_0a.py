"""Group 0A: basic tuning and switching information.

Block layout:
- A: PI code (16 bits)
- B: control fields + TA (1) | MS (1) | DI (1) | PS segment address (2)
- C: two alternative frequency codes (8 bits each)
- D: two Program Service characters

Four groups (segments 0-3) carry the full 8-character PS name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .blocks import Group, make_row
from .crc import BlockRole
from .fields import (
    ControlFields,
    af_to_raw,
    check_width,
    pack_chars,
    pack_control,
    raw_to_af,
    unpack_chars,
    unpack_control,
)

logger = logging.getLogger(__name__)

GROUP_TYPE = 0
SEGMENTS = 4


@dataclass(frozen=True)
class Group0A:
    """Fields carried by one 0A group."""

    program_identifier: int
    traffic_program: bool
    program_type: int
    traffic_announcement: bool
    music: bool  # False = speech
    decoder_id: bool
    segment: int  # 0-3, PS characters 2*segment and 2*segment + 1
    af: tuple[float, float]  # MHz
    chars: str  # 2 characters


def encode_group_0a(msg: Group0A) -> Group:
    """Build the four blocks of a 0A group with their checkwords."""
    pi = check_width("program identifier", msg.program_identifier, 16)
    segment = check_width("PS segment", msg.segment, 2)

    extra = (
        (check_width("traffic announcement", msg.traffic_announcement, 1) << 4)
        | (check_width("music/speech", msg.music, 1) << 3)
        | (check_width("decoder identifier", msg.decoder_id, 1) << 2)
        | segment
    )
    block_b = pack_control(ControlFields(
        group_type=GROUP_TYPE,
        version_b=False,
        traffic_program=msg.traffic_program,
        program_type=msg.program_type,
        extra=extra,
    ))

    af1, af2 = msg.af
    block_c = (af_to_raw(af1) << 8) | af_to_raw(af2)
    block_d = pack_chars(msg.chars)

    logger.debug(
        "0A segment %d: A=%s B=%s C=%s D=%s",
        segment, *(format(word, "016b") for word in (pi, block_b, block_c, block_d)),
    )
    return Group(
        a=make_row(pi, BlockRole.A),
        b=make_row(block_b, BlockRole.B),
        c=make_row(block_c, BlockRole.C),
        d=make_row(block_d, BlockRole.D),
    )


def decode_group_0a(group: Group) -> Group0A:
    """Extract the 0A fields from a synchronized group.

    Raises:
        MalformedField: block B does not carry group type 0, version A.
    """
    control = unpack_control(group.b.data, expected_group_type=GROUP_TYPE)
    af_word = group.c.data

    return Group0A(
        program_identifier=group.a.data,
        traffic_program=control.traffic_program,
        program_type=control.program_type,
        traffic_announcement=bool((control.extra >> 4) & 1),
        music=bool((control.extra >> 3) & 1),
        decoder_id=bool((control.extra >> 2) & 1),
        segment=control.extra & 0x03,
        af=(raw_to_af((af_word >> 8) & 0xFF), raw_to_af(af_word & 0xFF)),
        chars=unpack_chars(group.d.data),
    )
