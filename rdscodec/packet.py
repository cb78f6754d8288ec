"""Assemble and disassemble complete RDS packets.

Encode: one group per text segment, segment 0 first in the bit string.
Decode: validate the length, cut into rows, synchronize and decode each
group, then place every text segment at the offset given by its own segment
address (not by the order the groups arrived in).

Output: typed dataclasses (ProgramService for 0A, RadioText for 2A), which
format_lines() renders as "KEY: value" lines and to_dict() as JSON-ready data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .blocks import GroupType, parse_rows, split_groups
from .errors import InvalidLength, MalformedField
from .fields import PS_LENGTH, RT_LENGTH, pad_text
from .group_0a import Group0A, decode_group_0a, encode_group_0a
from .group_2a import Group2A, decode_group_2a, encode_group_2a
from .sync import synchronize

logger = logging.getLogger(__name__)

_PS_CHARS_PER_GROUP = PS_LENGTH // GroupType.ZERO_A.groups
_RT_CHARS_PER_GROUP = RT_LENGTH // GroupType.TWO_A.groups


@dataclass(frozen=True)
class ProgramService:
    """Decoded 0A packet: station header plus the 8-character PS name."""

    program_identifier: int
    traffic_program: bool
    program_type: int
    traffic_announcement: bool
    music: bool
    decoder_id: bool
    af: tuple[float, float]
    name: str

    @property
    def group_type(self) -> GroupType:
        return GroupType.ZERO_A


@dataclass(frozen=True)
class RadioText:
    """Decoded 2A packet: station header plus the 64-character Radio Text."""

    program_identifier: int
    traffic_program: bool
    program_type: int
    text_ab: bool
    text: str

    @property
    def group_type(self) -> GroupType:
        return GroupType.TWO_A


DecodedPacket = ProgramService | RadioText


# --- Encoding ---


def encode_program_service(
    program_identifier: int,
    program_type: int,
    traffic_program: bool,
    traffic_announcement: bool,
    music: bool,
    af: tuple[float, float],
    name: str,
    decoder_id: bool = False,
) -> str:
    """Encode a PS name into a 416-bit 0A packet.

    The name is space-padded (or truncated) to 8 characters. Every group
    repeats the same PI, flags and AF pair; only the segment address and
    the two PS characters change.
    """
    name = pad_text(name, PS_LENGTH)
    bits = []
    for segment in range(GroupType.ZERO_A.groups):
        start = segment * _PS_CHARS_PER_GROUP
        group = encode_group_0a(Group0A(
            program_identifier=program_identifier,
            traffic_program=traffic_program,
            program_type=program_type,
            traffic_announcement=traffic_announcement,
            music=music,
            decoder_id=decoder_id,
            segment=segment,
            af=af,
            chars=name[start:start + _PS_CHARS_PER_GROUP],
        ))
        bits.append(group.bits)
    return "".join(bits)


def encode_radio_text(
    program_identifier: int,
    program_type: int,
    traffic_program: bool,
    text_ab: bool,
    text: str,
) -> str:
    """Encode Radio Text into a 1664-bit 2A packet (space-padded to 64 characters)."""
    text = pad_text(text, RT_LENGTH)
    bits = []
    for segment in range(GroupType.TWO_A.groups):
        start = segment * _RT_CHARS_PER_GROUP
        group = encode_group_2a(Group2A(
            program_identifier=program_identifier,
            traffic_program=traffic_program,
            program_type=program_type,
            text_ab=text_ab,
            segment=segment,
            chars=text[start:start + _RT_CHARS_PER_GROUP],
        ))
        bits.append(group.bits)
    return "".join(bits)


# --- Decoding ---


def detect_group_type(bits: str) -> GroupType:
    """Group type implied by the packet length."""
    for gt in GroupType:
        if len(bits) == gt.packet_bits:
            return gt
    raise InvalidLength(len(bits), tuple(gt.packet_bits for gt in GroupType))


def _fold_segments(messages: list, segments: int) -> list:
    """Order per-group messages by their segment address.

    Raises MalformedField if an address repeats or never appears.
    """
    slots: list = [None] * segments
    for msg in messages:
        if slots[msg.segment] is not None:
            raise MalformedField("segment address", msg.segment, "appears more than once")
        slots[msg.segment] = msg
    missing = [i for i, msg in enumerate(slots) if msg is None]
    if missing:
        raise MalformedField("segment address", missing[0], "missing from packet")
    return slots


def decode_packet(bits: str) -> DecodedPacket:
    """Decode a complete 0A or 2A packet.

    Raises:
        InvalidLength: length is not 416 or 1664 bits.
        MalformedField: bad characters, wrong group type in block B, or
            a segment address repeated or missing.
        ChecksumMismatch / AmbiguousRole: a group could not be synchronized.
    """
    group_type = detect_group_type(bits)
    rows = parse_rows(bits)
    groups = [synchronize(raw, i) for i, raw in enumerate(split_groups(rows))]
    logger.debug("Synchronized %d %s groups", len(groups), group_type.label)

    if group_type is GroupType.ZERO_A:
        slots = _fold_segments([decode_group_0a(g) for g in groups], group_type.groups)
        head = slots[0]
        return ProgramService(
            program_identifier=head.program_identifier,
            traffic_program=head.traffic_program,
            program_type=head.program_type,
            traffic_announcement=head.traffic_announcement,
            music=head.music,
            decoder_id=head.decoder_id,
            af=head.af,
            name="".join(msg.chars for msg in slots),
        )

    slots = _fold_segments([decode_group_2a(g) for g in groups], group_type.groups)
    head = slots[0]
    return RadioText(
        program_identifier=head.program_identifier,
        traffic_program=head.traffic_program,
        program_type=head.program_type,
        text_ab=head.text_ab,
        text="".join(msg.chars for msg in slots),
    )


# --- Output ---


def to_dict(result: DecodedPacket) -> dict:
    """Decoded fields keyed by their RDS abbreviations, text trimmed."""
    out = {
        "PI": result.program_identifier,
        "GT": result.group_type.label,
        "TP": int(result.traffic_program),
        "PTY": result.program_type,
    }
    if isinstance(result, ProgramService):
        out["TA"] = "Active" if result.traffic_announcement else "Inactive"
        out["MS"] = "Music" if result.music else "Speech"
        out["DI"] = int(result.decoder_id)
        out["AF"] = list(result.af)
        out["PS"] = result.name.strip()
    else:
        out["A/B"] = int(result.text_ab)
        out["RT"] = result.text.strip()
    return out


def format_lines(result: DecodedPacket) -> list[str]:
    """Render decoded fields as "KEY: value" lines.

    AF is printed with one decimal place; PS and RT are quoted.
    """
    fields = to_dict(result)
    lines = []
    for key, value in fields.items():
        if key == "AF":
            value = ", ".join(f"{f:.1f}" for f in value)
        elif key in ("PS", "RT"):
            value = f'"{value}"'
        lines.append(f"{key}: {value}")
    return lines
