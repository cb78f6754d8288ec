"""Field packing shared by the 0A and 2A group codecs.

Block B layout (MSB first):
- Group type (4 bits)
- Version flag (1 bit): 0 = version A, the only version supported
- TP (1 bit): Traffic program
- PTY (5 bits): Program type
- Group-specific (5 bits): TA/MS/DI/segment for 0A, A/B flag/segment for 2A

Alternative frequencies are 8-bit codes in 100 kHz steps above 87.5 MHz.
Text travels one byte per character, two characters per data word.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import MalformedField

FREQUENCY_START = 87.5  # MHz, AF code 0
FREQUENCY_STEP = 0.1  # MHz per AF code step

PS_LENGTH = 8
RT_LENGTH = 64


@dataclass(frozen=True)
class ControlFields:
    """Decoded block B."""

    group_type: int
    version_b: bool
    traffic_program: bool
    program_type: int
    extra: int  # Low 5 group-specific bits


def check_width(field: str, value: int, bits: int) -> int:
    """Return value as int, or raise MalformedField if it does not fit `bits` bits."""
    if isinstance(value, bool):
        value = int(value)
    if not isinstance(value, int) or not 0 <= value < (1 << bits):
        raise MalformedField(field, value, f"must fit {bits} bits (0-{(1 << bits) - 1})")
    return value


def pack_control(fields: ControlFields) -> int:
    """Pack block B into its 16-bit data word."""
    return (
        (check_width("group type", fields.group_type, 4) << 12)
        | (check_width("version flag", fields.version_b, 1) << 11)
        | (check_width("traffic program", fields.traffic_program, 1) << 10)
        | (check_width("program type", fields.program_type, 5) << 5)
        | check_width("group-specific bits", fields.extra, 5)
    )


def unpack_control(word: int, expected_group_type: int | None = None) -> ControlFields:
    """Unpack block B, optionally asserting the group type number."""
    fields = ControlFields(
        group_type=(word >> 12) & 0x0F,
        version_b=bool((word >> 11) & 1),
        traffic_program=bool((word >> 10) & 1),
        program_type=(word >> 5) & 0x1F,
        extra=word & 0x1F,
    )
    if expected_group_type is not None and fields.group_type != expected_group_type:
        raise MalformedField(
            "group type", fields.group_type, f"expected {expected_group_type}A"
        )
    if fields.version_b:
        raise MalformedField("version flag", 1, "only version A groups are supported")
    return fields


def af_to_raw(mhz: float) -> int:
    """Convert a frequency in MHz to its 8-bit AF code."""
    steps = (mhz - FREQUENCY_START) / FREQUENCY_STEP
    if not math.isfinite(steps):
        raise MalformedField("alternative frequency", mhz, "must be a finite frequency in MHz")
    raw = round(steps)
    if not 0 <= raw <= 0xFF:
        raise MalformedField(
            "alternative frequency", mhz,
            f"must be between {FREQUENCY_START} and {FREQUENCY_START + 0xFF * FREQUENCY_STEP:.1f} MHz",
        )
    return raw


def raw_to_af(raw: int) -> float:
    """Convert an 8-bit AF code to MHz, rounded to 100 kHz."""
    return round(raw / 10.0 + FREQUENCY_START, 1)


def pack_chars(chars: str) -> int:
    """Pack two characters into a data word, first character in the high byte."""
    if len(chars) != 2:
        raise MalformedField("text segment", chars, "must be 2 characters")
    codes = [ord(ch) for ch in chars]
    for ch, code in zip(chars, codes):
        if code > 0xFF:
            raise MalformedField("character", ch, "must be a single-byte character")
    return (codes[0] << 8) | codes[1]


def unpack_chars(word: int) -> str:
    """Two characters from a data word, high byte first."""
    return chr((word >> 8) & 0xFF) + chr(word & 0xFF)


def pad_text(text: str, length: int) -> str:
    """Truncate or space-pad text to exactly `length` characters."""
    return text[:length].ljust(length)
