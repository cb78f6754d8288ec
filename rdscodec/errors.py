"""Error kinds raised by the RDS codec.

Every error is deterministic and derived from the input: the same bad bit
string or field value always fails the same way, so nothing here is retried.
All kinds subclass ValueError so callers can treat them as bad input.
"""

from __future__ import annotations


class RdsError(ValueError):
    """Base class for all codec errors."""


class InvalidLength(RdsError):
    """Input size is not a multiple of the block size or not a known packet size."""

    def __init__(self, length: int, expected: tuple[int, ...] | int, multiple: bool = False):
        self.length = length
        self.expected = expected
        self.multiple = multiple
        if isinstance(expected, int):
            wanted = f"a multiple of {expected}" if multiple else str(expected)
        else:
            wanted = " or ".join(str(e) for e in expected)
        super().__init__(f"Invalid binary data size: {length}. Expected: {wanted}")


class ChecksumMismatch(RdsError):
    """A row's checkword matches no block role."""

    def __init__(self, row_index: int, data: int, checkword: int, group_index: int = 0):
        self.row_index = row_index
        self.data = data
        self.checkword = checkword
        self.group_index = group_index
        super().__init__(
            f"Group {group_index}, row {row_index}: checkword {checkword:010b} "
            f"does not match data {data:016b} for any block"
        )


class AmbiguousRole(RdsError):
    """Two rows of one group were recovered as the same block role."""

    def __init__(self, role: str, first_row: int, second_row: int, group_index: int = 0):
        self.role = role
        self.first_row = first_row
        self.second_row = second_row
        self.group_index = group_index
        super().__init__(
            f"Group {group_index}: rows {first_row} and {second_row} "
            f"both match block {role}"
        )


class MalformedField(RdsError):
    """A field value does not fit its bit width or contradicts the group type."""

    def __init__(self, field: str, value, reason: str = ""):
        self.field = field
        self.value = value
        self.reason = reason
        message = f"Invalid {field}: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
