"""Recover block roles for the four rows of one group.

Rows may arrive in any order. Each row is tested against roles A, B, C, D
(in that order) by recomputing its checkword; the first role that matches
and is not already taken by an earlier row is assigned. There is no
backtracking across rows. Because every offset word is distinct, an intact
row matches exactly one role, so a collision means two rows carry the same
block, which is reported rather than resolved.
"""

from __future__ import annotations

import logging

from .blocks import BLOCKS_PER_GROUP, GROUP_BITS, Group, Row
from .crc import BLOCK_BITS, TRIAL_ORDER, BlockRole, matching_roles
from .errors import AmbiguousRole, ChecksumMismatch, InvalidLength

logger = logging.getLogger(__name__)


def synchronize(rows: list[Row], group_index: int = 0) -> Group:
    """Place four raw rows at their A/B/C/D positions.

    Args:
        rows: The group's rows in physical (possibly scrambled) order.
        group_index: Position of the group in the packet, for error reports.

    Raises:
        InvalidLength: not exactly four rows.
        ChecksumMismatch: a row matches no role.
        AmbiguousRole: a row only matches a role already claimed.
    """
    if len(rows) != BLOCKS_PER_GROUP:
        raise InvalidLength(len(rows) * BLOCK_BITS, GROUP_BITS)

    claimed: dict[BlockRole, int] = {}
    for index, row in enumerate(rows):
        matches = matching_roles(row.data, row.checkword)
        if not matches:
            logger.debug("Group %d row %d: no role matches %s", group_index, index, row.bits)
            raise ChecksumMismatch(index, row.data, row.checkword, group_index)

        free = [role for role in matches if role not in claimed]
        if not free:
            role = matches[0]
            raise AmbiguousRole(role.value, claimed[role], index, group_index)
        claimed[free[0]] = index

    order = [claimed[role] for role in TRIAL_ORDER]
    if order != list(range(BLOCKS_PER_GROUP)):
        logger.debug(
            "Group %d: rows arrived as %s",
            group_index,
            "".join(role.value for role in sorted(claimed, key=claimed.get)),
        )

    return Group(*(rows[i] for i in order))


def classify_rows(rows: list[Row]) -> list[BlockRole | None]:
    """First matching role of each row, or None. Never raises on bad checkwords."""
    result: list[BlockRole | None] = []
    for row in rows:
        matches = matching_roles(row.data, row.checkword)
        result.append(matches[0] if matches else None)
    return result
