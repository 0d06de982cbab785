# Copyright Red Hat
#
# ygg/diff/structural.py - Yggdrasil structural block extension
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Boundary aware extension of matching line runs.

A boundary line is a blank line or a line that opens a new logical unit
(a class, function or decorated definition). Extension of a matched block
never absorbs a boundary line so that a block cannot silently span two
unrelated definitions.
"""
from typing import Sequence, Tuple

#: Line prefixes (after leading whitespace is removed) that open a block.
BOUNDARY_PREFIXES = (
    "class ",
    "def ",
    "async def ",
    "fn ",
    "pub fn ",
    "func ",
    "function ",
    "@",
)


def is_boundary(line: str) -> bool:
    """
    Return ``True`` if ``line`` is a structural boundary.

    :param line: The line to test.
    :type line: ``str``
    :returns: ``True`` if the line is blank or starts a new definition.
    :rtype: ``bool``
    """
    stripped = line.lstrip()
    return not stripped or stripped.startswith(BOUNDARY_PREFIXES)


def extend_block(
    from_lines: Sequence[str],
    to_lines: Sequence[str],
    from_start: int,
    to_start: int,
) -> Tuple[int, int, int, int]:
    """
    Grow a match seeded at ``(from_start, to_start)`` in both directions.

    Extension continues while the lines on both sides are equal and stops
    before the first line on either side that is a boundary. A seed line
    that is itself a boundary yields an empty range.

    :param from_lines: The lines of the source file.
    :type from_lines: ``Sequence[str]``
    :param to_lines: The lines of the target file.
    :type to_lines: ``Sequence[str]``
    :param from_start: Index of the seed line in ``from_lines``.
    :type from_start: ``int``
    :param to_start: Index of the seed line in ``to_lines``.
    :type to_start: ``int``
    :returns: Half-open ranges as a ``(f1, f2, t1, t2)`` tuple.
    :rtype: ``Tuple[int, int, int, int]``
    """
    f2, t2 = from_start, to_start
    while f2 < len(from_lines) and t2 < len(to_lines):
        if from_lines[f2] != to_lines[t2]:
            break
        if is_boundary(from_lines[f2]) or is_boundary(to_lines[t2]):
            break
        f2 += 1
        t2 += 1

    if f2 == from_start:
        return from_start, from_start, to_start, to_start

    f1, t1 = from_start, to_start
    while f1 > 0 and t1 > 0:
        prev_from = from_lines[f1 - 1]
        prev_to = to_lines[t1 - 1]
        if prev_from != prev_to:
            break
        if is_boundary(prev_from) or is_boundary(prev_to):
            break
        f1 -= 1
        t1 -= 1

    return f1, f2, t1, t2
