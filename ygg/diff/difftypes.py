# Copyright Red Hat
#
# ygg/diff/difftypes.py - Yggdrasil block match types
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Block match value types.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class LineRange:
    """
    A half-open ``[start, end)`` interval of zero-based line indices.
    """

    #: First line of the range
    start: int
    #: One past the last line of the range
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, line: int) -> bool:
        return self.start <= line < self.end

    def display(self) -> str:
        """
        Return this range as a one-based, inclusive ``start–end`` string.

        :returns: The display form of this range.
        :rtype: ``str``
        """
        return f"{self.start + 1}–{self.end}"

    def to_dict(self) -> Dict[str, int]:
        """Return this range as a dictionary."""
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class BlockMatch:
    """
    A run of identical lines found in a source and a target file.
    """

    #: Path of the file the block was found in
    from_file: str
    #: Lines of the block in ``from_file``
    from_range: LineRange
    #: Path of the file the block was copied or moved to
    to_file: str
    #: Lines of the block in ``to_file``
    to_range: LineRange

    def __post_init__(self):
        if len(self.from_range) != len(self.to_range):
            raise ValueError(
                f"Mismatched block lengths: {self.from_range} != {self.to_range}"
            )
        if len(self.from_range) < 1:
            raise ValueError(f"Empty block match for {self.from_file}")

    def __len__(self) -> int:
        return len(self.from_range)

    def to_dict(self) -> Dict[str, Any]:
        """Return this block match as a dictionary."""
        return {
            "from_file": self.from_file,
            "from_range": self.from_range.to_dict(),
            "to_file": self.to_file,
            "to_range": self.to_range.to_dict(),
        }


@dataclass(frozen=True)
class BlockWithVote:
    """
    A ``BlockMatch`` tagged with the outcome of duplicate voting.
    """

    #: The matched block
    block: BlockMatch
    #: ``True`` if identical block content was already seen
    is_addition: bool

    @property
    def tag(self) -> str:
        """The annotation tag for this block: ``ADDED`` or ``MOVED``."""
        return "ADDED" if self.is_addition else "MOVED"

    def to_dict(self) -> Dict[str, Any]:
        """Return this vote as a dictionary."""
        return {"block": self.block.to_dict(), "is_addition": self.is_addition}


@dataclass(frozen=True)
class GroupedMatches:
    """
    The voted block matches for one ``(from_file, to_file)`` pair.
    """

    #: Source file of every block in this group
    from_file: str
    #: Target file of every block in this group
    to_file: str
    #: Voted blocks in orchestrator order
    blocks: Tuple[BlockWithVote, ...] = field(default_factory=tuple)

    @property
    def key(self) -> Tuple[str, str]:
        """The ``(from_file, to_file)`` pair for this group."""
        return (self.from_file, self.to_file)

    def to_dict(self) -> Dict[str, Any]:
        """Return this group as a dictionary."""
        return {
            "from_file": self.from_file,
            "to_file": self.to_file,
            "blocks": [vote.to_dict() for vote in self.blocks],
        }


def blocks_covering(group: GroupedMatches, line: int) -> List[BlockWithVote]:
    """
    Return the votes in ``group`` whose source range contains ``line``.

    :param group: The group to search.
    :type group: ``GroupedMatches``
    :param line: A zero-based line index in ``group.from_file``.
    :type line: ``int``
    :returns: Covering votes in group order.
    :rtype: ``List[BlockWithVote]``
    """
    return [vote for vote in group.blocks if line in vote.block.from_range]
