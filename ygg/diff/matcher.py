# Copyright Red Hat
#
# ygg/diff/matcher.py - Yggdrasil cross-file block matcher
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Cross-file block matching.

An inverted index of line hashes over the target file set is used to find
candidate seed lines for every line of the source file set. Each seed is
grown with ``extend_block()`` and recorded if it reaches the minimum block
length for the current pass. Lines that belong to a recorded block are
marked visited and are not reused.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple
import logging

from ygg import YGG_SUBSYSTEM_DIFF, split_lines

from .blockhash import hash_line
from .difftypes import BlockMatch, LineRange
from .structural import extend_block

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

#: Minimum block lengths used by ``match_blocks_multi()``, longest first.
DEFAULT_THRESHOLDS = (5, 3, 1)

#: A ``(path, text)`` pair.
FileText = Tuple[str, str]

#: A ``(file index, line index)`` pair.
LineOccurrence = Tuple[int, int]


def _log_debug_diff(msg, *args, **kwargs):
    """A wrapper for diff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": YGG_SUBSYSTEM_DIFF}, **kwargs)


class SplitFile:
    """
    A file path and the lines of its content.
    """

    __slots__ = ("path", "lines")

    def __init__(self, path: str, text: str):
        self.path = path
        self.lines = split_lines(text or "")

    def __repr__(self):
        return f"SplitFile({self.path!r}, <{len(self.lines)} lines>)"


def split_files(files: Iterable[FileText]) -> List[SplitFile]:
    """
    Split the text of each ``(path, text)`` pair in ``files`` into lines.

    :param files: The files to split.
    :type files: ``Iterable[FileText]``
    :returns: A list of ``SplitFile`` objects in input order.
    :rtype: ``List[SplitFile]``
    """
    return [SplitFile(path, text) for path, text in files]


class LineIndex:
    """
    Inverted index from line hash to the occurrences of that line in a
    set of files. Occurrences are kept in file order then line order.
    """

    def __init__(self, files: Sequence[SplitFile]):
        """
        Build a new ``LineIndex`` over ``files``.

        :param files: The files to index.
        :type files: ``Sequence[SplitFile]``
        """
        index: Dict[int, List[LineOccurrence]] = defaultdict(list)
        for file_index, split in enumerate(files):
            for line_index, line in enumerate(split.lines):
                index[hash_line(line)].append((file_index, line_index))
        self._index = dict(index)
        self.nr_lines = sum(len(split.lines) for split in files)

    def __len__(self) -> int:
        return len(self._index)

    def lookup(self, line: str) -> Sequence[LineOccurrence]:
        """
        Return the indexed occurrences of ``line``.

        :param line: The line to look up.
        :type line: ``str``
        :returns: A possibly empty sequence of ``(file, line)`` pairs.
        :rtype: ``Sequence[LineOccurrence]``
        """
        return self._index.get(hash_line(line), ())


class VisitedLines:
    """
    Source and target lines already claimed by a recorded block.
    """

    def __init__(self):
        self.from_lines: Set[LineOccurrence] = set()
        self.to_lines: Set[LineOccurrence] = set()

    def mark(
        self, from_file: int, from_range: LineRange, to_file: int, to_range: LineRange
    ):
        """
        Mark every line of ``from_range`` and ``to_range`` as visited.
        """
        self.from_lines.update(
            (from_file, i) for i in range(from_range.start, from_range.end)
        )
        self.to_lines.update((to_file, i) for i in range(to_range.start, to_range.end))


def _match_pass(
    from_split: Sequence[SplitFile],
    to_split: Sequence[SplitFile],
    index: LineIndex,
    visited: VisitedLines,
    min_len: int,
) -> List[BlockMatch]:
    """
    Run one matching pass at ``min_len`` using ``index`` and ``visited``.
    """
    matches = []
    for from_index, from_file in enumerate(from_split):
        for line_index, line in enumerate(from_file.lines):
            if (from_index, line_index) in visited.from_lines:
                continue
            for to_index, to_line in index.lookup(line):
                if (to_index, to_line) in visited.to_lines:
                    continue
                to_file = to_split[to_index]
                f1, f2, t1, t2 = extend_block(
                    from_file.lines, to_file.lines, line_index, to_line
                )
                if f2 - f1 < min_len:
                    continue
                match = BlockMatch(
                    from_file.path, LineRange(f1, f2), to_file.path, LineRange(t1, t2)
                )
                visited.mark(from_index, match.from_range, to_index, match.to_range)
                matches.append(match)
    _log_debug_diff("Found %d block matches with min_len=%d", len(matches), min_len)
    return matches


def _check_min_len(min_len: int):
    if min_len < 1:
        raise ValueError(f"Invalid minimum block length: {min_len}")


def match_blocks(
    from_files: Sequence[FileText],
    to_files: Sequence[FileText],
    min_len: int,
    visited: Optional[VisitedLines] = None,
) -> List[BlockMatch]:
    """
    Find non-overlapping blocks of at least ``min_len`` identical lines
    shared between ``from_files`` and ``to_files``.

    Source files are scanned in input order, lines in ascending order. A
    source line may be matched against several distinct target lines at
    the same scan position; once it belongs to a recorded block it is
    skipped on later iterations.

    :param from_files: Ordered ``(path, text)`` pairs to search from.
    :type from_files: ``Sequence[FileText]``
    :param to_files: Ordered ``(path, text)`` pairs to search in.
    :type to_files: ``Sequence[FileText]``
    :param min_len: The minimum block length to record.
    :type min_len: ``int``
    :param visited: Optional visited state to consult and update.
    :type visited: ``Optional[VisitedLines]``
    :returns: The block matches found, in scan order.
    :rtype: ``List[BlockMatch]``
    :raises: ``ValueError`` if ``min_len`` is less than one.
    """
    _check_min_len(min_len)
    from_split = split_files(from_files)
    to_split = split_files(to_files)
    index = LineIndex(to_split)
    return _match_pass(
        from_split, to_split, index, visited or VisitedLines(), min_len
    )


def match_blocks_multi(
    from_files: Sequence[FileText],
    to_files: Sequence[FileText],
    thresholds: Sequence[int] = DEFAULT_THRESHOLDS,
    carry_visited: bool = True,
) -> List[BlockMatch]:
    """
    Run the block matcher once per threshold in ``thresholds`` and
    concatenate the results in threshold order.

    With ``carry_visited=True`` lines claimed by a longer block in an
    earlier pass are not searched again by later passes, so the result
    contains no overlapping ranges. With ``carry_visited=False`` every
    pass starts from a fresh index and visited state and a block may be
    reported again, in whole or in part, at each lower threshold.

    :param from_files: Ordered ``(path, text)`` pairs to search from.
    :type from_files: ``Sequence[FileText]``
    :param to_files: Ordered ``(path, text)`` pairs to search in.
    :type to_files: ``Sequence[FileText]``
    :param thresholds: Minimum block lengths, one per pass.
    :type thresholds: ``Sequence[int]``
    :param carry_visited: Share visited lines between passes.
    :type carry_visited: ``bool``
    :returns: The block matches from every pass.
    :rtype: ``List[BlockMatch]``
    """
    for min_len in thresholds:
        _check_min_len(min_len)

    if not carry_visited:
        matches = []
        for min_len in thresholds:
            matches.extend(match_blocks(from_files, to_files, min_len))
        return matches

    from_split = split_files(from_files)
    to_split = split_files(to_files)
    index = LineIndex(to_split)
    visited = VisitedLines()
    _log_debug_diff(
        "Indexed %d distinct lines from %d target files",
        len(index),
        len(to_split),
    )

    matches = []
    for min_len in thresholds:
        matches.extend(_match_pass(from_split, to_split, index, visited, min_len))
    return matches


__all__ = [
    "DEFAULT_THRESHOLDS",
    "LineIndex",
    "VisitedLines",
    "SplitFile",
    "split_files",
    "match_blocks",
    "match_blocks_multi",
]
