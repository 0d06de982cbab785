# Copyright Red Hat
#
# ygg/diff/crossfile.py - Yggdrasil cross-file grouping and voting
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Group block matches by file pair and classify each as moved or added.
"""
from typing import Dict, List, Sequence, Set, Tuple
import logging

from ygg import YGG_SUBSYSTEM_DIFF, split_lines

from .blockhash import hash_block
from .difftypes import BlockMatch, BlockWithVote, GroupedMatches

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_diff(msg, *args, **kwargs):
    """A wrapper for diff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": YGG_SUBSYSTEM_DIFF}, **kwargs)


def group_and_vote(
    matches: Sequence[BlockMatch], from_files: Sequence[Tuple[str, str]]
) -> List[GroupedMatches]:
    """
    Group ``matches`` by ``(from_file, to_file)`` and vote on each block.

    The first block whose source content hash is seen (in the order of
    ``matches``) is a move; every later block with the same content, in
    any file pair, is an addition. A block whose source file is not in
    ``from_files`` cannot be hashed and is always a move.

    :param matches: Block matches in orchestrator order.
    :type matches: ``Sequence[BlockMatch]``
    :param from_files: The ``(path, text)`` pairs the matches came from.
    :type from_files: ``Sequence[Tuple[str, str]]``
    :returns: One ``GroupedMatches`` per file pair, sorted by pair.
    :rtype: ``List[GroupedMatches]``
    """
    sources: Dict[str, List[str]] = {}
    for path, text in from_files:
        sources.setdefault(path, split_lines(text or ""))

    groups: Dict[Tuple[str, str], List[BlockWithVote]] = {}
    seen_blocks: Set[int] = set()

    for match in matches:
        lines = sources.get(match.from_file)
        if lines is None:
            _log_debug_diff("No source content for %s", match.from_file)
            is_addition = False
        else:
            block_hash = hash_block(
                lines[match.from_range.start : match.from_range.end]
            )
            is_addition = block_hash in seen_blocks
            seen_blocks.add(block_hash)
        key = (match.from_file, match.to_file)
        groups.setdefault(key, []).append(BlockWithVote(match, is_addition))

    _log_debug_diff(
        "Grouped %d block matches into %d file pairs", len(matches), len(groups)
    )
    return [
        GroupedMatches(from_file, to_file, tuple(groups[(from_file, to_file)]))
        for from_file, to_file in sorted(groups)
    ]


__all__ = ["group_and_vote"]
