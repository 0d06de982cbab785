# Copyright Red Hat
#
# ygg/diff/__init__.py - Yggdrasil diff package
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Cross-file diff package.

Compares two sets of files, reporting added, removed and modified files
together with blocks of identical lines that were moved or copied between
files. The main entry points are ``DiffEngine`` and ``DiffOptions``; the
block matching pipeline is available directly as ``match_blocks_multi()``
and ``group_and_vote()``.
"""
from .blockhash import hash_block, hash_line
from .crossfile import group_and_vote
from .difftypes import BlockMatch, BlockWithVote, GroupedMatches, LineRange
from .engine import DiffEngine, DiffResults, SourceFile
from .formatters import DiffCliFormatter, DiffMarkdownFormatter, get_diff_formatter
from .inline import InlineDiff
from .matcher import match_blocks, match_blocks_multi
from .options import DiffOptions
from .structural import extend_block, is_boundary

__all__ = [
    "BlockMatch",
    "BlockWithVote",
    "DiffCliFormatter",
    "DiffEngine",
    "DiffMarkdownFormatter",
    "DiffOptions",
    "DiffResults",
    "GroupedMatches",
    "InlineDiff",
    "LineRange",
    "SourceFile",
    "extend_block",
    "get_diff_formatter",
    "group_and_vote",
    "hash_block",
    "hash_line",
    "is_boundary",
    "match_blocks",
    "match_blocks_multi",
]
