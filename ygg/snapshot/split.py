# Copyright Red Hat
#
# ygg/snapshot/split.py - Yggdrasil snapshot sharding
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Split a snapshot into parts bounded by an estimated token count.
"""
from typing import Callable, List, Optional, Sequence
import math
import os

from ygg import read_text
from ygg.scanner import FileEntry

#: Estimated tokens per whitespace separated word.
TOKENS_PER_WORD = 1.33


def estimate_tokens(text: str) -> int:
    """
    Estimate the number of model tokens in ``text``.

    :param text: The text to estimate.
    :type text: ``str``
    :returns: The estimated token count.
    :rtype: ``int``
    """
    return math.floor(len(text.split()) * TOKENS_PER_WORD + 0.5)


def estimate_file_tokens(path: str) -> int:
    """
    Estimate the number of tokens in the file ``path``.

    :param path: The file to estimate.
    :type path: ``str``
    :returns: The estimated token count, or 0 if the file is unreadable.
    :rtype: ``int``
    """
    text = read_text(path)
    return estimate_tokens(text) if text is not None else 0


def split_files_by_tokens(
    files: Sequence[FileEntry],
    budget: int,
    estimator: Optional[Callable[[str], int]] = None,
) -> List[List[FileEntry]]:
    """
    Partition ``files`` in order into parts of at most ``budget`` tokens.

    A part is closed when adding the next file would exceed the budget. A
    file that is larger than the budget on its own forms a part by itself.

    :param files: The files to partition.
    :type files: ``Sequence[FileEntry]``
    :param budget: The maximum estimated tokens per part.
    :type budget: ``int``
    :param estimator: Token estimator for a path. Defaults to
                      ``estimate_file_tokens()``.
    :type estimator: ``Optional[Callable[[str], int]]``
    :returns: The list of parts.
    :rtype: ``List[List[FileEntry]]``
    """
    estimator = estimator or estimate_file_tokens
    parts: List[List[FileEntry]] = []
    current: List[FileEntry] = []
    current_tokens = 0

    for entry in files:
        tokens = estimator(entry.path)
        if current and current_tokens + tokens > budget:
            parts.append(current)
            current = []
            current_tokens = 0
        current_tokens += tokens
        current.append(entry)

    if current:
        parts.append(current)
    return parts


def part_path(out: str, index: int) -> str:
    """
    Return the output path for part ``index`` (one-based) of ``out``.

    :param out: The output path given by the user.
    :type out: ``str``
    :param index: The one-based part number.
    :type index: ``int``
    :returns: ``out`` with ".partN" inserted before its extension.
    :rtype: ``str``
    """
    base, ext = os.path.splitext(out)
    return f"{base}.part{index}{ext}"


__all__ = [
    "TOKENS_PER_WORD",
    "estimate_tokens",
    "estimate_file_tokens",
    "split_files_by_tokens",
    "part_path",
]
