# Copyright Red Hat
#
# ygg/diff/blockhash.py - Yggdrasil line and block hashing
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Fixed width content hashes for single lines and blocks of lines.
"""
from typing import Sequence
import hashlib

#: Size in bytes of line and block digests.
HASH_DIGEST_SIZE = 8

#: Separator used to join the lines of a block before hashing.
BLOCK_SEPARATOR = "\n"


def _digest(text: str) -> int:
    """
    Return the truncated BLAKE2b digest of ``text`` as an unsigned integer.

    :param text: The text to hash.
    :type text: ``str``
    :returns: A 64-bit unsigned hash value.
    :rtype: ``int``
    """
    digest = hashlib.blake2b(text.encode("utf8"), digest_size=HASH_DIGEST_SIZE)
    return int.from_bytes(digest.digest(), "little")


def hash_line(text: str) -> int:
    """
    Return the content hash of a single line.

    :param text: The line to hash, without its line terminator.
    :type text: ``str``
    :returns: A 64-bit unsigned hash value.
    :rtype: ``int``
    """
    return _digest(text)


def hash_block(lines: Sequence[str]) -> int:
    """
    Return the content hash of a block of lines.

    The lines are joined with a single newline before hashing so that
    the hash of a block depends on the joined text and not on the hashes
    of its individual lines.

    :param lines: The lines making up the block.
    :type lines: ``Sequence[str]``
    :returns: A 64-bit unsigned hash value.
    :rtype: ``int``
    """
    return _digest(BLOCK_SEPARATOR.join(lines))
