# Copyright Red Hat
#
# ygg/scanner/patterns.py - Yggdrasil path filter patterns
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Path filter patterns and pattern files.
"""
from typing import Iterable, List, Optional, Sequence, TextIO
from fnmatch import fnmatchcase
import logging
import sys
import os

from ygg import YGG_ENCODING, YGG_SUBSYSTEM_SCAN

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

#: Pattern file name that reads patterns from standard input.
STDIN_PATTERNS = "-"


def _log_debug_scan(msg, *args, **kwargs):
    """A wrapper for scan subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": YGG_SUBSYSTEM_SCAN}, **kwargs)


def parse_patterns(lines: Iterable[str]) -> List[str]:
    """
    Return the patterns in ``lines``, skipping blank lines and comments.

    :param lines: Pattern lines.
    :type lines: ``Iterable[str]``
    :returns: The stripped, non-comment patterns.
    :rtype: ``List[str]``
    """
    patterns = []
    for line in lines:
        line = line.strip()
        if line and not line.startswith("#"):
            patterns.append(line)
    return patterns


def load_patterns_file(path: str, stdin: Optional[TextIO] = None) -> List[str]:
    """
    Load filter patterns from ``path``.

    If ``path`` is "-" patterns are read from ``stdin`` (``sys.stdin`` by
    default). A missing or unreadable file yields no patterns.

    :param path: The pattern file to read.
    :type path: ``str``
    :param stdin: Stream to read when ``path`` is "-".
    :type stdin: ``Optional[TextIO]``
    :returns: The patterns found.
    :rtype: ``List[str]``
    """
    if path == STDIN_PATTERNS:
        stream = stdin or sys.stdin
        patterns = parse_patterns(stream.read().splitlines())
        if not patterns:
            _log_warn("No patterns read from standard input")
        return patterns

    try:
        with open(path, "r", encoding=YGG_ENCODING) as fp:
            patterns = parse_patterns(fp.read().splitlines())
    except (OSError, UnicodeDecodeError) as err:
        _log_warn("Could not read pattern file %s: %s", path, err)
        return []

    _log_debug_scan("Loaded %d patterns from %s", len(patterns), path)
    return patterns


def _strip_dot_slash(value: str) -> str:
    return value[2:] if value.startswith("./") else value


def matches_filters(path: str, filters: Sequence[str], default: bool) -> bool:
    """
    Test ``path`` against a list of filter patterns.

    A pattern matches if, after removing any leading "./" from both the
    path and the pattern, it is equal to the path or its base name, is a
    prefix of the path, or is a glob matching the path or its base name.

    :param path: The path to test.
    :type path: ``str``
    :param filters: The patterns to test against.
    :type filters: ``Sequence[str]``
    :param default: The result to return if ``filters`` is empty.
    :type default: ``bool``
    :returns: ``True`` if any pattern matches.
    :rtype: ``bool``
    """
    if not filters:
        return default

    norm_path = _strip_dot_slash(path)
    base = os.path.basename(norm_path)

    for pattern in filters:
        norm_filter = _strip_dot_slash(pattern)
        if not norm_filter:
            continue
        if norm_filter in (norm_path, base) or norm_path.startswith(norm_filter):
            return True
        if fnmatchcase(norm_path, norm_filter) or fnmatchcase(base, norm_filter):
            return True
    return False


__all__ = [
    "STDIN_PATTERNS",
    "load_patterns_file",
    "matches_filters",
    "parse_patterns",
]
