# Copyright Red Hat
#
# ygg/diff/inline.py - Yggdrasil per-file line diffs
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Line based diffs between two versions of the same file.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
import logging
import difflib

from ygg import YGG_SUBSYSTEM_DIFF, split_lines
from ygg.term import TermControl

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

#: Default number of unchanged context lines around each hunk.
DEFAULT_CONTEXT_LINES = 3


def _log_debug_diff(msg, *args, **kwargs):
    """A wrapper for diff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": YGG_SUBSYSTEM_DIFF}, **kwargs)


def _count_prefixed(lines: Tuple[str, ...], prefix: str) -> int:
    return len(
        [ln for ln in lines if ln.startswith(prefix) and not ln.startswith(3 * prefix)]
    )


@dataclass(frozen=True)
class InlineDiff:
    """
    A unified diff between two versions of the file ``key``.
    """

    #: Path relative to the compared roots
    key: str
    #: Path of the original file
    from_path: str
    #: Path of the updated file
    to_path: str
    #: Unified diff lines without line terminators
    diff_lines: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_changes(self) -> bool:
        """``True`` if the two versions differ."""
        return len(self.diff_lines) > 0

    @property
    def additions(self) -> int:
        """The number of added lines."""
        return _count_prefixed(self.diff_lines, "+")

    @property
    def deletions(self) -> int:
        """The number of deleted lines."""
        return _count_prefixed(self.diff_lines, "-")

    @property
    def summary(self) -> str:
        """A short ``"N deletions, M additions"`` summary."""
        return f"{self.deletions} deletions, {self.additions} additions"

    def to_dict(self) -> Dict[str, Any]:
        """Return this diff as a dictionary."""
        return {
            "key": self.key,
            "from_path": self.from_path,
            "to_path": self.to_path,
            "diff_lines": list(self.diff_lines),
            "summary": self.summary,
        }


def generate_inline_diff(
    key: str,
    from_path: str,
    from_text: str,
    to_path: str,
    to_text: str,
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> InlineDiff:
    """
    Generate a unified diff of ``from_text`` and ``to_text``.

    :param key: The relative path shared by both files.
    :type key: ``str``
    :param from_path: Path of the original file.
    :type from_path: ``str``
    :param from_text: Content of the original file.
    :type from_text: ``str``
    :param to_path: Path of the updated file.
    :type to_path: ``str``
    :param to_text: Content of the updated file.
    :type to_text: ``str``
    :param context_lines: Number of context lines around each hunk.
    :type context_lines: ``int``
    :returns: A new ``InlineDiff``.
    :rtype: ``InlineDiff``
    """
    diff_lines = tuple(
        difflib.unified_diff(
            split_lines(from_text),
            split_lines(to_text),
            fromfile=from_path,
            tofile=to_path,
            n=context_lines,
            lineterm="",
        )
    )
    inline = InlineDiff(key, from_path, to_path, diff_lines)
    _log_debug_diff("Inline diff for %s: %s", key, inline.summary)
    return inline


def render_inline_diff(inline: InlineDiff, tc: Optional[TermControl]) -> str:
    """
    Render ``inline`` as unified diff text.

    :param inline: The diff to render.
    :type inline: ``InlineDiff``
    :param tc: An optional ``TermControl`` instance to use for rendering color
               output.
    :type tc: ``Optional[TermControl]``
    :returns: Rendered unified diff string.
    :rtype: ``str``
    """

    def _hunk_header(header: str) -> str:
        before, sep, after = header.partition(" @@")
        if not sep:
            return header
        return tc.CYAN + before + " @@" + tc.NORMAL + after

    if not inline.has_changes:
        return ""

    if not tc:
        return "\n".join(inline.diff_lines)

    rendered = []
    for line in inline.diff_lines:
        if line.startswith(("---", "+++")):
            rendered.append(tc.BOLD + line + tc.NORMAL)
        elif line.startswith("-"):
            rendered.append(tc.RED + line + tc.NORMAL)
        elif line.startswith("+"):
            rendered.append(tc.GREEN + line + tc.NORMAL)
        elif line.startswith("@@"):
            rendered.append(_hunk_header(line))
        else:
            rendered.append(line)
    return "\n".join(rendered)


__all__ = [
    "DEFAULT_CONTEXT_LINES",
    "InlineDiff",
    "generate_inline_diff",
    "render_inline_diff",
]
