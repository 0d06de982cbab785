# Copyright Red Hat
#
# ygg/diff/engine.py - Yggdrasil cross-file diff engine
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Cross-file diff engine
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging
import json

from ygg import YGG_SUBSYSTEM_DIFF, read_text, split_lines
from ygg.scanner import expand_paths
from ygg.term import TermControl

from .crossfile import group_and_vote
from .difftypes import GroupedMatches
from .inline import InlineDiff, generate_inline_diff
from .matcher import match_blocks_multi
from .options import DiffOptions

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_diff(msg, *args, **kwargs):
    """A wrapper for diff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": YGG_SUBSYSTEM_DIFF}, **kwargs)


class SourceFile:
    """
    A file taking part in a comparison.
    """

    __slots__ = ("path", "key", "text")

    def __init__(self, path: str, key: str, text: str):
        """
        Initialise a new ``SourceFile``.

        :param path: The path the file was read from.
        :type path: ``str``
        :param key: The path relative to the root it was found under, used
                    to pair up versions of the same file.
        :type key: ``str``
        :param text: The file content, or the empty string if unreadable.
        :type text: ``str``
        """
        self.path = path
        self.key = key
        self.text = text

    def __repr__(self):
        return f"SourceFile({self.path!r}, {self.key!r}, <{len(self.text)} chars>)"

    def __eq__(self, other):
        if not isinstance(other, SourceFile):
            return NotImplemented
        return (self.path, self.key, self.text) == (other.path, other.key, other.text)

    @property
    def pair(self) -> Tuple[str, str]:
        """This file as a ``(path, text)`` pair."""
        return (self.path, self.text)


def load_source_files(paths: Sequence[str]) -> List[SourceFile]:
    """
    Expand ``paths`` and read the content of every file found.

    Files that cannot be read as UTF-8 text are included with empty
    content so that they still take part in added and removed reporting.

    :param paths: File and directory paths.
    :type paths: ``Sequence[str]``
    :returns: A list of ``SourceFile`` objects in expansion order.
    :rtype: ``List[SourceFile]``
    """
    sources = []
    for path, key in expand_paths(paths):
        text = read_text(path)
        if text is None:
            _log_warn("Could not read %s: treating as empty", path)
            text = ""
        sources.append(SourceFile(path, key, text))
    return sources


class DiffResults:
    """
    The outcome of comparing two sets of files.
    """

    def __init__(
        self,
        from_files: Sequence[SourceFile],
        to_files: Sequence[SourceFile],
        removed: List[SourceFile],
        added: List[SourceFile],
        modified: List[InlineDiff],
        groups: List[GroupedMatches],
    ):
        self.from_files = list(from_files)
        self.to_files = list(to_files)
        self.removed = removed
        self.added = added
        self.modified = modified
        self.groups = groups
        self._lines: Dict[str, List[str]] = {}

    def __len__(self) -> int:
        return len(self.removed) + len(self.added) + len(self.modified)

    def __bool__(self) -> bool:
        return bool(len(self) or self.groups)

    def source_lines(self, path: str) -> List[str]:
        """
        Return the lines of the source file ``path``.

        :param path: A path from the ``from`` file set.
        :type path: ``str``
        :returns: The file's lines, or an empty list for an unknown path.
        :rtype: ``List[str]``
        """
        if path not in self._lines:
            text = next((f.text for f in self.from_files if f.path == path), "")
            self._lines[path] = split_lines(text)
        return self._lines[path]

    @property
    def nr_blocks(self) -> int:
        """The total number of voted block matches."""
        return sum(len(group.blocks) for group in self.groups)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert these results into a dictionary suitable for encoding as JSON.

        :returns: A dictionary describing these results.
        :rtype: ``Dict[str, Any]``
        """
        return {
            "removed": [f.path for f in self.removed],
            "added": [f.path for f in self.added],
            "modified": [inline.to_dict() for inline in self.modified],
            "groups": [group.to_dict() for group in self.groups],
        }

    def json(self, pretty: bool = False) -> str:
        """
        Return a JSON representation of these results.

        :param pretty: Indent the output.
        :type pretty: ``bool``
        :returns: A JSON string.
        :rtype: ``str``
        """
        return json.dumps(self.to_dict(), indent=4 if pretty else None)

    def summary(self, term_control: Optional[TermControl] = None) -> str:
        """
        Return a summary of these results.

        :param term_control: An optional ``TermControl`` for colored output.
        :type term_control: ``Optional[TermControl]``
        :returns: A string summarizing this instance.
        :rtype: ``str``
        """
        tc = term_control or TermControl(color="never")
        moved = sum(
            1 for group in self.groups for vote in group.blocks if not vote.is_addition
        )
        return (
            f"Total changes:  {len(self)}\n"
            f"  Files {tc.GREEN + 'added:   ' + tc.NORMAL} {len(self.added)}\n"
            f"  Files {tc.RED + 'removed: ' + tc.NORMAL} {len(self.removed)}\n"
            f"  Files {tc.YELLOW + 'modified:' + tc.NORMAL} {len(self.modified)}\n"
            f"  Blocks {tc.CYAN + 'moved:  ' + tc.NORMAL} {moved}\n"
            f"  Blocks {tc.MAGENTA + 'added:  ' + tc.NORMAL} {self.nr_blocks - moved}"
        )


class DiffEngine:
    """
    Compare two sets of files.
    """

    def __init__(self, options: Optional[DiffOptions] = None):
        self.options = options or DiffOptions()

    def compute_diff(
        self, from_files: Sequence[SourceFile], to_files: Sequence[SourceFile]
    ) -> DiffResults:
        """
        Compare ``from_files`` with ``to_files``.

        Files are paired by key. Keys only present in ``from_files`` are
        removed, keys only present in ``to_files`` are added and keys in
        both with different content are modified. Block matches are then
        searched across the full sets regardless of key.

        :param from_files: The original files.
        :type from_files: ``Sequence[SourceFile]``
        :param to_files: The updated files.
        :type to_files: ``Sequence[SourceFile]``
        :returns: The comparison results.
        :rtype: ``DiffResults``
        """
        options = self.options
        from_keys = {f.key: f for f in from_files}
        to_keys = {f.key: f for f in to_files}

        removed = [f for f in from_files if f.key not in to_keys]
        added = [f for f in to_files if f.key not in from_keys]
        _log_debug_diff(
            "Found %d removed and %d added files", len(removed), len(added)
        )

        modified = []
        if options.inline_diffs:
            for from_file in from_files:
                to_file = to_keys.get(from_file.key)
                if to_file is None or to_file.text == from_file.text:
                    continue
                modified.append(
                    generate_inline_diff(
                        from_file.key,
                        from_file.path,
                        from_file.text,
                        to_file.path,
                        to_file.text,
                        context_lines=options.context_lines,
                    )
                )

        groups = []
        if options.block_matches:
            from_pairs = [f.pair for f in from_files]
            to_pairs = [f.pair for f in to_files]
            matches = match_blocks_multi(
                from_pairs,
                to_pairs,
                thresholds=options.thresholds,
                carry_visited=options.carry_visited,
            )
            groups = group_and_vote(matches, from_pairs)

        results = DiffResults(from_files, to_files, removed, added, modified, groups)
        _log_info(
            "Compared %d files with %d files: %d changed, %d block matches",
            len(from_files),
            len(to_files),
            len(results),
            results.nr_blocks,
        )
        return results


__all__ = ["SourceFile", "DiffResults", "DiffEngine", "load_source_files"]
