# Copyright Red Hat
#
# ygg/snapshot/formatters.py - Yggdrasil snapshot formatters
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Project snapshot formatters.

A snapshot is written as a preamble, an index of the collected files with
their line counts and, optionally, the contents of every file.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TextIO
import logging
import time
import os

from ygg import YGG_SUBSYSTEM_SNAPSHOT, read_text
from ygg.scanner import FileEntry, fence_language
from ygg.term import TermControl

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

#: Name recorded as the generator of Markdown snapshots.
GENERATED_BY = "ygg"

#: Placeholder written in place of unreadable file content.
READ_ERROR = "❌ Error reading file"

_SCHEMA = (
    "Schema: index first, then file contents.\n"
    "- Files are listed under '📄 Files'.\n"
    "- Contents are shown with markers "
    "<<< FILE START: <path> >>> … <<< FILE END: <path> >>>\n"
)

_RULE = "==============================================="


def _log_debug_snapshot(msg, *args, **kwargs):
    """A wrapper for snapshot subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": YGG_SUBSYSTEM_SNAPSHOT}, **kwargs)


def _total_lines(files: Sequence[FileEntry]) -> int:
    return sum(entry.line_count for entry in files)


def _read_content(path: str) -> Optional[str]:
    content = read_text(path)
    if content is None:
        _log_warn("Could not read %s", path)
    return content


class SnapshotFormatterBase(ABC):
    """
    Base class for snapshot formatters.
    """

    def __init__(self, show_lines: bool = True):
        """
        :param show_lines: Report line counts in the index.
        :type show_lines: ``bool``
        """
        self.show_lines = show_lines

    def write_snapshot(
        self, root: str, files: Sequence[FileEntry], out: TextIO, contents=False
    ):
        """
        Write a complete snapshot of ``files`` to ``out``.

        :param root: The snapshot root directory.
        :type root: ``str``
        :param files: The files to include.
        :type files: ``Sequence[FileEntry]``
        :param out: The output stream.
        :type out: ``TextIO``
        :param contents: Include file contents.
        :type contents: ``bool``
        """
        self.print_preamble(root, out)
        self.print_index(files, out)
        if contents:
            self.print_contents(files, out)
        _log_debug_snapshot("Wrote snapshot of %d files", len(files))

    @abstractmethod
    def print_preamble(self, root: str, out: TextIO):
        """Write the snapshot header for ``root``."""

    @abstractmethod
    def print_index(self, files: Sequence[FileEntry], out: TextIO):
        """Write the file index."""

    @abstractmethod
    def print_contents(self, files: Sequence[FileEntry], out: TextIO):
        """Write the content of every file."""


class SnapshotCliFormatter(SnapshotFormatterBase):
    """
    Plain text snapshot, optionally colored.
    """

    def __init__(self, term_control: Optional[TermControl] = None, show_lines=True):
        super().__init__(show_lines=show_lines)
        self.tc = term_control or TermControl(color="never")

    def _title(self, text: str) -> str:
        return f"{self.tc.BOLD}{self.tc.MAGENTA}{text}{self.tc.NORMAL}"

    def print_preamble(self, root: str, out: TextIO):
        tc = self.tc
        print(
            f"{self._title('✨ Project Snapshot:')} {tc.BOLD}{tc.CYAN}{root}{tc.NORMAL}",
            file=out,
        )
        print(f"{tc.YELLOW}*Made with Yggdrasil*{tc.NORMAL}", file=out)
        print(f"\n{_SCHEMA}", file=out)

    def print_index(self, files: Sequence[FileEntry], out: TextIO):
        tc = self.tc
        width = max((len(entry.path) for entry in files), default=0) + 2
        print(self._title("📄 Files"), file=out)
        for entry in files:
            icon = tc.colorize("📄", "YELLOW")
            if self.show_lines:
                padded = tc.colorize(entry.path.ljust(width), "CYAN")
                print(f"{icon} {padded} {entry.line_count} lines", file=out)
            else:
                print(f"{icon} {tc.colorize(entry.path, 'CYAN')}", file=out)

        if self.show_lines:
            total = _total_lines(files)
            print("\n====", file=out)
            print(
                f"📄 {self._title('📦 Total LOC'.ljust(width))} "
                f"{self._title(str(total))} lines\n",
                file=out,
            )

        print(f"\n{tc.colorize(_RULE, 'YELLOW')}", file=out)
        print(self._title("📑 File Contents"), file=out)

    def print_contents(self, files: Sequence[FileEntry], out: TextIO):
        for entry in files:
            print(self._title(f"<<< FILE START: {entry.path} >>>"), file=out)
            content = _read_content(entry.path)
            if content is None:
                print(READ_ERROR, file=out)
            elif content:
                out.write(content if content.endswith("\n") else content + "\n")
            print(self._title(f"<<< FILE END: {entry.path} >>>"), file=out)
            print(file=out)


class SnapshotMarkdownFormatter(SnapshotFormatterBase):
    """
    Markdown "codex" snapshot.
    """

    def __init__(self, show_lines: bool = True, timestamp: Optional[int] = None):
        """
        :param show_lines: Report line counts in the index.
        :type show_lines: ``bool``
        :param timestamp: UNIX time to record, or ``None`` for the current
                          time.
        :type timestamp: ``Optional[int]``
        """
        super().__init__(show_lines=show_lines)
        self.timestamp = timestamp

    def print_preamble(self, root: str, out: TextIO):
        abs_path = os.path.realpath(root)
        project = os.path.basename(abs_path) or root
        timestamp = self.timestamp if self.timestamp is not None else int(time.time())
        print("# CODEX", file=out)
        print(f"project: {project}", file=out)
        print(f"project_path: {abs_path}", file=out)
        print(f"generated_by: {GENERATED_BY}", file=out)
        print(f"timestamp_unix: {timestamp}", file=out)
        print("format: markdown\n", file=out)
        print("## INDEX", file=out)

    def print_index(self, files: Sequence[FileEntry], out: TextIO):
        for entry in files:
            if self.show_lines:
                print(f"{entry.path}: {entry.line_count}", file=out)
            else:
                print(entry.path, file=out)
        if self.show_lines:
            print(f"total_loc: {_total_lines(files)}", file=out)
        print("\n## FILES", file=out)

    def print_contents(self, files: Sequence[FileEntry], out: TextIO):
        for entry in files:
            lang = fence_language(entry.path)
            lines_attr = f' lines="{entry.line_count}"' if self.show_lines else ""
            print(f'<file path="{entry.path}" lang="{lang}"{lines_attr}>', file=out)
            print(f"```{lang}", file=out)
            content = _read_content(entry.path)
            if content is None:
                print(READ_ERROR, file=out)
            elif content:
                out.write(content if content.endswith("\n") else content + "\n")
            print("```\n</file>\n", file=out)


def get_snapshot_formatter(
    markdown: bool,
    term_control: Optional[TermControl] = None,
    show_lines: bool = True,
) -> SnapshotFormatterBase:
    """
    Return a snapshot formatter for the requested output mode.

    :param markdown: Return a Markdown formatter.
    :type markdown: ``bool``
    :param term_control: Terminal control for CLI output.
    :type term_control: ``Optional[TermControl]``
    :param show_lines: Report line counts.
    :type show_lines: ``bool``
    :returns: A formatter instance.
    :rtype: ``SnapshotFormatterBase``
    """
    if markdown:
        return SnapshotMarkdownFormatter(show_lines=show_lines)
    return SnapshotCliFormatter(term_control=term_control, show_lines=show_lines)


__all__ = [
    "SnapshotFormatterBase",
    "SnapshotCliFormatter",
    "SnapshotMarkdownFormatter",
    "get_snapshot_formatter",
]
