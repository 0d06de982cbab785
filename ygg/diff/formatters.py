# Copyright Red Hat
#
# ygg/diff/formatters.py - Yggdrasil diff report formatters
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Diff report formatters.

A report is written in four parts: a preamble, the file level changes
(removed, added and modified files), an index of file pairs with block
matches and the annotated contents of each source file.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO
import logging

from ygg.scanner.filetypes import fence_language
from ygg.term import TermControl

from .difftypes import BlockWithVote, GroupedMatches
from .engine import DiffResults
from .inline import render_inline_diff

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

#: Report title
DIFF_REPORT_TITLE = "📦 Cross-file Diff Report"

#: File pair index title
DIFF_INDEX_TITLE = "📄 File Pairs"

#: Annotated contents title
DIFF_CONTENTS_TITLE = "📑 Diff Contents"

#: Width of the right aligned line number gutter
LINENO_WIDTH = 4


def block_tag(vote: BlockWithVote) -> str:
    """
    Return the annotation for a source line covered by ``vote``.

    Line numbers are one-based to match the line number gutter.

    :param vote: The covering block.
    :type vote: ``BlockWithVote``
    :returns: A ``[MOVED] (start–end → to_file:start)`` style tag.
    :rtype: ``str``
    """
    block = vote.block
    return (
        f"[{vote.tag}] ({block.from_range.display()} → "
        f"{block.to_file}:{block.to_range.start + 1})"
    )


def line_tag(group: GroupedMatches, lineno: int) -> str:
    """
    Return the tag of the first block in ``group`` covering ``lineno``.

    :param group: The group being replayed.
    :type group: ``GroupedMatches``
    :param lineno: Zero-based line index in ``group.from_file``.
    :type lineno: ``int``
    :returns: The tag text, or the empty string if no block covers the line.
    :rtype: ``str``
    """
    for vote in group.blocks:
        if lineno in vote.block.from_range:
            return block_tag(vote)
    return ""


class DiffFormatterBase(ABC):
    """
    Base class for diff report formatters.
    """

    def write_report(self, results: DiffResults, out: TextIO):
        """
        Write the complete report for ``results`` to ``out``.

        :param results: The results to report.
        :type results: ``DiffResults``
        :param out: The output stream.
        :type out: ``TextIO``
        """
        self.print_preamble(out)
        self.print_file_changes(results, out)
        if results.groups:
            self.print_index(results.groups, out)
            self.print_contents(results, out)

    @abstractmethod
    def print_preamble(self, out: TextIO):
        """Write the report title."""

    @abstractmethod
    def print_file_changes(self, results: DiffResults, out: TextIO):
        """Write removed, added and modified files."""

    @abstractmethod
    def print_index(self, groups: List[GroupedMatches], out: TextIO):
        """Write the list of file pairs."""

    @abstractmethod
    def print_contents(self, results: DiffResults, out: TextIO):
        """Write each annotated source file."""


class DiffCliFormatter(DiffFormatterBase):
    """
    Plain text report, optionally colored.
    """

    def __init__(self, term_control: Optional[TermControl] = None, align_tags=False):
        """
        Initialise a new ``DiffCliFormatter``.

        :param term_control: Terminal control used for coloring. No color is
                             used if unset.
        :type term_control: ``Optional[TermControl]``
        :param align_tags: Pad source lines so tags start in one column.
        :type align_tags: ``bool``
        """
        self.tc = term_control or TermControl(color="never")
        self.align_tags = align_tags

    def _pair(self, group: GroupedMatches) -> str:
        tc = self.tc
        return (
            f"{tc.CYAN}{group.from_file}{tc.NORMAL} "
            f"{tc.MAGENTA}→{tc.NORMAL} "
            f"{tc.CYAN}{group.to_file}{tc.NORMAL}"
        )

    def print_preamble(self, out: TextIO):
        tc = self.tc
        print(f"{tc.BOLD}{tc.MAGENTA}{DIFF_REPORT_TITLE}{tc.NORMAL}\n", file=out)

    def print_file_changes(self, results: DiffResults, out: TextIO):
        tc = self.tc
        for removed in results.removed:
            print(tc.colorize(f"- {removed.path}", "RED"), file=out)
        for added in results.added:
            print(tc.colorize(f"+ {added.path}", "GREEN"), file=out)
        if results.removed or results.added:
            print(file=out)
        for inline in results.modified:
            rendered = render_inline_diff(inline, tc)
            if rendered:
                print(rendered + "\n", file=out)

    def print_index(self, groups: List[GroupedMatches], out: TextIO):
        print(DIFF_INDEX_TITLE, file=out)
        for group in groups:
            print(f"- {self._pair(group)}", file=out)
        print(file=out)

    def print_contents(self, results: DiffResults, out: TextIO):
        for group in results.groups:
            print(self._pair(group), file=out)
            lines = results.source_lines(group.from_file)
            width = max((len(line) for line in lines), default=0) + 1
            for lineno, line in enumerate(lines):
                tag = line_tag(group, lineno)
                text = line.ljust(width) if self.align_tags and tag else line
                if tag:
                    tag = (" " if not self.align_tags else "") + tag
                    tag = self.tc.colorize(tag, "YELLOW")
                print(f"{lineno + 1:>{LINENO_WIDTH}} {text}{tag}".rstrip(), file=out)
            print(file=out)


class DiffMarkdownFormatter(DiffFormatterBase):
    """
    Markdown report with fenced source listings.
    """

    def print_preamble(self, out: TextIO):
        print(f"# {DIFF_REPORT_TITLE}\n", file=out)

    def print_file_changes(self, results: DiffResults, out: TextIO):
        if not (results.removed or results.added or results.modified):
            return
        print("## 🗂️ File Changes\n", file=out)
        for removed in results.removed:
            print(f"- removed: `{removed.path}`", file=out)
        for added in results.added:
            print(f"- added: `{added.path}`", file=out)
        for inline in results.modified:
            print(f"- modified: `{inline.key}` ({inline.summary})", file=out)
        print(file=out)
        for inline in results.modified:
            rendered = render_inline_diff(inline, None)
            if rendered:
                print(f"```diff\n{rendered}\n```\n", file=out)

    def print_index(self, groups: List[GroupedMatches], out: TextIO):
        print(f"## {DIFF_INDEX_TITLE}\n", file=out)
        for group in groups:
            print(f"- {group.from_file} → {group.to_file}", file=out)
        print(file=out)

    def print_contents(self, results: DiffResults, out: TextIO):
        print(f"## {DIFF_CONTENTS_TITLE}\n", file=out)
        for group in results.groups:
            print(f"### {group.from_file} → {group.to_file}\n", file=out)
            print(f"```{fence_language(group.from_file)}", file=out)
            lines = results.source_lines(group.from_file)
            pad = LINENO_WIDTH + 2 + max((len(line) for line in lines), default=0)
            for lineno, line in enumerate(lines):
                print(f"{lineno + 1:>{LINENO_WIDTH}} {line}".rstrip(), file=out)
                tag = line_tag(group, lineno)
                if tag:
                    print(f"{'':>{pad}} // {tag}", file=out)
            print("```\n", file=out)


def get_diff_formatter(
    markdown: bool, term_control: Optional[TermControl] = None, align_tags=False
) -> DiffFormatterBase:
    """
    Return a diff formatter for the requested output mode.

    :param markdown: Return a Markdown formatter.
    :type markdown: ``bool``
    :param term_control: Terminal control for CLI output.
    :type term_control: ``Optional[TermControl]``
    :param align_tags: Align tags in CLI output.
    :type align_tags: ``bool``
    :returns: A formatter instance.
    :rtype: ``DiffFormatterBase``
    """
    if markdown:
        return DiffMarkdownFormatter()
    return DiffCliFormatter(term_control=term_control, align_tags=align_tags)


__all__ = [
    "block_tag",
    "line_tag",
    "DiffFormatterBase",
    "DiffCliFormatter",
    "DiffMarkdownFormatter",
    "get_diff_formatter",
]
