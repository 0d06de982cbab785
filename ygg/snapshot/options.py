# Copyright Red Hat
#
# ygg/snapshot/options.py - Yggdrasil snapshot options
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Project snapshot options.
"""
from dataclasses import dataclass, field, fields
from typing import Optional, Tuple, Union
from argparse import Namespace
import logging

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


@dataclass(frozen=True)
class SnapshotOptions:
    """
    Project snapshot options.
    """

    #: Directory to snapshot
    root: str = "."
    #: File extensions to include, without the leading dot
    show: Tuple[str, ...] = field(default_factory=tuple)
    #: Include file contents after the index
    contents: bool = False
    #: Write the snapshot as Markdown
    markdown: bool = False
    #: Only include paths matching these patterns
    only: Tuple[str, ...] = field(default_factory=tuple)
    #: Do not report line counts
    no_lines: bool = False
    #: Exclude paths matching these patterns
    ignore: Tuple[str, ...] = field(default_factory=tuple)
    #: File of patterns to exclude ("-" for standard input)
    blacklist: Optional[str] = None
    #: File of patterns to include ("-" for standard input)
    manifest: Optional[str] = None
    #: Output file path, or ``None`` for stdout
    out: Optional[str] = None
    #: Only include files detected as text
    text_only: bool = False
    #: Use libmagic for file type detection
    use_magic_file_type: bool = False
    #: Split output into parts of at most this many estimated tokens
    split_tokens: int = 0
    #: Color mode: "auto", "always" or "never"
    color: str = "auto"

    def __str__(self):
        """
        Return a human readable string representation of this
        ``SnapshotOptions`` instance.

        :returns: A human readable string.
        :rtype: ``str``
        """
        items = [
            (key, val) if not isinstance(val, tuple) else (key, " ".join(val))
            for key, val in self.__dict__.items()
        ]
        return "\n".join(f"{key}={val}" for key, val in items)

    @property
    def use_markdown(self) -> bool:
        """
        ``True`` if Markdown output is selected.

        An output file name decides the format on its own: a ".md" file is
        always Markdown and any other file is never Markdown.
        """
        if self.out:
            return self.out.endswith(".md")
        return self.markdown

    @property
    def show_lines(self) -> bool:
        """``True`` if line counts are reported."""
        return not self.no_lines

    @classmethod
    def from_cmd_args(cls, cmd_args: Namespace) -> "SnapshotOptions":
        """
        Initialise SnapshotOptions from command line arguments.

        Construct a new ``SnapshotOptions`` object from the command line
        arguments in ``cmd_args``.

        :param cmd_args: The command line arguments.
        :type cmd_args: ``Namespace``
        :returns: A new ``SnapshotOptions`` instance
        :rtype: ``SnapshotOptions``
        """

        def get_value(name: str) -> Union[bool, int, Optional[str], Tuple[str, ...]]:
            attr = getattr(cmd_args, name)
            if isinstance(attr, list):
                return tuple(attr)
            if attr is None and name in ("show", "only", "ignore"):
                return ()
            return attr

        field_names = {f.name for f in fields(cls)}
        kwargs = {
            name: get_value(name) for name in field_names if hasattr(cmd_args, name)
        }
        if kwargs.get("root") is None:
            kwargs.pop("root", None)
        options = cls(**kwargs)
        _log_debug("Initialised SnapshotOptions from arguments: %s", repr(options))
        return options


__all__ = ["SnapshotOptions"]
