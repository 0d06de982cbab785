# Copyright Red Hat
#
# ygg/diff/options.py - Yggdrasil diff options
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Cross-file diff options.
"""
from dataclasses import dataclass, fields
from typing import Optional, Tuple, Union
from argparse import Namespace
import logging

from .inline import DEFAULT_CONTEXT_LINES
from .matcher import DEFAULT_THRESHOLDS

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


@dataclass(frozen=True)
class DiffOptions:
    """
    Cross-file comparison options.
    """

    #: Minimum block lengths for each matching pass, longest first
    thresholds: Tuple[int, ...] = DEFAULT_THRESHOLDS
    #: Lines claimed in one pass are not searched again in later passes
    carry_visited: bool = True
    #: Generate unified diffs for files present in both sets
    inline_diffs: bool = True
    #: Detect cross-file block matches
    block_matches: bool = True
    #: Context lines for unified diffs
    context_lines: int = DEFAULT_CONTEXT_LINES
    #: Write the report as Markdown
    markdown: bool = False
    #: Pad source lines so that block tags line up
    align_tags: bool = False
    #: Write the report as JSON
    json: bool = False
    #: Indent JSON output
    pretty: bool = False
    #: Color mode: "auto", "always" or "never"
    color: str = "auto"
    #: Output file path, or ``None`` for stdout
    out: Optional[str] = None

    def __str__(self):
        """
        Return a human readable string representation of this
        ``DiffOptions`` instance.

        :returns: A human readable string.
        :rtype: ``str``
        """
        items = [
            (key, val)
            if not isinstance(val, tuple)
            else (key, " ".join(str(v) for v in val))
            for key, val in self.__dict__.items()
        ]
        return "\n".join(f"{key}={val}" for key, val in items)

    @property
    def use_markdown(self) -> bool:
        """``True`` if Markdown output was requested or implied by ``out``."""
        return self.markdown or bool(self.out and self.out.endswith(".md"))

    @classmethod
    def from_cmd_args(cls, cmd_args: Namespace) -> "DiffOptions":
        """
        Initialise DiffOptions from command line arguments.

        :param cmd_args: The command line arguments.
        :type cmd_args: ``Namespace``
        :returns: A new ``DiffOptions`` instance
        :rtype: ``DiffOptions``
        """

        def get_value(name: str) -> Union[bool, int, Optional[str], Tuple[int, ...]]:
            attr = getattr(cmd_args, name)
            if isinstance(attr, list):
                return tuple(attr)
            return attr

        field_names = {f.name for f in fields(cls)}
        kwargs = {
            name: get_value(name)
            for name in field_names
            if getattr(cmd_args, name, None) is not None
        }
        options = cls(**kwargs)
        _log_debug("Initialised DiffOptions from arguments: %s", repr(options))
        return options


__all__ = ["DiffOptions"]
