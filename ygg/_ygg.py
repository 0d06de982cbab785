# Copyright Red Hat
#
# ygg/_ygg.py - Yggdrasil global definitions
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Global definitions for the top-level ygg package.
"""
from typing import List, Optional
import logging

_log = logging.getLogger("ygg")

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

# Ygg debugging subsystem mask
YGG_DEBUG_COMMAND = 1
YGG_DEBUG_SCAN = 2
YGG_DEBUG_SNAPSHOT = 4
YGG_DEBUG_DIFF = 8
YGG_DEBUG_ALL = YGG_DEBUG_COMMAND | YGG_DEBUG_SCAN | YGG_DEBUG_SNAPSHOT | YGG_DEBUG_DIFF

# Ygg debugging subsystem names
YGG_SUBSYSTEM_COMMAND = "ygg.command"
YGG_SUBSYSTEM_SCAN = "ygg.scan"
YGG_SUBSYSTEM_SNAPSHOT = "ygg.snapshot"
YGG_SUBSYSTEM_DIFF = "ygg.diff"

_DEBUG_MASK_TO_SUBSYSTEM = {
    YGG_DEBUG_COMMAND: YGG_SUBSYSTEM_COMMAND,
    YGG_DEBUG_SCAN: YGG_SUBSYSTEM_SCAN,
    YGG_DEBUG_SNAPSHOT: YGG_SUBSYSTEM_SNAPSHOT,
    YGG_DEBUG_DIFF: YGG_SUBSYSTEM_DIFF,
}

_debug_subsystems = set()

#: Text encoding used for every file ygg reads or writes.
YGG_ENCODING = "utf8"


class SubsystemFilter(logging.Filter):
    """
    Filters DEBUG records based on a set of enabled subsystem names.
    Non-DEBUG records or DEBUG records without a 'subsystem' attribute
    are always passed through.
    """

    def __init__(self, name=""):
        super().__init__(name)
        self.enabled_subsystems = set(_debug_subsystems)

    def filter(self, record):
        if record.levelno != logging.DEBUG:
            return True

        if not hasattr(record, "subsystem"):
            return True

        return record.subsystem in self.enabled_subsystems

    def set_debug_subsystems(self, subsystems):
        """Sets the collection of subsystems to allow."""
        self.enabled_subsystems = set(subsystems)


def get_debug_mask():
    """
    Return the current debug mask for the ``ygg`` package.

    :returns: The current debug mask value
    :rtype: int
    """
    enabled_subsystems = set(_debug_subsystems)
    ygg_log = logging.getLogger("ygg")

    for handler in ygg_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                enabled_subsystems.update(f.enabled_subsystems)

    mask_map = {v: k for k, v in _DEBUG_MASK_TO_SUBSYSTEM.items()}
    mask = 0
    for subsystem_name in enabled_subsystems:
        mask |= mask_map.get(subsystem_name, 0)
    return mask


def set_debug_mask(mask):
    """
    Set the debug mask for the ``ygg`` package.

    :param mask: the logical OR of the ``YGG_DEBUG_*``
                 values to log.
    :rtype: None
    """
    # pylint: disable=global-statement
    global _debug_subsystems

    if mask < 0 or mask > YGG_DEBUG_ALL:
        raise ValueError(f"Invalid ygg debug mask: {mask}")

    enabled_subsystems = [
        subsystem_name
        for flag, subsystem_name in _DEBUG_MASK_TO_SUBSYSTEM.items()
        if mask & flag
    ]

    ygg_log = logging.getLogger("ygg")
    for handler in ygg_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                f.set_debug_subsystems(enabled_subsystems)

    _debug_subsystems = set(enabled_subsystems)


#
# Ygg exception types
#


class YggError(Exception):
    """
    Base class for ygg errors.
    """


class YggPathError(YggError):
    """
    An invalid path was supplied: for e.g. a start directory that does not
    exist or an output file that cannot be created.
    """


class YggNotFoundError(YggError):
    """
    The requested object does not exist.
    """


class YggArgumentError(YggError):
    """
    An invalid argument was passed to a ygg API call.
    """


#
# Text helpers shared by the scanner, snapshot and diff layers
#


def split_lines(text: str) -> List[str]:
    """
    Split ``text`` into lines.

    Lines are separated by ``"\\n"``; a single trailing ``"\\r"`` is removed
    from each line and a terminating newline does not produce an empty final
    line. The empty string has no lines.

    :param text: The text to split.
    :type text: ``str``
    :returns: The list of lines in ``text``.
    :rtype: ``List[str]``
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_text(path: str) -> Optional[str]:
    """
    Read the content of ``path`` as UTF-8 text.

    :param path: The file to read.
    :type path: ``str``
    :returns: The file content, or ``None`` if the file could not be read
              or is not valid UTF-8.
    :rtype: ``Optional[str]``
    """
    try:
        with open(path, "r", encoding=YGG_ENCODING, newline="") as fp:
            return fp.read()
    except (OSError, UnicodeDecodeError) as err:
        _log_debug("Could not read %s as text: %s", path, err)
        return None


__all__ = [
    # Debug logging subsystems
    "YGG_DEBUG_COMMAND",
    "YGG_DEBUG_SCAN",
    "YGG_DEBUG_SNAPSHOT",
    "YGG_DEBUG_DIFF",
    "YGG_DEBUG_ALL",
    # Debug logging subsystem names
    "YGG_SUBSYSTEM_COMMAND",
    "YGG_SUBSYSTEM_SCAN",
    "YGG_SUBSYSTEM_SNAPSHOT",
    "YGG_SUBSYSTEM_DIFF",
    "YGG_ENCODING",
    "SubsystemFilter",
    "get_debug_mask",
    "set_debug_mask",
    # Exceptions
    "YggError",
    "YggPathError",
    "YggNotFoundError",
    "YggArgumentError",
    # Text helpers
    "split_lines",
    "read_text",
]
