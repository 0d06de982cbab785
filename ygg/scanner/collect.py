# Copyright Red Hat
#
# ygg/scanner/collect.py - Yggdrasil file collection
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Directory traversal and file collection.
"""
from typing import Iterator, List, Sequence, Tuple, TYPE_CHECKING
import logging
import os

from ygg import YGG_SUBSYSTEM_SCAN, YggPathError, read_text, split_lines

from .filetypes import FileTypeCategory, FileTypeDetector
from .patterns import STDIN_PATTERNS, load_patterns_file, matches_filters

if TYPE_CHECKING:
    from ygg.snapshot.options import SnapshotOptions

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_scan(msg, *args, **kwargs):
    """A wrapper for scan subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": YGG_SUBSYSTEM_SCAN}, **kwargs)


class FileEntry:
    """
    A collected file and its line count.
    """

    __slots__ = ("path", "line_count")

    def __init__(self, path: str, line_count: int):
        self.path = path
        self.line_count = line_count

    def __repr__(self):
        return f"FileEntry({self.path!r}, {self.line_count})"

    def __eq__(self, other):
        if not isinstance(other, FileEntry):
            return NotImplemented
        return (self.path, self.line_count) == (other.path, other.line_count)

    def to_dict(self):
        """Return this entry as a dictionary."""
        return {"path": self.path, "line_count": self.line_count}


def count_lines(path: str) -> int:
    """
    Return the number of lines in ``path``, or 0 if it cannot be read.

    :param path: The file to count.
    :type path: ``str``
    :returns: The line count.
    :rtype: ``int``
    """
    text = read_text(path)
    return len(split_lines(text)) if text is not None else 0


def walk_files(root: str) -> Iterator[str]:
    """
    Yield the path of every regular file below ``root``.

    Directories are visited in sorted order and symbolic links are not
    followed or reported.

    :param root: The directory to walk.
    :type root: ``str``
    :returns: An iterator over file paths joined to ``root``.
    :rtype: ``Iterator[str]``
    """

    def _walk_error(err: OSError):
        _log_warn("Error walking %s: %s", err.filename, err)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            path = os.path.join(dirpath, name)
            if os.path.islink(path) or not os.path.isfile(path):
                continue
            yield path


def _has_extension(path: str, extensions: Sequence[str]) -> bool:
    ext = os.path.splitext(path)[1]
    return bool(ext) and ext[1:] in extensions


def _path_matches(path: str, rel_path: str, patterns: Sequence[str], default: bool):
    return matches_filters(path, patterns, default) or matches_filters(
        rel_path, patterns, default
    )


def collect_files(options: "SnapshotOptions") -> List[FileEntry]:
    """
    Collect the files below ``options.root`` that pass the configured
    filters, sorted by path.

    :param options: The snapshot options to apply.
    :type options: ``SnapshotOptions``
    :returns: A sorted list of ``FileEntry`` objects.
    :rtype: ``List[FileEntry]``
    :raises: ``YggPathError`` if ``options.root`` is not a directory.
    """
    if not os.path.isdir(options.root):
        raise YggPathError(f"Not a directory: {options.root}")

    ignore_patterns = list(options.ignore)
    if options.blacklist:
        ignore_patterns.extend(load_patterns_file(options.blacklist))
        if options.blacklist != STDIN_PATTERNS:
            ignore_patterns.append(options.blacklist)

    only_patterns = list(options.only)
    if options.manifest:
        only_patterns.extend(load_patterns_file(options.manifest))

    detector = FileTypeDetector() if options.text_only else None

    files = []
    for path in walk_files(options.root):
        if options.show and not _has_extension(path, options.show):
            continue
        rel_path = os.path.relpath(path, options.root)
        if _path_matches(path, rel_path, ignore_patterns, False):
            continue
        if not _path_matches(path, rel_path, only_patterns, True):
            continue
        if detector is not None:
            info = detector.detect_file_type(path, use_magic=options.use_magic_file_type)
            # Unrecognised names are kept if their content decodes as text.
            if info.category == FileTypeCategory.UNKNOWN:
                is_text = read_text(path) is not None
            else:
                is_text = info.is_text_like
            if not is_text:
                _log_debug_scan("Skipping non-text file %s (%s)", path, info.mime_type)
                continue
        files.append(FileEntry(path, count_lines(path)))

    files.sort(key=lambda entry: entry.path)
    _log_info("Collected %d files from %s", len(files), options.root)
    return files


def expand_paths(paths: Sequence[str]) -> List[Tuple[str, str]]:
    """
    Expand file and directory arguments into a list of files.

    A file argument yields itself, keyed by its base name. A directory
    argument yields every regular file below it, keyed by the path
    relative to the directory. Paths that do not exist are skipped with a
    warning.

    :param paths: The file and directory paths to expand.
    :type paths: ``Sequence[str]``
    :returns: A list of ``(path, key)`` tuples in argument order.
    :rtype: ``List[Tuple[str, str]]``
    """
    expanded = []
    for path in paths:
        if os.path.isdir(path):
            for file_path in walk_files(path):
                expanded.append((file_path, os.path.relpath(file_path, path)))
        elif os.path.isfile(path):
            expanded.append((path, os.path.basename(path)))
        else:
            _log_warn("Path not found: %s", path)
    _log_debug_scan("Expanded %d paths to %d files", len(paths), len(expanded))
    return expanded


__all__ = [
    "FileEntry",
    "collect_files",
    "count_lines",
    "expand_paths",
    "walk_files",
]
