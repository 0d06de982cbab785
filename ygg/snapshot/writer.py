# Copyright Red Hat
#
# ygg/snapshot/writer.py - Yggdrasil snapshot writer
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Collect a project's files and write a snapshot.
"""
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, TextIO
import logging
import sys

from ygg import YGG_ENCODING, YGG_SUBSYSTEM_SNAPSHOT, YggArgumentError, YggPathError
from ygg.scanner import FileEntry, collect_files
from ygg.term import TermControl

from .formatters import get_snapshot_formatter
from .options import SnapshotOptions
from .split import part_path, split_files_by_tokens

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_snapshot(msg, *args, **kwargs):
    """A wrapper for snapshot subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": YGG_SUBSYSTEM_SNAPSHOT}, **kwargs)


@contextmanager
def open_output(out: Optional[str], stdout: Optional[TextIO] = None) -> Iterator[TextIO]:
    """
    Open the output file ``out``, or yield ``stdout`` if ``out`` is unset.

    :param out: The output file path, or ``None``.
    :type out: ``Optional[str]``
    :param stdout: Stream to use when ``out`` is ``None``.
    :type stdout: ``Optional[TextIO]``
    :raises: ``YggPathError`` if the output file cannot be created.
    """
    if not out:
        yield stdout or sys.stdout
        return
    try:
        fp = open(out, "w", encoding=YGG_ENCODING)
    except OSError as err:
        raise YggPathError(f"Failed to create output file {out}: {err}") from err
    with fp:
        yield fp
    _log_info("Wrote %s", out)


def _write_one(
    options: SnapshotOptions,
    files: Sequence[FileEntry],
    out: Optional[str],
    stdout: Optional[TextIO],
):
    with open_output(out, stdout) as stream:
        if out:
            term_control = TermControl(color="never")
        else:
            term_control = TermControl(term_stream=stream, color=options.color)
        formatter = get_snapshot_formatter(
            options.use_markdown,
            term_control=term_control,
            show_lines=options.show_lines,
        )
        formatter.write_snapshot(options.root, files, stream, contents=options.contents)


def run_snapshot(
    options: SnapshotOptions, stdout: Optional[TextIO] = None
) -> List[FileEntry]:
    """
    Collect the files selected by ``options`` and write a snapshot.

    With ``options.split_tokens`` set the files are partitioned by
    estimated token count and each part is written to its own numbered
    output file.

    :param options: The snapshot options.
    :type options: ``SnapshotOptions``
    :param stdout: Stream to write to when ``options.out`` is unset.
    :type stdout: ``Optional[TextIO]``
    :returns: The files included in the snapshot.
    :rtype: ``List[FileEntry]``
    :raises: ``YggArgumentError`` for an invalid split configuration,
             ``YggPathError`` if the root or an output file is not usable.
    """
    if options.split_tokens < 0:
        raise YggArgumentError(f"Invalid token budget: {options.split_tokens}")
    if options.split_tokens and not options.out:
        raise YggArgumentError("Splitting a snapshot requires an output file")

    files = collect_files(options)

    if not options.split_tokens:
        _write_one(options, files, options.out, stdout)
        return files

    parts = split_files_by_tokens(files, options.split_tokens) or [[]]
    _log_debug_snapshot(
        "Split %d files into %d parts of at most %d tokens",
        len(files),
        len(parts),
        options.split_tokens,
    )
    for index, part in enumerate(parts, start=1):
        _write_one(options, part, part_path(options.out, index), stdout)
    return files


__all__ = ["open_output", "run_snapshot"]
