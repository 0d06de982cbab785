# Copyright Red Hat
#
# ygg/snapshot/__init__.py - Yggdrasil snapshot package
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Project snapshot package.

Writes an index of a project's files with line counts and, optionally, the
file contents as plain text or as a Markdown "codex". The main entry points
are ``run_snapshot()`` and ``SnapshotOptions``.
"""
from .formatters import (
    SnapshotCliFormatter,
    SnapshotMarkdownFormatter,
    get_snapshot_formatter,
)
from .options import SnapshotOptions
from .split import estimate_file_tokens, split_files_by_tokens
from .writer import run_snapshot

__all__ = [
    "SnapshotCliFormatter",
    "SnapshotMarkdownFormatter",
    "SnapshotOptions",
    "estimate_file_tokens",
    "get_snapshot_formatter",
    "run_snapshot",
    "split_files_by_tokens",
]
