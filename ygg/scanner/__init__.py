# Copyright Red Hat
#
# ygg/scanner/__init__.py - Yggdrasil scanner package
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
File discovery, filtering and file type detection.
"""
from .collect import FileEntry, collect_files, count_lines, expand_paths, walk_files
from .filetypes import FileTypeCategory, FileTypeDetector, FileTypeInfo, fence_language
from .patterns import load_patterns_file, matches_filters

__all__ = [
    "FileEntry",
    "FileTypeCategory",
    "FileTypeDetector",
    "FileTypeInfo",
    "collect_files",
    "count_lines",
    "expand_paths",
    "fence_language",
    "load_patterns_file",
    "matches_filters",
    "walk_files",
]
