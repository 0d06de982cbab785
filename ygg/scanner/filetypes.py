# Copyright Red Hat
#
# ygg/scanner/filetypes.py - Yggdrasil file type information
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
File type information support.
"""
from typing import ClassVar, Dict, Optional, Tuple
from pathlib import Path
from enum import Enum
import logging

from ygg import YGG_SUBSYSTEM_SCAN

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_scan(msg, *args, **kwargs):
    """A wrapper for scan subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": YGG_SUBSYSTEM_SCAN}, **kwargs)


# Format: ".ext": ("mime/type", "description starting with lowercase")
TEXT_EXTENSION_MAP = {
    # Documentation
    ".txt": ("text/plain", "plain text document"),
    ".md": ("text/markdown", "markdown documentation"),
    ".markdown": ("text/markdown", "markdown documentation"),
    ".rst": ("text/x-rst", "reStructuredText document"),
    ".adoc": ("text/asciidoc", "asciidoc document"),
    ".tex": ("text/x-tex", "latex source document"),
    ".bib": ("text/x-bibtex", "bibtex bibliography"),
    # Data & Configuration
    ".json": ("application/json", "json data file"),
    ".jsonl": ("application/x-jsonlines", "json lines data file"),
    ".yaml": ("application/yaml", "yaml data file"),
    ".yml": ("application/yaml", "yaml data file"),
    ".toml": ("application/toml", "toml configuration file"),
    ".ini": ("text/x-ini", "ini configuration file"),
    ".cfg": ("text/x-ini", "configuration file"),
    ".conf": ("text/plain", "configuration file"),
    ".xml": ("application/xml", "xml document"),
    ".csv": ("text/csv", "comma separated values"),
    ".lock": ("text/plain", "dependency lock file"),
    # Source code
    ".py": ("text/x-python", "python script"),
    ".pyi": ("text/x-python", "python type stub"),
    ".rs": ("text/x-rust", "rust source"),
    ".go": ("text/x-go", "go source"),
    ".c": ("text/x-c", "c source"),
    ".h": ("text/x-c", "c header"),
    ".cc": ("text/x-c++", "c++ source"),
    ".cpp": ("text/x-c++", "c++ source"),
    ".hpp": ("text/x-c++", "c++ header"),
    ".java": ("text/x-java-source", "java source"),
    ".kt": ("text/x-kotlin", "kotlin source"),
    ".js": ("text/javascript", "javascript source"),
    ".mjs": ("text/javascript", "javascript module"),
    ".ts": ("text/x-typescript", "typescript source"),
    ".tsx": ("text/x-typescript", "typescript jsx source"),
    ".jsx": ("text/javascript", "javascript jsx source"),
    ".rb": ("text/x-ruby", "ruby script"),
    ".pl": ("text/x-perl", "perl script"),
    ".lua": ("text/x-lua", "lua script"),
    ".sh": ("text/x-shellscript", "shell script"),
    ".bash": ("text/x-shellscript", "bash script"),
    ".zsh": ("application/x-zsh", "zsh script"),
    ".sql": ("application/sql", "sql script"),
    ".html": ("text/html", "html document"),
    ".css": ("text/css", "css stylesheet"),
    ".scss": ("text/x-scss", "sass stylesheet"),
    ".diff": ("text/x-diff", "diff output"),
    ".patch": ("text/x-diff", "patch file"),
    # Logs
    ".log": ("text/plain", "log file"),
}

# Format: "filename": ("mime/type", "description starting with lowercase")
TEXT_FILENAME_MAP = {
    "*makefile": ("text/x-makefile", "makefile build script"),
    "*dockerfile": ("text/x-dockerfile", "docker build script"),
    "*containerfile": ("text/x-dockerfile", "container build script"),
    "*license": ("text/plain", "license text"),
    "*readme": ("text/plain", "readme text"),
    "*changelog": ("text/plain", "changelog text"),
    "*copying": ("text/plain", "copyright text"),
    "*.gitignore": ("text/plain", "git ignore patterns"),
    "*.gitattributes": ("text/plain", "git attributes"),
}

# Format: ".ext": ("mime/type", "description starting with lowercase")
BINARY_EXTENSION_MAP = {
    ".o": ("application/x-object", "object file"),
    ".a": ("application/x-archive", "static library"),
    ".so": ("application/x-sharedlib", "shared library"),
    ".dll": ("application/x-msdownload", "windows dynamic link library"),
    ".exe": ("application/x-msdownload", "windows executable"),
    ".pyc": ("application/x-python-code", "python bytecode"),
    ".class": ("application/java-vm", "java class file"),
    ".wasm": ("application/wasm", "webassembly binary"),
    ".rlib": ("application/x-archive", "rust library"),
    ".zip": ("application/zip", "zip archive"),
    ".whl": ("application/zip", "python wheel"),
    ".jar": ("application/java-archive", "java archive"),
    ".tar": ("application/x-tar", "tar archive"),
    ".gz": ("application/gzip", "gzip compressed data"),
    ".xz": ("application/x-xz", "xz compressed data"),
    ".zst": ("application/zstd", "zstandard compressed data"),
    ".png": ("image/png", "png image"),
    ".jpg": ("image/jpeg", "jpeg image"),
    ".jpeg": ("image/jpeg", "jpeg image"),
    ".gif": ("image/gif", "gif image"),
    ".ico": ("image/vnd.microsoft.icon", "icon image"),
    ".pdf": ("application/pdf", "pdf document"),
    ".sqlite": ("application/vnd.sqlite3", "sqlite database"),
    ".db": ("application/vnd.sqlite3", "database file"),
    ".ttf": ("font/ttf", "truetype font"),
    ".woff2": ("font/woff2", "web open font format 2"),
}

# Format: "pattern": ("mime/type", "description starting with lowercase")
BINARY_FILENAME_MAP = {
    "*.so.*": ("application/x-sharedlib", "versioned shared library"),
    "*.git/objects/*": ("application/x-git-object", "git internal object"),
    "*.git/index": ("application/x-git-index", "git index file"),
}

#: Markdown fence languages that differ from the file extension.
FENCE_LANGUAGE_MAP = {
    "rs": "rust",
    "py": "python",
    "tex": "latex",
    "md": "markdown",
    "js": "typescript",
    "ts": "typescript",
    "tsx": "typescript",
}


def fence_language(path: str) -> str:
    """
    Return the Markdown code fence language for ``path``.

    :param path: The file path.
    :type path: ``str``
    :returns: A fence language name, the bare extension if it has no known
              mapping, or "text" for paths without an extension.
    :rtype: ``str``
    """
    ext = Path(path).suffix[1:]
    if not ext:
        return "text"
    return FENCE_LANGUAGE_MAP.get(ext, ext)


def _generic_guess_file(
    file_path: Path,
    extension_map: Dict[str, Tuple[str, str]],
    filename_map: Dict[str, Tuple[str, str]],
    encoding: str,
) -> Optional[Tuple[str, str, str]]:
    """
    Attempt to guess a file's MIME type and description based on the file
    name and extension.

    :returns: A 3-tuple containing (mime_type, description, encoding) if the
              type could be guessed or ``None`` otherwise.
    :rtype: ``Optional[Tuple[str, str, str]]``
    """
    for file_name_pattern, guess in filename_map.items():
        if Path(str(file_path).lower()).match(file_name_pattern):
            return (*guess, encoding)

    extension = file_path.suffix.lower()
    if extension and extension in extension_map:
        return (*extension_map[extension], encoding)

    return None


def _guess_file(file_path: Path) -> Tuple[str, str, str]:
    guess = _generic_guess_file(
        file_path, BINARY_EXTENSION_MAP, BINARY_FILENAME_MAP, "binary"
    )
    if guess is not None:
        return guess

    guess = _generic_guess_file(
        file_path, TEXT_EXTENSION_MAP, TEXT_FILENAME_MAP, "utf-8"
    )
    if guess is not None:
        return guess

    return ("application/octet-stream", "unknown file type", "binary")


class FileTypeCategory(Enum):
    """
    Enum for file type categories.
    """

    TEXT = "text"
    BINARY = "binary"
    IMAGE = "image"
    ARCHIVE = "archive"
    EXECUTABLE = "executable"
    CONFIG = "config"
    LOG = "log"
    DATABASE = "database"
    DOCUMENT = "document"
    SOURCE_CODE = "source_code"
    UNKNOWN = "unknown"


class FileTypeInfo:
    """
    Class representing file type information and encoding.
    """

    def __init__(
        self,
        mime_type: str,
        description: str,
        category: FileTypeCategory,
        encoding: Optional[str] = None,
    ):
        """
        Initialise a new ``FileTypeInfo`` object.

        :param mime_type: The detected MIME type.
        :type mime_type: ``str``
        :param description: Type description.
        :type description: ``str``
        :param category: File type category.
        :type category: ``FileTypeCategory``
        :param encoding: Optional file encoding.
        :type encoding: ``Optional[str]``
        """
        self.mime_type = mime_type
        self.description = description
        self.category = category
        self.encoding = encoding
        self.is_text_like = category in (
            FileTypeCategory.TEXT,
            FileTypeCategory.CONFIG,
            FileTypeCategory.LOG,
            FileTypeCategory.SOURCE_CODE,
        ) or (category == FileTypeCategory.DOCUMENT and mime_type.startswith("text/"))

    def __str__(self):
        return (
            f"MIME type: {self.mime_type}, "
            f"Category: {self.category.value}, "
            f"Encoding: {self.encoding if self.encoding else 'unknown'}, "
            f"Description: {self.description}"
        )


class FileTypeDetector:
    """
    Detect file types from file names, or using ``magic`` from file-magic.
    """

    # fmt: off
    category_rules: ClassVar[Dict[str, FileTypeCategory]] = {
        "application/zip": FileTypeCategory.ARCHIVE,
        "application/x-tar": FileTypeCategory.ARCHIVE,
        "application/gzip": FileTypeCategory.ARCHIVE,
        "application/x-xz": FileTypeCategory.ARCHIVE,
        "application/zstd": FileTypeCategory.ARCHIVE,
        "application/java-archive": FileTypeCategory.ARCHIVE,
        "application/x-archive": FileTypeCategory.ARCHIVE,
        "application/x-executable": FileTypeCategory.EXECUTABLE,
        "application/x-sharedlib": FileTypeCategory.EXECUTABLE,
        "application/x-pie-executable": FileTypeCategory.EXECUTABLE,
        "application/x-msdownload": FileTypeCategory.EXECUTABLE,
        "application/x-object": FileTypeCategory.EXECUTABLE,
        "application/pdf": FileTypeCategory.DOCUMENT,
        "text/markdown": FileTypeCategory.DOCUMENT,
        "text/x-rst": FileTypeCategory.DOCUMENT,
        "text/asciidoc": FileTypeCategory.DOCUMENT,
        "text/x-tex": FileTypeCategory.DOCUMENT,
        "text/x-bibtex": FileTypeCategory.DOCUMENT,
        "application/json": FileTypeCategory.CONFIG,
        "application/x-jsonlines": FileTypeCategory.CONFIG,
        "application/xml": FileTypeCategory.CONFIG,
        "text/xml": FileTypeCategory.CONFIG,
        "application/yaml": FileTypeCategory.CONFIG,
        "application/x-yaml": FileTypeCategory.CONFIG,
        "application/toml": FileTypeCategory.CONFIG,
        "text/x-ini": FileTypeCategory.CONFIG,
        "application/vnd.sqlite3": FileTypeCategory.DATABASE,
        "application/x-sqlite3": FileTypeCategory.DATABASE,
        "application/javascript": FileTypeCategory.SOURCE_CODE,
        "application/sql": FileTypeCategory.SOURCE_CODE,
        "application/x-zsh": FileTypeCategory.SOURCE_CODE,
        "application/x-sh": FileTypeCategory.SOURCE_CODE,
        "text/javascript": FileTypeCategory.SOURCE_CODE,
        "text/x-": FileTypeCategory.SOURCE_CODE,
        "text/html": FileTypeCategory.SOURCE_CODE,
        "text/css": FileTypeCategory.SOURCE_CODE,
        "inode/x-empty": FileTypeCategory.TEXT,
        "text/": FileTypeCategory.TEXT,
        "image/": FileTypeCategory.IMAGE,
        "font/": FileTypeCategory.BINARY,
    }
    # fmt: on

    def detect_file_type(self, file_path: Path, use_magic=False) -> FileTypeInfo:
        """
        Detect file type information, optionally using libmagic for MIME
        type detection.

        :param file_path: The path to the file to inspect.
        :type file_path: ``Path``.
        :param use_magic: Use libmagic instead of guessing from the name.
        :type use_magic: ``bool``
        :returns: File type information for ``file_path``.
        :rtype: ``FileTypeInfo``
        """
        file_path = Path(file_path)
        if not use_magic:
            return self._guess_file_type(file_path)

        import magic  # pylint: disable=import-outside-toplevel

        # Older file-magic releases do not define magic.error
        if hasattr(magic, "error"):
            magic_errors = (magic.error, OSError, ValueError)
        else:
            magic_errors = (OSError, ValueError)

        try:
            fm = magic.detect_from_filename(str(file_path))
        except magic_errors as err:
            _log_warn("Error detecting file type for %s: %s", str(file_path), err)
            return FileTypeInfo(
                "application/octet-stream", "unknown", FileTypeCategory.UNKNOWN
            )

        category = self._categorize_file(fm.mime_type, file_path)
        _log_debug_scan("Detected %s as %s", file_path, fm.mime_type)
        return FileTypeInfo(fm.mime_type, fm.name, category, fm.encoding)

    def _categorize_file(self, mime_type: str, file_path: Path) -> FileTypeCategory:
        """
        Categorize file based on MIME type and path patterns.

        :param mime_type: Detected file MIME type.
        :type mime_type: ``str``
        :param file_path: Path to the file to categorize.
        :type file_path: ``Path``
        :returns: File type categorization.
        :rtype: ``FileTypeCategory``
        """
        mime_type = mime_type.lower()
        if file_path.suffix == ".log" and mime_type.startswith("text/"):
            return FileTypeCategory.LOG

        for pattern, category in self.category_rules.items():
            if mime_type.startswith(pattern):
                return category

        if mime_type == "application/octet-stream":
            return FileTypeCategory.UNKNOWN
        return FileTypeCategory.BINARY

    def _guess_file_type(self, file_path: Path) -> FileTypeInfo:
        mime_type, description, encoding = _guess_file(file_path)
        category = self._categorize_file(mime_type, file_path)
        return FileTypeInfo(mime_type, description, category, encoding)


__all__ = [
    "FileTypeCategory",
    "FileTypeDetector",
    "FileTypeInfo",
    "fence_language",
]
