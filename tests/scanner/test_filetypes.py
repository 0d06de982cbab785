# Copyright Red Hat
#
# tests/scanner/test_filetypes.py - Yggdrasil file type tests
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
from unittest.mock import MagicMock, patch
from pathlib import Path
import unittest
import sys

from ygg.scanner.filetypes import (
    FileTypeCategory,
    FileTypeDetector,
    FileTypeInfo,
    fence_language,
)


class MagicError(Exception):
    pass


def _magic_module(mime_type="text/plain", name="ASCII text", encoding="us-ascii"):
    magic = MagicMock()
    magic.error = MagicError
    magic.detect_from_filename.return_value = MagicMock(
        mime_type=mime_type, name=name, encoding=encoding
    )
    # MagicMock treats "name" as the mock's own name.
    magic.detect_from_filename.return_value.name = name
    return magic


class TestFenceLanguage(unittest.TestCase):
    def test_mapped_languages(self):
        self.assertEqual(fence_language("src/main.rs"), "rust")
        self.assertEqual(fence_language("ygg/diff/engine.py"), "python")
        self.assertEqual(fence_language("paper.tex"), "latex")
        self.assertEqual(fence_language("README.md"), "markdown")
        self.assertEqual(fence_language("web/app.js"), "typescript")
        self.assertEqual(fence_language("web/app.tsx"), "typescript")

    def test_unmapped_extension(self):
        self.assertEqual(fence_language("config.toml"), "toml")

    def test_no_extension(self):
        self.assertEqual(fence_language("Makefile"), "text")
        self.assertEqual(fence_language("bin/run"), "text")


class TestFileTypeDetector(unittest.TestCase):
    def setUp(self):
        self.detector = FileTypeDetector()

    def test_guess_source_code(self):
        info = self.detector.detect_file_type(Path("ygg/command.py"))
        self.assertEqual(info.mime_type, "text/x-python")
        self.assertEqual(info.category, FileTypeCategory.SOURCE_CODE)
        self.assertTrue(info.is_text_like)

    def test_guess_plain_text(self):
        info = self.detector.detect_file_type("notes.txt")
        self.assertEqual(info.category, FileTypeCategory.TEXT)
        self.assertEqual(info.encoding, "utf-8")
        self.assertTrue(info.is_text_like)

    def test_guess_markdown_document(self):
        info = self.detector.detect_file_type("README.md")
        self.assertEqual(info.category, FileTypeCategory.DOCUMENT)
        self.assertTrue(info.is_text_like)

    def test_guess_config(self):
        info = self.detector.detect_file_type("pyproject.toml")
        self.assertEqual(info.category, FileTypeCategory.CONFIG)
        self.assertTrue(info.is_text_like)

    def test_guess_log(self):
        info = self.detector.detect_file_type("run.log")
        self.assertEqual(info.category, FileTypeCategory.LOG)
        self.assertTrue(info.is_text_like)

    def test_guess_file_name(self):
        info = self.detector.detect_file_type("project/Makefile")
        self.assertEqual(info.mime_type, "text/x-makefile")
        self.assertTrue(info.is_text_like)

    def test_guess_binary(self):
        for name, category in (
            ("logo.png", FileTypeCategory.IMAGE),
            ("dist/pkg.whl", FileTypeCategory.ARCHIVE),
            ("libfoo.so.1", FileTypeCategory.EXECUTABLE),
            ("manual.pdf", FileTypeCategory.DOCUMENT),
            ("cache.pyc", FileTypeCategory.BINARY),
        ):
            with self.subTest(name=name):
                info = self.detector.detect_file_type(name)
                self.assertEqual(info.category, category)
                self.assertFalse(info.is_text_like)
                self.assertEqual(info.encoding, "binary")

    def test_guess_unknown(self):
        info = self.detector.detect_file_type("data.unknownext")
        self.assertEqual(info.mime_type, "application/octet-stream")
        self.assertEqual(info.category, FileTypeCategory.UNKNOWN)
        self.assertFalse(info.is_text_like)

    def test_detect_with_magic(self):
        magic = _magic_module("text/x-script.python", "Python script")
        with patch.dict(sys.modules, {"magic": magic}):
            info = self.detector.detect_file_type("bin/tool", use_magic=True)
        magic.detect_from_filename.assert_called_once_with("bin/tool")
        self.assertEqual(info.category, FileTypeCategory.SOURCE_CODE)
        self.assertEqual(info.description, "Python script")
        self.assertEqual(info.encoding, "us-ascii")

    def test_detect_with_magic_binary(self):
        magic = _magic_module("application/x-executable", "ELF executable", "binary")
        with patch.dict(sys.modules, {"magic": magic}):
            info = self.detector.detect_file_type("bin/tool", use_magic=True)
        self.assertEqual(info.category, FileTypeCategory.EXECUTABLE)
        self.assertFalse(info.is_text_like)

    def test_detect_with_magic_log(self):
        magic = _magic_module("text/plain")
        with patch.dict(sys.modules, {"magic": magic}):
            info = self.detector.detect_file_type("var/app.log", use_magic=True)
        self.assertEqual(info.category, FileTypeCategory.LOG)

    def test_detect_with_magic_error(self):
        magic = _magic_module()
        magic.detect_from_filename.side_effect = MagicError("no such file")
        with patch.dict(sys.modules, {"magic": magic}):
            with self.assertLogs("ygg.scanner.filetypes", level="WARNING"):
                info = self.detector.detect_file_type("missing", use_magic=True)
        self.assertEqual(info.category, FileTypeCategory.UNKNOWN)


class TestFileTypeInfo(unittest.TestCase):
    def test_str(self):
        info = FileTypeInfo("text/plain", "plain text", FileTypeCategory.TEXT)
        self.assertEqual(
            str(info),
            "MIME type: text/plain, Category: text, Encoding: unknown, "
            "Description: plain text",
        )

    def test_text_document(self):
        info = FileTypeInfo("text/x-rst", "rst", FileTypeCategory.DOCUMENT)
        self.assertTrue(info.is_text_like)
        info = FileTypeInfo("application/pdf", "pdf", FileTypeCategory.DOCUMENT)
        self.assertFalse(info.is_text_like)
