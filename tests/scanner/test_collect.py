# Copyright Red Hat
#
# tests/scanner/test_collect.py - Yggdrasil file collection tests
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
from unittest.mock import patch
from io import StringIO
import os

from ygg import YggPathError
from ygg.scanner.collect import (
    FileEntry,
    collect_files,
    count_lines,
    expand_paths,
    walk_files,
)
from ygg.snapshot.options import SnapshotOptions

from tests._util import TempDirTestCase

_TREE = {
    "README.md": "# Project\n\nIntro\n",
    "src/main.py": "import sys\n\nprint(sys.argv)\n",
    "src/util.py": "def f():\n    return 1\n",
    "src/lib.rs": "fn main() {}\n",
    "build/out.log": "built\n",
    "logo.png": b"\x89PNG\r\n\x1a\n\x00\x00",
    "data/blob": b"\xff\xfe\xfd",
    "notes": "plain notes\n",
}


class TestCountLines(TempDirTestCase):
    def test_count_lines(self):
        self.make_files({"a.txt": "1\n2\n3\n", "b.txt": "1\n2", "c.txt": ""})
        self.assertEqual(count_lines(self.path("a.txt")), 3)
        self.assertEqual(count_lines(self.path("b.txt")), 2)
        self.assertEqual(count_lines(self.path("c.txt")), 0)

    def test_count_lines_unreadable(self):
        self.make_files({"blob": b"\xff\xfe"})
        self.assertEqual(count_lines(self.path("blob")), 0)
        self.assertEqual(count_lines(self.path("missing")), 0)


class TestWalkFiles(TempDirTestCase):
    def test_walk_files_sorted(self):
        self.make_files({"b.txt": "", "a.txt": "", "sub/z.txt": "", "sub/y.txt": ""})
        rel = [os.path.relpath(p, self.root) for p in walk_files(self.root)]
        self.assertEqual(
            rel,
            ["a.txt", "b.txt", os.path.join("sub", "y.txt"), os.path.join("sub", "z.txt")],
        )

    def test_walk_files_skips_symlinks(self):
        self.make_files({"a.txt": "a\n"})
        os.symlink(self.path("a.txt"), self.path("link.txt"))
        self.assertEqual(list(walk_files(self.root)), [self.path("a.txt")])


class TestCollectFiles(TempDirTestCase):
    def setUp(self):
        super().setUp()
        self.make_files(_TREE)

    def _collect(self, **kwargs):
        entries = collect_files(SnapshotOptions(root=self.root, **kwargs))
        return [os.path.relpath(entry.path, self.root) for entry in entries]

    def test_collect_all(self):
        self.assertEqual(
            self._collect(),
            [
                "README.md",
                os.path.join("build", "out.log"),
                os.path.join("data", "blob"),
                "logo.png",
                "notes",
                os.path.join("src", "lib.rs"),
                os.path.join("src", "main.py"),
                os.path.join("src", "util.py"),
            ],
        )

    def test_collect_line_counts(self):
        entries = collect_files(SnapshotOptions(root=self.root, show=("py",)))
        self.assertEqual(
            entries,
            [
                FileEntry(self.path("src", "main.py"), 3),
                FileEntry(self.path("src", "util.py"), 2),
            ],
        )

    def test_collect_show_extensions(self):
        self.assertEqual(
            self._collect(show=("rs", "md")),
            ["README.md", os.path.join("src", "lib.rs")],
        )

    def test_collect_ignore(self):
        self.assertEqual(
            self._collect(ignore=("build", "data/", "*.png", "notes", "src/*.py")),
            ["README.md", os.path.join("src", "lib.rs")],
        )

    def test_collect_only(self):
        self.assertEqual(
            self._collect(only=("src", "README.md")),
            [
                "README.md",
                os.path.join("src", "lib.rs"),
                os.path.join("src", "main.py"),
                os.path.join("src", "util.py"),
            ],
        )

    def test_collect_blacklist_file(self):
        self.make_files({".yggignore": "# generated\nbuild\ndata\n*.png\n"})
        self.assertEqual(
            self._collect(blacklist=self.path(".yggignore")),
            [
                "README.md",
                "notes",
                os.path.join("src", "lib.rs"),
                os.path.join("src", "main.py"),
                os.path.join("src", "util.py"),
            ],
        )

    def test_collect_blacklist_stdin(self):
        with patch("sys.stdin", StringIO("src\nbuild\ndata\n")):
            self.assertEqual(
                self._collect(blacklist="-"), ["README.md", "logo.png", "notes"]
            )

    def test_collect_manifest(self):
        self.make_files({"manifest.txt": "src/main.py\nnotes\n"})
        self.assertEqual(
            self._collect(manifest=self.path("manifest.txt")),
            ["notes", os.path.join("src", "main.py")],
        )

    def test_collect_text_only(self):
        self.assertEqual(
            self._collect(text_only=True),
            [
                "README.md",
                os.path.join("build", "out.log"),
                "notes",
                os.path.join("src", "lib.rs"),
                os.path.join("src", "main.py"),
                os.path.join("src", "util.py"),
            ],
        )

    def test_collect_not_a_directory(self):
        with self.assertRaises(YggPathError):
            collect_files(SnapshotOptions(root=self.path("README.md")))
        with self.assertRaises(YggPathError):
            collect_files(SnapshotOptions(root=self.path("missing")))


class TestExpandPaths(TempDirTestCase):
    def test_expand_paths(self):
        self.make_files({"old/a.txt": "", "old/sub/b.txt": "", "single.txt": ""})
        expanded = expand_paths([self.path("old"), self.path("single.txt")])
        self.assertEqual(
            expanded,
            [
                (self.path("old", "a.txt"), "a.txt"),
                (self.path("old", "sub", "b.txt"), os.path.join("sub", "b.txt")),
                (self.path("single.txt"), "single.txt"),
            ],
        )

    def test_expand_missing_path(self):
        self.make_files({"a.txt": ""})
        with self.assertLogs("ygg.scanner.collect", level="WARNING") as logs:
            expanded = expand_paths([self.path("missing"), self.path("a.txt")])
        self.assertEqual(expanded, [(self.path("a.txt"), "a.txt")])
        self.assertIn("Path not found", logs.output[0])
