# Copyright Red Hat
#
# tests/diff/test_structural.py - Yggdrasil block extension tests
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
import random
import unittest

from ygg.diff.structural import extend_block, is_boundary


class TestIsBoundary(unittest.TestCase):
    def test_blank_lines(self):
        for line in ("", " ", "\t", "    \t  "):
            with self.subTest(line=line):
                self.assertTrue(is_boundary(line))

    def test_definition_lines(self):
        lines = [
            "class Foo:",
            "def foo():",
            "    def method(self):",
            "async def run():",
            "fn main() {",
            "pub fn new() -> Self {",
            "func main() {",
            "function go() {",
            "@property",
            "    @staticmethod",
        ]
        for line in lines:
            with self.subTest(line=line):
                self.assertTrue(is_boundary(line))

    def test_non_boundary_lines(self):
        lines = [
            "x = 1",
            "classy = True",
            "define(x)",
            "    return value",
            "functional()",
            "# def commented():",
            "email@example.com",
        ]
        for line in lines:
            with self.subTest(line=line):
                self.assertFalse(is_boundary(line))


class TestExtendBlock(unittest.TestCase):
    def test_extend_identical_sequences(self):
        lines = ["a", "b", "c"]
        self.assertEqual(extend_block(lines, lines, 1, 1), (0, 3, 0, 3))

    def test_extend_at_offset(self):
        from_lines = ["a", "b", "c"]
        to_lines = ["z", "z", "a", "b", "c", "z"]
        self.assertEqual(extend_block(from_lines, to_lines, 0, 2), (0, 3, 2, 5))

    def test_seed_mismatch_is_empty(self):
        self.assertEqual(extend_block(["a"], ["b"], 0, 0), (0, 0, 0, 0))

    def test_boundary_seed_is_empty(self):
        lines = ["x", "", "y"]
        self.assertEqual(extend_block(lines, lines, 1, 1), (1, 1, 1, 1))

    def test_backward_stops_at_definition(self):
        lines = ["x", "def f():", "y", "z"]
        self.assertEqual(extend_block(lines, lines, 2, 2), (2, 4, 2, 4))

    def test_forward_stops_at_blank_line(self):
        lines = ["y", "z", "", "w"]
        self.assertEqual(extend_block(lines, lines, 0, 0), (0, 2, 0, 2))

    def test_forward_stops_at_difference(self):
        from_lines = ["a", "b", "c", "d"]
        to_lines = ["a", "b", "X", "d"]
        self.assertEqual(extend_block(from_lines, to_lines, 0, 0), (0, 2, 0, 2))

    def test_backward_stops_at_difference(self):
        from_lines = ["p", "a", "b"]
        to_lines = ["q", "a", "b"]
        self.assertEqual(extend_block(from_lines, to_lines, 2, 2), (1, 3, 1, 3))

    def test_extend_to_end_of_shorter_file(self):
        from_lines = ["a", "b", "c", "d"]
        to_lines = ["a", "b"]
        self.assertEqual(extend_block(from_lines, to_lines, 0, 0), (0, 2, 0, 2))

    def test_two_functions_not_joined(self):
        lines = ["def f():", "  return 1", "", "def g():", "  return 1"]
        self.assertEqual(extend_block(lines, lines, 1, 1), (1, 2, 1, 2))
        self.assertEqual(extend_block(lines, lines, 4, 4), (4, 5, 4, 5))

    def test_extend_random_sequences(self):
        """Check extension invariants on random inputs."""
        rng = random.Random(4096)
        vocabulary = ["a", "b", "c", "", "def f():", "@deco", "  x += 1"]

        for _ in range(300):
            from_lines = [rng.choice(vocabulary) for _ in range(rng.randint(1, 12))]
            to_lines = [rng.choice(vocabulary) for _ in range(rng.randint(1, 12))]
            from_start = rng.randrange(len(from_lines))
            to_start = rng.randrange(len(to_lines))

            f1, f2, t1, t2 = extend_block(from_lines, to_lines, from_start, to_start)

            self.assertEqual(f2 - f1, t2 - t1)
            if f1 == f2:
                self.assertEqual((f1, t1), (from_start, to_start))
                continue

            self.assertLessEqual(f1, from_start)
            self.assertLess(from_start, f2)
            self.assertEqual(from_start - f1, to_start - t1)
            self.assertEqual(from_lines[f1:f2], to_lines[t1:t2])
            for line in from_lines[f1:f2]:
                self.assertFalse(is_boundary(line))

            # Maximal in both directions.
            if f2 < len(from_lines) and t2 < len(to_lines):
                self.assertTrue(
                    from_lines[f2] != to_lines[t2] or is_boundary(from_lines[f2])
                )
            if f1 > 0 and t1 > 0:
                self.assertTrue(
                    from_lines[f1 - 1] != to_lines[t1 - 1]
                    or is_boundary(from_lines[f1 - 1])
                )
