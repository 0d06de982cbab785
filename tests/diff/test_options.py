# Copyright Red Hat
#
# tests/diff/test_options.py - Yggdrasil diff options tests
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
from argparse import Namespace
import dataclasses
import unittest

from ygg.diff.options import DiffOptions


class TestDiffOptions(unittest.TestCase):
    def test_defaults(self):
        options = DiffOptions()
        self.assertEqual(options.thresholds, (5, 3, 1))
        self.assertTrue(options.carry_visited)
        self.assertTrue(options.inline_diffs)
        self.assertTrue(options.block_matches)
        self.assertEqual(options.context_lines, 3)
        self.assertFalse(options.use_markdown)
        self.assertIsNone(options.out)

    def test_frozen(self):
        options = DiffOptions()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            options.json = True

    def test_use_markdown(self):
        self.assertTrue(DiffOptions(markdown=True).use_markdown)
        self.assertTrue(DiffOptions(out="report.md").use_markdown)
        self.assertFalse(DiffOptions(out="report.txt").use_markdown)

    def test_from_cmd_args(self):
        cmd_args = Namespace(
            thresholds=[4, 2],
            carry_visited=False,
            inline_diffs=True,
            block_matches=True,
            context_lines=None,
            markdown=True,
            align_tags=False,
            json=False,
            pretty=False,
            color="never",
            out=None,
            summary=True,
            diff_from=["a"],
        )
        options = DiffOptions.from_cmd_args(cmd_args)
        self.assertEqual(options.thresholds, (4, 2))
        self.assertFalse(options.carry_visited)
        self.assertEqual(options.context_lines, 3)
        self.assertTrue(options.markdown)
        self.assertEqual(options.color, "never")

    def test_from_cmd_args_partial(self):
        options = DiffOptions.from_cmd_args(Namespace(json=True, pretty=True))
        self.assertTrue(options.json)
        self.assertTrue(options.pretty)
        self.assertEqual(options.thresholds, (5, 3, 1))

    def test_str(self):
        text = str(DiffOptions(thresholds=(5, 1)))
        self.assertIn("thresholds=5 1\n", text)
        self.assertIn("carry_visited=True", text)
