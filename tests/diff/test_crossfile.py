# Copyright Red Hat
#
# tests/diff/test_crossfile.py - Yggdrasil grouping and voting tests
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest

from ygg.diff.crossfile import group_and_vote
from ygg.diff.difftypes import (
    BlockMatch,
    BlockWithVote,
    GroupedMatches,
    LineRange,
    blocks_covering,
)
from ygg.diff.matcher import match_blocks_multi

_BLOCK = "p = 1\nq = 2\nr = 3\ns = 4\n"


def _match(from_file, f1, f2, to_file, t1, t2):
    return BlockMatch(from_file, LineRange(f1, f2), to_file, LineRange(t1, t2))


class TestGroupAndVote(unittest.TestCase):
    def test_single_pair(self):
        from_files = [("a.txt", "x\ny\nz\nw\nq\n")]
        to_files = [("b.txt", "x\ny\nz\nw\nq\n")]
        matches = match_blocks_multi(from_files, to_files)
        groups = group_and_vote(matches, from_files)
        self.assertEqual(len(groups), 1)
        self.assertEqual(groups[0].key, ("a.txt", "b.txt"))
        self.assertEqual(
            groups[0].blocks,
            (BlockWithVote(_match("a.txt", 0, 5, "b.txt", 0, 5), False),),
        )
        self.assertEqual(groups[0].blocks[0].tag, "MOVED")

    def test_copied_block_is_addition(self):
        from_files = [("a.txt", _BLOCK)]
        to_files = [("b.txt", _BLOCK), ("c.txt", _BLOCK)]
        matches = match_blocks_multi(from_files, to_files)
        self.assertEqual(len(matches), 2)

        groups = group_and_vote(matches, from_files)
        self.assertEqual([g.key for g in groups], [("a.txt", "b.txt"), ("a.txt", "c.txt")])
        self.assertFalse(groups[0].blocks[0].is_addition)
        self.assertTrue(groups[1].blocks[0].is_addition)
        self.assertEqual(groups[1].blocks[0].tag, "ADDED")

    def test_voting_follows_match_order(self):
        from_files = [("a.txt", _BLOCK)]
        matches = [
            _match("a.txt", 0, 4, "c.txt", 0, 4),
            _match("a.txt", 0, 4, "b.txt", 0, 4),
        ]
        groups = group_and_vote(matches, from_files)
        by_key = {g.key: g for g in groups}
        self.assertFalse(by_key[("a.txt", "c.txt")].blocks[0].is_addition)
        self.assertTrue(by_key[("a.txt", "b.txt")].blocks[0].is_addition)

    def test_voting_across_source_files(self):
        from_files = [("a.txt", _BLOCK), ("d.txt", "zzz\n" + _BLOCK)]
        matches = [
            _match("a.txt", 0, 4, "b.txt", 0, 4),
            _match("d.txt", 1, 5, "c.txt", 2, 6),
        ]
        groups = group_and_vote(matches, from_files)
        self.assertEqual([g.key for g in groups], [("a.txt", "b.txt"), ("d.txt", "c.txt")])
        self.assertFalse(groups[0].blocks[0].is_addition)
        self.assertTrue(groups[1].blocks[0].is_addition)

    def test_groups_sorted_by_pair(self):
        from_files = [("a.txt", "1\n2\n"), ("m.txt", "1\n2\n3\n")]
        matches = [
            _match("m.txt", 2, 3, "z.txt", 0, 1),
            _match("a.txt", 0, 1, "z.txt", 0, 1),
            _match("a.txt", 1, 2, "b.txt", 0, 1),
        ]
        groups = group_and_vote(matches, from_files)
        self.assertEqual(
            [g.key for g in groups],
            [("a.txt", "b.txt"), ("a.txt", "z.txt"), ("m.txt", "z.txt")],
        )

    def test_blocks_keep_match_order(self):
        from_files = [("a.txt", "1\n2\n3\n")]
        matches = [
            _match("a.txt", 2, 3, "b.txt", 0, 1),
            _match("a.txt", 0, 1, "b.txt", 2, 3),
        ]
        (group,) = group_and_vote(matches, from_files)
        self.assertEqual([v.block for v in group.blocks], matches)

    def test_unknown_source_file(self):
        matches = [
            _match("missing.txt", 0, 2, "b.txt", 0, 2),
            _match("missing.txt", 0, 2, "c.txt", 0, 2),
        ]
        groups = group_and_vote(matches, [])
        self.assertEqual(len(groups), 2)
        for group in groups:
            self.assertFalse(group.blocks[0].is_addition)

    def test_no_matches(self):
        self.assertEqual(group_and_vote([], [("a.txt", _BLOCK)]), [])


class TestDiffTypes(unittest.TestCase):
    def test_line_range(self):
        lr = LineRange(2, 5)
        self.assertEqual(len(lr), 3)
        self.assertIn(2, lr)
        self.assertIn(4, lr)
        self.assertNotIn(5, lr)
        self.assertEqual(lr.display(), "3–5")
        self.assertEqual(lr.to_dict(), {"start": 2, "end": 5})

    def test_block_match_mismatched_lengths(self):
        with self.assertRaises(ValueError):
            _match("a", 0, 2, "b", 0, 3)

    def test_block_match_empty(self):
        with self.assertRaises(ValueError):
            _match("a", 1, 1, "b", 1, 1)

    def test_block_match_to_dict(self):
        self.assertEqual(
            _match("a", 0, 2, "b", 3, 5).to_dict(),
            {
                "from_file": "a",
                "from_range": {"start": 0, "end": 2},
                "to_file": "b",
                "to_range": {"start": 3, "end": 5},
            },
        )

    def test_blocks_covering(self):
        first = BlockWithVote(_match("a", 0, 2, "b", 0, 2), False)
        second = BlockWithVote(_match("a", 1, 3, "b", 4, 6), True)
        group = GroupedMatches("a", "b", (first, second))
        self.assertEqual(blocks_covering(group, 0), [first])
        self.assertEqual(blocks_covering(group, 1), [first, second])
        self.assertEqual(blocks_covering(group, 3), [])
        self.assertEqual(group.to_dict()["blocks"][1]["is_addition"], True)
