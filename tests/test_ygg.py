# Copyright Red Hat
#
# tests/test_ygg.py - Yggdrasil global definitions tests
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
import logging

import ygg
from ygg import (
    SubsystemFilter,
    YGG_DEBUG_ALL,
    YGG_DEBUG_DIFF,
    YGG_DEBUG_SCAN,
    YGG_SUBSYSTEM_DIFF,
    YGG_SUBSYSTEM_SCAN,
    YggArgumentError,
    YggError,
    YggNotFoundError,
    YggPathError,
    get_debug_mask,
    read_text,
    set_debug_mask,
    split_lines,
)

from tests._util import TempDirTestCase


def _record(level, subsystem=None):
    record = logging.LogRecord("ygg.test", level, __file__, 1, "msg", (), None)
    if subsystem:
        record.subsystem = subsystem
    return record


class TestSplitLines(unittest.TestCase):
    def test_split_lines(self):
        self.assertEqual(split_lines(""), [])
        self.assertEqual(split_lines("a"), ["a"])
        self.assertEqual(split_lines("a\n"), ["a"])
        self.assertEqual(split_lines("a\nb"), ["a", "b"])
        self.assertEqual(split_lines("a\n\n"), ["a", ""])
        self.assertEqual(split_lines("\n"), [""])

    def test_split_lines_crlf(self):
        self.assertEqual(split_lines("a\r\nb\r\n"), ["a", "b"])
        self.assertEqual(split_lines("a\r\r\n"), ["a\r"])


class TestReadText(TempDirTestCase):
    def test_read_text(self):
        path = self.make_files({"a.txt": "one\r\ntwo\n"})[0]
        self.assertEqual(read_text(path), "one\r\ntwo\n")

    def test_read_text_binary(self):
        path = self.make_files({"blob": b"\xff\xfe\xfa"})[0]
        self.assertIsNone(read_text(path))

    def test_read_text_missing(self):
        self.assertIsNone(read_text(self.path("missing")))


class TestDebugMask(unittest.TestCase):
    def setUp(self):
        self.addCleanup(set_debug_mask, 0)

    def test_set_get_debug_mask(self):
        set_debug_mask(YGG_DEBUG_SCAN | YGG_DEBUG_DIFF)
        self.assertEqual(get_debug_mask(), YGG_DEBUG_SCAN | YGG_DEBUG_DIFF)
        set_debug_mask(YGG_DEBUG_ALL)
        self.assertEqual(get_debug_mask(), YGG_DEBUG_ALL)
        set_debug_mask(0)
        self.assertEqual(get_debug_mask(), 0)

    def test_invalid_debug_mask(self):
        with self.assertRaises(ValueError):
            set_debug_mask(-1)
        with self.assertRaises(ValueError):
            set_debug_mask(YGG_DEBUG_ALL + 1)


class TestSubsystemFilter(unittest.TestCase):
    def setUp(self):
        self.addCleanup(set_debug_mask, 0)

    def test_non_debug_records_pass(self):
        log_filter = SubsystemFilter("ygg")
        self.assertTrue(log_filter.filter(_record(logging.INFO, YGG_SUBSYSTEM_DIFF)))
        self.assertTrue(log_filter.filter(_record(logging.WARNING)))

    def test_debug_without_subsystem_passes(self):
        self.assertTrue(SubsystemFilter("ygg").filter(_record(logging.DEBUG)))

    def test_debug_subsystems(self):
        log_filter = SubsystemFilter("ygg")
        self.assertFalse(log_filter.filter(_record(logging.DEBUG, YGG_SUBSYSTEM_DIFF)))
        log_filter.set_debug_subsystems([YGG_SUBSYSTEM_DIFF])
        self.assertTrue(log_filter.filter(_record(logging.DEBUG, YGG_SUBSYSTEM_DIFF)))
        self.assertFalse(log_filter.filter(_record(logging.DEBUG, YGG_SUBSYSTEM_SCAN)))

    def test_filter_inherits_debug_mask(self):
        set_debug_mask(YGG_DEBUG_SCAN)
        log_filter = SubsystemFilter("ygg")
        self.assertTrue(log_filter.filter(_record(logging.DEBUG, YGG_SUBSYSTEM_SCAN)))


class TestErrors(unittest.TestCase):
    def test_error_hierarchy(self):
        for error in (YggPathError, YggNotFoundError, YggArgumentError):
            self.assertTrue(issubclass(error, YggError))

    def test_version(self):
        self.assertEqual(ygg.__version__, "0.4.0")
