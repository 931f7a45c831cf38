"""
Utility behavioral tests (sentinel, storage helpers, mirrored properties).

Scope
- Validate the Unset sentinel and its use as the default of load().
- Validate that mirrored properties copy containers but keep records intact.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest import TestCase

from argot import utils
from argot.arguments import Descriptor
from argot.utils import Unset, UnsetType, coalesce, keyname, load, mirror, store


class Holder:
    items = mirror("items")

    def __init__(self, items):
        self._items = items


class TestUnset(TestCase):
    """Sentinel identity and behavior."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testLoadDefaultIsTheSentinel(self):
        self.assertIs(load.__defaults__[0], Unset)

    def testCoalesceKeepsFalseyValues(self):
        self.assertEqual(coalesce(Unset, 3), 3)
        self.assertEqual(coalesce(0, 3), 0)
        self.assertIsNone(coalesce(None, 3))

    def testExports(self):
        self.assertNotIn("rename", utils.__all__)
        self.assertIn("Unset", utils.__all__)


class TestStorage(TestCase):
    """store() and load() on attribute and mapping targets."""

    def testAttributes(self):
        target = SimpleNamespace()
        self.assertIs(load(target, "output"), Unset)
        store(target, "output", "a.out")
        self.assertEqual(load(target, "output"), "a.out")

    def testMappings(self):
        target = {}
        self.assertIs(load(target, "output"), Unset)
        self.assertIsNone(load(target, "output", None))
        store(target, "output", None)
        self.assertIsNone(load(target, "output"))

    def testKeyname(self):
        self.assertEqual(keyname("--word-size"), "word_size")
        self.assertEqual(keyname("sub-command"), "sub_command")


class TestMirror(TestCase):
    """Read-only copying properties."""

    def testCopiesTheContainer(self):
        holder = Holder([[1, 2]])
        holder.items.append([3])
        holder.items[0].append(9)
        self.assertEqual(holder._items, [[1, 2]])

    def testKeepsRecords(self):
        descriptor = Descriptor("o", "output", "output path")
        holder = Holder([descriptor])
        self.assertIs(holder.items[0], descriptor)
        self.assertEqual(holder.items[0].label, "-o/--output")

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            Holder([]).items = []

    def testPropertyName(self):
        self.assertEqual(Holder.items.fget.__name__, "items")


if __name__ == "__main__":
    unittest.main()
