"""
Wrapping and layout option tests.

Scope
- Validate greedy breaking at spaces, hard breaks and continuation indentation.
- Validate that no wrapped line exceeds the configured width.
- Validate HelpOptions argument checking.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot.wrapping import HelpOptions

TEXT = (
    "bind the parsed value into the namespace under the destination name; "
    "supercalifragilisticexpialidocious tokens are broken hard when no space fits "
    "and short words keep flowing"
)


class TestWrap(TestCase):
    """Greedy word wrap."""

    def testBreaksBeforeOverflowingWord(self):
        options = HelpOptions(width=20)
        self.assertEqual(options.wrap(0, "aaaa bbbb cccc dddd eeee"), "aaaa bbbb cccc dddd\neeee")

    def testContinuationIsIndentedToPrefix(self):
        options = HelpOptions(width=12)
        self.assertEqual(options.wrap(4, "aaaa bbbb cccc"), "aaaa\n    bbbb\n    cccc")

    def testHardBreakAtWidth(self):
        options = HelpOptions(width=4)
        self.assertEqual(options.wrap(0, "abcdefghij"), "abcd\nefgh\nij")

    def testTrailingSpaceIsDropped(self):
        options = HelpOptions(width=2)
        self.assertEqual(options.wrap(0, "ab "), "ab")

    def testShortTextIsUntouched(self):
        options = HelpOptions()
        self.assertEqual(options.wrap(30, "print this dialog"), "print this dialog")
        self.assertEqual(options.wrap(10, ""), "")

    def testLinesNeverExceedWidth(self):
        prefix = 5
        for width in range(10, 81):
            with self.subTest(width=width):
                lines = HelpOptions(width=width).wrap(prefix, TEXT).split("\n")
                self.assertLessEqual(len(lines[0]) + prefix, width)
                for line in lines[1:]:
                    self.assertLessEqual(len(line), width)
                    self.assertTrue(line.startswith(" " * prefix))

    def testWrappingKeepsEveryWord(self):
        wrapped = HelpOptions(width=40).wrap(8, TEXT)
        self.assertEqual(wrapped.split()[:5], TEXT.split()[:5])
        self.assertEqual(wrapped.split()[-1], "flowing")


class TestHelpOptions(TestCase):
    """Construction and derived values."""

    def testDefaults(self):
        options = HelpOptions()
        self.assertEqual(options.width, 80)
        self.assertEqual(options.indent, 4)
        self.assertEqual(options.group_depth, 8)
        self.assertEqual(options.spacing(), "\n")
        self.assertEqual(options.use_prefix, "usage:")
        self.assertTrue(options.line_after_wrap)

    def testSpacingFollowsLinesBetween(self):
        self.assertEqual(HelpOptions(lines_between=2).spacing(), "\n\n")
        self.assertEqual(HelpOptions(lines_between=0).spacing(), "")

    def testRejectsBadValues(self):
        with self.assertRaises(ValueError):
            HelpOptions(width=0)
        with self.assertRaises(ValueError):
            HelpOptions(indent=-1)
        with self.assertRaises(TypeError):
            HelpOptions(width="80")
        with self.assertRaises(TypeError):
            HelpOptions(indent=True)
        with self.assertRaises(TypeError):
            HelpOptions(use_prefix=None)

    def testKeywordOnly(self):
        with self.assertRaises(TypeError):
            HelpOptions(80)


if __name__ == "__main__":
    unittest.main()
