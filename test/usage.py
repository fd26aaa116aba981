"""
Usage template tests.

Scope
- Required field extraction (plain and rest fields).
- Command-word counting (program name excluded).
- Alignment of fields against positionals and missing-field reporting.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cliaid.usage import *


class TestFields(TestCase):

    def testPlainAndRestFields(self):
        self.assertEqual(
            fields("tinify <filename> <imgs...> [OPTIONS]"),
            (UsageField("filename", False), UsageField("imgs", True)),
        )

    def testOptionalPlaceholdersIgnored(self):
        self.assertEqual(fields("app [name] [OPTIONS]"), ())

    def testUnbalancedBracket(self):
        self.assertEqual(fields("app <name"), ())

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            fields(None)


class TestCount(TestCase):

    def testCommandWords(self):
        self.assertEqual(count("tinify set-key <key> <mode>"), 1)
        self.assertEqual(count("go run -v <f1> [f2]"), 1)
        self.assertEqual(count("app remote add <url>"), 2)

    def testProgramOnly(self):
        self.assertEqual(count("tinify <imgs...>"), 0)
        self.assertEqual(count("tinify [OPTIONS]"), 0)
        self.assertEqual(count("tinify"), 0)
        self.assertEqual(count(""), 0)

    def testExtraWhitespace(self):
        self.assertEqual(count("  app   base64   <text>"), 1)


class TestParseUsage(TestCase):
    """Alignment of required fields against the positional vector."""

    def testRestFieldConsumesRemainder(self):
        match = parse_usage("tinify <filename> <imgs...>", ["a.txt", "1.png", "2.png"])
        self.assertEqual(match.required, ("filename", "imgs"))
        self.assertEqual(match.values, {"filename": "a.txt", "imgs": ["1.png", "2.png"]})
        self.assertEqual(match.missing, ())
        self.assertTrue(match.ok)

    def testMissingTrailingField(self):
        match = parse_usage("tinify <filename> <imgs...>", ["a.txt"])
        self.assertEqual(match.values, {"filename": "a.txt", "imgs": []})
        self.assertEqual(match.missing, ("imgs",))
        self.assertFalse(match.ok)

    def testNothingSupplied(self):
        match = parse_usage("tinify <filename> <imgs...>", [])
        self.assertEqual(match.values, {"filename": None, "imgs": []})
        self.assertEqual(match.missing, ("filename", "imgs"))

    def testCommandWordOffset(self):
        match = parse_usage("app base64 <text>", ["base64", "hello"])
        self.assertEqual(match.values, {"text": "hello"})
        self.assertEqual(match.missing, ())

    def testCommandWordOnly(self):
        match = parse_usage("app base64 <text>", ["base64"])
        self.assertEqual(match.values, {"text": None})
        self.assertEqual(match.missing, ("text",))

    def testMissingNeverExceedsRequired(self):
        match = parse_usage("app remote add <url>", [])
        self.assertEqual(match.missing, ("url",))

    def testExtraPositionalsIgnored(self):
        match = parse_usage("app set-key <key> <mode>", ["set-key", "k", "m", "extra"])
        self.assertEqual(match.values, {"key": "k", "mode": "m"})
        self.assertTrue(match.ok)

    def testNoFields(self):
        match = parse_usage("app [OPTIONS]", ["anything"])
        self.assertEqual(match, UsageMatch((), {}, ()))


if __name__ == "__main__":
    unittest.main()
