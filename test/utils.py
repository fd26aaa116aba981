"""
Tests for the shared helpers.

Scope
- Unset sentinel: singleton identity, falsy semantics, finality, union support.
- coalesce / mirror.
- Value coercion: isnumeric, tonumber, coerce, toboolean, toarray, camelcase.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from cliaid.utils import *


class TestUnset(TestCase):
    """Semantic guarantees of the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(Unset, UnsetType())
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            class Child(UnsetType):  # NOQA: F-841
                pass

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(3, str | Unset))


class TestCoalesce(TestCase):

    def testUnsetReplaced(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyPreserved(self):
        for value in (None, 0, "", [], False):
            self.assertIs(coalesce(value, "fallback"), value)


class TestMirror(TestCase):

    def testReadOnlyCopy(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, [2]]

        holder = Holder()
        items = holder.items
        items.append(3)
        items[1].append(4)
        self.assertEqual(holder.items, [1, [2]])
        with self.assertRaises(AttributeError):
            holder.items = []

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            mirror(3)


class TestPackageMetadata(TestCase):

    def testVersionInfoMatchesVersion(self):
        import cliaid

        major, minor, micro, *_ = cliaid.version_info
        self.assertEqual(cliaid.__version__, "%d.%d.%d" % (major, minor, micro))
        self.assertEqual(cliaid.__title__, "cliaid")


class TestCoercion(TestCase):
    """Value coercion shared by the tokenizer and the resolver."""

    def testIsNumeric(self):
        for text in ("0", "15", "-2", "+3", "1.5", ".5", "5.", "1e3", "-1E-2", " 7 "):
            self.assertTrue(isnumeric(text), text)
        for text in ("", " ", "abc", "0x10", "1_000", "inf", "nan", "1e999", "1.2.3", "--1"):
            self.assertFalse(isnumeric(text), text)
        self.assertFalse(isnumeric(3))

    def testToNumber(self):
        self.assertEqual(tonumber("15"), 15)
        self.assertIsInstance(tonumber("15"), int)
        self.assertEqual(tonumber("007"), 7)
        self.assertEqual(tonumber("1.5"), 1.5)
        self.assertIsInstance(tonumber("1e3"), float)
        self.assertEqual(tonumber(4), 4)
        with self.assertRaises(ValueError):
            tonumber("abc")
        with self.assertRaises(ValueError):
            tonumber(True)

    def testCoerce(self):
        self.assertIs(coerce(True), True)
        self.assertIs(coerce(""), True)
        self.assertEqual(coerce("3"), 3)
        self.assertEqual(coerce("-2.5"), -2.5)
        self.assertEqual(coerce("hello"), "hello")
        self.assertEqual(coerce("true"), "true")

    def testWhitespaceStaysString(self):
        self.assertEqual(coerce(" "), " ")
        self.assertEqual(coerce("\t"), "\t")

    def testToBoolean(self):
        self.assertIs(toboolean(True), True)
        self.assertIs(toboolean("true"), True)
        self.assertIs(toboolean(""), True)
        for value in (False, "false", "hello", 1, 0, [True], "TRUE"):
            self.assertIs(toboolean(value), False, value)

    def testToArray(self):
        self.assertEqual(toarray(1), [1])
        original = [1, 2]
        copied = toarray(original)
        self.assertEqual(copied, [1, 2])
        self.assertIsNot(copied, original)

    def testCamelCase(self):
        self.assertEqual(camelcase("max-count"), "maxCount")
        self.assertEqual(camelcase("no-base64"), "noBase64")
        self.assertEqual(camelcase("dry-run-now"), "dryRunNow")
        self.assertEqual(camelcase("verbose"), "verbose")
        self.assertEqual(camelcase("a--b-"), "aB")
        with self.assertRaises(TypeError):
            camelcase(None)


if __name__ == "__main__":
    unittest.main()
