"""
Outcome and fault rendering tests.

Scope
- FaultCode normalization and __main__.__codes__ overrides.
- Outcome status/fatal/truthiness and default context.
- Fault messages, hints and plain rendering.
- InvalidCommandRegistrationWarning formatting.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured with an in-memory rich Console (no colors).
"""

from __future__ import annotations

import io
import sys
import unittest
from unittest import TestCase

from rich.console import Console

from cliaid.outcomes import *


def plain(renderable):
    console = Console(file=io.StringIO(), width=200, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestFaultCode(TestCase):

    def tearDown(self):
        vars(sys.modules["__main__"]).pop("__codes__", None)

    def testNormalizeDefault(self):
        self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "11101")
        self.assertEqual(FaultCode.MISSING_REQUIRED_FIELDS.normalize(), "11125")

    def testNormalizeOverride(self):
        sys.modules["__main__"].__codes__ = {FaultCode.UNKNOWN_COMMAND: "E-CMD"}
        self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "E-CMD")
        self.assertEqual(FaultCode.UNDECLARED_FLAG.normalize(), "12113")


class TestOutcome(TestCase):

    def testSuccessOutcomes(self):
        for outcome in (ShowHelpRequested(), ShowVersionRequested(), Idle(), UndeclaredFlag(["foo"])):
            self.assertFalse(outcome.fatal)
            self.assertEqual(outcome.status, 0)
            self.assertTrue(outcome)

    def testFailureOutcomes(self):
        for outcome in (MissingRequiredFields(["text"], "app base64 <text>"), UnknownCommand("nope")):
            self.assertTrue(outcome.fatal)
            self.assertEqual(outcome.status, 1)
            self.assertFalse(outcome)

    def testDefaultContext(self):
        outcome = Idle()
        self.assertIsNone(outcome.options)
        self.assertEqual(outcome.prog, "cli")
        self.assertIsNone(outcome.code)

    def testContext(self):
        outcome = Idle(options={"help": False}, prog="tinify")
        self.assertEqual(outcome.options, {"help": False})
        self.assertEqual(outcome.prog, "tinify")

    def testRepr(self):
        self.assertEqual(repr(Idle()), "Idle()")
        self.assertEqual(repr(UndeclaredFlag(["foo"])), "UndeclaredFlag(keys=('foo',))")


class TestFaults(TestCase):

    def testMissingRequiredFieldsMessage(self):
        fault = MissingRequiredFields(["text"], "app base64 <text>")
        self.assertEqual(fault.code, FaultCode.MISSING_REQUIRED_FIELDS)
        self.assertEqual(fault.message, "missing required field <text>")
        self.assertEqual(fault.hint, "usage: app base64 <text>")
        fault = MissingRequiredFields(["key", "mode"], "")
        self.assertEqual(fault.message, "missing required fields <key>, <mode>")
        self.assertEqual(fault.hint, "")

    def testUnknownCommandHint(self):
        fault = UnknownCommand("bas64", ["base64"], prog="tinify")
        self.assertEqual(fault.message, "unknown command 'bas64'")
        self.assertIn("did you mean 'base64'?", fault.hint)
        self.assertIn("tinify --help", fault.hint)
        fault = UnknownCommand("zzz", prog="tinify")
        self.assertEqual(fault.hint, "run 'tinify --help' to see available commands")

    def testUndeclaredFlag(self):
        fault = UndeclaredFlag(["foo", "bar"])
        self.assertEqual(fault.key, "foo")
        self.assertEqual(fault.message, "undeclared flags 'foo', 'bar'")
        self.assertEqual(UndeclaredFlag(["foo"]).message, "undeclared flag 'foo'")

    def testPlainRender(self):
        output = plain(MissingRequiredFields(["text"], "app base64 <text>", prog="app").render(colorful=False))
        lines = output.splitlines()
        self.assertEqual(lines[0], "[ app — 11125 | Missing Required Fields ]")
        self.assertEqual(lines[1], "missing required field <text>")
        self.assertEqual(lines[2], " → usage: app base64 <text>")

    def testRenderWithoutHint(self):
        output = plain(MissingRequiredFields(["text"], "").render(colorful=False))
        self.assertEqual(len(output.splitlines()), 2)

    def testRichProtocol(self):
        output = plain(UnknownCommand("zzz", prog="tinify"))
        self.assertIn("11101", output)
        self.assertIn("Unknown Command", output)


class TestRegistrationWarning(TestCase):

    def testStr(self):
        warning = InvalidCommandRegistrationWarning("bad name", hint="use a string")
        self.assertEqual(str(warning), "bad name (use a string)")
        self.assertEqual(str(InvalidCommandRegistrationWarning("bad name")), "bad name")
        self.assertEqual(warning.code, FaultCode.INVALID_COMMAND_REGISTRATION)
        self.assertTrue(issubclass(InvalidCommandRegistrationWarning, Warning))


if __name__ == "__main__":
    unittest.main()
