"""
Faults module behavioral tests (messages, ownership, rendering, surfacing).

Scope
- Messages reproduce the offending token as typed, with its ordinal position.
- into_owned() detaches faults from the argument list without changing the message.
- ParseExit bundles faults in order and converts them all.
- trigger(): raise vs print-and-exit vs deferred; __codes__/__docs__ host hooks.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering goes to an in-memory rich Console patched over the module console.
"""
import copy
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

import argfold.faults
from argfold.faults import *
from argfold.tokens import OwnToken, tokenize


def lexed(*args):
    return list(tokenize(list(args)))


class TestMessages(TestCase):
    """Behavioral tests for fault messages."""

    def testUnknownOptionLocated(self):
        _, token = lexed("a", "-x")
        fault = UnknownOptionError(token=token)
        self.assertEqual(str(fault), "unknown option '-x' at second position")
        self.assertIs(fault.token, token)
        self.assertEqual(fault.code, FaultCode.UNKNOWN_OPTION)

    def testValueIsPartOfTheToken(self):
        token, = lexed("--level", "3")
        self.assertEqual(
            str(UnexpectedValueError(token=token)),
            "flag '--level 3' at first position cannot take a value"
        )

    def testOwnedTokenHasNoPosition(self):
        fault = UnexpectedMultiError(token=OwnToken.long("out", "a"))
        self.assertEqual(str(fault), "option '--out a' was already provided")

    def testExpectedValueHint(self):
        token, = lexed("--name")
        fault = ExpectedValueError(token=token)
        self.assertEqual(str(fault), "option '--name' at first position requires a value")
        self.assertEqual(fault.hint, "pass a value after a space (for example: --name <value>)")

    def testPositionalFaults(self):
        _, token = lexed("-a", "b", "c")
        self.assertEqual(
            str(UnexpectedPositionalError(token=token)),
            "unexpected positional argument 'c' at third position"
        )
        self.assertEqual(
            str(ExpectedPositionalError(token=OwnToken.short("q"))),
            "expected a positional argument, found '-q'"
        )

    def testTooManyOptions(self):
        tokens = lexed("-vvv")
        self.assertEqual(
            str(TooManyOptionsError(token=tokens[2])),
            "option '-v' at first position was repeated too many times"
        )

    def testRequiredOption(self):
        fault = RequiredOptionError(key="output")
        self.assertEqual(str(fault), "missing required option 'output'")
        self.assertEqual(fault.key, "output")
        self.assertIsNone(fault.token)
        self.assertEqual(fault.hint, "add the option 'output'")

    def testRequiredOptionNeedsKey(self):
        with self.assertRaises(TypeError):
            RequiredOptionError()

    def testValueParse(self):
        _, token = lexed("-n", "-j", "x")
        error = ValueError("not a number")
        fault = ValueParseError(token=token, payload=error)
        self.assertEqual(str(fault), "invalid value for '-j x' at second position: not a number")
        self.assertIs(fault.payload, error)
        self.assertEqual(str(ValueParseError(payload="bad")), "invalid value: bad")

    def testValueParseNeedsPayload(self):
        with self.assertRaises(TypeError):
            ValueParseError(token=OwnToken.positional("x"))

    def testExplicitMessage(self):
        fault = UnknownOptionError("no such thing", token=OwnToken.short("z"))
        self.assertEqual(str(fault), "no such thing")
        self.assertEqual(fault.token, OwnToken.short("z"))

    def testMetadataOverrides(self):
        fault = UnknownOptionError(token=OwnToken.short("z"), title="nope", hint="try -y")
        self.assertEqual(fault.title, "nope")
        self.assertEqual(fault.hint, "try -y")

    def testEquality(self):
        token, = lexed("-z")
        self.assertEqual(UnknownOptionError(token=token), UnknownOptionError(token=token))
        self.assertNotEqual(UnknownOptionError(token=token), UnexpectedMultiError(token=token))


class TestOwnership(TestCase):
    """Behavioral tests for view vs owned faults."""

    def testIntoOwnedKeepsMessage(self):
        args = ["a", "--out", "x"]
        _, token = tokenize(args)
        fault = UnexpectedMultiError(token=token)
        owned = fault.into_owned()

        self.assertFalse(fault.is_owned)
        self.assertTrue(owned.is_owned)
        self.assertIsInstance(owned.token, OwnToken)
        self.assertEqual(str(owned), str(fault))
        self.assertEqual(owned, fault)

        args[2] = "changed"
        self.assertEqual(owned.token.value, "x")
        self.assertEqual(fault.token.value, "changed")

    def testTokenFreeFaultIsOwned(self):
        fault = RequiredOptionError(key="a")
        self.assertTrue(fault.is_owned)
        self.assertIs(fault.into_owned(), fault)

    def testPayloadCarriedUnchanged(self):
        token, = lexed("--n", "x")
        error = ValueError("boom")
        owned = ValueParseError(token=token, payload=error).into_owned()
        self.assertIs(owned.payload, error)
        self.assertTrue(owned.is_owned)

    def testPayloadWithIntoOwnedConverted(self):
        class Payload:
            def __init__(self, owned=False):
                self.owned = owned

            def into_owned(self):
                return Payload(True)

            def __str__(self):
                return "payload"

        token, = lexed("--n", "x")
        fault = ValueParseError(token=token, payload=Payload())
        self.assertFalse(fault.is_owned)
        self.assertTrue(fault.into_owned().payload.owned)

    def testParseExitIntoOwned(self):
        tokens = lexed("-a", "-b")
        group = ParseExit([UnknownOptionError(token=tokens[0]), UnknownOptionError(token=tokens[1])])
        owned = group.into_owned()
        self.assertIsInstance(owned, ParseExit)
        self.assertEqual(len(owned.exceptions), 2)
        self.assertTrue(all(fault.is_owned for fault in owned.exceptions))
        self.assertEqual([str(fault) for fault in owned.exceptions], [str(fault) for fault in group.exceptions])

    def testParseExitIsExceptionGroup(self):
        group = ParseExit([RequiredOptionError(key="a")])
        self.assertIsInstance(group, ExceptionGroup)
        self.assertEqual(group.message, "bad arguments")
        match, rest = group.split(RequiredOptionError)
        self.assertIsInstance(match, ParseExit)
        self.assertIsNone(rest)


class TestSurfacing(TestCase):
    """Behavioral tests for trigger(), rendering and host hooks."""

    def setUp(self):
        self.buffer = io.StringIO()
        patcher = mock.patch.object(
            argfold.faults, "console",
            Console(file=self.buffer, width=100, color_system=None, legacy_windows=False)
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def testTriggerRaisesOutsideShell(self):
        fault = RequiredOptionError(key="a")
        with self.assertRaises(RequiredOptionError):
            trigger(fault)
        self.assertEqual(self.buffer.getvalue(), "")

    def testTriggerExitsInShell(self):
        with self.assertRaises(SystemExit) as context:
            trigger(UnknownOptionError(token=OwnToken.short("x")), shell=True, colorful=False)
        self.assertEqual(context.exception.code, 1)
        output = self.buffer.getvalue()
        self.assertIn("[ argfold — 11111 | Unknown Option ]", output)
        self.assertIn("unknown option '-x'", output)
        self.assertIn("→ check the spelling", output)

    def testTriggerDeferred(self):
        self.assertIsNone(trigger(RequiredOptionError(key="b"), shell=True, deferred=True, colorful=False))
        self.assertIn("missing required option 'b'", self.buffer.getvalue())

    def testTriggerFancyPanel(self):
        trigger(RequiredOptionError(key="b"), shell=True, deferred=True, fancy=True, colorful=False)
        output = self.buffer.getvalue()
        self.assertIn("Missing Required Option", output)
        self.assertIn("╭", output)

    def testTriggerGroup(self):
        tokens = lexed("-a", "-b")
        group = ParseExit([UnknownOptionError(token=tokens[0]), UnknownOptionError(token=tokens[1])])
        with self.assertRaises(SystemExit):
            trigger(group, shell=True, colorful=False)
        output = self.buffer.getvalue()
        self.assertIn("Bad Arguments", output)
        self.assertLess(output.index("'-a'"), output.index("'-b'"))

    def testTriggerGroupOutsideShell(self):
        group = ParseExit([RequiredOptionError(key="a")])
        with self.assertRaises(ParseExit):
            trigger(group)

    def testTriggerRejectsPlainExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))

    def testReplaceOverridesOptions(self):
        fault = RequiredOptionError(key="a")
        replaced = copy.replace(fault, shell=True)
        self.assertTrue(replaced.options["shell"])
        self.assertEqual(str(replaced), str(fault))
        self.assertNotIn("shell", fault.options)

    def testHostCodesAndProg(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__codes__", {FaultCode.REQUIRED_OPTION: "E-REQ"}, create=True), \
                mock.patch.object(main, "__prog__", "mytool", create=True):
            self.assertEqual(FaultCode.REQUIRED_OPTION.normalize(), "E-REQ")
            trigger(RequiredOptionError(key="a"), shell=True, deferred=True, colorful=False)
        self.assertIn("[ mytool — E-REQ | Missing Required Option ]", self.buffer.getvalue())
        self.assertEqual(FaultCode.REQUIRED_OPTION.normalize(), "11115")

    def testGetdoc(self):
        main = __import__("__main__")
        self.assertIsNone(getdoc(FaultCode.VALUE_PARSE))
        with mock.patch.object(main, "__docs__", {FaultCode.VALUE_PARSE: "values are converted"}, create=True):
            self.assertEqual(getdoc(FaultCode.VALUE_PARSE), "values are converted")
        with self.assertRaises(TypeError):
            getdoc(11131)


if __name__ == '__main__':
    unittest.main()
