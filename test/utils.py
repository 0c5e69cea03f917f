"""
Tests for the internal utilities.

This module verifies the guarantees the other layers rely on:
- Unset is a process-wide, falsy, final singleton that survives copy and pickle.
- coalesce() only replaces Unset.
- ordinal() renders word ordinals up to ten and suffixed numbers beyond.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from argfold.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def setUp(self) -> None:
        self.unset: UnsetType = UnsetType()

    def testSingleton(self) -> None:
        """
        The constructor and the module constant are the same object.
        """
        self.assertIs(self.unset, Unset)
        self.assertIs(UnsetType(), Unset)

    def testFalsely(self) -> None:
        self.assertFalse(Unset)
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyDeepcopyPickle(self) -> None:
        """
        copy(), deepcopy() and pickle round-trips preserve identity.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy({"slot": Unset})["slot"], Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnion(self) -> None:
        self.assertIsInstance(Unset, str | UnsetType)
        self.assertIsInstance("x", Unset | str)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testReplacesUnsetOnly(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class OrdinalTest(TestCase):

    def testWords(self) -> None:
        self.assertEqual([ordinal(number) for number in (1, 2, 3, 10)], ["first", "second", "third", "tenth"])

    def testSuffixes(self) -> None:
        self.assertEqual(
            [ordinal(number) for number in (11, 12, 13, 21, 22, 23, 24, 101, 111, 112, 113)],
            ["11th", "12th", "13th", "21st", "22nd", "23rd", "24th", "101st", "111th", "112th", "113th"]
        )

    def testInvalid(self) -> None:
        with self.assertRaises(TypeError):
            ordinal("1")
        with self.assertRaises(TypeError):
            ordinal(1.5)
        with self.assertRaises(ValueError):
            ordinal(0)


if __name__ == '__main__':
    unittest.main()
