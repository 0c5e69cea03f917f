"""
Switches module behavioral tests (set-once flags and bounded counters).

Scope
- Flag: set once, SwitchAlreadySetError on repeat, boolean comparisons.
- Count: increments up to the maximum, CounterOverflowError keeps the value.
- Switch/Counter ABCs: custom implementations plug into the same helpers.
"""
import unittest
from unittest import TestCase

from argfold.switches import *


class TestFlag(TestCase):
    """Behavioral tests for Flag."""

    def testDefaultUnset(self):
        flag = Flag()
        self.assertFalse(flag.is_set())
        self.assertFalse(flag)
        self.assertEqual(flag, False)

    def testSetOnce(self):
        flag = Flag()
        flag.set()
        self.assertTrue(flag.is_set())
        self.assertEqual(flag, Flag(True))

    def testSetTwiceRaises(self):
        flag = Flag()
        flag.set()
        with self.assertRaises(SwitchAlreadySetError):
            flag.set()
        self.assertTrue(flag)

    def testRejectsNonBoolean(self):
        with self.assertRaises(TypeError):
            Flag(1)

    def testRepr(self):
        self.assertEqual(repr(Flag()), "Flag(False)")


class TestCount(TestCase):
    """Behavioral tests for Count."""

    def testIncrements(self):
        count = Count()
        for _ in range(3):
            count.increment()
        self.assertEqual(count, 3)
        self.assertEqual(int(count), 3)

    def testOverflowKeepsValue(self):
        count = Count(254)
        count.increment()
        self.assertEqual(count, 255)
        with self.assertRaises(CounterOverflowError):
            count.increment()
        self.assertEqual(count, 255)

    def testCustomMaximum(self):
        count = Count(maximum=2)
        count.increment()
        count.increment()
        with self.assertRaises(CounterOverflowError):
            count.increment()
        self.assertEqual(count.maximum, 2)

    def testUnbounded(self):
        count = Count(1000, maximum=None)
        count.increment()
        self.assertEqual(count, 1001)

    def testOrdering(self):
        self.assertLess(Count(1), Count(2))
        self.assertGreater(Count(3), 2)
        self.assertEqual(list(range(5))[Count(2)], 2)

    def testValidation(self):
        with self.assertRaises(TypeError):
            Count(True)
        with self.assertRaises(ValueError):
            Count(-1)
        with self.assertRaises(ValueError):
            Count(3, maximum=2)
        with self.assertRaises(TypeError):
            Count(maximum="3")

    def testRepr(self):
        self.assertEqual(repr(Count(2)), "Count(2)")
        self.assertEqual(repr(Count(2, maximum=4)), "Count(2, maximum=4)")


class TestCustomSwitches(TestCase):
    """Behavioral tests for user implementations of the ABCs."""

    def testCustomSwitch(self):
        class Toggle(Switch):
            def __init__(self):
                self.hits = 0

            def set(self):
                if self.hits:
                    raise SwitchAlreadySetError
                self.hits += 1

            def is_set(self):
                return bool(self.hits)

        toggle = Toggle()
        self.assertFalse(toggle)
        toggle.set()
        self.assertTrue(toggle)

    def testIncompleteSwitchIsAbstract(self):
        class Broken(Switch):
            def set(self):
                pass

        with self.assertRaises(TypeError):
            Broken()

    def testCountIsCounter(self):
        self.assertIsInstance(Count(), Counter)
        self.assertIsInstance(Flag(), Switch)


if __name__ == '__main__':
    unittest.main()
