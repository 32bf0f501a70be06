"""
Utils module behavioral tests.

Scope
- Validate the Unset sentinel and coalesce().
- Validate rename() in both forms and mirror() read-only views.
- Validate IntrospectableType wiring (typename, properties, repr defaults).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import MappingProxyType
from unittest import TestCase

from commandbridge.utils import Unset, UnsetType, IntrospectableType, coalesce, rename, mirror


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingletonAndFalsy(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")


class TestHelpers(TestCase):
    """Behavioral tests for rename() and mirror()."""

    def testRenameDirect(self):
        func = rename(lambda: None, "named")
        self.assertEqual(func.__name__, "named")
        self.assertEqual(func.__qualname__, "named")

    def testRenameDecorator(self):
        @rename("named")
        def func():
            pass

        self.assertEqual(func.__name__, "named")

    def testRenameRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename(42, "named")
        with self.assertRaises(TypeError):
            rename()

    def testMirrorServesReadOnlyMappings(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = {"a": 1}

        self.assertIsInstance(Holder().items, MappingProxyType)
        with self.assertRaises(AttributeError):
            Holder().items = {}


class TestIntrospectableType(TestCase):
    """Behavioral tests for the IntrospectableType metaclass."""

    def testDefaultsShowEveryField(self):
        class SamplePoint(metaclass=IntrospectableType):
            __introspectable__ = ("x", "y")

            def __init__(self):
                self._x, self._y = 1, 2

        self.assertIs(IntrospectableType.__displayable__, Unset)
        self.assertEqual(SamplePoint.__typename__, "sample-point")
        self.assertEqual(repr(SamplePoint()), "sample-point(x=1, y=2)")

    def testDisplayableNarrowsRepr(self):
        class SamplePoint(metaclass=IntrospectableType):
            __introspectable__ = ("x", "y")
            __displayable__ = ("y",)

            def __init__(self):
                self._x, self._y = 1, 2

        self.assertEqual(repr(SamplePoint()), "sample-point(y=2)")
        self.assertEqual(SamplePoint().x, 1)


if __name__ == "__main__":
    unittest.main()
