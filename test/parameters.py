"""
Parameters module behavioral tests.

Scope
- Validate Parameter construction, defaults and metadata sanitizing.
- Validate the value()/switch() shorthands and value equality.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Parameter, Kind, value, switch).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from commandbridge import Parameter, Kind, value, switch


class TestParameter(TestCase):
    """Behavioral tests for Parameter specifications."""

    def testDefaults(self):
        p = Parameter("p1", "Parameter1")
        self.assertEqual(p.key, "p1")
        self.assertEqual(p.name, "Parameter1")
        self.assertEqual(p.descr, "")
        self.assertFalse(p.mandatory)
        self.assertIs(p.kind, Kind.VALUE)
        self.assertFalse(p.switch)

    def testDescriptionIsTrimmed(self):
        p = Parameter("p", "Path", "  where to look  ")
        self.assertEqual(p.descr, "where to look")

    def testFieldsAreReadOnly(self):
        p = Parameter("p", "Path")
        with self.assertRaises(AttributeError):
            p.key = "q"  # type: ignore[misc]

    def testKeyMustBeAlphanumeric(self):
        for key in ("", "-p", "p-1", "p 1", "é"):
            with self.subTest(key=key), self.assertRaises(ValueError):
                Parameter(key, "Name")

    def testKeyMustBeString(self):
        with self.assertRaises(TypeError):
            Parameter(1, "Name")  # type: ignore[arg-type]

    def testNameRejectsWhitespace(self):
        for name in ("", "two words", " "):
            with self.subTest(name=name), self.assertRaises(ValueError):
                Parameter("n", name)

    def testDescriptionMustBeSingleLine(self):
        for descr in ("x\ty", "two\nlines", "x\ry"):
            with self.subTest(descr=descr), self.assertRaises(ValueError):
                Parameter("p", "Path", descr)

    def testMandatoryMustBeBool(self):
        with self.assertRaises(TypeError):
            Parameter("n", "Name", mandatory=1)  # type: ignore[arg-type]

    def testKindMustBeKind(self):
        with self.assertRaises(TypeError):
            Parameter("n", "Name", kind="Switch")  # type: ignore[arg-type]

    def testEqualityByValue(self):
        self.assertEqual(value("n", "Name", "x"), value("n", "Name", "x"))
        self.assertNotEqual(value("n", "Name"), switch("n", "Name"))
        self.assertEqual(len({value("n", "Name"), value("n", "Name")}), 1)

    def testReprUsesTypename(self):
        self.assertTrue(repr(value("n", "Name")).startswith("parameter(key='n', name='Name'"))


class TestShorthands(TestCase):
    """Behavioral tests for value() and switch()."""

    def testValueKind(self):
        p = value("s", "Source", "file to read", mandatory=True)
        self.assertIs(p.kind, Kind.VALUE)
        self.assertTrue(p.mandatory)

    def testSwitchKind(self):
        p = switch("v", "verbose", "print every step")
        self.assertIs(p.kind, Kind.SWITCH)
        self.assertTrue(p.switch)
        self.assertFalse(p.mandatory)


if __name__ == "__main__":
    unittest.main()
