"""
Rendering module behavioral tests (exact help layout).

Scope
- Validate application help: registration order, column alignment, global block.
- Validate command help: header order, label alignment, long-only labels.
- Validate console output is byte-identical to the line builders.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from commandbridge import (
    Registry,
    Descriptor,
    application_help,
    command_help,
    render_application,
    render_command,
    value,
    switch,
)


def _console(**options):
    return Console(file=io.StringIO(), **({"width": 200, "color_system": None} | options))


HELP_LINE = "Displays help information for the specified command."


def _registry():
    registry = Registry()
    registry.register(Descriptor("testCommand", "This is a test command used for unit testing purposes.", (
        value("param1", "Parameter1", mandatory=True),
    )), lambda: print)
    registry.register(Descriptor("ls", "Lists files"), lambda: print)
    return registry


class TestApplicationHelp(TestCase):
    """Behavioral tests for application_help()."""

    def testEmptyRegistry(self):
        self.assertEqual(application_help(Registry()), [])

    def testLayout(self):
        self.assertEqual(application_help(_registry()), [
            "Commands:",
            "    testCommand  This is a test command used for unit testing purposes.",
            "    ls           Lists files",
            "",
            "Global Options:",
            f"    -h, --help  {HELP_LINE}",
            "",
        ])

    def testRejectsNonRegistry(self):
        with self.assertRaises(TypeError):
            application_help([])  # type: ignore[arg-type]


class TestCommandHelp(TestCase):
    """Behavioral tests for command_help()."""

    def testLayout(self):
        self.assertEqual(command_help(_registry().describe("testCommand")), [
            "testCommand -param1|--Parameter1 -h|--help",
            "    -param1, --Parameter1  ",
            f"    -h,      --help        {HELP_LINE}",
            "",
        ])

    def testValuesBeforeSwitchesSortedByKey(self):
        descriptor = Descriptor("x", parameters=(
            value("src", "Source", "a"),
            switch("v", "V", "b"),
            value("o", "Output", "c"),
        ))
        self.assertEqual(command_help(descriptor), [
            "x -o|--Output -src|--Source -v|--V",
            "    -o,   --Output  c",
            "    -src, --Source  a",
            "    --V" + " " * 13 + "b",
            "",
        ])

    def testSortIgnoresCase(self):
        descriptor = Descriptor("x", parameters=(value("B", "Bee"), value("a", "Ay")))
        self.assertEqual(command_help(descriptor)[0], "x -a|--Ay -B|--Bee")

    def testNoParameters(self):
        self.assertEqual(command_help(Descriptor("ping")), ["ping", ""])

    def testDeterministic(self):
        descriptor = _registry().describe("testCommand")
        self.assertEqual(command_help(descriptor), command_help(descriptor))


class TestRender(TestCase):
    """Behavioral tests for render_application()/render_command()."""

    def testApplicationOutputMatchesLines(self):
        registry = _registry()
        console = _console()
        render_application(registry, console=console)
        self.assertEqual(console.file.getvalue(), "".join(line + "\n" for line in application_help(registry)))

    def testCommandOutputKeepsTrailingSpaces(self):
        descriptor = _registry().describe("testCommand")
        console = _console()
        render_command(descriptor, console=console)
        render_command(descriptor, console=console)
        once = "".join(line + "\n" for line in command_help(descriptor))
        self.assertEqual(console.file.getvalue(), once * 2)

    def testLongLinesAreNotWrapped(self):
        registry = Registry()
        registry.register(Descriptor("long", "x" * 300), lambda: print)
        console = _console(width=40)
        render_application(registry, console=console)
        self.assertIn("    long  " + "x" * 300 + "\n", console.file.getvalue())

    def testTabbedDescriptionsNeverReachTheConsole(self):
        with self.assertRaises(ValueError):
            Descriptor("tabs", parameters=(value("p", "Path", "x\ty"),))
        with self.assertRaises(ValueError):
            Descriptor("tabs", "x\ty")

    def testEmptyRegistryPrintsNothing(self):
        console = _console()
        render_application(Registry(), console=console)
        self.assertEqual(console.file.getvalue(), "")

    def testColorful(self):
        console = _console(color_system="truecolor", force_terminal=True)
        render_command(_registry().describe("testCommand"), console=console, colorful=True)
        self.assertIn("\x1b[", console.file.getvalue())
        self.assertIn("--Parameter1", console.file.getvalue())


if __name__ == "__main__":
    unittest.main()
