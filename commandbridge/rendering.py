"""
commandbridge help rendering.

Scope
- application_help(registry): lines listing every registered command plus the
  global options block. Empty list for an empty registry.
- command_help(descriptor): header and aligned parameter lines for one command.
- render_application() / render_command(): write those lines to a rich Console.

Layout (exact, whitespace included)
    Commands:
        copy  Copies a file
        move  Moves a file

    Global Options:
        -h, --help  Displays help information for the specified command.

    copy -s|--Source -t|--Target -h|--help
        -s, --Source  File to read
        -t, --Target  File to write
        -h, --help    Displays help information for the specified command.

Ordering
- Commands: registration order.
- Parameters: value parameters sorted by key, then switches sorted by key.

Styling
- Both forms are built from the same rows of (fragment, style) pairs: the
  line builders drop the styles, render_*() keep them when colorful=True.
  Colors come from the palette below, overridable through __main__.__styles__.
- Lines are printed with soft wrapping so the console never wraps, crops or
  strips them.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .descriptors import Descriptor
from .parameters import Kind
from .registry import HELP, Registry
from .utils import *


def _styles():
    return defaultdict(str, {
        "section": "bold #FF4D94",  # Magenta headings
        "usage": "bold #E5E7EB",
        "command-name": "bold #00E5FF",  # Cyan names
        "parameter-name": "#00E5FF",
        "description": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))


def _ordered(descriptor):
    """
    Internal: parameters in help order (values by key, then switches by key).
    """
    return sorted(
        descriptor.parameters.values(),
        key=lambda x: (x.kind is Kind.SWITCH, x.key.casefold(), x.key),
    )


def _label(parameter, width):
    if parameter.name.casefold() == parameter.key.casefold():
        return f"--{parameter.name}"
    return f"-{parameter.key}, {' ' * (width - len(parameter.key))}--{parameter.name}"


def _application_rows(registry):
    if not isinstance(registry, Registry):
        raise TypeError("application_help() argument must be a registry")
    if not len(registry):
        return

    width = max(len(descriptor.name) for descriptor in registry) + 2
    yield ("Commands:", "section"),
    for descriptor in registry:
        yield ("    ", ""), (descriptor.name.ljust(width), "command-name"), (descriptor.descr, "description")
    yield ()
    yield ("Global Options:", "section"),
    yield ("    ", ""), (f"-{HELP.key}, --{HELP.name}", "parameter-name"), ("  ", ""), (HELP.descr, "description")
    yield ()


def _command_rows(descriptor):
    if not isinstance(descriptor, Descriptor):
        raise TypeError("command_help() argument must be a descriptor")

    parameters = _ordered(descriptor)
    yield (" ".join([descriptor.name, *(f"-{x.key}|--{x.name}" for x in parameters)]), "usage"),
    if parameters:
        width = max(len(parameter.key) for parameter in parameters)
        labels = [_label(parameter, width) for parameter in parameters]
        padding = max(map(len, labels))
        for label, parameter in zip(labels, parameters):
            yield ("    ", ""), (label, "parameter-name"), (" " * (padding - len(label) + 2), ""), (parameter.descr, "description")
    yield ()


def application_help(registry, /):
    """
    Return the application help lines for a registry.
    """
    return ["".join(fragment for fragment, _ in row) for row in _application_rows(registry)]


def command_help(descriptor, /):
    """
    Return the help lines for one command, ending with a blank line.
    """
    return ["".join(fragment for fragment, _ in row) for row in _command_rows(descriptor)]


def _render(rows, console, colorful):
    styles = _styles()
    console = coalesce(console, Console(highlight=False))
    for row in rows:
        line = Text.assemble(*((fragment, styles[style] if colorful else "") for fragment, style in row))
        console.print(line, soft_wrap=True, highlight=False)


def render_application(registry, /, *, console=Unset, colorful=False):
    """
    Write the application help to the console (stdout when Unset).
    """
    _render(list(_application_rows(registry)), console, colorful)


def render_command(descriptor, /, *, console=Unset, colorful=False):
    """
    Write the help of one command to the console (stdout when Unset).
    """
    _render(list(_command_rows(descriptor)), console, colorful)


__all__ = (
    "application_help",
    "command_help",
    "render_application",
    "render_command",
)
