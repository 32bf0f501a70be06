"""
commandbridge faults (errors) and reporting.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue,
  grouped by domain so logs and searches stay predictable.
- CommandException: base type carrying a message plus options; knows how to
  render itself (rich) and how to report itself on a console sink.
- trigger(): central entry point to surface any fault, honoring a fallback.

Reporting contract
- Faults never escape the dispatcher: they are written to the console sink
  passed in the options, one plain line per fault, exactly as worded by the
  message (these strings are part of the CLI's compatibility surface).
- When a fallback callable is given, it receives the fault instead and nothing
  is written.
- InvocationError is the only fault wrapping a real exception; its report is
  the full traceback (a rich Traceback panel when fancy).
"""
import traceback
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text
from rich.traceback import Traceback

console = Console(highlight=False)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping (by high-level domain)
    - routing (2110x)
      • INSUFFICIENT_ARGUMENTS, COMMAND_NOT_FOUND
    - parsing (2111x)
      • INVALID_ARGUMENT
    - validation (2112x)
      • MISSING_MANDATORY
    - delegated (2113x)
      • INVOCATION_FAILURE
    """
    # --- routing errors ---
    INSUFFICIENT_ARGUMENTS = 21101
    COMMAND_NOT_FOUND      = 21102

    # --- parsing errors ---
    INVALID_ARGUMENT       = 21111

    # --- validation errors ---
    MISSING_MANDATORY      = 21121

    # --- delegated errors ---
    INVOCATION_FAILURE     = 21131


def _styles():
    return defaultdict(str, {
        "error-message": "bold #FF4DA6",  # friendly pinky message
        "traceback": "#C8C8D0",  # soft light gray body
    } | getattr(__import__("__main__"), "__styles__", {}))


class CommandException(Exception):
    """
    Base fault. The message is the exact line shown to the user.

    Options (read-only mapping)
    - code: FaultCode of the fault.
    - console: rich Console receiving the report (module console when missing).
    - colorful / fancy: rendering toggles.
    - any context useful to a fallback (token, command, missing, exception...).
    """

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        style = _styles()["error-message"] if self.options.get("colorful") else ""
        return Text(self.message, style=style)

    def __trigger__(self):
        self.options.get("console", console).print(self, soft_wrap=True, highlight=False)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InsufficientArgumentsError(CommandException): ...
class CommandNotFoundError(CommandException): ...
class InvalidArgumentError(CommandException): ...
class MissingMandatoryError(CommandException): ...


class InvocationError(CommandException):
    """
    A command behavior raised while running; options["exception"] holds it.
    """

    def __rich__(self):
        exception = self.options["exception"]
        if self.options.get("fancy"):
            return Traceback.from_exception(type(exception), exception, exception.__traceback__)
        report = "".join(traceback.format_exception(exception)).rstrip("\n")
        style = _styles()["traceback"] if self.options.get("colorful") else ""
        return Text(report, style=style)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before reporting.
    - a callable 'fallback' option receives the merged fault instead of the console.

    returns
    - the merged fault (handy for callers that keep what was reported).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fallback = options.pop("fallback", None)
    fault = fault.__replace__(**options)
    if fallback:
        fallback(fault)
    else:
        fault.__trigger__()
    return fault


__all__ = (
    "FaultCode",
    "CommandException",
    "InsufficientArgumentsError",
    "CommandNotFoundError",
    "InvalidArgumentError",
    "MissingMandatoryError",
    "InvocationError",
    "trigger",
)
