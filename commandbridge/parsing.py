r"""
commandbridge argument parsing.

Overview
- parse(descriptor, argv): turn a token vector into a mapping from canonical
  parameter name to raw text value, for one command.
- iskey(token): whether a token is shaped like a key (r"-{1,2}[a-zA-Z0-9]+").

Grammar
- argv[0] is the command name and is never parsed.
- A key token is one or two hyphens followed by ASCII letters/digits only.
  "-5" is a key token; "-", "---x" and "-a-b" are not.
- Tokens that are not key tokens are ignored unless consumed as a value.

Resolution of a key token
1) drop exactly one leading hyphen and look the rest up as a short key
   (case-sensitive): "-p" -> "p", "--p" -> "-p" (never a key).
2) otherwise, for a double-hyphen token, look the rest up as a canonical
   name (case-sensitive): "--Parameter1" -> "Parameter1".
3) otherwise the token is invalid; the whole parse is discarded.

Values
- The token after a key is its value unless it is itself a key token; a key
  without value maps to "" (this is also how switches are reported).
- Kinds do not change parsing. Repeated keys overwrite (last wins).

Quick example
    >>> parse(descriptor, ["copy", "-s", "a.txt", "--Target", "b.txt", "-h"])
    {'Source': 'a.txt', 'Target': 'b.txt', 'help': ''}
"""
import re
from collections.abc import Iterable

from .descriptors import Descriptor
from .faults import *
from .utils import *


def iskey(token, /):
    """
    Return True when the token matches the key-token grammar.
    """
    return isinstance(token, str) and re.fullmatch(r"-{1,2}[a-zA-Z0-9]+", token) is not None


def _resolve_token(descriptor, token):
    """
    Internal: map a key token to a canonical name, or None when it is invalid.
    """
    if parameter := descriptor.parameters.get(token[1:]):
        return parameter.name
    if token.startswith("--"):
        for parameter in descriptor.parameters.values():
            if parameter.name == token[2:]:
                return parameter.name
    return None


def parse(descriptor, argv, /, *, console=Unset, colorful=False, fallback=None, strict=False):
    """
    Parse argv (argv[0] being the command name) against a descriptor.

    Parameters
    - descriptor: Descriptor of the resolved command (help switch included).
    - argv: sequence of string tokens.
    - console / colorful / fallback: forwarded to trigger() when reporting.
    - strict: raise the InvalidArgumentError instead of reporting it.

    Returns
    - dict canonical name -> raw value; {} when a token was invalid.

    Raises
    - TypeError: descriptor or argv have the wrong shape.
    - InvalidArgumentError: only with strict=True.
    """
    if not isinstance(descriptor, Descriptor):
        raise TypeError("parse() first argument must be a descriptor")
    if isinstance(argv, str) or not isinstance(argv, Iterable):
        raise TypeError("parse() second argument must be a sequence of strings")
    argv = list(argv)
    if not all(isinstance(token, str) for token in argv):
        raise TypeError("parse() second argument must be a sequence of strings")

    parsed = {}
    index = 1
    while index < len(argv):
        token = argv[index]
        index += 1
        if not iskey(token):
            continue

        if (name := _resolve_token(descriptor, token)) is None:
            fault = InvalidArgumentError(
                f"Invalid argument: {token}",
                code=FaultCode.INVALID_ARGUMENT,
                command=descriptor.name,
                token=token,
            )
            if strict:
                raise fault
            options = {"console": console} if console is not Unset else {}
            trigger(fault, colorful=colorful, fallback=fallback, **options)
            return {}

        if index < len(argv) and not iskey(argv[index]):
            parsed[name] = argv[index]
            index += 1
        else:
            parsed[name] = ""

    return parsed


__all__ = (
    "iskey",
    "parse",
)
