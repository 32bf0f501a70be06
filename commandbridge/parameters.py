r"""
commandbridge parameter specifications.

Overview
- Parameter: static description of one key a command accepts.
  • key: short token used on the command line (e.g. "p1" for "-p1").
  • name: canonical long name ("--Parameter1"); also the key under which the
    parsed value is handed to the command.
  • descr: one-line help text (empty string when omitted).
  • mandatory: whether validation requires the key to be present.
  • kind: Kind.VALUE or Kind.SWITCH. The kind only affects help ordering;
    parsing treats both alike.
- Kind: enumeration of parameter kinds.
- value(...) / switch(...): shorthands building a Parameter of each kind.

Metadata (sanitized on construction)
- key must match r"[a-zA-Z0-9]+" so it is reachable through the key-token grammar.
- name must be a non-empty string without whitespace.
- descr must be a single-line string without tabs (trimmed); Unset becomes "".
- mandatory must be a bool; kind must be a Kind.

Quick example:
    >>> from commandbridge.parameters import value, switch
    >>> source = value("s", "Source", "file to read", mandatory=True)
    >>> verbose = switch("v", "verbose", "print every step")
"""
import re
from enum import Enum

from .utils import *


class Kind(Enum):
    """
    Parameter kinds. Values mirror the labels used in help output.
    """
    VALUE = "Value"
    SWITCH = "Switch"


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate parameter metadata in place.

    Raises
    - TypeError: a field has the wrong type.
    - ValueError: a string field is malformed.
    """
    if not isinstance(key := metadata["key"], str):
        raise TypeError(f"{cls.__typename__} 'key' must be a string")
    elif not re.fullmatch(r"[a-zA-Z0-9]+", key):
        raise ValueError(f"{cls.__typename__} 'key' must be alphanumeric (got {key!r})")

    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not re.fullmatch(r"\S+", name):
        raise ValueError(f"{cls.__typename__} 'name' must be a non-empty word (got {name!r})")

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    metadata["descr"] = coalesce(descr, "").strip()
    if re.search(r"[\t\r\n\v\f]", metadata["descr"]):
        raise ValueError(f"{cls.__typename__} 'descr' must be a single line without tabs")

    if not isinstance(metadata["mandatory"], bool):
        raise TypeError(f"{cls.__typename__} 'mandatory' must be a bool")

    if not isinstance(metadata["kind"], Kind):
        raise TypeError(f"{cls.__typename__} 'kind' must be a parameter kind")


class Parameter(metaclass=IntrospectableType):
    """
    Static description of one command parameter.

    Instances are immutable: every field listed in __introspectable__ is a
    read-only property. Equality is by value so descriptors can be compared
    and copied freely.
    """

    __introspectable__ = (
        "key",
        "name",
        "descr",
        "mandatory",
        "kind",
    )

    def __new__(cls, key, name, descr=Unset, /, *, mandatory=False, kind=Kind.VALUE):
        metadata = {
            "key": key,
            "name": name,
            "descr": descr,
            "mandatory": mandatory,
            "kind": kind,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for field, object in metadata.items():
            setattr(self, "_" + field, object)
        return self

    @property
    def switch(self):
        return self.kind is Kind.SWITCH

    def __eq__(self, other):
        if not isinstance(other, Parameter):
            return NotImplemented
        return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash(tuple(self.__rich_repr__()))


def value(key, name, descr=Unset, /, *, mandatory=False):
    """
    Build a value-bearing Parameter (Kind.VALUE).
    """
    return Parameter(key, name, descr, mandatory=mandatory, kind=Kind.VALUE)


def switch(key, name, descr=Unset, /, *, mandatory=False):
    """
    Build a presence-only Parameter (Kind.SWITCH).
    """
    return Parameter(key, name, descr, mandatory=mandatory, kind=Kind.SWITCH)


__all__ = (
    # Types
    "Kind",
    "Parameter",

    # Shorthands
    "value",
    "switch",
)
