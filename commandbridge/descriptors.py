"""
commandbridge command descriptors.

A Descriptor is the static, immutable description of one command: its name,
a one-line description and the parameters it accepts, keyed by short key in
declaration order. Descriptors are built once while the application registers
its commands and are only read afterwards.

Invariants (checked on construction)
- name is a non-empty string without whitespace; descr is one line without tabs.
- parameter keys are unique, case-insensitively.
- parameter canonical names are unique.

The registry never mutates a descriptor: merging the global help switch goes
through __replace__, which builds a sanitized copy.
"""
import re
from collections.abc import Iterable, Mapping

from .parameters import Parameter
from .utils import *


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate name/descr and index the parameters by key.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name or any(char.isspace() for char in name):
        raise ValueError(f"{cls.__typename__} 'name' must be a non-empty word (got {name!r})")

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    metadata["descr"] = coalesce(descr, "").strip()
    if re.search(r"[\t\r\n\v\f]", metadata["descr"]):
        raise ValueError(f"{cls.__typename__} 'descr' must be a single line without tabs")

    if isinstance(parameters := metadata["parameters"], Mapping):
        for key, parameter in parameters.items():
            if getattr(parameter, "key", None) != key:
                raise ValueError(f"{cls.__typename__} parameter mapped under {key!r} must have the same key")
        parameters = parameters.values()
    elif not isinstance(parameters, Iterable) or isinstance(parameters, str):
        raise TypeError(f"{cls.__typename__} 'parameters' must be an iterable of parameters")

    keys = set()
    names = set()
    indexed = {}
    for parameter in parameters:
        if not isinstance(parameter, Parameter):
            raise TypeError(f"{cls.__typename__} 'parameters' must only contain parameters")
        elif parameter.key.casefold() in keys:
            raise ValueError(f"{cls.__typename__} {name!r} key {parameter.key!r} is already in use")
        elif parameter.name in names:
            raise ValueError(f"{cls.__typename__} {name!r} name {parameter.name!r} is already in use")
        keys.add(parameter.key.casefold())
        names.add(parameter.name)
        indexed[parameter.key] = parameter

    metadata["parameters"] = indexed


class Descriptor(metaclass=IntrospectableType):
    """
    Static description of a command.

    Properties
    - name: command name as typed on the command line (resolution ignores case).
    - descr: description shown in the application help.
    - parameters: read-only mapping key -> Parameter, in declaration order.
    - mandatory: canonical names of the mandatory parameters, in declaration order.
    """

    __introspectable__ = (
        "name",
        "descr",
        "parameters",
    )

    def __new__(cls, name, descr=Unset, /, parameters=()):
        metadata = {
            "name": name,
            "descr": descr,
            "parameters": parameters,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for field, object in metadata.items():
            setattr(self, "_" + field, object)
        return self

    @property
    def mandatory(self):
        return tuple(parameter.name for parameter in self._parameters.values() if parameter.mandatory)

    def __eq__(self, other):
        if not isinstance(other, Descriptor):
            return NotImplemented
        return (self.name, self.descr, self.parameters) == (other.name, other.descr, other.parameters)

    def __hash__(self):
        return hash((self.name, self.descr, tuple(self._parameters.values())))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(
            overrides.get("name", self.name),
            overrides.get("descr", self.descr),
            overrides.get("parameters", tuple(self._parameters.values())),
        )


__all__ = (
    "Descriptor",
)
