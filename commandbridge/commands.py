"""
commandbridge command layer: what the registry hands back for a name.

What this module provides
- Command: a Descriptor bound to one freshly constructed behavior. Built by
  Registry.find() on every resolution, so no state survives between two
  dispatches.
- Behaviors: the registered implementation. Either
  • an object implementing __invoke__(arguments), or
  • a plain callable taking the parsed arguments mapping.
  The arguments mapping goes from canonical parameter name to raw text value
  (empty string for switches).

Quick example
    class Copy:
        def __invoke__(self, arguments):
            shutil.copy(arguments["Source"], arguments["Target"])

    registry.register(Descriptor("copy", "Copies a file", (
        value("s", "Source", mandatory=True),
        value("t", "Target", mandatory=True),
    )), Copy)
"""
from .descriptors import Descriptor
from .utils import *


class Command(metaclass=IntrospectableType):
    """
    A registered command ready to run once.

    Properties
    - descriptor: the registry's (help-merged) descriptor.
    - behavior: the object built by the registered factory.
    - name / descr: shortcuts to the descriptor fields.
    """

    __introspectable__ = (
        "descriptor",
        "behavior",
    )

    __displayable__ = (
        "name",
        "descr",
        "behavior",
    )

    def __new__(cls, descriptor, behavior, /):
        if not isinstance(descriptor, Descriptor):
            raise TypeError(f"{cls.__typename__} 'descriptor' must be a descriptor")
        if not callable(getattr(behavior, "__invoke__", None)) and not callable(behavior):
            raise TypeError(f"{cls.__typename__} behavior for {descriptor.name!r} must implement __invoke__ or be callable")

        self = super().__new__(cls)
        self._descriptor = descriptor
        self._behavior = behavior
        return self

    @property
    def name(self):
        return self._descriptor.name

    @property
    def descr(self):
        return self._descriptor.descr

    def __invoke__(self, arguments, /):
        """
        Run the behavior with a parsed arguments mapping.

        Exceptions raised by the behavior propagate; catching and reporting
        them is the dispatcher's job.
        """
        if callable(invoke := getattr(self._behavior, "__invoke__", None)):
            return invoke(arguments)
        return self._behavior(arguments)


__all__ = (
    "Command",
)
