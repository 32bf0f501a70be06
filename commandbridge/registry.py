"""
commandbridge registry: the explicit table of commands an application offers.

Overview
- Registry.register(descriptor, factory): add a command. The factory is a
  zero-argument callable returning the behavior (a class works).
- @Registry.command(name, descr, *parameters): decorator form; a decorated
  class is used as the factory, a decorated function is the behavior itself.
- Registry.find(name): case-insensitive resolution to a freshly built Command,
  or None. Not finding a command is not an error at this layer.
- HELP: the global switch merged into every registered descriptor.

Ordering
- Commands keep their registration order; the application help lists them in
  that order (no alphabetical sorting).

Lifecycle
- The registry is filled once while the application starts and only read
  afterwards, so it carries no locking.
"""
from .commands import Command
from .descriptors import Descriptor
from .parameters import Parameter, Kind
from .utils import *

HELP = Parameter("h", "help", "Displays help information for the specified command.", kind=Kind.SWITCH)


def _merge_globals(descriptor, /):
    """
    Return a copy of the descriptor with the global switches merged in.

    Any entry clashing with a global one (same key ignoring case, or same
    canonical name) is overwritten.
    """
    parameters = {
        key: parameter for key, parameter in descriptor.parameters.items()
        if key.casefold() != HELP.key.casefold() and parameter.name != HELP.name
    }
    parameters[HELP.key] = HELP
    return descriptor.__replace__(parameters=tuple(parameters.values()))


def _invocable(cls):
    # every class is callable itself; its instances only when a base defines a hook
    return any("__invoke__" in vars(base) or "__call__" in vars(base) for base in cls.__mro__ if base is not object)


class Registry(metaclass=IntrospectableType):
    """
    Ordered mapping of command names to (descriptor, factory) pairs.

    Properties
    - descriptors: stored descriptors (help merged), in registration order.
    """

    __introspectable__ = (
        "descriptors",
    )

    def __init__(self):
        self._entries = {}

    @property
    def _descriptors(self):
        return tuple(descriptor for descriptor, _ in self._entries.values())

    def register(self, descriptor, factory, /):
        """
        Add a command.

        Raises
        - TypeError: descriptor is not a Descriptor, factory is not callable, or
          factory is a class whose instances define neither __invoke__ nor __call__.
        - ValueError: the name (ignoring case) is already registered.

        Returns
        - the stored descriptor, with the help switch merged in.
        """
        if not isinstance(descriptor, Descriptor):
            raise TypeError(f"{type(self).__typename__} 'descriptor' must be a descriptor")
        if not callable(factory):
            raise TypeError(f"{type(self).__typename__} 'factory' must be callable")
        if isinstance(factory, type) and not _invocable(factory):
            raise TypeError(f"{type(self).__typename__} class {factory.__name__!r} must define __invoke__ or __call__")
        if (name := descriptor.name.casefold()) in self._entries:
            raise ValueError(f"{type(self).__typename__} command name {descriptor.name!r} is already in use")

        self._entries[name] = stored = _merge_globals(descriptor), factory
        return stored[0]

    def command(self, name, descr=Unset, /, *parameters):
        """
        Decorator registering a class or a function under a new descriptor.

        Usage
            @registry.command("greet", "Greets someone", value("n", "Name", mandatory=True))
            def greet(arguments):
                print("hello", arguments["Name"])

        A class is instantiated on every resolution; a function is stateless
        and used as-is. The decorated object is returned unchanged.
        """
        descriptor = Descriptor(name, descr, parameters)

        @rename("command")
        def wrapper(source, /):
            if not callable(source):
                raise TypeError("@command() must be applied to a class or a callable")
            self.register(descriptor, source if isinstance(source, type) else lambda: source)
            return source

        return wrapper

    def describe(self, name, /):
        """
        Return the stored descriptor for a name (ignoring case), or None.
        """
        if not isinstance(name, str):
            raise TypeError("describe() argument must be a string")
        entry = self._entries.get(name.casefold())
        return entry[0] if entry else None

    def find(self, name, /):
        """
        Resolve a name (ignoring case) to a newly constructed Command, or None.
        """
        if not isinstance(name, str):
            raise TypeError("find() argument must be a string")
        try:
            descriptor, factory = self._entries[name.casefold()]
        except KeyError:
            return None
        return Command(descriptor, factory())

    def __contains__(self, name):
        return isinstance(name, str) and name.casefold() in self._entries

    def __iter__(self):
        return iter(self._descriptors)

    def __len__(self):
        return len(self._entries)


__all__ = (
    "HELP",
    "Registry",
)
