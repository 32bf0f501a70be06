"""
commandbridge dispatcher: the single entry point of a command-line application.

Overview
- Dispatcher(registry, *, console, colorful, fancy): routes one argument
  vector to one registered command.
- dispatch(argv) -> State: run the whole pipeline and return the final state.
- __invoke__(prompt): normalize a prompt (sys.argv, a shell-like string or
  tokens) and dispatch it.
- invoke(object, prompt): module-level runner accepting a Dispatcher or a
  Registry; reports unknown commands.

Pipeline (one dispatch)
    START -> RESOLVED -> PARSED -> HELP
                               -> VALIDATED -> INVOKED -> DONE
    any step may end in ERROR; an unknown command ends in UNRESOLVED.

- argv[0] is resolved through the registry (case-insensitive). Without a
  resolvable command and with at most one token, the "Command is not set"
  usage line and the application help are printed.
- The resolved command's parameters are parsed. A discarded parse (invalid
  token) is reported, still validated, then the command help is shown.
- "help" present: the command help is shown, nothing else runs.
- Missing mandatory parameters: reported, then the command help is shown.
- Otherwise the behavior is built and runs with the parsed mapping. Any
  Exception raised while building or running it is reported as a traceback;
  dispatch() never raises because of a command. SystemExit and
  KeyboardInterrupt are not Exceptions and still propagate.
- Help and validation only need the descriptor, so the behavior is built
  after them, once per successful dispatch.

Runtime flags
- console: rich Console sink for every line written (stdout when Unset).
- colorful: use the palette (see __styles__ in __main__) for help and faults.
- fancy: report command failures with a rich Traceback panel.
"""
import shlex
import sys
from collections.abc import Iterable
from enum import Enum

from rich.console import Console

from .faults import *
from .parsing import parse
from .registry import HELP, Registry
from .rendering import render_application, render_command
from .utils import *
from .validation import confirm


class State(Enum):
    """
    Steps of one dispatch. dispatch() returns DONE, HELP, ERROR or UNRESOLVED.
    """
    START = "start"
    RESOLVED = "resolved"
    PARSED = "parsed"
    HELP = "help"
    VALIDATED = "validated"
    INVOKED = "invoked"
    DONE = "done"
    ERROR = "error"
    UNRESOLVED = "unresolved"


class Dispatcher(metaclass=IntrospectableType):
    """
    Routes argument vectors to the commands of a registry.

    Properties
    - registry: the Registry commands are resolved from.
    - console: rich Console receiving every line.
    - colorful / fancy: rendering toggles.
    - state: state reached by the last dispatch (START before any).
    """

    __introspectable__ = (
        "registry",
        "console",
        "colorful",
        "fancy",
        "state",
    )

    __displayable__ = (
        "registry",
        "colorful",
        "fancy",
    )

    def __new__(cls, registry, /, *, console=Unset, colorful=False, fancy=False):
        if not isinstance(registry, Registry):
            raise TypeError(f"{cls.__typename__} 'registry' must be a registry")
        if not isinstance(console, Console | Unset):
            raise TypeError(f"{cls.__typename__} 'console' must be a rich console")
        if not isinstance(colorful, bool):
            raise TypeError(f"{cls.__typename__} 'colorful' must be a bool")
        if not isinstance(fancy, bool):
            raise TypeError(f"{cls.__typename__} 'fancy' must be a bool")

        self = super().__new__(cls)
        self._registry = registry
        self._console = coalesce(console, Console(highlight=False))
        self._colorful = colorful
        self._fancy = fancy
        self._state = State.START
        self._fallback = Unset
        return self

    def fallback(self, fallback, /):
        """
        Register a one-time fallback handler for faults.

        Rules
        - Must be callable; it receives each fault instead of the console.
        - Can be set only once per dispatcher (cannot be overridden).

        Returns
        - The same callable, enabling decorator-style usage: @dispatcher.fallback
        """
        if not callable(fallback):
            raise TypeError(f"{type(self).__typename__} fallback must be callable")
        if self._fallback is not Unset:
            raise TypeError(f"{type(self).__typename__} fallback cannot be overridden")
        self._fallback = fallback
        return fallback

    def trigger(self, fault, /, **options):
        """
        Report a fault with this dispatcher's sink and flags.
        """
        return trigger(
            fault,
            **options,
            console=self._console,
            colorful=self._colorful,
            fancy=self._fancy,
            fallback=coalesce(self._fallback, None),
        )

    @property
    def _options(self):
        return {
            "console": self._console,
            "colorful": self._colorful,
            "fallback": coalesce(self._fallback, None),
        }

    def _help(self, descriptor=Unset):
        if descriptor is Unset:
            render_application(self._registry, console=self._console, colorful=self._colorful)
        else:
            render_command(descriptor, console=self._console, colorful=self._colorful)

    def dispatch(self, argv, /):
        """
        Run one argument vector (argv[0] being the command name).

        Returns
        - State.DONE: the command ran to completion.
        - State.HELP: the command help was requested and shown.
        - State.ERROR: something was reported (usage, parse, validation, failure).
        - State.UNRESOLVED: argv[0] names no command; nothing was printed.
        """
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("dispatch() argument must be a sequence of strings")
        argv = list(argv)
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("dispatch() argument must be a sequence of strings")

        self._state = State.START
        descriptor = self._registry.describe(argv[0]) if argv else None

        if descriptor is None:
            if len(argv) < 2:
                self.trigger(InsufficientArgumentsError(
                    "Command is not set. Please provide a valid command. Usage: <myApp> [command] -p|--parameter",
                    code=FaultCode.INSUFFICIENT_ARGUMENTS,
                    argv=tuple(argv),
                ))
                self._console.print()
                self._help()
                self._state = State.ERROR
            else:
                self._state = State.UNRESOLVED
            return self._state

        self._state = State.RESOLVED

        try:
            arguments = parse(descriptor, argv, strict=True)
        except InvalidArgumentError as fault:
            self.trigger(fault)
            confirm(descriptor, {}, **self._options)
            self._help(descriptor)
            self._state = State.ERROR
            return self._state

        self._state = State.PARSED

        if HELP.name in arguments:
            self._help(descriptor)
            self._state = State.HELP
            return self._state

        if not confirm(descriptor, arguments, **self._options):
            self._help(descriptor)
            self._state = State.ERROR
            return self._state

        self._state = State.VALIDATED

        try:
            command = self._registry.find(descriptor.name)
            self._state = State.INVOKED
            command.__invoke__(arguments)
        except Exception as exception:
            self.trigger(InvocationError(
                f"Command '{descriptor.name}' failed: {exception}",
                code=FaultCode.INVOCATION_FAILURE,
                command=descriptor.name,
                exception=exception,
            ))
            self._state = State.ERROR
            return self._state

        self._state = State.DONE
        return self._state

    def __invoke__(self, prompt=Unset):
        """
        Dispatch a prompt.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; will be split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used as-is.

        Raises
        - TypeError: when prompt is not Unset/str/Iterable[str], or when an
          iterable contains a non-string element.
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("__invoke__() argument must be a string or an iterable of strings")
        else:
            raise TypeError("__invoke__() argument must be a string or an iterable of strings")

        if (state := self.dispatch(tokens)) is State.UNRESOLVED:
            self.trigger(CommandNotFoundError(
                f"Command not found: {tokens[0]}",
                code=FaultCode.COMMAND_NOT_FOUND,
                command=tokens[0],
            ))
            self._console.print()
            self._help()
        return state


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for dispatchers and registries.

    Parameters
    - object: a Dispatcher (or anything providing __invoke__(prompt)), or a
      Registry, which gets wrapped in a default Dispatcher.
    - prompt: Unset (sys.argv[1:]), a shell-like string or an iterable of strings.

    Returns
    - the State reached by the dispatch.

    Raises
    - TypeError: when 'object' cannot be invoked via the above contract or
      when prompt type is invalid for __invoke__.
    """
    if isinstance(object, Registry):
        object = Dispatcher(object)
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must be a registry or implement __invoke__ method") from None


__all__ = (
    "State",
    "Dispatcher",
    "invoke",
)
