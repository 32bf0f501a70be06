"""
commandbridge mandatory-parameter validation.

confirm() checks that every mandatory parameter of a command was given. Presence
is what counts: an empty value ("-s" with nothing after it) satisfies the check.
"""
from collections.abc import Iterable

from .descriptors import Descriptor
from .faults import *
from .utils import *


def confirm(descriptors, parsed, /, *, console=Unset, colorful=False, fallback=None):
    """
    Return True when no mandatory parameter is missing from parsed.

    descriptors is one Descriptor or an iterable of them, checked in order; the
    first one with missing names is reported as
    "Missing mandatory parameters for command '<name>': <a>, <b>" and stops the
    check.
    """
    if isinstance(descriptors, Descriptor):
        descriptors = (descriptors,)
    elif not isinstance(descriptors, Iterable):
        raise TypeError("confirm() first argument must be a descriptor or an iterable of descriptors")

    for descriptor in descriptors:
        if not isinstance(descriptor, Descriptor):
            raise TypeError("confirm() first argument must only contain descriptors")
        if missing := tuple(name for name in descriptor.mandatory if name not in parsed):
            options = {"console": console} if console is not Unset else {}
            trigger(
                MissingMandatoryError(
                    f"Missing mandatory parameters for command '{descriptor.name}': {', '.join(missing)}",
                    code=FaultCode.MISSING_MANDATORY,
                    command=descriptor.name,
                    missing=missing,
                ),
                colorful=colorful,
                fallback=fallback,
                **options
            )
            return False
    return True


__all__ = (
    "confirm",
)
