"""
Pennant faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain so logs and searches stay predictable.
- OptionException / ParseWarning: base types that carry a message + options and
  know how to render themselves through rich.
- trigger(): central entry point to surface any fault (raise/warn, or print in shell mode).

Message copy
- The missing-required and deprecation messages keep their historical wording
  ("Missing required option: f") since callers compare them verbatim.
- Everything else uses short, lowercased sentences with a single hint.

Integration
- The parser builds a fault and calls trigger(fault, shell=...).
- In non-shell mode, errors are raised and warnings go through warnings.warn.
- In shell mode, faults are rendered on stderr via rich; errors then exit(1).
"""
import copy
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - registration (2100x): CONFLICTING_REGISTRATION
    - switches (2111x): UNRECOGNIZED_OPTION, AMBIGUOUS_OPTION, FLAG_ASSIGNMENT,
      GROUP_CONFLICT
    - values (2112x): INSUFFICIENT_VALUES, INVALID_VALUE
    - completeness (2113x): MISSING_OPTION
    - warnings (2211x): DEPRECATED_OPTION
    """
    # --- registration errors ---
    CONFLICTING_REGISTRATION = 21001

    # --- switch errors ---
    UNRECOGNIZED_OPTION      = 21111
    AMBIGUOUS_OPTION         = 21112
    FLAG_ASSIGNMENT          = 21113
    GROUP_CONFLICT           = 21114

    # --- value errors ---
    INSUFFICIENT_VALUES      = 21121
    INVALID_VALUE            = 21122

    # --- completeness errors ---
    MISSING_OPTION           = 21131

    # --- warnings ---
    DEPRECATED_OPTION        = 22111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    build the rich renderable shared by errors and warnings.

    options read from the fault
    - colorful (default True), fancy (default False), title, hint.
    """
    main = __import__("__main__")
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        return Text(str(fragment), styles[style] if colorful else "")

    prog = getattr(main, "__prog__", None) or "pennant"
    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " - ",
        text(fault.code.normalize(), "code"),
        " | ",
        text(fault.title.title(), "title"),
        " ]",
    )
    message = text(fault.message, "message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(fault.hint, "hint")) if fault.hint else Text("")

    if fault.options.get("fancy", False):
        return Panel(Group(message, hint), title=header, title_align="left")
    return Group(header, message, hint)


class OptionException(Exception):
    """
    base of every pennant error.

    attributes
    - message: the one-line, user-facing description.
    - options: read-only mapping of rendering/context options (shell, colorful,
      fancy, title, hint, and any fault-specific context).
    """
    code = FaultCode.UNRECOGNIZED_OPTION
    default_title = "option error"

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    @property
    def title(self):
        return self.options.get("title", self.default_title)

    @property
    def hint(self):
        return self.options.get("hint", "")

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __copy__(self):
        clone = type(self).__new__(type(self), *self.args)
        clone.__dict__.update(self.__dict__)
        return clone

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        clone = copy.copy(self)
        clone.options = MappingProxyType({**self.options, **overrides})
        return clone

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


class ParseException(OptionException):
    """base of the errors raised while parsing an argument vector."""


class ConflictingRegistrationError(OptionException, ValueError):
    code = FaultCode.CONFLICTING_REGISTRATION
    default_title = "conflicting registration"

    def __init__(self, keys, /, **options):
        self._keys = list(keys)
        super().__init__(
            "duplicate option registration: %s" % ", ".join(self._keys),
            **options
        )

    @property
    def keys(self):
        return list(self._keys)


class UnrecognizedOptionError(ParseException):
    code = FaultCode.UNRECOGNIZED_OPTION
    default_title = "unrecognized option"

    def __init__(self, token, /, **options):
        self.token = token
        super().__init__("unrecognized option: %r" % token, **options)


class AmbiguousOptionError(UnrecognizedOptionError):
    code = FaultCode.AMBIGUOUS_OPTION
    default_title = "ambiguous option"

    def __init__(self, token, candidates, /, **options):
        self.token = token
        self._candidates = list(candidates)
        ParseException.__init__(
            self,
            "ambiguous option %r could match: %s" % (token, ", ".join(self._candidates)),
            **options
        )

    @property
    def candidates(self):
        return list(self._candidates)


class FlagAssignmentError(ParseException):
    code = FaultCode.FLAG_ASSIGNMENT
    default_title = "flag cannot take a value"

    def __init__(self, option, value, /, **options):
        self.option = option
        self.value = value
        super().__init__("option %r does not take a value but received %r" % (option.key, value), **options)


class GroupConflictError(ParseException):
    code = FaultCode.GROUP_CONFLICT
    default_title = "mutually exclusive options"

    def __init__(self, group, selected, option, /, **options):
        self.group = group
        self.selected = selected
        self.option = option
        super().__init__(
            "option %r was specified but an option from this group has already been selected: %r" % (
                option.key,
                selected.key
            ),
            **options
        )


class InsufficientValuesError(ParseException):
    code = FaultCode.INSUFFICIENT_VALUES
    default_title = "not enough values"

    def __init__(self, option, received, /, **options):
        self.option = option
        self.received = received
        if option.nargs is Ellipsis:
            message = "option %r requires at least one value" % option.key
        else:
            message = "option %r requires %d value%s but received %d" % (
                option.key,
                option.nargs,
                "s" * (option.nargs != 1),
                received
            )
        super().__init__(message, **options)


class InvalidValueError(ParseException):
    code = FaultCode.INVALID_VALUE
    default_title = "invalid value"

    def __init__(self, option, value, /, **options):
        self.option = option
        self.value = value
        super().__init__(
            "value %r for option %r could not be converted to %s" % (
                value,
                option.key,
                getattr(option.type, "__name__", repr(option.type))
            ),
            **options
        )


class MissingOptionError(ParseException):
    """
    one or more required options (or required groups) were not supplied.

    the message lists the missing entries in registration order:
    - "Missing required option: f"
    - "Missing required options: f, x"
    """
    code = FaultCode.MISSING_OPTION
    default_title = "missing required option"

    def __init__(self, missing, /, **options):
        self._missing = list(missing)
        super().__init__(
            "Missing required option%s: %s" % (
                "s" * (len(self._missing) != 1),
                ", ".join(map(str, self._missing))
            ),
            **options
        )

    @property
    def missing(self):
        return list(self._missing)


class ParseWarning(ABC, Warning):
    code = FaultCode.DEPRECATED_OPTION
    default_title = "warning"

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    title = OptionException.title
    hint = OptionException.hint
    __copy__ = OptionException.__copy__
    __replace__ = OptionException.__replace__

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=4)
        console.print(self)


class DeprecatedOptionWarning(ParseWarning):
    code = FaultCode.DEPRECATED_OPTION
    default_title = "deprecated option"

    def __init__(self, option, /, **options):
        self.option = option
        super().__init__(option.deprecation_notice(), **options)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - errors are raised (or printed followed by exit(1) when shell=True);
      warnings are emitted through warnings.warn (or printed when shell=True).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "OptionException",
    "ParseException",
    "ConflictingRegistrationError",
    "UnrecognizedOptionError",
    "AmbiguousOptionError",
    "FlagAssignmentError",
    "GroupConflictError",
    "InsufficientValuesError",
    "InvalidValueError",
    "MissingOptionError",
    "ParseWarning",
    "DeprecatedOptionWarning",
    "trigger",
)
