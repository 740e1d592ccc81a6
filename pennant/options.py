r"""
Pennant option specifications.

Overview
- Option: one recognized switch, identified by a short name ("-v"), a long
  name ("--verbose"), or both. Carries arity, value type, requiredness,
  value separator and deprecation metadata.
- Deprecation: named tuple describing why/when an option is deprecated.
- OptionGroup: ordered set of mutually exclusive options.

Metadata (sanitized on construction)
- names: "-x" (exactly one letter or digit) and/or "--long-name". At most one
  of each kind; at least one overall.
- descr: Unset | str, non-empty after trimming.
- type: Callable used by results to coerce raw values (defaults to str).
- nargs: 0 (flag), n >= 1 (fixed), or Ellipsis / "..." (unbounded).
- optional: values may be omitted (only for value-taking options).
- separator: Unset | single character splitting one token into several values.
- metavar: Unset | str label for help collaborators.
- required: bool.
- deprecated: bool | Deprecation.

Validation highlights
- Short names must match r"-[^\W_]"; long names r"--[^\W_]+(-[^\W_]+)*".
- separator/optional are rejected on zero-arity options.

Representation
- SpecType metaclass exposes the fields listed in __introspectable__ as
  read-only properties and provides __repr__/__rich_repr__.
- str(option) is the bracketed one-liner consumed by help collaborators and
  never raises.

Quick example:
    >>> from pennant.options import Option, OptionGroup, Deprecation
    >>> output = Option("-o", "--output", descr="write here", nargs=1, metavar="FILE")
    >>> verbose = Option("-v", "--verbose", deprecated=Deprecation(since="2.0"))
    >>> modes = OptionGroup(Option("--fast"), Option("--safe"), required=True)
"""
import builtins
import functools
import operator
import re
from collections import namedtuple

from .utils import *


class SpecType(type):
    """
    Metaclass that turns specs into introspectable value objects.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations.

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens) and used in messages.
    - __displayable__ (if set) narrows which properties are shown by
      __rich_repr__; otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(short='v', long='verbose', nargs=0, ...)
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers (e.g., rich).
            """
            for field in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


class Deprecation(namedtuple("Deprecation", ("since", "for_removal", "descr"), defaults=(None, False, None))):
    """
    Deprecation metadata of an option.

    str() renders the notice body, appending each fragment only when its
    source field is set:
    - Deprecation()                                   -> "Deprecated"
    - Deprecation("2.0", True, "Use X.")              -> "Deprecated for removal since 2.0: Use X."
    """
    __slots__ = ()

    def __str__(self):
        notice = "Deprecated"
        if self.for_removal:
            notice += " for removal"
        if self.since:
            notice += " since " + str(self.since)
        if self.descr:
            notice += ": " + str(self.descr)
        return notice


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate switch spellings and split them into short/long.

    Raises
    - TypeError: no names, or a non-string name.
    - ValueError: empty/malformed names, or more than one short or long name.
    """
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    short = long = None
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif re.fullmatch(r"-[^\W_]", name):
            if short is not None:
                raise ValueError(f"{cls.__typename__} cannot have more than one short name")
            short = name[1:]
        elif re.fullmatch(r"--[^\W_]+(-[^\W_]+)*", name):
            if long is not None:
                raise ValueError(f"{cls.__typename__} cannot have more than one long name")
            long = name[2:]
        else:
            raise ValueError(
                f"{cls.__typename__} names must be '-x' or '--long-name' shell-style switches, got {name!r}"
            )

    metadata["short"] = short
    metadata["long"] = long


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize descr/metavar/required/deprecated.

    Notes
    - descr and metavar become None when Unset; empty strings are rejected.
    - deprecated=True is materialized as Deprecation(); False as None.
    """
    for field in ("descr", "metavar"):
        if not isinstance(value := metadata[field], str | Unset):
            raise TypeError(f"{cls.__typename__} {field!r} must be a string")
        elif isinstance(value, str) and not (value := value.strip()):
            raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
        metadata[field] = coalesce(value)

    if not isinstance(metadata["required"], bool):
        raise TypeError(f"{cls.__typename__} 'required' must be a boolean")

    match metadata["deprecated"]:
        case Deprecation() as deprecation:
            metadata["deprecated"] = deprecation
        case True:
            metadata["deprecated"] = Deprecation()
        case False:
            metadata["deprecated"] = None
        case _:
            raise TypeError(f"{cls.__typename__} 'deprecated' must be a boolean or a Deprecation")


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate arity, converter, separator and optional values.

    Responsibilities
    - nargs: int >= 0, or Ellipsis / "..." for unbounded arity.
    - type: must be callable.
    - separator: Unset or exactly one non-whitespace character.
    - optional / separator are meaningless on zero-arity options and rejected.
    """
    if (nargs := metadata["nargs"]) == "...":
        nargs = Ellipsis
    if nargs is not Ellipsis:
        if isinstance(nargs, bool) or not isinstance(nargs, int):
            raise TypeError(f"{cls.__typename__} 'nargs' must be an integer or '...'")
        elif nargs < 0:
            raise ValueError(f"{cls.__typename__} 'nargs' cannot be negative")
    metadata["nargs"] = nargs

    if not builtins.callable(metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")

    if not isinstance(separator := metadata["separator"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'separator' must be a string")
    elif isinstance(separator, str) and (len(separator) != 1 or separator.isspace()):
        raise ValueError(f"{cls.__typename__} 'separator' must be a single non-blank character")
    metadata["separator"] = coalesce(separator)

    if not isinstance(metadata["optional"], bool):
        raise TypeError(f"{cls.__typename__} 'optional' must be a boolean")

    if nargs == 0 and metadata["separator"] is not None:
        raise ValueError(f"{cls.__typename__} 'separator' requires an option taking values")
    if nargs == 0 and metadata["optional"]:
        raise ValueError(f"{cls.__typename__} 'optional' requires an option taking values")


class Option(metaclass=SpecType):
    """
    A recognized command-line switch.

    Identity
    - key is the short name when present, otherwise the long name.
    - equality/hash use (short, long), so two specs spelled the same are the
      same option regardless of their other metadata.
    """
    __introspectable__ = (
        "short",
        "long",
        "descr",
        "type",
        "nargs",
        "optional",
        "separator",
        "metavar",
        "required",
        "deprecated",
    )

    def __init__(
            self,
            *names,
            descr=Unset,
            type=str,
            nargs=0,
            required=False,
            optional=False,
            separator=Unset,
            metavar=Unset,
            deprecated=False,
    ):
        metadata = {
            "names": names,
            "descr": descr,
            "type": type,
            "nargs": nargs,
            "required": required,
            "optional": optional,
            "separator": separator,
            "metavar": metavar,
            "deprecated": deprecated,
        }

        _sanitize_names(Option, metadata)
        _sanitize_metadata(Option, metadata)
        _sanitize_parametric_metadata(Option, metadata)

        del metadata["names"]
        for field, value in metadata.items():
            object.__setattr__(self, "_" + field, value)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    @property
    def key(self):
        return self._short if self._short is not None else self._long

    @property
    def names(self):
        """switch spellings, short first ("-o", "--output")."""
        names = ()
        if self._short is not None:
            names += ("-" + self._short,)
        if self._long is not None:
            names += ("--" + self._long,)
        return names

    @property
    def takes_values(self):
        return self._nargs != 0

    @property
    def unbounded(self):
        return self._nargs is Ellipsis

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return (self._short, self._long) == (other._short, other._long)

    def __hash__(self):
        return hash((self._short, self._long))

    def __str__(self):
        """
        Bracketed one-liner for help collaborators.

        Example
        - "[ Option o output [ARG] :: write here :: str ]"
        """
        buffer = "[ Option " + self.key
        if self._short is not None and self._long is not None:
            buffer += " " + self._long
        if self._deprecated is not None:
            buffer += " (deprecated)"
        if self._required:
            buffer += " (required)"
        if self._nargs is Ellipsis or self._nargs > 1:
            buffer += " [ARG...]"
        elif self._nargs == 1:
            buffer += " [ARG]"
        if self._descr:
            buffer += " :: " + self._descr
        buffer += " :: " + getattr(self._type, "__name__", repr(self._type))
        return buffer + " ]"

    def deprecation_notice(self):
        """
        Return "Option '<key>': <deprecation>" or "" when not deprecated.
        """
        if self._deprecated is None:
            return ""
        return "Option '%s': %s" % (self.key, self._deprecated)

    def __replace__(self, **overrides):
        """
        Rebuild the option with some metadata changed; the names are kept.
        """
        metadata = {field: getattr(self, "_" + field) for field in type(self).__introspectable__[2:]}
        for field in ("descr", "separator", "metavar"):
            if metadata[field] is None:
                metadata[field] = Unset
        if metadata["deprecated"] is None:
            metadata["deprecated"] = False
        return type(self)(*self.names, **(metadata | overrides))


class OptionGroup(metaclass=SpecType):
    """
    An ordered set of mutually exclusive options.

    At most one member may appear on a command line. When required is True,
    one member must appear. Selection is tracked by the parser for the
    duration of a single parse, never on the group itself.
    """
    __introspectable__ = ("options", "required", "name")

    def __init__(self, *options, required=False, name=Unset):
        if not isinstance(required, bool):
            raise TypeError(f"{type(self).__typename__} 'required' must be a boolean")
        if not isinstance(name, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError(f"{type(self).__typename__} 'name' cannot be empty")

        self._options = []
        self._required = required
        self._name = coalesce(name)
        for option in options:
            self.add(option)

    def add(self, option, /):
        """
        Append an option; an equal option already present is replaced in place.
        """
        if not isinstance(option, Option):
            raise TypeError(f"{type(self).__typename__} members must be options")
        try:
            self._options[self._options.index(option)] = option
        except ValueError:
            self._options.append(option)
        return self

    def discard(self, option, /):
        try:
            self._options.remove(option)
        except ValueError:
            pass
        return self

    def __copy__(self):
        return type(self)(*self._options, required=self._required, name=Unset if self._name is None else self._name)

    @property
    def keys(self):
        return [option.key for option in self._options]

    def __contains__(self, option):
        return option in self._options

    def __iter__(self):
        return iter(list(self._options))

    def __len__(self):
        return len(self._options)

    def __str__(self):
        """
        "[-a alpha, --beta]": members with their description, if any.
        """
        members = []
        for option in self._options:
            member = "-" + option.short if option.short is not None else "--" + option.long
            if option.descr:
                member += " " + option.descr
            members.append(member)
        return "[" + ", ".join(members) + "]"


__all__ = (
    "Option",
    "Deprecation",
    "OptionGroup",
)
