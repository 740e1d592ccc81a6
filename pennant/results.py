"""
Pennant parse results.

ParseResult is built once per parse and never mutated afterwards. It keeps:
- entries: (Option, values) pairs in the order the options were matched,
  one pair per occurrence on the command line;
- args: leftover positional tokens, in order.

Accessors accept an Option or any of its names, with or without hyphens.
"""
from .faults import InvalidValueError
from .options import Option, SpecType
from .utils import strip_hyphens


class ParseResult(metaclass=SpecType):
    __displayable__ = ("entries", "args")

    def __init__(self, entries=(), args=()):
        object.__setattr__(self, "_entries", tuple((option, tuple(values)) for option, values in entries))
        object.__setattr__(self, "_args", tuple(args))

    def __setattr__(self, name, value, /):
        raise AttributeError("parse results are read-only")

    @property
    def entries(self):
        return self._entries

    @property
    def args(self):
        return list(self._args)

    @property
    def options(self):
        """
        Distinct matched options, in first-match order.
        """
        options = []
        for option, _ in self._entries:
            if option not in options:
                options.append(option)
        return options

    def _matches(self, name):
        if isinstance(name, Option):
            return lambda option: option == name
        name = strip_hyphens(name)
        return lambda option: name in (option.short, option.long)

    def has_option(self, name, /):
        predicate = self._matches(name)
        return any(predicate(option) for option, _ in self._entries)

    def get_option_values(self, name, /):
        """
        Every value supplied to an option across all its occurrences.

        Returns None when the option was not matched at all, and an empty list
        for a matched flag.
        """
        predicate = self._matches(name)
        found = False
        values = []
        for option, supplied in self._entries:
            if predicate(option):
                found = True
                values.extend(supplied)
        return values if found else None

    def get_option_value(self, name, default=None, /):
        values = self.get_option_values(name)
        return values[0] if values else default

    def get_parsed_value(self, name, default=None, /):
        """
        First value of an option converted through its `type`.

        Raises
        - InvalidValueError: when the converter rejects the raw value.
        """
        predicate = self._matches(name)
        for option, supplied in self._entries:
            if predicate(option) and supplied:
                try:
                    return option.type(supplied[0])
                except (TypeError, ValueError) as error:
                    raise InvalidValueError(option, supplied[0]) from error
        return default

    def get_option_properties(self, name, /):
        """
        Collect "-Dkey=value" style pairs into a dict.

        Every occurrence contributes its first two values as key and value; an
        occurrence with a single value maps it to "true".
        """
        predicate = self._matches(name)
        properties = {}
        for option, supplied in self._entries:
            if not predicate(option):
                continue
            if len(supplied) >= 2:
                properties[supplied[0]] = supplied[1]
            elif len(supplied) == 1:
                properties[supplied[0]] = "true"
        return properties

    def __contains__(self, name):
        return self.has_option(name)

    def __iter__(self):
        return iter(self.options)


__all__ = (
    "ParseResult",
)
