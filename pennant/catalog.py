"""
Pennant option catalog.

Scope
- OptionCatalog: the schema consulted by the tokenizer and parser. Holds the
  short-name and long-name indexes, the registration order, mutual-exclusion
  group membership, and the ordered set of required entries.

Registration rules
- "last registration wins": adding an option whose short or long name is
  already taken replaces the previous option (no error). A stale long/short
  mapping of the replaced option is dropped with it.
- group membership always wins over individual requiredness: a grouped option
  never appears in the required entries; a required group does instead.
- an option belongs to at most one group; registering it through another
  group moves it out of the previous one.
- add_options() merges another catalog atomically and refuses any name that
  both catalogs define (a catalog therefore never merges with itself).

Lookups
- names are accepted with or without their leading hyphens ("v", "-v", "--verbose").
- get_matching_options() implements GNU-style abbreviation of long names.

Example
    >>> catalog = OptionCatalog()
    >>> catalog.add("-f", "--file", nargs=1, required=True)
    >>> catalog.add("--version").add("--verbose")
    >>> [option.long for option in catalog.get_matching_options("ver")]
    ['version', 'verbose']
"""
import copy

from .faults import ConflictingRegistrationError
from .options import Option, OptionGroup, SpecType
from .utils import strip_hyphens


class OptionCatalog(metaclass=SpecType):
    __displayable__ = ("options", "groups", "required")

    def __init__(self, *options):
        self._shorts = {}
        self._longs = {}
        self._registry = {}
        self._memberships = {}
        self._groups = []
        self._required = []
        for option in options:
            if isinstance(option, OptionGroup):
                self.add_group(option)
            else:
                self.add_option(option)

    def add(self, *names, **metadata):
        """
        Shorthand for add_option(Option(*names, **metadata)).
        """
        return self.add_option(Option(*names, **metadata))

    def add_option(self, option, /):
        """
        Register an option, replacing any option that shares one of its names.

        Returns
        - self, so registrations can be chained.
        """
        if not isinstance(option, Option):
            raise TypeError("add_option() argument must be an option")

        stale = []
        for candidate in (self._shorts.get(option.short), self._longs.get(option.long)):
            if candidate is not None and all(candidate is not other for other in stale):
                stale.append(candidate)
        for candidate in stale:
            self._forget(candidate, option)

        if option.required and (group := self._memberships.get(option.key)) is not None:
            # group membership wins: the member is kept as an optional copy
            option = option.__replace__(required=False)
            group.add(option)

        key = option.key
        self._registry[key] = option
        if option.short is not None:
            self._shorts[option.short] = option
        if option.long is not None:
            self._longs[option.long] = option

        if option.required and key not in self._memberships and key not in self._required:
            self._required.append(key)
        return self

    def _forget(self, option, successor, /):
        if option.short is not None and self._shorts.get(option.short) is option:
            del self._shorts[option.short]
        if option.long is not None and self._longs.get(option.long) is option:
            del self._longs[option.long]

        if option.key != successor.key:
            del self._registry[option.key]
        if option.key in self._required and (option.key != successor.key or not successor.required):
            self._required.remove(option.key)

        if (group := self._memberships.pop(option.key, None)) is not None:
            if option == successor:
                # same spelling: the replacement inherits the group slot
                group.add(successor)
                self._memberships[successor.key] = group
            else:
                group.discard(option)

    def add_group(self, group, /):
        """
        Register a mutual-exclusion group and every one of its members.

        Members leave the required entries and any group they belonged to
        before; a required member is replaced by a copy with required=False.
        A required group joins the required entries instead.
        """
        if not isinstance(group, OptionGroup):
            raise TypeError("add_group() argument must be an option group")

        for option in group:
            if option.required:
                option = option.__replace__(required=False)
                group.add(option)
            self.add_option(option)
            if (previous := self._memberships.get(option.key)) is not None and previous is not group:
                previous.discard(option)
            self._memberships[option.key] = group
            if option.key in self._required:
                self._required.remove(option.key)

        if all(group is not other for other in self._groups):
            self._groups.append(group)
            if group.required:
                self._required.append(group)
        return self

    def add_options(self, other, /):
        """
        Merge another catalog into this one.

        Groups are copied, so later registrations on either catalog never
        reach the other one.

        Raises
        - ConflictingRegistrationError: when any short or long name of `other`
          is already registered here. Nothing is merged in that case.
        """
        if not isinstance(other, OptionCatalog):
            raise TypeError("add_options() argument must be an option catalog")

        collisions = [
            option.key for option in other.options
            if option.short in self._shorts or option.long in self._longs
        ]
        if other is self or collisions:
            raise ConflictingRegistrationError(collisions or self._registry.keys())

        for option in other.options:
            self.add_option(option)
        for group in other.groups:
            self.add_group(copy.copy(group))
        return self

    def get_option(self, name, /):
        """
        Return the option registered under a short or long name, or None.
        """
        name = strip_hyphens(name)
        return self._shorts.get(name, self._longs.get(name))

    def has_option(self, name, /):
        name = strip_hyphens(name)
        return name in self._shorts or name in self._longs

    def has_short_option(self, name, /):
        return strip_hyphens(name) in self._shorts

    def has_long_option(self, name, /):
        return strip_hyphens(name) in self._longs

    def get_group(self, option, /):
        """
        Return the group an option (or option name) belongs to, or None.
        """
        if not isinstance(option, Option):
            option = self.get_option(option)
        return None if option is None else self._memberships.get(option.key)

    def get_matching_options(self, token, /):
        """
        Return the long options abbreviated by `token`.

        An exact long name short-circuits to that single option; otherwise
        every long option starting with the token matches, in registration
        order. No match yields an empty list.
        """
        name = strip_hyphens(token)
        if name in self._longs:
            return [self._longs[name]]
        return [option for long, option in self._longs.items() if long.startswith(name)]

    def help_options(self):
        """
        Every registered option, grouped or not, in registration order.
        """
        return list(self._registry.values())

    @property
    def options(self):
        return list(self._registry.values())

    @property
    def groups(self):
        return list(self._groups)

    @property
    def required(self):
        """
        Required option keys and required groups, in registration order.
        """
        return list(self._required)

    def __len__(self):
        return len(self._registry)

    def __iter__(self):
        return iter(list(self._registry.values()))

    def __contains__(self, item):
        if isinstance(item, Option):
            return self._registry.get(item.key) == item
        if isinstance(item, str):
            return self.has_option(item)
        return False

    def __str__(self):
        return "[ Options: [ short {%s} ] [ long {%s} ]" % (
            ", ".join("%s=%s" % (name, option) for name, option in self._shorts.items()),
            ", ".join("%s=%s" % (name, option) for name, option in self._longs.items()),
        )


__all__ = (
    "OptionCatalog",
)
