"""
Pennant helpers shared by the spec types.

- Unset: "no value given" marker, distinct from None (so None stays a legal
  value). It is falsy and can take part in isinstance unions (str | Unset).
- coalesce(): swap Unset for a fallback.
- rename(): give generated functions a readable __name__/__qualname__.
- mirror(): read-only property over a private "_field", handing out copies of
  mutable containers.
- strip_hyphens(): "--verbose" -> "verbose", "-v" -> "v".

    >>> coalesce(Unset, 3), coalesce(None, 3)
    (3, None)
    >>> strip_hyphens("--output")
    'output'
"""
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return `default` when `object` is Unset, otherwise `object` untouched
    (None, 0 and "" included).
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator setting __name__ and __qualname__ of a generated function.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("rename() must decorate a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _detach(object):
    # lists, dicts and sets are copied (recursively); tuples, frozensets and
    # scalars are shared since nothing can mutate them through us
    if isinstance(object, Sequence) and not isinstance(object, str | tuple):
        return [_detach(item) for item in object]
    if isinstance(object, Mapping):
        return {key: _detach(value) for key, value in object.items()}
    if isinstance(object, Set) and not isinstance(object, frozenset):
        return {_detach(item) for item in object}
    return object


def mirror(name, /):
    """
    Read-only property returning a detached copy of `self._<name>`.

    Example
    - `options = mirror("options")` exposes `self._options` as a fresh list.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


def strip_hyphens(text, /):
    """
    Remove the leading "--" or "-" of a switch spelling (at most two hyphens).
    """
    if not isinstance(text, str):
        raise TypeError("strip_hyphens() argument must be a string")
    if text.startswith("--"):
        return text[2:]
    if text.startswith("-"):
        return text[1:]
    return text


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "strip_hyphens",
)
