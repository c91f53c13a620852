"""
Reins utilities: small helpers shared by the registry, parser and renderers.

- Unset: "not provided" sentinel, distinct from None (a callback or a
  validator may legitimately be None).
- coalesce(value, default): Unset → default, anything else unchanged.
- rename(name): give generated callables a stable __name__/__qualname__.
- mirror(name): read-only property over self._name that hands out copies.
- ordinal(number) / pluralize(count, word): wording for parse faults.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> ordinal(3)
    'third'
"""
import functools
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    type of the Unset singleton; falsey, printed as "Unset", not subclassable.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")

    # str | Unset in isinstance checks
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


def coalesce(object, default=None, /):
    return default if object is Unset else object


def rename(*parameters):
    """
    rename(callable, name) renames in place and returns the callable;
    rename(name) returns a decorator doing the same.
    """
    if len(parameters) == 1 and isinstance(parameters[0], str):
        name, = parameters
        return lambda callable: rename(callable, name)
    if len(parameters) != 2:
        raise TypeError("rename() takes a name, or a callable and a name")

    target, name = parameters
    if not callable(target) or not isinstance(name, str):
        raise TypeError("rename() needs a callable and a string name")
    target.__name__ = target.__qualname__ = name
    return target


def _copy(object):
    # strings are sequences too
    if isinstance(object, str):
        return object
    if isinstance(object, Sequence):
        return tuple(_copy(item) for item in object)
    if isinstance(object, Mapping):
        return {key: _copy(value) for key, value in object.items()}
    if isinstance(object, Set):
        return frozenset(_copy(item) for item in object)
    return object


def mirror(name, /):
    """
    read-only property exposing self._<name>; containers come back as
    tuples, dicts and frozensets so callers never hold the private object.
    """

    @rename(name)
    def getter(self):
        return _copy(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def pluralize(count, word, /):
    """
    Prefix a word with a count, pluralizing it when the count is not one.

    Only the regular English forms the library needs are covered
    (argument → arguments, alias → aliases).
    """
    if count == 1:
        return f"{count} {word}"
    if word.endswith(("s", "sh", "ch", "x", "z")):
        return f"{count} {word}es"
    return f"{count} {word}s"


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "ordinal",
    "pluralize",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
