"""
clicraft utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the flags, arguments, faults and commands
  layers so every module speaks the same "not provided" and "read-only" language.

Overview
- UnsetType / Unset
  • Singleton sentinel for "value not provided", distinct from None, False and 0.
    Flag defaults use it because False/0/"" are legitimate defaults.

- coalesce(value, default=None)
  • Replace Unset with a concrete default while preserving falsey user values.

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables.

- mirror("attr")
  • Read-only property over a private backing field (self._attr). Containers are
    handed out as immutable views so public state cannot be edited in place.

- pluralize(word, count)
  • Tiny count-aware pluralizer for diagnostics ("1 argument", "3 arguments").

Stability and contract
- Names listed in __all__ are re-exported by the package; everything else is internal.
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or False are preserved as-is; only Unset
    is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(False, True)        -> False
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Return a read-only view of a container (tuple, mappingproxy, frozenset).

    Non-container values are returned unchanged. Strings are not containers here.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(object)
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" from the instance and returns a read-only
    view for container types.

    Example
    - Given self._aliases, declare aliases = mirror("aliases").
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def pluralize(word, count, /):
    """
    Return "<count> <word>" with a naive English plural when count != 1.

    Only the regular suffix rules needed by diagnostics are covered
    (s/sh/ch/x/z -> +es, otherwise +s).
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() first argument must be a string")
    if not isinstance(count, int):
        raise TypeError("pluralize() second argument must be an integer")
    if count == 1:
        return f"{count} {word}"
    if word.endswith(("s", "sh", "ch", "x", "z")):
        return f"{count} {word}es"
    return f"{count} {word}s"


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
)
