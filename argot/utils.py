"""
Argot utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the partition, registry and parser layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) as a fresh copy
    for containers to discourage accidental mutation of internal state.

- store(target, name, value) / load(target, name, default=Unset)
  • Write/read a binding destination on either a mapping (items) or any other object (attributes).
  • A missing destination reads as Unset, so "never bound" and "bound to None" stay distinct.

- keyname(key)
  • Turn an option key or positional label into a destination name ("word-size" → "word_size").

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> store(namespace := {}, "output", "a.out")
    >>> load(namespace, "output")
    'a.out'
"""
import functools
from collections.abc import Mapping, MutableMapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

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
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns object unless it is Unset, in which case default is returned.
    Falsey values like None, 0, "" or [] are preserved as-is.
    """
    return object if object is not Unset else default


def rename(name, /):
    """
    Decorator assigning a stable __name__/__qualname__ to a generated callable.
    """
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def wrapper(callable):
        callable.__qualname__ = name
        callable.__name__ = name
        return callable

    return wrapper


def _immortalize(object):
    """
    Recursively copy container values so callers never share internal state.

    Tuples (records such as Descriptor) are immutable and returned as they are.
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, tuple)):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" on the instance and returns a copy for
    container types.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


def store(target, name, value, /):
    """
    Write value under name, as an item for mutable mappings and as an attribute otherwise.
    """
    if isinstance(target, MutableMapping):
        target[name] = value
    else:
        setattr(target, name, value)


def load(target, name, default=Unset, /):
    """
    Read name back from target, as an item for mappings and as an attribute otherwise.

    A missing entry reads as default, which is Unset unless given.
    """
    if isinstance(target, Mapping):
        return target.get(name, default)
    return getattr(target, name, default)


def keyname(key, /):
    """
    Destination name for an option key or positional label.
    """
    return key.strip("-").replace("-", "_")


__all__ = (
    # Functions
    "coalesce",
    "mirror",
    "store",
    "load",
    "keyname",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
