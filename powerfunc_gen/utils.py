"""
powerfunc-gen utilities shared by the generator and the command layer.

- Unset:     "not provided" sentinel, distinct from None; materialize it with coalesce().
- mirror:    read-only property over a private "_name" attribute.
- pluralize: English plural of the last word of a label.

    >>> coalesce(Unset, 1), coalesce(None, 1)
    (1, None)
    >>> pluralize("switch")
    'switches'
"""
import functools
import re
from collections.abc import Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel.

    A sealed, falsy singleton: UnsetType() is Unset. It joins PEP 604 unions so
    `isinstance(value, str | Unset)` reads naturally in argument checks.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __or__(self, other, /):
        return type(self) | other

    def __ror__(self, other, /):
        return other | type(self)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return object, or default when object is Unset.
    """
    return default if object is Unset else object


def _copy(object):
    if isinstance(object, list | tuple):
        return [_copy(item) for item in object]
    if isinstance(object, Mapping):
        return {key: _copy(value) for key, value in object.items()}
    if isinstance(object, Set):
        return {_copy(item) for item in object}
    return object


def mirror(name, /):
    """
    Read-only property returning self._{name}; containers come back as copies.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")
    return property(lambda self: _copy(getattr(self, "_" + name)), doc=f"read-only {name}")


_IRREGULAR = {
    "child": "children",
    "index": "indices",
    "person": "people",
}


@functools.cache
def pluralize(text, /):
    """
    Pluralize the last word of text, keeping its casing and any surrounding text.

    - pluralize("argument")   -> "arguments"
    - pluralize("switch")     -> "switches"
    - pluralize("Dependency") -> "Dependencies"
    """
    if not isinstance(text, str):
        raise TypeError("pluralize() argument must be a string")
    if not (match := re.search(r"(\S+)(\s*)$", text)):
        return text

    word = match[1]
    lower = word.lower()
    if lower in _IRREGULAR:
        plural = _IRREGULAR[lower]
    elif lower.endswith(("s", "x", "z", "ch", "sh")):
        plural = lower + "es"
    elif lower.endswith("y") and lower[-2:-1] not in ("", "a", "e", "i", "o", "u"):
        plural = lower[:-1] + "ies"
    else:
        plural = lower + "s"

    if word.isupper():
        plural = plural.upper()
    elif word[0].isupper():
        plural = plural[0].upper() + plural[1:]
    return text[:match.start(1)] + plural + match[2]


Unset = UnsetType()


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "mirror",
    "pluralize",
)
