"""
cliaid utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the tokenizer, the schema resolver and the
  command router, kept here so every layer coerces values the same way.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).

- Value coercion
  • isnumeric(text): finite decimal literal check (no hex, no underscores, no inf/nan).
  • coerce(raw): "" → True, numeric literal → int/float, anything else untouched.
  • toboolean(value): True, "true" and "" are true; everything else is false.
  • tonumber(value): public transform, numeric literal → int/float or ValueError.
  • toarray(value): wrap a scalar into a one-element list; lists are copied.
  • camelcase(name): "max-count" → "maxCount".

Quick examples
    >>> coerce("15")
    15
    >>> coerce("")
    True
    >>> coerce(" ")
    ' '
    >>> camelcase("no-base64")
    'noBase64'
"""
import builtins
import functools
import math
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
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


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    - Function form: rename(callable, name) -> callable
    - Decorator form: rename(name) -> (decorator)
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


def _immortalize(object):
    """
    Recursively copy container values so callers never mutate backing state.

    Strings are left alone; tuples stay tuples (they are already immutable).
    """
    if isinstance(object, tuple):
        return object
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns a
    fresh copy for mutable containers.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


# decimal literal only: "12", "-3", "+.5", "1e3"; never "0x10", "1_000", "inf"
_NUMERIC = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def isnumeric(text, /):
    """
    Return True when text (after trimming) is a finite decimal number literal.

    Whitespace-only strings are not numeric: " " stays a string instead of
    collapsing to 0.
    """
    if not isinstance(text, str):
        return False
    if not _NUMERIC.fullmatch(text := text.strip()):
        return False
    return math.isfinite(float(text))


def tonumber(value, /):
    """
    Convert a numeric literal to int (integral spelling) or float.

    Usable as an entry transform. Numbers pass through unchanged; booleans
    and anything non-numeric raise ValueError.
    """
    if isinstance(value, bool):
        raise ValueError("tonumber() argument must be a number or a numeric string, not bool")
    if isinstance(value, int | float):
        return value
    if not isnumeric(value):
        raise ValueError("tonumber() argument %r is not a finite number" % (value,))
    text = value.strip()
    if re.fullmatch(r"[+-]?\d+", text):
        return int(text)
    return float(text)


def coerce(raw, /):
    """
    Apply the tokenizer's value coercion to one raw flag value.

    - True (valueless flag) stays True.
    - "" becomes True (checked before numbers, so the two never collide).
    - finite numeric literals become int/float.
    - every other string is returned unchanged.
    """
    if raw is True or raw == "":
        return True
    if isnumeric(raw):
        return tonumber(raw)
    return raw


def toboolean(value, /):
    """
    Normalize a value for a boolean-typed option.

    True, "true" and "" are true. Everything else (including "false", numbers
    and accumulated lists) is false.
    """
    return value is True or value == "true" or value == ""


def toarray(value, /):
    """
    Return value as a new list: lists are copied, scalars are wrapped.
    """
    if isinstance(value, list):
        return list(value)
    return [value]


@functools.cache
def camelcase(name, /):
    """
    Convert a hyphenated option name to camelCase.

    Empty segments (double or trailing hyphens) are dropped; the first segment
    keeps its original casing.

    Examples
    - camelcase("max-count") -> "maxCount"
    - camelcase("dry-run")   -> "dryRun"
    - camelcase("verbose")   -> "verbose"
    """
    if not isinstance(name, str):
        raise TypeError("camelcase() argument must be a string")
    head, *tail = [part for part in name.split("-") if part] or [""]
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "isnumeric",
    "tonumber",
    "coerce",
    "toboolean",
    "toarray",
    "camelcase",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
