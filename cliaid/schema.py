r"""
cliaid option schemas and their resolution against a ParsedBag.

Overview
- SchemaEntry: ordered alias names (first is canonical) plus default, help
  and an optional transform. Built only through entry(...).
- Schema: an ordered, immutable collection of entries with the camelCase
  alias table computed once at construction.
- ResolvedOptions: read-only mapping canonical name → value, always complete,
  with the positionals under the reserved "_" key.
- resolve(bag, schema, /, *, camel_case_expansion=True): the resolver.

Resolution rules (per entry, in schema order)
- the first bag key equal to any of the entry's names wins; otherwise the
  default is used (Unset defaults resolve to None).
- a declared transform receives the raw string (element-wise for lists).
- a boolean default normalizes the value through toboolean().
- otherwise the tokenizer's coerced value is used unchanged.
- canonical names containing "-" are also exposed under their camelCase form.

Example
    >>> schema = Schema([entry("max-count", "m", default=15), entry("verbose", default=False)])
    >>> options = resolve(tokenize(["-m", "3", "--verbose=true"]), schema)
    >>> options["max-count"], options["maxCount"], options["verbose"]
    (3, 3, True)
"""
import builtins
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .tokenizer import ParsedBag
from .utils import *


class SchemaEntry:
    """
    One declared option: names, default, help text and optional transform.

    Instances are immutable; use entry(...) to build them.
    """
    __slots__ = ("_names", "_default", "_help", "_transform")

    names = mirror("names")
    default = mirror("default")
    help = mirror("help")
    transform = mirror("transform")

    @property
    def canonical(self):
        return self._names[0]

    @property
    def aliases(self):
        return self._names[1:]

    @property
    def boolean(self):
        return isinstance(self._default, bool)

    def matches(self, key, /):
        return key in self._names

    def __setattr__(self, name, value, /):
        if name in SchemaEntry.__slots__ and not hasattr(self, name):
            return object.__setattr__(self, name, value)
        raise AttributeError("schema entries are read-only")

    def __eq__(self, other, /):
        if not isinstance(other, SchemaEntry):
            return NotImplemented
        return (
            self._names == other._names and
            self._default == other._default and
            self._help == other._help and
            self._transform == other._transform
        )

    def __hash__(self):
        return hash(self._names)

    def __repr__(self):
        return "entry(%s, default=%r, help=%r%s)" % (
            ", ".join(map(repr, self._names)),
            coalesce(self._default),
            self._help,
            "" if self._transform is Unset else ", transform=%r" % (self._transform,)
        )


def entry(*names, default=Unset, help=Unset, transform=Unset):
    """
    Build a SchemaEntry.

    Parameters
    - *names: str
      canonical name first, then aliases ("max-count", "m", "c").
    - default: any (keyword-only)
      value used when no name appears in the bag. A bool default makes the
      option boolean-typed.
    - help: str (keyword-only)
      one-line description for the help screen.
    - transform: Callable[[str], any] (keyword-only)
      converter applied to the raw string instead of the default coercion.

    Raises
    - TypeError: no names, a non-string name, a non-string help or a
      non-callable transform.
    - ValueError: an empty/whitespace-padded name or a duplicated name.
    """
    if not names:
        raise TypeError("entry() requires at least one name")
    for name in names:
        if not isinstance(name, str):
            raise TypeError("entry() names must be strings")
        if not name or name != name.strip():
            raise ValueError("entry() name %r must be non-empty and not padded with whitespace" % name)
    if len(set(names)) != len(names):
        raise ValueError("entry() names must be unique, got %r" % (names,))
    if not isinstance(help, str | Unset):
        raise TypeError("entry() 'help' must be a string")
    if transform is not Unset and not builtins.callable(transform):
        raise TypeError("entry() 'transform' must be callable")

    self = object.__new__(SchemaEntry)
    self._names = tuple(names)
    self._default = default
    self._help = coalesce(help, "")
    self._transform = transform
    return self


class Schema:
    """
    Ordered, immutable collection of SchemaEntry objects.

    The camelCase alias table ({canonical: camelCase}) is computed once here
    rather than while resolving.
    """
    __slots__ = ("_entries", "_camelcase")

    entries = mirror("entries")

    def __init__(self, entries=(), /):
        if isinstance(entries, Schema):
            entries = entries.entries
        if not isinstance(entries, Iterable):
            raise TypeError("Schema() argument must be an iterable of entries")
        entries = tuple(entries)
        for item in entries:
            if not isinstance(item, SchemaEntry):
                raise TypeError("Schema() items must be built with entry(), got %r" % (item,))
        self._entries = entries
        self._camelcase = MappingProxyType({
            item.canonical: camelcase(item.canonical)
            for item in entries
            if "-" in item.canonical and camelcase(item.canonical) != item.canonical
        })

    @property
    def camelcase(self):
        return self._camelcase

    @property
    def names(self):
        return tuple(item.canonical for item in self._entries)

    def find(self, name, /):
        """
        Return the entry owning name (canonical or alias), or None.
        """
        for item in self._entries:
            if item.matches(name):
                return item
        return None

    def undeclared(self, bag, /):
        """
        Return the bag keys that no entry claims, in bag order.
        """
        return tuple(key for key in bag if self.find(key) is None)

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, name, /):
        return self.find(name) is not None

    def __add__(self, other, /):
        if not isinstance(other, Schema):
            other = Schema(other)
        return Schema(self._entries + other._entries)

    def __repr__(self):
        return "Schema(%r)" % list(self._entries)


class ResolvedOptions(Mapping):
    """
    Fully populated option values for one parse.

    Every schema entry is present (falling back to its default), camelCase
    duplicates are included, and the positionals sit under "_".
    """
    __slots__ = ("_values",)

    RESERVED = "_"

    def __init__(self, values=(), positionals=()):
        self._values = dict(values)
        self._values[self.RESERVED] = list(positionals)

    @property
    def positionals(self):
        return tuple(self._values[self.RESERVED])

    def merge(self, *others, positionals=Unset):
        """
        Return a new ResolvedOptions with others layered on top of self.
        """
        values = dict(self._values)
        for other in others:
            values.update(other)
        values.pop(self.RESERVED, None)
        return type(self)(values, coalesce(positionals, self.positionals))

    def __getitem__(self, key, /):
        value = self._values[key]
        return list(value) if isinstance(value, list) else value

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __eq__(self, other, /):
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self._values)


def _transform(transform, raw):
    if isinstance(raw, list):
        return [transform(item) for item in raw]
    return transform(raw)


def resolve(bag, schema, /, *, camel_case_expansion=True):
    """
    Resolve a ParsedBag against a schema.

    Parameters
    - bag: ParsedBag (a plain mapping is accepted and treated as having no positionals)
    - schema: Schema | Iterable[SchemaEntry]
    - camel_case_expansion: bool (keyword-only)

    Returns
    - ResolvedOptions with one key per entry (plus camelCase duplicates) and "_".
    """
    if not isinstance(bag, Mapping):
        raise TypeError("resolve() first argument must be a parsed bag")
    if not isinstance(schema, Schema):
        schema = Schema(schema)
    raw = bag.raw if isinstance(bag, ParsedBag) else bag
    positionals = bag.positionals if isinstance(bag, ParsedBag) else ()

    values = {}
    for item in schema:
        key = next((key for key in bag if item.matches(key)), Unset)

        if key is Unset:
            value = coalesce(item.default)
        elif item.transform is not Unset:
            value = _transform(item.transform, raw[key])
        elif item.boolean:
            value = toboolean(bag[key])
        else:
            value = bag[key]

        values[item.canonical] = value
        if camel_case_expansion and item.canonical in schema.camelcase:
            values[schema.camelcase[item.canonical]] = value

    return ResolvedOptions(values, positionals)


__all__ = (
    "SchemaEntry",
    "Schema",
    "ResolvedOptions",
    "entry",
    "resolve",
)
