"""
cliaid tokenizer: raw argument vector → ParsedBag.

Overview
- tokenize(tokens, /, *, group_short_flags=True, duplicate_as_array=False)
  • single left-to-right scan with a lookahead of one token.
  • "--" stops flag interpretation; everything after it is positional.
  • a lone "-" is a positional (conventionally standard input).
  • grouped short flags ("-xy", "-xy=val") are exploded into "-x", "-y" (and
    "val") and re-scanned from the same position.
  • "--key=value" splits at the first "="; "--key value" consumes the next
    token unless it starts with a hyphen, in which case the flag is True.
  • values are coerced with utils.coerce ("" → True, numbers → int/float).

Hyphen-depth buckets
- At most two leading hyphens are stripped to build the stored key. When the
  result still starts with a hyphen ("---foo" → "-foo"), the value is also
  stored under the fully stripped key ("foo"). With duplicate_as_array the
  zero-hyphen bucket therefore aggregates every depth:

      --foo=3 --foo=3 ---foo=4 ---foo=4 ----foo=5 ----foo=5 -----foo=6
      → foo=[3, 3, 4, 4, 5, 5, 6], -foo=[4, 4], --foo=[5, 5], ---foo=6

ParsedBag
- read-only mapping of key → coerced value, in first-seen order.
- positionals: tuple of non-flag tokens in scan order.
- raw: the same keys mapped to the uncoerced string(s) ("" for a valueless
  flag); schema transforms read from here.
"""
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .utils import *

# one hyphen, at least two non-hyphen non-"=" characters, optional "=value"
_GROUPED = re.compile(r"-(?P<flags>[^-=]{2,})(?:=(?P<value>.*))?", re.DOTALL)


class ParsedBag(Mapping):
    """
    Result of tokenize(): flag values plus ordered positionals.

    Keys are case- and hyphen-preserving; "foo", "-foo" and "--foo" are
    distinct entries and never aliases of each other at this level.
    """
    __slots__ = ("_values", "_raw", "_positionals")

    def __init__(self, values=(), positionals=(), raw=Unset):
        self._values = dict(values)
        self._raw = dict(coalesce(raw, self._values))
        self._positionals = tuple(positionals)

    @property
    def positionals(self):
        return self._positionals

    @property
    def raw(self):
        return MappingProxyType(self._raw)

    def __getitem__(self, key, /):
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __eq__(self, other, /):
        if isinstance(other, ParsedBag):
            return dict(self) == dict(other) and self.positionals == other.positionals
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return "%s(%r, positionals=%r)" % (type(self).__name__, self._values, list(self._positionals))


def _store(storage, key, value, duplicate_as_array):
    # overwrite unless accumulating and the key already holds a value
    if duplicate_as_array and key in storage:
        storage[key] = toarray(storage[key]) + [value]
    else:
        storage[key] = value


def _strip(key, limit=None):
    stripped = key
    while stripped.startswith("-") and (limit is None or len(key) - len(stripped) < limit):
        stripped = stripped[1:]
    return stripped


def _explode(token):
    """
    Expand a grouped short-flag token into its individual tokens, or return None.

    "-xy"       → ["-x", "-y"]
    "-xy=hello" → ["-x", "-y", "hello"]
    """
    if not (match := _GROUPED.fullmatch(token)):
        return None
    exploded = ["-" + flag for flag in match["flags"]]
    if match["value"] is not None:
        exploded.append(match["value"])
    return exploded


def tokenize(tokens, /, *, group_short_flags=True, duplicate_as_array=False):
    """
    Convert a raw token vector into a ParsedBag.

    Parameters
    - tokens: Iterable[str]
      the argument vector without program/script names.
    - group_short_flags: bool (keyword-only)
      explode "-xy" into "-x -y" before interpretation.
    - duplicate_as_array: bool (keyword-only)
      accumulate repeated keys into lists instead of last-wins.

    Raises
    - TypeError when tokens is not an iterable of strings.
    """
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("tokenize() argument must be an iterable of strings")
    tokens = list(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("tokenize() argument must be an iterable of strings")

    values = {}
    raw = {}
    positionals = []

    index = 0
    while index < len(tokens):
        token = tokens[index]

        if token == "--":
            positionals.extend(tokens[index + 1:])
            break

        if group_short_flags and (exploded := _explode(token)) is not None:
            # splice in place and re-scan from the same position
            tokens[index:index + 1] = exploded
            continue

        # a lone "-" is the stdin placeholder
        if token == "-" or not token.startswith("-"):
            positionals.append(token)
            index += 1
            continue

        if "=" in token:
            key, value = token.split("=", 1)
        else:
            key = token
            try:
                lookahead = tokens[index + 1]
            except IndexError:
                value = True
            else:
                if lookahead.startswith("-"):
                    value = True
                else:
                    value = lookahead
                    index += 1

        coerced = coerce(value)
        source = "" if value is True else value

        normalized = _strip(key, 2)
        _store(values, normalized, coerced, duplicate_as_array)
        _store(raw, normalized, source, duplicate_as_array)

        if normalized.startswith("-"):
            stripped = _strip(key)
            _store(values, stripped, coerced, duplicate_as_array)
            _store(raw, stripped, source, duplicate_as_array)

        index += 1

    return ParsedBag(values, positionals, raw)


__all__ = (
    "ParsedBag",
    "tokenize",
)
