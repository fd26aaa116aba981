"""
cliaid usage templates: required positional extraction.

Template mini-grammar (whitespace separated)
- literal words: program name followed by fixed command words ("app base64").
- <name>       required positional.
- <name...>    required rest positional, consumes every remaining positional.
- [name]       optional positional, never required and never extracted.

Alignment
- The program name (first word) is not part of the positional vector; every
  other literal word before the first "<", "[" or "-" is a command word that
  occupies one positional slot. Field i aligns with positional (count + i).

    >>> parse_usage("tinify <filename> <imgs...>", ["a.txt", "1.png", "2.png"])
    UsageMatch(required=('filename', 'imgs'), values={'filename': 'a.txt', 'imgs': ['1.png', '2.png']}, missing=())

Malformed templates (e.g. an unbalanced "<") simply yield no required field.
"""
import re
from typing import NamedTuple

_REQUIRED = re.compile(r"<([^>]+?)>")
_LEADING = re.compile(r"[-<\[]")


class UsageField(NamedTuple):
    name: str
    rest: bool


class UsageMatch(NamedTuple):
    required: tuple
    values: dict
    missing: tuple

    @property
    def ok(self):
        return not self.missing


def fields(template, /):
    """
    Extract the ordered UsageField list from a usage template.
    """
    if not isinstance(template, str):
        raise TypeError("fields() argument must be a string")
    extracted = []
    for match in _REQUIRED.finditer(template):
        name = match[1]
        if rest := name.endswith("..."):
            name = name[:-3]
        extracted.append(UsageField(name, rest))
    return tuple(extracted)


def count(template, /):
    """
    Number of fixed command words in a template (program name excluded).

    Examples
    - count("tinify set-key <key> <mode>") -> 1
    - count("go run -v <f1> [f2]")          -> 1
    - count("tinify <imgs...>")             -> 0
    """
    if not isinstance(template, str):
        raise TypeError("count() argument must be a string")
    head = _LEADING.split(template, 1)[0]
    return len(head.split()[1:])


def parse_usage(template, positionals, /):
    """
    Align a usage template against supplied positionals.

    Returns
    - UsageMatch(required, values, missing)
      • required: field names in template order (rest marker stripped).
      • values: name → positional (None when absent); rest fields map to a list.
      • missing: the required names whose aligned slot is beyond the supplied
        positionals, in template order.
    """
    positionals = list(positionals)
    offset = count(template)
    extracted = fields(template)

    values = {}
    for index, field in enumerate(extracted):
        slot = offset + index
        if field.rest:
            values[field.name] = positionals[slot:]
        else:
            values[field.name] = positionals[slot] if slot < len(positionals) else None

    required = tuple(field.name for field in extracted)
    missing = required[max(0, len(positionals) - offset):]

    return UsageMatch(required, values, missing)


__all__ = (
    "UsageField",
    "UsageMatch",
    "fields",
    "count",
    "parse_usage",
)
