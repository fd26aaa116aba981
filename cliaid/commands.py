"""
cliaid command layer: configure a CLI, freeze it, parse and dispatch.

What this module provides
- Command: a registered sub-command (name, usage template, help, schema, handler).
- Settings: parser switches (short-flag grouping, duplicate accumulation,
  camelCase expansion, unknown-command policy).
- CLI: the mutable builder. Chained calls collect package metadata, the
  global schema and commands.
- Config: the immutable snapshot produced by CLI.freeze(). Config.parse()
  tokenizes, resolves and routes, returning an Outcome.

Quick start
    from cliaid import CLI, entry

    def encode(options):
        return options["text"].encode().hex()

    cli = (
        CLI(name="tinify", version="2.0.0")
        .usage("tinify <images...> [OPTIONS]")
        .option("max-count", "m", default=15, help="The max compressing turns.")
        .command("hex", encode, usage="tinify hex <text>", help="Hex-encode text.",
                 options=[entry("verbose", default=False)])
    )

    outcome = cli.parse(["hex", "hello"])   # CommandExecuted(name='hex', result='68656c6c6f')

Routing precedence (first match wins)
1. first positional names a command → command help, missing fields or execution.
2. global help flag or "help"       → ShowHelpRequested.
3. global version flag or "version" → ShowVersionRequested.
4. strict unknown-command policy     → UnknownCommand.
5. no positionals                    → top-level usage must be satisfied.
6. undeclared bag keys               → UndeclaredFlag, otherwise Idle.

Design notes
- Nothing here exits the process or prints; see cliaid.shell for that.
- Each parse builds its ParsedBag and ResolvedOptions from scratch, so a
  Config can be parsed repeatedly (and concurrently) without shared state.
"""
import builtins
import difflib
import shlex
import sys
import warnings
from collections.abc import Iterable
from types import MappingProxyType
from typing import NamedTuple

from .outcomes import *
from .schema import Schema, SchemaEntry, entry, resolve
from .tokenizer import tokenize
from .usage import parse_usage
from .utils import *

HELP = entry("help", "h", "docs", "帮助", default=False, help="Show this help information.")
VERSION = entry("version", "v", default=False, help="Show the version information.")


class Settings(NamedTuple):
    group_short_flags: bool = True
    duplicate_as_array: bool = False
    camel_case_expansion: bool = True
    unknown_command_allowed: bool = True

    def override(self, **overrides):
        """
        Return a copy with the given fields replaced, validating names and types.
        """
        for name, value in overrides.items():
            if name not in self._fields:
                raise TypeError("unknown setting %r; expected one of %s" % (name, ", ".join(self._fields)))
            if not isinstance(value, bool):
                raise TypeError("setting %r must be a bool" % name)
        return self._replace(**overrides)


def _schema(entries, /):
    # normalize builder input: entries or tuples of names
    normalized = []
    for item in entries:
        if isinstance(item, SchemaEntry):
            normalized.append(item)
        elif isinstance(item, str):
            normalized.append(entry(item))
        elif isinstance(item, Iterable):
            normalized.append(entry(*item))
        else:
            raise TypeError("schema items must be entries or name sequences, got %r" % (item,))
    return normalized


def _upsert(entries, item, /):
    # same canonical name replaces in place; otherwise append
    for index, existing in enumerate(entries):
        if existing.canonical == item.canonical:
            entries[index] = item
            return
    entries.append(item)


class Command:
    """
    A registered sub-command.

    Fields are read-only; the effective schema is the built-in help entry
    followed by the command's own entries.
    """
    __slots__ = ("_name", "_usage", "_help", "_schema", "_handler")

    name = mirror("name")
    usage = mirror("usage")
    help = mirror("help")
    handler = mirror("handler")

    def __init__(self, name, handler, /, *, usage="", help="", options=()):
        if not isinstance(name, str) or not name.strip():
            raise TypeError("command name must be a non-empty string")
        if not builtins.callable(handler):
            raise TypeError("command handler must be callable")
        if not isinstance(usage, str):
            raise TypeError("command 'usage' must be a string")
        if not isinstance(help, str):
            raise TypeError("command 'help' must be a string")
        entries = [HELP]
        for item in _schema(options):
            _upsert(entries, item)
        self._name = name
        self._usage = usage
        self._help = help
        self._schema = Schema(entries)
        self._handler = handler

    @property
    def schema(self):
        return self._schema

    def __call__(self, options, /):
        return self._handler(options)

    def __repr__(self):
        return "Command(name=%r, usage=%r, help=%r)" % (self._name, self._usage, self._help)


class Config:
    """
    Immutable configuration snapshot consumed by parse().
    """
    __slots__ = ("_name", "_version", "_description", "_usage", "_schema", "_commands", "_settings")

    name = mirror("name")
    version = mirror("version")
    description = mirror("description")
    usage = mirror("usage")
    settings = mirror("settings")

    def __init__(self, *, name, version, description, usage, schema, commands, settings):
        self._name = name
        self._version = version
        self._description = description
        self._usage = usage
        self._schema = Schema(schema)
        self._commands = MappingProxyType(dict((command.name, command) for command in commands))
        self._settings = settings

    @property
    def schema(self):
        return self._schema

    @property
    def commands(self):
        return self._commands

    @property
    def prog(self):
        return self._name or (self._usage.split() or ["cli"])[0]

    def parse(self, argv=Unset, /, **overrides):
        """
        Tokenize, resolve and route one argument vector.

        Parameters
        - argv:
          • Unset: sys.argv[1:].
          • str: shell-like string split with shlex.split.
          • Iterable[str]: pre-tokenized vector.
        - **overrides: Settings fields replaced for this call only.

        Returns
        - Outcome (see cliaid.outcomes). Handler exceptions propagate.
        """
        if argv is Unset:
            tokens = sys.argv[1:]
        elif isinstance(argv, str):
            tokens = shlex.split(argv)
        elif isinstance(argv, Iterable):
            tokens = list(argv)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        settings = self._settings.override(**overrides)

        bag = tokenize(
            tokens,
            group_short_flags=settings.group_short_flags,
            duplicate_as_array=settings.duplicate_as_array
        )
        options = resolve(bag, self._schema, camel_case_expansion=settings.camel_case_expansion)
        positionals = bag.positionals
        context = {"options": options, "prog": self.prog}

        # 1. command dispatch
        if positionals and (command := self._commands.get(positionals[0])):
            scoped = resolve(bag, command.schema, camel_case_expansion=settings.camel_case_expansion)
            match = parse_usage(command.usage, positionals)

            if options["help"] or scoped["help"] or positionals[1:2] == ("help",):
                return ShowHelpRequested(command, **context)
            if match.missing:
                return MissingRequiredFields(match.missing, command.usage, command, **context)
            merged = scoped.merge(match.values, positionals=positionals)
            return CommandExecuted(command, command(merged), **context)

        # 2. help
        if options["help"] or positionals[:1] == ("help",):
            return ShowHelpRequested(**context)

        # 3. version
        if options["version"] or positionals[:1] == ("version",):
            return ShowVersionRequested(**context)

        # 4. strict unknown-command policy
        if positionals and not settings.unknown_command_allowed:
            suggestions = difflib.get_close_matches(positionals[0], self._commands.keys(), 5)
            return UnknownCommand(positionals[0], suggestions, **context)

        # 5. top-level usage must be satisfied when nothing positional was given
        if not positionals and (match := parse_usage(self._usage, ())).missing:
            return MissingRequiredFields(match.missing, self._usage, **context)

        # 6. advisory for flags nobody declared
        if undeclared := self._schema.undeclared(bag):
            return UndeclaredFlag(undeclared, **context)

        return Idle(**context)

    def __repr__(self):
        return "Config(name=%r, version=%r, commands=%r)" % (self._name, self._version, list(self._commands))


class CLI:
    """
    Mutable builder for a command-line interface.

    Every configuration method returns the builder so calls can be chained.
    freeze() produces the immutable Config consumed by parse(); the builder
    itself never parses.

    Parameters
    - name, version, description: package metadata (see package()).
    - schema: Iterable of entries (or name sequences) appended after the
      built-in help/version entries.
    """

    def __init__(self, name=Unset, version=Unset, description=Unset, schema=()):
        self._name = Unset
        self._version = Unset
        self._description = Unset
        self._usage = ""
        self._schema = [HELP, VERSION]
        self._commands = []
        self._settings = Settings()
        self.package(name=name, version=version, description=description)
        for item in _schema(schema):
            _upsert(self._schema, item)

    def package(self, *, name=Unset, version=Unset, description=Unset):
        """
        Merge package metadata; a known name also sets the default usage
        "<name> [OPTIONS]" unless usage() was called with a custom template.
        """
        for field, value in (("name", name), ("version", version), ("description", description)):
            if not isinstance(value, str | Unset):
                raise TypeError("CLI %r must be a string" % field)
        default = "%s [OPTIONS]" % self._name if self._name else ""
        self._name = coalesce(name, self._name)
        self._version = coalesce(version, self._version)
        self._description = coalesce(description, self._description)
        if self._name and self._usage == default:
            self._usage = "%s [OPTIONS]" % self._name
        return self

    def usage(self, template, /):
        """
        Set the top-level usage template (see cliaid.usage for the grammar).
        """
        if not isinstance(template, str):
            raise TypeError("usage() argument must be a string")
        self._usage = template
        return self

    def option(self, *names, default=Unset, help=Unset, transform=Unset):
        """
        Declare a global option; same arguments as entry(). Declaring an
        existing canonical name (e.g. "help") replaces that entry in place.
        """
        _upsert(self._schema, entry(*names, default=default, help=help, transform=transform))
        return self

    def settings(self, **flags):
        """
        Update parser settings (group_short_flags, duplicate_as_array,
        camel_case_expansion, unknown_command_allowed).
        """
        self._settings = self._settings.override(**flags)
        return self

    def command(self, name=Unset, handler=Unset, /, *, usage="", help="", options=()):
        """
        Register a sub-command, or return a decorator when handler is omitted.

        The decorator form returns the decorator, not the builder, so it
        ends a chain: nothing is registered until the decorator is applied
        to a handler. Use the two-argument form inside chained calls.

        Invalid registrations (non-string or empty name, non-callable handler)
        emit an InvalidCommandRegistrationWarning and leave the command list
        unchanged; the builder is still returned so the chain continues.
        Registering an existing name replaces it at its original position.
        """
        if isinstance(name, str) and name.strip() and handler is Unset:
            def wrapper(handler, /):
                self.command(name, handler, usage=usage, help=help, options=options)
                return handler
            return rename(wrapper, "command")

        if not isinstance(name, str) or not name.strip():
            warnings.warn(InvalidCommandRegistrationWarning(
                "command name %r is not a non-empty string; registration dropped" % (name,),
                hint="pass the command name as the first argument, e.g. cli.command('build', handler)"
            ), stacklevel=2)
            return self
        if not builtins.callable(handler):
            warnings.warn(InvalidCommandRegistrationWarning(
                "handler of command %r is not callable; registration dropped" % name,
                hint="pass a function receiving the resolved options"
            ), stacklevel=2)
            return self

        command = Command(name, handler, usage=usage, help=help, options=options)
        for index, existing in enumerate(self._commands):
            if existing.name == name:
                self._commands[index] = command
                break
        else:
            self._commands.append(command)
        return self

    def freeze(self):
        """
        Snapshot the current configuration into an immutable Config.
        """
        return Config(
            name=coalesce(self._name),
            version=coalesce(self._version),
            description=coalesce(self._description),
            usage=self._usage,
            schema=tuple(self._schema),
            commands=tuple(self._commands),
            settings=self._settings,
        )

    def parse(self, argv=Unset, /, **overrides):
        """
        Shortcut for freeze().parse(argv, **overrides).
        """
        return self.freeze().parse(argv, **overrides)


__all__ = (
    "HELP",
    "VERSION",
    "Settings",
    "Command",
    "Config",
    "CLI",
)
