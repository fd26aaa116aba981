"""
cliaid shell collaborator: turn outcomes into console output and exit statuses.

The parsing core (cliaid.commands) never prints and never exits. invoke()
is the outward-facing layer that does both:

- ShowHelpRequested     → help rendered on stdout, sys.exit(0)
- ShowVersionRequested  → "<name> <version>" on stdout, sys.exit(0)
- MissingRequiredFields → fault rendered on stderr, sys.exit(1)
- UnknownCommand        → fault rendered on stderr, sys.exit(1)
- UndeclaredFlag        → advisory rendered on stderr, outcome returned
- CommandExecuted, Idle → outcome returned untouched

Layout and colors are delegated to rich (tables for the command and option
listings); styles can be overridden with __styles__ in __main__.
"""
import sys

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from .commands import CLI, Config
from .outcomes import *
from .utils import Unset

_styles = {
    "usage-label": "bold #00E6FF",
    "usage": "bold #36C5F0",
    "description": "italic #A3A3A3",
    "section": "bold #FFFFFF",
    "command": "bold #36C5F0",
    "option": "bold #22C55E",
    "text": "#9CA3AF",
}


def _style(name, colorful):
    if not colorful:
        return ""
    return (_styles | getattr(__import__("__main__"), "__styles__", {})).get(name, "")


def _names(item):
    canonical, *aliases = item.names
    return ", ".join(["--" + canonical] + ["-" + alias for alias in aliases])


def _table(rows, key, colorful):
    table = Table.grid(padding=(0, 4))
    table.add_column(style=_style(key, colorful), no_wrap=True)
    table.add_column(style=_style("text", colorful))
    for row in rows:
        table.add_row(*row)
    return table


def helpscreen(config, command=None, /, *, colorful=True):
    """
    Build the help renderable for a Config, or for one of its commands.
    """
    renders = []

    if command is not None:
        if command.help:
            renders.append(Text(command.help, _style("description", colorful)))
        renders.append(Text("Usage", _style("section", colorful)))
        renders.append(Text("  " + (command.usage or "%s %s [OPTIONS]" % (config.prog, command.name)),
                            _style("usage", colorful)))
        renders.append(Text("Options", _style("section", colorful)))
        renders.append(_table(((_names(item), item.help) for item in command.schema), "option", colorful))
        return Group(*renders)

    if config.name:
        header = Text(config.name, _style("usage-label", colorful))
        if config.version:
            header.append("/" + config.version)
        renders.append(header)
    if config.description:
        renders.append(Text(config.description, _style("description", colorful)))

    if config.commands or config.usage:
        renders.append(Text("Usage", _style("section", colorful)))
        lines = [config.usage] if config.usage else []
        lines.extend(command.usage or "%s %s [OPTIONS]" % (config.prog, name)
                     for name, command in config.commands.items())
        for line in lines:
            renders.append(Text("  " + line, _style("usage", colorful)))

    if config.commands:
        renders.append(Text("Commands", _style("section", colorful)))
        renders.append(_table(
            ((name, command.help or command.usage) for name, command in config.commands.items()),
            "command",
            colorful
        ))

    renders.append(Text("Options", _style("section", colorful)))
    renders.append(_table(((_names(item), item.help) for item in config.schema), "option", colorful))
    return Group(*renders)


def versionline(config, /):
    """
    Return "<name> <version>" (or whichever part is configured).
    """
    return " ".join(part for part in (config.name, config.version) if part)


def invoke(object, argv=Unset, /, *, colorful=True, stdout=Unset, stderr=Unset):
    """
    Parse argv with a CLI or Config and act on the outcome.

    Parameters
    - object: CLI | Config
    - argv: see Config.parse (Unset reads sys.argv[1:]).
    - colorful: bool (keyword-only), plain text when False.
    - stdout, stderr: rich Console overrides (mainly for tests).

    Returns
    - the Outcome, for non-terminating outcomes.

    Raises
    - SystemExit for help, version and fatal outcomes.
    """
    if isinstance(object, CLI):
        object = object.freeze()
    if not isinstance(object, Config):
        raise TypeError("invoke() first argument must be a CLI or a Config")

    stdout = Console() if stdout is Unset else stdout
    stderr = Console(stderr=True) if stderr is Unset else stderr

    outcome = object.parse(argv)

    match outcome:
        case ShowHelpRequested():
            stdout.print(helpscreen(object, outcome.command, colorful=colorful))
            sys.exit(outcome.status)
        case ShowVersionRequested():
            stdout.print(versionline(object), markup=False, highlight=False)
            sys.exit(outcome.status)
        case Fault() if outcome.fatal:
            stderr.print(outcome.render(colorful=colorful))
            sys.exit(outcome.status)
        case Fault():
            stderr.print(outcome.render(colorful=colorful))

    return outcome


__all__ = (
    "helpscreen",
    "versionline",
    "invoke",
)
