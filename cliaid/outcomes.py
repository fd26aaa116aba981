"""
cliaid outcomes (router results, faults and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for user-facing issues.
  Codes are grouped by domain to keep copy consistent and logs searchable.
- Outcome and its subclasses: the tagged values returned by Config.parse().
  The router never exits the process and never raises for expected
  conditions; the shell collaborator (cliaid.shell) maps outcomes to output
  and exit statuses.
- InvalidCommandRegistrationWarning: emitted through warnings.warn when a
  command registration is dropped.

Outcomes
- ShowHelpRequested(command=None)       success, help for the CLI or a command.
- ShowVersionRequested()                success.
- CommandExecuted(command, result)      success, the handler already ran.
- MissingRequiredFields(fields, usage)  failure.
- UnknownCommand(name, suggestions)     failure (strict mode only).
- UndeclaredFlag(keys)                  success, advisory.
- Idle()                                success, nothing to do.

Every outcome carries the global ResolvedOptions as `options`.

Rendering
- Faults implement __rich__ the same way everywhere: a header with program
  name, code and title, one message line and one hint line. Styles can be
  overridden with a __styles__ mapping in __main__; pass colorful=False to
  render plain text.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset, coalesce


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (1110x): UNKNOWN_COMMAND
    - positionals (1112x): MISSING_REQUIRED_FIELDS
    - warnings (121xx): UNDECLARED_FLAG, INVALID_COMMAND_REGISTRATION
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND              = 11101

    # --- positional errors (11xxx) ---
    MISSING_REQUIRED_FIELDS      = 11125

    # --- warnings (12xxx) ---
    UNDECLARED_FLAG              = 12113
    INVALID_COMMAND_REGISTRATION = 12141

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _palette(base, /):
    return defaultdict(str, base | getattr(__import__("__main__"), "__styles__", {}))


def _render(prog, code, title, message, hint, *, styles, colorful):
    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    header = Text.assemble(
        "[ ",
        text(prog, styler("prog-name")),
        " — ",
        text(code.normalize(), styler("code")),
        " | ",
        text(title.title(), styler("title")),
        " ]"
    )
    renders = [header, text(message, styler("message"))]
    if hint:
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
    return Group(*renders)


class Outcome:
    """
    Base type of every router result.

    Attributes
    - options: ResolvedOptions of the global schema for this parse.
    - code: FaultCode for faults and advisories, None otherwise.
    - fatal: True when the invocation failed.
    - status: process exit status the shell should use (0 or 1).
    """
    code = None
    fatal = False
    title = ""

    def __init__(self, *, options=Unset, prog=Unset):
        self.options = coalesce(options)
        self.prog = coalesce(prog, "cli")

    @property
    def status(self):
        return 1 if self.fatal else 0

    @property
    def message(self):
        return ""

    @property
    def hint(self):
        return ""

    def __bool__(self):
        return not self.fatal

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join(
            "%s=%r" % (name, value) for name, value in self.__rich_repr__()
        ))

    def __rich_repr__(self):
        yield from ()


class Fault(Outcome):
    """
    Outcome that reports something to the user (error or advisory).
    """
    styles = MappingProxyType({
        "prog-name": "bold #E6E6F0",
        "code": "bold #00E5FF",
        "title": "bold #FF4DA6",
        "message": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
    })

    def render(self, *, colorful=True):
        return _render(
            self.prog,
            self.code,
            self.title,
            self.message,
            self.hint,
            styles=_palette(dict(self.styles)),
            colorful=colorful
        )

    def __rich__(self):
        return self.render()


class ShowHelpRequested(Outcome):
    def __init__(self, command=None, **options):
        super().__init__(**options)
        self.command = command

    def __rich_repr__(self):
        yield "command", getattr(self.command, "name", None)


class ShowVersionRequested(Outcome):
    pass


class CommandExecuted(Outcome):
    def __init__(self, command, result=None, **options):
        super().__init__(**options)
        self.command = command
        self.result = result

    @property
    def name(self):
        return self.command.name

    def __rich_repr__(self):
        yield "name", self.name
        yield "result", self.result


class MissingRequiredFields(Fault):
    code = FaultCode.MISSING_REQUIRED_FIELDS
    fatal = True
    title = "missing required fields"

    def __init__(self, fields, usage, command=None, **options):
        super().__init__(**options)
        self.fields = tuple(fields)
        self.usage = usage
        self.command = command

    @property
    def message(self):
        return "missing required %s %s" % (
            "field" if len(self.fields) == 1 else "fields",
            ", ".join("<%s>" % field for field in self.fields)
        )

    @property
    def hint(self):
        return "usage: %s" % self.usage if self.usage else ""

    def __rich_repr__(self):
        yield "fields", self.fields
        yield "usage", self.usage


class UnknownCommand(Fault):
    code = FaultCode.UNKNOWN_COMMAND
    fatal = True
    title = "unknown command"

    def __init__(self, name, suggestions=(), **options):
        super().__init__(**options)
        self.name = name
        self.suggestions = tuple(suggestions)

    @property
    def message(self):
        return "unknown command %r" % self.name

    @property
    def hint(self):
        try:
            return "did you mean %r? you can also run '%s --help' to see available commands" % (
                self.suggestions[0], self.prog
            )
        except IndexError:
            return "run '%s --help' to see available commands" % self.prog

    def __rich_repr__(self):
        yield "name", self.name
        yield "suggestions", self.suggestions


class UndeclaredFlag(Fault):
    code = FaultCode.UNDECLARED_FLAG
    title = "undeclared flag"
    styles = Fault.styles | {
        "code": "bold #FFB400",
        "title": "bold #FFC2E0",
    }

    def __init__(self, keys, **options):
        super().__init__(**options)
        self.keys = tuple(keys)

    @property
    def key(self):
        return self.keys[0]

    @property
    def message(self):
        return "undeclared %s %s" % (
            "flag" if len(self.keys) == 1 else "flags",
            ", ".join(map(repr, self.keys))
        )

    @property
    def hint(self):
        return "run '%s --help' to see all available options" % self.prog

    def __rich_repr__(self):
        yield "keys", self.keys


class Idle(Outcome):
    pass


class InvalidCommandRegistrationWarning(Warning):
    """
    Warning emitted when CLI.command() drops an invalid registration.
    """
    code = FaultCode.INVALID_COMMAND_REGISTRATION

    def __init__(self, message, /, *, hint=""):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self):
        return "%s (%s)" % (self.message, self.hint) if self.hint else self.message


__all__ = (
    "FaultCode",
    "Outcome",
    "Fault",
    "ShowHelpRequested",
    "ShowVersionRequested",
    "CommandExecuted",
    "MissingRequiredFields",
    "UnknownCommand",
    "UndeclaredFlag",
    "Idle",
    "InvalidCommandRegistrationWarning",
)
