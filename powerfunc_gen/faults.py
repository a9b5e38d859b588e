"""
powerfunc-gen faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (command line vs generation) to keep logs and
  searches predictable.
- Fault: base type that carries message + options and knows how to render itself
  (header, message, single hint) through rich.
- CommandException / GeneratorException: the two fault families.
- CommandExit: groups every command-line fault of a single run.
- trigger(): central entry point to surface a fault (raise, or render and exit).

Policy
- Generation is a one-shot batch: the first fault aborts the whole run, nothing is
  retried and no partial output set is produced.
- In library use faults are plain exceptions; in shell mode they are rendered on
  stderr and the process exits with status 1.

Integration
- The host application may define in __main__:
  • __prog__:   program name used in fault headers.
  • __codes__:  mapping FaultCode -> label, to remap numeric codes.
  • __styles__: mapping style-name -> rich style, to restyle rendering.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - command line (111xx)
      • UNKNOWN_SWITCH, FLAG_ASSIGNMENT, DUPLICATED_SWITCH, STANDALONE_SWITCH,
        OPTION_VALUE_REQUIRED, UNEXPECTED_CARDINAL, INVALID_VALUE
    - generation (211xx)
      • TEMPLATE_NOT_FOUND, PATTERN_MISMATCH, INVALID_ARITY, WRITE_FAILURE

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- command-line errors (111xx) ---
    UNKNOWN_SWITCH              = 11112
    FLAG_ASSIGNMENT             = 11113
    DUPLICATED_SWITCH           = 11115
    STANDALONE_SWITCH           = 11116
    OPTION_VALUE_REQUIRED       = 11117
    UNEXPECTED_CARDINAL         = 11121
    INVALID_VALUE               = 11124

    # --- generation errors (211xx) ---
    TEMPLATE_NOT_FOUND          = 21101
    PATTERN_MISMATCH            = 21111
    INVALID_ARITY               = 21121
    WRITE_FAILURE               = 21131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class Fault(Exception):
    """
    base of every powerfunc-gen fault.

    class attributes
    - code:  FaultCode of the fault family member.
    - title: short, lowercased title shown in the rendered header.
    - hint:  default one-line hint (may be overridden per instance with hint=...).

    options
    - arbitrary context (path, template, line, switch, ...) kept read-only in
      self.options; rendering options (shell, colorful, prog) are merged
      in by trigger().
    """
    code = None
    title = "fault"
    hint = None

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style] if colorful else "")

        prog = text(self.options.get("prog", getattr(main, "__prog__", "powerfunc-gen")), "prog-name")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")

        renders = [message]
        if hint := self.options.get("hint", type(self).hint):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class CommandException(Fault):
    """
    command-line faults: raised while parsing the token stream of a command.
    """
    title = "command error"


class UnknownSwitchError(CommandException):
    code = FaultCode.UNKNOWN_SWITCH
    title = "unknown switch"
    hint = "run with --help to list the accepted switches"


class FlagAssignmentError(CommandException):
    code = FaultCode.FLAG_ASSIGNMENT
    title = "flag assignment"
    hint = "flags do not take values, drop the '=...' part"


class DuplicatedSwitchError(CommandException):
    code = FaultCode.DUPLICATED_SWITCH
    title = "duplicated switch"
    hint = "give each switch at most once"


class StandaloneSwitchError(CommandException):
    code = FaultCode.STANDALONE_SWITCH
    title = "standalone switch"
    hint = "use this switch on its own"


class OptionValueRequiredError(CommandException):
    code = FaultCode.OPTION_VALUE_REQUIRED
    title = "missing value"
    hint = "pass a value inline (--name=value) or as the next token"


class UnexpectedCardinalError(CommandException):
    code = FaultCode.UNEXPECTED_CARDINAL
    title = "unexpected positional"
    hint = "this command takes no positional arguments"


class InvalidValueError(CommandException):
    code = FaultCode.INVALID_VALUE
    title = "invalid value"


class GeneratorException(Fault):
    """
    generation faults: fatal for the whole batch (no partial output is produced).
    """
    title = "generation error"


class TemplateNotFoundError(GeneratorException):
    code = FaultCode.TEMPLATE_NOT_FOUND
    title = "template not found"
    hint = "run the generator from the directory holding the base templates"


class PatternMismatchError(GeneratorException):
    code = FaultCode.PATTERN_MISMATCH
    title = "pattern mismatch"
    hint = "restore the canonical shape of the base template and re-run"


class InvalidArityError(GeneratorException):
    code = FaultCode.INVALID_ARITY
    title = "invalid arity"
    hint = "the arity must be a non-negative integer"


class WriteFailureError(GeneratorException):
    code = FaultCode.WRITE_FAILURE
    title = "write failure"
    hint = "check the permissions and free space of the output directory"


class CommandExit(ExceptionGroup):
    """
    every command-line fault of a single invocation, reported together.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad exit", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad exit", tuple(exceptions))
        self.options = MappingProxyType(options)

    def derive(self, exceptions):
        return type(self)(exceptions, **self.options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "title": "bold #FF4DA6",  # friendly pinky group title (Bad Exit)
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            return Text(str(fragment), styles[style] if colorful else "")

        name = self.options.get("prog", getattr(main, "__prog__", "powerfunc-gen"))
        header = Text.assemble("[ ", text(name, "prog-name"), " — ", text(self.message.title(), "title"), " ]")

        renders = [
            exception.__replace__(colorful=colorful, prog=name)
            for exception in self.exceptions
        ]

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see Fault/CommandExit).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode the fault is rendered on stderr and the process exits with 1;
      otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "Fault",
    "CommandException",
    "UnknownSwitchError",
    "FlagAssignmentError",
    "DuplicatedSwitchError",
    "StandaloneSwitchError",
    "OptionValueRequiredError",
    "UnexpectedCardinalError",
    "InvalidValueError",
    "GeneratorException",
    "TemplateNotFoundError",
    "PatternMismatchError",
    "InvalidArityError",
    "WriteFailureError",
    "CommandExit",
    "trigger",
)
