"""
powerfunc-gen command layer: a callback whose parameters default to Options,
driven by a token stream.

    @command(name="powerfunc-gen", version=__version__, shell=True)
    def generate(arity=Option("-a", "--arity", metavar="N", type=int, default=1)):
        ...

    invoke(generate, "--arity 3")

Behavior
- Every command gets -h/--help and -V/--version flags.
- Switches are given as `--name value` or `--name=value`; positional tokens are
  rejected (negative numbers are values, not switches).
- Every command-line fault of a run is collected and surfaced together as a
  CommandExit; faults raised by the callback are surfaced with the command's
  presentation options. In shell mode both print on stderr and exit with 1.
"""
import difflib
import inspect
import re
import shlex
import sys
from collections import defaultdict
from inspect import Parameter

from rich.console import Console, Group
from rich.text import Text

from .arguments import Flag, Option
from .faults import *
from .utils import *

_TOKEN = re.compile(r"(?P<input>--?[^\W\d_](-?[^\W_]+)*)(=(?P<value>.*))?", re.DOTALL)
_NUMBER = re.compile(r"-\d+(\.\d*)?")


def _ordinal(number):
    suffix = "th" if 10 < number % 100 < 20 else {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def _switchlike(token):
    return token.startswith("-") and not _NUMBER.fullmatch(token)


class Command:
    """
    A callable exposed on the command line.

    Every parameter of the callback must default to an Option and be passable
    by keyword; -h, --help, -V and --version are reserved.

    Runtime flags
    - shell: print faults on stderr and exit with status 1 instead of raising.
    - colorful: style help, version and faults.
    """

    def __init__(self, callback, /, *, name=Unset, descr=Unset, version=Unset, shell=False, colorful=False):
        if not callable(callback):
            raise TypeError("command callback must be callable")
        if not isinstance(version, str | Unset):
            raise TypeError("command 'version' must be a string")

        self._callback = callback
        self._name = coalesce(name, getattr(callback, "__name__", "command"))
        self._descr = coalesce(descr, inspect.getdoc(callback))
        self._version = coalesce(version)
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._options = {}
        self._switches = {}

        for parameter in inspect.signature(callback).parameters.values():
            if not isinstance(parameter.default, Option):
                raise TypeError(f"command parameter {parameter.name!r} must default to an option")
            if parameter.kind not in (Parameter.POSITIONAL_OR_KEYWORD, Parameter.KEYWORD_ONLY):
                raise TypeError(f"command parameter {parameter.name!r} must be passable by keyword")
            self._options[parameter.name] = parameter.default
            self._register(parameter.default)

        self._register(Flag("-h", "--help", action=self._help, descr="show this help message and exit"))
        self._register(Flag("-V", "--version", action=self._print_version, descr="show the version and exit"))

    name = mirror("name")
    descr = mirror("descr")
    version = mirror("version")
    shell = mirror("shell")
    colorful = mirror("colorful")
    switches = mirror("switches")

    def _register(self, switch):
        for name in switch.names:
            if name in self._switches:
                raise TypeError(f"command switch name {name!r} is already in use")
            self._switches[name] = switch

    def _styler(self, palette):
        styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
        return lambda style: styles[style] if self._colorful else ""

    def _help(self, stderr=False):
        """
        Print usage, description and the switches grouped by kind.
        """
        styler = self._styler({
            "usage-label": "bold #00E6FF",  # cyan
            "program-name": "bold #FF4D94",  # magenta-pink
            "description": "italic #A3A3A3",
            "group-label": "bold #FFFFFF",
            "option-name": "bold #00E6FF",
            "flag-name": "bold #22C55E",  # green
            "metavar": "bold #FFD600",  # amber
            "switch-description": "#9CA3AF",
        })

        def label(switch):
            text = Text(switch.label, styler(f"{switch.kind}-name"))
            if isinstance(switch, Option):
                text.append(" ").append(switch.metavar, styler("metavar"))
            return text

        switches = list(dict.fromkeys(self._switches.values()))
        usage = Text.assemble(("usage", styler("usage-label")), ": ", (self._name, styler("program-name")))
        for switch in switches:
            usage.append(" [").append(label(switch)).append("]")
        renders = [usage]

        if self._descr:
            renders.append(Text("\n" + str(self._descr), styler("description")))

        groups = defaultdict(list)
        for switch in switches:
            groups[pluralize(switch.kind)].append(switch)
        for group, members in groups.items():
            section = Text("\n").append(group, styler("group-label")).append(":")
            for switch in members:
                line = Text("\n  ").append(head := label(switch))
                line.append("\n" + " " * 24 if len(head) > 20 else " " * (22 - len(head)))
                line.append(str(switch.descr or ""), styler("switch-description"))
                if isinstance(switch, Option) and switch.default is not None:
                    line.append(f" (default: {switch.default})", styler("switch-description"))
                section.append(line)
            renders.append(section)

        Console(stderr=stderr).print(Group(*renders))

    def _print_version(self):
        styler = self._styler({
            "program-name": "bold #FF4D94",
            "program-version": "bold #00E6FF",
        })
        Console().print(Text.assemble(
            (self._name, styler("program-name")), " ",
            (self._version or "0.0.0", styler("program-version")),
        ))

    def _runtime(self):
        return {"prog": self._name, "shell": self._shell, "colorful": self._colorful}

    def _unknown(self, input, index):
        suggestions = difflib.get_close_matches(input, self._switches, 5)
        if suggestions:
            hint = f"did you mean {suggestions[0]!r}? run '{self._name} --help' to see all switches"
        else:
            hint = f"run '{self._name} --help' to see all switches"
        return UnknownSwitchError(
            f"unknown switch {input!r} at {_ordinal(index)} position",
            input=input,
            index=index,
            suggestions=suggestions,
            hint=hint,
        )

    def _parse(self, tokens):
        """
        Read tokens into option values and the switches present, collecting faults.
        """
        values, present, faults = {}, [], []
        index = 0
        while index < len(tokens):
            token = tokens[index]
            index += 1
            position = _ordinal(index)

            if not _switchlike(token):
                faults.append(UnexpectedCardinalError(
                    f"unexpected positional argument {token!r} at {position} position",
                    index=index,
                    hint=f"switches take the form --name value; run '{self._name} --help' for usage",
                ))
                continue

            match = _TOKEN.fullmatch(token)
            input = match["input"] if match else token.split("=", 1)[0]
            if not match or input not in self._switches:
                faults.append(self._unknown(input, index))
                continue

            switch, value = self._switches[input], match["value"]
            if switch in present:
                faults.append(DuplicatedSwitchError(
                    f"{switch.kind} {input!r} at {position} position was already given",
                    input=input,
                    index=index,
                    hint=f"give {switch.label} only once",
                ))
            else:
                present.append(switch)

            if isinstance(switch, Flag):
                if value is not None:
                    faults.append(FlagAssignmentError(
                        f"flag {input!r} at {position} position takes no value",
                        input=input,
                        index=index,
                        hint=f"write {input} without '='",
                    ))
                continue

            start = index
            if value is None:
                if index == len(tokens) or _switchlike(tokens[index]):
                    faults.append(OptionValueRequiredError(
                        f"option {input!r} at {position} position requires a value",
                        input=input,
                        index=start,
                        hint=f"write {input} {switch.metavar} or {input}={switch.metavar}",
                    ))
                    continue
                value = tokens[index]
                index += 1

            try:
                values[switch] = switch.convert(value)
            except (TypeError, ValueError):
                faults.append(InvalidValueError(
                    f"invalid value {value!r} for option {input!r} at {position} position",
                    input=input,
                    index=start,
                    value=value,
                    hint=f"{switch.metavar} must be a valid {getattr(switch.type, '__name__', 'value')}",
                ))

        if len(present) > 1:
            for switch in present:
                if isinstance(switch, Flag):
                    faults.append(StandaloneSwitchError(
                        f"flag {switch.label!r} must be given alone",
                        input=switch.label,
                        hint=f"run '{self._name} {min(switch.names, key=len)}' by itself",
                    ))
        return values, present, faults

    def __invoke__(self, prompt=Unset):
        """
        Run the command on prompt, a shell-like string, or on sys.argv[1:] when Unset.

        Returns what the callback (or the flag action) returns.
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        else:
            raise TypeError("__invoke__() argument must be a string")

        values, present, faults = self._parse(tokens)
        if faults:
            if self._shell:
                self._help(stderr=True)
            trigger(CommandExit(faults), **self._runtime())
            return None

        for switch in present:
            if isinstance(switch, Flag):
                return switch()

        arguments = {name: values.get(option, option.default) for name, option in self._options.items()}
        try:
            return self._callback(**arguments)
        except Fault as fault:
            trigger(fault, **self._runtime())


def command(**options):
    """
    Decorator building a Command from a callback; options go to Command().
    """
    def decorator(callback, /):
        return Command(callback, **options)
    return decorator


def invoke(command, prompt=Unset, /):
    """
    Run command on prompt (sys.argv[1:] when Unset) and return its result.
    """
    if not callable(getattr(command, "__invoke__", None)):
        raise TypeError("invoke() first argument must implement __invoke__")
    return command.__invoke__(prompt)


__all__ = (
    "Command",
    "command",
    "invoke",
)
