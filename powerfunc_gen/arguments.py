r"""
powerfunc-gen switch specifications.

- Option: a named switch carrying one value (`--arity 3` or `--arity=3`),
  converted with `type`; `default` applies when the switch is absent.
- Flag:   a named, presence-only switch bound to an action. A flag always
  terminates the command: its action runs instead of the callback, and it
  must be given alone.

Names are shell-style (`-a`, `--arity`, `--dry-run`) and must match
`--?[^\W\d_](-?[^\W_]+)*`; non-ASCII letters are accepted.

    >>> arity = Option("-a", "--arity", metavar="N", type=int, default=1)
    >>> arity.label, arity.convert("3")
    ('-a, --arity', 3)
"""
import re

from rich.text import Text

from .utils import *

NAME = re.compile(r"--?[^\W\d_](-?[^\W_]+)*")


class Switch:
    """
    Common part of options and flags: validated names and a description.
    """
    kind = "switch"

    def __init__(self, names, descr):
        if not names:
            raise TypeError(f"{self.kind} must specify at least one name")
        for index, name in enumerate(names):
            if not isinstance(name, str):
                raise TypeError(f"{self.kind} names must be strings")
            if not NAME.fullmatch(name):
                raise ValueError(f"{self.kind} name {name!r} is not a valid switch name")
            if name in names[:index]:
                raise ValueError(f"{self.kind} name {name!r} is given more than once")

        if not isinstance(descr, str | Text | Unset):
            raise TypeError(f"{self.kind} 'descr' must be a string")
        if isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError(f"{self.kind} 'descr' cannot be empty")

        self._names = tuple(names)
        self._descr = coalesce(descr)

    names = mirror("names")
    descr = mirror("descr")

    @property
    def label(self):
        """
        every name, short ones first: "-a, --arity".
        """
        return ", ".join(sorted(self._names, key=lambda name: (name.startswith("--"), len(name))))

    def __repr__(self):
        return f"{self.kind}({self.label})"


class Option(Switch):
    """
    Value-bearing switch.

    metavar defaults to the longest name without dashes, upper-cased
    (`--arity` shows as ARITY).
    """
    kind = "option"

    def __init__(self, *names, metavar=Unset, type=str, default=None, descr=Unset):
        super().__init__(names, descr)
        if not callable(type):
            raise TypeError("option 'type' must be callable")
        if not isinstance(metavar, str | Unset):
            raise TypeError("option 'metavar' must be a string")
        if isinstance(metavar, str) and not (metavar := metavar.strip()):
            raise ValueError("option 'metavar' cannot be empty")

        self._metavar = coalesce(metavar, max(self._names, key=len).lstrip("-").upper())
        self._type = type
        self._default = default

    metavar = mirror("metavar")
    type = mirror("type")
    default = mirror("default")

    def convert(self, value, /):
        """
        Convert a raw token; TypeError and ValueError mean the value is invalid.
        """
        return self._type(value)


class Flag(Switch):
    """
    Presence-only switch that runs action when given.
    """
    kind = "flag"

    def __init__(self, *names, action, descr=Unset):
        super().__init__(names, descr)
        if not callable(action):
            raise TypeError("flag 'action' must be callable")
        self._action = action

    def __call__(self):
        return self._action()


__all__ = (
    "Switch",
    "Option",
    "Flag",
)
