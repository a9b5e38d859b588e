"""
Minimal Go lexer.

Splits Go source into tokens that are just precise enough for template
rewriting: comments and string literals are kept whole so that nothing inside
them is mistaken for code, and the concatenation of every token text is the
source itself.
"""
import re
from typing import NamedTuple

_PATTERN = re.compile(r"""
      (?P<comment>//[^\n]*|/\*.*?\*/)
    | (?P<string>"(?:[^"\\\n]|\\.)*"|`[^`]*`|'(?:[^'\\\n]|\\.)*')
    | (?P<ident>[^\W\d]\w*)
    | (?P<number>\d[\w.]*)
    | (?P<space>\s+)
    | (?P<punct>.)
""", re.VERBOSE | re.DOTALL)


class Token(NamedTuple):
    kind: str
    text: str
    offset: int

    @property
    def significant(self):
        return self.kind not in ("space", "comment")


def tokenize(source, /):
    """
    Split Go source into a tuple of Token(kind, text, offset).

    kinds: comment, string, ident, number, space, punct.
    """
    if not isinstance(source, str):
        raise TypeError("tokenize() argument must be a string")
    return tuple(Token(match.lastgroup, match.group(), match.start()) for match in _PATTERN.finditer(source))


def position(source, offset, /):
    """
    1-based (line, column) of an offset in source.
    """
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


__all__ = (
    "Token",
    "tokenize",
    "position",
)
