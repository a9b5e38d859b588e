r"""
powerfunc-gen templates: loading and parsing of the arity-0 base sources.

Overview
- A template is the hand-authored Go source of one variant at arity 0
  (func.go, ctx_func_result.go, ...). It is parsed once into an immutable,
  typed intermediate representation: an ordered tuple of fragments.

- Fragments
  • Literal(text): verbatim Go text.
  • Directive(text): a top-level `//go:` line; kept in templates only.
  • TypeReference(variant, role, parameter, constraint): a family type name
    (Func, CtxFuncResult, ...) in code, in a comment or in the type declaration,
    with its bracketed return-type parameter absorbed.
  • Parameters(): a value-parameter declaration site, `()` or `(ctx context.Context)`.
  • Arguments(): a call of the method receiver, `f()` or `f(ctx)`.
  • Quantity(): the "0 arguments" phrase of doc comments.

Recognized sites
- the parameter list of the `type X func(...)` signature (must be canonical);
- the parameter list of the `Exec` method (must be canonical);
- the parameter list of every `return func(...)` literal, when canonical;
- every call of the method receiver (must be canonical, and made from Exec or
  from a returned literal whose parameter list is a site).

Required structure
- exactly one family type declaration, of the template's own variant;
- a type signature, an Exec method and at least one receiver call.
Anything else raises PatternMismatchError with the template name, line and column.

Quick example:
    >>> loader = TemplateLoader(BASES)
    >>> template = loader.load(Variant.FUNC_RESULT)
    >>> template.parameter, template.results
    ('T', '(T, error)')
"""
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .faults import PatternMismatchError, TemplateNotFoundError
from .lexer import position, tokenize
from .utils import *
from .variants import FAMILY, Convention, Variant

_COMMENTED = re.compile(r"(?<!\w)(?P<family>(?:Ctx)?Func(?:Error|Value|Result)?)(?!\w)|(?P<quantity>\b0 arguments\b)")


class Role(Enum):
    CODE = "code"
    COMMENT = "comment"
    DECLARATION = "declaration"


@dataclass(frozen=True, slots=True)
class Literal:
    text: str


@dataclass(frozen=True, slots=True)
class Directive:
    text: str


@dataclass(frozen=True, slots=True)
class TypeReference:
    variant: Variant
    role: Role
    parameter: str | None = None
    constraint: str | None = None


@dataclass(frozen=True, slots=True)
class Parameters:
    pass


@dataclass(frozen=True, slots=True)
class Arguments:
    pass


@dataclass(frozen=True, slots=True)
class Quantity:
    pass


@dataclass(frozen=True, slots=True)
class Template:
    """
    immutable representation of one parsed template.

    fields
    - variant:    the variant the template declares.
    - name:       template file name (used in diagnostics and generated headers).
    - parameter:  return-type parameter (T, R) or None for non-generic shapes.
    - constraint: constraint of the return-type parameter ("any") or None.
    - results:    Go result list of the callable ("", "error", "T", "(T, error)").
    - receiver:   name of the method receiver ("f").
    - fragments:  ordered fragments; rendering them at arity 0 gives the source back.
    """
    variant: Variant
    name: str
    parameter: str | None
    constraint: str | None
    results: str
    receiver: str
    fragments: tuple


def _canonical(convention, /, *, declaration):
    """
    significant tokens of the canonical parameter (or argument) list.
    """
    if convention is Convention.PLAIN:
        return []
    name, type = convention.carrier
    return [name, *re.findall(r"\w+|\.", type)] if declaration else [name]


class _Parser:
    """
    two-pass parser: scan() locates the signature sites, build() emits fragments.
    """

    def __init__(self, source, variant, name):
        self.source = source
        self.variant = variant
        self.name = name
        self.tokens = tokenize(source)
        self.depths = []
        self.heads = []

        depth, head = 0, None
        for index, token in enumerate(self.tokens):
            if head is None and token.significant:
                head = index
            self.depths.append(depth)
            self.heads.append(head)
            if token.text == "{":
                depth += 1
            elif token.text == "}":
                depth -= 1
            if not token.significant and "\n" in token.text:
                head = None

        self.fragments = []
        self.buffer = []

    def fail(self, message, index=None, /):
        if index is None:
            raise PatternMismatchError(f"{self.name}: {message}", template=self.name)
        line, column = position(self.source, self.tokens[index].offset)
        raise PatternMismatchError(
            f"{self.name}:{line}:{column}: {message}",
            template=self.name,
            line=line,
            column=column,
        )

    def text(self, index):
        if index is None or not 0 <= index < len(self.tokens):
            return None
        return self.tokens[index].text

    def next(self, index):
        for cursor in range(index + 1, len(self.tokens)):
            if self.tokens[cursor].significant:
                return cursor
        return None

    def previous(self, index):
        for cursor in range(index - 1, -1, -1):
            if self.tokens[cursor].significant:
                return cursor
        return None

    def close(self, index, opening="(", closing=")"):
        depth = 0
        for cursor in range(index, len(self.tokens)):
            if self.tokens[cursor].text == opening:
                depth += 1
            elif self.tokens[cursor].text == closing:
                depth -= 1
                if depth == 0:
                    return cursor
        self.fail(f"unbalanced {opening!r}", index)

    def canonical(self, index, /, *, declaration):
        """
        index of the closing parenthesis when the list opened at index is canonical.
        """
        close = self.close(index)
        inner = [token.text for token in self.tokens[index + 1:close] if token.significant]
        return close if inner == _canonical(self.variant.convention, declaration=declaration) else None

    def body(self, index):
        """
        (opening, closing) braces of the body that starts on the line of index, or None.
        """
        for cursor in range(index + 1, len(self.tokens)):
            token = self.tokens[cursor]
            if token.text == "{":
                return cursor, self.close(cursor, "{", "}")
            if token.kind == "comment" or token.kind == "space" and "\n" in token.text:
                return None
        return None

    def scan(self):
        sites = {}
        signature = method = None
        receivers = {}
        scopes = []

        for index, token in enumerate(self.tokens):
            if token.kind != "ident" or token.text != "func":
                continue
            if self.text(opening := self.next(index)) != "(":
                continue
            depth, head = self.depths[index], self.heads[index]

            if depth == 0 and self.text(head) == "type" and FAMILY.fullmatch(self.text(self.next(head)) or ""):
                if (close := self.canonical(opening, declaration=True)) is None:
                    self.fail("the type signature must take the canonical parameter list", opening)
                if signature is not None:
                    self.fail("more than one type signature", index)
                sites[opening] = (Parameters(), close)
                signature = close

            elif depth == 0 and head == index:
                receiver = self.next(opening)
                if self.tokens[receiver].kind != "ident" or self.text(self.next(receiver)) == ")":
                    self.fail("method receivers must be named", opening)
                name = self.next(self.close(opening))
                receivers[self.text(receiver)] = receiver
                expanded = self.text(name) == "Exec"
                if expanded:
                    if self.text(name + 1) != "(" or (close := self.canonical(name + 1, declaration=True)) is None:
                        self.fail("the Exec method must take the canonical parameter list", name)
                    sites[name + 1] = (Parameters(), close)
                    method = receiver
                if (braces := self.body(name)) is not None:
                    scopes.append((*braces, expanded))

            elif depth > 0:
                close = self.close(opening)
                expanded = False
                if self.text(self.previous(index)) == "return" and opening == index + 1:
                    if self.canonical(opening, declaration=True) is not None:
                        sites[opening] = (Parameters(), close)
                        expanded = True
                if (braces := self.body(close)) is not None:
                    scopes.append((*braces, expanded))

        calls = 0
        for index, token in enumerate(self.tokens):
            if (
                token.kind != "ident" or
                token.text not in receivers or
                self.depths[index] == 0 or
                self.text(index + 1) != "(" or
                self.text(self.previous(index)) == "."
            ):
                continue
            if (close := self.canonical(index + 1, declaration=False)) is None:
                self.fail(f"calls of the receiver {token.text!r} must pass the canonical arguments", index)
            enclosing = [scope for scope in scopes if scope[0] < index < scope[1]]
            if not enclosing or not max(enclosing)[2]:
                self.fail(
                    f"calls of the receiver {token.text!r} must be made from Exec or from a "
                    "returned function literal taking the canonical parameter list",
                    index,
                )
            sites[index + 1] = (Arguments(), close)
            calls += 1

        if signature is None:
            self.fail("no `type ... func(...)` signature found")
        if method is None:
            self.fail("no Exec method found")
        if not calls:
            self.fail("no call of the method receiver found")

        results = []
        for token in self.tokens[signature + 1:]:
            if token.kind == "comment" or token.kind == "space" and "\n" in token.text:
                break
            results.append(token.text)

        return sites, "".join(results).strip(), self.text(method)

    def flush(self):
        if self.buffer:
            self.fragments.append(Literal("".join(self.buffer)))
            self.buffer.clear()

    def push(self, fragment):
        if isinstance(fragment, Literal):
            self.buffer.append(fragment.text)
            return
        self.flush()
        self.fragments.append(fragment)

    def reference(self, index):
        text = self.text(index)
        variant = Variant.lookup(text)
        if self.depths[index] == 0 and self.text(self.previous(index)) == "type":
            role = Role.DECLARATION
        else:
            role = Role.CODE
        parameter = constraint = None

        cursor = index + 1
        if self.text(cursor) == "[":
            close = self.close(cursor, "[", "]")
            inner = [token for token in self.tokens[cursor + 1:close] if token.significant]
            if not variant.shape.generic:
                self.fail(f"{text} takes no type parameters", cursor)
            if not inner or inner[0].kind != "ident":
                self.fail(f"{text} must be instantiated with its return-type parameter", cursor)
            parameter = inner[0].text
            rest = "".join(token.text for token in self.tokens[cursor + 1:close]).strip()
            rest = rest.removeprefix(parameter).strip()
            if role is Role.DECLARATION and not rest:
                self.fail(f"the type parameter of {text} must be constrained", cursor)
            if role is Role.CODE and rest:
                self.fail(f"{text} takes exactly one type parameter", cursor)
            constraint = rest or None
            cursor = close + 1
        elif variant.shape.generic:
            self.fail(f"{text} must be instantiated with its return-type parameter", index)

        return TypeReference(variant, role, parameter, constraint), cursor

    def comment(self, text):
        cursor = 0
        for match in _COMMENTED.finditer(text):
            self.push(Literal(text[cursor:match.start()]))
            if match["family"]:
                self.push(TypeReference(Variant.lookup(match["family"]), Role.COMMENT))
            else:
                self.push(Quantity())
            cursor = match.end()
        self.push(Literal(text[cursor:]))

    def build(self):
        sites, results, receiver = self.scan()
        declaration = None

        index = 0
        while index < len(self.tokens):
            token = self.tokens[index]

            if index in sites:
                fragment, close = sites[index]
                self.push(fragment)
                index = close + 1

            elif token.kind == "ident" and FAMILY.fullmatch(token.text):
                reference, cursor = self.reference(index)
                if reference.role is Role.DECLARATION:
                    if declaration is not None:
                        self.fail("more than one callable wrapper type declaration", index)
                    if reference.variant is not self.variant:
                        self.fail(f"declares {token.text} but {self.name} is the {self.variant.basename} template", index)
                    declaration = reference
                self.push(reference)
                index = cursor

            elif (
                token.kind == "comment" and
                token.text.startswith("//go:") and
                self.depths[index] == 0 and
                (token.offset == 0 or self.source[token.offset - 1] == "\n")
            ):
                text = token.text
                index += 1
                if self.text(index) is not None and self.tokens[index].kind == "space":
                    text += self.tokens[index].text
                    index += 1
                self.push(Directive(text))

            elif token.kind == "comment":
                self.comment(token.text)
                index += 1

            else:
                self.push(Literal(token.text))
                index += 1

        if declaration is None:
            self.fail(f"no {self.variant.basename} type declaration found")
        self.flush()

        return Template(
            variant=self.variant,
            name=self.name,
            parameter=declaration.parameter,
            constraint=declaration.constraint,
            results=results,
            receiver=receiver,
            fragments=tuple(self.fragments),
        )


def parse(source, variant, name=Unset, /):
    """
    Parse the source of a template into a Template.

    Parameters
    - source: Go source of the arity-0 template.
    - variant: the Variant the template must declare.
    - name: file name used in diagnostics (defaults to variant.filename).

    Raises
    - PatternMismatchError: when the required structure is not found.
    """
    if not isinstance(source, str):
        raise TypeError("parse() source must be a string")
    variant = Variant(variant)
    return _Parser(source, variant, coalesce(name, variant.filename)).build()


class TemplateLoader:
    """
    Read and parse the templates of a directory, once per variant.
    """

    def __init__(self, directory, /):
        self._directory = Path(directory)
        self._cache = {}

    directory = mirror("directory")

    def load(self, variant, /):
        variant = Variant(variant)
        if variant not in self._cache:
            path = self._directory / variant.filename
            try:
                source = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as error:
                reason = error.strerror if isinstance(error, OSError) and error.strerror else error
                raise TemplateNotFoundError(
                    f"cannot read template {str(path)!r}: {reason}",
                    template=variant.filename,
                    path=str(path),
                ) from error
            self._cache[variant] = parse(source, variant, variant.filename)
        return self._cache[variant]


__all__ = (
    # Fragments
    "Role",
    "Literal",
    "Directive",
    "TypeReference",
    "Parameters",
    "Arguments",
    "Quantity",

    # Representation
    "Template",

    # Loading
    "parse",
    "TemplateLoader",
)
