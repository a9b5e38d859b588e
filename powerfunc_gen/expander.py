"""
Signature expansion: renders a parsed template at a given arity.

Behavior
- Parameters sites become `(p0 P0, ..., p(N-1) P(N-1))`, carrier first.
- Arguments sites become `(p0, ..., p(N-1))`, carrier first.
- Type references are rewritten (see rewriter.rewrite).
- Quantity becomes "N argument(s)".
- Directives are dropped: they belong to the templates only.

Notes
- arity 0 reproduces the template without its directives.
"""
from .rewriter import rewrite, validate
from .templates import Arguments, Directive, Literal, Parameters, Quantity, TypeReference
from .utils import *


def parameter_list(convention, indices, /):
    entries = [" ".join(convention.carrier)] if convention.carrier else []
    entries.extend(f"p{index} P{index}" for index in indices)
    return f"({', '.join(entries)})"


def argument_list(convention, indices, /):
    entries = [convention.carrier[0]] if convention.carrier else []
    entries.extend(f"p{index}" for index in indices)
    return f"({', '.join(entries)})"


def quantity(count, /):
    return f"{count} {'argument' if count == 1 else pluralize('argument')}"


def expand(template, arity, /):
    """
    Render every fragment of template at arity and return the Go source.

    Raises
    - InvalidArityError: when arity is negative or not an integer.
    """
    arity = validate(arity)
    convention = template.variant.convention

    chunks = []
    for fragment in template.fragments:
        match fragment:
            case Literal(text):
                chunks.append(text)
            case Directive():
                pass
            case TypeReference():
                chunks.append(rewrite(fragment, arity))
            case Parameters():
                chunks.append(parameter_list(convention, range(arity)))
            case Arguments():
                chunks.append(argument_list(convention, range(arity)))
            case Quantity():
                chunks.append(quantity(arity))
            case _:
                raise TypeError(f"unexpected template fragment {fragment!r}")
    return "".join(chunks)


__all__ = (
    "parameter_list",
    "argument_list",
    "quantity",
    "expand",
)
