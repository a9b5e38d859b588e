"""
Curry synthesis: partial-application methods of an arity-N wrapper.

For an arity-N wrapper, Curry{b} (b = 1..N) binds the first b arguments and
returns the arity-(N-b) wrapper of the same variant over the remaining ones.
Methods are produced for b = 1..N, so the resulting arity strictly decreases.

    func (f Func2Result[T, P0, P1]) Curry1(p0 P0) Func1Result[T, P1] {
        return func(p1 P1) (T, error) {
            return f(p0, p1)
        }
    }
"""
from dataclasses import dataclass

from .expander import argument_list, parameter_list, quantity
from .rewriter import instantiate, type_parameters, validate


@dataclass(frozen=True, slots=True)
class CurryMethod:
    arity: int
    bound: int
    name: str
    source: str


def _describe(name, arity, bound, reduced):
    if bound == arity == 1:
        bindings = "the only argument"
    elif bound == arity == 2:
        bindings = "both arguments"
    elif bound == arity:
        bindings = f"all {quantity(bound)}"
    elif bound == 1:
        bindings = "the first argument"
    else:
        bindings = f"the first {quantity(bound)}"
    rest = "" if bound == arity else " over the rest"
    return f"// {name} binds {bindings} and returns a {reduced}{rest}."


def _method(template, arity, bound):
    variant = template.variant
    convention = variant.convention
    head = [template.parameter] if template.parameter else []
    name = f"Curry{bound}"

    receiver = instantiate(variant, arity, head + type_parameters(range(arity)))
    reduced = instantiate(variant, arity - bound, head + type_parameters(range(bound, arity)))
    signature = ", ".join(f"p{index} P{index}" for index in range(bound))
    results = f" {template.results}" if template.results else ""
    call = f"{template.receiver}{argument_list(convention, range(arity))}"
    if variant.shape.returns:
        call = "return " + call

    lines = [
        "",
        _describe(name, arity, bound, variant.typename(arity - bound)),
        f"func ({template.receiver} {receiver}) {name}({signature}) {reduced} {{",
        f"\treturn func{parameter_list(convention, range(bound, arity))}{results} {{",
        f"\t\t{call}",
        "\t}",
        "}",
    ]
    return CurryMethod(arity=arity, bound=bound, name=name, source="\n".join(lines) + "\n")


def synthesize(template, arity, /):
    """
    Return the curry methods of template at arity, ordered by bound count 1..arity.

    arity 0 yields an empty tuple.
    """
    arity = validate(arity)
    return tuple(_method(template, arity, bound) for bound in range(1, arity + 1))


__all__ = (
    "CurryMethod",
    "synthesize",
)
