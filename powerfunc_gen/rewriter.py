"""
Identifier rewriting: renders family type references at a given arity.

    >>> rewrite(TypeReference(Variant.FUNC_RESULT, Role.CODE, "T"), 2)
    'Func2Result[T, P0, P1]'
    >>> rewrite(TypeReference(Variant.FUNC, Role.DECLARATION), 2)
    'Func2[P0, P1 any]'
    >>> rewrite(TypeReference(Variant.CTX_FUNC_ERROR, Role.COMMENT), 3)
    'CtxFunc3Error'
"""
from .faults import InvalidArityError
from .templates import Role
from .variants import Variant


def validate(arity, /):
    """
    return arity unchanged when it is a non-negative integer, raise InvalidArityError otherwise.
    """
    if not isinstance(arity, int) or isinstance(arity, bool):
        raise InvalidArityError(f"arity must be an integer, not {type(arity).__name__}", arity=arity)
    if arity < 0:
        raise InvalidArityError(f"arity must be non-negative, not {arity}", arity=arity)
    return arity


def type_parameters(indices, /):
    return [f"P{index}" for index in indices]


def instantiate(variant, arity, arguments=(), /):
    """
    render variant at arity instantiated with the given type arguments.

    the bare name is returned when there are no arguments.
    """
    name = Variant(variant).typename(validate(arity))
    if not (arguments := list(arguments)):
        return name
    return f"{name}[{', '.join(arguments)}]"


def rewrite(reference, arity, /):
    """
    render a TypeReference at arity.

    - comment:     the bare arity-qualified name.
    - code:        the name instantiated with the return-type parameter (if any)
                   followed by P0..P(N-1).
    - declaration: the same list, constrained; P0..P(N-1) are constrained by any.
    """
    head = [reference.parameter] if reference.parameter else []
    values = type_parameters(range(validate(arity)))

    match reference.role:
        case Role.COMMENT:
            return reference.variant.typename(arity)
        case Role.CODE:
            return instantiate(reference.variant, arity, head + values)
        case Role.DECLARATION:
            name = reference.variant.typename(arity)
            if not head and not values:
                return name
            constraint = reference.constraint or "any"
            if not head or constraint == "any":
                return f"{name}[{', '.join(head + values)} any]"
            entries = [f"{reference.parameter} {constraint}"]
            if values:
                entries.append(f"{', '.join(values)} any")
            return f"{name}[{', '.join(entries)}]"
        case _:
            raise ValueError(f"unknown reference role {reference.role!r}")


__all__ = (
    "validate",
    "type_parameters",
    "instantiate",
    "rewrite",
)
