"""
powerfunc-gen variants: the closed family of callable wrapper kinds.

Overview
- Shape: what the wrapped callable returns (nothing, an error, a value, a value
  and an error). VALUE and RESULT are generic over a return-type parameter.
- Convention: how the wrapped callable is called. CARRIER callables always take
  a leading `ctx context.Context`.
- Variant: the 8 valid (Convention, Shape) pairs, each knowing its Go type name,
  its template file name and its arity-qualified name.

Quick example:
    >>> Variant.FUNC_RESULT.typename(2)
    'Func2Result'
    >>> Variant.CTX_FUNC_VALUE.filename
    'ctx_func_value.go'
    >>> Variant.lookup("CtxFuncError")
    <Variant.CTX_FUNC_ERROR: ...>
"""
import re
from enum import Enum

FAMILY = re.compile(r"(?P<carrier>Ctx)?Func(?P<shape>Error|Value|Result)?")


class Shape(Enum):
    """
    return shape of a wrapped callable; the value is the type-name suffix.
    """
    NONE = ""
    ERROR = "Error"
    VALUE = "Value"
    RESULT = "Result"

    @property
    def suffix(self):
        return self.value

    @property
    def generic(self):
        """
        True when the shape carries a return-type parameter (T or R).
        """
        return self in (Shape.VALUE, Shape.RESULT)

    @property
    def returns(self):
        """
        True when the wrapped callable produces at least one result.
        """
        return self is not Shape.NONE


class Convention(Enum):
    """
    calling convention of a wrapped callable; the value is the type-name prefix.
    """
    PLAIN = ""
    CARRIER = "Ctx"

    @property
    def prefix(self):
        return self.value

    @property
    def carrier(self):
        """
        (name, type) of the leading carrier parameter, or None for PLAIN.
        """
        return ("ctx", "context.Context") if self is Convention.CARRIER else None


class Variant(Enum):
    """
    closed enumeration of the (Convention, Shape) pairs.

    behavior
    - Variant((convention, shape)) and Variant.of(convention, shape) resolve a
      pair; anything else raises ValueError.
    - typename(0) is the template's own name; typename(n) inserts the arity
      right after "Func" (Func2Result, CtxFunc3, ...).
    """
    FUNC = (Convention.PLAIN, Shape.NONE)
    FUNC_ERROR = (Convention.PLAIN, Shape.ERROR)
    FUNC_VALUE = (Convention.PLAIN, Shape.VALUE)
    FUNC_RESULT = (Convention.PLAIN, Shape.RESULT)
    CTX_FUNC = (Convention.CARRIER, Shape.NONE)
    CTX_FUNC_ERROR = (Convention.CARRIER, Shape.ERROR)
    CTX_FUNC_VALUE = (Convention.CARRIER, Shape.VALUE)
    CTX_FUNC_RESULT = (Convention.CARRIER, Shape.RESULT)

    @property
    def convention(self):
        return self.value[0]

    @property
    def shape(self):
        return self.value[1]

    @property
    def basename(self):
        return self.typename(0)

    @property
    def filename(self):
        """
        template file name, e.g. "func.go" or "ctx_func_result.go".
        """
        return "%sfunc%s.go" % (
            "ctx_" if self.convention is Convention.CARRIER else "",
            "_" + self.shape.suffix.lower() if self.shape.suffix else "",
        )

    def typename(self, arity=0, /):
        if not isinstance(arity, int) or isinstance(arity, bool) or arity < 0:
            raise ValueError(f"arity must be a non-negative integer, not {arity!r}")
        return f"{self.convention.prefix}Func{arity or ''}{self.shape.suffix}"

    @classmethod
    def of(cls, convention, shape, /):
        return cls((Convention(convention), Shape(shape)))

    @classmethod
    def lookup(cls, identifier, /):
        """
        resolve a base type name (Func, CtxFuncResult, ...) to its variant.
        """
        if not isinstance(identifier, str) or not (match := FAMILY.fullmatch(identifier)):
            raise ValueError(f"{identifier!r} is not a callable wrapper type name")
        return cls.of(
            Convention.CARRIER if match["carrier"] else Convention.PLAIN,
            Shape(match["shape"] or ""),
        )


__all__ = (
    "FAMILY",
    "Shape",
    "Convention",
    "Variant",
)
