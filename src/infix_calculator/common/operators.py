"""
Catalog of the operators and functions understood by the calculator.

The catalog is built once at import time and exposed through read-only
mappings. Adding an operator only means adding an ``Operator`` member:
the tokenizer and the shunting-yard converter are driven by the
(associativity, precedence) pair, never by the symbol itself.
"""
from enum import Enum
import math
import operator
from types import MappingProxyType
from typing import Callable, Mapping, Tuple


class Associativity(Enum):
    """Grouping direction of operators sharing the same precedence."""

    LEFT = "left"
    RIGHT = "right"


def _power(base: float, exponent: float) -> float:
    if base == 0 and exponent < 0:
        # Pole at zero: signed infinity for odd integer exponents, +inf otherwise
        if exponent.is_integer() and exponent % 2 == 1:
            return math.copysign(math.inf, base)
        return math.inf
    try:
        return math.pow(base, exponent)
    except ValueError:
        # Negative base with a fractional exponent
        return math.nan
    except OverflowError:
        if base < 0 and exponent.is_integer() and exponent % 2 == 1:
            return -math.inf
        return math.inf


def _domain_checked(fn: Callable[[float], float]) -> Callable[[float], float]:
    """Wrap a math function so that a domain error yields NaN instead of raising."""

    def wrapped(x: float) -> float:
        try:
            return fn(x)
        except ValueError:
            return math.nan

    wrapped.__name__ = fn.__name__
    wrapped.__doc__ = fn.__doc__
    return wrapped


def _logarithm(fn: Callable[[float], float]) -> Callable[[float], float]:
    """Logarithms tend to -inf at zero."""
    checked = _domain_checked(fn)

    def wrapped(x: float) -> float:
        if x == 0:
            return -math.inf
        return checked(x)

    wrapped.__name__ = fn.__name__
    return wrapped


def _cotangent(x: float) -> float:
    return 1 / math.tan(x)


def _arccotangent(x: float) -> float:
    return math.pi / 2 - math.atan(x)


class Operator(Enum):
    """
    Binary operators and unary functions, with their parsing attributes.

    Each member is declared as ``(symbol, associativity, precedence, arity, compute)``.
    """

    ADDITION = ("+", Associativity.LEFT, 0, 2, operator.add)
    SUBTRACTION = ("-", Associativity.LEFT, 0, 2, operator.sub)
    DIVISION = ("/", Associativity.LEFT, 5, 2, operator.truediv)
    MULTIPLICATION = ("*", Associativity.LEFT, 5, 2, operator.mul)
    POWER = ("^", Associativity.RIGHT, 10, 2, _power)
    SQUARE_ROOT = ("sqrt", Associativity.RIGHT, 10, 1, _domain_checked(math.sqrt))
    SINE = ("sin", Associativity.RIGHT, 10, 1, _domain_checked(math.sin))
    COSINE = ("cos", Associativity.RIGHT, 10, 1, _domain_checked(math.cos))
    TANGENT = ("tan", Associativity.RIGHT, 10, 1, _domain_checked(math.tan))
    COTANGENT = ("cot", Associativity.RIGHT, 10, 1, _domain_checked(_cotangent))
    ARCSINE = ("arcsin", Associativity.RIGHT, 10, 1, _domain_checked(math.asin))
    ARCCOSINE = ("arccos", Associativity.RIGHT, 10, 1, _domain_checked(math.acos))
    ARCTANGENT = ("arctan", Associativity.RIGHT, 10, 1, math.atan)
    ARCCOTANGENT = ("arcctg", Associativity.RIGHT, 10, 1, _arccotangent)
    NATURAL_LOG = ("ln", Associativity.RIGHT, 10, 1, _logarithm(math.log))
    LOG10 = ("log", Associativity.RIGHT, 10, 1, _logarithm(math.log10))

    def __init__(
        self,
        symbol: str,
        associativity: Associativity,
        precedence: int,
        arity: int,
        compute: Callable[..., float],
    ) -> None:
        self.symbol = symbol
        self.associativity = associativity
        self.precedence = precedence
        self.arity = arity
        self.compute = compute

    @property
    def is_function(self) -> bool:
        """True for named unary functions such as ``sin``."""
        return self.arity == 1

    def yields_to(self, other: "Operator") -> bool:
        """
        Tell whether ``other``, sitting on the operator stack, must be output
        before this operator is pushed.

        :param Operator other: Operator on top of the stack

        :return: True if ``other`` binds at least as tightly
        :rtype: bool
        """
        if self.associativity is Associativity.LEFT:
            return self.precedence <= other.precedence
        return self.precedence < other.precedence

    def __str__(self) -> str:
        return self.symbol


class GroupKind(Enum):
    """Kinds of grouping symbols, each with its own opener and closer."""

    PAREN = ("(", ")")
    BRACE = ("{", "}")
    BRACKET = ("[", "]")

    def __init__(self, opener: str, closer: str) -> None:
        self.opener = opener
        self.closer = closer


# Symbol -> Operator, for every entry of the catalog
OPERATORS: Mapping[str, Operator] = MappingProxyType({op.symbol: op for op in Operator})

# Single-character binary operators: + - / * ^
BINARY_OPERATORS: Mapping[str, Operator] = MappingProxyType(
    {op.symbol: op for op in Operator if not op.is_function}
)

# Function names tried in this order, longest first so that no name can
# shadow a longer one sharing its prefix
FUNCTION_PATTERNS: Tuple[Tuple[str, Operator], ...] = tuple(
    sorted(
        ((op.symbol, op) for op in Operator if op.is_function),
        key=lambda item: len(item[0]),
        reverse=True,
    )
)

OPENERS: Mapping[str, GroupKind] = MappingProxyType({kind.opener: kind for kind in GroupKind})
CLOSERS: Mapping[str, GroupKind] = MappingProxyType({kind.closer: kind for kind in GroupKind})
