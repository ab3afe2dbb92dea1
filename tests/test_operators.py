"""Test the operator catalog."""
import math

import pytest

from infix_calculator.common.operators import (
    BINARY_OPERATORS,
    CLOSERS,
    FUNCTION_PATTERNS,
    OPENERS,
    OPERATORS,
    Associativity,
    GroupKind,
    Operator,
)


@pytest.mark.parametrize("symbol,associativity,precedence,arity", [
    ("+", Associativity.LEFT, 0, 2),
    ("-", Associativity.LEFT, 0, 2),
    ("/", Associativity.LEFT, 5, 2),
    ("*", Associativity.LEFT, 5, 2),
    ("^", Associativity.RIGHT, 10, 2),
    ("sqrt", Associativity.RIGHT, 10, 1),
    ("arcctg", Associativity.RIGHT, 10, 1),
    ("ln", Associativity.RIGHT, 10, 1),
    ("log", Associativity.RIGHT, 10, 1),
])
def test_catalog_attributes(symbol, associativity, precedence, arity):
    """Every catalog entry carries its associativity, precedence and arity."""
    op = OPERATORS[symbol]
    assert op.associativity is associativity
    assert op.precedence == precedence
    assert op.arity == arity


def test_catalog_is_read_only():
    """Lookup tables cannot be modified at runtime."""
    with pytest.raises(TypeError):
        OPERATORS["%"] = Operator.DIVISION


def test_binary_operators_are_single_characters():
    assert sorted(BINARY_OPERATORS) == sorted("+-/*^")


def test_function_patterns_longest_first():
    """Longer names are tried before shorter ones."""
    lengths = [len(name) for name, _ in FUNCTION_PATTERNS]
    assert lengths == sorted(lengths, reverse=True)
    assert {name for name, _ in FUNCTION_PATTERNS} == {
        "sqrt", "sin", "cos", "tan", "cot", "arcsin", "arccos", "arctan", "arcctg", "ln", "log",
    }


def test_grouping_tables():
    assert OPENERS["{"] is GroupKind.BRACE
    assert CLOSERS["]"] is GroupKind.BRACKET
    assert GroupKind.PAREN.opener == "(" and GroupKind.PAREN.closer == ")"


@pytest.mark.parametrize("incoming,top,expected", [
    (Operator.ADDITION, Operator.MULTIPLICATION, True),
    (Operator.MULTIPLICATION, Operator.ADDITION, False),
    (Operator.SUBTRACTION, Operator.ADDITION, True),   # left-associative tie
    (Operator.POWER, Operator.POWER, False),           # right-associative tie
    (Operator.SINE, Operator.POWER, False),
    (Operator.ADDITION, Operator.SINE, True),
])
def test_yields_to(incoming, top, expected):
    assert incoming.yields_to(top) is expected


@pytest.mark.parametrize("op,args,expected", [
    (Operator.POWER, (2.0, 10.0), 1024.0),
    (Operator.COTANGENT, (math.pi / 4,), 1.0),
    (Operator.ARCCOTANGENT, (1.0,), math.pi / 4),
    (Operator.LOG10, (1000.0,), 3.0),
    (Operator.NATURAL_LOG, (math.e,), 1.0),
])
def test_compute(op, args, expected):
    assert op.compute(*args) == pytest.approx(expected)


@pytest.mark.parametrize("op,args", [
    (Operator.SQUARE_ROOT, (-1.0,)),
    (Operator.ARCSINE, (2.0,)),
    (Operator.NATURAL_LOG, (-1.0,)),
    (Operator.POWER, (-8.0, 0.5)),
])
def test_domain_errors_yield_nan(op, args):
    """Math domain errors are reported as NaN, not raised."""
    assert math.isnan(op.compute(*args))


def test_logarithm_of_zero_is_negative_infinity():
    assert Operator.NATURAL_LOG.compute(0.0) == -math.inf
    assert Operator.LOG10.compute(0.0) == -math.inf


def test_power_overflow():
    assert Operator.POWER.compute(10.0, 400.0) == math.inf
    assert Operator.POWER.compute(-10.0, 401.0) == -math.inf


def test_cotangent_of_zero_divides_by_zero():
    with pytest.raises(ZeroDivisionError):
        Operator.COTANGENT.compute(0.0)


def test_power_pole_at_zero():
    assert Operator.POWER.compute(0.0, -1.0) == math.inf
    assert Operator.POWER.compute(-0.0, -3.0) == -math.inf
    assert Operator.POWER.compute(-0.0, -0.5) == math.inf
