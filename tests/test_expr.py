import math

import pytest

from workbook.expr import (
    Binary,
    Call,
    CheckError,
    Literal,
    Unary,
    Var,
    format_expr,
)

SQRT_A_PI = Call("sqrt", (Binary("/", Var("A"), Var("pi")),))
SUM_OF_CUBES = Binary(
    "+",
    Call("pow", (Var("x"), Literal(3))),
    Call("pow", (Var("y"), Literal(3))),
)
F_TO_C = Binary(
    "*",
    Binary("/", Literal(5), Literal(9)),
    Binary("-", Var("F"), Literal(32)),
)
NEG_PLUS_NEG = Binary("+", Unary("-", Literal(1)), Unary("-", Var("x")))
NEG_MINUS = Binary("-", Unary("-", Literal(1)), Var("x"))


@pytest.mark.parametrize(
    "expr, env, want",
    [
        (SQRT_A_PI, {"A": 87616, "pi": math.pi}, "167"),
        (SUM_OF_CUBES, {"x": 12, "y": 1}, "1729"),
        (SUM_OF_CUBES, {"x": 9, "y": 10}, "1729"),
        (F_TO_C, {"F": -40}, "-40"),
        (F_TO_C, {"F": 32}, "0"),
        (F_TO_C, {"F": 212}, "100"),
        (NEG_PLUS_NEG, {"x": 1}, "-2"),
        (NEG_MINUS, {"x": 1}, "-2"),
    ],
)
def test_eval(expr, env, want):
    assert format(expr.eval(env), ".6g") == want


def test_missing_variable_is_zero():
    assert Var("x").eval({}) == 0.0
    assert Var("x").eval(None) == 0.0
    assert Var("x").eval({"x": 2.5}) == 2.5


def test_check_collects_variables():
    names = set()
    SQRT_A_PI.check(names)
    assert names == {"A", "pi"}


@pytest.mark.parametrize(
    "expr, message",
    [
        (Unary("!", Var("x")), "unexpected unary op '!'"),
        (Binary("%", Var("x"), Literal(2)), "unexpected binary op '%'"),
        (Call("log", (Literal(10),)), 'unknown function "log"'),
        (Call("sqrt", (Literal(1), Literal(2))), "call to sqrt has 2 args, want 1"),
    ],
)
def test_check_errors(expr, message):
    with pytest.raises(CheckError) as info:
        expr.check(set())
    assert str(info.value) == message


def test_check_error_in_nested_expression():
    expr = Binary("+", Var("x"), Call("log", (Literal(10),)))
    with pytest.raises(CheckError, match="unknown function"):
        expr.check(set())


def test_format_expression():
    assert format_expr(NEG_PLUS_NEG) == "((-1) + (-x))"
    assert format_expr(SUM_OF_CUBES) == "(pow(x, 3) + pow(y, 3))"
    assert format_expr(SQRT_A_PI) == "sqrt((A / pi))"


@pytest.mark.parametrize(
    "value, text",
    [
        (3.141, "3.141"),
        (1e6, "1e+06"),
        (100000.0, "100000"),
        (1e-05, "1e-05"),
        (0.0001, "0.0001"),
        (87616, "87616"),
    ],
)
def test_format_literal(value, text):
    assert format_expr(Literal(value)) == text


def test_format_unknown_expression():
    with pytest.raises(TypeError):
        format_expr(object())


def test_division_by_zero_is_infinite():
    assert Binary("/", Literal(1), Literal(0)).eval() == math.inf
    assert str(Binary("/", Literal(0), Literal(0)).eval()) == "nan"


def test_sqrt_of_negative_is_nan():
    result = Call("sqrt", (Literal(-1),)).eval()
    assert str(result) == "nan"


def test_unsupported_operator_raises_on_eval():
    with pytest.raises(ValueError):
        Binary("%", Literal(1), Literal(2)).eval()