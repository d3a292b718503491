import math

import pytest

from workbook.expr import Binary, Call, CheckError, Literal, Unary, Var, format_expr
from workbook.parse import ParseError, parse


def _parse_and_check(text):
    e = parse(text)
    e.check(set())
    return e


@pytest.mark.parametrize(
    "text, env, want",
    [
        ("sqrt(A / pi)", {"A": 87616, "pi": math.pi}, "167"),
        ("pow(x, 3) + pow(y, 3)", {"x": 12, "y": 1}, "1729"),
        ("pow(x, 3) + pow(y, 3)", {"x": 9, "y": 10}, "1729"),
        ("5 / 9 * (F - 32)", {"F": -40}, "-40"),
        ("5 / 9 * (F - 32)", {"F": 32}, "0"),
        ("5 / 9 * (F - 32)", {"F": 212}, "100"),
        ("-1 + -x", {"x": 1}, "-2"),
        ("-1 - x", {"x": 1}, "-2"),
    ],
)
def test_eval(text, env, want):
    assert format(parse(text).eval(env), ".6g") == want


@pytest.mark.parametrize(
    "text, want",
    [
        ("x % 2", "unexpected '%'"),
        ("math.Pi", "unexpected '.'"),
        ("!true", "unexpected '!'"),
        ('"hello"', "unexpected '\"'"),
        ("log(10)", 'unknown function "log"'),
        ("sqrt(1, 2)", "call to sqrt has 2 args, want 1"),
    ],
)
def test_errors(text, want):
    with pytest.raises((ParseError, CheckError)) as info:
        _parse_and_check(text)
    assert str(info.value) == want


@pytest.mark.parametrize(
    "text, env, want",
    [
        ("x % 2", None, "unexpected '%'"),
        ("!true", None, "unexpected '!'"),
        ("log(10)", None, 'unknown function "log"'),
        ("sqrt(1, 2)", None, "call to sqrt has 2 args, want 1"),
        ("sqrt(A / pi)", {"A": 87616, "pi": math.pi}, "167"),
        ("pow(x, 3) + pow(y, 3)", {"x": 9, "y": 10}, "1729"),
        ("5 / 9 * (F - 32)", {"F": -40}, "-40"),
    ],
)
def test_coverage(text, env, want):
    try:
        e = _parse_and_check(text)
    except (ParseError, CheckError) as err:
        got = str(err)
    else:
        got = format(e.eval(env), ".6g")
    assert got == want


def test_parse_errors_are_parse_errors():
    with pytest.raises(ParseError):
        parse("x % 2")


def test_check_errors_are_not_raised_by_parse():
    e = parse("log(10)")
    assert e == Call("log", (Literal(10),))


def test_precedence():
    assert parse("1 + 2 * 3") == Binary(
        "+", Literal(1), Binary("*", Literal(2), Literal(3))
    )
    assert parse("5 / 9 * (F - 32)") == Binary(
        "*",
        Binary("/", Literal(5), Literal(9)),
        Binary("-", Var("F"), Literal(32)),
    )


def test_left_associative():
    assert parse("a - b - c") == Binary(
        "-", Binary("-", Var("a"), Var("b")), Var("c")
    )


def test_unary_chain():
    assert parse("--x") == Unary("-", Unary("-", Var("x")))


def test_format_of_parsed():
    assert format_expr(parse("-1 + -x")) == "((-1) + (-x))"
    assert format_expr(parse("pow(x, 3)")) == "pow(x, 3)"


@pytest.mark.parametrize(
    "text",
    ["sqrt(A / pi)", "pow(x, 3) + pow(y, 3)", "5 / 9 * (F - 32)", "-1 + -x", "+x * 0.5"],
)
def test_format_round_trip(text):
    once = format_expr(parse(text))
    assert format_expr(parse(once)) == once


@pytest.mark.parametrize(
    "text, want",
    [
        ("", "unexpected end of file"),
        ("(1", "got end of file, want ')'"),
        ("f(1", "got end of file, want ')'"),
        ("1 2", "unexpected number 2"),
        ("x y", "unexpected identifier y"),
        ("1 +", "unexpected end of file"),
    ],
)
def test_more_parse_errors(text, want):
    with pytest.raises(ParseError) as info:
        parse(text)
    assert str(info.value) == want


def test_call_with_no_arguments():
    assert parse("f()") == Call("f", ())


def test_numbers():
    assert parse(".5") == Literal(0.5)
    assert parse("1e3") == Literal(1000.0)
    assert parse("0x1p4") == Literal(16.0)


def test_bad_number():
    with pytest.raises(ParseError, match="invalid syntax"):
        parse("0x1F")