"""Arithmetic expression trees: evaluation, static checking and formatting."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

Env = Mapping[str, float]

_ARITY = {"pow": 2, "sin": 1, "sqrt": 1}
_UNARY_OPS = ("+", "-")
_BINARY_OPS = ("+", "-", "*", "/")

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
}


class CheckError(ValueError):
    """Raised when an expression fails its static check."""


def _escape(c: str, quote: str) -> str:
    if c == quote:
        return "\\" + c
    if c in _ESCAPES:
        return _ESCAPES[c]
    if c.isprintable():
        return c
    code = ord(c)
    if code < 0x80:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def _quote_rune(c: str) -> str:
    """Quote a single character in single quotes, escaping as needed."""
    return "'" + "".join(_escape(ch, "'") for ch in c) + "'"


def _quote_string(s: str) -> str:
    """Quote a string in double quotes, escaping as needed."""
    return '"' + "".join(_escape(ch, '"') for ch in s) + '"'


def _format_g(value: float) -> str:
    """Format a float in the shortest %g form (exponent form past 1e6)."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple))
    point = len(digits) + exponent
    digits = digits.rstrip("0") or "0"
    count = len(digits)
    exp = point - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if count > 1 else "")
        exp_sign = "+" if exp >= 0 else "-"
        return f"{sign}{mantissa}e{exp_sign}{abs(exp):02d}"
    if point <= 0:
        body = "0." + "0" * (-point) + digits
    elif point >= count:
        body = digits + "0" * (point - count)
    else:
        body = digits[:point] + "." + digits[point:]
    return sign + body


def _divide(x: float, y: float) -> float:
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and y.is_integer() and int(y) % 2 == 1


def _pow(x: float, y: float) -> float:
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0 and _is_odd_integer(y):
            return -math.inf
        return math.inf
    except ValueError:
        if x == 0:
            return math.copysign(math.inf, x) if _is_odd_integer(y) else math.inf
        return math.nan


def _sin(x: float) -> float:
    try:
        return math.sin(x)
    except ValueError:
        return math.nan


def _sqrt(x: float) -> float:
    try:
        return math.sqrt(x)
    except ValueError:
        return math.nan


class Expr(ABC):
    """An arithmetic expression."""

    @abstractmethod
    def eval(self, env: Optional[Env] = None) -> float:
        """Return the value of this expression in the environment env."""

    @abstractmethod
    def check(self, vars: set) -> None:
        """Raise CheckError on a malformed expression; add variable names to vars."""


@dataclass(frozen=True)
class Var(Expr):
    """A variable reference, e.g. x."""

    name: str

    def eval(self, env: Optional[Env] = None) -> float:
        if not env:
            return 0.0
        return float(env.get(self.name, 0.0))

    def check(self, vars: set) -> None:
        vars.add(self.name)


@dataclass(frozen=True)
class Literal(Expr):
    """A numeric constant, e.g. 3.141."""

    value: float

    def eval(self, env: Optional[Env] = None) -> float:
        return float(self.value)

    def check(self, vars: set) -> None:
        return None


@dataclass(frozen=True)
class Unary(Expr):
    """A unary operator expression, e.g. -x."""

    op: str
    x: Expr

    def eval(self, env: Optional[Env] = None) -> float:
        if self.op == "+":
            return +self.x.eval(env)
        if self.op == "-":
            return -self.x.eval(env)
        raise ValueError(f"unsupported unary operator: {_quote_rune(self.op)}")

    def check(self, vars: set) -> None:
        if self.op not in _UNARY_OPS:
            raise CheckError(f"unexpected unary op {_quote_rune(self.op)}")
        self.x.check(vars)


@dataclass(frozen=True)
class Binary(Expr):
    """A binary operator expression, e.g. x+y."""

    op: str
    x: Expr
    y: Expr

    def eval(self, env: Optional[Env] = None) -> float:
        if self.op not in _BINARY_OPS:
            raise ValueError(f"unsupported binary operator: {_quote_rune(self.op)}")
        x = self.x.eval(env)
        y = self.y.eval(env)
        if self.op == "+":
            return x + y
        if self.op == "-":
            return x - y
        if self.op == "*":
            return x * y
        return _divide(x, y)

    def check(self, vars: set) -> None:
        if self.op not in _BINARY_OPS:
            raise CheckError(f"unexpected binary op {_quote_rune(self.op)}")
        self.x.check(vars)
        self.y.check(vars)


@dataclass(frozen=True)
class Call(Expr):
    """A function call expression, e.g. sin(x)."""

    fn: str
    args: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def eval(self, env: Optional[Env] = None) -> float:
        if self.fn == "pow":
            return _pow(self.args[0].eval(env), self.args[1].eval(env))
        if self.fn == "sin":
            return _sin(self.args[0].eval(env))
        if self.fn == "sqrt":
            return _sqrt(self.args[0].eval(env))
        raise ValueError(f"unsupported function call: {self.fn}")

    def check(self, vars: set) -> None:
        arity = _ARITY.get(self.fn)
        if arity is None:
            raise CheckError(f"unknown function {_quote_string(self.fn)}")
        if len(self.args) != arity:
            raise CheckError(
                f"call to {self.fn} has {len(self.args)} args, want {arity}"
            )
        for arg in self.args:
            arg.check(vars)


def _write(parts: list, e: Expr) -> None:
    match e:
        case Literal(value=value):
            parts.append(_format_g(value))
        case Var(name=name):
            parts.append(name)
        case Unary(op=op, x=x):
            parts.append("(" + op)
            _write(parts, x)
            parts.append(")")
        case Binary(op=op, x=x, y=y):
            parts.append("(")
            _write(parts, x)
            parts.append(f" {op} ")
            _write(parts, y)
            parts.append(")")
        case Call(fn=fn, args=args):
            parts.append(fn + "(")
            for position, arg in enumerate(args):
                if position:
                    parts.append(", ")
                _write(parts, arg)
            parts.append(")")
        case _:
            raise TypeError(f"unknown Expr: {type(e).__name__}")


def format_expr(e: Expr) -> str:
    """Format an expression as a fully parenthesised string."""
    parts: list = []
    _write(parts, e)
    return "".join(parts)