"""Parser for arithmetic expressions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from .expr import Binary, Call, Expr, Literal, Unary, Var, _quote_rune


class ParseError(ValueError):
    """Raised when the input is not a well-formed expression."""


class _Kind(Enum):
    EOF = auto()
    IDENT = auto()
    INT = auto()
    FLOAT = auto()
    CHAR = auto()


@dataclass(frozen=True)
class _Token:
    kind: _Kind
    text: str


_WHITESPACE = frozenset("\t\n\r ")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF_")


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_digit_or_underscore(c: str) -> bool:
    return _is_digit(c) or c == "_"


def _is_ident_start(c: str) -> bool:
    return c == "_" or c.isalpha()


def _is_ident_part(c: str) -> bool:
    return c == "_" or c.isalpha() or c.isdecimal()


def _run(text: str, pos: int, accept) -> int:
    while pos < len(text) and accept(text[pos]):
        pos += 1
    return pos


def _scan_number(text: str, pos: int) -> tuple[int, _Kind]:
    n = len(text)
    kind = _Kind.INT
    end = pos
    if text[end] == "0" and end + 1 < n and text[end + 1] in "xXbBoO":
        is_hex = text[end + 1] in "xX"
        end = _run(text, end + 2, _HEX_DIGITS.__contains__)
        if is_hex:
            if end < n and text[end] == ".":
                kind = _Kind.FLOAT
                end = _run(text, end + 1, _HEX_DIGITS.__contains__)
            if end < n and text[end] in "pP":
                kind = _Kind.FLOAT
                end += 1
                if end < n and text[end] in "+-":
                    end += 1
                end = _run(text, end, _is_digit_or_underscore)
        return end, kind
    if text[end] != ".":
        end = _run(text, end, _is_digit_or_underscore)
    if end < n and text[end] == ".":
        kind = _Kind.FLOAT
        end = _run(text, end + 1, _is_digit_or_underscore)
    if end < n and text[end] in "eE":
        kind = _Kind.FLOAT
        end += 1
        if end < n and text[end] in "+-":
            end += 1
        end = _run(text, end, _is_digit_or_underscore)
    return end, kind


def _tokens(text: str) -> Iterator[_Token]:
    pos = 0
    n = len(text)
    while True:
        pos = _run(text, pos, _WHITESPACE.__contains__)
        if pos >= n:
            break
        c = text[pos]
        if _is_ident_start(c):
            end, kind = _run(text, pos + 1, _is_ident_part), _Kind.IDENT
        elif _is_digit(c) or (c == "." and pos + 1 < n and _is_digit(text[pos + 1])):
            end, kind = _scan_number(text, pos)
        else:
            end, kind = pos + 1, _Kind.CHAR
        yield _Token(kind, text[pos:end])
        pos = end
    while True:
        yield _Token(_Kind.EOF, "")


def _to_float(text: str) -> float:
    lower = text.lower()
    try:
        if lower.startswith("0x"):
            if "p" not in lower:
                raise ValueError(text)
            value = float.fromhex(text.replace("_", ""))
        elif lower.startswith(("0b", "0o")) or "_" in text:
            raise ValueError(text)
        else:
            value = float(text)
    except (ValueError, OverflowError):
        raise ParseError(f'parsing "{text}": invalid syntax') from None
    if math.isinf(value):
        raise ParseError(f'parsing "{text}": value out of range')
    return value


def _precedence(token: _Token) -> int:
    if token.kind is _Kind.CHAR:
        if token.text in ("*", "/"):
            return 2
        if token.text in ("+", "-"):
            return 1
    return 0


class _Parser:
    def __init__(self, text: str) -> None:
        self._stream = _tokens(text)
        self.token = next(self._stream)

    def advance(self) -> None:
        self.token = next(self._stream)

    def at(self, char: str) -> bool:
        return self.token.kind is _Kind.CHAR and self.token.text == char

    def describe(self) -> str:
        kind = self.token.kind
        if kind is _Kind.EOF:
            return "end of file"
        if kind is _Kind.IDENT:
            return f"identifier {self.token.text}"
        if kind in (_Kind.INT, _Kind.FLOAT):
            return f"number {self.token.text}"
        return _quote_rune(self.token.text)

    def expect_close(self) -> None:
        if not self.at(")"):
            raise ParseError(f"got {self.describe()}, want ')'")
        self.advance()

    def expr(self) -> Expr:
        return self.binary(1)

    def binary(self, min_prec: int) -> Expr:
        lhs = self.unary()
        prec = _precedence(self.token)
        while prec >= min_prec:
            while _precedence(self.token) == prec:
                op = self.token.text
                self.advance()
                rhs = self.binary(prec + 1)
                lhs = Binary(op, lhs, rhs)
            prec -= 1
        return lhs

    def unary(self) -> Expr:
        if self.at("+") or self.at("-"):
            op = self.token.text
            self.advance()
            return Unary(op, self.unary())
        return self.primary()

    def primary(self) -> Expr:
        token = self.token
        if token.kind is _Kind.IDENT:
            self.advance()
            if not self.at("("):
                return Var(token.text)
            self.advance()
            args = []
            if not self.at(")"):
                while True:
                    args.append(self.expr())
                    if not self.at(","):
                        break
                    self.advance()
            self.expect_close()
            return Call(token.text, tuple(args))
        if token.kind in (_Kind.INT, _Kind.FLOAT):
            value = _to_float(token.text)
            self.advance()
            return Literal(value)
        if self.at("("):
            self.advance()
            e = self.expr()
            self.expect_close()
            return e
        raise ParseError(f"unexpected {self.describe()}")


def parse(text: str) -> Expr:
    """Parse text as an arithmetic expression.

    Supports numbers, variables, calls such as pow(x, 2), unary +/- and
    the binary operators + - * / with the usual precedence.
    """
    parser = _Parser(text)
    e = parser.expr()
    if parser.token.kind is not _Kind.EOF:
        raise ParseError(f"unexpected {parser.describe()}")
    return e