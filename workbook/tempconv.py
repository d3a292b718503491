"""Celsius and Fahrenheit temperatures, and a command-line temperature flag."""

from __future__ import annotations

import argparse
import re
from typing import Optional

from .expr import _format_g, _quote_string

_SCAN = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*(\S*)")


class Celsius(float):
    """A temperature in degrees Celsius."""

    def __str__(self) -> str:
        return f"{_format_g(self)}°C"

    def __repr__(self) -> str:
        return f"Celsius({float(self)!r})"


class Fahrenheit(float):
    """A temperature in degrees Fahrenheit."""

    def __str__(self) -> str:
        return _format_g(self)

    def __repr__(self) -> str:
        return f"Fahrenheit({float(self)!r})"


def c_to_f(c: float) -> Fahrenheit:
    """Convert a Celsius temperature to Fahrenheit."""
    return Fahrenheit(c * 9.0 / 5.0 + 32.0)


def f_to_c(f: float) -> Celsius:
    """Convert a Fahrenheit temperature to Celsius."""
    return Celsius((f - 32.0) * 5.0 / 9.0)


def parse_celsius(s: str) -> Celsius:
    """Parse a quantity with a unit, e.g. "100C" or "212°F", as Celsius."""
    match = _SCAN.match(s)
    if match:
        value = float(match.group(1))
        unit = match.group(2)
        if unit in ("C", "°C"):
            return Celsius(value)
        if unit in ("F", "°F"):
            return f_to_c(Fahrenheit(value))
    raise ValueError(f"invalid temperature {_quote_string(s)}")


def _flag_value(s: str) -> Celsius:
    try:
        return parse_celsius(s)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def celsius_flag(
    parser: argparse.ArgumentParser, name: str, value: float, usage: str
) -> str:
    """Add a -name/--name temperature option to parser.

    The option takes a quantity with a unit, e.g. "100C". Returns the
    attribute name under which the parsed arguments hold the Celsius value.
    """
    parser.add_argument(
        f"-{name}",
        f"--{name}",
        dest=name,
        type=_flag_value,
        default=Celsius(value),
        metavar="value",
        help=usage,
    )
    return name


def main(argv: Optional[list] = None) -> int:
    """Print the value of the -temp flag."""
    parser = argparse.ArgumentParser(prog="tempflag", description=main.__doc__)
    dest = celsius_flag(parser, "temp", 20.0, "the temperature")
    args = parser.parse_args(argv)
    print(getattr(args, dest))
    return 0