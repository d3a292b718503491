"""Web service that plots the 3-D surface of a user-supplied function as SVG."""

from __future__ import annotations

import argparse
import math
import sys
from io import StringIO
from typing import Callable, Optional, TextIO
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from .expr import CheckError, Expr, _format_g
from .parse import parse

WIDTH, HEIGHT = 600, 320
CELLS = 100
XYRANGE = 30.0
XYSCALE = WIDTH / 2 / XYRANGE
ZSCALE = HEIGHT * 0.4

SIN30 = 0.5
COS30 = math.sqrt(3.0 / 4.0)

ALLOWED_VARS = frozenset({"x", "y", "r"})

SurfaceFunc = Callable[[float, float], float]


def corner(f: SurfaceFunc, i: int, j: int) -> tuple[float, float]:
    """Project the corner of grid cell (i, j) onto the 2-D canvas."""
    x = XYRANGE * (i / CELLS - 0.5)
    y = XYRANGE * (j / CELLS - 0.5)
    z = f(x, y)
    sx = WIDTH / 2 + (x - y) * COS30 * XYSCALE
    sy = HEIGHT / 2 + (x + y) * SIN30 * XYSCALE - z * ZSCALE
    return sx, sy


def surface(out: TextIO, f: SurfaceFunc) -> None:
    """Write an SVG rendering of the surface z = f(x, y) to out."""
    out.write(
        "<svg xmlns='http://www.w3.org/2000/svg' "
        "style='stroke: grey; fill: white; stroke-width: 0.7' "
        f"width='{WIDTH}' height='{HEIGHT}'>"
    )
    for i in range(CELLS):
        for j in range(CELLS):
            points = (
                corner(f, i + 1, j),
                corner(f, i, j),
                corner(f, i, j + 1),
                corner(f, i + 1, j + 1),
            )
            text = " ".join(f"{_format_g(px)},{_format_g(py)}" for px, py in points)
            out.write(f"<polygon points='{text}'/>\n")
    out.write("</svg>\n")


def parse_and_check(text: str) -> Expr:
    """Parse text and check that it uses only the variables x, y and r."""
    if text == "":
        raise CheckError("empty expression")
    expr = parse(text)
    names: set = set()
    expr.check(names)
    for name in sorted(names):
        if name not in ALLOWED_VARS:
            raise CheckError(f"undefined variable: {name}")
    return expr


def _form_value(environ: dict, key: str) -> str:
    values: list = []
    method = environ.get("REQUEST_METHOD", "GET").upper()
    ctype = environ.get("CONTENT_TYPE", "").split(";")[0].strip().lower()
    if method in ("POST", "PUT", "PATCH") and ctype == "application/x-www-form-urlencoded":
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        if length > 0:
            body = environ["wsgi.input"].read(length).decode("utf-8", "replace")
            values.extend(parse_qs(body, keep_blank_values=True).get(key, []))
    query = environ.get("QUERY_STRING", "")
    values.extend(parse_qs(query, keep_blank_values=True).get(key, []))
    return values[0] if values else ""


def plot(environ: dict, start_response) -> list:
    """WSGI handler: render the surface of the 'expr' form value."""
    try:
        expr = parse_and_check(_form_value(environ, "expr"))
    except ValueError as err:
        start_response(
            "400 Bad Request",
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("X-Content-Type-Options", "nosniff"),
            ],
        )
        return [f"bad expr: {err}\n".encode("utf-8")]

    def height(x: float, y: float) -> float:
        return expr.eval({"x": x, "y": y, "r": math.hypot(x, y)})

    buf = StringIO()
    surface(buf, height)
    start_response("200 OK", [("Content-Type", "image/svg+xml")])
    return [buf.getvalue().encode("utf-8")]


def _app(environ: dict, start_response) -> list:
    if environ.get("PATH_INFO", "") == "/plot":
        return plot(environ, start_response)
    start_response(
        "404 Not Found",
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("X-Content-Type-Options", "nosniff"),
        ],
    )
    return [b"404 page not found\n"]


def main(argv: Optional[list] = None) -> int:
    """Serve surface plots at http://localhost:8000/plot?expr=..."""
    parser = argparse.ArgumentParser(
        prog="surface",
        description="Serve SVG plots of z = f(x, y) at /plot?expr=...",
    )
    parser.parse_args(argv)
    try:
        with make_server("localhost", 8000, _app) as server:
            server.serve_forever()
    except OSError as err:
        print(f"surface: {err}", file=sys.stderr)
        return 1
    return 0