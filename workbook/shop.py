"""A rudimentary e-commerce web service with /list and /price endpoints."""

from __future__ import annotations

import argparse
import struct
import sys
from typing import Callable, Optional
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from .expr import _quote_string

_TEXT = [("Content-Type", "text/plain; charset=utf-8")]


def _float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", float(value)))[0]


class Dollars(float):
    """A price in dollars, held at single precision."""

    def __new__(cls, value: float = 0.0) -> Dollars:
        return super().__new__(cls, _float32(value))

    def __str__(self) -> str:
        return f"${float(self):.2f}"

    def __repr__(self) -> str:
        return f"Dollars({float(self)!r})"


class Database(dict):
    """Maps item names to their prices."""

    def __init__(self, prices=(), /, **more) -> None:
        super().__init__()
        self.update(prices, **more)

    def __setitem__(self, item: str, price: float) -> None:
        super().__setitem__(item, Dollars(price))

    def update(self, other=(), /, **more) -> None:
        for item, price in dict(other, **more).items():
            self[item] = price

    def list(self) -> str:
        """Return one "item: price" line per item."""
        return "".join(f"{item}: {price}\n" for item, price in self.items())

    def price(self, item: str) -> Dollars:
        """Return the price of item; raise KeyError if there is no such item."""
        return self[item]


def _respond(start_response, status: str, body: str) -> list:
    start_response(status, list(_TEXT))
    return [body.encode("utf-8")]


def make_app(db: Database) -> Callable:
    """Return a WSGI application serving /list and /price?item=... from db."""

    def app(environ: dict, start_response) -> list:
        path = environ.get("PATH_INFO", "")
        query = environ.get("QUERY_STRING", "")
        if path == "/list":
            return _respond(start_response, "200 OK", db.list())
        if path == "/price":
            item = parse_qs(query, keep_blank_values=True).get("item", [""])[0]
            try:
                price = db.price(item)
            except KeyError:
                return _respond(
                    start_response,
                    "404 Not Found",
                    f"no such item: {_quote_string(item)}\n",
                )
            return _respond(start_response, "200 OK", f"{price}\n")
        url = path + ("?" + query if query else "")
        return _respond(start_response, "404 Not Found", f"no such page: {url}\n")

    return app


def main(argv: Optional[list] = None) -> int:
    """Serve the shop at http://localhost:8000."""
    parser = argparse.ArgumentParser(prog="shop", description=main.__doc__)
    parser.parse_args(argv)
    db = Database({"shoes": 50, "socks": 5})
    try:
        with make_server("localhost", 8000, make_app(db)) as server:
            server.serve_forever()
    except OSError as err:
        print(f"shop: {err}", file=sys.stderr)
        return 1
    return 0