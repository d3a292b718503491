"""Link extraction from web pages and downloading of URLs to local files."""

from __future__ import annotations

import sys
from typing import Optional
from urllib.parse import unquote, urljoin, urlsplit

import requests

from .htmltree import NodeType, for_each_node, parse_html, visit


class FetchError(Exception):
    """Raised when a URL cannot be fetched or its document cannot be parsed."""


def _get(url: str, **kwargs) -> requests.Response:
    try:
        return requests.get(url, **kwargs)
    except requests.RequestException as err:
        raise FetchError(f'Get "{url}": {err}') from err


def _status(resp: requests.Response) -> str:
    return f"{resp.status_code} {resp.reason}" if resp.reason else str(resp.status_code)


def _document(url: str):
    """Fetch url and return (parsed document, final URL)."""
    with _get(url) as resp:
        if resp.status_code != 200:
            raise FetchError(f"getting {url}: {_status(resp)}")
        try:
            doc = parse_html(resp.content)
        except ValueError as err:
            raise FetchError(f"parsing {url} as HTML: {err}") from err
        return doc, resp.url


def extract(url: str) -> list:
    """Fetch url, parse it as HTML and return its links as absolute URLs."""
    doc, base = _document(url)
    links: list = []

    def visit_node(n) -> None:
        if n.type is NodeType.ELEMENT and n.data == "a":
            for key, value in n.attr:
                if key != "href":
                    continue
                try:
                    links.append(urljoin(base, value))
                except ValueError:
                    continue  # ignore bad URLs

    for_each_node(doc, visit_node)
    return links


def find_links(url: str) -> list:
    """Fetch url, parse it as HTML and return the href values it holds."""
    doc, _ = _document(url)
    return visit(doc)


def _base(path: str) -> str:
    if path == "":
        return "."
    path = path.rstrip("/")
    if path == "":
        return "/"
    return path.rsplit("/", 1)[-1]


def fetch(url: str) -> tuple:
    """Download url into the current directory.

    Returns the local file name and the number of bytes written.
    """
    with _get(url, stream=True) as resp:
        local = _base(unquote(urlsplit(resp.url).path))
        if local == "/":
            local = "index.html"
        written = 0
        with open(local, "wb") as out:
            try:
                for chunk in resp.iter_content(chunk_size=32 * 1024):
                    out.write(chunk)
                    written += len(chunk)
            except requests.RequestException as err:
                raise FetchError(f"reading {url}: {err}") from err
    return local, written


def findlinks_main(argv: Optional[list] = None) -> int:
    """Print the links found in each URL given as an argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    for url in args:
        try:
            links = find_links(url)
        except FetchError as err:
            print(f"findlinks2: {err}", file=sys.stderr)
            continue
        for link in links:
            print(link)
    return 0


def fetch_main(argv: Optional[list] = None) -> int:
    """Save each URL given as an argument into a local file."""
    args = sys.argv[1:] if argv is None else list(argv)
    for url in args:
        try:
            local, n = fetch(url)
        except (FetchError, OSError) as err:
            print(f"fetch {url}: {err}", file=sys.stderr)
            continue
        print(f"{url} => {local} ({n} bytes).", file=sys.stderr)
    return 0