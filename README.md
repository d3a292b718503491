# workbook

A collection of small, self-contained programs and library pieces. Each one
is useful on its own and short enough to read in one sitting:

- an arithmetic expression parser and evaluator, and an SVG surface plotter
  built on it
- HTML tools: link extraction, document outlines, page titles, a web crawler
- a bit-vector integer set, plane geometry, topological sort, a playlist
  sorter, Celsius/Fahrenheit conversion, image thumbnails
- concurrency: pipelines, a cake-shop simulation, disk usage, banks and
  memoising caches
- toy servers and a client: a price-list web server, chat, clock, reverb
  and netcat

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Library use

### Expressions

```python
from workbook.parse import parse
from workbook.expr import format_expr

e = parse("pow(x, 3) + pow(y, 3)")
e.check(set())                      # raises CheckError on bad calls or operators
print(e.eval({"x": 9, "y": 10}))    # 1729.0
print(format_expr(e))               # (pow(x, 3) + pow(y, 3))
```

`parse` raises `ParseError` on malformed input; for example
`parse("x % 2")` fails with `unexpected '%'`. Variables missing from the
environment evaluate to 0. `check` adds the names of the variables it meets
to the set it is given. The functions `pow`, `sin` and `sqrt` are known.

`workbook.surface.parse_and_check(text)` parses and checks an expression and
also rejects variables other than `x`, `y` and `r`; `surface(out, f)` writes
an SVG rendering of `z = f(x, y)` to a text stream.

### Integer sets

```python
from workbook.intset import IntSet

x = IntSet()
for n in (1, 144, 9):
    x.add(n)
y = IntSet()
y.add(9)
y.add(42)
x.union_with(y)
print(x)                     # {1 9 42 144}
print(x.has(9), x.has(123))  # True False
```

`IntSet` also supports `in` and iteration in ascending order.

### Geometry

```python
from workbook.geometry import Point, Path, distance

print(distance(Point(1, 2), Point(4, 6)))            # 5.0
print(Path([Point(1, 1), Point(5, 1), Point(5, 4)]).distance())   # 7.0
```

`ColoredPoint(point, RGBA(r, g, b, a))` wraps a `Point` with a colour;
several coloured points may share one `Point`.

### HTML

`workbook.htmltree.parse_html` builds a `Node` tree from a string, bytes or a
file; `visit` returns the `href` values of its anchors, `outline` the stack of
tag names for each element and `indented_outline` indented start and end
tags. `workbook.links.extract(url)` fetches a page and returns its links as
absolute URLs; `workbook.title.sole_title(doc)` returns the one non-empty
`<title>` or raises `TitleError`.

### Topological sort

```python
from workbook.toposort import topo_sort

order = topo_sort({"compilers": ["data structures"], "data structures": ["discrete math"]})
# ['discrete math', 'data structures', 'compilers']
```

### Memoisation

```python
from workbook.memo import Memo, MonitorMemo, http_get_body

m = Memo(http_get_body)
body = m.get("http://localhost:8000/")   # fetched once, then cached
```

Errors raised by the function are cached too and raised again on each
`get`. `MonitorMemo` serves requests from a single monitor thread; call its
`close()` when you are done with it, or use it as a context manager.
`sequential(m, urls)` and `concurrent(m, urls)` time a series of requests.

### Banks

`TellerBank` confines the balance to one worker thread (call `close()` when
done); `LockedBank` guards it with a lock. Both offer `deposit(amount)` and
`balance()`.

## Commands

| Command | What it does |
| --- | --- |
| `workbook-surface` | serve an SVG plot of `expr` in x, y and r at `/plot` |
| `workbook-findlinks` | print the links of an HTML document read from standard input |
| `workbook-outline [URL...]` | print the indented outline of each URL, or the element stacks of HTML on standard input |
| `workbook-findlinks-url URL...` | fetch each URL and print its links |
| `workbook-fetch URL...` | save each URL into a local file |
| `workbook-title URL...` | print the title of each HTML page |
| `workbook-crawl [-j N] URL...` | crawl the web breadth-first from the given URLs, optionally N requests at a time |
| `workbook-wait URL` | wait up to a minute for a server to respond |
| `workbook-toposort` | print a course list in prerequisite order |
| `workbook-xmlselect NAME...` | print text of XML from standard input nested inside the named elements |
| `workbook-sorting` | print a playlist sorted in several orders |
| `workbook-tempflag -temp 100F` | print a temperature given in Celsius or Fahrenheit, in Celsius |
| `workbook-shop` | serve `/list` and `/price?item=...` for a small price list |
| `workbook-thumbnail` | make thumbnails of the image files named on standard input |
| `workbook-du [-v] [-c] [-j N] [DIR...]` | report the number and total size of files |
| `workbook-pipeline [--fib [N]]` | print squares through a three-stage pipeline, or compute a Fibonacci number behind a spinner |
| `workbook-countdown [-a]` | count down to a launch; with `-a`, pressing return aborts |
| `workbook-chat` | run a TCP chat server |
| `workbook-clock` | run a TCP server that writes the time every second |
| `workbook-reverb` | run a TCP server that echoes each line back three times |
| `workbook-netcat` | connect standard input and output to a TCP server |

Servers listen on `localhost:8000` by default (the TCP ones take `--host`
and `--port`). With `workbook-surface` running, fetch
`http://localhost:8000/plot?expr=sin(-x)*pow(1.5,-r)` to get an SVG plot.

## What it does not do

- The servers are demonstrations: no TLS, no authentication and no
  configuration files.
- The shop's price list lives in memory and cannot be changed over HTTP.
- The memo caches keep every result for as long as they live; there is no
  eviction.
- Thumbnails are written as JPEG only, scaled with nearest-pixel sampling.