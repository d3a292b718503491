"""Sort a music playlist into a variety of orders and print it as a table."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Optional

_NANOS_PER_SECOND = 10**9

_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": _NANOS_PER_SECOND,
    "m": 60 * _NANOS_PER_SECOND,
    "h": 3600 * _NANOS_PER_SECOND,
}

_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

_HEADER = ("Title", "Artist", "Album", "Year", "Length")
_RULE = ("-----", "------", "-----", "----", "------")
_PADDING = 2


@dataclass(frozen=True)
class Track:
    """A track of a playlist; length is in seconds."""

    title: str
    artist: str
    album: str
    year: int
    length: float


def length(s: str) -> float:
    """Parse a duration such as "3m38s" and return it in seconds.

    Accepts an optional sign and a sequence of decimal numbers, each
    followed by one of the units ns, us, µs, ms, s, m or h.
    """
    text = s
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return 0.0
    if not text:
        raise ValueError(f"invalid duration {s!r}")
    total = Fraction(0)
    pos = 0
    while pos < len(text):
        match = _PART.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration {s!r}")
        total += Fraction(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()
    return sign * float(total / _NANOS_PER_SECOND)


def _decimal(value: int, places: int) -> str:
    whole, frac = divmod(value, 10**places)
    digits = f"{frac:0{places}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(seconds: float) -> str:
    """Format a duration in seconds in the style of "1h2m3.5s"."""
    ns = round(Fraction(seconds) * _NANOS_PER_SECOND)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1_000:
        return f"{sign}{ns}ns"
    if ns < 1_000_000:
        return f"{sign}{_decimal(ns, 3)}µs"
    if ns < _NANOS_PER_SECOND:
        return f"{sign}{_decimal(ns, 6)}ms"
    total_minutes, second_ns = divmod(ns, 60 * _NANOS_PER_SECOND)
    hours, minutes = divmod(total_minutes, 60)
    secs = _decimal(second_ns, 9) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}"
    if total_minutes:
        return f"{sign}{minutes}m{secs}"
    return sign + secs


TRACKS: tuple = (
    Track("Go", "Delilah", "From the Roots Up", 2012, length("3m38s")),
    Track("Go", "Moby", "Moby", 1992, length("3m37s")),
    Track("Go Ahead", "Alicia Keys", "As I Am", 2007, length("4m36s")),
    Track("Ready 2 Go", "Martin Solveig", "Smash", 2011, length("4m24s")),
)


def format_tracks(tracks: Iterable[Track]) -> str:
    """Return the tracks as a table with aligned, space-padded columns."""
    rows = [_HEADER, _RULE]
    rows.extend(
        (t.title, t.artist, t.album, str(t.year), format_duration(t.length))
        for t in tracks
    )
    widths = [max(len(cell) for cell in column) + _PADDING for column in zip(*rows)]
    return "".join(
        "".join(cell.ljust(width) for cell, width in zip(row, widths)) + "\n"
        for row in rows
    )


def by_artist(track: Track) -> str:
    """Sort key: the artist."""
    return track.artist


def by_year(track: Track) -> int:
    """Sort key: the year."""
    return track.year


def by_custom(track: Track) -> tuple:
    """Sort key: title, then year, then length."""
    return (track.title, track.year, track.length)


def main(argv: Optional[list] = None) -> int:
    """Print the playlist sorted in several orders."""
    tracks = list(TRACKS)
    out = sys.stdout

    print("byArtist:")
    tracks.sort(key=by_artist)
    out.write(format_tracks(tracks))

    print("\nReverse(byArtist):")
    tracks.sort(key=by_artist, reverse=True)
    out.write(format_tracks(tracks))

    print("\nbyYear:")
    tracks.sort(key=by_year)
    out.write(format_tracks(tracks))

    print("\nCustom:")
    tracks.sort(key=by_custom)
    out.write(format_tracks(tracks))
    return 0