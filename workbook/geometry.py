"""Simple plane geometry: points, paths and coloured points."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import pairwise


@dataclass
class Point:
    """A point in the plane."""

    x: float
    y: float

    def distance(self, q: Point) -> float:
        """Return the distance from this point to q."""
        return math.hypot(q.x - self.x, q.y - self.y)

    def scale_by(self, factor: float) -> None:
        """Scale both coordinates by factor, in place."""
        self.x *= factor
        self.y *= factor


def distance(p: Point, q: Point) -> float:
    """Return the distance between p and q."""
    return math.hypot(q.x - p.x, q.y - p.y)


class Path(list):
    """A journey connecting points with straight lines."""

    def distance(self) -> float:
        """Return the distance travelled along the path."""
        return sum(a.distance(b) for a, b in pairwise(self))


@dataclass(frozen=True)
class RGBA:
    """An 8-bit-per-channel colour with alpha."""

    r: int
    g: int
    b: int
    a: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")


@dataclass
class ColoredPoint:
    """A point with a colour; the point may be shared with other values."""

    point: Point
    color: RGBA

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y

    def distance(self, q: Point) -> float:
        """Return the distance from this point to the plain point q."""
        if not isinstance(q, Point):
            raise TypeError(f"cannot use {type(q).__name__} as Point")
        return self.point.distance(q)

    def scale_by(self, factor: float) -> None:
        """Scale the underlying point by factor, in place."""
        self.point.scale_by(factor)