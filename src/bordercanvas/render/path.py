"""Affine transforms and path construction.

Paths store device-space points: each point is mapped through the current
transform when it is added, so later transform changes do not move
geometry already in the path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import cos, sin, sqrt
from typing import List, Sequence, Tuple

Point = Tuple[float, float]
Polygon = List[Point]

LINE_CAPS = ("butt", "round", "square")
LINE_JOINS = ("miter", "round", "bevel")


@dataclass(frozen=True, slots=True)
class Affine:
    """2x3 matrix: ``x' = a*x + c*y + e``, ``y' = b*x + d*y + f``."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    def multiply(self, o: "Affine") -> "Affine":
        """Return ``self * o`` (apply *o* first, then self)."""
        return Affine(
            self.a * o.a + self.c * o.b,
            self.b * o.a + self.d * o.b,
            self.a * o.c + self.c * o.d,
            self.b * o.c + self.d * o.d,
            self.a * o.e + self.c * o.f + self.e,
            self.b * o.e + self.d * o.f + self.f,
        )

    def translate(self, tx: float, ty: float) -> "Affine":
        return self.multiply(Affine(e=tx, f=ty))

    def scale(self, sx: float, sy: float) -> "Affine":
        return self.multiply(Affine(a=sx, d=sy))

    def rotate(self, angle: float) -> "Affine":
        ca, sa = cos(angle), sin(angle)
        return self.multiply(Affine(a=ca, b=sa, c=-sa, d=ca))

    def apply(self, x: float, y: float) -> Point:
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    def scale_factor(self) -> float:
        """Uniform scale implied by the determinant (used for line widths)."""
        return sqrt(abs(self.a * self.d - self.b * self.c))


IDENTITY = Affine()


@dataclass(slots=True)
class Subpath:
    points: List[Point] = field(default_factory=list)
    closed: bool = False


class Path:
    """Current path of a 2D context: an ordered list of subpaths."""

    def __init__(self) -> None:
        self.subpaths: List[Subpath] = []

    def clear(self) -> None:
        self.subpaths = []

    def move_to(self, p: Point) -> None:
        self.subpaths.append(Subpath([p]))

    def line_to(self, p: Point) -> None:
        if not self.subpaths:
            self.move_to(p)
            return
        if self.subpaths[-1].closed:
            # A closed subpath leaves the pen at its start point
            self.subpaths.append(Subpath([self.subpaths[-1].points[0]]))
        self.subpaths[-1].points.append(p)

    def close(self) -> None:
        if self.subpaths and self.subpaths[-1].points:
            self.subpaths[-1].closed = True

    def add_polygon(self, pts: Sequence[Point]) -> None:
        self.subpaths.append(Subpath(list(pts), closed=True))

    def is_empty(self) -> bool:
        return not self.subpaths

    def polygons(self) -> List[Polygon]:
        """Subpaths as polygons for filling and clipping (implicitly closed)."""
        return [list(sp.points) for sp in self.subpaths if len(sp.points) >= 3]


def rect_polygon(tf: Affine, x: float, y: float, w: float, h: float) -> Polygon:
    return [
        tf.apply(x, y),
        tf.apply(x + w, y),
        tf.apply(x + w, y + h),
        tf.apply(x, y + h),
    ]
