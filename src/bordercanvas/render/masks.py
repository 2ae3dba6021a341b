"""Coverage masks drawn with Pillow.

A mask is an ``"L"`` image the size of the target: 255 marks a covered
pixel and 0 an uncovered one. Shapes are drawn with :mod:`PIL.ImageDraw` on
a grid twice as fine as the target and resampled with ``NEAREST``, which
reads the odd grid points. Those are the pixel centres, so a pixel is
covered when its centre lies inside the shape. Edges on whole pixel
coordinates land on even grid points and never decide coverage.

Example:
    mask = fill_polygons([[(0, 0), (4, 0), (4, 4), (0, 4)]], (8, 8))
    assert coverage(mask) == 16
"""

from __future__ import annotations

from math import hypot, sqrt
from typing import List, Sequence, Tuple

from PIL import Image, ImageChops, ImageDraw

from bordercanvas.render.path import Path, Point, Polygon

Size = Tuple[int, int]

FILL_RULES = ("nonzero", "evenodd")

_GRID = 2


def blank(size: Size) -> Image.Image:
    return Image.new("L", size, 0)


def full(size: Size) -> Image.Image:
    return Image.new("L", size, 255)


def is_empty(mask: Image.Image) -> bool:
    return mask.getbbox() is None


def coverage(mask: Image.Image) -> int:
    """Number of covered pixels."""
    return mask.histogram()[255]


def intersect(a: Image.Image, b: Image.Image) -> Image.Image:
    return ImageChops.multiply(a, b)


def _fine(size: Size) -> Tuple[Image.Image, ImageDraw.ImageDraw]:
    img = Image.new("L", (size[0] * _GRID, size[1] * _GRID), 0)
    return img, ImageDraw.Draw(img)


def _sampled(img: Image.Image, size: Size) -> Image.Image:
    return img.resize(size, Image.Resampling.NEAREST)


def _grid(points: Sequence[Point]) -> List[Point]:
    return [(x * _GRID, y * _GRID) for x, y in points]


def _area(poly: Polygon) -> float:
    return 0.5 * sum(
        x0 * y1 - x1 * y0 for (x0, y0), (x1, y1) in zip(poly, poly[1:] + poly[:1])
    )


def fill_polygons(
    polygons: Sequence[Polygon], size: Size, rule: str = "nonzero"
) -> Image.Image:
    """Coverage of the implicitly closed *polygons* under *rule*.

    ``nonzero`` covers the union of the subpaths; ``evenodd`` toggles
    coverage where subpaths overlap. Zero-area subpaths cover nothing.
    """
    if rule not in FILL_RULES:
        raise ValueError(f"fill rule must be one of {', '.join(FILL_RULES)}")
    shapes = [p for p in polygons if len(p) >= 3 and _area(list(p)) != 0.0]
    if rule == "nonzero":
        img, draw = _fine(size)
        for poly in shapes:
            draw.polygon(_grid(poly), fill=255)
        return _sampled(img, size)
    mask = blank(size)
    for poly in shapes:
        img, draw = _fine(size)
        draw.polygon(_grid(poly), fill=255)
        mask = ImageChops.difference(mask, _sampled(img, size))
    return mask


def _dedupe(points: Sequence[Point]) -> List[Point]:
    out: List[Point] = []
    for p in points:
        if not out or p != out[-1]:
            out.append(p)
    return out


def _unit(p: Point, q: Point) -> Point:
    dx, dy = q[0] - p[0], q[1] - p[1]
    n = hypot(dx, dy)
    return dx / n, dy / n


def _extend(frm: Point, to: Point, dist: float) -> Point:
    dx, dy = _unit(frm, to)
    return to[0] + dx * dist, to[1] + dy * dist


def _disc(draw: ImageDraw.ImageDraw, center: Point, radius: float) -> None:
    cx, cy = center
    box = _grid([(cx - radius, cy - radius), (cx + radius, cy + radius)])
    draw.ellipse(box, fill=255)


def _join(
    draw: ImageDraw.ImageDraw,
    prev: Point,
    v: Point,
    nxt: Point,
    hw: float,
    join: str,
    miter_limit: float,
) -> None:
    if join == "round":
        _disc(draw, v, hw)
        return
    d1 = _unit(prev, v)
    d2 = _unit(v, nxt)
    cross = d1[0] * d2[1] - d1[1] * d2[0]
    if cross == 0.0:
        return
    # Outer side of the turn
    s = -1.0 if cross > 0 else 1.0
    n1 = (-d1[1], d1[0])
    n2 = (-d2[1], d2[0])
    o1 = (v[0] + s * hw * n1[0], v[1] + s * hw * n1[1])
    o2 = (v[0] + s * hw * n2[0], v[1] + s * hw * n2[1])
    dot = d1[0] * d2[0] + d1[1] * d2[1]
    if join == "miter" and 1.0 / sqrt((1.0 + dot) / 2.0) <= miter_limit:
        k = s * hw / (1.0 + dot)
        tip = (v[0] + k * (n1[0] + n2[0]), v[1] + k * (n1[1] + n2[1]))
        draw.polygon(_grid([v, o1, tip, o2]), fill=255)
    else:
        draw.polygon(_grid([v, o1, o2]), fill=255)


def stroke_path(
    path: Path,
    size: Size,
    width: float,
    cap: str = "butt",
    join: str = "miter",
    miter_limit: float = 10.0,
) -> Image.Image:
    """Coverage of *path* stroked with a device-space line *width*.

    Segments are drawn with ``ImageDraw.line``; square caps extend the end
    segments, round caps and joins are discs, miter and bevel joins are
    filled wedges on the outer side of each turn.
    """
    img, draw = _fine(size)
    hw = width / 2.0
    line_width = max(1, round(width * _GRID))
    for sp in path.subpaths:
        # A lone move_to is never painted
        if len(sp.points) < 2:
            continue
        pts = _dedupe(sp.points)
        closed = sp.closed and len(pts) > 2
        if closed and pts[0] == pts[-1]:
            pts = pts[:-1]
        if len(pts) == 1:
            if cap == "round" and not sp.closed:
                _disc(draw, pts[0], hw)
            continue

        if closed:
            line = pts + pts[:1]
            corners = range(len(pts))
        else:
            line = list(pts)
            corners = range(1, len(pts) - 1)
            if cap == "square":
                line[0] = _extend(pts[1], pts[0], hw)
                line[-1] = _extend(pts[-2], pts[-1], hw)
        draw.line(_grid(line), fill=255, width=line_width)

        for i in corners:
            nxt = pts[(i + 1) % len(pts)]
            _join(draw, pts[i - 1], pts[i], nxt, hw, join, miter_limit)
        if cap == "round" and not closed:
            _disc(draw, pts[0], hw)
            _disc(draw, pts[-1], hw)
    return _sampled(img, size)
