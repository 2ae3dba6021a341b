"""Immediate-mode 2D rendering context over a :class:`PixelTarget`.

The context keeps the familiar stateful drawing model: styles, line
attributes, the current transform and the clip region are mutable state
that ``save()``/``restore()`` push and pop, while the current path is built
with ``move_to``/``line_to``/``rect`` and consumed by ``fill``, ``stroke``
and ``clip``.

Example:
    from bordercanvas.platform.display.pillow_backend import PillowDisplayBackend

    backend = PillowDisplayBackend(size=(200, 100))
    ctx = ImmediateContext(backend.begin_frame())
    ctx.fill_style = "rgba(255, 255, 0, 1.0)"
    ctx.fill_rect(10, 10, 50, 20)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from math import isfinite
from typing import List, Optional, Tuple

from PIL import Image

from bordercanvas.render import masks
from bordercanvas.render.canvas import Color, ColorLike, PixelTarget, RenderingContext
from bordercanvas.render.colors import parse_color, with_alpha
from bordercanvas.render.path import (
    IDENTITY,
    LINE_CAPS,
    LINE_JOINS,
    Affine,
    Path,
    Polygon,
    rect_polygon,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DrawingState:
    fill_style: Color = (0, 0, 0, 255)
    stroke_style: Color = (0, 0, 0, 255)
    line_width: float = 1.0
    line_cap: str = "butt"
    line_join: str = "miter"
    miter_limit: float = 10.0
    global_alpha: float = 1.0
    transform: Affine = IDENTITY
    clip: Optional[Image.Image] = None


def _positive(name: str, value: float) -> float:
    v = float(value)
    if not isfinite(v) or v <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return v


class ImmediateContext(RenderingContext):
    """Stateful 2D drawing context bound to one pixel target."""

    def __init__(self, target: PixelTarget) -> None:
        self._target = target
        self._state = DrawingState()
        self._stack: List[DrawingState] = []
        self._path = Path()

    @property
    def target(self) -> PixelTarget:
        return self._target

    # State attributes ---------------------------------------------------
    @property
    def fill_style(self) -> Color:
        return self._state.fill_style

    @fill_style.setter
    def fill_style(self, value: ColorLike) -> None:
        self._state = replace(self._state, fill_style=parse_color(value))

    @property
    def stroke_style(self) -> Color:
        return self._state.stroke_style

    @stroke_style.setter
    def stroke_style(self, value: ColorLike) -> None:
        self._state = replace(self._state, stroke_style=parse_color(value))

    @property
    def line_width(self) -> float:
        return self._state.line_width

    @line_width.setter
    def line_width(self, value: float) -> None:
        self._state = replace(self._state, line_width=_positive("line_width", value))

    @property
    def line_cap(self) -> str:
        return self._state.line_cap

    @line_cap.setter
    def line_cap(self, value: str) -> None:
        if value not in LINE_CAPS:
            raise ValueError(f"line_cap must be one of {', '.join(LINE_CAPS)}")
        self._state = replace(self._state, line_cap=value)

    @property
    def line_join(self) -> str:
        return self._state.line_join

    @line_join.setter
    def line_join(self, value: str) -> None:
        if value not in LINE_JOINS:
            raise ValueError(f"line_join must be one of {', '.join(LINE_JOINS)}")
        self._state = replace(self._state, line_join=value)

    @property
    def miter_limit(self) -> float:
        return self._state.miter_limit

    @miter_limit.setter
    def miter_limit(self, value: float) -> None:
        self._state = replace(self._state, miter_limit=_positive("miter_limit", value))

    @property
    def global_alpha(self) -> float:
        return self._state.global_alpha

    @global_alpha.setter
    def global_alpha(self, value: float) -> None:
        v = float(value)
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"global_alpha must be within [0, 1], got {value!r}")
        self._state = replace(self._state, global_alpha=v)

    # State stack --------------------------------------------------------
    def save(self) -> None:
        self._stack.append(self._state)

    def restore(self) -> None:
        if self._stack:
            self._state = self._stack.pop()

    # Transforms ---------------------------------------------------------
    def get_transform(self) -> Affine:
        return self._state.transform

    def translate(self, x: float, y: float) -> None:
        self._set_transform(self._state.transform.translate(x, y))

    def scale(self, x: float, y: float) -> None:
        self._set_transform(self._state.transform.scale(x, y))

    def rotate(self, angle: float) -> None:
        self._set_transform(self._state.transform.rotate(angle))

    def transform(
        self, a: float, b: float, c: float, d: float, e: float, f: float
    ) -> None:
        self._set_transform(self._state.transform.multiply(Affine(a, b, c, d, e, f)))

    def set_transform(
        self, a: float, b: float, c: float, d: float, e: float, f: float
    ) -> None:
        self._set_transform(Affine(a, b, c, d, e, f))

    def reset_transform(self) -> None:
        self._set_transform(IDENTITY)

    def _set_transform(self, tf: Affine) -> None:
        self._state = replace(self._state, transform=tf)

    # Path construction --------------------------------------------------
    def begin_path(self) -> None:
        self._path.clear()

    def move_to(self, x: float, y: float) -> None:
        self._path.move_to(self._state.transform.apply(x, y))

    def line_to(self, x: float, y: float) -> None:
        self._path.line_to(self._state.transform.apply(x, y))

    def close_path(self) -> None:
        self._path.close()

    def rect(self, x: float, y: float, w: float, h: float) -> None:
        poly = rect_polygon(self._state.transform, x, y, w, h)
        self._path.add_polygon(poly)
        self._path.move_to(poly[0])

    # Painting -----------------------------------------------------------
    def clip(self, rule: str = "nonzero") -> None:
        mask = self._fill_mask(self._path.polygons(), rule)
        if self._state.clip is not None:
            mask = masks.intersect(self._state.clip, mask)
        self._state = replace(self._state, clip=mask)

    def fill(self, rule: str = "nonzero") -> None:
        self._paint(self._fill_mask(self._path.polygons(), rule), self._fill_color())

    def stroke(self) -> None:
        self._paint(self._stroke_mask(self._path), self._stroke_color())

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        poly = rect_polygon(self._state.transform, x, y, w, h)
        self._paint(self._fill_mask([poly], "nonzero"), self._fill_color())

    def stroke_rect(self, x: float, y: float, w: float, h: float) -> None:
        path = Path()
        path.add_polygon(rect_polygon(self._state.transform, x, y, w, h))
        self._paint(self._stroke_mask(path), self._stroke_color())

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        poly = rect_polygon(self._state.transform, x, y, w, h)
        mask = self._clipped(self._fill_mask([poly], "nonzero"))
        if not masks.is_empty(mask):
            self._target.clear(mask)

    # Internals ----------------------------------------------------------
    def _size(self) -> Tuple[int, int]:
        w, h = self._target.size()
        return int(w), int(h)

    def _fill_mask(self, polygons: List[Polygon], rule: str) -> Image.Image:
        return masks.fill_polygons(polygons, self._size(), rule)

    def _stroke_mask(self, path: Path) -> Image.Image:
        st = self._state
        width = st.line_width * st.transform.scale_factor()
        return masks.stroke_path(
            path, self._size(), width, st.line_cap, st.line_join, st.miter_limit
        )

    def _clipped(self, mask: Image.Image) -> Image.Image:
        if self._state.clip is None:
            return mask
        return masks.intersect(mask, self._state.clip)

    def _fill_color(self) -> Color:
        return with_alpha(self._state.fill_style, self._state.global_alpha)

    def _stroke_color(self) -> Color:
        return with_alpha(self._state.stroke_style, self._state.global_alpha)

    def _paint(self, mask: Image.Image, color: Color) -> None:
        if color[3] == 0:
            return
        mask = self._clipped(mask)
        if masks.is_empty(mask):
            return
        logger.debug("paint %d px with %s", masks.coverage(mask), color)
        self._target.paint(mask, color)
