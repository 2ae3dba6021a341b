"""CSS color parsing for fill and stroke styles.

Strings go through :func:`PIL.ImageColor.getcolor`, which knows the CSS
named colors, ``#rgb``/``#rgba``/``#rrggbb``/``#rrggbbaa``, ``rgb()``,
``hsl()`` and ``hsv()``. ``rgba()`` is parsed here because its alpha is a
0.0-1.0 fraction (or a percentage) rather than Pillow's 0-255 integer. A
trailing ``;`` left over from style sheets is tolerated. 3- and 4-tuples
of ints are accepted as-is.
"""

from __future__ import annotations

import re
from typing import Sequence

from PIL import ImageColor

from bordercanvas.render.canvas import Color, ColorLike

_RGBA_RE = re.compile(r"^rgba\(([^,()]+),([^,()]+),([^,()]+),([^,()]+)\)$")


def _channel(text: str) -> int:
    v = float(text)
    if not 0.0 <= v <= 255.0:
        raise ValueError(f"color channel out of range: {text!r}")
    return int(round(v))


def _alpha(text: str) -> int:
    text = text.strip()
    if text.endswith("%"):
        v = float(text[:-1]) / 100.0
    else:
        v = float(text)
    if not 0.0 <= v <= 1.0:
        raise ValueError(f"alpha out of range: {text!r}")
    return int(round(v * 255.0))


def _from_tuple(value: Sequence[int]) -> Color:
    if len(value) not in (3, 4):
        raise ValueError(f"color tuple must have 3 or 4 items, got {len(value)}")
    chans = [int(c) for c in value]
    for c in chans:
        if not 0 <= c <= 255:
            raise ValueError(f"color channel out of range: {c}")
    if len(chans) == 3:
        chans.append(255)
    return chans[0], chans[1], chans[2], chans[3]


def parse_color(value: ColorLike) -> Color:
    """Normalize *value* into an ``(r, g, b, a)`` tuple.

    Raises ``ValueError`` when the value is not a recognized color.
    """
    if isinstance(value, (tuple, list)):
        return _from_tuple(value)
    if not isinstance(value, str):
        raise ValueError(f"unsupported color value: {value!r}")

    text = value.strip()
    if text.endswith(";"):
        text = text[:-1].rstrip()
    text = text.lower()

    if text == "transparent":
        return 0, 0, 0, 0
    if text.startswith("rgba("):
        m = _RGBA_RE.match(text)
        if m is None:
            raise ValueError(f"invalid color: {value!r}")
        try:
            r, g, b = (_channel(p) for p in m.groups()[:3])
            return r, g, b, _alpha(m.group(4))
        except ValueError as e:
            raise ValueError(f"invalid color {value!r}: {e}") from None

    try:
        rgba = ImageColor.getcolor(text, "RGBA")
    except ValueError:
        raise ValueError(f"invalid color: {value!r}") from None
    # Pillow does not range-check rgb() channels
    return _from_tuple(rgba)  # type: ignore[arg-type]


def with_alpha(color: Color, alpha: float) -> Color:
    """Return *color* with its alpha multiplied by *alpha* (0.0-1.0)."""
    r, g, b, a = color
    return r, g, b, int(round(a * alpha))
