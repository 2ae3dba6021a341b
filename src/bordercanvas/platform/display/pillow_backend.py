"""Pillow-based DisplayBackend backed by an in-memory RGBA image.

Always headless; this is the default backend for tests and PNG export.

Example:
    from bordercanvas.platform.display.pillow_backend import PillowDisplayBackend

    backend = PillowDisplayBackend(size=(500, 350))
    target = backend.begin_frame()
    backend.end_frame()
    backend.save_png("/tmp/frame.png")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from PIL import Image

from bordercanvas.render.canvas import Color, DisplayBackend, PixelTarget

logger = logging.getLogger(__name__)


class _PillowTarget(PixelTarget):
    def __init__(self, img: Image.Image) -> None:
        self._img = img

    def size(self) -> Tuple[int, int]:
        return self._img.size

    def paint(self, mask: Image.Image, color: Color) -> None:
        r, g, b, a = color
        if a == 255:
            self._img.paste((r, g, b, a), (0, 0), mask)
            return
        # Translucent: composite a layer whose alpha is the scaled coverage
        layer = Image.new("RGBA", self._img.size, (r, g, b, 0))
        layer.putalpha(mask.point(lambda v: v * a // 255))
        self._img.alpha_composite(layer)

    def clear(self, mask: Image.Image) -> None:
        self._img.paste((0, 0, 0, 0), (0, 0), mask)

    def get_pixel(self, x: int, y: int) -> Color:
        r, g, b, a = self._img.getpixel((x, y))
        return int(r), int(g), int(b), int(a)


class PillowDisplayBackend(DisplayBackend):
    """Pillow implementation of DisplayBackend over an RGBA image."""

    def __init__(self, size: Tuple[int, int] = (500, 350)) -> None:
        w, h = int(size[0]), int(size[1])
        if w <= 0 or h <= 0:
            raise ValueError(f"surface size must be positive, got {w}x{h}")
        self._img = Image.new("RGBA", (w, h), (0, 0, 0, 0))
        self._frames = 0

    @property
    def image(self) -> Image.Image:
        return self._img

    def size(self) -> Tuple[int, int]:
        return self._img.size

    def begin_frame(self) -> PixelTarget:
        return _PillowTarget(self._img)

    def end_frame(self) -> None:
        self._frames += 1
        logger.debug("pillow frame %d complete", self._frames)

    def save_png(self, path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        self._img.save(path, format="PNG")
        logger.debug("saved %s", path)

    def pixels(self) -> bytes:
        return self._img.tobytes()
