"""Pygame-based DisplayBackend with headless (offscreen) support.

This module implements a PixelTarget and DisplayBackend using pygame.
It's suitable for deterministic, headless tests by setting the environment
variable SDL_VIDEODRIVER=dummy before importing pygame.

Example:
    import os
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    from bordercanvas.platform.display.pygame_backend import PygameDisplayBackend

    backend = PygameDisplayBackend(size=(500, 350))
    target = backend.begin_frame()
    backend.end_frame()
    backend.save_png("/tmp/frame.png")
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Tuple

from PIL import Image

from bordercanvas.render.canvas import Color, DisplayBackend, PixelTarget

logger = logging.getLogger(__name__)

pg: Any = None
try:  # pragma: no cover - import guard for environments without SDL
    import pygame as _pg

    pg = _pg
except Exception:  # pragma: no cover
    pg = None


def _pygame_color(c: Color) -> Tuple[int, int, int, int]:
    r, g, b, a = c
    return int(r), int(g), int(b), int(a)


class _PygameTarget(PixelTarget):
    def __init__(self, surface: Any) -> None:
        self._surface = surface

    def size(self) -> Tuple[int, int]:
        w, h = self._surface.get_size()
        return int(w), int(h)

    def _coverage(self, mask: Image.Image) -> Any:
        # Coverage in the alpha channel, then thresholded into a pygame mask
        rgba = Image.merge("RGBA", (mask, mask, mask, mask))
        surf = pg.image.frombytes(rgba.tobytes(), rgba.size, "RGBA")
        return pg.mask.from_surface(surf, 127)

    def paint(self, mask: Image.Image, color: Color) -> None:
        c = _pygame_color(color)
        if c[3] == 255:
            # to_surface() writes set bits directly, without blending
            self._coverage(mask).to_surface(
                self._surface, setcolor=c, unsetcolor=None
            )
            return
        layer = Image.new("RGBA", mask.size, c[:3] + (0,))
        layer.putalpha(mask.point(lambda v: v * c[3] // 255))
        overlay = pg.image.frombytes(layer.tobytes(), layer.size, "RGBA")
        self._surface.blit(overlay, (0, 0))

    def clear(self, mask: Image.Image) -> None:
        self._coverage(mask).to_surface(
            self._surface, setcolor=(0, 0, 0, 0), unsetcolor=None
        )

    def get_pixel(self, x: int, y: int) -> Color:
        c = self._surface.get_at((x, y))
        return int(c.r), int(c.g), int(c.b), int(c.a)


class PygameDisplayBackend(DisplayBackend):
    """Pygame implementation of DisplayBackend with offscreen surface.

    Automatically initializes pygame with an offscreen display if the
    environment variable SDL_VIDEODRIVER is set to "dummy". Otherwise, a
    regular window may be created depending on the platform.
    """

    def __init__(
        self, size: Tuple[int, int] = (500, 350), *, create_window: bool = False
    ) -> None:
        local_pg = pg
        if local_pg is None:
            raise RuntimeError(
                "pygame is not available. "
                "Ensure it is installed and that SDL is configured."
            )

        # Ensure headless if requested
        if os.environ.get("SDL_VIDEODRIVER") == "dummy":
            os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

        if not local_pg.get_init():
            local_pg.init()

        self._width, self._height = int(size[0]), int(size[1])
        if self._width <= 0 or self._height <= 0:
            raise ValueError(
                f"surface size must be positive, got {self._width}x{self._height}"
            )
        self._window_surface = None
        if create_window and os.environ.get("SDL_VIDEODRIVER") != "dummy":
            try:
                self._window_surface = local_pg.display.set_mode(
                    (self._width, self._height)
                )
            except local_pg.error as e:
                logger.warning(
                    "window creation failed (%s); falling back to offscreen. "
                    "Check SDL_VIDEODRIVER and display permissions.",
                    e,
                )
                self._window_surface = None

        # Offscreen surface with per-pixel alpha, starts transparent black
        self._surface = local_pg.Surface(
            (self._width, self._height), flags=local_pg.SRCALPHA
        )
        self._surface.fill((0, 0, 0, 0))

    @property
    def surface(self) -> Any:
        return self._surface

    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    def begin_frame(self) -> PixelTarget:
        return _PygameTarget(self._surface)

    def end_frame(self) -> None:
        # If we have a window, blit the offscreen buffer and flip
        local_pg = pg
        if self._window_surface is not None and local_pg is not None:
            self._window_surface.blit(self._surface, (0, 0))
            local_pg.display.flip()
        return None

    def save_png(self, path: str) -> None:
        local_pg = pg
        if local_pg is None:  # pragma: no cover - should not happen at runtime
            raise RuntimeError("pygame is not available")
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        local_pg.image.save(self._surface, path)
        logger.debug("saved %s", path)

    def pixels(self) -> bytes:
        return bytes(pg.image.tobytes(self._surface, "RGBA"))
