"""Display backends and a small factory to pick one by name."""

from __future__ import annotations

from typing import Tuple

from bordercanvas.render.canvas import DisplayBackend

BACKENDS = ("pillow", "pygame")


def create_backend(
    kind: str, size: Tuple[int, int], *, create_window: bool = False
) -> DisplayBackend:
    """Construct the backend named *kind* ("pillow" or "pygame").

    Backends are imported lazily so pygame is only loaded when requested.
    """
    if kind == "pillow":
        from bordercanvas.platform.display.pillow_backend import PillowDisplayBackend

        return PillowDisplayBackend(size=size)
    if kind == "pygame":
        from bordercanvas.platform.display.pygame_backend import PygameDisplayBackend

        return PygameDisplayBackend(size=size, create_window=create_window)
    raise ValueError(f"unknown backend {kind!r}; expected one of {', '.join(BACKENDS)}")
