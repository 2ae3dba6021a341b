"""Framework-agnostic rendering protocols.

Defines the pixel target contract that display backends implement, the
immediate-mode 2D context contract that drawing routines consume, and the
display backend contract so different frameworks (pillow, pygame) can be
plugged in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Tuple, Union

if TYPE_CHECKING:  # pragma: no cover - typing only
    from PIL import Image

Color = Tuple[int, int, int, int]
ColorLike = Union[str, Tuple[int, int, int], Tuple[int, int, int, int]]


class PixelTarget(Protocol):
    def size(self) -> Tuple[int, int]:
        ...

    def paint(self, mask: "Image.Image", color: Color) -> None:
        """Composite *color* source-over onto the pixels covered by *mask*.

        *mask* is an ``"L"`` image of the target size; 255 marks a covered
        pixel.
        """
        ...

    def clear(self, mask: "Image.Image") -> None:
        """Set every pixel in *mask* to transparent black."""
        ...

    def get_pixel(self, x: int, y: int) -> Color:
        ...


class RenderingContext(Protocol):
    fill_style: ColorLike
    stroke_style: ColorLike
    line_width: float
    line_cap: str
    line_join: str
    miter_limit: float
    global_alpha: float

    def save(self) -> None:
        ...

    def restore(self) -> None:
        ...

    def translate(self, x: float, y: float) -> None:
        ...

    def scale(self, x: float, y: float) -> None:
        ...

    def rotate(self, angle: float) -> None:
        ...

    def begin_path(self) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def close_path(self) -> None:
        ...

    def rect(self, x: float, y: float, w: float, h: float) -> None:
        ...

    def clip(self, rule: str = "nonzero") -> None:
        ...

    def fill(self, rule: str = "nonzero") -> None:
        ...

    def stroke(self) -> None:
        ...

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        ...

    def stroke_rect(self, x: float, y: float, w: float, h: float) -> None:
        ...

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        ...


class DisplayBackend(Protocol):
    def size(self) -> Tuple[int, int]:
        ...

    def begin_frame(self) -> PixelTarget:
        ...

    def end_frame(self) -> None:
        ...

    def save_png(self, path: str) -> None:
        ...

    def pixels(self) -> bytes:
        ...
