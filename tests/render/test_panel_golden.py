from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from bordercanvas.platform.document import (
    Document,
    SurfaceNotFoundError,
    get_document,
)
from bordercanvas.render import panel
from bordercanvas.render.canvas import Color

YELLOW = (255, 255, 0, 255)
MAGENTA = (255, 0, 255, 255)
BLUE = (0, 0, 255, 255)


def _pixel(doc: Document, x: int, y: int) -> Color:
    ctx = doc.get_element_by_id("canvas").get_context("2d")
    return ctx.target.get_pixel(x, y)


def test_fill_center_is_yellow(document: Document) -> None:
    panel.draw(document)
    assert _pixel(document, 250, 250) == YELLOW
    assert _pixel(document, 5, 344) == YELLOW
    assert _pixel(document, 491, 344) == YELLOW


def test_top_border_row_is_magenta(document: Document) -> None:
    panel.draw(document)
    for x in range(5, 492):
        assert _pixel(document, x, 5) == MAGENTA
        assert _pixel(document, x, 6) == MAGENTA
    # Width 2 centered on y=6 covers rows 5 and 6 only
    assert _pixel(document, 250, 7) == YELLOW


def test_right_border_column_is_blue(document: Document) -> None:
    panel.draw(document)
    for y in range(5, 345):
        for x in (492, 493, 494):
            assert _pixel(document, x, y) == BLUE
    assert _pixel(document, 491, 100) == YELLOW
    # Blue overdraws the top border where they cross
    assert _pixel(document, 493, 6) == BLUE


def test_clip_leaves_outside_untouched(
    document: Document, background: Color, surface_size: tuple[int, int]
) -> None:
    panel.draw(document)
    w, h = surface_size
    outside = [
        (4, 4),
        (4, 100),
        (100, 4),
        (495, 100),
        (499, 6),
        (500, 349),
        (100, 345),
        (w - 1, h - 1),
        (0, 0),
    ]
    for x, y in outside:
        assert _pixel(document, x, y) == background, (x, y)


def test_exact_pixel_counts(
    document: Document, background: Color, surface_size: tuple[int, int]
) -> None:
    panel.draw(document)
    element = document.get_element_by_id("canvas")
    target = element.get_context("2d").target
    counts: dict[Color, int] = {}
    w, h = surface_size
    for y in range(h):
        for x in range(w):
            c = target.get_pixel(x, y)
            counts[c] = counts.get(c, 0) + 1
    assert counts[BLUE] == 3 * 340
    assert counts[MAGENTA] == 2 * (492 - 5)
    assert counts[YELLOW] == 490 * 340 - counts[BLUE] - counts[MAGENTA]
    assert counts[background] == w * h - 490 * 340


def test_draw_is_idempotent(make_document: Callable[..., Document]) -> None:
    once = make_document()
    panel.draw(once)

    twice = make_document()
    panel.draw(twice)
    panel.draw(twice)

    a = once.get_element_by_id("canvas").backend.pixels()
    b = twice.get_element_by_id("canvas").backend.pixels()
    assert a == b


def test_missing_surface_raises(surface_size: tuple[int, int]) -> None:
    doc = Document()
    doc.create_canvas("other", surface_size)
    with pytest.raises(SurfaceNotFoundError):
        panel.draw(doc)


def test_uses_default_document(
    background: Color, surface_size: tuple[int, int]
) -> None:
    get_document().create_canvas("canvas", surface_size, background=background)
    panel.draw()
    assert _pixel(get_document(), 250, 250) == YELLOW


def test_default_document_without_surface_raises() -> None:
    with pytest.raises(SurfaceNotFoundError):
        panel.draw()


def test_pygame_matches_pillow(make_document: Callable[..., Document]) -> None:
    pytest.importorskip("pygame")
    pil = make_document()
    panel.draw(pil)

    pyg = make_document(backend="pygame")
    panel.draw(pyg)

    assert (
        pil.get_element_by_id("canvas").backend.pixels()
        == pyg.get_element_by_id("canvas").backend.pixels()
    )


def test_png_export(
    document: Document, surface_size: tuple[int, int], tmp_path: Path
) -> None:
    from PIL import Image

    panel.draw(document)
    out = tmp_path / "nested" / "panel.png"
    document.get_element_by_id("canvas").save_png(str(out))
    with Image.open(out) as img:
        assert img.size == surface_size
        assert img.convert("RGBA").getpixel((250, 250)) == YELLOW
