from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterator

import pytest

from bordercanvas.platform import document as document_mod
from bordercanvas.platform.document import Document

# Headless pygame for any test that imports the pygame backend
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

BACKGROUND = (10, 20, 30, 255)
# Larger than the panel so pixels right of and below the clip exist
SURFACE_SIZE = (520, 370)


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BORDERCANVAS_HOME", str(tmp_path / "home"))


@pytest.fixture(autouse=True)
def _reset_default_document() -> Iterator[None]:
    document_mod.set_document(None)
    yield
    document_mod.set_document(None)


@pytest.fixture
def background() -> tuple[int, int, int, int]:
    return BACKGROUND


@pytest.fixture
def surface_size() -> tuple[int, int]:
    return SURFACE_SIZE


@pytest.fixture
def make_document() -> Callable[..., Document]:
    """Factory for documents hosting a "canvas" surface over BACKGROUND."""

    def _make(backend: str = "pillow") -> Document:
        doc = Document()
        doc.create_canvas(
            "canvas", SURFACE_SIZE, backend=backend, background=BACKGROUND
        )
        return doc

    return _make


@pytest.fixture
def document(make_document: Callable[..., Document]) -> Document:
    return make_document()
