"""Surface registry: the host side of ``getElementById``/``getContext``.

A :class:`Document` maps element ids to :class:`CanvasElement` objects.
Each element wraps a display backend and hands out a single, cached 2D
context, so drawing state persists across lookups of the same element.
A process-wide default document backs callers that do not inject one.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from bordercanvas.platform.display import create_backend
from bordercanvas.render import masks
from bordercanvas.render.canvas import ColorLike, DisplayBackend
from bordercanvas.render.colors import parse_color
from bordercanvas.render.context import ImmediateContext

logger = logging.getLogger(__name__)

CONTEXT_2D = "2d"


class SurfaceNotFoundError(LookupError):
    """No surface is registered under the requested id."""


class ContextUnavailableError(RuntimeError):
    """The surface cannot provide the requested context kind."""


class DuplicateSurfaceError(ValueError):
    """A surface is already registered under this id."""


class CanvasElement:
    def __init__(
        self,
        element_id: str,
        backend: DisplayBackend,
        background: Optional[ColorLike] = None,
    ) -> None:
        self.id = element_id
        self._backend = backend
        self._context: ImmediateContext | None = None
        if background is not None:
            target = backend.begin_frame()
            target.paint(masks.full(target.size()), parse_color(background))

    @property
    def backend(self) -> DisplayBackend:
        return self._backend

    @property
    def width(self) -> int:
        return int(self._backend.size()[0])

    @property
    def height(self) -> int:
        return int(self._backend.size()[1])

    def get_context(self, kind: str = CONTEXT_2D) -> ImmediateContext:
        """Return the element's rendering context.

        Only ``"2d"`` is supported; the same context object is returned on
        every call.
        """
        if kind != CONTEXT_2D:
            raise ContextUnavailableError(
                f"surface {self.id!r} does not support context {kind!r}"
            )
        if self._context is None:
            self._context = ImmediateContext(self._backend.begin_frame())
            logger.debug("created %s context for %r", kind, self.id)
        return self._context

    def present(self) -> None:
        """Finish the current frame (blits to a window when one exists)."""
        self._backend.end_frame()

    def save_png(self, path: str) -> None:
        self._backend.save_png(path)


class Document:
    def __init__(self) -> None:
        self._elements: Dict[str, CanvasElement] = {}

    def add(self, element: CanvasElement) -> CanvasElement:
        if element.id in self._elements:
            raise DuplicateSurfaceError(f"surface {element.id!r} already registered")
        self._elements[element.id] = element
        logger.debug(
            "registered surface %r (%dx%d)", element.id, element.width, element.height
        )
        return element

    def create_canvas(
        self,
        element_id: str,
        size: Tuple[int, int] = (500, 350),
        *,
        backend: str = "pillow",
        background: Optional[ColorLike] = None,
        create_window: bool = False,
    ) -> CanvasElement:
        """Create a canvas element on a new backend and register it."""
        display = create_backend(backend, size, create_window=create_window)
        return self.add(CanvasElement(element_id, display, background=background))

    def remove(self, element_id: str) -> None:
        if self._elements.pop(element_id, None) is None:
            raise SurfaceNotFoundError(element_id)

    def get_element_by_id(self, element_id: str) -> CanvasElement:
        try:
            return self._elements[element_id]
        except KeyError:
            raise SurfaceNotFoundError(
                f"no surface registered with id {element_id!r}"
            ) from None

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._elements


# Process-wide default document ---------------------------------------
_DOCUMENT: Document | None = None


def get_document() -> Document:
    """Return the default document, creating an empty one if needed."""
    global _DOCUMENT
    if _DOCUMENT is None:
        _DOCUMENT = Document()
    return _DOCUMENT


def set_document(document: Document | None) -> None:
    """Replace the default document (``None`` resets to a fresh one)."""
    global _DOCUMENT
    _DOCUMENT = document
