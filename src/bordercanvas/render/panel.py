"""Bordered panel: a clipped yellow fill with magenta top and blue right borders.

The drawing sequence is kept exactly as authored, including the no-op
translate and the empty ``begin_path`` before ``fill_rect``, so the pixel
output matches the original composition.
"""

from __future__ import annotations

import logging

from bordercanvas.platform.document import Document, get_document

logger = logging.getLogger(__name__)

SURFACE_ID = "canvas"


def draw(document: Document | None = None) -> None:
    """Draw the panel onto the surface registered as ``"canvas"``.

    Raises whatever the document raises when the surface or its 2D context
    is unavailable.
    """
    doc = document if document is not None else get_document()
    canvas = doc.get_element_by_id(SURFACE_ID)
    ctx = canvas.get_context("2d")
    logger.debug("drawing panel on %r", SURFACE_ID)

    ctx.translate(0, 0)
    ctx.rect(5, 5, 490, 340)
    ctx.clip()
    ctx.fill_style = "rgba(255, 255, 0, 1.00)"
    ctx.begin_path()
    ctx.fill_rect(5, 5, 500, 350)

    # Top border
    ctx.begin_path()
    ctx.fill_style = "rgba(255, 0, 255, 1.00)"
    ctx.stroke_style = "rgba(255, 0, 255, 1.00)"
    ctx.line_width = 2
    ctx.line_cap = "butt"
    ctx.line_join = "miter"
    ctx.move_to(5, 6)
    ctx.line_to(500, 6)
    ctx.stroke()

    # Right border
    ctx.begin_path()
    ctx.fill_style = "rgba(0, 0, 255, 1.00)"
    ctx.stroke_style = "rgba(0, 0, 255, 1.00)"
    ctx.line_width = 3
    ctx.line_cap = "butt"
    ctx.line_join = "miter"
    ctx.move_to(493.5, 5)
    ctx.line_to(493.5, 345)
    ctx.stroke()
