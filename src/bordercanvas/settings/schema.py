"""Pydantic model for user settings."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from bordercanvas.platform.display import BACKENDS
from bordercanvas.render.colors import parse_color

from .values import DISPLAY, OUTPUT


class Settings(BaseModel):
    """Hosting settings persisted to disk.

    Parameters
    ----------
    backend: Display backend name, ``pillow`` or ``pygame``.
    width, height: Surface size in pixels.
    background: CSS color the surface is filled with before drawing.
    surface_id: Id the surface is registered under in the document.
    output_path: Where the rendered PNG is written.
    """

    backend: str = Field(default=str(DISPLAY["backend"]))
    width: int = Field(default=int(DISPLAY["width"]))
    height: int = Field(default=int(DISPLAY["height"]))
    background: str = Field(default=str(DISPLAY["background"]))
    surface_id: str = Field(default=str(DISPLAY["surface_id"]))
    output_path: str = Field(default=str(OUTPUT["path"]))

    @field_validator("backend")
    @classmethod
    def _chk_backend(cls, v: str) -> str:
        if v not in BACKENDS:
            raise ValueError("invalid backend: must be one of " + ", ".join(BACKENDS))
        return v

    @field_validator("width", "height")
    @classmethod
    def _chk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("surface dimensions must be > 0")
        return v

    @field_validator("background")
    @classmethod
    def _chk_background(cls, v: str) -> str:
        parse_color(v)
        return v

    @field_validator("surface_id")
    @classmethod
    def _chk_surface_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("surface_id must not be empty")
        return v
