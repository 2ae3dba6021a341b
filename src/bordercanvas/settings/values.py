"""Centralized defaults loaded from YAML.

The master source is ``values.yml`` in this package. On import we load and
parse it; a missing or unreadable file falls back to the hard-coded
defaults below so the application still runs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).parent
_YAML_PATH = _PKG_DIR / "values.yml"

# --- Fallback literals ---------------------------------------------------
_FALLBACK_DISPLAY: Dict[str, Any] = {
    "backend": "pillow",
    "width": 500,
    "height": 350,
    "background": "#ffffff",
    "surface_id": "canvas",
}
_FALLBACK_OUTPUT: Dict[str, Any] = {"path": "out/panel.png"}


def _load(path: Path) -> tuple[Dict[str, Any], Dict[str, Any]]:
    display = dict(_FALLBACK_DISPLAY)
    output = dict(_FALLBACK_OUTPUT)
    if not path.exists():
        return display, output
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("failed to read %s, using defaults: %s", path, e)
        return display, output
    if not isinstance(raw, dict):
        return display, output

    disp = raw.get("display")
    if isinstance(disp, dict):
        for key in ("width", "height"):
            if key in disp:
                try:
                    display[key] = int(disp[key])
                except (TypeError, ValueError):
                    logger.warning("ignoring invalid display.%s=%r", key, disp[key])
        for key in ("backend", "background", "surface_id"):
            if isinstance(disp.get(key), str):
                display[key] = disp[key]
    out = raw.get("output")
    if isinstance(out, dict) and isinstance(out.get("path"), str):
        output["path"] = out["path"]
    return display, output


DISPLAY, OUTPUT = _load(_YAML_PATH)

__all__ = ["DISPLAY", "OUTPUT"]
