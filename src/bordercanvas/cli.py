"""Command-line interface for bordercanvas.

Hosts a surface in a fresh document, runs the panel draw routine against
it and exports the result as a PNG. Running ``python -m bordercanvas`` or
the installed ``bordercanvas`` console script executes the same code.
"""

from __future__ import annotations

import argparse
import logging
from typing import Tuple

from pydantic import ValidationError

from bordercanvas import __version__
from bordercanvas.config import make_runtime_config
from bordercanvas.platform.display import BACKENDS
from bordercanvas.platform.document import (
    ContextUnavailableError,
    Document,
    SurfaceNotFoundError,
)
from bordercanvas.render import panel
from bordercanvas.settings.store import SettingsStore

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_SURFACE = 2


def _parse_size(s: str) -> Tuple[int, int]:
    try:
        w, h = (int(v) for v in s.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {s!r}") from None
    return w, h


def _positive_int(s: str) -> int:
    v = int(s)
    if v < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return v


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    When ``argv`` is None the values are read from ``sys.argv`` as usual.
    Options left unset stay ``None`` so persisted settings apply.
    """
    p = argparse.ArgumentParser(
        prog="bordercanvas",
        description="Render the bordered panel onto a hosted surface and save a PNG",
    )
    p.add_argument(
        "--backend",
        choices=BACKENDS,
        default=None,
        help="Display backend (default from settings: pillow)",
    )
    p.add_argument(
        "--size",
        type=_parse_size,
        default=None,
        help="Surface size as WIDTHxHEIGHT (default from settings: 500x350)",
    )
    p.add_argument(
        "--background",
        type=str,
        default=None,
        help="CSS color the surface is filled with before drawing",
    )
    p.add_argument(
        "--surface-id",
        dest="surface_id",
        type=str,
        default=None,
        help="Id to register the surface under (the panel draws on 'canvas')",
    )
    p.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output PNG path (default from settings: out/panel.png)",
    )
    p.add_argument(
        "--repeat",
        type=_positive_int,
        default=1,
        help="Invoke the draw routine N times on the same surface",
    )
    p.add_argument(
        "--window",
        action="store_true",
        help="Also show the frame in a pygame window (requires --backend pygame)",
    )
    p.add_argument(
        "--save-settings",
        dest="save_settings",
        action="store_true",
        help="Persist the effective options as the new defaults",
    )
    p.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Synchronous entrypoint; returns the process exit status."""
    args = parse_args(argv)
    if args.version:
        print(f"bordercanvas {__version__}")
        return EXIT_OK

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        cfg = make_runtime_config(args=args)
    except (ValidationError, ValueError) as e:
        logger.error("invalid options: %s", e)
        return EXIT_CONFIG
    logging.getLogger().setLevel(cfg.log_level)

    if args.save_settings:
        SettingsStore.save(cfg.to_settings())
        logger.info("saved settings to %s", SettingsStore.settings_path())

    disp = cfg.display
    document = Document()
    element = document.create_canvas(
        disp.surface_id,
        disp.size,
        backend=disp.backend,
        background=disp.background,
        create_window=disp.window,
    )

    try:
        for _ in range(cfg.repeat):
            panel.draw(document)
    except (SurfaceNotFoundError, ContextUnavailableError) as e:
        logger.error("draw failed: %s", e)
        return EXIT_SURFACE

    element.present()
    element.save_png(cfg.output_path)
    logger.info(
        "rendered %dx%d via %s to %s",
        disp.size[0],
        disp.size[1],
        disp.backend,
        cfg.output_path,
    )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
