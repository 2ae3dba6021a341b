"""Console entrypoint for the bordercanvas application.

This module delegates to :mod:`bordercanvas.cli` so that running
``python -m bordercanvas`` or the installed ``bordercanvas`` console script
executes the same application code.
"""

from __future__ import annotations

from bordercanvas.cli import main as cli_main


def main() -> None:
    """Application entrypoint (delegates to :func:`bordercanvas.cli.main`)."""
    raise SystemExit(cli_main())


if __name__ == "__main__":
    main()
