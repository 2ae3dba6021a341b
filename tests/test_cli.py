from __future__ import annotations

import logging
from pathlib import Path

import pytest
from PIL import Image

from bordercanvas import __version__, cli
from bordercanvas.settings.store import SettingsStore


def test_parse_args_defaults_are_unset() -> None:
    args = cli.parse_args([])
    assert args.backend is None
    assert args.size is None
    assert args.out is None
    assert args.repeat == 1


def test_parse_size() -> None:
    args = cli.parse_args(["--size", "640x480"])
    assert args.size == (640, 480)
    with pytest.raises(SystemExit):
        cli.parse_args(["--size", "640"])
    with pytest.raises(SystemExit):
        cli.parse_args(["--repeat", "0"])


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--version"]) == cli.EXIT_OK
    assert __version__ in capsys.readouterr().out


def test_render_png(tmp_path: Path) -> None:
    out = tmp_path / "panel.png"
    rc = cli.main(["--out", str(out), "--background", "black", "--repeat", "2"])
    assert rc == cli.EXIT_OK
    with Image.open(out) as img:
        rgba = img.convert("RGBA")
        assert rgba.size == (500, 350)
        assert rgba.getpixel((250, 250)) == (255, 255, 0, 255)
        assert rgba.getpixel((100, 6)) == (255, 0, 255, 255)
        assert rgba.getpixel((493, 200)) == (0, 0, 255, 255)
        assert rgba.getpixel((497, 200)) == (0, 0, 0, 255)


def test_wrong_surface_id_exits_nonzero(tmp_path: Path) -> None:
    out = tmp_path / "panel.png"
    rc = cli.main(["--out", str(out), "--surface-id", "elsewhere"])
    assert rc == cli.EXIT_SURFACE
    assert not out.exists()


def test_invalid_background_exits_nonzero(tmp_path: Path) -> None:
    rc = cli.main(["--out", str(tmp_path / "p.png"), "--background", "nope"])
    assert rc == cli.EXIT_CONFIG


def test_save_settings(tmp_path: Path) -> None:
    out = tmp_path / "panel.png"
    rc = cli.main(["--out", str(out), "--size", "520x360", "--save-settings"])
    assert rc == cli.EXIT_OK
    saved = SettingsStore.load()
    assert (saved.width, saved.height) == (520, 360)
    assert saved.output_path == str(out)


def test_pygame_backend(tmp_path: Path) -> None:
    pytest.importorskip("pygame")
    out = tmp_path / "panel.png"
    assert cli.main(["--backend", "pygame", "--out", str(out)]) == cli.EXIT_OK
    with Image.open(out) as img:
        assert img.convert("RGBA").getpixel((250, 250)) == (255, 255, 0, 255)


def test_css_named_background(tmp_path: Path) -> None:
    out = tmp_path / "panel.png"
    assert cli.main(["--out", str(out), "--background", "navy"]) == cli.EXIT_OK
    with Image.open(out) as img:
        assert img.convert("RGBA").getpixel((0, 0)) == (0, 0, 128, 255)


def test_window_with_pillow_backend_exits_nonzero(tmp_path: Path) -> None:
    out = tmp_path / "panel.png"
    rc = cli.main(["--backend", "pillow", "--window", "--out", str(out)])
    assert rc == cli.EXIT_CONFIG
    assert not out.exists()


def test_log_level_sets_root_logger(tmp_path: Path) -> None:
    root = logging.getLogger()
    before = root.level
    try:
        rc = cli.main(["--out", str(tmp_path / "p.png"), "--log-level", "DEBUG"])
        assert rc == cli.EXIT_OK
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(before)
