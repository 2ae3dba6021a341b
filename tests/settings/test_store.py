from __future__ import annotations

import pytest
from pydantic import ValidationError

from bordercanvas.settings import values
from bordercanvas.settings.schema import Settings
from bordercanvas.settings.store import SettingsStore


def test_load_defaults() -> None:
    s = SettingsStore.load()
    assert isinstance(s, Settings)
    assert s.backend == "pillow"
    assert (s.width, s.height) == (500, 350)
    assert s.surface_id == "canvas"


def test_roundtrip() -> None:
    s = Settings(backend="pygame", width=640, height=480, background="black")
    SettingsStore.save(s)
    s2 = SettingsStore.load()
    assert s2.backend == "pygame"
    assert (s2.width, s2.height) == (640, 480)
    assert s2.background == "black"


def test_corrupt_returns_default() -> None:
    p = SettingsStore.settings_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("{broken")
    s = SettingsStore.load()
    assert s.backend == "pillow"


def test_invalid_values_return_default() -> None:
    p = SettingsStore.settings_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text('{"width": -3}')
    assert SettingsStore.load().width == 500


@pytest.mark.parametrize(
    "field,value",
    [
        ("backend", "opengl"),
        ("width", 0),
        ("height", -1),
        ("background", "not-a-color"),
        ("surface_id", "   "),
    ],
)
def test_schema_validation(field: str, value: object) -> None:
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_yaml_defaults_loaded() -> None:
    assert values.DISPLAY["surface_id"] == "canvas"
    assert values.OUTPUT["path"] == "out/panel.png"


def test_yaml_fallbacks(tmp_path) -> None:
    missing = tmp_path / "missing.yml"
    display, output = values._load(missing)
    assert display["width"] == 500
    assert output["path"] == "out/panel.png"

    bad = tmp_path / "bad.yml"
    bad.write_text("display: [unclosed")
    display, _ = values._load(bad)
    assert display["backend"] == "pillow"

    partial = tmp_path / "partial.yml"
    partial.write_text("display:\n  width: 64\n  height: oops\n")
    display, _ = values._load(partial)
    assert display["width"] == 64
    assert display["height"] == 350
