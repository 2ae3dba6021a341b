"""Runtime configuration helpers.

Small aggregator that merges the YAML defaults (via ``Settings`` field
defaults), the persisted settings store and optional CLI overrides into the
``RuntimeConfig`` used by the command line entry point.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .settings.schema import Settings
from .settings.store import SettingsStore


@dataclass(slots=True)
class DisplayConfig:
    backend: str
    size: Tuple[int, int]
    background: str
    surface_id: str
    window: bool = False


@dataclass(slots=True)
class RuntimeConfig:
    display: DisplayConfig
    output_path: str
    repeat: int = 1
    log_level: str = "WARNING"

    def to_settings(self) -> Settings:
        """Project the persistable subset back into a :class:`Settings`."""
        return Settings(
            backend=self.display.backend,
            width=self.display.size[0],
            height=self.display.size[1],
            background=self.display.background,
            surface_id=self.display.surface_id,
            output_path=self.output_path,
        )


def make_runtime_config(
    *, args: Optional[object] = None, settings: Optional[Settings] = None
) -> RuntimeConfig:
    """Build a RuntimeConfig from persisted settings and optional CLI *args*.

    Rules:
    - *settings* defaults to ``SettingsStore.load()``; its fields provide
      the session defaults.
    - Attributes on *args* (argparse.Namespace-like) that are not None
      override the settings for this session only.
    - The merged display values are validated through :class:`Settings`,
      so an invalid override raises ``pydantic.ValidationError``.
    - A window is only available from the pygame backend; asking for one
      with any other backend raises ``ValueError``.
    """
    base = settings if settings is not None else SettingsStore.load()
    merged = base.model_dump()

    overrides = {
        "backend": getattr(args, "backend", None),
        "background": getattr(args, "background", None),
        "surface_id": getattr(args, "surface_id", None),
        "output_path": getattr(args, "out", None),
    }
    size = getattr(args, "size", None)
    if size is not None:
        overrides["width"], overrides["height"] = size
    merged.update({k: v for k, v in overrides.items() if v is not None})
    checked = Settings.model_validate(merged)

    window = bool(getattr(args, "window", False))
    if window and checked.backend != "pygame":
        raise ValueError(
            f"a window needs the pygame backend, not {checked.backend!r}"
        )

    repeat = getattr(args, "repeat", None)
    log_level = getattr(args, "log_level", None)
    return RuntimeConfig(
        display=DisplayConfig(
            backend=checked.backend,
            size=(checked.width, checked.height),
            background=checked.background,
            surface_id=checked.surface_id,
            window=window,
        ),
        output_path=checked.output_path,
        repeat=int(repeat) if repeat is not None else 1,
        log_level=str(log_level).upper() if log_level else "WARNING",
    )
