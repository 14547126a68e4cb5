"""Runtime configuration helpers.

Small aggregator that merges the persisted :class:`RenderSettings` with CLI
overrides into the :class:`RuntimeConfig` used by the commands. Persisted
settings provide user defaults; CLI args (when provided) override them for
the current session only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .settings.schema import RenderSettings
from .settings.store import SettingsStore

# CLI attribute -> settings field
_OVERRIDES = {
    "scene_size": "scene_size",
    "spacing": "point_spacing",
    "polyline_n": "polyline_n",
    "width": "window_width",
    "height": "window_height",
    "fps": "target_fps",
    "background": "background",
}


@dataclass(slots=True)
class RuntimeConfig:
    settings: RenderSettings

    @property
    def size_px(self) -> tuple[int, int]:
        return (self.settings.window_width, self.settings.window_height)


def make_render_config(*, args: Optional[object] = None) -> RuntimeConfig:
    """Build a RuntimeConfig from persisted settings and optional CLI *args*
    (argparse.Namespace-like). Attributes that are missing or ``None`` keep
    the persisted value. The merged values are validated again, so a bad
    override raises ``pydantic.ValidationError``.
    """
    settings = SettingsStore.load()
    if args is None:
        return RuntimeConfig(settings=settings)

    updates: dict[str, Any] = {}
    for attr, field_name in _OVERRIDES.items():
        value = getattr(args, attr, None)
        if value is not None:
            updates[field_name] = value
    if updates:
        settings = RenderSettings.model_validate({**settings.model_dump(), **updates})
    return RuntimeConfig(settings=settings)
