"""Pydantic model for render settings."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from polyraster.core.geometry import Color


class RenderSettings(BaseModel):
    """Render parameters persisted to disk.

    Parameters
    ----------
    scene_size: Side length of the square scene in universal units.
    window_width, window_height: Framebuffer size in pixels.
    point_spacing: Target distance between generated curve points.
    polyline_n: Reference sample count for Bézier arc-length estimates.
    pan_percent: Fraction of the viewport size moved by one pan step.
    zoom_step: Factor applied by one zoom-out step (its inverse zooms in).
    background: ``#rrggbb`` colour used to clear each frame.
    target_fps: Frame rate of the interactive viewer.
    """

    scene_size: float = Field(default=1000.0, gt=0)
    window_width: int = Field(default=1000, gt=0)
    window_height: int = Field(default=1000, gt=0)
    point_spacing: float = Field(default=1.0, gt=0)
    polyline_n: int = Field(default=1000, ge=1)
    pan_percent: float = Field(default=0.1, gt=0, le=1.0)
    zoom_step: float = Field(default=1.25, gt=1.0)
    background: str = Field(default="#e6e6e6")
    target_fps: float = Field(default=30.0, gt=0)

    @field_validator("background")
    @classmethod
    def _chk_background(cls, v: str) -> str:
        Color.from_hex(v)
        return v

    @model_validator(mode="after")
    def _chk_spacing(self) -> "RenderSettings":
        if self.point_spacing > self.scene_size:
            raise ValueError("point_spacing must not exceed scene_size")
        return self

    def background_color(self) -> Color:
        return Color.from_hex(self.background)
