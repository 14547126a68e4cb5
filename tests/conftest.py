from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Tuple

import pytest

from polyraster.core.geometry import UniversalPoint
from polyraster.core.viewport import Viewport


class RecordingSink:
    """PixelSink fake that records every call."""

    def __init__(self) -> None:
        self.pixels: List[Tuple[int, int]] = []
        self.colors: List[Tuple[float, float, float]] = []
        self.clears: List[Tuple[float, float, float]] = []

    def set_color(self, r: float, g: float, b: float) -> None:
        self.colors.append((r, g, b))

    def set_pixel(self, x: int, y: int) -> None:
        self.pixels.append((x, y))

    def clear(self, r: float, g: float, b: float) -> None:
        self.clears.append((r, g, b))


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_viewport() -> Callable[..., Viewport]:
    def _make(
        x0: float, y0: float, x1: float, y1: float, scene_size: float = 1000.0
    ) -> Viewport:
        return Viewport(UniversalPoint(x0, y0), UniversalPoint(x1, y1), scene_size)

    return _make


@pytest.fixture
def polyraster_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point settings persistence at a temporary directory."""
    home = tmp_path / "home"
    monkeypatch.setenv("POLYRASTER_HOME", str(home))
    return home
