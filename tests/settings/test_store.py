from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from polyraster.core.geometry import Color
from polyraster.settings import store
from polyraster.settings.schema import RenderSettings
from polyraster.settings.store import SettingsStore


def test_load_defaults(polyraster_home: Path) -> None:
    s = SettingsStore.load()
    assert isinstance(s, RenderSettings)
    assert s.scene_size == 1000.0
    assert (s.window_width, s.window_height) == (1000, 1000)
    assert s.point_spacing == 1.0 and s.polyline_n == 1000
    assert s.background_color() == Color.from_hex("#e6e6e6")


def test_settings_path_honours_env(polyraster_home: Path) -> None:
    assert SettingsStore.settings_path() == polyraster_home / "settings.json"


def test_roundtrip(polyraster_home: Path) -> None:
    s = RenderSettings(scene_size=500.0, point_spacing=2.5, background="#102030")
    SettingsStore.save(s)
    s2 = SettingsStore.load()
    assert s2 == s
    data = json.loads(SettingsStore.settings_path().read_text())
    assert data["point_spacing"] == 2.5
    assert [p.name for p in polyraster_home.iterdir()] == ["settings.json"]


def test_corrupt_returns_default(polyraster_home: Path) -> None:
    p = SettingsStore.settings_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("{broken")
    assert SettingsStore.load() == RenderSettings()


def test_invalid_values_return_default(polyraster_home: Path) -> None:
    p = SettingsStore.settings_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps({"scene_size": -5}))
    assert SettingsStore.load() == RenderSettings()


def test_default_home_without_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("POLYRASTER_HOME", raising=False)
    expected = Path("~/.polyraster").expanduser() / "settings.json"
    assert SettingsStore.settings_path() == expected


def test_failed_save_keeps_previous_file(
    polyraster_home: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    SettingsStore.save(RenderSettings(point_spacing=2.0))

    def refuse(src: object, dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(store.os, "replace", refuse)
    with pytest.raises(OSError):
        SettingsStore.save(RenderSettings(point_spacing=4.0))
    assert [p.name for p in polyraster_home.iterdir()] == ["settings.json"]
    assert SettingsStore.load().point_spacing == 2.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"background": "grey"},
        {"scene_size": 0},
        {"point_spacing": 20.0, "scene_size": 10.0},
        {"zoom_step": 1.0},
        {"pan_percent": 1.5},
        {"window_width": 0},
    ],
)
def test_schema_validation(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        RenderSettings(**kwargs)
