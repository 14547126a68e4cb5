"""
Interactive viewer controller.

Owns the viewport and the frame tick: each frame it drains pending key
presses, applies pan/zoom, and renders the scene through a
:class:`~polyraster.render.scene_view.SceneView` onto the display backend.

Navigation that would leave the scene raises
:class:`~polyraster.core.errors.NavigationError`; the controller logs it and
keeps the previous viewport, so a rejected move never interrupts the loop.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Iterable, Optional, Protocol

from polyraster.core.errors import NavigationError
from polyraster.core.shapes import Scene
from polyraster.core.viewport import Pan, Viewport
from polyraster.render.canvas import DisplayBackend
from polyraster.render.scene_view import SceneView
from polyraster.settings.schema import RenderSettings

logger = logging.getLogger(__name__)

_PAN_KEYS = {
    "up": Pan.UP,
    "w": Pan.UP,
    "down": Pan.DOWN,
    "s": Pan.DOWN,
    "left": Pan.LEFT,
    "a": Pan.LEFT,
    "right": Pan.RIGHT,
    "d": Pan.RIGHT,
}
_ZOOM_IN_KEYS = frozenset({"=", "+", "]", "wheel_up"})
_ZOOM_OUT_KEYS = frozenset({"-", "[", "wheel_down"})
_QUIT_KEYS = frozenset({"q", "escape", "quit"})


class InputBackend(Protocol):
    def pump(self) -> Iterable[str]:
        ...


class ViewerController:
    """Frame loop, input handling and viewport state for one scene."""

    def __init__(
        self,
        *,
        display: DisplayBackend,
        scene: Scene,
        settings: RenderSettings,
        input_backend: Optional[InputBackend] = None,
        viewport: Optional[Viewport] = None,
        on_navigation_error: Optional[Callable[[NavigationError], None]] = None,
    ) -> None:
        self._display = display
        self._scene = scene
        self._settings = settings
        self._input = input_backend
        self._on_nav_error = on_navigation_error
        w, h = display.size()
        self._view = SceneView((w, h), background=settings.background_color())
        self._viewport = viewport or Viewport.initial(scene.scene_size, w, h)
        self._running = False
        self.frames = 0

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def running(self) -> bool:
        return self._running

    # Navigation -------------------------------------------------------
    def _navigate(self, action: str, step: Callable[[Viewport], Viewport]) -> bool:
        try:
            self._viewport = step(self._viewport)
        except NavigationError as e:
            logger.warning("%s rejected: %s", action, e)
            if self._on_nav_error is not None:
                self._on_nav_error(e)
            return False
        logger.debug(
            "%s -> %s %s", action, self._viewport.min_point, self._viewport.max_point
        )
        return True

    def pan(self, direction: Pan) -> bool:
        pct = self._settings.pan_percent
        return self._navigate(
            f"pan {direction.value}", lambda vp: vp.panned(direction, pct)
        )

    def zoom_in(self) -> bool:
        factor = 1.0 / self._settings.zoom_step
        return self._navigate("zoom in", lambda vp: vp.zoomed(factor))

    def zoom_out(self) -> bool:
        factor = self._settings.zoom_step
        return self._navigate("zoom out", lambda vp: vp.zoomed(factor))

    def reset_view(self) -> None:
        w, h = self._display.size()
        self._viewport = Viewport.initial(self._scene.scene_size, w, h)

    def on_key(self, key: str) -> None:
        if key in _PAN_KEYS:
            self.pan(_PAN_KEYS[key])
        elif key in _ZOOM_IN_KEYS:
            self.zoom_in()
        elif key in _ZOOM_OUT_KEYS:
            self.zoom_out()
        elif key in ("0", "home"):
            self.reset_view()
        elif key in _QUIT_KEYS:
            self._running = False

    # Frame loop -------------------------------------------------------
    def render_frame(self) -> None:
        sink = self._display.begin_frame()
        self._view.draw(sink, self._scene, self._viewport)
        self._display.end_frame()
        self.frames += 1

    def _process_input(self) -> None:
        if self._input is None:
            return
        for key in self._input.pump():
            self.on_key(key)

    async def run(self, *, max_frames: Optional[int] = None) -> None:
        self._running = True
        dt_target = 1.0 / max(1e-6, float(self._settings.target_fps))
        try:
            while self._running:
                t0 = time.monotonic()
                self._process_input()
                if not self._running:
                    break
                self.render_frame()
                if max_frames is not None and self.frames >= max_frames:
                    break
                elapsed = time.monotonic() - t0
                await asyncio.sleep(max(0.0, dt_target - elapsed))
        finally:
            self._running = False

    def stop(self) -> None:
        self._running = False
