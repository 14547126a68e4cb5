"""Application runners behind the ``polyraster`` command.

``render`` loads a shape document, draws one frame into a Pillow image and
writes it as PNG; it never touches a display and is the mode used by CI.
``view`` opens a pygame window and runs the interactive
:class:`~polyraster.ui.controllers.ViewerController` loop until the user
quits (``q``/ESC or closing the window).
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from polyraster.config import RuntimeConfig, make_render_config
from polyraster.core.errors import NavigationError
from polyraster.core.shapes import Scene
from polyraster.core.viewport import Viewport
from polyraster.data.svg_loader import load_svg_scene
from polyraster.platform.display.pillow_backend import PillowDisplayBackend
from polyraster.render.scene_view import SceneView
from polyraster.settings.store import SettingsStore

logger = logging.getLogger(__name__)


def _print_help() -> None:
    print(
        "Keys: arrows/WASD pan, [ / - zoom out, ] / = zoom in, "
        "0 reset view, q/ESC quit"
    )


def load_scene(path: str | Path, cfg: RuntimeConfig) -> Scene:
    s = cfg.settings
    return load_svg_scene(
        path,
        scene_size=s.scene_size,
        spacing=s.point_spacing,
        reference_n=s.polyline_n,
    )


def render_to_png(args: argparse.Namespace) -> Path:
    """Render one frame of ``args.svg`` to ``args.output`` and return the path."""
    cfg = make_render_config(args=args)
    scene = load_scene(args.svg, cfg)
    w, h = cfg.size_px
    viewport = Viewport.initial(scene.scene_size, w, h)
    for step in range(max(0, getattr(args, "zoom_in", 0) or 0)):
        try:
            viewport = viewport.zoomed(1.0 / cfg.settings.zoom_step)
        except NavigationError as exc:
            logger.warning("zoom in stopped after %d steps: %s", step, exc)
            break

    backend = PillowDisplayBackend(size=(w, h))
    view = SceneView((w, h), background=cfg.settings.background_color())
    sink = backend.begin_frame()
    polys = view.draw(sink, scene, viewport)
    backend.end_frame()

    out = Path(args.output)
    backend.save_png(str(out))
    logger.info(
        "rendered %d/%d polygons (%d pixels) to %s",
        len(polys),
        len(scene),
        getattr(sink, "pixels_written", 0),
        out,
    )
    if getattr(args, "save_settings", False):
        SettingsStore.save(cfg.settings)
    return out


async def main_async(args: argparse.Namespace) -> None:
    """Interactive viewer: pygame window plus the async frame loop."""
    from polyraster.platform.display.pygame_backend import PygameDisplayBackend
    from polyraster.platform.input.pygame_input import PygameInputBackend
    from polyraster.ui.controllers import ViewerController

    cfg = make_render_config(args=args)
    scene = load_scene(args.svg, cfg)
    display = PygameDisplayBackend(
        size=cfg.size_px, create_window=True, title=f"polyraster - {args.svg}"
    )
    if not display.has_window:
        logger.warning("no window available; frames are rendered offscreen")
    controller = ViewerController(
        display=display,
        scene=scene,
        settings=cfg.settings,
        input_backend=PygameInputBackend(),
    )
    _print_help()
    try:
        await controller.run(max_frames=getattr(args, "max_frames", None))
    finally:
        if getattr(args, "save_settings", False):
            SettingsStore.save(cfg.settings)
        display.close()


def _add_render_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("svg", type=str, help="Path to the SVG shape document")
    p.add_argument(
        "--scene-size",
        dest="scene_size",
        type=float,
        default=None,
        help="Side of the square scene in universal units (default: 1000)",
    )
    p.add_argument(
        "--spacing",
        type=float,
        default=None,
        help="Target distance between generated curve points (default: 1.0)",
    )
    p.add_argument(
        "--polyline-n",
        dest="polyline_n",
        type=int,
        default=None,
        help="Reference sample count for Bezier length estimates (default: 1000)",
    )
    p.add_argument("--width", type=int, default=None, help="Framebuffer width px")
    p.add_argument("--height", type=int, default=None, help="Framebuffer height px")
    p.add_argument(
        "--background",
        type=str,
        default=None,
        help="Background colour as #rrggbb (default: #e6e6e6)",
    )
    p.add_argument(
        "--save-settings",
        dest="save_settings",
        action="store_true",
        help="Persist the effective settings to $POLYRASTER_HOME/settings.json",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    When ``argv`` is None the values are read from ``sys.argv`` as usual.
    Accepting an ``argv`` list makes the parser testable programmatically.
    """
    p = argparse.ArgumentParser(
        prog="polyraster", description="Rasterize SVG shapes with Bresenham lines"
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = p.add_subparsers(dest="command")

    render = sub.add_parser("render", help="Render one frame to a PNG file")
    _add_render_options(render)
    render.add_argument("output", type=str, help="Destination PNG path")
    render.add_argument(
        "--zoom-in",
        dest="zoom_in",
        type=int,
        default=0,
        help="Number of zoom-in steps applied before rendering",
    )

    view = sub.add_parser("view", help="Open an interactive pygame viewer")
    _add_render_options(view)
    view.add_argument(
        "--fps", type=float, default=None, help="Target frame rate (default: 30)"
    )
    view.add_argument(
        "--max-frames",
        dest="max_frames",
        type=int,
        default=None,
        help="Stop after this many frames (useful for smoke tests)",
    )
    return p.parse_args(argv)


def configure_logging(level: Optional[str]) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or "WARNING").upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
