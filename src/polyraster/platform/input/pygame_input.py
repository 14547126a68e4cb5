"""Pygame InputBackend translating keyboard events into key names.

Key names follow ``pygame.key.name`` ("up", "left", "=", "-", "q", ...);
closing the window is reported as the pseudo key ``"quit"``. In headless
mode (dummy video) pygame may not deliver events; tests can post events or
use their own backend with the same ``pump()`` signature.
"""

from __future__ import annotations

import os
from typing import Iterator

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame as pg  # noqa: E402


class PygameInputBackend:
    """Collects pygame events; call :meth:`pump` once per frame."""

    def __init__(self) -> None:
        if not pg.get_init():
            pg.init()

    def pump(self) -> Iterator[str]:
        for ev in pg.event.get():
            if ev.type == pg.QUIT:
                yield "quit"
            elif ev.type == pg.KEYDOWN:
                yield pg.key.name(ev.key)
            elif ev.type == pg.MOUSEWHEEL:
                if getattr(ev, "y", 0) > 0:
                    yield "wheel_up"
                elif getattr(ev, "y", 0) < 0:
                    yield "wheel_down"
