"""Relative path commands: tokenizer and border builder.

Only the relative subset of the SVG path grammar is interpreted::

    m dx dy [dx dy ...]      start a new border (extra pairs act as ``l``)
    l dx dy [dx dy ...]      straight lines
    h dx [dx ...]            horizontal lines
    v dy [dy ...]            vertical lines
    c dx1 dy1 dx2 dy2 dx dy [...]   cubic Béziers, flattened
    z                        close the current border

The very first ``m`` pair is absolute. Absolute forms and the remaining SVG
commands are recognised by the tokenizer but rejected by the builder with
:class:`~polyraster.core.errors.UnsupportedCommand`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .curves import REFERENCE_N, flatten_cubic_chain
from .errors import MalformedInput, UnsupportedCommand
from .geometry import UniversalPoint

__all__ = ["PathCommand", "PathBuilder", "parse_path_data", "build_path"]

_KNOWN_COMMANDS = frozenset("MmLlHhVvCcSsQqTtAaZz")

_TOKEN_RE = re.compile(
    r"(?P<cmd>[A-Za-z])"
    r"|(?P<num>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
    r"|(?P<sep>[\s,]+)"
    r"|(?P<bad>.)"
)


@dataclass(frozen=True, slots=True)
class PathCommand:
    letter: str
    params: Tuple[float, ...] = ()

    @property
    def is_relative(self) -> bool:
        return self.letter.islower()


def parse_path_data(data: str) -> List[PathCommand]:
    """Split a path ``d`` string into commands with their numeric parameters."""
    commands: List[PathCommand] = []
    letter: Optional[str] = None
    params: List[float] = []
    for m in _TOKEN_RE.finditer(data):
        kind = m.lastgroup
        text = m.group()
        if kind == "sep":
            continue
        if kind == "bad":
            raise MalformedInput(f"unexpected character {text!r} in path data")
        if kind == "cmd":
            if text not in _KNOWN_COMMANDS:
                raise MalformedInput(f"unknown path command {text!r}")
            if letter is not None:
                commands.append(PathCommand(letter, tuple(params)))
            letter = text
            params = []
            continue
        if letter is None:
            raise MalformedInput("path data must start with a command")
        try:
            params.append(float(text))
        except ValueError:  # pragma: no cover - regex only yields floats
            raise MalformedInput(f"unparsable number {text!r}") from None
    if letter is not None:
        commands.append(PathCommand(letter, tuple(params)))
    return commands


@dataclass
class PathBuilder:
    """Interpret relative path commands into polyline borders.

    State is the list of borders plus an explicit current anchor; ``None``
    means no ``m`` has been issued yet. Every produced point is range-checked
    against ``bounds`` (the square side length in the builder's units).
    """

    spacing: float
    bounds: float
    reference_n: int = REFERENCE_N
    borders: List[List[UniversalPoint]] = field(default_factory=list)
    anchor: Optional[UniversalPoint] = None

    def apply(self, cmd: PathCommand) -> None:
        letter = cmd.letter
        if letter == "m":
            self._move(cmd)
        elif letter == "l":
            self._line(cmd, cmd.params)
        elif letter == "h":
            self._require_params(cmd)
            for dx in cmd.params:
                self._push(cmd, dx, 0.0)
        elif letter == "v":
            self._require_params(cmd)
            for dy in cmd.params:
                self._push(cmd, 0.0, dy)
        elif letter == "c":
            self._curve(cmd)
        elif letter == "z":
            self._close(cmd)
        else:
            raise UnsupportedCommand(letter)

    def apply_all(self, commands: Sequence[PathCommand]) -> None:
        for cmd in commands:
            self.apply(cmd)

    def build(self) -> Tuple[Tuple[UniversalPoint, ...], ...]:
        return tuple(tuple(b) for b in self.borders)

    # ------------------------------------------------------------------
    def _point(self, x: float, y: float) -> UniversalPoint:
        return UniversalPoint.snapped(x, y, self.bounds)

    def _require_anchor(self, cmd: PathCommand) -> UniversalPoint:
        if self.anchor is None or not self.borders:
            raise MalformedInput(
                f"command {cmd.letter!r} issued with no open border (missing 'm')"
            )
        return self.anchor

    @staticmethod
    def _require_params(cmd: PathCommand) -> None:
        if not cmd.params:
            raise MalformedInput(f"command {cmd.letter!r} has no parameters")

    def _push(self, cmd: PathCommand, dx: float, dy: float) -> None:
        anchor = self._require_anchor(cmd)
        p = self._point(anchor.x + dx, anchor.y + dy)
        self.borders[-1].append(p)
        self.anchor = p

    def _move(self, cmd: PathCommand) -> None:
        params = cmd.params
        if len(params) < 2 or len(params) % 2 != 0:
            raise MalformedInput("'m' parameters must be coordinate pairs")
        if self.anchor is None:
            start = self._point(params[0], params[1])
        else:
            start = self._point(self.anchor.x + params[0], self.anchor.y + params[1])
        self.borders.append([start])
        self.anchor = start
        if len(params) > 2:
            self._line(cmd, params[2:])

    def _line(self, cmd: PathCommand, params: Sequence[float]) -> None:
        if not params or len(params) % 2 != 0:
            raise MalformedInput("'l' parameters must be coordinate pairs")
        for i in range(0, len(params), 2):
            self._push(cmd, params[i], params[i + 1])

    def _curve(self, cmd: PathCommand) -> None:
        anchor = self._require_anchor(cmd)
        pts = flatten_cubic_chain(
            anchor, cmd.params, self.spacing, reference_n=self.reference_n
        )
        border = self.borders[-1]
        border.extend(self._point(p.x, p.y) for p in pts)
        end = anchor
        for i in range(0, len(cmd.params), 6):
            end = end.offset(cmd.params[i + 4], cmd.params[i + 5])
        self.anchor = end

    def _close(self, cmd: PathCommand) -> None:
        self._require_anchor(cmd)
        border = self.borders[-1]
        border.append(border[0])
        self.anchor = border[0]


def build_path(
    data: str,
    spacing: float,
    bounds: float,
    *,
    reference_n: int = REFERENCE_N,
) -> Tuple[Tuple[UniversalPoint, ...], ...]:
    """Tokenize *data* and return the resulting borders."""
    builder = PathBuilder(spacing=spacing, bounds=bounds, reference_n=reference_n)
    builder.apply_all(parse_path_data(data))
    return builder.build()
