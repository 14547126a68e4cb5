"""Exception types raised by the geometry pipeline.

All errors derive from :class:`PolyrasterError` (itself a ``ValueError``) so
callers that only care about "bad input" can catch a single type. Load errors
abort the whole scene; :class:`NavigationError` is the only recoverable one.
"""

from __future__ import annotations

__all__ = [
    "PolyrasterError",
    "MalformedInput",
    "UnsupportedCommand",
    "RangeViolation",
    "NavigationError",
]


class PolyrasterError(ValueError):
    """Base class for every error raised by polyraster."""


class MalformedInput(PolyrasterError):
    """Missing field, unparsable number, bad colour or path without an anchor."""


class UnsupportedCommand(PolyrasterError):
    """Path command outside the supported relative subset."""

    def __init__(self, command: str) -> None:
        super().__init__(f"unsupported path command: {command!r}")
        self.command = command


class RangeViolation(PolyrasterError):
    """A coordinate or colour component fell outside its allowed range."""


class NavigationError(PolyrasterError):
    """A pan or zoom would move the viewport outside the scene."""
