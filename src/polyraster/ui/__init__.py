"""UI package: controllers for interactive viewing."""

from .controllers import ViewerController  # re-export for convenience

__all__ = ["ViewerController"]
