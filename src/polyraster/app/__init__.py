"""Application package for polyraster.

Holds the runners used by the command line: headless PNG rendering and the
interactive pygame viewer.
"""

from . import viewer  # re-export the main application module

__all__ = ["viewer"]
