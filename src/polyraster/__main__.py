"""Console entrypoint for polyraster.

This module delegates to :mod:`polyraster.cli` so that running
``python -m polyraster`` or the installed ``polyraster`` console script
executes the same application code.
"""

from __future__ import annotations

import sys

from polyraster.cli import main as cli_main


def main() -> None:
    """Application entrypoint (delegates to :func:`polyraster.cli.main`)."""
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
