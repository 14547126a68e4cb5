"""Command-line interface for polyraster.

Argument parsing lives in :mod:`polyraster.app.viewer` next to the runners it
feeds, so the console script and ``python -m polyraster`` behave the same.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from polyraster import __version__
from polyraster.app import viewer
from polyraster.core.errors import PolyrasterError

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return viewer.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Synchronous entrypoint; returns the process exit status.

    Load and configuration errors are logged and reported as status 1
    rather than a traceback.
    """
    args = parse_args(argv)

    if args.version:
        print(f"polyraster {__version__}")
        return 0
    if args.command is None:
        print("usage: polyraster {render,view} ... (see --help)", file=sys.stderr)
        return 2

    viewer.configure_logging(args.log_level)
    try:
        if args.command == "render":
            viewer.render_to_png(args)
        else:
            asyncio.run(run_async(argv))
    except KeyboardInterrupt:
        pass
    except (PolyrasterError, ValidationError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1
    return 0


async def run_async(argv: list[str] | None = None) -> None:
    """Async entrypoint for programmatic usage/testing.

    Tests and programmatic callers can ``await run_async([...])`` to run the
    viewer without starting a nested event loop.
    """
    args = parse_args(argv)
    if args.command == "render":
        viewer.render_to_png(args)
    elif args.command == "view":
        await viewer.main_async(args)


if __name__ == "__main__":
    sys.exit(main())
