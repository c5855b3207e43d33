"""
Allow running the package directly: python -m mandelbrot_view
"""

import argparse
import logging
import sys

from .colormaps import list_colormap_names
from .settings import load_settings


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="mandelbrot-view",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description="Interactive Mandelbrot set explorer",
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="settings.json to load (default: $MANDELBROT_VIEW_SETTINGS or ./settings.json)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="initial window width in pixels",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="initial window height in pixels",
    )
    parser.add_argument(
        "--max-iter",
        type=int,
        default=None,
        help="maximum iterations before a point counts as inside the set",
    )
    parser.add_argument(
        "--palette",
        choices=list_colormap_names(),
        default=None,
        help="color palette",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log every rendered frame",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.settings).with_overrides(
            width=args.width,
            height=args.height,
            max_iterations=args.max_iter,
            palette=args.palette,
        )
    except ValueError as e:
        parser.error(str(e))

    # pygame is only needed for the window, keep the import here
    from .app import run
    run(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
