"""
Command line front-end for the quote tile generator.
"""

import argparse
import logging
import sys

from tile_export import export_tile_png
from tile_generator import generate_tile, prepare_phrase
from tile_rendering import DEFAULT_FONT_NAME, LayoutConfigurationError, LayoutError, build_tile_config

_LOGGER = logging.getLogger(__name__)


def render_phrase(phrase, config, output_path, png_path=None, dpi=72):
    """Render one phrase to PDF (and PNG if requested) and report the fit."""
    result = generate_tile(phrase, output_path, config)
    print(
        f"{output_path}: profile {result.profile.name} ({result.profile.font_size}pt), "
        f"{len(result.lines)} line(s){'' if result.fits else ' - TRUNCATED'}"
    )

    if png_path:
        success, error = export_tile_png(output_path, png_path, dpi=dpi)
        if not success:
            _LOGGER.error(f"PNG export failed: {error}")
    return result


def run_interactive(config, output_path, png_path=None, dpi=72):
    """Re-render the tile for every line read from stdin."""
    print("Type a phrase and press Enter to render it (Ctrl-D to quit).")
    for raw_line in sys.stdin:
        phrase = prepare_phrase(raw_line.replace("\\n", "\n"))
        render_phrase(phrase, config, output_path, png_path, dpi)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Render a short phrase onto a fixed-size quote tile (PDF/PNG)"
    )
    parser.add_argument("phrase", nargs="?", help="Phrase to render (\\n starts a new paragraph)")
    parser.add_argument(
        "--output", default="tile.pdf", help="Output PDF file (default: tile.pdf)"
    )
    parser.add_argument("--png", help="Also export the tile as PNG to this path")
    parser.add_argument(
        "--dpi", type=int, default=72, help="PNG resolution (default: 72, one pixel per point)"
    )
    parser.add_argument(
        "--font",
        default=DEFAULT_FONT_NAME,
        help=f"Standard PDF font for the phrase (default: {DEFAULT_FONT_NAME})",
    )
    parser.add_argument("--width", type=float, help="Tile width in points (default: 720)")
    parser.add_argument("--height", type=float, help="Tile height in points (default: 405)")
    parser.add_argument("--margin", type=float, help="Tile margin in points (default: 60)")
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Read phrases from stdin and re-render after each line",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.interactive and args.phrase is None:
        parser.error("a phrase is required unless --interactive is given")

    try:
        config = build_tile_config(
            font_name=args.font, width=args.width, height=args.height, margin=args.margin
        )
    except LayoutConfigurationError as e:
        _LOGGER.error(f"Invalid tile configuration: {e}")
        return 2

    try:
        if args.interactive:
            run_interactive(config, args.output, args.png, args.dpi)
        else:
            render_phrase(
                args.phrase.replace("\\n", "\n"), config, args.output, args.png, args.dpi
            )
    except LayoutError as e:
        _LOGGER.error(f"Cannot lay out phrase: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
