import argparse
import logging
import sys

from PIL import Image

from ttview.config import DEFAULT_WIDTH, FILTERS, STYLES, RenderOptions, parse_filter, parse_style
from ttview.converter import convert
from ttview.errors import TtviewError
from ttview.logging_conf import LEVELS, setup_logging
from ttview.version import version_info

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ttview", description="Display images in the terminal")
    parser.add_argument("filenames", nargs="*", help="Images to display")
    parser.add_argument(
        "-w", "--width", type=int, default=None, help=f"Output width in pixels (default: {DEFAULT_WIDTH})"
    )
    parser.add_argument(
        "-H",
        "--height",
        type=int,
        default=None,
        help="Output height in pixels. Alone it keeps the aspect ratio; with --width the image is stretched.",
    )
    parser.add_argument(
        "-f", "--filter", default="gaussian", choices=sorted(FILTERS), help="Filter used for scaling (default: gaussian)"
    )
    styles = parser.add_mutually_exclusive_group()
    styles.add_argument("-s", "--style", default=None, choices=list(STYLES), help="Display style (default: color)")
    styles.add_argument(
        "-g",
        "--gradient",
        default=None,
        help="Glyphs to use as a gradient, darkest first. Cannot be combined with --style.",
    )
    parser.add_argument("--log-level", default="WARNING", choices=LEVELS, help="Logging level (default: WARNING)")
    parser.add_argument("-v", "--version", action="version", version=version_info())
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        style = parse_style(args.style, args.gradient)
    except TtviewError as err:
        parser.error(str(err))

    options = RenderOptions(width=args.width, height=args.height, filter=parse_filter(args.filter), style=style)

    failed = 0
    for filename in args.filenames:
        try:
            text = convert(filename, options)
        except (OSError, Image.DecompressionBombError, TtviewError) as err:
            log.debug("Failed to display %s", filename, exc_info=True)
            print(f"{filename}: {err}", file=sys.stderr)
            failed += 1
            continue
        print(f"{filename}:\n{text}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
