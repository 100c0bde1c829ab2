import argparse
import logging
import sys

from PIL import UnidentifiedImageError

from asciiraster.charsets import DEFAULT_RAMP
from asciiraster.config import DEFAULT_CELL_SIZE, RenderOptions
from asciiraster.converter import convert
from asciiraster.errors import AsciiRasterError, ResourceNotFoundError
from asciiraster.scaling import DEFAULT_FILTER, FILTERS, ScaleSpec


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="asciiraster", description="Convert an image into ascii art")
    parser.add_argument("input", help="The image to convert")
    parser.add_argument("output", help="The output ascii file (or image with --raster)")
    parser.add_argument("-s", "--scale", default=None, help="Resolution to scale the image to: W, W:H, W:_ or _:H")
    parser.add_argument(
        "--filter",
        default=DEFAULT_FILTER,
        choices=FILTERS,
        help=f"Scaling filter to use when resizing the image (default: {DEFAULT_FILTER})",
    )
    parser.add_argument(
        "-t", "--table", default=DEFAULT_RAMP, help="Characters to use, ordered from darkest to lightest"
    )
    parser.add_argument(
        "-r", "--raster", action="store_true", default=False, help="Write a rastered image instead of a text file"
    )
    parser.add_argument("--font", default=None, help="Font file to use when rastering the image")
    parser.add_argument(
        "--font-size",
        type=int,
        default=DEFAULT_CELL_SIZE,
        help=f"Height of the font in pixels (default: {DEFAULT_CELL_SIZE})",
    )
    parser.add_argument("--rgb", action="store_true", default=False, help="Colour the rasterized characters")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log pipeline steps")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        options = RenderOptions(
            ramp=args.table,
            scale=ScaleSpec.parse(args.scale) if args.scale is not None else ScaleSpec(),
            filter=args.filter,
            raster=args.raster,
            cell_size=args.font_size,
            font_path=args.font,
            colour=args.rgb,
        )
        convert(args.input, args.output, options)
    except ResourceNotFoundError as e:
        # Missing inputs are reported but are not treated as a failed run
        print(e)
        return 0
    except AsciiRasterError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError, UnidentifiedImageError) as e:
        # Pillow reports unknown output formats as ValueError
        print(f"error: failed to process {args.input} -> {args.output}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
