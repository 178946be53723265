"""Command line interface for the gradient bitmap exporter."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .bmp import BitmapExportError, save_bitmap
from .fill import fill_gradient
from .parameters import DEFAULT_OUTPUT, DEFAULT_SIZE, GradientParameters
from .raster import RasterBuffer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a colour gradient to a 24-bit BMP")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=None,
        help=f"Path of the bitmap to write (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help=f"Image height in pixels (default: {DEFAULT_SIZE})",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help=f"Image width in pixels (default: {DEFAULT_SIZE})",
    )
    parser.add_argument(
        "--blue",
        type=float,
        default=None,
        help="Constant blue channel value in [0, 1] (default: 0.5)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of threads used to fill rows (default: chosen by the executor)",
    )
    parser.add_argument(
        "--params",
        type=Path,
        default=None,
        help="Optional JSON file providing the gradient parameters",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_parameters(args: argparse.Namespace) -> GradientParameters:
    overrides = {
        "height": args.height,
        "width": args.width,
        "output": args.output,
        "blue": args.blue,
        "workers": args.workers,
    }
    if args.params is not None:
        return GradientParameters.from_json(args.params, **overrides)
    return GradientParameters(**{key: value for key, value in overrides.items() if value is not None})


def export_gradient(params: GradientParameters) -> Path:
    image = RasterBuffer(params.height, params.width)
    fill_gradient(image, blue=params.blue, max_workers=params.workers)
    return save_bitmap(params.output, image)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        params = load_parameters(args)
    except (OSError, ValueError, TypeError) as exc:
        parser.error(str(exc))

    logger.debug("Exporting with %s", params.as_dict())
    try:
        export_gradient(params)
    except BitmapExportError as exc:
        print(f"Failed to export image: {exc}")
        return 1

    print("Image exported successfully")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
