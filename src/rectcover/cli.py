"""Command-line interface: raster image in, rectangle report, SVG and replay GIF out."""

import argparse
import logging
import sys

from rectcover.animation import AnimationBuilder
from rectcover.config import (DEFAULT_FPS, DEFAULT_THRESHOLD, LOG_DATE_FORMAT, LOG_FORMAT,
                              PipelineConfig, Strategy, SvgConfig, SvgStyle)
from rectcover.decompose import decompose
from rectcover.exceptions import RectCoverError
from rectcover.serialization import ReportSerializer, SvgSerializer
from rectcover.utils import STDIO, IntermediateImages, bitmap_from_image

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rectcover",
        description="Cover the foreground of a monochrome image with axis-aligned rectangles"
    )

    parser.add_argument("--input", default=STDIO, help="the input PNG, GIF, or JPEG file, default is stdin")
    parser.add_argument("--output", default=STDIO, help="the output rectangle-data filename, default is stdout")
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in Strategy],
        default=Strategy.MAXRECT.value,
        help="decomposition strategy (default: maxrect)"
    )

    parser.add_argument("--verify", help="write a verification RGBA color PNG file")
    parser.add_argument("--invert", action="store_true", help="invert the image colors prior to grayscaling")
    parser.add_argument("--negative", help="write the corresponding negative RGBA PNG file")
    parser.add_argument(
        "--threshold",
        type=int,
        default=DEFAULT_THRESHOLD,
        help=f"monochrome gray threshold, post negation, 0-255 (default: {DEFAULT_THRESHOLD})"
    )
    parser.add_argument("--grayscale", help="write the corresponding grayscale PNG file")
    parser.add_argument("--monochrome", help="write the corresponding monochrome PNG file")

    parser.add_argument("--svg", help="write the corresponding standalone SVG file")
    parser.add_argument(
        "--svg-style",
        choices=[s.value for s in SvgStyle],
        default=SvgStyle.FLAT.value,
        help="draw rectangles only (flat) or as holes in a background rectangle"
    )
    parser.add_argument("--center", action="store_true",
                        help="center the rectangles on the origin in the report and SVG")

    parser.add_argument("--animation", help="write the corresponding animated GIF file")
    parser.add_argument(
        "--animation-fps",
        type=float,
        default=DEFAULT_FPS,
        help=f"approximate animation frames per sec, 0.1-100 (default: {DEFAULT_FPS})"
    )
    parser.add_argument("--max-rectangles", type=int, metavar="N",
                        help="stop the maxrect strategy after N rectangles")

    parser.add_argument("-v", "--verbose", action="store_true", help="verbose logging")
    return parser


def main(args: list[str] | None = None) -> int:
    parser = create_parser()
    parsed = parser.parse_args(args)

    setup_logging(logging.DEBUG if parsed.verbose else logging.INFO)

    try:
        config = PipelineConfig(
            threshold=parsed.threshold,
            invert=parsed.invert,
            strategy=Strategy(parsed.strategy),
            center=parsed.center,
            fps=parsed.animation_fps,
            max_rectangles=parsed.max_rectangles,
        ).validate()
        intermediates = IntermediateImages(
            verify=parsed.verify,
            negative=parsed.negative,
            grayscale=parsed.grayscale,
            monochrome=parsed.monochrome,
        )

        bitmap = bitmap_from_image(parsed.input, config.threshold, config.invert, intermediates)
        rect_set = decompose(bitmap, config.strategy, config.max_rectangles)

        if parsed.animation:
            AnimationBuilder(config.fps).save(rect_set, parsed.animation)

        if config.center:
            rect_set = rect_set.centered()

        if parsed.svg:
            SvgSerializer(SvgConfig(style=SvgStyle(parsed.svg_style))).serialize(rect_set, parsed.svg)

        report = ReportSerializer()
        if parsed.output == STDIO:
            report.serialize(rect_set, sys.stdout)
        else:
            report.serialize(rect_set, parsed.output)
    except RectCoverError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
