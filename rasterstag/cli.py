"""
Command line interface: loads an image, runs a filter pipeline over it and
writes the result.

Usage:
    rasterstag flower.jpg
    rasterstag flower.jpg --pipeline "gray|gradient horizontal" --output flower_h
    python -m rasterstag flower.jpg --image-dir res/images --overwrite always
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pydantic import ValidationError

from .config import Settings
from .errors import RasterStagError
from .filters import FilterContext, FilterPipeline
from .storage import ImageStore, show

logger = logging.getLogger(__name__)

DEFAULT_PIPELINE = "edges|maxrange"
"Edge detection followed by a contrast stretch"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rasterstag",
        description="Apply a filter pipeline to an image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Filters: gray, vgrad, hgrad, gradient, edges, maxrange\n"
            "Example: rasterstag flower.jpg --pipeline 'edges|maxrange'"
        ),
    )
    parser.add_argument("input", help="Image name relative to the image directory")
    parser.add_argument(
        "--pipeline", "-p",
        default=DEFAULT_PIPELINE,
        help=f"Filters separated by | (default: {DEFAULT_PIPELINE!r})",
    )
    parser.add_argument(
        "--output", "-o",
        help="Output name, the extension is replaced (default: <input>_edge)",
    )
    parser.add_argument("--image-dir", type=Path, help="Directory of input and output images")
    parser.add_argument(
        "--overwrite",
        choices=["ask", "always", "never"],
        help="What to do if the output file exists",
    )
    parser.add_argument("--show", action="store_true", help="Display the result")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface.

    :param argv: Arguments, sys.argv by default
    :returns: The exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {}
    if args.image_dir is not None:
        overrides["IMAGE_DIR"] = args.image_dir
    if args.overwrite is not None:
        overrides["OVERWRITE"] = args.overwrite
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        parser.error(f"Invalid settings: {e}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        pipeline = FilterPipeline.parse(args.pipeline)
    except (TypeError, ValueError) as e:
        parser.error(f"Invalid pipeline: {e}")

    store = ImageStore(settings)
    output = args.output or f"{Path(args.input).stem}_edge"
    try:
        image = store.read(args.input)
        context = FilterContext()
        result = pipeline.apply(image, context)
        store.write(output, result)
    except RasterStagError as e:
        logger.error(str(e))
        return 1
    if "intensity_range" in context:
        logger.info("Stretched intensity range %d..%d", *context["intensity_range"])
    if args.show:
        show(result)
    return 0
