"""Command line entry point: render the demo scene and save it as an image."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from weekendtracer.render import CpuRenderer

logger = logging.getLogger("weekendtracer")


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weekendtracer", description="Path-trace the random spheres scene."
    )
    parser.add_argument("--width", type=_positive_int, default=1280)
    parser.add_argument("--height", type=_positive_int, default=720)
    parser.add_argument("--samples", type=_positive_int, default=30, help="samples per pixel")
    parser.add_argument("--max-depth", type=_positive_int, default=50, help="maximum bounces")
    parser.add_argument("--frames", type=_positive_int, default=1, help="frames to render")
    parser.add_argument("--move-camera", action="store_true", help="move the camera every frame")
    parser.add_argument("--output", default="image.png", help="file to save the last frame to")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Render, save the final frame and report whether saving worked."""
    args = _parser().parse_args(argv)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        renderer = CpuRenderer(
            args.width,
            args.height,
            samples_per_pixel=args.samples,
            max_depth=args.max_depth,
        )
        for _ in range(args.frames):
            elapsed = renderer.render(args.move_camera)
            logger.info(
                "Ray Tracing On CPU! | Resolution: %dx%d | CPU Time: %.3fms",
                renderer.width,
                renderer.height,
                elapsed,
            )

        try:
            renderer.image.save(args.output)
            success = True
        except (OSError, ValueError):
            success = False
        logger.info("Saving to file: %s", "successful" if success else "failed")
        return 0 if success else 1
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)


if __name__ == "__main__":
    sys.exit(main())