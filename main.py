"""Entry point for the Mandelbrot Orbit Explorer.

Renders the Mandelbrot set into a fixed-size window and draws the orbit of
the point under the mouse pointer.
"""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from app_window import AppWindow, DEFAULT_REFRESH_MS
from mandelbrot.compute import BACKEND_NAMES, DEFAULT_BACKEND, get_backend
from mandelbrot.config import (
    ColorPolicy, ConfigurationError, RenderConfig,
    DEFAULT_ESCAPE_BUDGET, DEFAULT_FACTOR, DEFAULT_ORBIT_MAX_LEN,
)

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Mandelbrot set with live orbit overlay")
    parser.add_argument("--factor", type=int, default=DEFAULT_FACTOR,
                        help="pixels per plane unit (frame is 3*factor x 2*factor)")
    parser.add_argument("--budget", type=int, default=DEFAULT_ESCAPE_BUDGET,
                        help="escape budget (max iterations per pixel)")
    parser.add_argument("--policy", choices=[p.value for p in ColorPolicy],
                        default=ColorPolicy.CYCLIC.value, help="color policy")
    parser.add_argument("--backend", choices=BACKEND_NAMES, default=DEFAULT_BACKEND)
    parser.add_argument("--threads", type=int, default=None,
                        help="render threads (default: all cores)")
    parser.add_argument("--orbit-length", type=int, default=DEFAULT_ORBIT_MAX_LEN,
                        help="maximum orbit points drawn")
    parser.add_argument("--continuous", action="store_true",
                        help="re-render the frame every refresh")
    parser.add_argument("--refresh-ms", type=int, default=DEFAULT_REFRESH_MS)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = RenderConfig(
            factor=args.factor,
            escape_budget=args.budget,
            color_policy=ColorPolicy(args.policy),
            orbit_max_len=args.orbit_length,
        )
        backend = get_backend(args.backend, parallelism=args.threads)
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(2)

    logger.info(
        "Frame %dx%d, escape budget %d", config.width, config.height, config.escape_budget,
    )

    app = QApplication(sys.argv[:1])
    window = AppWindow(config, backend, continuous=args.continuous,
                       refresh_ms=args.refresh_ms)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
