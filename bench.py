"""Full-frame render benchmark.

Times every backend at several parallelism settings (best of N runs) and
checks that all of them produced byte-identical frames.

    python bench.py --factor 350 --budget 1024 --repeat 5
"""

import argparse
import hashlib
import logging
import os
import sys
import time

from mandelbrot._numba_backend import NumbaBackend
from mandelbrot.compute import BACKEND_NAMES, get_backend, render
from mandelbrot.config import RenderConfig, DEFAULT_ESCAPE_BUDGET, DEFAULT_FACTOR

logger = logging.getLogger("bench")


def _parallelism_levels():
    cores = os.cpu_count() or 1
    levels = [1]
    if cores > 1:
        levels.append(cores)
    return levels


def bench_backend(config, name, parallelism, repeat):
    """Return (best seconds, sha1 of the frame) for one backend setting."""
    backend = get_backend(name, parallelism=parallelism)
    best = float("inf")
    digest = None
    for _ in range(repeat):
        start = time.perf_counter()
        frame = render(config, backend)
        best = min(best, time.perf_counter() - start)
        digest = hashlib.sha1(frame).hexdigest()
    return best, digest


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--factor", type=int, default=DEFAULT_FACTOR)
    parser.add_argument("--budget", type=int, default=DEFAULT_ESCAPE_BUDGET)
    parser.add_argument("--repeat", type=int, default=3)
    parser.add_argument("--backends", nargs="+", choices=BACKEND_NAMES,
                        default=list(BACKEND_NAMES))
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    config = RenderConfig(factor=args.factor, escape_budget=args.budget)
    logger.info("Frame %dx%d, budget %d", config.width, config.height, config.escape_budget)

    if "numba" in args.backends:
        NumbaBackend.warmup()
        logger.info("Numba JIT warmup complete")

    digests = {}
    for name in args.backends:
        for parallelism in _parallelism_levels():
            best, digest = bench_backend(config, name, parallelism, args.repeat)
            digests[(name, parallelism)] = digest
            logger.info(
                "%-6s x%-3d best %8.1f ms  %.1f Mpx/s  sha1 %s",
                name, parallelism, best * 1000,
                config.width * config.height / best / 1e6, digest[:12],
            )

    by_backend = {}
    for (name, _), digest in digests.items():
        by_backend.setdefault(name, set()).add(digest)

    mismatched = [name for name, seen in by_backend.items() if len(seen) > 1]
    if mismatched:
        logger.error("Frames differ across parallelism settings for: %s", ", ".join(mismatched))
        return 1
    if len(set(digests.values())) > 1:
        logger.warning("Backends disagree with each other (float32 kernels differ)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
