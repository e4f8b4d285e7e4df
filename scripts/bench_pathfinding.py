#!/usr/bin/env python3
"""Benchmark pathfinding and field-of-view performance.

Usage (from the repo root):
    python scripts/bench_pathfinding.py          # default: 5 iterations, 64x64 grid
    python scripts/bench_pathfinding.py -n 10    # 10 iterations
    python scripts/bench_pathfinding.py -s 128   # 128x128 grid
    python scripts/bench_pathfinding.py -v       # debug logging from the engine
"""

import argparse
import logging
import statistics
import sys
import time
from pathlib import Path

# Add repo root to path
SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent
sys.path.insert(0, str(ROOT_DIR))

from gridspace.fov import field_of_view  # noqa: E402
from gridspace.pathfinding import find_path  # noqa: E402
from gridspace.types import Bounds, PathfindingOptions, Point  # noqa: E402


def make_maze_obstacles(size: int) -> set[tuple[int, int]]:
    """Vertical walls every 4 columns with alternating top/bottom gaps."""
    obstacles = set()
    for x in range(2, size - 1, 4):
        gap_y = 1 if (x // 4) % 2 == 0 else size - 2
        for y in range(size):
            if y != gap_y:
                obstacles.add((x, y))
    return obstacles


def time_runs(label, fn, iterations):
    print(f"{label}:")
    fn()  # warmup
    times_ms = []
    for i in range(iterations):
        start = time.perf_counter()
        fn()
        elapsed_ms = (time.perf_counter() - start) * 1000
        times_ms.append(elapsed_ms)
        print(f"  Run {i + 1}: {elapsed_ms:.1f} ms")

    print(f"  Median: {statistics.median(times_ms):.1f} ms")
    print(f"  Mean:   {statistics.mean(times_ms):.1f} ms")
    if len(times_ms) > 1:
        print(f"  Stdev:  {statistics.stdev(times_ms):.1f} ms")
    print()


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark pathfinding and field of view"
    )
    parser.add_argument(
        "-n",
        "--iterations",
        type=int,
        default=5,
        help="Number of iterations (default: 5)",
    )
    parser.add_argument(
        "-s",
        "--size",
        type=int,
        default=64,
        help="Grid width and height (default: 64)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    size = args.size
    obstacles = make_maze_obstacles(size)
    options = PathfindingOptions(
        max_iterations=size * size * 4,
        diagonal_cost="alternating",
        bounds=Bounds(min=Point(0, 0), max=Point(size - 1, size - 1)),
    )
    start = Point(0, 0)
    end = Point(size - 1, size - 1)

    print(f"Benchmark: {size}x{size} maze, {len(obstacles)} obstacles")
    print(f"Iterations: {args.iterations}")
    print()

    path = find_path(start, end, obstacles, options)
    print(f"Path length: {len(path) if path else 'no path'}")
    print()

    time_runs(
        "find_path",
        lambda: find_path(start, end, obstacles, options),
        args.iterations,
    )
    time_runs(
        "field_of_view (radius 20)",
        lambda: field_of_view(Point(size // 2, size // 2), 20, obstacles),
        args.iterations,
    )


if __name__ == "__main__":
    main()
