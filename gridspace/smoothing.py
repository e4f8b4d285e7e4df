"""Greedy string-pulling path smoother.

From the current waypoint, scan the remaining path from the far end back
toward the current one and jump to the first (i.e. farthest) waypoint with
clear line of sight. Repeat from there. Each straight segment of the result
is therefore unobstructed under the same obstacle set, and the result is
never longer than the input.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .geometry import as_tile_set, checked_point
from .line import _clear_interior, _trace
from .types import Point


def smooth_path(path: Sequence, obstacles: Iterable) -> list[Point]:
    points = [checked_point(p, "path point") for p in path]
    if len(points) <= 2:
        return points

    blocked = as_tile_set(obstacles)
    last = len(points) - 1

    smoothed = [points[0]]
    current = 0
    while current < last:
        farthest = current + 1
        for i in range(last, current + 1, -1):
            if _clear_interior(_trace(points[current], points[i]), blocked):
                farthest = i
                break
        smoothed.append(points[farthest])
        current = farthest
    return smoothed
