"""Bresenham line rasterization and tile line-of-sight.

``trace_line`` is shared by ``has_line_of_sight``, the path smoother and
the line AoE shape. Both endpoints are included. When either endpoint has a
z coordinate the 3D driving-axis variant is used and every returned point
carries a z.

Line of sight only tests the interior of the traced line: a viewer can
always see an obstacle tile itself, just not past it.
"""

from __future__ import annotations

from collections.abc import Iterable

from .geometry import InvalidPointError, as_tile_set, checked_point
from .types import Point


def _integral(v, name: str) -> int:
    if isinstance(v, int):
        return v
    if float(v).is_integer():
        return int(v)
    raise InvalidPointError(
        f"Invalid {name}: line tracing needs integer coordinates (got {v})"
    )


def _bresenham_2d(x0: int, y0: int, x1: int, y1: int) -> list[Point]:
    points: list[Point] = []
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy
    while True:
        points.append(Point(x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy
    return points


def _bresenham_3d(
    start: tuple[int, int, int], end: tuple[int, int, int]
) -> list[Point]:
    cur = list(start)
    deltas = [abs(e - s) for s, e in zip(start, end)]
    steps = [1 if e > s else -1 for s, e in zip(start, end)]
    # Step the axis with the largest delta every iteration; the other two
    # accumulate error against it.
    drive = max(range(3), key=lambda i: deltas[i])
    others = [i for i in range(3) if i != drive]
    errs = {i: 2 * deltas[i] - deltas[drive] for i in others}

    points = [Point(*cur)]
    for _ in range(deltas[drive]):
        cur[drive] += steps[drive]
        for i in others:
            if errs[i] >= 0:
                cur[i] += steps[i]
                errs[i] -= 2 * deltas[drive]
            errs[i] += 2 * deltas[i]
        points.append(Point(*cur))
    return points


def _trace(start: Point, end: Point) -> list[Point]:
    x0 = _integral(start.x, "start")
    y0 = _integral(start.y, "start")
    x1 = _integral(end.x, "end")
    y1 = _integral(end.y, "end")
    if start.z is None and end.z is None:
        return _bresenham_2d(x0, y0, x1, y1)
    z0 = _integral(start.z or 0, "start")
    z1 = _integral(end.z or 0, "end")
    return _bresenham_3d((x0, y0, z0), (x1, y1, z1))


def trace_line(start, end) -> list[Point]:
    """All tiles on the line from start to end, inclusive."""
    return _trace(checked_point(start, "start"), checked_point(end, "end"))


def _clear_interior(line: list[Point], obstacles) -> bool:
    for p in line[1:-1]:
        if p.key in obstacles:
            return False
    return True


def has_line_of_sight(start, end, obstacles: Iterable) -> bool:
    """True unless an interior tile of the traced line is an obstacle."""
    line = trace_line(start, end)
    return _clear_interior(line, as_tile_set(obstacles))
