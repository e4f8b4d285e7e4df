"""Field of view by recursive shadowcasting.

Each of the eight octants around the origin is swept row by row, where row
``i`` is the run of cells at depth ``i`` from the origin. A sweep carries a
slope window ``[end, start]`` (initially ``[0, 1]``); for each cell:

    l_slope = (dy - 0.5) / (dx + 0.5)
    r_slope = (dy + 0.5) / (dx - 0.5)

Cells with ``start < r_slope`` are left of the window and skipped; once
``end > l_slope`` the rest of the row is right of it. Cells inside the
window are lit when within ``radius`` (Euclidean). Hitting an opaque cell
from a clear run spawns a sweep of the next row with the window narrowed to
``[l_slope, start]``; coming back out of an opaque run moves ``start`` to
the last blocker's ``r_slope``. A row that ends blocked stops that sweep.

The spawned sweeps go onto an explicit stack instead of the call stack.
They only read the window they were spawned with, so the lit set is the
same as the recursive formulation regardless of processing order.

Local ``(dx, dy)`` offsets map to the grid through the eight signed axis
permutations below, one per octant.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from .geometry import InvalidShapeError, as_tile_set, checked_point
from .types import TileKey

# (dx, dy) -> (x offset, y offset) for each octant.
_OCTANTS = (
    lambda dx, dy: (dx, dy),
    lambda dx, dy: (dy, dx),
    lambda dx, dy: (-dy, dx),
    lambda dx, dy: (-dx, dy),
    lambda dx, dy: (-dx, -dy),
    lambda dx, dy: (-dy, -dx),
    lambda dx, dy: (dy, -dx),
    lambda dx, dy: (dx, -dy),
)


def field_of_view(origin, radius: float, obstacles: Iterable) -> set[TileKey]:
    """Keys of every tile visible from ``origin`` within ``radius``.

    The origin is always visible. A 3D origin sweeps the horizontal plane at
    its z and returns ``(x, y, z)`` keys.
    """
    o = checked_point(origin, "origin")
    if (
        isinstance(radius, bool)
        or not isinstance(radius, (int, float))
        or not math.isfinite(radius)
        or radius < 0
    ):
        raise InvalidShapeError(
            f"Invalid range: must be a non-negative finite number (got {radius})"
        )
    opaque = as_tile_set(obstacles)

    if o.z is None:
        def key(x, y):
            return (x, y)
    else:
        def key(x, y):
            return (x, y, o.z)

    visible: set[TileKey] = {key(o.x, o.y)}
    for transform in _OCTANTS:
        _cast_octant(o.x, o.y, radius, transform, key, opaque, visible)
    return visible


def _cast_octant(cx, cy, radius, transform, key, opaque, visible) -> None:
    max_row = math.floor(radius)
    radius_sq = radius * radius
    stack: list[tuple[int, float, float]] = [(1, 1.0, 0.0)]

    while stack:
        row, start, end = stack.pop()
        if start < end:
            continue
        next_start = start
        for i in range(row, max_row + 1):
            dx = -i
            blocked = False
            for dy in range(-i, 1):
                l_slope = (dy - 0.5) / (dx + 0.5)
                r_slope = (dy + 0.5) / (dx - 0.5)
                if start < r_slope:
                    continue
                if end > l_slope:
                    break

                ox, oy = transform(dx, dy)
                tile = key(cx + ox, cy + oy)
                if dx * dx + dy * dy <= radius_sq:
                    visible.add(tile)

                is_opaque = tile in opaque
                if blocked:
                    if is_opaque:
                        next_start = r_slope
                        continue
                    blocked = False
                    start = next_start
                elif is_opaque and i < radius:
                    blocked = True
                    stack.append((i + 1, start, l_slope))
                    next_start = r_slope
            if blocked:
                break
