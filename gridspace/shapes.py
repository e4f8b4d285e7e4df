"""Area-of-effect tile enumeration: circle, cone and line.

Circles and cones are scanned over their bounding square (or cube, for a 3D
center) and filtered by Euclidean distance; cones additionally by the angle
to the normalized direction vector. The scans are numpy-vectorized: the
whole bounding box is evaluated as one array operation and then flattened
in x-major order, so results come out in the same order as the obvious
nested ``for x: for y:`` loop.

Circle results for 2D centers with ``radius <= MAX_CACHED_RADIUS`` are
memoized as offset lists relative to the origin and translated to the
requested center on each call. The memo lives in a ``CircleCache``: the
module keeps a default instance, ``engine.SpatialEngine`` owns its own, and
callers may pass one explicitly or opt out with ``use_cache=False``.
"""

from __future__ import annotations

import logging
import math
import threading

import numpy as np

from .geometry import InvalidShapeError, checked_point
from .line import _trace
from .types import Point

logger = logging.getLogger(__name__)

MAX_CACHED_RADIUS = 10
CONE_EPSILON = 1e-4

Offset = tuple[int, ...]


def _check_extent(value, name: str) -> None:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
        or value < 0
    ):
        raise InvalidShapeError(
            f"Invalid {name}: must be a non-negative finite number (got {value})"
        )


def _box_axes(extent: int, dims: int) -> list[np.ndarray]:
    """Flattened offset grids covering [-extent, extent] on each axis."""
    r = np.arange(-extent, extent + 1, dtype=np.int64)
    grids = np.meshgrid(*([r] * dims), indexing="ij")
    return [g.ravel() for g in grids]


def _circle_offsets(radius: float, dims: int) -> list[Offset]:
    axes = _box_axes(math.ceil(radius), dims)
    dist = np.sqrt(sum(a.astype(np.float64) ** 2 for a in axes))
    mask = dist <= radius
    return list(zip(*(a[mask].tolist() for a in axes)))


def _translate(center: Point, offsets: list[Offset]) -> list[Point]:
    cx, cy = center.x, center.y
    if center.z is None:
        return [Point(cx + dx, cy + dy) for dx, dy in offsets]
    cz = center.z
    return [Point(cx + dx, cy + dy, cz + dz) for dx, dy, dz in offsets]


class CircleCache:
    """Per-radius circle offsets around the origin (2D only).

    Entries are pure derived data and can be dropped at any time. Lookups
    and fills are serialized by an internal lock so one cache can be shared
    between threads.
    """

    def __init__(self, max_radius: float = MAX_CACHED_RADIUS) -> None:
        self.max_radius = max_radius
        self._offsets: dict[float, list[Offset]] = {}
        self._lock = threading.Lock()

    def offsets(self, radius: float) -> list[Offset]:
        with self._lock:
            cached = self._offsets.get(radius)
            if cached is None:
                cached = _circle_offsets(radius, 2)
                self._offsets[radius] = cached
                logger.debug(
                    "circle cache: filled radius %s (%d tiles)",
                    radius,
                    len(cached),
                )
            return cached

    def clear(self) -> None:
        with self._lock:
            self._offsets.clear()

    def __len__(self) -> int:
        return len(self._offsets)

    def __contains__(self, radius: float) -> bool:
        return radius in self._offsets


_default_cache = CircleCache()


def circle_tiles(
    center,
    radius: float,
    use_cache: bool = True,
    cache: CircleCache | None = None,
) -> list[Point]:
    """Tiles whose Euclidean distance from ``center`` is <= ``radius``."""
    c = checked_point(center, "center")
    _check_extent(radius, "radius")

    if cache is None:
        cache = _default_cache
    if use_cache and c.z is None and radius <= cache.max_radius:
        return _translate(c, cache.offsets(radius))

    dims = 2 if c.z is None else 3
    return _translate(c, _circle_offsets(radius, dims))


def cone_tiles(
    origin, direction, length: float, angle_degrees: float
) -> list[Point]:
    """Tiles within ``length`` of origin and ``angle_degrees / 2`` of direction.

    ``direction`` is a vector, not a target tile. The origin tile is always
    included.
    """
    o = checked_point(origin, "origin")
    d = checked_point(direction, "direction")
    _check_extent(length, "length")
    if (
        isinstance(angle_degrees, bool)
        or not isinstance(angle_degrees, (int, float))
        or not math.isfinite(angle_degrees)
        or angle_degrees <= 0
        or angle_degrees > 360
    ):
        raise InvalidShapeError(
            f"Invalid angle: must be between 0 and 360 degrees (got {angle_degrees})"
        )

    dir_vec = np.array([d.x, d.y, d.z or 0], dtype=np.float64)
    dir_len = float(np.sqrt(np.dot(dir_vec, dir_vec)))
    if dir_len == 0:
        raise InvalidShapeError(
            "Invalid direction vector: length cannot be zero"
        )
    dir_norm = dir_vec / dir_len
    min_cos = math.cos(math.radians(angle_degrees / 2)) - CONE_EPSILON

    dims = 2 if o.z is None else 3
    axes = _box_axes(math.ceil(length), dims)
    fx = [a.astype(np.float64) for a in axes]
    dist = np.sqrt(sum(a * a for a in fx))
    dot = sum(a * dir_norm[i] for i, a in enumerate(fx))
    safe_dist = np.where(dist > 0, dist, 1.0)
    in_angle = (dist == 0) | (dot / safe_dist >= min_cos)
    mask = (dist <= length) & in_angle

    offsets = list(zip(*(a[mask].tolist() for a in axes)))
    return _translate(o, offsets)


def line_tiles(start, end) -> list[Point]:
    """Bresenham tiles from start to end, inclusive."""
    s = checked_point(start, "start")
    e = checked_point(end, "end")
    return _trace(s, e)
