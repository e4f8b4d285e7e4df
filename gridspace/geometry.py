"""Point coercion, validation, tile keys and distance metrics.

Every public entry point in the package funnels its coordinates through
``as_point`` + ``validate_point`` before doing any work, so invalid input
fails fast with ``InvalidPointError`` rather than part-way through a search.

Tile keys are tuples, ``(x, y)`` or ``(x, y, z)``. Obstacle sets may also be
given in the canonical string form ``"x,y"`` / ``"x,y,z"``; ``as_tile_set``
normalizes them once per call so the hot loops only ever hash tuples.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from .types import Bounds, DistanceMetric, Point, TileKey


class InvalidPointError(ValueError):
    """Non-finite, malformed or out-of-bounds coordinates."""


class InvalidShapeError(ValueError):
    """Bad radius, length, angle or direction for a shape query."""


def as_point(value, name: str = "point") -> Point:
    """Accept a Point, an (x, y[, z]) sequence, or an {x, y[, z]} dict."""
    if isinstance(value, Point):
        return value
    if isinstance(value, dict):
        if "x" not in value or "y" not in value:
            raise InvalidPointError(f"Invalid {name}: missing x or y")
        return Point(x=value["x"], y=value["y"], z=value.get("z"))
    if isinstance(value, (tuple, list)) and len(value) in (2, 3):
        return Point(*value)
    raise InvalidPointError(f"Invalid {name}: cannot interpret {value!r}")


def _is_finite_number(v) -> bool:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    return math.isfinite(v)


def validate_point(
    p: Point, name: str = "point", bounds: Bounds | None = None
) -> None:
    """Raise InvalidPointError if ``p`` is non-finite or outside ``bounds``."""
    if not _is_finite_number(p.x) or not _is_finite_number(p.y):
        raise InvalidPointError(
            f"Invalid {name}: coordinates must be finite numbers "
            f"(got x={p.x}, y={p.y})"
        )
    if p.z is not None and not _is_finite_number(p.z):
        raise InvalidPointError(
            f"Invalid {name}: z-coordinate must be a finite number (got z={p.z})"
        )
    if bounds is not None and not bounds.contains(p):
        lo, hi = bounds.min, bounds.max
        raise InvalidPointError(
            f"Invalid {name}: out of bounds (got {p.x},{p.y}; "
            f"bounds: {lo.x},{lo.y} to {hi.x},{hi.y})"
        )


def checked_point(
    value, name: str = "point", bounds: Bounds | None = None
) -> Point:
    """``as_point`` followed by ``validate_point``."""
    p = as_point(value, name)
    validate_point(p, name, bounds)
    return p


def tile_key(p: Point) -> TileKey:
    return p.key


def _parse_number(s: str) -> int | float:
    s = s.strip()
    try:
        return int(s)
    except ValueError:
        return float(s)


def parse_key(key) -> TileKey:
    """Parse ``"x,y"`` / ``"x,y,z"`` (or pass through a tuple/list/Point)."""
    if isinstance(key, Point):
        return key.key
    if isinstance(key, str):
        parts = key.split(",")
        if len(parts) not in (2, 3):
            raise InvalidPointError(f"Invalid tile key: {key!r}")
        try:
            return tuple(_parse_number(part) for part in parts)
        except ValueError:
            raise InvalidPointError(f"Invalid tile key: {key!r}") from None
    if isinstance(key, (tuple, list)) and len(key) in (2, 3):
        return tuple(key)
    raise InvalidPointError(f"Invalid tile key: {key!r}")


def as_tile_set(tiles: Iterable | None) -> set[TileKey] | frozenset[TileKey]:
    """Normalize an obstacle collection to a set of tuple keys.

    A set that already holds only tuples is returned as-is (no copy).
    """
    if tiles is None:
        return frozenset()
    if isinstance(tiles, (set, frozenset)) and all(
        type(k) is tuple for k in tiles
    ):
        return tiles
    return {parse_key(k) for k in tiles}


def distance(
    p1, p2, metric: DistanceMetric = "euclidean"
) -> float:
    """Distance between two points; a missing z counts as 0.

    >>> distance((0, 0), (3, 4))
    5.0
    """
    a = checked_point(p1, "p1")
    b = checked_point(p2, "p2")
    return _distance(a, b, metric)


def _distance(a: Point, b: Point, metric: str = "euclidean") -> float:
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    dz = abs((a.z or 0) - (b.z or 0))
    if metric == "euclidean":
        return math.sqrt(dx * dx + dy * dy + dz * dz)
    if metric == "manhattan":
        return dx + dy + dz
    if metric == "chebyshev":
        return max(dx, dy, dz)
    raise ValueError(f"Unknown distance metric: {metric!r}")


def same_tile(a: Point, b: Point) -> bool:
    """Coordinate-wise equality treating a missing z as 0."""
    return a.x == b.x and a.y == b.y and (a.z or 0) == (b.z or 0)


_DELTAS_2D = [
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
]
_DELTAS_3D = [
    (dx, dy, dz)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    for dz in (-1, 0, 1)
    if (dx, dy, dz) != (0, 0, 0)
]


def neighbors(p: Point, three_d: bool = False) -> list[Point]:
    """The 8 (2D) or 26 (3D) adjacent tiles. In 3D a missing z is 0."""
    if three_d:
        z = p.z or 0
        return [
            Point(p.x + dx, p.y + dy, z + dz) for dx, dy, dz in _DELTAS_3D
        ]
    return [Point(p.x + dx, p.y + dy) for dx, dy in _DELTAS_2D]
