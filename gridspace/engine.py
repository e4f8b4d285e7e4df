"""Object-style facade over the spatial engine.

The rules layer typically holds one ``SpatialEngine`` per encounter and asks
it geometric questions: distances, reachability, sight, and AoE coverage.
The only state an engine carries is its own ``CircleCache``, so two engines
never share memoized circles. Pass ``use_cache=False`` to ``circle_tiles``
when the instance is used from several threads without external locking
and lock contention matters.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .fov import field_of_view
from .geometry import distance
from .line import has_line_of_sight, trace_line
from .pathfinding import find_path, path_cost
from .shapes import CircleCache, circle_tiles, cone_tiles
from .smoothing import smooth_path
from .types import DistanceMetric, PathfindingOptions, Point, TileKey


class SpatialEngine:
    def __init__(self, circle_cache: CircleCache | None = None) -> None:
        self.circle_cache = (
            circle_cache if circle_cache is not None else CircleCache()
        )

    def distance(
        self, p1, p2, metric: DistanceMetric = "euclidean"
    ) -> float:
        return distance(p1, p2, metric)

    def circle_tiles(
        self, center, radius: float, use_cache: bool = True
    ) -> list[Point]:
        return circle_tiles(
            center, radius, use_cache=use_cache, cache=self.circle_cache
        )

    def cone_tiles(
        self, origin, direction, length: float, angle_degrees: float
    ) -> list[Point]:
        return cone_tiles(origin, direction, length, angle_degrees)

    def line_tiles(self, start, end) -> list[Point]:
        return trace_line(start, end)

    def find_path(
        self,
        start,
        end,
        obstacles: Iterable,
        options: PathfindingOptions | None = None,
    ) -> list[Point] | None:
        return find_path(start, end, obstacles, options)

    def path_cost(
        self, path: Sequence, options: PathfindingOptions | None = None
    ) -> float:
        return path_cost(path, options)

    def smooth_path(self, path: Sequence, obstacles: Iterable) -> list[Point]:
        return smooth_path(path, obstacles)

    def has_line_of_sight(self, start, end, obstacles: Iterable) -> bool:
        return has_line_of_sight(start, end, obstacles)

    def field_of_view(
        self, origin, radius: float, obstacles: Iterable
    ) -> set[TileKey]:
        return field_of_view(origin, radius, obstacles)
