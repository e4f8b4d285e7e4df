"""Data types shared by the spatial engine.

Points, bounds and pathfinding options are plain per-call values owned by
the caller. ``from_dict`` / ``to_dict`` mirror the JSON shapes used by
``pathfinding.find_path_json`` and ``render.make_snapshot``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Protocol, Union

TileKey = tuple[int, ...]  # (x, y) or (x, y, z)

DEFAULT_MAX_ITERATIONS = 10000

DistanceMetric = Literal["euclidean", "manhattan", "chebyshev"]

# Named policy, or an explicit diagonal step cost.
DiagonalCost = Union[Literal["uniform", "alternating"], float]


@dataclass(frozen=True)
class Point:
    x: int
    y: int
    z: int | None = None

    @property
    def is_3d(self) -> bool:
        return self.z is not None

    @property
    def key(self) -> TileKey:
        if self.z is None:
            return (self.x, self.y)
        return (self.x, self.y, self.z)

    @staticmethod
    def from_dict(d: dict) -> Point:
        return Point(x=d["x"], y=d["y"], z=d.get("z"))

    def to_dict(self) -> dict:
        d: dict = {"x": self.x, "y": self.y}
        if self.z is not None:
            d["z"] = self.z
        return d


@dataclass(frozen=True)
class Bounds:
    """Inclusive grid extents.

    The z axis is only checked when both ``min`` and ``max`` carry a z and
    the tested point has one.
    """

    min: Point
    max: Point

    def contains(self, p: Point) -> bool:
        if not (
            self.min.x <= p.x <= self.max.x and self.min.y <= p.y <= self.max.y
        ):
            return False
        if (
            p.z is not None
            and self.min.z is not None
            and self.max.z is not None
        ):
            return self.min.z <= p.z <= self.max.z
        return True

    @staticmethod
    def from_dict(d: dict) -> Bounds:
        return Bounds(
            min=Point.from_dict(d["min"]),
            max=Point.from_dict(d["max"]),
        )

    def to_dict(self) -> dict:
        return {"min": self.min.to_dict(), "max": self.max.to_dict()}


class TerrainCostMap(Protocol):
    def cost_of(self, point: Point) -> float:
        """Movement multiplier for entering ``point``.

        1 = normal, 2 = difficult, ``math.inf`` = impassable.
        """
        ...


@dataclass
class DictTerrainCosts:
    """TerrainCostMap backed by a tile-key -> multiplier dict."""

    costs: dict[TileKey, float] = field(default_factory=dict)
    default: float = 1.0

    def cost_of(self, point: Point) -> float:
        return self.costs.get(point.key, self.default)

    @staticmethod
    def from_dict(d: dict) -> DictTerrainCosts:
        # Imported here: geometry imports this module.
        from .geometry import parse_key

        return DictTerrainCosts(
            costs={parse_key(k): float(v) for k, v in d.items()}
        )


@dataclass
class PathfindingOptions:
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    diagonal_cost: DiagonalCost = "uniform"
    movement_cost_fn: Callable[[Point, Point], float] | None = None
    terrain_costs: TerrainCostMap | None = None
    bounds: Bounds | None = None

    @staticmethod
    def from_dict(d: dict | None) -> PathfindingOptions:
        if not d:
            return PathfindingOptions()
        tc = d.get("terrain_costs")
        b = d.get("bounds")
        return PathfindingOptions(
            max_iterations=d.get("max_iterations", DEFAULT_MAX_ITERATIONS),
            diagonal_cost=d.get("diagonal_cost", "uniform"),
            terrain_costs=DictTerrainCosts.from_dict(tc) if tc else None,
            bounds=Bounds.from_dict(b) if b else None,
        )
