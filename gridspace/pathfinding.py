"""A* pathfinding over an 8- or 26-connected integer grid.

``find_path`` answers "can I get from start to end, and by which tiles?"
against a caller-supplied obstacle set. It knows nothing about why a tile
is blocked; the rules layer decides that and passes the resulting keys in.

Search details:

  * **Connectivity**: 8 neighbours when neither endpoint has a z, 26 when
    either does (a missing z is treated as 0).
  * **Heuristic**: Chebyshev distance to the goal. Admissible as long as
    every step costs at least 1, which holds for all built-in diagonal
    policies and terrain multipliers >= 1.
  * **Edge cost**: ``move_cost(a, b) * terrain_multiplier(b)``. The move
    cost is the caller's ``movement_cost_fn`` if given, otherwise the
    ``diagonal_cost`` policy: ``'uniform'`` (every step 1), ``'alternating'``
    (1 orthogonal, 1.5 when more than one axis changes, the averaged
    5-10-5 tabletop rule), or a number used as the diagonal cost. A terrain
    multiplier of ``inf`` makes the tile untraversable.
  * **Open set**: ``heap.MinHeap`` ordered by f = g + h, ties in insertion
    order. Improved neighbours are re-inserted rather than updated in
    place; the closed set skips anything already settled.
  * **Budget**: the loop gives up after ``max_iterations`` extractions and
    returns ``None``. That is "no path within budget", not an error.

``None`` is the only "no path" signal: unreachable goal, blocked goal tile,
or exhausted budget. Invalid coordinates raise ``InvalidPointError`` before
any search work happens.

The public API is ``find_path`` plus ``path_cost`` (re-prices an existing
path with the same cost policy) and ``find_path_json`` for dict callers.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from typing import Callable

from .geometry import (
    _distance,
    as_point,
    as_tile_set,
    checked_point,
    neighbors,
    same_tile,
)
from .heap import MinHeap
from .smoothing import smooth_path
from .types import PathfindingOptions, Point, TileKey

logger = logging.getLogger(__name__)

ALTERNATING_DIAGONAL_COST = 1.5

CostFn = Callable[[Point, Point], float]


def movement_cost_fn(options: PathfindingOptions) -> CostFn:
    """Build the per-step base cost function for ``options``.

    Raises ValueError for an unknown policy name or a negative/non-finite
    numeric diagonal cost.
    """
    if options.movement_cost_fn is not None:
        return options.movement_cost_fn

    policy = options.diagonal_cost
    if policy == "uniform":
        return lambda a, b: 1.0
    if policy == "alternating":
        diagonal = ALTERNATING_DIAGONAL_COST
    elif isinstance(policy, (int, float)) and not isinstance(policy, bool):
        if not math.isfinite(policy) or policy < 0:
            raise ValueError(
                f"Invalid diagonal_cost: must be a non-negative finite number (got {policy})"
            )
        diagonal = float(policy)
    else:
        raise ValueError(f"Unknown diagonal_cost policy: {policy!r}")

    def cost(a: Point, b: Point) -> float:
        changed = (
            abs(b.x - a.x) + abs(b.y - a.y) + abs((b.z or 0) - (a.z or 0))
        )
        return diagonal if changed > 1 else 1.0

    return cost


def _terrain_multiplier(options: PathfindingOptions, p: Point) -> float:
    if options.terrain_costs is None:
        return 1.0
    return options.terrain_costs.cost_of(p)


def _reconstruct(
    came_from: dict[TileKey, Point], current: Point
) -> list[Point]:
    path = [current]
    while current.key in came_from:
        current = came_from[current.key]
        path.append(current)
    path.reverse()
    return path


def find_path(
    start,
    end,
    obstacles: Iterable,
    options: PathfindingOptions | None = None,
) -> list[Point] | None:
    """Shortest path from start to end (inclusive), or None.

    Returns ``[start]`` when start and end are the same tile and ``None``
    immediately when the end tile is itself an obstacle.
    """
    if options is None:
        options = PathfindingOptions()
    start_p = checked_point(start, "start", options.bounds)
    end_p = checked_point(end, "end", options.bounds)

    if same_tile(start_p, end_p):
        return [start_p]

    blocked = as_tile_set(obstacles)
    three_d = start_p.is_3d or end_p.is_3d
    if three_d:
        origin = Point(start_p.x, start_p.y, start_p.z or 0)
        goal = Point(end_p.x, end_p.y, end_p.z or 0)
    else:
        origin, goal = start_p, end_p

    if goal.key in blocked:
        return None

    step_cost = movement_cost_fn(options)
    max_iterations = options.max_iterations
    bounds = options.bounds

    open_heap: MinHeap[Point] = MinHeap(lambda p: p.key)
    closed: set[TileKey] = set()
    came_from: dict[TileKey, Point] = {}
    g_score: dict[TileKey, float] = {origin.key: 0.0}
    open_heap.insert(origin, _distance(origin, goal, "chebyshev"))

    iterations = 0
    while not open_heap.is_empty():
        iterations += 1
        if iterations > max_iterations:
            logger.debug(
                "find_path %s -> %s: gave up after %d iterations",
                start_p.key,
                end_p.key,
                max_iterations,
            )
            return None

        current = open_heap.extract_min()
        if same_tile(current, goal):
            path = _reconstruct(came_from, current)
            # Hand back the caller's own endpoints.
            path[0] = start_p
            path[-1] = end_p
            return path

        current_key = open_heap.key_of(current)
        if current_key in closed:
            continue  # stale re-inserted entry
        closed.add(current_key)
        current_g = g_score[current_key]

        for nb in neighbors(current, three_d):
            nb_key = nb.key
            if nb_key in blocked or nb_key in closed:
                continue
            if bounds is not None and not bounds.contains(nb):
                continue
            multiplier = _terrain_multiplier(options, nb)
            if multiplier == math.inf:
                continue
            tentative = current_g + step_cost(current, nb) * multiplier
            if tentative < g_score.get(nb_key, math.inf):
                came_from[nb_key] = current
                g_score[nb_key] = tentative
                open_heap.insert(
                    nb, tentative + _distance(nb, goal, "chebyshev")
                )

    logger.debug(
        "find_path %s -> %s: open set exhausted after %d iterations",
        start_p.key,
        end_p.key,
        iterations,
    )
    return None


def path_cost(
    path: Sequence, options: PathfindingOptions | None = None
) -> float:
    """Total cost of walking ``path`` under the same policy as find_path.

    0.0 for paths shorter than two tiles; ``inf`` if a step enters an
    impassable tile.
    """
    if options is None:
        options = PathfindingOptions()
    points = [checked_point(p, "path point") for p in path]
    step_cost = movement_cost_fn(options)
    total = 0.0
    for a, b in zip(points, points[1:]):
        multiplier = _terrain_multiplier(options, b)
        if multiplier == math.inf:
            return math.inf
        total += step_cost(a, b) * multiplier
    return total


def find_path_json(request: dict) -> dict:
    """JSON-dict in, JSON-dict out wrapper around find_path.

    Request keys: ``start``, ``end``, ``obstacles`` (``[x, y]`` lists or
    ``"x,y"`` strings), optional ``options`` and ``smooth``.
    """
    options = PathfindingOptions.from_dict(request.get("options"))
    obstacles = as_tile_set(request.get("obstacles", []))
    start = as_point(request.get("start"), "start")
    end = as_point(request.get("end"), "end")

    path = find_path(start, end, obstacles, options)
    if path is None:
        return {"path": None, "cost": None}

    result: dict = {
        "path": [p.to_dict() for p in path],
        "cost": path_cost(path, options),
    }
    if request.get("smooth"):
        result["smoothed"] = [
            p.to_dict() for p in smooth_path(path, obstacles)
        ]
    return result
