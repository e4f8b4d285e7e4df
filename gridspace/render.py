"""Debug snapshots of a grid query: ASCII text or a Pillow image.

A snapshot is a JSON-ready dict describing one query's inputs and outputs
(bounds, obstacles, an optional path and an optional visible set). It can be
rendered as ASCII for test failures and logs, or drawn with Pillow. The
library never writes files: callers save the returned image themselves and
keep the snapshot dict (it is plain JSON) if they want to replay the query.

Only the x/y plane is drawn; z is ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from PIL import Image, ImageDraw

from .geometry import as_point, as_tile_set
from .types import Bounds, Point

BACKGROUND = (24, 24, 28)
UNSEEN = (40, 40, 46)
VISIBLE = (92, 92, 70)
GRID_LINE = (60, 60, 66)
OBSTACLE = (150, 150, 160)
PATH = (220, 80, 60)
ENDPOINT = (240, 200, 60)


def make_snapshot(
    bounds: Bounds,
    obstacles: Iterable = (),
    path: Sequence | None = None,
    visible: Iterable | None = None,
) -> dict:
    """Build a JSON-ready snapshot dict."""
    snap: dict = {
        "bounds": bounds.to_dict(),
        "obstacles": sorted(list(k) for k in as_tile_set(obstacles)),
    }
    if path is not None:
        snap["path"] = [as_point(p).to_dict() for p in path]
    if visible is not None:
        snap["visible"] = sorted(list(k) for k in as_tile_set(visible))
    return snap


def _unpack(snapshot: dict):
    bounds = Bounds.from_dict(snapshot["bounds"])
    obstacles = {(k[0], k[1]) for k in snapshot.get("obstacles", [])}
    path = [Point.from_dict(p) for p in snapshot.get("path", [])]
    visible = None
    if "visible" in snapshot:
        visible = {(k[0], k[1]) for k in snapshot["visible"]}
    return bounds, obstacles, path, visible


def render_ascii(snapshot: dict) -> str:
    """One text row per y (ascending), one character per x.

    ``#`` obstacle, ``S``/``E`` path endpoints, ``*`` path, ``.`` visible,
    space for tiles outside a supplied visible set. Without a visible set
    every open tile renders as ``.``.
    """
    bounds, obstacles, path, visible = _unpack(snapshot)
    path_tiles = {(p.x, p.y) for p in path}
    start = (path[0].x, path[0].y) if path else None
    end = (path[-1].x, path[-1].y) if path else None

    rows = []
    for y in range(bounds.min.y, bounds.max.y + 1):
        chars = []
        for x in range(bounds.min.x, bounds.max.x + 1):
            t = (x, y)
            if t == start:
                chars.append("S")
            elif t == end:
                chars.append("E")
            elif t in obstacles:
                chars.append("#")
            elif t in path_tiles:
                chars.append("*")
            elif visible is None or t in visible:
                chars.append(".")
            else:
                chars.append(" ")
        rows.append("".join(chars))
    return "\n".join(rows)


def render_image(snapshot: dict, cell_px: int = 16) -> Image.Image:
    bounds, obstacles, path, visible = _unpack(snapshot)
    cols = bounds.max.x - bounds.min.x + 1
    rows = bounds.max.y - bounds.min.y + 1
    w = cols * cell_px
    h = rows * cell_px

    img = Image.new("RGB", (w, h), BACKGROUND)
    draw = ImageDraw.Draw(img)

    def cell_box(x, y):
        px = (x - bounds.min.x) * cell_px
        py = (y - bounds.min.y) * cell_px
        return [px, py, px + cell_px - 1, py + cell_px - 1]

    def cell_center(x, y):
        return (
            (x - bounds.min.x) * cell_px + cell_px // 2,
            (y - bounds.min.y) * cell_px + cell_px // 2,
        )

    # 1. Visibility shading
    for y in range(bounds.min.y, bounds.max.y + 1):
        for x in range(bounds.min.x, bounds.max.x + 1):
            lit = visible is None or (x, y) in visible
            draw.rectangle(cell_box(x, y), fill=VISIBLE if lit else UNSEEN)

    # 2. Obstacles
    for x, y in obstacles:
        if bounds.contains(Point(x, y)):
            draw.rectangle(cell_box(x, y), fill=OBSTACLE)

    # 3. Grid lines
    for ix in range(1, cols):
        draw.line([(ix * cell_px, 0), (ix * cell_px, h - 1)], fill=GRID_LINE)
    for iy in range(1, rows):
        draw.line([(0, iy * cell_px), (w - 1, iy * cell_px)], fill=GRID_LINE)

    # 4. Path polyline and endpoints
    if path:
        centers = [cell_center(p.x, p.y) for p in path]
        if len(centers) > 1:
            draw.line(centers, fill=PATH, width=max(1, cell_px // 5))
        r = max(2, cell_px // 4)
        for cx, cy in (centers[0], centers[-1]):
            draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=ENDPOINT)

    return img

