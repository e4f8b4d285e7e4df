"""Tests for ASCII and image snapshots."""

import json

from PIL import Image

from gridspace import render
from gridspace.render import OBSTACLE, make_snapshot, render_ascii, render_image
from gridspace.types import Bounds, Point


def _make_snapshot(visible=None):
    return make_snapshot(
        Bounds(min=Point(0, 0), max=Point(3, 1)),
        obstacles={(1, 1)},
        path=[(0, 0), (1, 0), (2, 0), (3, 1)],
        visible=visible,
    )


class TestMakeSnapshot:
    def test_json_shape(self):
        snap = _make_snapshot()
        assert snap["bounds"] == {"min": {"x": 0, "y": 0}, "max": {"x": 3, "y": 1}}
        assert snap["obstacles"] == [[1, 1]]
        assert snap["path"][0] == {"x": 0, "y": 0}
        assert "visible" not in snap

    def test_string_obstacles_and_visible(self):
        snap = make_snapshot(
            Bounds(min=Point(0, 0), max=Point(2, 2)),
            obstacles=["2,1", "0,1"],
            visible={(0, 0), (1, 0)},
        )
        assert snap["obstacles"] == [[0, 1], [2, 1]]
        assert snap["visible"] == [[0, 0], [1, 0]]
        assert "path" not in snap


class TestRenderAscii:
    def test_path_and_obstacles(self):
        assert render_ascii(_make_snapshot()) == "S**.\n.#.E"

    def test_unseen_tiles_blank(self):
        snap = _make_snapshot(visible={(0, 0), (1, 0)})
        assert render_ascii(snap) == "S** \n # E"

    def test_no_path(self):
        snap = make_snapshot(
            Bounds(min=Point(-1, -1), max=Point(1, -1)), obstacles={(0, -1)}
        )
        assert render_ascii(snap) == ".#."


class TestRenderImage:
    def test_image_size_and_obstacle_color(self):
        img = render_image(_make_snapshot(), cell_px=8)
        assert isinstance(img, Image.Image)
        assert img.size == (32, 16)
        assert img.getpixel((12, 12)) == OBSTACLE

    def test_snapshot_replays_from_json(self):
        snap = _make_snapshot(visible={(0, 0), (1, 0), (2, 0)})
        replayed = json.loads(json.dumps(snap))
        assert replayed == snap
        assert render_ascii(replayed) == render_ascii(snap)
        assert list(render_image(replayed).getdata()) == list(
            render_image(snap).getdata()
        )

    def test_caller_saves_the_image(self, tmp_path):
        out = tmp_path / "snap.png"
        render_image(_make_snapshot(), cell_px=4).save(out)
        with Image.open(out) as img:
            assert img.size == (16, 8)

    def test_no_file_io_in_module(self):
        assert not hasattr(render, "save_snapshot_png")
        assert not hasattr(render, "load_snapshot_png")
