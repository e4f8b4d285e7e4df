"""Tests for shadowcasting field of view."""

import math
import random

import pytest

from gridspace.fov import field_of_view
from gridspace.geometry import InvalidShapeError
from gridspace.types import Point


def _disk(cx, cy, radius):
    r = math.ceil(radius)
    return {
        (cx + dx, cy + dy)
        for dx in range(-r, r + 1)
        for dy in range(-r, r + 1)
        if dx * dx + dy * dy <= radius * radius
    }


def _make_random_obstacles(seed, extent=8, density=0.2):
    rng = random.Random(seed)
    return {
        (x, y)
        for x in range(-extent, extent + 1)
        for y in range(-extent, extent + 1)
        if (x, y) != (0, 0) and rng.random() < density
    }


class TestFieldOfView:
    def test_origin_always_visible(self):
        visible = field_of_view((3, 4), 5, {(3, 4)})
        assert (3, 4) in visible

    def test_radius_zero(self):
        assert field_of_view((0, 0), 0, set()) == {(0, 0)}

    def test_open_ground_is_a_disk(self):
        assert field_of_view((0, 0), 6, set()) == _disk(0, 0, 6)

    def test_fractional_radius(self):
        assert field_of_view((2, -1), 2.5, set()) == _disk(2, -1, 2.5)

    def test_enclosing_ring(self):
        ring = {
            (dx, dy)
            for dx in (-1, 0, 1)
            for dy in (-1, 0, 1)
            if (dx, dy) != (0, 0)
        }
        assert field_of_view((0, 0), 10, ring) == ring | {(0, 0)}

    def test_wall_casts_shadow(self):
        visible = field_of_view((0, 0), 10, {(2, 0)})
        assert (1, 0) in visible
        assert (2, 0) in visible  # the wall itself is seen
        for x in range(3, 11):
            assert (x, 0) not in visible
        assert (0, 5) in visible
        assert (-5, 0) in visible

    def test_long_wall_hides_far_side(self):
        wall = {(3, y) for y in range(-10, 11)}
        visible = field_of_view((0, 0), 8, wall)
        assert not any(x > 3 for x, _ in visible)
        assert (3, 0) in visible

    def test_mirror_symmetry(self):
        obstacles = _make_random_obstacles(seed=7)
        visible = field_of_view((0, 0), 8, obstacles)
        mirrored = field_of_view((0, 0), 8, {(-x, y) for x, y in obstacles})
        assert mirrored == {(-x, y) for x, y in visible}

    def test_transpose_symmetry(self):
        obstacles = _make_random_obstacles(seed=11)
        visible = field_of_view((0, 0), 8, obstacles)
        transposed = field_of_view((0, 0), 8, {(y, x) for x, y in obstacles})
        assert transposed == {(y, x) for x, y in visible}

    def test_translation(self):
        obstacles = _make_random_obstacles(seed=3)
        visible = field_of_view((0, 0), 8, obstacles)
        shifted = field_of_view(
            (20, -5), 8, {(x + 20, y - 5) for x, y in obstacles}
        )
        assert shifted == {(x + 20, y - 5) for x, y in visible}

    def test_adjacent_tiles_visible_in_open(self):
        # Neighbours of the origin are never shadowed by anything but
        # themselves.
        obstacles = {(2, 2), (-2, 0), (0, -3)}
        visible = field_of_view((0, 0), 5, obstacles)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                assert (dx, dy) in visible

    def test_visible_subset_of_disk(self):
        obstacles = _make_random_obstacles(seed=5)
        assert field_of_view((0, 0), 6, obstacles) <= _disk(0, 0, 6)

    def test_3d_origin_keys(self):
        visible = field_of_view(Point(0, 0, 5), 2, set())
        assert all(len(k) == 3 and k[2] == 5 for k in visible)
        assert {k[:2] for k in visible} == _disk(0, 0, 2)

    def test_3d_obstacles_on_other_planes_ignored(self):
        visible = field_of_view(Point(0, 0, 5), 4, {(2, 0, 4), (2, 0)})
        assert (3, 0, 5) in visible

    def test_string_obstacles(self):
        visible = field_of_view((0, 0), 10, {"2,0"})
        assert (5, 0) not in visible


class TestFieldOfViewErrors:
    @pytest.mark.parametrize("radius", [-1, math.inf, math.nan, "3", True])
    def test_bad_radius(self, radius):
        with pytest.raises(InvalidShapeError, match="Invalid range"):
            field_of_view((0, 0), radius, set())

    def test_bad_origin(self):
        with pytest.raises(ValueError, match="Invalid origin"):
            field_of_view((math.nan, 0), 3, set())
