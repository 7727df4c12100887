import math

import numpy as np
import pytest

from world.geometry import (Rectangle, closest_point_on_segment, distance, normalize,
                            orientation)


def test_rectangle_from_any_two_opposite_corners():
    rect = Rectangle.from_corners((3.0, -1.0), (1.0, 2.0))
    assert rect == Rectangle(1.0, -1.0, 3.0, 2.0)
    assert rect.x_length == 2.0
    assert rect.y_length == 3.0
    assert rect.area == 6.0
    assert rect.centre == (2.0, 0.5)


def test_rectangle_contains_and_distance():
    rect = Rectangle(0.0, 0.0, 2.0, 1.0)
    assert rect.contains((1.0, 0.5))
    assert rect.contains((2.0, 1.0))
    assert not rect.contains((2.5, 0.5))
    assert rect.distance_to((1.0, 0.5)) == 0.0
    assert rect.distance_to((3.0, 0.5)) == pytest.approx(1.0)
    assert rect.distance_to((3.0, 2.0)) == pytest.approx(math.sqrt(2.0))


def test_zero_area_rectangle_is_degenerate():
    assert Rectangle.from_corners((1.0, 1.0), (1.0, 3.0)).is_degenerate()
    assert not Rectangle(0.0, 0.0, 0.1, 0.1).is_degenerate()


def test_sample_and_grid_stay_inside():
    rect = Rectangle(1.0, -2.0, 2.0, 0.0)
    points = rect.sample(np.random.default_rng(3), 50)
    assert points.shape == (50, 2)
    assert all(rect.contains(point) for point in points)

    grid = rect.grid(5)
    assert grid.shape == (25, 2)
    assert all(rect.contains(point) for point in grid)


def test_normalize():
    assert np.allclose(normalize((3.0, 4.0)), (0.6, 0.8))
    assert np.allclose(normalize((3.0, 4.0), 10.0), (6.0, 8.0))
    assert np.allclose(normalize((0.0, 0.0)), (0.0, 0.0))


def test_orientation_and_distance():
    assert orientation((0.0, 1.0)) == pytest.approx(math.pi / 2)
    assert orientation((-1.0, 0.0)) == pytest.approx(math.pi)
    assert distance((0.0, 0.0), (3.0, 4.0)) == pytest.approx(5.0)


def test_closest_point_on_segment():
    assert np.allclose(closest_point_on_segment((1.0, 1.0), (0.0, 0.0), (2.0, 0.0)), (1.0, 0.0))
    assert np.allclose(closest_point_on_segment((-1.0, 1.0), (0.0, 0.0), (2.0, 0.0)), (0.0, 0.0))
    assert np.allclose(closest_point_on_segment((5.0, 1.0), (0.0, 0.0), (2.0, 0.0)), (2.0, 0.0))
    # zero-length segment
    assert np.allclose(closest_point_on_segment((5.0, 1.0), (1.0, 1.0), (1.0, 1.0)), (1.0, 1.0))
