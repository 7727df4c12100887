"""
Planar geometry primitives shared by the world snapshot and the AI.

Points and vectors are plain ``(x, y)`` tuples or numpy arrays; every helper
accepts either and returns numpy arrays (or floats) so callers can mix them.
"""

import math
from collections import namedtuple

import numpy as np


def as_point(point) -> np.ndarray:
    return np.asarray(point, dtype=float)[:2]


def to_tuple(point) -> tuple:
    """Convert an array-like point into a hashable ``(x, y)`` tuple of floats."""
    return (float(point[0]), float(point[1]))


def distance(a, b) -> float:
    return float(np.linalg.norm(as_point(a) - as_point(b)))


def normalize(vec, length: float = 1.0) -> np.ndarray:
    """
    Scale a vector to the given length.

    A zero-length vector has no direction, so it is returned unchanged instead
    of producing NaNs.
    """
    vec = as_point(vec)
    norm = np.linalg.norm(vec)
    if norm < 1e-9:
        return np.zeros(2)
    return vec / norm * length


def orientation(vec) -> float:
    """Angle of a vector in radians, measured from +x."""
    vec = as_point(vec)
    return float(math.atan2(vec[1], vec[0]))


def closest_point_on_segment(point, seg_start, seg_end) -> np.ndarray:
    point, seg_start, seg_end = as_point(point), as_point(seg_start), as_point(seg_end)
    seg = seg_end - seg_start
    seg_length_sq = float(np.dot(seg, seg))
    if seg_length_sq < 1e-12:
        return seg_start
    t = np.clip(np.dot(point - seg_start, seg) / seg_length_sq, 0.0, 1.0)
    return seg_start + t * seg


_RectangleBase = namedtuple("Rectangle", ["min_x", "min_y", "max_x", "max_y"])


class Rectangle(_RectangleBase):
    """Axis-aligned rectangle. Zero-area rectangles are valid but degenerate."""
    __slots__ = ()

    @classmethod
    def from_corners(cls, corner_1, corner_2) -> "Rectangle":
        """Build a rectangle from any two opposite corners."""
        (x1, y1), (x2, y2) = to_tuple(corner_1), to_tuple(corner_2)
        return cls(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))

    @property
    def x_length(self) -> float:
        return self.max_x - self.min_x

    @property
    def y_length(self) -> float:
        return self.max_y - self.min_y

    @property
    def area(self) -> float:
        return self.x_length * self.y_length

    @property
    def centre(self) -> tuple:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def is_degenerate(self) -> bool:
        return self.area <= 1e-9

    def contains(self, point) -> bool:
        x, y = to_tuple(point)
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def clamp(self, point) -> np.ndarray:
        x, y = to_tuple(point)
        return np.array([min(max(x, self.min_x), self.max_x),
                         min(max(y, self.min_y), self.max_y)])

    def distance_to(self, point) -> float:
        """Distance from a point to the rectangle, 0 when the point is inside."""
        return distance(point, self.clamp(point))

    def sample(self, rng: np.random.Generator, n: int) -> np.ndarray:
        """Draw ``n`` uniformly distributed points, shape ``(n, 2)``."""
        xs = rng.uniform(self.min_x, self.max_x, size=n)
        ys = rng.uniform(self.min_y, self.max_y, size=n)
        return np.column_stack([xs, ys])

    def grid(self, n: int) -> np.ndarray:
        """Evenly spaced ``n`` x ``n`` grid of points covering the rectangle."""
        xs = np.linspace(self.min_x, self.max_x, n)
        ys = np.linspace(self.min_y, self.max_y, n)
        return np.array([(x, y) for x in xs for y in ys])
