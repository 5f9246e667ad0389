from __future__ import annotations

import math
from typing import Sequence, Tuple

from recube.geometry.tolerance import EPS_PLANE


Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]


def approx_equal(a: float, b: float, eps: float = EPS_PLANE) -> bool:
    return abs(float(a) - float(b)) < eps


def points_approx_equal(a: Sequence[float], b: Sequence[float], eps: float = EPS_PLANE) -> bool:
    if len(a) != len(b):
        return False
    return all(approx_equal(x, y, eps) for x, y in zip(a, b))


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (float(a[0] - b[0]), float(a[1] - b[1]), float(a[2] - b[2]))


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        float(a[1] * b[2] - a[2] * b[1]),
        float(a[2] * b[0] - a[0] * b[2]),
        float(a[0] * b[1] - a[1] * b[0]),
    )


def triangle_area(p1: Sequence[float], p2: Sequence[float], p3: Sequence[float]) -> float:
    """Area of a 3D triangle; 0.0 for collinear points."""
    cx, cy, cz = _cross(_sub(p2, p1), _sub(p3, p1))
    return 0.5 * math.sqrt(cx * cx + cy * cy + cz * cz)


def cross2d(o: Vec2, a: Vec2, b: Vec2) -> float:
    """z component of (a - o) x (b - o); positive when o, a, b turn counter-clockwise."""
    return float((a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0]))


def project2d(p: Sequence[float], axes: Tuple[int, int]) -> Vec2:
    return (float(p[axes[0]]), float(p[axes[1]]))
