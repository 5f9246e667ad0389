from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from recube.geometry.directions import Direction
from recube.geometry.tolerance import EPS_UV
from recube.geometry.vectors import points_approx_equal
from recube.project.schema import DEFAULT_UV, UV, FaceDescriptor, UVRect
from recube.reconstruct.classify import ClassifiedTriangle
from recube.reconstruct.merge import MergedQuad, select_dominant


def uv_bounds(points: Iterable[Sequence[float]]) -> UVRect:
    pts = [(float(p[0]), float(p[1])) for p in points]
    if not pts:
        raise ValueError("uv_bounds requires at least one UV point")
    us = [p[0] for p in pts]
    vs = [p[1] for p in pts]
    return (min(us), min(vs), max(us), max(vs))


def simplified_rect(direction: Direction, bounds: UVRect) -> UVRect:
    """Legacy reordering: V inverted on the four side faces, unchanged on up/down."""
    min_u, min_v, max_u, max_v = bounds
    if direction.is_side:
        return (min_u, max_v, max_u, min_v)
    return (min_u, min_v, max_u, max_v)


def canonical_rect(direction: Direction, bounds: UVRect) -> UVRect:
    """Fixed axis flip: U mirrored on up/down, V mirrored on the side faces."""
    min_u, min_v, max_u, max_v = bounds
    if direction.is_side:
        return (min_u, max_v, max_u, min_v)
    return (max_u, min_v, min_u, max_v)


def rect_corners(rect: UVRect) -> List[UV]:
    """Corners in reading order (u1, v1), (u2, v1), (u2, v2), (u1, v2)."""
    u1, v1, u2, v2 = rect
    return [(u1, v1), (u2, v1), (u2, v2), (u1, v2)]


def rotate_corners(corners: Sequence[UV], steps: int) -> List[UV]:
    n = len(corners)
    return [corners[(i + steps) % n] for i in range(n)]


def find_rotation(canonical: Sequence[UV], observed: Sequence[UV], eps: float = EPS_UV) -> Optional[int]:
    """
    Number of 90 degree steps that maps the canonical corners onto the observed
    per-vertex UVs, or None when no step aligns them.
    """
    if len(canonical) != 4 or len(observed) != 4:
        raise ValueError("rotation search needs exactly 4 corners on both sides")
    for steps in range(4):
        rotated = rotate_corners(canonical, steps)
        if all(points_approx_equal(a, b, eps) for a, b in zip(rotated, observed)):
            return steps
    return None


def steps_to_degrees(steps: int) -> int:
    return (int(steps) * 90) % 360


def simplified_face(direction: Direction, candidates: Sequence[ClassifiedTriangle]) -> FaceDescriptor:
    top = select_dominant(candidates)
    points: List[UV] = []
    texture = None
    for tri in top:
        points.extend(tri.uvs().values())
        if texture is None:
            texture = tri.texture
    if len(points) < 3:
        return FaceDescriptor(uv=DEFAULT_UV, texture=texture, rotation=0)
    return FaceDescriptor(uv=simplified_rect(direction, uv_bounds(points)), texture=texture, rotation=0)


def exact_face(quad: MergedQuad, eps: float = EPS_UV) -> Tuple[FaceDescriptor, Optional[int]]:
    """Face descriptor from a merged quad plus the matched rotation steps (None on a miss)."""
    observed = quad.uv_sequence()
    rect = canonical_rect(quad.direction, uv_bounds(observed))
    steps = find_rotation(rect_corners(rect), observed, eps)
    rotation = steps_to_degrees(steps) if steps is not None else 0
    return FaceDescriptor(uv=rect, texture=quad.texture, rotation=rotation), steps
