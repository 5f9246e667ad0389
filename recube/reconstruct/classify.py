from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from recube.geometry.bounds import BoundingBox
from recube.geometry.directions import CLASSIFY_ORDER, FACE_ORDER, Direction
from recube.geometry.tolerance import EPS_AREA, EPS_PLANE
from recube.geometry.vectors import approx_equal, triangle_area
from recube.project.schema import UV, Triangle


Point3 = Tuple[float, float, float]


@dataclass(frozen=True)
class ClassifiedTriangle:
    triangle: Triangle
    keys: Tuple[str, str, str]
    area: float

    @property
    def texture(self) -> Optional[str]:
        return self.triangle.texture

    def uvs(self) -> Dict[str, UV]:
        return {k: self.triangle.uv[k] for k in self.keys}

    def has_full_uv(self) -> bool:
        return all(k in self.triangle.uv for k in self.keys)


@dataclass
class FaceTriangleGroup:
    direction: Direction
    triangles: List[ClassifiedTriangle] = field(default_factory=list)
    uv_candidates: List[ClassifiedTriangle] = field(default_factory=list)


@dataclass
class Classification:
    groups: Dict[Direction, FaceTriangleGroup]
    unclassified: List[Triangle] = field(default_factory=list)
    degenerate: List[Triangle] = field(default_factory=list)

    @property
    def classified_count(self) -> int:
        return sum(len(g.triangles) for g in self.groups.values())


def on_plane(coords: Sequence[Sequence[float]], bounds: BoundingBox, direction: Direction, eps: float = EPS_PLANE) -> bool:
    target = bounds.extremum(direction.axis, direction.use_max)
    return all(approx_equal(c[direction.axis], target, eps) for c in coords)


def detect_direction(
    coords: Sequence[Sequence[float]],
    bounds: BoundingBox,
    eps: float = EPS_PLANE,
) -> Optional[Direction]:
    for direction in CLASSIFY_ORDER:
        if on_plane(coords, bounds, direction, eps):
            return direction
    return None


def classify_triangles(
    triangles: Sequence[Triangle],
    vertices: Mapping[str, Sequence[float]],
    bounds: BoundingBox,
    *,
    plane_eps: float = EPS_PLANE,
    area_eps: float = EPS_AREA,
) -> Classification:
    """
    Sort mesh triangles into the six box faces.

    Group membership only depends on plane tests; the area filter and UV
    completeness decide which members may later supply UV data.
    """
    out = Classification(groups={d: FaceTriangleGroup(direction=d) for d in FACE_ORDER})
    for tri in triangles:
        keys = [k for k in tri.unique_vertices() if k in vertices]
        if len(keys) < 3:
            out.degenerate.append(tri)
            continue
        coords = [vertices[k] for k in keys]
        direction = detect_direction(coords, bounds, plane_eps)
        if direction is None:
            out.unclassified.append(tri)
            continue
        area = triangle_area(coords[0], coords[1], coords[2])
        item = ClassifiedTriangle(triangle=tri, keys=(keys[0], keys[1], keys[2]), area=area)
        group = out.groups[direction]
        group.triangles.append(item)
        if area > area_eps and item.has_full_uv():
            group.uv_candidates.append(item)
    return out
