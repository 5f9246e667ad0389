from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from recube.errors import FaceConsistencyWarning
from recube.geometry.directions import Direction
from recube.geometry.tolerance import EPS_PLANE
from recube.geometry.vectors import Vec2, cross2d, project2d
from recube.project.schema import UV
from recube.reconstruct.classify import ClassifiedTriangle
from recube.reconstruct.report import ReconstructionReport, emit


@dataclass(frozen=True)
class MergedQuad:
    """
    Two triangles of one box face fused into a quadrilateral.

    keys run counter-clockwise in the face's plane axes and start at the
    corner with the smallest in-plane coordinates.
    """

    direction: Direction
    keys: Tuple[str, str, str, str]
    uv: Dict[str, UV]
    texture: Optional[str]

    def uv_sequence(self) -> List[UV]:
        return [self.uv[k] for k in self.keys]


def select_dominant(candidates: Sequence[ClassifiedTriangle], limit: int = 2) -> List[ClassifiedTriangle]:
    return sorted(candidates, key=lambda t: t.area, reverse=True)[:limit]


def shared_keys(a: ClassifiedTriangle, b: ClassifiedTriangle) -> List[str]:
    return [k for k in a.keys if k in b.keys]


def _start_index(points: Sequence[Vec2], eps: float) -> int:
    min_a = min(p[0] for p in points)
    # Never wider than half the face, so thin faces still split into two columns.
    tol = min(eps, (max(p[0] for p in points) - min_a) / 2.0)
    left = [i for i, p in enumerate(points) if p[0] - min_a <= tol]
    return min(left, key=lambda i: points[i][1])


def merge_pair(
    first: ClassifiedTriangle,
    second: ClassifiedTriangle,
    vertices: Mapping[str, Sequence[float]],
    direction: Direction,
    *,
    plane_eps: float = EPS_PLANE,
    report: Optional[ReconstructionReport] = None,
) -> Optional[MergedQuad]:
    shared = shared_keys(first, second)
    if len(shared) != 2:
        return None
    lone = [k for k in first.keys if k not in shared][0]
    opposite = [k for k in second.keys if k not in shared][0]

    # Lead with the first triangle's own winding, starting at its lone corner.
    i = first.keys.index(lone)
    v0, v1, v2 = first.keys[i], first.keys[(i + 1) % 3], first.keys[(i + 2) % 3]
    v3 = opposite
    axes = direction.plane_axes
    pts = {k: project2d(vertices[k], axes) for k in (v0, v1, v2, v3)}
    if cross2d(pts[v0], pts[v1], pts[v2]) < 0.0:
        v0, v1, v2, v3 = v0, v2, v1, v3

    cycle = [v0, v1, v3, v2]
    start = _start_index([pts[k] for k in cycle], plane_eps)
    cycle = cycle[start:] + cycle[:start]

    uv: Dict[str, UV] = dict(second.uvs())
    uv.update(first.uvs())

    texture = first.texture
    if second.texture != first.texture:
        emit(
            report,
            FaceConsistencyWarning,
            f"{direction.value} face triangles reference different textures "
            f"({first.texture!r} vs {second.texture!r}); keeping {first.texture!r}",
        )
    return MergedQuad(
        direction=direction,
        keys=(cycle[0], cycle[1], cycle[2], cycle[3]),
        uv=uv,
        texture=texture,
    )
