from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from recube.geometry.directions import FACE_ORDER, Direction
from recube.project.schema import CubeElement, FaceDescriptor, MeshElement, MeshFace, UVRect, point3
from recube.reconstruct.inverse import forward_transform


Point3 = Tuple[float, float, float]

# Corner order of a face in its plane axes: counter-clockwise from the minimum corner.
_CORNERS_2D = ((0, 0), (1, 0), (1, 1), (0, 1))
_DIAGONALS = {
    "02": ((0, 1, 2), (0, 2, 3)),
    "13": ((1, 2, 3), (1, 3, 0)),
}


def _flipped_rect(direction: Direction, bounds: UVRect) -> UVRect:
    min_u, min_v, max_u, max_v = bounds
    if direction.is_side:
        return (min_u, max_v, max_u, min_v)
    return (max_u, min_v, min_u, max_v)


def _face_uvs(rect: UVRect, rotation: int) -> List[Tuple[float, float]]:
    """Quad corner i gets UV corner (i + rotation / 90) mod 4 of (u1,v1), (u2,v1), (u2,v2), (u1,v2)."""
    u1, v1, u2, v2 = rect
    corners = [(u1, v1), (u2, v1), (u2, v2), (u1, v2)]
    steps = (int(rotation) // 90) % 4
    return corners[steps:] + corners[:steps]


def canonical_face(direction: Direction, bounds: UVRect = (0.0, 0.0, 16.0, 16.0), **kwargs) -> FaceDescriptor:
    """A face whose UV rectangle is already in the orientation exact recovery reports."""
    return FaceDescriptor(uv=_flipped_rect(direction, bounds), **kwargs)


def canonical_cube(
    from_: Sequence[float],
    to: Sequence[float],
    *,
    texture: Optional[str] = None,
    bounds: UVRect = (0.0, 0.0, 16.0, 16.0),
    **kwargs,
) -> CubeElement:
    faces = {d: canonical_face(d, bounds, texture=texture) for d in FACE_ORDER}
    return CubeElement(from_=point3(from_), to=point3(to), faces=faces, **kwargs)


def _corner_point(direction: Direction, lo: Point3, hi: Point3, ab: Tuple[int, int]) -> Point3:
    p = [0.0, 0.0, 0.0]
    p[direction.axis] = hi[direction.axis] if direction.use_max else lo[direction.axis]
    a_axis, b_axis = direction.plane_axes
    p[a_axis] = hi[a_axis] if ab[0] else lo[a_axis]
    p[b_axis] = hi[b_axis] if ab[1] else lo[b_axis]
    return (p[0], p[1], p[2])


def _corner_key(direction: Direction, point: Point3, lo: Point3, hi: Point3, shared: bool, n: int) -> str:
    if not shared:
        return f"{direction.value}_{n}"
    bits = "".join("1" if point[i] == hi[i] else "0" for i in range(3))
    return f"v{bits}"


def box_to_mesh(
    cube: CubeElement,
    *,
    diagonal: str = "02",
    flip_triangles: bool = False,
    shared_vertices: bool = False,
    as_quads: bool = False,
    name: Optional[str] = None,
) -> MeshElement:
    """
    Forward box -> mesh model: two triangles (or one quad) per face.

    Quad corner i receives UV corner (i + rotation / 90) mod 4 of the face
    rectangle, corners running counter-clockwise from the in-plane minimum.
    """
    if diagonal not in _DIAGONALS:
        raise ValueError(f"diagonal must be one of {sorted(_DIAGONALS)}")
    world_lo, world_hi = forward_transform(cube.from_, cube.to, cube.stretch, cube.inflate)
    o = cube.origin
    lo = (world_lo[0] - o[0], world_lo[1] - o[1], world_lo[2] - o[2])
    hi = (world_hi[0] - o[0], world_hi[1] - o[1], world_hi[2] - o[2])

    vertices: Dict[str, Point3] = {}
    faces: Dict[str, MeshFace] = {}
    for direction in FACE_ORDER:
        face = cube.faces[direction]
        keys: List[str] = []
        for n, ab in enumerate(_CORNERS_2D):
            p = _corner_point(direction, lo, hi, ab)
            key = _corner_key(direction, p, lo, hi, shared_vertices, n)
            vertices[key] = p
            keys.append(key)
        uvs = _face_uvs(face.uv, face.rotation)
        uv_map = {k: uv for k, uv in zip(keys, uvs)}

        if as_quads:
            order = list(reversed(keys)) if flip_triangles else keys
            faces[f"{direction.value}_q"] = MeshFace(vertices=order, uv=dict(uv_map), texture=face.texture)
            continue
        for suffix, tri in zip("ab", _DIAGONALS[diagonal]):
            tri_keys = [keys[i] for i in tri]
            if flip_triangles:
                tri_keys.reverse()
            faces[f"{direction.value}_{suffix}"] = MeshFace(
                vertices=tri_keys,
                uv={k: uv_map[k] for k in tri_keys},
                texture=face.texture,
            )

    return MeshElement(
        name=name or cube.name,
        color=cube.color,
        origin=cube.origin,
        rotation=cube.rotation,
        vertices=vertices,
        faces=faces,
        stretch=cube.stretch,
        inflate=cube.inflate,
    )
