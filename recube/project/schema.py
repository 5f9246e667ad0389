from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from recube.geometry.directions import FACE_ORDER, Direction


Point3 = Tuple[float, float, float]
UV = Tuple[float, float]
UVRect = Tuple[float, float, float, float]

DEFAULT_UV: UVRect = (0.0, 0.0, 16.0, 16.0)
VALID_FACE_ROTATIONS = (0, 90, 180, 270)


def new_id() -> str:
    return str(uuid.uuid4())


def point3(value: Any) -> Point3:
    return (float(value[0]), float(value[1]), float(value[2]))


@dataclass(frozen=True)
class Triangle:
    """One mesh triangle: vertex keys, per-key UVs and an optional texture reference."""

    vertices: Tuple[str, ...]
    uv: Dict[str, UV] = field(default_factory=dict)
    texture: Optional[str] = None
    face_key: Optional[str] = None

    def unique_vertices(self) -> Tuple[str, ...]:
        seen: List[str] = []
        for k in self.vertices:
            if k not in seen:
                seen.append(k)
        return tuple(seen)


@dataclass
class MeshFace:
    vertices: List[str]
    uv: Dict[str, UV] = field(default_factory=dict)
    texture: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vertices": list(self.vertices),
            "uv": {k: [float(v[0]), float(v[1])] for k, v in self.uv.items()},
            "texture": self.texture,
        }


@dataclass
class MeshElement:
    vertices: Dict[str, Point3]
    faces: Dict[str, MeshFace]
    id: str = field(default_factory=new_id)
    name: str = "mesh"
    color: int = 0
    origin: Point3 = (0.0, 0.0, 0.0)
    rotation: Point3 = (0.0, 0.0, 0.0)
    stretch: Optional[Point3] = None
    inflate: float = 0.0

    type = "mesh"

    def triangles(self) -> List[Triangle]:
        out: List[Triangle] = []
        for fkey, face in self.faces.items():
            keys = list(face.vertices)
            uv = {k: (float(v[0]), float(v[1])) for k, v in face.uv.items()}
            if len(keys) <= 3:
                out.append(Triangle(vertices=tuple(keys), uv=uv, texture=face.texture, face_key=fkey))
                continue
            # Fan split for quads and larger convex polygons.
            for i in range(1, len(keys) - 1):
                tri = (keys[0], keys[i], keys[i + 1])
                out.append(
                    Triangle(
                        vertices=tri,
                        uv={k: uv[k] for k in tri if k in uv},
                        texture=face.texture,
                        face_key=fkey,
                    )
                )
        return out

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "type": self.type,
            "uuid": self.id,
            "name": self.name,
            "color": int(self.color),
            "origin": list(self.origin),
            "rotation": list(self.rotation),
            "vertices": {k: list(v) for k, v in self.vertices.items()},
            "faces": {k: f.to_dict() for k, f in self.faces.items()},
        }
        if self.stretch is not None:
            out["stretch"] = list(self.stretch)
        if self.inflate:
            out["inflate"] = float(self.inflate)
        return out


@dataclass
class FaceDescriptor:
    uv: UVRect = DEFAULT_UV
    texture: Optional[str] = None
    rotation: int = 0

    def __post_init__(self) -> None:
        if int(self.rotation) not in VALID_FACE_ROTATIONS:
            raise ValueError(f"Face rotation must be one of {VALID_FACE_ROTATIONS}, got {self.rotation}")

    def uv_bounds(self) -> UVRect:
        """The UV rectangle as (minU, minV, maxU, maxV), ignoring mirroring."""
        u1, v1, u2, v2 = self.uv
        return (min(u1, u2), min(v1, v2), max(u1, u2), max(v1, v2))

    def to_dict(self) -> Dict[str, Any]:
        return {"uv": [float(x) for x in self.uv], "texture": self.texture, "rotation": int(self.rotation)}


def default_faces() -> Dict[Direction, FaceDescriptor]:
    return {d: FaceDescriptor() for d in FACE_ORDER}


@dataclass
class CubeElement:
    """A box primitive; the reconstruction output (box descriptor)."""

    from_: Point3
    to: Point3
    id: str = field(default_factory=new_id)
    name: str = "cube"
    color: int = 0
    origin: Point3 = (0.0, 0.0, 0.0)
    rotation: Point3 = (0.0, 0.0, 0.0)
    faces: Dict[Direction, FaceDescriptor] = field(default_factory=default_faces)
    inflate: float = 0.0
    stretch: Optional[Point3] = None
    box_uv: bool = False
    autouv: int = 0

    type = "cube"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "type": self.type,
            "uuid": self.id,
            "name": self.name,
            "color": int(self.color),
            "origin": list(self.origin),
            "rotation": list(self.rotation),
            "from": list(self.from_),
            "to": list(self.to),
            "box_uv": bool(self.box_uv),
            "autouv": int(self.autouv),
            "faces": {d.value: self.faces[d].to_dict() for d in FACE_ORDER if d in self.faces},
        }
        if self.inflate:
            out["inflate"] = float(self.inflate)
        if self.stretch is not None:
            out["stretch"] = list(self.stretch)
        return out


@dataclass
class RawElement:
    """An element kind this package does not interpret; kept verbatim."""

    data: Dict[str, Any]
    id: str = field(default_factory=new_id)

    @property
    def type(self) -> str:
        return str(self.data.get("type", "unknown"))

    def to_dict(self) -> Dict[str, Any]:
        out = dict(self.data)
        out["uuid"] = self.id
        return out


BoxDescriptor = CubeElement
Element = Union[MeshElement, CubeElement, RawElement]


@dataclass
class Model:
    name: str = "model"
    elements: List[Element] = field(default_factory=list)
    history: List[Dict[str, Any]] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    def index_of(self, element_id: str) -> int:
        for i, e in enumerate(self.elements):
            if e.id == element_id:
                return i
        raise KeyError(f"Element {element_id} does not exist.")

    def get(self, element_id: str) -> Element:
        return self.elements[self.index_of(element_id)]

    def meshes(self) -> List[MeshElement]:
        return [e for e in self.elements if isinstance(e, MeshElement)]

    def cubes(self) -> List[CubeElement]:
        return [e for e in self.elements if isinstance(e, CubeElement)]

    def insert_before(self, anchor_id: str, element: Element) -> None:
        self.elements.insert(self.index_of(anchor_id), element)

    def remove(self, element_id: str) -> Element:
        return self.elements.pop(self.index_of(element_id))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta": dict(self.meta),
            "name": self.name,
            "elements": [e.to_dict() for e in self.elements],
            "history": list(self.history),
        }
