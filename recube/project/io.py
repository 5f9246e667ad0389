from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from recube.geometry.directions import parse_direction
from recube.project.schema import (
    CubeElement,
    Element,
    FaceDescriptor,
    MeshElement,
    MeshFace,
    Model,
    RawElement,
    default_faces,
    new_id,
    point3,
)


def _optional_point3(value: Any) -> Optional[tuple]:
    if value is None:
        return None
    return point3(value)


def _mesh_face_from_dict(d: Dict[str, Any]) -> MeshFace:
    return MeshFace(
        vertices=[str(k) for k in d.get("vertices", [])],
        uv={str(k): (float(v[0]), float(v[1])) for k, v in (d.get("uv") or {}).items()},
        texture=d.get("texture"),
    )


def _mesh_from_dict(d: Dict[str, Any]) -> MeshElement:
    return MeshElement(
        id=str(d.get("uuid") or new_id()),
        name=str(d.get("name", "mesh")),
        color=int(d.get("color", 0)),
        origin=point3(d.get("origin", (0.0, 0.0, 0.0))),
        rotation=point3(d.get("rotation", (0.0, 0.0, 0.0))),
        vertices={str(k): point3(v) for k, v in (d.get("vertices") or {}).items()},
        faces={str(k): _mesh_face_from_dict(f) for k, f in (d.get("faces") or {}).items()},
        stretch=_optional_point3(d.get("stretch")),
        inflate=float(d.get("inflate", 0.0) or 0.0),
    )


def _face_from_dict(d: Dict[str, Any]) -> FaceDescriptor:
    uv = d.get("uv", (0.0, 0.0, 16.0, 16.0))
    if len(uv) != 4:
        raise ValueError(f"Cube face uv must have 4 values, got {len(uv)}")
    return FaceDescriptor(
        uv=(float(uv[0]), float(uv[1]), float(uv[2]), float(uv[3])),
        texture=d.get("texture"),
        rotation=int(d.get("rotation", 0) or 0),
    )


def _cube_from_dict(d: Dict[str, Any]) -> CubeElement:
    faces = default_faces()
    for key, face in (d.get("faces") or {}).items():
        faces[parse_direction(key)] = _face_from_dict(face)
    return CubeElement(
        id=str(d.get("uuid") or new_id()),
        name=str(d.get("name", "cube")),
        color=int(d.get("color", 0)),
        origin=point3(d.get("origin", (0.0, 0.0, 0.0))),
        rotation=point3(d.get("rotation", (0.0, 0.0, 0.0))),
        from_=point3(d["from"]),
        to=point3(d["to"]),
        faces=faces,
        inflate=float(d.get("inflate", 0.0) or 0.0),
        stretch=_optional_point3(d.get("stretch")),
        box_uv=bool(d.get("box_uv", False)),
        autouv=int(d.get("autouv", 0) or 0),
    )


def element_from_dict(d: Dict[str, Any]) -> Element:
    kind = str(d.get("type", "cube"))
    if kind == "mesh":
        return _mesh_from_dict(d)
    if kind == "cube":
        return _cube_from_dict(d)
    return RawElement(data=dict(d), id=str(d.get("uuid") or new_id()))


def model_from_dict(d: Dict[str, Any]) -> Model:
    return Model(
        name=str(d.get("name", "model")),
        elements=[element_from_dict(e) for e in d.get("elements", [])],
        history=list(d.get("history", [])),
        meta=dict(d.get("meta", {})),
    )


def model_to_dict(model: Model) -> Dict[str, Any]:
    return model.to_dict()


def save_model(model: Model, path: Path) -> None:
    path = Path(path).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(model.to_dict(), indent=2), encoding="utf-8")


def load_model(path: Path) -> Model:
    path = Path(path).expanduser().resolve()
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Model file must contain a JSON object: {path}")
    return model_from_dict(data)
