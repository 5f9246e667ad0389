from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence, Tuple

from recube.errors import ReconstructionError, RotationAlignmentMiss, UnclassifiableFaceWarning
from recube.geometry.bounds import bounding_box
from recube.geometry.directions import FACE_ORDER, Direction
from recube.geometry.rotation import convert_euler
from recube.project.schema import CubeElement, FaceDescriptor, MeshElement
from recube.reconstruct.classify import FaceTriangleGroup, classify_triangles
from recube.reconstruct.config import ReconstructConfig
from recube.reconstruct.inverse import has_shape_transform, inverse_transform
from recube.reconstruct.merge import merge_pair, select_dominant
from recube.reconstruct.report import FaceReport, ReconstructionReport
from recube.reconstruct.uv import exact_face, simplified_face


Point3 = Tuple[float, float, float]


@dataclass
class ReconstructionResult:
    box: CubeElement
    report: ReconstructionReport


def _rotation_miss(message: str, config: ReconstructConfig, report: ReconstructionReport) -> None:
    report.bump("rotation_misses")
    if config.on_rotation_miss == "error":
        raise ReconstructionError(f"mesh {report.mesh_name!r}: {message}")
    report.warn(RotationAlignmentMiss, message)


def reconstruct_face(
    group: FaceTriangleGroup,
    vertices: Mapping[str, Sequence[float]],
    config: ReconstructConfig,
    report: ReconstructionReport,
) -> FaceDescriptor:
    """
    Descriptor for one box face.

    In "exact" uv_mode a face with UV data but no clean triangle pair is a
    rotation miss and goes through on_rotation_miss; "auto" falls back to the
    simplified rectangle silently.
    """
    direction = group.direction
    face_report = FaceReport(
        direction=direction.value,
        mode="default",
        triangles=len(group.triangles),
        uv_candidates=len(group.uv_candidates),
    )
    report.faces[direction.value] = face_report

    if not group.uv_candidates:
        report.bump("default_faces")
        return FaceDescriptor()

    top = select_dominant(group.uv_candidates)
    simplified = simplified_face(direction, top)
    quad = None
    if config.uv_mode != "simplified" and len(top) == 2:
        quad = merge_pair(top[0], top[1], vertices, direction, plane_eps=config.plane_eps, report=report)
    if quad is None:
        if config.uv_mode == "exact":
            face_report.rotation_matched = False
            _rotation_miss(
                f"{direction.value} face has no pair of triangles sharing an edge to align UVs against",
                config,
                report,
            )
        face_report.mode = "simplified"
        report.bump("simplified_faces")
        return simplified

    face, steps = exact_face(quad, config.uv_eps)
    face_report.mode = "exact"
    face_report.rotation_matched = steps is not None
    if steps is None:
        _rotation_miss(f"{direction.value} face UVs match no 90 degree rotation of {face.uv}", config, report)
        if config.on_rotation_miss == "simplified":
            face_report.mode = "simplified"
            report.bump("simplified_faces")
            return simplified
    report.bump("exact_faces")
    face_report.rotation = face.rotation
    return face


def box_rotation(mesh: MeshElement, config: ReconstructConfig, report: Optional[ReconstructionReport] = None) -> Point3:
    if config.rotation_mode == "convert":
        if report is not None:
            report.rotation_converted = True
        return convert_euler(mesh.rotation, config.mesh_euler_order, config.box_euler_order)
    r = mesh.rotation
    return (float(r[0]), float(r[1]), float(r[2]))


def reconstruct_box(mesh: MeshElement, config: Optional[ReconstructConfig] = None) -> ReconstructionResult:
    """
    Rebuild the box primitive a triangulated mesh was derived from.

    Raises EmptyMeshError for meshes without vertices; every other geometry
    problem degrades the affected face and is recorded on the report.
    """
    cfg = config or ReconstructConfig()
    report = ReconstructionReport(mesh_id=mesh.id, mesh_name=mesh.name)

    bounds = bounding_box(mesh.vertices.values())
    classification = classify_triangles(
        mesh.triangles(),
        mesh.vertices,
        bounds,
        plane_eps=cfg.plane_eps,
        area_eps=cfg.area_eps,
    )
    report.bump("classified", classification.classified_count)
    report.bump("unclassifiable", len(classification.unclassified))
    report.bump("degenerate", len(classification.degenerate))
    report.bump("uv_eligible", sum(len(g.uv_candidates) for g in classification.groups.values()))
    if classification.unclassified:
        report.warn(
            UnclassifiableFaceWarning,
            f"{len(classification.unclassified)} triangle(s) of mesh {mesh.name!r} lie on no bounding-box plane",
        )

    faces: Dict[Direction, FaceDescriptor] = {}
    for direction in FACE_ORDER:
        faces[direction] = reconstruct_face(classification.groups[direction], mesh.vertices, cfg, report)

    world = bounds.offset(mesh.origin)
    from_, to = world.min, world.max
    inflate = 0.0
    stretch = None
    if cfg.undo_transforms and has_shape_transform(mesh.stretch, mesh.inflate):
        from_, to = inverse_transform(world.min, world.max, mesh.stretch, mesh.inflate)
        inflate = float(mesh.inflate)
        stretch = mesh.stretch
        report.used_inverse_transform = True

    box = CubeElement(
        name=mesh.name,
        color=mesh.color,
        origin=(float(mesh.origin[0]), float(mesh.origin[1]), float(mesh.origin[2])),
        rotation=box_rotation(mesh, cfg, report),
        from_=from_,
        to=to,
        faces=faces,
        inflate=inflate,
        stretch=stretch,
        box_uv=False,
        autouv=0,
    )
    return ReconstructionResult(box=box, report=report)
