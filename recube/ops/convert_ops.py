from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from recube.errors import ReconstructionError
from recube.ops.base import OpContext, execute_op
from recube.project.schema import CubeElement, MeshElement, Model
from recube.reconstruct.assemble import ReconstructionResult, reconstruct_box
from recube.reconstruct.config import ReconstructConfig
from recube.reconstruct.report import ReconstructionReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchFailure:
    mesh_id: str
    mesh_name: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"mesh_id": self.mesh_id, "mesh_name": self.mesh_name, "error": self.error}


@dataclass
class BatchResult:
    boxes: List[CubeElement] = field(default_factory=list)
    reports: List[ReconstructionReport] = field(default_factory=list)
    failures: List[BatchFailure] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "converted": len(self.boxes),
            "skipped": len(self.failures),
            "reports": [r.to_dict() for r in self.reports],
            "failures": [f.to_dict() for f in self.failures],
        }


@dataclass
class ConvertResult:
    cube_ids: Dict[str, str] = field(default_factory=dict)  # mesh id -> cube id
    reports: List[ReconstructionReport] = field(default_factory=list)
    skipped: List[BatchFailure] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "converted": len(self.cube_ids),
            "skipped": len(self.skipped),
            "cube_ids": dict(self.cube_ids),
            "reports": [r.to_dict() for r in self.reports],
            "failures": [f.to_dict() for f in self.skipped],
        }


def convert_batch(meshes: Iterable[MeshElement], config: Optional[ReconstructConfig] = None) -> BatchResult:
    """Reconstruct boxes for a batch of meshes without touching any document."""
    cfg = config or ReconstructConfig()
    out = BatchResult()
    for mesh in meshes:
        try:
            res = reconstruct_box(mesh, cfg)
        except ReconstructionError as exc:
            logger.warning("Skipping mesh %r (%s): %s", mesh.name, mesh.id, exc)
            out.failures.append(BatchFailure(mesh_id=mesh.id, mesh_name=mesh.name, error=str(exc)))
            continue
        out.boxes.append(res.box)
        out.reports.append(res.report)
        logger.info("Reconstructed mesh %r as box %s -> %s", mesh.name, list(res.box.from_), list(res.box.to))
    logger.info("Reconstructed %d box(es), skipped %d mesh(es)", len(out.boxes), len(out.failures))
    return out


def _select_meshes(model: Model, mesh_ids: Optional[Sequence[str]]) -> List[MeshElement]:
    if mesh_ids is None:
        return model.meshes()
    out: List[MeshElement] = []
    for mesh_id in mesh_ids:
        element = model.get(mesh_id)
        if not isinstance(element, MeshElement):
            raise ValueError(f"Element {mesh_id} is a {element.type}, not a mesh")
        out.append(element)
    return out


def convert_meshes_to_cubes(
    model: Model,
    mesh_ids: Optional[Sequence[str]] = None,
    config: Optional[ReconstructConfig] = None,
    ctx: Optional[OpContext] = None,
) -> ConvertResult:
    """
    Replace meshes in the model with reconstructed cubes.

    Each mesh is its own transaction: the cube is inserted at the mesh's
    position and the mesh removed, or nothing changes for that mesh.
    """
    cfg = config or ReconstructConfig()
    targets = _select_meshes(model, mesh_ids)
    out = ConvertResult()
    for mesh in targets:

        def mutate(mesh: MeshElement = mesh) -> ReconstructionResult:
            res = reconstruct_box(mesh, cfg)
            model.insert_before(mesh.id, res.box)
            model.remove(mesh.id)
            return res

        try:
            res = execute_op(
                model,
                op_name="convert_mesh_to_cube",
                args={"mesh_id": mesh.id, "name": mesh.name},
                ctx=ctx,
                mutate=mutate,
            )
        except ReconstructionError as exc:
            logger.warning("Mesh %r (%s) left unchanged: %s", mesh.name, mesh.id, exc)
            out.skipped.append(BatchFailure(mesh_id=mesh.id, mesh_name=mesh.name, error=str(exc)))
            continue
        out.cube_ids[mesh.id] = res.box.id
        out.reports.append(res.report)
        logger.info("Converted mesh %r to cube %s", mesh.name, res.box.id)
    logger.info("Converted %d mesh(es), skipped %d", len(out.cube_ids), len(out.skipped))
    return out
