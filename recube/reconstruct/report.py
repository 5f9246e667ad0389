from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Type

from recube.errors import ReconstructionWarning


@dataclass
class FaceReport:
    direction: str
    mode: str  # exact | simplified | default
    triangles: int = 0
    uv_candidates: int = 0
    rotation: int = 0
    rotation_matched: Optional[bool] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "direction": self.direction,
            "mode": self.mode,
            "triangles": int(self.triangles),
            "uv_candidates": int(self.uv_candidates),
            "rotation": int(self.rotation),
            "rotation_matched": self.rotation_matched,
        }


@dataclass
class ReconstructionReport:
    mesh_id: str = ""
    mesh_name: str = ""
    counts: Dict[str, int] = field(default_factory=dict)
    faces: Dict[str, FaceReport] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    used_inverse_transform: bool = False
    rotation_converted: bool = False

    def bump(self, key: str, n: int = 1) -> None:
        self.counts[key] = self.counts.get(key, 0) + int(n)

    def warn(self, category: Type[ReconstructionWarning], message: str) -> None:
        self.warnings.append(f"{category.__name__}: {message}")
        warnings.warn(message, category, stacklevel=3)

    def to_dict(self) -> Dict[str, object]:
        return {
            "mesh_id": self.mesh_id,
            "mesh_name": self.mesh_name,
            "counts": dict(self.counts),
            "faces": {k: f.to_dict() for k, f in self.faces.items()},
            "warnings": list(self.warnings),
            "used_inverse_transform": bool(self.used_inverse_transform),
            "rotation_converted": bool(self.rotation_converted),
        }


def emit(report: Optional[ReconstructionReport], category: Type[ReconstructionWarning], message: str) -> None:
    if report is not None:
        report.warn(category, message)
    else:
        warnings.warn(message, category, stacklevel=3)
