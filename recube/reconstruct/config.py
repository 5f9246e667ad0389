from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from recube.geometry.rotation import validate_order
from recube.geometry.tolerance import EPS_AREA, EPS_PLANE, EPS_UV


UVMode = Literal["auto", "exact", "simplified"]
RotationMode = Literal["copy", "convert"]
RotationMissPolicy = Literal["zero", "simplified", "error"]


@dataclass(frozen=True)
class ReconstructConfig:
    plane_eps: float = EPS_PLANE
    area_eps: float = EPS_AREA
    uv_eps: float = EPS_UV
    uv_mode: UVMode = "auto"
    rotation_mode: RotationMode = "copy"
    mesh_euler_order: str = "XYZ"
    box_euler_order: str = "ZYX"
    undo_transforms: bool = True
    on_rotation_miss: RotationMissPolicy = "zero"

    def __post_init__(self) -> None:
        if self.uv_mode not in ("auto", "exact", "simplified"):
            raise ValueError(f"Unknown uv_mode: {self.uv_mode!r}")
        if self.rotation_mode not in ("copy", "convert"):
            raise ValueError(f"Unknown rotation_mode: {self.rotation_mode!r}")
        if self.on_rotation_miss not in ("zero", "simplified", "error"):
            raise ValueError(f"Unknown on_rotation_miss policy: {self.on_rotation_miss!r}")
        if self.plane_eps <= 0.0 or self.uv_eps <= 0.0 or self.area_eps < 0.0:
            raise ValueError("tolerances must be positive")
        validate_order(self.mesh_euler_order)
        validate_order(self.box_euler_order)
