from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np

from recube.errors import EmptyMeshError


Point3 = Tuple[float, float, float]


@dataclass(frozen=True)
class BoundingBox:
    min: Point3
    max: Point3

    def extremum(self, axis: int, use_max: bool) -> float:
        return float(self.max[axis] if use_max else self.min[axis])

    @property
    def size(self) -> Point3:
        return (
            float(self.max[0] - self.min[0]),
            float(self.max[1] - self.min[1]),
            float(self.max[2] - self.min[2]),
        )

    def offset(self, origin: Sequence[float]) -> "BoundingBox":
        o = (float(origin[0]), float(origin[1]), float(origin[2]))
        return BoundingBox(
            min=(self.min[0] + o[0], self.min[1] + o[1], self.min[2] + o[2]),
            max=(self.max[0] + o[0], self.max[1] + o[1], self.max[2] + o[2]),
        )


def bounding_box(points: Iterable[Sequence[float]]) -> BoundingBox:
    pts = np.asarray([tuple(float(c) for c in p[:3]) for p in points], dtype=float)
    if pts.size == 0:
        raise EmptyMeshError("cannot compute a bounding box of zero vertices")
    lo = pts.min(axis=0)
    hi = pts.max(axis=0)
    return BoundingBox(
        min=(float(lo[0]), float(lo[1]), float(lo[2])),
        max=(float(hi[0]), float(hi[1]), float(hi[2])),
    )
