from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

import numpy as np

from recube.geometry.tolerance import EPS_GIMBAL


Euler = Tuple[float, float, float]

# Intrinsic Tait-Bryan orders; "XYZ" composes R = Rx @ Ry @ Rz.
EULER_ORDERS = ("XYZ", "XZY", "YXZ", "YZX", "ZXY", "ZYX")

_AXIS_INDEX = {"X": 0, "Y": 1, "Z": 2}
_CYCLIC = {"XYZ", "YZX", "ZXY"}


@dataclass(frozen=True)
class Quaternion:
    x: float
    y: float
    z: float
    w: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    @staticmethod
    def identity() -> "Quaternion":
        return Quaternion(0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def from_axis_angle(axis: int, angle_deg: float) -> "Quaternion":
        half = math.radians(float(angle_deg)) * 0.5
        s = math.sin(half)
        v = [0.0, 0.0, 0.0]
        v[axis] = s
        return Quaternion(v[0], v[1], v[2], math.cos(half))

    @staticmethod
    def from_euler(angles_deg: Sequence[float], order: str) -> "Quaternion":
        """
        Compose per-axis rotations in the given intrinsic order.

        angles_deg is always indexed by axis (x, y, z), independent of order.
        """
        order = validate_order(order)
        q = Quaternion.identity()
        for letter in order:
            axis = _AXIS_INDEX[letter]
            q = q * Quaternion.from_axis_angle(axis, angles_deg[axis])
        return q.normalized()

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        x1, y1, z1, w1 = self
        x2, y2, z2, w2 = other
        return Quaternion(
            x=w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            y=w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            z=w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
            w=w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        )

    def normalized(self) -> "Quaternion":
        n = math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)
        if n == 0.0:
            return Quaternion.identity()
        inv = 1.0 / n
        return Quaternion(self.x * inv, self.y * inv, self.z * inv, self.w * inv)

    def to_matrix3(self) -> np.ndarray:
        q = self.normalized()
        x, y, z, w = q
        xx, yy, zz = x * x, y * y, z * z
        xy, xz, yz = x * y, x * z, y * z
        wx, wy, wz = w * x, w * y, w * z
        return np.array(
            [
                [1.0 - 2.0 * (yy + zz), 2.0 * (xy - wz), 2.0 * (xz + wy)],
                [2.0 * (xy + wz), 1.0 - 2.0 * (xx + zz), 2.0 * (yz - wx)],
                [2.0 * (xz - wy), 2.0 * (yz + wx), 1.0 - 2.0 * (xx + yy)],
            ],
            dtype=float,
        )


def validate_order(order: str) -> str:
    o = str(order).upper()
    if o not in EULER_ORDERS:
        raise ValueError(f"Unsupported Euler order: {order!r} (expected one of {', '.join(EULER_ORDERS)})")
    return o


def euler_to_matrix(angles_deg: Sequence[float], order: str) -> np.ndarray:
    return Quaternion.from_euler(angles_deg, order).to_matrix3()


def _clean_deg(rad: float) -> float:
    deg = round(math.degrees(rad), 9)
    return 0.0 if deg == 0.0 else deg


def matrix_to_euler(matrix: np.ndarray, order: str) -> Euler:
    """
    Decompose a rotation matrix into intrinsic Euler angles (degrees, indexed by axis).

    Near gimbal lock the last rotation of the order is set to zero.
    """
    order = validate_order(order)
    m = np.asarray(matrix, dtype=float)
    if m.shape != (3, 3):
        raise ValueError("rotation matrix must be 3x3")
    i, j, k = (_AXIS_INDEX[c] for c in order)
    s = 1.0 if order in _CYCLIC else -1.0

    sin_b = max(-1.0, min(1.0, s * float(m[i, k])))
    b = math.asin(sin_b)
    if abs(sin_b) < 1.0 - EPS_GIMBAL:
        a = math.atan2(-s * float(m[j, k]), float(m[k, k]))
        c = math.atan2(-s * float(m[i, j]), float(m[i, i]))
    else:
        a = math.atan2(s * float(m[k, j]), float(m[j, j]))
        c = 0.0

    out = [0.0, 0.0, 0.0]
    out[i] = _clean_deg(a)
    out[j] = _clean_deg(b)
    out[k] = _clean_deg(c)
    return (out[0], out[1], out[2])


def convert_euler(angles_deg: Sequence[float], from_order: str, to_order: str) -> Euler:
    """Re-express a rotation given in one Euler application order in another."""
    src = validate_order(from_order)
    dst = validate_order(to_order)
    if len(angles_deg) != 3:
        raise ValueError("Euler rotation requires exactly 3 angles")
    if src == dst:
        return (float(angles_deg[0]), float(angles_deg[1]), float(angles_deg[2]))
    return matrix_to_euler(euler_to_matrix(angles_deg, src), dst)
