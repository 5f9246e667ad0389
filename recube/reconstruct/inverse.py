from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np


Point3 = Tuple[float, float, float]


def _stretch_vector(stretch: Optional[Sequence[float]]) -> np.ndarray:
    if stretch is None:
        return np.ones(3, dtype=float)
    # Zero or missing components count as no stretch.
    return np.array([float(s) if s else 1.0 for s in stretch[:3]], dtype=float)


def _as_point(v: np.ndarray) -> Point3:
    return (float(v[0]), float(v[1]), float(v[2]))


def has_shape_transform(stretch: Optional[Sequence[float]], inflate: float) -> bool:
    if inflate:
        return True
    return bool(np.any(_stretch_vector(stretch) != 1.0))


def forward_transform(
    from_: Sequence[float],
    to: Sequence[float],
    stretch: Optional[Sequence[float]] = None,
    inflate: float = 0.0,
) -> Tuple[Point3, Point3]:
    """Apparent extents of a box after inflating then stretching about its center."""
    f = np.asarray(from_, dtype=float)
    t = np.asarray(to, dtype=float)
    center = (f + t) / 2.0
    half = ((t - f) / 2.0 + float(inflate)) * _stretch_vector(stretch)
    return _as_point(center - half), _as_point(center + half)


def inverse_transform(
    from_: Sequence[float],
    to: Sequence[float],
    stretch: Optional[Sequence[float]] = None,
    inflate: float = 0.0,
) -> Tuple[Point3, Point3]:
    """
    Recover original box extents from the apparent (stretched, inflated) ones.

    Exact algebraic inverse of forward_transform, applied per axis around the
    fixed center.
    """
    f = np.asarray(from_, dtype=float)
    t = np.asarray(to, dtype=float)
    center = (f + t) / 2.0
    adjusted_half = (t - f) / 2.0
    expanded_half = adjusted_half / _stretch_vector(stretch)
    original_half = expanded_half - float(inflate)
    return _as_point(center - original_half), _as_point(center + original_half)
