"""
Recube Geometry Module

Small, dependency-light helpers shared by the reconstruction pipeline:
tolerances, vector arithmetic, bounding boxes and Euler/quaternion rotation.
"""

from recube.geometry.bounds import BoundingBox, bounding_box
from recube.geometry.directions import CLASSIFY_ORDER, FACE_ORDER, Direction, parse_direction
from recube.geometry.rotation import EULER_ORDERS, Quaternion, convert_euler, euler_to_matrix, matrix_to_euler
from recube.geometry.vectors import approx_equal, cross2d, triangle_area

__all__ = [
    "BoundingBox",
    "bounding_box",
    "CLASSIFY_ORDER",
    "FACE_ORDER",
    "Direction",
    "parse_direction",
    "EULER_ORDERS",
    "Quaternion",
    "convert_euler",
    "euler_to_matrix",
    "matrix_to_euler",
    "approx_equal",
    "cross2d",
    "triangle_area",
]
