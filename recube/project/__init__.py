"""
Recube Project Module

In-memory model document (meshes, cubes) and its JSON persistence.
"""

from recube.project.io import load_model, model_from_dict, model_to_dict, save_model
from recube.project.schema import (
    DEFAULT_UV,
    BoxDescriptor,
    CubeElement,
    FaceDescriptor,
    MeshElement,
    MeshFace,
    Model,
    RawElement,
    Triangle,
)

__all__ = [
    "DEFAULT_UV",
    "BoxDescriptor",
    "CubeElement",
    "FaceDescriptor",
    "MeshElement",
    "MeshFace",
    "Model",
    "RawElement",
    "Triangle",
    "load_model",
    "model_from_dict",
    "model_to_dict",
    "save_model",
]
