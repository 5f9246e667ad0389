"""
Recube Reconstruction Module

Turns a triangulated mesh that came from a box back into a box primitive:
face classification, triangle-pair merging, UV/rotation recovery, inverse
shape transforms and final assembly.
"""

from recube.reconstruct.assemble import ReconstructionResult, reconstruct_box
from recube.reconstruct.config import ReconstructConfig
from recube.reconstruct.report import FaceReport, ReconstructionReport

__all__ = [
    "FaceReport",
    "ReconstructConfig",
    "ReconstructionReport",
    "ReconstructionResult",
    "reconstruct_box",
]
