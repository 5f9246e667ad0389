from __future__ import annotations


class ReconstructionError(ValueError):
    """A mesh could not be turned back into a box; only that mesh is skipped."""


class EmptyMeshError(ReconstructionError):
    pass


class ReconstructionWarning(RuntimeWarning):
    pass


class UnclassifiableFaceWarning(ReconstructionWarning):
    """Triangles matched none of the six bounding-box planes and were dropped."""


class FaceConsistencyWarning(ReconstructionWarning):
    """Triangles merged into one quad referenced different textures."""


class RotationAlignmentMiss(ReconstructionWarning):
    """No 90 degree step aligned the canonical UV corners with the quad."""
