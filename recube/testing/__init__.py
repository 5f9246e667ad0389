from recube.testing.synthetic import box_to_mesh, canonical_cube, canonical_face

__all__ = ["box_to_mesh", "canonical_cube", "canonical_face"]
