from __future__ import annotations

# Plane-membership epsilon for face classification (mesh-local units).
EPS_PLANE = 1e-4

# Area epsilon below which a triangle cannot supply UV data.
EPS_AREA = 1e-4

# Fine epsilon for winding and UV corner comparisons.
EPS_UV = 1e-6

# Threshold on |sin(middle angle)| treated as gimbal lock in Euler decomposition.
EPS_GIMBAL = 1e-7

# Round-trip tolerance for recovered box extents.
EPS_EXTENT = 1e-4
