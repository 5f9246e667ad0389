from __future__ import annotations

import pytest

from recube.geometry.directions import Direction
from recube.reconstruct.uv import (
    canonical_rect,
    find_rotation,
    rect_corners,
    rotate_corners,
    simplified_rect,
    steps_to_degrees,
    uv_bounds,
)


def test_uv_bounds_of_points() -> None:
    assert uv_bounds([(4.0, 8.0), (0.0, 16.0), (12.0, 2.0)]) == (0.0, 2.0, 12.0, 16.0)
    with pytest.raises(ValueError):
        uv_bounds([])


def test_simplified_rect_inverts_v_on_sides_only() -> None:
    b = (0.0, 0.0, 16.0, 16.0)
    for d in (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST):
        assert simplified_rect(d, b) == (0.0, 16.0, 16.0, 0.0)
    assert simplified_rect(Direction.UP, b) == b
    assert simplified_rect(Direction.DOWN, b) == b


def test_canonical_rect_mirrors_u_on_up_and_down() -> None:
    b = (2.0, 4.0, 10.0, 8.0)
    assert canonical_rect(Direction.EAST, b) == (2.0, 8.0, 10.0, 4.0)
    assert canonical_rect(Direction.UP, b) == (10.0, 4.0, 2.0, 8.0)
    assert canonical_rect(Direction.DOWN, b) == (10.0, 4.0, 2.0, 8.0)


@pytest.mark.parametrize("steps", [0, 1, 2, 3])
def test_find_rotation_recovers_each_step(steps: int) -> None:
    corners = rect_corners((0.0, 16.0, 16.0, 0.0))
    observed = rotate_corners(corners, steps)
    assert find_rotation(corners, observed) == steps
    assert steps_to_degrees(steps) == steps * 90


def test_find_rotation_tolerates_tiny_uv_noise() -> None:
    corners = rect_corners((0.0, 16.0, 16.0, 0.0))
    observed = [(u + 0.0000001, v) for u, v in rotate_corners(corners, 2)]
    assert find_rotation(corners, observed) == 2


def test_mirrored_corners_match_no_rotation() -> None:
    canonical = rect_corners((0.0, 16.0, 16.0, 0.0))
    mirrored = rect_corners((0.0, 0.0, 16.0, 16.0))
    assert find_rotation(canonical, mirrored) is None
    with pytest.raises(ValueError):
        find_rotation(canonical[:3], mirrored)
