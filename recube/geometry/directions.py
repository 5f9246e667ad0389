from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class Direction(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    UP = "up"
    DOWN = "down"

    @property
    def axis(self) -> int:
        return _AXIS[self]

    @property
    def use_max(self) -> bool:
        """True when the face sits on the maximum of its axis."""
        return self in (Direction.EAST, Direction.UP, Direction.SOUTH)

    @property
    def plane_axes(self) -> Tuple[int, int]:
        """The two axes spanning the face plane, in increasing order."""
        return _PLANE_AXES[self.axis]

    @property
    def is_side(self) -> bool:
        return self.axis != 1


_AXIS: Dict[Direction, int] = {
    Direction.EAST: 0,
    Direction.WEST: 0,
    Direction.UP: 1,
    Direction.DOWN: 1,
    Direction.SOUTH: 2,
    Direction.NORTH: 2,
}

_PLANE_AXES: Dict[int, Tuple[int, int]] = {0: (1, 2), 1: (0, 2), 2: (0, 1)}

# Detector priority; a triangle lying on two planes at once (edge slivers,
# boxes thinner than the plane epsilon) goes to the first match.
CLASSIFY_ORDER: Tuple[Direction, ...] = (
    Direction.EAST,
    Direction.WEST,
    Direction.UP,
    Direction.DOWN,
    Direction.SOUTH,
    Direction.NORTH,
)

# Serialization order of cube faces.
FACE_ORDER: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.EAST,
    Direction.WEST,
    Direction.UP,
    Direction.DOWN,
)


def parse_direction(value: str) -> Direction:
    try:
        return Direction(str(value).lower())
    except ValueError:
        raise ValueError(f"Unknown face direction: {value!r}") from None
