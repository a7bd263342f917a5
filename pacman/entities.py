"""Directions, the player and the ghosts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Direction(IntEnum):
    """A movement direction on the grid."""

    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4


class GhostState(IntEnum):
    """Whether a ghost is hunting or returning home after being eaten."""

    NORMAL = 0
    EATEN = 1


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_REVERSE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def dir_delta(direction: Direction) -> tuple[int, int]:
    """Return the (dx, dy) grid step for a direction; (0, 0) for none."""
    return _DELTAS.get(direction, (0, 0))


def reverse_dir(direction: Direction) -> Direction:
    """Return the opposite direction; no direction reverses to left."""
    return _REVERSE.get(direction, Direction.LEFT)


def is_reverse(a: Direction, b: Direction) -> bool:
    """Tell whether ``b`` points the opposite way to ``a``."""
    return a in _REVERSE and _REVERSE[a] == b


@dataclass
class Player:
    """The player's pixel position and its current and queued directions."""

    x: float
    y: float
    current_dir: Direction = Direction.NONE
    desired_dir: Direction = Direction.NONE


@dataclass
class Ghost:
    """A ghost's pixel position, heading and state."""

    x: float
    y: float
    current_dir: Direction = Direction.NONE
    state: GhostState = GhostState.NORMAL