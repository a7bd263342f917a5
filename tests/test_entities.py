import pytest

from pacman.entities import (
    Direction,
    Ghost,
    GhostState,
    Player,
    dir_delta,
    is_reverse,
    reverse_dir,
)


@pytest.mark.parametrize(
    "direction, expected",
    [
        (Direction.NONE, (0, 0)),
        (Direction.UP, (0, -1)),
        (Direction.DOWN, (0, 1)),
        (Direction.LEFT, (-1, 0)),
        (Direction.RIGHT, (1, 0)),
    ],
)
def test_dir_delta(direction, expected):
    assert dir_delta(direction) == expected


@pytest.mark.parametrize(
    "direction, expected",
    [
        (Direction.UP, Direction.DOWN),
        (Direction.DOWN, Direction.UP),
        (Direction.LEFT, Direction.RIGHT),
        (Direction.RIGHT, Direction.LEFT),
        (Direction.NONE, Direction.LEFT),
    ],
)
def test_reverse_dir(direction, expected):
    assert reverse_dir(direction) == expected


def test_reverse_dir_of_none_is_a_real_direction():
    assert reverse_dir(Direction.NONE) != Direction.NONE
    assert dir_delta(reverse_dir(Direction.NONE)) == (-1, 0)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (Direction.UP, Direction.DOWN, True),
        (Direction.LEFT, Direction.RIGHT, True),
        (Direction.RIGHT, Direction.LEFT, True),
        (Direction.UP, Direction.LEFT, False),
        (Direction.UP, Direction.UP, False),
        (Direction.NONE, Direction.LEFT, False),
        (Direction.LEFT, Direction.NONE, False),
    ],
)
def test_is_reverse(a, b, expected):
    assert is_reverse(a, b) is expected


def test_player_defaults():
    p = Player(x=8.0, y=24.0)
    assert (p.current_dir, p.desired_dir) == (Direction.NONE, Direction.NONE)


def test_ghost_defaults():
    g = Ghost(x=1.0, y=2.0)
    assert g.state == GhostState.NORMAL
    assert g.current_dir == Direction.NONE