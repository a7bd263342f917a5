import pytest

from pacman.tilemap import DEFAULT_MAZE, Tile, TileMap, parse_maze


def _first(m, kind):
    return next(
        (x, y)
        for y, row in enumerate(m.tiles)
        for x, tile in enumerate(row)
        if tile == kind
    )


def test_default_map_dimensions():
    m = TileMap.default(16)
    assert (m.width, m.height) == (len(DEFAULT_MAZE[0]), len(DEFAULT_MAZE))
    assert (m.width, m.height) == (28, 31)
    assert m.tile_size == 16


def test_eat_pellet_at():
    m = TileMap.default(16)
    px, py = _first(m, Tile.PELLET)
    assert m.eat_pellet_at(px, py) == (True, False)
    assert m.eat_pellet_at(px, py) == (False, False)
    assert m.tiles[py][px] == Tile.EMPTY


def test_eat_power_pellet():
    m = TileMap.default(16)
    assert m.tiles[3][1] == Tile.POWER
    assert m.eat_pellet_at(1, 3) == (True, True)
    assert m.eat_pellet_at(1, 3) == (False, False)


def test_eat_out_of_bounds():
    m = TileMap.default(16)
    assert m.eat_pellet_at(-1, 0) == (False, False)
    assert m.eat_pellet_at(0, m.height) == (False, False)


def test_is_wall_bounds():
    m = TileMap.default(16)
    assert m.is_wall(-1, 0)
    assert m.is_wall(0, -1)
    assert m.is_wall(m.width, 0)
    assert m.is_wall(0, m.height)


def test_is_wall_inside():
    m = TileMap.default(16)
    assert m.is_wall(0, 0)
    assert not m.is_wall(1, 1)
    assert not m.is_wall(14, 26)


def test_parse_maze_legend():
    grid = parse_maze(["#.o -"])
    assert grid == [[Tile.WALL, Tile.PELLET, Tile.POWER, Tile.EMPTY, Tile.EMPTY]]


def test_parse_maze_width_from_first_row():
    grid = parse_maze(["##", "..o"])
    assert grid[1] == [Tile.PELLET, Tile.PELLET]


def test_parse_maze_rejects_short_rows():
    with pytest.raises(ValueError):
        parse_maze(["###", "#"])


def test_parse_maze_rejects_empty():
    with pytest.raises(ValueError):
        parse_maze([])


def test_default_maps_are_independent():
    a = TileMap.default(16)
    b = TileMap.default(16)
    a.eat_pellet_at(1, 1)
    assert b.tiles[1][1] == Tile.PELLET