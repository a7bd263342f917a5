"""The maze grid: walls, pellets and power pellets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable


class Tile(IntEnum):
    """What occupies one cell of the maze."""

    EMPTY = 0
    WALL = 1
    PELLET = 2
    POWER = 3


# Legend: '#' wall, '.' pellet, 'o' power pellet, anything else empty.
DEFAULT_MAZE: tuple[str, ...] = (
    "############################",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#o####.#####.##.#####.####o#",
    "#.####.#####.##.#####.####.#",
    "#..........................#",
    "#.####.##.########.##.####.#",
    "#.####.##.########.##.####.#",
    "#......##....##....##......#",
    "######.##### ## #####.######",
    "     #.##### ## #####.#     ",
    "     #.##          ##.#     ",
    "     #.## ###--### ##.#     ",
    "######.## #      # ##.######",
    "      .   #      #   .      ",
    "######.## #      # ##.######",
    "     #.## ######## ##.#     ",
    "     #.##          ##.#     ",
    "     #.## ######## ##.#     ",
    "######.## ######## ##.######",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#o..##................##..o#",
    "###.##.##.########.##.##.###",
    "#......##....##....##......#",
    "#.##########.##.##########.#",
    "#..........................#",
    "############################",
    "                            ",
    "                            ",
    "                            ",
)

_LEGEND = {"#": Tile.WALL, ".": Tile.PELLET, "o": Tile.POWER}


def parse_maze(lines: Iterable[str]) -> list[list[Tile]]:
    """Turn ASCII maze rows into a grid of tiles.

    The width is taken from the first row; every row must be at least that long.
    """
    rows = list(lines)
    if not rows:
        raise ValueError("maze has no rows")
    width = len(rows[0])
    grid = []
    for y, line in enumerate(rows):
        if len(line) < width:
            raise ValueError(f"maze row {y} is shorter than {width} characters")
        grid.append([_LEGEND.get(ch, Tile.EMPTY) for ch in line[:width]])
    return grid


@dataclass
class TileMap:
    """A rectangular grid of tiles with a pixel size per tile."""

    width: int
    height: int
    tile_size: int
    tiles: list[list[Tile]] = field(repr=False)

    @classmethod
    def default(cls, tile_size: int) -> "TileMap":
        """Build the standard maze."""
        grid = parse_maze(DEFAULT_MAZE)
        return cls(width=len(grid[0]), height=len(grid), tile_size=tile_size, tiles=grid)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, x: int, y: int) -> bool:
        """Tell whether a cell is a wall; cells outside the grid count as walls."""
        if not self._in_bounds(x, y):
            return True
        return self.tiles[y][x] == Tile.WALL

    def eat_pellet_at(self, x: int, y: int) -> tuple[bool, bool]:
        """Remove a pellet from a cell and return (ate, was_power)."""
        if not self._in_bounds(x, y):
            return False, False
        tile = self.tiles[y][x]
        if tile in (Tile.PELLET, Tile.POWER):
            self.tiles[y][x] = Tile.EMPTY
            return True, tile == Tile.POWER
        return False, False