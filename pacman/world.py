"""Grid geometry, player movement and the shared state of a running maze."""

from __future__ import annotations

from .entities import Direction, Ghost, GhostState, Player, dir_delta, reverse_dir
from .tilemap import Tile, TileMap

TILE_SIZE = 16
UPDATES_PER_SECOND = 60
PLAYER_SPEED_PIXELS_PER_SECOND = 720.0
PLAYER_SPEED_PIXELS_PER_UPDATE = PLAYER_SPEED_PIXELS_PER_SECOND / UPDATES_PER_SECOND
GHOST_SPEED_PIXELS_PER_SECOND = 630.0
GHOST_SPEED_PIXELS_PER_UPDATE = GHOST_SPEED_PIXELS_PER_SECOND / UPDATES_PER_SECOND
FRIGHTENED_DURATION_UPDATES = 120

# Tolerance for turning and auto-centering; half a step keeps turns responsive.
ALIGNMENT_THRESHOLD = PLAYER_SPEED_PIXELS_PER_UPDATE / 2
HARD_SNAP_ENABLED = True
HARD_SNAP_EPSILON = 0.75

ENTITY_RADIUS = TILE_SIZE // 2 - 2
PLAYER_START_CELL = (14, 26)
HOUSE_CELL = (14, 14)
GHOST_SPAWN_CELLS: tuple[tuple[int, int], ...] = ((13, 14), (14, 14), (13, 15), (14, 15))

_OPEN_TILE_SEARCH_RADIUS = 6
_CORRIDOR_SEARCH_RADIUS = 8
_NEAR_CENTER_DISTANCE = 5.0


def _cell(value: float) -> int:
    """Grid index of a pixel coordinate, truncating toward zero."""
    n = int(value)
    if n >= 0:
        return n // TILE_SIZE
    return -((-n) // TILE_SIZE)


def _center(grid: int) -> float:
    return float(grid * TILE_SIZE + TILE_SIZE // 2)


def _crosses(old: float, new: float, center: float) -> bool:
    """Tell whether a step from ``old`` to ``new`` passes strictly over ``center``."""
    before, after = old - center, new - center
    return (before > 0 and after < 0) or (before < 0 and after > 0)


class World:
    """The maze, the player, the ghosts and the tick-based frightened timer."""

    def __init__(self, tile_map: TileMap | None = None) -> None:
        self.tile_map = tile_map if tile_map is not None else TileMap.default(TILE_SIZE)
        sx, sy = PLAYER_START_CELL
        self.player = Player(x=_center(sx), y=_center(sy))
        self.tick_counter = 0
        self.frightened_until_tick = 0
        self.ghost_eat_combo = 0
        self.ghosts: list[Ghost] = []
        for gx, gy in GHOST_SPAWN_CELLS:
            ox, oy = self.nearest_corridor_tile(gx, gy)
            self.ghosts.append(Ghost(x=_center(ox), y=_center(oy), state=GhostState.NORMAL))

    # --- frightened state -------------------------------------------------

    def is_frightened(self) -> bool:
        """Tell whether ghosts are currently frightened."""
        return self.frightened_until_tick > self.tick_counter

    def frightened_seconds_left(self) -> float:
        """Seconds of frightened time remaining, or 0.0 when not frightened."""
        if not self.is_frightened():
            return 0.0
        return (self.frightened_until_tick - self.tick_counter) / UPDATES_PER_SECOND

    def reverse_all_ghosts(self) -> None:
        """Turn every ghost around, as happens when a power pellet is eaten."""
        for ghost in self.ghosts:
            ghost.current_dir = reverse_dir(ghost.current_dir)

    def reset_positions(self) -> None:
        """Put the player and ghosts back at their starting places after a death."""
        sx, sy = PLAYER_START_CELL
        self.player.x = _center(sx)
        self.player.y = _center(sy)
        self.player.current_dir = Direction.NONE
        self.player.desired_dir = Direction.NONE
        self.frightened_until_tick = 0
        self.ghost_eat_combo = 0
        for ghost, (gx, gy) in zip(self.ghosts, GHOST_SPAWN_CELLS):
            ox, oy = self.nearest_open_tile(gx, gy)
            ghost.x = _center(ox)
            ghost.y = _center(oy)
            ghost.current_dir = Direction.LEFT

    # --- tile searches ----------------------------------------------------

    def _ring_search(self, x: int, y: int, radius: int, accept) -> tuple[int, int] | None:
        tm = self.tile_map
        for r in range(1, radius + 1):
            for dy in range(-r, r + 1):
                for dx in range(-r, r + 1):
                    nx, ny = x + dx, y + dy
                    if 0 <= nx < tm.width and 0 <= ny < tm.height and accept(nx, ny):
                        return nx, ny
        return None

    def nearest_open_tile(self, x: int, y: int) -> tuple[int, int]:
        """Nearest non-wall cell to (x, y); (x, y) itself if nothing is close."""
        if not self.tile_map.is_wall(x, y):
            return x, y
        found = self._ring_search(
            x, y, _OPEN_TILE_SEARCH_RADIUS, lambda nx, ny: not self.tile_map.is_wall(nx, ny)
        )
        return found if found is not None else (x, y)

    def _is_corridor(self, x: int, y: int) -> bool:
        return not self.tile_map.is_wall(x, y) and self.tile_map.tiles[y][x] != Tile.EMPTY

    def nearest_corridor_tile(self, x: int, y: int) -> tuple[int, int]:
        """Nearest cell holding a pellet or power pellet, else the nearest open cell."""
        if self._is_corridor(x, y):
            return x, y
        found = self._ring_search(x, y, _CORRIDOR_SEARCH_RADIUS, self._is_corridor)
        return found if found is not None else self.nearest_open_tile(x, y)

    # --- geometry ---------------------------------------------------------

    def player_grid(self) -> tuple[int, int]:
        """The grid cell the player's centre is in."""
        return _cell(self.player.x), _cell(self.player.y)

    def cell_center(self, grid_x: int, grid_y: int) -> tuple[float, float]:
        """Pixel coordinates of a cell's centre."""
        return _center(grid_x), _center(grid_y)

    def _player_cell_center(self) -> tuple[float, float]:
        return self.cell_center(*self.player_grid())

    def is_aligned_to_cell_center(self) -> bool:
        """Tell whether the player is within the alignment threshold of its cell centre."""
        cx, cy = self._player_cell_center()
        return (
            abs(self.player.x - cx) < ALIGNMENT_THRESHOLD
            and abs(self.player.y - cy) < ALIGNMENT_THRESHOLD
        )

    def is_near_cell_center(self) -> bool:
        """Tell whether the player is close enough to its cell centre to eat there."""
        cx, cy = self._player_cell_center()
        return (
            abs(self.player.x - cx) < _NEAR_CENTER_DISTANCE
            and abs(self.player.y - cy) < _NEAR_CENTER_DISTANCE
        )

    def _wrap_column(self, x: int) -> int:
        if x < 0:
            return self.tile_map.width - 1
        if x >= self.tile_map.width:
            return 0
        return x

    # --- player movement --------------------------------------------------

    def can_turn(self, direction: Direction) -> bool:
        """Tell whether the player may start moving in ``direction`` now."""
        if direction == Direction.NONE:
            return False
        gx, gy = self.player_grid()
        dx, dy = dir_delta(direction)
        nx, ny = self._wrap_column(gx + dx), gy + dy
        if not 0 <= ny < self.tile_map.height:
            return False
        if self.tile_map.is_wall(nx, ny):
            return False

        cx, cy = self.cell_center(gx, gy)
        p = self.player
        cdx, cdy = dir_delta(p.current_dir)
        if direction in (Direction.UP, Direction.DOWN):
            if abs(p.x - cx) <= ALIGNMENT_THRESHOLD:
                return True
            if cdx != 0:
                next_x = p.x + cdx * PLAYER_SPEED_PIXELS_PER_UPDATE
                return (p.x - cx) * (next_x - cx) <= 0
            return False
        if abs(p.y - cy) <= ALIGNMENT_THRESHOLD:
            return True
        if cdy != 0:
            next_y = p.y + cdy * PLAYER_SPEED_PIXELS_PER_UPDATE
            return (p.y - cy) * (next_y - cy) <= 0
        return False

    def is_valid_position(self, x: float, y: float) -> bool:
        """Tell whether the player can stand with its centre at (x, y)."""
        tm = self.tile_map
        gx, gy = self._wrap_column(_cell(x)), _cell(y)
        if not 0 <= gy < tm.height or tm.is_wall(gx, gy):
            return False
        half = float(TILE_SIZE // 2 - 3)
        corners = (
            (x - half, y - half),
            (x + half, y - half),
            (x - half, y + half),
            (x + half, y + half),
        )
        for px, py in corners:
            cx, cy = self._wrap_column(_cell(px)), _cell(py)
            if not 0 <= cy < tm.height or tm.is_wall(cx, cy):
                return False
        return True

    def update_player_movement(self) -> None:
        """Advance the player one update: take a queued turn, move, and wrap tunnels."""
        p = self.player
        if p.desired_dir != p.current_dir and self.can_turn(p.desired_dir):
            cx, cy = self._player_cell_center()
            if p.desired_dir in (Direction.UP, Direction.DOWN):
                p.x = cx
            elif p.desired_dir in (Direction.LEFT, Direction.RIGHT):
                p.y = cy
            p.current_dir = p.desired_dir

        if p.current_dir != Direction.NONE:
            dx, dy = dir_delta(p.current_dir)
            new_x = p.x + dx * PLAYER_SPEED_PIXELS_PER_UPDATE
            new_y = p.y + dy * PLAYER_SPEED_PIXELS_PER_UPDATE
            cx, cy = self._player_cell_center()
            if dx != 0:
                off = abs(p.y - cy)
                if off <= ALIGNMENT_THRESHOLD:
                    new_y = cy
                if (
                    HARD_SNAP_ENABLED
                    and off <= ALIGNMENT_THRESHOLD + HARD_SNAP_EPSILON
                    and _crosses(p.x, new_x, cx)
                ):
                    new_x = cx
            elif dy != 0:
                off = abs(p.x - cx)
                if off <= ALIGNMENT_THRESHOLD:
                    new_x = cx
                if (
                    HARD_SNAP_ENABLED
                    and off <= ALIGNMENT_THRESHOLD + HARD_SNAP_EPSILON
                    and _crosses(p.y, new_y, cy)
                ):
                    new_y = cy

            if self.is_valid_position(new_x, new_y):
                p.x, p.y = new_x, new_y
            else:
                p.current_dir = Direction.NONE

        max_x = float(self.tile_map.width * TILE_SIZE)
        if p.x < 0:
            p.x += max_x
        if p.x >= max_x:
            p.x -= max_x