"""Ghost steering: wandering, fleeing, returning home, and per-update movement."""

from __future__ import annotations

import random

from .entities import Direction, Ghost, GhostState, dir_delta, is_reverse, reverse_dir
from .world import GHOST_SPEED_PIXELS_PER_UPDATE, HOUSE_CELL, TILE_SIZE, World

_CANDIDATES: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)

_EATEN_SPEED_FACTOR = 1.5
_FRIGHTENED_SPEED_FACTOR = 0.5
_ALIGN_TOLERANCE = 1.0


def _grid(value: float) -> int:
    """Grid index of a pixel coordinate, truncating toward zero."""
    n = int(value)
    if n >= 0:
        return n // TILE_SIZE
    return -((-n) // TILE_SIZE)


def _center(grid: int) -> float:
    return float(grid * TILE_SIZE + TILE_SIZE // 2)


def _neighbour(world: World, gx: int, gy: int, direction: Direction) -> tuple[int, int] | None:
    """The cell one step away, wrapping columns; None if it leaves the grid vertically."""
    tm = world.tile_map
    dx, dy = dir_delta(direction)
    nx, ny = gx + dx, gy + dy
    if nx < 0:
        nx = tm.width - 1
    elif nx >= tm.width:
        nx = 0
    if not 0 <= ny < tm.height:
        return None
    return nx, ny


def _is_open(world: World, gx: int, gy: int, direction: Direction) -> bool:
    cell = _neighbour(world, gx, gy, direction)
    return cell is not None and not world.tile_map.is_wall(*cell)


def can_move_ghost(world: World, ghost: Ghost, direction: Direction) -> bool:
    """Tell whether the cell next to the ghost in ``direction`` is open."""
    if direction == Direction.NONE:
        return False
    return _is_open(world, _grid(ghost.x), _grid(ghost.y), direction)


def flee_direction(world: World, ghost: Ghost, gx: int, gy: int) -> Direction:
    """The open direction from (gx, gy) whose next cell is farthest from the player."""
    valid = [d for d in _CANDIDATES if _is_open(world, gx, gy, d)]
    if not valid:
        return random_direction(world, ghost, gx, gy)
    px, py = world.player_grid()
    best = valid[0]
    best_dist = -1
    for d in valid:
        nx, ny = _neighbour(world, gx, gy, d)
        dist = (nx - px) ** 2 + (ny - py) ** 2
        if dist > best_dist:
            best_dist = dist
            best = d
    return best


def random_direction(world: World, ghost: Ghost, gx: int, gy: int) -> Direction:
    """A random open direction from (gx, gy), avoiding an about-turn where possible."""
    current = ghost.current_dir
    ordered = [current] if current != Direction.NONE else []
    ordered.extend(d for d in _CANDIDATES if d != current and not is_reverse(current, d))
    if not ordered:
        ordered = list(_CANDIDATES)
    random.shuffle(ordered)

    for d in ordered:
        if _is_open(world, gx, gy, d):
            return d

    for d in _CANDIDATES:
        if _is_open(world, gx, gy, d):
            return d

    back = reverse_dir(current)
    if _is_open(world, gx, gy, back):
        return back
    return Direction.LEFT


def direction_toward_target(world: World, gx: int, gy: int, tx: int, ty: int) -> Direction:
    """An open direction that greedily closes the larger axis distance to (tx, ty) first."""
    dx, dy = tx - gx, ty - gy
    horizontal = []
    if dx > 0:
        horizontal.append(Direction.RIGHT)
    elif dx < 0:
        horizontal.append(Direction.LEFT)
    vertical = []
    if dy > 0:
        vertical.append(Direction.DOWN)
    elif dy < 0:
        vertical.append(Direction.UP)
    preferred = horizontal + vertical if abs(dx) >= abs(dy) else vertical + horizontal

    for d in (*preferred, *_CANDIDATES):
        if _is_open(world, gx, gy, d):
            return d
    return Direction.LEFT


def _ghost_speed(world: World, ghost: Ghost) -> float:
    speed = GHOST_SPEED_PIXELS_PER_UPDATE
    if ghost.state == GhostState.EATEN:
        return speed * _EATEN_SPEED_FACTOR
    if world.is_frightened():
        return speed * _FRIGHTENED_SPEED_FACTOR
    return speed


def _wander(world: World, ghost: Ghost, gx: int, gy: int) -> Direction:
    if world.is_frightened():
        return flee_direction(world, ghost, gx, gy)
    return random_direction(world, ghost, gx, gy)


def _update_ghost(world: World, ghost: Ghost) -> None:
    gx, gy = _grid(ghost.x), _grid(ghost.y)
    cx, cy = _center(gx), _center(gy)

    if abs(ghost.x - cx) < _ALIGN_TOLERANCE and abs(ghost.y - cy) < _ALIGN_TOLERANCE:
        if ghost.state == GhostState.EATEN:
            ghost.current_dir = direction_toward_target(world, gx, gy, *HOUSE_CELL)
        else:
            ghost.current_dir = _wander(world, ghost, gx, gy)
        ghost.x, ghost.y = cx, cy

    speed = _ghost_speed(world, ghost)
    if can_move_ghost(world, ghost, ghost.current_dir):
        dx, dy = dir_delta(ghost.current_dir)
        ghost.x += dx * speed
        ghost.y += dy * speed
    else:
        ghost.x, ghost.y = cx, cy
        ghost.current_dir = _wander(world, ghost, gx, gy)

    if ghost.state == GhostState.EATEN:
        hx, hy = _center(HOUSE_CELL[0]), _center(HOUSE_CELL[1])
        if abs(ghost.x - hx) < _ALIGN_TOLERANCE and abs(ghost.y - hy) < _ALIGN_TOLERANCE:
            ghost.state = GhostState.NORMAL
            ghost.current_dir = Direction.LEFT
            ghost.x, ghost.y = hx, hy

    tm = world.tile_map
    max_x = float(tm.width * TILE_SIZE)
    if ghost.x < 0:
        ghost.x += max_x
    if ghost.x >= max_x:
        ghost.x -= max_x
    min_y = float(TILE_SIZE // 2)
    max_y = float(tm.height * TILE_SIZE - TILE_SIZE // 2)
    ghost.y = min(max(ghost.y, min_y), max_y)


def update_ghosts(world: World) -> None:
    """Advance every ghost by one update."""
    for ghost in world.ghosts:
        _update_ghost(world, ghost)