import random

import pytest

from pacman.audio import AudioManager
from pacman.engine import (
    MAX_GHOST_POINTS,
    REKHA_MESSAGE,
    ROY_MESSAGE,
    Game,
)
from pacman.entities import Direction, GhostState
from pacman.highscore import HighScoreRecord, load_high_score, save_high_score_record
from pacman.tilemap import Tile


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path):
    monkeypatch.setenv("PACMAN_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("PACMAN_DISABLE_AUDIO", "1")


def make_game(**kwargs):
    return Game(audio=AudioManager("/nonexistent/path"), rng=random.Random(0), **kwargs)


def playing_game():
    g = make_game()
    g.type_text("Tester")
    assert g.submit_name()
    return g


def test_player_cannot_move_through_wall():
    g = playing_game()
    g.ghosts = []
    tm = g.tile_map
    spot = next(
        (x, y)
        for y in range(1, tm.height - 1)
        for x in range(1, tm.width - 1)
        if tm.is_wall(x, y) and not tm.is_wall(x - 1, y)
    )
    x, y = spot
    g.player.x = float((x - 1) * 16 + 8)
    g.player.y = float(y * 16 + 8)
    g.player.current_dir = Direction.NONE
    g.steer(Direction.RIGHT)
    old_x = g.player.x
    for _ in range(30):
        g.update()
    assert g.player.x <= old_x + 7


def test_frightened_mode_timeout():
    g = playing_game()
    g.paused = True
    assert not g.is_frightened()
    g.tick_counter = 100
    g.frightened_until_tick = 220
    assert g.is_frightened()
    for _ in range(119):
        g.update()
    assert g.is_frightened()
    g.update()
    assert not g.is_frightened()
    assert g.frightened_until_tick == 0


def test_new_loads_existing_high_score():
    save_high_score_record(HighScoreRecord(name="Bob", score=777))
    g = make_game()
    assert (g.high_score, g.high_score_name) == (777, "Bob")


def test_initial_high_score_is_zero():
    g = make_game()
    assert g.high_score == 0
    assert g.lives == 3
    assert g.entering_name


def test_high_score_updated_on_pellet_collision():
    g = make_game()
    gx, gy = g.player_grid()
    g.player.x, g.player.y = g.cell_center(gx, gy)
    g.tile_map.tiles[gy][gx] = Tile.PELLET
    g.handle_pellet_collision()
    assert g.score == 10
    assert g.high_score == 10
    assert load_high_score() == 10
    assert g.tile_map.tiles[gy][gx] == Tile.EMPTY


def test_power_pellet_frightens_and_reverses_ghosts():
    g = make_game()
    for ghost in g.ghosts:
        ghost.current_dir = Direction.LEFT
    g.tick_counter = 50
    gx, gy = g.player_grid()
    g.player.x, g.player.y = g.cell_center(gx, gy)
    g.tile_map.tiles[gy][gx] = Tile.POWER
    g.handle_pellet_collision()
    assert g.score == 50
    assert g.frightened_until_tick == 170
    assert all(ghost.current_dir == Direction.RIGHT for ghost in g.ghosts)


def test_pellet_not_eaten_off_centre():
    g = make_game()
    gx, gy = g.player_grid()
    cx, cy = g.cell_center(gx, gy)
    g.player.x, g.player.y = cx + 6, cy
    g.tile_map.tiles[gy][gx] = Tile.PELLET
    g.handle_pellet_collision()
    assert g.score == 0


def test_high_score_updated_on_ghost_eat_when_frightened():
    g = make_game()
    g.tick_counter = 100
    g.frightened_until_tick = 200
    g.ghosts[0].x, g.ghosts[0].y = g.player.x, g.player.y
    g.check_player_ghost_collision()
    assert g.score == 200
    assert load_high_score() == 200
    assert g.ghosts[0].state == GhostState.EATEN
    assert g.ghosts[0].current_dir == Direction.NONE
    assert g.lives == 3


def test_ghost_combo_doubles_and_caps():
    g = make_game()
    g.tick_counter = 100
    g.frightened_until_tick = 200
    for ghost in g.ghosts[:2]:
        ghost.x, ghost.y = g.player.x, g.player.y
    g.check_player_ghost_collision()
    assert g.score == 600
    assert g.ghost_eat_combo == 2

    g2 = make_game()
    g2.tick_counter = 100
    g2.frightened_until_tick = 200
    g2.ghost_eat_combo = 5
    g2.ghosts[0].x, g2.ghosts[0].y = g2.player.x, g2.player.y
    g2.check_player_ghost_collision()
    assert g2.score == MAX_GHOST_POINTS


def test_high_score_saved_on_game_over():
    g = make_game()
    g.lives = 1
    g.score = 123
    g.high_score = 0
    g.ghosts[0].x, g.ghosts[0].y = g.player.x, g.player.y
    g.check_player_ghost_collision()
    assert g.lives == 0
    assert load_high_score() == 123
    assert g.showing_leaderboard


def test_death_resets_positions():
    g = make_game()
    g.player.x += 32
    g.ghosts[0].x, g.ghosts[0].y = g.player.x, g.player.y
    g.check_player_ghost_collision()
    assert g.lives == 2
    assert (g.player.x, g.player.y) == (14 * 16 + 8.0, 26 * 16 + 8.0)
    assert not g.showing_leaderboard


def test_name_entry_filters_and_limits():
    g = make_game()
    g.type_text("Al!ce_ 123456789")
    assert g.player_name == "Alce_ 123456"
    g.backspace()
    assert g.player_name == "Alce_ 12345"


def test_submit_empty_name_is_refused():
    g = make_game()
    assert not g.submit_name()
    assert g.entering_name


@pytest.mark.parametrize("name,message", [("Rekha", REKHA_MESSAGE), (" roy ", ROY_MESSAGE)])
def test_name_easter_eggs(name, message):
    g = make_game()
    g.tick_counter = 10
    g.type_text(name)
    assert g.submit_name()
    assert g.easter_message == message
    assert g.easter_until_tick == 190


def test_easter_message_expires():
    g = make_game()
    g.show_easter_egg(ROY_MESSAGE)
    for _ in range(179):
        g.update()
    assert g.easter_message == ROY_MESSAGE
    g.update()
    assert g.easter_message == ""
    assert g.easter_until_tick == 0


def test_update_does_not_move_while_entering_name():
    g = make_game()
    g.player.desired_dir = Direction.LEFT
    start = (g.player.x, g.player.y)
    for _ in range(5):
        g.update()
    assert (g.player.x, g.player.y) == start


def test_quit_during_name_entry():
    g = make_game()
    g.score = 40
    g.request_quit()
    assert g.quit
    assert load_high_score() == 40
    assert g.update() is False


def test_quit_shows_leaderboard_first():
    g = playing_game()
    g.request_quit()
    assert g.showing_leaderboard and not g.quit
    assert g.update() is True
    g.request_quit()
    assert g.quit


def test_steer_ignored_while_paused():
    g = playing_game()
    g.toggle_pause()
    g.steer(Direction.LEFT)
    assert g.player.desired_dir == Direction.NONE
    g.toggle_pause()
    g.steer(Direction.LEFT)
    assert g.player.desired_dir == Direction.LEFT


def test_toggles_ignored_while_entering_name():
    g = make_game()
    g.toggle_pause()
    g.toggle_leaderboard()
    assert not g.paused
    assert not g.showing_leaderboard


def test_can_turn_from_start():
    g = make_game()
    assert g.can_turn(Direction.LEFT)
    assert g.can_turn(Direction.RIGHT)
    assert not g.can_turn(Direction.UP)