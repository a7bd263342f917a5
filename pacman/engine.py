"""Game rules: scoring, lives, name entry, pausing, the leaderboard and easter eggs."""

from __future__ import annotations

import random

from .audio import DEFAULT_SOUNDS_DIR, AudioManager
from .entities import Direction, GhostState
from .ghosts import update_ghosts
from .highscore import HighScoreRecord, load_high_score_record, save_high_score_record
from .tilemap import TileMap
from .world import (
    ENTITY_RADIUS,
    FRIGHTENED_DURATION_UPDATES,
    UPDATES_PER_SECOND,
    World,
)

EASTER_EGG_CHANCE = 6000
EASTER_EGG_DURATION_SECONDS = 3
MAX_PLAYER_NAME_LENGTH = 12
STARTING_LIVES = 3

PELLET_POINTS = 10
POWER_PELLET_POINTS = 50
BASE_GHOST_POINTS = 200
MAX_GHOST_POINTS = 1600

REKHA_MESSAGE = "Dad Loves Rekha"
ROY_MESSAGE = "Dad Loves Roy"

_NAME_EASTER_EGGS = {"rekha": REKHA_MESSAGE, "roy": ROY_MESSAGE}


def _allowed_name_char(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ("0" <= ch <= "9") or ch in " _-"


class Game(World):
    """A running game: the maze world plus score, lives and screen state."""

    def __init__(
        self,
        tile_map: TileMap | None = None,
        audio: AudioManager | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(tile_map)
        self.score = 0
        self.lives = STARTING_LIVES
        record = load_high_score_record()
        self.high_score = record.score if record else 0
        self.high_score_name = record.name if record else ""
        self.player_name = ""
        self.entering_name = True
        self.showing_leaderboard = False
        self.paused = False
        self.quit = False
        self.easter_message = ""
        self.easter_until_tick = 0
        self.audio = audio if audio is not None else AudioManager(DEFAULT_SOUNDS_DIR)
        self.rng = rng if rng is not None else random.Random()

    # --- per-update logic -------------------------------------------------

    def update(self) -> bool:
        """Advance the game one update; return False once the game should end."""
        self.tick_counter += 1
        if self.quit:
            return False

        if self.easter_until_tick and self.tick_counter >= self.easter_until_tick:
            self.easter_until_tick = 0
            self.easter_message = ""

        if not self.entering_name and not self.showing_leaderboard and not self.easter_message:
            if self.rng.randrange(EASTER_EGG_CHANCE) == 0:
                self.show_easter_egg(REKHA_MESSAGE if self.rng.randrange(2) == 0 else ROY_MESSAGE)

        if self.showing_leaderboard or self.entering_name:
            return True

        if self.frightened_until_tick and self.tick_counter >= self.frightened_until_tick:
            self.frightened_until_tick = 0
            self.ghost_eat_combo = 0
        if self.paused:
            return True

        self.update_player_movement()
        self.handle_pellet_collision()
        update_ghosts(self)
        self.check_player_ghost_collision()
        return True

    def _record_high_score(self) -> None:
        """Raise and persist the high score if the current score beats it."""
        if self.score <= self.high_score:
            return
        self.high_score = self.score
        try:
            save_high_score_record(HighScoreRecord(name=self.player_name, score=self.high_score))
        except (OSError, ValueError):
            pass

    def handle_pellet_collision(self) -> None:
        """Eat the pellet in the player's cell when the player is near its centre."""
        if not self.is_near_cell_center():
            return
        gx, gy = self.player_grid()
        ate, power = self.tile_map.eat_pellet_at(gx, gy)
        if not ate:
            return
        if power:
            self.score += POWER_PELLET_POINTS
            self.frightened_until_tick = self.tick_counter + FRIGHTENED_DURATION_UPDATES
            self.ghost_eat_combo = 0
            self.reverse_all_ghosts()
            self.audio.play_power_pellet()
        else:
            self.score += PELLET_POINTS
            self.audio.play_pellet()
        self._record_high_score()

    def check_player_ghost_collision(self) -> None:
        """Eat touching ghosts while frightened; otherwise lose a life on contact."""
        reach = float(ENTITY_RADIUS + ENTITY_RADIUS)
        p = self.player
        for ghost in self.ghosts:
            dx, dy = p.x - ghost.x, p.y - ghost.y
            if dx * dx + dy * dy > reach * reach:
                continue
            if self.is_frightened():
                points = BASE_GHOST_POINTS << self.ghost_eat_combo
                self.score += min(points, MAX_GHOST_POINTS)
                self.audio.play_ghost_eaten()
                self._record_high_score()
                self.ghost_eat_combo += 1
                ghost.state = GhostState.EATEN
                ghost.current_dir = Direction.NONE
                continue
            self.lives -= 1
            self.audio.play_death()
            self.reset_positions()
            if self.lives <= 0:
                self._record_high_score()
                self.showing_leaderboard = True
            return

    # --- input ------------------------------------------------------------

    def type_text(self, text: str) -> None:
        """Append typed characters to the player's name while it is being entered."""
        if not self.entering_name:
            return
        for ch in text:
            if len(self.player_name) >= MAX_PLAYER_NAME_LENGTH:
                break
            if _allowed_name_char(ch):
                self.player_name += ch

    def backspace(self) -> None:
        """Delete the last character of the name being entered."""
        if self.entering_name and self.player_name:
            self.player_name = self.player_name[:-1]

    def submit_name(self) -> bool:
        """Finish name entry if a name was typed; return whether play started."""
        if not self.entering_name or not self.player_name:
            return False
        self.entering_name = False
        message = _NAME_EASTER_EGGS.get(self.player_name.strip().lower())
        if message:
            self.show_easter_egg(message)
        return True

    def steer(self, direction: Direction) -> None:
        """Queue a direction for the player while play is active."""
        if self.entering_name or self.showing_leaderboard or self.paused:
            return
        self.player.desired_dir = direction

    def toggle_pause(self) -> None:
        """Pause or resume play (not while entering a name)."""
        if not self.entering_name:
            self.paused = not self.paused

    def toggle_leaderboard(self) -> None:
        """Show or hide the leaderboard (not while entering a name)."""
        if not self.entering_name:
            self.showing_leaderboard = not self.showing_leaderboard

    def request_quit(self) -> None:
        """Save the score, then show the leaderboard, or end if it is already shown."""
        self._record_high_score()
        if self.entering_name or self.showing_leaderboard:
            self.quit = True
        else:
            self.showing_leaderboard = True

    def show_easter_egg(self, message: str) -> None:
        """Display an overlay message for a few seconds."""
        self.easter_message = message
        self.easter_until_tick = self.tick_counter + UPDATES_PER_SECOND * EASTER_EGG_DURATION_SECONDS