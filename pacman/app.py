"""The pygame front end: window, keyboard input and drawing."""

from __future__ import annotations

import argparse
import math
from typing import Iterable, Mapping, Sequence

import pygame

from .engine import REKHA_MESSAGE, ROY_MESSAGE, Game
from .highscore import HighScoreRecord, load_leaderboard
from .tilemap import Tile
from .world import ENTITY_RADIUS, TILE_SIZE, UPDATES_PER_SECOND

WINDOW_TITLE = "Pacman"
DISPLAY_FIT_RATIO = 0.75
LEADERBOARD_SIZE = 10
LINE_HEIGHT = 14
FONT_SIZE = 15

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
WALL_BLUE = (33, 33, 255)
PLAYER_YELLOW = (255, 221, 0)
FRIGHTENED_BLUE = (0, 0, 255)
GHOST_COLORS = (
    (255, 0, 0),
    (255, 128, 255),
    (255, 128, 0),
    (0, 191, 255),
)
TIMER_CYAN = (0, 255, 255)
TITLE_GOLD = (255, 215, 0)
HINT_GRAY = (128, 128, 128)
EASTER_PINK = (255, 192, 203)

_FLASH_WINDOW_TICKS = 120
_FLASH_PERIOD_TICKS = 10

_STEER_KEYS = (
    (pygame.K_UP, "UP"),
    (pygame.K_DOWN, "DOWN"),
    (pygame.K_LEFT, "LEFT"),
    (pygame.K_RIGHT, "RIGHT"),
)


def leaderboard_lines(records: Iterable[HighScoreRecord]) -> list[str]:
    """Format the top records, best first, as numbered leaderboard lines."""
    ranked = sorted(records, key=lambda r: r.score, reverse=True)[:LEADERBOARD_SIZE]
    return [f"{i:2d}. {r.name:<12}  {r.score:6d}" for i, r in enumerate(ranked, start=1)]


def hud_text(game: Game, fps: float) -> str:
    """The status line: name, score, high score (with holder), lives and FPS."""
    hi_label = f"High({game.high_score_name})" if game.high_score_name else "High"
    name = game.player_name or "Player"
    return (
        f"{name}  Score: {game.score}  {hi_label}: {game.high_score}  "
        f"Lives: {game.lives}  FPS: {fps:.0f}"
    )


def _fit_scale(native_w: int, native_h: int, screen_w: int, screen_h: int) -> float:
    max_w = int(screen_w * DISPLAY_FIT_RATIO)
    max_h = int(screen_h * DISPLAY_FIT_RATIO)
    scale = min(max_w / native_w, max_h / native_h)
    if scale <= 0 or math.isnan(scale) or math.isinf(scale):
        return 1.0
    return scale


def _display_scale(native_w: int, native_h: int) -> float:
    try:
        pygame.display.init()
        sizes = pygame.display.get_desktop_sizes()
    except pygame.error:
        return 1.0
    if not sizes:
        return 1.0
    sw, sh = sizes[0]
    return _fit_scale(native_w, native_h, sw, sh)


def _ghost_color(game: Game, index: int) -> tuple[int, int, int]:
    if not game.is_frightened():
        return GHOST_COLORS[index % len(GHOST_COLORS)]
    remaining = game.frightened_until_tick - game.tick_counter
    if remaining < _FLASH_WINDOW_TICKS:
        return WHITE if (game.tick_counter // _FLASH_PERIOD_TICKS) % 2 == 0 else FRIGHTENED_BLUE
    return FRIGHTENED_BLUE


class App:
    """Runs a game in a pygame window."""

    def __init__(self, game: Game | None = None, scale: float | None = None) -> None:
        self.game = game if game is not None else Game()
        self.fullscreen = False
        native = self._native_size()
        self.scale = scale if scale is not None else _display_scale(*native)
        self._offscreen = pygame.Surface(native)
        self._font: pygame.font.Font | None = None
        self._clock: pygame.time.Clock | None = None

    # --- geometry ---------------------------------------------------------

    def _native_size(self) -> tuple[int, int]:
        tm = self.game.tile_map
        return tm.width * TILE_SIZE, tm.height * TILE_SIZE

    def screen_width(self) -> int:
        """Window width in pixels."""
        return int(self._native_size()[0] * self.scale)

    def screen_height(self) -> int:
        """Window height in pixels."""
        return int(self._native_size()[1] * self.scale)

    def layout(self, outside_width: int, outside_height: int) -> tuple[int, int]:
        """The logical screen size, independent of the outside window size."""
        return self.screen_width(), self.screen_height()

    # --- input ------------------------------------------------------------

    def _toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            pygame.display.toggle_fullscreen()

    def handle_event(self, event: pygame.event.Event) -> None:
        """Apply one pygame event to the game."""
        game = self.game
        if event.type == pygame.QUIT:
            game.quit = True
            return
        if event.type == pygame.TEXTINPUT:
            game.type_text(event.text)
            return
        if event.type != pygame.KEYDOWN:
            return
        key = event.key
        if game.entering_name:
            if key == pygame.K_BACKSPACE:
                game.backspace()
            elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                game.submit_name()
            elif key == pygame.K_f:
                self._toggle_fullscreen()
            elif key == pygame.K_q:
                game.request_quit()
            return
        if key == pygame.K_f:
            self._toggle_fullscreen()
        elif key == pygame.K_SPACE:
            game.toggle_pause()
        elif key == pygame.K_q:
            game.request_quit()
        elif key == pygame.K_s:
            game.toggle_leaderboard()
        elif key == pygame.K_r:
            game.show_easter_egg(REKHA_MESSAGE)
        elif key == pygame.K_y:
            game.show_easter_egg(ROY_MESSAGE)

    def poll_keys(self, pressed: Mapping[int, bool] | Sequence[bool]) -> None:
        """Steer the player from the arrow keys currently held down."""
        from .entities import Direction

        for key, name in _STEER_KEYS:
            if pressed[key]:
                self.game.steer(Direction[name])
                return

    # --- drawing ----------------------------------------------------------

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, FONT_SIZE)
        return self._font

    def _text_width(self, text: str) -> int:
        return self._get_font().size(text)[0]

    def _text(self, surface: pygame.Surface, text: str, x: int, baseline: int, color) -> None:
        font = self._get_font()
        image = font.render(text, True, color)
        surface.blit(image, (x, baseline - font.get_ascent()))

    def _centered(self, surface: pygame.Surface, text: str, baseline: int, color) -> None:
        native_w = self._native_size()[0]
        self._text(surface, text, (native_w - self._text_width(text)) // 2, baseline, color)

    def _draw_map(self, surface: pygame.Surface) -> None:
        tm = self.game.tile_map
        size = tm.tile_size
        for y, row in enumerate(tm.tiles):
            for x, tile in enumerate(row):
                px, py = x * size, y * size
                center = (px + size // 2, py + size // 2)
                if tile == Tile.WALL:
                    pygame.draw.rect(surface, WALL_BLUE, (px, py, size, size))
                elif tile == Tile.PELLET:
                    pygame.draw.circle(surface, WHITE, center, size / 8)
                elif tile == Tile.POWER:
                    pygame.draw.circle(surface, WHITE, center, size / 4)

    def _draw_leaderboard(self, surface: pygame.Surface) -> None:
        native_h = self._native_size()[1]
        y = native_h // 2 - 40
        self._centered(surface, "High Scores", y, TITLE_GOLD)
        y += LINE_HEIGHT
        for line in leaderboard_lines(load_leaderboard()):
            self._centered(surface, line, y, WHITE)
            y += LINE_HEIGHT
        self._centered(surface, "Press Q to exit", native_h - 8, HINT_GRAY)

    def draw(self, screen: pygame.Surface) -> None:
        """Render the current frame onto ``screen``."""
        game = self.game
        native_w, native_h = self._native_size()
        off = self._offscreen
        off.fill(BLACK)

        self._draw_map(off)
        p = game.player
        pygame.draw.circle(off, PLAYER_YELLOW, (p.x, p.y), ENTITY_RADIUS)
        for index, ghost in enumerate(game.ghosts):
            pygame.draw.circle(off, _ghost_color(game, index), (ghost.x, ghost.y), ENTITY_RADIUS)

        fps = self._clock.get_fps() if self._clock is not None else 0.0
        self._text(off, hud_text(game, fps), 4, 12, WHITE)

        if game.is_frightened():
            timer = f"Frightened: {game.frightened_seconds_left():.1f}s"
            x = native_w - self._text_width(timer) - 4
            self._text(off, timer, x, native_h - 4, TIMER_CYAN)

        if game.entering_name:
            self._centered(off, f"Enter name: {game.player_name}_", native_h // 2, WHITE)

        if game.showing_leaderboard:
            self._draw_leaderboard(off)

        if game.easter_message:
            self._centered(off, game.easter_message, native_h // 2 - 20, EASTER_PINK)

        screen.fill(BLACK)
        target = (self.screen_width(), self.screen_height())
        if target == (native_w, native_h):
            screen.blit(off, (0, 0))
        else:
            screen.blit(pygame.transform.scale(off, target), (0, 0))

    # --- main loop --------------------------------------------------------

    def run(self) -> None:
        """Open the window and play until the game ends or the window closes."""
        pygame.init()
        try:
            screen = pygame.display.set_mode(
                (self.screen_width(), self.screen_height()), pygame.SCALED
            )
            pygame.display.set_caption(WINDOW_TITLE)
            pygame.key.start_text_input()
            self._clock = pygame.time.Clock()
            while True:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.poll_keys(pygame.key.get_pressed())
                if not self.game.update():
                    break
                self.draw(screen)
                pygame.display.flip()
                self._clock.tick(UPDATES_PER_SECOND)
        finally:
            pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game."""
    parser = argparse.ArgumentParser(prog="pacman", description="Play Pacman.")
    parser.add_argument("--scale", type=float, default=None, help="window scale factor")
    args = parser.parse_args(argv)
    App(scale=args.scale).run()
    return 0