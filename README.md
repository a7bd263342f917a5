# pacman

A maze-chase arcade game. Steer through the classic 28-column maze, eat
pellets and power pellets, and avoid the four ghosts, or chase them down
while they are frightened. Scores are kept in a small leaderboard on disk.

## Installing

```
pip install .
```

The game window is drawn with pygame, which is installed as a dependency.

## Playing

```
pacman
```

The window is sized to fit about three quarters of the display. Pass
`--scale` to choose the scale factor yourself:

```
pacman --scale 2
```

At start-up the game asks for your name (letters, digits, space, `_` and
`-`, up to 12 characters). Press Enter to begin. While entering the name,
Backspace deletes a character, F toggles fullscreen and Q exits.

| Key         | Action                                              |
|-------------|-----------------------------------------------------|
| Arrow keys  | Steer; the turn is taken when the way is open       |
| Space       | Pause / resume                                      |
| F           | Toggle fullscreen                                   |
| S           | Show / hide the leaderboard                         |
| Q           | Show the leaderboard; press again to exit           |
| R, Y        | Show a short overlay message                        |

Scoring:

- pellet: 10 points
- power pellet: 50 points, and the ghosts turn blue, slow down and flee for
  two seconds
- frightened ghost: 200, then 400, 800 and 1600 for each further ghost
  eaten during the same power-up; an eaten ghost returns to the ghost house

You have three lives. When a ghost catches you, the player and the ghosts
go back to their starting places; when the last life is gone the
leaderboard is shown.

## High scores

Scores are stored as JSON in `highscore.json`, inside a `pacman` directory
under your user configuration directory. Each name keeps its best score;
names are matched case-insensitively and ignoring surrounding spaces. A
legacy `highscore.txt` holding a single number is read when the JSON file
is missing or cannot be read.

Set `PACMAN_CONFIG_DIR` to keep the files in another directory.

## Sound

Sound is off by default. Set `PACMAN_ENABLE_AUDIO=1` to turn it on, or
`PACMAN_DISABLE_AUDIO=1` to force it off. The game plays `pellet.wav`,
`power.wav`, `ghost.wav` and `death.wav` from `assets/sounds` (relative to
the working directory) when they exist, and short synthesized beeps in
their place when they do not.

## Using it as a library

The game logic runs without a window, which makes it easy to script or
test:

```python
from pacman.engine import Game
from pacman.entities import Direction

game = Game()
game.type_text("Ana")
game.submit_name()
game.steer(Direction.LEFT)
for _ in range(60):
    if not game.update():
        break
print(game.score, game.lives)
```

`Game.update()` advances one tick and returns `False` once the game should
end. Other useful pieces:

- `pacman.highscore`: `load_leaderboard()`, `load_high_score_record()`,
  `load_high_score()`, `save_high_score_record(...)` and `save_high_score(...)`.
- `pacman.tilemap`: `TileMap.default(16)` builds the standard maze;
  `is_wall(x, y)` and `eat_pellet_at(x, y)` query and change it.
- `pacman.audio`: `synth_beep_wav(sample_rate, duration_ms, freq)` returns a
  complete 16-bit mono WAV file as bytes.
- `pacman.app`: `App` runs a `Game` in a pygame window; `main()` is the
  `pacman` command.

## Limits

There is a single maze and no level progression: clearing every pellet
does not start a new round. Ghosts wander at random and flee when
frightened; they do not chase the player.

## Running the tests

```
pip install ".[test]"
pytest
```