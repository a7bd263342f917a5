"""A maze-chase arcade game with a persistent leaderboard."""

__version__ = "1.0.0"