"""Persisted leaderboard of player names and their best scores."""

from __future__ import annotations

import json
import os
import re
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

CONFIG_DIR_NAME = "pacman"
LEGACY_FILE_NAME = "highscore.txt"
JSON_FILE_NAME = "highscore.json"

_INTEGER = re.compile(r"[+-]?\d+")


@dataclass
class HighScoreRecord:
    """A player's name and best score."""

    name: str = ""
    score: int = 0


def _user_config_dir() -> Path:
    if sys.platform == "win32":
        appdata = os.environ.get("AppData", "")
        if not appdata:
            raise OSError("%AppData% is not defined")
        return Path(appdata)
    if sys.platform == "darwin":
        home = os.environ.get("HOME", "")
        if not home:
            raise OSError("$HOME is not defined")
        return Path(home) / "Library" / "Application Support"
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        if not os.path.isabs(xdg):
            raise OSError("path in $XDG_CONFIG_HOME is relative")
        return Path(xdg)
    home = os.environ.get("HOME", "")
    if not home:
        raise OSError("neither $XDG_CONFIG_HOME nor $HOME are defined")
    return Path(home) / ".config"


def config_base_dir() -> Path:
    """Return (and create) the directory holding the score files.

    ``PACMAN_CONFIG_DIR`` is used as-is when set; otherwise a ``pacman``
    directory under the user's configuration directory.
    """
    env = os.environ.get("PACMAN_CONFIG_DIR", "")
    directory = Path(env) if env else _user_config_dir() / CONFIG_DIR_NAME
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def high_score_file_path() -> Path:
    """Return the path of the JSON leaderboard file."""
    return config_base_dir() / JSON_FILE_NAME


def _record_from_json(obj: Any) -> HighScoreRecord:
    if obj is None:
        return HighScoreRecord()
    if not isinstance(obj, dict):
        raise ValueError("record is not an object")
    name = obj.get("name")
    score = obj.get("score")
    if name is None:
        name = ""
    if score is None:
        score = 0
    if not isinstance(name, str):
        raise ValueError("name is not a string")
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValueError("score is not an integer")
    return HighScoreRecord(name=name, score=score)


def _load_json_leaderboard(path: Path) -> list[HighScoreRecord] | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if data is None:
        return []
    if isinstance(data, list):
        try:
            return [_record_from_json(item) for item in data]
        except ValueError:
            return None
    if isinstance(data, dict):
        try:
            record = _record_from_json(data)
        except ValueError:
            return None
        if record.score >= 0:
            return [record]
    return None


def _load_legacy(path: Path) -> list[HighScoreRecord] | None:
    try:
        with path.open(encoding="utf-8", errors="replace") as fh:
            first = fh.readline()
    except OSError:
        return None
    text = first.strip()
    if _INTEGER.fullmatch(text):
        score = int(text)
        if score >= 0:
            return [HighScoreRecord(name="", score=score)]
    return None


def load_leaderboard() -> list[HighScoreRecord]:
    """Load every known record, in file order.

    Reads a JSON array of records, or a single record object, and falls back
    to the legacy text file holding one score. Returns an empty list when
    nothing can be read.
    """
    try:
        directory = config_base_dir()
    except OSError:
        return []
    records = _load_json_leaderboard(directory / JSON_FILE_NAME)
    if records is not None:
        return records
    return _load_legacy(directory / LEGACY_FILE_NAME) or []


def load_high_score_record() -> HighScoreRecord | None:
    """Return the record with the highest score, or None if there is none."""
    records = load_leaderboard()
    if not records:
        return None
    return max(records, key=lambda r: r.score)


def load_high_score() -> int:
    """Return the best persisted score, or 0."""
    record = load_high_score_record()
    return record.score if record else 0


def _same_name(a: str, b: str) -> bool:
    return a.strip().casefold() == b.strip().casefold()


def save_high_score_record(record: HighScoreRecord) -> None:
    """Insert or raise a player's record in the leaderboard and write it atomically."""
    if record is None:
        raise ValueError("nil record")
    if record.score < 0:
        raise ValueError("score must be non-negative")
    directory = config_base_dir()
    leaderboard = load_leaderboard()
    existing = next((r for r in leaderboard if _same_name(r.name, record.name)), None)
    if existing is None:
        leaderboard.append(HighScoreRecord(name=record.name, score=record.score))
    elif record.score > existing.score:
        existing.score = record.score
    path = directory / JSON_FILE_NAME
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(
        json.dumps([asdict(r) for r in leaderboard], indent=2), encoding="utf-8"
    )
    os.replace(tmp, path)


def save_high_score(score: int) -> None:
    """Save a score under the current best record's name (empty if none)."""
    if score < 0:
        raise ValueError("score must be non-negative")
    current = load_high_score_record()
    name = current.name if current else ""
    save_high_score_record(HighScoreRecord(name=name, score=score))