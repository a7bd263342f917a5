"""Sound effects, loaded from WAV files or synthesised as beeps."""

from __future__ import annotations

import io
import math
import os
import struct
from functools import lru_cache
from pathlib import Path

SAMPLE_RATE = 44100
DEFAULT_SOUNDS_DIR = "assets/sounds"

# file name, fallback beep duration (ms), fallback beep frequency (Hz)
_SOUNDS = {
    "pellet": ("pellet.wav", 60, 880.0),
    "power_pellet": ("power.wav", 150, 660.0),
    "ghost_eaten": ("ghost.wav", 200, 440.0),
    "death": ("death.wav", 400, 220.0),
}


def audio_enabled() -> bool:
    """Audio is off unless PACMAN_ENABLE_AUDIO=1; PACMAN_DISABLE_AUDIO=1 wins."""
    if os.environ.get("PACMAN_DISABLE_AUDIO") == "1":
        return False
    return os.environ.get("PACMAN_ENABLE_AUDIO") == "1"


@lru_cache(maxsize=None)
def _mixer():
    """Initialise the mixer once; None if no audio device is usable."""
    import pygame

    try:
        pygame.mixer.init(frequency=SAMPLE_RATE)
    except pygame.error:
        return None
    return pygame.mixer


def synth_beep_wav(sample_rate: int, duration_ms: int, freq: float) -> bytes:
    """Return a 16-bit PCM mono WAV file holding a quiet sine beep."""
    num_samples = int(sample_rate * duration_ms / 1000.0)
    data_size = num_samples * 2
    header = struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,
        1,
        1,
        sample_rate,
        sample_rate * 2,
        2,
        16,
        b"data",
        data_size,
    )
    amp = 0.25
    samples = (
        int(math.sin(2 * math.pi * freq * (i / sample_rate)) * 32767.0 * amp)
        for i in range(num_samples)
    )
    return header + struct.pack(f"<{num_samples}h", *samples)


def load_sound_data(directory: str | os.PathLike[str], filename: str) -> bytes:
    """Read a sound file's bytes; raises OSError if it cannot be read."""
    return Path(directory, filename).read_bytes()


class AudioManager:
    """Holds the game's sound effects and plays them when audio is enabled."""

    def __init__(self, sounds_dir: str | os.PathLike[str] = "") -> None:
        directory = sounds_dir or DEFAULT_SOUNDS_DIR
        self._mixer = _mixer() if audio_enabled() else None
        self.sounds: dict[str, bytes] = {}
        for key, (filename, duration_ms, freq) in _SOUNDS.items():
            try:
                raw = load_sound_data(directory, filename)
            except OSError:
                raw = synth_beep_wav(SAMPLE_RATE, duration_ms, freq)
            self.sounds[key] = raw

    @property
    def enabled(self) -> bool:
        return self._mixer is not None

    def _play(self, key: str) -> bool:
        raw = self.sounds.get(key)
        if self._mixer is None or not raw:
            return False
        import pygame

        try:
            self._mixer.Sound(io.BytesIO(raw)).play()
        except pygame.error:
            return False
        return True

    def play_pellet(self) -> bool:
        """Play the pellet sound; return whether anything was played."""
        return self._play("pellet")

    def play_power_pellet(self) -> bool:
        """Play the power-pellet sound; return whether anything was played."""
        return self._play("power_pellet")

    def play_ghost_eaten(self) -> bool:
        """Play the ghost-eaten sound; return whether anything was played."""
        return self._play("ghost_eaten")

    def play_death(self) -> bool:
        """Play the death sound; return whether anything was played."""
        return self._play("death")