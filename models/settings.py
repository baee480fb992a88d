from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_MUSIC_DIR = "MUSIC_HOOD_MUSIC_DIR"
ENV_LOG_LEVEL = "MUSIC_HOOD_LOG_LEVEL"
ENV_VOLUME = "MUSIC_HOOD_VOLUME"
ENV_SHUFFLE = "MUSIC_HOOD_SHUFFLE"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_VOLUME = 70
DEFAULT_LOG_DIR = Path.home() / ".local" / "share" / "music-hood"


@dataclass
class AppSettings:
    """Startup configuration read from the environment.

    Attributes:
        music_dir: Folder scanned on startup, or None to wait for the user.
        log_level: Name of the logging level for the log file.
        volume: Initial volume in percent (0-100).
        shuffle: Whether shuffle starts enabled.
        log_dir: Directory holding the log file.
    """
    music_dir: str | None = None
    log_level: str = "INFO"
    volume: int = DEFAULT_VOLUME
    shuffle: bool = False
    log_dir: Path = DEFAULT_LOG_DIR

    @property
    def log_file(self) -> Path:
        return self.log_dir / "music-hood.log"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> AppSettings:
        """Build settings from environment variables.

        Invalid values are logged and replaced by defaults.
        """
        env = os.environ if environ is None else environ
        settings = cls()

        music_dir = env.get(ENV_MUSIC_DIR, "").strip()
        if music_dir:
            settings.music_dir = str(Path(music_dir).expanduser())

        log_level = env.get(ENV_LOG_LEVEL, "").strip().upper()
        if log_level:
            if log_level in LOG_LEVELS:
                settings.log_level = log_level
            else:
                logger.warning(f"Invalid {ENV_LOG_LEVEL}={log_level!r}, using {settings.log_level}")

        volume = env.get(ENV_VOLUME, "").strip()
        if volume:
            try:
                settings.volume = max(0, min(100, int(volume)))
            except ValueError:
                logger.warning(f"Invalid {ENV_VOLUME}={volume!r}, using {settings.volume}")

        shuffle = env.get(ENV_SHUFFLE, "").strip().lower()
        settings.shuffle = shuffle in ("1", "true", "yes", "on")

        return settings
