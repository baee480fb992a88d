import logging
import time
from typing import Optional

import pygame
from mutagen import File as MutagenFile

logger = logging.getLogger(__name__)

DEFAULT_VOLUME = 0.7


class PlaybackRejected(Exception):
    """Raised when the mixer refuses to load or start a file."""
    pass


class AudioPlayer:
    """Media transport backed by pygame's music mixer.

    The player only knows about file paths; which file to play next is
    decided by the caller.
    """

    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, volume: float = DEFAULT_VOLUME):
        if not hasattr(self, '_initialized'):
            try:
                pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=512)
            except pygame.error as e:
                raise RuntimeError(f"Audio output unavailable: {e}") from e

            self._path: Optional[str] = None
            self._volume: float = max(0.0, min(1.0, volume))
            self._muted: bool = False
            self._playing: bool = False
            self._paused: bool = False
            self._start_time: float = 0
            self._pause_position: float = 0
            self._duration: float = 0.0

            pygame.mixer.music.set_volume(self._volume)
            self._initialized = True

    def load(self, path: str) -> None:
        """Load a file, stopping whatever was playing.

        Raises:
            PlaybackRejected: If the mixer cannot open the file.
        """
        pygame.mixer.music.stop()
        self._playing = False
        self._paused = False
        self._start_time = 0
        self._pause_position = 0
        self._duration = 0.0
        self._path = None

        try:
            pygame.mixer.music.load(path)
        except pygame.error as e:
            logger.warning(f"Mixer rejected {path}: {e}")
            raise PlaybackRejected(str(e)) from e

        self._path = path
        self._duration = self._probe_duration(path)

    def play(self) -> None:
        """Start the loaded file from the beginning, or resume if paused.

        Raises:
            PlaybackRejected: If nothing is loaded or the mixer refuses.
        """
        if self._path is None:
            raise PlaybackRejected("No file loaded")

        if self._paused:
            self.resume()
            return

        try:
            pygame.mixer.music.play()
        except pygame.error as e:
            logger.warning(f"Mixer refused to play {self._path}: {e}")
            raise PlaybackRejected(str(e)) from e

        self._playing = True
        self._paused = False
        self._start_time = time.time()
        self._pause_position = 0

    def pause(self) -> None:
        """Pause playback."""
        if self._playing and not self._paused:
            pygame.mixer.music.pause()
            self._paused = True
            self._pause_position = time.time() - self._start_time

    def resume(self) -> None:
        """Resume playback from paused state."""
        if self._paused:
            pygame.mixer.music.unpause()
            self._paused = False
            self._start_time = time.time() - self._pause_position

    def stop(self) -> None:
        """Stop playback and reset position."""
        pygame.mixer.music.stop()
        self._playing = False
        self._paused = False
        self._start_time = 0
        self._pause_position = 0

    @property
    def position(self) -> float:
        """Elapsed seconds in the current file."""
        if not self._playing:
            return 0.0
        if self._paused:
            return self._pause_position
        return time.time() - self._start_time

    @position.setter
    def position(self, seconds: float) -> None:
        if not self._playing:
            return
        seconds = max(0.0, seconds)
        try:
            pygame.mixer.music.play(start=seconds)
            if self._paused:
                pygame.mixer.music.pause()
        except pygame.error as e:
            logger.warning(f"Seek to {seconds:.1f}s failed: {e}")
            return
        if self._paused:
            self._pause_position = seconds
        else:
            self._start_time = time.time() - seconds

    @property
    def duration(self) -> float:
        """Length of the loaded file in seconds, 0.0 while unknown."""
        return self._duration

    @property
    def paused(self) -> bool:
        return not self._playing or self._paused

    def track_ended_naturally(self) -> bool:
        """Report, once, that the current file finished on its own."""
        if self._playing and not self._paused and not pygame.mixer.music.get_busy():
            self._playing = False
            return True
        return False

    def set_volume(self, level: float) -> None:
        """Set volume level (0.0 to 1.0)."""
        self._volume = max(0.0, min(1.0, level))
        self._muted = False
        pygame.mixer.music.set_volume(self._volume)

    def increase_volume(self, amount: float = 0.05) -> None:
        """Increase volume by specified amount."""
        self.set_volume(self._volume + amount)

    def decrease_volume(self, amount: float = 0.05) -> None:
        """Decrease volume by specified amount."""
        self.set_volume(self._volume - amount)

    def toggle_mute(self) -> None:
        self._muted = not self._muted
        pygame.mixer.music.set_volume(0.0 if self._muted else self._volume)

    def get_volume(self) -> float:
        """Return current volume level (0.0 to 1.0)."""
        return self._volume

    def is_muted(self) -> bool:
        return self._muted

    @staticmethod
    def _probe_duration(path: str) -> float:
        try:
            audio = MutagenFile(path)
        except Exception as e:
            logger.debug(f"Could not read duration of {path}: {e}")
            return 0.0
        if audio is not None and audio.info and hasattr(audio.info, 'length'):
            return float(audio.info.length)
        return 0.0
