from .track import Track
from .playback import PlaybackState
from .session import Session
from .settings import AppSettings

__all__ = ["Track", "PlaybackState", "Session", "AppSettings"]
