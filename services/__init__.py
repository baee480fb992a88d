from .music_library import MusicLibrary, ScanError
from .audio_player import AudioPlayer, PlaybackRejected
from .media_session import MediaSession
from .player import PlayerController

__all__ = [
    'MusicLibrary',
    'ScanError',
    'AudioPlayer',
    'PlaybackRejected',
    'MediaSession',
    'PlayerController',
]
