from enum import Enum


class PlaybackState(Enum):
    """Transport state of the player.

    IDLE until a track is selected, LOADING between a selection and the
    transport confirming playback, then PLAYING/PAUSED.
    """
    IDLE = "idle"
    LOADING = "loading"
    PLAYING = "playing"
    PAUSED = "paused"
