from __future__ import annotations

from dataclasses import dataclass

from models.playback import PlaybackState
from models.track import ALL_PLAYLISTS, Track

STATUS_IDLE = "Idle"
STATUS_SCANNING = "Scanning…"


@dataclass
class Session:
    """Session-only application state.

    The library is replaced wholesale by each scan; playlist, search and
    cursor are plain values that the filter and sequencer read.
    """
    folder: str = ""
    status: str = STATUS_IDLE
    library: tuple[Track, ...] = ()
    selected_playlist: str = ALL_PLAYLISTS
    search_text: str = ""
    cursor_path: str = ""
    current_name: str = ""
    current_playlist: str = ""
    state: PlaybackState = PlaybackState.IDLE
    shuffle: bool = False
    position: float = 0.0
    duration: float = 0.0

    def replace_library(self, folder: str, tracks: list[Track]) -> None:
        """Install a new scan result and reset the filters."""
        self.folder = folder
        self.library = tuple(tracks)
        self.selected_playlist = ALL_PLAYLISTS
        self.search_text = ""

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING
