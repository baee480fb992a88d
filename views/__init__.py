from .library import LibraryView, TrackChanged
from .now_playing import NowPlayingView

__all__ = ["LibraryView", "TrackChanged", "NowPlayingView"]
