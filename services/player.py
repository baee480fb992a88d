from __future__ import annotations

import logging
import random
from typing import Optional, Protocol

from models.playback import PlaybackState
from models.session import STATUS_SCANNING, Session
from models.track import Track, display_name
from services.audio_player import PlaybackRejected
from services.library_filter import LibraryView, compose_view
from services.media_session import MediaSession, NowPlaying
from services.music_library import MusicLibrary, ProgressCallback, ScanError
from services import sequencer

logger = logging.getLogger(__name__)

APP_TITLE = "music-hood"


class Transport(Protocol):
    """What the controller needs from a media backend."""

    position: float

    @property
    def duration(self) -> float: ...

    def load(self, path: str) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def track_ended_naturally(self) -> bool: ...


class PlayerController:
    """Owns the session and drives scanning, filtering and sequencing.

    Every read of the visible tracks recomputes them from the library and
    the current filters; the position of the loaded track is looked up by
    path each time. Only select() moves the cursor.
    """

    def __init__(
        self,
        transport: Transport,
        music_library: Optional[MusicLibrary] = None,
        media_session: Optional[MediaSession] = None,
        session: Optional[Session] = None,
        rng: Optional[random.Random] = None,
    ):
        self.transport = transport
        self.music_library = music_library or MusicLibrary()
        self.media_session = media_session or MediaSession()
        self.session = session or Session()
        self._rng = rng or random.Random()
        self._scan_generation = 0
        self._bind_media_session()

    @property
    def view(self) -> LibraryView:
        s = self.session
        return compose_view(s.library, s.selected_playlist, s.search_text)

    @property
    def filtered_tracks(self) -> list[Track]:
        return self.view.tracks

    @property
    def playlists(self) -> list[str]:
        return self.view.playlists

    @property
    def current_index(self) -> int:
        return sequencer.current_index(self.filtered_tracks, self.session.cursor_path)

    @property
    def state(self) -> PlaybackState:
        return self.session.state

    async def scan(self, root: str, progress_callback: ProgressCallback | None = None) -> bool:
        """Scan root and install the result as the new library.

        The previous library stays visible while the scan runs and is kept
        if the scan fails. A scan started later wins over one still running.

        Returns:
            True if the new library was installed.
        """
        self._scan_generation += 1
        generation = self._scan_generation
        self.session.status = STATUS_SCANNING

        try:
            tracks = await self.music_library.scan(root, progress_callback)
        except ScanError as e:
            if generation == self._scan_generation:
                self.session.status = f"Scan error: {e}"
            return False

        if generation != self._scan_generation:
            logger.info(f"Discarding superseded scan of {root}")
            return False

        self.session.replace_library(root, tracks)
        self.session.status = f"Found {len(tracks)} tracks"
        return True

    def set_playlist(self, playlist: str) -> None:
        self.session.selected_playlist = playlist
        logger.debug(f"Playlist filter: {playlist}")

    def set_search(self, text: str) -> None:
        self.session.search_text = text

    def select(self, track: Track) -> PlaybackState:
        """Make track the current one and start playing it.

        Elapsed time and duration are cleared before the file is loaded. A
        rejected load or play leaves the track selected but paused.
        """
        s = self.session
        s.cursor_path = track.path
        s.current_name = track.name
        s.current_playlist = track.playlist
        s.position = 0.0
        s.duration = 0.0
        s.state = PlaybackState.LOADING
        logger.debug(f"Loading {track.path}")

        try:
            self.transport.load(track.path)
            self.transport.play()
        except PlaybackRejected as e:
            logger.warning(f"Playback of {track.name} rejected: {e}")
            s.state = PlaybackState.PAUSED
        else:
            s.state = PlaybackState.PLAYING
            s.duration = self.transport.duration

        self._publish_now_playing()
        return s.state

    def next_track(self) -> Optional[Track]:
        """Select the track after the current one in the visible list."""
        tracks = self.filtered_tracks
        idx = sequencer.next_index(len(tracks), self._index_in(tracks), self.session.shuffle, self._rng)
        if idx is None:
            return None
        self.select(tracks[idx])
        return tracks[idx]

    def previous_track(self) -> Optional[Track]:
        """Select the track before the current one in the visible list."""
        tracks = self.filtered_tracks
        idx = sequencer.previous_index(len(tracks), self._index_in(tracks), self.session.shuffle, self._rng)
        if idx is None:
            return None
        self.select(tracks[idx])
        return tracks[idx]

    def _index_in(self, tracks: list[Track]) -> int:
        return sequencer.current_index(tracks, self.session.cursor_path)

    def toggle_play_pause(self) -> PlaybackState:
        """Pause when playing, play when paused. Does nothing when idle."""
        s = self.session
        if s.state == PlaybackState.IDLE:
            return s.state

        if s.state in (PlaybackState.PLAYING, PlaybackState.LOADING):
            self.transport.pause()
            s.state = PlaybackState.PAUSED
        else:
            try:
                self.transport.play()
            except PlaybackRejected as e:
                logger.warning(f"Resume rejected: {e}")
            else:
                s.state = PlaybackState.PLAYING

        self._publish_now_playing()
        return s.state

    def toggle_shuffle(self) -> bool:
        self.session.shuffle = not self.session.shuffle
        logger.debug(f"Shuffle {'on' if self.session.shuffle else 'off'}")
        return self.session.shuffle

    def on_track_end(self) -> Optional[Track]:
        """Advance once after the transport finishes a file."""
        logger.debug("Track ended naturally, advancing to next")
        track = self.next_track()
        if track is None:
            self.session.state = PlaybackState.PAUSED
            self._publish_now_playing()
        return track

    def on_time_update(self, position: float) -> None:
        self.session.position = max(0.0, position)

    def on_duration(self, duration: float) -> None:
        self.session.duration = max(0.0, duration)

    def poll(self) -> Optional[Track]:
        """Copy transport timing into the session and handle track end.

        Returns:
            The newly selected track if the current one just ended.
        """
        if self.session.state == PlaybackState.IDLE:
            return None
        if self.transport.track_ended_naturally():
            return self.on_track_end()
        self.on_time_update(self.transport.position)
        if self.transport.duration:
            self.on_duration(self.transport.duration)
        return None

    def seek(self, seconds: float) -> float:
        """Jump to seconds, clamped to the known duration."""
        target = max(0.0, min(seconds, self.session.duration))
        self.transport.position = target
        self.session.position = target
        return target

    def seek_relative(self, offset: float) -> float:
        return self.seek(self.session.position + offset)

    @property
    def now_playing(self) -> NowPlaying:
        s = self.session
        if not s.current_name:
            return NowPlaying(title=APP_TITLE, album="")
        return NowPlaying(title=display_name(s.current_name), album=s.current_playlist)

    @property
    def now_playing_label(self) -> str:
        if not self.session.current_name:
            return "Nothing playing"
        info = self.now_playing
        suffix = f" ({info.album})" if info.album else ""
        return f"{info.title}{suffix}"

    def _publish_now_playing(self) -> None:
        self.media_session.update(self.now_playing, self.session.is_playing)

    def _bind_media_session(self) -> None:
        ms = self.media_session
        ms.set_action_handler("play", lambda **_: self.toggle_play_pause())
        ms.set_action_handler("pause", lambda **_: self.toggle_play_pause())
        ms.set_action_handler("previoustrack", lambda **_: self.previous_track())
        ms.set_action_handler("nexttrack", lambda **_: self.next_track())
        ms.set_action_handler("seekto", self._handle_seek_to)

    def _handle_seek_to(self, seek_time: float | None = None, **_) -> None:
        if isinstance(seek_time, (int, float)):
            self.seek(seek_time)
