from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.message import Message
from textual.widgets import Input, Label, ListItem, ListView
from rich.text import Text

from models.track import Track
from services.player import PlayerController
from styles import COLOR_ACCENT, COLOR_MUTED

logger = logging.getLogger(__name__)

PLAYING_MARK = "♪"


class TrackChanged(Message):
    """Posted after the user picked a track from the list."""


class LibraryView(Container):
    """Playlist list, search box and the filtered track list."""

    BINDINGS = [
        ("j", "move_down", "Move down"),
        ("k", "move_up", "Move up"),
    ]

    def __init__(self, controller: PlayerController, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.controller = controller
        self._playlists: list[str] = []
        self._visible: list[Track] = []

    def compose(self) -> ComposeResult:
        """Compose playlists on the left, search and tracks on the right."""
        with Horizontal(id="library-columns"):
            with Vertical(id="playlist-column"):
                yield Label("Playlists", classes="column-title")
                yield ListView(id="playlist-list")
            with Vertical(id="track-column"):
                yield Input(placeholder="Search tracks or playlists", id="search")
                yield Label("0 tracks", id="track-count", classes="column-title")
                yield ListView(id="track-list")

    def on_mount(self) -> None:
        self.refresh_library()

    def refresh_library(self) -> None:
        """Rebuild both lists after a scan replaced the library."""
        search = self.query_one("#search", Input)
        if search.value != self.controller.session.search_text:
            search.value = self.controller.session.search_text
        self._populate_playlists()
        self._populate_tracks()

    def _populate_playlists(self) -> None:
        try:
            playlist_list = self.query_one("#playlist-list", ListView)
            playlist_list.clear()
            self._playlists = self.controller.playlists

            for name in self._playlists:
                playlist_list.append(ListItem(Label(Text(name))))

            selected = self.controller.session.selected_playlist
            if selected in self._playlists:
                playlist_list.index = self._playlists.index(selected)
        except Exception as e:
            logger.error(f"Error populating playlists: {e}")

    def _populate_tracks(self) -> None:
        try:
            track_list = self.query_one("#track-list", ListView)
            track_list.clear()
            self._visible = self.controller.filtered_tracks

            for track in self._visible:
                track_list.append(ListItem(Label(self._format_track(track))))

            count = len(self._visible)
            self.query_one("#track-count", Label).update(f"{count} track{'s' if count != 1 else ''}")
            logger.debug(f"Populated track list with {count} tracks")
        except Exception as e:
            logger.error(f"Error populating tracks: {e}")

    def _format_track(self, track: Track) -> Text:
        mark = PLAYING_MARK if track.path == self.controller.session.cursor_path else " "
        return Text.assemble(
            (mark, COLOR_ACCENT),
            " ",
            track.display_name,
            "  ",
            (track.playlist, COLOR_MUTED),
        )

    def update_play_indicator(self) -> None:
        """Redraw the playing mark without rebuilding the list."""
        try:
            track_list = self.query_one("#track-list", ListView)
            for item, track in zip(track_list.children, self._visible):
                if isinstance(item, ListItem):
                    item.query_one(Label).update(self._format_track(track))

            current = self.controller.current_index
            if current >= 0:
                track_list.index = current
        except Exception as e:
            logger.debug(f"Could not update play indicator: {e}")

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Apply a playlist choice or play the chosen track."""
        index = event.list_view.index
        if index is None:
            return

        if event.list_view.id == "playlist-list" and index < len(self._playlists):
            self.controller.set_playlist(self._playlists[index])
            self._populate_tracks()
        elif event.list_view.id == "track-list" and index < len(self._visible):
            self.controller.select(self._visible[index])
            self.update_play_indicator()
            self.post_message(TrackChanged())

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search":
            self.controller.set_search(event.value)
            self._populate_tracks()

    def focus_search(self) -> None:
        self.query_one("#search", Input).focus()

    def focus_tracks(self) -> None:
        self.query_one("#track-list", ListView).focus()

    def action_move_down(self) -> None:
        """Move selection down in the track list (j key)."""
        self.query_one("#track-list", ListView).action_cursor_down()

    def action_move_up(self) -> None:
        """Move selection up in the track list (k key)."""
        self.query_one("#track-list", ListView).action_cursor_up()
