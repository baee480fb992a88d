from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.widgets import Static
from rich.text import Text
from models.track import format_time
from services.player import PlayerController
from styles import COLOR_ACCENT, COLOR_ACCENT2, COLOR_MUTED, COLOR_INACTIVE

PROGRESS_BAR_WIDTH = 40


class NowPlayingView(Container):
    """Widget displaying the current track and its progress."""

    def __init__(self, controller: PlayerController, **kwargs):
        """Initialize NowPlayingView with the player controller."""
        super().__init__(**kwargs)
        self.controller = controller
        self._title_widget: Static | None = None
        self._playlist_widget: Static | None = None
        self._time_widget: Static | None = None
        self._progress_widget: Static | None = None
        self._state_widget: Static | None = None

    def compose(self) -> ComposeResult:
        """Compose the now playing view with track info."""
        with Vertical():
            yield Static("♪", classes="music-icon")
            yield Static("Nothing playing", id="np-title", classes="track-title")
            yield Static("Playlist: -", id="np-playlist", classes="track-metadata")
            yield Static("0:00 / 0:00", id="np-time", classes="time-display")
            yield Static(self._render_progress(0.0, 0.0), id="np-progress")
            yield Static("State: Idle", id="np-state", classes="state-display")

    def on_mount(self) -> None:
        self._title_widget = self.query_one("#np-title", Static)
        self._playlist_widget = self.query_one("#np-playlist", Static)
        self._time_widget = self.query_one("#np-time", Static)
        self._progress_widget = self.query_one("#np-progress", Static)
        self._state_widget = self.query_one("#np-state", Static)
        self.update_progress()

    def update_progress(self) -> None:
        """Update all display widgets from the session."""
        if self._title_widget is None:
            return

        session = self.controller.session
        now_playing = self.controller.now_playing

        if session.current_name:
            self._title_widget.update(Text(now_playing.title))
            self._playlist_widget.update(Text(f"Playlist: {now_playing.album}"))
        else:
            self._title_widget.update("Nothing playing")
            self._playlist_widget.update("Playlist: -")

        self._time_widget.update(f"{format_time(session.position)} / {format_time(session.duration)}")
        self._progress_widget.update(self._render_progress(session.position, session.duration))
        self._state_widget.update(f"State: {session.state.value.capitalize()}")

    def _render_progress(self, position: float, duration: float) -> Text:
        """Render a horizontal progress bar."""
        result = Text()
        filled = 0
        if duration > 0:
            filled = int(min(1.0, position / duration) * PROGRESS_BAR_WIDTH)

        result.append("│", style=COLOR_MUTED)
        for i in range(PROGRESS_BAR_WIDTH):
            if i < filled:
                result.append("█", style=COLOR_ACCENT if i < PROGRESS_BAR_WIDTH * 0.5 else COLOR_ACCENT2)
            else:
                result.append("─", style=COLOR_INACTIVE)
        result.append("│", style=COLOR_MUTED)
        return result
