from textual.app import App, ComposeResult
from textual.widgets import Footer
from textual.containers import Horizontal, Vertical
from textual.binding import Binding
import logging
from pathlib import Path

from models import AppSettings
from models.session import STATUS_SCANNING
from widgets import Header, HelpScreen, FolderPromptScreen
from views import LibraryView, NowPlayingView, TrackChanged
from services.audio_player import AudioPlayer
from services.music_library import MusicLibrary
from services.player import PlayerController

TRANSPORT_POLL_INTERVAL = 0.5
SEEK_SECONDS = 5.0

logger = logging.getLogger(__name__)


def setup_logging(settings: AppSettings) -> Path:
    """Send log output to a file; the terminal belongs to the UI."""
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(settings.log_file)
        ]
    )
    return settings.log_file


class MainViewContainer(Vertical):
    """Container for the main view."""

    def __init__(self, controller: PlayerController, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.controller = controller

    def compose(self) -> ComposeResult:
        """Compose the main view layout."""
        with Horizontal(id="top-container"):
            yield LibraryView(self.controller, id="library")
            yield NowPlayingView(self.controller, id="now_playing")


class MusicHoodApp(App):
    """A folder-based terminal music player built with Textual."""

    CSS_PATH = "styles/app.tcss"
    TITLE = "music-hood"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("o", "open_folder", "Open"),
        Binding("space", "play_pause", "Play/Pause"),
        Binding("n", "next_track", "Next"),
        Binding("p", "previous_track", "Prev"),
        Binding("z", "toggle_shuffle", "Shuffle"),
        Binding("/", "focus_search", "Search"),
        Binding("left", "seek_back", "-5s", show=False),
        Binding("right", "seek_forward", "+5s", show=False),
        Binding("+", "volume_up", "Vol+"),
        Binding("=", "volume_up", "Vol+", show=False),
        Binding("-", "volume_down", "Vol-"),
        Binding("m", "toggle_mute", "Mute"),
        Binding("h", "show_help", "Help"),
        Binding("?", "show_help", "Help", show=False),
    ]

    def __init__(self, settings: AppSettings | None = None, audio_player=None, *args, **kwargs):
        super().__init__(*args, **kwargs)

        logger.info("Starting music-hood application")
        self.settings = settings or AppSettings()

        if audio_player is None:
            try:
                audio_player = AudioPlayer(volume=self.settings.volume / 100)
            except RuntimeError as e:
                logger.critical(f"Failed to initialize audio player: {e}")
                raise
        self.audio_player = audio_player

        self.controller = PlayerController(self.audio_player, MusicLibrary())
        self.controller.session.shuffle = self.settings.shuffle
        logger.info("Services initialized successfully")

    def compose(self) -> ComposeResult:
        """Compose the main application layout."""
        yield Header()
        yield MainViewContainer(self.controller, id="main-view")
        yield Footer()

    def on_mount(self) -> None:
        """Initialize the application."""
        self.query_one("#library", LibraryView).focus_tracks()
        self._refresh_header()
        self.set_interval(TRANSPORT_POLL_INTERVAL, self._poll_transport)

        if self.settings.music_dir:
            self._start_scan(self.settings.music_dir)
        else:
            self.action_open_folder()

    def _start_scan(self, folder: str) -> None:
        self.run_worker(self._scan_folder(folder), exclusive=True, group="scan")

    async def _scan_folder(self, folder: str) -> None:
        """Scan a folder and show the new library.

        The worker is exclusive, so opening another folder cancels this one.
        """
        header = self.query_one(Header)

        def on_progress(directories: int, tracks: int) -> None:
            header.status = f"Scanning… {directories} folders"

        header.status = STATUS_SCANNING
        installed = await self.controller.scan(folder, on_progress)
        header.status = self.controller.session.status

        if not installed:
            if self.controller.session.status != STATUS_SCANNING:
                self.notify(
                    f"❌ {self.controller.session.status}",
                    severity="error",
                    timeout=8
                )
            return

        header.folder = self.controller.session.folder
        library_view = self.query_one("#library", LibraryView)
        library_view.refresh_library()

        count = len(self.controller.session.library)
        if count == 0:
            self.notify(
                f"No music files found in {folder}",
                severity="warning",
                timeout=8
            )
        else:
            self.notify(f"✓ Loaded {count} tracks", severity="information", timeout=3)

    def _poll_transport(self) -> None:
        """Pull elapsed time from the transport and advance on track end."""
        try:
            if self.controller.poll() is not None:
                self._show_track_change()
            self.query_one("#now_playing", NowPlayingView).update_progress()
        except Exception as e:
            logger.error(f"Error during transport poll: {e}")

    def _show_track_change(self) -> None:
        self.query_one("#library", LibraryView).update_play_indicator()
        self.query_one("#now_playing", NowPlayingView).update_progress()
        self.sub_title = self.controller.now_playing_label

    def on_track_changed(self, message: TrackChanged) -> None:
        self._show_track_change()

    def _refresh_header(self) -> None:
        header = self.query_one(Header)
        header.volume_level = int(round(self.audio_player.get_volume() * 100))
        header.is_muted = self.audio_player.is_muted()
        header.is_shuffle = self.controller.session.shuffle
        header.status = self.controller.session.status

    def action_open_folder(self) -> None:
        self.push_screen(
            FolderPromptScreen(self.controller.session.folder or self.settings.music_dir or ""),
            callback=self._handle_folder_choice
        )

    def _handle_folder_choice(self, folder: str | None) -> None:
        if not folder:
            logger.debug("Folder prompt cancelled by user")
            return
        self._start_scan(folder)

    def action_play_pause(self) -> None:
        """Toggle play/pause state."""
        self.controller.toggle_play_pause()
        self.query_one("#now_playing", NowPlayingView).update_progress()

    def action_next_track(self) -> None:
        if self.controller.next_track() is not None:
            self._show_track_change()

    def action_previous_track(self) -> None:
        if self.controller.previous_track() is not None:
            self._show_track_change()

    def action_toggle_shuffle(self) -> None:
        shuffle = self.controller.toggle_shuffle()
        self.query_one(Header).is_shuffle = shuffle
        self.notify(f"🔀 Shuffle {'on' if shuffle else 'off'}", timeout=1.5)

    def action_focus_search(self) -> None:
        self.query_one("#library", LibraryView).focus_search()

    def action_seek_back(self) -> None:
        self.controller.seek_relative(-SEEK_SECONDS)
        self.query_one("#now_playing", NowPlayingView).update_progress()

    def action_seek_forward(self) -> None:
        self.controller.seek_relative(SEEK_SECONDS)
        self.query_one("#now_playing", NowPlayingView).update_progress()

    def action_volume_up(self) -> None:
        """Increase volume."""
        self.audio_player.increase_volume()
        self._refresh_header()

    def action_volume_down(self) -> None:
        """Decrease volume."""
        self.audio_player.decrease_volume()
        self._refresh_header()

    def action_toggle_mute(self) -> None:
        """Toggle mute state."""
        self.audio_player.toggle_mute()
        self._refresh_header()
        if self.audio_player.is_muted():
            self.notify("🔇 Muted", timeout=1.5)

    def action_show_help(self) -> None:
        self.push_screen(HelpScreen())


def main():
    """Entry point for the music-hood application.

    Handles initialization errors and provides user-friendly error messages.
    """
    settings = AppSettings.from_env()
    log_file = setup_logging(settings)

    try:
        logger.info("=" * 60)
        logger.info("music-hood starting up")
        logger.info("=" * 60)

        app = MusicHoodApp(settings)
        app.run()

        logger.info("music-hood shut down cleanly")

    except RuntimeError as e:
        logger.critical(f"Fatal error during startup: {e}")
        print("\n❌ music-hood cannot start\n")
        print(f"{e}\n")
        print(f"Check {log_file} for more details.\n")
        exit(1)
    except KeyboardInterrupt:
        logger.info("music-hood interrupted by user")
        print("\n\nGoodbye! 👋\n")
        exit(0)


if __name__ == "__main__":
    main()
