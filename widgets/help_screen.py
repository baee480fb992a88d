from __future__ import annotations

from textual.screen import ModalScreen
from textual.widgets import Static, Button
from textual.containers import Container, VerticalScroll
from textual.app import ComposeResult

HELP_TEXT = """[bold #00ffbf]♪ music-hood - Folder Music Player[/bold #00ffbf]

[bold]LIBRARY[/bold]
  o           Open a music folder
  Enter       Play selected track / apply playlist
  j/k         Move down/up in track list
  /           Search tracks and playlists
  Tab         Move between playlists, search and tracks

[bold]PLAYBACK CONTROLS[/bold]
  Space       Play/Pause current track
  n           Next track
  p           Previous track
  z           Toggle shuffle
  ←/→         Seek back/forward 5 seconds

[bold]VOLUME CONTROLS[/bold]
  +/=         Increase volume
  -           Decrease volume
  m           Toggle mute

[bold]OTHER[/bold]
  h/?         Show this help
  q           Quit application

[bold]HOW IT WORKS[/bold]
  • Every audio file under the chosen folder is listed
  • Top-level subfolders become playlists, loose files go to (root)
  • Supported formats: MP3, M4A, AAC, WAV, OGG, FLAC
  • Next/previous follow the visible list and wrap around
  • Shuffle never repeats the current track twice in a row
  • ♪ marks the current track"""


class HelpScreen(ModalScreen[None]):
    """Modal screen displaying help information."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    #help-container {
        width: 80;
        height: 90%;
        background: #0f0f0f;
        border: thick #8c19ff;
        padding: 1 2;
    }

    #help-scroll {
        width: 100%;
        height: 1fr;
        margin-bottom: 1;
    }

    #help-content {
        width: 100%;
        height: auto;
    }

    #help-close-button {
        width: 100%;
        height: auto;
        background: #212121;
        color: #00ffbf;
        border: solid #00ffbf;
        text-style: bold;
    }

    #help-close-button:focus {
        border: solid #8c19ff;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the help screen."""
        with Container(id="help-container"):
            with VerticalScroll(id="help-scroll"):
                yield Static(HELP_TEXT, id="help-content")

            yield Button("Close (Esc)", id="help-close-button", variant="primary")

    def on_mount(self) -> None:
        """Focus the button when screen mounts."""
        self.call_after_refresh(self._focus_button)

    def _focus_button(self) -> None:
        try:
            self.query_one("#help-close-button", Button).focus()
        except Exception:
            pass

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle close button press."""
        if event.button.id == "help-close-button":
            self.dismiss()

    async def on_key(self, event) -> None:
        """Handle key events."""
        if event.key == "escape":
            self.dismiss()
            event.prevent_default()
            event.stop()
        elif event.key == "j":
            self.query_one("#help-scroll", VerticalScroll).scroll_down()
            event.prevent_default()
            event.stop()
        elif event.key == "k":
            self.query_one("#help-scroll", VerticalScroll).scroll_up()
            event.prevent_default()
            event.stop()
