from __future__ import annotations

import logging
from pathlib import Path

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label

logger = logging.getLogger(__name__)


class FolderPromptScreen(ModalScreen[str | None]):
    """Modal screen asking for the music folder to scan.

    Dismisses with an absolute path, or None when cancelled.
    """

    DEFAULT_CSS = """
    FolderPromptScreen {
        align: center middle;
    }

    #folder-prompt-container {
        width: 80;
        height: auto;
        background: #0f0f0f;
        border: thick #00ffbf;
        padding: 1 2;
    }

    #folder-prompt-title {
        color: #00ffbf;
        text-style: bold;
        padding: 0 0 1 0;
    }

    #folder-prompt-buttons {
        height: auto;
        margin-top: 1;
    }
    """

    def __init__(self, initial: str = "") -> None:
        super().__init__()
        self.initial = initial

    def compose(self) -> ComposeResult:
        with Container(id="folder-prompt-container"):
            yield Label("📁 Open Music Folder", id="folder-prompt-title")
            yield Label("Every audio file below this folder will be listed.")
            yield Input(
                value=self.initial,
                placeholder=str(Path.home() / "Music"),
                id="folder-input"
            )
            with Horizontal(id="folder-prompt-buttons"):
                yield Button("Scan", id="folder-confirm-button", variant="success")
                yield Button("Cancel", id="folder-cancel-button", variant="default")

    def on_mount(self) -> None:
        """Focus input on mount."""
        self.call_after_refresh(self._focus_input)

    def _focus_input(self) -> None:
        try:
            self.query_one("#folder-input", Input).focus()
        except Exception as e:
            logger.error(f"Failed to focus input: {e}")

    def _submit(self) -> None:
        value = self.query_one("#folder-input", Input).value.strip()
        if not value:
            self.dismiss(None)
            return
        self.dismiss(str(Path(value).expanduser().absolute()))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "folder-confirm-button":
            self._submit()
        elif event.button.id == "folder-cancel-button":
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key in input."""
        if event.input.id == "folder-input":
            self._submit()

    async def on_key(self, event) -> None:
        if event.key == "escape":
            self.dismiss(None)
            event.prevent_default()
            event.stop()
