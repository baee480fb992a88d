from textual.widgets import Static
from textual.reactive import reactive
from textual.containers import Vertical
from textual.app import ComposeResult
from rich.text import Text
from styles import COLOR_ACCENT, COLOR_ACCENT2, COLOR_MUTED, COLOR_DIM, COLOR_INACTIVE

MUSIC_HOOD_ASCII = """
 ┌┬┐┬ ┬┌─┐┬┌─┐   ┬ ┬┌─┐┌─┐┌┬┐
 ││││ │└─┐││  ───├─┤│ ││ │ ││
 ┴ ┴└─┘└─┘┴└─┘   ┴ ┴└─┘└─┘─┴┘
"""

VOLUME_BAR_WIDTH = 20
DEFAULT_VOLUME_LEVEL = 70


class Header(Vertical):
    volume_level: reactive[int] = reactive(DEFAULT_VOLUME_LEVEL)
    is_muted: reactive[bool] = reactive(False)
    is_shuffle: reactive[bool] = reactive(False)
    status: reactive[str] = reactive("Idle")
    folder: reactive[str] = reactive("")

    def compose(self) -> ComposeResult:
        yield Static(MUSIC_HOOD_ASCII, id="header-logo")
        yield Static(self._render_status(), id="header-status")
        yield Static("─" * 80, id="header-divider")
        yield Static(self._render_volume_bar(), id="header-volume")

    def _render_status(self) -> Text:
        result = Text()
        result.append("Folder ", style=COLOR_MUTED)
        result.append(self.folder or "(none)", style=COLOR_ACCENT if self.folder else COLOR_DIM)
        result.append("    │    ", style=COLOR_MUTED)
        result.append(self.status, style=COLOR_ACCENT2)
        return result

    def _render_volume_bar(self) -> Text:
        result = Text()

        result.append("Volume ", style=COLOR_MUTED)
        result.append("│", style=COLOR_MUTED)

        if self.is_muted:
            for i in range(VOLUME_BAR_WIDTH):
                result.append("─", style=COLOR_INACTIVE)
            result.append("│ ", style=COLOR_MUTED)
            result.append("MUTED", style=f"{COLOR_MUTED} bold")
        else:
            filled_bars = int((self.volume_level / 100) * VOLUME_BAR_WIDTH)
            for i in range(VOLUME_BAR_WIDTH):
                if i < filled_bars:
                    result.append("█", style=COLOR_ACCENT if i < VOLUME_BAR_WIDTH * 0.6 else COLOR_ACCENT2)
                else:
                    result.append("─", style=COLOR_INACTIVE)
            result.append("│ ", style=COLOR_MUTED)
            result.append(f"{self.volume_level}%", style=f"{COLOR_ACCENT} bold")

        result.append("    │    Shuffle ", style=COLOR_MUTED)
        if self.is_shuffle:
            result.append("ON", style=f"{COLOR_ACCENT} bold")
        else:
            result.append("OFF", style=COLOR_DIM)

        return result

    def _refresh_volume(self) -> None:
        try:
            self.query_one("#header-volume", Static).update(self._render_volume_bar())
        except Exception:
            pass

    def _refresh_status(self) -> None:
        try:
            self.query_one("#header-status", Static).update(self._render_status())
        except Exception:
            pass

    def watch_volume_level(self, new_value: int) -> None:
        self._refresh_volume()

    def watch_is_muted(self, new_value: bool) -> None:
        self._refresh_volume()

    def watch_is_shuffle(self, new_value: bool) -> None:
        self._refresh_volume()

    def watch_status(self, new_value: str) -> None:
        self._refresh_status()

    def watch_folder(self, new_value: str) -> None:
        self._refresh_status()
