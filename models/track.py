from __future__ import annotations

import math
import re
import unicodedata
from dataclasses import dataclass

ALL_PLAYLISTS = "(all)"
ROOT_PLAYLIST = "(root)"
UNKNOWN_PLAYLIST = "(unknown)"

AUDIO_EXTENSIONS = (".mp3", ".m4a", ".aac", ".wav", ".ogg", ".flac")

_EXTENSION_PATTERN = re.compile(r"\.(mp3|m4a|aac|wav|ogg|flac)$", re.IGNORECASE)


@dataclass(frozen=True)
class Track:
    """A discovered audio file.

    Attributes:
        path: Absolute path, unique within one scan.
        name: Filename exactly as enumerated.
        playlist: First folder under the scan root, or a sentinel label.
    """
    path: str
    name: str
    playlist: str

    @property
    def display_name(self) -> str:
        return display_name(self.name)


def is_audio_file(filename: str) -> bool:
    """Check whether a filename carries a recognised audio extension."""
    return filename.lower().endswith(AUDIO_EXTENSIONS)


def display_name(filename: str) -> str:
    """Strip a recognised audio extension for display."""
    return _EXTENSION_PATTERN.sub("", filename)


def collation_key(text: str) -> str:
    """Key for case- and accent-insensitive ordering.

    "Élan", "elan" and "ELAN" share a key.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def track_sort_key(track: Track) -> tuple[str, str]:
    return collation_key(track.playlist), collation_key(track.name)


def format_time(seconds: float) -> str:
    """Format seconds as M:SS.

    Negative or non-finite values render as 0:00.
    """
    if not math.isfinite(seconds) or seconds < 0:
        return "0:00"
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"
