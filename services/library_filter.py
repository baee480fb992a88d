from __future__ import annotations

from typing import NamedTuple, Sequence

from models.track import ALL_PLAYLISTS, ROOT_PLAYLIST, Track, collation_key


class LibraryView(NamedTuple):
    """Playlists to offer and tracks visible under the current filters."""
    playlists: list[str]
    tracks: list[Track]


def playlist_names(tracks: Sequence[Track]) -> list[str]:
    """Return "(all)", then "(root)" if present, then the other playlists.

    Remaining names are ordered ignoring case and accents.
    """
    names = sorted({track.playlist for track in tracks}, key=collation_key)
    if ROOT_PLAYLIST in names:
        names.remove(ROOT_PLAYLIST)
        names.insert(0, ROOT_PLAYLIST)
    return [ALL_PLAYLISTS, *names]


def filter_tracks(tracks: Sequence[Track], playlist: str, query: str) -> list[Track]:
    """Select tracks in playlist whose name or playlist contains query.

    Library order is kept. A playlist that no track carries yields an empty
    list.
    """
    needle = query.strip().lower()
    visible = []
    for track in tracks:
        if playlist != ALL_PLAYLISTS and track.playlist != playlist:
            continue
        if needle and needle not in track.name.lower() and needle not in track.playlist.lower():
            continue
        visible.append(track)
    return visible


def compose_view(tracks: Sequence[Track], playlist: str, query: str) -> LibraryView:
    return LibraryView(playlist_names(tracks), filter_tracks(tracks, playlist, query))
