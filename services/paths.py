"""Separator-agnostic path helpers for tracks found under a scan root."""

from __future__ import annotations

import re

from models.track import ROOT_PLAYLIST, UNKNOWN_PLAYLIST

WINDOWS_SEPARATOR = "\\"
POSIX_SEPARATOR = "/"

_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")


def _separator_for(base: str) -> str:
    if WINDOWS_SEPARATOR in base or _DRIVE_PATTERN.match(base):
        return WINDOWS_SEPARATOR
    return POSIX_SEPARATOR


def join_path(base: str, name: str) -> str:
    """Append name to base using the separator style base already uses.

    Args:
        base: Directory path, Windows- or POSIX-style.
        name: Entry name to append.

    Returns:
        The joined path. No separator is added when base already ends in one.
    """
    sep = _separator_for(base)
    if base.endswith(sep):
        return base + name
    return base + sep + name


def relative_first_segment(root: str, path: str) -> str:
    """Return the first folder of a file path below root.

    Both paths are compared with a single separator convention and without
    regard to case. The last segment of path is the file itself, so files
    directly inside root map to "(root)"; paths that do not start with root
    map to "(unknown)".

    path must name a file; a directory path loses its last folder.
    """
    norm_root = root.replace(POSIX_SEPARATOR, WINDOWS_SEPARATOR)
    norm_path = path.replace(POSIX_SEPARATOR, WINDOWS_SEPARATOR)

    if not norm_path.lower().startswith(norm_root.lower()):
        return UNKNOWN_PLAYLIST

    relative = norm_path[len(norm_root):].lstrip(WINDOWS_SEPARATOR)
    folders = relative.split(WINDOWS_SEPARATOR)[:-1]
    if not folders:
        return ROOT_PLAYLIST

    first = folders[0]
    return first if first.strip() else ROOT_PLAYLIST
