from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator

from models.track import Track, is_audio_file, track_sort_key
from services.paths import join_path, relative_first_segment

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Raised when a directory cannot be enumerated during a scan."""
    pass


@dataclass(frozen=True)
class DirectoryEntry:
    """One entry reported by a directory enumerator."""
    name: str
    is_dir: bool = False
    is_file: bool = False


DirectoryEnumerator = Callable[[str], Awaitable[list[DirectoryEntry]]]
ProgressCallback = Callable[[int, int], None]


def _read_directory(path: str) -> list[DirectoryEntry]:
    entries = []
    with os.scandir(path) as it:
        for entry in it:
            if entry.is_symlink():
                entries.append(DirectoryEntry(entry.name))
                continue
            entries.append(DirectoryEntry(
                entry.name,
                is_dir=entry.is_dir(follow_symlinks=False),
                is_file=entry.is_file(follow_symlinks=False),
            ))
    return entries


async def list_directory(path: str) -> list[DirectoryEntry]:
    """Enumerate a directory on a worker thread.

    Symlinks are reported as neither directory nor file.

    Raises:
        OSError: If the directory cannot be read.
    """
    return await asyncio.to_thread(_read_directory, path)


class MusicLibrary:
    """Service for discovering audio files under a chosen folder."""

    def __init__(self, enumerate_directory: DirectoryEnumerator = list_directory):
        """Initialize MusicLibrary with a directory enumeration capability.

        Args:
            enumerate_directory: Coroutine returning the entries of a directory.
        """
        self._enumerate = enumerate_directory

    async def scan(
        self,
        root: str,
        progress_callback: ProgressCallback | None = None
    ) -> list[Track]:
        """Walk root depth-first and build a sorted track list.

        Directories are descended into before their later siblings. The walk
        keeps its own stack of entry iterators, so tree depth is not bounded
        by the interpreter's recursion limit. Nothing is returned until the
        whole tree has been read.

        Args:
            root: Absolute path of the folder to scan.
            progress_callback: Optional callback receiving
                (directories_scanned, tracks_found) after each directory read.

        Returns:
            Tracks sorted by playlist, then name, ignoring case and accents.

        Raises:
            ScanError: If any directory cannot be enumerated.
        """
        logger.info(f"Scanning {root}")
        found: list[Track] = []
        directories = 0

        stack: list[tuple[str, Iterator[DirectoryEntry]]] = []
        stack.append((root, await self._read(root)))
        directories += 1
        if progress_callback:
            progress_callback(directories, len(found))

        while stack:
            directory, entries = stack[-1]
            entry = next(entries, None)
            if entry is None:
                stack.pop()
                continue

            if not entry.name:
                continue

            child_path = join_path(directory, entry.name)

            if entry.is_dir:
                stack.append((child_path, await self._read(child_path)))
                directories += 1
                if progress_callback:
                    progress_callback(directories, len(found))
            elif entry.is_file and is_audio_file(entry.name):
                playlist = relative_first_segment(root, child_path)
                found.append(Track(path=child_path, name=entry.name, playlist=playlist))

        found.sort(key=track_sort_key)
        logger.info(f"Scan of {root} finished: {len(found)} tracks in {directories} folders")
        return found

    async def _read(self, directory: str) -> Iterator[DirectoryEntry]:
        try:
            entries = await self._enumerate(directory)
        except Exception as e:
            logger.error(f"Failed to read directory {directory}: {e}")
            raise ScanError(f"Cannot read {directory}: {e}") from e
        return iter(entries)
