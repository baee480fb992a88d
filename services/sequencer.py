"""Next/previous track selection over the visible track list.

Positions always refer to the filtered view, never to the full library. The
current position is looked up again by path every time it is needed, so a
filter change can never leave a stale index behind.
"""

from __future__ import annotations

import random
from typing import Sequence

from models.track import Track

NOT_FOUND = -1


def current_index(tracks: Sequence[Track], cursor_path: str) -> int:
    """Return the position of the track at cursor_path, or NOT_FOUND."""
    if not cursor_path:
        return NOT_FOUND
    for idx, track in enumerate(tracks):
        if track.path == cursor_path:
            return idx
    return NOT_FOUND


def pick_random_index(
    length: int,
    excluding: int = NOT_FOUND,
    rng: random.Random | None = None
) -> int | None:
    """Draw a uniform random position, avoiding excluding when possible.

    Returns None for an empty view. With a single track that track is
    returned even if it is the excluded one.
    """
    if length <= 0:
        return None
    if length == 1:
        return 0
    rng = rng or random
    idx = rng.randrange(length)
    if excluding >= 0:
        while idx == excluding:
            idx = rng.randrange(length)
    return idx


def next_index(
    length: int,
    current: int,
    shuffle: bool = False,
    rng: random.Random | None = None
) -> int | None:
    """Position to play after current.

    Linear mode wraps from the last track to the first and starts at 0 when
    current is NOT_FOUND.
    """
    if length <= 0:
        return None
    if shuffle:
        return pick_random_index(length, current, rng)
    if current < 0:
        return 0
    return (current + 1) % length


def previous_index(
    length: int,
    current: int,
    shuffle: bool = False,
    rng: random.Random | None = None
) -> int | None:
    """Position to play before current.

    Linear mode wraps from the first track to the last. Shuffle draws a fresh
    random position exactly like next_index.
    """
    if length <= 0:
        return None
    if shuffle:
        return pick_random_index(length, current, rng)
    if current < 0:
        return 0
    return (current - 1 + length) % length
