from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

MEDIA_ACTIONS = ("play", "pause", "previoustrack", "nexttrack", "seekto")


@dataclass(frozen=True)
class NowPlaying:
    """Metadata shown by system now-playing integrations."""
    title: str
    album: str
    artist: str = ""


class MediaSession:
    """Best-effort bridge to system media keys and now-playing displays.

    This base class is the only implementation: publish() does nothing and
    the terminal UI never calls dispatch(), so system media keys are not
    wired up. A platform integration would subclass it, override publish()
    and call dispatch() from its key events. Failures here are logged and
    never reach the player.
    """

    def __init__(self) -> None:
        self.metadata: NowPlaying | None = None
        self.playback_state: str = "none"
        self._handlers: dict[str, Callable[..., Any]] = {}

    def update(self, metadata: NowPlaying, playing: bool) -> None:
        self.metadata = metadata
        self.playback_state = "playing" if playing else "paused"
        try:
            self.publish()
        except Exception as e:
            logger.debug(f"Media session publish failed: {e}")

    def publish(self) -> None:
        """Push metadata and playback_state to the platform."""
        pass

    def set_action_handler(self, action: str, handler: Callable[..., Any] | None) -> None:
        if action not in MEDIA_ACTIONS:
            logger.debug(f"Ignoring unsupported media action: {action}")
            return
        if handler is None:
            self._handlers.pop(action, None)
        else:
            self._handlers[action] = handler

    def dispatch(self, action: str, **details: Any) -> bool:
        """Invoke the handler bound to action.

        Returns:
            True if a handler ran without raising, False otherwise.
        """
        handler = self._handlers.get(action)
        if handler is None:
            return False
        try:
            handler(**details)
        except Exception as e:
            logger.warning(f"Media action {action} failed: {e}")
            return False
        return True
