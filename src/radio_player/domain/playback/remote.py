"""
Remote control surface (media keys, car head units, desktop media widgets).

A registration table of named actions plus the metadata the host
environment displays. Invocations arrive on the same event loop as user
input; there is no separate thread.
"""

import base64
import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Union

from loguru import logger

from radio_player.domain.stations.models import Station

# Action names follow the browser MediaSession action vocabulary
REMOTE_ACTIONS = (
    "play",
    "pause",
    "nexttrack",
    "previoustrack",
    "seekbackward",
    "seekforward",
)

RemoteHandler = Callable[[], Union[None, Awaitable[Any]]]

_ARTWORK_SVG = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <circle cx="50" cy="50" r="45" fill="#3B82F6"/>
  <circle cx="50" cy="50" r="20" fill="white"/>
</svg>"""

DEFAULT_ARTWORK = {
    "src": "data:image/svg+xml;base64,"
    + base64.b64encode(_ARTWORK_SVG.encode("utf-8")).decode("ascii"),
    "sizes": "512x512",
    "type": "image/svg+xml",
}


@dataclass(frozen=True)
class MediaMetadata:
    """What the remote surface shows for the current station."""

    title: str
    artist: str
    album: str = "Radio Player"
    artwork: tuple[dict[str, str], ...] = field(default=(DEFAULT_ARTWORK,))

    @classmethod
    def for_station(cls, station: Station) -> "MediaMetadata":
        return cls(title=station.name, artist=station.description or "Internet Radio")


class RemoteControl:
    """Action table and displayed-metadata surface."""

    def __init__(self) -> None:
        self._handlers: dict[str, RemoteHandler] = {}
        self.metadata: Optional[MediaMetadata] = None
        self.playback_state: str = "none"  # 'none' | 'paused' | 'playing'

    def set_action_handler(self, action: str, handler: Optional[RemoteHandler]) -> None:
        """Register (or with None, remove) the handler for an action."""
        if action not in REMOTE_ACTIONS:
            raise ValueError(f"Unknown remote action: {action}")
        if handler is None:
            self._handlers.pop(action, None)
        else:
            self._handlers[action] = handler

    def clear(self) -> None:
        self._handlers.clear()
        self.metadata = None
        self.playback_state = "none"

    def has_handler(self, action: str) -> bool:
        return action in self._handlers

    def update(self, station: Optional[Station], is_playing: bool) -> None:
        """Sync displayed metadata and playback state."""
        self.metadata = MediaMetadata.for_station(station) if station else None
        if station is None:
            self.playback_state = "none"
        else:
            self.playback_state = "playing" if is_playing else "paused"

    async def invoke(self, action: str) -> bool:
        """Dispatch an inbound remote action.

        Returns:
            True if a handler ran, False if the action has no handler
        """
        handler = self._handlers.get(action)
        if handler is None:
            logger.debug(f"Remote action '{action}' has no handler")
            return False

        logger.debug(f"Remote action: {action}")
        result = handler()
        if inspect.isawaitable(result):
            await result
        return True
