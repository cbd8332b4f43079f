"""
Audio resource contract.

An audio resource is one streaming source bound to one URL. It reports what
the underlying player is doing through AudioEvents; it never decides
playback state itself. The coordinator owns at most one at a time.
"""

from enum import Enum
from typing import Callable, Optional, Protocol


class AudioEvent(str, Enum):
    """Events a resource can emit, modeled on media element events."""

    LOAD_START = "loadstart"
    CAN_PLAY = "canplay"
    CAN_PLAY_THROUGH = "canplaythrough"
    PLAYING = "playing"
    PAUSE = "pause"
    ENDED = "ended"
    WAITING = "waiting"
    STALLED = "stalled"
    ERROR = "error"


# (event, optional human-readable detail)
EventListener = Callable[[AudioEvent, Optional[str]], None]


class PlaybackError(Exception):
    """Base class for audio resource failures."""


class ResourceCreationError(PlaybackError):
    """The resource could not be created or started loading."""


class PlaybackStartError(PlaybackError):
    """A request to start playback was rejected."""


class AudioResource(Protocol):
    """One streaming audio source."""

    url: str

    def add_listener(self, listener: EventListener) -> None: ...
    def remove_listener(self, listener: EventListener) -> None: ...

    def load(self) -> None:
        """Start fetching the stream. Must not start audible playback."""
        ...

    async def play(self) -> None:
        """Start playback. Raises PlaybackStartError when rejected."""
        ...

    def pause(self) -> None: ...

    def set_volume(self, volume: float) -> None:
        """Set volume as a 0.0-1.0 fraction."""
        ...

    def release(self) -> None:
        """Stop playback and free everything. The resource is unusable afterwards."""
        ...


ResourceFactory = Callable[[str], AudioResource]
