"""
Playback coordinator.

Owns the single live audio resource and folds everything that can happen to
it (user intent, buffering and error events, remote-control actions) into
one play/pause/loading/error state machine.

Every resource is tagged with a generation number at load() time. Events and
play() outcomes carry the generation they were issued under and are dropped
if a newer load() has happened since, so a torn-down stream can never move
the state of its successor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from radio_player.domain.stations.models import Station

from .remote import RemoteControl, RemoteHandler
from .resource import AudioEvent, AudioResource, EventListener, ResourceFactory

DEFAULT_VOLUME = 70

CREATE_ERROR_MESSAGE = "Failed to create audio stream"
LOAD_ERROR_MESSAGE = "Failed to load audio stream"
PLAY_ERROR_MESSAGE = "Failed to play audio stream"


class PlaybackState(str, Enum):
    IDLE = "idle"  # Nothing loaded, or the stream stopped
    LOADING = "loading"
    PLAYING = "playing"
    PAUSED = "paused"
    ERRORED = "errored"


@dataclass(frozen=True)
class PlaybackSnapshot:
    """Observable playback session state, published after every transition."""

    state: PlaybackState = PlaybackState.IDLE
    volume: int = DEFAULT_VOLUME
    error: Optional[str] = None
    current_url: Optional[str] = None
    station: Optional[Station] = None

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    @property
    def is_loading(self) -> bool:
        return self.state is PlaybackState.LOADING


SnapshotListener = Callable[[PlaybackSnapshot], None]


def clamp_volume(volume: float) -> int:
    """Clamp to the 0-100 range."""
    return int(round(max(0, min(100, volume))))


class PlaybackCoordinator:
    """Single-flight owner of the streaming audio resource."""

    def __init__(
        self,
        resource_factory: ResourceFactory,
        remote: Optional[RemoteControl] = None,
        volume: int = DEFAULT_VOLUME,
    ):
        self._resource_factory = resource_factory
        self._remote = remote or RemoteControl()
        self._resource: Optional[AudioResource] = None
        self._resource_listener: Optional[EventListener] = None
        self._generation = 0
        self._current_url: Optional[str] = None
        self._current_station: Optional[Station] = None
        self._state = PlaybackState.IDLE
        self._volume = clamp_volume(volume)
        self._error: Optional[str] = None
        self._listeners: list[SnapshotListener] = []
        self._last_snapshot: Optional[PlaybackSnapshot] = None

    # === Observation ===

    @property
    def snapshot(self) -> PlaybackSnapshot:
        return PlaybackSnapshot(
            state=self._state,
            volume=self._volume,
            error=self._error,
            current_url=self._current_url,
            station=self._current_station,
        )

    @property
    def remote(self) -> RemoteControl:
        return self._remote

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def has_resource(self) -> bool:
        return self._resource is not None

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register for snapshots. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot
        self._remote.update(self._current_station, snapshot.is_playing)

        if snapshot == self._last_snapshot:
            return
        self._last_snapshot = snapshot

        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Playback listener failed")

    # === Resource lifecycle ===

    def load(self, url: str, station: Optional[Station] = None) -> None:
        """Bind the session to a stream URL.

        Reloading the URL that is already loaded is a no-op, apart from
        rebinding the station, unless that stream has errored or ended.
        Otherwise the previous resource is torn down before the new one is
        created.
        """
        if url == self._current_url and self._resource is not None and not self._needs_reopen:
            logger.debug(f"Stream already loaded, ignoring load(): {url}")
            if station is not None and station != self._current_station:
                self._current_station = station
                self._notify()
            return

        self._open(url, station)

    @property
    def _needs_reopen(self) -> bool:
        # An errored or ended stream cannot be resumed, only recreated
        return self._state in (PlaybackState.ERRORED, PlaybackState.IDLE)

    def _open(self, url: str, station: Optional[Station]) -> None:
        self._release_resource()

        self._generation += 1
        generation = self._generation
        self._current_url = url
        self._current_station = station
        self._error = None

        try:
            resource = self._resource_factory(url)
        except Exception as e:
            logger.warning(f"Could not create audio resource for {url}: {e}")
            self._state = PlaybackState.ERRORED
            self._error = CREATE_ERROR_MESSAGE
            self._notify()
            return

        def on_event(event: AudioEvent, detail: Optional[str] = None) -> None:
            self._handle_event(generation, event, detail)

        self._resource = resource
        self._resource_listener = on_event
        resource.add_listener(on_event)
        resource.set_volume(self._volume / 100)
        self._state = PlaybackState.LOADING

        logger.info(f"Loading stream (generation {generation}): {url}")
        try:
            resource.load()
        except Exception as e:
            logger.warning(f"Could not start loading {url}: {e}")
            self._release_resource()
            self._state = PlaybackState.ERRORED
            self._error = CREATE_ERROR_MESSAGE

        self._notify()

    def _release_resource(self) -> None:
        """Pause, detach and release the current resource, if any."""
        resource = self._resource
        if resource is None:
            return

        listener = self._resource_listener
        # Cleared first so anything the teardown emits is treated as stale
        self._resource = None
        self._resource_listener = None

        try:
            resource.pause()
        except Exception:
            logger.exception(f"Error pausing audio resource for {resource.url}")

        if listener is not None:
            try:
                resource.remove_listener(listener)
            except Exception:
                logger.exception(f"Error detaching from audio resource for {resource.url}")

        try:
            resource.release()
        except Exception:
            logger.exception(f"Error releasing audio resource for {resource.url}")
        else:
            logger.info(f"Released stream: {resource.url}")

    def stop(self) -> None:
        """Release the stream and return to idle with nothing loaded."""
        self._release_resource()
        # Invalidates any play() still waiting on the released resource
        self._generation += 1
        self._current_url = None
        self._current_station = None
        self._state = PlaybackState.IDLE
        self._error = None
        self._notify()

    def close(self) -> None:
        """Tear everything down (host unmount)."""
        self.stop()
        self._remote.clear()
        self._listeners.clear()

    # === Resource events ===

    def _handle_event(self, generation: int, event: AudioEvent, detail: Optional[str]) -> None:
        if generation != self._generation or self._resource is None:
            logger.debug(f"Discarding stale '{event.value}' from generation {generation}")
            return

        previous = self._state

        if event is AudioEvent.LOAD_START:
            self._state = PlaybackState.LOADING
            self._error = None
        elif event in (AudioEvent.CAN_PLAY, AudioEvent.CAN_PLAY_THROUGH):
            # Ready, but nothing is audible until PLAYING arrives
            self._error = None
            if self._state is PlaybackState.ERRORED:
                self._state = PlaybackState.PAUSED
        elif event is AudioEvent.PLAYING:
            self._state = PlaybackState.PLAYING
            self._error = None
        elif event is AudioEvent.PAUSE:
            if self._state not in (PlaybackState.ERRORED, PlaybackState.IDLE):
                self._state = PlaybackState.PAUSED
        elif event is AudioEvent.ENDED:
            if self._state is not PlaybackState.ERRORED:
                self._state = PlaybackState.IDLE
        elif event in (AudioEvent.WAITING, AudioEvent.STALLED):
            # Re-buffering mid-stream shows as loading
            if self._state in (PlaybackState.PLAYING, PlaybackState.LOADING):
                self._state = PlaybackState.LOADING
        elif event is AudioEvent.ERROR:
            self._state = PlaybackState.ERRORED
            self._error = detail or LOAD_ERROR_MESSAGE
            logger.warning(f"Stream error ({self._current_url}): {self._error}")

        if self._state is not previous:
            logger.debug(f"{event.value}: {previous.value} -> {self._state.value}")
        self._notify()

    # === User intent ===

    async def play(self) -> None:
        """Start playback of the loaded stream.

        A stream that errored or ended is recreated first. A rejected start
        becomes ERRORED; it never raises.
        """
        if self._needs_reopen and self._current_url is not None:
            logger.info(f"Reopening stream: {self._current_url}")
            self._open(self._current_url, self._current_station)

        resource = self._resource
        if resource is None:
            logger.debug("play() with no stream loaded")
            return

        generation = self._generation
        self._error = None
        if self._state is not PlaybackState.PLAYING:
            self._state = PlaybackState.LOADING
        self._notify()

        try:
            await resource.play()
        except Exception as e:
            if generation != self._generation or self._resource is not resource:
                logger.debug(f"Ignoring play() rejection from generation {generation}")
                return
            logger.warning(f"Playback start rejected for {resource.url}: {e}")
            self._state = PlaybackState.ERRORED
            self._error = PLAY_ERROR_MESSAGE
            self._notify()

    def pause(self) -> None:
        """Pause the loaded stream. No-op when idle or already paused."""
        if self._resource is None or self._state is PlaybackState.PAUSED:
            return

        self._resource.pause()
        if self._state in (PlaybackState.LOADING, PlaybackState.PLAYING):
            self._state = PlaybackState.PAUSED
        self._notify()

    def set_volume(self, volume: float) -> None:
        """Set volume (0-100), applied immediately and kept for later streams."""
        self._volume = clamp_volume(volume)
        if self._resource is not None:
            self._resource.set_volume(self._volume / 100)
        self._notify()

    # === Remote control ===

    def set_remote_handlers(
        self,
        on_next: Optional[RemoteHandler] = None,
        on_previous: Optional[RemoteHandler] = None,
    ) -> None:
        """Populate the remote action table.

        Play/pause map onto this coordinator; next/previous (and the seek
        actions, which car head units often send instead) are forwarded to
        the caller's handlers untouched.
        """
        self._remote.set_action_handler("play", self.play)
        self._remote.set_action_handler("pause", self.pause)
        self._remote.set_action_handler("nexttrack", on_next)
        self._remote.set_action_handler("previoustrack", on_previous)
        self._remote.set_action_handler("seekforward", on_next)
        self._remote.set_action_handler("seekbackward", on_previous)
