"""
Session host - the page-level controller.

Owns the station list and the selected station, composes the playback
coordinator and turns failures into user notifications. All methods run on
the event loop; blocking station-source calls are pushed to a worker thread.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from loguru import logger

from radio_player.domain.playback.coordinator import PlaybackCoordinator, PlaybackSnapshot
from radio_player.domain.stations.errors import StorageError
from radio_player.domain.stations.models import Station


@dataclass(frozen=True)
class Notification:
    """Transient message for the user."""

    title: str
    description: str
    variant: str = "default"  # 'default' | 'destructive'


Notifier = Callable[[Notification], None]

CONNECTION_ERROR = Notification(
    "Connection Error",
    "Failed to connect to radio station. Please try another station.",
    "destructive",
)


class StationSource(Protocol):
    """Anything that serves the station catalog (in-process or over HTTP)."""

    def list_stations(self) -> list[Station]: ...
    def get_station(self, station_id: str) -> Optional[Station]: ...
    def create_station(self, data: Any) -> Station: ...
    def update_station(self, station_id: str, data: Any) -> Optional[Station]: ...
    def delete_station(self, station_id: str) -> bool: ...


class SessionHost:
    def __init__(
        self,
        coordinator: PlaybackCoordinator,
        source: StationSource,
        notifier: Optional[Notifier] = None,
    ):
        self.coordinator = coordinator
        self.source = source
        self._notifier = notifier
        self._stations: list[Station] = []
        self._selected: Optional[Station] = None
        self._last_error: Optional[str] = None

        coordinator.set_remote_handlers(on_next=self.next, on_previous=self.previous)
        self._unsubscribe = coordinator.subscribe(self._on_snapshot)

    # === State ===

    @property
    def stations(self) -> list[Station]:
        return list(self._stations)

    @property
    def selected_station(self) -> Optional[Station]:
        return self._selected

    @property
    def selected_station_id(self) -> Optional[str]:
        return self._selected.id if self._selected else None

    @property
    def can_navigate(self) -> bool:
        return len(self._stations) > 1

    @property
    def snapshot(self) -> PlaybackSnapshot:
        return self.coordinator.snapshot

    def _notify(self, notification: Notification) -> None:
        logger.debug(f"Notify: {notification.title} - {notification.description}")
        if self._notifier is not None:
            self._notifier(notification)

    def _on_snapshot(self, snapshot: PlaybackSnapshot) -> None:
        if snapshot.error and snapshot.error != self._last_error:
            self._notify(CONNECTION_ERROR)
        self._last_error = snapshot.error

    # === Catalog ===

    async def refresh(self) -> list[Station]:
        """Reload the station list. On failure the current list is kept."""
        try:
            stations = await asyncio.to_thread(self.source.list_stations)
        except StorageError as e:
            logger.warning(f"Station refresh failed: {e.message}")
            self._notify(Notification("Error", e.message, "destructive"))
            return self.stations

        self._stations = list(stations)
        if self._selected is not None:
            # Pick up edits to the selected station
            self._selected = next(
                (s for s in self._stations if s.id == self._selected.id), self._selected
            )
        return self.stations

    async def add_station(self, data: dict[str, Any]) -> Optional[Station]:
        """Create a station.

        Raises:
            ValidationError: Passed through so the form can show field errors
        """
        try:
            station = await asyncio.to_thread(self.source.create_station, data)
        except StorageError:
            self._notify(Notification("Error", "Failed to add station", "destructive"))
            return None

        await self.refresh()
        self._notify(Notification("Success", "Station added successfully"))
        return station

    async def update_station(self, station_id: str, data: dict[str, Any]) -> Optional[Station]:
        """Edit a station. Raises ValidationError like add_station."""
        try:
            station = await asyncio.to_thread(self.source.update_station, station_id, data)
        except StorageError:
            station = None

        if station is None:
            self._notify(Notification("Error", "Failed to update station", "destructive"))
            return None

        await self.refresh()
        self._notify(Notification("Success", "Station updated successfully"))
        return station

    async def delete_station(self, station_id: str) -> bool:
        if station_id == self.selected_station_id:
            self.coordinator.stop()
            self._selected = None

        try:
            deleted = await asyncio.to_thread(self.source.delete_station, station_id)
        except StorageError:
            deleted = False

        if not deleted:
            self._notify(Notification("Error", "Failed to delete station", "destructive"))
            return False

        self._stations = [s for s in self._stations if s.id != station_id]
        self._notify(Notification("Success", "Station deleted successfully"))
        return True

    # === Playback ===

    async def select_play(self, station: Station) -> None:
        """Play a station, or pause it if it is the one already playing."""
        if station.id == self.selected_station_id and self.coordinator.snapshot.is_playing:
            self.coordinator.pause()
            return

        self._selected = station
        self.coordinator.load(station.url, station)
        await self.coordinator.play()

    async def toggle_play_pause(self) -> None:
        if self.coordinator.snapshot.is_playing:
            self.coordinator.pause()
        else:
            await self.coordinator.play()

    def _neighbour(self, step: int) -> Optional[Station]:
        if self._selected is None or not self.can_navigate:
            return None

        ids = [s.id for s in self._stations]
        if self._selected.id not in ids:
            logger.debug("Selected station is no longer listed; navigation ignored")
            return None

        index = ids.index(self._selected.id)
        return self._stations[(index + step) % len(self._stations)]

    async def next(self) -> None:
        station = self._neighbour(1)
        if station is not None:
            await self.select_play(station)

    async def previous(self) -> None:
        station = self._neighbour(-1)
        if station is not None:
            await self.select_play(station)

    def set_volume(self, volume: float) -> None:
        self.coordinator.set_volume(volume)

    def close(self) -> None:
        """Release playback and detach from the coordinator."""
        self._unsubscribe()
        self.coordinator.close()
        self._selected = None
