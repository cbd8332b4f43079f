"""
Main Textual application for the radio player
Fixed now-playing header, scrollable station list and transport footer
"""

from typing import Optional

from loguru import logger
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, OptionList

from radio_player.domain.playback.coordinator import PlaybackCoordinator, PlaybackSnapshot
from radio_player.domain.session.host import Notification, SessionHost, StationSource
from radio_player.domain.stations.models import Station

from .station_modal import StationFormModal
from .widgets import AudioControls, CurrentlyPlaying, StationsList

VOLUME_STEP = 5


class RadioPlayerApp(App):
    """
    Radio player Textual application.

    Layout:
    - Fixed top: currently playing station and status
    - Scrollable middle: station list (enter plays / pauses)
    - Fixed bottom: transport and volume, key bindings
    """

    CSS = """
    Screen {
        margin: 0;
        padding: 0;
    }

    CurrentlyPlaying {
        dock: top;
        height: auto;
    }

    #stations {
        height: 1fr;
        border: solid $secondary;
    }

    AudioControls {
        height: auto;
        padding: 0 1;
        border: solid $secondary;
    }
    """

    BINDINGS = [
        Binding("space", "toggle", "Play/Pause"),
        Binding("n", "next", "Next"),
        Binding("p", "previous", "Previous"),
        Binding("plus,equals_sign", "volume_up", "Vol +"),
        Binding("minus", "volume_down", "Vol -"),
        Binding("a", "add_station", "Add"),
        Binding("e", "edit_station", "Edit"),
        Binding("d", "delete_station", "Delete"),
        Binding("r", "refresh", "Refresh", show=False),
        Binding("q,ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, coordinator: PlaybackCoordinator, source: StationSource):
        super().__init__()
        self.coordinator = coordinator
        self.host = SessionHost(coordinator, source, notifier=self.show_notification)
        self._unsubscribe = coordinator.subscribe(self._on_snapshot)
        self._views_ready = False

    def compose(self) -> ComposeResult:
        yield CurrentlyPlaying()
        yield StationsList(id="stations")
        yield AudioControls()
        yield Footer()

    async def on_mount(self) -> None:
        self._views_ready = True
        self._view(StationsList).focus()
        await self.host.refresh()
        self.refresh_views()

    def on_unmount(self) -> None:
        self._unsubscribe()
        self.host.close()

    # === View sync ===

    def _on_snapshot(self, snapshot: PlaybackSnapshot) -> None:
        self.refresh_views()

    def _view(self, widget_type):
        # The main screen stays at the bottom of the stack while modals are open
        return self.screen_stack[0].query_one(widget_type)

    def refresh_views(self) -> None:
        """Re-render every widget from host and coordinator state."""
        if not self._views_ready:
            return
        snapshot = self.coordinator.snapshot
        self._view(CurrentlyPlaying).show(self.host.selected_station, snapshot)
        self._view(StationsList).set_stations(
            self.host.stations, self.host.selected_station_id, snapshot.is_playing
        )
        self._view(AudioControls).show(snapshot, self.host.can_navigate)

    def show_notification(self, notification: Notification) -> None:
        severity = "error" if notification.variant == "destructive" else "information"
        self.notify(notification.description, title=notification.title, severity=severity)

    async def _run_and_refresh(self, coro) -> None:
        await coro
        self.refresh_views()

    def _spawn(self, coro) -> None:
        # Playback calls can wait on the stream; keep input responsive
        self.run_worker(self._run_and_refresh(coro), group="session")

    # === Station list ===

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        station = self._view(StationsList).station_by_id(event.option_id)
        if station is not None:
            self._spawn(self.host.select_play(station))

    # === Actions ===

    def action_toggle(self) -> None:
        if self.host.selected_station is None:
            station = self._view(StationsList).highlighted_station
            if station is not None:
                self._spawn(self.host.select_play(station))
            return
        self._spawn(self.host.toggle_play_pause())

    def action_next(self) -> None:
        # Same path as a media key press
        self._spawn(self.coordinator.remote.invoke("nexttrack"))

    def action_previous(self) -> None:
        self._spawn(self.coordinator.remote.invoke("previoustrack"))

    def action_volume_up(self) -> None:
        self.host.set_volume(self.coordinator.snapshot.volume + VOLUME_STEP)

    def action_volume_down(self) -> None:
        self.host.set_volume(self.coordinator.snapshot.volume - VOLUME_STEP)

    def action_refresh(self) -> None:
        self._spawn(self.host.refresh())

    def action_add_station(self) -> None:
        self.push_screen(StationFormModal(self.host.add_station), self._on_form_closed)

    def action_edit_station(self) -> None:
        station = self._view(StationsList).highlighted_station
        if station is None:
            return

        async def submit(data: dict) -> Optional[Station]:
            return await self.host.update_station(station.id, data)

        self.push_screen(StationFormModal(submit, station), self._on_form_closed)

    def action_delete_station(self) -> None:
        station = self._view(StationsList).highlighted_station
        if station is None:
            return
        logger.info(f"Deleting station '{station.name}' ({station.id})")
        self._spawn(self.host.delete_station(station.id))

    def _on_form_closed(self, station: Optional[Station]) -> None:
        self.refresh_views()
